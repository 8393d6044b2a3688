"""
Translation Routes (prefix: /api/admin)

    GET    /articles/{article_id}/translations   → translations + languages still available
    POST   /articles/{article_id}/translations   → create translation
    GET    /translations                         → all translations
    GET    /translations/{translation_id}        → fetch
    PATCH  /translations/{translation_id}        → partial update / status change
    DELETE /translations/{translation_id}        → delete
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from galatide.database import Store, get_store
from galatide.rbac import can_admin, can_edit
from galatide.schemas.language import LanguageRead
from galatide.schemas.translation import TranslationCreate, TranslationRead, TranslationUpdate
from galatide.services.translation_service import TranslationService

router = APIRouter(prefix="/api/admin", tags=["Admin: Translations"])
logger = logging.getLogger(__name__)


class ArticleTranslations(BaseModel):
    translations: list[TranslationRead]
    available_languages: list[LanguageRead]


def get_translation_service(store: Store = Depends(get_store)) -> TranslationService:
    return TranslationService(store)


@router.get("/articles/{article_id}/translations", response_model=ArticleTranslations)
async def list_article_translations(
    article_id: int,
    _: str = Depends(can_edit),
    service: TranslationService = Depends(get_translation_service),
):
    return ArticleTranslations(
        translations=await service.list_translations(article_id),
        available_languages=await service.list_available_languages_for_article(article_id),
    )


@router.post(
    "/articles/{article_id}/translations",
    response_model=TranslationRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_translation(
    article_id: int,
    data: TranslationCreate,
    _: str = Depends(can_edit),
    service: TranslationService = Depends(get_translation_service),
):
    return await service.create_translation(article_id, data.language_id, data)


@router.get("/translations", response_model=list[TranslationRead])
async def list_translations(
    article_id: Optional[int] = Query(None),
    _: str = Depends(can_edit),
    service: TranslationService = Depends(get_translation_service),
):
    return await service.list_translations(article_id)


@router.get("/translations/{translation_id}", response_model=TranslationRead)
async def get_translation(
    translation_id: int,
    _: str = Depends(can_edit),
    service: TranslationService = Depends(get_translation_service),
):
    return await service.get_translation(translation_id)


@router.patch("/translations/{translation_id}", response_model=TranslationRead)
async def update_translation(
    translation_id: int,
    data: TranslationUpdate,
    _: str = Depends(can_edit),
    service: TranslationService = Depends(get_translation_service),
):
    return await service.update_translation(translation_id, data)


@router.delete("/translations/{translation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_translation(
    translation_id: int,
    _: str = Depends(can_admin),
    service: TranslationService = Depends(get_translation_service),
):
    await service.delete_translation(translation_id)
