"""
Language Routes

    GET    /api/languages                       → active languages (public)
    GET    /api/admin/languages                 → every language
    POST   /api/admin/languages                 → create
    PATCH  /api/admin/languages/{language_id}   → update
    DELETE /api/admin/languages/{language_id}   → delete (never the default)
"""

import logging

from fastapi import APIRouter, Depends, status

from galatide.config import settings
from galatide.database import Store, get_store
from galatide.exceptions import StoreUnavailableError
from galatide.i18n.locale import BUILTIN_LANGUAGES, get_language_info
from galatide.rbac import can_admin, can_edit
from galatide.schemas.language import LanguageCreate, LanguageRead, LanguageUpdate
from galatide.services.language_service import LanguageService

public_router = APIRouter(prefix="/api/languages", tags=["Languages"])
admin_router = APIRouter(prefix="/api/admin/languages", tags=["Admin: Languages"])
logger = logging.getLogger(__name__)


def get_language_service(store: Store = Depends(get_store)) -> LanguageService:
    return LanguageService(store)


def builtin_languages() -> list[LanguageRead]:
    return [
        LanguageRead(**get_language_info(code), is_default=code == settings.default_language)
        for code in BUILTIN_LANGUAGES
    ]


@public_router.get("", response_model=list[LanguageRead])
async def list_active_languages(service: LanguageService = Depends(get_language_service)):
    try:
        return await service.list_languages(active_only=True)
    except StoreUnavailableError as e:
        logger.warning(f"Serving built-in languages: {e.message}")
        return builtin_languages()


@admin_router.get("", response_model=list[LanguageRead])
async def list_languages(
    _: str = Depends(can_edit),
    service: LanguageService = Depends(get_language_service),
):
    return await service.list_languages()


@admin_router.post("", response_model=LanguageRead, status_code=status.HTTP_201_CREATED)
async def create_language(
    data: LanguageCreate,
    _: str = Depends(can_edit),
    service: LanguageService = Depends(get_language_service),
):
    return await service.create_language(data)


@admin_router.patch("/{language_id}", response_model=LanguageRead)
async def update_language(
    language_id: int,
    data: LanguageUpdate,
    _: str = Depends(can_edit),
    service: LanguageService = Depends(get_language_service),
):
    return await service.update_language(language_id, data)


@admin_router.delete("/{language_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_language(
    language_id: int,
    _: str = Depends(can_admin),
    service: LanguageService = Depends(get_language_service),
):
    await service.delete_language(language_id)
