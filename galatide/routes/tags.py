"""
Tag Routes

    GET    /api/tags?lang=                         → tags localized to a language (public)
    GET    /api/admin/tags                         → tags with article counts
    POST   /api/admin/tags                         → create
    PATCH  /api/admin/tags/{tag_id}                → rename / recolor
    DELETE /api/admin/tags/{tag_id}                → delete with links and translations
    GET    /api/admin/tags/{tag_id}/translations   → per-language names
    PUT    /api/admin/tags/{tag_id}/translations   → replace per-language names
"""

import logging

from fastapi import APIRouter, Depends, status

from galatide.database import Store, get_store
from galatide.exceptions import StoreUnavailableError
from galatide.rbac import can_admin, can_edit
from galatide.routes.articles import resolve_language
from galatide.schemas.tag import (
    LocalizedTag,
    TagCreate,
    TagRead,
    TagTranslationItem,
    TagTranslationsReplace,
    TagUpdate,
    TagWithCount,
)
from galatide.services.tag_service import TagService

public_router = APIRouter(prefix="/api/tags", tags=["Tags"])
admin_router = APIRouter(prefix="/api/admin/tags", tags=["Admin: Tags"])
logger = logging.getLogger(__name__)


def get_tag_service(store: Store = Depends(get_store)) -> TagService:
    return TagService(store)


@public_router.get("", response_model=list[LocalizedTag])
async def list_localized_tags(
    language: str = Depends(resolve_language),
    service: TagService = Depends(get_tag_service),
):
    try:
        return await service.list_tags_for_language(language)
    except StoreUnavailableError as e:
        logger.warning(f"Tag listing degraded: {e.message}")
        return []


@admin_router.get("", response_model=list[TagWithCount])
async def list_tags(
    _: str = Depends(can_edit),
    service: TagService = Depends(get_tag_service),
):
    return await service.list_tags()


@admin_router.post("", response_model=TagRead, status_code=status.HTTP_201_CREATED)
async def create_tag(
    data: TagCreate,
    _: str = Depends(can_edit),
    service: TagService = Depends(get_tag_service),
):
    return await service.create_tag(data)


@admin_router.patch("/{tag_id}", response_model=TagRead)
async def update_tag(
    tag_id: int,
    data: TagUpdate,
    _: str = Depends(can_edit),
    service: TagService = Depends(get_tag_service),
):
    return await service.update_tag(tag_id, data)


@admin_router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: int,
    _: str = Depends(can_admin),
    service: TagService = Depends(get_tag_service),
):
    await service.delete_tag(tag_id)


@admin_router.get("/{tag_id}/translations", response_model=list[TagTranslationItem])
async def list_tag_translations(
    tag_id: int,
    _: str = Depends(can_edit),
    service: TagService = Depends(get_tag_service),
):
    return await service.list_tag_translations(tag_id)


@admin_router.put("/{tag_id}/translations", response_model=list[TagTranslationItem])
async def replace_tag_translations(
    tag_id: int,
    data: TagTranslationsReplace,
    _: str = Depends(can_edit),
    service: TagService = Depends(get_tag_service),
):
    return await service.replace_tag_translations(tag_id, data.translations)
