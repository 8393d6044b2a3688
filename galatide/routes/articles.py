"""
Article Routes

public_router  (prefix: /api/articles)
    GET    /                         → published listing in one language
    GET    /by-slug/{slug}           → resolve a slug in a language
    GET    /by-slug/{slug}/metadata  → SEO metadata for the article page

admin_router  (prefix: /api/admin/articles)
    GET    /stats                    → counts by status
    GET    /                         → all articles, paginated
    POST   /                         → create
    GET    /{article_id}             → fetch
    PATCH  /{article_id}             → partial update
    DELETE /{article_id}             → delete with translations
    POST   /{article_id}/publish     → publish
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from galatide.database import Store, get_store
from galatide.exceptions import ArticleNotFoundError, StoreUnavailableError, ValidationError
from galatide.middleware.language import get_request_language
from galatide.models.article import ArticleStatus
from galatide.rbac import can_admin, can_edit
from galatide.schemas.article import ArticleCreate, ArticlePage, ArticleRead, ArticleStats, ArticleUpdate
from galatide.schemas.common import Pagination, normalize_status
from galatide.schemas.content import ArticleMetadata, ResolvedContent
from galatide.services.article_service import ArticleService
from galatide.services.content_resolver import ContentResolver
from galatide.services.seo_service import SEOService

public_router = APIRouter(prefix="/api/articles", tags=["Articles"])
admin_router = APIRouter(prefix="/api/admin/articles", tags=["Admin: Articles"])
logger = logging.getLogger(__name__)


def get_article_service(store: Store = Depends(get_store)) -> ArticleService:
    return ArticleService(store)


def get_content_resolver(store: Store = Depends(get_store)) -> ContentResolver:
    return ContentResolver(store)


def resolve_language(request: Request, lang: Optional[str] = Query(None, description="Language code")) -> str:
    return (lang or "").strip().lower() or get_request_language(request)


# ── Public ─────────────────────────────────────────────────────────────────────


@public_router.get("", response_model=ArticlePage)
async def list_published_articles(
    language: str = Depends(resolve_language),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    tag: Optional[str] = Query(None, description="Tag slug"),
    service: ArticleService = Depends(get_article_service),
):
    try:
        return await service.list_published_articles(language, page=page, limit=limit, tag_slug=tag)
    except StoreUnavailableError as e:
        logger.warning(f"Article listing degraded: {e.message}")
        return ArticlePage(articles=[], pagination=Pagination.build(page, limit, 0))


@public_router.get("/by-slug/{slug}", response_model=ResolvedContent)
async def get_article_by_slug(
    slug: str,
    language: str = Depends(resolve_language),
    resolver: ContentResolver = Depends(get_content_resolver),
):
    return await resolver.resolve(slug, language)


@public_router.get("/by-slug/{slug}/metadata", response_model=ArticleMetadata)
async def get_article_metadata(
    slug: str,
    language: str = Depends(resolve_language),
    store: Store = Depends(get_store),
):
    seo = SEOService(store)
    try:
        resolved = await ContentResolver(store).resolve(slug, language)
    except ArticleNotFoundError:
        resolved = None
    except StoreUnavailableError as e:
        logger.warning(f"Metadata for '{slug}' degraded: {e.message}")
        resolved = None
    return seo.build_article_metadata(resolved, language)


# ── Admin ──────────────────────────────────────────────────────────────────────


@admin_router.get("/stats", response_model=ArticleStats)
async def get_article_stats(
    _: str = Depends(can_edit),
    service: ArticleService = Depends(get_article_service),
):
    return await service.get_stats()


@admin_router.get("", response_model=ArticlePage)
async def list_articles(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status_filter: Optional[str] = Query(None, alias="status", description="DRAFT or PUBLISHED"),
    _: str = Depends(can_edit),
    service: ArticleService = Depends(get_article_service),
):
    article_status: Optional[ArticleStatus] = None
    if status_filter:
        try:
            article_status = normalize_status(status_filter)
        except ValueError as e:
            raise ValidationError(f"Unknown status '{status_filter}'", field="status") from e
    return await service.list_articles(page=page, limit=limit, status=article_status)


@admin_router.post("", response_model=ArticleRead, status_code=status.HTTP_201_CREATED)
async def create_article(
    data: ArticleCreate,
    _: str = Depends(can_edit),
    service: ArticleService = Depends(get_article_service),
):
    return await service.create_article(data)


@admin_router.get("/{article_id}", response_model=ArticleRead)
async def get_article(
    article_id: int,
    _: str = Depends(can_edit),
    service: ArticleService = Depends(get_article_service),
):
    return await service.get_article(article_id)


@admin_router.patch("/{article_id}", response_model=ArticleRead)
async def update_article(
    article_id: int,
    data: ArticleUpdate,
    _: str = Depends(can_edit),
    service: ArticleService = Depends(get_article_service),
):
    return await service.update_article(article_id, data)


@admin_router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: int,
    _: str = Depends(can_admin),
    service: ArticleService = Depends(get_article_service),
):
    await service.delete_article(article_id)


@admin_router.post("/{article_id}/publish", response_model=ArticleRead)
async def publish_article(
    article_id: int,
    _: str = Depends(can_admin),
    service: ArticleService = Depends(get_article_service),
):
    return await service.publish_article(article_id)
