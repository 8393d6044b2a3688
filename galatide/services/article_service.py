"""
Article Service

Business logic for original-language articles: creation with tag links,
partial updates, publishing, deletion and the admin and public listings.
"""

from __future__ import annotations

import logging

from sqlalchemy import exists, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from galatide.database import Store
from galatide.exceptions import (
    ArticleNotFoundError,
    ConflictError,
    LanguageNotFoundError,
    TagNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from galatide.models.article import Article, ArticleStatus
from galatide.models.article_translation import ArticleTranslation
from galatide.models.language import Language
from galatide.models.tag import Tag
from galatide.models.user import User
from galatide.schemas.article import (
    ArticleCreate,
    ArticlePage,
    ArticleRead,
    ArticleStats,
    ArticleSummary,
    ArticleUpdate,
)
from galatide.schemas.common import Pagination
from galatide.schemas.translation import TranslationLink
from galatide.schemas.user import UserSummary
from galatide.services.tag_service import localize_tag
from galatide.services.translation_service import apply_status
from galatide.utils.slugify import generate_unique_slug, slugify
from galatide.utils.text import generate_meta_description, reading_time_minutes

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "excerpt",
    "content",
    "cover_url",
    "meta_title",
    "meta_description",
    "keywords",
)


async def load_article(db: AsyncSession, article_id: int) -> Article | None:
    """Fetch an article with its translations and their languages."""
    result = await db.execute(
        select(Article)
        .options(selectinload(Article.translations).selectinload(ArticleTranslation.language))
        .where(Article.id == article_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


def published_translation_links(article: Article) -> list[TranslationLink]:
    """Links to the published translations of a loaded article."""
    return sorted(
        (
            TranslationLink(language_code=t.language.code, slug=t.slug, title=t.title)
            for t in article.translations
            if t.status == ArticleStatus.PUBLISHED
        ),
        key=lambda link: link.language_code,
    )


async def _unique_article_slug(
    db: AsyncSession, base_slug: str, language_id: int, exclude_id: int | None = None
) -> str:
    query = select(Article.slug).where(
        Article.original_language_id == language_id,
        or_(Article.slug == base_slug, Article.slug.like(f"{base_slug}-%")),
    )
    if exclude_id is not None:
        query = query.where(Article.id != exclude_id)
    existing = (await db.execute(query)).scalars().all()
    return generate_unique_slug(base_slug, existing)


async def _fetch_tags(db: AsyncSession, tag_ids: list[int]) -> list[Tag]:
    wanted = list(dict.fromkeys(tag_ids))
    if not wanted:
        return []
    result = await db.execute(select(Tag).where(Tag.id.in_(wanted)))
    tags = {tag.id: tag for tag in result.scalars().all()}
    missing = [tag_id for tag_id in wanted if tag_id not in tags]
    if missing:
        raise TagNotFoundError(missing[0])
    return [tags[tag_id] for tag_id in wanted]


class ArticleService:
    def __init__(self, store: Store):
        self.store = store

    async def create_article(self, data: ArticleCreate) -> ArticleRead:
        """Create an article and its tag links in a single commit.

        Raises:
            ValidationError: blank title, or a title without slug characters.
            LanguageNotFoundError, UserNotFoundError, TagNotFoundError: unknown references.
        """
        title = (data.title or "").strip()
        if not title:
            raise ValidationError("Title is required", field="title")
        base_slug = slugify(data.slug or title)
        if not base_slug:
            raise ValidationError("Title must contain letters or digits", field="slug")

        async with self.store.session() as db:
            if await db.get(Language, data.language_id) is None:
                raise LanguageNotFoundError(data.language_id)
            if data.author_id is not None and await db.get(User, data.author_id) is None:
                raise UserNotFoundError(data.author_id)
            tags = await _fetch_tags(db, data.tag_ids)
            slug = await _unique_article_slug(db, base_slug, data.language_id)

            article = Article(
                title=title,
                slug=slug,
                excerpt=data.excerpt,
                content=data.content,
                cover_url=data.cover_url,
                status=ArticleStatus.DRAFT,
                meta_title=data.meta_title,
                meta_description=data.meta_description,
                keywords=data.keywords,
                author_id=data.author_id,
                original_language_id=data.language_id,
            )
            article.tags = tags
            apply_status(article, data.status)
            db.add(article)
            try:
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                raise ConflictError("Article", "slug", slug) from e

            logger.info("Article created: id=%d slug=%s status=%s", article.id, article.slug, article.status.value)
            loaded = await load_article(db, article.id)
            return ArticleRead.from_model(loaded, published_translation_links(loaded))

    async def update_article(self, article_id: int, data: ArticleUpdate) -> ArticleRead:
        updates = data.model_dump(exclude_unset=True)

        async with self.store.session() as db:
            article = await load_article(db, article_id)
            if article is None:
                raise ArticleNotFoundError(article_id)

            if "title" in updates:
                title = (updates["title"] or "").strip()
                if not title:
                    raise ValidationError("Title is required", field="title")
                if title != article.title and not updates.get("slug") and slugify(title):
                    article.slug = await _unique_article_slug(
                        db, slugify(title), article.original_language_id, exclude_id=article.id
                    )
                article.title = title

            if updates.get("slug"):
                slug = slugify(updates["slug"])
                if not slug:
                    raise ValidationError("Slug must contain letters or digits", field="slug")
                taken = await db.execute(
                    select(Article.id).where(
                        Article.original_language_id == article.original_language_id,
                        Article.slug == slug,
                        Article.id != article.id,
                    )
                )
                if taken.scalar() is not None:
                    raise ConflictError("Article", "slug", slug)
                article.slug = slug

            for field in UPDATABLE_FIELDS:
                if field in updates:
                    setattr(article, field, updates[field])
            if updates.get("status") is not None:
                apply_status(article, updates["status"])
            if updates.get("tag_ids") is not None:
                article.tags = await _fetch_tags(db, updates["tag_ids"])

            slug = article.slug
            try:
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                raise ConflictError("Article", "slug", slug) from e

            logger.info("Article updated: id=%d", article_id)
            loaded = await load_article(db, article_id)
            return ArticleRead.from_model(loaded, published_translation_links(loaded))

    async def publish_article(self, article_id: int) -> ArticleRead:
        async with self.store.session() as db:
            article = await load_article(db, article_id)
            if article is None:
                raise ArticleNotFoundError(article_id)
            apply_status(article, ArticleStatus.PUBLISHED)
            await db.commit()
            logger.info("Article published: id=%d", article_id)
            loaded = await load_article(db, article_id)
            return ArticleRead.from_model(loaded, published_translation_links(loaded))

    async def delete_article(self, article_id: int) -> None:
        """Delete an article together with its translations and tag links."""
        async with self.store.session() as db:
            article = await load_article(db, article_id)
            if article is None:
                raise ArticleNotFoundError(article_id)
            await db.delete(article)
            await db.commit()
            logger.info("Article deleted: id=%d", article_id)

    async def get_article(self, article_id: int) -> ArticleRead:
        async with self.store.session() as db:
            article = await load_article(db, article_id)
            if article is None:
                raise ArticleNotFoundError(article_id)
            return ArticleRead.from_model(article, published_translation_links(article))

    async def list_articles(
        self, page: int = 1, limit: int = 20, status: ArticleStatus | None = None
    ) -> ArticlePage:
        """Admin listing of original articles, newest first."""
        conditions = [Article.status == status] if status is not None else []

        async with self.store.session() as db:
            total = (await db.execute(select(func.count(Article.id)).where(*conditions))).scalar() or 0
            result = await db.execute(
                select(Article)
                .where(*conditions)
                .order_by(Article.created_at.desc(), Article.id.desc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            summaries = [
                self._summarize(article, article.original_language.code) for article in result.scalars().all()
            ]
        return ArticlePage(articles=summaries, pagination=Pagination.build(page, limit, total))

    async def list_published_articles(
        self,
        language_code: str,
        page: int = 1,
        limit: int = 20,
        tag_slug: str | None = None,
    ) -> ArticlePage:
        """Published articles readable in one language.

        Originals written in ``language_code`` are listed as-is; other
        published articles appear when they have a published translation in
        that language, with the translation's fields over the original's.
        """
        language_id = select(Language.id).where(Language.code == language_code).scalar_subquery()
        has_translation = exists().where(
            ArticleTranslation.article_id == Article.id,
            ArticleTranslation.language_id == language_id,
            ArticleTranslation.status == ArticleStatus.PUBLISHED,
        )
        conditions = [
            Article.status == ArticleStatus.PUBLISHED,
            or_(Article.original_language_id == language_id, has_translation),
        ]
        if tag_slug:
            conditions.append(Article.tags.any(Tag.slug == tag_slug))

        async with self.store.session() as db:
            total = (await db.execute(select(func.count(Article.id)).where(*conditions))).scalar() or 0
            result = await db.execute(
                select(Article)
                .where(*conditions)
                .order_by(Article.published_at.desc(), Article.id.desc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            articles = result.scalars().all()

            translations: dict[int, ArticleTranslation] = {}
            if articles:
                rows = await db.execute(
                    select(ArticleTranslation).where(
                        ArticleTranslation.article_id.in_([a.id for a in articles]),
                        ArticleTranslation.language_id == language_id,
                        ArticleTranslation.status == ArticleStatus.PUBLISHED,
                    )
                )
                translations = {t.article_id: t for t in rows.scalars().all()}

            summaries = [
                self._summarize(article, language_code, translations.get(article.id)) for article in articles
            ]
        return ArticlePage(articles=summaries, pagination=Pagination.build(page, limit, total))

    async def get_stats(self) -> ArticleStats:
        async with self.store.session() as db:
            counts = await db.execute(select(Article.status, func.count(Article.id)).group_by(Article.status))
            by_status = {status: count for status, count in counts.all()}
            translations = (await db.execute(select(func.count(ArticleTranslation.id)))).scalar() or 0

        published = by_status.get(ArticleStatus.PUBLISHED, 0)
        drafts = by_status.get(ArticleStatus.DRAFT, 0)
        return ArticleStats(
            total=published + drafts,
            published=published,
            drafts=drafts,
            translations=translations,
        )

    @staticmethod
    def _summarize(
        article: Article, language_code: str, translation: ArticleTranslation | None = None
    ) -> ArticleSummary:
        source = translation or article
        content = source.content
        return ArticleSummary(
            id=article.id,
            title=source.title,
            slug=source.slug,
            excerpt=source.excerpt or article.excerpt or generate_meta_description(content),
            cover_url=article.cover_url,
            status=source.status,
            published_at=source.published_at or article.published_at,
            language_code=language_code,
            is_translation=translation is not None,
            author=UserSummary.model_validate(article.author) if article.author else None,
            tags=[localize_tag(tag, language_code) for tag in sorted(article.tags, key=lambda t: t.name)],
            read_time=reading_time_minutes(content),
        )
