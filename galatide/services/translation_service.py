"""
Translation Service

CRUD and lifecycle for ArticleTranslation rows.

Each translation carries its own slug, status and ``published_at``,
independent of the parent article. At most one translation exists per
(article, language) pair and never in the article's original language.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from galatide.database import Store
from galatide.exceptions import (
    ArticleNotFoundError,
    ConflictError,
    LanguageNotFoundError,
    TranslationNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from galatide.models.article import Article, ArticleStatus, utcnow
from galatide.models.article_translation import ArticleTranslation
from galatide.models.language import Language
from galatide.models.user import User
from galatide.schemas.language import LanguageRead
from galatide.schemas.translation import TranslationFields, TranslationRead, TranslationUpdate
from galatide.utils.slugify import is_valid_slug, slugify

logger = logging.getLogger(__name__)

TRANSLATABLE_FIELDS = (
    "title",
    "slug",
    "excerpt",
    "content",
    "meta_title",
    "meta_description",
    "keywords",
)


def _require_text(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field.capitalize()} is required", field=field)
    return value


def _require_slug(value: str | None) -> str:
    if value is None or not is_valid_slug(value):
        raise ValidationError("Slug must be lowercase letters, digits and single hyphens", field="slug")
    return value


def apply_status(row: Any, status: ArticleStatus) -> None:
    """Move an article or translation to ``status`` and keep ``published_at`` in step."""
    if status == ArticleStatus.PUBLISHED:
        if row.status != ArticleStatus.PUBLISHED or row.published_at is None:
            row.published_at = utcnow()
    else:
        row.published_at = None
    row.status = status


async def _load_translation(db: AsyncSession, translation_id: int) -> ArticleTranslation | None:
    result = await db.execute(
        select(ArticleTranslation)
        .options(selectinload(ArticleTranslation.article))
        .where(ArticleTranslation.id == translation_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


class TranslationService:
    def __init__(self, store: Store):
        self.store = store

    async def create_translation(
        self, article_id: int, language_id: int, data: TranslationFields
    ) -> TranslationRead:
        """Add a translation of an article in one language.

        Raises:
            ValidationError: blank title/content, a malformed slug, or the article's own language.
            ArticleNotFoundError, LanguageNotFoundError: missing parent rows.
            ConflictError: a translation already exists for the pair.
        """
        title = _require_text(data.title, "title")
        content = _require_text(data.content, "content")
        slug = _require_slug(data.slug or slugify(title))

        async with self.store.session() as db:
            article = await db.get(Article, article_id)
            if article is None:
                raise ArticleNotFoundError(article_id)
            language = await db.get(Language, language_id)
            if language is None:
                raise LanguageNotFoundError(language_id)
            if article.original_language_id == language_id:
                raise ValidationError(
                    "Cannot translate an article into its original language",
                    field="language_id",
                )
            if data.translator_id is not None and await db.get(User, data.translator_id) is None:
                raise UserNotFoundError(data.translator_id)

            existing = await db.execute(
                select(ArticleTranslation.id).where(
                    ArticleTranslation.article_id == article_id,
                    ArticleTranslation.language_id == language_id,
                )
            )
            if existing.scalar() is not None:
                raise ConflictError("Translation", "language", language.code)

            translation = ArticleTranslation(
                article_id=article_id,
                language_id=language_id,
                title=title.strip(),
                slug=slug,
                excerpt=data.excerpt,
                content=content,
                meta_title=data.meta_title,
                meta_description=data.meta_description,
                keywords=data.keywords,
                status=ArticleStatus.DRAFT,
                translator_id=data.translator_id,
            )
            apply_status(translation, data.status)
            language_code = language.code
            db.add(translation)
            try:
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                raise ConflictError("Translation", "language", language_code) from e

            logger.info(
                "Translation created: article_id=%d language=%s status=%s",
                article_id,
                language_code,
                translation.status.value,
            )
            return TranslationRead.from_model(await _load_translation(db, translation.id))

    async def update_translation(self, translation_id: int, data: TranslationUpdate) -> TranslationRead:
        updates = data.model_dump(exclude_unset=True)
        for field in ("title", "content"):
            if field in updates:
                _require_text(updates[field], field)
        if "title" in updates:
            updates["title"] = updates["title"].strip()
        if "slug" in updates:
            _require_slug(updates["slug"])

        async with self.store.session() as db:
            translation = await _load_translation(db, translation_id)
            if translation is None:
                raise TranslationNotFoundError(translation_id)

            for field in TRANSLATABLE_FIELDS:
                if field in updates:
                    setattr(translation, field, updates[field])
            if updates.get("status") is not None:
                apply_status(translation, updates["status"])
            translation.updated_at = utcnow()

            await db.commit()
            logger.info("Translation updated: id=%d status=%s", translation_id, translation.status.value)
            return TranslationRead.from_model(await _load_translation(db, translation_id))

    async def delete_translation(self, translation_id: int) -> None:
        async with self.store.session() as db:
            translation = await db.get(ArticleTranslation, translation_id)
            if translation is None:
                raise TranslationNotFoundError(translation_id)
            await db.delete(translation)
            await db.commit()
            logger.info("Translation deleted: id=%d", translation_id)

    async def get_translation(self, translation_id: int) -> TranslationRead:
        async with self.store.session() as db:
            translation = await _load_translation(db, translation_id)
            if translation is None:
                raise TranslationNotFoundError(translation_id)
            return TranslationRead.from_model(translation)

    async def list_translations(self, article_id: int | None = None) -> list[TranslationRead]:
        """Translations of one article, or of every article when ``article_id`` is None."""
        query = (
            select(ArticleTranslation)
            .join(Language, ArticleTranslation.language_id == Language.id)
            .order_by(ArticleTranslation.article_id, Language.name)
        )
        async with self.store.session() as db:
            if article_id is not None:
                if await db.get(Article, article_id) is None:
                    raise ArticleNotFoundError(article_id)
                query = query.where(ArticleTranslation.article_id == article_id)
            result = await db.execute(query)
            return [TranslationRead.from_model(t) for t in result.scalars().all()]

    async def list_available_languages_for_article(self, article_id: int) -> list[LanguageRead]:
        """Languages an article can still be translated into, ordered by name."""
        async with self.store.session() as db:
            article = await db.get(Article, article_id)
            if article is None:
                raise ArticleNotFoundError(article_id)

            translated = select(ArticleTranslation.language_id).where(
                ArticleTranslation.article_id == article_id
            )
            result = await db.execute(
                select(Language)
                .where(
                    Language.id != article.original_language_id,
                    Language.id.not_in(translated),
                )
                .order_by(Language.name)
            )
            return [LanguageRead.model_validate(lang) for lang in result.scalars().all()]
