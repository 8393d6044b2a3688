"""
Tag Service

Shared tags, their per-language display names and the localized views used
by article listings and the public tag list.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from galatide.database import Store
from galatide.exceptions import ConflictError, TagNotFoundError, ValidationError
from galatide.models.article_tags import article_tags
from galatide.models.tag import DEFAULT_TAG_COLOR, Tag, TagTranslation
from galatide.schemas.tag import (
    LocalizedTag,
    TagCreate,
    TagRead,
    TagTranslationItem,
    TagUpdate,
    TagWithCount,
)
from galatide.utils.slugify import slugify

logger = logging.getLogger(__name__)


def localize_tag(tag: Tag, language_code: str) -> LocalizedTag:
    """Display a tag in one language, falling back to its canonical name."""
    translated = next((t.name for t in tag.translations if t.language_code == language_code), None)
    return LocalizedTag(
        id=tag.id,
        name=translated or tag.name,
        original_name=tag.name,
        slug=tag.slug,
        color=tag.color or DEFAULT_TAG_COLOR,
        has_translation=translated is not None,
    )


async def localize_tags(db: AsyncSession, tag_ids: Iterable[int], language_code: str) -> list[LocalizedTag]:
    """Localize the given tags, ordered by canonical name."""
    ids = list(set(tag_ids))
    if not ids:
        return []
    result = await db.execute(select(Tag).where(Tag.id.in_(ids)).order_by(Tag.name))
    return [localize_tag(tag, language_code) for tag in result.scalars().all()]


class TagService:
    def __init__(self, store: Store):
        self.store = store

    async def list_tags_for_language(self, language_code: str) -> list[LocalizedTag]:
        async with self.store.session() as db:
            result = await db.execute(select(Tag).order_by(Tag.name))
            return [localize_tag(tag, language_code) for tag in result.scalars().all()]

    async def list_tags(self) -> list[TagWithCount]:
        """All tags with the number of articles carrying each."""
        counts = (
            select(article_tags.c.tag_id, func.count(article_tags.c.article_id).label("article_count"))
            .group_by(article_tags.c.tag_id)
            .subquery()
        )
        query = (
            select(Tag, func.coalesce(counts.c.article_count, 0))
            .outerjoin(counts, counts.c.tag_id == Tag.id)
            .order_by(Tag.name)
        )
        async with self.store.session() as db:
            result = await db.execute(query)
            return [
                TagWithCount(id=tag.id, name=tag.name, slug=tag.slug, color=tag.color, article_count=count)
                for tag, count in result.all()
            ]

    async def get_tag(self, tag_id: int) -> TagRead:
        async with self.store.session() as db:
            tag = await db.get(Tag, tag_id)
            if tag is None:
                raise TagNotFoundError(tag_id)
            return TagRead.model_validate(tag)

    async def create_tag(self, data: TagCreate) -> TagRead:
        name = (data.name or "").strip()
        if not name:
            raise ValidationError("Tag name is required", field="name")
        slug = slugify(name)
        if not slug:
            raise ValidationError("Tag name must contain letters or digits", field="name")

        async with self.store.session() as db:
            await self._check_unique(db, name, slug)
            tag = Tag(name=name, slug=slug, color=data.color or DEFAULT_TAG_COLOR)
            db.add(tag)
            try:
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                raise ConflictError("Tag", "name", name) from e
            await db.refresh(tag)
            logger.info("Tag created: id=%d slug=%s", tag.id, tag.slug)
            return TagRead.model_validate(tag)

    async def update_tag(self, tag_id: int, data: TagUpdate) -> TagRead:
        async with self.store.session() as db:
            tag = await db.get(Tag, tag_id)
            if tag is None:
                raise TagNotFoundError(tag_id)

            if data.name is not None:
                name = data.name.strip()
                if not name:
                    raise ValidationError("Tag name is required", field="name")
                slug = slugify(name)
                await self._check_unique(db, name, slug, exclude_id=tag.id)
                tag.name = name
                tag.slug = slug
            if data.color is not None:
                tag.color = data.color

            try:
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                raise ConflictError("Tag", "name", data.name) from e
            await db.refresh(tag)
            logger.info("Tag updated: id=%d", tag.id)
            return TagRead.model_validate(tag)

    async def delete_tag(self, tag_id: int) -> None:
        """Delete a tag with its translations and article links."""
        async with self.store.session() as db:
            tag = await db.get(Tag, tag_id)
            if tag is None:
                raise TagNotFoundError(tag_id)
            await db.execute(delete(article_tags).where(article_tags.c.tag_id == tag_id))
            await db.delete(tag)
            await db.commit()
            logger.info("Tag deleted: id=%d", tag_id)

    async def list_tag_translations(self, tag_id: int) -> list[TagTranslationItem]:
        async with self.store.session() as db:
            tag = await db.get(Tag, tag_id)
            if tag is None:
                raise TagNotFoundError(tag_id)
            return [
                TagTranslationItem.model_validate(t)
                for t in sorted(tag.translations, key=lambda t: t.language_code)
            ]

    async def replace_tag_translations(
        self, tag_id: int, items: list[TagTranslationItem]
    ) -> list[TagTranslationItem]:
        """Replace every translation of a tag with ``items``.

        Blank names are dropped; a repeated language code keeps the last name.
        """
        names: dict[str, str] = {}
        for item in items:
            name = item.name.strip()
            if name:
                names[item.language_code.strip().lower()] = name

        async with self.store.session() as db:
            tag = await db.get(Tag, tag_id)
            if tag is None:
                raise TagNotFoundError(tag_id)

            await db.execute(delete(TagTranslation).where(TagTranslation.tag_id == tag_id))
            db.add_all(TagTranslation(tag_id=tag_id, language_code=code, name=name) for code, name in names.items())
            await db.commit()
            logger.info("Tag translations replaced: id=%d languages=%s", tag_id, sorted(names))

        return [TagTranslationItem(language_code=code, name=name) for code, name in sorted(names.items())]

    @staticmethod
    async def _check_unique(db: AsyncSession, name: str, slug: str, exclude_id: int | None = None) -> None:
        query = select(Tag).where((Tag.name == name) | (Tag.slug == slug))
        if exclude_id is not None:
            query = query.where(Tag.id != exclude_id)
        existing = (await db.execute(query)).scalars().first()
        if existing is not None:
            field, value = ("name", name) if existing.name == name else ("slug", slug)
            raise ConflictError("Tag", field, value)
