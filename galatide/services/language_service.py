"""
Language Registry

Enabled languages, the single default language and RTL flags.
"""

from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from galatide.config import settings
from galatide.database import Store
from galatide.exceptions import ConflictError, LanguageNotFoundError, ValidationError
from galatide.i18n.locale import get_language_info, is_rtl_locale
from galatide.models.language import Language
from galatide.schemas.language import LanguageCreate, LanguageRead, LanguageUpdate

logger = logging.getLogger(__name__)


async def fetch_language_by_code(db: AsyncSession, code: str) -> Language | None:
    result = await db.execute(select(Language).where(Language.code == code))
    return result.scalars().first()


async def fetch_default_language_code(db: AsyncSession) -> str:
    """Code of the language flagged default, else ``settings.default_language``."""
    result = await db.execute(select(Language.code).where(Language.is_default.is_(True)).limit(1))
    return result.scalar() or settings.default_language


class LanguageService:
    def __init__(self, store: Store):
        self.store = store

    async def list_languages(self, active_only: bool = False) -> list[LanguageRead]:
        query = select(Language).order_by(Language.name)
        if active_only:
            query = query.where(Language.is_active.is_(True))
        async with self.store.session() as db:
            result = await db.execute(query)
            return [LanguageRead.model_validate(lang) for lang in result.scalars().all()]

    async def get_language(self, language_id: int) -> LanguageRead:
        async with self.store.session() as db:
            language = await db.get(Language, language_id)
            if language is None:
                raise LanguageNotFoundError(language_id)
            return LanguageRead.model_validate(language)

    async def get_by_code(self, code: str) -> LanguageRead:
        async with self.store.session() as db:
            language = await fetch_language_by_code(db, code)
            if language is None:
                raise LanguageNotFoundError(code)
            return LanguageRead.model_validate(language)

    async def get_default_language(self) -> LanguageRead:
        """The flagged default language, else the configured one."""
        async with self.store.session() as db:
            code = await fetch_default_language_code(db)
            language = await fetch_language_by_code(db, code)
            if language is not None:
                return LanguageRead.model_validate(language)
        info = get_language_info(code)
        return LanguageRead(
            code=code,
            name=info["name"],
            native_name=info["native_name"],
            is_rtl=info["is_rtl"],
            is_default=True,
        )

    async def get_default_language_code(self) -> str:
        async with self.store.session() as db:
            return await fetch_default_language_code(db)

    async def create_language(self, data: LanguageCreate) -> LanguageRead:
        code = data.code.strip().lower()
        async with self.store.session() as db:
            if await fetch_language_by_code(db, code) is not None:
                raise ConflictError("Language", "code", code)

            if data.is_default:
                await self._clear_default(db)

            language = Language(
                code=code,
                name=data.name,
                native_name=data.native_name,
                is_rtl=is_rtl_locale(code) if data.is_rtl is None else data.is_rtl,
                is_active=data.is_active,
                is_default=data.is_default,
            )
            db.add(language)
            try:
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                raise ConflictError("Language", "code", code) from e
            await db.refresh(language)
            logger.info("Language created: code=%s default=%s", code, language.is_default)
            return LanguageRead.model_validate(language)

    async def update_language(self, language_id: int, data: LanguageUpdate) -> LanguageRead:
        async with self.store.session() as db:
            language = await db.get(Language, language_id)
            if language is None:
                raise LanguageNotFoundError(language_id)

            updates = data.model_dump(exclude_unset=True)
            if updates.get("is_default") is False and language.is_default:
                raise ValidationError("Mark another language as default instead", field="is_default")
            if updates.get("is_default"):
                await self._clear_default(db, exclude_id=language.id)

            for field, value in updates.items():
                if value is not None:
                    setattr(language, field, value)

            await db.commit()
            await db.refresh(language)
            logger.info("Language updated: code=%s", language.code)
            return LanguageRead.model_validate(language)

    async def delete_language(self, language_id: int) -> None:
        async with self.store.session() as db:
            language = await db.get(Language, language_id)
            if language is None:
                raise LanguageNotFoundError(language_id)
            if language.is_default:
                raise ValidationError("The default language cannot be deleted", field="is_default")

            code = language.code
            await db.delete(language)
            try:
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                raise ValidationError(
                    f"Language '{code}' is still the original language of some articles",
                    field="id",
                ) from e
            logger.info("Language deleted: code=%s", code)

    @staticmethod
    async def _clear_default(db: AsyncSession, exclude_id: int | None = None) -> None:
        stmt = update(Language).where(Language.is_default.is_(True)).values(is_default=False)
        if exclude_id is not None:
            stmt = stmt.where(Language.id != exclude_id)
        await db.execute(stmt)
