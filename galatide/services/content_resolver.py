"""
Content Resolver

Decides what to serve for a (slug, language) request.

Lookup order:
1. For a non-default language, a published translation in that language
   whose own slug, or whose article's slug, matches.
2. A published original article with that slug. Any original language
   matches when the default language is requested; otherwise only articles
   written in the requested language do.
3. Otherwise the content is not found. There is no chained fallback
   through other languages.
"""

from __future__ import annotations

import logging

from sqlalchemy import case, or_, select

from galatide.database import Store
from galatide.exceptions import ArticleNotFoundError
from galatide.models.article import Article, ArticleStatus
from galatide.models.article_translation import ArticleTranslation
from galatide.models.language import Language
from galatide.schemas.article import ArticleRead
from galatide.schemas.content import ResolvedContent
from galatide.schemas.translation import TranslationRead
from galatide.services.article_service import load_article, published_translation_links
from galatide.services.language_service import fetch_default_language_code
from galatide.services.tag_service import localize_tag

logger = logging.getLogger(__name__)


class ContentResolver:
    def __init__(self, store: Store):
        self.store = store

    async def resolve(self, slug: str, language_code: str) -> ResolvedContent:
        """Resolve ``slug`` in ``language_code``.

        Raises:
            ArticleNotFoundError: nothing published matches.
            StoreUnavailableError: the database cannot be reached.
        """
        async with self.store.session() as db:
            default_code = await fetch_default_language_code(db)
            translation = None

            if language_code != default_code:
                result = await db.execute(
                    select(ArticleTranslation)
                    .join(Language, ArticleTranslation.language_id == Language.id)
                    .join(Article, ArticleTranslation.article_id == Article.id)
                    .where(
                        Language.code == language_code,
                        ArticleTranslation.status == ArticleStatus.PUBLISHED,
                        Article.status == ArticleStatus.PUBLISHED,
                        or_(ArticleTranslation.slug == slug, Article.slug == slug),
                    )
                    # own-slug matches first
                    .order_by(case((ArticleTranslation.slug == slug, 0), else_=1), ArticleTranslation.id)
                    .limit(1)
                )
                translation = result.scalars().first()

            if translation is not None:
                article_id = translation.article_id
            else:
                query = (
                    select(Article.id)
                    .join(Language, Article.original_language_id == Language.id)
                    .where(Article.slug == slug, Article.status == ArticleStatus.PUBLISHED)
                )
                if language_code != default_code:
                    query = query.where(Language.code == language_code)
                result = await db.execute(
                    query.order_by(case((Language.code == default_code, 0), else_=1), Article.id).limit(1)
                )
                article_id = result.scalar()

            if article_id is None:
                logger.info("Content not found: slug=%s language=%s", slug, language_code)
                raise ArticleNotFoundError(slug)

            article = await load_article(db, article_id)
            return ResolvedContent(
                article=ArticleRead.from_model(article, published_translation_links(article)),
                translation=TranslationRead.from_model(translation) if translation is not None else None,
                language_code=language_code,
                tags=[localize_tag(tag, language_code) for tag in sorted(article.tags, key=lambda t: t.name)],
            )
