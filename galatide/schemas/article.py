from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Optional

from pydantic import BaseModel, Field

from galatide.models.article import ArticleStatus
from galatide.schemas.common import Pagination, StatusInput
from galatide.schemas.language import LanguageRead
from galatide.schemas.tag import LocalizedTag, TagRead
from galatide.schemas.translation import TranslationLink
from galatide.schemas.user import UserSummary
from galatide.utils.text import reading_time_minutes


class ArticleCreate(StatusInput):
    title: str = Field(..., title="Article Title")
    slug: Optional[str] = Field(None, description="Derived from the title when omitted.")
    excerpt: Optional[str] = None
    content: Optional[str] = Field(None, description="HTML body.")
    cover_url: Optional[str] = None
    status: ArticleStatus = ArticleStatus.DRAFT
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: Optional[str] = None
    author_id: Optional[int] = None
    language_id: int = Field(..., description="Original language of the article.")
    tag_ids: list[int] = Field(default_factory=list)


class ArticleUpdate(StatusInput):
    title: Optional[str] = None
    slug: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    cover_url: Optional[str] = None
    status: Optional[ArticleStatus] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: Optional[str] = None
    tag_ids: Optional[list[int]] = None


class ArticleRead(BaseModel):
    id: int
    title: str
    slug: str
    excerpt: Optional[str]
    content: Optional[str]
    cover_url: Optional[str]
    status: ArticleStatus
    published_at: Optional[datetime]
    meta_title: Optional[str]
    meta_description: Optional[str]
    keywords: Optional[str]
    author: Optional[UserSummary]
    original_language: LanguageRead
    tags: list[TagRead]
    translations: list[TranslationLink] = Field(default_factory=list)
    read_time: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, article: Any, translations: Iterable[TranslationLink] = ()) -> "ArticleRead":
        """Project an Article row; ``translations`` must be supplied by the caller."""
        return cls(
            id=article.id,
            title=article.title,
            slug=article.slug,
            excerpt=article.excerpt,
            content=article.content,
            cover_url=article.cover_url,
            status=article.status,
            published_at=article.published_at,
            meta_title=article.meta_title,
            meta_description=article.meta_description,
            keywords=article.keywords,
            author=UserSummary.model_validate(article.author) if article.author else None,
            original_language=LanguageRead.model_validate(article.original_language),
            tags=[TagRead.model_validate(tag) for tag in sorted(article.tags, key=lambda t: t.name)],
            translations=list(translations),
            read_time=reading_time_minutes(article.content),
            created_at=article.created_at,
            updated_at=article.updated_at,
        )


class ArticleSummary(BaseModel):
    """Listing entry in one language: translation fields overlay the original."""

    id: int
    title: str
    slug: str
    excerpt: str
    cover_url: Optional[str]
    status: ArticleStatus
    published_at: Optional[datetime]
    language_code: str
    is_translation: bool
    author: Optional[UserSummary]
    tags: list[LocalizedTag]
    read_time: Optional[int]


class ArticlePage(BaseModel):
    articles: list[ArticleSummary]
    pagination: Pagination


class ArticleStats(BaseModel):
    total: int
    published: int
    drafts: int
    translations: int
