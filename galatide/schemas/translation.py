from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from galatide.models.article import ArticleStatus
from galatide.schemas.common import StatusInput
from galatide.schemas.language import LanguageRead
from galatide.schemas.user import UserSummary


class TranslationFields(StatusInput):
    title: str = Field(..., title="Title")
    slug: Optional[str] = Field(None, description="Derived from the title when omitted.")
    excerpt: Optional[str] = None
    content: str = Field(..., title="Content", description="HTML body.")
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: Optional[str] = None
    status: ArticleStatus = ArticleStatus.DRAFT
    translator_id: Optional[int] = None


class TranslationCreate(TranslationFields):
    language_id: int


class TranslationUpdate(StatusInput):
    title: Optional[str] = None
    slug: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: Optional[str] = None
    status: Optional[ArticleStatus] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Station abyssale",
                "slug": "station-abyssale",
                "status": "PUBLISHED",
            }
        }
    )


class TranslationLink(BaseModel):
    """Where a published translation of an article lives."""

    language_code: str
    slug: str
    title: str


class TranslationRead(BaseModel):
    id: int
    article_id: int
    language: LanguageRead
    title: str
    slug: str
    excerpt: Optional[str]
    content: Optional[str]
    status: ArticleStatus
    published_at: Optional[datetime]
    meta_title: Optional[str]
    meta_description: Optional[str]
    keywords: Optional[str]
    translator: Optional[UserSummary]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, t: Any) -> "TranslationRead":
        return cls(
            id=t.id,
            article_id=t.article_id,
            language=LanguageRead.model_validate(t.language),
            title=t.title,
            slug=t.slug,
            excerpt=t.excerpt,
            content=t.content,
            status=t.status,
            published_at=t.published_at,
            meta_title=t.meta_title,
            meta_description=t.meta_description,
            keywords=t.keywords,
            translator=UserSummary.model_validate(t.translator) if t.translator else None,
            created_at=t.created_at,
            updated_at=t.updated_at,
        )
