from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from galatide.schemas.article import ArticleRead
from galatide.schemas.tag import LocalizedTag
from galatide.schemas.translation import TranslationRead


class ResolvedContent(BaseModel):
    """The displayable content for a (slug, language) pair."""

    article: ArticleRead
    translation: Optional[TranslationRead] = None
    language_code: str
    tags: list[LocalizedTag] = Field(default_factory=list)

    @property
    def title(self) -> str:
        return self.translation.title if self.translation else self.article.title

    @property
    def slug(self) -> str:
        return self.translation.slug if self.translation else self.article.slug


class AlternateLink(BaseModel):
    hreflang: str
    href: str


class ArticleMetadata(BaseModel):
    """SEO metadata for an article page."""

    title: str
    description: str
    keywords: Optional[str] = None
    canonical_url: Optional[str] = None
    og_type: str = "article"
    published_time: Optional[datetime] = None
    authors: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    alternates: list[AlternateLink] = Field(default_factory=list)
    found: bool = True
