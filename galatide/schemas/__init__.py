from .common import Pagination
from .language import LanguageCreate, LanguageRead, LanguageUpdate
from .user import UserSummary
from .tag import (
    LocalizedTag,
    TagCreate,
    TagRead,
    TagTranslationItem,
    TagTranslationsReplace,
    TagUpdate,
    TagWithCount,
)
from .translation import (
    TranslationCreate,
    TranslationFields,
    TranslationLink,
    TranslationRead,
    TranslationUpdate,
)
from .article import ArticleCreate, ArticlePage, ArticleRead, ArticleStats, ArticleSummary, ArticleUpdate
from .content import AlternateLink, ArticleMetadata, ResolvedContent
from .seo import LanguageSitemap, SitemapUrl

__all__ = [
    "Pagination",
    "LanguageCreate",
    "LanguageRead",
    "LanguageUpdate",
    "UserSummary",
    "LocalizedTag",
    "TagCreate",
    "TagRead",
    "TagTranslationItem",
    "TagTranslationsReplace",
    "TagUpdate",
    "TagWithCount",
    "TranslationCreate",
    "TranslationFields",
    "TranslationLink",
    "TranslationRead",
    "TranslationUpdate",
    "ArticleCreate",
    "ArticlePage",
    "ArticleRead",
    "ArticleStats",
    "ArticleSummary",
    "ArticleUpdate",
    "AlternateLink",
    "ArticleMetadata",
    "ResolvedContent",
    "LanguageSitemap",
    "SitemapUrl",
]
