from .language import Language
from .user import User, UserRole
from .article_tags import article_tags
from .tag import Tag, TagTranslation
from .article import Article, ArticleStatus
from .article_translation import ArticleTranslation

__all__ = [
    "Language",
    "User",
    "UserRole",
    "article_tags",
    "Tag",
    "TagTranslation",
    "Article",
    "ArticleStatus",
    "ArticleTranslation",
]
