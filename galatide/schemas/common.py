from typing import Optional, Union

from pydantic import BaseModel, field_validator

from galatide.models.article import ArticleStatus


def normalize_status(value: Union[str, ArticleStatus, None]) -> Optional[ArticleStatus]:
    """Accept "draft"/"published" in any case."""
    if value is None or isinstance(value, ArticleStatus):
        return value
    return ArticleStatus(str(value).upper())


class StatusInput(BaseModel):
    """Mixin for request bodies carrying an optional article/translation status."""

    @field_validator("status", mode="before", check_fields=False)
    @classmethod
    def _normalize_status(cls, value):
        return normalize_status(value)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        total_pages = (total + limit - 1) // limit if limit else 0
        return cls(page=page, limit=limit, total=total, total_pages=total_pages)
