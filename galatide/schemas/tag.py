from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TagCreate(BaseModel):
    name: str = Field(..., title="Tag Name")
    color: Optional[str] = Field(None, description="CSS color, e.g. '#0ea5e9'.")


class TagUpdate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None


class TagRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    color: Optional[str] = None


class TagWithCount(TagRead):
    article_count: int = 0


class LocalizedTag(BaseModel):
    """A tag as displayed in one language."""

    id: int
    name: str
    original_name: str
    slug: str
    color: str
    has_translation: bool


class TagTranslationItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    language_code: str = Field(..., min_length=2, max_length=10)
    name: str = Field(..., min_length=1)


class TagTranslationsReplace(BaseModel):
    translations: list[TagTranslationItem] = Field(default_factory=list)
