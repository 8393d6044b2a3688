from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LanguageCreate(BaseModel):
    code: str = Field(..., min_length=2, max_length=10, description="Code used in URLs, e.g. 'fr'.")
    name: str = Field(..., min_length=1)
    native_name: str = Field(..., min_length=1)
    is_rtl: Optional[bool] = Field(None, description="Derived from the code when omitted.")
    is_active: bool = True
    is_default: bool = False


class LanguageUpdate(BaseModel):
    name: Optional[str] = None
    native_name: Optional[str] = None
    is_rtl: Optional[bool] = None
    is_active: Optional[bool] = None
    is_default: Optional[bool] = None


class LanguageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    code: str
    name: str
    native_name: str
    is_rtl: bool
    is_active: bool = True
    is_default: bool = False
