from datetime import datetime
from typing import Literal

from pydantic import BaseModel

ChangeFrequency = Literal["always", "hourly", "daily", "weekly", "monthly", "yearly", "never"]


class SitemapUrl(BaseModel):
    url: str
    last_modified: datetime
    change_frequency: ChangeFrequency
    priority: float


class LanguageSitemap(BaseModel):
    language: str
    urls: list[SitemapUrl]
