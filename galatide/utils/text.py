"""
Plain-text helpers for article HTML: tag stripping, SEO snippets and
reading time.
"""

import math
import re

_TAG_RE = re.compile(r"<[^>]+>")
_ENTITY_RE = re.compile(r"&[^;\s]+;")
_SPACE_RE = re.compile(r"\s+")

WORDS_PER_MINUTE = 200
META_DESCRIPTION_MAX_LENGTH = 160


def html_to_text(html: str | None) -> str:
    if not html:
        return ""
    text = _TAG_RE.sub(" ", html)
    text = _ENTITY_RE.sub(" ", text)
    return _SPACE_RE.sub(" ", text).strip()


def reading_time_minutes(html: str | None) -> int | None:
    """Estimated minutes to read ``html`` at 200 wpm; None when there is no content."""
    if html is None:
        return None
    text = html_to_text(html)
    if not text:
        return 0
    return max(1, math.ceil(len(text.split(" ")) / WORDS_PER_MINUTE))


def generate_meta_description(content: str | None, max_length: int = META_DESCRIPTION_MAX_LENGTH) -> str:
    """Strip HTML and truncate on a word boundary."""
    text = html_to_text(content)
    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        return truncated[:last_space] + "..."
    return truncated + "..."
