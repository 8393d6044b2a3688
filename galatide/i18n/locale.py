"""
Locale helpers

Pure functions for language code handling:
- RTL (right-to-left) language detection
- Accept-Language header parsing with quality-value (q=) support
- Built-in language metadata, used to seed the registry and as the
  fallback list while the database is unavailable
"""

from __future__ import annotations

# ── Constants ─────────────────────────────────────────────────────────────────

# Base language codes whose scripts read right-to-left
RTL_LOCALES: frozenset[str] = frozenset({"ar", "he", "fa", "ur", "yi", "ku"})

# code -> (English name, native name)
BUILTIN_LANGUAGES: dict[str, tuple[str, str]] = {
    "en": ("English", "English"),
    "ar": ("Arabic", "العربية"),
    "zh": ("Chinese", "中文"),
    "ru": ("Russian", "Русский"),
    "de": ("German", "Deutsch"),
    "fr": ("French", "Français"),
    "hi": ("Hindi", "हिन्दी"),
}


# ── Public helpers ────────────────────────────────────────────────────────────


def is_rtl_locale(locale: str) -> bool:
    """Return True when the given locale is right-to-left.

    Compares only the base language tag (before the first hyphen), so
    both "ar" and "ar-SA" are identified as RTL.
    """
    base = locale.split("-")[0].lower()
    return base in RTL_LOCALES


def parse_accept_language(header: str, supported: list[str]) -> str | None:
    """Parse an Accept-Language header and return the best matching locale.

    Algorithm:
    1. Split header into tags with optional q-values (default q=1.0).
    2. Sort by q-value descending.
    3. For each tag, try exact match in `supported`, then base-language match.
    4. Return the first match or None if nothing matches.

    Args:
        header:    Value of the Accept-Language HTTP header, e.g.
                   "fr-CA,fr;q=0.9,en-US;q=0.8,en;q=0.7".
        supported: Ordered list of language codes the server supports.

    Returns:
        The best matching code from `supported`, or None.
    """
    if not header:
        return None

    weighted: list[tuple[float, str]] = []
    for part in header.split(","):
        part = part.strip()
        if not part:
            continue
        if ";q=" in part:
            tag, q_str = part.split(";q=", 1)
            try:
                q = float(q_str.strip())
            except ValueError:
                q = 1.0
        else:
            tag = part
            q = 1.0
        weighted.append((q, tag.strip()))

    # Stable sort keeps header order for equal q
    weighted.sort(key=lambda x: x[0], reverse=True)

    supported_lower = [s.lower() for s in supported]

    for _, tag in weighted:
        tag_lower = tag.lower()
        if tag_lower in supported_lower:
            return supported[supported_lower.index(tag_lower)]
        base = tag_lower.split("-")[0]
        if base in supported_lower:
            return supported[supported_lower.index(base)]

    return None


def get_language_info(code: str) -> dict[str, str | bool]:
    """Return ``code``, ``name``, ``native_name`` and ``is_rtl`` for a language code.

    Unknown codes use the code itself as both names.
    """
    name, native_name = BUILTIN_LANGUAGES.get(code, (code, code))
    return {
        "code": code,
        "name": name,
        "native_name": native_name,
        "is_rtl": is_rtl_locale(code),
    }

