import re
from unidecode import unidecode

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
MAX_SLUG_LENGTH = 100


def slugify(text):
    text = unidecode(text).lower()
    text = re.sub(r'[^a-z0-9]+', '-', text).strip('-')
    return text


def generate_unique_slug(base_slug: str, existing_slugs) -> str:
    """Append -1, -2, ... to ``base_slug`` until it is not in ``existing_slugs``."""
    taken = set(existing_slugs)
    slug = base_slug
    counter = 1
    while slug in taken:
        slug = f"{base_slug}-{counter}"
        counter += 1
    return slug


def is_valid_slug(slug: str) -> bool:
    return bool(slug) and len(slug) <= MAX_SLUG_LENGTH and SLUG_PATTERN.match(slug) is not None
