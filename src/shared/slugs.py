"""URL-safe slugs for products and categories."""

import re
import unicodedata

from protean.exceptions import ValidationError

_SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")


def slugify(text: str) -> str:
    """Lowercase ASCII slug: accents stripped, runs of separators collapsed to one hyphen.

    >>> slugify("Điện thoại  Thông minh!")
    'dien-thoai-thong-minh'
    """
    # NFKD leaves "đ" intact, so map it explicitly
    text = text.replace("đ", "d").replace("Đ", "D")
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    text = text.lower()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_-]+", "-", text)
    return text.strip("-")


def validate_slug(slug: str) -> None:
    if not slug or not _SLUG_PATTERN.match(slug):
        raise ValidationError({"slug": ["Slug must contain only lowercase alphanumeric characters and hyphens"]})

    if slug.startswith("-") or slug.endswith("-"):
        raise ValidationError({"slug": ["Slug must not start or end with a hyphen"]})

    if "--" in slug:
        raise ValidationError({"slug": ["Slug must not contain consecutive hyphens"]})
