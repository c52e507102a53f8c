"""URL-safe identifier normalization."""

import re

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(text: str) -> str:
    """Map free text to a slug of the form ``[a-z0-9]+(-[a-z0-9]+)*``.

    Lowercases and trims, drops anything outside ``[a-z0-9]``, whitespace and
    hyphens, turns whitespace runs into a single hyphen and collapses repeated
    hyphens. Leading and trailing hyphens are stripped so the result is always
    a valid slug. Empty input (or input with no usable characters) yields ``""``;
    callers substitute their own default identifier.

    >>> slugify("  Quick Paneer  Makhani! ")
    'quick-paneer-makhani'
    """
    if not text:
        return ""
    slug = str(text).lower().strip()
    slug = _DISALLOWED.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")
