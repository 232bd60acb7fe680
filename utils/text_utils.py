"""
Text utilities for slugs and operator search.
"""

import re
import unicodedata
from typing import Optional


_WHITESPACE = re.compile(r"\s+")


def slugify(value: Optional[str]) -> str:
    """
    Derive a URL slug from a display name.

    Lowercases and joins whitespace runs with a hyphen:
    - "Custom Hoodies" → "custom-hoodies"
    - "  Sports   Wear " → "sports-wear"

    Punctuation is kept; the slug is only auto-filled when the operator
    leaves it blank, so whatever they type wins.
    """
    if not value:
        return ""
    return _WHITESPACE.sub("-", value.strip().lower())


def fold_text(value: Optional[str]) -> str:
    """
    Case- and accent-insensitive form used for search matching.

    "Camiseta Básica" → "camiseta basica"
    """
    if not value:
        return ""

    normalized = unicodedata.normalize('NFD', value)
    ascii_value = ''.join(
        c for c in normalized
        if unicodedata.category(c) != 'Mn'
    )
    return ascii_value.lower()


def matches_search(query: Optional[str], *fields: Optional[str]) -> bool:
    """True when the query is blank or contained in any of the fields."""
    needle = fold_text(query).strip()
    if not needle:
        return True
    return any(needle in fold_text(field) for field in fields)
