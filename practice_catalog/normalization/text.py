"""
Text folding helpers shared by the normalizers and classifiers.

All keyword heuristics in the catalog compare folded text, so that
"Nehézség", "nehezseg" and "NEHÉZSÉG " resolve to the same token.
"""

import re
import unicodedata
from typing import Any

_WHITESPACE = re.compile(r"\s+")


def safe_lower(value: Any) -> str:
    """Lower-case any value; ``None`` becomes an empty string."""
    if value is None:
        return ""
    return str(value).lower()


def strip_accents(value: str) -> str:
    """Remove combining marks after NFKD decomposition ("könnyű" -> "konnyu")."""
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def fold(value: Any) -> str:
    """
    Lower-case, accent-free, whitespace-collapsed form of a value.

    Example:
        >>> fold("  Könnyű   gyakorlat ")
        'konnyu gyakorlat'
    """
    text = strip_accents(safe_lower(value))
    return _WHITESPACE.sub(" ", text).strip()


def normalize_token(value: Any) -> str:
    """Folded form with all whitespace removed, used for icon/label tokens."""
    return _WHITESPACE.sub("", fold(value))
