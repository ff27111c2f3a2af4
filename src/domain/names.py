"""Member name normalization."""

from __future__ import annotations

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")


def normalize(raw_name: str) -> str:
    """Return the stable lookup key for a display name.

    Accents are stripped, case is folded and whitespace is trimmed and
    collapsed, so ``" Á  NEW Member"`` and ``"a new member"`` share a key.
    """
    # casefold on both sides of NFKD: either step can expose work for the other
    decomposed = unicodedata.normalize("NFKD", raw_name.casefold())
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return _WHITESPACE_RE.sub(" ", stripped.casefold()).strip()


def clean_display_name(raw_name: str) -> str:
    """Trim a display name and collapse its internal whitespace."""
    return _WHITESPACE_RE.sub(" ", raw_name).strip()


__all__ = ["clean_display_name", "normalize"]
