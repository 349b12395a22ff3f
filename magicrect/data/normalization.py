"""Shared helpers for word normalization."""

from __future__ import annotations

from ..core.constants import ALPHABET


def clean_word(text: str) -> str:
    """Return ``text`` trimmed and lowercased."""

    if not text:
        return ""
    return text.strip().lower()


def is_spellable(word: str, alphabet: str = ALPHABET) -> bool:
    """True when every character of ``word`` can be placed by the search."""

    return bool(word) and all(char in alphabet for char in word)


__all__ = ["clean_word", "is_spellable"]
