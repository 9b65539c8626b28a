"""Tokenization of normalized text into alignable words."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .normalizer import normalize_text


@dataclass(frozen=True)
class Token:
    """A normalized word and its position in the token sequence."""
    text: str
    index: int


def tokenize_words(text: Optional[str]) -> List[str]:
    """Normalize ``text`` and split it on whitespace.

    Example: "I'm going, OK?" -> ["i'm", "going", "ok"]
    """
    normalized = normalize_text(text)
    if not normalized:
        return []
    return normalized.split(" ")


def tokenize(text: Optional[str]) -> List[Token]:
    return [Token(text=word, index=i) for i, word in enumerate(tokenize_words(text))]
