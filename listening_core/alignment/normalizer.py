"""Text normalization and contraction canonicalization for alignment."""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Pattern, Tuple

from ..lexicon import CONTRACTIONS


# Apostrophe-less spellings that are also ordinary English words.
# These are left alone ("were", "well", "its", ...).
AMBIGUOUS_BARE_FORMS = frozenset({"ill", "id", "were", "well", "wed", "its"})

_APOSTROPHES = re.compile(r"[‘’ʼ`]")
_NON_WORD = re.compile(r"[^\w\s']")
_WHITESPACE = re.compile(r"\s+")
_PRONOUN_I = re.compile(r"\bi\b")
_WORD_START = r"(?<![\w'])"
_WORD_END = r"(?![\w'])"


def _split_pattern(canonical: str) -> Tuple[str, str]:
    """Return (head, tail regex) for the split spelling of a contraction."""
    if canonical == "won't":
        return "will", "n'?t"
    if canonical == "can't":
        return "can", "'?t"
    if canonical.endswith("n't"):
        return canonical[:-3], "n'?t"
    head, tail = canonical.split("'", 1)
    return head, "'?" + tail


def _build_split_rules() -> List[Tuple[Pattern[str], str]]:
    rules = []
    for canonical in CONTRACTIONS:
        head, tail = _split_pattern(canonical)
        pattern = re.compile(_WORD_START + re.escape(head) + r"\s+" + tail + _WORD_END)
        rules.append((pattern, canonical))
    return rules


def _build_bare_forms() -> Dict[str, str]:
    bare = {"cannot": "can't"}
    for canonical in CONTRACTIONS:
        plain = canonical.replace("'", "")
        if plain not in AMBIGUOUS_BARE_FORMS:
            bare[plain] = canonical
    return bare


_SPLIT_RULES = _build_split_rules()
BARE_FORMS: Dict[str, str] = _build_bare_forms()
_BARE_PATTERN = re.compile(
    _WORD_START
    + "("
    + "|".join(re.escape(w) for w in sorted(BARE_FORMS, key=len, reverse=True))
    + ")"
    + _WORD_END
)


def normalize_contractions(text: str) -> str:
    """Merge split contractions and restore missing apostrophes.

    Expects lowercased text. "i m" and "i 'm" become "i'm", "dont" becomes
    "don't" and "cannot" becomes "can't".
    """
    for pattern, canonical in _SPLIT_RULES:
        text = pattern.sub(canonical, text)
    return _BARE_PATTERN.sub(lambda m: BARE_FORMS[m.group(1)], text)


def normalize_text(text: Optional[str]) -> str:
    """Normalize text for token comparison.

    Lowercases, unifies curly apostrophes, replaces every character that is not
    a word character, whitespace or apostrophe with a space, collapses
    whitespace and canonicalizes contractions. Idempotent.

    Args:
        text: Raw transcript or learner attempt

    Returns:
        Normalized string, empty when nothing alignable remains
    """
    if not text:
        return ""
    text = _APOSTROPHES.sub("'", text.lower())
    text = _NON_WORD.sub(" ", text)
    text = _WHITESPACE.sub(" ", text).strip()
    text = normalize_contractions(text)
    return _WHITESPACE.sub(" ", text).strip()


def normalize_token(token: str) -> str:
    """Normalize a single word the same way whole texts are normalized."""
    return normalize_text(token)


def is_contraction(token: str) -> bool:
    return normalize_text(token) in CONTRACTIONS


def expand_contraction(token: str) -> str:
    """Expanded meaning of a contraction ("I'm" -> "I am"), or the token unchanged.

    The table is lowercase; the pronoun "I" is written capitalized.
    """
    expanded = CONTRACTIONS.get(normalize_text(token))
    if expanded is None:
        return token
    return _PRONOUN_I.sub("I", expanded)


normalize = normalize_text
