"""Diagnostic summary built from the classified errors of one attempt."""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..lexicon import DEFAULT_LEXICON, Lexicon
from ..models.alignment import MISSING, SUBSTITUTION, AlignmentResult
from ..models.diagnostic import DiagnosticSummary, ErrorCause
from .classifier import ClassifiedError, classify_tokens, count_causes
from .practice import MAX_PHRASES, extract_practice_phrases
from .ranking import rank_causes

MAX_EXAMPLES = 2
MIN_SECONDARY_COUNT = 2

SUMMARY_TEMPLATES: Dict[ErrorCause, str] = {
    ErrorCause.CONNECTED_SPEECH: "You often missed words when they were spoken together.",
    ErrorCause.WORD_REDUCTION: 'You often missed reduced words like "gonna" or "wanna".',
    ErrorCause.FUNCTION_WORD_DROP: 'You often missed small connecting words like "the" or "a".',
    ErrorCause.VOWEL_REDUCTION: "You often confused similar-sounding words.",
    ErrorCause.BOUNDARY_MISALIGNMENT: "You often misaligned where words begin and end.",
    ErrorCause.CONTENT_WORD_MISS: "You often missed important content words.",
}

WHY_HARD: Dict[ErrorCause, str] = {
    ErrorCause.CONNECTED_SPEECH: "In fast speech, words often blend together, making boundaries hard to hear.",
    ErrorCause.WORD_REDUCTION: 'Reduced forms like "gonna" are common in casual speech and can be hard to catch.',
    ErrorCause.FUNCTION_WORD_DROP: "Small connecting words are often spoken quickly and can be missed.",
    ErrorCause.VOWEL_REDUCTION: "Similar-sounding words can be confusing when spoken quickly.",
    ErrorCause.BOUNDARY_MISALIGNMENT: "Word boundaries can be unclear when speech flows quickly.",
    ErrorCause.CONTENT_WORD_MISS: "Content words carry meaning but can be missed in fast speech.",
}

GENERIC_WHAT_HAPPENED = "You missed several words in this sentence."


def render_summary(primary: ErrorCause, secondary: Optional[ErrorCause] = None) -> str:
    """Primary sentence, with the secondary cause spliced in as a trailing clause."""
    summary = SUMMARY_TEMPLATES[primary]
    if secondary is None:
        return summary
    clause = SUMMARY_TEMPLATES[secondary].lower().replace("you ", "", 1)
    return f"{summary[:-1]}, and also {clause}"


def render_what_happened(examples: Sequence[str]) -> str:
    if not examples:
        return GENERIC_WHAT_HAPPENED
    return f"You missed {' and '.join(examples[:MAX_EXAMPLES])} in this sentence."


def _missing_runs(classified: Sequence[ClassifiedError]) -> List[str]:
    """Consecutive missing words, as quoted phrases of two or more words."""
    runs: List[str] = []
    current: List[str] = []
    last_position = None
    for item in classified:
        adjacent = last_position is not None and item.position == last_position + 1
        if item.token.type == MISSING and (adjacent or not current):
            current.append(item.token.expected or "")
        else:
            if len(current) >= 2:
                runs.append(f'"{" ".join(current)}"')
            current = [item.token.expected or ""] if item.token.type == MISSING else []
        last_position = item.position
    if len(current) >= 2:
        runs.append(f'"{" ".join(current)}"')
    return runs


def collect_examples(
    classified: Sequence[ClassifiedError], cause: ErrorCause, limit: int = MAX_EXAMPLES
) -> List[str]:
    """Quoted reference words from the errors tagged with ``cause``."""
    examples: List[str] = []
    if cause == ErrorCause.CONNECTED_SPEECH:
        examples.extend(_missing_runs(classified))
    for item in classified:
        if cause not in item.causes:
            continue
        token = item.token
        if token.type == MISSING:
            examples.append(f'"{token.expected}"')
        elif token.type == SUBSTITUTION:
            examples.append(f'"{token.expected}" (you heard "{token.actual}")')
    return list(dict.fromkeys(examples))[:limit]


def build_diagnostic_summary(
    result: AlignmentResult,
    *,
    lexicon: Lexicon = DEFAULT_LEXICON,
    max_phrases: int = MAX_PHRASES,
) -> Optional[DiagnosticSummary]:
    """Rank the perceptual causes of an attempt's errors and describe them.

    Args:
        result: Alignment, ideally with phrase spans attached
        lexicon: Word tables for classification
        max_phrases: Cap on practice phrases

    Returns:
        DiagnosticSummary, or None when the attempt has no errors
    """
    classified = classify_tokens(result.tokens, lexicon=lexicon)
    if not classified:
        return None

    ranked = rank_causes(count_causes(classified))
    primary = ranked[0].cause
    secondary = None
    if len(ranked) > 1 and ranked[1].count >= MIN_SECONDARY_COUNT:
        secondary = ranked[1].cause

    examples = collect_examples(classified, primary)
    return DiagnosticSummary(
        primary_cause=primary,
        secondary_cause=secondary,
        summary=render_summary(primary, secondary),
        what_happened=render_what_happened(examples),
        why_hard=WHY_HARD[primary],
        examples=examples,
        practice_phrases=extract_practice_phrases(result.ref_tokens, result.events, max_phrases),
        cause_counts=ranked,
    )
