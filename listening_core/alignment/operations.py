"""Post-processing of the raw edit path.

Two passes run over the backtrace before tokens are built:

1. ``reconcile_reductions`` looks at each run of non-match steps and replaces
   a reduced form paired with its expansion ("gonna" / "going to") by one
   substitution spanning the whole expansion.
2. ``apply_confidence`` sends every substitution through the confidence gate
   and splits the unconvincing ones into a missing word plus an extra word.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from ..lexicon import DEFAULT_LEXICON, Lexicon
from .confidence import DEFAULT_POLICY, ConfidencePolicy, evaluate_replacement
from .edit_distance import PathStep, align_sequences


@dataclass(frozen=True)
class AlignmentStep:
    """One operation on the edit path.

    Attributes:
        op: "match", "sub", "del" or "ins"
        ref_index: First reference position (None for ins)
        user_index: First attempt position (None for del)
        ref_end: Last reference position of a multi-word substitution
        user_end: Last attempt position of a multi-word substitution
        confidence: Gate confidence for substitutions
    """
    op: str  # "match" | "sub" | "del" | "ins"
    ref_index: Optional[int] = None
    user_index: Optional[int] = None
    ref_end: Optional[int] = None
    user_end: Optional[int] = None
    confidence: Optional[float] = None

    @property
    def ref_last(self) -> Optional[int]:
        return self.ref_end if self.ref_end is not None else self.ref_index

    @property
    def user_last(self) -> Optional[int]:
        return self.user_end if self.user_end is not None else self.user_index


@dataclass(frozen=True)
class _Pairing:
    ref_start: int
    ref_end: int
    user_start: int
    user_end: int


def steps_from_path(path: Sequence[PathStep]) -> List[AlignmentStep]:
    return [AlignmentStep(op=op, ref_index=ri, user_index=hj) for op, ri, hj in path]


def _runs(steps: Sequence[AlignmentStep]) -> List[Tuple[int, int]]:
    """(start, stop) slices of maximal non-match runs."""
    runs = []
    start = None
    for k, step in enumerate(steps):
        if step.op == "match":
            if start is not None:
                runs.append((start, k))
                start = None
        elif start is None:
            start = k
    if start is not None:
        runs.append((start, len(steps)))
    return runs


def _find(needle: Tuple[str, ...], haystack: List[str]) -> List[int]:
    size = len(needle)
    return [i for i in range(len(haystack) - size + 1) if tuple(haystack[i:i + size]) == needle]


def _candidate_pairings(ref_words: List[str], user_words: List[str], lexicon: Lexicon) -> List[_Pairing]:
    candidates = []
    # reduced form typed, expansion in the reference
    for u, word in enumerate(user_words):
        for expansion in lexicon.expansions_of(word):
            for r in _find(expansion, ref_words):
                candidates.append(_Pairing(r, r + len(expansion) - 1, u, u))
    # reduced form in the reference, expansion typed
    for r, word in enumerate(ref_words):
        for expansion in lexicon.expansions_of(word):
            for u in _find(expansion, user_words):
                candidates.append(_Pairing(r, r, u, u + len(expansion) - 1))
    candidates.sort(key=lambda p: (p.ref_start, p.user_start, -(p.ref_end - p.ref_start)))
    return candidates


def _select_monotone(candidates: List[_Pairing]) -> List[_Pairing]:
    chosen: List[_Pairing] = []
    last_ref, last_user = -1, -1
    for pairing in candidates:
        if pairing.ref_start > last_ref and pairing.user_start > last_user:
            chosen.append(pairing)
            last_ref, last_user = pairing.ref_end, pairing.user_end
    return chosen


def _realign(
    ref: Sequence[str],
    hyp: Sequence[str],
    ref_ids: List[int],
    user_ids: List[int],
) -> List[AlignmentStep]:
    """Align a leftover piece of a run and map indices back to the full sequences."""
    path = align_sequences([ref[i] for i in ref_ids], [hyp[j] for j in user_ids])
    return [
        AlignmentStep(
            op=op,
            ref_index=ref_ids[ri] if ri is not None else None,
            user_index=user_ids[hj] if hj is not None else None,
        )
        for op, ri, hj in path
    ]


def _reconcile_run(
    run: Sequence[AlignmentStep],
    ref: Sequence[str],
    hyp: Sequence[str],
    lexicon: Lexicon,
) -> List[AlignmentStep]:
    # positions inside a run are contiguous and increasing on both sides
    ref_ids = [s.ref_index for s in run if s.ref_index is not None]
    user_ids = [s.user_index for s in run if s.user_index is not None]
    if not ref_ids or not user_ids:
        return list(run)

    ref_words = [ref[i] for i in ref_ids]
    user_words = [hyp[j] for j in user_ids]
    pairings = _select_monotone(_candidate_pairings(ref_words, user_words, lexicon))
    if not pairings:
        return list(run)

    out: List[AlignmentStep] = []
    r, u = 0, 0
    for p in pairings:
        out.extend(_realign(ref, hyp, ref_ids[r:p.ref_start], user_ids[u:p.user_start]))
        out.append(AlignmentStep(
            op="sub",
            ref_index=ref_ids[p.ref_start],
            user_index=user_ids[p.user_start],
            ref_end=ref_ids[p.ref_end] if p.ref_end > p.ref_start else None,
            user_end=user_ids[p.user_end] if p.user_end > p.user_start else None,
        ))
        r, u = p.ref_end + 1, p.user_end + 1
    out.extend(_realign(ref, hyp, ref_ids[r:], user_ids[u:]))
    return out


def reconcile_reductions(
    steps: Sequence[AlignmentStep],
    ref: Sequence[str],
    hyp: Sequence[str],
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> List[AlignmentStep]:
    """Collapse reduced-form / expansion pairs inside each mismatch run.

    Runs without a known reduction are returned exactly as given.
    """
    out: List[AlignmentStep] = []
    cursor = 0
    for start, stop in _runs(steps):
        out.extend(steps[cursor:start])
        out.extend(_reconcile_run(steps[start:stop], ref, hyp, lexicon))
        cursor = stop
    out.extend(steps[cursor:])
    return out


def apply_confidence(
    steps: Sequence[AlignmentStep],
    ref: Sequence[str],
    hyp: Sequence[str],
    policy: ConfidencePolicy = DEFAULT_POLICY,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> List[AlignmentStep]:
    """Keep confident substitutions, split the rest into del + ins."""
    out: List[AlignmentStep] = []
    for step in steps:
        if step.op != "sub":
            out.append(step)
            continue
        ref_range = range(step.ref_index, step.ref_last + 1)
        user_range = range(step.user_index, step.user_last + 1)
        expected = " ".join(ref[i] for i in ref_range)
        actual = " ".join(hyp[j] for j in user_range)
        decision = evaluate_replacement(expected, actual, policy=policy, lexicon=lexicon)
        if decision.is_substitution:
            out.append(replace(step, confidence=decision.confidence))
            continue
        out.extend(AlignmentStep(op="del", ref_index=i) for i in ref_range)
        out.extend(AlignmentStep(op="ins", user_index=j) for j in user_range)
    return out
