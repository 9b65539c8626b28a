"""Edit distance alignment algorithm for token sequences."""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..errors import AlignmentIntegrityError

PathStep = Tuple[str, Optional[int], Optional[int]]


def align_sequences(ref: Sequence[str], hyp: Sequence[str]) -> List[PathStep]:
    """Levenshtein alignment returning a path of operations.

    Returns list of tuples: (op, ref_index, hyp_index)
      op in {"match","sub","del","ins"}.

      match -> correct words
      sub -> heard one word as another
      del -> missed words
      ins -> extra words

    On equal cost the diagonal step (match/sub) wins, then del, then ins,
    so the same inputs always produce the same path.

    Args:
        ref: Reference sequence (normalized transcript tokens)
        hyp: Hypothesis sequence (normalized attempt tokens)

    Returns:
        List of tuples: (operation, ref_index, hyp_index) in sequence order
    """
    n, m = len(ref), len(hyp)
    dp = [[0] * (m + 1) for _ in range(n + 1)]
    back: List[List[PathStep]] = [[("start", None, None)] * (m + 1) for _ in range(n + 1)]

    for i in range(1, n + 1):
        dp[i][0] = i
        back[i][0] = ("del", i - 1, None)
    for j in range(1, m + 1):
        dp[0][j] = j
        back[0][j] = ("ins", None, j - 1)

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            cost_sub = 0 if ref[i - 1] == hyp[j - 1] else 1
            candidates = [
                (dp[i - 1][j - 1] + cost_sub, ("match" if cost_sub == 0 else "sub", i - 1, j - 1)),
                (dp[i - 1][j] + 1, ("del", i - 1, None)),
                (dp[i][j - 1] + 1, ("ins", None, j - 1)),
            ]
            # min() keeps the first of equal candidates
            best_cost, best_step = min(candidates, key=lambda x: x[0])
            dp[i][j] = best_cost
            back[i][j] = best_step

    # backtrack
    ops: List[PathStep] = []
    i, j = n, m
    while not (i == 0 and j == 0):
        op, ri, hj = back[i][j]
        ops.append((op, ri, hj))
        if op in ("match", "sub"):
            i -= 1
            j -= 1
        elif op == "del":
            i -= 1
        elif op == "ins":
            j -= 1
        else:
            raise AlignmentIntegrityError(f"backtrace stuck at cell ({i}, {j})")
    ops.reverse()
    return ops


def edit_distance(a: Sequence, b: Sequence) -> int:
    """Plain Levenshtein distance between two sequences (characters or tokens)."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, x in enumerate(a, 1):
        current = [i]
        for j, y in enumerate(b, 1):
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + (x != y)))
        previous = current
    return previous[-1]
