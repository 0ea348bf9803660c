"""
Consistency of arrangements with recorded oracle feedback.

Given:
  - a history of (candidate, score) pairs returned by the oracle
  - a proposed arrangement (full or partial)

Answer:
  - could the secret be this arrangement (or an extension of this prefix)
    without contradicting ANY score seen so far?

The arrangement fallback uses this to skip permutations it already knows are
wrong, so each oracle query it spends is on a still-possible secret.
"""

from typing import Iterable, List, Sequence, Tuple
from .scoring import exact_matches

# History is a sequence of (candidate, score) tuples as answered by the oracle.
History = Iterable[Tuple[str, int]]


def usable_history(history: History, length: int) -> List[Tuple[str, int]]:
    """
    Keep only well-formed entries: correct length and a non-negative score.
    Length probes (-2) and rejected candidates (-1) carry no positional info.
    """
    return [(g, s) for g, s in history if s >= 0 and len(g) == length]


def is_consistent(arrangement: str, history: History) -> bool:
    """
    True if scoring `arrangement` as the secret reproduces every recorded score.
    """
    for g, s in history:
        if exact_matches(g, arrangement) != s:
            return False
    return True


def prefix_feasible(prefix: Sequence[str], length: int, history: History) -> bool:
    """
    True if some completion of `prefix` to `length` symbols could still agree
    with every (candidate, score) in `history`.

    For each entry the matches inside the prefix may not exceed the score, and
    the positions left open must be able to supply the rest.
    """
    n = len(prefix)
    open_positions = length - n
    for g, s in history:
        hits = 0
        for i in range(n):
            if g[i] == prefix[i]:
                hits += 1
        if hits > s or hits + open_positions < s:
            return False
    return True

