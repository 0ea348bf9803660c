"""
Frequency profiling and baseline selection.

Idea:
  - A uniform candidate (every position = s) matches the secret exactly where
    the secret holds s, so its score IS the number of positions holding s.
  - One uniform query per symbol therefore partitions the L positions by
    symbol: the counts always sum to L.

Baseline:
  - Filling every position with the most frequent symbol leaves the fewest
    positions that still need a different symbol, which is what the position
    resolver pays queries for.
"""

from __future__ import annotations
from typing import Dict, Mapping

import structlog

from codebreaker.engine import Alphabet
from codebreaker.engine.errors import OracleContractError
from .base import Ask

log = structlog.get_logger(__name__)


def profile_frequencies(ask: Ask, alphabet: Alphabet, length: int,
                        known: Mapping[str, int] | None = None) -> Dict[str, int]:
    """
    Count how many positions of the secret hold each symbol.

    Args:
      ask     : bound oracle query
      alphabet: symbols to profile, in the order they are tried
      length  : secret length L (already discovered)
      known   : counts already paid for (the length probe's response); these
                are used as-is, never re-queried

    Returns:
      dict symbol -> count, in alphabet order, summing to L. If some symbol
      fills all L positions the remaining entries are left at 0 without
      querying them.
    """
    known = dict(known or {})
    counts = alphabet.zero_counts()
    total = 0

    for s in alphabet:
        if s in known:
            matches = known[s]
        else:
            matches = ask(alphabet.uniform(s, length))
        if not 0 <= matches <= length:
            raise OracleContractError(f"uniform {s!r} x {length} got response {matches}")

        counts[s] = matches
        total += matches
        if total > length:
            raise OracleContractError(f"symbol counts {counts} exceed length {length}")

        # Uniform secret: nothing left to learn.
        if matches == length:
            log.debug("uniform secret", symbol=s, length=length)
            return counts

    if total != length:
        raise OracleContractError(f"symbol counts {counts} sum to {total}, expected {length}")
    log.debug("profiled", counts=counts)
    return counts


def select_baseline(counts: Mapping[str, int], alphabet: Alphabet) -> str:
    """
    Most frequent symbol; ties go to the first symbol in alphabet order.
    """
    best = alphabet.first
    for s in alphabet:
        if counts.get(s, 0) > counts.get(best, 0):
            best = s
    return best
