"""
Position resolution by differential feedback.

Start from the baseline fill (every position = baseline symbol) whose score is
the baseline's count. For each position, substitute one candidate symbol and
compare the new score with the current one:

  - higher : the candidate is right here (commit it)
  - lower  : the substitution broke a baseline match, so baseline is right here
  - equal  : neither is right here; revert and try the next candidate

Candidates are the non-baseline symbols that still have positions left to
claim (remaining count > 0), most remaining first. A position where every
candidate ties keeps the baseline by elimination. Once the unresolved
positions equal the baseline's remaining count, they are all baseline and
cost nothing.

Worst case: (k - 1) queries per position for a k-symbol alphabet.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Mapping

import structlog

from codebreaker.engine import Alphabet
from codebreaker.engine.errors import OracleContractError
from .base import Ask

log = structlog.get_logger(__name__)

ORDERINGS = ("remaining", "alphabet")


def candidate_order(remaining: Mapping[str, int], alphabet: Alphabet, baseline: str,
                    ordering: str = "remaining") -> List[str]:
    """
    Symbols worth trying at a position, best first.

    "remaining": descending remaining count, ties by alphabet order.
    "alphabet" : alphabet order.
    Exhausted symbols and the baseline itself are never candidates.
    """
    pool = [s for s in alphabet if s != baseline and remaining.get(s, 0) > 0]
    if ordering == "remaining":
        pool.sort(key=lambda s: (-remaining[s], alphabet.index(s)))
    return pool


@dataclass
class Resolution:
    candidate: List[str]
    score: int
    remaining: Dict[str, int]
    resolved: List[bool]
    score_trace: List[int] = field(default_factory=list)
    queries: int = 0
    eliminated: int = 0  # positions settled without a query

    @property
    def length(self) -> int:
        return len(self.candidate)

    @property
    def unresolved(self) -> int:
        return self.resolved.count(False)

    @property
    def complete(self) -> bool:
        return self.score == self.length

    def word(self) -> str:
        return "".join(self.candidate)

    def settle(self, pos: int, symbol: str) -> None:
        self.resolved[pos] = True
        self.remaining[symbol] -= 1


class PositionResolver:
    def __init__(self, alphabet: Alphabet, *, ordering: str = "remaining"):
        if ordering not in ORDERINGS:
            raise ValueError(f"ordering must be one of {ORDERINGS}; got {ordering!r}")
        self.alphabet = alphabet
        self.ordering = ordering

    def start(self, baseline: str, counts: Mapping[str, int], length: int) -> Resolution:
        score = counts.get(baseline, 0)
        return Resolution(
            candidate=[baseline] * length,
            score=score,
            remaining=dict(counts),
            resolved=[False] * length,
            score_trace=[score],
        )

    def resolve(self, ask: Ask, baseline: str, counts: Mapping[str, int], length: int) -> Resolution:
        """
        Resolve every position against the baseline fill.

        Returns as soon as the running score reaches `length`. The returned
        score is always the oracle's answer for the returned candidate.
        """
        state = self.start(baseline, counts, length)
        if state.complete:
            return state

        for pos in range(length):
            if state.resolved[pos]:
                continue

            if state.unresolved == state.remaining[baseline]:
                self._fill_baseline(state, baseline)
                break

            self._resolve_position(ask, state, pos, baseline)
            if state.complete:
                break

        log.debug("resolved", candidate=state.word(), score=state.score,
                  queries=state.queries, eliminated=state.eliminated)
        return state

    def _fill_baseline(self, state: Resolution, baseline: str) -> None:
        for j in range(state.length):
            if not state.resolved[j]:
                state.candidate[j] = baseline
                state.settle(j, baseline)
                state.eliminated += 1

    def _resolve_position(self, ask: Ask, state: Resolution, pos: int, baseline: str) -> None:
        for c in candidate_order(state.remaining, self.alphabet, baseline, self.ordering):
            state.candidate[pos] = c
            res = ask(state.word())
            state.queries += 1
            if res < 0 or abs(res - state.score) > 1:
                raise OracleContractError(
                    f"substitution at {pos} moved score {state.score} -> {res}")

            if res > state.score:
                state.score = res
                state.settle(pos, c)
                state.score_trace.append(state.score)
                return

            state.candidate[pos] = baseline
            state.score_trace.append(state.score)
            if res < state.score:
                state.settle(pos, baseline)
                return

        # Every candidate tied: baseline by elimination.
        if state.remaining[baseline] > 0:
            state.settle(pos, baseline)
        else:
            state.resolved[pos] = True
            log.warning("elimination contradicts counts", position=pos, baseline=baseline)
        state.eliminated += 1
