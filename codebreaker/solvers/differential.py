"""
Differential-feedback solver (one class, several registered presets).

Pipeline:
  1) length discovery     : uniform probes of the first symbol, 1..18
  2) frequency profiling  : one uniform query per symbol (probe reused)
  3) baseline selection   : fill every position with the chosen baseline
  4) position resolution  : single-symbol substitutions, read the score delta
  5) verification         : one extra query only if the score is not yet L;
                            on mismatch, arrange the profiled multiset instead

Knobs (SolverConfig):
  - baseline    : "most_frequent" | "first_symbol"
  - ordering    : "remaining" | "alphabet"       (candidate order per position)
  - fallback    : "on_mismatch" | "multiset_first"
  - fallback_cap: query budget of the arrangement fallback
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict

import structlog

from codebreaker.engine import Alphabet, DEFAULT_ALPHABET, MAX_SECRET_LENGTH, Oracle
from .arrangement import FALLBACK_CAP, MAX_NODES, arrange
from .base import Ask, BaseSolver, register
from .length import discover_length
from .profile import profile_frequencies, select_baseline
from .resolver import ORDERINGS, PositionResolver, Resolution

log = structlog.get_logger(__name__)

BASELINES = ("most_frequent", "first_symbol")
FALLBACKS = ("on_mismatch", "multiset_first")


@dataclass(frozen=True)
class SolverConfig:
    baseline: str = "most_frequent"
    ordering: str = "remaining"
    fallback: str = "on_mismatch"
    fallback_cap: int = FALLBACK_CAP

    def __post_init__(self):
        if self.baseline not in BASELINES:
            raise ValueError(f"baseline must be one of {BASELINES}; got {self.baseline!r}")
        if self.ordering not in ORDERINGS:
            raise ValueError(f"ordering must be one of {ORDERINGS}; got {self.ordering!r}")
        if self.fallback not in FALLBACKS:
            raise ValueError(f"fallback must be one of {FALLBACKS}; got {self.fallback!r}")
        if self.fallback_cap < 1:
            raise ValueError(f"fallback_cap must be >= 1; got {self.fallback_cap}")


@register
class DifferentialSolver(BaseSolver):
    id = "differential"
    name = "Differential Feedback"
    version = "1.0.0"

    MAX_LENGTH = MAX_SECRET_LENGTH
    MAX_NODES = MAX_NODES
    DEFAULT_CONFIG = SolverConfig()

    def __init__(self, config: SolverConfig | None = None):
        super().__init__()
        self.config = config or self.DEFAULT_CONFIG
        self.counts: Dict[str, int] = {}
        self.baseline: str | None = None
        self.resolution: Resolution | None = None

    def reset(self, *, alphabet: Alphabet | None = None) -> None:
        super().reset(alphabet=alphabet)
        self.counts = {}
        self.baseline = None
        self.resolution = None

    def _pick_baseline(self, counts: Dict[str, int]) -> str:
        if self.config.baseline == "first_symbol":
            return self.alphabet.first
        return select_baseline(counts, self.alphabet)

    def _arrange(self, ask: Ask, counts: Dict[str, int]) -> str:
        emit = log.info if self.config.fallback == "multiset_first" else log.warning
        emit("arrangement fallback", counts=counts, cap=self.config.fallback_cap,
             queries=self.queries)
        return arrange(ask, self.alphabet, counts, budget=self.config.fallback_cap,
                       history=list(self.history), max_nodes=self.MAX_NODES)

    def solve(self, oracle: Oracle) -> str:
        """
        Deduce the oracle's secret. Raises a SolveError subclass on failure.
        """
        self.reset()
        ask = self.bind(oracle)

        probe = discover_length(ask, self.alphabet, self.MAX_LENGTH)
        length = probe.length
        counts = profile_frequencies(ask, self.alphabet, length,
                                     known={probe.symbol: probe.matches})
        self.counts = dict(counts)
        log.info("profiled", solver=self.id, length=length, counts=counts, queries=self.queries)

        # A uniform secret was already matched by its own profiling query.
        for s, n in counts.items():
            if n == length:
                return self.alphabet.uniform(s, length)

        if self.config.fallback == "multiset_first":
            return self._arrange(ask, counts)

        self.baseline = self._pick_baseline(counts)
        resolver = PositionResolver(self.alphabet, ordering=self.config.ordering)
        state = resolver.resolve(ask, self.baseline, counts, length)
        self.resolution = state
        word = state.word()
        if state.complete:
            log.info("solved", solver=self.id, word=word, queries=self.queries)
            return word

        if ask(word) == length:
            return word
        return self._arrange(ask, counts)


@register
class AlphabetOrderSolver(DifferentialSolver):
    """Baseline = the length-probe symbol; candidates in plain alphabet order."""
    id = "differential_alpha"
    name = "Differential (probe baseline, alphabet order)"
    version = "1.0.0"

    DEFAULT_CONFIG = SolverConfig(baseline="first_symbol", ordering="alphabet")


@register
class ArrangementSolver(DifferentialSolver):
    """
    Profile the multiset, then search its arrangements directly.

    No per-position resolution, so only the fallback cap bounds the search.
    Short codes are solved reliably; codes beyond roughly 8 symbols often
    exhaust the default 20-query cap and end in FallbackExhausted (about a
    third of uniformly drawn 1..18 secrets). Raise `fallback_cap` (or
    --fallback-cap) when comparing it against the differential presets.
    """
    id = "arrangement"
    name = "Multiset Arrangement"
    version = "1.0.0"

    DEFAULT_CONFIG = SolverConfig(fallback="multiset_first")


def solve(oracle: Oracle, alphabet: Alphabet = DEFAULT_ALPHABET,
          config: SolverConfig | None = None) -> str:
    """
    Deduce the secret behind `oracle` with the default differential solver.
    """
    solver = DifferentialSolver(config)
    solver.reset(alphabet=alphabet)
    return solver.solve(oracle)
