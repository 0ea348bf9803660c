from __future__ import annotations
from typing import Callable, Dict, List, Tuple, Type

import structlog

from codebreaker.engine import Alphabet, DEFAULT_ALPHABET, INVALID_SYMBOL, Oracle
from codebreaker.engine.errors import InvalidSymbol

log = structlog.get_logger(__name__)

# A bound oracle query: candidate -> response.
Ask = Callable[[str], int]

# ---- Global solver registry ----
REGISTRY: Dict[str, Type["BaseSolver"]] = {}


def register(cls: Type["BaseSolver"]) -> Type["BaseSolver"]:
    """
    Decorator: @register on a solver class adds it to REGISTRY by its `id`.
    """
    sid = getattr(cls, "id", None)
    if not sid:
        raise ValueError(f"{cls.__name__} must define a non-empty `id`")
    if sid in REGISTRY:
        raise ValueError(f"Duplicate solver id: {sid}")
    REGISTRY[sid] = cls
    return cls


# ---- Base class that solvers inherit ----
class BaseSolver:
    id = "base"
    name = "Base"
    version = "0.0.0"

    def __init__(self):
        self.alphabet: Alphabet = DEFAULT_ALPHABET
        self.queries: int = 0
        self.history: List[Tuple[str, int]] = []

    def reset(self, *, alphabet: Alphabet | None = None) -> None:
        """Clear per-solve bookkeeping; optionally switch alphabet."""
        if alphabet is not None:
            self.alphabet = alphabet
        self.queries = 0
        self.history = []

    def ask(self, oracle: Oracle, candidate: str) -> int:
        """
        Submit one candidate. Every oracle call in a solve goes through here so
        the solver's own query count and history stay exact.
        """
        res = oracle.guess(candidate)
        self.queries += 1
        self.history.append((candidate, res))
        log.debug("query", n=self.queries, candidate=candidate, response=res)
        if res == INVALID_SYMBOL:
            raise InvalidSymbol(candidate)
        return res

    def bind(self, oracle: Oracle) -> Ask:
        return lambda candidate: self.ask(oracle, candidate)

    def solve(self, oracle: Oracle) -> str:
        raise NotImplementedError("Override in subclass")
