"""
Failure taxonomy of a solve.

Only true impossibilities surface here. An undecided position is not an
error: the resolver settles it by elimination.
"""


class SolveError(RuntimeError):
    """Base class: the solver could not return a verified secret."""


class LengthNotFound(SolveError):
    """No probed length in [1, max_length] was accepted by the oracle."""

    def __init__(self, max_length: int):
        super().__init__(f"secret length not found in [1, {max_length}]")
        self.max_length = max_length


class OracleContractError(SolveError):
    """The oracle answered something its contract rules out."""


class InvalidSymbol(OracleContractError):
    """The oracle rejected a candidate symbol (-1). Candidates are built from
    the alphabet, so this points at an alphabet mismatch or a bug."""

    def __init__(self, candidate: str):
        super().__init__(f"oracle rejected candidate {candidate!r} as containing an invalid symbol")
        self.candidate = candidate


class FallbackExhausted(SolveError):
    """The arrangement search spent its query budget without a full match."""

    def __init__(self, attempts: int, reason: str = "budget exhausted"):
        super().__init__(f"arrangement fallback failed after {attempts} attempt(s): {reason}")
        self.attempts = attempts
        self.reason = reason
