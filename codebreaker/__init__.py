from .engine import Alphabet, DEFAULT_ALPHABET, SecretCode
from .engine.errors import (
    SolveError, LengthNotFound, OracleContractError, InvalidSymbol, FallbackExhausted,
)
from .solvers import SolverConfig, solve, create_solver, get_solver_ids

__all__ = [
    "Alphabet", "DEFAULT_ALPHABET", "SecretCode",
    "SolveError", "LengthNotFound", "OracleContractError", "InvalidSymbol", "FallbackExhausted",
    "SolverConfig", "solve", "create_solver", "get_solver_ids",
]
