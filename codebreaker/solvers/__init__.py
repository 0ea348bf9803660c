from __future__ import annotations
from typing import List
from .base import BaseSolver, REGISTRY, register

from . import differential  # noqa: F401
from .differential import SolverConfig, solve


def create_solver(solver_id: str, config: SolverConfig | None = None) -> BaseSolver:
    """
    Factory: instantiate a registered solver by id (optionally overriding its config).
    """
    try:
        cls = REGISTRY[solver_id]
    except KeyError as e:
        raise ValueError(
            f"Unknown solver id: {solver_id}. Available: {sorted(REGISTRY.keys())}") from e
    return cls(config) if config is not None else cls()


def get_solver_ids() -> List[str]:
    """
    Return all registered solver ids (sorted for stable CLI help).
    """
    return sorted(REGISTRY.keys())


__all__ = ["BaseSolver", "REGISTRY", "register", "SolverConfig", "solve",
           "create_solver", "get_solver_ids"]
