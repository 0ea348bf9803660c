"""
Experiment harness core primitives.

- run_case:    solve one secret with a given solver against a fresh oracle.
- run_batch:   run many secrets in sequence (optionally a sample prefix).
- query_bound: worst-case query count a correct solve must stay within.
- summarize:   aggregate a batch into success rate and query statistics.

These functions are intentionally UI-agnostic so they can be reused by
a CLI app, a notebook, or a test without changes.
"""

from __future__ import annotations
import time
from typing import Dict, Iterable, List

import numpy as np

from codebreaker.engine import Alphabet, DEFAULT_ALPHABET, SecretCode
from codebreaker.engine.errors import SolveError
from codebreaker.solvers.arrangement import FALLBACK_CAP


def query_bound(length: int, k: int, cap: int = FALLBACK_CAP) -> int:
    """
    L probes + k profiling + k*L resolution + fallback cap.
    """
    return length + k + k * length + cap


def run_case(
        solver,
        secret: str,
        *,
        alphabet: Alphabet = DEFAULT_ALPHABET,
) -> Dict:
    """
    Execute one solve until the solver returns or gives up.

    Args:
        solver:   an object implementing BaseSolver with solve(oracle)
        secret:   the hidden code for this case
        alphabet: symbols shared by the oracle and the solver

    Returns:
        dict with keys:
            secret, found, success (bool), length, queries (int), bound,
            within_bound (bool), time_ms (float),
            history (list[(candidate, response)]), error (str, "" if none)
    """
    oracle = SecretCode(secret, alphabet)
    solver.reset(alphabet=alphabet)

    found = ""
    error = ""
    t0 = time.perf_counter()
    try:
        found = solver.solve(oracle)
    except SolveError as e:
        error = f"{type(e).__name__}: {e}"
    dt = (time.perf_counter() - t0) * 1000.0

    cap = getattr(getattr(solver, "config", None), "fallback_cap", FALLBACK_CAP)
    bound = query_bound(len(secret), len(alphabet), cap)
    return {
        "solver_id": solver.id,
        "secret": secret,
        "found": found,
        "success": found == secret,
        "length": len(secret),
        "queries": oracle.count,
        "bound": bound,
        "within_bound": oracle.count <= bound,
        "time_ms": dt,
        "history": list(oracle.history),
        "error": error,
    }


def run_batch(
        solver,
        secrets: Iterable[str],
        *,
        alphabet: Alphabet = DEFAULT_ALPHABET,
        sample: int | None = None,
) -> List[Dict]:
    """
    Run many cases back-to-back. If 'sample' is provided, only the first K
    secrets are used to speed up quick experiments.
    """
    pool = list(secrets)
    if sample is not None:
        pool = pool[:sample]
    return [run_case(solver, s, alphabet=alphabet) for s in pool]


def summarize(results: List[Dict]) -> Dict:
    """
    Success rate and query-count statistics over a batch.
    """
    if not results:
        return {"cases": 0, "solved": 0, "success_rate": 0.0, "within_bound": 0,
                "queries_mean": 0.0, "queries_median": 0.0, "queries_p95": 0.0,
                "queries_max": 0, "time_ms_mean": 0.0}

    q = np.array([r["queries"] for r in results], dtype=float)
    ok = np.array([bool(r["success"]) for r in results])
    t = np.array([float(r["time_ms"]) for r in results])
    return {
        "cases": len(results),
        "solved": int(ok.sum()),
        "success_rate": float(ok.mean()),
        "within_bound": int(sum(1 for r in results if r["within_bound"])),
        "queries_mean": round(float(q.mean()), 3),
        "queries_median": float(np.median(q)),
        "queries_p95": float(np.percentile(q, 95)),
        "queries_max": int(q.max()),
        "time_ms_mean": round(float(t.mean()), 3),
    }


def pretty_stats(stats: Dict) -> str:
    """
    One-liner for console output, e.g.
        cases=100 | solved=100 (100.0%) | queries mean=31.2 median=31 p95=48 max=55
    """
    return (
        f"cases={stats['cases']} | solved={stats['solved']} ({100.0 * stats['success_rate']:.1f}%) "
        f"| queries mean={stats['queries_mean']:g} median={stats['queries_median']:g} "
        f"p95={stats['queries_p95']:g} max={stats['queries_max']}"
    )
