# apps/cli/run.py
"""
CLI entry point for running codebreaker solves.

Two modes:
  - single: --secret CODE
      solve one code against a fresh oracle and print what was found,
      the number of guesses and the time taken.
  - batch:  --secrets FILE  or  --sample N
      1) validate the secrets file (or draw N random secrets by seed)
      2) run every secret with a live progress indicator
      3) write CSV (per-secret results + query history columns) and a JSON
         manifest (config, secrets hash, summary, git commit)
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
import time
from pathlib import Path

from tqdm import tqdm

from codebreaker.datasets import generate_secrets, load_secrets, pretty_summary, validate_secrets
from codebreaker.engine import DEFAULT_ALPHABET, MAX_SECRET_LENGTH, SecretCode
from codebreaker.engine.errors import SolveError
from codebreaker.harness import pretty_stats, run_case, summarize
from codebreaker.harness.io import git_commit_or_unknown, timestamp_id, write_csv, write_manifest
from codebreaker.logs import configure_logging
from codebreaker.solvers import REGISTRY, create_solver, get_solver_ids


def _build_solver(solver_id: str, fallback_cap: int | None):
    """
    Instantiate by id; --fallback-cap overrides only the cap of the solver's preset.
    """
    if solver_id not in REGISTRY:
        raise SystemExit(f"Unknown solver id: {solver_id}. Registered: {get_solver_ids()}")
    if fallback_cap is None:
        return create_solver(solver_id)
    base = REGISTRY[solver_id].DEFAULT_CONFIG
    return create_solver(solver_id, dataclasses.replace(base, fallback_cap=fallback_cap))


def _solve_one(solver, secret: str) -> int:
    """
    Single-secret mode. Returns a process exit code.
    """
    oracle = SecretCode(secret, DEFAULT_ALPHABET)
    solver.reset(alphabet=DEFAULT_ALPHABET)
    t0 = time.perf_counter()
    try:
        found = solver.solve(oracle)
    except SolveError as e:
        print(f"Failed: {e}")
        return 1
    dt = (time.perf_counter() - t0) * 1000.0
    print(f"I found the secret code. It is {found}")
    print(f"Found length: {len(found)}")
    print(f"Number of guesses: {oracle.count}")
    print(f"Time taken: {dt:.1f} ms")
    return 0 if found == secret else 1


def main():
    """
    Parse CLI args, pick the mode, run, and write outputs.
    """
    solver_choices = ", ".join(get_solver_ids())

    ap = argparse.ArgumentParser(description="codebreaker — deduce secret codes from match counts")
    ap.add_argument("--solver", default="differential",
                    help=f"solver id (one of: {solver_choices})")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--secret", help="solve a single secret code")
    src.add_argument("--secrets", help="path to a secrets file (one code per line)")
    src.add_argument("--sample", type=int, help="solve N random secrets drawn with --seed")
    ap.add_argument("--seed", type=int, default=123, help="RNG seed for --sample (reproducibility)")
    ap.add_argument("--min-length", type=int, default=1, help="shortest random secret")
    ap.add_argument("--max-length", type=int, default=MAX_SECRET_LENGTH, help="longest random secret")
    ap.add_argument("--fallback-cap", type=int,
                    help="query budget of the arrangement fallback (default: solver preset)")
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument(
        "--progress",
        choices=["auto", "bar", "plain", "off"],
        default="auto",
        help="Show run progress (auto=bar on a terminal, else plain text)."
    )
    ap.add_argument("--log-level", default="WARNING", help="structlog level (DEBUG, INFO, ...)")
    args = ap.parse_args()

    configure_logging(args.log_level)
    solver = _build_solver(args.solver, args.fallback_cap)

    # 1) Single secret: solve, report, done
    if args.secret is not None:
        try:
            code = _solve_one(solver, args.secret)
        except ValueError as e:
            raise SystemExit(str(e))
        raise SystemExit(code)

    # 2) Batch: validate the file or draw random secrets
    rep = None
    if args.secrets:
        rep = validate_secrets(args.secrets, DEFAULT_ALPHABET)
        print(pretty_summary(rep))
        if not rep["passed"]:
            print("Validation failed — fix the secrets file before running.")
            raise SystemExit(2)
        cases = load_secrets(args.secrets)
    else:
        cases = generate_secrets(args.sample, alphabet=DEFAULT_ALPHABET,
                                 min_length=args.min_length, max_length=args.max_length,
                                 seed=args.seed)

    total = len(cases)

    # 3) Progress mode
    mode = args.progress
    if mode == "auto":
        mode = "bar" if sys.stderr.isatty() else "plain"

    results = []
    start = time.time()
    last_print = 0.0

    iterator = tqdm(cases, ncols=80, desc="Solving", unit="code") if mode == "bar" else cases

    # 4) Run batch with live progress
    for idx, secret in enumerate(iterator, 1):
        results.append(run_case(solver, secret, alphabet=DEFAULT_ALPHABET))

        if mode == "plain":
            now = time.time()
            if (now - last_print >= 1.0) or (idx == total):
                elapsed = now - start
                rate = (idx / elapsed) if elapsed > 0 else 0.0
                remaining = (total - idx) / rate if rate > 0 else 0.0
                pct = 100.0 * idx / max(1, total)
                sys.stderr.write(
                    f"\r[{idx}/{total}] {pct:5.1f}% | elapsed {elapsed:6.1f}s | ETA {remaining:5.1f}s"
                )
                sys.stderr.flush()
                last_print = now

    if mode == "plain":
        sys.stderr.write("\n"); sys.stderr.flush()

    # 5) Write outputs (CSV + manifest)
    stats = summarize(results)
    run_id = timestamp_id()
    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    csv_path = outdir / f"run_{run_id}.csv"
    manifest_path = outdir / f"run_{run_id}_manifest.json"

    write_csv(results, str(csv_path))
    manifest = {
        "run_id": run_id,
        "git_commit": git_commit_or_unknown(),
        "config": vars(args),
        "solver_config": dataclasses.asdict(solver.config),
        "secrets": rep,
        "summary": stats,
        "solver_id": solver.id,
    }
    write_manifest(manifest, str(manifest_path))

    print(pretty_stats(stats))
    print(f"Wrote: {csv_path}")
    print(f"Wrote: {manifest_path}")


if __name__ == "__main__":
    main()
