# apps/cli/run_multi.py
"""
Run multiple solvers in one shot over the same secrets with shared progress.

Writes per-solver outputs to: <outdir>/<solver_id>/run_<timestamp>.csv + _manifest.json
and prints one summary line per solver.
"""

from __future__ import annotations
import argparse, sys, time
from pathlib import Path
from typing import Dict, List, Tuple

from tqdm import tqdm

from codebreaker.datasets import generate_secrets, load_secrets, pretty_summary, validate_secrets
from codebreaker.engine import DEFAULT_ALPHABET, MAX_SECRET_LENGTH
from codebreaker.harness import pretty_stats, run_case, summarize
from codebreaker.harness.io import write_csv, write_manifest, timestamp_id, git_commit_or_unknown
from codebreaker.logs import configure_logging
from codebreaker.solvers import create_solver, get_solver_ids


def _progress_mode(mode: str) -> str:
    if mode == "auto":
        return "bar" if sys.stderr.isatty() else "plain"
    return mode


def _run_one_solver(solver_id: str, cases: List[str], *, outdir: Path, progress: str,
                    secrets_report: Dict | None) -> Tuple[str, str, Dict]:
    solver = create_solver(solver_id)
    results = []
    total = len(cases)
    mode = _progress_mode(progress)
    iterator = tqdm(cases, ncols=80, desc=f"{solver_id}", unit="code") if mode == "bar" else cases
    start = time.time()
    last_print = 0.0

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
                    f"\r[{solver_id}] {idx}/{total} {pct:5.1f}% | elapsed {elapsed:6.1f}s | ETA {remaining:5.1f}s")
                sys.stderr.flush()
                last_print = now
    if mode == "plain":
        sys.stderr.write("\n")
        sys.stderr.flush()

    # write outputs under <outdir>/<solver_id>/
    stats = summarize(results)
    run_id = timestamp_id()
    sdir = outdir / solver_id
    sdir.mkdir(parents=True, exist_ok=True)
    csv_path = sdir / f"run_{run_id}.csv"
    manifest_path = sdir / f"run_{run_id}_manifest.json"

    write_csv(results, str(csv_path))
    manifest = {
        "run_id": run_id,
        "git_commit": git_commit_or_unknown(),
        "config": {"solver": solver_id, "num_cases": len(cases)},
        "secrets": secrets_report,
        "summary": stats,
        "solver_id": solver.id,
    }
    write_manifest(manifest, str(manifest_path))
    return str(csv_path), str(manifest_path), stats


def main():
    registered = get_solver_ids()
    ap = argparse.ArgumentParser(description="codebreaker — run many solvers at once")
    ap.add_argument("--solvers", nargs="+", required=True,
                    help=f"list of solver ids or 'ALL'. Registered: {', '.join(registered)}")
    ap.add_argument("--exclude", nargs="*", default=[],
                    help="solver ids to skip (only if --solvers ALL)")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--secrets")
    src.add_argument("--sample", type=int)
    ap.add_argument("--seed", type=int, default=123)
    ap.add_argument("--min-length", type=int, default=1)
    ap.add_argument("--max-length", type=int, default=MAX_SECRET_LENGTH)
    ap.add_argument("--outdir", default="reports/batch")
    ap.add_argument("--progress", choices=["auto", "bar", "plain", "off"], default="auto")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args()

    configure_logging(args.log_level)

    # 1) shared cases: validated file or seeded sample
    rep = None
    if args.secrets:
        rep = validate_secrets(args.secrets, DEFAULT_ALPHABET)
        print(pretty_summary(rep))
        if not rep["passed"]:
            raise SystemExit("Validation failed — fix the secrets file before running.")
        cases = load_secrets(args.secrets)
    else:
        cases = generate_secrets(args.sample, alphabet=DEFAULT_ALPHABET,
                                 min_length=args.min_length, max_length=args.max_length,
                                 seed=args.seed)

    # 2) expand solvers
    if len(args.solvers) == 1 and args.solvers[0].lower() == "all":
        todo = [s for s in registered if s not in set(args.exclude)]
    else:
        todo = args.solvers
        missing = [s for s in todo if s not in registered]
        if missing:
            raise SystemExit(f"Unknown solver ids: {missing}. Registered: {registered}")

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    # 3) run each solver sequentially (shared cases) with progress
    for sid in todo:
        if args.progress != "off":
            print(f"\n=== Running {sid} on {len(cases)} secrets ===")
        csv_path, manifest_path, stats = _run_one_solver(
            sid, cases, outdir=outdir, progress=args.progress, secrets_report=rep
        )
        print(f"{sid}: {pretty_stats(stats)}")
        print(f"Wrote: {csv_path}")
        print(f"Wrote: {manifest_path}")


if __name__ == "__main__":
    main()
