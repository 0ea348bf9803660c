"""
I/O utilities for experiment runs.

Responsibilities:
- write_csv:      flatten per-secret results into a tidy CSV (one row per solve).
- write_manifest: dump a JSON manifest with config, hashes, and metadata.
- timestamp_id:   stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.

Notes:
- Candidates are prefixed with an apostrophe when they start with a
  character spreadsheet apps read as a formula; plain codes like "BACX"
  are written as-is.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List
import csv
import json
import subprocess
import datetime as dt


def _spreadsheet_safe(text: str) -> str:
    """
    Prefix with an apostrophe if a spreadsheet would evaluate the cell.
    Example: "=BAC" -> "'=BAC"
    """
    return "'" + text if text[:1] in ("=", "+", "-", "@") else text


def write_csv(results: List[Dict], path: str) -> str:
    """
    Serialize a batch of solve results to CSV.

    Schema (columns):
      solver, secret, found, success, length, queries, bound, within_bound,
      time_ms, error, guess_1, resp_1, ..., guess_M, resp_M

    M is the longest history in the batch; shorter histories leave the
    trailing columns empty.

    Returns:
      The path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    width = max((len(r.get("history", [])) for r in results), default=0)
    fields = ["solver", "secret", "found", "success", "length", "queries", "bound",
              "within_bound", "time_ms", "error"]
    for i in range(1, width + 1):
        fields += [f"guess_{i}", f"resp_{i}"]

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()

        for r in results:
            row = {
                "solver": r.get("solver_id", "?"),
                "secret": r["secret"],
                "found": r["found"],
                "success": r["success"],
                "length": r["length"],
                "queries": r["queries"],
                "bound": r["bound"],
                "within_bound": r["within_bound"],
                "time_ms": round(float(r["time_ms"]), 3),
                "error": r.get("error", ""),
            }

            hist = r.get("history", [])
            for i in range(1, width + 1):
                if i <= len(hist):
                    g, res = hist[i - 1]
                    row[f"guess_{i}"] = _spreadsheet_safe(g)
                    row[f"resp_{i}"] = res
                else:
                    row[f"guess_{i}"] = ""
                    row[f"resp_{i}"] = ""

            w.writerow(row)

    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Write a JSON manifest with run configuration and dataset summary.

    Typical keys:
      - run_id, git_commit
      - config: CLI args (solver, secrets, sample, seed, outdir)
      - secrets: output of datasets.validate_secrets(...) when read from a file
      - summary: harness.summarize(...) of the batch
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
