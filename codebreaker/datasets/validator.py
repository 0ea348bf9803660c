"""
Secrets-file validator.

What this module does:
- Validate a secrets file (one code per line) against an alphabet and the
  maximum secret length.
- Count invalid lines and duplicates; compute SHA-256 of the raw file.
- Build a length histogram of the valid secrets.
- Return a machine-readable dict (for manifests) and provide a pretty one-line summary.

Typical use:
    from codebreaker.datasets import validate_secrets, pretty_summary
    rep = validate_secrets("data/secrets.txt")
    print(pretty_summary(rep))
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Dict, List, Tuple
import hashlib

from codebreaker.engine import Alphabet, DEFAULT_ALPHABET, MAX_SECRET_LENGTH, validate_secret


# -----------------------------
# Dataclasses for structured reports
# -----------------------------

@dataclass
class SecretsReport:
    """Diagnostics and metadata for one secrets file."""
    path: str             # file path (as given)
    exists: bool          # did the file exist on disk?
    alphabet: str         # symbols the secrets were checked against
    max_length: int       # longest accepted secret
    count: int            # number of VALID secrets
    unique_count: int     # unique valid secrets
    invalid_lines: int    # number of invalid lines encountered
    sha256: str           # SHA-256 of raw file bytes (empty string if missing)
    lengths: Dict[int, int] = field(default_factory=dict)  # length -> number of valid secrets
    passed: bool = False
    issues: List[str] = field(default_factory=list)


# -----------------------------
# Helpers
# -----------------------------

def _sha256_file(path: Path) -> str:
    """Compute SHA-256 of a file's raw bytes."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _load_and_check(path: Path, alphabet: Alphabet, max_length: int) -> Tuple[List[str], int]:
    """
    Load secrets from a text file and validate them.

    Rules:
      - one secret per line, surrounding whitespace ignored
      - only alphabet symbols, length 1..max_length
      - empty/whitespace-only lines are INVALID

    Returns:
      (valid_secrets, invalid_count)
    """
    valid: List[str] = []
    invalid = 0

    with path.open("r", encoding="utf-8") as f:
        for raw in f:
            s = raw.strip()
            if validate_secret(s, alphabet, max_length):
                valid.append(s)
            else:
                invalid += 1

    return valid, invalid


# -----------------------------
# Public API
# -----------------------------

def validate_secrets(path: str, alphabet: Alphabet = DEFAULT_ALPHABET,
                     max_length: int = MAX_SECRET_LENGTH) -> Dict:
    """
    Validate a secrets file.

    Returns
    -------
    Dict
        A JSON-serializable dictionary (see SecretsReport schema); `passed`
        requires an existing, non-empty file with no invalid lines.
        Duplicates are reported as an issue but do not fail validation.
    """
    p = Path(path)
    syms = "".join(alphabet)

    if not p.exists():
        rep = SecretsReport(path, False, syms, max_length, 0, 0, 0, "",
                            issues=[f"secrets file not found: {path}"])
        return asdict(rep)

    secrets, invalid = _load_and_check(p, alphabet, max_length)
    unique = set(secrets)

    issues: List[str] = []
    if not secrets:
        issues.append("secrets file contains 0 valid secrets")
    if invalid:
        issues.append(f"secrets has {invalid} invalid line(s)")
    if len(unique) != len(secrets):
        issues.append("secrets contains duplicate lines")

    rep = SecretsReport(
        path=str(p),
        exists=True,
        alphabet=syms,
        max_length=max_length,
        count=len(secrets),
        unique_count=len(unique),
        invalid_lines=invalid,
        sha256=_sha256_file(p),
        lengths=dict(sorted(Counter(len(s) for s in secrets).items())),
        passed=bool(secrets) and invalid == 0,
        issues=issues,
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Produce a compact, human-friendly one-liner for console/docs.

    Example:
        secrets=100 (uniq=100, sha=abc123...) | alphabet=BACXIU | lengths=1..18 | OK
    """
    status = "OK" if report["passed"] else "FAIL"
    lengths = report.get("lengths") or {}
    span = f"{min(lengths)}..{max(lengths)}" if lengths else "-"
    sha = (report.get("sha256") or "")[:12]
    return (
        f"secrets={report['count']} (uniq={report['unique_count']}, sha={sha}) "
        f"| alphabet={report['alphabet']} | lengths={span} | {status}"
    )
