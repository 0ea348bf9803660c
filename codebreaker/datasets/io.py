from __future__ import annotations
import random
from pathlib import Path
from typing import Iterable, List

from codebreaker.engine import Alphabet, DEFAULT_ALPHABET, MAX_SECRET_LENGTH


def read_lines(p: Path | str) -> List[str]:
    """
    Read a UTF-8 text file into a list of lines, stripping trailing CR/LF.
    Raises FileNotFoundError if the path doesn't exist.
    """
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(p)
    return [ln.rstrip("\r\n") for ln in p.read_text(encoding="utf-8").splitlines()]


def write_lines(lines: Iterable[str], p: Path | str) -> str:
    """
    Write lines to a UTF-8 text file, ensuring a trailing newline.
    Returns the string path written.
    """
    p = Path(p)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(p)


def load_secrets(p: Path | str) -> List[str]:
    """
    Secrets file -> list of codes (surrounding whitespace and blank lines dropped).
    Case is kept: symbols are compared exactly.
    """
    return [ln.strip() for ln in read_lines(p) if ln.strip()]


def generate_secrets(
        n: int,
        *,
        alphabet: Alphabet = DEFAULT_ALPHABET,
        min_length: int = 1,
        max_length: int = MAX_SECRET_LENGTH,
        seed: int | None = None,
) -> List[str]:
    """
    Draw `n` random secrets (uniform length in [min_length, max_length],
    uniform symbol per position). Same seed -> same list.
    """
    if not 1 <= min_length <= max_length:
        raise ValueError(f"need 1 <= min_length <= max_length; got {min_length}, {max_length}")
    rng = random.Random(seed)
    symbols = list(alphabet)
    out: List[str] = []
    for _ in range(n):
        length = rng.randint(min_length, max_length)
        out.append("".join(rng.choice(symbols) for _ in range(length)))
    return out
