"""
Fixed symbol alphabet for secret codes.

The alphabet is an ordered set of single-character symbols. Order carries no
meaning for scoring; it only makes every tie-break in the solvers
deterministic (first symbol in alphabet order wins).

The symbol -> index table is built once per Alphabet and never mutated.
"""

from __future__ import annotations
from typing import Dict, Iterable, Iterator, Tuple

# Symbol order of the reference game.
DEFAULT_SYMBOLS = "BACXIU"


class Alphabet:
    def __init__(self, symbols: Iterable[str] = DEFAULT_SYMBOLS):
        syms: Tuple[str, ...] = tuple(symbols)
        if not syms:
            raise ValueError("alphabet must contain at least one symbol")
        for s in syms:
            if not isinstance(s, str) or len(s) != 1:
                raise ValueError(f"alphabet symbols must be single characters; got {s!r}")
        if len(set(syms)) != len(syms):
            raise ValueError(f"alphabet symbols must be distinct; got {''.join(syms)!r}")
        self.symbols = syms
        self._index: Dict[str, int] = {s: i for i, s in enumerate(syms)}

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Alphabet) and other.symbols == self.symbols

    def __hash__(self) -> int:
        return hash(self.symbols)

    def __repr__(self) -> str:
        return f"Alphabet({''.join(self.symbols)!r})"

    @property
    def first(self) -> str:
        return self.symbols[0]

    def index(self, symbol: str) -> int:
        """Position of `symbol` in the alphabet (KeyError if absent)."""
        return self._index[symbol]

    def is_word(self, text: str) -> bool:
        """True if every character of `text` is an alphabet symbol."""
        return all(ch in self._index for ch in text)

    def uniform(self, symbol: str, length: int) -> str:
        """Candidate made of `length` copies of `symbol`, e.g. ("B", 4) -> "BBBB"."""
        if symbol not in self._index:
            raise ValueError(f"{symbol!r} is not in {self!r}")
        return symbol * length

    def zero_counts(self) -> Dict[str, int]:
        """Count table with one zero entry per symbol, in alphabet order."""
        return {s: 0 for s in self.symbols}


DEFAULT_ALPHABET = Alphabet(DEFAULT_SYMBOLS)
