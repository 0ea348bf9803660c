"""
Reference oracle: holds a hidden secret and answers exact-match queries.

Solvers only ever see `guess(candidate) -> int`. The secret is kept private
to the oracle; nothing on the solving path reads it.
"""

from __future__ import annotations
from typing import List, Protocol, Tuple

import structlog

from .alphabet import Alphabet, DEFAULT_ALPHABET
from .scoring import feedback
from .validation import MAX_SECRET_LENGTH, validate_secret

log = structlog.get_logger(__name__)


class Oracle(Protocol):
    def guess(self, candidate: str) -> int: ...


class SecretCode:
    """
    Deterministic, truthful oracle for one fixed secret.

    Attributes:
      count   : number of guess() calls so far (every call counts, errors too)
      history : list of (candidate, response) in call order
    """

    def __init__(self, secret: str, alphabet: Alphabet = DEFAULT_ALPHABET,
                 max_length: int = MAX_SECRET_LENGTH):
        if not validate_secret(secret, alphabet, max_length):
            raise ValueError(
                f"secret must be 1..{max_length} symbols from {''.join(alphabet)}; got {secret!r}")
        self._secret = secret
        self.alphabet = alphabet
        self.count = 0
        self.history: List[Tuple[str, int]] = []

    def guess(self, candidate: str) -> int:
        """
        Score `candidate`: -1 invalid symbol, -2 wrong length, else exact matches.
        """
        self.count += 1
        res = feedback(candidate, self._secret, self.alphabet)
        self.history.append((candidate, res))
        if res == len(self._secret):
            log.info("secret found", guesses=self.count)
        return res

    def reset(self) -> None:
        """Forget all queries (same secret)."""
        self.count = 0
        self.history = []
