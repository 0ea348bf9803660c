"""
Exact-position scoring for a single (candidate, secret) pair.

Response codes (the oracle contract):
  - -1 : candidate contains a symbol outside the alphabet
         (checked first, so it wins over a length mismatch)
  - -2 : candidate length differs from the secret's length
  - n  : number of positions where candidate and secret agree (n >= 0)

Only positions are compared; a symbol present elsewhere in the secret earns
nothing. This is what makes one-symbol substitutions informative: changing a
single position moves the score by -1, 0 or +1.
"""

from __future__ import annotations
from .alphabet import Alphabet

INVALID_SYMBOL = -1
WRONG_LENGTH = -2


def exact_matches(candidate: str, secret: str) -> int:
    """
    Count positions where `candidate` equals `secret`.

    Preconditions:
      - len(candidate) == len(secret)

    Examples:
      exact_matches("BBBB", "BACB") -> 2
      exact_matches("ACBX", "BACB") -> 0
    """
    assert len(candidate) == len(secret), "candidate and secret must be the same length"
    return sum(1 for c, s in zip(candidate, secret) if c == s)


def feedback(candidate: str, secret: str, alphabet: Alphabet) -> int:
    """
    Full oracle response for `candidate`, including the negative error codes.
    """
    if not alphabet.is_word(candidate):
        return INVALID_SYMBOL
    if len(candidate) != len(secret):
        return WRONG_LENGTH
    return exact_matches(candidate, secret)
