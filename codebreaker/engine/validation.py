"""
Secret validation.

A secret is acceptable iff:
  - it is a string
  - it has length 1..max_length
  - every character is a symbol of the alphabet

The oracle validates its secret once at construction; the dataset validator
uses the same rule line by line. The solvers never call this: they learn
the length from the oracle and build candidates from the alphabet.
"""

from .alphabet import Alphabet

# Longest secret the length probe will ever look for.
MAX_SECRET_LENGTH = 18


def validate_secret(secret: object, alphabet: Alphabet, max_length: int = MAX_SECRET_LENGTH) -> bool:
    """
    Return True if `secret` is a valid secret per the rules above.
    """
    if not isinstance(secret, str):
        return False
    if not 1 <= len(secret) <= max_length:
        return False
    return alphabet.is_word(secret)
