from .alphabet import Alphabet, DEFAULT_ALPHABET
from .scoring import exact_matches, feedback, INVALID_SYMBOL, WRONG_LENGTH
from .constraints import is_consistent
from .validation import validate_secret, MAX_SECRET_LENGTH
from .oracle import Oracle, SecretCode

__all__ = [
    "Alphabet", "DEFAULT_ALPHABET",
    "exact_matches", "feedback", "INVALID_SYMBOL", "WRONG_LENGTH",
    "is_consistent",
    "validate_secret", "MAX_SECRET_LENGTH",
    "Oracle", "SecretCode",
]
