"""
Length discovery by linear probing.

Probe len = 1, 2, ... with a uniform candidate of the alphabet's first
symbol. The oracle answers -2 until len equals the secret's length; the first
other answer is a genuine match count for that uniform candidate, which the
frequency profiler reuses instead of asking again.
"""

from __future__ import annotations
from dataclasses import dataclass

import structlog

from codebreaker.engine import Alphabet, WRONG_LENGTH, MAX_SECRET_LENGTH
from codebreaker.engine.errors import LengthNotFound, OracleContractError
from .base import Ask

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LengthProbe:
    length: int   # secret length L
    symbol: str   # probe symbol (alphabet.first)
    matches: int  # response to symbol * L, i.e. the count of `symbol` in the secret


def discover_length(ask: Ask, alphabet: Alphabet, max_length: int = MAX_SECRET_LENGTH) -> LengthProbe:
    """
    Find L in [1, max_length]. Costs exactly L queries.

    Raises:
      LengthNotFound      : every probe answered -2
      OracleContractError : a probe got an answer that is not -2 and not a count
    """
    symbol = alphabet.first
    for n in range(1, max_length + 1):
        res = ask(alphabet.uniform(symbol, n))
        if res == WRONG_LENGTH:
            continue
        if not 0 <= res <= n:
            raise OracleContractError(f"length probe of {n} got response {res}")
        log.debug("length found", length=n, symbol=symbol, matches=res)
        return LengthProbe(length=n, symbol=symbol, matches=res)
    raise LengthNotFound(max_length)
