"""
Arrangement fallback: bounded search over orderings of a known multiset.

When the symbol counts are known but their placement is not settled, try
distinct permutations of the multiset (alphabet order, no duplicates) until
one scores L. Every answer is recorded, and partial arrangements that can no
longer agree with a recorded score are pruned, so each query goes to a
still-possible secret.

The search is an explicit stack, not recursion. Two caps bound it:
  - budget    : oracle queries (the QueryBudget), never reset mid-search
  - max_nodes : prefix extensions visited, so a long multiset with a tight
                history cannot stall between queries
Hitting either, or running out of consistent arrangements, raises
FallbackExhausted.
"""

from __future__ import annotations
from typing import Iterable, List, Mapping, Tuple

import structlog

from codebreaker.engine import Alphabet
from codebreaker.engine.constraints import is_consistent, prefix_feasible, usable_history
from codebreaker.engine.errors import FallbackExhausted
from .base import Ask

log = structlog.get_logger(__name__)

FALLBACK_CAP = 20
MAX_NODES = 50_000


def arrange(ask: Ask, alphabet: Alphabet, counts: Mapping[str, int], *,
            budget: int = FALLBACK_CAP,
            history: Iterable[Tuple[str, int]] = (),
            max_nodes: int = MAX_NODES) -> str:
    """
    Find the ordering of `counts` that the oracle scores as a full match.

    Args:
      ask      : bound oracle query
      alphabet : symbol order used to enumerate permutations
      counts   : symbol -> multiplicity; sums to the secret length
      budget   : maximum number of oracle queries to spend (>= 1)
      history  : (candidate, score) pairs already known for this secret
      max_nodes: maximum number of prefix extensions to visit

    Returns:
      The arrangement that scored a full match.
    """
    length = sum(counts.values())
    if length < 1:
        raise ValueError("counts must describe at least one position")
    if budget < 1:
        raise ValueError(f"budget must be >= 1; got {budget}")

    hist: List[Tuple[str, int]] = usable_history(history, length)
    remaining = {s: counts.get(s, 0) for s in alphabet}
    symbols = list(alphabet)

    prefix: List[str] = []
    cursor: List[int] = [0]  # cursor[d] = next symbol index to try at depth d
    attempts = 0
    nodes = 0

    while cursor:
        depth = len(cursor) - 1

        if depth == length:
            word = "".join(prefix)
            res = ask(word)
            attempts += 1
            budget -= 1
            if res == length:
                log.debug("arranged", word=word, attempts=attempts, nodes=nodes)
                return word
            hist.append((word, res))
            if budget == 0:
                raise FallbackExhausted(attempts)
            cursor.pop()
            remaining[prefix.pop()] += 1
            continue

        i = cursor[depth]
        if i >= len(symbols):
            cursor.pop()
            if prefix:
                remaining[prefix.pop()] += 1
            continue
        cursor[depth] = i + 1

        s = symbols[i]
        if remaining[s] == 0:
            continue

        nodes += 1
        if nodes > max_nodes:
            raise FallbackExhausted(attempts, f"node limit {max_nodes} reached")

        prefix.append(s)
        remaining[s] -= 1
        if len(prefix) == length:
            ok = is_consistent("".join(prefix), hist)
        else:
            ok = prefix_feasible(prefix, length, hist)
        if not ok:
            prefix.pop()
            remaining[s] += 1
            continue
        cursor.append(0)

    raise FallbackExhausted(attempts, "no consistent arrangement left")
