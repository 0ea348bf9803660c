import pytest
from codebreaker.engine import DEFAULT_ALPHABET, SecretCode
from codebreaker.engine.errors import FallbackExhausted, LengthNotFound, OracleContractError
from codebreaker.solvers import create_solver, SolverConfig
from codebreaker.solvers.arrangement import arrange
from codebreaker.solvers.length import discover_length
from codebreaker.solvers.profile import profile_frequencies, select_baseline
from codebreaker.solvers.resolver import PositionResolver, candidate_order


def _scripted(responses):
    """ask() that replays fixed responses and records what it was asked."""
    it = iter(responses)
    asked = []

    def ask(candidate):
        asked.append(candidate)
        return next(it)

    return ask, asked


# --- length discovery ---

def test_discover_length_reports_probe_matches():
    oracle = SecretCode("ABIXCIABCX")
    probe = discover_length(oracle.guess, DEFAULT_ALPHABET)
    assert (probe.length, probe.symbol, probe.matches) == (10, "B", 2)
    assert oracle.count == 10


def test_discover_length_respects_max_length():
    oracle = SecretCode("BACXI")
    with pytest.raises(LengthNotFound):
        discover_length(oracle.guess, DEFAULT_ALPHABET, max_length=4)
    assert oracle.count == 4


def test_discover_length_rejects_impossible_count():
    ask, _ = _scripted([-2, 5])
    with pytest.raises(OracleContractError):
        discover_length(ask, DEFAULT_ALPHABET)


# --- frequency profiling ---

def test_profile_reuses_known_count():
    oracle = SecretCode("ABIXCIABCX")
    counts = profile_frequencies(oracle.guess, DEFAULT_ALPHABET, 10, known={"B": 2})
    assert counts == {"B": 2, "A": 2, "C": 2, "X": 2, "I": 2, "U": 0}
    assert oracle.count == 5
    assert "B" * 10 not in [g for g, _ in oracle.history]


def test_profile_short_circuits_on_uniform_secret():
    oracle = SecretCode("CCCCC")
    counts = profile_frequencies(oracle.guess, DEFAULT_ALPHABET, 5)
    assert counts == {"B": 0, "A": 0, "C": 5, "X": 0, "I": 0, "U": 0}
    assert [g for g, _ in oracle.history] == ["BBBBB", "AAAAA", "CCCCC"]


def test_profile_rejects_counts_over_length():
    ask, _ = _scripted([2, 2])
    with pytest.raises(OracleContractError):
        profile_frequencies(ask, DEFAULT_ALPHABET, 3)


# --- baseline and candidate order ---

@pytest.mark.parametrize("counts,expected", [
    ({"B": 2, "A": 2, "C": 2, "X": 2, "I": 2, "U": 0}, "B"),
    ({"B": 0, "A": 1, "C": 3, "X": 3, "I": 0, "U": 0}, "C"),
    ({"B": 0, "A": 0, "C": 0, "X": 0, "I": 0, "U": 4}, "U"),
])
def test_select_baseline(counts, expected):
    assert select_baseline(counts, DEFAULT_ALPHABET) == expected


def test_candidate_order_by_remaining_then_alphabet():
    remaining = {"B": 3, "A": 1, "C": 2, "X": 0, "I": 2, "U": 1}
    assert candidate_order(remaining, DEFAULT_ALPHABET, "B") == ["C", "I", "A", "U"]
    assert candidate_order(remaining, DEFAULT_ALPHABET, "B", "alphabet") == ["A", "C", "I", "U"]


def test_candidate_order_ties_follow_alphabet():
    remaining = {s: 2 for s in DEFAULT_ALPHABET}
    assert candidate_order(remaining, DEFAULT_ALPHABET, "B") == ["A", "C", "X", "I", "U"]


def test_resolver_rejects_unknown_ordering():
    with pytest.raises(ValueError):
        PositionResolver(DEFAULT_ALPHABET, ordering="shuffled")


# --- position resolution ---

def test_resolver_decrease_locks_baseline():
    oracle = SecretCode("BBBA")
    resolver = PositionResolver(DEFAULT_ALPHABET)
    state = resolver.resolve(oracle.guess, "B", {"B": 3, "A": 1}, 4)
    assert state.word() == "BBBA"
    assert state.complete
    # three decreases then the hit on the last position
    assert [g for g, _ in oracle.history] == ["ABBB", "BABB", "BBAB", "BBBA"]
    assert state.score_trace == [3, 3, 3, 3, 4]


def test_resolver_tie_on_every_candidate_keeps_baseline():
    # pos 0: the only candidate ties -> baseline by elimination
    # pos 1: candidate raises the score to a full match
    ask, asked = _scripted([1, 2])
    resolver = PositionResolver(DEFAULT_ALPHABET)
    state = resolver.resolve(ask, "B", {"B": 1, "A": 1}, 2)
    assert asked == ["AB", "BA"]
    assert state.word() == "BA"
    assert state.eliminated == 1
    assert all(state.resolved)
    assert state.remaining == {"B": 0, "A": 0}


def test_resolver_queries_per_position_bounded():
    secret = "UUIIXXCCAA"
    oracle = SecretCode(secret)
    counts = {s: secret.count(s) for s in DEFAULT_ALPHABET}
    state = PositionResolver(DEFAULT_ALPHABET).resolve(oracle.guess, "A", counts, len(secret))
    assert state.word() == secret
    assert state.queries <= (len(DEFAULT_ALPHABET) - 1) * len(secret)


def test_resolver_rejects_jump_larger_than_one():
    ask, _ = _scripted([3])
    with pytest.raises(OracleContractError):
        PositionResolver(DEFAULT_ALPHABET).resolve(ask, "B", {"B": 1, "A": 1, "C": 1}, 3)


# --- arrangement fallback ---

def test_arrange_finds_permutation():
    oracle = SecretCode("CAB")
    assert arrange(oracle.guess, DEFAULT_ALPHABET, {"C": 1, "A": 1, "B": 1}) == "CAB"
    # first try is the alphabet-order arrangement, and nothing is asked twice
    guesses = [g for g, _ in oracle.history]
    assert guesses[0] == "BAC"
    assert len(guesses) == len(set(guesses))


def test_arrange_budget_exhausted():
    oracle = SecretCode("CAB")
    with pytest.raises(FallbackExhausted) as ei:
        arrange(oracle.guess, DEFAULT_ALPHABET, {"C": 1, "A": 1, "B": 1}, budget=1)
    assert ei.value.attempts == 1
    assert oracle.count == 1


def test_arrange_uses_prior_history():
    # (BAC, 1) and (BCA, 0) leave only ABC and CAB
    oracle = SecretCode("CAB")
    found = arrange(oracle.guess, DEFAULT_ALPHABET, {"B": 1, "A": 1, "C": 1},
                    history=[("BAC", 1), ("BCA", 0)])
    assert found == "CAB"
    assert [g for g, _ in oracle.history] == ["ABC", "CAB"]


def test_arrange_no_consistent_arrangement():
    ask, asked = _scripted([])
    with pytest.raises(FallbackExhausted) as ei:
        arrange(ask, DEFAULT_ALPHABET, {"B": 2}, history=[("BB", 0)])
    assert asked == []
    assert ei.value.reason == "no consistent arrangement left"


def test_arrange_node_limit():
    ask, _ = _scripted([])
    with pytest.raises(FallbackExhausted):
        arrange(ask, DEFAULT_ALPHABET, {"B": 3, "A": 3}, max_nodes=2)


def test_arrange_rejects_bad_arguments():
    with pytest.raises(ValueError):
        arrange(lambda c: 0, DEFAULT_ALPHABET, {})
    with pytest.raises(ValueError):
        arrange(lambda c: 0, DEFAULT_ALPHABET, {"B": 1}, budget=0)


# --- multiset-first solver preset ---

@pytest.mark.parametrize("secret", ["BAC", "CAB", "XIUA", "UIXA", "AABB", "CXCX"])
def test_arrangement_solver_short_secrets(secret):
    solver = create_solver("arrangement")
    oracle = SecretCode(secret)
    assert solver.solve(oracle) == secret
    assert solver.resolution is None


def test_arrangement_solver_reports_exhaustion():
    solver = create_solver("arrangement", SolverConfig(fallback="multiset_first", fallback_cap=1))
    with pytest.raises(FallbackExhausted):
        solver.solve(SecretCode("CAB"))
