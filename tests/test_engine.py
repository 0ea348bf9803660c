import pytest
from codebreaker.engine import (
    Alphabet, DEFAULT_ALPHABET, SecretCode, exact_matches, feedback, validate_secret,
    is_consistent, INVALID_SYMBOL, WRONG_LENGTH,
)
from codebreaker.engine.constraints import prefix_feasible, usable_history


# --- exact-position scoring golden tests ---
@pytest.mark.parametrize("candidate,secret,expected", [
    ("BBBB", "BACB", 2),
    ("ACBX", "BACB", 0),
    ("BACB", "BACB", 4),
    ("BBBBBBBBBB", "ABIXCIABCX", 2),
    ("AAAAAAAAAA", "ABIXCIABCX", 2),
    ("UUUUUUUUUU", "ABIXCIABCX", 0),
    ("ABIXCIABCX", "ABIXCIABCX", 10),
])
def test_exact_matches_golden(candidate, secret, expected):
    assert exact_matches(candidate, secret) == expected


@pytest.mark.parametrize("candidate,expected", [
    ("BAZ", INVALID_SYMBOL),
    ("BAZZZZ", INVALID_SYMBOL),   # invalid symbol wins over wrong length
    ("bac", INVALID_SYMBOL),      # symbols are case-sensitive
    ("BA", WRONG_LENGTH),
    ("BACX", WRONG_LENGTH),
    ("", WRONG_LENGTH),
    ("CAB", 3),
    ("CBA", 1),
])
def test_feedback_codes(candidate, expected):
    assert feedback(candidate, "CAB", DEFAULT_ALPHABET) == expected


def test_oracle_counts_every_query_and_keeps_history():
    oracle = SecretCode("CAB")
    assert oracle.guess("BBB") == 1
    assert oracle.guess("BB") == WRONG_LENGTH
    assert oracle.guess("QQQ") == INVALID_SYMBOL
    assert oracle.guess("CAB") == 3
    assert oracle.count == 4
    assert oracle.history == [("BBB", 1), ("BB", -2), ("QQQ", -1), ("CAB", 3)]
    oracle.reset()
    assert oracle.count == 0 and oracle.history == []


@pytest.mark.parametrize("secret", ["", "BACZ", "B" * 19, None])
def test_oracle_rejects_bad_secret(secret):
    with pytest.raises(ValueError):
        SecretCode(secret)


def test_validate_secret_bounds():
    assert validate_secret("B", DEFAULT_ALPHABET) is True
    assert validate_secret("U" * 18, DEFAULT_ALPHABET) is True
    assert validate_secret("U" * 19, DEFAULT_ALPHABET) is False
    assert validate_secret("BAC", Alphabet("XYZ")) is False


def test_alphabet_order_and_index():
    alph = Alphabet("BACXIU")
    assert alph.first == "B"
    assert list(alph) == ["B", "A", "C", "X", "I", "U"]
    assert alph.index("X") == 3
    assert "U" in alph and "Z" not in alph
    assert alph.uniform("C", 3) == "CCC"
    assert alph.zero_counts() == {"B": 0, "A": 0, "C": 0, "X": 0, "I": 0, "U": 0}
    assert alph == DEFAULT_ALPHABET


@pytest.mark.parametrize("symbols", ["", "BAB", ["B", "AC"]])
def test_alphabet_rejects_bad_symbols(symbols):
    with pytest.raises(ValueError):
        Alphabet(symbols)


def test_consistency_and_filtering():
    history = [("BAC", 1), ("BCA", 0)]
    perms = ["BAC", "BCA", "ABC", "ACB", "CBA", "CAB"]
    assert is_consistent("CAB", history)
    assert not is_consistent("BAC", history)
    assert [p for p in perms if is_consistent(p, history)] == ["ABC", "CAB"]


def test_prefix_feasible_prunes_early():
    history = [("BAC", 1)]
    # "B" already uses the single allowed match; "BA" would be 2.
    assert prefix_feasible(["B"], 3, history)
    assert not prefix_feasible(["B", "A"], 3, history)
    # two open positions cannot supply three matches
    assert not prefix_feasible(["U"], 3, [("BAC", 3)])


def test_usable_history_drops_error_codes():
    hist = [("B", -2), ("BBB", 1), ("QQQ", -1), ("BB", 0)]
    assert usable_history(hist, 3) == [("BBB", 1)]
