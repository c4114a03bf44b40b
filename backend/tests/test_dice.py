"""Tests for Die and the roll outcome distribution."""

import random
from collections import Counter

import pytest
from lcr.dice import FACES, OUTCOME_SYMBOLS, Die, Outcome


# ── Faces / Outcome enum ─────────────────────────────────────────────

class TestFaces:
    def test_six_faces(self):
        assert len(FACES) == 6

    def test_face_multiplicities(self):
        counts = Counter(FACES)
        assert counts[Outcome.NO_OP] == 3
        assert counts[Outcome.LEFT] == 1
        assert counts[Outcome.CENTER] == 1
        assert counts[Outcome.RIGHT] == 1

    def test_four_outcomes(self):
        assert len(Outcome) == 4
        assert Outcome.LEFT.value == "left"

    def test_symbols_complete(self):
        assert set(OUTCOME_SYMBOLS) == set(Outcome)


# ── Die ──────────────────────────────────────────────────────────────

class TestDie:
    def test_no_outcome_before_first_roll(self):
        d = Die(random.Random(1))
        assert d.last_outcome is None
        assert repr(d) == "Die(-)"

    def test_roll_returns_outcome(self):
        d = Die(random.Random(1))
        for _ in range(50):
            assert d.roll() in Outcome

    def test_roll_remembers_last_outcome(self):
        d = Die(random.Random(7))
        outcome = d.roll()
        assert d.last_outcome == outcome
        assert repr(d) == f"Die({OUTCOME_SYMBOLS[outcome]})"

    def test_same_seed_same_rolls(self):
        a = Die(random.Random(42))
        b = Die(random.Random(42))
        assert [a.roll() for _ in range(100)] == [b.roll() for _ in range(100)]

    def test_roll_maps_face_index(self):
        class _Fixed:
            def __init__(self, idx):
                self.idx = idx

            def randrange(self, n):
                assert n == 6
                return self.idx

        assert Die(_Fixed(0)).roll() == Outcome.NO_OP
        assert Die(_Fixed(2)).roll() == Outcome.NO_OP
        assert Die(_Fixed(3)).roll() == Outcome.LEFT
        assert Die(_Fixed(4)).roll() == Outcome.CENTER
        assert Die(_Fixed(5)).roll() == Outcome.RIGHT

    def test_default_rng(self):
        d = Die()
        assert isinstance(d.rng, random.Random)
        assert d.roll() in Outcome


# ── Distribution ─────────────────────────────────────────────────────

NUM_ROLLS = 60_000

EXPECTED_PROBABILITIES = {
    Outcome.NO_OP: 1 / 2,
    Outcome.LEFT: 1 / 6,
    Outcome.CENTER: 1 / 6,
    Outcome.RIGHT: 1 / 6,
}


@pytest.fixture(scope="module")
def observed() -> dict[Outcome, float]:
    d = Die(random.Random(2024))
    counts = Counter(d.roll() for _ in range(NUM_ROLLS))
    return {o: counts[o] / NUM_ROLLS for o in Outcome}


@pytest.mark.parametrize("outcome", list(Outcome), ids=lambda o: o.value)
def test_outcome_frequency(observed, outcome):
    expected = EXPECTED_PROBABILITIES[outcome]
    assert abs(observed[outcome] - expected) < 0.01, (
        f"{outcome.value}: observed {observed[outcome]:.4f}, expected {expected:.4f}"
    )
