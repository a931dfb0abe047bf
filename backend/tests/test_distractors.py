"""Tests for distractor synthesis and choice assembly."""

import random

import pytest

from beamdrill.services.distractors import (
    DistractorPolicy,
    build_choices,
    magnitude_unit,
    round_half_up,
    synthesize_distractors,
)

POSITIVE = DistractorPolicy()
SIGNED_WITH_ZERO = DistractorPolicy(allow_negative=True, allow_zero=True)


class TestRounding:
    def test_half_rounds_up(self):
        assert round_half_up(0.25, 1) == 0.3
        assert round_half_up(2.5, 0) == 3

    def test_negative_half_rounds_towards_positive(self):
        assert round_half_up(-0.25, 1) == -0.2

    def test_magnitude_unit(self):
        assert magnitude_unit(50) == 1.0
        assert magnitude_unit(648_000) == 10_000.0


class TestPolicy:
    def test_positive_policy_rejects_non_positive(self):
        assert not POSITIVE.admits(0.0, 10)
        assert not POSITIVE.admits(-5.0, 10)
        assert POSITIVE.admits(5.0, 10)

    def test_signed_policy_can_admit_zero(self):
        assert SIGNED_WITH_ZERO.admits(0.0, 10)
        assert not DistractorPolicy(allow_negative=True).admits(0.0, 10)

    def test_values_within_tolerance_of_answer_are_rejected(self):
        assert not POSITIVE.admits(10.005, 10)

    def test_nan_and_inf_are_rejected(self):
        assert not SIGNED_WITH_ZERO.admits(float("nan"), 1)
        assert not SIGNED_WITH_ZERO.admits(float("inf"), 1)


class TestSynthesis:
    def test_padding_fills_an_empty_candidate_list(self, rng):
        assert synthesize_distractors(10, [], rng) == [11, 9, 12]

    def test_priority_is_drained_first(self, rng):
        chosen = synthesize_distractors(10, [30, 40], rng, priority=[20, 20, 5])
        assert chosen[:2] == [20, 5]
        assert chosen[2] in (30, 40)

    def test_non_positive_candidates_are_dropped(self, rng):
        chosen = synthesize_distractors(1, [-1, 0, 0.5], rng)
        assert chosen == [0.5, 2, 3]

    def test_candidates_equal_to_answer_are_dropped(self, rng):
        chosen = synthesize_distractors(60, [60, 60.004, 30], rng)
        assert 60 not in chosen
        assert 30 in chosen

    def test_always_returns_three_distinct_values(self):
        for seed in range(200):
            rng = random.Random(seed)
            answer = rng.choice([0.5, 3, 45.5, 120])
            candidates = [rng.choice([answer, answer * 2, answer / 2, 1, 2]) for _ in range(5)]
            chosen = synthesize_distractors(answer, candidates, rng)
            assert len(chosen) == 3
            assert len({round(c, 6) for c in chosen}) == 3
            assert all(abs(c - answer) > POSITIVE.tolerance for c in chosen)

    def test_large_answers_pad_on_their_own_scale(self, rng):
        policy = DistractorPolicy(tolerance=1e-6, decimals=0, padding_unit=magnitude_unit(648_000))
        chosen = synthesize_distractors(648_000, [], rng, policy=policy)
        assert chosen == [658_000, 638_000, 668_000]

    def test_zero_answer_with_signed_policy(self, rng):
        chosen = synthesize_distractors(0, [0, 0.0], rng, policy=SIGNED_WITH_ZERO)
        assert chosen == [1, -1, 2]


class TestChoices:
    def test_choices_are_sorted_and_include_answer(self):
        assert build_choices(30, [40, 10, 20]) == [10, 20, 30, 40]

    @pytest.mark.parametrize("answer", [-12.5, 0.0, 7.3])
    def test_answer_position_varies_with_value(self, answer):
        choices = build_choices(answer, [1.0, 2.0, 3.0])
        assert answer in choices
        assert choices == sorted(choices)
