"""Tests for effective length and Euler load ratio problems."""

from collections import Counter

import pytest

from beamdrill.models.problem import Category, Difficulty, Target
from beamdrill.services.buckling import (
    GAMMA,
    effective_length,
    generate_buckling,
    generate_buckling_length,
    generate_buckling_load,
    load_ratio,
)

from .helpers import assert_well_formed


class TestFormulas:
    @pytest.mark.parametrize(
        "support, expected",
        [("pinned-pinned", 4.0), ("fixed-fixed", 2.0), ("fixed-pinned", 2.8), ("fixed-free", 8.0)],
    )
    def test_effective_length(self, support, expected):
        assert effective_length(support, 4) == expected

    @pytest.mark.parametrize(
        "support, expected",
        [("pinned-pinned", 1.0), ("fixed-fixed", 4.0), ("fixed-pinned", 2.04), ("fixed-free", 0.25)],
    )
    def test_load_ratio(self, support, expected):
        assert load_ratio(support) == expected


class TestGenerators:
    def test_length_problems(self, ctx):
        for _ in range(200):
            problem = generate_buckling_length(ctx, Difficulty.BEGINNER)
            assert problem.target == Target.LK
            support = problem.display["buckling_support"]
            assert problem.answer == effective_length(support, problem.params["L_m"])
            assert_well_formed(problem)

    def test_load_problems(self, ctx):
        for _ in range(200):
            problem = generate_buckling_load(ctx, Difficulty.INTERMEDIATE)
            assert problem.target == Target.P_RATIO
            assert problem.answer == load_ratio(problem.display["buckling_support"])
            assert_well_formed(problem)

    def test_every_support_condition_is_used(self, ctx):
        supports = {generate_buckling_length(ctx, Difficulty.BEGINNER).display["buckling_support"] for _ in range(200)}
        assert supports == set(GAMMA)

    def test_dispatch_by_tier(self, ctx):
        assert generate_buckling(ctx, Difficulty.MIXED).category == Category.BUCKLING
        assert {generate_buckling(ctx, Difficulty.BEGINNER).target for _ in range(30)} == {Target.LK}
        assert {generate_buckling(ctx, Difficulty.ADVANCED).target for _ in range(30)} == {Target.P_RATIO}
        mixed = Counter(generate_buckling(ctx, Difficulty.MIXED).target for _ in range(200))
        assert set(mixed) == {Target.LK, Target.P_RATIO}
