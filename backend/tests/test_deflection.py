"""Tests for deflection proportionality and comparison problems."""

import pytest

from beamdrill.models.problem import RATIO_TOLERANCE, Category, Difficulty, Target
from beamdrill.services.deflection import (
    COMPARISON_CASES,
    Comparison,
    comparison_ratio,
    deflection,
    generate_comparison,
    generate_deflection,
    generate_proportional,
)

from .helpers import assert_well_formed


class TestFormulas:
    def test_coefficients(self):
        assert deflection("simple", 48, 1) == 1
        assert deflection("cantilever", 3, 1) == 1

    def test_doubling_span_multiplies_by_eight(self):
        assert deflection("simple", 1, 4) / deflection("simple", 1, 2) == 8

    def test_same_span_simple_vs_cantilever(self):
        assert comparison_ratio(Comparison("simple", "cantilever", 4, 4, 1, 1)) == 0.0625

    def test_cantilever_vs_simple_is_inverse(self):
        assert comparison_ratio(Comparison("cantilever", "simple", 4, 4, 1, 1)) == 16

    @pytest.mark.parametrize("case", COMPARISON_CASES)
    def test_ratios_are_positive(self, case):
        assert comparison_ratio(case) > 0


class TestGenerators:
    def test_proportional(self, ctx):
        for _ in range(200):
            problem = generate_proportional(ctx, Difficulty.BEGINNER)
            expected = {"L": 8, "EI": 0.5, "P": 2}[problem.display["variable"]]
            assert problem.answer == expected
            assert problem.tolerance == RATIO_TOLERANCE
            assert_well_formed(problem)

    def test_comparison(self, ctx):
        for _ in range(200):
            problem = generate_comparison(ctx, Difficulty.ADVANCED)
            assert problem.target == Target.DEFLECTION_RATIO
            assert problem.pattern == "comparison"
            assert_well_formed(problem)

    def test_dispatch(self, ctx):
        beginner = {generate_deflection(ctx, Difficulty.BEGINNER).pattern for _ in range(50)}
        assert "comparison" not in beginner
        advanced = {generate_deflection(ctx, Difficulty.ADVANCED).pattern for _ in range(100)}
        assert "comparison" in advanced
        assert generate_deflection(ctx, Difficulty.MIXED).category == Category.DEFLECTION
