"""Tests for section property problems."""

from collections import Counter

import pytest

from beamdrill.models.problem import SECTION_TOLERANCE, Category, Difficulty, Target
from beamdrill.services.generation import GenerationContext
from beamdrill.services.pools import rect_inertia, rect_modulus
from beamdrill.services.sections import (
    generate_h_section,
    generate_hollow,
    generate_l_section,
    generate_rectangle,
    generate_section_properties,
    generate_t_section,
)

from .helpers import assert_well_formed


class TestRectangle:
    def test_beginner_asks_for_z(self, ctx):
        for _ in range(50):
            problem = generate_rectangle(ctx, Difficulty.BEGINNER)
            assert problem.target == Target.Z
            b, h = problem.params["b_mm"], problem.params["h_mm"]
            assert problem.answer == rect_modulus(int(b), int(h))

    def test_inertia_target(self, ctx):
        problem = generate_rectangle(ctx, Difficulty.INTERMEDIATE, Target.I)
        b, h = problem.params["b_mm"], problem.params["h_mm"]
        assert problem.answer == rect_inertia(int(b), int(h))
        assert problem.unit == "mm⁴"

    def test_section_tolerance(self, ctx):
        assert generate_rectangle(ctx, Difficulty.BEGINNER).tolerance == SECTION_TOLERANCE


class TestComplexShapes:
    @pytest.mark.parametrize("generate", [generate_hollow, generate_h_section, generate_t_section])
    def test_shapes_are_well_formed(self, ctx, generate):
        for _ in range(200):
            problem = generate(ctx, Difficulty.ADVANCED)
            assert problem.category == Category.SECTION_PROPERTIES
            assert problem.answer == int(problem.answer)
            assert_well_formed(problem)

    @pytest.mark.parametrize("target", [Target.X_G, Target.I_CENTROID])
    def test_l_section(self, ctx, target):
        for _ in range(200):
            problem = generate_l_section(ctx, Difficulty.ADVANCED, target)
            assert problem.target == target
            assert problem.pattern == "l-section"
            assert_well_formed(problem)

    def test_fallback_sections_give_known_answers(self, rng, degenerate_pools):
        ctx = GenerationContext(rng=rng, pools=degenerate_pools)
        assert generate_l_section(ctx, Difficulty.ADVANCED, Target.X_G).answer == 30
        assert generate_l_section(ctx, Difficulty.ADVANCED, Target.I_CENTROID).answer == 3_400_000
        answers = {generate_h_section(ctx, Difficulty.ADVANCED).answer for _ in range(40)}
        assert answers == {25_568_000, 255_680}
        answers = {generate_t_section(ctx, Difficulty.ADVANCED).answer for _ in range(40)}
        assert answers == {60, 27_840_000}


class TestDispatch:
    def test_non_advanced_is_always_rectangle(self, ctx):
        for difficulty in (Difficulty.BEGINNER, Difficulty.INTERMEDIATE, Difficulty.MIXED):
            for _ in range(30):
                assert generate_section_properties(ctx, difficulty).pattern == "rectangle"

    def test_advanced_covers_every_complex_shape(self, ctx):
        patterns = Counter(generate_section_properties(ctx, Difficulty.ADVANCED).pattern for _ in range(500))
        assert set(patterns) == {"l-section", "hollow-rect", "h-section", "t-section"}
