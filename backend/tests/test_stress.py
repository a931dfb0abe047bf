"""Tests for bending, combined, short-column and shear stress problems."""

from collections import Counter

import pytest

from beamdrill.models.problem import Category, Difficulty, Target
from beamdrill.services.generation import GenerationContext
from beamdrill.services.stress import (
    generate_bending_stress,
    generate_combined,
    generate_rect_shear,
    generate_short_column,
    generate_simple_bending,
    generate_web_shear,
)

from .helpers import assert_well_formed


class TestStressGenerators:
    @pytest.mark.parametrize(
        "generate",
        [generate_simple_bending, generate_combined, generate_short_column, generate_rect_shear, generate_web_shear],
    )
    def test_well_formed(self, ctx, generate):
        for _ in range(200):
            problem = generate(ctx, Difficulty.ADVANCED)
            assert problem.category == Category.BENDING_STRESS
            assert_well_formed(problem)

    def test_bending_answer_is_m_over_z(self, ctx):
        for _ in range(100):
            problem = generate_simple_bending(ctx, Difficulty.INTERMEDIATE)
            p = problem.params
            divisor = 1 if problem.display["support"] == "cantilever" else 4
            moment = p["P_kN"] * p["L_m"] / divisor
            modulus = p["b_mm"] * p["h_mm"] ** 2 / 6
            assert problem.answer == pytest.approx(moment * 1e6 / modulus)

    def test_combined_faces(self, ctx):
        faces = set()
        for _ in range(100):
            problem = generate_combined(ctx, Difficulty.ADVANCED)
            faces.add(problem.display["face"])
            assert problem.target == Target.SIGMA
        assert faces == {"tension-side", "compression-side"}

    def test_no_tension_limit_is_h_over_six(self, ctx):
        problem = generate_short_column(ctx, Difficulty.ADVANCED, ask_limit=True)
        assert problem.target == Target.E_MAX
        assert problem.answer == problem.params["h_mm"] / 6
        assert_well_formed(problem)

    def test_fallback_cases(self, rng, degenerate_pools):
        ctx = GenerationContext(rng=rng, pools=degenerate_pools)
        assert generate_short_column(ctx, Difficulty.ADVANCED).answer == 10
        assert generate_rect_shear(ctx, Difficulty.ADVANCED).answer == 3
        assert generate_web_shear(ctx, Difficulty.ADVANCED).answer == 50
        assert generate_simple_bending(ctx, Difficulty.ADVANCED).answer == 20


class TestStressMix:
    def test_beginner_delegates_to_section_properties(self, ctx):
        problem = generate_bending_stress(ctx, Difficulty.BEGINNER)
        assert problem.category == Category.SECTION_PROPERTIES

    @pytest.mark.parametrize("difficulty", [Difficulty.INTERMEDIATE, Difficulty.ADVANCED, Difficulty.MIXED])
    def test_every_variant_appears(self, ctx, difficulty):
        patterns = Counter(generate_bending_stress(ctx, difficulty).pattern for _ in range(600))
        assert {"bending", "combined", "eccentric-column", "shear-rectangle", "shear-web"} <= set(patterns)

    def test_limit_question_is_advanced_only(self, ctx):
        patterns = {generate_bending_stress(ctx, Difficulty.INTERMEDIATE).pattern for _ in range(400)}
        assert "no-tension-limit" not in patterns
