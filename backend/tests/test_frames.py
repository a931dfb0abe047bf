"""Tests for three-hinged portal frame problems."""

from collections import Counter

import pytest

from beamdrill.models.problem import Category, Difficulty, Target
from beamdrill.services.frames import (
    generate_frame,
    generate_frame_distributed,
    generate_frame_horizontal,
    generate_frame_point,
)
from beamdrill.services.generation import GenerationContext

from .helpers import assert_well_formed

TARGETS = [Target.FRAME_M_LEFT, Target.FRAME_H_LEFT, Target.FRAME_V_B]


class TestFrameGenerators:
    @pytest.mark.parametrize("target", TARGETS)
    def test_point_load(self, ctx, target):
        for _ in range(100):
            problem = generate_frame_point(ctx, Difficulty.ADVANCED, target)
            p = problem.params
            expected = {
                Target.FRAME_M_LEFT: p["P_kN"] * p["L_m"] / 4,
                Target.FRAME_H_LEFT: p["P_kN"] * p["L_m"] / (4 * p["h_m"]),
                Target.FRAME_V_B: p["P_kN"] / 2,
            }[target]
            assert problem.answer == pytest.approx(expected)
            assert problem.answer == int(problem.answer)
            assert_well_formed(problem)

    @pytest.mark.parametrize("target", TARGETS)
    def test_distributed_load(self, ctx, target):
        for _ in range(100):
            problem = generate_frame_distributed(ctx, Difficulty.ADVANCED, target)
            p = problem.params
            w, L, h = p["w_kN_per_m"], p["L_m"], p["h_m"]
            expected = {
                Target.FRAME_M_LEFT: w * L * L / 8,
                Target.FRAME_H_LEFT: w * L * L / (8 * h),
                Target.FRAME_V_B: w * L / 2,
            }[target]
            assert problem.answer == pytest.approx(expected)
            assert_well_formed(problem)

    def test_horizontal_load(self, ctx):
        for target in (Target.FRAME_M_LEFT, Target.FRAME_H_LEFT):
            problem = generate_frame_horizontal(ctx, Difficulty.ADVANCED, target)
            p = problem.params
            if target == Target.FRAME_M_LEFT:
                assert problem.answer == p["P_kN"] * p["h_m"] / 2
            else:
                assert problem.answer == p["P_kN"] / 2
            assert_well_formed(problem)

    def test_fallback_frames(self, rng, degenerate_pools):
        ctx = GenerationContext(rng=rng, pools=degenerate_pools)
        assert generate_frame_point(ctx, Difficulty.ADVANCED, Target.FRAME_M_LEFT).answer == 20
        assert generate_frame_distributed(ctx, Difficulty.ADVANCED, Target.FRAME_H_LEFT).answer == 4
        assert generate_frame_horizontal(ctx, Difficulty.ADVANCED, Target.FRAME_H_LEFT).answer == 10

    def test_frame_mix(self, ctx):
        problems = [generate_frame(ctx, Difficulty.ADVANCED) for _ in range(300)]
        assert all(problem.category == Category.FRAME for problem in problems)
        loads = Counter(problem.display["frame_load"] for problem in problems)
        assert set(loads) == {"point", "distributed", "horizontal"}
        horizontal_targets = {p.target for p in problems if p.display["frame_load"] == "horizontal"}
        assert Target.FRAME_V_B not in horizontal_targets
