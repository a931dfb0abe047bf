"""
Three-hinged portal frame generators.

Pinned bases A and B, columns of height h, beam of span L with a hinge at
mid-span. The moment about the crown hinge is zero, which fixes the
horizontal thrust; column-head moments follow as H × h.
"""
import logging
from fractions import Fraction

from beamdrill.models.problem import BEAM_TOLERANCE, Category, Difficulty, Problem, Target
from beamdrill.services.distractors import DistractorPolicy
from beamdrill.services.generation import GenerationContext, assemble_problem, fmt

logger = logging.getLogger(__name__)

FRAME_POLICY = DistractorPolicy(tolerance=BEAM_TOLERANCE, decimals=None)

_LOAD_TYPES = ("point", "distributed", "horizontal")


def _integers(values) -> list[float]:
    """Frame answers are whole numbers; keep only distractors that are too."""
    return [float(v) for v in map(Fraction, values) if v.denominator == 1]


def _problem(ctx, difficulty, target, answer, question, steps, candidates, params, load):
    return assemble_problem(
        ctx,
        category=Category.FRAME,
        difficulty=difficulty,
        target=target,
        answer=float(answer),
        question=question,
        steps=steps,
        candidates=_integers(candidates),
        policy=FRAME_POLICY,
        params=params,
        pattern=f"three-hinge-{load}",
        display={"frame_load": load},
    )


def _frame_text(L: int, h: int) -> str:
    return (
        f"A three-hinged portal frame has pinned bases A and B, columns {h} m high, "
        f"a beam of span {L} m and a hinge at the centre of the beam."
    )


def generate_frame_point(ctx: GenerationContext, difficulty: Difficulty, target: Target) -> Problem:
    pool = ctx.pools.frame_point_h if target == Target.FRAME_H_LEFT else ctx.pools.frame_point
    L, h, P, M, H, V = ctx.pick(pool)
    question = f"{_frame_text(L, h)} A point load P = {P} kN acts at the centre hinge."
    symmetry = "By symmetry V_A = V_B = P/2."
    thrust = "Moments about the crown hinge for the left half: V_A × L/2 − H_A × h = 0, so H_A = P × L / (4h)."
    params = {"P_kN": P, "L_m": L, "h_m": h}

    if target == Target.FRAME_M_LEFT:
        steps = [
            symmetry, thrust,
            "The left column-head moment is M = H_A × h = P × L / 4",
            f"= {P} × {L} / 4 = {fmt(M)} kN·m",
        ]
        candidates = [
            Fraction(P * L, 2), Fraction(P * h, 2), P * L, P * h,
            Fraction(P * L, 8),  # UDL formula
            M + 10, M - 10, M + 6, M - 6, M + 12, M - 12,
        ]
        asked = "Find the magnitude of the bending moment at the head of the left column."
    elif target == Target.FRAME_H_LEFT:
        steps = [symmetry, thrust, f"H_A = {P} × {L} / (4 × {h}) = {fmt(H)} kN"]
        candidates = [
            M, Fraction(P, 2), P,
            Fraction(P * h, L),  # lever arms swapped
            Fraction(P * L, 2 * h),
            H + 2, H - 2, H + 4, H - 4,
        ]
        asked = "Find the magnitude of the horizontal reaction H_A."
    else:
        steps = [symmetry, f"V_B = P / 2 = {P} / 2 = {fmt(V)} kN"]
        candidates = [P, M, H, Fraction(P, 4), Fraction(3 * P, 4), V + 2, V - 2, V + 4]
        asked = "Find the vertical reaction V_B."
    answer = {Target.FRAME_M_LEFT: M, Target.FRAME_H_LEFT: H, Target.FRAME_V_B: V}[target]
    return _problem(ctx, difficulty, target, answer, f"{question} {asked}", steps, candidates, params, "point")


def generate_frame_distributed(ctx: GenerationContext, difficulty: Difficulty, target: Target) -> Problem:
    pool = ctx.pools.frame_udl_h if target == Target.FRAME_H_LEFT else ctx.pools.frame_udl
    L, h, w, M, H, V = ctx.pick(pool)
    question = f"{_frame_text(L, h)} A UDL w = {w} kN/m acts over the whole beam."
    symmetry = "By symmetry V_A = V_B = w × L / 2."
    thrust = (
        "Moments about the crown hinge for the left half: "
        "V_A × L/2 − (w × L/2) × L/4 − H_A × h = 0, so H_A = w × L² / (8h)."
    )
    params = {"w_kN_per_m": w, "L_m": L, "h_m": h}

    if target == Target.FRAME_M_LEFT:
        steps = [
            symmetry, thrust,
            "The left column-head moment is M = H_A × h = w × L² / 8",
            f"= {w} × {L}² / 8 = {fmt(M)} kN·m",
        ]
        candidates = [
            Fraction(w * L * L, 4), Fraction(w * L * L, 2), w * L * L,
            Fraction(w * L * h, 4),
            M + 10, M - 10, M + 8, M - 8, M + 6, M - 6, M + 12, M - 12,
        ]
        asked = "Find the magnitude of the bending moment at the head of the left column."
    elif target == Target.FRAME_H_LEFT:
        steps = [symmetry, thrust, f"H_A = {w} × {L}² / (8 × {h}) = {fmt(H)} kN"]
        candidates = [
            M, Fraction(w * L, 2), w * L,
            Fraction(w * L * L, 4 * h),  # 4 instead of 8
            H + 2, H - 2, H + 4, H - 4,
        ]
        asked = "Find the magnitude of the horizontal reaction H_A."
    else:
        steps = [
            symmetry,
            "The total load w × L is shared equally between the two bases.",
            f"V_B = w × L / 2 = {w} × {L} / 2 = {fmt(V)} kN",
        ]
        candidates = [
            w * L, M, Fraction(w * L * L, 8 * h),
            Fraction(w * L, 4), Fraction(3 * w * L, 4),
            V + 4, V - 4,
        ]
        asked = "Find the vertical reaction V_B."
    answer = {Target.FRAME_M_LEFT: M, Target.FRAME_H_LEFT: H, Target.FRAME_V_B: V}[target]
    return _problem(ctx, difficulty, target, answer, f"{question} {asked}", steps, candidates, params, "distributed")


def generate_frame_horizontal(ctx: GenerationContext, difficulty: Difficulty, target: Target) -> Problem:
    L, h, P, M, H, _ = ctx.pick(ctx.pools.frame_horizontal)
    question = f"{_frame_text(L, h)} A horizontal load P = {P} kN acts at the head of the left column."
    shared = (
        "Taking moments about the crown hinge for each half shows the horizontal "
        "reactions are equal: H_A = H_B = P / 2."
    )
    params = {"P_kN": P, "L_m": L, "h_m": h}

    if target == Target.FRAME_M_LEFT:
        steps = [
            shared,
            "The left column-head moment is M = H_A × h = P × h / 2",
            f"= {P} × {h} / 2 = {fmt(M)} kN·m",
        ]
        candidates = [
            P * h,  # treated the column as a cantilever
            P,
            Fraction(P * L, 4),  # vertical-load formula
            P * L, P + h, Fraction(P * L, 2),
            M + 10, M - 10, M + 6, M - 6, M + 12, M - 12,
        ]
        asked = "Find the magnitude of the bending moment at the head of the left column."
    else:
        target = Target.FRAME_H_LEFT
        steps = [shared, f"H_A = {P} / 2 = {fmt(H)} kN"]
        candidates = [P, P * h, M, Fraction(P * L, 4), Fraction(P, 4), H + 4, H - 4]
        asked = "Find the magnitude of the horizontal reaction H_A."
    answer = M if target == Target.FRAME_M_LEFT else H
    return _problem(ctx, difficulty, target, answer, f"{question} {asked}", steps, candidates, params, "horizontal")


def generate_frame(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    load = ctx.pick(_LOAD_TYPES)
    if load == "horizontal":
        target = ctx.pick((Target.FRAME_M_LEFT, Target.FRAME_H_LEFT))
        return generate_frame_horizontal(ctx, difficulty, target)
    target = ctx.pick((Target.FRAME_M_LEFT, Target.FRAME_H_LEFT, Target.FRAME_V_B))
    if load == "point":
        return generate_frame_point(ctx, difficulty, target)
    return generate_frame_distributed(ctx, difficulty, target)
