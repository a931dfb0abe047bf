"""
Deflection generators - proportionality (δ ∝ PL³/EI) and two-beam
comparisons using δ = PL³ / (kEI), with k = 48 for a simple beam under a
central load and k = 3 for a cantilever with a tip load.
"""
import logging
from typing import NamedTuple

from beamdrill.models.problem import RATIO_TOLERANCE, Category, Difficulty, Problem, Target
from beamdrill.services.distractors import DistractorPolicy, round_half_up
from beamdrill.services.generation import GenerationContext, assemble_problem, fmt

logger = logging.getLogger(__name__)

DEFLECTION_COEFFICIENTS = {"simple": 48, "cantilever": 3}
STRUCTURE_TEXT = {
    "simple": "a simply supported beam with a central point load",
    "cantilever": "a cantilever with a point load at its tip",
}

MULTIPLIER = 2
# variable -> (ratio when the variable doubles, distractors)
PROPORTIONALITY = {
    "L": (8, (2, 4, 16, 1, 6, 3)),
    "EI": (0.5, (1, 2, 0.25, 4, 8, 0.125)),
    "P": (2, (1, 4, 0.5, 8, 0.25)),
}

RATIO = DistractorPolicy(tolerance=RATIO_TOLERANCE, decimals=4)


class Comparison(NamedTuple):
    structure_a: str
    structure_b: str
    L_a: int
    L_b: int
    P_a: int
    P_b: int


COMPARISON_CASES = (
    Comparison("simple", "cantilever", 4, 4, 1, 1),
    Comparison("simple", "cantilever", 2, 1, 1, 1),
    Comparison("simple", "cantilever", 2, 1, 2, 1),
    Comparison("simple", "cantilever", 4, 2, 4, 1),
    Comparison("simple", "cantilever", 4, 2, 1, 1),
    Comparison("cantilever", "simple", 4, 4, 1, 1),
    Comparison("cantilever", "simple", 1, 2, 1, 1),
    Comparison("cantilever", "simple", 1, 2, 1, 2),
    Comparison("cantilever", "simple", 2, 4, 1, 4),
)


def deflection(structure: str, P: float, L: float, EI: float = 1.0) -> float:
    return P * L ** 3 / (DEFLECTION_COEFFICIENTS[structure] * EI)


def comparison_ratio(case: Comparison) -> float:
    delta_a = deflection(case.structure_a, case.P_a, case.L_a)
    delta_b = deflection(case.structure_b, case.P_b, case.L_b)
    return round_half_up(delta_a / delta_b, 4)


def generate_proportional(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    structure = ctx.pick(tuple(DEFLECTION_COEFFICIENTS))
    variable = ctx.pick(tuple(PROPORTIONALITY))
    answer, candidates = PROPORTIONALITY[variable]
    k = DEFLECTION_COEFFICIENTS[structure]
    reason = {
        "L": f"δ ∝ L³, so doubling L multiplies δ by {MULTIPLIER}³ = {fmt(answer)}.",
        "EI": f"δ ∝ 1/EI, so doubling EI multiplies δ by 1/{MULTIPLIER} = {fmt(answer)}.",
        "P": f"δ ∝ P, so doubling P multiplies δ by {MULTIPLIER}.",
    }[variable]
    return assemble_problem(
        ctx,
        category=Category.DEFLECTION,
        difficulty=difficulty,
        target=Target.DEFLECTION_RATIO,
        answer=float(answer),
        question=(
            f"For {STRUCTURE_TEXT[structure]}, {variable} is doubled while everything else stays "
            "the same. By what factor does the maximum deflection δ change?"
        ),
        steps=[f"δ = P × L³ / ({k}EI)", reason],
        candidates=[float(c) for c in candidates],
        policy=RATIO,
        params={"multiplier": MULTIPLIER},
        pattern=f"proportional-{variable}",
        display={"structure": structure, "variable": variable},
    )


def generate_comparison(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    case = ctx.pick(COMPARISON_CASES)
    answer = comparison_ratio(case)
    k_a = DEFLECTION_COEFFICIENTS[case.structure_a]
    k_b = DEFLECTION_COEFFICIENTS[case.structure_b]
    num_a = case.P_a * case.L_a ** 3
    num_b = case.P_b * case.L_b ** 3
    steps = [
        f"Beam A: δ_A = P_A × L_A³ / ({k_a}EI) = {num_a} / ({k_a}EI)",
        f"Beam B: δ_B = P_B × L_B³ / ({k_b}EI) = {num_b} / ({k_b}EI)",
        f"δ_A / δ_B = ({num_a}/{k_a}) / ({num_b}/{k_b}) = {fmt(answer)}",
    ]
    candidates = [
        1 / (num_a / k_a / (num_b / k_b)),  # inverted ratio
        (case.P_a / case.P_b) * (case.L_a / case.L_b),  # L not cubed
        (case.L_a / case.L_b) ** 3,  # support coefficient ignored
        answer * 2, answer / 2, answer * 4, answer / 4,
        1,
    ]
    return assemble_problem(
        ctx,
        category=Category.DEFLECTION,
        difficulty=difficulty,
        target=Target.DEFLECTION_RATIO,
        answer=answer,
        question=(
            f"Beam A is {STRUCTURE_TEXT[case.structure_a]} (span {case.L_a}, load {case.P_a}P); "
            f"beam B is {STRUCTURE_TEXT[case.structure_b]} (span {case.L_b}, load {case.P_b}P). "
            "Both have the same EI. Find the ratio δ_A / δ_B of their maximum deflections."
        ),
        steps=steps,
        candidates=candidates,
        policy=RATIO,
        params={"L_A": case.L_a, "L_B": case.L_b, "P_A": case.P_a, "P_B": case.P_b},
        pattern="comparison",
        display={"deflection_comparison": case._asdict()},
    )


def generate_deflection(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    if difficulty in (Difficulty.INTERMEDIATE, Difficulty.ADVANCED) and ctx.chance(0.5):
        return generate_comparison(ctx, difficulty)
    return generate_proportional(ctx, difficulty)
