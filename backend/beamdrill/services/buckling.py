"""
Buckling generators - effective length l_k = γL and the Euler load ratio
relative to a pinned-pinned column (P_cr ∝ 1/l_k², so the ratio is 1/γ²).
"""
import logging

from beamdrill.models.problem import BEAM_TOLERANCE, Category, Difficulty, Problem, Target
from beamdrill.services.distractors import DistractorPolicy, round_half_up
from beamdrill.services.generation import GenerationContext, assemble_problem, fmt

logger = logging.getLogger(__name__)

GAMMA = {
    "pinned-pinned": 1.0,
    "fixed-fixed": 0.5,
    "fixed-pinned": 0.7,
    "fixed-free": 2.0,
}
SUPPORT_LABELS = {
    "pinned-pinned": "pinned at both ends",
    "fixed-fixed": "fixed at both ends",
    "fixed-pinned": "fixed at one end and pinned at the other",
    "fixed-free": "fixed at the base and free at the top",
}
L_VALUES = (2, 3, 4, 5)

# Ratios a student reaches by a typical slip: 1/γ² inverted, γ itself, the baseline, 0.7 confusion
RATIO_TRAPS = (0.25, 0.5, 1, 2)

LENGTH_POLICY = DistractorPolicy(tolerance=BEAM_TOLERANCE, decimals=1)
RATIO_POLICY = DistractorPolicy(tolerance=BEAM_TOLERANCE, decimals=2)


def effective_length(support: str, L: float) -> float:
    return round_half_up(GAMMA[support] * L, 1)


def load_ratio(support: str) -> float:
    # γ² is rounded first so 0.7² lands on 0.49 rather than 0.48999...
    gamma_squared = round_half_up(GAMMA[support] ** 2, 2)
    return round_half_up(1 / gamma_squared, 2)


def generate_buckling_length(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    support = ctx.pick(tuple(GAMMA))
    L = ctx.pick(L_VALUES)
    gamma = GAMMA[support]
    answer = effective_length(support, L)
    steps = [
        "The effective length depends on the end conditions: l_k = γ × L",
        f"A column {SUPPORT_LABELS[support]} has γ = {fmt(gamma)}.",
        f"l_k = {fmt(gamma)} × {L} = {fmt(answer)} m",
    ]
    candidates = [effective_length(other, L) for other in GAMMA if other != support]
    candidates += [0.5 * L, 1.0 * L, 2.0 * L]
    return assemble_problem(
        ctx,
        category=Category.BUCKLING,
        difficulty=difficulty,
        target=Target.LK,
        answer=answer,
        question=f"A column of length L = {L} m is {SUPPORT_LABELS[support]}. Find its effective buckling length l_k.",
        steps=steps,
        candidates=candidates,
        policy=LENGTH_POLICY,
        params={"L_m": L, "gamma": gamma},
        pattern="effective-length",
        display={"buckling_support": support},
    )


def generate_buckling_load(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    support = ctx.pick(tuple(GAMMA))
    L = ctx.pick(L_VALUES)
    gamma = GAMMA[support]
    answer = load_ratio(support)
    steps = [
        "Euler load: P_cr = π²EI / l_k², so for equal E, I and L the load scales with 1/γ².",
        f"A column {SUPPORT_LABELS[support]} has γ = {fmt(gamma)}, γ² = {fmt(round_half_up(gamma ** 2, 2))}.",
        f"P_cr / P_cr(pinned-pinned) = 1 / γ² = {fmt(answer)}",
    ]
    traps = list(RATIO_TRAPS)
    ctx.rng.shuffle(traps)
    candidates = [load_ratio(other) for other in GAMMA if other != support]
    return assemble_problem(
        ctx,
        category=Category.BUCKLING,
        difficulty=difficulty,
        target=Target.P_RATIO,
        answer=answer,
        question=(
            f"Two columns have the same material, section and length L = {L} m. One is pinned at "
            f"both ends; the other is {SUPPORT_LABELS[support]}. How many times the pinned-pinned "
            "buckling load is the second column's buckling load?"
        ),
        steps=steps,
        candidates=candidates,
        priority=traps,
        policy=RATIO_POLICY,
        params={"L_m": L, "gamma": gamma},
        pattern="load-ratio",
        display={"buckling_support": support},
    )


def generate_buckling(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    if difficulty == Difficulty.BEGINNER:
        return generate_buckling_length(ctx, difficulty)
    if difficulty == Difficulty.MIXED and ctx.chance(0.5):
        return generate_buckling_length(ctx, difficulty)
    return generate_buckling_load(ctx, difficulty)
