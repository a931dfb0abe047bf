"""
Truss generators - member axial forces by the method of joints / sections.

Sign convention throughout: tension positive (+), compression negative (−).
The final explanation line always states the verdict for the asked member.
"""
import logging

from beamdrill.models.problem import BEAM_TOLERANCE, Category, Difficulty, Problem, Target
from beamdrill.services.distractors import DistractorPolicy
from beamdrill.services.generation import GenerationContext, assemble_problem, fmt

logger = logging.getLogger(__name__)

P_VALUES = (20, 24, 30, 40)
L_VALUES = (3, 4, 5)
PRATT_P_BY_L = {4: (24, 30, 36), 8: (24, 30, 36, 48)}

AXIAL = DistractorPolicy(tolerance=BEAM_TOLERANCE, allow_negative=True, allow_zero=True)

SIGN_CONVENTION = "Sign convention: tension is positive (+), compression is negative (−)."


def verdict(member: str, force: float) -> str:
    if force > 0:
        return f"Member {member} is in tension: N_{member} = +{fmt(force)} kN."
    if force < 0:
        return f"Member {member} is in compression: N_{member} = {fmt(force)} kN."
    return f"Member {member} is a zero-force member: N_{member} = 0 kN."


def triangle_bottom_chord(P: float) -> float:
    """45° triangular truss, apex load P: bottom chord force."""
    return P / 2


def cantilever_truss_forces(P: float) -> dict[str, float]:
    """Two-panel cantilever truss, square panels, tip load P."""
    return {"A": P, "B": -2 * P}


def pratt_forces(P: float) -> dict[str, float]:
    """Two-panel Pratt truss (3:4:5), load P at the bottom centre joint."""
    return {"A": 5 * P / 6, "B": -2 * P / 3, "C": 0.0, "D": 0.0}


def _problem(ctx, category, difficulty, answer, question, steps, candidates, params, pattern, member):
    return assemble_problem(
        ctx,
        category=category,
        difficulty=difficulty,
        target=Target.AXIAL_FORCE,
        answer=answer,
        question=question,
        steps=[SIGN_CONVENTION, *steps, verdict(member, answer)],
        candidates=candidates,
        policy=AXIAL,
        params=params,
        pattern=pattern,
        display={"truss_pattern": pattern, "member": member},
    )


# ============================================================
# TRIANGULAR TRUSS
# ============================================================

def generate_triangle(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    P = ctx.pick(P_VALUES)
    L = ctx.pick(L_VALUES)
    answer = triangle_bottom_chord(P)
    steps = [
        "By symmetry each support reaction is P/2.",
        "At a support joint the 45° rafter's vertical component balances P/2, "
        "so its horizontal component is also P/2.",
        "The bottom chord balances that horizontal component: N_A = (P/2) × cot 45° = P/2",
        f"= {fmt(P)} / 2 = {fmt(answer)} kN",
    ]
    candidates = [0, -answer, P, -P, P / 4, -P / 4, 3 * P / 4]
    return _problem(
        ctx, Category.TRUSS_CALCULATION, difficulty, answer,
        (
            f"A triangular truss with 45° rafters spans 2 × {L} m and carries P = {P} kN "
            "at the apex. Find the axial force in the bottom chord A."
        ),
        steps, candidates, {"P_kN": P, "L_m": L}, "simple-triangle", "A",
    )


# ============================================================
# ZERO-FORCE MEMBERS
# ============================================================

def generate_zero_member(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    P = ctx.pick(P_VALUES)
    L = ctx.pick(L_VALUES)
    t_joint = ctx.chance(0.5)
    if t_joint:
        joint_text = (
            "At the unloaded T-joint on the top chord the two chord members are collinear; "
            "member A (the vertical below the joint) is the only one off that line."
        )
        pattern = "zero-member-t"
    else:
        joint_text = (
            "At the unloaded L-joint two members meet; each must carry zero force "
            "because neither can balance the other's component."
        )
        pattern = "zero-member-l"
    steps = [
        "Zero-force rule: at an unloaded joint with three members, two of them collinear, "
        "the third carries no force.",
        joint_text,
    ]
    candidates = [P / 2, -P / 2, P, -P, P / 4, -P / 4]
    return _problem(
        ctx, Category.TRUSS_ZERO, difficulty, 0.0,
        (
            f"The truss shown (panel length {L} m) carries P = {P} kN. "
            "Find the axial force in member A."
        ),
        steps, candidates, {"P_kN": P, "L_m": L}, pattern, "A",
    )


# ============================================================
# CANTILEVER TRUSS
# ============================================================

def generate_cantilever_truss(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    P = ctx.pick(P_VALUES)
    L = ctx.pick(L_VALUES)
    member = ctx.pick(("A", "B"))
    answer = cantilever_truss_forces(P)[member]
    if member == "A":
        steps = [
            "Cut through the first panel and keep the free body on the tip side.",
            "Take moments about the lower middle joint: the lever arm to P is L, the chord depth is L.",
            "|N_A| = P × L / L = P; the top chord is pulled away from the wall.",
        ]
    else:
        steps = [
            "Cut through the first panel and keep the free body on the tip side.",
            "Take moments about the upper wall joint: the lever arm to P is 2L, the chord depth is L.",
            "|N_B| = P × 2L / L = 2P; the bottom chord is pushed into the wall.",
        ]
    candidates = [0, P / 2, -P / 2, P, -P, 2 * P, -2 * P, P / 4, -P / 4]
    return _problem(
        ctx, Category.TRUSS_CALCULATION, difficulty, answer,
        (
            f"A two-panel cantilever truss (square panels, {L} m) is fixed to a wall and "
            f"carries P = {P} kN at its tip. Find the axial force in member {member}."
        ),
        steps, candidates, {"P_kN": P, "L_m": L}, "cantilever-truss", member,
    )


# ============================================================
# PRATT TRUSS
# ============================================================

_PRATT_STEPS = {
    "A": "At the upper end joint the diagonal's vertical component carries P/2: "
         "N_A × 3/5 = P/2, so N_A = 5P/6.",
    "B": "Horizontal equilibrium at the upper end joint: the top chord balances the "
         "diagonal's horizontal component, N_B = −(4/5) × 5P/6 = −2P/3.",
    "C": "The lower end joint only has the reaction and the end vertical acting vertically, "
         "so the horizontal bottom chord C carries nothing.",
    "D": "At the loaded bottom centre joint the two diagonals' vertical components take P, "
         "leaving nothing for the centre vertical D.",
}

_PRATT_LABELS = {"A": "end diagonal", "B": "top chord", "C": "end bottom chord", "D": "centre vertical"}


def generate_pratt(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    L = ctx.pick((4, 8))
    P = ctx.pick(PRATT_P_BY_L[L])
    h = 3 * L // 4
    member = ctx.pick(("A", "B", "C", "D"))
    forces = pratt_forces(P)
    answer = forces[member]
    steps = [
        "The load sits at mid-span, so each support reaction is P/2.",
        f"Panels are {L} m wide and {h} m high, so the diagonals have slope 3:4:5.",
        _PRATT_STEPS[member],
    ]
    if member in ("A", "B"):
        steps.append(f"With P = {P} kN: N_{member} = {fmt(answer)} kN")
    a, b = forces["A"], forces["B"]
    candidates = [0, -answer, P, -P, a, -a, b, -b, P / 2, -P / 2, answer / 2, answer * 2]
    return _problem(
        ctx, Category.TRUSS_CALCULATION, difficulty, answer,
        (
            f"A two-panel Pratt truss (span 2 × {L} m, height {h} m) carries P = {P} kN at the "
            f"bottom centre joint. Find the axial force in member {member} ({_PRATT_LABELS[member]})."
        ),
        steps, candidates, {"P_kN": P, "L_m": L, "h_m": h}, "pratt-truss", member,
    )


def generate_truss_calculation(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    if difficulty == Difficulty.BEGINNER:
        return generate_triangle(ctx, difficulty)
    r = ctx.rng.random()
    if r < 1 / 3:
        return generate_triangle(ctx, difficulty)
    if r < 2 / 3:
        return generate_cantilever_truss(ctx, difficulty)
    return generate_pratt(ctx, difficulty)
