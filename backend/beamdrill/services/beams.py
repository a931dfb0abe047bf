"""
Beam generators - simply supported, cantilever and overhanging beams under a
point load or a uniformly distributed load (UDL).

Reactions and moments come from static equilibrium. Every draw is checked
so the asked quantity is a clean one-decimal value; unclean draws are
re-sampled a bounded number of times.
"""
import logging
from dataclasses import dataclass

from beamdrill.models.problem import BEAM_TOLERANCE, Category, Difficulty, Problem, Target
from beamdrill.services.distractors import DistractorPolicy, round_half_up
from beamdrill.services.generation import (
    GenerationContext,
    assemble_problem,
    first_clean,
    fmt,
    is_one_decimal,
)

logger = logging.getLogger(__name__)

L_VALUES = (4, 6, 8, 10)
L_SIMPLE_DISTRIBUTED = (6, 8, 10)
L_CANTILEVER = (2, 3, 4, 5)
L_CANTILEVER_DISTRIBUTED = (3, 4, 5)
P_VALUES = (10, 20, 24, 30, 40, 48, 50, 60, 72, 80, 90, 100)
W_VALUES = (10, 20, 30, 40, 50)

# Load positions a (m from A) allowed for each span
A_BY_L = {4: (2,), 6: (2, 3, 4), 8: (2, 4, 6), 10: (2, 4, 5, 6, 8)}
A_CANTILEVER_BY_L = {2: (2,), 3: (2, 3), 4: (2, 4), 5: (2, 3, 4, 5)}
X_RATIOS = (0.25, 0.5, 0.75)

L_OVERHANG = (4, 6, 8)
C_OVERHANG_BY_L = {4: (2, 3), 6: (2, 3, 4), 8: (2, 3, 4)}
A_OVERHANG_IN_SPAN_BY_L = {4: (2,), 6: (2, 3, 4), 8: (2, 4, 6)}

CANTILEVER_PROBABILITY = 0.25

POSITIVE = DistractorPolicy(tolerance=BEAM_TOLERANCE)
SIGNED = DistractorPolicy(tolerance=BEAM_TOLERANCE, allow_negative=True)

_HARD = (Difficulty.INTERMEDIATE, Difficulty.ADVANCED)


# ============================================================
# CLOSED-FORM RESPONSES
# ============================================================

@dataclass(frozen=True)
class BeamResponse:
    va: float
    vb: float
    m_max: float


def simple_point_load(P: float, L: float, a: float) -> BeamResponse:
    b = L - a
    return BeamResponse(va=P * b / L, vb=P * a / L, m_max=P * a * b / L)


def simple_udl(w: float, L: float) -> BeamResponse:
    return BeamResponse(va=w * L / 2, vb=w * L / 2, m_max=w * L * L / 8)


def simple_udl_at(w: float, L: float, x: float) -> tuple[float, float]:
    """(M(x), Q(x)) with x measured from A; Q is signed."""
    return w * x * (L - x) / 2, w * L / 2 - w * x


def cantilever_point_load(P: float, a: float) -> BeamResponse:
    """Fixed end reaction and |moment| for a load at distance a from the fixed end."""
    return BeamResponse(va=P, vb=0.0, m_max=P * a)


def cantilever_udl(w: float, L: float) -> BeamResponse:
    return BeamResponse(va=w * L, vb=0.0, m_max=w * L * L / 2)


def cantilever_udl_at(w: float, L: float, x: float) -> tuple[float, float]:
    """(|M(x)|, Q(x)) with x measured from the fixed end."""
    return w * (L - x) ** 2 / 2, w * (L - x)


def overhang_point_load(P: float, L: float, c: float, a: float) -> BeamResponse:
    """Span L between supports A and B, overhang c beyond B, load at a from A.

    A load on the overhang lifts A, so V_A is reported as a magnitude and
    M_max is the hogging moment over B.
    """
    if a <= L:
        return simple_point_load(P, L, a)
    overhang = a - L
    return BeamResponse(va=P * overhang / L, vb=P * a / L, m_max=P * overhang)


@dataclass(frozen=True)
class OverhangUdlResponse:
    va: float
    vb: float
    m_span: float
    m_support: float

    @property
    def m_max(self) -> float:
        return max(self.m_span, self.m_support)


def overhang_udl(w: float, L: float, c: float) -> OverhangUdlResponse:
    """UDL over the full length L + c."""
    va = w * (L * L - c * c) / (2 * L)
    return OverhangUdlResponse(
        va=va,
        vb=w * (L + c) ** 2 / (2 * L),
        m_span=va * va / (2 * w),
        m_support=w * c * c / 2,
    )


def overhang_udl_at(w: float, L: float, c: float, x: float) -> tuple[float, float]:
    va = overhang_udl(w, L, c).va
    return va * x - w * x * x / 2, va - w * x


def _around(answer: float, *offsets: float) -> list[float]:
    return [answer + sign * o for o in offsets for sign in (1, -1)]


def _pick_simple_target(ctx: GenerationContext) -> Target:
    r = ctx.rng.random()
    if r < 0.15:
        return Target.VA
    if r < 0.3:
        return Target.VB
    return Target.M_MAX


# ============================================================
# SIMPLY SUPPORTED BEAM
# ============================================================

def _eccentric_positions(L: int) -> tuple[int, ...]:
    return tuple(a for a in A_BY_L[L] if 2 * a != L)


def generate_simple_concentrated(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    if difficulty == Difficulty.BEGINNER:
        eccentric = False
    elif difficulty in _HARD:
        eccentric = True
    else:
        eccentric = ctx.chance(0.7)

    def draw():
        if eccentric:
            L = ctx.pick([span for span in L_VALUES if _eccentric_positions(span)])
            a = ctx.pick(_eccentric_positions(L))
        else:
            L = ctx.pick(L_VALUES)
            a = L / 2
        target = _pick_simple_target(ctx)
        return L, a, ctx.pick(P_VALUES), target

    def value(drawn) -> float:
        L, a, P, target = drawn
        response = simple_point_load(P, L, a)
        return {Target.VA: response.va, Target.VB: response.vb}.get(target, response.m_max)

    L, a, P, target = first_clean(ctx.attempts, draw, lambda d: is_one_decimal(value(d)))
    b = L - a
    response = simple_point_load(P, L, a)
    r = round_half_up
    priority: list[float] = []

    if target == Target.M_MAX:
        answer = r(response.m_max)
        question = "Find the maximum bending moment M_max."
        steps = [
            "M_max = (P × a × b) / L",
            f"= ({fmt(P)} × {fmt(a)} × {fmt(b)}) / {fmt(L)}",
            f"= {fmt(P * a * b)} / {fmt(L)}",
            f"= {fmt(answer)} kN·m",
        ]
        priority = [P * L / 4, P * b / L, P * a / L, P]
        candidates = [
            P * a * b,  # forgot to divide by L
            P * a / L, P * b / L,  # stopped at a reaction
            P * L / 4, P * L / 2, P * L / 8,  # mid-span formulas
            P * a, P * b,
            *_around(answer, 5, 10, 20),
        ]
    elif target == Target.VA:
        answer = r(response.va)
        question = "Find the reaction V_A at support A."
        steps = [
            "Moments about B: V_A × L = P × b, so V_A = P × b / L",
            f"= {fmt(P)} × {fmt(b)} / {fmt(L)}",
            f"= {fmt(P * b)} / {fmt(L)}",
            f"= {fmt(answer)} kN",
        ]
        candidates = [response.vb, P / 2, response.m_max, P, *_around(answer, 5, 10)]
    else:
        answer = r(response.vb)
        question = "Find the reaction V_B at support B."
        steps = [
            "Moments about A: V_B × L = P × a, so V_B = P × a / L",
            f"= {fmt(P)} × {fmt(a)} / {fmt(L)}",
            f"= {fmt(P * a)} / {fmt(L)}",
            f"= {fmt(answer)} kN",
        ]
        candidates = [response.va, P / 2, response.m_max, P, *_around(answer, 5, 10)]

    hide_b = difficulty in _HARD
    return assemble_problem(
        ctx,
        category=Category.SIMPLE_CONCENTRATED,
        difficulty=difficulty,
        target=target,
        answer=answer,
        question=(
            f"A simply supported beam AB of span {fmt(L)} m carries a point load "
            f"P = {fmt(P)} kN at {fmt(a)} m from A. {question}"
        ),
        steps=steps,
        candidates=candidates,
        priority=priority,
        policy=POSITIVE,
        params={"P_kN": P, "L_m": L, "a_m": a, "b_m": b},
        pattern="eccentric" if 2 * a != L else "central",
        display={"support": "simple", "load": "point", "hide_dimension_b": hide_b},
    )


def generate_simple_distributed(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    if difficulty in _HARD and ctx.chance(0.5):
        return _simple_distributed_at_x(ctx, difficulty)

    L = ctx.pick(L_SIMPLE_DISTRIBUTED)
    w = ctx.pick(W_VALUES)
    target = _pick_simple_target(ctx)
    response = simple_udl(w, L)
    r = round_half_up
    priority: list[float] = []

    if target == Target.M_MAX:
        answer = r(response.m_max)
        question = "Find the maximum bending moment M_max."
        steps = [
            "For a UDL on a simple beam the maximum moment is at mid-span:",
            "M_max = w × L² / 8",
            f"= {fmt(w)} × {fmt(L)}² / 8",
            f"= {fmt(w * L * L)} / 8",
            f"= {fmt(answer)} kN·m",
        ]
        priority = [w * L * L / 2, w * L * L / 4, w * L / 2]
        candidates = [w * L * L / 4, w * L * L / 2, w * L / 8, *_around(answer, 10, 20)]
    else:
        answer = r(response.va)
        support = "A" if target == Target.VA else "B"
        question = f"Find the reaction V_{support} at support {support}."
        steps = [
            "The load is symmetric, so each support carries half of the total load wL:",
            f"V_{support} = w × L / 2",
            f"= {fmt(w)} × {fmt(L)} / 2",
            f"= {fmt(answer)} kN",
        ]
        candidates = [w * L, response.m_max, w * L / 4, *_around(answer, 5, 10)]

    return assemble_problem(
        ctx,
        category=Category.SIMPLE_DISTRIBUTED,
        difficulty=difficulty,
        target=target,
        answer=answer,
        question=(
            f"A simply supported beam AB of span {fmt(L)} m carries a uniformly "
            f"distributed load w = {fmt(w)} kN/m over its full length. {question}"
        ),
        steps=steps,
        candidates=candidates,
        priority=priority,
        policy=POSITIVE,
        params={"w_kN_per_m": w, "L_m": L},
        pattern="full-span",
        display={"support": "simple", "load": "distributed"},
    )


def _simple_distributed_at_x(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    target = Target.M_AT_X if ctx.chance(0.5) else Target.Q_AT_X

    def draw():
        L = ctx.pick(L_SIMPLE_DISTRIBUTED)
        return L, ctx.pick(W_VALUES), round_half_up(L * ctx.pick(X_RATIOS))

    def value(drawn) -> float:
        moment, shear = simple_udl_at(*drawn)
        return moment if target == Target.M_AT_X else shear

    L, w, x = first_clean(ctx.attempts, draw, lambda d: is_one_decimal(value(d)))
    moment, shear = simple_udl_at(w, L, x)
    r = round_half_up

    if target == Target.M_AT_X:
        answer = r(moment)
        question = f"Find the bending moment M at x = {fmt(x)} m from A."
        steps = [
            "M(x) = V_A × x − w × x² / 2 = w × x × (L − x) / 2",
            f"M({fmt(x)}) = {fmt(w)} × {fmt(x)} × ({fmt(L)} − {fmt(x)}) / 2",
            f"= {fmt(answer)} kN·m",
        ]
        candidates = [
            w * L * L / 8,  # mid-span value instead of M(x)
            w * L * L / 4, w * L / 2,
            w * x, w * (L - x),
            *_around(answer, 10),
        ]
        policy = POSITIVE
    else:
        answer = r(shear)
        question = f"Find the shear force Q at x = {fmt(x)} m from A (upward on the left face positive)."
        steps = [
            "Q(x) = V_A − w × x, with V_A = w × L / 2",
            f"Q({fmt(x)}) = {fmt(w * L / 2)} − {fmt(w)} × {fmt(x)}",
            f"= {fmt(answer)} kN",
        ]
        candidates = [w * L / 2, -w * L / 2, moment, w * x, -answer, *_around(answer, 5)]
        policy = SIGNED

    return assemble_problem(
        ctx,
        category=Category.SIMPLE_DISTRIBUTED,
        difficulty=difficulty,
        target=target,
        answer=answer,
        question=(
            f"A simply supported beam AB of span {fmt(L)} m carries a UDL "
            f"w = {fmt(w)} kN/m over its full length. {question}"
        ),
        steps=steps,
        candidates=candidates,
        policy=policy,
        params={"w_kN_per_m": w, "L_m": L, "x_m": x},
        pattern="at-x",
        display={"support": "simple", "load": "distributed", "x_m": x},
    )


# ============================================================
# CANTILEVER
# ============================================================

def generate_cantilever_concentrated(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    L = ctx.pick(L_CANTILEVER)
    a = L if difficulty == Difficulty.BEGINNER else ctx.pick(A_CANTILEVER_BY_L[L])
    P = ctx.pick(P_VALUES)
    target = Target.M_MAX if ctx.chance(0.5) else Target.VA
    response = cantilever_point_load(P, a)
    r = round_half_up
    priority: list[float] = []

    if target == Target.M_MAX:
        answer = r(response.m_max)
        question = "Find the magnitude of the maximum bending moment (at the fixed end)."
        steps = [
            "The moment is largest at the fixed end: |M_max| = P × a",
            f"= {fmt(P)} × {fmt(a)}",
            f"= {fmt(answer)} kN·m",
        ]
        candidates = [P * L, P / 2, P, P * a / L, *_around(answer, 5, 10)]
    else:
        answer = r(response.va)
        question = "Find the vertical reaction V_A at the fixed end."
        steps = [
            "Vertical equilibrium: V_A − P = 0, so V_A = P",
            f"= {fmt(answer)} kN",
        ]
        priority = [P * L, P / 2]
        candidates = [P * L, P / 2, P * a, P * a / L, *_around(answer, 5, 10)]

    return assemble_problem(
        ctx,
        category=Category.CANTILEVER_CONCENTRATED,
        difficulty=difficulty,
        target=target,
        answer=answer,
        question=(
            f"A cantilever of length {fmt(L)} m is fixed at A and carries a point "
            f"load P = {fmt(P)} kN at {fmt(a)} m from the fixed end. {question}"
        ),
        steps=steps,
        candidates=candidates,
        priority=priority,
        policy=POSITIVE,
        params={"P_kN": P, "L_m": L, "a_m": a},
        pattern="tip-load" if a == L else "intermediate-load",
        display={"support": "cantilever", "load": "point"},
    )


def generate_cantilever_distributed(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    if difficulty in _HARD and ctx.chance(0.5):
        return _cantilever_distributed_at_x(ctx, difficulty)

    L = ctx.pick(L_CANTILEVER_DISTRIBUTED)
    w = ctx.pick(W_VALUES)
    target = Target.M_MAX if ctx.chance(0.5) else Target.VA
    response = cantilever_udl(w, L)
    r = round_half_up
    priority: list[float] = []

    if target == Target.M_MAX:
        answer = r(response.m_max)
        question = "Find the magnitude of the maximum bending moment (at the fixed end)."
        steps = [
            "The resultant wL acts at L/2 from the fixed end:",
            "|M_max| = w × L × L / 2 = w × L² / 2",
            f"= {fmt(w)} × {fmt(L)}² / 2",
            f"= {fmt(answer)} kN·m",
        ]
        priority = [w * L * L / 8, w * L, w * L / 2]
        candidates = [w * L * L / 4, w * L * L, *_around(answer, 10, 20)]
    else:
        answer = r(response.va)
        question = "Find the vertical reaction V_A at the fixed end."
        steps = [
            "The fixed end carries the whole load: V_A = w × L",
            f"= {fmt(w)} × {fmt(L)}",
            f"= {fmt(answer)} kN",
        ]
        candidates = [w * L / 2, w * L * L / 2, w * L * L / 8, *_around(answer, 5, 10)]

    return assemble_problem(
        ctx,
        category=Category.CANTILEVER_DISTRIBUTED,
        difficulty=difficulty,
        target=target,
        answer=answer,
        question=(
            f"A cantilever of length {fmt(L)} m is fixed at A and carries a UDL "
            f"w = {fmt(w)} kN/m over its full length. {question}"
        ),
        steps=steps,
        candidates=candidates,
        priority=priority,
        policy=POSITIVE,
        params={"w_kN_per_m": w, "L_m": L},
        pattern="full-length",
        display={"support": "cantilever", "load": "distributed"},
    )


def _cantilever_distributed_at_x(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    target = Target.M_AT_X if ctx.chance(0.5) else Target.Q_AT_X

    def draw():
        L = ctx.pick(L_CANTILEVER_DISTRIBUTED)
        return L, ctx.pick(W_VALUES), round_half_up(L * ctx.pick(X_RATIOS))

    def value(drawn) -> float:
        moment, shear = cantilever_udl_at(*drawn)
        return moment if target == Target.M_AT_X else shear

    L, w, x = first_clean(ctx.attempts, draw, lambda d: is_one_decimal(value(d)))
    moment, shear = cantilever_udl_at(w, L, x)
    r = round_half_up
    outboard = L - x

    if target == Target.M_AT_X:
        answer = r(moment)
        question = f"Find the magnitude of the bending moment at x = {fmt(x)} m from the fixed end."
        steps = [
            "Only the load beyond the section acts: a length (L − x) with resultant at its centre.",
            "|M(x)| = w × (L − x)² / 2",
            f"= {fmt(w)} × ({fmt(L)} − {fmt(x)})² / 2",
            f"= {fmt(answer)} kN·m",
        ]
        candidates = [
            w * L * L / 2,  # fixed-end value instead of M(x)
            w * L * L / 8, w * outboard, w * L,
            *_around(answer, 10),
        ]
    else:
        answer = r(shear)
        question = f"Find the magnitude of the shear force at x = {fmt(x)} m from the fixed end."
        steps = [
            "The shear equals the load beyond the section: Q(x) = w × (L − x)",
            f"= {fmt(w)} × ({fmt(L)} − {fmt(x)})",
            f"= {fmt(answer)} kN",
        ]
        candidates = [w * L, w * L / 2, moment, w * x, *_around(answer, 5)]

    return assemble_problem(
        ctx,
        category=Category.CANTILEVER_DISTRIBUTED,
        difficulty=difficulty,
        target=target,
        answer=answer,
        question=(
            f"A cantilever of length {fmt(L)} m is fixed at A and carries a UDL "
            f"w = {fmt(w)} kN/m over its full length. {question}"
        ),
        steps=steps,
        candidates=candidates,
        policy=POSITIVE,
        params={"w_kN_per_m": w, "L_m": L, "x_m": x},
        pattern="at-x",
        display={"support": "cantilever", "load": "distributed", "x_m": x},
    )


# ============================================================
# OVERHANGING BEAM
# ============================================================

def _pick_overhang_target(ctx: GenerationContext) -> Target:
    r = ctx.rng.random()
    if r < 1 / 3:
        return Target.VA
    if r < 2 / 3:
        return Target.VB
    return Target.M_MAX


def _response_value(response, target: Target) -> float:
    if target == Target.VA:
        return response.va
    if target == Target.VB:
        return response.vb
    return response.m_max


def generate_overhang_concentrated(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    def draw():
        L = ctx.pick(L_OVERHANG)
        c = ctx.pick(C_OVERHANG_BY_L[L])
        in_span = ctx.chance(0.5)
        a = ctx.pick(A_OVERHANG_IN_SPAN_BY_L[L]) if in_span else L + c
        return L, c, a, ctx.pick(P_VALUES), _pick_overhang_target(ctx)

    def is_clean(drawn) -> bool:
        L, c, a, P, target = drawn
        return is_one_decimal(_response_value(overhang_point_load(P, L, c, a), target))

    L, c, a, P, target = first_clean(ctx.attempts, draw, is_clean)
    response = overhang_point_load(P, L, c, a)
    answer = round_half_up(_response_value(response, target))
    at_tip = a > L

    if at_tip:
        steps = {
            Target.VA: [
                "Moments about B: V_A × L = P × c (V_A acts downward)",
                f"|V_A| = P × c / L = {fmt(P)} × {fmt(c)} / {fmt(L)}",
                f"= {fmt(answer)} kN",
            ],
            Target.VB: [
                "Moments about A: V_B × L = P × (L + c)",
                f"V_B = {fmt(P)} × ({fmt(L)} + {fmt(c)}) / {fmt(L)}",
                f"= {fmt(answer)} kN",
            ],
            Target.M_MAX: [
                "The largest moment is the hogging moment over support B:",
                f"|M_B| = P × c = {fmt(P)} × {fmt(c)}",
                f"= {fmt(answer)} kN·m",
            ],
        }[target]
        load_text = f"at the free end of the overhang ({fmt(c)} m beyond B)"
    else:
        b = L - a
        steps = {
            Target.VA: [
                "With the load inside the span the overhang is unloaded; treat AB as a simple beam.",
                f"V_A = P × b / L = {fmt(P)} × {fmt(b)} / {fmt(L)}",
                f"= {fmt(answer)} kN",
            ],
            Target.VB: [
                "With the load inside the span the overhang is unloaded; treat AB as a simple beam.",
                f"V_B = P × a / L = {fmt(P)} × {fmt(a)} / {fmt(L)}",
                f"= {fmt(answer)} kN",
            ],
            Target.M_MAX: [
                "With the load inside the span the overhang is unloaded; treat AB as a simple beam.",
                f"M_max = P × a × b / L = {fmt(P)} × {fmt(a)} × {fmt(b)} / {fmt(L)}",
                f"= {fmt(answer)} kN·m",
            ],
        }[target]
        load_text = f"at {fmt(a)} m from A"

    asked = {
        Target.VA: "Find the magnitude of the reaction V_A.",
        Target.VB: "Find the reaction V_B.",
        Target.M_MAX: "Find the magnitude of the maximum bending moment.",
    }[target]
    candidates = [
        response.va, response.vb, response.m_max, P, P * L / 4,
        P * c,  # overhang moment regardless of load position
        *_around(answer, 5, 10),
    ]
    return assemble_problem(
        ctx,
        category=Category.OVERHANG_CONCENTRATED,
        difficulty=difficulty,
        target=target,
        answer=answer,
        question=(
            f"A beam is supported at A and B ({fmt(L)} m apart) and overhangs B by "
            f"{fmt(c)} m. A point load P = {fmt(P)} kN acts {load_text}. {asked}"
        ),
        steps=steps,
        candidates=candidates,
        policy=POSITIVE,
        params={"P_kN": P, "L_m": L, "c_m": c, "a_m": a},
        pattern="tip-load" if at_tip else "span-load",
        display={"support": "overhang", "load": "point", "overhang_m": c},
    )


# Used when every draw in the retry budget is rejected
_OVERHANG_UDL_FALLBACK = (4, 2, 10, Target.M_MAX, None)


def generate_overhang_distributed(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    use_at_x = difficulty in _HARD and ctx.chance(0.4)

    def draw():
        L = ctx.pick(L_OVERHANG)
        c = ctx.pick(C_OVERHANG_BY_L[L])
        w = ctx.pick(W_VALUES)
        if use_at_x:
            x = round_half_up(L * ctx.pick(X_RATIOS))
            target = Target.M_AT_X if ctx.chance(0.5) else Target.Q_AT_X
            return L, c, w, target, x
        return L, c, w, _pick_overhang_target(ctx), None

    def is_clean(drawn) -> bool:
        L, c, w, target, x = drawn
        if x is not None:
            moment, shear = overhang_udl_at(w, L, c, x)
            if target == Target.M_AT_X:
                return moment > 0 and is_one_decimal(moment)
            return is_one_decimal(shear)
        return is_one_decimal(_response_value(overhang_udl(w, L, c), target))

    L, c, w, target, x = first_clean(
        ctx.overhang_attempts, draw, is_clean, fallback=lambda: _OVERHANG_UDL_FALLBACK
    )
    response = overhang_udl(w, L, c)
    va = response.va
    r = round_half_up
    policy = POSITIVE
    display = {"support": "overhang", "load": "distributed", "overhang_m": c}

    if target == Target.M_AT_X:
        moment, _ = overhang_udl_at(w, L, c, x)
        answer = r(moment)
        asked = f"Find the bending moment at x = {fmt(x)} m from A."
        steps = [
            "Inside the span: M(x) = V_A × x − w × x² / 2",
            f"with V_A = w × (L² − c²) / (2L) = {fmt(r(va))} kN",
            f"M({fmt(x)}) = {fmt(r(va))} × {fmt(x)} − {fmt(w)} × {fmt(x)}² / 2",
            f"= {fmt(answer)} kN·m",
        ]
        candidates = [
            va * x,  # forgot the load term
            w * x * (L - x) / 2,  # simple-beam formula ignoring the overhang
            response.vb * (L - x),
            *_around(answer, 10),
        ]
    elif target == Target.Q_AT_X:
        _, shear = overhang_udl_at(w, L, c, x)
        answer = r(shear)
        asked = f"Find the shear force Q at x = {fmt(x)} m from A (upward on the left face positive)."
        steps = [
            "Inside the span: Q(x) = V_A − w × x",
            f"with V_A = w × (L² − c²) / (2L) = {fmt(r(va))} kN",
            f"Q({fmt(x)}) = {fmt(r(va))} − {fmt(w)} × {fmt(x)}",
            f"= {fmt(answer)} kN",
        ]
        candidates = [va, w * x, w * L / 2 - w * x, -answer, *_around(answer, 5)]
        policy = SIGNED
    else:
        answer = r(_response_value(response, target))
        if target == Target.VA:
            asked = "Find the reaction V_A."
            steps = [
                "Moments about B: V_A × L = w × (L + c) × ((L + c)/2 − c)",
                "V_A = w × (L² − c²) / (2L)",
                f"= {fmt(w)} × ({fmt(L)}² − {fmt(c)}²) / (2 × {fmt(L)})",
                f"= {fmt(answer)} kN",
            ]
        elif target == Target.VB:
            asked = "Find the reaction V_B."
            steps = [
                "Moments about A: V_B × L = w × (L + c)² / 2",
                "V_B = w × (L + c)² / (2L)",
                f"= {fmt(w)} × ({fmt(L)} + {fmt(c)})² / (2 × {fmt(L)})",
                f"= {fmt(answer)} kN",
            ]
        else:
            asked = "Find the magnitude of the maximum bending moment."
            steps = [
                "M_max is the larger of the span moment (where Q = 0) and the hogging moment over B.",
                f"M_span = V_A² / (2w) = {fmt(r(va))}² / (2 × {fmt(w)}) = {fmt(r(response.m_span))} kN·m",
                f"|M_B| = w × c² / 2 = {fmt(w)} × {fmt(c)}² / 2 = {fmt(r(response.m_support))} kN·m",
                f"M_max = {fmt(answer)} kN·m",
            ]
        candidates = [
            va, response.vb, response.m_max,
            min(response.m_span, response.m_support),
            w * (L + c) / 2,  # half the total load on each support
            w * L * L / 8,  # simple-beam mid-span moment
            *_around(answer, 10),
        ]

    if x is not None:
        display["x_m"] = x
    params = {"w_kN_per_m": w, "L_m": L, "c_m": c}
    if x is not None:
        params["x_m"] = x
    return assemble_problem(
        ctx,
        category=Category.OVERHANG_DISTRIBUTED,
        difficulty=difficulty,
        target=target,
        answer=answer,
        question=(
            f"A beam is supported at A and B ({fmt(L)} m apart) and overhangs B by "
            f"{fmt(c)} m. A UDL w = {fmt(w)} kN/m acts over the whole length. {asked}"
        ),
        steps=steps,
        candidates=candidates,
        policy=policy,
        params=params,
        pattern="at-x" if x is not None else "full-length",
        display=display,
    )
