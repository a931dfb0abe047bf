"""
Stress generators - bending stress, combined axial + bending stress,
short columns under eccentric load, and beam shear stress.

Forces are in kN and kN·m, dimensions in mm, stresses in N/mm².
"""
import logging
from fractions import Fraction

from beamdrill.models.problem import SECTION_TOLERANCE, Category, Difficulty, Problem, Target
from beamdrill.services.distractors import DistractorPolicy
from beamdrill.services.generation import GenerationContext, assemble_problem, fmt
from beamdrill.services.pools import rect_inertia
from beamdrill.services.sections import generate_section_properties

logger = logging.getLogger(__name__)

STRESS = DistractorPolicy(tolerance=SECTION_TOLERANCE, decimals=0)
SIGNED_STRESS = DistractorPolicy(tolerance=SECTION_TOLERANCE, decimals=0, allow_negative=True, allow_zero=True)
SHEAR = DistractorPolicy(tolerance=SECTION_TOLERANCE, decimals=1)

# (combined, shear, short column) cumulative thresholds; the rest is simple bending
MIX_BY_TIER = {
    Difficulty.INTERMEDIATE: (0.35, 0.5, 0.65),
    Difficulty.MIXED: (0.35, 0.5, 0.65),
    Difficulty.ADVANCED: (0.4, 0.55, 0.75),
}


def _stress(moment_knm: float | Fraction, modulus: float | Fraction) -> Fraction:
    return Fraction(moment_knm) * 10 ** 6 / Fraction(modulus)


def _support_text(support: str, L: int, P: int) -> str:
    if support == "cantilever":
        return f"A cantilever of length {L} m carries a point load P = {P} kN at its free end."
    return f"A simply supported beam of span {L} m carries a point load P = {P} kN at mid-span."


# ============================================================
# BENDING STRESS
# ============================================================

def generate_simple_bending(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    case = ctx.pick(ctx.pools.bending_cases)
    b, h, L, P = case.b, case.h, case.L, case.P
    sigma = case.sigma
    Z = case.Z

    if case.support == "cantilever":
        moment_steps = [f"M_max = P × L = {P} × {L} = {fmt(case.M)} kN·m (at the fixed end)"]
        confusions = [_stress(Fraction(P * L, 4), Z)]  # simple-beam formula
    else:
        moment_steps = [f"M_max = P × L / 4 = {P} × {L} / 4 = {fmt(case.M)} kN·m"]
        confusions = [
            _stress(Fraction(P * L, 8), Z),  # UDL formula
            _stress(P * L, Z),  # cantilever formula
        ]

    steps = moment_steps + [
        f"Z = b × h² / 6 = {b} × {h}² / 6 = {fmt(Z)} mm³",
        "σ = M / Z (M in N·mm)",
        f"= {fmt(case.M)} × 10⁶ / {fmt(Z)}",
        f"= {fmt(sigma)} N/mm²",
    ]
    candidates = [
        _stress(case.M, b * h * h),  # forgot the 6
        Fraction(case.M) * 10 ** 3 / Z,  # kN·m converted with 10³
        _stress(case.M, rect_inertia(b, h)),  # used I instead of Z
        2 * sigma, Fraction(sigma, 2),
        *confusions,
    ]
    plausible = [c for c in candidates if Fraction(sigma, 4) <= c <= 4 * sigma]
    if len(plausible) >= 3:
        candidates = plausible

    return assemble_problem(
        ctx,
        category=Category.BENDING_STRESS,
        difficulty=difficulty,
        target=Target.SIGMA,
        answer=float(sigma),
        question=(
            f"{_support_text(case.support, L, P)} The section is a rectangle "
            f"b × h = {b} × {h} mm. Find the maximum bending stress σ."
        ),
        steps=steps,
        candidates=[float(c) for c in candidates],
        policy=STRESS,
        params={"P_kN": P, "L_m": L, "b_mm": b, "h_mm": h},
        pattern="bending",
        display={"support": case.support, "shape": "rectangle"},
    )


def generate_combined(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    combined = ctx.pick(ctx.pools.combined_cases)
    case = combined.bending
    b, h = case.b, case.h
    sigma_axial, sigma_bending = combined.sigma_axial, case.sigma
    tension_face = ctx.chance(0.5)
    area = b * h

    steps = [
        "Combined stress: σ = N/A ± M/Z (tension positive)",
        f"σ_N = N / A = {fmt(combined.N)} × 10³ / ({b} × {h}) = {sigma_axial} N/mm²",
        f"σ_b = M / Z = {fmt(case.M)} × 10⁶ / {fmt(case.Z)} = {sigma_bending} N/mm²",
    ]
    if tension_face:
        answer = combined.sigma_tension
        face = "tension-side"
        steps.append(f"Tension-side edge: σ = σ_N + σ_b = {sigma_axial} + {sigma_bending} = {answer} N/mm²")
        wrong_face = combined.sigma_compression
    else:
        answer = combined.sigma_compression
        face = "compression-side"
        steps.append(f"Compression-side edge: σ = σ_N − σ_b = {sigma_axial} − {sigma_bending} = {answer} N/mm²")
        wrong_face = combined.sigma_tension

    candidates = [
        wrong_face,  # other edge
        sigma_axial, sigma_bending,  # one term only
        -answer,
        sigma_axial + 2 * sigma_bending,
        answer + 5, answer - 5,
    ]
    return assemble_problem(
        ctx,
        category=Category.BENDING_STRESS,
        difficulty=difficulty,
        target=Target.SIGMA,
        answer=float(answer),
        question=(
            f"A rectangular member b × h = {b} × {h} mm carries an axial tensile force "
            f"N = {fmt(combined.N)} kN together with a bending moment M = {fmt(case.M)} kN·m. "
            f"Taking tension as positive, find the normal stress at the {face} edge "
            f"(A = {area} mm², Z = {fmt(case.Z)} mm³)."
        ),
        steps=steps,
        candidates=[float(c) for c in candidates],
        policy=SIGNED_STRESS,
        params={"N_kN": combined.N, "M_kNm": case.M, "b_mm": b, "h_mm": h},
        pattern="combined",
        display={"shape": "rectangle", "face": face},
    )


# ============================================================
# SHORT COLUMN, ECCENTRIC LOAD
# ============================================================

def generate_short_column(ctx: GenerationContext, difficulty: Difficulty, ask_limit: bool = False) -> Problem:
    column = ctx.pick(ctx.pools.short_columns)
    b, h, P, e = column.b, column.h, column.P, column.e
    area = b * h
    modulus = Fraction(b * h * h, 6)
    given = (
        f"A short column with a rectangular section b × h = {b} × {h} mm carries a "
        f"compressive load P = {P} kN applied with eccentricity e = {e} mm along h."
    )
    params = {"P_kN": P, "e_mm": e, "b_mm": b, "h_mm": h}

    if ask_limit:
        answer = Fraction(h, 6)
        steps = [
            "No tension anywhere requires P/A ≥ P·e/Z, so e ≤ Z / A",
            "Z / A = (b × h² / 6) / (b × h) = h / 6",
            f"e_max = {h} / 6 = {fmt(answer)} mm",
        ]
        candidates = [
            Fraction(h, 3),  # width of the middle third
            Fraction(h, 2),
            Fraction(b, 6),  # used the wrong side
            Fraction(h, 12),
        ]
        return assemble_problem(
            ctx,
            category=Category.BENDING_STRESS,
            difficulty=difficulty,
            target=Target.E_MAX,
            answer=float(answer),
            question=f"{given} Find the largest eccentricity e_max for which no tensile stress occurs.",
            steps=steps,
            candidates=[float(c) for c in candidates],
            policy=STRESS,
            params=params,
            pattern="no-tension-limit",
            display={"shape": "rectangle", "mode": "no-tension-limit"},
        )

    sigma_axial, sigma_bending = column.sigma_axial, column.sigma_bending
    answer = sigma_axial + sigma_bending
    steps = [
        f"σ_N = P / A = {P} × 10³ / {area} = {sigma_axial} N/mm²",
        f"Z = b × h² / 6 = {fmt(modulus)} mm³, M = P × e = {P} × {e} kN·mm",
        f"σ_b = P × e / Z = {P} × 10³ × {e} / {fmt(modulus)} = {sigma_bending} N/mm²",
        f"σ_max = σ_N + σ_b = {sigma_axial} + {sigma_bending} = {answer} N/mm² (compression)",
    ]
    candidates = [
        sigma_axial, sigma_bending,
        abs(sigma_axial - sigma_bending),  # stress at the opposite edge
        sigma_axial + 2 * sigma_bending,  # Z taken as b·h²/12
        sigma_axial + Fraction(P * 1000 * e * 6, h * b * b),  # b and h swapped in Z
    ]
    return assemble_problem(
        ctx,
        category=Category.BENDING_STRESS,
        difficulty=difficulty,
        target=Target.SIGMA,
        answer=float(answer),
        question=f"{given} Find the maximum compressive stress σ_max (as a magnitude).",
        steps=steps,
        candidates=[float(c) for c in candidates],
        policy=STRESS,
        params=params,
        pattern="eccentric-column",
        display={"shape": "rectangle", "mode": "eccentric-max-compression"},
    )


# ============================================================
# SHEAR STRESS
# ============================================================

def generate_rect_shear(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    b, h, Q, tau = ctx.pick(ctx.pools.rect_shear_cases)
    area = b * h
    mean = Fraction(Q * 1000, area)
    steps = [
        "For a rectangle the shear stress peaks at the neutral axis:",
        "τ_max = 1.5 × Q / A",
        f"= 1.5 × {Q} × 10³ / ({b} × {h})",
        f"= {tau} N/mm²",
    ]
    candidates = [
        mean,  # average shear stress
        2 * mean,
        Fraction(4, 3) * mean,  # circular-section factor
        2 * tau,
    ]
    return assemble_problem(
        ctx,
        category=Category.BENDING_STRESS,
        difficulty=difficulty,
        target=Target.TAU,
        answer=float(tau),
        question=(
            f"A rectangular beam section b × h = {b} × {h} mm carries a shear force "
            f"Q = {Q} kN. Find the maximum shear stress τ_max."
        ),
        steps=steps,
        candidates=[float(c) for c in candidates],
        policy=SHEAR,
        params={"Q_kN": Q, "b_mm": b, "h_mm": h},
        pattern="shear-rectangle",
        display={"shape": "rectangle"},
    )


def generate_web_shear(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    section, Q, tau = ctx.pick(ctx.pools.web_shear_cases)
    b, h, tf, tw = section
    hw = h - 2 * tf
    steps = [
        "In an H-section the web carries practically all the shear:",
        f"h_w = h − 2tf = {h} − 2 × {tf} = {hw} mm",
        "τ = Q / (tw × h_w)",
        f"= {Q} × 10³ / ({tw} × {hw})",
        f"= {tau} N/mm²",
    ]
    candidates = [
        Fraction(Q * 1000, tw * h),  # full depth instead of the web depth
        Fraction(3 * Q * 1000, 2 * tw * hw),  # rectangle factor 1.5
        Fraction(Q * 1000, b * h),  # whole bounding area
        Fraction(Q * 1000, 2 * b * tf + tw * hw),  # whole section area
    ]
    return assemble_problem(
        ctx,
        category=Category.BENDING_STRESS,
        difficulty=difficulty,
        target=Target.TAU,
        answer=float(tau),
        question=(
            f"An H-section (b = {b} mm, h = {h} mm, tf = {tf} mm, tw = {tw} mm) carries a "
            f"shear force Q = {Q} kN. Assuming the web alone resists shear, find the shear stress τ."
        ),
        steps=steps,
        candidates=[float(c) for c in candidates],
        policy=SHEAR,
        params={"Q_kN": Q, "b_mm": b, "h_mm": h, "tf_mm": tf, "tw_mm": tw},
        pattern="shear-web",
        display={"shape": "h-section"},
    )


def generate_bending_stress(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    if difficulty == Difficulty.BEGINNER:
        # Z comes before σ = M/Z
        return generate_section_properties(ctx, Difficulty.INTERMEDIATE)

    combined, shear, column = MIX_BY_TIER[difficulty]
    r = ctx.rng.random()
    if r < combined:
        return generate_combined(ctx, difficulty)
    if r < shear:
        if ctx.chance(0.5):
            return generate_rect_shear(ctx, difficulty)
        return generate_web_shear(ctx, difficulty)
    if r < column:
        ask_limit = difficulty == Difficulty.ADVANCED and ctx.chance(0.5)
        return generate_short_column(ctx, difficulty, ask_limit=ask_limit)
    return generate_simple_bending(ctx, difficulty)
