"""
Section property generators - rectangle, hollow rectangle, H-, T- and
L-sections. Dimensions come from the exact pools, so every Z, I and
centroid distance asked for is an integer number of mm.
"""
import logging
from fractions import Fraction

from beamdrill.models.problem import SECTION_TOLERANCE, Category, Difficulty, Problem, Target
from beamdrill.services.distractors import DistractorPolicy, magnitude_unit
from beamdrill.services.generation import GenerationContext, assemble_problem, fmt
from beamdrill.services.pools import (
    h_section_inertia,
    h_section_modulus,
    hollow_inertia,
    hollow_modulus,
    l_section_centroid,
    l_section_inertia,
    rect_inertia,
    rect_modulus,
    t_section_centroid,
    t_section_inertia,
)

logger = logging.getLogger(__name__)


def section_policy(answer: float) -> DistractorPolicy:
    return DistractorPolicy(
        tolerance=SECTION_TOLERANCE, decimals=0, padding_unit=magnitude_unit(answer)
    )


def _problem(ctx, difficulty, target, answer, question, steps, candidates, params, shape):
    answer = float(answer)
    return assemble_problem(
        ctx,
        category=Category.SECTION_PROPERTIES,
        difficulty=difficulty,
        target=target,
        answer=answer,
        question=question,
        steps=steps,
        candidates=[float(c) for c in candidates],
        policy=section_policy(answer),
        params=params,
        pattern=shape,
        display={"shape": shape, **params},
    )


# ============================================================
# RECTANGLE
# ============================================================

def generate_rectangle(ctx: GenerationContext, difficulty: Difficulty, target: Target | None = None) -> Problem:
    b, h = ctx.pick(ctx.pools.section_pairs)
    if target is None:
        if difficulty == Difficulty.BEGINNER:
            target = Target.Z
        else:
            target = Target.Z if ctx.chance(0.5) else Target.I
    params = {"b_mm": b, "h_mm": h}
    given = f"A rectangular section has width b = {b} mm and depth h = {h} mm."

    if target == Target.Z:
        Z = rect_modulus(b, h)
        steps = [
            "Z = b × h² / 6",
            f"= {b} × {h}² / 6",
            f"= {fmt(b * h * h)} / 6",
            f"= {fmt(Z)} mm³",
        ]
        candidates = [
            Fraction(h * b * b, 6),  # b and h swapped
            Fraction(b * h * h, 12),  # 12 instead of 6
            Fraction(h * b * b, 12),
            2 * Z, Z / 2,
        ]
        return _problem(
            ctx, difficulty, target, Z,
            f"{given} Find the section modulus Z about the axis parallel to b.",
            steps, candidates, params, "rectangle",
        )

    inertia = rect_inertia(b, h)
    steps = [
        "I = b × h³ / 12",
        f"= {b} × {h}³ / 12",
        f"= {fmt(b * h ** 3)} / 12",
        f"= {fmt(inertia)} mm⁴",
    ]
    candidates = [
        Fraction(h * b ** 3, 12),  # b and h swapped
        Fraction(b * h ** 3, 6),  # 6 instead of 12
        Fraction(b * h ** 3, 3),  # about the base instead of the centroid
        2 * inertia, inertia / 2,
    ]
    return _problem(
        ctx, difficulty, target, inertia,
        f"{given} Find the second moment of area I about the centroidal axis parallel to b.",
        steps, candidates, params, "rectangle",
    )


# ============================================================
# HOLLOW RECTANGLE
# ============================================================

def generate_hollow(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    B, H, b, h = ctx.pick(ctx.pools.hollow_sections)
    inertia = hollow_inertia(B, H, b, h)
    params = {"B_mm": B, "H_mm": H, "b_mm": b, "h_mm": h}
    given = (
        f"A hollow rectangular section has outer dimensions B × H = {B} × {H} mm "
        f"and a centred opening b × h = {b} × {h} mm."
    )
    inertia_steps = [
        "Subtract the opening from the outer rectangle (same centroidal axis):",
        "I = (B × H³ − b × h³) / 12",
        f"= ({B} × {H}³ − {b} × {h}³) / 12",
        f"= {fmt(inertia)} mm⁴",
    ]

    if ctx.chance(0.5):
        Z = hollow_modulus(B, H, b, h)
        steps = inertia_steps + [
            "Z = I / (H / 2)",
            f"= {fmt(inertia)} / {fmt(Fraction(H, 2))}",
            f"= {fmt(Z)} mm³",
        ]
        candidates = [
            Fraction(B * H * H - b * h * h, 6),  # subtracting Z values directly
            inertia / H,  # divided by H instead of H/2
            Fraction(B * H * H, 6),  # opening ignored
            2 * Z, Z / 2,
        ]
        return _problem(
            ctx, difficulty, Target.Z, Z,
            f"{given} Find the section modulus Z.",
            steps, candidates, params, "hollow-rect",
        )

    candidates = [
        Fraction(B * H ** 3 - b * h * h, 12),  # squared the opening depth
        Fraction(B * H ** 3 - b * h ** 3, 6),
        Fraction(B * H ** 3 - B * h ** 3, 12),  # used the outer width for the opening
        Fraction(B * H ** 3, 12),  # opening ignored
        2 * inertia, inertia / 2,
    ]
    return _problem(
        ctx, difficulty, Target.I, inertia,
        f"{given} Find the second moment of area I.",
        inertia_steps, candidates, params, "hollow-rect",
    )


# ============================================================
# H-SECTION
# ============================================================

def generate_h_section(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    b, h, tf, tw = ctx.pick(ctx.pools.h_sections)
    hw = h - 2 * tf
    inertia = h_section_inertia(b, h, tf, tw)
    params = {"b_mm": b, "h_mm": h, "tf_mm": tf, "tw_mm": tw}
    given = (
        f"An H-section has flange width b = {b} mm, overall depth h = {h} mm, "
        f"flange thickness tf = {tf} mm and web thickness tw = {tw} mm."
    )
    inertia_steps = [
        "Outer rectangle minus the two voids beside the web:",
        f"web depth h_w = h − 2tf = {h} − 2 × {tf} = {hw} mm",
        "I = (b × h³ − (b − tw) × h_w³) / 12",
        f"= ({b} × {h}³ − {b - tw} × {hw}³) / 12",
        f"= {fmt(inertia)} mm⁴",
    ]

    if ctx.chance(0.5):
        Z = h_section_modulus(b, h, tf, tw)
        steps = inertia_steps + [
            "Z = I / (h / 2)",
            f"= {fmt(inertia)} / {fmt(Fraction(h, 2))}",
            f"= {fmt(Z)} mm³",
        ]
        candidates = [
            Fraction(b * h * h - (b - tw) * hw * hw, 6),  # subtracting Z values directly
            Fraction(b * h * h, 6),  # outer rectangle only
            inertia / h,
            2 * Z, Z / 2,
        ]
        return _problem(
            ctx, difficulty, Target.Z, Z,
            f"{given} Find the section modulus Z about the strong axis.",
            steps, candidates, params, "h-section",
        )

    candidates = [
        Fraction(b * h ** 3, 12),  # outer rectangle only
        Fraction(b * h ** 3 - b * hw ** 3, 12),  # subtracted the full width
        Fraction(b * h ** 3 - (b - tw) * hw ** 3, 6),
        2 * inertia, inertia / 2,
    ]
    return _problem(
        ctx, difficulty, Target.I, inertia,
        f"{given} Find the second moment of area I about the strong axis.",
        inertia_steps, candidates, params, "h-section",
    )


# ============================================================
# T-SECTION
# ============================================================

def generate_t_section(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    b, h, tf, tw = ctx.pick(ctx.pools.t_sections)
    hw = h - tf
    flange_area = b * tf
    web_area = tw * hw
    y_g = t_section_centroid(b, h, tf, tw)
    params = {"b_mm": b, "h_mm": h, "tf_mm": tf, "tw_mm": tw}
    given = (
        f"A T-section has flange b × tf = {b} × {tf} mm on top of a web "
        f"tw = {tw} mm thick; the overall depth is h = {h} mm."
    )
    centroid_steps = [
        f"Flange: A1 = {b} × {tf} = {flange_area} mm², centroid {fmt(Fraction(tf, 2))} mm from the top",
        f"Web: A2 = {tw} × {hw} = {web_area} mm², centroid {fmt(tf + Fraction(hw, 2))} mm from the top",
        "y_g = (A1 × y1 + A2 × y2) / (A1 + A2)",
        f"= {fmt(y_g)} mm",
    ]

    if ctx.chance(0.5):
        candidates = [
            Fraction(h, 2),  # mid-depth
            h - y_g,  # measured from the bottom
            (flange_area * Fraction(tf, 2) + web_area * Fraction(hw, 2)) / (flange_area + web_area),
            y_g + 10, y_g - 10,
        ]
        return _problem(
            ctx, difficulty, Target.Y_G, y_g,
            f"{given} Find the depth of the centroid y_g measured from the top edge.",
            centroid_steps, candidates, params, "t-section",
        )

    inertia = t_section_inertia(b, h, tf, tw)
    own = Fraction(b * tf ** 3, 12) + Fraction(tw * hw ** 3, 12)
    steps = centroid_steps + [
        "Parallel-axis theorem: I = Σ(I0 + A × d²)",
        f"d1 = {fmt(y_g - Fraction(tf, 2))} mm, d2 = {fmt(tf + Fraction(hw, 2) - y_g)} mm",
        f"I = {fmt(inertia)} mm⁴",
    ]
    total_area = flange_area + web_area
    candidates = [
        own,  # parallel-axis terms forgotten
        Fraction(b * h ** 3, 12),  # bounding rectangle
        inertia + total_area * y_g ** 2,  # about the top edge
        2 * inertia, inertia / 2,
    ]
    return _problem(
        ctx, difficulty, Target.I, inertia,
        f"{given} Find the second moment of area I about the horizontal centroidal axis.",
        steps, candidates, params, "t-section",
    )


# ============================================================
# L-SECTION
# ============================================================

def generate_l_section(ctx: GenerationContext, difficulty: Difficulty, target: Target) -> Problem:
    pool = ctx.pools.l_sections_inertia if target == Target.I_CENTROID else ctx.pools.l_sections_centroid
    b1, h, b2, t = ctx.pick(pool)
    leg_area = b1 * h
    foot_area = b2 * t
    x_g = l_section_centroid(b1, h, b2, t)
    params = {"b1_mm": b1, "h_mm": h, "b2_mm": b2, "t_mm": t}
    given = (
        f"An L-section consists of a vertical leg {b1} mm wide and {h} mm tall, "
        f"with a foot {b2} mm long and {t} mm thick extending from the leg along the bottom."
    )
    centroid_steps = [
        f"Leg: A1 = {b1} × {h} = {leg_area} mm², x1 = {fmt(Fraction(b1, 2))} mm",
        f"Foot: A2 = {b2} × {t} = {foot_area} mm², x2 = {b1} + {b2}/2 = {fmt(b1 + Fraction(b2, 2))} mm",
        "x_g = (A1 × x1 + A2 × x2) / (A1 + A2)",
        f"= {fmt(x_g)} mm",
    ]
    width = b1 + b2

    if target == Target.X_G:
        candidates = [
            Fraction(width, 2),  # centre of the bounding box
            width - x_g,  # measured from the other edge
            (b1 * Fraction(b1, 2) + b2 * (b1 + Fraction(b2, 2))) / width,  # weighted by width only
            x_g + 10, x_g - 10,
        ]
        return _problem(
            ctx, difficulty, target, x_g,
            f"{given} Find the centroid distance x_g from the outer face of the leg.",
            centroid_steps, candidates, params, "l-section",
        )

    inertia = l_section_inertia(b1, h, b2, t)
    own = Fraction(h * b1 ** 3, 12) + Fraction(t * b2 ** 3, 12)
    steps = centroid_steps + [
        "Parallel-axis theorem about the vertical centroidal axis: I = Σ(I0 + A × d²)",
        f"I0 (leg) = {h} × {b1}³ / 12, I0 (foot) = {t} × {b2}³ / 12",
        f"d1 = {fmt(x_g - Fraction(b1, 2))} mm, d2 = {fmt(b1 + Fraction(b2, 2) - x_g)} mm",
        f"I = {fmt(inertia)} mm⁴",
    ]
    candidates = [
        own,  # parallel-axis terms forgotten
        inertia + (leg_area + foot_area) * x_g ** 2,  # about the leg face
        Fraction(h * width ** 3, 12),  # bounding rectangle
        2 * inertia, inertia / 2,
    ]
    return _problem(
        ctx, difficulty, target, inertia,
        f"{given} Find the second moment of area I about the vertical axis through the centroid.",
        steps, candidates, params, "l-section",
    )


def generate_section_properties(ctx: GenerationContext, difficulty: Difficulty) -> Problem:
    if difficulty != Difficulty.ADVANCED:
        return generate_rectangle(ctx, difficulty)
    r = ctx.rng.random()
    if r < 0.15:
        return generate_l_section(ctx, difficulty, Target.I_CENTROID)
    if r < 0.35:
        return generate_l_section(ctx, difficulty, Target.X_G)
    if r < 0.6:
        return generate_hollow(ctx, difficulty)
    if r < 0.8:
        return generate_h_section(ctx, difficulty)
    return generate_t_section(ctx, difficulty)
