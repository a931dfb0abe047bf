"""
Numeric pools - parameter tuples pre-filtered so every derived quantity is exact.

Each pool is built by enumerating candidate base values and keeping only the
combinations whose section properties, stresses or reactions come out as
integers (or clean one-decimal values). All exactness checks run on
fractions.Fraction, never on float rounding. Pools are immutable tuples built
once per process; generators receive them through the GenerationContext so
tests can hand in smaller registries.
"""
import logging
import random
from dataclasses import dataclass
from fractions import Fraction
from functools import lru_cache
from itertools import product
from typing import NamedTuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParamRange:
    """An evenly stepped run of integer candidate values (inclusive)."""
    min_val: int
    max_val: int
    step: int = 1

    def values(self) -> tuple[int, ...]:
        return tuple(range(self.min_val, self.max_val + 1, self.step))

    def sample(self, rng: random.Random) -> int:
        return rng.choice(self.values())


def _integral(value: Fraction) -> bool:
    return value.denominator == 1


def _one_decimal(value: Fraction) -> bool:
    return (value * 10).denominator == 1


# ============================================================
# EXACT SECTION FORMULAS (mm)
# ============================================================

def rect_modulus(b: int, h: int) -> Fraction:
    return Fraction(b * h * h, 6)


def rect_inertia(b: int, h: int) -> Fraction:
    return Fraction(b * h ** 3, 12)


def hollow_inertia(outer_b: int, outer_h: int, inner_b: int, inner_h: int) -> Fraction:
    return Fraction(outer_b * outer_h ** 3 - inner_b * inner_h ** 3, 12)


def hollow_modulus(outer_b: int, outer_h: int, inner_b: int, inner_h: int) -> Fraction:
    return 2 * hollow_inertia(outer_b, outer_h, inner_b, inner_h) / outer_h


def h_section_inertia(b: int, h: int, tf: int, tw: int) -> Fraction:
    """Strong-axis I: outer rectangle minus the two side voids beside the web."""
    hw = h - 2 * tf
    return Fraction(b * h ** 3 - (b - tw) * hw ** 3, 12)


def h_section_modulus(b: int, h: int, tf: int, tw: int) -> Fraction:
    return 2 * h_section_inertia(b, h, tf, tw) / h


def t_section_centroid(b: int, h: int, tf: int, tw: int) -> Fraction:
    """Centroid depth y_g measured from the top of the flange."""
    hw = h - tf
    flange_area = b * tf
    web_area = tw * hw
    first_moment = flange_area * Fraction(tf, 2) + web_area * (tf + Fraction(hw, 2))
    return first_moment / (flange_area + web_area)


def t_section_inertia(b: int, h: int, tf: int, tw: int) -> Fraction:
    """I about the horizontal centroidal axis (parallel-axis theorem)."""
    hw = h - tf
    y_g = t_section_centroid(b, h, tf, tw)
    d_flange = y_g - Fraction(tf, 2)
    d_web = (tf + Fraction(hw, 2)) - y_g
    return (
        Fraction(b * tf ** 3, 12) + b * tf * d_flange ** 2
        + Fraction(tw * hw ** 3, 12) + tw * hw * d_web ** 2
    )


def l_section_centroid(b1: int, h: int, b2: int, t: int) -> Fraction:
    """Centroid x_g from the outer face of the leg.

    The section is a vertical leg b1 x h with a foot b2 x t running along
    the bottom from the leg's inner face.
    """
    leg_area = b1 * h
    foot_area = b2 * t
    first_moment = leg_area * Fraction(b1, 2) + foot_area * (b1 + Fraction(b2, 2))
    return first_moment / (leg_area + foot_area)


def l_section_inertia(b1: int, h: int, b2: int, t: int) -> Fraction:
    """I about the vertical centroidal axis."""
    x_g = l_section_centroid(b1, h, b2, t)
    d_leg = x_g - Fraction(b1, 2)
    d_foot = (b1 + Fraction(b2, 2)) - x_g
    return (
        Fraction(h * b1 ** 3, 12) + b1 * h * d_leg ** 2
        + Fraction(t * b2 ** 3, 12) + b2 * t * d_foot ** 2
    )


# ============================================================
# POOL ENTRY TYPES
# ============================================================

class RectSection(NamedTuple):
    b: int
    h: int


class HollowSection(NamedTuple):
    outer_b: int
    outer_h: int
    inner_b: int
    inner_h: int


class FlangedSection(NamedTuple):
    """H- or T-section: overall width b, depth h, flange tf, web tw."""
    b: int
    h: int
    tf: int
    tw: int


class LSection(NamedTuple):
    b1: int
    h: int
    b2: int
    t: int


class BendingCase(NamedTuple):
    b: int
    h: int
    support: str  # "cantilever" (tip load, M = PL) or "simple" (central load, M = PL/4)
    L: int
    P: int
    M: Fraction
    Z: int
    sigma: int


class CombinedCase(NamedTuple):
    bending: BendingCase
    N: Fraction  # axial force, kN
    sigma_axial: int

    @property
    def sigma_tension(self) -> int:
        return self.sigma_axial + self.bending.sigma

    @property
    def sigma_compression(self) -> int:
        return self.sigma_axial - self.bending.sigma


class ShortColumn(NamedTuple):
    b: int
    h: int
    P: int  # kN, compressive
    e: int  # mm, along h
    sigma_axial: int
    sigma_bending: int


class RectShear(NamedTuple):
    b: int
    h: int
    Q: int
    tau: int


class WebShear(NamedTuple):
    section: FlangedSection
    Q: int
    tau: int


class FrameCase(NamedTuple):
    L: int
    h: int
    load: int  # P (kN) or w (kN/m)
    M: Fraction
    H: Fraction
    V: Fraction


@dataclass(frozen=True)
class PoolCandidates:
    """Base values enumerated when building the pools."""
    rect_b: tuple[int, ...] = (80, 100, 120, 140, 150, 160, 180, 200)
    rect_h: tuple[int, ...] = ParamRange(160, 360, 20).values()
    hollow_outer_b: tuple[int, ...] = (120, 160, 200)
    hollow_outer_h: tuple[int, ...] = (200, 240, 280)
    h_b: tuple[int, ...] = (100, 120, 150, 200)
    h_h: tuple[int, ...] = (150, 200, 220, 240, 260, 280, 300)
    h_tf: tuple[int, ...] = (8, 10, 12, 14)
    h_tw: tuple[int, ...] = (6, 8, 10, 12)
    t_b: tuple[int, ...] = (60, 100, 120, 150, 180, 200)
    t_h: tuple[int, ...] = (80, 100, 120, 150, 160, 200, 240)
    t_tf: tuple[int, ...] = (10, 20)
    t_tw: tuple[int, ...] = (10, 20)
    l_b1: tuple[int, ...] = (20, 40, 60)
    l_h: tuple[int, ...] = (80, 100, 120, 160)
    l_b2: tuple[int, ...] = (40, 60, 80, 120)
    l_t: tuple[int, ...] = (20, 40)
    bending_simple_l: tuple[int, ...] = (4, 6, 8)
    bending_cantilever_l: tuple[int, ...] = (3, 4, 5)
    bending_p: tuple[int, ...] = (10, 20, 24, 30, 40, 48, 60)
    axial_k: tuple[int, ...] = ParamRange(1, 20).values()
    column_b: tuple[int, ...] = (200, 250, 300, 400, 500)
    column_h: tuple[int, ...] = (300, 360, 400, 450, 600)
    column_p: tuple[int, ...] = (100, 150, 200, 300, 400, 500, 600, 900, 1200)
    column_e: tuple[int, ...] = (20, 30, 40, 50, 60, 75, 100)
    shear_q: tuple[int, ...] = (20, 24, 30, 40, 48, 60, 72, 80, 96, 120)
    frame_l: tuple[int, ...] = (4, 6, 8)
    frame_h: tuple[int, ...] = (2, 3, 4)
    frame_p: tuple[int, ...] = (20, 24, 30, 40)
    frame_w: tuple[int, ...] = (4, 6, 8, 10, 12, 16)


DEFAULT_CANDIDATES = PoolCandidates()


# Safe tuples used when a candidate set filters down to nothing
FALLBACK_RECT = RectSection(120, 180)
FALLBACK_HOLLOW = HollowSection(200, 200, 100, 100)
FALLBACK_H = FlangedSection(120, 200, 10, 8)
FALLBACK_T = FlangedSection(180, 200, 20, 20)
FALLBACK_L = LSection(40, 120, 60, 20)
FALLBACK_BENDING = BendingCase(150, 200, "simple", 4, 20, Fraction(20), 1_000_000, 20)
FALLBACK_COMBINED = CombinedCase(FALLBACK_BENDING, Fraction(60), 2)
FALLBACK_COLUMN = ShortColumn(300, 600, 900, 100, 5, 5)
FALLBACK_RECT_SHEAR = RectShear(100, 200, 40, 3)
FALLBACK_WEB_SHEAR = WebShear(FALLBACK_H, 72, 50)
FALLBACK_FRAME_POINT = FrameCase(4, 2, 20, Fraction(20), Fraction(10), Fraction(10))
FALLBACK_FRAME_UDL = FrameCase(4, 2, 4, Fraction(8), Fraction(4), Fraction(8))
FALLBACK_FRAME_HORIZONTAL = FrameCase(4, 2, 20, Fraction(20), Fraction(10), Fraction(10))


@dataclass(frozen=True)
class NumericPools:
    section_pairs: tuple[RectSection, ...]
    hollow_sections: tuple[HollowSection, ...]
    h_sections: tuple[FlangedSection, ...]
    t_sections: tuple[FlangedSection, ...]
    l_sections_centroid: tuple[LSection, ...]
    l_sections_inertia: tuple[LSection, ...]
    bending_cases: tuple[BendingCase, ...]
    combined_cases: tuple[CombinedCase, ...]
    short_columns: tuple[ShortColumn, ...]
    rect_shear_cases: tuple[RectShear, ...]
    web_shear_cases: tuple[WebShear, ...]
    frame_point: tuple[FrameCase, ...]
    frame_point_h: tuple[FrameCase, ...]
    frame_udl: tuple[FrameCase, ...]
    frame_udl_h: tuple[FrameCase, ...]
    frame_horizontal: tuple[FrameCase, ...]

    def sizes(self) -> dict[str, int]:
        return {name: len(getattr(self, name)) for name in self.__dataclass_fields__}


def _or_fallback(entries: list, fallback) -> tuple:
    return tuple(entries) if entries else (fallback,)


# ============================================================
# SECTION POOLS
# ============================================================

def _section_pairs(c: PoolCandidates) -> list[RectSection]:
    return [
        RectSection(b, h)
        for b, h in product(c.rect_b, c.rect_h)
        if _integral(rect_modulus(b, h)) and _integral(rect_inertia(b, h))
    ]


def _hollow_sections(c: PoolCandidates) -> list[HollowSection]:
    found = []
    for outer_b, outer_h in product(c.hollow_outer_b, c.hollow_outer_h):
        for inner_b, inner_h in product(
            ParamRange(40, outer_b - 40, 20).values(),
            ParamRange(80, outer_h - 40, 20).values(),
        ):
            dims = (outer_b, outer_h, inner_b, inner_h)
            if _integral(hollow_inertia(*dims)) and _integral(hollow_modulus(*dims)):
                found.append(HollowSection(*dims))
    return found


def _h_sections(c: PoolCandidates) -> list[FlangedSection]:
    found = []
    for b, h, tf, tw in product(c.h_b, c.h_h, c.h_tf, c.h_tw):
        if h <= 2 * tf + 20 or tw >= b - 10:
            continue
        if _integral(h_section_inertia(b, h, tf, tw)) and _integral(h_section_modulus(b, h, tf, tw)):
            found.append(FlangedSection(b, h, tf, tw))
    return found


def _t_sections(c: PoolCandidates) -> list[FlangedSection]:
    found = []
    for b, h, tf, tw in product(c.t_b, c.t_h, c.t_tf, c.t_tw):
        if tw >= b or 2 * tf >= h:
            continue
        if _integral(t_section_centroid(b, h, tf, tw)) and _integral(t_section_inertia(b, h, tf, tw)):
            found.append(FlangedSection(b, h, tf, tw))
    return found


def _l_sections(c: PoolCandidates) -> list[LSection]:
    return [
        LSection(b1, h, b2, t)
        for b1, h, b2, t in product(c.l_b1, c.l_h, c.l_b2, c.l_t)
        if t < h and _integral(l_section_centroid(b1, h, b2, t))
    ]


# ============================================================
# STRESS POOLS
# ============================================================

def _bending_cases(c: PoolCandidates, pairs: tuple[RectSection, ...]) -> list[BendingCase]:
    found = []
    loadings = [("cantilever", L, 1) for L in c.bending_cantilever_l]
    loadings += [("simple", L, 4) for L in c.bending_simple_l]
    for (b, h), (support, L, divisor), P in product(pairs, loadings, c.bending_p):
        Z = rect_modulus(b, h)
        M = Fraction(P * L, divisor)
        sigma = M * 10 ** 6 / Z
        if _integral(sigma):
            found.append(BendingCase(b, h, support, L, P, M, int(Z), int(sigma)))
    return found


def _combined_cases(c: PoolCandidates, bending: tuple[BendingCase, ...]) -> list[CombinedCase]:
    found = []
    for case, k in product(bending, c.axial_k):
        N = Fraction(case.b * case.h * k, 1000)
        if _one_decimal(N):
            found.append(CombinedCase(case, N, k))
    return found


def _short_columns(c: PoolCandidates) -> list[ShortColumn]:
    found = []
    for b, h, P, e in product(c.column_b, c.column_h, c.column_p, c.column_e):
        if h % 6 or 3 * e > h:
            continue
        sigma_axial = Fraction(P * 1000, b * h)
        sigma_bending = Fraction(P * 1000 * e) / rect_modulus(b, h)
        if _integral(sigma_axial) and _integral(sigma_bending):
            found.append(ShortColumn(b, h, P, e, int(sigma_axial), int(sigma_bending)))
    return found


def _rect_shear_cases(c: PoolCandidates) -> list[RectShear]:
    found = []
    for b, h, Q in product(c.rect_b, c.rect_h, c.shear_q):
        tau = Fraction(3 * Q * 1000, 2 * b * h)
        if _integral(tau):
            found.append(RectShear(b, h, Q, int(tau)))
    return found


def _web_shear_cases(c: PoolCandidates, sections: tuple[FlangedSection, ...]) -> list[WebShear]:
    found = []
    for section, Q in product(sections, c.shear_q):
        tau = Fraction(Q * 1000, section.tw * (section.h - 2 * section.tf))
        if _integral(tau):
            found.append(WebShear(section, Q, int(tau)))
    return found


# ============================================================
# FRAME POOLS (three-hinged portal frame)
# ============================================================

def _frame_point(c: PoolCandidates) -> list[FrameCase]:
    return [
        FrameCase(L, h, P, Fraction(P * L, 4), Fraction(P * L, 4 * h), Fraction(P, 2))
        for L, h, P in product(c.frame_l, c.frame_h, c.frame_p)
        if (P * L) % 4 == 0
    ]


def _frame_udl(c: PoolCandidates) -> list[FrameCase]:
    return [
        FrameCase(L, h, w, Fraction(w * L * L, 8), Fraction(w * L * L, 8 * h), Fraction(w * L, 2))
        for L, h, w in product(c.frame_l, c.frame_h, c.frame_w)
        if (w * L * L) % 8 == 0
    ]


def _frame_horizontal(c: PoolCandidates) -> list[FrameCase]:
    return [
        FrameCase(L, h, P, Fraction(P * h, 2), Fraction(P, 2), Fraction(P * h, L))
        for L, h, P in product(c.frame_l, c.frame_h, c.frame_p)
        if (P * h) % 2 == 0
    ]


def build_pools(candidates: PoolCandidates = DEFAULT_CANDIDATES) -> NumericPools:
    """Enumerate every candidate set and keep the exact tuples."""
    section_pairs = _or_fallback(_section_pairs(candidates), FALLBACK_RECT)
    h_sections = _or_fallback(_h_sections(candidates), FALLBACK_H)
    l_sections = _l_sections(candidates)
    bending = _or_fallback(_bending_cases(candidates, section_pairs), FALLBACK_BENDING)
    frame_point = _frame_point(candidates)
    frame_udl = _frame_udl(candidates)

    pools = NumericPools(
        section_pairs=section_pairs,
        hollow_sections=_or_fallback(_hollow_sections(candidates), FALLBACK_HOLLOW),
        h_sections=h_sections,
        t_sections=_or_fallback(_t_sections(candidates), FALLBACK_T),
        l_sections_centroid=_or_fallback(l_sections, FALLBACK_L),
        l_sections_inertia=_or_fallback(
            [s for s in l_sections if _integral(l_section_inertia(*s))], FALLBACK_L
        ),
        bending_cases=bending,
        combined_cases=_or_fallback(_combined_cases(candidates, bending), FALLBACK_COMBINED),
        short_columns=_or_fallback(_short_columns(candidates), FALLBACK_COLUMN),
        rect_shear_cases=_or_fallback(_rect_shear_cases(candidates), FALLBACK_RECT_SHEAR),
        web_shear_cases=_or_fallback(_web_shear_cases(candidates, h_sections), FALLBACK_WEB_SHEAR),
        frame_point=_or_fallback(frame_point, FALLBACK_FRAME_POINT),
        frame_point_h=_or_fallback([f for f in frame_point if _integral(f.H)], FALLBACK_FRAME_POINT),
        frame_udl=_or_fallback(frame_udl, FALLBACK_FRAME_UDL),
        frame_udl_h=_or_fallback([f for f in frame_udl if _integral(f.H)], FALLBACK_FRAME_UDL),
        frame_horizontal=_or_fallback(_frame_horizontal(candidates), FALLBACK_FRAME_HORIZONTAL),
    )
    logger.info("Built numeric pools: %s", pools.sizes())
    return pools


@lru_cache()
def get_pools() -> NumericPools:
    return build_pools()
