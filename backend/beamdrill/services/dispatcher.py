"""
Problem dispatcher - decides which generator runs.

Three ways in:
  * a pinned category calls that category's generator directly;
  * weakness mode samples a category weighted towards untried or
    poorly answered ones;
  * otherwise the difficulty tier's threshold table is walked with one
    uniform draw.

The tables are plain data so their weights can be checked without
generating anything.
"""
import logging
import random
from dataclasses import dataclass
from typing import Callable, Mapping

from beamdrill.config import Settings, get_settings
from beamdrill.models.problem import Category, CategoryStats, Difficulty, Problem
from beamdrill.services import beams, buckling, deflection, frames, sections, stress, trusses
from beamdrill.services.generation import GenerationContext
from beamdrill.services.pools import NumericPools, get_pools

logger = logging.getLogger(__name__)

Generator = Callable[[GenerationContext, Difficulty], Problem]


@dataclass(frozen=True)
class TableEntry:
    """Pick `generate` when the draw is below `threshold` (and above the previous one)."""
    threshold: float
    category: Category
    generate: Generator


# mixed resolves to a concrete tier first
TIER_WEIGHTS = (
    (0.3, Difficulty.BEGINNER),
    (0.8, Difficulty.INTERMEDIATE),
    (1.0, Difficulty.ADVANCED),
)


def _beam_entries(start: float) -> tuple[TableEntry, ...]:
    """Split the mass left above `start` between the four basic beam generators."""
    rest = 1.0 - start
    cantilever = rest * beams.CANTILEVER_PROBABILITY / 2
    simple = rest * (1 - beams.CANTILEVER_PROBABILITY) / 2
    return (
        TableEntry(start + cantilever, Category.CANTILEVER_CONCENTRATED, beams.generate_cantilever_concentrated),
        TableEntry(start + 2 * cantilever, Category.CANTILEVER_DISTRIBUTED, beams.generate_cantilever_distributed),
        TableEntry(start + 2 * cantilever + simple, Category.SIMPLE_DISTRIBUTED, beams.generate_simple_distributed),
        TableEntry(1.0, Category.SIMPLE_CONCENTRATED, beams.generate_simple_concentrated),
    )


BEGINNER_TABLE = (
    TableEntry(0.12, Category.SECTION_PROPERTIES, sections.generate_section_properties),
    TableEntry(0.24, Category.BUCKLING, buckling.generate_buckling_length),
    TableEntry(0.36, Category.TRUSS_ZERO, trusses.generate_zero_member),
    *_beam_entries(0.36),
)

_INTERMEDIATE_HEAD = (
    TableEntry(0.12, Category.SECTION_PROPERTIES, sections.generate_section_properties),
    TableEntry(0.24, Category.BENDING_STRESS, stress.generate_bending_stress),
    TableEntry(0.36, Category.BUCKLING, buckling.generate_buckling_load),
    TableEntry(0.42, Category.TRUSS_CALCULATION, trusses.generate_triangle),
    TableEntry(0.46, Category.TRUSS_CALCULATION, trusses.generate_cantilever_truss),
    TableEntry(0.48, Category.TRUSS_CALCULATION, trusses.generate_pratt),
    TableEntry(0.50, Category.DEFLECTION, deflection.generate_deflection),
)

INTERMEDIATE_TABLE = (*_INTERMEDIATE_HEAD, *_beam_entries(0.50))

ADVANCED_TABLE = (
    *_INTERMEDIATE_HEAD,
    TableEntry(0.52, Category.OVERHANG_CONCENTRATED, beams.generate_overhang_concentrated),
    TableEntry(0.54, Category.OVERHANG_DISTRIBUTED, beams.generate_overhang_distributed),
    TableEntry(0.56, Category.FRAME, frames.generate_frame),
    *_beam_entries(0.56),
)

TIER_TABLES = {
    Difficulty.BEGINNER: BEGINNER_TABLE,
    Difficulty.INTERMEDIATE: INTERMEDIATE_TABLE,
    Difficulty.ADVANCED: ADVANCED_TABLE,
}

CATEGORY_GENERATORS: dict[Category, Generator] = {
    Category.SIMPLE_CONCENTRATED: beams.generate_simple_concentrated,
    Category.SIMPLE_DISTRIBUTED: beams.generate_simple_distributed,
    Category.CANTILEVER_CONCENTRATED: beams.generate_cantilever_concentrated,
    Category.CANTILEVER_DISTRIBUTED: beams.generate_cantilever_distributed,
    Category.OVERHANG_CONCENTRATED: beams.generate_overhang_concentrated,
    Category.OVERHANG_DISTRIBUTED: beams.generate_overhang_distributed,
    Category.SECTION_PROPERTIES: sections.generate_section_properties,
    Category.BENDING_STRESS: stress.generate_bending_stress,
    Category.BUCKLING: buckling.generate_buckling,
    Category.TRUSS_ZERO: trusses.generate_zero_member,
    Category.TRUSS_CALCULATION: trusses.generate_truss_calculation,
    Category.FRAME: frames.generate_frame,
    Category.DEFLECTION: deflection.generate_deflection,
}


def pick_entry(table: tuple[TableEntry, ...], r: float) -> TableEntry:
    for entry in table:
        if r < entry.threshold:
            return entry
    return table[-1]


def resolve_difficulty(rng: random.Random, difficulty: Difficulty) -> Difficulty:
    if difficulty != Difficulty.MIXED:
        return difficulty
    r = rng.random()
    for threshold, tier in TIER_WEIGHTS:
        if r < threshold:
            return tier
    return TIER_WEIGHTS[-1][1]


def category_shares(table: tuple[TableEntry, ...]) -> dict[Category, float]:
    """Probability mass each category receives from a tier table."""
    shares: dict[Category, float] = {}
    previous = 0.0
    for entry in table:
        shares[entry.category] = shares.get(entry.category, 0.0) + entry.threshold - previous
        previous = entry.threshold
    return {category: round(share, 6) for category, share in shares.items()}


# ============================================================
# WEAKNESS MODE
# ============================================================

UNTRIED_WEIGHT = 2.0
WEAK_WEIGHT = 1.5
DEFAULT_WEIGHT = 0.5
WEAK_ACCURACY = 0.5


def weakness_weight(stats: CategoryStats | None) -> float:
    if stats is None or stats.attempted == 0:
        return UNTRIED_WEIGHT
    if stats.accuracy < WEAK_ACCURACY:
        return WEAK_WEIGHT
    return DEFAULT_WEIGHT


def weakness_weights(stats: Mapping[Category, CategoryStats]) -> dict[Category, float]:
    return {category: weakness_weight(stats.get(category)) for category in Category}


def pick_weak_category(rng: random.Random, stats: Mapping[Category, CategoryStats]) -> Category:
    weights = weakness_weights(stats)
    r = rng.random() * sum(weights.values())
    for category, weight in weights.items():
        r -= weight
        if r < 0:
            return category
    return list(weights)[-1]


class ProblemEngine:
    """Owns the generator registry and hands out problems."""

    def __init__(self, pools: NumericPools | None = None, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._pools = pools
        self.rng = random.Random(self.settings.random_seed)
        self.generators: dict[Category, Generator] = dict(CATEGORY_GENERATORS)
        self.tables = TIER_TABLES
        logger.info("Registered %d category generators", len(self.generators))

    @property
    def pools(self) -> NumericPools:
        if self._pools is None:
            self._pools = get_pools()
        return self._pools

    def context(self, rng: random.Random | None = None) -> GenerationContext:
        return GenerationContext(
            rng=rng or self.rng,
            pools=self.pools,
            attempts=self.settings.clean_value_attempts,
            overhang_attempts=self.settings.overhang_attempts,
        )

    def generate(
        self,
        difficulty: Difficulty | str | None = None,
        category: Category | str | None = None,
        weakness_mode: bool = False,
        stats: Mapping[Category, CategoryStats] | None = None,
        rng: random.Random | None = None,
    ) -> Problem:
        """Generate one problem.

        Args:
            difficulty: tier, or "mixed" to draw one; defaults to the configured tier.
            category: pin the category; overrides weakness mode.
            weakness_mode: pick the category from `stats` instead of the tier table.
            stats: per-category answer counts, read only.
            rng: random source for this call; defaults to the engine's own.

        Raises:
            ValueError: unknown difficulty or category string.
        """
        difficulty = Difficulty(difficulty or self.settings.default_difficulty)
        if category is not None:
            category = Category(category)
        ctx = self.context(rng)

        if category is None and weakness_mode:
            category = pick_weak_category(ctx.rng, stats or {})
            logger.info("Weakness mode picked %s", category.value)

        if category is not None:
            logger.info("Generating pinned category %s (%s)", category.value, difficulty.value)
            return self.generators[category](ctx, difficulty)

        tier = resolve_difficulty(ctx.rng, difficulty)
        entry = pick_entry(self.tables[tier], ctx.rng.random())
        logger.info("Selected %s via %s (%s)", entry.category.value, entry.generate.__name__, tier.value)
        return entry.generate(ctx, tier)


problem_engine = ProblemEngine()
