"""
Distractor synthesis - turns a list of misconception values into exactly
three wrong choices.

Evaluators hand over the values a student would get by making a typical
mistake (wrong denominator, swapped dimensions, forgotten term). Those are
preferred; numeric offsets around the answer only fill whatever is left.
"""
import logging
import math
import random
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger(__name__)

PADDING_OFFSETS = (1, 2, 5, 10, 20)


def round_half_up(value: float, decimals: int = 1) -> float:
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def magnitude_unit(answer: float) -> float:
    """Padding step that stays visible next to large section quantities."""
    size = abs(answer)
    if size < 100:
        return 1.0
    return float(10 ** (int(math.log10(size)) - 1))


@dataclass(frozen=True)
class DistractorPolicy:
    """How candidate values are normalised and filtered.

    allow_negative switches from positive-only quantities (stress
    magnitudes, reactions) to signed ones (shear force, axial force).
    allow_zero only matters for signed quantities.
    """
    tolerance: float = 0.01
    allow_negative: bool = False
    allow_zero: bool = False
    decimals: int | None = 1
    padding_unit: float = 1.0

    def normalise(self, value: float) -> float:
        if self.decimals is None:
            return float(value)
        return round_half_up(value, self.decimals)

    def admits(self, value: float, answer: float) -> bool:
        if math.isnan(value) or math.isinf(value):
            return False
        if abs(value - answer) <= self.tolerance:
            return False
        if not self.allow_negative:
            return value > 0
        if not self.allow_zero:
            return abs(value) > self.tolerance
        return True


def _distinct(values: Iterable[float], tolerance: float) -> list[float]:
    kept: list[float] = []
    for value in values:
        if all(abs(value - other) > tolerance for other in kept):
            kept.append(value)
    return kept


def synthesize_distractors(
    answer: float,
    candidates: Iterable[float],
    rng: random.Random,
    policy: DistractorPolicy = DistractorPolicy(),
    priority: Iterable[float] = (),
    count: int = 3,
) -> list[float]:
    """Pick `count` wrong values that are distinct from the answer and each other.

    Priority candidates are drained in order, then the remaining candidates
    are drawn uniformly without replacement, then `answer +/- unit*offset`
    padding guarantees the count is always reached.
    """
    answer = policy.normalise(answer)

    def clean(values: Iterable[float]) -> list[float]:
        normalised = (policy.normalise(v) for v in values)
        return _distinct((v for v in normalised if policy.admits(v, answer)), policy.tolerance)

    chosen: list[float] = []

    def take(value: float) -> None:
        if len(chosen) < count and all(abs(value - c) > policy.tolerance for c in chosen):
            chosen.append(value)

    for value in clean(priority):
        take(value)

    others = [v for v in clean(candidates)
              if all(abs(v - c) > policy.tolerance for c in chosen)]
    needed = count - len(chosen)
    for value in rng.sample(others, min(needed, len(others))):
        take(value)

    if len(chosen) < count:
        padding = []
        for offset in PADDING_OFFSETS:
            step = offset * policy.padding_unit
            padding.extend((answer + step, answer - step))
        for value in clean(padding):
            take(value)

    # Positive offsets always pass the filter, so this terminates.
    multiple = 30
    while len(chosen) < count:
        value = policy.normalise(answer + multiple * policy.padding_unit)
        if policy.admits(value, answer):
            take(value)
        multiple += 10

    logger.debug("Distractors for %s: %s", answer, chosen)
    return chosen


def build_choices(answer: float, distractors: list[float]) -> list[float]:
    return sorted([answer, *distractors])
