"""
Shared plumbing for the problem generators: the generation context, the
bounded clean-value retry, and assembly of the final Problem record.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Sequence, TypeVar

from beamdrill.models.problem import Category, Difficulty, Problem, Target
from beamdrill.services.distractors import (
    DistractorPolicy,
    build_choices,
    synthesize_distractors,
)
from beamdrill.services.pools import NumericPools, get_pools

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class GenerationContext:
    """Everything a generator needs besides the difficulty tier."""
    rng: random.Random = field(default_factory=random.Random)
    pools: NumericPools = field(default_factory=get_pools)
    attempts: int = 10
    overhang_attempts: int = 15

    def pick(self, options: Sequence[T]) -> T:
        return self.rng.choice(options)

    def chance(self, probability: float) -> bool:
        return self.rng.random() < probability


def is_one_decimal(value: float) -> bool:
    scaled = value * 10
    return abs(scaled - round(scaled)) < 1e-6


def first_clean(
    attempts: int,
    draw: Callable[[], T],
    is_clean: Callable[[T], bool],
    fallback: Callable[[], T] | None = None,
) -> T:
    """Draw up to `attempts` times and return the first clean draw.

    When every draw is rejected, `fallback()` is used if given, otherwise the
    last draw is kept as-is (evaluators round their output, so the problem
    is still well formed).
    """
    last = draw()
    for _ in range(max(1, attempts) - 1):
        if is_clean(last):
            return last
        last = draw()
    if is_clean(last):
        return last
    logger.warning("No clean draw after %d attempts", attempts)
    return fallback() if fallback is not None else last


def fmt(value: float) -> str:
    """Format a number the way the explanations print it (no trailing .0)."""
    value = float(value)
    if value.is_integer():
        return f"{int(value):,}" if abs(value) >= 10_000 else str(int(value))
    return f"{round(value, 4):g}"


def assemble_problem(
    ctx: GenerationContext,
    *,
    category: Category,
    difficulty: Difficulty,
    target: Target,
    answer: float,
    question: str,
    steps: Iterable[str],
    candidates: Iterable[float],
    policy: DistractorPolicy,
    priority: Iterable[float] = (),
    params: dict[str, float] | None = None,
    pattern: str | None = None,
    display: dict[str, Any] | None = None,
) -> Problem:
    answer = policy.normalise(answer)
    distractors = synthesize_distractors(
        answer, candidates, ctx.rng, policy=policy, priority=priority
    )
    problem = Problem(
        category=category,
        difficulty=difficulty,
        target=target,
        answer=answer,
        choices=build_choices(answer, distractors),
        question=question,
        explanation="\n".join(steps),
        params={k: float(v) for k, v in (params or {}).items()},
        pattern=pattern,
        display=display or {},
        tolerance=policy.tolerance,
    )
    logger.debug("Generated %s/%s (%s): answer=%s", category.value, pattern, target.value, answer)
    return problem
