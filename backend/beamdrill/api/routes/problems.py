import logging
import random

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from beamdrill.models.problem import Category, CategoryStats, Difficulty, tolerance_for
from beamdrill.services.dispatcher import TIER_TABLES, category_shares, problem_engine

logger = logging.getLogger(__name__)

router = APIRouter()


# Schemas
class CategoryStatsIn(BaseModel):
    attempted: int = Field(0, ge=0)
    correct: int = Field(0, ge=0)


class GenerateProblemRequest(BaseModel):
    difficulty: str | None = None
    category: str | None = None
    weakness_mode: bool = False
    stats: dict[str, CategoryStatsIn] = {}
    seed: int | None = None


class GradeRequest(BaseModel):
    category: str
    answer: float
    selected: float


class GradeResponse(BaseModel):
    is_correct: bool
    answer: float
    tolerance: float


def _parse_stats(stats: dict[str, CategoryStatsIn]) -> dict[Category, CategoryStats]:
    return {
        Category(key): CategoryStats(attempted=value.attempted, correct=min(value.correct, value.attempted))
        for key, value in stats.items()
    }


@router.post("/generate")
async def generate_problem(request: GenerateProblemRequest):
    """Generate one multiple-choice problem."""
    rng = random.Random(request.seed) if request.seed is not None else None
    try:
        problem = problem_engine.generate(
            difficulty=request.difficulty,
            category=request.category,
            weakness_mode=request.weakness_mode,
            stats=_parse_stats(request.stats),
            rng=rng,
        )
    except ValueError as e:
        logger.warning("Rejected generate request: %s", e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return problem.to_dict()


@router.get("/categories")
async def list_categories():
    shares = {tier: category_shares(table) for tier, table in TIER_TABLES.items()}
    return [
        {
            "category": category.value,
            "label": category.label,
            "tolerance": tolerance_for(category),
            "shares": {tier.value: tier_shares.get(category, 0.0) for tier, tier_shares in shares.items()},
        }
        for category in Category
    ]


@router.get("/difficulties")
async def list_difficulties():
    return [difficulty.value for difficulty in Difficulty]


@router.post("/grade", response_model=GradeResponse)
async def grade_answer(request: GradeRequest):
    try:
        category = Category(request.category)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown category: {request.category}")
    tolerance = tolerance_for(category)
    return GradeResponse(
        is_correct=abs(request.selected - request.answer) < tolerance,
        answer=request.answer,
        tolerance=tolerance,
    )
