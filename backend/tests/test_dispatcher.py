"""
Tests for category dispatch.

The weighting tables are plain data, so most checks run without
generating anything. The end-to-end checks generate many problems per
category and check the choice rules on every one.
"""

import random
from collections import Counter

import pytest

from beamdrill.config import Settings
from beamdrill.models.problem import Category, CategoryStats, Difficulty
from beamdrill.services.dispatcher import (
    ADVANCED_TABLE,
    BEGINNER_TABLE,
    CATEGORY_GENERATORS,
    INTERMEDIATE_TABLE,
    TIER_TABLES,
    ProblemEngine,
    category_shares,
    pick_entry,
    pick_weak_category,
    resolve_difficulty,
    weakness_weight,
    weakness_weights,
)

from .helpers import assert_well_formed


@pytest.fixture
def engine(pools):
    return ProblemEngine(pools=pools, settings=Settings(random_seed=11))


class TestTables:
    @pytest.mark.parametrize("table", [BEGINNER_TABLE, INTERMEDIATE_TABLE, ADVANCED_TABLE])
    def test_thresholds_increase_to_one(self, table):
        thresholds = [entry.threshold for entry in table]
        assert thresholds == sorted(thresholds)
        assert len(set(thresholds)) == len(thresholds)
        assert thresholds[-1] == 1.0

    def test_pick_entry_boundaries(self):
        assert pick_entry(BEGINNER_TABLE, 0.0).category == Category.SECTION_PROPERTIES
        assert pick_entry(BEGINNER_TABLE, 0.12).category == Category.BUCKLING
        assert pick_entry(BEGINNER_TABLE, 0.30).category == Category.TRUSS_ZERO
        assert pick_entry(BEGINNER_TABLE, 0.999).category == Category.SIMPLE_CONCENTRATED
        assert pick_entry(BEGINNER_TABLE, 1.0).category == Category.SIMPLE_CONCENTRATED

    def test_beginner_shares(self):
        shares = category_shares(BEGINNER_TABLE)
        assert shares[Category.SECTION_PROPERTIES] == pytest.approx(0.12)
        assert shares[Category.CANTILEVER_CONCENTRATED] == pytest.approx(0.08)
        assert shares[Category.SIMPLE_DISTRIBUTED] == pytest.approx(0.24)
        assert Category.FRAME not in shares

    def test_intermediate_shares(self):
        shares = category_shares(INTERMEDIATE_TABLE)
        assert shares[Category.TRUSS_CALCULATION] == pytest.approx(0.12)
        assert shares[Category.DEFLECTION] == pytest.approx(0.02)
        assert Category.OVERHANG_CONCENTRATED not in shares

    def test_advanced_shares(self):
        shares = category_shares(ADVANCED_TABLE)
        assert shares[Category.OVERHANG_CONCENTRATED] == pytest.approx(0.02)
        assert shares[Category.FRAME] == pytest.approx(0.02)
        assert sum(shares.values()) == pytest.approx(1.0)

    def test_every_category_has_a_generator(self):
        assert set(CATEGORY_GENERATORS) == set(Category)


class TestDifficulty:
    def test_concrete_tiers_pass_through(self, rng):
        assert resolve_difficulty(rng, Difficulty.ADVANCED) == Difficulty.ADVANCED

    def test_mixed_resolves_with_weights(self, rng):
        tiers = Counter(resolve_difficulty(rng, Difficulty.MIXED) for _ in range(4000))
        assert Difficulty.MIXED not in tiers
        assert tiers[Difficulty.INTERMEDIATE] > tiers[Difficulty.BEGINNER] > tiers[Difficulty.ADVANCED]


class TestWeakness:
    def test_weights(self):
        assert weakness_weight(None) == 2.0
        assert weakness_weight(CategoryStats()) == 2.0
        assert weakness_weight(CategoryStats(attempted=4, correct=1)) == 1.5
        assert weakness_weight(CategoryStats(attempted=2, correct=1)) == 0.5
        assert weakness_weight(CategoryStats(attempted=4, correct=3)) == 0.5

    def test_weights_cover_every_category(self):
        weights = weakness_weights({Category.FRAME: CategoryStats(attempted=10, correct=9)})
        assert set(weights) == set(Category)
        assert weights[Category.FRAME] == 0.5
        assert weights[Category.BUCKLING] == 2.0

    def test_untried_category_is_favoured(self, rng):
        stats = {c: CategoryStats(attempted=10, correct=9) for c in Category if c != Category.DEFLECTION}
        picks = Counter(pick_weak_category(rng, stats) for _ in range(2000))
        # 2.0 / (12 * 0.5 + 2.0) = 25 %
        assert picks[Category.DEFLECTION] > 400
        assert picks.most_common(1)[0][0] == Category.DEFLECTION


class TestEngine:
    def test_pinned_category(self, engine):
        for category in Category:
            problem = engine.generate(Difficulty.ADVANCED, category=category)
            assert problem.category == category

    def test_string_arguments_are_accepted(self, engine):
        problem = engine.generate("intermediate", category="frame")
        assert problem.category == Category.FRAME

    def test_unknown_values_raise(self, engine):
        with pytest.raises(ValueError):
            engine.generate("expert")
        with pytest.raises(ValueError):
            engine.generate(Difficulty.MIXED, category="arches")

    def test_weakness_mode_targets_untried(self, engine):
        stats = {c: CategoryStats(attempted=20, correct=20) for c in Category if c != Category.BUCKLING}
        picks = Counter(
            engine.generate(Difficulty.INTERMEDIATE, weakness_mode=True, stats=stats).category
            for _ in range(400)
        )
        assert picks.most_common(1)[0][0] == Category.BUCKLING

    def test_same_seed_same_problem(self, pools):
        first = ProblemEngine(pools=pools, settings=Settings(random_seed=5))
        second = ProblemEngine(pools=pools, settings=Settings(random_seed=5))
        for _ in range(20):
            assert first.generate().to_dict() == second.generate().to_dict()

    def test_explicit_rng_is_used(self, engine):
        a = engine.generate(Difficulty.MIXED, rng=random.Random(99)).to_dict()
        b = engine.generate(Difficulty.MIXED, rng=random.Random(99)).to_dict()
        assert a == b

    @pytest.mark.parametrize("difficulty", [Difficulty.BEGINNER, Difficulty.INTERMEDIATE, Difficulty.ADVANCED])
    def test_tier_only_emits_its_categories(self, engine, difficulty):
        allowed = set(category_shares(TIER_TABLES[difficulty]))
        for _ in range(300):
            assert engine.generate(difficulty).category in allowed


class TestChoiceInvariants:
    """1000 generations per category: four sorted, distinct choices, exactly one correct."""

    @pytest.mark.parametrize("category", list(Category))
    def test_category(self, engine, category):
        tiers = list(Difficulty)
        for i in range(1000):
            problem = engine.generate(tiers[i % len(tiers)], category=category)
            assert_well_formed(problem)

    @pytest.mark.parametrize("category", list(Category))
    def test_category_with_fallback_pools(self, degenerate_pools, category):
        engine = ProblemEngine(pools=degenerate_pools, settings=Settings(random_seed=3))
        for _ in range(50):
            assert_well_formed(engine.generate(Difficulty.ADVANCED, category=category))
