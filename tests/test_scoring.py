"""
tests/test_scoring.py — Answer aggregation and axis normalization.

Covers:
    - Weighted, reverse-aware accumulation per axis
    - Zero-weight guard and fixed-scale normalization
    - Unknown indices and malformed levels treated as unanswered
    - Focus tallies: many-to-many categories, immutability, supplied tallies
"""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from compass.constants import CATEGORY_TO_FOCI, FOCUS_GROUPS, SCORE_BOUND
from compass.questions import QuestionBank
from compass.scoring import (
    EMPTY_TALLY,
    CategoryTally,
    aggregate_answers,
    clamp_score,
    compute_scores,
    normalize_axis,
    tally_categories,
)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

class TestAggregateAnswers:
    def test_weighted_reverse_accumulation(self, small_bank: QuestionBank):
        result = aggregate_answers({0: 4, 1: 0, 2: 3, 3: 1}, small_bank)
        # q0: +2, q1: (0-2)*2 reversed = +4, q2: +1, q3: (1-2) reversed = +1
        assert result.economic_raw == pytest.approx(6.0)
        assert result.social_raw == pytest.approx(2.0)
        assert result.total_weight == pytest.approx(5.0)

    def test_normalized_scores(self, small_bank: QuestionBank):
        result = aggregate_answers({0: 4, 1: 0, 2: 3, 3: 1}, small_bank)
        assert result.economic == pytest.approx(6.0)
        assert result.social == pytest.approx(2.0)

    def test_neutral_answers_contribute_weight_only(self, small_bank: QuestionBank):
        result = aggregate_answers({0: 2, 1: 2, 2: 2, 3: 2}, small_bank)
        assert result.economic_raw == 0.0
        assert result.social_raw == 0.0
        assert result.total_weight == pytest.approx(5.0)

    def test_no_answers_is_zero_not_nan(self, small_bank: QuestionBank):
        result = aggregate_answers({}, small_bank)
        assert result.total_weight == 0.0
        assert result.economic == 0.0
        assert result.social == 0.0
        assert result.category_tallies == {}

    def test_unknown_index_ignored(self, small_bank: QuestionBank):
        result = aggregate_answers({99: 4, -1: 4}, small_bank)
        assert result.total_weight == 0.0
        assert result.category_tallies == {}

    @pytest.mark.parametrize("bad_level", [5, -1, True, "4", 2.5, None])
    def test_malformed_level_ignored(self, small_bank: QuestionBank, bad_level):
        result = aggregate_answers({0: bad_level, 2: 4}, small_bank)
        assert result.economic_raw == 0.0
        assert result.social_raw == pytest.approx(2.0)
        assert result.total_weight == pytest.approx(1.0)

    def test_compute_scores(self, small_bank: QuestionBank):
        economic, social = compute_scores({0: 4, 1: 0, 2: 3, 3: 1}, small_bank)
        assert economic == pytest.approx(6.0)
        assert social == pytest.approx(2.0)

    def test_single_axis_reaches_bound(self):
        bank = QuestionBank.from_records([{"axis": "economic"}, {"axis": "economic"}])
        result = aggregate_answers({0: 4, 1: 4}, bank)
        assert result.economic == pytest.approx(SCORE_BOUND)
        assert result.social == 0.0


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

class TestNormalization:
    def test_zero_weight(self):
        assert normalize_axis(3.0, 0) == 0.0

    def test_scale_multiplier(self):
        assert normalize_axis(1.0, 2.0) == pytest.approx(2.5)

    def test_clamped_high(self):
        assert normalize_axis(100.0, 1.0) == SCORE_BOUND

    def test_clamped_low(self):
        assert normalize_axis(-100.0, 1.0) == -SCORE_BOUND

    def test_clamp_score_nan_inf(self):
        assert clamp_score(math.nan) == 0.0
        assert clamp_score(math.inf) == 0.0
        assert clamp_score(-math.inf) == 0.0

    def test_clamp_score_passthrough(self):
        assert clamp_score(-3.25) == -3.25


# ---------------------------------------------------------------------------
# Category tallies
# ---------------------------------------------------------------------------

class TestCategoryTallies:
    def test_many_to_many_categories(self, small_bank: QuestionBank):
        tallies = tally_categories({0: 4, 1: 0, 2: 3, 3: 1}, small_bank)
        assert tallies["falgscFocus"] == CategoryTally(strongly_agree=1)
        # crypto_anarchist feeds two foci
        assert tallies["anarchistFocus"] == CategoryTally(strongly_disagree=1)
        assert tallies["cryptoAnarchistFocus"] == CategoryTally(strongly_disagree=1)
        # alt_right feeds two foci
        assert tallies["postLiberalFocus"] == CategoryTally(agree=1)
        assert tallies["altRightFocus"] == CategoryTally(agree=1)

    def test_untouched_foci_absent(self, small_bank: QuestionBank):
        tallies = tally_categories({3: 4}, small_bank)
        assert tallies == {}

    def test_counts_sum_to_answered_questions(self, left_libertarian_bank: QuestionBank):
        tallies = tally_categories({0: 4, 1: 3, 2: 4}, left_libertarian_bank)
        assert sum(tallies["falgscFocus"].to_dict().values()) == 2
        assert tallies["falgscFocus"].strongly_agree == 1
        assert tallies["falgscFocus"].agree == 1

    def test_supplied_tallies_used_as_is(self, small_bank: QuestionBank):
        supplied = {"ecoSocialistFocus": CategoryTally(strongly_agree=3)}
        result = aggregate_answers({0: 4}, small_bank, category_tallies=supplied)
        assert result.category_tallies == supplied

    def test_supplied_empty_tallies_not_recomputed(self, small_bank: QuestionBank):
        result = aggregate_answers({0: 4}, small_bank, category_tallies={})
        assert result.category_tallies == {}

    def test_category_index_matches_focus_table(self):
        for focus, categories in FOCUS_GROUPS.items():
            for category in categories:
                assert focus in CATEGORY_TO_FOCI[category]


class TestCategoryTallyModel:
    def test_increment_returns_new_record(self):
        tally = EMPTY_TALLY.increment(4)
        assert tally.strongly_agree == 1
        assert EMPTY_TALLY.strongly_agree == 0

    def test_frozen(self):
        tally = CategoryTally()
        with pytest.raises(ValidationError):
            tally.agree = 3  # type: ignore[misc]

    def test_camel_case_round_trip(self):
        tally = CategoryTally.model_validate({"stronglyAgree": 2, "stronglyDisagree": 1})
        assert tally.strongly_agree == 2
        assert tally.to_dict() == {
            "stronglyAgree": 2,
            "agree": 0,
            "neutral": 0,
            "disagree": 0,
            "stronglyDisagree": 1,
        }

    def test_negative_counts_rejected(self):
        with pytest.raises(ValidationError):
            CategoryTally.model_validate({"agree": -1})
