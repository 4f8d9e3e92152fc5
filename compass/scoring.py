"""
compass.scoring — Answer aggregation and axis normalization.

Pure-computation module. Zero I/O. Zero global state. Zero randomness.

Aggregation:
    For every answered question:
        adjusted = (level - 2) * weight          # level in 0..4
        adjusted *= -1 if question.reverse
        raw[question.axis] += adjusted
        total_weight += weight

Normalization (fixed scale, independent of question count):
    normalized = 0                                  if total_weight == 0
               = clamp(raw / total_weight * 5, -10, 10)  otherwise

Category tallies:
    Every answered question whose category belongs to a focus group adds one
    to that focus's counter for the chosen Likert level. A focus appears in
    the tally mapping only once one of its questions has been answered.

Unanswered, unknown-index and malformed answers are excluded everywhere.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from pydantic import BaseModel, Field

from compass.constants import (
    CATEGORY_TO_FOCI,
    NEUTRAL_LEVEL,
    SCORE_BOUND,
    SCORE_MULTIPLIER,
    VALID_LEVELS,
)
from compass.questions import Question, QuestionBank


# ---------------------------------------------------------------------------
# CategoryTally — immutable 5-count record
# ---------------------------------------------------------------------------

_LEVEL_FIELDS: tuple[str, ...] = (
    "strongly_disagree",
    "disagree",
    "neutral",
    "agree",
    "strongly_agree",
)


class CategoryTally(BaseModel):
    """Likert response counts for one focus. Wire keys are camelCase."""

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    strongly_agree: int = Field(default=0, ge=0, alias="stronglyAgree")
    agree: int = Field(default=0, ge=0)
    neutral: int = Field(default=0, ge=0)
    disagree: int = Field(default=0, ge=0)
    strongly_disagree: int = Field(default=0, ge=0, alias="stronglyDisagree")

    def increment(self, level: int) -> CategoryTally:
        """Return a new tally with the counter for ``level`` raised by one."""
        name = _LEVEL_FIELDS[level]
        return self.model_copy(update={name: getattr(self, name) + 1})

    def to_dict(self) -> dict[str, int]:
        return self.model_dump(by_alias=True)


EMPTY_TALLY = CategoryTally()


# ---------------------------------------------------------------------------
# Aggregation result
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AggregateResult:
    """Raw axis accumulators plus per-focus tallies for one answer set."""

    economic_raw: float
    social_raw: float
    total_weight: float
    category_tallies: Mapping[str, CategoryTally] = field(default_factory=dict)

    @property
    def economic(self) -> float:
        return normalize_axis(self.economic_raw, self.total_weight)

    @property
    def social(self) -> float:
        return normalize_axis(self.social_raw, self.total_weight)


# ---------------------------------------------------------------------------
# Pure computation functions
# ---------------------------------------------------------------------------

def clamp_score(value: float) -> float:
    """Clamp a score to [-SCORE_BOUND, SCORE_BOUND]. NaN/Inf become 0.0."""
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return max(-SCORE_BOUND, min(SCORE_BOUND, value))


def normalize_axis(raw_total: float, total_weight: float) -> float:
    """Map a raw axis total onto the fixed [-10, 10] scale."""
    if total_weight == 0:
        return 0.0
    return clamp_score(raw_total / total_weight * SCORE_MULTIPLIER)


def is_valid_level(level: Any) -> bool:
    """True for an int Likert level in 0..4. Booleans are not levels."""
    return isinstance(level, int) and not isinstance(level, bool) and level in VALID_LEVELS


def iter_answered(
    answers: Mapping[int, Any],
    bank: QuestionBank,
) -> Iterator[tuple[Question, int]]:
    """Yield (question, level) for every usable answer, in index order."""
    for index in sorted(k for k in answers if isinstance(k, int) and not isinstance(k, bool)):
        level = answers[index]
        if not is_valid_level(level):
            continue
        question = bank.get(index)
        if question is None:
            continue
        yield question, level


def tally_categories(
    answers: Mapping[int, Any],
    bank: QuestionBank,
) -> dict[str, CategoryTally]:
    """Fold answered questions into per-focus Likert tallies."""
    tallies: dict[str, CategoryTally] = {}
    for question, level in iter_answered(answers, bank):
        if not question.category:
            continue
        for focus in CATEGORY_TO_FOCI.get(question.category, ()):
            tallies[focus] = tallies.get(focus, EMPTY_TALLY).increment(level)
    return tallies


def aggregate_answers(
    answers: Mapping[int, Any],
    bank: QuestionBank,
    category_tallies: Mapping[str, CategoryTally] | None = None,
) -> AggregateResult:
    """Aggregate one answer set into raw axis totals and focus tallies.

    Args:
        answers: {question_index: level 0..4}. Absent indices are unanswered.
        bank: The question bank the indices refer to.
        category_tallies: Previously computed tallies. When given they are
            used as-is and not recomputed.

    Returns:
        AggregateResult(economic_raw, social_raw, total_weight, category_tallies).
    """
    economic_raw = 0.0
    social_raw = 0.0
    total_weight = 0.0

    for question, level in iter_answered(answers, bank):
        adjusted = (level - NEUTRAL_LEVEL) * question.weight
        if question.reverse:
            adjusted = -adjusted
        if question.is_economic:
            economic_raw += adjusted
        else:
            social_raw += adjusted
        total_weight += question.weight

    if category_tallies is None:
        tallies = tally_categories(answers, bank)
    else:
        tallies = dict(category_tallies)

    return AggregateResult(
        economic_raw=economic_raw,
        social_raw=social_raw,
        total_weight=total_weight,
        category_tallies=tallies,
    )


def compute_scores(
    answers: Mapping[int, Any],
    bank: QuestionBank,
) -> tuple[float, float]:
    """Normalized (economic, social) scores for an answer set."""
    result = aggregate_answers(answers, bank, category_tallies={})
    return result.economic, result.social
