"""
compass.analysis — Ideology analysis engine (compass-v2).

Pure-computation module. No I/O except the optional default question-bank
load when a request needs derivation and no bank was passed in.

Pipeline (strictly linear, synchronous):
    answers ──► aggregate_answers ──► normalize_axis ──► classify_primary
            ──► tag_secondary ──► compose_profile ──► IdeologyProfile

Request schema:
    {
      "economicScore": float | absent,   # alias "economic"
      "socialScore":   float | absent,   # alias "social"
      "answers":       {"<index>": 0..4, ...},
      "categoryTallies": {"<focus>": {"stronglyAgree": n, ...}} | absent
    }

    Absent scores are derived from answers and the question bank.
    Absent tallies are recomputed from answers and the question bank.
    Individual malformed answers are dropped, never rejected.

Profile contract (camelCase on the wire):
    {primaryIdeology, description, characteristics[], notableFigures[],
     secondaryIdeologies[], modernContext, color}
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, Mapping, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from compass.classifier import classify_primary
from compass.constants import SCORE_BOUND
from compass.ideologies import VALID_PRIMARY_LABELS, NotableFigure, get_bundle
from compass.questions import QuestionBank, load_question_bank
from compass.scoring import CategoryTally, aggregate_answers, clamp_score, is_valid_level
from compass.secondary import tag_secondary


# ---------------------------------------------------------------------------
# Output model
# ---------------------------------------------------------------------------

class IdeologyProfile(BaseModel):
    """Immutable classification record for one respondent."""

    model_config = {"frozen": True, "populate_by_name": True}

    primary_ideology: str = Field(..., alias="primaryIdeology")
    description: str
    characteristics: tuple[str, ...]
    notable_figures: tuple[NotableFigure, ...] = Field(..., alias="notableFigures")
    secondary_ideologies: tuple[str, ...] = Field(default=(), alias="secondaryIdeologies")
    modern_context: str = Field(..., alias="modernContext")
    color: str

    @model_validator(mode="after")
    def _check_secondaries(self) -> IdeologyProfile:
        if self.primary_ideology in self.secondary_ideologies:
            raise ValueError("secondaryIdeologies must not contain the primary ideology.")
        if len(set(self.secondary_ideologies)) != len(self.secondary_ideologies):
            raise ValueError("secondaryIdeologies must not contain duplicates.")
        return self

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class AnalysisResult(BaseModel):
    """Scores and tallies alongside the profile they produced."""

    model_config = {"frozen": True, "populate_by_name": True}

    economic: float
    social: float
    category_tallies: Dict[str, CategoryTally] = Field(default_factory=dict, alias="categoryTallies")
    profile: IdeologyProfile

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


# ---------------------------------------------------------------------------
# Input model — tolerant per-answer, strict on shape
# ---------------------------------------------------------------------------

# ASCII only: str.isdigit() also accepts "²" and other digits int() rejects
_INTEGER_TEXT = re.compile(r"-?[0-9]+")


def _coerce_index(key: Any) -> int | None:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str) and _INTEGER_TEXT.fullmatch(key.strip()):
        return int(key.strip())
    return None


def _coerce_level(value: Any) -> int | None:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    elif isinstance(value, str) and _INTEGER_TEXT.fullmatch(value.strip()):
        value = int(value.strip())
    return value if is_valid_level(value) else None


class AnalysisRequest(BaseModel):
    """One submitted answer set.

    - answers must be an object; entries with a non-integer key or a level
      outside 0..4 are dropped silently
    - economicScore / socialScore are optional; "economic" / "social" are
      accepted as aliases (persisted results format)
    - categoryTallies is optional; when present it is used as-is
    - unknown top-level fields are ignored
    """

    model_config = {"extra": "ignore", "populate_by_name": True}

    economic_score: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("economicScore", "economic", "economic_score"),
    )
    social_score: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("socialScore", "social", "social_score"),
    )
    answers: Dict[int, int] = Field(default_factory=dict)
    category_tallies: Optional[Dict[str, CategoryTally]] = Field(
        default=None,
        validation_alias=AliasChoices("categoryTallies", "category_tallies"),
    )

    @field_validator("answers", mode="before")
    @classmethod
    def _drop_malformed_answers(cls, v: Any) -> Any:
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            raise ValueError("answers must be an object mapping question index to level 0-4.")
        cleaned: dict[int, int] = {}
        for key, raw_level in v.items():
            index = _coerce_index(key)
            level = _coerce_level(raw_level)
            if index is None or index < 0 or level is None:
                continue
            cleaned[index] = level
        return cleaned

    @field_validator("economic_score", "social_score", mode="before")
    @classmethod
    def _non_numeric_is_absent(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return v
        if v is None:
            return None
        try:
            return float(v)
        except (TypeError, ValueError):
            return None


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------

def compose_profile(primary: str, secondary: tuple[str, ...]) -> IdeologyProfile:
    """Assemble the immutable profile from a primary label and its tags."""
    bundle = get_bundle(primary)
    return IdeologyProfile(
        primary_ideology=primary,
        description=bundle.description,
        characteristics=bundle.characteristics,
        notable_figures=bundle.notable_figures,
        secondary_ideologies=tuple(label for label in secondary if label != primary),
        modern_context=bundle.modern_context,
        color=bundle.color,
    )


def get_ideology_analysis(
    economic: float,
    social: float,
    category_tallies: Mapping[str, CategoryTally] | None = None,
) -> IdeologyProfile:
    """Classify a normalized score pair.

    The canonical engine: a caller without tally evidence passes none and
    gets the same result as passing an empty mapping.
    """
    economic = clamp_score(float(economic))
    social = clamp_score(float(social))
    primary = classify_primary(economic, social)
    secondary = tag_secondary(primary, economic, social, category_tallies or {})
    return compose_profile(primary, secondary)


def analyze(request: AnalysisRequest, bank: QuestionBank | None = None) -> AnalysisResult:
    """Run the full pipeline for one submitted answer set.

    Args:
        request: Validated input record.
        bank: Question bank the answer indices refer to. Loaded from the
            configured location only when derivation actually needs it.

    Raises:
        RuntimeError: If output sanitization fails.
    """
    needs_scores = request.economic_score is None or request.social_score is None
    needs_tallies = request.category_tallies is None

    if needs_scores or needs_tallies:
        if bank is None:
            bank = load_question_bank()
        aggregate = aggregate_answers(request.answers, bank, request.category_tallies)
        economic = aggregate.economic if request.economic_score is None else request.economic_score
        social = aggregate.social if request.social_score is None else request.social_score
        tallies = dict(aggregate.category_tallies)
    else:
        economic = request.economic_score
        social = request.social_score
        tallies = dict(request.category_tallies)

    economic = clamp_score(float(economic))
    social = clamp_score(float(social))

    profile = get_ideology_analysis(economic, social, tallies)

    # --- Output sanitization ---
    for label, value in (("economic", economic), ("social", social)):
        if math.isnan(value) or not (-SCORE_BOUND <= value <= SCORE_BOUND):
            raise RuntimeError(f"Output sanitization failed: {label} score {value} out of range.")
    if profile.primary_ideology not in VALID_PRIMARY_LABELS:
        raise RuntimeError(
            f"Output sanitization failed: primary '{profile.primary_ideology}' is not a known label."
        )

    return AnalysisResult(
        economic=economic,
        social=social,
        category_tallies=tallies,
        profile=profile,
    )
