"""
compass.summary — Human-facing summaries of a classification.

Text and record builders consumed by presentation and export layers:
axis breakdown labels, the share string, related-ideology summaries, and the
persisted results record (the downloadable JSON).

Direction labels follow display convention: a score of exactly 0 reads as
"Left-wing" / "Libertarian". This differs from the classifier's quadrant rule
and only affects wording.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any, Mapping

from compass.analysis import IdeologyProfile
from compass.constants import SCORE_BOUND
from compass.ideologies import get_summary
from compass.scoring import CategoryTally

# (upper bound exclusive, label), ascending
_INTENSITY_BANDS: tuple[tuple[float, str], ...] = (
    (2.0, "Moderate"),
    (5.0, "Leaning"),
    (7.0, "Strong"),
)
_INTENSITY_DEFAULT = "Extreme"


def intensity_label(score: float) -> str:
    magnitude = abs(score)
    for bound, label in _INTENSITY_BANDS:
        if magnitude < bound:
            return label
    return _INTENSITY_DEFAULT


def economic_direction(score: float) -> str:
    return "Right-wing" if score > 0 else "Left-wing"


def social_direction(score: float) -> str:
    return "Authoritarian" if score > 0 else "Libertarian"


def scale_percent(score: float) -> float:
    """Share of the half-scale covered by ``score``, in percent."""
    return round(min(abs(score), SCORE_BOUND) / SCORE_BOUND * 100, 1)


def axis_breakdown(economic: float, social: float) -> dict[str, dict[str, Any]]:
    """Per-axis score, direction, intensity and percent of scale."""
    return {
        "economic": {
            "score": round(economic, 1),
            "direction": economic_direction(economic),
            "intensity": intensity_label(economic),
            "percent": scale_percent(economic),
        },
        "social": {
            "score": round(social, 1),
            "direction": social_direction(social),
            "intensity": intensity_label(social),
            "percent": scale_percent(social),
        },
    }


def share_text(profile: IdeologyProfile, economic: float, social: float) -> str:
    return (
        f"I'm {profile.primary_ideology} on the political compass! "
        f"Economic: {economic:.1f}, Social: {social:.1f}"
    )


def related_ideologies(profile: IdeologyProfile) -> list[dict[str, str]]:
    """Secondary labels with their one-line summaries, in profile order."""
    return [
        {"name": label, "description": get_summary(label)}
        for label in profile.secondary_ideologies
    ]


def build_results_record(
    economic: float,
    social: float,
    answers: Mapping[int, int],
    category_tallies: Mapping[str, CategoryTally],
    timestamp: datetime | None = None,
) -> dict[str, Any]:
    """Persisted results record, re-readable by AnalysisRequest.

    Answer keys are strings, as they are after a JSON round-trip.
    """
    when = timestamp or datetime.now(UTC)
    return {
        "economic": economic,
        "social": social,
        "answers": {str(index): level for index, level in sorted(answers.items())},
        "timestamp": when.isoformat(),
        "categoryTallies": {
            focus: tally.to_dict() for focus, tally in category_tallies.items()
        },
    }


def export_filename(when: date | datetime | None = None) -> str:
    day = when or datetime.now(UTC)
    return f"political-compass-results-{day.strftime('%Y-%m-%d')}.json"
