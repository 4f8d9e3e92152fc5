"""
compass.secondary — Secondary ideology tagging.

Two independent rule families run in sequence. Their nominations are
collected in an insertion-ordered set, the primary label is removed, and the
result is returned in order of first discovery.

Family A — focus tallies (evidence from targeted questions):
    standard:  (stronglyAgree >= 1 and agree >= 1) or stronglyAgree >= 2
    strict:    stronglyAgree >= 2 or (stronglyAgree >= 1 and agree >= 2)
    altRightFocus uses the strict threshold; every other focus the standard.

Family B — normalized axis magnitudes:
    |e| < 3 and |s| < 3                               → Centrist
    ei > 4.5 or si > 4.5                              → Accelerationist Tendencies
    s < -4.5 and si > 4.5                             → Post-Liberal
    e < -4.5 and s < -2.5 and (ei > 4.5 or si > 2.5)  → Anarchist Sympathies
    plus the looser "secondary" threshold of five alternate-ideology templates.

Both families may nominate the same label; deduplication collapses them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping

from compass.ideologies import (
    ACCELERATIONIST,
    ALT_RIGHT,
    ANARCHIST_SYMPATHIES,
    CENTRIST,
    CRYPTO_ANARCHIST,
    ECO_SOCIALIST,
    FALGSC,
    NEO_REACTIONARY,
    POST_LIBERAL,
)
from compass.scoring import CategoryTally


# ---------------------------------------------------------------------------
# Family A — focus tally thresholds
# ---------------------------------------------------------------------------

def meets_standard_threshold(tally: CategoryTally) -> bool:
    return (tally.strongly_agree >= 1 and tally.agree >= 1) or tally.strongly_agree >= 2


def meets_strict_threshold(tally: CategoryTally) -> bool:
    return tally.strongly_agree >= 2 or (tally.strongly_agree >= 1 and tally.agree >= 2)


@dataclass(frozen=True)
class FocusRule:
    focus: str
    label: str
    threshold: Callable[[CategoryTally], bool] = meets_standard_threshold


FOCUS_RULES: tuple[FocusRule, ...] = (
    FocusRule("accelerationistFocus", ACCELERATIONIST),
    FocusRule("postLiberalFocus", POST_LIBERAL),
    FocusRule("anarchistFocus", ANARCHIST_SYMPATHIES),
    FocusRule("altRightFocus", ALT_RIGHT, meets_strict_threshold),
    FocusRule("falgscFocus", FALGSC),
    FocusRule("cryptoAnarchistFocus", CRYPTO_ANARCHIST),
    FocusRule("neoReactionaryFocus", NEO_REACTIONARY),
    FocusRule("ecoSocialistFocus", ECO_SOCIALIST),
)


def focus_nominations(category_tallies: Mapping[str, CategoryTally]) -> list[str]:
    """Labels nominated by focus-tally evidence, in rule order."""
    nominated: list[str] = []
    for rule in FOCUS_RULES:
        tally = category_tallies.get(rule.focus)
        if tally is not None and rule.threshold(tally):
            nominated.append(rule.label)
    return nominated


# ---------------------------------------------------------------------------
# Family B — axis magnitude thresholds
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AlternateTemplate:
    """An ideology with a looser secondary threshold than its primary row."""

    label: str
    secondary: Callable[[float, float], bool]


ALTERNATE_TEMPLATES: tuple[AlternateTemplate, ...] = (
    AlternateTemplate(
        FALGSC,
        lambda e, s: e < 0 and s < 0 and abs(e) > 5 and abs(s) > 5,
    ),
    AlternateTemplate(
        CRYPTO_ANARCHIST,
        lambda e, s: e > 0 and s < 0 and abs(e) > 5 and abs(s) > 5,
    ),
    AlternateTemplate(
        NEO_REACTIONARY,
        lambda e, s: e > 0 and s >= 0 and abs(e) > 5 and abs(s) > 5,
    ),
    AlternateTemplate(
        ECO_SOCIALIST,
        lambda e, s: e < 0 and s >= 0 and abs(e) > 4 and abs(s) > 4,
    ),
    AlternateTemplate(
        ALT_RIGHT,
        lambda e, s: e > 0 and s >= 0 and abs(s) > 3 and abs(e) < 5,
    ),
)


def magnitude_nominations(economic: float, social: float) -> list[str]:
    """Labels nominated by axis magnitudes and alternate templates."""
    ei = abs(economic)
    si = abs(social)
    nominated: list[str] = []

    if ei < 3 and si < 3:
        nominated.append(CENTRIST)
    if ei > 4.5 or si > 4.5:
        nominated.append(ACCELERATIONIST)
    if social < -4.5 and si > 4.5:
        nominated.append(POST_LIBERAL)
    if economic < -4.5 and social < -2.5 and (ei > 4.5 or si > 2.5):
        nominated.append(ANARCHIST_SYMPATHIES)

    for template in ALTERNATE_TEMPLATES:
        if template.secondary(economic, social):
            nominated.append(template.label)

    return nominated


# ---------------------------------------------------------------------------
# Union, exclusion, dedup
# ---------------------------------------------------------------------------

def dedupe_excluding(labels: Iterable[str], excluded: str) -> tuple[str, ...]:
    """Insertion-ordered unique labels, without ``excluded``."""
    ordered = dict.fromkeys(labels)
    ordered.pop(excluded, None)
    return tuple(ordered)


def tag_secondary(
    primary: str,
    economic: float,
    social: float,
    category_tallies: Mapping[str, CategoryTally] | None = None,
) -> tuple[str, ...]:
    """Secondary ideology tags for a classified score pair.

    Never contains ``primary``. Never contains duplicates.
    """
    nominated = focus_nominations(category_tallies or {})
    nominated.extend(magnitude_nominations(economic, social))
    return dedupe_excluding(nominated, primary)
