"""
compass.classifier — Primary ideology decision table.

Quadrant by strict sign:
    left        = economic < 0
    libertarian = social   < 0

A score of exactly 0 is NOT left and NOT libertarian. The origin therefore
lands in the right/authoritarian quadrant.

Rows are evaluated top-down within the quadrant; the first row whose
intensity condition holds wins. Every quadrant ends with an unconditional
row, so exactly one label is always selected.

    Quadrant               Condition            Label
    left/libertarian       ei>7 and si>7        Fully Automated Luxury Gay Space Communist
    left/libertarian       ei>5                 Libertarian Socialist
    left/libertarian       -                    Social Liberal
    right/libertarian      ei>7 and si>7        Crypto-Anarchist
    right/libertarian      ei>5                 Classical Liberal
    right/libertarian      -                    Moderate Libertarian
    left/authoritarian     ei>6 and si>6        Eco-Socialist
    left/authoritarian     -                    Social Democrat
    right/authoritarian    ei>7 and si>7        Neo-Reactionary
    right/authoritarian    si>5 and ei<3        Alt-Right
    right/authoritarian    -                    Conservative

(ei = |economic|, si = |social|)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable

from compass.ideologies import (
    ALT_RIGHT,
    CLASSICAL_LIBERAL,
    CONSERVATIVE,
    CRYPTO_ANARCHIST,
    ECO_SOCIALIST,
    FALGSC,
    LIBERTARIAN_SOCIALIST,
    MODERATE_LIBERTARIAN,
    NEO_REACTIONARY,
    SOCIAL_DEMOCRAT,
    SOCIAL_LIBERAL,
)


class Quadrant(str, enum.Enum):
    LEFT_LIBERTARIAN = "left_libertarian"
    RIGHT_LIBERTARIAN = "right_libertarian"
    LEFT_AUTHORITARIAN = "left_authoritarian"
    RIGHT_AUTHORITARIAN = "right_authoritarian"


def quadrant_of(economic: float, social: float) -> Quadrant:
    is_left = economic < 0
    is_libertarian = social < 0
    if is_left and is_libertarian:
        return Quadrant.LEFT_LIBERTARIAN
    if is_libertarian:
        return Quadrant.RIGHT_LIBERTARIAN
    if is_left:
        return Quadrant.LEFT_AUTHORITARIAN
    return Quadrant.RIGHT_AUTHORITARIAN


@dataclass(frozen=True)
class PrimaryRule:
    quadrant: Quadrant
    condition: Callable[[float, float], bool]
    label: str


def _always(ei: float, si: float) -> bool:
    return True


# Order is significant: first match wins within a quadrant.
PRIMARY_RULES: tuple[PrimaryRule, ...] = (
    PrimaryRule(Quadrant.LEFT_LIBERTARIAN, lambda ei, si: ei > 7 and si > 7, FALGSC),
    PrimaryRule(Quadrant.LEFT_LIBERTARIAN, lambda ei, si: ei > 5, LIBERTARIAN_SOCIALIST),
    PrimaryRule(Quadrant.LEFT_LIBERTARIAN, _always, SOCIAL_LIBERAL),
    PrimaryRule(Quadrant.RIGHT_LIBERTARIAN, lambda ei, si: ei > 7 and si > 7, CRYPTO_ANARCHIST),
    PrimaryRule(Quadrant.RIGHT_LIBERTARIAN, lambda ei, si: ei > 5, CLASSICAL_LIBERAL),
    PrimaryRule(Quadrant.RIGHT_LIBERTARIAN, _always, MODERATE_LIBERTARIAN),
    PrimaryRule(Quadrant.LEFT_AUTHORITARIAN, lambda ei, si: ei > 6 and si > 6, ECO_SOCIALIST),
    PrimaryRule(Quadrant.LEFT_AUTHORITARIAN, _always, SOCIAL_DEMOCRAT),
    PrimaryRule(Quadrant.RIGHT_AUTHORITARIAN, lambda ei, si: ei > 7 and si > 7, NEO_REACTIONARY),
    PrimaryRule(Quadrant.RIGHT_AUTHORITARIAN, lambda ei, si: si > 5 and ei < 3, ALT_RIGHT),
    PrimaryRule(Quadrant.RIGHT_AUTHORITARIAN, _always, CONSERVATIVE),
)


def classify_primary(economic: float, social: float) -> str:
    """Select the single primary ideology label for a normalized score pair.

    Deterministic. Always returns a member of VALID_PRIMARY_LABELS.
    """
    quadrant = quadrant_of(economic, social)
    ei = abs(economic)
    si = abs(social)
    for rule in PRIMARY_RULES:
        if rule.quadrant is quadrant and rule.condition(ei, si):
            return rule.label
    # Unreachable: every quadrant ends with an unconditional row.
    raise RuntimeError(f"No primary rule matched quadrant {quadrant.value}.")
