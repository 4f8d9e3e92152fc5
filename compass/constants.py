"""
compass.constants — Single source of truth for scoring-scale constants.

Every module that needs these values MUST import from here.
No hardcoded duplicates anywhere in the codebase.

The scale constants are frozen: changing them changes what a score means
and breaks comparability across revisions of the question bank.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Precision
# ---------------------------------------------------------------------------

ROUND_PRECISION: int = 8
"""Decimal places used when a score is rendered for hashing.
Classification always runs on the unrounded normalized score."""

# ---------------------------------------------------------------------------
# Scoring scale
# ---------------------------------------------------------------------------

SCORE_BOUND: float = 10.0
"""Normalized axis scores live in [-SCORE_BOUND, +SCORE_BOUND]."""

SCORE_MULTIPLIER: float = 5.0
"""Mean adjusted answer (in [-2, +2]) times this gives the normalized score."""

NEUTRAL_LEVEL: int = 2
"""Likert level that contributes zero to an axis."""

DEFAULT_WEIGHT: float = 1.0

RESULTS_VERSION: str = "compass-v2"
"""Wire-format version tag for analysis responses."""

# ---------------------------------------------------------------------------
# Axes
# ---------------------------------------------------------------------------

AXIS_ECONOMIC: str = "economic"
AXIS_SOCIAL: str = "social"

AXES: tuple[str, ...] = (AXIS_ECONOMIC, AXIS_SOCIAL)

# ---------------------------------------------------------------------------
# Likert levels — index is the ordinal answer value
# ---------------------------------------------------------------------------

LIKERT_LEVELS: tuple[str, ...] = (
    "stronglyDisagree",
    "disagree",
    "neutral",
    "agree",
    "stronglyAgree",
)

VALID_LEVELS: frozenset[int] = frozenset(range(len(LIKERT_LEVELS)))

# ---------------------------------------------------------------------------
# Focus groups — focus name → question categories it aggregates
#
# Many-to-many: a category may feed several foci.
# ---------------------------------------------------------------------------

FOCUS_GROUPS: dict[str, tuple[str, ...]] = {
    "accelerationistFocus": ("accelerationism",),
    "postLiberalFocus": ("post_liberal", "neo_reactionary", "alt_right"),
    "anarchistFocus": ("anarchist", "crypto_anarchist", "cooperative", "decentralization"),
    "falgscFocus": ("falgsc",),
    "cryptoAnarchistFocus": ("crypto_anarchist",),
    "neoReactionaryFocus": ("neo_reactionary",),
    "ecoSocialistFocus": ("eco_socialist",),
    "altRightFocus": ("alt_right",),
}

FOCUS_NAMES: tuple[str, ...] = tuple(FOCUS_GROUPS)

CATEGORY_TO_FOCI: dict[str, tuple[str, ...]] = {}
for _focus, _categories in FOCUS_GROUPS.items():
    for _category in _categories:
        CATEGORY_TO_FOCI[_category] = CATEGORY_TO_FOCI.get(_category, ()) + (_focus,)
del _focus, _categories, _category
