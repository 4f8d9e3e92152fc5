"""
tests/test_secondary.py — Secondary ideology tagging.

Covers:
    - Focus tally thresholds (standard and strict variants)
    - Axis magnitude rules and alternate-ideology templates
    - Primary exclusion and deduplication across rule families
    - The four reference scenarios
"""

from __future__ import annotations

import pytest

from compass.classifier import classify_primary
from compass.ideologies import (
    ACCELERATIONIST,
    ALT_RIGHT,
    ANARCHIST_SYMPATHIES,
    CENTRIST,
    CLASSICAL_LIBERAL,
    CONSERVATIVE,
    CRYPTO_ANARCHIST,
    ECO_SOCIALIST,
    FALGSC,
    MODERATE_LIBERTARIAN,
    NEO_REACTIONARY,
    POST_LIBERAL,
    SOCIAL_DEMOCRAT,
)
from compass.scoring import CategoryTally
from compass.secondary import (
    FOCUS_RULES,
    dedupe_excluding,
    focus_nominations,
    magnitude_nominations,
    meets_standard_threshold,
    meets_strict_threshold,
    tag_secondary,
)


def _tag(economic: float, social: float, tallies: dict | None = None) -> tuple[str, tuple[str, ...]]:
    primary = classify_primary(economic, social)
    return primary, tag_secondary(primary, economic, social, tallies)


# ---------------------------------------------------------------------------
# Reference scenarios
# ---------------------------------------------------------------------------

class TestScenarios:
    def test_scenario_1_far_left_libertarian(self):
        primary, secondary = _tag(-8, -8)
        assert primary == FALGSC
        assert ACCELERATIONIST in secondary
        assert POST_LIBERAL in secondary
        assert ANARCHIST_SYMPATHIES in secondary
        assert CENTRIST not in secondary
        assert FALGSC not in secondary

    def test_scenario_2_origin(self):
        primary, secondary = _tag(0, 0)
        assert primary == CONSERVATIVE
        assert secondary == (CENTRIST,)

    def test_scenario_3_classical_liberal(self):
        primary, secondary = _tag(6, -6)
        assert primary == CLASSICAL_LIBERAL
        assert ACCELERATIONIST in secondary
        assert POST_LIBERAL in secondary
        # looser Crypto-Anarchist template fires at |6|, |6|
        assert CRYPTO_ANARCHIST in secondary

    def test_scenario_4_falgsc_focus_evidence(self):
        tallies = {"falgscFocus": CategoryTally(strongly_agree=2)}
        primary, secondary = _tag(1, 1, tallies)
        assert primary != FALGSC
        assert FALGSC in secondary


# ---------------------------------------------------------------------------
# Family A — focus tallies
# ---------------------------------------------------------------------------

class TestFocusThresholds:
    @pytest.mark.parametrize(
        ("strongly_agree", "agree", "expected"),
        [(1, 1, True), (2, 0, True), (1, 0, False), (0, 5, False), (0, 0, False)],
    )
    def test_standard(self, strongly_agree: int, agree: int, expected: bool):
        tally = CategoryTally(strongly_agree=strongly_agree, agree=agree)
        assert meets_standard_threshold(tally) is expected

    @pytest.mark.parametrize(
        ("strongly_agree", "agree", "expected"),
        [(1, 1, False), (1, 2, True), (2, 0, True), (0, 5, False)],
    )
    def test_strict(self, strongly_agree: int, agree: int, expected: bool):
        tally = CategoryTally(strongly_agree=strongly_agree, agree=agree)
        assert meets_strict_threshold(tally) is expected

    def test_only_alt_right_is_strict(self):
        strict = [r.focus for r in FOCUS_RULES if r.threshold is meets_strict_threshold]
        assert strict == ["altRightFocus"]

    def test_alt_right_needs_more_evidence(self):
        tallies = {"altRightFocus": CategoryTally(strongly_agree=1, agree=1)}
        assert focus_nominations(tallies) == []

    def test_falgsc_uses_standard_threshold(self):
        tallies = {"falgscFocus": CategoryTally(strongly_agree=1, agree=1)}
        assert focus_nominations(tallies) == [FALGSC]

    def test_every_focus_nominates_its_label(self):
        strong = CategoryTally(strongly_agree=2)
        tallies = {rule.focus: strong for rule in FOCUS_RULES}
        assert focus_nominations(tallies) == [rule.label for rule in FOCUS_RULES]

    def test_disagreement_never_nominates(self):
        tallies = {rule.focus: CategoryTally(strongly_disagree=9) for rule in FOCUS_RULES}
        assert focus_nominations(tallies) == []

    def test_unknown_focus_ignored(self):
        assert focus_nominations({"madeUpFocus": CategoryTally(strongly_agree=5)}) == []


# ---------------------------------------------------------------------------
# Family B — magnitudes and templates
# ---------------------------------------------------------------------------

class TestMagnitudeRules:
    def test_centrist_strict_bound(self):
        assert CENTRIST in magnitude_nominations(2.99, -2.99)
        assert CENTRIST not in magnitude_nominations(3, 0)

    def test_accelerationist_either_axis(self):
        assert ACCELERATIONIST in magnitude_nominations(4.6, 0)
        assert ACCELERATIONIST in magnitude_nominations(0, -4.6)
        assert ACCELERATIONIST not in magnitude_nominations(4.5, 4.5)

    def test_post_liberal_needs_libertarian_side(self):
        assert POST_LIBERAL in magnitude_nominations(0, -4.6)
        assert POST_LIBERAL not in magnitude_nominations(0, 4.6)

    def test_anarchist_sympathies(self):
        assert ANARCHIST_SYMPATHIES in magnitude_nominations(-4.6, -2.6)
        assert ANARCHIST_SYMPATHIES not in magnitude_nominations(-4.6, -2.5)
        assert ANARCHIST_SYMPATHIES not in magnitude_nominations(-4.5, -9)

    def test_eco_socialist_template(self):
        primary, secondary = _tag(-5, 5)
        assert primary == SOCIAL_DEMOCRAT
        assert ECO_SOCIALIST in secondary

    def test_alt_right_template(self):
        primary, secondary = _tag(2, 4)
        assert primary == CONSERVATIVE
        assert ALT_RIGHT in secondary

    def test_neo_reactionary_template(self):
        primary, secondary = _tag(6, 6)
        assert primary == CONSERVATIVE
        assert NEO_REACTIONARY in secondary

    def test_right_templates_need_positive_economic(self):
        primary, secondary = _tag(0, 9)
        assert primary == ALT_RIGHT
        assert secondary == (ACCELERATIONIST,)

    def test_libertarian_post_liberal_on_zero_economic(self):
        primary, secondary = _tag(0, -4.6)
        assert primary == MODERATE_LIBERTARIAN
        assert secondary == (ACCELERATIONIST, POST_LIBERAL)


# ---------------------------------------------------------------------------
# Union, exclusion, dedup
# ---------------------------------------------------------------------------

class TestDedupAndExclusion:
    def test_primary_excluded_from_tally_evidence(self):
        tallies = {"altRightFocus": CategoryTally(strongly_agree=3)}
        primary, secondary = _tag(2, 6, tallies)
        assert primary == ALT_RIGHT
        assert ALT_RIGHT not in secondary

    def test_same_label_from_both_families_once(self):
        tallies = {"accelerationistFocus": CategoryTally(strongly_agree=2)}
        _, secondary = _tag(-8, -8, tallies)
        assert secondary.count(ACCELERATIONIST) == 1
        assert secondary[0] == ACCELERATIONIST

    def test_tally_nominations_precede_magnitude(self):
        tallies = {"ecoSocialistFocus": CategoryTally(strongly_agree=1, agree=1)}
        _, secondary = _tag(-8, -8, tallies)
        assert secondary[0] == ECO_SOCIALIST

    def test_dedupe_excluding(self):
        assert dedupe_excluding(["a", "b", "a", "c", "b"], "c") == ("a", "b")

    def test_none_and_empty_tallies_equivalent(self):
        for economic, social in [(-8, -8), (0, 0), (6, -6), (2, 4)]:
            primary = classify_primary(economic, social)
            assert tag_secondary(primary, economic, social, None) == tag_secondary(
                primary, economic, social, {}
            )

    def test_invariants_over_grid(self):
        strong = CategoryTally(strongly_agree=2)
        tallies = {rule.focus: strong for rule in FOCUS_RULES}
        for e in range(-10, 11):
            for s in range(-10, 11):
                primary, secondary = _tag(e, s, tallies)
                assert primary not in secondary
                assert len(secondary) == len(set(secondary))
