"""
Tests for pure progression rules.

These work on plain numbers and models with no managers involved.
"""

import pytest

from interplay.rules import (
    alignment_zone,
    compare,
    describe_requirement,
    influence_percent,
    influence_tier,
    prestige_level,
)
from interplay.state import InfluenceTier, Operator
from interplay.state.schema import AlignmentZone, PrestigeLevel


class TestCompare:

    @pytest.mark.parametrize("operator,actual,required,expected", [
        (Operator.AT_LEAST, 5, 5, True),
        (Operator.AT_LEAST, 4, 5, False),
        (Operator.AT_MOST, 5, 5, True),
        (Operator.AT_MOST, 6, 5, False),
        (Operator.EQUAL, 5, 5, True),
        (Operator.NOT_EQUAL, 5, 5, False),
        (Operator.GREATER, 5, 5, False),
        (Operator.LESS, 4, 5, True),
    ])
    def test_operators(self, operator, actual, required, expected):
        assert compare(actual, operator, required) is expected

    def test_between_inclusive(self):
        assert compare(10, Operator.BETWEEN, 10, 20)
        assert compare(20, Operator.BETWEEN, 10, 20)
        assert not compare(21, Operator.BETWEEN, 10, 20)
        assert not compare(9, Operator.BETWEEN, 10, 20)

    def test_between_without_upper_bound(self):
        """Missing max degrades to >= value."""
        assert compare(500, Operator.BETWEEN, 10)
        assert not compare(9, Operator.BETWEEN, 10)

    def test_describe(self):
        assert describe_requirement(Operator.AT_LEAST, 20) == ">= 20"
        assert describe_requirement(Operator.BETWEEN, 1, 3) == "between 1 and 3"


class TestInfluenceTierRule:

    def test_percent(self):
        assert influence_percent(0, -100, 100) == 50
        assert influence_percent(5, 5, 5) is None
        assert influence_percent(0, 10, 0) is None

    @pytest.mark.parametrize("value,tier", [
        (90, InfluenceTier.EXALTED),
        (89, InfluenceTier.REVERED),
        (75, InfluenceTier.REVERED),
        (60, InfluenceTier.HONORED),
        (45, InfluenceTier.FRIENDLY),
        (35, InfluenceTier.NEUTRAL),
        (25, InfluenceTier.INDIFFERENT),
        (15, InfluenceTier.UNFRIENDLY),
        (5, InfluenceTier.HOSTILE),
        (4, InfluenceTier.HATED),
    ])
    def test_cutoffs_on_zero_to_hundred(self, value, tier):
        assert influence_tier(value, 0, 100) == tier

    def test_degenerate_range(self):
        assert influence_tier(0, 0, 0) is None


class TestLevelAndZoneRules:

    def test_prestige_level_empty(self):
        assert prestige_level(1000, []) is None

    def test_prestige_level_highest_reached(self):
        levels = [
            PrestigeLevel(id="b", threshold=50),
            PrestigeLevel(id="a", threshold=0),
        ]
        assert prestige_level(75, levels).id == "b"
        assert prestige_level(-1, levels) is None

    def test_first_matching_zone_wins(self):
        zones = [
            AlignmentZone(id="first", min=0, max=10),
            AlignmentZone(id="second", min=5, max=15),
        ]
        assert alignment_zone(7, zones).id == "first"
        assert alignment_zone(12, zones).id == "second"
        assert alignment_zone(20, zones) is None
