"""
Score-to-label rules as pure functions.

Each progression category turns a raw score into a qualitative label:
influence into a fixed tier, prestige into the highest reached level,
alignment into the containing zone.
"""

from __future__ import annotations

from ..state.schema import (
    INFLUENCE_TIER_THRESHOLDS,
    AlignmentZone,
    InfluenceTier,
    PrestigeLevel,
)


def influence_percent(value: int, minimum: int, maximum: int) -> float | None:
    """Position of value within [minimum, maximum] as 0-100, or None for an empty range."""
    span = maximum - minimum
    if span <= 0:
        return None
    # Multiply first so exact cutoffs stay exact
    return (value - minimum) * 100 / span


def influence_tier(value: int, minimum: int, maximum: int) -> InfluenceTier | None:
    """
    Map an influence score to its fixed tier.

    Cutoffs are inclusive: exactly 90% of the range is Exalted.

    Returns:
        The tier, or None when the domain has no usable range (min >= max)
    """
    percent = influence_percent(value, minimum, maximum)
    if percent is None:
        return None
    for cutoff, tier in INFLUENCE_TIER_THRESHOLDS:
        if percent >= cutoff:
            return tier
    return InfluenceTier.HATED


def prestige_level(value: int, levels: list[PrestigeLevel]) -> PrestigeLevel | None:
    """Highest level whose threshold is at or below value; None below every threshold."""
    reached = None
    for level in sorted(levels, key=lambda lv: lv.threshold):
        if value >= level.threshold:
            reached = level
        else:
            break
    return reached


def alignment_zone(value: int, zones: list[AlignmentZone]) -> AlignmentZone | None:
    """First zone whose inclusive [min, max] contains value; None when value sits in a gap."""
    for zone in zones:
        if zone.min <= value <= zone.max:
            return zone
    return None
