"""
Influence system for interplay.

Influence is a bounded reputation meter per domain: scores are clamped to the
domain's [min, max] and map onto nine fixed tiers by percentage of range.
"""

from __future__ import annotations

from ..rules.tiers import influence_tier
from ..state.schema import (
    InfluenceDomain,
    InfluenceTier,
    Interaction,
    TrackCategory,
)
from .tracks import ProgressionTrackManager


class InfluenceManager(ProgressionTrackManager):
    """Player influence across designer-defined domains."""

    category = TrackCategory.INFLUENCE

    def initial_score(self, definition: InfluenceDomain) -> int:
        return definition.default_value

    def bound(self, definition: InfluenceDomain, value: int) -> int:
        return max(definition.min, min(definition.max, value))

    def derive_qualitative(self, track_id: str) -> InfluenceTier | None:
        """Tier for a domain, or None if the domain is unknown or has no range."""
        domain = self.get_definition(track_id)
        if domain is None:
            return None
        return influence_tier(self.get_score(track_id), domain.min, domain.max)

    def snapshot_view(self) -> dict[str, int]:
        return {domain_id: self.get_score(domain_id) for domain_id in self.track_ids}

    def effect_entries(self, interaction: Interaction) -> list[tuple[str, int, str]]:
        return [
            (c.domain_id, c.change, c.description)
            for c in interaction.effects.influence_changes
        ]
