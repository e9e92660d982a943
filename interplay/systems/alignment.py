"""
Alignment system for interplay.

Alignment axes are unbounded spectra split into named zones. Scores are not
clamped; a score that falls between zones simply has no zone.
"""

from __future__ import annotations

from ..rules.tiers import alignment_zone
from ..state.schema import (
    AlignmentAxis,
    AlignmentView,
    AlignmentZone,
    Interaction,
    TrackCategory,
)
from .tracks import ProgressionTrackManager


class AlignmentManager(ProgressionTrackManager):
    """Player alignment across designer-defined axes."""

    category = TrackCategory.ALIGNMENT

    def initial_score(self, definition: AlignmentAxis) -> int:
        return definition.default_value

    def derive_qualitative(self, track_id: str) -> AlignmentZone | None:
        axis = self.get_definition(track_id)
        if axis is None:
            return None
        return alignment_zone(self.get_score(track_id), axis.zones)

    def snapshot_view(self) -> dict[str, AlignmentView]:
        return {
            axis_id: AlignmentView(
                value=self.get_score(axis_id),
                zone=self.derive_qualitative(axis_id),
            )
            for axis_id in self.track_ids
        }

    def effect_entries(self, interaction: Interaction) -> list[tuple[str, int, str]]:
        return [
            (c.axis_id, c.change, c.description)
            for c in interaction.effects.alignment_changes
        ]
