"""
Prestige system for interplay.

Prestige tracks are unbounded ladders. Designers attach named levels at
score thresholds, optional periodic decay, and counter tracks:

- Gaining prestige on a track costs 25% of the gain (rounded down) on each
  of its counter tracks
- Counter effects are single-hop: the penalty never triggers the counter
  track's own counter tracks
- Decay removes up to decay_rate points per tick and never goes below zero
"""

from __future__ import annotations

import logging
import math

from ..rules.tiers import prestige_level
from ..state.event_bus import EventType
from ..state.schema import (
    Interaction,
    PrestigeLevel,
    PrestigeTrack,
    PrestigeView,
    TrackCategory,
)
from .tracks import ProgressionTrackManager

logger = logging.getLogger(__name__)


# Fraction of a gain applied (negated) to each counter track
COUNTER_EFFECT_RATIO = 0.25
DECAY_REASON = "periodic decay"


class PrestigeManager(ProgressionTrackManager):
    """Player prestige across designer-defined tracks."""

    category = TrackCategory.PRESTIGE

    def derive_qualitative(self, track_id: str) -> PrestigeLevel | None:
        """Highest level reached on a track, or None below every threshold."""
        track = self.get_definition(track_id)
        if track is None:
            return None
        return prestige_level(self.get_score(track_id), track.levels)

    def snapshot_view(self) -> dict[str, PrestigeView]:
        return {
            track_id: PrestigeView(
                value=self.get_score(track_id),
                level=self.derive_qualitative(track_id),
                levels=sorted(
                    self.get_definition(track_id).levels, key=lambda lv: lv.threshold
                ),
            )
            for track_id in self.track_ids
        }

    def effect_entries(self, interaction: Interaction) -> list[tuple[str, int, str]]:
        return [
            (c.track_id, c.change, c.description)
            for c in interaction.effects.prestige_changes
        ]

    def change_score(self, track_id: str, delta: int, reason: str) -> bool:
        """
        Apply a delta, then counter effects if the track gained prestige.

        Returns:
            False (and changes nothing) if the track is not defined, else True
        """
        if not super().change_score(track_id, delta, reason):
            return False

        track = self.get_definition(track_id)
        if delta > 0 and track.counter_tracks:
            self.apply_counter_effects(track, delta)
        return True

    def apply_counter_effects(self, source: PrestigeTrack, gain: int) -> dict[str, int]:
        """
        Penalize each counter track of source for a gain of `gain`.

        Goes through _apply() rather than change_score() so a penalty can
        never cascade further.

        Returns:
            Mapping of counter track id -> penalty applied
        """
        penalty = math.floor(gain * -COUNTER_EFFECT_RATIO)
        reason = f"counter effect from gaining {source.name or source.id} prestige"
        applied: dict[str, int] = {}

        for counter_id in source.counter_tracks:
            counter = self.get_definition(counter_id)
            if counter is None or counter_id == source.id:
                logger.debug(f"Skipping counter track {counter_id} of {source.id}")
                continue
            self._apply(counter, penalty, reason)
            applied[counter_id] = penalty

        if applied:
            self._bus.emit(
                EventType.COUNTER_EFFECT,
                player_id=self.player_id,
                source=source.id,
                gain=gain,
                penalties=applied,
            )
        return applied

    def apply_decay(self) -> dict[str, int]:
        """
        Run one decay tick over every track with a positive decay rate.

        Returns:
            Mapping of track id -> points removed (only tracks that decayed)
        """
        decayed: dict[str, int] = {}
        for track in self.definitions:
            if track.decay_rate <= 0:
                continue
            current = self.get_score(track.id)
            if current <= 0:
                continue
            amount = min(current, track.decay_rate)
            self.change_score(track.id, -amount, DECAY_REASON)
            decayed[track.id] = amount

        if decayed:
            logger.info(f"Prestige decay applied: {decayed}")
            self._bus.emit(
                EventType.DECAY_APPLIED,
                player_id=self.player_id,
                decayed=decayed,
            )
        return decayed
