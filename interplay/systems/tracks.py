"""
Shared machinery for the three progression managers.

A manager owns one player's scores for one category of tracks (influence,
prestige or alignment), records every change in an append-only history, and
derives a qualitative label from the score.

Unknown track ids are never errors: reads return 0 and writes return False,
because authored content may reference tracks that were added or removed
independently of it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from ..state.event_bus import EventBus, EventType, get_event_bus
from ..state.schema import (
    ChangeRecord,
    EffectOutcome,
    Interaction,
    ProgressionState,
    TrackCategory,
    TrackDefinition,
)
from .validation import ensure_valid_tracks

logger = logging.getLogger(__name__)


class ProgressionTrackManager(ABC):
    """
    Base class for InfluenceManager, PrestigeManager and AlignmentManager.

    Subclasses set `category` and fill in the hooks:
    - initial_score(): starting score for a newly defined track
    - bound(): clamp a candidate score (identity unless the category is bounded)
    - derive_qualitative(): score -> tier / level / zone
    - snapshot_view(): the fragment merged into a PlayerSnapshot
    - effect_entries(): this category's effects on an interaction
    """

    category: TrackCategory

    def __init__(
        self,
        definitions: Iterable[TrackDefinition] = (),
        bus: EventBus | None = None,
        player_id: str = "",
    ):
        self._definitions: dict[str, TrackDefinition] = {}
        self._scores: dict[str, int] = {}
        self._history: dict[str, list[ChangeRecord]] = {}
        self._bus = bus or get_event_bus()
        self.player_id = player_id
        self.update_track_definitions(definitions)

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def initial_score(self, definition: TrackDefinition) -> int:
        return 0

    def bound(self, definition: TrackDefinition, value: int) -> int:
        return value

    @abstractmethod
    def derive_qualitative(self, track_id: str) -> Any:
        pass

    @abstractmethod
    def snapshot_view(self) -> dict[str, Any]:
        pass

    @abstractmethod
    def effect_entries(self, interaction: Interaction) -> list[tuple[str, int, str]]:
        """(track_id, change, description) for each effect of this category."""
        pass

    # -------------------------------------------------------------------------
    # Definitions
    # -------------------------------------------------------------------------

    @property
    def definitions(self) -> list[TrackDefinition]:
        return list(self._definitions.values())

    @property
    def track_ids(self) -> list[str]:
        return list(self._definitions)

    def get_definition(self, track_id: str) -> TrackDefinition | None:
        return self._definitions.get(track_id)

    def update_track_definitions(self, definitions: Iterable[TrackDefinition]) -> None:
        """
        Replace the track definitions.

        New tracks start at their initial score. Scores of removed tracks are
        kept but dormant (reads return 0 until the track is defined again).
        Scores pushed out of range by new bounds are clamped and the clamp is
        recorded in history.

        Raises:
            TrackConfigError: If the definitions fail validation
        """
        definitions = list(definitions)
        ensure_valid_tracks(self.category, definitions)

        self._definitions = {d.id: d for d in definitions}

        for definition in definitions:
            self._history.setdefault(definition.id, [])
            if definition.id not in self._scores:
                self._scores[definition.id] = self.bound(
                    definition, self.initial_score(definition)
                )
                continue

            current = self._scores[definition.id]
            bounded = self.bound(definition, current)
            if bounded != current:
                self._scores[definition.id] = bounded
                self._record(definition.id, bounded - current, bounded, "bounds updated")

        self._bus.emit(
            EventType.TRACKS_UPDATED,
            player_id=self.player_id,
            category=self.category.value,
            track_ids=self.track_ids,
        )

    # -------------------------------------------------------------------------
    # Scores
    # -------------------------------------------------------------------------

    def get_score(self, track_id: str) -> int:
        """Current score, or 0 for a track that is not currently defined."""
        definition = self._definitions.get(track_id)
        if definition is None:
            return 0
        return self._scores.get(track_id, self.initial_score(definition))

    def change_score(self, track_id: str, delta: int, reason: str) -> bool:
        """
        Apply a delta to one track.

        Returns:
            False (and changes nothing) if the track is not defined, else True
        """
        definition = self._definitions.get(track_id)
        if definition is None:
            logger.debug(f"Ignoring {self.category.value} change for unknown track {track_id}")
            return False

        self._apply(definition, delta, reason)
        return True

    def _apply(self, definition: TrackDefinition, delta: int, reason: str) -> int:
        """Update score, history and listeners. Returns the new score."""
        before = self.get_score(definition.id)
        after = self.bound(definition, before + delta)
        self._scores[definition.id] = after
        self._record(definition.id, delta, after, reason)

        logger.debug(
            f"{self.category.value}:{definition.id} {before} -> {after} ({delta:+d}, {reason})"
        )
        self._bus.emit(
            EventType.TRACK_CHANGED,
            player_id=self.player_id,
            category=self.category.value,
            track_id=definition.id,
            change=delta,
            before=before,
            after=after,
            reason=reason,
        )
        return after

    def _record(self, track_id: str, delta: int, new_value: int, reason: str) -> None:
        history = self._history.setdefault(track_id, [])
        timestamp = datetime.now()
        # Keep history ordered even if the wall clock steps backwards
        if history and history[-1].timestamp > timestamp:
            timestamp = history[-1].timestamp
        history.append(ChangeRecord(
            timestamp=timestamp,
            change=delta,
            new_value=new_value,
            reason=reason,
        ))

    def history(self, track_id: str) -> list[ChangeRecord]:
        """Change records for a track, oldest first."""
        return list(self._history.get(track_id, []))

    # -------------------------------------------------------------------------
    # Interactions
    # -------------------------------------------------------------------------

    def apply_interaction_effects(self, interaction: Interaction) -> list[EffectOutcome]:
        """
        Apply every effect of this manager's category from a completed interaction.

        Effects on unknown tracks are skipped; the rest still apply.
        """
        outcomes = []
        for track_id, change, description in self.effect_entries(interaction):
            reason = description or f"Completed interaction: {interaction.title}"
            applied = self.change_score(track_id, change, reason)
            outcomes.append(EffectOutcome(
                category=self.category,
                track_id=track_id,
                change=change,
                applied=applied,
                reason=reason,
            ))
        return outcomes

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_state(self) -> ProgressionState:
        """Scores and history (dormant tracks included) as a serializable model."""
        return ProgressionState(
            scores=dict(self._scores),
            history={k: list(v) for k, v in self._history.items()},
        )

    def load_state(self, state: ProgressionState) -> None:
        """
        Restore scores and history saved by to_state().

        Saved scores are re-bounded against the current definitions.
        """
        self._scores.update(state.scores)
        for track_id, records in state.history.items():
            self._history[track_id] = list(records)
        self.update_track_definitions(self.definitions)

    @classmethod
    def from_state(
        cls,
        definitions: Iterable[TrackDefinition],
        state: ProgressionState,
        bus: EventBus | None = None,
        player_id: str = "",
    ):
        manager = cls(definitions, bus=bus, player_id=player_id)
        manager.load_state(state)
        return manager

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tracks={self.track_ids})"
