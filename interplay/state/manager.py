"""
Progression session for one player.

Owns the three progression managers and wires them, explicitly, into the
snapshot builder, prerequisite evaluator and effect applicator. Nothing is
shared through module globals: every consumer receives the managers (or
their views) from the session that owns them.

Typical flow:
    session = ProgressionSession(content, player)
    result = session.evaluate("meet_the_elders")   # fresh snapshot each call
    if result.satisfied:
        session.complete("meet_the_elders")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .event_bus import EventBus, get_event_bus
from .schema import (
    ContentPack,
    EvaluationResult,
    Interaction,
    PlayerProgress,
    PlayerSnapshot,
    PlayerState,
    TrackCategory,
)

if TYPE_CHECKING:
    from ..systems.effects import EffectReport

logger = logging.getLogger(__name__)


class ProgressionSession:
    """
    Player-scoped facade over the progression systems.

    Systems are imported lazily to avoid circular imports between
    state and systems.
    """

    def __init__(
        self,
        content: ContentPack | None = None,
        player: PlayerState | Mapping[str, Any] | None = None,
        bus: EventBus | None = None,
        player_id: str = "",
    ):
        """
        Args:
            content: Track definitions and interactions
            player: Base player state (level, skills, quests, inventory)
            bus: Event bus for change notifications (process-wide bus if omitted)
            player_id: Identifier attached to emitted events

        Raises:
            TrackConfigError: If the content's track definitions are invalid
        """
        from ..systems.alignment import AlignmentManager
        from ..systems.effects import EffectApplicator
        from ..systems.influence import InfluenceManager
        from ..systems.prerequisites import PrerequisiteEvaluator
        from ..systems.prestige import PrestigeManager

        self.content = content or ContentPack()
        self.player = _coerce_player(player)
        self.player_id = player_id
        self.bus = bus or get_event_bus()

        self.influence = InfluenceManager(
            self.content.influence_domains, bus=self.bus, player_id=player_id
        )
        self.prestige = PrestigeManager(
            self.content.prestige_tracks, bus=self.bus, player_id=player_id
        )
        self.alignment = AlignmentManager(
            self.content.alignment_axes, bus=self.bus, player_id=player_id
        )
        self.evaluator = PrerequisiteEvaluator()
        self.effects = EffectApplicator(
            self.influence, self.prestige, self.alignment, bus=self.bus
        )

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get_interaction(self, interaction: Interaction | str) -> Interaction:
        """
        Resolve an interaction or interaction id.

        Raises:
            KeyError: If no interaction has that id
        """
        if isinstance(interaction, Interaction):
            return interaction
        found = self.content.get_interaction(interaction)
        if found is None:
            raise KeyError(f"Unknown interaction: {interaction}")
        return found

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def snapshot(self) -> PlayerSnapshot:
        """Build a fresh snapshot from the base state and current manager views."""
        from ..systems.snapshot import build_snapshot
        return build_snapshot(self.player, self.influence, self.prestige, self.alignment)

    def evaluate(self, interaction: Interaction | str) -> EvaluationResult:
        return self.evaluator.evaluate(self.get_interaction(interaction), self.snapshot())

    def available_interactions(self) -> list[tuple[Interaction, EvaluationResult]]:
        """Interactions to list for the player, each with its verdict."""
        return self.evaluator.available(self.content.interactions, self.snapshot())

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def complete(self, interaction: Interaction | str) -> "EffectReport":
        """
        Apply a completed interaction's effects.

        Availability is not re-checked here; evaluation and application are
        separate steps owned by the caller.
        """
        return self.effects.apply(self.get_interaction(interaction))

    def apply_decay(self) -> dict[str, int]:
        """One prestige decay tick."""
        return self.prestige.apply_decay()

    def update_content(self, content: ContentPack) -> None:
        """
        Swap in edited content, keeping scores and history.

        All three categories are validated before any manager changes, so a
        rejected edit leaves definitions, scores and history untouched.

        Raises:
            TrackConfigError: If the new track definitions are invalid
        """
        from ..systems.validation import ensure_valid_tracks

        ensure_valid_tracks(TrackCategory.INFLUENCE, content.influence_domains)
        ensure_valid_tracks(TrackCategory.PRESTIGE, content.prestige_tracks)
        ensure_valid_tracks(TrackCategory.ALIGNMENT, content.alignment_axes)

        self.influence.update_track_definitions(content.influence_domains)
        self.prestige.update_track_definitions(content.prestige_tracks)
        self.alignment.update_track_definitions(content.alignment_axes)
        self.content = content
        logger.info(f"Content updated: {len(content.interactions)} interactions")

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def standings(self) -> dict[str, list[dict[str, Any]]]:
        """Current score and derived label for every defined track, by category."""
        influence = []
        for domain in self.influence.definitions:
            tier = self.influence.derive_qualitative(domain.id)
            influence.append({
                "id": domain.id,
                "name": domain.name or domain.id,
                "value": self.influence.get_score(domain.id),
                "label": tier.value if tier else None,
            })

        prestige = []
        for track in self.prestige.definitions:
            level = self.prestige.derive_qualitative(track.id)
            prestige.append({
                "id": track.id,
                "name": track.name or track.id,
                "value": self.prestige.get_score(track.id),
                "label": (level.name or level.id) if level else None,
            })

        alignment = []
        for axis in self.alignment.definitions:
            zone = self.alignment.derive_qualitative(axis.id)
            alignment.append({
                "id": axis.id,
                "name": axis.name or axis.id,
                "value": self.alignment.get_score(axis.id),
                "label": (zone.name or zone.id) if zone else None,
            })

        return {"influence": influence, "prestige": prestige, "alignment": alignment}

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_progress(self) -> PlayerProgress:
        return PlayerProgress(
            player_id=self.player_id,
            player=self.player,
            influence=self.influence.to_state(),
            prestige=self.prestige.to_state(),
            alignment=self.alignment.to_state(),
        )

    @classmethod
    def from_progress(
        cls,
        content: ContentPack,
        progress: PlayerProgress,
        bus: EventBus | None = None,
    ) -> "ProgressionSession":
        session = cls(content, progress.player, bus=bus, player_id=progress.player_id)
        session.influence.load_state(progress.influence)
        session.prestige.load_state(progress.prestige)
        session.alignment.load_state(progress.alignment)
        return session


def _coerce_player(player: PlayerState | Mapping[str, Any] | None) -> PlayerState:
    if player is None:
        return PlayerState()
    if isinstance(player, PlayerState):
        return player
    return PlayerState.model_validate(dict(player))
