"""
Effect applicator for completed interactions.

Runs the influence, prestige and alignment effects of an interaction, in that
fixed order, through the managers that own those scores. An effect on an
unknown track is skipped and reported; it never aborts the remaining effects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..state.event_bus import EventBus, EventType, get_event_bus
from ..state.schema import EffectOutcome, Interaction
from .alignment import AlignmentManager
from .influence import InfluenceManager
from .prestige import PrestigeManager

logger = logging.getLogger(__name__)


@dataclass
class EffectReport:
    """Everything that happened when an interaction's effects were applied."""
    interaction_id: str
    outcomes: list[EffectOutcome] = field(default_factory=list)

    @property
    def applied(self) -> list[EffectOutcome]:
        return [o for o in self.outcomes if o.applied]

    @property
    def skipped(self) -> list[EffectOutcome]:
        return [o for o in self.outcomes if not o.applied]

    def model_dump(self) -> dict:
        """Serialize for JSON (matches Pydantic convention)."""
        return {
            "interaction_id": self.interaction_id,
            "outcomes": [o.model_dump(mode="json") for o in self.outcomes],
        }


class EffectApplicator:
    """Applies interaction effects through explicitly injected managers."""

    def __init__(
        self,
        influence: InfluenceManager,
        prestige: PrestigeManager,
        alignment: AlignmentManager,
        bus: EventBus | None = None,
    ):
        self.influence = influence
        self.prestige = prestige
        self.alignment = alignment
        self._bus = bus or get_event_bus()

    def apply(self, interaction: Interaction) -> EffectReport:
        report = EffectReport(interaction_id=interaction.id)

        for manager in (self.influence, self.prestige, self.alignment):
            report.outcomes.extend(manager.apply_interaction_effects(interaction))

        for outcome in report.skipped:
            logger.warning(
                f"Skipped {outcome.category.value} effect on unknown track "
                f"{outcome.track_id} from interaction {interaction.id}"
            )
        for outcome in report.applied:
            logger.debug(
                f"{interaction.id}: {outcome.category.value}:{outcome.track_id} "
                f"{outcome.change:+d} ({outcome.reason})"
            )
        logger.info(
            f"Completed interaction {interaction.id}: "
            f"{len(report.applied)} applied, {len(report.skipped)} skipped"
        )

        self._bus.emit(
            EventType.INTERACTION_COMPLETED,
            player_id=self.influence.player_id,
            interaction_id=interaction.id,
            applied=len(report.applied),
            skipped=len(report.skipped),
        )
        return report
