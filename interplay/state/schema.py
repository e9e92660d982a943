"""
Pydantic models for interplay content and player state.

Designed to round-trip through the authoring tool's JSON: Python fields are
snake_case, JSON keys are the tool's camelCase (field aliases). Either
spelling is accepted on input; exports use the aliases.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContentModel(BaseModel):
    """Base for authored records: accepts field names and camelCase aliases."""
    model_config = ConfigDict(populate_by_name=True)


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------

class TrackCategory(str, Enum):
    INFLUENCE = "influence"
    PRESTIGE = "prestige"
    ALIGNMENT = "alignment"


class InfluenceTier(str, Enum):
    """Fixed, system-wide influence bands (not designer-configurable)."""
    HATED = "Hated"
    HOSTILE = "Hostile"
    UNFRIENDLY = "Unfriendly"
    INDIFFERENT = "Indifferent"
    NEUTRAL = "Neutral"
    FRIENDLY = "Friendly"
    HONORED = "Honored"
    REVERED = "Revered"
    EXALTED = "Exalted"


# Percent-of-range cutoffs, highest first. First match wins; below all = Hated.
INFLUENCE_TIER_THRESHOLDS: list[tuple[int, InfluenceTier]] = [
    (90, InfluenceTier.EXALTED),
    (75, InfluenceTier.REVERED),
    (60, InfluenceTier.HONORED),
    (45, InfluenceTier.FRIENDLY),
    (35, InfluenceTier.NEUTRAL),
    (25, InfluenceTier.INDIFFERENT),
    (15, InfluenceTier.UNFRIENDLY),
    (5, InfluenceTier.HOSTILE),
]


class Operator(str, Enum):
    """Comparators available to numeric conditions."""
    AT_LEAST = ">="
    AT_MOST = "<="
    EQUAL = "=="
    NOT_EQUAL = "!="
    GREATER = ">"
    LESS = "<"
    BETWEEN = "between"


# -----------------------------------------------------------------------------
# Track definitions (designer-authored)
# -----------------------------------------------------------------------------

class InfluenceDomain(ContentModel):
    """Bounded reputation meter."""
    id: str
    name: str = ""
    description: str = ""
    color: str = ""  # Display only
    min: int = -100
    max: int = 100
    default_value: int = Field(default=0, alias="defaultValue")


class PrestigeLevel(ContentModel):
    id: str
    name: str = ""
    threshold: int = 0
    description: str = ""


class PrestigeTrack(ContentModel):
    """Unbounded ladder with optional decay and opposing tracks."""
    id: str
    name: str = ""
    description: str = ""
    color: str = ""
    decay_rate: int = Field(default=0, ge=0, alias="decayRate")
    counter_tracks: list[str] = Field(default_factory=list, alias="counterTracks")
    levels: list[PrestigeLevel] = Field(default_factory=list)


class AlignmentZone(ContentModel):
    id: str
    name: str = ""
    min: int
    max: int
    description: str = ""


class AlignmentAxis(ContentModel):
    """
    Unbounded spectrum partitioned into named zones.

    min/max describe the editor's range and are only used for validation;
    scores are not clamped to them. Zones may leave gaps.
    """
    id: str
    name: str = ""
    description: str = ""
    color: str = ""
    min: int = -1000
    max: int = 1000
    default_value: int = Field(default=0, alias="defaultValue")
    zones: list[AlignmentZone] = Field(default_factory=list)


TrackDefinition = Union[InfluenceDomain, PrestigeTrack, AlignmentAxis]


# -----------------------------------------------------------------------------
# Player progression state
# -----------------------------------------------------------------------------

class ChangeRecord(ContentModel):
    """One audit entry in a track's append-only history."""
    timestamp: datetime = Field(default_factory=datetime.now)
    change: int
    new_value: int = Field(alias="newValue")
    reason: str = ""


class ProgressionState(ContentModel):
    """Serializable scores and history for one manager."""
    scores: dict[str, int] = Field(default_factory=dict)
    history: dict[str, list[ChangeRecord]] = Field(default_factory=dict)


# -----------------------------------------------------------------------------
# Prerequisites
# -----------------------------------------------------------------------------

class LevelCondition(ContentModel):
    type: Literal["level"] = "level"
    value: int = 0
    operator: Operator = Operator.AT_LEAST
    max: int | None = None


class SkillCondition(ContentModel):
    type: Literal["skill"] = "skill"
    skill_id: str = Field(alias="skillId")
    value: int = 0
    operator: Operator = Operator.AT_LEAST
    max: int | None = None


QUEST_OPERATORS = {"completed": Operator.EQUAL, "not_completed": Operator.NOT_EQUAL}
ITEM_OPERATORS = {"has": Operator.AT_LEAST, "not_has": Operator.LESS}


class QuestCondition(ContentModel):
    """Quest completed (==, the default) or not completed (!=)."""
    type: Literal["quest"] = "quest"
    quest_id: str = Field(alias="questId")
    operator: Operator = Operator.EQUAL

    @field_validator("operator", mode="before")
    @classmethod
    def _quest_operator(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = QUEST_OPERATORS.get(value, value)
        if Operator(value) not in (Operator.EQUAL, Operator.NOT_EQUAL):
            raise ValueError("quest conditions accept ==, !=, completed or not_completed")
        return value


class ItemCondition(ContentModel):
    """Inventory count check; `has`/`not_has` read as >= value / < value."""
    type: Literal["item"] = "item"
    item_id: str = Field(alias="itemId")
    value: int = 1
    operator: Operator = Operator.AT_LEAST
    max: int | None = None

    @field_validator("operator", mode="before")
    @classmethod
    def _item_operator(cls, value: Any) -> Any:
        if isinstance(value, str):
            return ITEM_OPERATORS.get(value, value)
        return value


class InfluenceCondition(ContentModel):
    type: Literal["influence"] = "influence"
    domain_id: str = Field(alias="domainId")
    value: int = 0
    operator: Operator = Operator.AT_LEAST
    max: int | None = None


class PrestigeCondition(ContentModel):
    """Numeric prestige check, or a derived level check when level_id is set."""
    type: Literal["prestige"] = "prestige"
    track_id: str = Field(alias="trackId")
    value: int = 0
    operator: Operator = Operator.AT_LEAST
    max: int | None = None
    level_id: str | None = Field(default=None, alias="levelId")


class AlignmentCondition(ContentModel):
    """Numeric alignment check, or a derived zone check when zone_id is set."""
    type: Literal["alignment"] = "alignment"
    axis_id: str = Field(alias="axisId")
    value: int = 0
    operator: Operator = Operator.AT_LEAST
    max: int | None = None
    zone_id: str | None = Field(default=None, alias="zoneId")


Condition = Annotated[
    Union[
        LevelCondition,
        SkillCondition,
        QuestCondition,
        ItemCondition,
        InfluenceCondition,
        PrestigeCondition,
        AlignmentCondition,
    ],
    Field(discriminator="type"),
]


class PrerequisiteGroup(ContentModel):
    """Conditions that must all hold (AND). Groups are alternatives (OR)."""
    id: str = ""
    conditions: list[Condition] = Field(default_factory=list)


class Prerequisites(ContentModel):
    groups: list[PrerequisiteGroup] = Field(default_factory=list)
    show_when_unavailable: bool = Field(default=False, alias="showWhenUnavailable")
    unavailable_message: str = Field(default="", alias="unavailableMessage")


# -----------------------------------------------------------------------------
# Effects
# -----------------------------------------------------------------------------

class InfluenceChange(ContentModel):
    domain_id: str = Field(alias="domainId")
    change: int
    description: str = ""


class PrestigeChange(ContentModel):
    track_id: str = Field(alias="trackId")
    change: int
    description: str = ""


class AlignmentChange(ContentModel):
    axis_id: str = Field(alias="axisId")
    change: int
    description: str = ""


class InteractionEffects(ContentModel):
    influence_changes: list[InfluenceChange] = Field(
        default_factory=list, alias="influenceChanges"
    )
    prestige_changes: list[PrestigeChange] = Field(
        default_factory=list, alias="prestigeChanges"
    )
    alignment_changes: list[AlignmentChange] = Field(
        default_factory=list, alias="alignmentChanges"
    )


class Interaction(ContentModel):
    """
    A dialogue/event node.

    Evaluated against a snapshot at presentation time; its effects are
    applied at completion time.
    """
    id: str
    title: str = ""
    description: str = ""
    prerequisites: Prerequisites = Field(default_factory=Prerequisites)
    effects: InteractionEffects = Field(default_factory=InteractionEffects)


class ContentPack(ContentModel):
    """
    Everything a designer authors, as exported by the authoring tool.

    This is the root model that gets serialized to JSON.
    """
    schema_version: str = Field(default="1.0.0", alias="schemaVersion")
    influence_domains: list[InfluenceDomain] = Field(
        default_factory=list, alias="influenceDomains"
    )
    prestige_tracks: list[PrestigeTrack] = Field(
        default_factory=list, alias="prestigeTracks"
    )
    alignment_axes: list[AlignmentAxis] = Field(
        default_factory=list, alias="alignmentAxes"
    )
    interactions: list[Interaction] = Field(default_factory=list)

    def get_interaction(self, interaction_id: str) -> Interaction | None:
        for interaction in self.interactions:
            if interaction.id == interaction_id:
                return interaction
        return None


# -----------------------------------------------------------------------------
# Player state and snapshot
# -----------------------------------------------------------------------------

class PlayerState(ContentModel):
    """Base player fields supplied by the gameplay collaborator."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    level: int = 0
    skills: dict[str, int] = Field(default_factory=dict)
    completed_quests: list[str] = Field(default_factory=list, alias="completedQuests")
    inventory: dict[str, int] = Field(default_factory=dict)


class PrestigeView(ContentModel):
    value: int = 0
    level: PrestigeLevel | None = None
    # The track's ladder, lowest threshold first; ranks level conditions
    levels: list[PrestigeLevel] = Field(default_factory=list)


class AlignmentView(ContentModel):
    value: int = 0
    zone: AlignmentZone | None = None


class PlayerSnapshot(PlayerState):
    """
    Base player state merged with the three derived progression views.

    Ephemeral: rebuilt before every evaluation, never persisted.
    """
    influence: dict[str, int] = Field(default_factory=dict)
    prestige: dict[str, PrestigeView] = Field(default_factory=dict)
    alignment: dict[str, AlignmentView] = Field(default_factory=dict)


class PlayerProgress(ContentModel):
    """
    Saved progression for one player: base state plus each manager's state.

    Versioned for migration support.
    """
    schema_version: str = Field(default="1.0.0", alias="schemaVersion")
    saved_at: datetime = Field(default_factory=datetime.now, alias="savedAt")
    player_id: str = Field(default="", alias="playerId")
    player: PlayerState = Field(default_factory=PlayerState)
    influence: ProgressionState = Field(default_factory=ProgressionState)
    prestige: ProgressionState = Field(default_factory=ProgressionState)
    alignment: ProgressionState = Field(default_factory=ProgressionState)


# -----------------------------------------------------------------------------
# Results
# -----------------------------------------------------------------------------

class EvaluationResult(BaseModel):
    """Availability verdict for one interaction."""
    satisfied: bool
    reason: str | None = None
    visible: bool = True  # satisfied, or unavailable but shown greyed out
    failures: list[str] = Field(default_factory=list)


class EffectOutcome(BaseModel):
    """Record of one authored effect being applied (or skipped)."""
    category: TrackCategory
    track_id: str
    change: int
    applied: bool
    reason: str = ""


def dump_json_safe(model: BaseModel) -> dict[str, Any]:
    """Dump a model to plain JSON types with the authoring tool's keys."""
    return model.model_dump(mode="json", by_alias=True)
