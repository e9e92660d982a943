"""State models, content boundary and player sessions for interplay."""

from .schema import (
    AlignmentAxis,
    AlignmentZone,
    ChangeRecord,
    ContentPack,
    EvaluationResult,
    InfluenceDomain,
    InfluenceTier,
    Interaction,
    Operator,
    PlayerProgress,
    PlayerSnapshot,
    PlayerState,
    PrestigeLevel,
    PrestigeTrack,
    ProgressionState,
    TrackCategory,
)
from .content import (
    ContentError,
    dump_content,
    load_content,
    load_player_state,
    load_progress,
    normalize_interaction,
    parse_content,
    save_progress,
)
from .event_bus import (
    EventBus,
    EventType,
    GameEvent,
    get_event_bus,
    reset_event_bus,
)
from .manager import ProgressionSession

__all__ = [
    # Schema
    "AlignmentAxis",
    "AlignmentZone",
    "ChangeRecord",
    "ContentPack",
    "EvaluationResult",
    "InfluenceDomain",
    "InfluenceTier",
    "Interaction",
    "Operator",
    "PlayerProgress",
    "PlayerSnapshot",
    "PlayerState",
    "PrestigeLevel",
    "PrestigeTrack",
    "ProgressionState",
    "TrackCategory",
    # Content boundary
    "ContentError",
    "dump_content",
    "load_content",
    "load_player_state",
    "load_progress",
    "normalize_interaction",
    "parse_content",
    "save_progress",
    # Event Bus
    "EventBus",
    "EventType",
    "GameEvent",
    "get_event_bus",
    "reset_event_bus",
    # Session
    "ProgressionSession",
]
