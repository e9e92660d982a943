"""
Progression systems for interplay.

Each system operates on explicitly injected managers; none reach for
shared module state.
"""

from .tracks import ProgressionTrackManager
from .influence import InfluenceManager
from .prestige import PrestigeManager, COUNTER_EFFECT_RATIO
from .alignment import AlignmentManager
from .prerequisites import PrerequisiteEvaluator, evaluate
from .effects import EffectApplicator, EffectReport
from .snapshot import build_snapshot
from .validation import (
    ConfigIssue,
    IssueSeverity,
    TrackConfigError,
    ensure_valid_tracks,
    validate_content,
)

__all__ = [
    "ProgressionTrackManager",
    "InfluenceManager",
    "PrestigeManager",
    "COUNTER_EFFECT_RATIO",
    "AlignmentManager",
    "PrerequisiteEvaluator",
    "evaluate",
    "EffectApplicator",
    "EffectReport",
    "build_snapshot",
    "ConfigIssue",
    "IssueSeverity",
    "TrackConfigError",
    "ensure_valid_tracks",
    "validate_content",
]
