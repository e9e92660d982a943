"""
Progression rules as pure functions.

Separates logic from data models for easier testing.
"""

from .conditions import compare, describe_requirement
from .tiers import alignment_zone, influence_percent, influence_tier, prestige_level

__all__ = [
    "compare",
    "describe_requirement",
    "influence_percent",
    "influence_tier",
    "prestige_level",
    "alignment_zone",
]
