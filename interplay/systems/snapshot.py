"""
Player snapshot composition.

A snapshot is the base player state with the three derived progression views
merged in. It is rebuilt for every evaluation because manager state may have
changed since the last one; nothing here caches.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..state.schema import PlayerSnapshot, PlayerState
from .alignment import AlignmentManager
from .influence import InfluenceManager
from .prestige import PrestigeManager


def build_snapshot(
    base: PlayerState | Mapping[str, Any] | None,
    influence: InfluenceManager,
    prestige: PrestigeManager,
    alignment: AlignmentManager,
) -> PlayerSnapshot:
    """
    Shallow-merge base player state with the managers' current views.

    Args:
        base: Base player fields (level, skills, completed quests, inventory,
            plus any extra fields, which are carried through)
        influence: Manager supplying the influence view
        prestige: Manager supplying the prestige view
        alignment: Manager supplying the alignment view

    Returns:
        A fresh PlayerSnapshot
    """
    if base is None:
        fields: dict[str, Any] = {}
    elif isinstance(base, PlayerState):
        fields = base.model_dump()
    else:
        fields = PlayerState.model_validate(dict(base)).model_dump()

    fields.update(
        influence=influence.snapshot_view(),
        prestige=prestige.snapshot_view(),
        alignment=alignment.snapshot_view(),
    )
    return PlayerSnapshot.model_validate(fields)
