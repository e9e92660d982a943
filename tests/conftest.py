"""
Pytest fixtures for interplay tests.

Provides sample track definitions, content packs and isolated event buses.
"""

import pytest
from pathlib import Path

# Add repo root to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from interplay.state import (
    ContentPack,
    EventBus,
    PlayerState,
    ProgressionSession,
    reset_event_bus,
)
from interplay.state.schema import (
    AlignmentAxis,
    AlignmentZone,
    InfluenceDomain,
    Interaction,
    PrestigeLevel,
    PrestigeTrack,
)
from interplay.systems import AlignmentManager, InfluenceManager, PrestigeManager


@pytest.fixture(autouse=True)
def clean_event_bus():
    """Drop the process-wide bus between tests."""
    reset_event_bus()
    yield
    reset_event_bus()


@pytest.fixture
def bus():
    """Isolated event bus."""
    return EventBus()


@pytest.fixture
def influence_domains():
    """Two domains: a symmetric one and a positive-only one."""
    return [
        InfluenceDomain(id="elders", name="Council of Elders", min=-100, max=100),
        InfluenceDomain(id="guild", name="Merchant Guild", min=0, max=100, default_value=50),
    ]


@pytest.fixture
def prestige_tracks():
    """Valor and Infamy, with Valor countering Infamy."""
    return [
        PrestigeTrack(
            id="valor",
            name="Valor",
            decay_rate=5,
            counter_tracks=["infamy"],
            levels=[
                PrestigeLevel(id="known", name="Known", threshold=10),
                PrestigeLevel(id="renowned", name="Renowned", threshold=50),
                PrestigeLevel(id="legend", name="Legend", threshold=200),
            ],
        ),
        PrestigeTrack(
            id="infamy",
            name="Infamy",
            levels=[PrestigeLevel(id="notorious", name="Notorious", threshold=20)],
        ),
    ]


@pytest.fixture
def alignment_axes():
    """A fully zoned axis and an axis with a gap in the middle."""
    return [
        AlignmentAxis(
            id="order",
            name="Order",
            zones=[
                AlignmentZone(id="chaotic", name="Chaotic", min=-1000, max=-301),
                AlignmentZone(id="balanced", name="Balanced", min=-300, max=300),
                AlignmentZone(id="lawful", name="Lawful", min=301, max=1000),
            ],
        ),
        AlignmentAxis(
            id="mercy",
            name="Mercy",
            min=-100,
            max=100,
            zones=[
                AlignmentZone(id="cruel", name="Cruel", min=-100, max=-50),
                AlignmentZone(id="kind", name="Kind", min=50, max=100),
            ],
        ),
    ]


@pytest.fixture
def influence(influence_domains, bus):
    return InfluenceManager(influence_domains, bus=bus)


@pytest.fixture
def prestige(prestige_tracks, bus):
    return PrestigeManager(prestige_tracks, bus=bus)


@pytest.fixture
def alignment(alignment_axes, bus):
    return AlignmentManager(alignment_axes, bus=bus)


@pytest.fixture
def interactions():
    """Sample interactions covering open, gated, greyed-out and hidden cases."""
    return [
        Interaction.model_validate({
            "id": "open_gate",
            "title": "Open the Gate",
            "effects": {
                "influenceChanges": [{"domainId": "elders", "change": 10}],
            },
        }),
        Interaction.model_validate({
            "id": "elder_council",
            "title": "Address the Council",
            "prerequisites": {
                "groups": [{
                    "id": "trusted",
                    "conditions": [
                        {"type": "influence", "domainId": "elders", "value": 20},
                    ],
                }],
                "showWhenUnavailable": True,
                "unavailableMessage": "The elders will not see you yet.",
            },
            "effects": {
                "prestigeChanges": [
                    {"trackId": "valor", "change": 100, "description": "Spoke before the council"},
                ],
                "alignmentChanges": [{"axisId": "order", "change": 50}],
            },
        }),
        Interaction.model_validate({
            "id": "secret_meeting",
            "title": "Meet in the Cellar",
            "prerequisites": {
                "groups": [{
                    "conditions": [{"type": "quest", "questId": "betrayal"}],
                }],
            },
        }),
    ]


@pytest.fixture
def content_pack(influence_domains, prestige_tracks, alignment_axes, interactions):
    return ContentPack(
        influence_domains=influence_domains,
        prestige_tracks=prestige_tracks,
        alignment_axes=alignment_axes,
        interactions=interactions,
    )


@pytest.fixture
def player():
    """Base player state supplied by gameplay."""
    return PlayerState(
        level=5,
        skills={"persuasion": 3},
        completed_quests=["intro"],
        inventory={"torch": 2},
    )


@pytest.fixture
def session(content_pack, player, bus):
    """Progression session over the sample content."""
    return ProgressionSession(content_pack, player, bus=bus, player_id="p1")


@pytest.fixture
def raw_content():
    """Content as exported by the authoring tool (camelCase, partial shapes)."""
    return {
        "schemaVersion": "1.0.0",
        "influenceDomains": [
            {"id": "elders", "name": "Council of Elders", "min": -100, "max": 100, "defaultValue": 0},
        ],
        "prestigeTracks": [
            {
                "id": "valor",
                "name": "Valor",
                "decayRate": 5,
                "counterTracks": ["infamy"],
                "levels": [{"id": "known", "name": "Known", "threshold": 10}],
            },
            {"id": "infamy", "name": "Infamy"},
        ],
        "alignmentAxes": [
            {
                "id": "order",
                "name": "Order",
                "zones": [{"id": "balanced", "name": "Balanced", "min": -300, "max": 300}],
            },
        ],
        "interactions": [
            {"id": "bare", "title": "No prerequisites or effects"},
            {
                "id": "open_gate",
                "title": "Open the Gate",
                "effects": {"influenceChanges": [{"domainId": "elders", "change": 10}]},
            },
        ],
    }
