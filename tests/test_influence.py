"""
Tests for the influence system.

Influence is a bounded meter per domain that maps onto nine fixed tiers.
"""

import pytest

from interplay.state import EventType, InfluenceTier
from interplay.state.schema import InfluenceDomain, Interaction
from interplay.systems import InfluenceManager, ProgressionTrackManager


class TestInfluenceScores:
    """Score reads and writes."""

    def test_starts_at_default_value(self, influence):
        """New domains start at their defaultValue."""
        assert influence.get_score("elders") == 0
        assert influence.get_score("guild") == 50

    def test_change_score_adds_delta(self, influence):
        assert influence.change_score("elders", 15, "helped") is True
        assert influence.get_score("elders") == 15

    def test_clamps_at_max(self, influence):
        """Cannot go above the domain's max."""
        influence.change_score("elders", 250, "huge favor")
        assert influence.get_score("elders") == 100

    def test_clamps_at_min(self, influence):
        """Cannot go below the domain's min."""
        influence.change_score("guild", -500, "burned the warehouse")
        assert influence.get_score("guild") == 0

    def test_clamped_history_records_requested_change(self, influence):
        """History keeps the requested delta and the clamped result."""
        influence.change_score("elders", 250, "huge favor")

        record = influence.history("elders")[-1]
        assert record.change == 250
        assert record.new_value == 100

    def test_unknown_domain_reads_zero(self, influence):
        assert influence.get_score("nonexistent") == 0

    def test_unknown_domain_change_is_rejected(self, influence):
        """Changes to unknown domains return False and record nothing."""
        assert influence.change_score("nonexistent", 10, "x") is False
        assert influence.history("nonexistent") == []

    def test_default_outside_bounds_is_clamped(self, bus):
        manager = InfluenceManager(
            [InfluenceDomain(id="odd", min=0, max=10, default_value=50)],
            bus=bus,
        )
        assert manager.get_score("odd") == 10


class TestInfluenceTiers:
    """Percent-of-range tier derivation."""

    def test_midpoint_is_friendly(self, influence):
        """0 on [-100, 100] is 50% of range."""
        assert influence.derive_qualitative("elders") == InfluenceTier.FRIENDLY

    def test_exalted_boundary_is_inclusive(self, influence):
        """Exactly 90% of range is Exalted, one point below is Revered."""
        influence.change_score("elders", 80, "to 90%")
        assert influence.derive_qualitative("elders") == InfluenceTier.EXALTED

        influence.change_score("elders", -1, "just below")
        assert influence.derive_qualitative("elders") == InfluenceTier.REVERED

    def test_bottom_of_range_is_hated(self, influence):
        influence.change_score("elders", -100, "betrayal")
        assert influence.derive_qualitative("elders") == InfluenceTier.HATED

    def test_unknown_domain_has_no_tier(self, influence):
        assert influence.derive_qualitative("nonexistent") is None

    def test_empty_range_has_no_tier(self, bus):
        """A domain with min == max cannot be placed on the scale."""
        manager = InfluenceManager([InfluenceDomain(id="flat", min=5, max=5)], bus=bus)
        assert manager.derive_qualitative("flat") is None


class TestInfluenceHistory:
    """Append-only change history."""

    def test_one_entry_per_change(self, influence):
        for delta in (5, -3, 12):
            influence.change_score("elders", delta, "step")

        history = influence.history("elders")
        assert len(history) == 3
        assert [r.change for r in history] == [5, -3, 12]

    def test_timestamps_never_decrease(self, influence):
        for _ in range(5):
            influence.change_score("elders", 1, "tick")

        stamps = [r.timestamp for r in influence.history("elders")]
        assert stamps == sorted(stamps)

    def test_last_entry_matches_score(self, influence):
        influence.change_score("elders", 7, "a")
        influence.change_score("elders", 8, "b")

        assert influence.history("elders")[-1].new_value == influence.get_score("elders")

    def test_history_is_a_copy(self, influence):
        """Callers cannot rewrite the audit log."""
        influence.change_score("elders", 1, "a")
        influence.history("elders").clear()
        assert len(influence.history("elders")) == 1


class TestInfluenceDefinitions:
    """Replacing definitions on a live manager."""

    def test_base_manager_is_abstract(self):
        """Only the category managers can be built."""
        with pytest.raises(TypeError):
            ProgressionTrackManager()

    def test_new_domain_initialized(self, influence, influence_domains):
        influence.update_track_definitions(
            influence_domains + [InfluenceDomain(id="thieves", default_value=-20)]
        )
        assert influence.get_score("thieves") == -20

    def test_narrowed_bounds_clamp_with_history(self, influence):
        influence.change_score("elders", 80, "favor")

        influence.update_track_definitions([InfluenceDomain(id="elders", min=-50, max=50)])

        assert influence.get_score("elders") == 50
        record = influence.history("elders")[-1]
        assert record.reason == "bounds updated"
        assert record.change == -30

    def test_removed_domain_is_dormant(self, influence):
        """Scores of removed domains read as 0 but come back if re-added."""
        influence.change_score("guild", 20, "trade")
        domains = [InfluenceDomain(id="elders")]
        guild = InfluenceDomain(id="guild", min=0, max=100, default_value=50)

        influence.update_track_definitions(domains)
        assert influence.get_score("guild") == 0
        assert influence.change_score("guild", 5, "x") is False

        influence.update_track_definitions(domains + [guild])
        assert influence.get_score("guild") == 70

    def test_update_emits_event(self, influence, bus):
        influence.update_track_definitions([InfluenceDomain(id="elders")])

        events = bus.get_history(EventType.TRACKS_UPDATED)
        assert events[-1].data["category"] == "influence"
        assert events[-1].data["track_ids"] == ["elders"]


class TestInfluenceEffects:
    """Applying interaction effects."""

    def test_uses_effect_description(self, influence):
        interaction = Interaction.model_validate({
            "id": "gift",
            "title": "Bring a Gift",
            "effects": {"influenceChanges": [
                {"domainId": "elders", "change": 5, "description": "Brought bread"},
            ]},
        })

        outcomes = influence.apply_interaction_effects(interaction)

        assert outcomes[0].applied is True
        assert influence.history("elders")[-1].reason == "Brought bread"

    def test_falls_back_to_interaction_title(self, influence):
        interaction = Interaction.model_validate({
            "id": "gift",
            "title": "Bring a Gift",
            "effects": {"influenceChanges": [{"domainId": "elders", "change": 5}]},
        })

        influence.apply_interaction_effects(interaction)

        assert influence.history("elders")[-1].reason == "Completed interaction: Bring a Gift"

    def test_ignores_other_categories(self, influence):
        interaction = Interaction.model_validate({
            "id": "duel",
            "effects": {"prestigeChanges": [{"trackId": "valor", "change": 5}]},
        })
        assert influence.apply_interaction_effects(interaction) == []

    @pytest.mark.parametrize("delta", [1, -1])
    def test_change_emits_track_changed(self, influence, bus, delta):
        influence.change_score("elders", delta, "nudge")

        event = bus.get_history(EventType.TRACK_CHANGED)[-1]
        assert event.data["track_id"] == "elders"
        assert event.data["before"] == 0
        assert event.data["after"] == delta
