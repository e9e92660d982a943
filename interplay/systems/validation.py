"""
Content validator for interplay track definitions and interactions.

Pure functions: validate_content(pack) -> list[ConfigIssue].
No state mutation, no side effects, no globals.

Two severities:
- ERROR: the definitions cannot be loaded into a manager (duplicate ids,
  a prestige track countering itself, counter-track cycles, inverted zones)
- WARNING: legal but probably unintended (zone gaps or overlaps, dangling references,
  defaults outside the editor range)

Managers call ensure_valid_tracks() at construction and on every definition
update; hard errors raise TrackConfigError there.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..state.schema import (
    AlignmentAxis,
    ContentPack,
    InfluenceDomain,
    PrestigeTrack,
    TrackCategory,
    TrackDefinition,
)

logger = logging.getLogger(__name__)


class TrackConfigError(ValueError):
    """Track definitions that no manager can safely hold."""

    def __init__(self, issues: list["ConfigIssue"]):
        self.issues = issues
        super().__init__("; ".join(issue.message for issue in issues))


class IssueSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigIssue:
    """One finding about authored content."""
    severity: IssueSeverity
    category: str  # "influence", "prestige", "alignment", "interaction"
    subject_id: str
    message: str

    def model_dump(self) -> dict:
        """Serialize for JSON (matches Pydantic convention)."""
        return {
            "severity": self.severity.value,
            "category": self.category,
            "subject_id": self.subject_id,
            "message": self.message,
        }


def _error(category: str, subject_id: str, message: str) -> ConfigIssue:
    return ConfigIssue(IssueSeverity.ERROR, category, subject_id, message)


def _warning(category: str, subject_id: str, message: str) -> ConfigIssue:
    return ConfigIssue(IssueSeverity.WARNING, category, subject_id, message)


# ─── Shared checks ───────────────────────────────────────────

def check_unique_ids(category: str, ids: Sequence[str]) -> list[ConfigIssue]:
    """Ids must be non-empty and unique within their own category."""
    issues = []
    seen: set[str] = set()
    for track_id in ids:
        if not track_id or not track_id.strip():
            issues.append(_error(category, track_id, f"{category} entry has an empty id"))
            continue
        if track_id in seen:
            issues.append(_error(category, track_id, f"Duplicate {category} id: {track_id}"))
        seen.add(track_id)
    return issues


# ─── Influence ───────────────────────────────────────────────

def check_influence_domains(domains: Sequence[InfluenceDomain]) -> list[ConfigIssue]:
    issues = check_unique_ids(TrackCategory.INFLUENCE.value, [d.id for d in domains])
    for domain in domains:
        if domain.min >= domain.max:
            issues.append(_warning(
                "influence", domain.id,
                f"Influence domain {domain.id} has min {domain.min} >= max {domain.max}; "
                "it derives no tier",
            ))
        elif not domain.min <= domain.default_value <= domain.max:
            issues.append(_warning(
                "influence", domain.id,
                f"Default {domain.default_value} for {domain.id} lies outside "
                f"[{domain.min}, {domain.max}] and will be clamped",
            ))
    return issues


# ─── Prestige ────────────────────────────────────────────────

def find_counter_cycles(tracks: Sequence[PrestigeTrack]) -> list[list[str]]:
    """
    Find cycles in the counter-track graph.

    Self references are reported separately and skipped here.
    Each cycle is returned once, as the path of track ids that closes it.
    """
    graph = {
        t.id: [c for c in t.counter_tracks if c != t.id]
        for t in tracks
    }
    cycles: list[list[str]] = []
    seen_cycles: set[frozenset[str]] = set()
    visited: set[str] = set()

    def visit(node: str, path: list[str], on_path: set[str]) -> None:
        for nxt in graph.get(node, []):
            if nxt not in graph:
                continue
            if nxt in on_path:
                cycle = path[path.index(nxt):] + [nxt]
                key = frozenset(cycle)
                if key not in seen_cycles:
                    seen_cycles.add(key)
                    cycles.append(cycle)
                continue
            if nxt in visited:
                continue
            on_path.add(nxt)
            visit(nxt, path + [nxt], on_path)
            on_path.discard(nxt)
        visited.add(node)

    for track_id in graph:
        if track_id not in visited:
            visit(track_id, [track_id], {track_id})

    return cycles


def check_prestige_tracks(tracks: Sequence[PrestigeTrack]) -> list[ConfigIssue]:
    issues = check_unique_ids(TrackCategory.PRESTIGE.value, [t.id for t in tracks])
    known = {t.id for t in tracks}

    for track in tracks:
        if track.id in track.counter_tracks:
            issues.append(_error(
                "prestige", track.id,
                f"Prestige track {track.id} lists itself as a counter track",
            ))
        for counter_id in track.counter_tracks:
            if counter_id != track.id and counter_id not in known:
                issues.append(_warning(
                    "prestige", track.id,
                    f"Counter track {counter_id} of {track.id} does not exist",
                ))

        thresholds = [lv.threshold for lv in track.levels]
        if len(thresholds) != len(set(thresholds)):
            issues.append(_warning(
                "prestige", track.id,
                f"Prestige track {track.id} has levels sharing a threshold",
            ))
        issues.extend(
            _error("prestige", track.id, issue.message)
            for issue in check_unique_ids("level", [lv.id for lv in track.levels])
        )

    for cycle in find_counter_cycles(tracks):
        issues.append(_error(
            "prestige", cycle[0],
            f"Counter tracks form a cycle: {' -> '.join(cycle)}",
        ))

    return issues


# ─── Alignment ───────────────────────────────────────────────

def check_alignment_axes(axes: Sequence[AlignmentAxis]) -> list[ConfigIssue]:
    issues = check_unique_ids(TrackCategory.ALIGNMENT.value, [a.id for a in axes])

    for axis in axes:
        for zone in axis.zones:
            if zone.min > zone.max:
                issues.append(_error(
                    "alignment", axis.id,
                    f"Zone {zone.id} of {axis.id} has min {zone.min} > max {zone.max}",
                ))

        ordered = sorted(axis.zones, key=lambda z: z.min)
        for lower, upper in zip(ordered, ordered[1:]):
            # First listed zone wins inside an overlap
            if lower.max >= upper.min:
                issues.append(_warning(
                    "alignment", axis.id,
                    f"Zone {lower.id} overlaps with {upper.id} on {axis.id}",
                ))

        # Gaps are a valid design choice, but usually a typo
        previous_max = axis.min - 1
        for zone in ordered:
            if zone.min > previous_max + 1:
                issues.append(_warning(
                    "alignment", axis.id,
                    f"Gap on {axis.id} between {previous_max} and {zone.min}",
                ))
            previous_max = max(previous_max, zone.max)
        if ordered and previous_max < axis.max:
            issues.append(_warning(
                "alignment", axis.id,
                f"Gap on {axis.id} between {previous_max} and {axis.max}",
            ))

        if not axis.min <= axis.default_value <= axis.max:
            issues.append(_warning(
                "alignment", axis.id,
                f"Default {axis.default_value} for {axis.id} lies outside "
                f"[{axis.min}, {axis.max}]",
            ))

    return issues


# ─── Entry points ────────────────────────────────────────────

TRACK_CHECKS = {
    TrackCategory.INFLUENCE: check_influence_domains,
    TrackCategory.PRESTIGE: check_prestige_tracks,
    TrackCategory.ALIGNMENT: check_alignment_axes,
}


def ensure_valid_tracks(
    category: TrackCategory,
    definitions: Sequence[TrackDefinition],
) -> list[ConfigIssue]:
    """
    Check one category of definitions before a manager accepts them.

    Warnings are logged and returned; errors raise.

    Raises:
        TrackConfigError: If any check reports an error
    """
    issues = TRACK_CHECKS[category](definitions)
    errors = [i for i in issues if i.severity == IssueSeverity.ERROR]
    if errors:
        raise TrackConfigError(errors)
    for issue in issues:
        logger.warning(issue.message)
    return issues


def validate_content(pack: ContentPack) -> list[ConfigIssue]:
    """
    Check a whole content pack, including interaction references.

    References to unknown tracks are warnings: evaluation treats them as
    score 0 and effects on them are skipped.
    """
    issues: list[ConfigIssue] = []
    issues.extend(check_influence_domains(pack.influence_domains))
    issues.extend(check_prestige_tracks(pack.prestige_tracks))
    issues.extend(check_alignment_axes(pack.alignment_axes))
    issues.extend(check_unique_ids("interaction", [i.id for i in pack.interactions]))

    domains = {d.id for d in pack.influence_domains}
    tracks = {t.id for t in pack.prestige_tracks}
    axes = {a.id for a in pack.alignment_axes}

    for interaction in pack.interactions:
        effects = interaction.effects
        refs = (
            [("influence", c.domain_id, domains) for c in effects.influence_changes]
            + [("prestige", c.track_id, tracks) for c in effects.prestige_changes]
            + [("alignment", c.axis_id, axes) for c in effects.alignment_changes]
        )
        for group in interaction.prerequisites.groups:
            for condition in group.conditions:
                if condition.type == "influence":
                    refs.append(("influence", condition.domain_id, domains))
                elif condition.type == "prestige":
                    refs.append(("prestige", condition.track_id, tracks))
                elif condition.type == "alignment":
                    refs.append(("alignment", condition.axis_id, axes))

        for category, track_id, known in refs:
            if track_id not in known:
                issues.append(_warning(
                    "interaction", interaction.id,
                    f"Interaction {interaction.id} references unknown {category} track {track_id}",
                ))

    return issues


def has_errors(issues: Sequence[ConfigIssue]) -> bool:
    return any(i.severity == IssueSeverity.ERROR for i in issues)
