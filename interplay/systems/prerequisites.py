"""
Prerequisite evaluator for interplay interactions.

Pure function design: evaluate(interaction, snapshot) -> EvaluationResult.
No state mutation, no side effects, no globals.

Group semantics:
- Groups are alternatives: the interaction is available if ANY group holds
- Conditions inside a group must ALL hold
- No groups, or a group without conditions, always holds

Missing snapshot entries (a track that was deleted, a skill never learned)
read as 0 / no level / no zone / not held. Evaluation never raises.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..rules.conditions import compare, describe_requirement
from ..state.schema import (
    AlignmentCondition,
    EvaluationResult,
    InfluenceCondition,
    Interaction,
    ItemCondition,
    LevelCondition,
    Operator,
    PlayerSnapshot,
    PrerequisiteGroup,
    PrestigeCondition,
    PrestigeLevel,
    QuestCondition,
    SkillCondition,
)

DEFAULT_UNAVAILABLE_MESSAGE = "Prerequisites not met"


class PrerequisiteEvaluator:
    """
    Decides interaction availability and explains why not.

    This class is stateless; all player state comes from the snapshot, which
    callers must rebuild before every call.
    """

    def evaluate(self, interaction: Interaction, snapshot: PlayerSnapshot) -> EvaluationResult:
        prerequisites = interaction.prerequisites
        if not prerequisites.groups:
            return EvaluationResult(satisfied=True)

        failures: list[str] = []
        for group in prerequisites.groups:
            group_failures = self.evaluate_group(group, snapshot)
            if not group_failures:
                return EvaluationResult(satisfied=True)
            failures.extend(group_failures)

        if prerequisites.show_when_unavailable and prerequisites.unavailable_message:
            reason = prerequisites.unavailable_message
        else:
            reason = "; ".join(dict.fromkeys(failures)) or DEFAULT_UNAVAILABLE_MESSAGE

        return EvaluationResult(
            satisfied=False,
            reason=reason,
            visible=prerequisites.show_when_unavailable,
            failures=failures,
        )

    def evaluate_group(self, group: PrerequisiteGroup, snapshot: PlayerSnapshot) -> list[str]:
        """Failure messages for a group; an empty list means the group holds."""
        failures = []
        for condition in group.conditions:
            message = self.check_condition(condition, snapshot)
            if message:
                failures.append(message)
        return failures

    def available(
        self,
        interactions: Iterable[Interaction],
        snapshot: PlayerSnapshot,
    ) -> list[tuple[Interaction, EvaluationResult]]:
        """Interactions the UI should list: available ones plus greyed-out visible ones."""
        results = []
        for interaction in interactions:
            result = self.evaluate(interaction, snapshot)
            if result.visible:
                results.append((interaction, result))
        return results

    # ─── Conditions ───────────────────────────────────────────

    def check_condition(self, condition, snapshot: PlayerSnapshot) -> str | None:
        """
        Check one condition.

        Returns:
            None if the condition holds, else a failure message
        """
        checkers = {
            "level": self._check_level,
            "skill": self._check_skill,
            "quest": self._check_quest,
            "item": self._check_item,
            "influence": self._check_influence,
            "prestige": self._check_prestige,
            "alignment": self._check_alignment,
        }
        checker = checkers.get(condition.type)
        if checker is None:
            return f"Unknown condition type: {condition.type}"
        return checker(condition, snapshot)

    def _check_numeric(
        self,
        actual: int,
        condition,
        label: str,
    ) -> str | None:
        if compare(actual, condition.operator, condition.value, condition.max):
            return None
        requirement = describe_requirement(condition.operator, condition.value, condition.max)
        return f"Requires {label} {requirement}, current is {actual}"

    def _check_level(self, condition: LevelCondition, snapshot: PlayerSnapshot) -> str | None:
        return self._check_numeric(snapshot.level, condition, "level")

    def _check_skill(self, condition: SkillCondition, snapshot: PlayerSnapshot) -> str | None:
        actual = snapshot.skills.get(condition.skill_id, 0)
        return self._check_numeric(actual, condition, f"{condition.skill_id} skill")

    def _check_quest(self, condition: QuestCondition, snapshot: PlayerSnapshot) -> str | None:
        completed = condition.quest_id in snapshot.completed_quests
        if condition.operator == Operator.NOT_EQUAL:
            if not completed:
                return None
            return f"Requires quest not yet completed: {condition.quest_id}"
        if completed:
            return None
        return f"Requires completed quest: {condition.quest_id}"

    def _check_item(self, condition: ItemCondition, snapshot: PlayerSnapshot) -> str | None:
        actual = snapshot.inventory.get(condition.item_id, 0)
        return self._check_numeric(actual, condition, f"{condition.item_id} count")

    def _check_influence(self, condition: InfluenceCondition, snapshot: PlayerSnapshot) -> str | None:
        actual = snapshot.influence.get(condition.domain_id, 0)
        return self._check_numeric(actual, condition, f"{condition.domain_id} influence")

    def _check_prestige(self, condition: PrestigeCondition, snapshot: PlayerSnapshot) -> str | None:
        view = snapshot.prestige.get(condition.track_id)
        if condition.level_id is not None:
            current = view.level.id if view and view.level else None
            return _check_rank(
                current, condition.level_id, condition.operator,
                view.levels if view else [],
                f"{condition.track_id} prestige level",
            )
        actual = view.value if view else 0
        return self._check_numeric(actual, condition, f"{condition.track_id} prestige")

    def _check_alignment(self, condition: AlignmentCondition, snapshot: PlayerSnapshot) -> str | None:
        view = snapshot.alignment.get(condition.axis_id)
        if condition.zone_id is not None:
            current = view.zone.id if view and view.zone else None
            return _check_label(
                current, condition.zone_id, condition.operator,
                f"{condition.axis_id} alignment zone",
            )
        actual = view.value if view else 0
        return self._check_numeric(actual, condition, f"{condition.axis_id} alignment")


def _check_rank(
    current: str | None,
    required: str,
    operator: Operator,
    ladder: list[PrestigeLevel],
    label: str,
) -> str | None:
    """
    Compare a derived prestige level by its rank on the track's ladder.

    Being below every threshold ranks under the first level. A required id
    that is not on the ladder never matches.
    """
    ranks = {level.id: rank for rank, level in enumerate(ladder)}
    if required not in ranks:
        return f"Requires {label} {required}, which the track does not define"

    actual = ranks.get(current, -1)
    if compare(actual, operator, ranks[required]):
        return None

    current_text = current or "none"
    if operator == Operator.NOT_EQUAL:
        return f"Requires {label} other than {required}"
    if operator == Operator.EQUAL:
        return f"Requires {label} {required}, current is {current_text}"
    if operator == Operator.BETWEEN:
        operator = Operator.AT_LEAST
    return f"Requires {label} {operator.value} {required}, current is {current_text}"


def _check_label(current: str | None, required: str, operator: Operator, label: str) -> str | None:
    """Equality test on a derived zone id; != inverts it, other operators mean ==."""
    if operator == Operator.NOT_EQUAL:
        if current != required:
            return None
        return f"Requires {label} other than {required}"
    if current == required:
        return None
    return f"Requires {label} {required}, current is {current or 'none'}"


def evaluate(interaction: Interaction, snapshot: PlayerSnapshot) -> EvaluationResult:
    """Module-level convenience wrapper around PrerequisiteEvaluator.evaluate."""
    return PrerequisiteEvaluator().evaluate(interaction, snapshot)
