"""
Comparator rules for prerequisite conditions.

Kept apart from the evaluator so every operator can be tested on plain numbers.
"""

from __future__ import annotations

from ..state.schema import Operator


def compare(actual: int, operator: Operator, required: int, upper: int | None = None) -> bool:
    """
    Compare an actual value against a requirement.

    Args:
        actual: Value read from the player snapshot
        operator: Comparator from the condition
        required: The condition's value (lower bound for BETWEEN)
        upper: Upper bound for BETWEEN; without one BETWEEN acts like >=

    Returns:
        Whether the requirement holds
    """
    if operator == Operator.AT_LEAST:
        return actual >= required
    if operator == Operator.AT_MOST:
        return actual <= required
    if operator == Operator.EQUAL:
        return actual == required
    if operator == Operator.NOT_EQUAL:
        return actual != required
    if operator == Operator.GREATER:
        return actual > required
    if operator == Operator.LESS:
        return actual < required
    if operator == Operator.BETWEEN:
        if upper is None:
            return actual >= required
        return required <= actual <= upper
    return actual >= required


def describe_requirement(operator: Operator, required: int, upper: int | None = None) -> str:
    """Short human-readable requirement, e.g. ">= 50" or "between 10 and 20"."""
    if operator == Operator.BETWEEN and upper is not None:
        return f"between {required} and {upper}"
    if operator == Operator.BETWEEN:
        return f">= {required}"
    return f"{operator.value} {required}"
