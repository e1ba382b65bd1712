# -*- encoding: utf-8 -*-
"""
Basanos Declarative Rule Evaluator - interprets rule conditions against
a context's metadata bag.

A condition compares one metadata field with a value:

    {"field": "change_freeze_active", "operator": "eq", "value": true}
    {"field": "open_incidents", "operator": "gt", "value": 10}
    {"field": "priority", "operator": "in", "value": ["P1", "P2"]}
    {"field": "sla_breached_at", "operator": "exists"}

A rule's conditions are ANDed: the rule is "triggered" only when every
condition holds. A rule with no conditions is never triggered, so an
empty declarative constraint is inert rather than always firing.

Evaluation is total: a value of the wrong shape makes the condition false,
it never raises.
"""

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping

from basanos.exceptions import RuleDefinitionError


class RuleOperator(str, Enum):
    """Comparison operators available to declarative conditions."""
    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"
    EXISTS = "exists"


_NUMERIC_OPS: dict[RuleOperator, Callable[[Any, Any], bool]] = {
    RuleOperator.GT: operator.gt,
    RuleOperator.GTE: operator.ge,
    RuleOperator.LT: operator.lt,
    RuleOperator.LTE: operator.le,
}


@dataclass
class RuleCondition:
    """
    A single condition in a declarative rule.

    Attributes:
        field: Metadata key to read
        operator: Comparison to apply
        value: Expected value (ignored by EXISTS)
    """
    field: str
    operator: RuleOperator
    value: Any = None

    def to_dict(self) -> dict:
        result: dict[str, Any] = {"field": self.field, "operator": self.operator.value}
        if self.operator != RuleOperator.EXISTS:
            result["value"] = self.value
        return result

    @classmethod
    def from_dict(cls, data: dict, constraint_id: str = "") -> "RuleCondition":
        """
        Deserialize a condition.

        Raises:
            RuleDefinitionError: If field is missing, the operator is
                unknown, or an "in" condition has a non-list value
        """
        field_name = data.get("field")
        if not field_name:
            raise RuleDefinitionError(
                "Condition is missing 'field'", constraint_id=constraint_id, field="field"
            )
        try:
            op = RuleOperator(data.get("operator"))
        except ValueError:
            raise RuleDefinitionError(
                f"Unknown operator {data.get('operator')!r} on field '{field_name}'",
                constraint_id=constraint_id,
                field="operator",
            ) from None
        value = data.get("value")
        if op == RuleOperator.IN and not isinstance(value, (list, tuple)):
            raise RuleDefinitionError(
                f"Operator 'in' on field '{field_name}' needs a list value",
                constraint_id=constraint_id,
                field="value",
            )
        return cls(field=field_name, operator=op, value=value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _same(left: Any, right: Any) -> bool:
    """Equality that keeps booleans distinct from 0 and 1."""
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    return left == right


def evaluate_condition(condition: RuleCondition, metadata: Mapping[str, Any]) -> bool:
    """
    Check whether a single condition is met.

    Args:
        condition: The condition to check
        metadata: Context metadata bag

    Returns:
        True if the condition holds (i.e. it contributes to triggering)
    """
    field_value = metadata.get(condition.field)
    op = condition.operator

    if op == RuleOperator.EXISTS:
        return field_value is not None
    if op == RuleOperator.EQ:
        return _same(field_value, condition.value)
    if op == RuleOperator.NEQ:
        return not _same(field_value, condition.value)
    if op in _NUMERIC_OPS:
        if not _is_number(field_value) or not _is_number(condition.value):
            return False
        return _NUMERIC_OPS[op](field_value, condition.value)
    if op == RuleOperator.IN:
        if not isinstance(condition.value, (list, tuple)):
            return False
        return any(_same(field_value, candidate) for candidate in condition.value)
    return False


def evaluate_all_conditions(
    conditions: Iterable[RuleCondition],
    metadata: Mapping[str, Any],
) -> bool:
    """
    Check whether a rule is triggered (every condition holds).

    An empty condition list is never triggered.
    """
    conditions = list(conditions)
    if not conditions:
        return False
    return all(evaluate_condition(c, metadata) for c in conditions)
