# -*- encoding: utf-8 -*-
"""
Basanos Declarative Constraints - constraints authored as data.

Operators describe "things a human would check" as rule definitions
instead of code. A definition carries either a condition list, a rule
expression, or both (they are ANDed):

    {
        "id": "itsm:change_freeze",
        "name": "Change Freeze",
        "domain": "itsm",
        "appliesTo": ["incident"],
        "relevantActions": ["resolve", "close"],
        "severity": "block",
        "status": "promoted",
        "description": "No resolutions during a change freeze.",
        "conditions": [
            {"field": "change_freeze_active", "operator": "eq", "value": true}
        ],
        "when": "priority in [\"P1\", \"P2\"]",
        "violationMessage": "A change freeze is in effect.",
        "satisfiedMessage": "No change freeze."
    }

DeclarativeConstraint.to_definition() wraps the rule evaluator into a
ConstraintDefinition with the same evaluate(context) shape as any
hand-written constraint.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from basanos.constraints.parser import parse_rule
from basanos.constraints.rules import RuleCondition, evaluate_all_conditions
from basanos.constraints.types import (
    ConstraintContext,
    ConstraintDefinition,
    ConstraintResult,
    ConstraintSeverity,
    ConstraintStatus,
)
from basanos.exceptions import RuleDefinitionError

logger = logging.getLogger(__name__)


@dataclass
class DeclarativeConstraint:
    """
    A constraint defined by data rather than code.

    Attributes:
        id: Unique constraint identifier
        name: Human-readable name
        domain: Domain the constraint belongs to
        applies_to: Entity type names
        relevant_actions: Actions (or "*") that trigger evaluation
        severity: Severity when triggered
        status: Lifecycle status
        description: What the rule checks
        conditions: ANDed conditions; the rule triggers when all hold
        violation_message: Explanation when triggered
        satisfied_message: Explanation when not triggered
    """
    id: str
    name: str = ""
    domain: str = ""
    applies_to: list[str] = field(default_factory=list)
    relevant_actions: list[str] = field(default_factory=list)
    severity: ConstraintSeverity = ConstraintSeverity.WARN
    status: ConstraintStatus = ConstraintStatus.PROMOTED
    description: str = ""
    conditions: list[RuleCondition] = field(default_factory=list)
    violation_message: str = ""
    satisfied_message: str = ""

    def is_triggered(self, metadata: dict[str, Any]) -> bool:
        return evaluate_all_conditions(self.conditions, metadata)

    def to_definition(self) -> ConstraintDefinition:
        """
        Build an evaluable ConstraintDefinition.

        The result's severity is read from the definition at evaluation
        time, so ConstraintEngine.update_constraint_severity() takes effect
        on later evaluations.
        """
        async def evaluate(context: ConstraintContext) -> ConstraintResult:
            triggered = self.is_triggered(context.metadata)
            return ConstraintResult(
                constraint_id=self.id,
                satisfied=not triggered,
                severity=definition.severity,
                explanation=self.violation_message if triggered else self.satisfied_message,
                involved_entities=[context.target_entity],
            )

        definition = ConstraintDefinition(
            id=self.id,
            name=self.name,
            domain=self.domain,
            applies_to=list(self.applies_to),
            relevant_actions=list(self.relevant_actions),
            severity=self.severity,
            status=self.status,
            description=self.description,
            evaluate=evaluate,
        )
        return definition

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "domain": self.domain,
            "appliesTo": list(self.applies_to),
            "relevantActions": list(self.relevant_actions),
            "severity": self.severity.value,
            "status": self.status.value,
            "description": self.description,
            "conditions": [c.to_dict() for c in self.conditions],
            "violationMessage": self.violation_message,
            "satisfiedMessage": self.satisfied_message,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DeclarativeConstraint":
        """
        Deserialize a rule definition.

        Unknown severities fall back to warn, and a missing or unknown
        status to promoted. Text fields are stripped (authoring files often use
        folded block scalars).

        Raises:
            RuleDefinitionError: If id is missing or a condition is malformed
            RuleParseError: If the "when" expression cannot be parsed
        """
        constraint_id = data.get("id")
        if not constraint_id:
            raise RuleDefinitionError("Constraint definition is missing 'id'", field="id")

        try:
            severity = ConstraintSeverity(data.get("severity", "warn"))
        except ValueError:
            logger.warning(
                "Constraint %s has unknown severity %r, using warn",
                constraint_id, data.get("severity"),
            )
            severity = ConstraintSeverity.WARN

        try:
            status = ConstraintStatus(data.get("status") or "promoted")
        except ValueError:
            logger.warning(
                "Constraint %s has unknown status %r, using promoted",
                constraint_id, data.get("status"),
            )
            status = ConstraintStatus.PROMOTED

        raw_conditions = data.get("conditions") or []
        if not isinstance(raw_conditions, list):
            raise RuleDefinitionError(
                "'conditions' must be a list", constraint_id=constraint_id, field="conditions"
            )
        conditions = []
        for raw in raw_conditions:
            if not isinstance(raw, dict):
                raise RuleDefinitionError(
                    "Each condition must be a mapping",
                    constraint_id=constraint_id,
                    field="conditions",
                )
            conditions.append(RuleCondition.from_dict(raw, constraint_id=constraint_id))

        expression = data.get("when")
        if expression:
            conditions.extend(parse_rule(expression))

        return cls(
            id=constraint_id,
            name=data.get("name", constraint_id),
            domain=data.get("domain", ""),
            applies_to=list(data.get("appliesTo") or []),
            relevant_actions=list(data.get("relevantActions") or []),
            severity=severity,
            status=status,
            description=(data.get("description") or "").strip(),
            conditions=conditions,
            violation_message=(data.get("violationMessage") or "").strip(),
            satisfied_message=(data.get("satisfiedMessage") or "").strip(),
        )


def load_constraints(definitions: list[dict]) -> list[ConstraintDefinition]:
    """
    Build evaluable constraints from a list of rule definition dicts.

    Typically fed with the "constraints" list of a parsed rules file.
    """
    return [DeclarativeConstraint.from_dict(d).to_definition() for d in definitions]
