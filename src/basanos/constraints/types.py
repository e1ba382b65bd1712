# -*- encoding: utf-8 -*-
"""
Basanos Constraint Types.

Constraints encode business guardrails, not security rules: domain-aware
conditions that decide whether an agent action is appropriate in a given
context. Every ConstraintDefinition exposes the same evaluate(context)
callable whether it wraps a declarative rule or a hand-written function
doing its own lookups, so the engine never needs to know which.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Union

from basanos.ontology.types import EntityId


class ConstraintSeverity(str, Enum):
    """What an unsatisfied constraint does to the verdict."""
    BLOCK = "block"     # Action must not proceed
    WARN = "warn"       # Action may proceed, risk is flagged
    INFO = "info"       # Informational only


class ConstraintStatus(str, Enum):
    """Lifecycle status of a constraint."""
    CANDIDATE = "candidate"     # Discovered or drafted, not yet enforced
    PROMOTED = "promoted"       # Reviewed and enforced
    DISABLED = "disabled"       # Paused after promotion


# Wildcard accepted in relevant_actions
ANY_ACTION = "*"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ConstraintContext:
    """
    The state of the world when an agent wants to act.

    Attributes:
        intended_action: Action the agent intends to take (e.g., "resolve")
        target_entity: Id of the entity the action targets
        related_entities: Ids of other entities relevant to evaluation
        timestamp: Evaluation time for time-sensitive constraints
        metadata: Open key/value bag filled by the caller's enrichment step
    """
    intended_action: str
    target_entity: EntityId
    related_entities: list[EntityId] = field(default_factory=list)
    timestamp: datetime = field(default_factory=_utcnow)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "intendedAction": self.intended_action,
            "targetEntity": self.target_entity,
            "relatedEntities": list(self.related_entities),
            "timestamp": self.timestamp.isoformat(),
            "metadata": dict(self.metadata),
        }


@dataclass
class ConstraintResult:
    """Outcome of evaluating one constraint against a context."""
    constraint_id: str
    satisfied: bool
    severity: ConstraintSeverity
    explanation: str
    involved_entities: list[EntityId] = field(default_factory=list)

    @property
    def is_blocking(self) -> bool:
        return not self.satisfied and self.severity == ConstraintSeverity.BLOCK

    @property
    def is_warning(self) -> bool:
        return not self.satisfied and self.severity == ConstraintSeverity.WARN

    def to_dict(self) -> dict:
        return {
            "constraintId": self.constraint_id,
            "satisfied": self.satisfied,
            "severity": self.severity.value,
            "explanation": self.explanation,
            "involvedEntities": list(self.involved_entities),
        }


EvaluateFn = Callable[
    [ConstraintContext],
    Union[ConstraintResult, Awaitable[ConstraintResult]],
]


@dataclass
class ConstraintDefinition:
    """
    A named business rule that can be evaluated against a context.

    status and severity are mutable at runtime through
    ConstraintEngine.update_constraint_status/severity.

    Attributes:
        id: Unique identifier (e.g., "itsm:change_freeze_active")
        name: Human-readable name
        domain: Domain the constraint belongs to
        applies_to: Entity type names the constraint concerns
        relevant_actions: Actions that trigger evaluation, or "*"
        severity: Severity when violated
        status: Lifecycle status
        description: What the rule checks, for agent reasoning
        evaluate: Callable taking a ConstraintContext and returning a
            ConstraintResult, or an awaitable of one
    """
    id: str
    name: str
    domain: str
    applies_to: list[str]
    relevant_actions: list[str]
    severity: ConstraintSeverity
    evaluate: EvaluateFn
    status: ConstraintStatus = ConstraintStatus.PROMOTED
    description: str = ""

    def is_relevant(self, action: str) -> bool:
        """True if this constraint is evaluated for the given action."""
        return action in self.relevant_actions or ANY_ACTION in self.relevant_actions

    def to_dict(self) -> dict:
        """Serialize the descriptive fields (the evaluate callable is omitted)."""
        return {
            "id": self.id,
            "name": self.name,
            "domain": self.domain,
            "appliesTo": list(self.applies_to),
            "relevantActions": list(self.relevant_actions),
            "severity": self.severity.value,
            "status": self.status.value,
            "description": self.description,
        }
