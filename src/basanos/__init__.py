"""
Basanos - ontology-aware guardrails for autonomous agents.

Lets an agent reason about a business domain before taking a mutating
action, and lets an operator encode "things a human would check" as
declarative rules instead of code.

Components:
- basanos.ontology: typed entity graph store (schemas, entities, traversal)
- basanos.constraints: policy engine (evaluation, verdicts, audit log)
  and the declarative rule evaluator
- basanos.domains.itsm: reference IT Service Management domain
- basanos.resources: basanos:// resource catalogue over both engines

The two engines never call each other; the caller composes them.

Usage:
    from basanos import OntologyEngine, ConstraintEngine, ConstraintContext
    from basanos.domains.itsm import register_itsm

    ontology = OntologyEngine()
    constraints = ConstraintEngine()
    register_itsm(ontology, constraints)

    context = ontology.get_entity_context("itsm:incident:INC001")
    verdict = await constraints.evaluate(ConstraintContext(
        intended_action="resolve",
        target_entity="itsm:incident:INC001",
        related_entities=context["related_ids"],
        metadata={"change_freeze_active": True},
    ))
"""

from basanos.config import BasanosConfig
from basanos.constraints import (
    ConstraintContext,
    ConstraintDefinition,
    ConstraintEngine,
    ConstraintResult,
    ConstraintSeverity,
    ConstraintStatus,
    ConstraintVerdict,
    DeclarativeConstraint,
)
from basanos.exceptions import BasanosError, RuleDefinitionError, RuleParseError
from basanos.ontology import (
    DomainSchema,
    Entity,
    OntologyEngine,
    validate_domain_schema,
)

__all__ = [
    "BasanosConfig",
    "ConstraintContext",
    "ConstraintDefinition",
    "ConstraintEngine",
    "ConstraintResult",
    "ConstraintSeverity",
    "ConstraintStatus",
    "ConstraintVerdict",
    "DeclarativeConstraint",
    "BasanosError",
    "RuleDefinitionError",
    "RuleParseError",
    "DomainSchema",
    "Entity",
    "OntologyEngine",
    "validate_domain_schema",
]

__version__ = "0.1.0"
