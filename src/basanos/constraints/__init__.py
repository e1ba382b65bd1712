"""
Basanos Constraints - policy evaluation over agent actions.

This module provides:
- ConstraintDefinition, ConstraintContext, ConstraintResult: constraint model
- ConstraintEngine: registry, evaluation, verdict reduction, audit log
- RuleCondition, evaluate_condition, evaluate_all_conditions: declarative rule evaluator
- DeclarativeConstraint, load_constraints: constraints authored as data
- RuleParser, parse_rule: Lark parser for rule expressions
"""

from basanos.constraints.types import (
    ANY_ACTION,
    ConstraintContext,
    ConstraintDefinition,
    ConstraintResult,
    ConstraintSeverity,
    ConstraintStatus,
)
from basanos.constraints.engine import (
    AuditEntry,
    AuditSummary,
    ConstraintEngine,
    ConstraintVerdict,
)
from basanos.constraints.rules import (
    RuleCondition,
    RuleOperator,
    evaluate_all_conditions,
    evaluate_condition,
)
from basanos.constraints.parser import RuleParser, parse_rule
from basanos.constraints.declarative import DeclarativeConstraint, load_constraints

__all__ = [
    "ANY_ACTION",
    "ConstraintContext",
    "ConstraintDefinition",
    "ConstraintResult",
    "ConstraintSeverity",
    "ConstraintStatus",
    "AuditEntry",
    "AuditSummary",
    "ConstraintEngine",
    "ConstraintVerdict",
    "RuleCondition",
    "RuleOperator",
    "evaluate_all_conditions",
    "evaluate_condition",
    "RuleParser",
    "parse_rule",
    "DeclarativeConstraint",
    "load_constraints",
]
