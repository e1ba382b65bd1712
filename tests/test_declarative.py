# -*- encoding: utf-8 -*-
"""
Tests for Basanos declarative constraints.

Tests:
- Loading rule definitions from dicts (defaults, errors, "when" expressions)
- Evaluating them through the ConstraintEngine
"""

import asyncio

import pytest

from basanos.constraints.declarative import DeclarativeConstraint, load_constraints
from basanos.constraints.engine import ConstraintEngine
from basanos.constraints.rules import RuleOperator
from basanos.constraints.types import (
    ConstraintContext,
    ConstraintSeverity,
    ConstraintStatus,
)
from basanos.exceptions import RuleDefinitionError, RuleParseError


@pytest.fixture
def freeze_rule():
    return {
        "id": "itsm:declarative_freeze",
        "name": "Declarative Freeze",
        "domain": "itsm",
        "appliesTo": ["incident"],
        "relevantActions": ["resolve", "close"],
        "severity": "block",
        "status": "candidate",
        "description": "  No resolutions during a freeze.\n",
        "conditions": [
            {"field": "change_freeze_active", "operator": "eq", "value": True},
        ],
        "violationMessage": "A change freeze is in effect.\n",
        "satisfiedMessage": "No change freeze.",
    }


def evaluate(definition, **metadata):
    context = ConstraintContext(
        intended_action="resolve", target_entity="itsm:incident:INC001", metadata=metadata
    )
    return asyncio.run(definition.evaluate(context))


# ── Loading ───────────────────────────────────────────────────────────


class TestFromDict:
    def test_fields(self, freeze_rule):
        rule = DeclarativeConstraint.from_dict(freeze_rule)
        assert rule.id == "itsm:declarative_freeze"
        assert rule.severity == ConstraintSeverity.BLOCK
        assert rule.status == ConstraintStatus.CANDIDATE
        assert rule.description == "No resolutions during a freeze."
        assert rule.violation_message == "A change freeze is in effect."
        assert rule.conditions[0].operator == RuleOperator.EQ

    def test_defaults(self):
        rule = DeclarativeConstraint.from_dict({"id": "x"})
        assert rule.name == "x"
        assert rule.severity == ConstraintSeverity.WARN
        assert rule.status == ConstraintStatus.PROMOTED
        assert rule.conditions == []

    def test_unknown_severity_falls_back_to_warn(self, freeze_rule):
        freeze_rule["severity"] = "catastrophic"
        assert DeclarativeConstraint.from_dict(freeze_rule).severity == ConstraintSeverity.WARN

    def test_unknown_status_falls_back_to_promoted(self, freeze_rule):
        freeze_rule["status"] = "draft"
        rule = DeclarativeConstraint.from_dict(freeze_rule)
        assert rule.status == ConstraintStatus.PROMOTED

    def test_unknown_status_does_not_abort_batch(self, freeze_rule):
        other = dict(freeze_rule, id="itsm:other", status="archived")
        definitions = load_constraints([freeze_rule, other])
        assert [d.id for d in definitions] == ["itsm:declarative_freeze", "itsm:other"]
        assert definitions[1].status == ConstraintStatus.PROMOTED

    def test_missing_id_raises(self, freeze_rule):
        del freeze_rule["id"]
        with pytest.raises(RuleDefinitionError):
            DeclarativeConstraint.from_dict(freeze_rule)

    def test_bad_condition_raises(self, freeze_rule):
        freeze_rule["conditions"].append({"field": "x", "operator": "matches"})
        with pytest.raises(RuleDefinitionError) as exc:
            DeclarativeConstraint.from_dict(freeze_rule)
        assert exc.value.constraint_id == "itsm:declarative_freeze"

    def test_conditions_must_be_list(self, freeze_rule):
        freeze_rule["conditions"] = {"field": "x"}
        with pytest.raises(RuleDefinitionError):
            DeclarativeConstraint.from_dict(freeze_rule)

    def test_when_expression_appended(self, freeze_rule):
        freeze_rule["when"] = 'priority in ["P1", "P2"]'
        rule = DeclarativeConstraint.from_dict(freeze_rule)
        assert [c.field for c in rule.conditions] == ["change_freeze_active", "priority"]

    def test_bad_when_expression(self, freeze_rule):
        freeze_rule["when"] = "priority in"
        with pytest.raises(RuleParseError):
            DeclarativeConstraint.from_dict(freeze_rule)

    def test_to_dict(self, freeze_rule):
        data = DeclarativeConstraint.from_dict(freeze_rule).to_dict()
        assert data["severity"] == "block"
        assert data["conditions"] == [
            {"field": "change_freeze_active", "operator": "eq", "value": True}
        ]


# ── Evaluation ────────────────────────────────────────────────────────


class TestEvaluation:
    def test_triggered(self, freeze_rule):
        definition = DeclarativeConstraint.from_dict(freeze_rule).to_definition()
        result = evaluate(definition, change_freeze_active=True)

        assert result.satisfied is False
        assert result.severity == ConstraintSeverity.BLOCK
        assert result.explanation == "A change freeze is in effect."
        assert result.involved_entities == ["itsm:incident:INC001"]

    def test_not_triggered(self, freeze_rule):
        definition = DeclarativeConstraint.from_dict(freeze_rule).to_definition()
        result = evaluate(definition, change_freeze_active=False)
        assert result.satisfied is True
        assert result.explanation == "No change freeze."

    def test_empty_conditions_always_satisfied(self):
        definition = DeclarativeConstraint(id="empty").to_definition()
        assert evaluate(definition, anything=True).satisfied is True

    def test_severity_update_takes_effect(self, freeze_rule):
        engine = ConstraintEngine()
        for definition in load_constraints([freeze_rule]):
            engine.register(definition)

        engine.update_constraint_severity("itsm:declarative_freeze", ConstraintSeverity.WARN)
        verdict = asyncio.run(engine.evaluate(ConstraintContext(
            intended_action="resolve",
            target_entity="itsm:incident:INC001",
            metadata={"change_freeze_active": True},
        )))

        assert verdict.allowed is True
        assert verdict.warnings[0].constraint_id == "itsm:declarative_freeze"

    def test_load_constraints_blocks_through_engine(self, freeze_rule):
        engine = ConstraintEngine()
        for definition in load_constraints([freeze_rule]):
            engine.register(definition)

        verdict = asyncio.run(engine.evaluate(ConstraintContext(
            intended_action="close",
            target_entity="itsm:incident:INC001",
            metadata={"change_freeze_active": True},
        )))
        assert verdict.allowed is False
        assert verdict.summary == "BLOCKED by 1 constraint(s): A change freeze is in effect."
