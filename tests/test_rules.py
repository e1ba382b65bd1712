# -*- encoding: utf-8 -*-
"""
Tests for the Basanos declarative rule evaluator.

Tests:
- Each operator (eq, neq, gt, gte, lt, lte, in, exists)
- Type guards (numeric operators on non-numbers, booleans vs numbers)
- AND combination and the empty-rule convention
- Condition deserialization errors
"""

import pytest

from basanos.constraints.rules import (
    RuleCondition,
    RuleOperator,
    evaluate_all_conditions,
    evaluate_condition,
)
from basanos.exceptions import RuleDefinitionError


def cond(field, op, value=None):
    return RuleCondition(field=field, operator=RuleOperator(op), value=value)


# ── Single conditions ─────────────────────────────────────────────────


class TestEquality:
    def test_eq_true(self):
        assert evaluate_condition(cond("freeze", "eq", True), {"freeze": True})

    def test_eq_false(self):
        assert not evaluate_condition(cond("freeze", "eq", True), {"freeze": False})

    def test_eq_missing_field(self):
        assert not evaluate_condition(cond("freeze", "eq", True), {})

    def test_eq_bool_is_not_int(self):
        assert not evaluate_condition(cond("flag", "eq", 1), {"flag": True})
        assert not evaluate_condition(cond("flag", "eq", True), {"flag": 1})

    def test_eq_int_float(self):
        assert evaluate_condition(cond("n", "eq", 1), {"n": 1.0})

    def test_neq(self):
        assert evaluate_condition(cond("priority", "neq", "P1"), {"priority": "P2"})
        assert not evaluate_condition(cond("priority", "neq", "P1"), {"priority": "P1"})

    def test_neq_missing_field_holds(self):
        assert evaluate_condition(cond("priority", "neq", "P1"), {})


class TestNumeric:
    @pytest.mark.parametrize("op,value,expected", [
        ("gt", 10, True),
        ("gt", 12, False),
        ("gte", 12, True),
        ("lt", 13, True),
        ("lt", 12, False),
        ("lte", 12, True),
    ])
    def test_comparisons(self, op, value, expected):
        assert evaluate_condition(cond("tickets", op, value), {"tickets": 12}) is expected

    def test_non_numeric_field_is_false(self):
        assert not evaluate_condition(cond("tickets", "gt", 1), {"tickets": "12"})

    def test_bool_field_is_not_numeric(self):
        assert not evaluate_condition(cond("tickets", "gt", 0), {"tickets": True})

    def test_missing_field_is_false(self):
        assert not evaluate_condition(cond("tickets", "lt", 100), {})

    def test_non_numeric_value_is_false(self):
        assert not evaluate_condition(cond("tickets", "gt", "ten"), {"tickets": 12})


class TestMembershipAndExistence:
    def test_in(self):
        c = cond("priority", "in", ["P1", "P2"])
        assert evaluate_condition(c, {"priority": "P2"})
        assert not evaluate_condition(c, {"priority": "P3"})

    def test_in_requires_list(self):
        assert not evaluate_condition(cond("priority", "in", "P1"), {"priority": "P1"})

    def test_in_keeps_bools_distinct(self):
        assert not evaluate_condition(cond("flag", "in", [1, 2]), {"flag": True})

    def test_exists(self):
        c = cond("sla_breached_at", "exists")
        assert evaluate_condition(c, {"sla_breached_at": "2026-01-01"})
        assert evaluate_condition(c, {"sla_breached_at": False})
        assert not evaluate_condition(c, {"sla_breached_at": None})
        assert not evaluate_condition(c, {})

    def test_exists_ignores_value(self):
        assert evaluate_condition(cond("x", "exists", "anything"), {"x": 0})


# ── Combination ───────────────────────────────────────────────────────


class TestEvaluateAllConditions:
    def test_all_must_hold(self):
        conditions = [cond("freeze", "eq", True), cond("priority", "in", ["P1"])]
        assert evaluate_all_conditions(conditions, {"freeze": True, "priority": "P1"})
        assert not evaluate_all_conditions(conditions, {"freeze": True, "priority": "P3"})

    def test_empty_is_never_triggered(self):
        assert evaluate_all_conditions([], {"anything": True}) is False

    def test_accepts_generators(self):
        conditions = (c for c in [cond("a", "exists")])
        assert evaluate_all_conditions(conditions, {"a": 1})


# ── Deserialization ───────────────────────────────────────────────────


class TestRuleConditionFromDict:
    def test_from_dict(self):
        c = RuleCondition.from_dict({"field": "tickets", "operator": "gte", "value": 5})
        assert c.operator == RuleOperator.GTE
        assert c.value == 5

    def test_exists_to_dict_omits_value(self):
        assert cond("x", "exists").to_dict() == {"field": "x", "operator": "exists"}

    def test_unknown_operator(self):
        with pytest.raises(RuleDefinitionError) as exc:
            RuleCondition.from_dict({"field": "x", "operator": "like"}, constraint_id="c1")
        assert exc.value.constraint_id == "c1"
        assert exc.value.field == "operator"

    def test_missing_field(self):
        with pytest.raises(RuleDefinitionError):
            RuleCondition.from_dict({"operator": "eq", "value": 1})

    def test_in_with_scalar_value(self):
        with pytest.raises(RuleDefinitionError) as exc:
            RuleCondition.from_dict({"field": "p", "operator": "in", "value": "P1"})
        assert exc.value.to_dict()["error"] == "RuleDefinitionError"
