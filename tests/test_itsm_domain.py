# -*- encoding: utf-8 -*-
"""
Tests for the ITSM reference domain.

Tests:
- The bundled schema is valid and registers cleanly
- Each ITSM constraint's triggering conditions
- End-to-end agent scenarios against both engines
"""

import asyncio

import pytest

from basanos.constraints.engine import ConstraintEngine
from basanos.constraints.types import ConstraintContext, ConstraintSeverity
from basanos.domains.itsm import build_itsm_constraints, build_itsm_domain, register_itsm
from basanos.ontology.engine import OntologyEngine
from basanos.ontology.schema import validate_domain_schema
from basanos.ontology.types import Entity


@pytest.fixture
def engines():
    ontology = OntologyEngine()
    constraints = ConstraintEngine()
    register_itsm(ontology, constraints)
    return ontology, constraints


def evaluate(constraints, action, related=None, **metadata):
    return asyncio.run(constraints.evaluate(ConstraintContext(
        intended_action=action,
        target_entity="itsm:incident:INC001",
        related_entities=related or [],
        metadata=metadata,
    )))


def result_for(verdict, constraint_id):
    return next(r for r in verdict.results if r.constraint_id == constraint_id)


# ── Schema ────────────────────────────────────────────────────────────


class TestItsmSchema:
    def test_schema_is_valid(self):
        assert validate_domain_schema(build_itsm_domain()) == []

    def test_entity_types(self):
        names = [et.name for et in build_itsm_domain().entity_types]
        assert names == [
            "incident",
            "business_service",
            "configuration_item",
            "change_request",
            "problem",
            "sla_contract",
            "assignment_group",
        ]

    def test_fresh_copies(self):
        assert build_itsm_domain() is not build_itsm_domain()

    def test_registered(self, engines):
        ontology, _ = engines
        assert ontology.get_domain("itsm").label == "IT Service Management"

    def test_business_service_inverse(self, engines):
        ontology, _ = engines
        names = [r.name for r in ontology.get_relationships_for("itsm", "business_service")]
        assert "has_incidents" in names
        assert "governed_by_sla" in names

    def test_description_mentions_inverse(self, engines):
        ontology, _ = engines
        text = ontology.describe_domain("itsm")
        assert text.startswith("# IT Service Management (itsm) v0.1.0")
        assert "has_incidents (inverse): business_service → incident" in text


# ── Constraints ───────────────────────────────────────────────────────


class TestItsmConstraints:
    def test_four_constraints(self, engines):
        _, constraints = engines
        assert [c.id for c in constraints.get_constraints("itsm")] == [
            "itsm:change_freeze_active",
            "itsm:p1_reassignment_caution",
            "itsm:group_capacity_check",
            "itsm:sla_breach_review",
        ]

    def test_fresh_definitions(self):
        first, second = build_itsm_constraints(), build_itsm_constraints()
        first[0].severity = ConstraintSeverity.INFO
        assert second[0].severity == ConstraintSeverity.BLOCK

    def test_change_freeze_requires_literal_true(self, engines):
        _, constraints = engines
        assert evaluate(constraints, "resolve", change_freeze_active="yes").allowed is True
        assert evaluate(constraints, "auto_resolve", change_freeze_active=True).allowed is False

    def test_p1_reassignment_warns(self, engines):
        _, constraints = engines
        verdict = evaluate(constraints, "reassign", priority="P1")
        assert verdict.allowed is True
        warning = result_for(verdict, "itsm:p1_reassignment_caution")
        assert warning.satisfied is False
        assert "P1 incident" in warning.explanation

    def test_p2_reassignment_satisfied(self, engines):
        _, constraints = engines
        verdict = evaluate(constraints, "reassign", priority="P2")
        assert result_for(verdict, "itsm:p1_reassignment_caution").satisfied is True

    def test_group_over_capacity(self, engines):
        _, constraints = engines
        verdict = evaluate(
            constraints, "assign",
            related=["itsm:assignment_group:DB"],
            target_group_active_tickets=45,
            target_group_member_count=3,
        )
        result = result_for(verdict, "itsm:group_capacity_check")
        assert result.satisfied is False
        assert "(ratio: 15.0)" in result.explanation
        assert result.involved_entities == ["itsm:incident:INC001", "itsm:assignment_group:DB"]

    def test_group_at_capacity_boundary(self, engines):
        _, constraints = engines
        verdict = evaluate(
            constraints, "assign",
            target_group_active_tickets=30,
            target_group_member_count=3,
        )
        result = result_for(verdict, "itsm:group_capacity_check")
        assert result.satisfied is True
        assert "(10.0 tickets/member)" in result.explanation

    def test_group_defaults(self, engines):
        _, constraints = engines
        verdict = evaluate(constraints, "assign")
        assert result_for(verdict, "itsm:group_capacity_check").satisfied is True

    def test_group_without_members_is_overloaded(self, engines):
        _, constraints = engines
        verdict = evaluate(
            constraints, "assign",
            target_group_active_tickets=5,
            target_group_member_count=0,
        )
        result = result_for(verdict, "itsm:group_capacity_check")
        assert result.satisfied is False
        assert result.severity == ConstraintSeverity.WARN
        assert result.explanation.startswith(
            "Target group has 5 active tickets across 0 members (ratio: inf)."
        )

    def test_empty_group_without_tickets(self, engines):
        _, constraints = engines
        verdict = evaluate(
            constraints, "assign",
            target_group_active_tickets=0,
            target_group_member_count=0,
        )
        assert result_for(verdict, "itsm:group_capacity_check").satisfied is True

    def test_sla_breach_needs_both_flags(self, engines):
        _, constraints = engines
        only_breach = evaluate(constraints, "close", sla_breached=True)
        both = evaluate(constraints, "close", sla_breached=True, sla_has_penalty=True)

        assert result_for(only_breach, "itsm:sla_breach_review").satisfied is True
        assert result_for(both, "itsm:sla_breach_review").satisfied is False


# ── Scenarios ─────────────────────────────────────────────────────────


class TestScenarios:
    def test_change_freeze_blocks_resolution(self, engines):
        _, constraints = engines
        verdict = evaluate(constraints, "resolve", change_freeze_active=True)

        assert verdict.allowed is False
        assert verdict.summary.startswith("BLOCKED by 1 constraint(s): An active change freeze")

    def test_close_during_freeze_with_penalty_breach(self, engines):
        _, constraints = engines
        verdict = evaluate(
            constraints, "close",
            change_freeze_active=True, sla_breached=True, sla_has_penalty=True,
        )
        assert verdict.allowed is False
        assert len(verdict.blocked) == 1
        assert len(verdict.warnings) == 1
        assert " | 1 warning(s): " in verdict.summary

    def test_clean_resolution(self, engines):
        _, constraints = engines
        verdict = evaluate(constraints, "resolve", change_freeze_active=False)
        assert verdict.allowed is True
        assert verdict.summary == "All 1 constraint(s) satisfied for action: resolve"

    def test_enriched_from_graph(self, engines):
        ontology, constraints = engines
        ontology.add_entity(Entity(
            id="itsm:incident:INC001", type="incident", domain="itsm",
            properties={"priority": "P1"},
            relationships={"assigned_to_group": ["itsm:assignment_group:DB"]},
        ))
        ontology.add_entity(Entity(
            id="itsm:assignment_group:DB", type="assignment_group", domain="itsm",
            properties={"active_member_count": 2},
        ))

        context = ontology.get_entity_context("itsm:incident:INC001", max_depth=1)
        incident = context["entity"]
        verdict = evaluate(
            constraints, "reassign",
            related=context["related_ids"],
            priority=incident.properties["priority"],
            target_group_active_tickets=25,
            target_group_member_count=context["related"][1][0].properties["active_member_count"],
        )

        assert verdict.allowed is True
        assert {r.constraint_id for r in verdict.warnings} == {
            "itsm:p1_reassignment_caution",
            "itsm:group_capacity_check",
        }
        assert len(constraints.get_audit_entries_for(entity_id="itsm:incident:INC001")) == 1
