# -*- encoding: utf-8 -*-
"""
ITSM Business Constraints.

Operational awareness an agent needs before acting on ITSM records. Each
constraint reads the metadata bag filled by the caller's enrichment step:

    change_freeze_active          bool   (change freeze)
    priority                      str    (P1 reassignment)
    target_group_active_tickets   number (group capacity)
    target_group_member_count     number (group capacity)
    sla_breached, sla_has_penalty bool   (SLA breach review)
"""

from basanos.constraints.types import (
    ConstraintContext,
    ConstraintDefinition,
    ConstraintResult,
    ConstraintSeverity,
)

# Tickets per active member above which a group counts as overloaded
GROUP_CAPACITY_RATIO = 10


async def _check_change_freeze(context: ConstraintContext) -> ConstraintResult:
    freeze_active = context.metadata.get("change_freeze_active") is True
    return ConstraintResult(
        constraint_id="itsm:change_freeze_active",
        satisfied=not freeze_active,
        severity=ConstraintSeverity.BLOCK,
        explanation=(
            "An active change freeze is in effect. Incident resolution may "
            "require changes that violate the freeze window. Escalate to "
            "change management."
            if freeze_active
            else "No active change freeze detected."
        ),
        involved_entities=[context.target_entity],
    )


async def _check_p1_reassignment(context: ConstraintContext) -> ConstraintResult:
    is_p1 = context.metadata.get("priority") == "P1"
    return ConstraintResult(
        constraint_id="itsm:p1_reassignment_caution",
        satisfied=not is_p1,
        severity=ConstraintSeverity.WARN,
        explanation=(
            "This is a P1 incident. Reassignment will disrupt the active war "
            "room and escalation chain. Confirm with the incident commander "
            "before proceeding."
            if is_p1
            else "Incident is not P1. Standard reassignment procedures apply."
        ),
        involved_entities=[context.target_entity],
    )


async def _check_group_capacity(context: ConstraintContext) -> ConstraintResult:
    active = context.metadata.get("target_group_active_tickets")
    members = context.metadata.get("target_group_member_count")
    active = 0 if active is None else active
    members = 1 if members is None else members
    if members:
        ratio = active / members
    else:
        # A group with no members is overloaded by any active ticket
        ratio = float("inf") if active > 0 else 0.0
    overloaded = ratio > GROUP_CAPACITY_RATIO
    return ConstraintResult(
        constraint_id="itsm:group_capacity_check",
        satisfied=not overloaded,
        severity=ConstraintSeverity.WARN,
        explanation=(
            f"Target group has {active} active tickets across {members} members "
            f"(ratio: {ratio:.1f}). Consider alternative assignment or escalation."
            if overloaded
            else f"Target group capacity is within acceptable range ({ratio:.1f} tickets/member)."
        ),
        involved_entities=[context.target_entity, *context.related_entities],
    )


async def _check_sla_breach(context: ConstraintContext) -> ConstraintResult:
    needs_review = (
        context.metadata.get("sla_breached") is True
        and context.metadata.get("sla_has_penalty") is True
    )
    return ConstraintResult(
        constraint_id="itsm:sla_breach_review",
        satisfied=not needs_review,
        severity=ConstraintSeverity.WARN,
        explanation=(
            "This incident breached an SLA with a penalty clause. Closure "
            "requires a documented breach review. Route to service level "
            "management before closing."
            if needs_review
            else "No SLA penalty breach detected. Standard closure procedures apply."
        ),
        involved_entities=[context.target_entity],
    )


def build_itsm_constraints() -> list[ConstraintDefinition]:
    """Return fresh ITSM constraint definitions, ready to register."""
    return [
        ConstraintDefinition(
            id="itsm:change_freeze_active",
            name="Active Change Freeze",
            domain="itsm",
            applies_to=["incident"],
            relevant_actions=["resolve", "close", "auto_resolve"],
            severity=ConstraintSeverity.BLOCK,
            description=(
                "Prevents incident resolution during an active change freeze; "
                "the fix may violate the freeze window and needs manual review."
            ),
            evaluate=_check_change_freeze,
        ),
        ConstraintDefinition(
            id="itsm:p1_reassignment_caution",
            name="P1 Reassignment Caution",
            domain="itsm",
            applies_to=["incident"],
            relevant_actions=["reassign"],
            severity=ConstraintSeverity.WARN,
            description=(
                "P1 incidents have active war rooms and escalation chains. "
                "Reassignment disrupts these and should be deliberate."
            ),
            evaluate=_check_p1_reassignment,
        ),
        ConstraintDefinition(
            id="itsm:group_capacity_check",
            name="Assignment Group Capacity",
            domain="itsm",
            applies_to=["incident", "problem", "change_request"],
            relevant_actions=["assign", "reassign"],
            severity=ConstraintSeverity.WARN,
            description=(
                "Checks whether the target assignment group has capacity. "
                "Overloaded groups lead to SLA breaches."
            ),
            evaluate=_check_group_capacity,
        ),
        ConstraintDefinition(
            id="itsm:sla_breach_review",
            name="SLA Breach Review Required",
            domain="itsm",
            applies_to=["incident"],
            relevant_actions=["close"],
            severity=ConstraintSeverity.WARN,
            description=(
                "Closing an incident that breached an SLA with a penalty clause "
                "requires a documented breach review."
            ),
            evaluate=_check_sla_breach,
        ),
    ]
