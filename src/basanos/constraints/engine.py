# -*- encoding: utf-8 -*-
"""
Basanos Constraint Engine - evaluates business guardrails before an agent acts.

Given an intended action and a context snapshot, the engine selects the
registered constraints relevant to the action, evaluates them in
registration order, and reduces the results into one verdict:

    blocked  = unsatisfied results with severity BLOCK
    warnings = unsatisfied results with severity WARN
    allowed  = no blocked results

INFO results never affect the verdict but stay in results for display.

A constraint that raises (or whose coroutine raises) does not abort
evaluation: it is recorded as an unsatisfied WARN result carrying the
error text, and every other constraint is still evaluated.

Every evaluate() call, including ones no constraint applies to, appends
one entry to an append-only audit log with a sequential id starting at 1.

Status gating: by default constraints of every status are evaluated, so
candidate rules can be dry-run against live contexts. Pass skip_statuses
(or set it through BasanosConfig) to treat, e.g., disabled constraints as
not applicable.
"""

import inspect
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Iterable, Optional, TYPE_CHECKING

from basanos.constraints.types import (
    ConstraintContext,
    ConstraintDefinition,
    ConstraintResult,
    ConstraintSeverity,
    ConstraintStatus,
)

if TYPE_CHECKING:
    from basanos.config import BasanosConfig

logger = logging.getLogger(__name__)


@dataclass
class ConstraintVerdict:
    """
    Aggregate decision for one evaluate() call.

    Attributes:
        allowed: Whether the action may proceed
        results: Every constraint result, including satisfied ones,
            in registration order
        summary: Human-readable explanation for agent reasoning
        evaluated_at: When the verdict was produced (UTC)
        context: The context that was evaluated
    """
    allowed: bool
    results: list[ConstraintResult]
    summary: str
    evaluated_at: datetime
    context: ConstraintContext

    @property
    def blocked(self) -> list[ConstraintResult]:
        return [r for r in self.results if r.is_blocking]

    @property
    def warnings(self) -> list[ConstraintResult]:
        return [r for r in self.results if r.is_warning]

    def to_dict(self) -> dict:
        return {
            "allowed": self.allowed,
            "results": [r.to_dict() for r in self.results],
            "summary": self.summary,
            "evaluatedAt": self.evaluated_at.isoformat(),
            "context": self.context.to_dict(),
        }


@dataclass(frozen=True)
class AuditEntry:
    """One immutable, sequentially numbered audit record."""
    id: int
    timestamp: datetime
    verdict: ConstraintVerdict

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "verdict": self.verdict.to_dict(),
        }


@dataclass(frozen=True)
class AuditSummary:
    """Counts derived from the audit log."""
    total: int = 0
    allowed: int = 0
    blocked: int = 0

    def to_dict(self) -> dict:
        return {"total": self.total, "allowed": self.allowed, "blocked": self.blocked}


def summarize(action: str, results: list[ConstraintResult]) -> str:
    """
    Build the verdict summary for a non-empty result list.

    Blocks lead, then warnings, joined with " | ". When nothing is
    unsatisfied the summary says all constraints passed.
    """
    blocked = [r for r in results if r.is_blocking]
    warnings = [r for r in results if r.is_warning]

    parts: list[str] = []
    if blocked:
        parts.append(
            f"BLOCKED by {len(blocked)} constraint(s): "
            + "; ".join(r.explanation for r in blocked)
        )
    if warnings:
        parts.append(
            f"{len(warnings)} warning(s): " + "; ".join(r.explanation for r in warnings)
        )
    if not parts:
        parts.append(f"All {len(results)} constraint(s) satisfied for action: {action}")
    return " | ".join(parts)


class ConstraintEngine:
    """
    Registry of constraints plus the evaluation and audit pipeline.

    One instance per tenant/process, passed to whatever needs it. The
    registry and audit log are plain in-memory structures mutated only by
    synchronous calls, which a single event loop serializes.

    Usage:
        engine = ConstraintEngine()
        engine.register(change_freeze_constraint)

        verdict = await engine.evaluate(ConstraintContext(
            intended_action="resolve",
            target_entity="itsm:incident:INC001",
            metadata={"change_freeze_active": True},
        ))
        if not verdict.allowed:
            print(verdict.summary)
    """

    def __init__(
        self,
        config: Optional["BasanosConfig"] = None,
        skip_statuses: Optional[Iterable[ConstraintStatus]] = None,
    ):
        """
        Args:
            config: Optional BasanosConfig supplying default skip_statuses
            skip_statuses: Statuses whose constraints evaluate() ignores;
                overrides config. Empty by default.
        """
        self._constraints: dict[str, ConstraintDefinition] = {}
        self._audit_log: list[AuditEntry] = []
        self._next_audit_id = 1

        if skip_statuses is not None:
            self._skip_statuses = frozenset(ConstraintStatus(s) for s in skip_statuses)
        elif config is not None:
            self._skip_statuses = frozenset(config.skip_statuses)
        else:
            self._skip_statuses = frozenset()

    @property
    def skip_statuses(self) -> frozenset[ConstraintStatus]:
        return self._skip_statuses

    # ── Registry ─────────────────────────────────────────────────────

    def register(self, constraint: ConstraintDefinition) -> None:
        """
        Register a constraint, replacing any constraint with the same id.

        A replaced constraint keeps its original position in evaluation order.
        """
        if constraint.id in self._constraints:
            logger.debug("Replacing constraint %s", constraint.id)
        else:
            logger.debug("Registering constraint %s (%s)", constraint.id, constraint.severity.value)
        self._constraints[constraint.id] = constraint

    def get_constraint(self, constraint_id: str) -> Optional[ConstraintDefinition]:
        return self._constraints.get(constraint_id)

    def get_constraints(self, domain: str) -> list[ConstraintDefinition]:
        """All constraints of a domain, in registration order."""
        return [c for c in self._constraints.values() if c.domain == domain]

    def get_all_constraints(self) -> list[ConstraintDefinition]:
        return list(self._constraints.values())

    def update_constraint_status(self, constraint_id: str, status: ConstraintStatus) -> bool:
        """
        Change a constraint's lifecycle status in place.

        Returns:
            False if no constraint has that id
        """
        constraint = self._constraints.get(constraint_id)
        if constraint is None:
            return False
        constraint.status = ConstraintStatus(status)
        logger.info("Constraint %s status -> %s", constraint_id, constraint.status.value)
        return True

    def update_constraint_severity(self, constraint_id: str, severity: ConstraintSeverity) -> bool:
        """
        Change a constraint's severity in place.

        Returns:
            False if no constraint has that id
        """
        constraint = self._constraints.get(constraint_id)
        if constraint is None:
            return False
        constraint.severity = ConstraintSeverity(severity)
        logger.info("Constraint %s severity -> %s", constraint_id, constraint.severity.value)
        return True

    def get_applicable(self, action: str) -> list[ConstraintDefinition]:
        """Constraints evaluate() would run for an action, in registration order."""
        return [
            c for c in self._constraints.values()
            if c.is_relevant(action) and c.status not in self._skip_statuses
        ]

    # ── Evaluation ───────────────────────────────────────────────────

    async def evaluate(self, context: ConstraintContext) -> ConstraintVerdict:
        """
        Evaluate every applicable constraint and return a verdict.

        Never raises for failing constraints; see the module docs.

        The context is copied first (metadata and related entities), and
        constraints, the verdict and the audit entry all see that copy, so
        later changes to the caller's context leave the audit log intact.

        Args:
            context: Action, target entity and enrichment metadata

        Returns:
            ConstraintVerdict, also recorded in the audit log
        """
        context = replace(
            context,
            related_entities=list(context.related_entities),
            metadata=dict(context.metadata),
        )
        applicable = self.get_applicable(context.intended_action)

        if not applicable:
            verdict = ConstraintVerdict(
                allowed=True,
                results=[],
                summary=f"No constraints apply to action: {context.intended_action}",
                evaluated_at=datetime.now(timezone.utc),
                context=context,
            )
            self._record(verdict)
            return verdict

        results: list[ConstraintResult] = []
        for constraint in applicable:
            results.append(await self._evaluate_one(constraint, context))

        verdict = ConstraintVerdict(
            allowed=not any(r.is_blocking for r in results),
            results=results,
            summary=summarize(context.intended_action, results),
            evaluated_at=datetime.now(timezone.utc),
            context=context,
        )
        self._record(verdict)
        return verdict

    async def _evaluate_one(
        self,
        constraint: ConstraintDefinition,
        context: ConstraintContext,
    ) -> ConstraintResult:
        try:
            result = constraint.evaluate(context)
            if inspect.isawaitable(result):
                result = await result
            if not isinstance(result, ConstraintResult):
                raise TypeError(
                    f"expected ConstraintResult, got {type(result).__name__}"
                )
            return result
        except Exception as e:
            logger.warning("Constraint %s failed to evaluate: %s", constraint.id, e)
            return ConstraintResult(
                constraint_id=constraint.id,
                satisfied=False,
                severity=ConstraintSeverity.WARN,
                explanation=f"Constraint evaluation failed: {e}",
                involved_entities=[context.target_entity],
            )

    def _record(self, verdict: ConstraintVerdict) -> AuditEntry:
        entry = AuditEntry(
            id=self._next_audit_id,
            timestamp=verdict.evaluated_at,
            verdict=verdict,
        )
        self._next_audit_id += 1
        self._audit_log.append(entry)
        logger.info(
            "Audit #%s %s on %s: %s",
            entry.id,
            verdict.context.intended_action,
            verdict.context.target_entity,
            "allowed" if verdict.allowed else "blocked",
        )
        return entry

    # ── Audit ────────────────────────────────────────────────────────

    def get_audit_log(self) -> list[AuditEntry]:
        """Snapshot of the audit log, oldest first."""
        return list(self._audit_log)

    def get_audit_entries_for(
        self,
        action: Optional[str] = None,
        entity_id: Optional[str] = None,
    ) -> list[AuditEntry]:
        """
        Filter the audit log by exact intended action and/or target entity.

        Both filters are optional; when both are given, entries must match both.
        """
        entries = []
        for entry in self._audit_log:
            ctx = entry.verdict.context
            if action and ctx.intended_action != action:
                continue
            if entity_id and ctx.target_entity != entity_id:
                continue
            entries.append(entry)
        return entries

    def get_audit_summary(self) -> AuditSummary:
        total = len(self._audit_log)
        blocked = sum(1 for e in self._audit_log if not e.verdict.allowed)
        return AuditSummary(total=total, allowed=total - blocked, blocked=blocked)

    # ── Description ──────────────────────────────────────────────────

    def describe_constraints(self, domain: str) -> str:
        """
        Render a markdown listing of a domain's constraints for agent awareness.

        Returns "No constraints registered for domain: <domain>" when empty.
        """
        constraints = self.get_constraints(domain)
        if not constraints:
            return f"No constraints registered for domain: {domain}"

        lines = [f"# Business Constraints for {domain}", ""]
        for c in constraints:
            lines.append(f"## {c.name} ({c.id})")
            lines.append(f"Severity: {c.severity.value}")
            lines.append(f"Status: {c.status.value}")
            lines.append(f"Applies to: {', '.join(c.applies_to)}")
            lines.append(f"Relevant actions: {', '.join(c.relevant_actions)}")
            lines.append(c.description)
            lines.append("")
        return "\n".join(lines)
