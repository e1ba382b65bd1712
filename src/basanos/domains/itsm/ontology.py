# -*- encoding: utf-8 -*-
"""
ITSM Domain Ontology - IT Service Management entities and relationships.

Incidents, problems, change requests, configuration items, business
services, SLA contracts and assignment groups, modelled as the
relationships any ITSM platform should understand rather than as one
vendor's tables.
"""

from basanos.ontology.types import DomainSchema

_PRIORITIES = ["P1", "P2", "P3", "P4", "P5"]
_LEVELS = ["high", "medium", "low"]

ITSM_SCHEMA = {
    "name": "itsm",
    "label": "IT Service Management",
    "version": "0.1.0",
    "description": (
        "Semantic ontology for IT Service Management. Models the entity "
        "relationships that govern incident management, change control, "
        "problem resolution, and service level governance."
    ),
    "entityTypes": [
        {
            "name": "incident",
            "label": "Incident",
            "description": (
                "An unplanned interruption or reduction in quality of an IT "
                "service. Priority, impact and urgency determine handling and "
                "escalation."
            ),
            "properties": [
                {"name": "number", "label": "Number", "type": "string", "required": True,
                 "description": "Unique incident identifier (e.g., INC0012345)"},
                {"name": "short_description", "label": "Short Description", "type": "string",
                 "required": True, "description": "Brief summary of the incident"},
                {"name": "state", "label": "State", "type": "enum", "required": True,
                 "enumValues": ["new", "in_progress", "on_hold", "resolved", "closed", "cancelled"],
                 "description": "Current lifecycle state of the incident"},
                {"name": "priority", "label": "Priority", "type": "enum", "required": True,
                 "enumValues": _PRIORITIES,
                 "description": "Priority derived from impact x urgency. P1 = critical"},
                {"name": "impact", "label": "Impact", "type": "enum", "required": True,
                 "enumValues": _LEVELS, "description": "Business impact of the incident"},
                {"name": "urgency", "label": "Urgency", "type": "enum", "required": True,
                 "enumValues": _LEVELS, "description": "How quickly the incident needs resolution"},
                {"name": "opened_at", "label": "Opened At", "type": "date", "required": True,
                 "description": "When the incident was created"},
            ],
            "relationships": [
                {"name": "affects_service", "label": "Affects Service",
                 "targetType": "business_service", "cardinality": "many_to_one",
                 "inverseName": "has_incidents",
                 "description": "The business service impacted. Determines SLA applicability."},
                {"name": "affects_ci", "label": "Affects Configuration Item",
                 "targetType": "configuration_item", "cardinality": "many_to_one",
                 "inverseName": "has_incidents",
                 "description": "The specific CI experiencing the issue"},
                {"name": "assigned_to_group", "label": "Assigned To Group",
                 "targetType": "assignment_group", "cardinality": "many_to_one",
                 "inverseName": "assigned_incidents",
                 "description": "The team responsible for resolving this incident"},
                {"name": "caused_by_problem", "label": "Caused By Problem",
                 "targetType": "problem", "cardinality": "many_to_one",
                 "inverseName": "caused_incidents",
                 "description": "The underlying problem record, if identified"},
            ],
        },
        {
            "name": "business_service",
            "label": "Business Service",
            "description": (
                "A service delivered to the business, bridging technical "
                "infrastructure and business value. Carries SLA commitments "
                "and defined ownership."
            ),
            "properties": [
                {"name": "name", "label": "Name", "type": "string", "required": True,
                 "description": "Service name (e.g., 'Email Service')"},
                {"name": "criticality", "label": "Criticality", "type": "enum", "required": True,
                 "enumValues": ["critical", "high", "medium", "low"],
                 "description": "Business criticality; drives escalation speed"},
                {"name": "operational_status", "label": "Operational Status", "type": "enum",
                 "required": True,
                 "enumValues": ["operational", "degraded", "outage", "maintenance"],
                 "description": "Current operational state of the service"},
            ],
            "relationships": [
                {"name": "governed_by_sla", "label": "Governed By SLA",
                 "targetType": "sla_contract", "cardinality": "one_to_many",
                 "inverseName": "governs_service",
                 "description": "SLA contracts defining performance commitments"},
                {"name": "depends_on", "label": "Depends On CIs",
                 "targetType": "configuration_item", "cardinality": "many_to_many",
                 "inverseName": "supports_service",
                 "description": "CIs this service depends on"},
                {"name": "owned_by", "label": "Owned By Group",
                 "targetType": "assignment_group", "cardinality": "many_to_one",
                 "inverseName": "owns_services",
                 "description": "The group accountable for this service's health"},
            ],
        },
        {
            "name": "configuration_item",
            "label": "Configuration Item",
            "description": (
                "Any component managed to deliver an IT service. CIs form the "
                "CMDB dependency graph connecting infrastructure to services."
            ),
            "properties": [
                {"name": "name", "label": "Name", "type": "string", "required": True,
                 "description": "CI name (e.g., 'prod-db-01')"},
                {"name": "ci_class", "label": "CI Class", "type": "enum", "required": True,
                 "enumValues": ["server", "database", "application", "network_device",
                                "storage", "cluster", "virtual_machine"],
                 "description": "Classification within the CMDB taxonomy"},
                {"name": "environment", "label": "Environment", "type": "enum", "required": True,
                 "enumValues": ["production", "staging", "development", "dr"],
                 "description": "Deployment environment; production has stricter change control"},
                {"name": "operational_status", "label": "Operational Status", "type": "enum",
                 "required": True,
                 "enumValues": ["operational", "non_operational", "retired", "under_maintenance"],
                 "description": "Current operational state of the CI"},
            ],
            "relationships": [
                {"name": "depends_on", "label": "Depends On",
                 "targetType": "configuration_item", "cardinality": "many_to_many",
                 "inverseName": "depended_on_by",
                 "description": "Upstream dependencies whose failure may impact this CI"},
            ],
        },
        {
            "name": "change_request",
            "label": "Change Request",
            "description": (
                "A formal request to modify the IT environment, with risk "
                "assessment, approval workflow and blackout windows."
            ),
            "properties": [
                {"name": "number", "label": "Number", "type": "string", "required": True,
                 "description": "Unique change identifier (e.g., CHG0005678)"},
                {"name": "type", "label": "Type", "type": "enum", "required": True,
                 "enumValues": ["standard", "normal", "emergency"],
                 "description": "Change type; determines approval requirements"},
                {"name": "state", "label": "State", "type": "enum", "required": True,
                 "enumValues": ["new", "assess", "authorize", "scheduled", "implement",
                                "review", "closed", "cancelled"],
                 "description": "Current lifecycle state of the change"},
                {"name": "risk", "label": "Risk", "type": "enum", "required": True,
                 "enumValues": ["high", "moderate", "low"],
                 "description": "Assessed risk level"},
                {"name": "planned_start", "label": "Planned Start", "type": "date",
                 "required": False, "description": "Scheduled implementation start"},
                {"name": "planned_end", "label": "Planned End", "type": "date",
                 "required": False, "description": "Scheduled implementation end"},
            ],
            "relationships": [
                {"name": "affects_ci", "label": "Affects CI",
                 "targetType": "configuration_item", "cardinality": "many_to_many",
                 "inverseName": "has_changes",
                 "description": "CIs modified by this change"},
                {"name": "requested_by_group", "label": "Requested By Group",
                 "targetType": "assignment_group", "cardinality": "many_to_one",
                 "inverseName": "requested_changes",
                 "description": "The group requesting this change"},
            ],
        },
        {
            "name": "problem",
            "label": "Problem",
            "description": (
                "The root cause of one or more incidents, needing permanent "
                "resolution rather than workarounds."
            ),
            "properties": [
                {"name": "number", "label": "Number", "type": "string", "required": True,
                 "description": "Unique problem identifier (e.g., PRB0001234)"},
                {"name": "state", "label": "State", "type": "enum", "required": True,
                 "enumValues": ["new", "assessed", "root_cause_analysis", "fix_in_progress",
                                "resolved", "closed"],
                 "description": "Current lifecycle state of the problem"},
                {"name": "known_error", "label": "Known Error", "type": "boolean",
                 "required": True,
                 "description": "Whether a root cause and workaround are documented"},
            ],
            "relationships": [
                {"name": "affects_ci", "label": "Root Cause CI",
                 "targetType": "configuration_item", "cardinality": "many_to_one",
                 "inverseName": "has_problems",
                 "description": "The CI identified as the root cause"},
                {"name": "assigned_to_group", "label": "Assigned To Group",
                 "targetType": "assignment_group", "cardinality": "many_to_one",
                 "inverseName": "assigned_problems",
                 "description": "The team investigating this problem"},
            ],
        },
        {
            "name": "sla_contract",
            "label": "SLA Contract",
            "description": (
                "A service level agreement binding response and resolution "
                "times to priority levels, possibly with penalty clauses."
            ),
            "properties": [
                {"name": "name", "label": "Name", "type": "string", "required": True,
                 "description": "SLA contract name"},
                {"name": "response_time_minutes", "label": "Response Time (minutes)",
                 "type": "number", "required": True,
                 "description": "Maximum time to first response"},
                {"name": "resolution_time_minutes", "label": "Resolution Time (minutes)",
                 "type": "number", "required": True,
                 "description": "Maximum time to resolution"},
                {"name": "applies_to_priority", "label": "Applies To Priority", "type": "enum",
                 "required": True, "enumValues": _PRIORITIES,
                 "description": "Incident priority this SLA target applies to"},
                {"name": "has_penalty", "label": "Has Penalty Clause", "type": "boolean",
                 "required": True, "description": "Whether a penalty applies on breach"},
            ],
            "relationships": [],
        },
        {
            "name": "assignment_group",
            "label": "Assignment Group",
            "description": (
                "A team handling work items. Capacity, skills and operating "
                "hours affect assignment decisions."
            ),
            "properties": [
                {"name": "name", "label": "Name", "type": "string", "required": True,
                 "description": "Group name (e.g., 'Database Team')"},
                {"name": "type", "label": "Type", "type": "enum", "required": True,
                 "enumValues": ["operations", "engineering", "management", "vendor"],
                 "description": "Functional classification of the group"},
                {"name": "active_member_count", "label": "Active Member Count",
                 "type": "number", "required": False,
                 "description": "Number of currently active team members"},
            ],
            "relationships": [],
        },
    ],
}


def build_itsm_domain() -> DomainSchema:
    """Return a fresh ITSM DomainSchema (callers may mutate their copy)."""
    return DomainSchema.from_dict(ITSM_SCHEMA)
