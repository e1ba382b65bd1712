"""
Basanos ITSM reference domain.

Usage:
    ontology = OntologyEngine()
    constraints = ConstraintEngine()
    register_itsm(ontology, constraints)
"""

from basanos.constraints.engine import ConstraintEngine
from basanos.domains.itsm.constraints import build_itsm_constraints
from basanos.domains.itsm.ontology import ITSM_SCHEMA, build_itsm_domain
from basanos.ontology.engine import OntologyEngine


def register_itsm(ontology: OntologyEngine, constraints: ConstraintEngine) -> None:
    """Register the ITSM schema and constraints with caller-owned engines."""
    ontology.register_domain(build_itsm_domain())
    for constraint in build_itsm_constraints():
        constraints.register(constraint)


__all__ = [
    "ITSM_SCHEMA",
    "build_itsm_constraints",
    "build_itsm_domain",
    "register_itsm",
]
