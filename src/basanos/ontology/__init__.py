"""
Basanos Ontology - typed entity graph store.

This module provides:
- DomainSchema, EntityTypeSchema, PropertySchema, RelationshipSchema: schema model
- Entity, TraversalHit: live instances and traversal results
- OntologyEngine: schema registry, entity store, relationship views, traversal
- validate_domain_schema: pre-registration consistency check
"""

from basanos.ontology.types import (
    Cardinality,
    DomainSchema,
    Entity,
    EntityId,
    EntityTypeSchema,
    PropertySchema,
    PropertyType,
    RelationshipSchema,
    TraversalHit,
)
from basanos.ontology.engine import OntologyEngine
from basanos.ontology.schema import get_all_entity_types, validate_domain_schema

__all__ = [
    "Cardinality",
    "DomainSchema",
    "Entity",
    "EntityId",
    "EntityTypeSchema",
    "PropertySchema",
    "PropertyType",
    "RelationshipSchema",
    "TraversalHit",
    "OntologyEngine",
    "get_all_entity_types",
    "validate_domain_schema",
]
