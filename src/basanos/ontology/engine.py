# -*- encoding: utf-8 -*-
"""
Basanos Ontology Engine - holds domain schemas and live entities, and
answers relationship and reachability queries over them.

The schema is the single source of truth for relationships: inverse
relationships are never stored, they are folded out of every type's
declarations at query time, so a re-registered schema can't leave stale
inverse edges behind.

All lookups are total. Unknown domains, types and entities yield None,
an empty collection or a sentinel string; nothing here raises for
missing input.

Usage:
    engine = OntologyEngine()
    engine.register_domain(itsm_domain)
    engine.add_entity(Entity(id="itsm:incident:INC001", type="incident",
                             domain="itsm",
                             relationships={"affects_service": ["itsm:business_service:SVC001"]}))

    for rel in engine.get_relationships_for("itsm", "business_service"):
        print(rel.name, "->", rel.target_type)

    reached = engine.traverse("itsm:incident:INC001", max_depth=2)
"""

import logging
from collections import deque
from typing import Optional, TYPE_CHECKING

from basanos.ontology.types import (
    DomainSchema,
    Entity,
    EntityId,
    EntityTypeSchema,
    RelationshipSchema,
    TraversalHit,
)

if TYPE_CHECKING:
    from basanos.config import BasanosConfig

logger = logging.getLogger(__name__)

DEFAULT_TRAVERSAL_DEPTH = 2


class OntologyEngine:
    """
    In-memory graph store for one or more domains.

    Owns the registered DomainSchemas (keyed by name, last writer wins)
    and the Entity instances (keyed by id, upserted). Instances are meant
    to be created per tenant/process and passed to collaborators; there is
    no module-level engine.
    """

    def __init__(self, config: Optional["BasanosConfig"] = None):
        """
        Args:
            config: Optional BasanosConfig supplying the default traversal depth
        """
        self._domains: dict[str, DomainSchema] = {}
        self._entities: dict[EntityId, Entity] = {}
        self._default_depth = (
            config.traversal_depth if config is not None else DEFAULT_TRAVERSAL_DEPTH
        )

    # ── Schemas ──────────────────────────────────────────────────────

    def register_domain(self, schema: DomainSchema) -> None:
        """
        Register a domain schema, replacing any schema with the same name.

        The schema is not validated; call validate_domain_schema() first
        if diagnostics are wanted.
        """
        if schema.name in self._domains:
            logger.debug("Replacing domain %s with version %s", schema.name, schema.version)
        else:
            logger.debug("Registering domain %s v%s", schema.name, schema.version)
        self._domains[schema.name] = schema

    def get_domains(self) -> list[DomainSchema]:
        """All registered domains, in first-registration order."""
        return list(self._domains.values())

    def get_domain(self, name: str) -> Optional[DomainSchema]:
        return self._domains.get(name)

    def get_entity_type(self, domain: str, type_name: str) -> Optional[EntityTypeSchema]:
        """Look up an entity type schema, or None if domain or type is unknown."""
        schema = self._domains.get(domain)
        if schema is None:
            return None
        return schema.get_entity_type(type_name)

    def get_relationships_for(self, domain: str, type_name: str) -> list[RelationshipSchema]:
        """
        Get every relationship visible on an entity type.

        This is the union of the relationships the type declares and the
        inverses of relationships other types declare towards it (those
        carrying an inverse_name). Direct relationships come first in
        declaration order, then inverses in the order their owning types
        were declared.

        Args:
            domain: Domain name
            type_name: Entity type name

        Returns:
            List of RelationshipSchema, empty for an unknown domain or type
        """
        schema = self._domains.get(domain)
        if schema is None:
            return []

        direct: list[RelationshipSchema] = []
        inverse: list[RelationshipSchema] = []
        for entity_type in schema.entity_types:
            for rel in entity_type.relationships:
                if entity_type.name == type_name:
                    direct.append(rel)
                if rel.target_type == type_name and rel.inverse_name:
                    inverse.append(rel.inverted())
        return direct + inverse

    def describe_domain(self, name: str) -> str:
        """
        Render a markdown summary of a domain for agent reasoning.

        Lists each entity type with its properties and its full (direct
        and inverse) relationship view. Output is deterministic for a given
        schema. Unknown domains produce "Unknown domain: <name>".
        """
        schema = self._domains.get(name)
        if schema is None:
            return f"Unknown domain: {name}"

        lines = [
            f"# {schema.label} ({schema.name}) v{schema.version}",
            schema.description,
            "",
            "## Entity Types",
        ]

        for entity_type in schema.entity_types:
            lines.append("")
            lines.append(f"### {entity_type.label} ({entity_type.name})")
            if entity_type.description:
                lines.append(entity_type.description)

            if entity_type.properties:
                lines.append("")
                lines.append("Properties:")
                for prop in entity_type.properties:
                    qualifiers = prop.type.value
                    if prop.required:
                        qualifiers += " [required]"
                    if prop.enum_values:
                        qualifiers += f"; {' | '.join(prop.enum_values)}"
                    lines.append(f"  - {prop.label or prop.name} ({qualifiers}): {prop.description}")

            relationships = self.get_relationships_for(schema.name, entity_type.name)
            if relationships:
                lines.append("")
                lines.append("Relationships:")
                declared = sum(
                    len(et.relationships)
                    for et in schema.entity_types
                    if et.name == entity_type.name
                )
                for index, rel in enumerate(relationships):
                    marker = "" if index < declared else " (inverse)"
                    lines.append(
                        f"  - {rel.name}{marker}: {rel.source_type} → {rel.target_type} "
                        f"({rel.cardinality.value}) - {rel.description}"
                    )

        return "\n".join(lines)

    # ── Entities ─────────────────────────────────────────────────────

    def add_entity(self, entity: Entity) -> None:
        """Store an entity, overwriting any entity with the same id."""
        self._entities[entity.id] = entity

    def get_entity(self, entity_id: EntityId) -> Optional[Entity]:
        return self._entities.get(entity_id)

    def get_all_entities(self) -> list[Entity]:
        return list(self._entities.values())

    def traverse(
        self,
        start_id: EntityId,
        max_depth: Optional[int] = None,
    ) -> dict[EntityId, TraversalHit]:
        """
        Breadth-first walk over entity relationships.

        Follows each visited entity's own relationship lists (inverse
        relationships are not followed; the ingestion side populates both
        directions when it wants bidirectional reachability). Every entity
        is visited once, at the first depth it is reached, so cycles and
        diamonds terminate. Targets that are not stored are skipped.

        Args:
            start_id: Entity to start from (depth 0)
            max_depth: Maximum hop count; defaults to the configured depth.
                0 returns only the start entity.

        Returns:
            Dict of entity id -> TraversalHit in visit order. Empty if the
            start entity is unknown or max_depth is negative.
        """
        if max_depth is None:
            max_depth = self._default_depth

        visited: dict[EntityId, TraversalHit] = {}
        queue: deque[tuple[EntityId, int]] = deque([(start_id, 0)])

        while queue:
            current_id, depth = queue.popleft()
            if current_id in visited or depth > max_depth:
                continue

            entity = self._entities.get(current_id)
            if entity is None:
                continue

            visited[current_id] = TraversalHit(entity=entity, depth=depth)

            if depth < max_depth:
                for related_id in entity.related_ids():
                    if related_id not in visited:
                        queue.append((related_id, depth + 1))

        logger.debug(
            "Traversed from %s to depth %s: %s entities", start_id, max_depth, len(visited)
        )
        return visited

    def get_entity_context(
        self,
        entity_id: EntityId,
        max_depth: Optional[int] = None,
    ) -> Optional[dict]:
        """
        Summarize an entity's neighbourhood for building a constraint context.

        Returns:
            {"entity": Entity, "related": {depth: [Entity, ...]}, "related_ids": [...]}
            with depth >= 1 only, or None if the entity is unknown
        """
        entity = self._entities.get(entity_id)
        if entity is None:
            return None

        related: dict[int, list[Entity]] = {}
        related_ids: list[EntityId] = []
        for hit_id, hit in self.traverse(entity_id, max_depth).items():
            if hit.depth == 0:
                continue
            related.setdefault(hit.depth, []).append(hit.entity)
            related_ids.append(hit_id)

        return {"entity": entity, "related": related, "related_ids": related_ids}
