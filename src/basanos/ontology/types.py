# -*- encoding: utf-8 -*-
"""
Basanos Ontology Types - the semantic primitives domain schemas are built from.

An ontology in Basanos is a typed, relationship-aware knowledge graph:
a DomainSchema declares entity types, their properties and their outgoing
relationships; Entity records are the live instances.

Dict form (as produced by external loaders):
    {
        "name": "itsm",
        "label": "IT Service Management",
        "version": "0.1.0",
        "description": "...",
        "entityTypes": [
            {
                "name": "incident",
                "label": "Incident",
                "description": "...",
                "properties": [
                    {"name": "priority", "label": "Priority", "type": "enum",
                     "required": true, "enumValues": ["P1", "P2"]}
                ],
                "relationships": [
                    {"name": "affects_service", "label": "Affects Service",
                     "targetType": "business_service",
                     "cardinality": "many_to_one",
                     "inverseName": "has_incidents"}
                ]
            }
        ]
    }
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

# Composite key of the form domain:type:localId
EntityId = str

# Scalar property values; lists of these are allowed too
PropertyValue = Any


class Cardinality(str, Enum):
    """Declared multiplicity of a relationship."""
    ONE_TO_ONE = "one_to_one"
    ONE_TO_MANY = "one_to_many"
    MANY_TO_ONE = "many_to_one"
    MANY_TO_MANY = "many_to_many"


class PropertyType(str, Enum):
    """Supported data types for entity properties."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ENUM = "enum"
    REFERENCE = "reference"


@dataclass
class PropertySchema:
    """
    Schema for one property of an entity type.

    Attributes:
        name: Machine-readable name
        label: Human-readable label
        type: Data type
        required: Whether instances must carry a value
        enum_values: Allowed values for enum properties
        reference_target: Target entity type for reference properties
        description: Meaning of the property, for agent reasoning
    """
    name: str
    label: str = ""
    type: PropertyType = PropertyType.STRING
    required: bool = False
    enum_values: Optional[list[str]] = None
    reference_target: Optional[str] = None
    description: str = ""

    def to_dict(self) -> dict:
        result: dict[str, Any] = {
            "name": self.name,
            "label": self.label,
            "type": self.type.value,
            "required": self.required,
            "description": self.description,
        }
        if self.enum_values is not None:
            result["enumValues"] = list(self.enum_values)
        if self.reference_target:
            result["referenceTarget"] = self.reference_target
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "PropertySchema":
        enum_values = data.get("enumValues")
        return cls(
            name=data.get("name", ""),
            label=data.get("label", ""),
            type=PropertyType(data.get("type", "string")),
            required=bool(data.get("required", False)),
            enum_values=list(enum_values) if enum_values is not None else None,
            reference_target=data.get("referenceTarget"),
            description=(data.get("description") or "").strip(),
        )


@dataclass
class RelationshipSchema:
    """
    A declared relationship from one entity type to another.

    Attributes:
        name: Machine-readable name (e.g., "affects_service")
        label: Human-readable label
        source_type: Entity type that declares the relationship
        target_type: Entity type the relationship points to
        cardinality: Declared multiplicity
        inverse_name: Name under which the target type sees this
            relationship (e.g., "has_incidents"); None if not navigable
            backwards
        description: Meaning of the relationship, for agent reasoning
    """
    name: str
    label: str = ""
    source_type: str = ""
    target_type: str = ""
    cardinality: Cardinality = Cardinality.MANY_TO_ONE
    inverse_name: Optional[str] = None
    description: str = ""

    def inverted(self) -> "RelationshipSchema":
        """
        Return the relationship as seen from the target type.

        Only meaningful when inverse_name is set. The inverse keeps the
        declared cardinality, as authored.
        """
        return RelationshipSchema(
            name=self.inverse_name or "",
            label=f"Inverse: {self.label}",
            source_type=self.target_type,
            target_type=self.source_type,
            cardinality=self.cardinality,
            inverse_name=self.name,
            description=self.description,
        )

    def to_dict(self) -> dict:
        result: dict[str, Any] = {
            "name": self.name,
            "label": self.label,
            "sourceType": self.source_type,
            "targetType": self.target_type,
            "cardinality": self.cardinality.value,
            "description": self.description,
        }
        if self.inverse_name:
            result["inverseName"] = self.inverse_name
        return result

    @classmethod
    def from_dict(cls, data: dict, source_type: str = "") -> "RelationshipSchema":
        """
        Deserialize a relationship.

        Authoring files usually omit sourceType because the relationship is
        nested under its owning type; pass that type as source_type.
        Unknown cardinalities fall back to many_to_one.
        """
        try:
            cardinality = Cardinality(data.get("cardinality", "many_to_one"))
        except ValueError:
            cardinality = Cardinality.MANY_TO_ONE
        return cls(
            name=data.get("name", ""),
            label=data.get("label", ""),
            source_type=data.get("sourceType") or source_type,
            target_type=data.get("targetType", ""),
            cardinality=cardinality,
            inverse_name=data.get("inverseName") or None,
            description=(data.get("description") or "").strip(),
        )


@dataclass
class EntityTypeSchema:
    """
    An entity type in a domain ontology.

    Only outgoing relationships are declared here. Relationships pointing
    at this type from elsewhere are computed by
    OntologyEngine.get_relationships_for().
    """
    name: str
    label: str = ""
    description: str = ""
    properties: list[PropertySchema] = field(default_factory=list)
    relationships: list[RelationshipSchema] = field(default_factory=list)
    domain: str = ""

    def get_property(self, name: str) -> Optional[PropertySchema]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "label": self.label,
            "domain": self.domain,
            "description": self.description,
            "properties": [p.to_dict() for p in self.properties],
            "relationships": [r.to_dict() for r in self.relationships],
        }

    @classmethod
    def from_dict(cls, data: dict, domain: str = "") -> "EntityTypeSchema":
        name = data.get("name", "")
        return cls(
            name=name,
            label=data.get("label", ""),
            description=(data.get("description") or "").strip(),
            properties=[
                PropertySchema.from_dict(p)
                for p in data.get("properties") or []
                if isinstance(p, dict)
            ],
            relationships=[
                RelationshipSchema.from_dict(r, source_type=name)
                for r in data.get("relationships") or []
                if isinstance(r, dict)
            ],
            domain=data.get("domain") or domain,
        )


@dataclass
class DomainSchema:
    """
    A complete ontology definition for one domain.

    Attributes:
        name: Domain identifier, unique across registered domains (e.g., "itsm")
        label: Human-readable label
        version: Schema version string
        description: Meaning of the domain, for agent reasoning
        entity_types: Entity type definitions, in declaration order
    """
    name: str
    label: str = ""
    version: str = "0.0.0"
    description: str = ""
    entity_types: list[EntityTypeSchema] = field(default_factory=list)

    def get_entity_type(self, name: str) -> Optional[EntityTypeSchema]:
        for entity_type in self.entity_types:
            if entity_type.name == name:
                return entity_type
        return None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "label": self.label,
            "version": self.version,
            "description": self.description,
            "entityTypes": [et.to_dict() for et in self.entity_types],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DomainSchema":
        """
        Deserialize a domain from its authoring dict.

        Structure is not validated here; run validate_domain_schema() on
        the result before registering it.
        """
        name = data.get("name", "")
        return cls(
            name=name,
            label=data.get("label", ""),
            version=str(data.get("version", "0.0.0")),
            description=(data.get("description") or "").strip(),
            entity_types=[
                EntityTypeSchema.from_dict(et, domain=name)
                for et in data.get("entityTypes") or []
                if isinstance(et, dict)
            ],
        )


@dataclass
class Entity:
    """
    A concrete entity instance.

    Attributes:
        id: Globally unique key, "domain:type:localId"
        type: Entity type name
        domain: Domain name
        properties: Property name -> value
        relationships: Relationship name -> ordered target entity ids
    """
    id: EntityId
    type: str
    domain: str
    properties: dict[str, PropertyValue] = field(default_factory=dict)
    relationships: dict[str, list[EntityId]] = field(default_factory=dict)

    @staticmethod
    def make_id(domain: str, type_name: str, local_id: str) -> EntityId:
        """Build the composite id for an entity."""
        return f"{domain}:{type_name}:{local_id}"

    @property
    def local_id(self) -> str:
        """The id segment after domain and type (the whole id if not composite)."""
        parts = self.id.split(":", 2)
        return parts[2] if len(parts) == 3 else self.id

    def related_ids(self) -> list[EntityId]:
        """All relationship targets, in relationship then list order."""
        ids: list[EntityId] = []
        for targets in self.relationships.values():
            ids.extend(targets)
        return ids

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "domain": self.domain,
            "properties": dict(self.properties),
            "relationships": {k: list(v) for k, v in self.relationships.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Entity":
        return cls(
            id=data.get("id", ""),
            type=data.get("type", ""),
            domain=data.get("domain", ""),
            properties=dict(data.get("properties") or {}),
            relationships={
                k: list(v) for k, v in (data.get("relationships") or {}).items()
            },
        )


@dataclass
class TraversalHit:
    """An entity reached during traversal and the hop count at which it was first reached."""
    entity: Entity
    depth: int
