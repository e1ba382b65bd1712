# -*- encoding: utf-8 -*-
"""
Basanos Schema Validation - checks a DomainSchema for internal consistency.

Validation is a separate, explicit step that callers run before
OntologyEngine.register_domain(). It returns human-readable error strings
instead of raising, so a partially invalid domain can still be registered
and inspected for diagnostics.

Checks:
- Required fields present on every schema node
- No duplicate entity type names within the domain
- Relationship targets reference entity types of the same domain
- Reference properties target entity types of the same domain
- Enum properties declare their allowed values
"""

from collections import Counter
from typing import Iterable

from basanos.ontology.types import DomainSchema, EntityTypeSchema, PropertyType


def validate_domain_schema(schema: DomainSchema) -> list[str]:
    """
    Validate a domain schema.

    Args:
        schema: The domain to check

    Returns:
        List of error strings, empty when the schema is consistent
    """
    errors: list[str] = []

    if not schema.name:
        errors.append("Domain is missing required field 'name'")
    domain_name = schema.name or "<unnamed>"

    type_names = [et.name for et in schema.entity_types]
    known_types = set(type_names)

    for name, count in Counter(type_names).items():
        if name and count > 1:
            errors.append(
                f'Domain "{domain_name}" has duplicate entity type "{name}" '
                f"({count} definitions)"
            )

    for index, entity_type in enumerate(schema.entity_types):
        if not entity_type.name:
            errors.append(
                f'Domain "{domain_name}" entity type #{index} is missing '
                f"required field 'name'"
            )
            continue
        errors.extend(_validate_entity_type(entity_type, known_types))

    return errors


def _validate_entity_type(
    entity_type: EntityTypeSchema,
    known_types: set[str],
) -> list[str]:
    errors: list[str] = []
    owner = entity_type.name

    for index, rel in enumerate(entity_type.relationships):
        if not rel.name:
            errors.append(
                f'Entity "{owner}" relationship #{index} is missing required field "name"'
            )
        if not rel.target_type:
            errors.append(
                f'Entity "{owner}" relationship "{rel.name}" is missing required '
                f'field "targetType"'
            )
        elif rel.target_type not in known_types:
            errors.append(
                f'Entity "{owner}" has relationship "{rel.name}" targeting '
                f'unknown type "{rel.target_type}"'
            )

    for index, prop in enumerate(entity_type.properties):
        if not prop.name:
            errors.append(
                f'Entity "{owner}" property #{index} is missing required field "name"'
            )
            continue
        if prop.type == PropertyType.REFERENCE and prop.reference_target:
            if prop.reference_target not in known_types:
                errors.append(
                    f'Entity "{owner}" property "{prop.name}" references '
                    f'unknown type "{prop.reference_target}"'
                )
        if prop.type == PropertyType.ENUM and not prop.enum_values:
            errors.append(
                f'Entity "{owner}" property "{prop.name}" is enum but has no enumValues'
            )

    return errors


def get_all_entity_types(schemas: Iterable[DomainSchema]) -> list[EntityTypeSchema]:
    """Flatten the entity types of several domains, in domain order."""
    return [et for schema in schemas for et in schema.entity_types]
