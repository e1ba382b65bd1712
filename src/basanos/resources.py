# -*- encoding: utf-8 -*-
"""
Basanos Resources - readable descriptions of domains and constraints.

Maps basanos:// URIs onto engine queries so a transport layer (an MCP
server, a dashboard) can expose them without knowing engine internals:

    basanos://ontology/<domain>           markdown domain description
    basanos://ontology/<domain>/<type>    JSON entity type schema
    basanos://constraints/<domain>        markdown constraint listing

Nothing here performs I/O.
"""

import json
from dataclasses import dataclass
from typing import Optional

from basanos.constraints.engine import ConstraintEngine
from basanos.ontology.engine import OntologyEngine

URI_SCHEME = "basanos://"
MARKDOWN = "text/markdown"
JSON = "application/json"


@dataclass(frozen=True)
class ResourceDefinition:
    """A resource a client can read."""
    uri: str
    name: str
    description: str
    mime_type: str

    def to_dict(self) -> dict:
        return {
            "uri": self.uri,
            "name": self.name,
            "description": self.description,
            "mimeType": self.mime_type,
        }


def list_resources(
    ontology: OntologyEngine,
    constraints: ConstraintEngine,
) -> list[ResourceDefinition]:
    """List the resources of every registered domain, in domain order."""
    resources: list[ResourceDefinition] = []
    for domain in ontology.get_domains():
        resources.append(ResourceDefinition(
            uri=f"{URI_SCHEME}ontology/{domain.name}",
            name=f"{domain.label} Ontology",
            description=(
                f"Semantic ontology for the {domain.label} domain: entity types, "
                f"properties, relationships and their meanings."
            ),
            mime_type=MARKDOWN,
        ))
        resources.append(ResourceDefinition(
            uri=f"{URI_SCHEME}constraints/{domain.name}",
            name=f"{domain.label} Constraints",
            description=(
                f"Business constraints for the {domain.label} domain: conditions "
                f"agents must evaluate before taking actions."
            ),
            mime_type=MARKDOWN,
        ))
        for entity_type in domain.entity_types:
            resources.append(ResourceDefinition(
                uri=f"{URI_SCHEME}ontology/{domain.name}/{entity_type.name}",
                name=f"{entity_type.label} Schema",
                description=entity_type.description,
                mime_type=JSON,
            ))
    return resources


def read_resource(
    uri: str,
    ontology: OntologyEngine,
    constraints: ConstraintEngine,
) -> Optional[tuple[str, str]]:
    """
    Read a resource by URI.

    Returns:
        (content, mime_type), or None if the URI is not recognised or
        names an unknown entity type. Unknown domains yield the engines'
        sentinel text rather than None.
    """
    if not uri.startswith(URI_SCHEME):
        return None
    parts = uri[len(URI_SCHEME):].split("/")

    if parts[0] == "ontology" and len(parts) == 2:
        return ontology.describe_domain(parts[1]), MARKDOWN

    if parts[0] == "ontology" and len(parts) == 3:
        entity_type = ontology.get_entity_type(parts[1], parts[2])
        if entity_type is None:
            return None
        return json.dumps(entity_type.to_dict(), indent=2), JSON

    if parts[0] == "constraints" and len(parts) == 2:
        return constraints.describe_constraints(parts[1]), MARKDOWN

    return None
