"""Serialize a resolution graph into a CycloneDX AIBOM document."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

from aibom import config
from aibom.models.component import COMPONENT_TYPE_APPLICATION
from aibom.models.provenance import ResolutionGraph
from aibom.services.component_builder import (DEFAULT_TASK, model_bom_ref,
                                              split_identifier)


@dataclass(frozen=True)
class DocumentIdentity:
    """Document-level identity attached to every generated AIBOM."""

    generator_name: str
    generator_version: str
    serial_number: str
    timestamp: str

    @classmethod
    def new(cls) -> "DocumentIdentity":
        return cls(
            generator_name=config.GENERATOR_NAME,
            generator_version=config.GENERATOR_VERSION,
            serial_number=f"urn:uuid:{uuid.uuid4()}",
            timestamp=datetime.now(timezone.utc).isoformat(),
        )


def application_bom_ref(model_id: str) -> str:
    encoded = model_id.replace("/", "%2F")
    return f"pkg:generic/{encoded}@{config.COMPONENT_VERSION}"


def assemble_document(
    graph: ResolutionGraph, identity: DocumentIdentity
) -> Dict[str, Any]:
    """Return the CycloneDX JSON document for ``graph``."""

    org, name = split_identifier(graph.root_id)
    app_ref = application_bom_ref(graph.root_id)

    return {
        "bomFormat": config.BOM_FORMAT,
        "specVersion": config.SPEC_VERSION,
        "serialNumber": identity.serial_number,
        "version": 1,
        "metadata": {
            "timestamp": identity.timestamp,
            "tools": {
                "components": [
                    {
                        "bom-ref": (
                            f"pkg:generic/{identity.generator_name}"
                            f"@{identity.generator_version}"
                        ),
                        "manufacturer": {
                            "name": config.GENERATOR_MANUFACTURER
                        },
                        "name": identity.generator_name,
                        "type": COMPONENT_TYPE_APPLICATION,
                        "version": identity.generator_version,
                    }
                ]
            },
            "component": {
                "type": COMPONENT_TYPE_APPLICATION,
                "bom-ref": app_ref,
                "name": name,
                "version": config.COMPONENT_VERSION,
                "copyright": config.NO_ASSERTION,
                "purl": app_ref,
            },
            "properties": [
                {"name": "primaryPurpose", "value": _primary_purpose(graph)},
                {"name": "suppliedBy", "value": org},
            ],
        },
        "components": [component.to_dict() for component in graph.components],
        "dependencies": _dependencies(graph.dependencies),
        "externalReferences": [
            {
                "type": "distribution",
                "url": f"{config.HF_BASE_URL}/{graph.root_id}",
            }
        ],
    }


def render_json(document: Mapping[str, Any]) -> str:
    return json.dumps(document, indent=2)


def _dependencies(dependencies: Mapping[str, Any]) -> List[Dict[str, Any]]:
    return [
        {"ref": ref, "dependsOn": [dep.ref for dep in deps]}
        for ref, deps in dependencies.items()
    ]


def _primary_purpose(graph: ResolutionGraph) -> str:
    root = graph.component(model_bom_ref(graph.root_id))
    if root is not None and root.model_card is not None:
        return root.model_card.task
    return DEFAULT_TASK
