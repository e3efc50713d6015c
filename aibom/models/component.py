"""
AIBOM Generator Repository
Introductory remarks: This module is part of the AIBOM Generator codebase.

Bill-of-materials component models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

COMPONENT_TYPE_MODEL = "machine-learning-model"
COMPONENT_TYPE_DATA = "data"
COMPONENT_TYPE_APPLICATION = "application"


@dataclass(frozen=True)
class LicenseInfo:
    """Normalized licence data for a component.

    Either ``id`` + SPDX ``url`` (canonical match) or ``name`` + probed
    ``url``/``text``.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    url: Optional[str] = None
    text: Optional[str] = None

    def __post_init__(self) -> None:
        if self.id is None and self.name is None:
            raise ValueError("LicenseInfo requires an id or a name")

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.id:
            payload["id"] = self.id
        if self.name:
            payload["name"] = self.name
        if self.url:
            payload["url"] = self.url
        if self.text:
            payload["text"] = {"content": self.text}
        return {"license": payload}


@dataclass(frozen=True)
class Property:
    name: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class Organization:
    name: str
    urls: Sequence[str] = ()

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name}
        if self.urls:
            payload["url"] = list(self.urls)
        return payload


@dataclass(frozen=True)
class ExternalReference:
    ref_type: str
    url: str
    comment: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        payload = {"type": self.ref_type, "url": self.url}
        if self.comment:
            payload["comment"] = self.comment
        return payload


@dataclass(frozen=True)
class ModelCard:
    """Classification-derived model parameters."""

    model_architecture: str
    task: str
    architecture_family: str = "transformer"
    inputs: Sequence[str] = ("text",)
    outputs: Sequence[str] = ("generated-text",)
    properties: Sequence[Property] = ()

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "modelParameters": {
                "architectureFamily": self.architecture_family,
                "modelArchitecture": self.model_architecture,
                "task": self.task,
                "inputs": [{"format": fmt} for fmt in self.inputs],
                "outputs": [{"format": fmt} for fmt in self.outputs],
            },
        }
        if self.properties:
            payload["properties"] = [prop.to_dict() for prop in self.properties]
        return payload


@dataclass(frozen=True)
class Component:
    """Single model or dataset entry of the bill of materials."""

    component_type: str
    bom_ref: str
    name: str
    version: Optional[str] = None
    description: Optional[str] = None
    group: Optional[str] = None
    supplier: Optional[Organization] = None
    authors: Sequence[str] = ()
    copyright: Optional[str] = None
    license: Optional[LicenseInfo] = None
    external_references: Sequence[ExternalReference] = ()
    purl: Optional[str] = None
    model_card: Optional[ModelCard] = None
    properties: Sequence[Property] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.bom_ref:
            raise ValueError("Component bom-ref cannot be empty")

    def property_value(self, name: str) -> Optional[str]:
        for prop in self.properties:
            if prop.name == name:
                return prop.value
        if self.model_card is not None:
            for prop in self.model_card.properties:
                if prop.name == name:
                    return prop.value
        return None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": self.component_type,
            "bom-ref": self.bom_ref,
            "name": self.name,
        }
        if self.version:
            payload["version"] = self.version
        if self.description:
            payload["description"] = self.description
        if self.group:
            payload["group"] = self.group
            payload["publisher"] = self.group
        if self.supplier is not None:
            payload["supplier"] = self.supplier.to_dict()
            payload["manufacturer"] = self.supplier.to_dict()
        if self.authors:
            payload["authors"] = [{"name": author} for author in self.authors]
        if self.copyright:
            payload["copyright"] = self.copyright
        if self.license is not None:
            payload["licenses"] = [self.license.to_dict()]
        if self.external_references:
            payload["externalReferences"] = [
                ref.to_dict() for ref in self.external_references
            ]
        if self.purl:
            payload["purl"] = self.purl
        if self.properties:
            payload["properties"] = [prop.to_dict() for prop in self.properties]
        if self.model_card is not None:
            payload["modelCard"] = self.model_card.to_dict()
        return payload
