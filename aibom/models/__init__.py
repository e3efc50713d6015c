"""Domain model package exports."""

from .component import (COMPONENT_TYPE_APPLICATION, COMPONENT_TYPE_DATA,
                        COMPONENT_TYPE_MODEL, Component, ExternalReference,
                        LicenseInfo, ModelCard, Organization, Property)
from .provenance import (RELATIONS, DependencyEdge, DependencyRef,
                         ModelRecord, ResolutionGraph)

__all__ = [
    "COMPONENT_TYPE_APPLICATION",
    "COMPONENT_TYPE_DATA",
    "COMPONENT_TYPE_MODEL",
    "Component",
    "DependencyEdge",
    "DependencyRef",
    "ExternalReference",
    "LicenseInfo",
    "ModelCard",
    "ModelRecord",
    "Organization",
    "Property",
    "RELATIONS",
    "ResolutionGraph",
]
