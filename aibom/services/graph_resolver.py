"""
AIBOM Generator Repository
Introductory remarks: This module is part of the AIBOM Generator codebase.

Resolve the provenance graph of a Hugging Face model.

The resolver walks ``base_model``/``parent_model`` references depth-first,
emits one component per model and dataset, and records the dependency list
of every node that declares upstream artifacts. A model enters the visited
set before its metadata is fetched, so cyclic or diamond-shaped ancestry is
processed once per node. Only a failure to fetch the root is fatal; deeper
failures are logged and the edge is still recorded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

from aibom.clients.hf_client import HFClient, normalize_repo_id
from aibom.errors import AIBOMError, MetadataFetchError, ResolutionError
from aibom.models.component import Component
from aibom.models.provenance import (DependencyRef, ModelRecord,
                                     ResolutionGraph)
from aibom.services.component_builder import (build_dataset_component,
                                              build_model_component,
                                              license_text_for, model_bom_ref)
from aibom.services.dependency_extractor import (extract_dependencies,
                                                 partition_edges)
from aibom.services.license_normalizer import LicenseNormalizer

_LOGGER = logging.getLogger(__name__)


class MetadataSource(Protocol):
    def fetch(self, model_id: str) -> ModelRecord: ...


@dataclass
class ResolutionContext:
    """Mutable state owned by a single resolution run."""

    visited: set[str] = field(default_factory=set)
    components: List[Component] = field(default_factory=list)
    emitted_refs: set[str] = field(default_factory=set)
    dependencies: Dict[str, List[DependencyRef]] = field(default_factory=dict)
    refs_by_id: Dict[str, str] = field(default_factory=dict)
    failures: Dict[str, str] = field(default_factory=dict)

    def emit(self, component: Component) -> bool:
        """Append ``component`` unless its bom-ref was already emitted."""
        if component.bom_ref in self.emitted_refs:
            return False
        self.emitted_refs.add(component.bom_ref)
        self.components.append(component)
        return True

    def ref_for(self, model_id: str) -> str:
        return self.refs_by_id.get(model_id) or model_bom_ref(model_id)

    def freeze(self, root_id: str) -> ResolutionGraph:
        return ResolutionGraph(
            root_id=root_id,
            components=tuple(self.components),
            dependencies={
                ref: tuple(deps) for ref, deps in self.dependencies.items()
            },
            failures=dict(self.failures),
        )


@dataclass(frozen=True)
class NodeOutcome:
    """Result of visiting one model node."""

    model_id: str
    error: Optional[str] = None
    skipped: bool = False
    cause: Optional[AIBOMError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class GraphResolver:
    """Depth-first, cycle-safe traversal of model ancestry."""

    def __init__(
        self,
        source: MetadataSource,
        *,
        license_normalizer: Optional[LicenseNormalizer] = None,
    ) -> None:
        self._source = source
        self._licenses = license_normalizer or LicenseNormalizer()

    def resolve(
        self,
        root_id: str,
        context: Optional[ResolutionContext] = None,
    ) -> ResolutionGraph:
        """Resolve ``root_id`` and everything it was derived from.

        Raises ``MetadataFetchError`` when the root's metadata cannot be
        fetched; all other failures leave a partial graph.
        """

        root_id = (root_id or "").strip()
        if not root_id:
            raise ValueError("Model identifier cannot be empty.")

        run = context if context is not None else ResolutionContext()
        outcome = self._visit(root_id, None, run)
        if not outcome.ok:
            if isinstance(outcome.cause, MetadataFetchError):
                raise outcome.cause
            raise ResolutionError(
                f"Failed to resolve '{root_id}': {outcome.error}"
            )

        _LOGGER.info(
            "Resolved %s: %d component(s), %d dependency entries, "
            "%d failure(s)",
            root_id,
            len(run.components),
            len(run.dependencies),
            len(run.failures),
        )
        return run.freeze(root_id)

    def _visit(
        self,
        model_id: str,
        relation: Optional[str],
        context: ResolutionContext,
    ) -> NodeOutcome:
        if model_id in context.visited:
            return NodeOutcome(model_id, skipped=True)
        context.visited.add(model_id)

        _LOGGER.info("Processing model %s", model_id)
        try:
            record = self._source.fetch(model_id)
        except AIBOMError as exc:
            return NodeOutcome(model_id, error=str(exc), cause=exc)
        except Exception as exc:  # noqa: BLE001
            _LOGGER.debug(
                "Unexpected error fetching %s", model_id, exc_info=True
            )
            return NodeOutcome(
                model_id, error=f"{type(exc).__name__}: {exc}"
            )

        bom_ref = model_bom_ref(record.model_id)
        context.refs_by_id[model_id] = bom_ref

        dataset_edges, model_edges = partition_edges(
            extract_dependencies(record)
        )
        dependencies: List[DependencyRef] = []

        for edge in dataset_edges:
            dataset = build_dataset_component(edge.target)
            context.emit(dataset)
            dependencies.append(DependencyRef(dataset.bom_ref, edge.relation))

        for edge in model_edges:
            if edge.target not in context.visited:
                outcome = self._visit(edge.target, edge.relation, context)
                if not outcome.ok:
                    _LOGGER.warning(
                        "Skipping metadata for dependency %s of %s: %s",
                        edge.target,
                        model_id,
                        outcome.error,
                    )
                    context.failures[edge.target] = outcome.error or ""
            dependencies.append(
                DependencyRef(context.ref_for(edge.target), edge.relation)
            )

        license_info = self._licenses.normalize(
            license_text_for(record), record
        )
        component = build_model_component(
            record, relation=relation, license_info=license_info
        )
        if not context.emit(component):
            _LOGGER.debug("Component %s already emitted", component.bom_ref)

        if dependencies:
            context.dependencies.setdefault(component.bom_ref, dependencies)
        return NodeOutcome(model_id)


def generate(
    model_id: str,
    *,
    client: Optional[MetadataSource] = None,
    license_normalizer: Optional[LicenseNormalizer] = None,
) -> ResolutionGraph:
    """Resolve the provenance graph for ``model_id`` with a fresh run."""

    normalized = normalize_repo_id(model_id)
    source = client if client is not None else HFClient()
    if license_normalizer is None:
        probe = source if hasattr(source, "file_exists") else None
        license_normalizer = LicenseNormalizer(probe=probe)  # type: ignore[arg-type]
    resolver = GraphResolver(source, license_normalizer=license_normalizer)
    return resolver.resolve(normalized)
