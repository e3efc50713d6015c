"""Provenance graph domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Tuple

from aibom.models.component import Component

RELATION_FINETUNED = "finetuned"
RELATION_ADAPTER = "adapter"
RELATION_LORA = "lora"
RELATION_QUANTIZED = "quantized"
RELATION_MERGED = "merged"
RELATION_DISTILLED = "distilled"
RELATION_CONVERTED = "converted"
RELATION_PRUNED = "pruned"
RELATION_PARENT = "parent"
RELATION_TRAIN = "train"

RELATIONS = frozenset(
    {
        RELATION_FINETUNED,
        RELATION_ADAPTER,
        RELATION_LORA,
        RELATION_QUANTIZED,
        RELATION_MERGED,
        RELATION_DISTILLED,
        RELATION_CONVERTED,
        RELATION_PRUNED,
        RELATION_PARENT,
        RELATION_TRAIN,
    }
)


@dataclass(frozen=True)
class ModelRecord:
    """Metadata fetched for a single model on the Hub."""

    model_id: str
    tags: Tuple[str, ...] = ()
    license: Optional[str] = None
    card_data: Optional[Mapping[str, Any]] = None
    library_name: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.model_id:
            raise ValueError("Model record identifier cannot be empty")

    @property
    def organization(self) -> Optional[str]:
        if "/" not in self.model_id:
            return None
        return self.model_id.split("/", 1)[0]

    @property
    def name(self) -> str:
        return self.model_id.split("/")[-1]


@dataclass(frozen=True)
class DependencyEdge:
    """Upstream artifact referenced by a model record."""

    target: str
    relation: Optional[str] = None

    @property
    def is_dataset(self) -> bool:
        return self.relation == RELATION_TRAIN


@dataclass(frozen=True)
class DependencyRef:
    """Entry in a component's dependency list."""

    ref: str
    relation: Optional[str] = None


@dataclass(frozen=True)
class ResolutionGraph:
    """Components and dependency lists produced by one resolution run."""

    root_id: str
    components: Sequence[Component]
    dependencies: Mapping[str, Sequence[DependencyRef]] = field(
        default_factory=dict
    )
    failures: Mapping[str, str] = field(default_factory=dict)

    def component(self, bom_ref: str) -> Optional[Component]:
        for component in self.components:
            if component.bom_ref == bom_ref:
                return component
        return None

    def depends_on(self, bom_ref: str) -> list[str]:
        """Return the bom-refs ``bom_ref`` depends on, in discovery order."""
        return [dep.ref for dep in self.dependencies.get(bom_ref, ())]
