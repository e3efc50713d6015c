"""Extract declared upstream models and datasets from a model record."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from aibom.models.provenance import (RELATION_PARENT, RELATION_TRAIN,
                                     DependencyEdge, ModelRecord)
from aibom.services.relation_classifier import (KIND_RELATIONS,
                                                classify_relation)

_LOGGER = logging.getLogger(__name__)

_DATASET_FIELDS = ("datasets", "train_dataset")


def extract_dependencies(record: ModelRecord) -> List[DependencyEdge]:
    """Return the edges declared by ``record``'s card data.

    Edges are sorted by target, de-duplicated by target (the first edge
    after the stable sort wins) and stripped of self-references. An empty
    list means the card declares no provenance.
    """

    card = record.card_data
    if not card:
        _LOGGER.info("No card data for %s; no dependencies", record.model_id)
        return []

    edges: List[DependencyEdge] = []

    base_models = _as_identifiers(card.get("base_model"))
    if base_models:
        relation = _explicit_relation(card.get("base_model_relation"))
        if relation is None:
            relation = classify_relation(record, card)
        for target in base_models:
            _LOGGER.debug(
                "Found base_model dependency %s (relation: %s)",
                target,
                relation,
            )
            edges.append(DependencyEdge(target=target, relation=relation))

    for target in _as_identifiers(card.get("parent_model")):
        _LOGGER.debug("Found parent_model dependency %s", target)
        edges.append(DependencyEdge(target=target, relation=RELATION_PARENT))

    for field_name in _DATASET_FIELDS:
        for target in _as_identifiers(card.get(field_name)):
            _LOGGER.debug("Found training dataset dependency %s", target)
            edges.append(DependencyEdge(target=target, relation=RELATION_TRAIN))

    edges.sort(key=lambda edge: edge.target)

    seen: set[str] = set()
    result: List[DependencyEdge] = []
    for edge in edges:
        if edge.target in seen:
            continue
        seen.add(edge.target)
        if edge.target == record.model_id:
            _LOGGER.debug("Dropping self-reference on %s", record.model_id)
            continue
        result.append(edge)

    if not result:
        _LOGGER.info(
            "No explicit dependencies found for model %s. Consider adding "
            "base_model, parent_model or datasets to the model card.",
            record.model_id,
        )
    return result


def partition_edges(
    edges: List[DependencyEdge],
) -> tuple[List[DependencyEdge], List[DependencyEdge]]:
    """Split edges into (dataset edges, model edges), keeping order."""

    datasets = [edge for edge in edges if edge.is_dataset]
    models = [edge for edge in edges if not edge.is_dataset]
    return datasets, models


def _as_identifiers(value: Any) -> List[str]:
    if isinstance(value, str):
        candidates = [value]
    elif isinstance(value, (list, tuple)):
        candidates = [item for item in value if isinstance(item, str)]
    else:
        return []
    return [item.strip() for item in candidates if item.strip()]


def _explicit_relation(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return None
    lowered = value.strip().lower()
    return KIND_RELATIONS.get(lowered, lowered)

