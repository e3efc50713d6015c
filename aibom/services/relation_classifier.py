"""
AIBOM Generator Repository
Introductory remarks: This module is part of the AIBOM Generator codebase.

Infer how a model relates to its base model.

Stages run in a fixed priority order and the first one that returns a
label wins: library hint, ``quantized_by``, tag scan, merge detection and
finally name patterns.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Sequence, Tuple

from aibom.models.provenance import (RELATION_ADAPTER, RELATION_CONVERTED,
                                     RELATION_DISTILLED, RELATION_FINETUNED,
                                     RELATION_LORA, RELATION_MERGED,
                                     RELATION_PRUNED, RELATION_QUANTIZED,
                                     ModelRecord)

CardData = Mapping[str, Any]
Stage = Callable[[ModelRecord, CardData], Optional[str]]

_LIBRARY_RELATIONS: Mapping[str, str] = {
    "adapter-transformers": RELATION_ADAPTER,
    "adapters": RELATION_ADAPTER,
    "peft": RELATION_LORA,
}

# Kind segment of ``base_model:<kind>:<target>`` tags.
KIND_RELATIONS: Mapping[str, str] = {
    "finetune": RELATION_FINETUNED,
    "finetuned": RELATION_FINETUNED,
    "adapter": RELATION_ADAPTER,
    "lora": RELATION_LORA,
    "qlora": RELATION_LORA,
    "quantized": RELATION_QUANTIZED,
    "quantization": RELATION_QUANTIZED,
    "merged": RELATION_MERGED,
    "merge": RELATION_MERGED,
    "distilled": RELATION_DISTILLED,
    "distillation": RELATION_DISTILLED,
}

_BARE_TAG_RELATIONS: Mapping[str, str] = {
    "lora": RELATION_LORA,
    "qlora": RELATION_LORA,
    "adapter": RELATION_ADAPTER,
    "instruction-tuning": RELATION_FINETUNED,
    "chat": RELATION_FINETUNED,
    "distillation": RELATION_DISTILLED,
    "onnx": RELATION_CONVERTED,
    "tensorrt": RELATION_CONVERTED,
    "pruning": RELATION_PRUNED,
}

# Checked in order against the full lower-cased ``org/name`` identifier;
# the first pattern group found wins.
_NAME_PATTERNS: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("gguf", "gptq", "awq", "int4", "int8"), RELATION_QUANTIZED),
    (("lora", "qlora"), RELATION_LORA),
    (("adapter",), RELATION_ADAPTER),
    (("merge",), RELATION_MERGED),
    (("finetune", "ft"), RELATION_FINETUNED),
    (("instruct", "chat"), RELATION_FINETUNED),
    (("distil",), RELATION_DISTILLED),
    (("onnx",), RELATION_CONVERTED),
    (("prune",), RELATION_PRUNED),
)


def classify_relation(
    record: ModelRecord, card_data: Optional[CardData] = None
) -> Optional[str]:
    """Return the relation label for ``record``'s base-model edge, if any."""

    card = card_data if card_data is not None else (record.card_data or {})
    for stage in STAGES:
        relation = stage(record, card)
        if relation is not None:
            return relation
    return None


def relation_from_library(record: ModelRecord, card: CardData) -> Optional[str]:
    for candidate in (card.get("library_name"), record.library_name):
        if isinstance(candidate, str):
            relation = _LIBRARY_RELATIONS.get(candidate.strip().lower())
            if relation is not None:
                return relation
    return None


def relation_from_quantized_by(
    record: ModelRecord, card: CardData
) -> Optional[str]:
    value = card.get("quantized_by")
    if isinstance(value, str):
        return RELATION_QUANTIZED if value.strip() else None
    if value:
        return RELATION_QUANTIZED
    return None


def relation_from_tags(record: ModelRecord, card: CardData) -> Optional[str]:
    for tag in record.tags:
        lowered = tag.strip().lower()
        if lowered.startswith("base_model:"):
            parts = lowered.split(":")
            if len(parts) >= 3:
                relation = KIND_RELATIONS.get(parts[1])
                if relation is not None:
                    return relation
            continue
        relation = _BARE_TAG_RELATIONS.get(lowered)
        if relation is not None:
            return relation
    return None


def relation_from_merge_signals(
    record: ModelRecord, card: CardData
) -> Optional[str]:
    base_model = card.get("base_model")
    if isinstance(base_model, (list, tuple)) and len(base_model) > 1:
        return RELATION_MERGED
    if any("merge" in tag.lower() for tag in record.tags):
        return RELATION_MERGED
    return None


def relation_from_name(record: ModelRecord, card: CardData) -> Optional[str]:
    identifier = record.model_id.lower()
    for markers, relation in _NAME_PATTERNS:
        if any(marker in identifier for marker in markers):
            return relation
    return None


STAGES: Sequence[Stage] = (
    relation_from_library,
    relation_from_quantized_by,
    relation_from_tags,
    relation_from_merge_signals,
    relation_from_name,
)
