"""
AIBOM Generator Repository
Introductory remarks: This module is part of the AIBOM Generator codebase.

Unit tests for relation classification.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

import pytest

from aibom.models.provenance import ModelRecord
from aibom.services import relation_classifier
from aibom.services.relation_classifier import classify_relation


def _record(
    model_id: str = "org/model",
    *,
    tags: Sequence[str] = (),
    card: Optional[Dict[str, Any]] = None,
    library_name: Optional[str] = None,
) -> ModelRecord:
    return ModelRecord(
        model_id=model_id,
        tags=tuple(tags),
        card_data=card,
        library_name=library_name,
    )


@pytest.mark.parametrize(
    ("library", "expected"),
    [
        ("peft", "lora"),
        ("adapter-transformers", "adapter"),
        ("adapters", "adapter"),
    ],
)
def test_library_hint_maps_to_relation(library: str, expected: str) -> None:
    record = _record(card={"library_name": library})
    assert classify_relation(record, record.card_data) == expected


def test_library_hint_falls_back_to_record_field() -> None:
    record = _record(card={}, library_name="peft")
    assert classify_relation(record, {}) == "lora"


def test_library_hint_beats_quantized_by_and_tags() -> None:
    card = {"library_name": "peft", "quantized_by": "someone"}
    record = _record("org/model-gguf", tags=["base_model:merge:x/y"], card=card)
    assert classify_relation(record, card) == "lora"


def test_quantized_by_beats_tag_scan() -> None:
    card = {"quantized_by": "TheBloke"}
    record = _record(tags=["lora"], card=card)
    assert classify_relation(record, card) == "quantized"


def test_empty_quantized_by_is_ignored() -> None:
    card = {"quantized_by": "  "}
    record = _record(tags=["chat"], card=card)
    assert classify_relation(record, card) == "finetuned"


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("base_model:finetune:org/base", "finetuned"),
        ("base_model:adapter:org/base", "adapter"),
        ("base_model:qlora:org/base", "lora"),
        ("base_model:quantization:org/base", "quantized"),
        ("base_model:merge:org/base", "merged"),
        ("base_model:distillation:org/base", "distilled"),
        ("Base_Model:Quantized:org/base", "quantized"),
    ],
)
def test_structured_base_model_tags(tag: str, expected: str) -> None:
    record = _record(tags=["transformers", tag])
    assert classify_relation(record, {}) == expected


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("lora", "lora"),
        ("qlora", "lora"),
        ("adapter", "adapter"),
        ("instruction-tuning", "finetuned"),
        ("chat", "finetuned"),
        ("distillation", "distilled"),
        ("onnx", "converted"),
        ("tensorrt", "converted"),
        ("pruning", "pruned"),
    ],
)
def test_bare_convention_tags(tag: str, expected: str) -> None:
    record = _record(tags=[tag])
    assert classify_relation(record, {}) == expected


def test_first_matching_tag_wins() -> None:
    record = _record(tags=["pytorch", "onnx", "base_model:finetune:org/base"])
    assert classify_relation(record, {}) == "converted"


def test_unknown_structured_kind_keeps_scanning() -> None:
    record = _record(tags=["base_model:org/base", "base_model:other:x", "lora"])
    assert classify_relation(record, {}) == "lora"


def test_multiple_base_models_detected_as_merge() -> None:
    card = {"base_model": ["org/a", "org/b"]}
    record = _record(card=card)
    assert classify_relation(record, card) == "merged"


def test_merge_substring_in_tag_detected() -> None:
    record = _record(tags=["MergeKit"])
    assert classify_relation(record, {}) == "merged"


def test_tag_scan_precedes_name_patterns() -> None:
    record = _record("org/super-merge-7b", tags=["lora"])
    assert classify_relation(record, {}) == "lora"


@pytest.mark.parametrize(
    ("model_id", "expected"),
    [
        ("org/llama-7b-GGUF", "quantized"),
        ("org/model-gptq-lora", "quantized"),
        ("org/model-qlora", "lora"),
        ("org/bert-adapter", "adapter"),
        ("org/slerp-merge", "merged"),
        ("org/bert-finetuned-squad", "finetuned"),
        ("org/model-ft", "finetuned"),
        ("org/mistral-instruct", "finetuned"),
        ("org/distilbert-base", "distilled"),
        ("org/resnet-onnx", "converted"),
        ("org/pruned-bert", "pruned"),
    ],
)
def test_name_pattern_fallback(model_id: str, expected: str) -> None:
    assert classify_relation(_record(model_id), {}) == expected


@pytest.mark.parametrize(
    ("model_id", "expected"),
    [
        ("lora-lab/base-7b", "lora"),
        ("TheBloke-GGUF/llama", "quantized"),
        ("microsoft/phi-2", "finetuned"),
    ],
)
def test_name_patterns_cover_full_identifier(
    model_id: str, expected: str
) -> None:
    card = {"base_model": "x/y"}
    assert classify_relation(_record(model_id, card=card), card) == expected


def test_no_signal_returns_none() -> None:
    record = _record("org/base", tags=["transformers", "pytorch"])
    assert classify_relation(record, {"license": "mit"}) is None


def test_classification_is_deterministic() -> None:
    record = _record("org/model-int8", tags=["text-generation"])
    results = {classify_relation(record, {}) for _ in range(5)}
    assert results == {"quantized"}


def test_stages_are_ordered_by_priority() -> None:
    assert relation_classifier.STAGES == (
        relation_classifier.relation_from_library,
        relation_classifier.relation_from_quantized_by,
        relation_classifier.relation_from_tags,
        relation_classifier.relation_from_merge_signals,
        relation_classifier.relation_from_name,
    )


def test_card_data_defaults_to_record_card() -> None:
    record = _record(card={"quantized_by": "someone"})
    assert classify_relation(record) == "quantized"
