"""Build bill-of-materials components for models and datasets."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Tuple

from aibom import config
from aibom.models.component import (COMPONENT_TYPE_DATA, COMPONENT_TYPE_MODEL,
                                    Component, ExternalReference, LicenseInfo,
                                    ModelCard, Organization, Property)
from aibom.models.provenance import ModelRecord

RELATION_PROPERTY = "ai.model.relation"

DEFAULT_TASK = "text-generation"
DEFAULT_ARCHITECTURE = "TransformerModel"

ML_TASK_TAGS = frozenset(
    {
        "text-generation",
        "conversational",
        "text-classification",
        "feature-extraction",
        "translation",
        "summarization",
        "question-answering",
        "fill-mask",
        "token-classification",
        "image-classification",
        "object-detection",
        "image-segmentation",
        "audio-classification",
        "automatic-speech-recognition",
        "text-to-speech",
        "reinforcement-learning",
    }
)

_PRIMARY_TASKS = (
    "text-generation",
    "conversational",
    "text-classification",
    "feature-extraction",
    "translation",
)


def model_bom_ref(model_id: str) -> str:
    return f"pkg:huggingface/{model_id}@{config.COMPONENT_VERSION}"


def dataset_bom_ref(dataset_id: str) -> str:
    return f"pkg:huggingface-dataset/{dataset_id}@{config.COMPONENT_VERSION}"


def split_identifier(identifier: str) -> Tuple[str, str]:
    """Return ``(organization, name)`` for an ``org/name`` identifier."""
    parts = identifier.split("/")
    if len(parts) >= 2:
        return parts[0], parts[1]
    return config.DEFAULT_ORGANIZATION, identifier


def license_text_for(record: ModelRecord) -> Optional[str]:
    """Licence field of the record, else the first ``license:`` tag."""
    if record.license:
        return record.license
    for tag in record.tags:
        if tag.startswith("license:"):
            value = tag[len("license:"):].strip()
            if value:
                return value
    return None


def is_machine_learning_model(tags: Sequence[str]) -> bool:
    return any(tag in ML_TASK_TAGS for tag in tags)


def determine_task(tags: Sequence[str]) -> str:
    for tag in tags:
        if tag in _PRIMARY_TASKS:
            return tag
    return DEFAULT_TASK


def model_architecture(card: Optional[Mapping[str, Any]]) -> str:
    if card:
        architecture = card.get("architecture")
        if isinstance(architecture, str) and architecture.strip():
            return architecture
        architectures = card.get("architectures")
        if isinstance(architectures, (list, tuple)) and architectures:
            first = architectures[0]
            if isinstance(first, str) and first.strip():
                return first
    return DEFAULT_ARCHITECTURE


def build_model_component(
    record: ModelRecord,
    *,
    relation: Optional[str] = None,
    license_info: Optional[LicenseInfo] = None,
) -> Component:
    org, name = split_identifier(record.model_id)
    bom_ref = model_bom_ref(record.model_id)
    base_url = config.HF_BASE_URL
    model_url = f"{base_url}/{record.model_id}"

    relation_props: List[Property] = []
    if relation:
        relation_props.append(Property(RELATION_PROPERTY, relation))

    model_card: Optional[ModelCard] = None
    component_props: Tuple[Property, ...] = tuple(relation_props)
    if is_machine_learning_model(record.tags):
        task = determine_task(record.tags)
        model_card = ModelCard(
            model_architecture=model_architecture(record.card_data),
            task=task,
            properties=(
                Property("primaryPurpose", task),
                Property("suppliedBy", org),
                Property("typeOfModel", "transformer"),
                Property("downloadLocation", f"{model_url}/tree/main"),
                *relation_props,
            ),
        )
        component_props = ()

    return Component(
        component_type=COMPONENT_TYPE_MODEL,
        bom_ref=bom_ref,
        name=name,
        version=config.COMPONENT_VERSION,
        description=_description(record.card_data),
        group=org,
        supplier=Organization(org, (f"{base_url}/{org}",)),
        authors=(org,),
        copyright=config.NO_ASSERTION,
        license=license_info,
        external_references=(
            ExternalReference("website", model_url, "Model repository"),
            ExternalReference(
                "distribution", f"{model_url}/tree/main", "Model files"
            ),
        ),
        purl=bom_ref,
        model_card=model_card,
        properties=component_props,
    )


def build_dataset_component(dataset_id: str) -> Component:
    org, name = split_identifier(dataset_id)
    bom_ref = dataset_bom_ref(dataset_id)
    datasets_url = f"{config.HF_BASE_URL}/datasets"
    return Component(
        component_type=COMPONENT_TYPE_DATA,
        bom_ref=bom_ref,
        name=name,
        version=config.COMPONENT_VERSION,
        description="Training dataset",
        group=org,
        supplier=Organization(org, (f"{datasets_url}/{org}",)),
        authors=(org,),
        copyright=config.NO_ASSERTION,
        external_references=(
            ExternalReference(
                "website", f"{datasets_url}/{dataset_id}", "Dataset repository"
            ),
        ),
        purl=bom_ref,
    )


def _description(card: Optional[Mapping[str, Any]]) -> str:
    if card:
        for key in ("description", "model_description"):
            value = card.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return "No description available"
