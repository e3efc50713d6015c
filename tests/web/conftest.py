"""

AIBOM Generator Repository
Introductory remarks: This module is part of the AIBOM Generator codebase.

"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Generator, List

import pytest

from aibom.errors import MetadataFetchError
from aibom.models.provenance import (DependencyRef, ModelRecord,
                                     ResolutionGraph)
from aibom.services.component_builder import (build_dataset_component,
                                              build_model_component)
from aibom.webapp import create_app


class FakeGenerator:
    """Stand-in for ``generate`` that records the requested identifiers."""

    def __init__(self, failures: Dict[str, Exception] | None = None) -> None:
        self.failures = failures or {}
        self.calls: List[str] = []

    def __call__(self, model_id: str) -> ResolutionGraph:
        self.calls.append(model_id)
        if model_id in self.failures:
            raise self.failures[model_id]
        root = build_model_component(
            ModelRecord(model_id, tags=("text-generation",))
        )
        dataset = build_dataset_component("squad")
        return ResolutionGraph(
            root_id=model_id,
            components=(dataset, root),
            dependencies={
                root.bom_ref: (DependencyRef(dataset.bom_ref, "train"),)
            },
        )


@pytest.fixture()
def fake_generate() -> FakeGenerator:
    return FakeGenerator(
        failures={
            "org/missing": MetadataFetchError("org/missing", "404 Not Found"),
            "org/broken": KeyError("card"),
        }
    )


@pytest.fixture()
def web_app(fake_generate: Callable) -> Generator:
    """Provide a configured Flask application with a fake generator."""
    executor = ThreadPoolExecutor(max_workers=2)
    app = create_app(
        {
            "TESTING": True,
            "AIBOM_GENERATE": fake_generate,
            "EXECUTOR": executor,
        }
    )
    yield app
    executor.shutdown(wait=True)


@pytest.fixture()
def client(web_app):
    """Flask test client fixture."""
    return web_app.test_client()
