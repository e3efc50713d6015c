"""Common errors raised by the AIBOM generator."""

from __future__ import annotations


class AIBOMError(RuntimeError):
    """Base class for generator failures."""


class MetadataFetchError(AIBOMError):
    """Raised when model metadata cannot be retrieved from the Hub."""

    def __init__(self, model_id: str, message: str) -> None:
        super().__init__(f"Failed to fetch metadata for '{model_id}': {message}")
        self.model_id = model_id


class ResolutionError(AIBOMError):
    """Raised when a resolution run cannot produce a document."""
