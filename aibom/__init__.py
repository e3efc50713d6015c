"""Generate CycloneDX AI bills of materials for Hugging Face models."""

from aibom.config import GENERATOR_VERSION as __version__

__all__ = ["__version__"]
