"""
AIBOM Generator Repository
Introductory remarks: This module is part of the AIBOM Generator codebase.

Central configuration constants for the AIBOM generator.
"""

from __future__ import annotations

# Generator identity ---------------------------------------------------------

GENERATOR_NAME = "hf-aibom-generator"
"""Tool name recorded in the document metadata."""

GENERATOR_VERSION = "1.0.0"
"""Tool version recorded in the document metadata."""

GENERATOR_MANUFACTURER = "AIBOM Generator"
"""Organization recorded as the tool manufacturer."""

# Document format ------------------------------------------------------------

BOM_FORMAT = "CycloneDX"
SPEC_VERSION = "1.6"

COMPONENT_VERSION = "1.0"
"""Fixed version string used when deriving component bom-refs."""

NO_ASSERTION = "NOASSERTION"

# Hugging Face Hub -----------------------------------------------------------

HF_BASE_URL = "https://huggingface.co"
"""Default hosting location; override with ``HF_ENDPOINT``."""

DEFAULT_ORGANIZATION = "huggingface"
"""Organization assumed for single-segment identifiers."""

LICENSE_FILE_CANDIDATES = (
    "LICENSE",
    "LICENSE.txt",
    "LICENSE.md",
    "license",
    "license.txt",
)
"""Conventional licence file names probed in order."""

SPDX_LICENSE_URL = "https://spdx.org/licenses/{license_id}"

# Timeouts and workers -------------------------------------------------------

METADATA_TIMEOUT_SECONDS = 30.0
PROBE_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_WORKERS = 4
