"""Map free-text licence strings to canonical SPDX identifiers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Sequence

from aibom import config
from aibom.models.component import LicenseInfo
from aibom.models.provenance import ModelRecord

_LOGGER = logging.getLogger(__name__)

_DATA_FILE = Path(__file__).resolve().parents[1] / "data" / "spdx_license_ids.json"

_FALLBACK_LICENSE_IDS = (
    "MIT",
    "Apache-2.0",
    "BSD-2-Clause",
    "BSD-3-Clause",
    "MPL-2.0",
    "LGPL-2.1-only",
    "LGPL-3.0-only",
    "GPL-2.0-only",
    "GPL-3.0-only",
    "AGPL-3.0-only",
    "CC-BY-4.0",
    "CC-BY-SA-4.0",
    "CC-BY-NC-4.0",
    "CC-BY-NC-SA-4.0",
    "CC-BY-ND-4.0",
    "CC0-1.0",
    "Unlicense",
)

# Tried in order against the licence table; the first hit wins.
VARIANTS: Sequence[Callable[[str], str]] = (
    lambda text: text,
    lambda text: text.lower(),
    lambda text: text.upper(),
    lambda text: text.lower().replace(" ", "-"),
    lambda text: text.lower().replace("-", " "),
    lambda text: text.replace(" ", "-"),
    lambda text: text.replace("-", " "),
)


class FileProbe(Protocol):
    def file_exists(self, model_id: str, filename: str) -> bool: ...

    def license_file_url(self, model_id: str, filename: str) -> str: ...


class LicenseTable:
    """SPDX licence identifiers keyed case-insensitively."""

    def __init__(self, license_ids: Sequence[str]) -> None:
        self._by_key: Dict[str, str] = {
            license_id.lower(): license_id for license_id in license_ids
        }

    def __len__(self) -> int:
        return len(self._by_key)

    def lookup(self, candidate: str) -> Optional[str]:
        return self._by_key.get(candidate.strip().lower())


def load_license_table(path: Optional[Path] = None) -> LicenseTable:
    try:
        license_ids = _load_json_list(path or _DATA_FILE)
    except (OSError, ValueError) as exc:
        _LOGGER.warning(
            "Unable to load licence table, using built-in list: %s", exc
        )
        license_ids = list(_FALLBACK_LICENSE_IDS)
    return LicenseTable(license_ids)


class LicenseNormalizer:
    """Canonical table match first, then a remote licence-file probe."""

    def __init__(
        self,
        probe: Optional[FileProbe] = None,
        *,
        table: Optional[LicenseTable] = None,
        candidates: Sequence[str] = config.LICENSE_FILE_CANDIDATES,
    ) -> None:
        self._probe = probe
        self._table = table or load_license_table()
        self._candidates = tuple(candidates)

    def normalize(
        self, license_text: Optional[str], record: ModelRecord
    ) -> Optional[LicenseInfo]:
        if license_text is None or not license_text.strip():
            return None

        canonical = self.match_canonical(license_text)
        if canonical is not None:
            return canonical

        probed_url = self._probe_license_file(record.model_id)
        if probed_url is None:
            _LOGGER.info(
                "No licence match for %r on %s", license_text, record.model_id
            )
            return None

        return LicenseInfo(
            name=_display_name(license_text, record),
            url=probed_url,
        )

    def match_canonical(self, license_text: str) -> Optional[LicenseInfo]:
        for variant in VARIANTS:
            license_id = self._table.lookup(variant(license_text))
            if license_id is not None:
                return LicenseInfo(
                    id=license_id,
                    url=config.SPDX_LICENSE_URL.format(license_id=license_id),
                )
        return None

    def _probe_license_file(self, model_id: str) -> Optional[str]:
        if self._probe is None:
            return None
        for filename in self._candidates:
            try:
                found = self._probe.file_exists(model_id, filename)
            except Exception as exc:  # noqa: BLE001
                _LOGGER.debug(
                    "Licence probe %s on %s failed: %s", filename, model_id, exc
                )
                continue
            if found:
                return self._probe.license_file_url(model_id, filename)
        return None


def _display_name(license_text: str, record: ModelRecord) -> str:
    card: Mapping[str, Any] = record.card_data or {}
    license_name = card.get("license_name")
    if isinstance(license_name, str) and license_name.strip():
        return license_name
    if record.license:
        return record.license
    return license_text


def _load_json_list(path: Path) -> List[str]:
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, list):
        raise ValueError(f"Licence table {path} must contain a list.")
    return [str(x) for x in data]
