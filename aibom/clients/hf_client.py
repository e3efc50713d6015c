"""Hugging Face Hub client used as the metadata source and file probe."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Protocol, cast
from urllib.parse import urlparse

import requests
from huggingface_hub import hf_hub_url
from huggingface_hub.errors import HfHubHTTPError, HFValidationError

from aibom.clients.base_client import BaseClient
from aibom.errors import MetadataFetchError
from aibom.models.provenance import ModelRecord
from aibom.utils import env


class _SessionWithHead(Protocol):
    def head(
        self, url: str, timeout: float = 10.0, allow_redirects: bool = True
    ) -> Any: ...


class HFClient(BaseClient[Any]):
    """Thin wrapper around ``huggingface_hub.HfApi`` and a requests session."""

    def __init__(
        self,
        *,
        api: Optional[Any] = None,
        logger: Optional[logging.Logger] = None,
        http_session: Optional[_SessionWithHead] = None,
        metadata_timeout: Optional[float] = None,
        probe_timeout: Optional[float] = None,
    ) -> None:
        super().__init__(logger=logger)
        self._http_session = cast(
            _SessionWithHead, http_session or requests.Session()
        )
        self._endpoint = env.hf_endpoint()
        self._metadata_timeout = metadata_timeout or env.metadata_timeout()
        self._probe_timeout = probe_timeout or env.probe_timeout()
        if api is not None:
            self._api = api
        else:
            from huggingface_hub import HfApi

            self._api = HfApi(endpoint=self._endpoint)

    def fetch(self, model_id: str) -> ModelRecord:
        """Fetch metadata for ``model_id`` and convert it to a ModelRecord.

        Raises ``MetadataFetchError`` on invalid repo ids, Hub HTTP errors,
        transport errors, or a response without a model identifier.
        """

        try:
            normalized = normalize_repo_id(model_id)
        except ValueError as exc:
            raise MetadataFetchError(model_id, str(exc)) from exc

        def _operation() -> Any:
            self._logger.debug("Requesting model info for %s", normalized)
            return self._api.model_info(
                normalized, timeout=self._metadata_timeout
            )

        try:
            info = self._execute(
                _operation,
                name=f"hf.model_info({normalized})",
            )
        except (HfHubHTTPError, requests.RequestException) as exc:
            raise MetadataFetchError(normalized, str(exc)) from exc
        except HFValidationError as exc:
            raise MetadataFetchError(
                normalized, f"invalid repository id: {exc}"
            ) from exc

        if info is None:
            raise MetadataFetchError(normalized, "empty response")
        return _to_model_record(info, requested_id=normalized)

    def license_file_url(self, model_id: str, filename: str) -> str:
        return hf_hub_url(
            repo_id=normalize_repo_id(model_id),
            filename=filename,
            endpoint=self._endpoint,
        )

    def file_exists(self, model_id: str, filename: str) -> bool:
        """Return ``True`` when ``filename`` can be retrieved from the repo."""

        url = self.license_file_url(model_id, filename)

        def _operation() -> bool:
            response = self._http_session.head(
                url,
                timeout=self._probe_timeout,
                allow_redirects=True,
            )
            return 200 <= int(response.status_code) < 300

        try:
            return self._execute(_operation, name=f"hf.probe({url})")
        except requests.RequestException as exc:
            self._logger.debug("Probe for %s failed: %s", url, exc)
            return False


def normalize_repo_id(repo_identifier: str) -> str:
    """Reduce a plain id or a huggingface.co URL to ``<org>/<name>``."""

    trimmed = (repo_identifier or "").strip().strip("/")
    if not trimmed:
        raise ValueError("Repository identifier cannot be empty.")

    if "://" not in trimmed:
        return trimmed

    parsed = urlparse(trimmed)
    if parsed.netloc != "huggingface.co":
        raise ValueError(f"Unsupported Hugging Face host: {parsed.netloc}")

    segments = [segment for segment in parsed.path.split("/") if segment]
    if segments and segments[0] == "models":
        segments = segments[1:]
    if not segments:
        raise ValueError(f"Unable to extract repo id from URL: {trimmed}")

    return "/".join(segments[:2])


def _to_model_record(info: Any, *, requested_id: str) -> ModelRecord:
    model_id = _field(info, "id", "modelId")
    if not isinstance(model_id, str) or not model_id:
        raise MetadataFetchError(requested_id, "response is missing the model id")

    card_data = _card_data_as_mapping(_field(info, "card_data", "cardData"))

    raw_tags = _field(info, "tags") or []
    if not isinstance(raw_tags, (list, tuple)):
        raise MetadataFetchError(requested_id, "tags must be a list")
    tags = tuple(str(tag) for tag in raw_tags)

    license_text = _field(info, "license")
    if not isinstance(license_text, str) and card_data is not None:
        license_text = card_data.get("license")
    if isinstance(license_text, (list, tuple)):
        license_text = next(
            (item for item in license_text if isinstance(item, str)), None
        )
    if not isinstance(license_text, str) or not license_text.strip():
        license_text = None

    library_name = _field(info, "library_name")
    if not isinstance(library_name, str):
        library_name = None

    return ModelRecord(
        model_id=model_id,
        tags=tags,
        license=license_text,
        card_data=card_data,
        library_name=library_name,
    )


def _field(info: Any, *names: str) -> Any:
    for name in names:
        if isinstance(info, Mapping):
            value = info.get(name)
        else:
            value = getattr(info, name, None)
        if value is not None:
            return value
    return None


def _card_data_as_mapping(card: Any) -> Optional[Mapping[str, Any]]:
    if card is None:
        return None
    if isinstance(card, Mapping):
        return dict(card)
    to_dict = getattr(card, "to_dict", None)
    if callable(to_dict):
        result = to_dict()
        if isinstance(result, Mapping):
            return dict(result)
    return None
