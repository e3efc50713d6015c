"""HTTP endpoints for generating AIBOM documents."""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from typing import Any, Callable, Dict

from flask import Blueprint, current_app, jsonify, request

from aibom.errors import AIBOMError
from aibom.models.provenance import ResolutionGraph
from aibom.services.document import DocumentIdentity, assemble_document

_LOGGER = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _get_executor() -> Executor:
    executor = current_app.config.get("EXECUTOR")
    if not isinstance(executor, Executor):
        raise RuntimeError("EXECUTOR config must be an Executor instance")
    return executor


def _get_generate() -> Callable[[str], ResolutionGraph]:
    return current_app.config["AIBOM_GENERATE"]


def _response(
    *, success: bool, aibom: Any = None, error: str | None = None
) -> Dict[str, Any]:
    return {"success": success, "aibom": aibom, "error": error}


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "t", "yes", "on"}
    return False


@api_bp.get("/health")
def healthcheck():
    """Simple readiness probe."""
    return jsonify({"status": "healthy", "service": "aibom-generator-server"}), 200


@api_bp.post("/generate")
def generate_aibom():
    """Resolve a model's provenance and return the AIBOM document."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify(
            _response(success=False, error="Request body must be a JSON object")
        ), 400

    model_id = payload.get("model_id")
    if not isinstance(model_id, str) or not model_id.strip():
        return jsonify(
            _response(success=False, error="model_id cannot be empty")
        ), 400
    model_id = model_id.strip()
    verbose = _as_bool(payload.get("verbose"))

    _LOGGER.info(
        "Received AIBOM generation request: model_id=%s verbose=%s",
        model_id,
        verbose,
    )

    future = _get_executor().submit(_get_generate(), model_id)
    try:
        graph = future.result()
    except (AIBOMError, ValueError) as exc:
        _LOGGER.error("AIBOM generation failed for %s: %s", model_id, exc)
        return jsonify(
            _response(
                success=False, error=f"Error generating AIBOM: {exc}"
            )
        ), 500
    except Exception as exc:  # noqa: BLE001
        _LOGGER.exception("Worker execution failed for %s", model_id)
        return jsonify(
            _response(success=False, error=f"Error executing task: {exc}")
        ), 500

    document = assemble_document(graph, DocumentIdentity.new())
    if verbose:
        _LOGGER.info(
            "AIBOM generation successful: %d component(s), %d dependency "
            "entries",
            len(graph.components),
            len(graph.dependencies),
        )
    else:
        _LOGGER.info("AIBOM generation successful: %s", model_id)
    return jsonify(_response(success=True, aibom=document)), 200
