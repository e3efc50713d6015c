from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from aibom import webapp
from aibom.webapp import create_app


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {
        "status": "healthy",
        "service": "aibom-generator-server",
    }


def test_generate_returns_document(client, fake_generate):
    response = client.post("/generate", json={"model_id": " org/model "})
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    assert payload["error"] is None
    aibom = payload["aibom"]
    assert aibom["bomFormat"] == "CycloneDX"
    assert aibom["metadata"]["component"]["bom-ref"] == (
        "pkg:generic/org%2Fmodel@1.0"
    )
    assert aibom["dependencies"] == [
        {
            "ref": "pkg:huggingface/org/model@1.0",
            "dependsOn": ["pkg:huggingface-dataset/squad@1.0"],
        }
    ]
    assert fake_generate.calls == ["org/model"]


def test_generate_accepts_verbose_flag(client):
    response = client.post(
        "/generate", json={"model_id": "org/model", "verbose": "true"}
    )
    assert response.status_code == 200
    assert response.get_json()["success"] is True


@pytest.mark.parametrize("body", [{"model_id": ""}, {"model_id": "  "}, {}])
def test_generate_rejects_empty_model_id(client, fake_generate, body):
    response = client.post("/generate", json=body)
    assert response.status_code == 400
    payload = response.get_json()
    assert payload == {
        "success": False,
        "aibom": None,
        "error": "model_id cannot be empty",
    }
    assert fake_generate.calls == []


def test_generate_rejects_non_object_body(client):
    response = client.post("/generate", json=["org/model"])
    assert response.status_code == 400
    assert response.get_json()["success"] is False


def test_generate_reports_metadata_failure(client):
    response = client.post("/generate", json={"model_id": "org/missing"})
    assert response.status_code == 500
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["aibom"] is None
    assert payload["error"].startswith("Error generating AIBOM: ")
    assert "404 Not Found" in payload["error"]


def test_generate_reports_unexpected_worker_failure(client):
    response = client.post("/generate", json={"model_id": "org/broken"})
    assert response.status_code == 500
    assert response.get_json()["error"].startswith("Error executing task: ")


def test_default_executor_uses_worker_setting(monkeypatch):
    registered = []
    monkeypatch.setattr(
        webapp.atexit,
        "register",
        lambda func, *args, **kwargs: registered.append((func, kwargs)),
    )
    monkeypatch.setenv("AIBOM_MAX_WORKERS", "3")
    app = create_app({"TESTING": True})
    executor = app.config["EXECUTOR"]
    try:
        assert isinstance(executor, ThreadPoolExecutor)
        assert executor._max_workers == 3
        assert registered == [(executor.shutdown, {"wait": False})]
    finally:
        executor.shutdown(wait=False)


def test_injected_executor_is_not_registered_for_shutdown(monkeypatch):
    registered = []
    monkeypatch.setattr(
        webapp.atexit, "register", lambda *args, **kwargs: registered.append(args)
    )
    executor = ThreadPoolExecutor(max_workers=1)
    try:
        app = create_app({"TESTING": True, "EXECUTOR": executor})
        assert app.config["EXECUTOR"] is executor
        assert registered == []
    finally:
        executor.shutdown(wait=False)
