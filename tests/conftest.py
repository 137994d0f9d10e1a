"""Shared fixtures for the pflow_store test suite."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from pflow_store.app import create_app
from pflow_store.db import Storage
from pflow_store.services import archive_codec

COLLECTION = "pflow_models"


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


INHIBIT_MODEL = {
    "modelType": "petriNet",
    "version": "v0",
    "places": {
        "foo": {"offset": 0, "x": 130, "y": 207, "initial": 1},
        "bar": {"offset": 1, "x": 395, "y": 299, "initial": 0},
    },
    "transitions": {
        "add": {"x": 96, "y": 84},
        "sub": {"x": 270, "y": 102},
    },
    "arcs": [
        {"source": "add", "target": "foo", "weight": 1},
        {"source": "foo", "target": "sub", "weight": 1},
        {"source": "bar", "target": "sub", "weight": 1, "inhibit": True},
    ],
}


def model_bytes(model: dict | None = None) -> bytes:
    return json.dumps(model if model is not None else INHIBIT_MODEL, sort_keys=True).encode("utf-8")


@pytest.fixture
def model_doc() -> bytes:
    return model_bytes()


@pytest.fixture
def model_blob(model_doc: bytes) -> str:
    return archive_codec.encode(model_doc, archive_codec.MODEL_ENTRY)


# ---------------------------------------------------------------------------
# Storage / app fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "pflow.db"


@pytest.fixture
def storage(db_path: Path):
    store = Storage(db_path, lock_timeout=5.0)
    store.reset(COLLECTION)
    yield store
    store.close()


@pytest.fixture
def client(storage: Storage) -> TestClient:
    app = create_app(storage, COLLECTION)
    return TestClient(app, follow_redirects=False)
