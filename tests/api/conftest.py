"""Fixtures for the HTTP layer: an app wired to the shared test dictionary."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from termdict.api.app import create_app
from termdict.core.settings import TermdictSettings


@pytest.fixture()
def public_dir(tmp_path: Path) -> Path:
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text("<!doctype html><title>termdict</title>", encoding="utf-8")
    (root / "app.js").write_text("console.log('hi')", encoding="utf-8")
    (root / "ic1.ico").write_bytes(b"\x00\x00\x01\x00")
    (root / "secret.ico").write_bytes(b"nope")
    return root


@pytest.fixture()
def settings(words_db: Path, public_dir: Path) -> TermdictSettings:
    return TermdictSettings(db_path=words_db, public_dir=public_dir, _env_file=None)


@pytest.fixture()
def app(settings: TermdictSettings, repo_ctx) -> FastAPI:
    """App with an injected context (no lifespan store handling)."""
    return create_app(settings=settings, context=repo_ctx)


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def live_client(settings: TermdictSettings) -> Iterator[TestClient]:
    """Client whose app opens and closes the store in its lifespan."""
    with TestClient(create_app(settings=settings)) as c:
        yield c
