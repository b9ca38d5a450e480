"""Pytest configuration and shared fixtures for ApexERP tests."""

from __future__ import annotations

import pytest

from apexerp import create_app


@pytest.fixture()
def app(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Application wired for tests with logs kept under ``tmp_path``."""

    monkeypatch.setenv("APEXERP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("APEXERP_DEV_MODE", "true")
    monkeypatch.delenv("APEXERP_USER_NAME", raising=False)
    monkeypatch.delenv("APEXERP_USER_ROLE", raising=False)
    return create_app("testing")


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()
