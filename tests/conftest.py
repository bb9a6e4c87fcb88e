"""Shared pytest fixtures and test configuration."""

from __future__ import annotations

import os
import sys
from datetime import datetime
from typing import Any

import pytest
from fastapi.testclient import TestClient

# Ensure src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

# Fixed "now" for every clock-dependent test
FIXED_NOW = datetime(2025, 6, 1, 10, 0)


def fixed_clock() -> datetime:
    return FIXED_NOW


class RecordingCreator:
    """Creation collaborator double that records payloads."""

    def __init__(
        self,
        ack: dict[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.ack = ack if ack is not None else {
            "id": 41,
            "name": "Cup A",
            "invitationCode": "QX7-9KD",
        }
        self.error = error
        self.payloads: list[dict[str, Any]] = []

    def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return dict(self.ack)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def creator() -> RecordingCreator:
    return RecordingCreator()


@pytest.fixture
def app(creator: RecordingCreator):  # type: ignore[no-untyped-def]
    """FastAPI test app with a recording creator and the fixed clock."""
    from quiniela.core.config import Settings
    from quiniela.main import create_app

    settings = Settings(app_env="testing", _env_file=None)
    return create_app(settings=settings, creator=creator, clock=fixed_clock)


@pytest.fixture
def client(app):  # type: ignore[no-untyped-def]
    return TestClient(app)
