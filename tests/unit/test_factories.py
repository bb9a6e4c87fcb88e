"""Sanity tests for the synthetic draft factories."""

from __future__ import annotations

from datetime import datetime

from quiniela.services.draft_validator import validate_draft
from tests.factories.data_factories import (
    blank_draft,
    build_crypto_draft,
    build_draft,
    build_draft_payload,
)

NOW = datetime(2025, 6, 1, 10, 0)


def test_built_drafts_are_valid():
    for _ in range(25):
        assert validate_draft(build_draft(), NOW).ok


def test_crypto_drafts_are_valid():
    for _ in range(10):
        draft = build_crypto_draft()
        assert draft.is_crypto is True
        assert validate_draft(draft, NOW).ok


def test_blank_draft_is_invalid():
    assert not validate_draft(blank_draft(), NOW).ok


def test_payload_uses_camel_case():
    payload = build_draft_payload()
    assert "firstPlacePct" in payload
    assert "eventIds" in payload
    assert isinstance(payload["eventIds"], list)
    assert "first_place_pct" not in payload
