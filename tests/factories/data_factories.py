"""Synthetic draft factories for testing — realistic fake quiniela drafts."""

from __future__ import annotations

import random
from datetime import date, timedelta
from typing import Any

from faker import Faker

from quiniela.core.constants import CRYPTO_CURRENCIES
from quiniela.services.drafts import QuinielaDraft, new_draft

fake = Faker()
Faker.seed(42)
random.seed(42)

# Far enough ahead that any test clock is in the past
BASE_START = date(2099, 1, 1)


def _contest_name() -> str:
    return f"{fake.city()} {random.choice(['Cup', 'League', 'Derby', 'Classic'])}"[:100]


def build_draft_fields(**overrides: Any) -> dict[str, Any]:
    """Generate a valid set of draft fields (TOP_3 split, fiat)."""
    start = BASE_START + timedelta(days=random.randint(0, 30))
    data: dict[str, Any] = {
        "name": _contest_name(),
        "description": fake.sentence(nb_words=8),
        "start_date": start.isoformat(),
        "start_time": "09:00",
        "end_date": (start + timedelta(days=random.randint(1, 14))).isoformat(),
        "end_time": "18:00",
        "entry_price": round(random.uniform(1, 500), 2),
        "max_participants": random.randint(2, 1000),
        "distribution_type": "TOP_3",
        "first_place_pct": 50,
        "second_place_pct": 30,
        "third_place_pct": 20,
        "is_public": True,
        "is_crypto": False,
        "crypto_currency": None,
        "event_ids": {random.randint(1, 10_000) for _ in range(random.randint(1, 6))},
    }
    data.update(overrides)
    return data


def build_draft(**overrides: Any) -> QuinielaDraft:
    """Generate a valid draft; *overrides* are applied as plain field edits."""
    return QuinielaDraft(**build_draft_fields(**overrides))


def build_crypto_draft(**overrides: Any) -> QuinielaDraft:
    """Generate a valid draft paid in crypto."""
    fields = {"is_crypto": True, "crypto_currency": random.choice(CRYPTO_CURRENCIES)}
    fields.update(overrides)
    return build_draft(**fields)


def build_draft_payload(**overrides: Any) -> dict[str, Any]:
    """Generate a camelCase JSON body for the draft endpoints."""
    fields = build_draft_fields(**overrides)
    fields["event_ids"] = sorted(fields["event_ids"])
    camel = {
        "".join(
            part if i == 0 else part.capitalize() for i, part in enumerate(key.split("_"))
        ): value
        for key, value in fields.items()
    }
    return camel


def blank_draft() -> QuinielaDraft:
    """A freshly opened form, nothing filled in."""
    return new_draft()
