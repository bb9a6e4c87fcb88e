"""Submission builder — turns a validated draft into the creation payload.

Building cannot fail: its input already passed validation. The only
transformations are merging the date/time controls into local timestamps
and nulling the two conditional fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from quiniela.services.draft_validator import ValidatedDraft
from quiniela.services.instants import combine, format_local_timestamp


@dataclass(frozen=True)
class QuinielaSubmission:
    """Normalized quiniela ready for the creation collaborator."""

    name: str
    description: str
    start: str
    end: str
    entry_price: Decimal
    max_participants: int | None
    distribution_type: str
    first_place_pct: Decimal | None
    second_place_pct: Decimal | None
    third_place_pct: Decimal | None
    is_public: bool
    is_crypto: bool
    crypto_currency: str | None
    event_ids: tuple[Any, ...]

    def to_payload(self) -> dict[str, Any]:
        """JSON body for the creation endpoint (camelCase, absent keys omitted)."""
        payload: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "start": self.start,
            "end": self.end,
            "entryPrice": _json_number(self.entry_price),
            "maxParticipants": self.max_participants,
            "distributionType": self.distribution_type,
            "firstPlacePct": _json_number(self.first_place_pct),
            "secondPlacePct": _json_number(self.second_place_pct),
            "thirdPlacePct": _json_number(self.third_place_pct),
            "isPublic": self.is_public,
            "isCrypto": self.is_crypto,
            "cryptoCurrency": self.crypto_currency,
            "eventIds": list(self.event_ids),
        }
        return {k: v for k, v in payload.items() if v is not None}


def _json_number(value: Decimal | None) -> int | float | None:
    if value is None:
        return None
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def build_submission(validated: ValidatedDraft) -> QuinielaSubmission:
    """Produce the normalized submission for *validated*."""
    return QuinielaSubmission(
        name=validated.name,
        description=validated.description,
        start=format_local_timestamp(combine(validated.start_date, validated.start_time)),
        end=format_local_timestamp(combine(validated.end_date, validated.end_time)),
        entry_price=validated.entry_price,
        max_participants=validated.max_participants or None,
        distribution_type=validated.distribution_type,
        first_place_pct=validated.first_place_pct,
        second_place_pct=validated.second_place_pct,
        third_place_pct=validated.third_place_pct,
        is_public=validated.is_public,
        is_crypto=validated.is_crypto,
        crypto_currency=validated.crypto_currency if validated.is_crypto else None,
        event_ids=validated.event_ids,
    )
