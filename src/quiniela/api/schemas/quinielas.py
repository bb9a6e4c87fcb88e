"""Quiniela draft schemas.

Draft fields are deliberately loose (``Any``): a half-filled or mistyped
form must reach the draft validator and come back as field errors rather
than be rejected by request parsing.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from quiniela.core.constants import (
    DEFAULT_DISTRIBUTION_TYPE,
    DEFAULT_END_TIME,
    DEFAULT_IS_CRYPTO,
    DEFAULT_IS_PUBLIC,
    DEFAULT_START_TIME,
    DISTRIBUTION_DEFAULTS,
)
from quiniela.services.drafts import QuinielaDraft

_DEFAULT_SPLIT = DISTRIBUTION_DEFAULTS[DEFAULT_DISTRIBUTION_TYPE]


class QuinielaDraftIn(BaseModel):
    """Draft as edited in the creation form. Accepts camelCase or snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Any = ""
    description: Any = ""
    start_date: Any = None
    start_time: Any = DEFAULT_START_TIME
    end_date: Any = None
    end_time: Any = DEFAULT_END_TIME
    entry_price: Any = None
    max_participants: Any = None
    distribution_type: Any = DEFAULT_DISTRIBUTION_TYPE
    first_place_pct: Any = _DEFAULT_SPLIT[0]
    second_place_pct: Any = _DEFAULT_SPLIT[1]
    third_place_pct: Any = _DEFAULT_SPLIT[2]
    is_public: Any = DEFAULT_IS_PUBLIC
    is_crypto: Any = DEFAULT_IS_CRYPTO
    crypto_currency: Any = None
    event_ids: Any = Field(default_factory=list)

    def to_draft(self) -> QuinielaDraft:
        return QuinielaDraft(**self.model_dump())


class FieldErrorOut(BaseModel):
    field: str
    code: str
    message: str


class ValidationOut(BaseModel):
    """Result of a validation pass."""

    valid: bool
    errors: list[FieldErrorOut] = []


class DistributionDefaultsOut(BaseModel):
    distribution_type: str
    first_place_pct: int
    second_place_pct: int
    third_place_pct: int


class CreatedQuinielaOut(BaseModel):
    """Creation acknowledgment."""

    name: str
    invitation_code: str
    quiniela_id: Any = None
