"""Quiniela draft — the mutable, user-edited form state.

A draft is created with form-open defaults, edited field by field, then
validated and turned into a submission. Field values are kept exactly as
the user entered them; coercion and checking belong to the validator.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from quiniela.core.constants import (
    DEFAULT_DISTRIBUTION_TYPE,
    DEFAULT_END_TIME,
    DEFAULT_IS_CRYPTO,
    DEFAULT_IS_PUBLIC,
    DEFAULT_START_TIME,
    DISTRIBUTION_DEFAULTS,
)


def distribution_defaults(distribution_type: str) -> tuple[int, int, int]:
    """Canonical ``(first, second, third)`` percentages for a mode.

    Raises:
        ValueError: If *distribution_type* is not a known mode.
    """
    defaults = DISTRIBUTION_DEFAULTS.get(distribution_type)
    if defaults is None:
        msg = (
            f"Invalid distribution_type: {distribution_type!r}. "
            f"Must be one of: {list(DISTRIBUTION_DEFAULTS.keys())}"
        )
        raise ValueError(msg)
    return defaults


@dataclass
class QuinielaDraft:
    """In-progress quiniela configuration for one form session."""

    name: Any = ""
    description: Any = ""
    start_date: Any = None
    start_time: Any = DEFAULT_START_TIME
    end_date: Any = None
    end_time: Any = DEFAULT_END_TIME
    entry_price: Any = None
    max_participants: Any = None
    distribution_type: Any = DEFAULT_DISTRIBUTION_TYPE
    first_place_pct: Any = DISTRIBUTION_DEFAULTS[DEFAULT_DISTRIBUTION_TYPE][0]
    second_place_pct: Any = DISTRIBUTION_DEFAULTS[DEFAULT_DISTRIBUTION_TYPE][1]
    third_place_pct: Any = DISTRIBUTION_DEFAULTS[DEFAULT_DISTRIBUTION_TYPE][2]
    is_public: Any = DEFAULT_IS_PUBLIC
    is_crypto: Any = DEFAULT_IS_CRYPTO
    crypto_currency: Any = None
    event_ids: Any = field(default_factory=set)

    def set_distribution_type(self, distribution_type: str) -> None:
        """Switch prize mode, resetting all three percentages together."""
        first, second, third = distribution_defaults(distribution_type)
        self.distribution_type = distribution_type
        self.first_place_pct = first
        self.second_place_pct = second
        self.third_place_pct = third

    def update(self, **fields: Any) -> None:
        """Apply user edits.

        A ``distribution_type`` edit goes through :meth:`set_distribution_type`
        first, so percentages passed in the same call win over the defaults.

        Raises:
            ValueError: If a field name is not part of the draft.
        """
        unknown = sorted(set(fields) - DRAFT_FIELDS)
        if unknown:
            msg = f"Unknown draft fields: {unknown}"
            raise ValueError(msg)

        if "distribution_type" in fields:
            self.set_distribution_type(fields.pop("distribution_type"))
        for key, value in fields.items():
            setattr(self, key, value)

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


DRAFT_FIELDS: frozenset[str] = frozenset(f.name for f in dataclasses.fields(QuinielaDraft))


def new_draft(**overrides: Any) -> QuinielaDraft:
    """Create a draft with form-open defaults plus *overrides*."""
    draft = QuinielaDraft()
    if overrides:
        draft.update(**overrides)
    return draft
