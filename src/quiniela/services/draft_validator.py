"""Draft validator — decides whether a quiniela draft can be submitted.

Validation runs in two phases:

1. Per-field checks, independent of each other, reported in
   ``DRAFT_FIELD_ORDER``.
2. Cross-field checks (temporal ordering, prize-percentage sum, crypto
   currency requirement), each run only when every field it reads passed
   phase 1.

Every applicable error is collected; nothing short-circuits. Malformed
values (a non-numeric price, a ``"9am"`` time) are reported as field
errors, never raised.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence, Set
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, Inexact, InvalidOperation, localcontext
from typing import Any

from quiniela.core.constants import (
    CONDITIONAL_REQUIREMENT_VIOLATION,
    CRYPTO_CURRENCIES,
    DESCRIPTION_MAX_LENGTH,
    DISTRIBUTION_SUM_MISMATCH,
    DISTRIBUTION_TYPES,
    DISTRIBUTION_TYPES_REQUIRING_SUM,
    EMPTY_SELECTION,
    ENTRY_PRICE_MAX,
    ENTRY_PRICE_MIN,
    FORMAT_MISMATCH,
    MAX_PARTICIPANTS_MAX,
    MAX_PARTICIPANTS_MIN,
    MIN_EVENTS,
    MISSING_FIELD,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    OUT_OF_RANGE,
    PERCENT_MAX,
    PERCENT_MIN,
    PERCENTAGE_FIELDS,
    PERCENTAGES_FIELD,
    PRIZE_PERCENT_TOTAL,
    TEMPORAL_ORDERING_VIOLATION,
)
from quiniela.services.drafts import QuinielaDraft
from quiniela.services.instants import combine, parse_date, parse_time, to_local_naive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldError:
    """A single validation problem attached to one draft field."""

    field: str
    code: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "code": self.code, "message": self.message}


@dataclass(frozen=True)
class ValidatedDraft:
    """Snapshot of a draft that passed validation, in canonical types."""

    name: str
    description: str
    start_date: date
    start_time: str
    end_date: date
    end_time: str
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


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation pass: a validated draft or ordered errors."""

    draft: ValidatedDraft | None = None
    errors: tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def error_fields(self) -> list[str]:
        return [e.field for e in self.errors]

    def errors_for(self, field_name: str) -> list[FieldError]:
        return [e for e in self.errors if e.field == field_name]


class _Invalid(Exception):
    """Raised by a field check; always caught inside this module."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


# ── Value helpers ───────────────────────────────────────────────────


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_decimal(value: Any) -> Decimal:
    """Coerce a numeric draft value; raises ValueError for non-numbers."""
    if isinstance(value, bool):
        raise ValueError("booleans are not numbers")
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        number = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation as e:
            raise ValueError(f"not a number: {value!r}") from e
    else:
        raise ValueError(f"not a number: {value!r}")
    if not number.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return number


def exact_sum(values: Sequence[Decimal]) -> Decimal:
    """Add *values* without rounding, whatever their number of digits."""
    if not values:
        return Decimal(0)
    high = max(v.adjusted() for v in values)
    low = min(v.as_tuple().exponent for v in values)
    with localcontext() as ctx:
        ctx.prec = max(high - low + 2, 1)
        ctx.traps[Inexact] = True
        return sum(values, Decimal(0))


def format_number(value: Decimal) -> str:
    """Render a Decimal without a trailing ``.0`` for whole numbers."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


# ── Per-field checks ────────────────────────────────────────────────


def _check_name(value: Any) -> str:
    if _is_blank(value):
        raise _Invalid(MISSING_FIELD, "Name is required")
    if not isinstance(value, str):
        raise _Invalid(FORMAT_MISMATCH, "Name must be text")
    if not NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH:
        raise _Invalid(
            OUT_OF_RANGE,
            f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
        )
    return value


def _check_description(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _Invalid(FORMAT_MISMATCH, "Description must be text")
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise _Invalid(
            OUT_OF_RANGE,
            f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters",
        )
    return value


def _check_date(value: Any, label: str) -> date:
    if _is_blank(value):
        raise _Invalid(MISSING_FIELD, f"{label} is required")
    try:
        return parse_date(value)
    except ValueError as e:
        raise _Invalid(FORMAT_MISMATCH, f"{label} must be a date (YYYY-MM-DD)") from e


def _check_start_date(value: Any, today: date) -> date:
    start_date = _check_date(value, "Start date")
    if start_date < today:
        raise _Invalid(TEMPORAL_ORDERING_VIOLATION, "Start date cannot be in the past")
    return start_date


def _check_end_date(value: Any, start_date: date | None) -> date:
    end_date = _check_date(value, "End date")
    if start_date is not None and end_date < start_date:
        raise _Invalid(
            TEMPORAL_ORDERING_VIOLATION, "End date cannot be before the start date"
        )
    return end_date


def _check_time(value: Any, label: str) -> str:
    if _is_blank(value):
        raise _Invalid(MISSING_FIELD, f"{label} is required")
    try:
        return parse_time(value)
    except ValueError as e:
        raise _Invalid(FORMAT_MISMATCH, f"{label} must use the HH:MM format") from e


def _check_entry_price(value: Any) -> Decimal:
    if _is_blank(value):
        raise _Invalid(MISSING_FIELD, "Entry price is required")
    try:
        price = _to_decimal(value)
    except ValueError as e:
        raise _Invalid(FORMAT_MISMATCH, "Entry price must be a number") from e
    if not ENTRY_PRICE_MIN <= price <= ENTRY_PRICE_MAX:
        raise _Invalid(
            OUT_OF_RANGE,
            f"Entry price must be between {ENTRY_PRICE_MIN} and {ENTRY_PRICE_MAX}",
        )
    return price


def _check_max_participants(value: Any) -> int | None:
    if _is_blank(value):
        return None
    try:
        number = _to_decimal(value)
    except ValueError as e:
        raise _Invalid(FORMAT_MISMATCH, "Max participants must be a whole number") from e
    if number != number.to_integral_value():
        raise _Invalid(FORMAT_MISMATCH, "Max participants must be a whole number")
    # Zero means "no cap", same as empty
    if number == 0:
        return None
    if not MAX_PARTICIPANTS_MIN <= number <= MAX_PARTICIPANTS_MAX:
        raise _Invalid(
            OUT_OF_RANGE,
            f"Max participants must be between {MAX_PARTICIPANTS_MIN} "
            f"and {MAX_PARTICIPANTS_MAX}",
        )
    return int(number)


def _check_distribution_type(value: Any) -> str:
    if _is_blank(value):
        raise _Invalid(MISSING_FIELD, "Distribution type is required")
    if value not in DISTRIBUTION_TYPES:
        raise _Invalid(
            OUT_OF_RANGE,
            f"Distribution type must be one of: {', '.join(DISTRIBUTION_TYPES)}",
        )
    return value


def _check_percentage(value: Any) -> Decimal | None:
    if _is_blank(value):
        return None
    try:
        pct = _to_decimal(value)
    except ValueError as e:
        raise _Invalid(FORMAT_MISMATCH, "Percentage must be a number") from e
    if not PERCENT_MIN <= pct <= PERCENT_MAX:
        raise _Invalid(
            OUT_OF_RANGE,
            f"Percentage must be between {PERCENT_MIN} and {PERCENT_MAX}",
        )
    return pct


def _check_flag(value: Any, label: str) -> bool:
    if value is None:
        raise _Invalid(MISSING_FIELD, f"{label} is required")
    if not isinstance(value, bool):
        raise _Invalid(FORMAT_MISMATCH, f"{label} must be true or false")
    return value


def _check_crypto_currency(value: Any, is_crypto: bool) -> str | None:
    if not is_crypto:
        return value if isinstance(value, str) and value.strip() else None
    # Absence while crypto is on is reported by the cross-field check
    if _is_blank(value):
        return None
    if value not in CRYPTO_CURRENCIES:
        raise _Invalid(
            OUT_OF_RANGE,
            f"Crypto currency must be one of: {', '.join(CRYPTO_CURRENCIES)}",
        )
    return value


def _check_event_ids(value: Any) -> tuple[Any, ...]:
    if value is None:
        raise _Invalid(MISSING_FIELD, "Events are required")
    if isinstance(value, (str, bytes)) or not isinstance(value, (Set, Sequence)):
        raise _Invalid(FORMAT_MISMATCH, "Events must be a collection of identifiers")
    try:
        event_ids = tuple(dict.fromkeys(value))
    except TypeError as e:
        raise _Invalid(FORMAT_MISMATCH, "Event identifiers must be hashable") from e
    if len(event_ids) < MIN_EVENTS:
        raise _Invalid(EMPTY_SELECTION, "Select at least one event")
    return event_ids


# ── Validator ───────────────────────────────────────────────────────


class DraftValidator:
    """Checks a :class:`QuinielaDraft` against the submission rules.

    ``now`` is always injected so a pass is deterministic: the same draft
    and the same ``now`` give the same result.
    """

    def validate(self, draft: QuinielaDraft, now: datetime) -> ValidationResult:
        now = to_local_naive(now)
        errors: list[FieldError] = []
        passed: dict[str, Any] = {}

        def run(field_name: str, check: Any, *args: Any) -> None:
            try:
                passed[field_name] = check(getattr(draft, field_name), *args)
            except _Invalid as problem:
                errors.append(FieldError(field_name, problem.code, problem.message))

        run("name", _check_name)
        run("description", _check_description)
        run("start_date", _check_start_date, now.date())
        run("start_time", _check_time, "Start time")
        run("end_date", _check_end_date, passed.get("start_date"))
        run("end_time", _check_time, "End time")
        run("entry_price", _check_entry_price)
        run("max_participants", _check_max_participants)
        run("distribution_type", _check_distribution_type)
        for pct_field in PERCENTAGE_FIELDS:
            run(pct_field, _check_percentage)
        run("is_public", _check_flag, "Public flag")
        run("is_crypto", _check_flag, "Crypto flag")
        # Currency rules depend on a well-formed crypto flag
        is_crypto = passed.get("is_crypto")
        if is_crypto is not None:
            run("crypto_currency", _check_crypto_currency, is_crypto)
        run("event_ids", _check_event_ids)

        errors.extend(self._check_schedule(passed, now))
        errors.extend(self._check_prize_split(passed))
        if is_crypto and "crypto_currency" in passed and passed["crypto_currency"] is None:
            errors.append(
                FieldError(
                    "crypto_currency",
                    CONDITIONAL_REQUIREMENT_VIOLATION,
                    "Select a crypto currency when paying with crypto",
                )
            )

        logger.debug("Draft validation finished with %d error(s)", len(errors))
        if errors:
            return ValidationResult(errors=tuple(errors))

        return ValidationResult(
            draft=ValidatedDraft(
                name=passed["name"],
                description=passed["description"],
                start_date=passed["start_date"],
                start_time=passed["start_time"],
                end_date=passed["end_date"],
                end_time=passed["end_time"],
                entry_price=passed["entry_price"],
                max_participants=passed["max_participants"],
                distribution_type=passed["distribution_type"],
                first_place_pct=passed["first_place_pct"],
                second_place_pct=passed["second_place_pct"],
                third_place_pct=passed["third_place_pct"],
                is_public=passed["is_public"],
                is_crypto=passed["is_crypto"],
                crypto_currency=passed["crypto_currency"],
                event_ids=passed["event_ids"],
            )
        )

    @staticmethod
    def _check_schedule(passed: dict[str, Any], now: datetime) -> list[FieldError]:
        """Start strictly in the future, end strictly after start.

        Both errors land on the time controls, even when the date part is
        what made the instant wrong.
        """
        if "start_date" not in passed or "start_time" not in passed:
            return []

        errors: list[FieldError] = []
        start = combine(passed["start_date"], passed["start_time"])
        if start <= now:
            errors.append(
                FieldError(
                    "start_time",
                    TEMPORAL_ORDERING_VIOLATION,
                    "Start date and time must be in the future",
                )
            )

        if "end_date" in passed and "end_time" in passed:
            end = combine(passed["end_date"], passed["end_time"])
            if end <= start:
                errors.append(
                    FieldError(
                        "end_time",
                        TEMPORAL_ORDERING_VIOLATION,
                        "End date and time must be after the start",
                    )
                )
        return errors

    @staticmethod
    def _check_prize_split(passed: dict[str, Any]) -> list[FieldError]:
        required = ("distribution_type", *PERCENTAGE_FIELDS)
        if any(name not in passed for name in required):
            return []
        if passed["distribution_type"] not in DISTRIBUTION_TYPES_REQUIRING_SUM:
            return []

        # Absent percentages count as zero
        total = exact_sum(
            [passed[name] for name in PERCENTAGE_FIELDS if passed[name] is not None]
        )
        if total == PRIZE_PERCENT_TOTAL:
            return []
        return [
            FieldError(
                PERCENTAGES_FIELD,
                DISTRIBUTION_SUM_MISMATCH,
                f"Prize percentages add up to {format_number(total)}% "
                f"- they must add up to {PRIZE_PERCENT_TOTAL}%",
            )
        ]


def validate_draft(draft: QuinielaDraft, now: datetime) -> ValidationResult:
    """Validate *draft* as of *now* (see :class:`DraftValidator`)."""
    return DraftValidator().validate(draft, now)
