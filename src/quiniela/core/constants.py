"""Domain constants for quiniela drafts."""

from __future__ import annotations

from decimal import Decimal

# ── Prize Distribution ──────────────────────────────────────────────
DISTRIBUTION_TYPES: list[str] = ["WINNER_TAKES_ALL", "TOP_3", "PERCENTAGE"]

# Canonical (first, second, third) percentages applied on mode switch
DISTRIBUTION_DEFAULTS: dict[str, tuple[int, int, int]] = {
    "WINNER_TAKES_ALL": (100, 0, 0),
    "TOP_3": (50, 30, 20),
    "PERCENTAGE": (60, 25, 15),
}

# Modes whose three percentages must add up to exactly PRIZE_PERCENT_TOTAL
DISTRIBUTION_TYPES_REQUIRING_SUM: frozenset[str] = frozenset({"TOP_3", "PERCENTAGE"})

PRIZE_PERCENT_TOTAL = 100

# ── Crypto Payment ──────────────────────────────────────────────────
CRYPTO_CURRENCIES: list[str] = ["BTC", "ETH", "SOL", "ADA", "DOT"]

# ── Field Bounds ────────────────────────────────────────────────────
NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

ENTRY_PRICE_MIN = Decimal("0.01")
ENTRY_PRICE_MAX = Decimal("10000.00")

MAX_PARTICIPANTS_MIN = 2
MAX_PARTICIPANTS_MAX = 1000

PERCENT_MIN = Decimal("0")
PERCENT_MAX = Decimal("100")

MIN_EVENTS = 1

# ── Draft Defaults (form-open values) ───────────────────────────────
DEFAULT_START_TIME = "09:00"
DEFAULT_END_TIME = "18:00"
DEFAULT_DISTRIBUTION_TYPE = "WINNER_TAKES_ALL"
DEFAULT_IS_PUBLIC = True
DEFAULT_IS_CRYPTO = False

# ── Validation Error Codes ──────────────────────────────────────────
MISSING_FIELD = "missing_field"
OUT_OF_RANGE = "out_of_range"
FORMAT_MISMATCH = "format_mismatch"
TEMPORAL_ORDERING_VIOLATION = "temporal_ordering_violation"
DISTRIBUTION_SUM_MISMATCH = "distribution_sum_mismatch"
CONDITIONAL_REQUIREMENT_VIOLATION = "conditional_requirement_violation"
EMPTY_SELECTION = "empty_selection"

VALIDATION_ERROR_CODES: list[str] = [
    MISSING_FIELD,
    OUT_OF_RANGE,
    FORMAT_MISMATCH,
    TEMPORAL_ORDERING_VIOLATION,
    DISTRIBUTION_SUM_MISMATCH,
    CONDITIONAL_REQUIREMENT_VIOLATION,
    EMPTY_SELECTION,
]

# ── Field Names ─────────────────────────────────────────────────────
# Per-field checks report in this order
DRAFT_FIELD_ORDER: list[str] = [
    "name",
    "description",
    "start_date",
    "start_time",
    "end_date",
    "end_time",
    "entry_price",
    "max_participants",
    "distribution_type",
    "first_place_pct",
    "second_place_pct",
    "third_place_pct",
    "is_public",
    "is_crypto",
    "crypto_currency",
    "event_ids",
]

PERCENTAGE_FIELDS: tuple[str, str, str] = (
    "first_place_pct",
    "second_place_pct",
    "third_place_pct",
)

# Synthetic field carrying the prize-sum error
PERCENTAGES_FIELD = "percentages"
