"""Tests for the draft model and the distribution-mode switch."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from quiniela.core.constants import DISTRIBUTION_DEFAULTS, DISTRIBUTION_TYPES
from quiniela.services.drafts import (
    DRAFT_FIELDS,
    QuinielaDraft,
    distribution_defaults,
    new_draft,
)


class TestDraftDefaults:
    def test_form_open_values(self) -> None:
        draft = new_draft()
        assert draft.name == ""
        assert draft.start_date is None
        assert draft.end_date is None
        assert draft.start_time == "09:00"
        assert draft.end_time == "18:00"
        assert draft.distribution_type == "WINNER_TAKES_ALL"
        assert (draft.first_place_pct, draft.second_place_pct, draft.third_place_pct) == (
            100,
            0,
            0,
        )
        assert draft.is_public is True
        assert draft.is_crypto is False
        assert draft.crypto_currency is None
        assert draft.event_ids == set()

    def test_event_ids_not_shared(self) -> None:
        a, b = new_draft(), new_draft()
        a.event_ids.add(1)
        assert b.event_ids == set()

    def test_overrides(self) -> None:
        draft = new_draft(name="Cup A", event_ids={7})
        assert draft.name == "Cup A"
        assert draft.event_ids == {7}


class TestDistributionDefaults:
    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            ("WINNER_TAKES_ALL", (100, 0, 0)),
            ("TOP_3", (50, 30, 20)),
            ("PERCENTAGE", (60, 25, 15)),
        ],
    )
    def test_table(self, mode: str, expected: tuple[int, int, int]) -> None:
        assert distribution_defaults(mode) == expected

    def test_every_mode_has_defaults(self) -> None:
        assert set(DISTRIBUTION_DEFAULTS) == set(DISTRIBUTION_TYPES)

    def test_every_default_sums_to_100(self) -> None:
        for split in DISTRIBUTION_DEFAULTS.values():
            assert sum(split) == 100

    def test_unknown_mode(self) -> None:
        with pytest.raises(ValueError, match="Invalid distribution_type"):
            distribution_defaults("ELIMINATION")


class TestSetDistributionType:
    @given(
        first=st.integers(min_value=0, max_value=100),
        second=st.integers(min_value=0, max_value=100),
        third=st.integers(min_value=0, max_value=100),
        previous=st.sampled_from(DISTRIBUTION_TYPES),
    )
    @settings(max_examples=100)
    def test_top_3_always_50_30_20(
        self, first: int, second: int, third: int, previous: str
    ) -> None:
        draft = QuinielaDraft(
            distribution_type=previous,
            first_place_pct=first,
            second_place_pct=second,
            third_place_pct=third,
        )
        draft.set_distribution_type("TOP_3")
        assert draft.distribution_type == "TOP_3"
        assert (draft.first_place_pct, draft.second_place_pct, draft.third_place_pct) == (
            50,
            30,
            20,
        )

    def test_percentage_mode(self) -> None:
        draft = new_draft()
        draft.set_distribution_type("PERCENTAGE")
        assert (draft.first_place_pct, draft.second_place_pct, draft.third_place_pct) == (
            60,
            25,
            15,
        )

    def test_back_to_winner_takes_all(self) -> None:
        draft = new_draft()
        draft.set_distribution_type("TOP_3")
        draft.set_distribution_type("WINNER_TAKES_ALL")
        assert (draft.first_place_pct, draft.second_place_pct, draft.third_place_pct) == (
            100,
            0,
            0,
        )

    def test_unknown_mode_leaves_draft_untouched(self) -> None:
        draft = new_draft()
        draft.first_place_pct = 70
        with pytest.raises(ValueError):
            draft.set_distribution_type("TEAMS")
        assert draft.distribution_type == "WINNER_TAKES_ALL"
        assert draft.first_place_pct == 70


class TestUpdate:
    def test_plain_fields(self) -> None:
        draft = new_draft()
        draft.update(name="Derby", entry_price="12.50")
        assert draft.name == "Derby"
        assert draft.entry_price == "12.50"

    def test_distribution_type_resets_percentages(self) -> None:
        draft = new_draft()
        draft.update(distribution_type="TOP_3")
        assert (draft.first_place_pct, draft.second_place_pct, draft.third_place_pct) == (
            50,
            30,
            20,
        )

    def test_explicit_percentages_win_over_defaults(self) -> None:
        draft = new_draft()
        draft.update(distribution_type="PERCENTAGE", first_place_pct=70, third_place_pct=5)
        assert (draft.first_place_pct, draft.second_place_pct, draft.third_place_pct) == (
            70,
            25,
            5,
        )

    def test_unknown_field(self) -> None:
        with pytest.raises(ValueError, match="Unknown draft fields"):
            new_draft().update(nombre="Copa")

    def test_to_dict_has_every_field(self) -> None:
        assert set(new_draft().to_dict()) == DRAFT_FIELDS
