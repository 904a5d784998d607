from __future__ import annotations

from datetime import date, datetime

import pytest

from pocketledger.domain import period as period_module
from pocketledger.domain.period import Period


@pytest.mark.parametrize(
    "start, delta, expected",
    [
        (Period(2025, 3), 1, Period(2025, 4)),
        (Period(2025, 3), -1, Period(2025, 2)),
        (Period(2025, 12), 1, Period(2026, 1)),
        (Period(2025, 1), -1, Period(2024, 12)),
        (Period(2025, 3), 0, Period(2025, 3)),
        (Period(2025, 3), 22, Period(2027, 1)),
        (Period(2025, 3), -27, Period(2022, 12)),
    ],
)
def test_shift_rolls_over_years(start, delta, expected):
    assert start.shift(delta) == expected
    assert period_module.shift(start, delta) == expected


def test_shift_is_pure():
    original = Period(2025, 3)
    original.shift(5)
    assert original == Period(2025, 3)


def test_query_key_is_zero_padded():
    assert Period(2025, 3).to_query_key() == "2025-03"
    assert period_module.to_query_key(Period(2025, 11)) == "2025-11"


def test_label_uses_full_month_name():
    assert Period(2025, 3).label() == "March 2025"
    assert period_module.label(Period(2024, 12)) == "December 2024"


def test_month_must_be_normalized():
    with pytest.raises(ValueError):
        Period(2025, 13)
    with pytest.raises(ValueError):
        Period(2025, 0)


def test_first_and_last_day():
    feb = Period(2024, 2)
    assert feb.first_day == date(2024, 2, 1)
    assert feb.last_day == date(2024, 2, 29)


def test_contains_and_from_date():
    march = Period.from_date(date(2025, 3, 17))
    assert march == Period(2025, 3)
    assert march.contains(datetime(2025, 3, 31, 23, 59))
    assert not march.contains(datetime(2025, 4, 1))


def test_periods_order_chronologically():
    assert Period(2024, 12) < Period(2025, 1) < Period(2025, 2)
