from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from app.pricing import (
    DAY_RATE,
    NIGHT_RATE,
    calculate_parking_cost,
    duration_hours,
    format_currency,
    hourly_rate,
    round_currency,
)


def at(hour, minute=0, day=4):
    return datetime(2024, 3, day, hour, minute)


def test_empty_interval_is_free():
    assert calculate_parking_cost(at(10, 15), at(10, 15)) == Decimal("0")


def test_reversed_interval_is_free():
    assert calculate_parking_cost(at(12), at(9)) == Decimal("0")


def test_one_day_hour():
    assert calculate_parking_cost(at(8), at(9)) == Decimal("14")


def test_one_night_hour():
    assert calculate_parking_cost(at(18), at(19)) == Decimal("6")


def test_interval_crossing_evening_boundary_is_split_at_the_hour():
    cost = calculate_parking_cost(at(17, 40), at(18, 20))

    assert round_currency(cost) == Decimal("6.67")
    assert cost > Decimal("6.66")


def test_interval_crossing_morning_boundary():
    # 07:30-08:00 at night rate, 08:00-08:30 at day rate
    assert calculate_parking_cost(at(7, 30), at(8, 30)) == Decimal("10")


def test_two_full_day_hours():
    assert calculate_parking_cost(at(9), at(11)) == Decimal("28")


def test_full_day():
    # 10 day hours and 14 night hours
    assert calculate_parking_cost(at(0), at(0, day=5)) == 10 * DAY_RATE + 14 * NIGHT_RATE


def test_unaligned_start_is_priced_to_the_top_of_the_hour():
    cost = calculate_parking_cost(at(9, 45), at(10, 15))

    assert cost == Decimal("7")


def test_sub_second_intervals_stay_decimal():
    start = at(9)
    cost = calculate_parking_cost(start, start + timedelta(microseconds=1))

    assert isinstance(cost, Decimal)
    assert cost > 0


def test_cost_never_decreases_as_the_interval_grows():
    start = at(16, 50)
    previous = Decimal("0")
    for minutes in range(0, 24 * 60, 7):
        cost = calculate_parking_cost(start, start + timedelta(minutes=minutes))
        assert cost >= previous
        previous = cost


@pytest.mark.parametrize("hour,rate", [(0, NIGHT_RATE), (7, NIGHT_RATE), (8, DAY_RATE), (17, DAY_RATE), (18, NIGHT_RATE), (23, NIGHT_RATE)])
def test_hourly_rate_bands(hour, rate):
    assert hourly_rate(hour) == rate


def test_formatting_helpers():
    assert duration_hours(at(9), at(11, 30)) == 2.5
    assert format_currency(Decimal("6.666")) == "$6.67"
    assert format_currency(Decimal("1234.5")) == "$1,234.50"
