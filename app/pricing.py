"""
Parking fee calculation.

Fees are charged per hour with two bands: a day rate for hours starting in
[08:00, 18:00) and a night rate for the rest. An interval is priced in slices
that end on the next top-of-hour, each slice using the band of its own start.
"""

from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP

DAY_RATE = Decimal("14")
NIGHT_RATE = Decimal("6")
DAY_START_HOUR = 8
DAY_END_HOUR = 18

CENTS = Decimal("0.01")
_ONE_HOUR = timedelta(hours=1)
_MICROSECONDS_PER_HOUR = 3600 * 1_000_000


def _microseconds(delta: timedelta) -> int:
    return (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds


def hourly_rate(hour: int) -> Decimal:
    if DAY_START_HOUR <= hour < DAY_END_HOUR:
        return DAY_RATE
    return NIGHT_RATE


def calculate_parking_cost(start_time: datetime, end_time: datetime) -> Decimal:
    """
    Price the interval [start_time, end_time).

    Returns Decimal("0") when end_time is not after start_time.
    """
    total_cost = Decimal("0")
    current_time = start_time

    while current_time < end_time:
        next_hour = current_time.replace(minute=0, second=0, microsecond=0) + _ONE_HOUR
        if next_hour > end_time:
            next_hour = end_time

        elapsed = Decimal(_microseconds(next_hour - current_time))
        total_cost += hourly_rate(current_time.hour) * elapsed / _MICROSECONDS_PER_HOUR

        current_time = next_hour

    return total_cost


def duration_hours(start_time: datetime, end_time: datetime) -> float:
    return (end_time - start_time).total_seconds() / 3600


def round_currency(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_currency(amount: Decimal) -> str:
    return f"${round_currency(amount):,}"
