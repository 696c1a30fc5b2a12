import math
import numbers
import re
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Optional, Union

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_amount(value: Any) -> Optional[float]:
    """
    Leniently read a money amount.

    Accepts numbers and numeric strings. A string is read up to the first
    character that cannot continue a number, so "120.50 EUR" gives 120.5.
    Returns None for anything that has no leading number (None, "", "abc",
    booleans, NaN, infinities, numbers too large for a float).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return None
        value = match.group(1)
    elif not isinstance(value, (numbers.Real, Decimal)):
        return None
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_calendar_date(value: Any) -> Optional[date]:
    """Read a calendar date from a date, datetime or ISO string; None otherwise."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def as_instant(value: Union[date, datetime]) -> datetime:
    """Calendar dates become midnight of that day; datetimes are kept as given."""
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    return datetime.combine(value, time.min)
