"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, timedelta
from typing import Union

from schedule_engine.domain.exceptions import InvalidArgumentError


def parse_iso_date(value: Union[date, str]) -> date:
    """Accept a date, a datetime (time dropped) or a YYYY-MM-DD string"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid date: {value!r}") from e


def add_days(from_date: date, days: int) -> date:
    return from_date + timedelta(days=days)


def add_months(from_date: date, months: int) -> date:
    """
    Add calendar months, clamping to the last day of the target month.

    Example: Jan 31 + 1 month -> Feb 28 (or Feb 29 in a leap year)
    """
    month_index = from_date.month - 1 + months
    year = from_date.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(from_date.day, last_day))


def add_years(from_date: date, years: int) -> date:
    """Add calendar years; Feb 29 becomes Feb 28 in non-leap years"""
    year = from_date.year + years
    if from_date.month == 2 and from_date.day == 29 and not calendar.isleap(year):
        return date(year, 2, 28)
    return from_date.replace(year=year)
