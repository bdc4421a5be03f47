"""
Date helper utilities for sales analytics.
"""
from datetime import date, datetime
from typing import Union

import pandas as pd

ISO_DAY_FORMAT = '%Y-%m-%d'

DateLike = Union[str, date, datetime, pd.Timestamp]


def parse_day(value: DateLike) -> date:
    """
    Normalize a date-like value to a calendar day.
    
    Accepts ``YYYY-MM-DD`` strings, ISO timestamps (the time-of-day and any
    offset are discarded, the calendar day as written is kept), ``date``,
    ``datetime`` and pandas timestamps.
    
    Args:
        value (DateLike): The value to normalize
    
    Returns:
        date: The calendar day
    
    Raises:
        ValueError: If the value cannot be interpreted as a date
    """
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # Keep the day as written, like splitting an ISO timestamp on 'T'
        day_part = value.strip().split('T')[0].split(' ')[0]
        return datetime.strptime(day_part, ISO_DAY_FORMAT).date()
    raise ValueError(f"Unsupported date value: {value!r}")


def to_iso_day(day: date) -> str:
    """
    Format a calendar day as ``YYYY-MM-DD``.
    
    Args:
        day (date): The day to format
    
    Returns:
        str: ISO day string
    """
    return day.strftime(ISO_DAY_FORMAT)


def format_date_for_display(day: Union[str, date], date_format: str) -> str:
    """
    Format a calendar day for chart labels.
    
    Args:
        day (Union[str, date]): Day as a ``date`` or ``YYYY-MM-DD`` string
        date_format (str): strftime pattern, e.g. ``%m/%d/%Y``
    
    Returns:
        str: Display label
    """
    if isinstance(day, str):
        day = parse_day(day)
    return day.strftime(date_format)


def subtract_months(day: date, months: int) -> date:
    """
    Move a day back by whole calendar months, clamping to the month end.
    
    Args:
        day (date): Starting day
        months (int): Number of months to subtract
    
    Returns:
        date: The shifted day
    """
    return (pd.Timestamp(day) - pd.DateOffset(months=months)).date()


def get_timestamp_str() -> str:
    """
    Get a timestamp string for filenames.
    
    Returns:
        str: Timestamp string (YYYYMMDD_HHMMSS)
    """
    return datetime.now().strftime("%Y%m%d_%H%M%S")
