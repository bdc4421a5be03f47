"""
Resolution of time-range selectors into date windows.
"""
from datetime import date, timedelta
from enum import Enum
from typing import Optional

from sales_analytics.data.models.sales import DateWindow
from sales_analytics.exceptions import InvalidSelection
from sales_analytics.utils.date_helpers import DateLike, parse_day, subtract_months


class TimeRange(str, Enum):
    LAST_7_DAYS = "last7days"
    LAST_MONTH = "lastMonth"
    LAST_3_MONTHS = "last3Months"
    ALL_TIME = "allTime"
    CUSTOM = "custom"


# Short names used by the dashboard's older selector
TIME_RANGE_ALIASES = {
    "week": TimeRange.LAST_7_DAYS,
    "month": TimeRange.LAST_MONTH,
    "3months": TimeRange.LAST_3_MONTHS,
    "all": TimeRange.ALL_TIME,
}


def parse_time_range(selector) -> TimeRange:
    """
    Parse a time-range selector.
    
    Args:
        selector: A ``TimeRange`` or one of its names or aliases
    
    Returns:
        TimeRange: The parsed selector
    
    Raises:
        InvalidSelection: If the selector is not recognised
    """
    if isinstance(selector, TimeRange):
        return selector
    if selector in TIME_RANGE_ALIASES:
        return TIME_RANGE_ALIASES[selector]
    try:
        return TimeRange(selector)
    except ValueError:
        raise InvalidSelection("Unknown time range", details=str(selector))


def resolve_date_window(
    selector,
    custom_start: Optional[DateLike] = None,
    custom_end: Optional[DateLike] = None,
    today: Optional[date] = None
) -> DateWindow:
    """
    Turn a time-range selector into a concrete date window.
    
    Preset windows end on ``today`` (inclusive). Month arithmetic is by
    calendar month and clamps to the month end, so 31 March minus one
    month is the last day of February.
    
    Args:
        selector: Time range name (``last7days``, ``lastMonth``,
            ``last3Months``, ``allTime``, ``custom``) or ``TimeRange``
        custom_start (Optional[DateLike]): Start day for ``custom``
        custom_end (Optional[DateLike]): End day for ``custom``
        today (Optional[date]): Reference day, defaults to the local date
    
    Returns:
        DateWindow: The resolved window; unbounded for ``allTime``
    
    Raises:
        InvalidSelection: If ``custom`` lacks an endpoint or is reversed,
            or the selector is unknown
    """
    time_range = parse_time_range(selector)
    today = today or date.today()
    
    if time_range == TimeRange.LAST_7_DAYS:
        return DateWindow(today - timedelta(days=7), today)
    if time_range == TimeRange.LAST_MONTH:
        return DateWindow(subtract_months(today, 1), today)
    if time_range == TimeRange.LAST_3_MONTHS:
        return DateWindow(subtract_months(today, 3), today)
    if time_range == TimeRange.ALL_TIME:
        return DateWindow.unbounded()
    
    # Custom range waits until both ends are picked
    if custom_start in (None, "") or custom_end in (None, ""):
        raise InvalidSelection("Custom range needs both a start and an end date")
    try:
        start = parse_day(custom_start)
        end = parse_day(custom_end)
    except ValueError as e:
        raise InvalidSelection("Custom range dates are not valid", details=str(e))
    if start > end:
        raise InvalidSelection(
            "Custom range start is after its end",
            details=f"{start.isoformat()} > {end.isoformat()}"
        )
    return DateWindow(start, end)
