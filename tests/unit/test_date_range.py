"""
Tests for sales_analytics.analysis.date_range module.
"""
import pytest
from datetime import date

from sales_analytics.analysis.date_range import TimeRange, parse_time_range, resolve_date_window
from sales_analytics.exceptions import InvalidSelection

TODAY = date(2024, 3, 31)


class TestParseTimeRange:
    """Tests for parse_time_range."""

    @pytest.mark.parametrize("value,expected", [
        ("last7days", TimeRange.LAST_7_DAYS),
        ("week", TimeRange.LAST_7_DAYS),
        ("month", TimeRange.LAST_MONTH),
        ("3months", TimeRange.LAST_3_MONTHS),
        ("all", TimeRange.ALL_TIME),
        (TimeRange.CUSTOM, TimeRange.CUSTOM),
    ])
    def test_names_and_aliases(self, value, expected):
        assert parse_time_range(value) == expected

    def test_unknown_selector(self):
        with pytest.raises(InvalidSelection):
            parse_time_range("fortnight")


class TestResolveDateWindow:
    """Tests for resolve_date_window."""

    def test_last_7_days_spans_eight_calendar_days(self):
        window = resolve_date_window("last7days", today=TODAY)
        assert window.start_date == date(2024, 3, 24)
        assert window.end_date == TODAY
        assert window.days() == 8

    def test_last_month_clamps_to_month_end(self):
        window = resolve_date_window("lastMonth", today=TODAY)
        assert window.start_date == date(2024, 2, 29)
        assert window.end_date == TODAY

    def test_last_3_months(self):
        window = resolve_date_window("last3Months", today=date(2024, 5, 31))
        assert window.start_date == date(2024, 2, 29)

    def test_all_time_is_unbounded(self):
        window = resolve_date_window("allTime", today=TODAY)
        assert not window.is_bounded
        assert window.contains(date(1999, 1, 1))

    def test_custom_range(self):
        window = resolve_date_window("custom", "2024-03-01", date(2024, 3, 3), today=TODAY)
        assert window.start_date == date(2024, 3, 1)
        assert window.end_date == date(2024, 3, 3)

    def test_custom_single_day(self):
        window = resolve_date_window("custom", "2024-03-01", "2024-03-01")
        assert window.days() == 1

    @pytest.mark.parametrize("start,end", [
        (None, "2024-03-03"),
        ("2024-03-01", None),
        ("", ""),
    ])
    def test_custom_missing_endpoint(self, start, end):
        with pytest.raises(InvalidSelection):
            resolve_date_window("custom", start, end, today=TODAY)

    def test_custom_reversed_range(self):
        with pytest.raises(InvalidSelection, match="after its end"):
            resolve_date_window("custom", "2024-03-05", "2024-03-01", today=TODAY)

    def test_custom_invalid_date(self):
        with pytest.raises(InvalidSelection):
            resolve_date_window("custom", "2024-13-01", "2024-03-01", today=TODAY)

    def test_preset_ignores_custom_dates(self):
        window = resolve_date_window("last7days", "2020-01-01", "2020-01-02", today=TODAY)
        assert window.end_date == TODAY
