"""
Tests for sales_analytics.analysis.materializer module.
"""
from datetime import date

from sales_analytics.analysis.materializer import SeriesMaterializer
from sales_analytics.data.models.sales import DailyBucket, DateWindow, Metric


def _bucket(key, days):
    bucket = DailyBucket(dimension_key=key)
    for day, (revenue, count) in days.items():
        bucket.add(day, revenue, count)
    return bucket


class TestSeriesMaterializer:
    """Tests for SeriesMaterializer."""

    def test_gap_fill_inside_bounded_window(self):
        buckets = {"all": _bucket("all", {"2024-03-01": (10.0, 1), "2024-03-05": (20.0, 2)})}
        window = DateWindow(date(2024, 3, 1), date(2024, 3, 5))

        series = SeriesMaterializer().materialize(buckets, window, Metric.REVENUE)

        assert len(series.days) == 5
        assert series.values["all"] == [10.0, 0, 0, 0, 20.0]

    def test_bounded_window_used_verbatim(self):
        buckets = {"all": _bucket("all", {"2024-03-02": (5.0, 1)})}
        window = DateWindow(date(2024, 2, 28), date(2024, 3, 3))

        series = SeriesMaterializer().materialize(buckets, window, Metric.QUANTITY)

        assert series.days[0] == date(2024, 2, 28)
        assert series.days[-1] == date(2024, 3, 3)
        assert series.values["all"] == [0, 0, 0, 1, 0]

    def test_unbounded_window_spans_data(self):
        buckets = {
            "A": _bucket("A", {"2024-03-03": (1.0, 1)}),
            "B": _bucket("B", {"2024-03-01": (2.0, 1)}),
        }
        series = SeriesMaterializer().materialize(buckets, DateWindow.unbounded(), Metric.REVENUE)

        assert series.days == [date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 3)]
        assert list(series.values) == ["A", "B"]
        assert series.values["A"] == [0, 0, 1.0]
        assert series.values["B"] == [2.0, 0, 0]

    def test_no_data_and_no_window(self):
        series = SeriesMaterializer().materialize({}, None, Metric.REVENUE)
        assert series.is_empty
        assert series.values == {}

    def test_no_data_with_bounded_window(self):
        window = DateWindow(date(2024, 3, 1), date(2024, 3, 3))
        series = SeriesMaterializer().materialize({}, window, Metric.REVENUE)
        assert len(series.days) == 3
        assert series.values == {}

    def test_values_are_plain_python_numbers(self):
        buckets = {"all": _bucket("all", {"2024-03-01": (12.5, 3)})}
        series = SeriesMaterializer().materialize(buckets, None, Metric.QUANTITY)
        assert series.values["all"] == [3]
        assert type(series.values["all"][0]) is int

    def test_resolve_display_window(self):
        buckets = {"all": _bucket("all", {"2024-03-04": (1.0, 1), "2024-03-02": (1.0, 1)})}
        window = SeriesMaterializer().resolve_display_window(buckets, None)
        assert window == DateWindow(date(2024, 3, 2), date(2024, 3, 4))
