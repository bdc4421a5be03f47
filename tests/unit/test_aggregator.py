"""
Tests for sales_analytics.analysis.aggregator module.
"""
from datetime import date

from sales_analytics.analysis.aggregator import SalesAggregator
from sales_analytics.data.models.sales import DateWindow, Grouping, SaleRecord


class TestSalesAggregator:
    """Tests for SalesAggregator."""

    def test_empty_input(self):
        assert SalesAggregator().aggregate([], None, Grouping.NONE) == {}

    def test_all_records_outside_window(self, sample_records):
        window = DateWindow(date(2024, 4, 1), date(2024, 4, 30))
        assert SalesAggregator().aggregate(sample_records, window, Grouping.BY_DIMENSION) == {}

    def test_ungrouped_sums_both_metrics(self, sample_records):
        buckets = SalesAggregator().aggregate(sample_records, None, Grouping.NONE)

        assert list(buckets) == ["all"]
        day1 = buckets["all"].get("2024-03-01")
        day3 = buckets["all"].get("2024-03-03")
        assert day1.revenue_sum == 125.0
        assert day1.count_sum == 3
        assert day3.revenue_sum == 210.0
        assert day3.count_sum == 4

    def test_grouped_keys_in_first_seen_order(self, sample_records):
        buckets = SalesAggregator().aggregate(sample_records, None, Grouping.BY_DIMENSION)

        assert list(buckets) == ["A", "organic", "B"]
        assert buckets["A"].get("2024-03-01").revenue_sum == 100.0
        assert buckets["A"].get("2024-03-03").count_sum == 3
        assert buckets["organic"].get("2024-03-01").count_sum == 2
        assert buckets["B"].get("2024-03-01") is None

    def test_custom_unattributed_key(self):
        records = [SaleRecord(date(2024, 3, 1), 10.0)]
        buckets = SalesAggregator(unattributed_key="unknown").aggregate(records, None, Grouping.BY_DIMENSION)
        assert list(buckets) == ["unknown"]

    def test_window_is_inclusive(self):
        records = [
            SaleRecord(date(2024, 2, 29), 1.0),
            SaleRecord(date(2024, 3, 1), 2.0),
            SaleRecord(date(2024, 3, 3), 3.0),
            SaleRecord(date(2024, 3, 4), 4.0),
        ]
        window = DateWindow(date(2024, 3, 1), date(2024, 3, 3))
        buckets = SalesAggregator().aggregate(records, window, Grouping.NONE)
        assert sorted(buckets["all"].days) == ["2024-03-01", "2024-03-03"]

    def test_two_keys_same_day(self):
        records = [
            SaleRecord(date(2024, 3, 1), 10.0, 1, "A"),
            SaleRecord(date(2024, 3, 1), 15.0, 1, "B"),
        ]
        aggregator = SalesAggregator()

        grouped = aggregator.aggregate(records, None, Grouping.BY_DIMENSION)
        ungrouped = aggregator.aggregate(records, None, Grouping.NONE)

        assert len(grouped) == 2
        assert ungrouped["all"].get("2024-03-01").revenue_sum == 25.0

    def test_idempotent(self, sample_records):
        aggregator = SalesAggregator()
        first = aggregator.aggregate(sample_records, None, Grouping.BY_DIMENSION)
        second = aggregator.aggregate(sample_records, None, Grouping.BY_DIMENSION)
        assert first == second
