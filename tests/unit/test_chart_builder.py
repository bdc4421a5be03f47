"""
Tests for sales_analytics.analysis.chart_builder module.
"""
import pytest
from datetime import date

from sales_analytics.analysis.aggregator import SalesAggregator
from sales_analytics.analysis.chart_builder import (
    ChartDataset,
    ChartDatasetBuilder,
    ChartSeries,
    ReferenceLabeler,
    format_metric_value,
    to_background_color
)
from sales_analytics.analysis.materializer import MaterializedSeries, SeriesMaterializer
from sales_analytics.config.app_config import COLOR_PALETTE
from sales_analytics.data.models.sales import DateWindow, Grouping, Metric, SaleRecord


def _series(keys, days=3):
    day_list = [date(2024, 3, 1 + i) for i in range(days)]
    return MaterializedSeries(days=day_list, values={key: [1.0] * days for key in keys})


class TestHelpers:
    """Tests for color and value formatting helpers."""

    def test_background_color(self):
        assert to_background_color("rgb(75, 192, 192)") == "rgba(75, 192, 192, 0.2)"

    def test_background_color_rejects_hex(self):
        with pytest.raises(ValueError):
            to_background_color("#ffffff")

    def test_format_revenue(self):
        assert format_metric_value(12.5, Metric.REVENUE) == "$12.50"

    def test_format_quantity(self):
        assert format_metric_value(3, Metric.QUANTITY) == "3 sales"


class TestReferenceLabeler:
    """Tests for ReferenceLabeler."""

    def test_known_name(self):
        assert ReferenceLabeler({"111": "Spring Launch"})("111") == "Spring Launch"

    def test_unattributed(self):
        assert ReferenceLabeler({})("organic") == "Organic"

    def test_fallback_template(self):
        labeler = ReferenceLabeler({}, unattributed_key="unknown", fallback_template="Product {key}")
        assert labeler("42") == "Product 42"

    def test_raw_key_fallback(self):
        assert ReferenceLabeler()("999") == "999"


class TestChartDatasetBuilder:
    """Tests for ChartDatasetBuilder."""

    def test_end_to_end_example(self):
        records = [
            SaleRecord(date(2024, 3, 1), 100.0, 1, "A"),
            SaleRecord(date(2024, 3, 3), 200.0, 1, "B"),
        ]
        window = DateWindow(date(2024, 3, 1), date(2024, 3, 3))

        buckets = SalesAggregator().aggregate(records, window, Grouping.BY_DIMENSION)
        series = SeriesMaterializer().materialize(buckets, window, Metric.REVENUE)
        chart = ChartDatasetBuilder(date_format="%m/%d/%Y").build(series, Metric.REVENUE, grouped=True)

        assert chart.labels == ["03/01/2024", "03/02/2024", "03/03/2024"]
        assert [d.label for d in chart.datasets] == ["A", "B"]
        assert chart.datasets[0].data == [100.0, 0, 0]
        assert chart.datasets[1].data == [0, 0, 200.0]
        assert chart.show_legend is True
        assert chart.axis_title == "Sales ($)"

    @pytest.mark.parametrize("metric,expected", [
        (Metric.REVENUE, [50.0]),
        (Metric.QUANTITY, [2]),
    ])
    def test_metric_switch_example(self, metric, expected):
        records = [SaleRecord(date(2024, 1, 1), 50.0, 2, None)]
        window = DateWindow(date(2024, 1, 1), date(2024, 1, 1))

        buckets = SalesAggregator().aggregate(records, window, Grouping.NONE)
        series = SeriesMaterializer().materialize(buckets, window, metric)
        chart = ChartDatasetBuilder(date_format="%m/%d/%Y").build(series, metric)

        assert chart.labels == ["01/01/2024"]
        assert len(chart.datasets) == 1
        assert chart.datasets[0].data == expected

    def test_palette_in_first_seen_order_with_wrap(self):
        keys = [f"k{i}" for i in range(len(COLOR_PALETTE) + 1)]
        chart = ChartDatasetBuilder().build(_series(keys), Metric.REVENUE, grouped=True)

        colors = [d.border_color for d in chart.datasets]
        assert colors[:len(COLOR_PALETTE)] == COLOR_PALETTE
        assert colors[-1] == COLOR_PALETTE[0]
        assert chart.datasets[1].background_color == "rgba(255, 99, 132, 0.2)"

    def test_grouped_labels_use_display_names(self):
        labeler = ReferenceLabeler({"111": "Spring Launch"})
        chart = ChartDatasetBuilder().build(_series(["111", "organic"]), Metric.REVENUE, labeler, grouped=True)
        assert [d.label for d in chart.datasets] == ["Spring Launch", "Organic"]

    def test_ungrouped_single_dataset(self):
        chart = ChartDatasetBuilder().build(_series(["all"]), Metric.QUANTITY, grouped=False)

        assert len(chart.datasets) == 1
        assert chart.datasets[0].label == "Daily Sales (Qty)"
        assert chart.axis_title == "Quantity"
        assert chart.show_legend is False

    def test_ungrouped_zero_filled_when_no_data(self):
        series = MaterializedSeries(days=[date(2024, 3, 1), date(2024, 3, 2)], values={})
        chart = ChartDatasetBuilder().build(series, Metric.REVENUE, grouped=False)

        assert chart.labels == ["03/01/2024", "03/02/2024"]
        assert chart.datasets[0].label == "Daily Sales ($)"
        assert chart.datasets[0].data == [0.0, 0.0]

    def test_ungrouped_empty_without_window(self):
        chart = ChartDatasetBuilder().build(MaterializedSeries(), Metric.REVENUE, grouped=False)
        assert chart.is_empty
        assert len(chart.datasets) == 1
        assert chart.datasets[0].data == []

    def test_grouped_empty(self):
        chart = ChartDatasetBuilder().build(MaterializedSeries(), Metric.REVENUE, grouped=True)
        assert chart.labels == []
        assert chart.datasets == []

    def test_date_format_per_builder(self):
        chart = ChartDatasetBuilder(date_format="%d/%m/%Y").build(_series(["all"], days=1), Metric.REVENUE)
        assert chart.labels == ["01/03/2024"]

    def test_same_inputs_same_output(self):
        builder = ChartDatasetBuilder()
        series = _series(["A", "B"])
        assert builder.build(series, Metric.REVENUE, grouped=True) == builder.build(series, Metric.REVENUE, grouped=True)

    def test_empty_palette_rejected(self):
        with pytest.raises(ValueError):
            ChartDatasetBuilder(palette=[])


class TestChartSeries:
    """Tests for ChartSeries output structures."""

    def test_length_mismatch_rejected(self):
        with pytest.raises(ValueError):
            ChartSeries(labels=["a", "b"], datasets=[ChartDataset("x", [1.0], "rgb(1, 2, 3)", "rgba(1, 2, 3, 0.2)")])

    def test_to_dict(self):
        chart = ChartDatasetBuilder().build(_series(["all"], days=2), Metric.REVENUE)
        payload = chart.to_dict()

        assert payload["labels"] == ["03/01/2024", "03/02/2024"]
        assert payload["datasets"][0]["borderColor"] == COLOR_PALETTE[0]
        assert payload["datasets"][0]["backgroundColor"] == "rgba(75, 192, 192, 0.2)"
        assert payload["options"] == {"yAxisTitle": "Sales ($)", "showLegend": False}

    def test_to_frame(self):
        chart = ChartDatasetBuilder().build(_series(["A", "B"], days=2), Metric.REVENUE, grouped=True)
        df = chart.to_frame()

        assert list(df.columns) == ["A", "B"]
        assert list(df.index) == ["03/01/2024", "03/02/2024"]
        assert df.index.name == "Date"

    def test_to_frame_keeps_datasets_with_the_same_label(self):
        labeler = ReferenceLabeler({"1": "Spring Sale", "2": "Spring Sale", "3": "Retargeting"})
        chart = ChartDatasetBuilder().build(_series(["1", "2", "3"], days=2), Metric.REVENUE, labeler, grouped=True)

        df = chart.to_frame()

        assert list(df.columns) == ["Spring Sale (1)", "Spring Sale (2)", "Retargeting"]
        assert [d.label for d in chart.datasets] == ["Spring Sale", "Spring Sale", "Retargeting"]
