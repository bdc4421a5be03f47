"""
Tests for the CSV and HTML exporters.
"""
import os
import pandas as pd
from datetime import date

from sales_analytics.analysis.chart_builder import ChartDatasetBuilder, ReferenceLabeler
from sales_analytics.analysis.exporters import CSVExporter, HTMLExporter
from sales_analytics.analysis.materializer import MaterializedSeries
from sales_analytics.data.models.sales import Metric


def _chart(grouped=True):
    series = MaterializedSeries(
        days=[date(2024, 3, 1), date(2024, 3, 2)],
        values={"A": [10.0, 0.0], "B": [0.0, 5.5]} if grouped else {"all": [10.0, 5.5]}
    )
    return ChartDatasetBuilder(date_format="%m/%d/%Y").build(series, Metric.REVENUE, grouped=grouped)


class TestCSVExporter:

    def test_prepare_dataframe_long_format(self):
        df = CSVExporter().prepare_dataframe(_chart())

        assert list(df.columns) == ["date", "series", "value"]
        assert len(df) == 4
        assert df.iloc[3].to_dict() == {"date": "03/02/2024", "series": "B", "value": 5.5}

    def test_export_writes_report_and_combined_files(self, tmp_path):
        output = CSVExporter().export({"campaign": _chart(), "all": _chart(grouped=False)}, str(tmp_path), "lastMonth")

        assert output == os.path.join(str(tmp_path), "lastMonth")
        assert sorted(os.listdir(output)) == ["all_revenue.csv", "campaign_revenue.csv", "combined_sales.csv"]

        wide = pd.read_csv(os.path.join(output, "campaign_revenue.csv"))
        assert list(wide.columns) == ["Date", "A", "B"]

        combined = pd.read_csv(os.path.join(output, "combined_sales.csv"))
        assert set(combined["report"]) == {"campaign", "all"}
        assert set(combined["metric"]) == {"revenue"}

    def test_export_keeps_series_with_duplicate_names(self, tmp_path):
        series = MaterializedSeries(days=[date(2024, 3, 1)], values={"1": [10.0], "2": [4.0]})
        labeler = ReferenceLabeler({"1": "Spring Sale", "2": "Spring Sale"})
        chart = ChartDatasetBuilder(date_format="%m/%d/%Y").build(series, Metric.REVENUE, labeler, grouped=True)

        output = CSVExporter().export({"campaign": chart}, str(tmp_path), "custom")

        wide = pd.read_csv(os.path.join(output, "campaign_revenue.csv"))
        assert list(wide.columns) == ["Date", "Spring Sale (1)", "Spring Sale (2)"]
        combined = pd.read_csv(os.path.join(output, "combined_sales.csv"))
        assert list(combined["value"]) == [10.0, 4.0]
        assert combined["series"].nunique() == 2


class TestHTMLExporter:

    def test_export_writes_html(self, tmp_path):
        output = HTMLExporter().export({"campaign": _chart()}, str(tmp_path))

        path = os.path.join(output, "campaign_revenue.html")
        assert os.path.exists(path)
        with open(path, encoding="utf-8") as f:
            assert "plotly" in f.read().lower()
