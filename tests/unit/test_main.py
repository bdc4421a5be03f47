"""
Tests for sales_analytics.main module.
"""
import logging
import os
import pytest
from datetime import date
from unittest.mock import MagicMock, patch

from sales_analytics.exceptions import InvalidSelection
from sales_analytics.main import SalesAnalyticsApp, run_report


@pytest.fixture
def app(fake_connector):
    with patch("sales_analytics.main.setup_logging", return_value=logging.getLogger("test")):
        yield SalesAnalyticsApp(connector=fake_connector, user_id="u1", today_provider=lambda: date(2024, 3, 3))


class TestSalesAnalyticsApp:

    def test_configure_defaults(self, app):
        app.configure(output_dir="out")
        assert app.reports == ["all", "campaign", "product"]
        assert app.metric.value == "revenue"

    def test_configure_ignores_unknown_reports(self, app):
        app.configure(reports=["campaign", "region"], metric="bogus", output_dir="out")
        assert app.reports == ["campaign"]
        assert app.metric.value == "revenue"

    def test_build_charts(self, app):
        app.configure(reports=["all", "product"], time_range="custom",
                      start_date="2024-03-01", end_date="2024-03-03", locale="en_GB", output_dir="out")

        charts = app.build_charts()

        assert list(charts) == ["all", "product"]
        assert charts["all"].labels == ["01/03/2024", "02/03/2024", "03/03/2024"]

    def test_build_charts_invalid_range(self, app):
        app.configure(time_range="custom", start_date="2024-03-01", output_dir="out")
        with pytest.raises(InvalidSelection):
            app.build_charts()

    def test_run_report_exports_and_disconnects(self, app, fake_connector, tmp_path):
        fake_connector.connect()
        app.configure(reports=["campaign"], time_range="last7days", output_dir=str(tmp_path))

        output = app.run_report()

        assert os.path.exists(os.path.join(output, "campaign_revenue.csv"))
        assert fake_connector.connected is False

    def test_run_woo_sync_uses_given_client(self, app, woo_order_payload):
        from sales_analytics.data.models.platform import WooCommerceOrder
        woo_client = MagicMock()
        woo_client.fetch_orders.return_value = [WooCommerceOrder.from_api(woo_order_payload)]

        result = app.run_woo_sync("2024-03-01", "2024-03-31", woo_client=woo_client)

        assert result.synced == 1
        woo_client.fetch_orders.assert_called_once_with({"start": "2024-03-01", "end": "2024-03-31"})

    @pytest.mark.parametrize("start, end", [
        ("2024-03-01", None),
        (None, "2024-03-31"),
        ("2024-03-01", "31/03/2024"),
    ])
    def test_run_woo_sync_rejects_incomplete_range(self, app, fake_connector, start, end):
        woo_client = MagicMock()

        with pytest.raises(InvalidSelection):
            app.run_woo_sync(start, end, woo_client=woo_client)

        woo_client.fetch_orders.assert_not_called()
        assert fake_connector.data_statements == []
        assert fake_connector.connected is False

    def test_run_woo_sync_without_dates_fetches_newest(self, app, woo_order_payload):
        from sales_analytics.data.models.platform import WooCommerceOrder
        woo_client = MagicMock()
        woo_client.fetch_orders.return_value = [WooCommerceOrder.from_api(woo_order_payload)]

        app.run_woo_sync(woo_client=woo_client)

        woo_client.fetch_orders.assert_called_once_with(None)


def test_run_report_function(fake_connector, tmp_path):
    with patch("sales_analytics.main.setup_logging", return_value=logging.getLogger("test")):
        output = run_report(reports=["all"], output_dir=str(tmp_path), html=True, connector=fake_connector)

    assert sorted(os.listdir(output)) == ["all_revenue.csv", "all_revenue.html", "combined_sales.csv"]
