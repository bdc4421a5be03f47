"""
Tests for sales_analytics.sync.woocommerce_client module.
"""
import pytest
import requests
from unittest.mock import MagicMock, patch

from sales_analytics.data.models.platform import WooCommerceOrder
from sales_analytics.sync.woocommerce_client import WooCommerceClient, summarize_orders
from sales_analytics.exceptions import PlatformAPIError, PlatformConnectionError, PlatformDataError


def _response(body, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = body
    return response


@pytest.fixture
def client():
    return WooCommerceClient(url="https://shop.test///", consumer_key="ck", consumer_secret="cs")


class TestWooCommerceClient:

    def test_trailing_slashes_stripped(self, client):
        assert client.base_url == "https://shop.test/wp-json/wc/v3"

    def test_test_connection(self, client):
        body = {"store": {"name": "Test Shop", "version": "8.6.1"}}
        with patch("sales_analytics.sync.woocommerce_client.requests.get", return_value=_response(body)) as mock_get:
            store = client.test_connection()

        assert store.name == "Test Shop"
        assert mock_get.call_args[1]["auth"] == ("ck", "cs")

    def test_invalid_credentials(self, client):
        with patch("sales_analytics.sync.woocommerce_client.requests.get",
                   return_value=_response({"code": "woocommerce_rest_cannot_view"}, 401)):
            with pytest.raises(PlatformAPIError, match="Invalid credentials") as exc_info:
                client.test_connection()
        assert exc_info.value.status_code == 401

    def test_fetch_orders_with_date_range(self, client, woo_order_payload):
        with patch("sales_analytics.sync.woocommerce_client.requests.get",
                   return_value=_response([woo_order_payload])) as mock_get:
            orders = client.fetch_orders({"start": "2024-03-01", "end": "2024-03-31"})

        assert [o.id for o in orders] == [4321]
        params = mock_get.call_args[1]["params"]
        assert params == {
            "per_page": "100",
            "order": "desc",
            "after": "2024-03-01T00:00:00",
            "before": "2024-03-31T23:59:59",
            "page": "1",
        }
        assert mock_get.call_args[0][0] == "https://shop.test/wp-json/wc/v3/orders"

    def test_fetch_orders_follows_pages_until_short_page(self, client, woo_order_payload):
        pages = [
            [dict(woo_order_payload, id=3), dict(woo_order_payload, id=2)],
            [dict(woo_order_payload, id=1)],
        ]
        with patch("sales_analytics.sync.woocommerce_client.requests.get",
                   side_effect=[_response(page) for page in pages]) as mock_get:
            orders = client.fetch_orders(per_page=2)

        assert [o.id for o in orders] == [3, 2, 1]
        assert [c[1]["params"]["page"] for c in mock_get.call_args_list] == ["1", "2"]

    def test_fetch_orders_stops_at_max_pages(self, client, woo_order_payload):
        with patch("sales_analytics.sync.woocommerce_client.requests.get",
                   return_value=_response([woo_order_payload])) as mock_get:
            orders = client.fetch_orders(per_page=1, max_pages=3)

        assert mock_get.call_count == 3
        assert len(orders) == 3

    def test_fetch_orders_error_message(self, client):
        with patch("sales_analytics.sync.woocommerce_client.requests.get",
                   return_value=_response({"message": "Invalid parameter(s): after"}, 400)):
            with pytest.raises(PlatformAPIError) as exc_info:
                client.fetch_orders()
        assert exc_info.value.details == "Invalid parameter(s): after"

    def test_fetch_orders_not_a_list(self, client):
        with patch("sales_analytics.sync.woocommerce_client.requests.get", return_value=_response({"id": 1})):
            with pytest.raises(PlatformDataError):
                client.fetch_orders()

    def test_network_error(self, client):
        with patch("sales_analytics.sync.woocommerce_client.requests.get",
                   side_effect=requests.exceptions.Timeout("slow")):
            with pytest.raises(PlatformConnectionError):
                client.fetch_orders()


class TestSummarizeOrders:

    def test_counts(self, woo_order_payload, woo_organic_order_payload):
        orders = [WooCommerceOrder.from_api(woo_organic_order_payload), WooCommerceOrder.from_api(woo_order_payload)]

        summary = summarize_orders(orders)

        assert summary.total_orders == 2
        assert summary.orders_with_utm == 1
        assert summary.orders_without_utm == 1
        assert summary.unique_campaigns == ("Spring Launch",)
        assert summary.date_range == {"start": "2024-03-02", "end": "2024-03-04"}

    def test_requested_range_wins(self):
        summary = summarize_orders([], {"start": "2024-01-01", "end": "2024-01-31"})
        assert summary.total_orders == 0
        assert summary.date_range == {"start": "2024-01-01", "end": "2024-01-31"}
