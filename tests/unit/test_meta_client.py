"""
Tests for sales_analytics.sync.meta_client module.
"""
import pytest
import requests
from unittest.mock import MagicMock, patch

from sales_analytics.sync.meta_client import MetaAdsClient
from sales_analytics.exceptions import PlatformAPIError, PlatformConnectionError, PlatformDataError


def _response(body, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = body
    return response


@pytest.fixture
def client():
    return MetaAdsClient(access_token="token", account_id="act_123", base_url="https://graph.test/v21.0")


class TestMetaAdsClient:

    def test_init_strips_account_prefix(self, client):
        assert client.account_id == "123"
        assert client.account_path == "act_123"

    def test_init_requires_credentials(self):
        with pytest.raises(ValueError):
            MetaAdsClient(access_token="", account_id="123")

    def test_test_connection(self, client):
        body = {"id": "act_123", "name": "Shop Ads", "currency": "USD", "timezone_name": "America/New_York"}
        with patch("sales_analytics.sync.meta_client.requests.get", return_value=_response(body)) as mock_get:
            account = client.test_connection()

        assert account.name == "Shop Ads"
        assert account.currency == "USD"
        url = mock_get.call_args[0][0]
        params = mock_get.call_args[1]["params"]
        assert url == "https://graph.test/v21.0/act_123"
        assert params["access_token"] == "token"
        assert "currency" in params["fields"]

    def test_fetch_campaigns(self, client, meta_campaign_payload):
        with patch("sales_analytics.sync.meta_client.requests.get",
                   return_value=_response({"data": [meta_campaign_payload]})) as mock_get:
            campaigns = client.fetch_campaigns(limit=50)

        assert [c.id for c in campaigns] == ["120210000000001"]
        assert mock_get.call_args[0][0].endswith("/act_123/campaigns")
        assert mock_get.call_args[1]["params"]["limit"] == "50"

    def test_fetch_insights_keyed_by_campaign(self, client, meta_insight_payload):
        with patch("sales_analytics.sync.meta_client.requests.get",
                   return_value=_response({"data": [meta_insight_payload]})) as mock_get:
            insights = client.fetch_insights()

        assert insights["120210000000001"].purchases == 8
        params = mock_get.call_args[1]["params"]
        assert params["level"] == "campaign"
        assert params["date_preset"] == "maximum"

    def test_error_body_raises_api_error(self, client):
        body = {"error": {"message": "Invalid OAuth access token.", "code": 190}}
        with patch("sales_analytics.sync.meta_client.requests.get", return_value=_response(body, 400)):
            with pytest.raises(PlatformAPIError) as exc_info:
                client.fetch_campaigns()

        assert exc_info.value.status_code == 400
        assert exc_info.value.details == "Invalid OAuth access token."
        assert exc_info.value.platform == "meta"

    def test_network_error(self, client):
        with patch("sales_analytics.sync.meta_client.requests.get",
                   side_effect=requests.exceptions.ConnectionError("refused")):
            with pytest.raises(PlatformConnectionError):
                client.fetch_insights()

    def test_data_must_be_list(self, client):
        with patch("sales_analytics.sync.meta_client.requests.get", return_value=_response({"data": {}})):
            assert client.fetch_campaigns() == []
        with patch("sales_analytics.sync.meta_client.requests.get", return_value=_response({"data": "x"})):
            with pytest.raises(PlatformDataError):
                client.fetch_campaigns()
