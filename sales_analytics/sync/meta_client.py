"""
HTTP client for the Meta Marketing (Graph) API.

Only request and payload-validation code lives here; mapping to database
rows is done by SyncService.
"""
import logging
import requests
from typing import Any, Dict, List, Optional

from sales_analytics.config.sync_config import (
    META_ACCESS_TOKEN,
    META_ACCOUNT_FIELDS,
    META_AD_ACCOUNT_ID,
    META_BASE_URL,
    META_CAMPAIGN_FIELDS,
    META_INSIGHT_FIELDS,
    REQUEST_TIMEOUT
)
from sales_analytics.data.models.platform import MetaAccountInfo, MetaCampaign, MetaCampaignInsight
from sales_analytics.exceptions import PlatformAPIError, PlatformConnectionError, PlatformDataError

logger = logging.getLogger(__name__)

PLATFORM = "meta"


class MetaAdsClient:
    """HTTP client for one Meta ad account."""
    
    def __init__(
        self,
        access_token: str = META_ACCESS_TOKEN,
        account_id: str = META_AD_ACCOUNT_ID,
        base_url: str = META_BASE_URL,
        timeout: float = REQUEST_TIMEOUT
    ):
        """
        Initialize the Meta Ads client.
        
        Args:
            access_token: Marketing API access token
            account_id: Ad account id, with or without the ``act_`` prefix
            base_url: Graph API base URL including the version
            timeout: Request timeout in seconds
        """
        if not access_token or not account_id:
            raise ValueError("Meta access token and ad account id are required")
        self.access_token = access_token
        self.account_id = account_id[len("act_"):] if account_id.startswith("act_") else account_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
    
    @property
    def account_path(self) -> str:
        return f"act_{self.account_id}"
    
    def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Make a GET request to the Graph API.
        
        Args:
            endpoint: Path below the base URL
            params: Query parameters; the access token is added
        
        Returns:
            Parsed JSON body
        
        Raises:
            PlatformConnectionError: On network failures
            PlatformAPIError: When the body carries an ``error`` object or
                the response is not JSON
        """
        url = f"{self.base_url}/{endpoint}"
        query = {"access_token": self.access_token}
        query.update(params or {})
        
        try:
            response = requests.get(url, params=query, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error calling Meta API {endpoint}: {e}")
            raise PlatformConnectionError("Network error connecting to Meta API",
                                          details=str(e), platform=PLATFORM) from e
        
        try:
            data = response.json()
        except ValueError as e:
            raise PlatformAPIError("Meta API returned a non-JSON response", details=response.text[:200],
                                   platform=PLATFORM, status_code=response.status_code) from e
        
        if isinstance(data, dict) and data.get("error"):
            error = data["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            logger.error(f"Meta API error on {endpoint}: {message}")
            raise PlatformAPIError("Meta API request failed", details=message or None,
                                   platform=PLATFORM, status_code=response.status_code)
        if not response.ok:
            raise PlatformAPIError("Meta API request failed", details=response.reason,
                                   platform=PLATFORM, status_code=response.status_code)
        if not isinstance(data, dict):
            raise PlatformDataError("Meta API response is not an object", platform=PLATFORM,
                                    expected="dict", got=type(data).__name__)
        return data
    
    @staticmethod
    def _data_list(body: Dict[str, Any]) -> List[Dict[str, Any]]:
        rows = body.get("data") or []
        if not isinstance(rows, list):
            raise PlatformDataError("Field 'data' must be a list", platform=PLATFORM,
                                    expected="list", got=type(rows).__name__)
        return rows
    
    def test_connection(self) -> MetaAccountInfo:
        """
        Fetch the ad account to check the credentials.
        
        Returns:
            Account id, name and currency
        """
        body = self._get(self.account_path, {"fields": META_ACCOUNT_FIELDS})
        account = MetaAccountInfo.from_api(body)
        logger.info(f"Connected to Meta ad account {account.name} ({account.currency})")
        return account
    
    def fetch_campaigns(self, limit: int = 100) -> List[MetaCampaign]:
        """
        Fetch campaigns of the ad account.
        
        Args:
            limit: Page size requested from the API
        
        Returns:
            Validated campaigns
        """
        body = self._get(f"{self.account_path}/campaigns", {
            "fields": META_CAMPAIGN_FIELDS,
            "limit": str(limit)
        })
        campaigns = [MetaCampaign.from_api(row) for row in self._data_list(body)]
        logger.info(f"Fetched {len(campaigns)} Meta campaigns")
        return campaigns
    
    def fetch_insights(self) -> Dict[str, MetaCampaignInsight]:
        """
        Fetch lifetime campaign-level insights.
        
        Returns:
            Insights keyed by campaign id
        """
        body = self._get(f"{self.account_path}/insights", {
            "level": "campaign",
            "date_preset": "maximum",
            "fields": META_INSIGHT_FIELDS
        })
        insights = {}
        for row in self._data_list(body):
            insight = MetaCampaignInsight.from_api(row)
            insights[insight.campaign_id] = insight
        logger.info(f"Fetched insights for {len(insights)} Meta campaigns")
        return insights
