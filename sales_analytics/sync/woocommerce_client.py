"""
HTTP client for the WooCommerce REST API (v3).
"""
import logging
import requests
from typing import Any, Dict, List, Optional

from sales_analytics.config.sync_config import (
    REQUEST_TIMEOUT,
    WOO_API_PATH,
    WOO_CONSUMER_KEY,
    WOO_CONSUMER_SECRET,
    WOO_MAX_PAGES,
    WOO_ORDERS_PER_PAGE,
    WOO_URL
)
from sales_analytics.data.models.platform import WooCommerceOrder, WooCommerceSummary, WooStoreInfo
from sales_analytics.exceptions import PlatformAPIError, PlatformConnectionError, PlatformDataError

logger = logging.getLogger(__name__)

PLATFORM = "woocommerce"


def summarize_orders(orders: List[WooCommerceOrder], date_range: Optional[Dict[str, str]] = None) -> WooCommerceSummary:
    """
    Count attributed orders and collect the campaigns they name.
    
    Args:
        orders: Fetched orders
        date_range: Requested ``{"start", "end"}`` days, if any
    
    Returns:
        Summary; the date range falls back to the earliest and latest order day
    """
    with_utm = [order for order in orders if order.utm_campaign]
    campaigns = []
    for order in with_utm:
        if order.utm_campaign not in campaigns:
            campaigns.append(order.utm_campaign)
    
    days = sorted(order.day for order in orders)
    date_range = date_range or {}
    return WooCommerceSummary(
        total_orders=len(orders),
        orders_with_utm=len(with_utm),
        orders_without_utm=len(orders) - len(with_utm),
        unique_campaigns=tuple(campaigns),
        date_range={
            "start": date_range.get("start") or (days[0] if days else ""),
            "end": date_range.get("end") or (days[-1] if days else "")
        }
    )


class WooCommerceClient:
    """HTTP client for one WooCommerce store, authenticated with basic auth."""
    
    def __init__(
        self,
        url: str = WOO_URL,
        consumer_key: str = WOO_CONSUMER_KEY,
        consumer_secret: str = WOO_CONSUMER_SECRET,
        timeout: float = REQUEST_TIMEOUT
    ):
        if not url or not consumer_key or not consumer_secret:
            raise ValueError("WooCommerce URL, consumer key and consumer secret are required")
        self.base_url = url.rstrip("/") + WOO_API_PATH
        self.auth = (consumer_key, consumer_secret)
        self.timeout = timeout
    
    def _get(self, endpoint: str = "", params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}/{endpoint}" if endpoint else self.base_url
        try:
            response = requests.get(url, params=params, auth=self.auth, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error calling WooCommerce API {url}: {e}")
            raise PlatformConnectionError("Network error connecting to WooCommerce API",
                                          details=str(e), platform=PLATFORM) from e
        
        if response.status_code == 401:
            raise PlatformAPIError("Invalid credentials", platform=PLATFORM, status_code=401)
        
        try:
            data = response.json()
        except ValueError as e:
            raise PlatformAPIError("WooCommerce API returned a non-JSON response",
                                   details=response.text[:200], platform=PLATFORM,
                                   status_code=response.status_code) from e
        
        if not response.ok:
            message = data.get("message") if isinstance(data, dict) else None
            logger.error(f"WooCommerce API error {response.status_code}: {message}")
            raise PlatformAPIError("WooCommerce API request failed", details=message,
                                   platform=PLATFORM, status_code=response.status_code)
        return data
    
    def test_connection(self) -> WooStoreInfo:
        """
        Fetch the API index to check the credentials.
        
        Returns:
            Store name and version
        """
        store = WooStoreInfo.from_api(self._get())
        logger.info(f"Connected to WooCommerce store {store.name} ({store.version})")
        return store
    
    def fetch_orders(
        self,
        date_range: Optional[Dict[str, str]] = None,
        per_page: int = WOO_ORDERS_PER_PAGE,
        max_pages: int = WOO_MAX_PAGES
    ) -> List[WooCommerceOrder]:
        """
        Fetch orders newest first, page by page, optionally limited to a day range.
        
        Paging stops at the first short page or after ``max_pages`` pages.
        
        Args:
            date_range: ``{"start": "YYYY-MM-DD", "end": "YYYY-MM-DD"}``, both inclusive
            per_page: Number of orders requested per page
            max_pages: Upper bound on the number of requests
        
        Returns:
            Validated orders, newest first
        """
        params = {"per_page": str(per_page), "order": "desc"}
        if date_range:
            params["after"] = f"{date_range['start']}T00:00:00"
            params["before"] = f"{date_range['end']}T23:59:59"
        
        orders = []
        for page in range(1, max_pages + 1):
            data = self._get("orders", dict(params, page=str(page)))
            if not isinstance(data, list):
                raise PlatformDataError("Orders response is not a list", platform=PLATFORM,
                                        expected="list", got=type(data).__name__)
            orders.extend(WooCommerceOrder.from_api(row) for row in data)
            if len(data) < per_page:
                break
        else:
            logger.warning(f"Stopped after {max_pages} pages of WooCommerce orders")
        
        logger.info(f"Fetched {len(orders)} WooCommerce orders")
        return orders
