"""
Sync of Meta campaigns and WooCommerce orders into the warehouse.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from sales_analytics.data.models.platform import CampaignRecord, WooCommerceOrder, WooCommerceSummary
from sales_analytics.data.repositories.campaign_repository import CampaignRepository
from sales_analytics.data.repositories.reference_repository import ReferenceRepository
from sales_analytics.data.repositories.sales_repository import SalesRepository
from sales_analytics.exceptions import PlatformError, SyncError
from sales_analytics.sync.meta_client import MetaAdsClient
from sales_analytics.sync.woocommerce_client import WooCommerceClient, summarize_orders

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CampaignSyncResult:
    synced: int


@dataclass(frozen=True)
class OrderSyncResult:
    synced: int
    attributed: int
    summary: WooCommerceSummary


def match_campaign(utm_campaign: Optional[str], campaign_names: Dict[str, str]) -> Optional[str]:
    """
    Find the campaign id an order's ``utm_campaign`` refers to.
    
    The value may be a campaign id or a campaign name; names match
    case-insensitively.
    
    Args:
        utm_campaign: The order's UTM campaign value
        campaign_names: Known campaigns as id -> name
    
    Returns:
        The campaign id, or None when unattributed or unknown
    """
    if not utm_campaign:
        return None
    value = utm_campaign.strip()
    if value in campaign_names:
        return value
    lowered = value.lower()
    for campaign_id, name in campaign_names.items():
        if name and name.strip().lower() == lowered:
            return campaign_id
    return None


class SyncService:
    """
    Pulls data from the platforms and upserts it for the repository's user.
    """
    
    def __init__(
        self,
        sales_repository: SalesRepository,
        reference_repository: ReferenceRepository,
        campaign_repository: CampaignRepository,
        meta_client: Optional[MetaAdsClient] = None,
        woo_client: Optional[WooCommerceClient] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)
    ):
        self.sales_repository = sales_repository
        self.reference_repository = reference_repository
        self.campaign_repository = campaign_repository
        self.meta_client = meta_client
        self.woo_client = woo_client
        self.clock = clock
    
    def sync_meta_campaigns(self) -> CampaignSyncResult:
        """
        Fetch campaigns and their lifetime insights and upsert them.
        
        Returns:
            CampaignSyncResult: Number of campaigns written
        
        Raises:
            SyncError: If the client is missing or any step fails
        """
        if self.meta_client is None:
            raise SyncError("Meta Ads is not configured")
        
        try:
            campaigns = self.meta_client.fetch_campaigns()
            insights = self.meta_client.fetch_insights()
        except PlatformError as e:
            raise SyncError("Failed to fetch Meta campaigns", details=str(e)) from e
        
        updated_at = self.clock()
        records = [
            CampaignRecord.from_meta(campaign, insights.get(campaign.id), self.campaign_repository.user_id, updated_at)
            for campaign in campaigns
        ]
        
        try:
            synced = self.campaign_repository.upsert_campaigns(records)
        except Exception as e:
            logger.error(f"Error writing campaigns: {str(e)}", exc_info=True)
            raise SyncError("Failed to sync campaigns to database", details=str(e)) from e
        
        logger.info(f"Synced {synced} Meta campaigns")
        return CampaignSyncResult(synced=synced)
    
    def attribute_orders(self, orders: List[WooCommerceOrder]) -> Dict[int, Optional[str]]:
        """
        Map each order id to the campaign its UTM campaign names.
        
        Args:
            orders: Orders to attribute
        
        Returns:
            Order id -> campaign id (None for organic orders)
        """
        campaign_names = self.reference_repository.get_campaign_names()
        return {order.id: match_campaign(order.utm_campaign, campaign_names) for order in orders}
    
    def sync_woo_orders(self, date_range: Optional[Dict[str, str]] = None) -> OrderSyncResult:
        """
        Fetch orders, attribute them to campaigns and upsert them with
        their line items.
        
        Args:
            date_range: ``{"start", "end"}`` days to fetch, or None for the newest orders
        
        Returns:
            OrderSyncResult: Counts and the fetch summary
        
        Raises:
            SyncError: If the client is missing or any step fails
        """
        if self.woo_client is None:
            raise SyncError("WooCommerce is not configured")
        
        try:
            orders = self.woo_client.fetch_orders(date_range)
        except PlatformError as e:
            raise SyncError("Failed to fetch WooCommerce orders", details=str(e)) from e
        
        summary = summarize_orders(orders, date_range)
        logger.info(
            f"Fetched {summary.total_orders} orders "
            f"({summary.orders_with_utm} with UTM, {summary.orders_without_utm} without)"
        )
        
        try:
            campaign_ids = self.attribute_orders(orders)
            synced = self.sales_repository.upsert_orders(orders, campaign_ids)
        except Exception as e:
            logger.error(f"Error writing orders: {str(e)}", exc_info=True)
            raise SyncError("Failed to sync orders to database", details=str(e)) from e
        
        attributed = sum(1 for campaign_id in campaign_ids.values() if campaign_id)
        return OrderSyncResult(synced=synced, attributed=attributed, summary=summary)
