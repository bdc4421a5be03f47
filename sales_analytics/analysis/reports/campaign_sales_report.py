"""
Daily sales split by the campaign each order is attributed to.
"""
from typing import Dict, List

from sales_analytics.analysis.base_report import BaseReport
from sales_analytics.config.app_config import ORGANIC_KEY
from sales_analytics.data.models.sales import DateWindow, Grouping, SaleRecord


class CampaignSalesReport(BaseReport):
    """
    One line per campaign; orders without a campaign are shown as Organic.
    """
    
    name = "campaign"
    title = "By Campaign"
    grouping = Grouping.BY_DIMENSION
    unattributed_key = ORGANIC_KEY
    unattributed_label = "Organic"
    
    def fetch_records(self, window: DateWindow) -> List[SaleRecord]:
        return self.sales_repository.get_all(window)
    
    def fetch_display_names(self) -> Dict[str, str]:
        if self.reference_repository is None:
            return {}
        return self.reference_repository.get_campaign_names()
