"""
Daily sales split by product, computed from order line items.
"""
from typing import Dict, List

from sales_analytics.analysis.base_report import BaseReport
from sales_analytics.config.app_config import UNKNOWN_PRODUCT_KEY
from sales_analytics.data.models.sales import DateWindow, Grouping, SaleRecord


class ProductSalesReport(BaseReport):
    """
    One line per product.
    
    Revenue is ``unit_price * quantity`` of each line item, and quantity is
    the number of units sold rather than the number of orders.
    """
    
    name = "product"
    title = "By Product"
    grouping = Grouping.BY_DIMENSION
    unattributed_key = UNKNOWN_PRODUCT_KEY
    unattributed_label = "Unknown Product"
    fallback_template = "Product {key}"
    
    def fetch_records(self, window: DateWindow) -> List[SaleRecord]:
        return self.sales_repository.get_line_items(window)
    
    def fetch_display_names(self) -> Dict[str, str]:
        if self.reference_repository is None:
            return {}
        return self.reference_repository.get_product_names()
