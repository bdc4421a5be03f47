"""
Total daily sales across all campaigns.
"""
from typing import List

from sales_analytics.analysis.base_report import BaseReport
from sales_analytics.data.models.sales import DateWindow, Grouping, SaleRecord


class DailySalesReport(BaseReport):
    """
    One line with the order totals of every day.
    """
    
    name = "all"
    title = "All Sales"
    grouping = Grouping.NONE
    
    def fetch_records(self, window: DateWindow) -> List[SaleRecord]:
        return self.sales_repository.get_all(window)
