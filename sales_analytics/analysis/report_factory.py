"""
Factory for creating reports.
"""
import logging
from typing import Dict, Type, Optional
from sales_analytics.analysis.base_report import BaseReport
from sales_analytics.analysis.chart_builder import ChartDatasetBuilder
from sales_analytics.analysis.reports import (
    DailySalesReport,
    CampaignSalesReport,
    ProductSalesReport
)
from sales_analytics.data.repositories.reference_repository import ReferenceRepository
from sales_analytics.data.repositories.sales_repository import SalesRepository

logger = logging.getLogger(__name__)


class ReportFactory:
    """
    Factory for creating the different report views.
    """
    
    def __init__(
        self,
        sales_repository: SalesRepository,
        reference_repository: Optional[ReferenceRepository] = None,
        chart_builder: Optional[ChartDatasetBuilder] = None
    ):
        """
        Initialize the report factory.
        
        Args:
            sales_repository (SalesRepository): Repository for sale records
            reference_repository (Optional[ReferenceRepository]): Repository for display names
            chart_builder (Optional[ChartDatasetBuilder]): Shared chart builder
        """
        self.sales_repository = sales_repository
        self.reference_repository = reference_repository
        self.chart_builder = chart_builder or ChartDatasetBuilder()
        
        # Register reports
        self._reports: Dict[str, Type[BaseReport]] = {
            'all': DailySalesReport,
            'campaign': CampaignSalesReport,
            'product': ProductSalesReport
        }
    
    @property
    def report_names(self):
        return list(self._reports)
    
    def get_report(self, name: str) -> Optional[BaseReport]:
        """
        Get a report by name.
        
        Args:
            name (str): The report name ('all', 'campaign', 'product')
        
        Returns:
            Optional[BaseReport]: A report instance, or None if not found
        """
        if name not in self._reports:
            logger.warning(f"Unknown report: {name}")
            return None
        
        report_class = self._reports[name]
        return report_class(
            sales_repository=self.sales_repository,
            reference_repository=self.reference_repository,
            chart_builder=self.chart_builder
        )
    
    def get_all_reports(self) -> Dict[str, BaseReport]:
        """
        Get instances of all registered reports.
        
        Returns:
            Dict[str, BaseReport]: Dictionary mapping report names to instances
        """
        reports = {}
        for name in self._reports:
            reports[name] = self.get_report(name)
        
        return reports
