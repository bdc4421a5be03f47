"""
Base class for sales chart reports.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from sales_analytics.analysis.aggregator import SalesAggregator
from sales_analytics.analysis.chart_builder import ChartDatasetBuilder, ChartSeries, ReferenceLabeler
from sales_analytics.analysis.materializer import SeriesMaterializer
from sales_analytics.config.app_config import ORGANIC_KEY
from sales_analytics.data.models.sales import DateWindow, Grouping, Metric, SaleRecord
from sales_analytics.data.repositories.reference_repository import ReferenceRepository
from sales_analytics.data.repositories.sales_repository import SalesRepository
from sales_analytics.exceptions import FetchFailure

logger = logging.getLogger(__name__)


class BaseReport(ABC):
    """
    Base class for the daily sales chart views.
    
    Subclasses choose which records are fetched, how they are grouped and
    how dimension keys are labelled; the pipeline
    aggregate -> materialize -> build is shared.
    """
    
    name = ""
    title = ""
    grouping = Grouping.NONE
    unattributed_key = ORGANIC_KEY
    unattributed_label = "Organic"
    fallback_template = "{key}"
    
    def __init__(
        self,
        sales_repository: SalesRepository,
        reference_repository: Optional[ReferenceRepository] = None,
        chart_builder: Optional[ChartDatasetBuilder] = None
    ):
        """
        Initialize the report.
        
        Args:
            sales_repository (SalesRepository): Repository for sale records
            reference_repository (Optional[ReferenceRepository]): Repository for display names
            chart_builder (Optional[ChartDatasetBuilder]): Builder holding palette and date format
        """
        self.sales_repository = sales_repository
        self.reference_repository = reference_repository
        self.chart_builder = chart_builder or ChartDatasetBuilder()
        self.aggregator = SalesAggregator(unattributed_key=self.unattributed_key)
        self.materializer = SeriesMaterializer()
    
    @property
    def grouped(self) -> bool:
        return self.grouping == Grouping.BY_DIMENSION
    
    @abstractmethod
    def fetch_records(self, window: DateWindow) -> List[SaleRecord]:
        """
        Read the sale records this report plots.
        
        Args:
            window (DateWindow): Filter window passed to the repository
        
        Returns:
            List[SaleRecord]: The records
        """
        pass
    
    def fetch_display_names(self) -> Dict[str, str]:
        return {}
    
    def prepare_data(self, window: DateWindow) -> Tuple[List[SaleRecord], Dict[str, str]]:
        """
        Fetch records and display names.
        
        Args:
            window (DateWindow): Filter window
        
        Returns:
            Tuple[List[SaleRecord], Dict[str, str]]: Records and id -> name map
        
        Raises:
            FetchFailure: If any read fails
        """
        try:
            records = self.fetch_records(window)
            names = self.fetch_display_names() if self.grouped else {}
        except FetchFailure:
            raise
        except Exception as e:
            logger.error(f"Failed to load data for the {self.name} report: {str(e)}")
            raise FetchFailure("Failed to load sales data", details=str(e)) from e
        
        logger.info(f"Loaded {len(records)} records for the {self.name} report")
        return records, names
    
    def labeler(self, display_names: Dict[str, str]) -> ReferenceLabeler:
        return ReferenceLabeler(
            names=display_names,
            unattributed_key=self.unattributed_key,
            unattributed_label=self.unattributed_label,
            fallback_template=self.fallback_template
        )
    
    def build(
        self,
        records: List[SaleRecord],
        display_names: Dict[str, str],
        window: DateWindow,
        metric: Metric = Metric.REVENUE
    ) -> ChartSeries:
        """
        Build the chart from already fetched data.
        
        Args:
            records (List[SaleRecord]): Sale records
            display_names (Dict[str, str]): id -> name map
            window (DateWindow): Filter window
            metric (Metric): Plotted metric
        
        Returns:
            ChartSeries: The chart-ready series
        """
        buckets = self.aggregator.aggregate(records, window, self.grouping)
        series = self.materializer.materialize(buckets, window, metric)
        return self.chart_builder.build(
            series,
            metric=metric,
            display_names=self.labeler(display_names),
            grouped=self.grouped
        )
    
    def run(self, window: DateWindow, metric: Metric = Metric.REVENUE) -> ChartSeries:
        """
        Fetch data and build the chart.
        
        Args:
            window (DateWindow): Filter window
            metric (Metric): Plotted metric
        
        Returns:
            ChartSeries: The chart-ready series
        """
        records, display_names = self.prepare_data(window)
        return self.build(records, display_names, window, metric)
