"""
Main entry point for the sales analytics application.
"""
import logging
from datetime import date
from typing import Callable, Dict, List, Optional

from sales_analytics.config.app_config import (
    DEFAULT_LOCALE,
    DEFAULT_METRIC,
    DEFAULT_TIME_RANGE,
    METRICS,
    REPORT_TYPES,
    get_display_date_format
)
from sales_analytics.data.connectors.base_connector import BaseConnector
from sales_analytics.data.repositories.campaign_repository import CampaignRepository
from sales_analytics.data.repositories.reference_repository import ReferenceRepository
from sales_analytics.data.repositories.sales_repository import SalesRepository
from sales_analytics.data.models.sales import Metric
from sales_analytics.analysis.chart_builder import ChartDatasetBuilder, ChartSeries
from sales_analytics.analysis.date_range import resolve_date_window
from sales_analytics.analysis.report_factory import ReportFactory
from sales_analytics.analysis.exporters.csv_exporter import CSVExporter
from sales_analytics.analysis.exporters.html_exporter import HTMLExporter
from sales_analytics.sync.sync_service import CampaignSyncResult, OrderSyncResult, SyncService
from sales_analytics.exceptions import InvalidSelection
from sales_analytics.utils.validation import validate_choice, validate_date_format
from sales_analytics.utils.date_helpers import get_timestamp_str
from sales_analytics.utils.logging_config import setup_logging


def create_default_connector() -> BaseConnector:
    # Imported here so the analysis code does not need snowpark installed
    from sales_analytics.data.connectors.snowflake_connector import SnowflakeConnector
    return SnowflakeConnector()


class SalesAnalyticsApp:
    """
    Main application class for sales reports and platform sync.
    """
    
    def __init__(
        self,
        log_level=logging.INFO,
        connector: Optional[BaseConnector] = None,
        user_id: Optional[str] = None,
        today_provider: Callable[[], date] = date.today
    ):
        """
        Initialize the application.
        
        Args:
            log_level: Logging level
            connector (Optional[BaseConnector]): Database connector, Snowflake by default
            user_id (Optional[str]): Owner of the rows read and written
            today_provider (Callable[[], date]): Reference day for preset time ranges
        """
        # Set up logging
        self.logger = setup_logging(log_level=log_level)
        
        # Initialize database connector
        self.connector = connector if connector is not None else create_default_connector()
        
        # Initialize repositories
        self.sales_repository = SalesRepository(self.connector, user_id)
        self.reference_repository = ReferenceRepository(self.connector, user_id)
        self.campaign_repository = CampaignRepository(self.connector, user_id)
        self.today_provider = today_provider
        
        # Default values
        self.reports = list(REPORT_TYPES)
        self.time_range = DEFAULT_TIME_RANGE
        self.start_date = None
        self.end_date = None
        self.metric = Metric(DEFAULT_METRIC)
        self.locale = DEFAULT_LOCALE
        self.output_dir = None
        self.html = False
    
    def configure(
        self,
        reports: Optional[List[str]] = None,
        time_range: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        metric: Optional[str] = None,
        locale: Optional[str] = None,
        output_dir: Optional[str] = None,
        html: bool = False
    ) -> None:
        """
        Configure the application.
        
        Args:
            reports (Optional[List[str]]): Reports to build ('all', 'campaign', 'product')
            time_range (Optional[str]): Time range selector
            start_date (Optional[str]): Custom range start (YYYY-MM-DD)
            end_date (Optional[str]): Custom range end (YYYY-MM-DD)
            metric (Optional[str]): 'revenue' or 'quantity'
            locale (Optional[str]): Locale for chart date labels
            output_dir (Optional[str]): Output directory for results
            html (bool): Also write interactive HTML charts
        """
        if reports:
            unknown = [name for name in reports if name not in REPORT_TYPES]
            for name in unknown:
                self.logger.warning(f"Ignoring unknown report: {name}")
            self.reports = [name for name in reports if name in REPORT_TYPES] or list(REPORT_TYPES)
        
        if time_range:
            self.time_range = time_range
        
        # Custom dates are validated when the window is resolved
        for label, value in (("start", start_date), ("end", end_date)):
            if value and not validate_date_format(value):
                self.logger.warning(f"Invalid {label} date format: {value}")
        self.start_date = start_date
        self.end_date = end_date
        
        self.metric = Metric(validate_choice(metric, METRICS, default=DEFAULT_METRIC))
        self.locale = locale or DEFAULT_LOCALE
        self.html = html
        
        # Set output directory
        if output_dir:
            self.output_dir = output_dir
        else:
            # Generate default timestamped directory
            self.output_dir = f"sales_reports_{get_timestamp_str()}"
    
    def build_charts(self) -> Dict[str, ChartSeries]:
        """
        Build the configured reports.
        
        Returns:
            Dict[str, ChartSeries]: Charts keyed by report name
        
        Raises:
            InvalidSelection: If the time range cannot be resolved
            FetchFailure: If reading data fails
        """
        window = resolve_date_window(
            self.time_range,
            self.start_date,
            self.end_date,
            today=self.today_provider()
        )
        self.logger.info(
            f"Building {', '.join(self.reports)} report(s) for {self.time_range} "
            f"({window.start_date or 'all time'} - {window.end_date or 'now'}) by {self.metric.value}"
        )
        
        factory = ReportFactory(
            sales_repository=self.sales_repository,
            reference_repository=self.reference_repository,
            chart_builder=ChartDatasetBuilder(date_format=get_display_date_format(self.locale))
        )
        
        charts = {}
        for name in self.reports:
            report = factory.get_report(name)
            if report:
                charts[name] = report.run(window, self.metric)
            else:
                self.logger.warning(f"No report found for: {name}")
        return charts
    
    def run_report(self) -> str:
        """
        Build the configured reports and export them.
        
        Returns:
            str: Path to the output directory
        """
        if self.output_dir is None:
            self.configure()
        
        try:
            charts = self.build_charts()
            
            output_path = CSVExporter().export(charts, self.output_dir, run_name=self.time_range)
            if self.html:
                HTMLExporter().export(charts, self.output_dir, run_name=self.time_range)
            
            self.logger.info(f"Sales report complete. Results saved in {output_path}")
            return output_path
            
        except Exception as e:
            self.logger.error(f"Error building sales report: {str(e)}", exc_info=True)
            raise
        finally:
            self._close()
    
    def _sync_service(self, meta_client=None, woo_client=None) -> SyncService:
        return SyncService(
            sales_repository=self.sales_repository,
            reference_repository=self.reference_repository,
            campaign_repository=self.campaign_repository,
            meta_client=meta_client,
            woo_client=woo_client
        )
    
    def run_meta_sync(self, meta_client=None) -> CampaignSyncResult:
        """
        Sync Meta campaigns into the database.
        
        Args:
            meta_client: Client to use; built from the environment when None
        
        Returns:
            CampaignSyncResult: Number of campaigns written
        """
        try:
            if meta_client is None:
                from sales_analytics.sync.meta_client import MetaAdsClient
                meta_client = MetaAdsClient()
            return self._sync_service(meta_client=meta_client).sync_meta_campaigns()
        except Exception as e:
            self.logger.error(f"Error during Meta sync: {str(e)}", exc_info=True)
            raise
        finally:
            self._close()
    
    def run_woo_sync(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        woo_client=None
    ) -> OrderSyncResult:
        """
        Sync WooCommerce orders into the database.
        
        Args:
            start_date (Optional[str]): First day to fetch (YYYY-MM-DD)
            end_date (Optional[str]): Last day to fetch (YYYY-MM-DD)
            woo_client: Client to use; built from the environment when None
        
        Returns:
            OrderSyncResult: Counts and the fetch summary

        Raises:
            InvalidSelection: If only one of the dates is given or a date is malformed
        """
        date_range = None
        try:
            if bool(start_date) != bool(end_date):
                raise InvalidSelection("Both start and end dates are required to sync a date range")
            if start_date and end_date:
                for value in (start_date, end_date):
                    if not validate_date_format(value):
                        raise InvalidSelection(f"Invalid date format: {value}. Use YYYY-MM-DD format.")
                date_range = {"start": start_date, "end": end_date}

            if woo_client is None:
                from sales_analytics.sync.woocommerce_client import WooCommerceClient
                woo_client = WooCommerceClient()
            return self._sync_service(woo_client=woo_client).sync_woo_orders(date_range)
        except Exception as e:
            self.logger.error(f"Error during WooCommerce sync: {str(e)}", exc_info=True)
            raise
        finally:
            self._close()
    
    def _close(self) -> None:
        # Close the database connection
        try:
            self.connector.disconnect()
            self.logger.info("Database connection closed.")
        except Exception as e:
            self.logger.error(f"Error closing database connection: {str(e)}")


def run_report(
    reports: Optional[List[str]] = None,
    time_range: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    metric: Optional[str] = None,
    locale: Optional[str] = None,
    output_dir: Optional[str] = None,
    html: bool = False,
    log_level: int = logging.INFO,
    connector: Optional[BaseConnector] = None
) -> str:
    """
    Build sales reports with the specified parameters.
    
    Args:
        reports (Optional[List[str]]): Reports to build
        time_range (Optional[str]): Time range selector
        start_date (Optional[str]): Custom range start (YYYY-MM-DD)
        end_date (Optional[str]): Custom range end (YYYY-MM-DD)
        metric (Optional[str]): 'revenue' or 'quantity'
        locale (Optional[str]): Locale for chart date labels
        output_dir (Optional[str]): Output directory for results
        html (bool): Also write interactive HTML charts
        log_level (int): Logging level
        connector (Optional[BaseConnector]): Database connector
    
    Returns:
        str: Path to the output directory
    """
    # Create and configure the application
    app = SalesAnalyticsApp(log_level=log_level, connector=connector)
    app.configure(
        reports=reports,
        time_range=time_range,
        start_date=start_date,
        end_date=end_date,
        metric=metric,
        locale=locale,
        output_dir=output_dir,
        html=html
    )
    
    return app.run_report()


def run_sync(
    platform: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    log_level: int = logging.INFO,
    connector: Optional[BaseConnector] = None
):
    """
    Sync one platform into the database.
    
    Args:
        platform (str): 'meta' or 'woocommerce'
        start_date (Optional[str]): First order day (WooCommerce only)
        end_date (Optional[str]): Last order day (WooCommerce only)
        log_level (int): Logging level
        connector (Optional[BaseConnector]): Database connector
    
    Returns:
        The sync result
    """
    app = SalesAnalyticsApp(log_level=log_level, connector=connector)
    if platform == "meta":
        return app.run_meta_sync()
    if platform == "woocommerce":
        return app.run_woo_sync(start_date, end_date)
    raise ValueError(f"Unknown platform: {platform}")


if __name__ == "__main__":
    # This allows the module to be run directly for testing
    output_dir = run_report()
    print(f"Sales report complete. Results saved in {output_dir}")
