"""
Base exporter interface for report charts.
"""
from abc import ABC, abstractmethod
from typing import Dict, Optional
import pandas as pd
from sales_analytics.analysis.chart_builder import ChartSeries


class BaseExporter(ABC):
    """
    Abstract base class for exporters that write report charts to disk.
    """
    
    @abstractmethod
    def export(
        self,
        charts: Dict[str, ChartSeries],
        output_dir: str,
        run_name: Optional[str] = None
    ) -> str:
        """
        Export charts to a specified format.
        
        Args:
            charts (Dict[str, ChartSeries]): Charts keyed by report name
            output_dir (str): Base directory for output files
            run_name (Optional[str]): Subdirectory for this export
        
        Returns:
            str: Path to the exported data
        """
        pass
    
    def prepare_dataframe(self, chart: ChartSeries) -> pd.DataFrame:
        """
        Flatten a chart into long format, one row per day and dataset.
        
        Args:
            chart (ChartSeries): The chart to flatten
        
        Returns:
            pd.DataFrame: Columns date, series, value
        """
        if chart.is_empty:
            return pd.DataFrame(columns=['date', 'series', 'value'])
        
        data = []
        for name, dataset in zip(chart.column_names(), chart.datasets):
            for label, value in zip(chart.labels, dataset.data):
                data.append({
                    'date': label,
                    'series': name,
                    'value': round(value, 2) if isinstance(value, float) else value
                })
        
        return pd.DataFrame(data, columns=['date', 'series', 'value'])
