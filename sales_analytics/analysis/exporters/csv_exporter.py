"""
CSV exporter for report charts.
"""
import logging
from typing import Dict, Optional
import os
import pandas as pd
from sales_analytics.analysis.exporters.base_exporter import BaseExporter
from sales_analytics.analysis.chart_builder import ChartSeries

logger = logging.getLogger(__name__)


class CSVExporter(BaseExporter):
    """
    Writes each report as a wide CSV (one column per series) plus a combined
    long-format CSV across reports.
    """
    
    def export(
        self,
        charts: Dict[str, ChartSeries],
        output_dir: str,
        run_name: Optional[str] = None
    ) -> str:
        """
        Export charts to CSV files.
        
        Args:
            charts (Dict[str, ChartSeries]): Charts keyed by report name
            output_dir (str): Base directory for output files
            run_name (Optional[str]): Subdirectory for this export
        
        Returns:
            str: Directory holding the CSV files
        """
        run_dir = os.path.join(output_dir, run_name or "sales_report")
        os.makedirs(run_dir, exist_ok=True)
        
        combined = []
        for report_name, chart in charts.items():
            output_path = os.path.join(run_dir, f"{report_name}_{chart.metric.value}.csv")
            chart.to_frame().to_csv(output_path)
            logger.info(f"Exported {report_name} report to {output_path}")
            
            df = self.prepare_dataframe(chart)
            if not df.empty:
                df.insert(0, 'report', report_name)
                df['metric'] = chart.metric.value
                combined.append(df)
        
        if combined:
            combined_path = os.path.join(run_dir, "combined_sales.csv")
            pd.concat(combined, ignore_index=True).to_csv(combined_path, index=False)
            logger.info(f"Exported combined sales to {combined_path}")
        
        return run_dir
