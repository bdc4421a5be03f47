"""
HTML exporter that writes interactive plotly charts.
"""
import logging
from typing import Dict, Optional
import os
from sales_analytics.analysis.exporters.base_exporter import BaseExporter
from sales_analytics.analysis.chart_builder import ChartSeries
from sales_analytics.ui.components.charts import create_sales_figure

logger = logging.getLogger(__name__)


class HTMLExporter(BaseExporter):
    """
    Writes one standalone HTML file per report.
    """
    
    def __init__(self, include_plotlyjs: str = "cdn"):
        self.include_plotlyjs = include_plotlyjs
    
    def export(
        self,
        charts: Dict[str, ChartSeries],
        output_dir: str,
        run_name: Optional[str] = None
    ) -> str:
        run_dir = os.path.join(output_dir, run_name or "sales_report")
        os.makedirs(run_dir, exist_ok=True)
        
        for report_name, chart in charts.items():
            fig = create_sales_figure(chart, title=f"Daily Sales - {report_name}")
            output_path = os.path.join(run_dir, f"{report_name}_{chart.metric.value}.html")
            fig.write_html(output_path, include_plotlyjs=self.include_plotlyjs)
            logger.info(f"Exported {report_name} chart to {output_path}")
        
        return run_dir
