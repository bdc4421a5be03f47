"""
Exporters for report output.
"""
from sales_analytics.analysis.exporters.base_exporter import BaseExporter
from sales_analytics.analysis.exporters.csv_exporter import CSVExporter
from sales_analytics.analysis.exporters.html_exporter import HTMLExporter

__all__ = ['BaseExporter', 'CSVExporter', 'HTMLExporter']
