"""
Report views for the sales dashboard.
"""
from sales_analytics.analysis.reports.daily_sales_report import DailySalesReport
from sales_analytics.analysis.reports.campaign_sales_report import CampaignSalesReport
from sales_analytics.analysis.reports.product_sales_report import ProductSalesReport

__all__ = [
    'DailySalesReport',
    'CampaignSalesReport',
    'ProductSalesReport'
]
