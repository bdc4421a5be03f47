"""
Sales Analytics Package.

Daily sales charts by campaign and product, built from orders synced from
WooCommerce and campaigns synced from Meta Ads.
"""
from sales_analytics.main import run_report

__version__ = "0.1.0"
