"""
Application-wide configuration settings for Sales Analytics.
"""
import logging
import os
from typing import Dict, List

logger = logging.getLogger(__name__)

# Report selections
TIME_RANGES = ["last7days", "lastMonth", "last3Months", "allTime", "custom"]
METRICS = ["revenue", "quantity"]
REPORT_TYPES = ["all", "campaign", "product"]

DEFAULT_TIME_RANGE = os.environ.get("SALES_ANALYTICS_TIME_RANGE", "allTime")
DEFAULT_METRIC = os.environ.get("SALES_ANALYTICS_METRIC", "revenue")
DEFAULT_REPORT = os.environ.get("SALES_ANALYTICS_REPORT", "all")

# Owner of the rows in the hosted database
DEFAULT_USER_ID = os.environ.get("SALES_ANALYTICS_USER_ID", "")

# Bucket keys
ALL_SALES_KEY = "all"
ORGANIC_KEY = "organic"
UNKNOWN_PRODUCT_KEY = "unknown"

# Chart palette, assigned in first-seen order and cycled
COLOR_PALETTE: List[str] = [
    "rgb(75, 192, 192)",
    "rgb(255, 99, 132)",
    "rgb(54, 162, 235)",
    "rgb(255, 206, 86)",
    "rgb(153, 102, 255)",
    "rgb(255, 159, 64)",
]
BACKGROUND_ALPHA = 0.2

# One display pattern per locale
DISPLAY_DATE_FORMATS: Dict[str, str] = {
    "en_US": "%m/%d/%Y",
    "en_GB": "%d/%m/%Y",
}
DEFAULT_LOCALE = os.environ.get("SALES_ANALYTICS_LOCALE", "en_US")


def get_display_date_format(locale: str = DEFAULT_LOCALE) -> str:
    """
    Get the chart label date pattern for a locale.
    
    Args:
        locale (str): Locale name such as ``en_US``
    
    Returns:
        str: strftime pattern, falling back to the US pattern
    """
    if locale not in DISPLAY_DATE_FORMATS:
        logger.warning(f"Unknown locale {locale}; using en_US date labels")
        return DISPLAY_DATE_FORMATS["en_US"]
    return DISPLAY_DATE_FORMATS[locale]


# Visualization settings
DEFAULT_CHART_HEIGHT = 450
DEFAULT_CHART_WIDTH = None  # Full width
