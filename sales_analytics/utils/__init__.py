"""
Utility package for sales analytics.
"""
from sales_analytics.utils.validation import (
    validate_date_format,
    validate_choice,
    validate_dataframe
)
from sales_analytics.utils.date_helpers import (
    parse_day,
    to_iso_day,
    format_date_for_display,
    subtract_months,
    get_timestamp_str
)
from sales_analytics.utils.logging_config import setup_logging
