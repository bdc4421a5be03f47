"""
Filter components for Streamlit UI.
"""
from typing import Optional, Tuple
import datetime
import streamlit as st
from sales_analytics.config.app_config import (
    DEFAULT_METRIC,
    DEFAULT_REPORT,
    DEFAULT_TIME_RANGE,
    METRICS,
    REPORT_TYPES,
    TIME_RANGES
)
from sales_analytics.data.models.sales import ReportSelection

REPORT_LABELS = {
    "all": "All Sales",
    "campaign": "By Campaign",
    "product": "By Product",
}
TIME_RANGE_LABELS = {
    "last7days": "Last 7 Days",
    "lastMonth": "Last Month",
    "last3Months": "Last 3 Months",
    "allTime": "All Time",
    "custom": "Custom Range",
}
METRIC_LABELS = {
    "revenue": "Revenue ($)",
    "quantity": "Quantity",
}


def create_report_filter(default: str = DEFAULT_REPORT) -> str:
    """
    Create the report view selector.
    
    Args:
        default (str): Initially selected report
    
    Returns:
        str: Selected report name
    """
    return st.sidebar.radio(
        "View",
        options=REPORT_TYPES,
        index=REPORT_TYPES.index(default) if default in REPORT_TYPES else 0,
        format_func=lambda name: REPORT_LABELS.get(name, name)
    )


def create_time_range_filter(default: str = DEFAULT_TIME_RANGE) -> str:
    return st.sidebar.selectbox(
        "Time Range",
        options=TIME_RANGES,
        index=TIME_RANGES.index(default) if default in TIME_RANGES else 0,
        format_func=lambda name: TIME_RANGE_LABELS.get(name, name)
    )


def create_custom_range_filter() -> Tuple[Optional[datetime.date], Optional[datetime.date]]:
    """
    Create start and end date pickers for a custom range.
    
    Returns:
        Tuple[Optional[datetime.date], Optional[datetime.date]]: Picked days,
        None until a day is picked
    """
    today = datetime.date.today()
    start = st.sidebar.date_input("Start Date", value=None, max_value=today)
    end = st.sidebar.date_input("End Date", value=None, max_value=today)
    if start and end and start > end:
        st.sidebar.warning("Start date must be on or before the end date.")
    return start, end


def create_metric_filter(default: str = DEFAULT_METRIC) -> str:
    return st.sidebar.radio(
        "Metric",
        options=METRICS,
        index=METRICS.index(default) if default in METRICS else 0,
        format_func=lambda name: METRIC_LABELS.get(name, name),
        horizontal=True
    )


def create_all_filters() -> ReportSelection:
    """
    Create all sidebar filters.
    
    Returns:
        ReportSelection: The current selection
    """
    st.sidebar.header("Report")
    
    report = create_report_filter()
    time_range = create_time_range_filter()
    
    custom_start, custom_end = None, None
    if time_range == "custom":
        custom_start, custom_end = create_custom_range_filter()
    
    metric = create_metric_filter()
    
    return ReportSelection(
        report=report,
        time_range=time_range,
        metric=metric,
        custom_start=custom_start,
        custom_end=custom_end
    )
