"""
Visualization components for the sales dashboard.
"""
import pandas as pd
import streamlit as st
from typing import Optional

from sales_analytics.analysis.chart_builder import ChartSeries, format_metric_value
from sales_analytics.analysis.report_controller import ReportSnapshot, ReportState
from sales_analytics.data.models.platform import WooCommerceSummary
from sales_analytics.data.models.sales import ReportSelection
from sales_analytics.ui.components.charts import create_sales_figure

WAITING_MESSAGE = "Pick a complete date range to see the chart."


def create_metrics(chart: ChartSeries) -> None:
    """
    Display totals of the current chart as Streamlit metrics.
    
    Args:
        chart (ChartSeries): The chart being shown
    """
    totals = [sum(dataset.data) for dataset in chart.datasets]
    total = sum(totals)
    days = len(chart.labels)
    
    col1, col2, col3 = st.container().columns(3)
    col1.metric("Total", format_metric_value(total, chart.metric))
    col2.metric("Days", f"{days:,}")
    col3.metric("Daily Average", format_metric_value(total / days if days else 0, chart.metric))


def create_sales_chart(chart: ChartSeries, title: Optional[str] = None) -> None:
    if chart.is_empty:
        st.info("No sales in the selected period.")
        return
    st.plotly_chart(create_sales_figure(chart, title=title), use_container_width=True)


def create_series_table(chart: ChartSeries) -> None:
    """
    Display per-series totals, largest first.
    
    Args:
        chart (ChartSeries): The chart being shown
    """
    if len(chart.datasets) < 2:
        return
    rows = [
        {"Series": name, "Total": sum(dataset.data)}
        for name, dataset in zip(chart.column_names(), chart.datasets)
    ]
    df = pd.DataFrame(rows).sort_values("Total", ascending=False)
    df["Total"] = df["Total"].apply(lambda value: format_metric_value(value, chart.metric))
    st.write("#### Totals by Series")
    st.dataframe(df, hide_index=True)


def render_snapshot(
    snapshot: ReportSnapshot,
    title: Optional[str] = None,
    selection: Optional[ReportSelection] = None
) -> None:
    """
    Render the loading, error or ready state of a report.
    
    Args:
        snapshot (ReportSnapshot): Current controller snapshot
        title (Optional[str]): Chart title
        selection (Optional[ReportSelection]): Selection on screen; a snapshot
            built for another selection is not drawn
    """
    if selection is not None and not snapshot.is_for(selection):
        st.info(WAITING_MESSAGE)
        return
    if snapshot.state == ReportState.ERROR:
        st.error(snapshot.error or "Failed to load sales data.")
        return
    if snapshot.state == ReportState.LOADING:
        st.info("Loading sales data...")
    if snapshot.chart is None:
        if snapshot.state == ReportState.IDLE:
            st.info(WAITING_MESSAGE)
        return
    
    create_metrics(snapshot.chart)
    create_sales_chart(snapshot.chart, title=title)
    create_series_table(snapshot.chart)
    
    with st.expander("Daily values"):
        st.dataframe(snapshot.chart.to_frame())


def create_order_summary(summary: WooCommerceSummary) -> None:
    col1, col2, col3 = st.columns(3)
    col1.metric("Orders", f"{summary.total_orders:,}")
    col2.metric("With UTM", f"{summary.orders_with_utm:,}")
    col3.metric("Without UTM", f"{summary.orders_without_utm:,}")
    if summary.unique_campaigns:
        st.caption("Campaigns: " + ", ".join(summary.unique_campaigns))
    if summary.date_range.get("start"):
        st.caption(f"Orders from {summary.date_range['start']} to {summary.date_range['end']}")
