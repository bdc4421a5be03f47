"""
Plotly figures for sales chart series.

Kept free of Streamlit so exporters and tests can build figures too.
"""
from typing import Optional
import plotly.graph_objects as go

from sales_analytics.analysis.chart_builder import ChartSeries, format_metric_value
from sales_analytics.config.app_config import DEFAULT_CHART_HEIGHT


def apply_theme(fig: go.Figure, title: Optional[str] = None, show_legend: bool = True) -> go.Figure:
    """Apply the dashboard's chart styling."""
    fig.update_layout(
        title=title,
        title_font_size=16,
        font=dict(family="Arial, sans-serif", size=12, color="#1f1f1f"),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=20, r=20, t=40, b=20),
        height=DEFAULT_CHART_HEIGHT,
        showlegend=show_legend,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        hovermode="x unified",
    )
    fig.update_xaxes(showgrid=True, gridcolor="rgba(128,128,128,0.2)", title_text="Date")
    fig.update_yaxes(showgrid=True, gridcolor="rgba(128,128,128,0.2)", rangemode="tozero")
    return fig


def create_sales_figure(chart: ChartSeries, title: Optional[str] = None) -> go.Figure:
    """
    Create a line chart with one trace per dataset.
    
    Args:
        chart (ChartSeries): The chart-ready series
        title (Optional[str]): Figure title
    
    Returns:
        go.Figure: The plotly figure
    """
    fig = go.Figure()
    
    for dataset in chart.datasets:
        fig.add_trace(go.Scatter(
            x=chart.labels,
            y=dataset.data,
            mode="lines+markers",
            name=dataset.label,
            line=dict(color=dataset.border_color, width=2),
            fill="tozeroy",
            fillcolor=dataset.background_color,
            text=[format_metric_value(value, chart.metric) for value in dataset.data],
            hovertemplate="%{x}<br>%{text}<extra>" + dataset.label + "</extra>",
        ))
    
    fig = apply_theme(fig, title=title, show_legend=chart.show_legend)
    fig.update_yaxes(title_text=chart.axis_title)
    return fig
