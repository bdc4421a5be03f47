"""
Chart dataset construction from materialized series.

The output mirrors what a charting library expects: one label per day and
one dataset per plotted line, each carrying its own colors.
"""
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
import pandas as pd

from sales_analytics.analysis.materializer import MaterializedSeries
from sales_analytics.config.app_config import (
    ALL_SALES_KEY,
    BACKGROUND_ALPHA,
    COLOR_PALETTE,
    ORGANIC_KEY,
    get_display_date_format
)
from sales_analytics.data.models.sales import Metric
from sales_analytics.utils.date_helpers import format_date_for_display

UNGROUPED_LABELS = {
    Metric.REVENUE: "Daily Sales ($)",
    Metric.QUANTITY: "Daily Sales (Qty)",
}
AXIS_TITLES = {
    Metric.REVENUE: "Sales ($)",
    Metric.QUANTITY: "Quantity",
}

_RGB_PATTERN = re.compile(r"^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)")


def to_background_color(border_color: str, alpha: float = BACKGROUND_ALPHA) -> str:
    """
    Derive a translucent fill color from an ``rgb(...)`` border color.
    
    Args:
        border_color (str): Color such as ``rgb(75, 192, 192)``
        alpha (float): Opacity of the fill
    
    Returns:
        str: ``rgba(...)`` color string
    """
    match = _RGB_PATTERN.match(border_color.strip())
    if not match:
        raise ValueError(f"Expected an rgb() color, got {border_color!r}")
    red, green, blue = match.groups()
    return f"rgba({red}, {green}, {blue}, {alpha})"


def format_metric_value(value: float, metric: Metric) -> str:
    """
    Format a plotted value for tooltips and tables.
    
    Args:
        value (float): The value
        metric (Metric): Metric the value belongs to
    
    Returns:
        str: ``$12.50`` for revenue, ``3 sales`` for quantity
    """
    if Metric(metric) == Metric.REVENUE:
        return f"${value:,.2f}"
    return f"{int(value)} sales"


class ReferenceLabeler:
    """
    Maps dimension keys to display names.
    """
    
    def __init__(
        self,
        names: Optional[Dict[str, str]] = None,
        unattributed_key: str = ORGANIC_KEY,
        unattributed_label: str = "Organic",
        fallback_template: str = "{key}"
    ):
        self.names = dict(names or {})
        self.unattributed_key = unattributed_key
        self.unattributed_label = unattributed_label
        self.fallback_template = fallback_template
    
    def label(self, key: str) -> str:
        if key == self.unattributed_key:
            return self.unattributed_label
        if key in self.names:
            return self.names[key]
        return self.fallback_template.format(key=key)
    
    def __call__(self, key: str) -> str:
        return self.label(key)


@dataclass(frozen=True)
class ChartDataset:
    """One plotted line."""
    label: str
    data: List[float]
    border_color: str
    background_color: str
    key: str = ""
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "data": list(self.data),
            "borderColor": self.border_color,
            "backgroundColor": self.background_color,
            "tension": 0.1,
        }


@dataclass(frozen=True)
class ChartSeries:
    """
    Chart-ready output: day labels plus one or more datasets.
    
    Every dataset holds exactly one value per label.
    """
    labels: List[str]
    datasets: List[ChartDataset]
    metric: Metric = Metric.REVENUE
    axis_title: str = AXIS_TITLES[Metric.REVENUE]
    show_legend: bool = False
    days: List[Any] = field(default_factory=list)
    
    def __post_init__(self):
        for dataset in self.datasets:
            if len(dataset.data) != len(self.labels):
                raise ValueError(
                    f"Dataset '{dataset.label}' has {len(dataset.data)} values for {len(self.labels)} labels"
                )
    
    @property
    def is_empty(self) -> bool:
        return not self.labels
    
    def to_dict(self) -> Dict[str, Any]:
        """
        Get the structure handed to the chart library.
        
        Returns:
            Dict[str, Any]: ``labels``, ``datasets`` and display options
        """
        return {
            "labels": list(self.labels),
            "datasets": [dataset.to_dict() for dataset in self.datasets],
            "options": {
                "yAxisTitle": self.axis_title,
                "showLegend": self.show_legend,
            },
        }
    
    def column_names(self) -> List[str]:
        """
        Get one distinct name per dataset.
        
        Labels shared by several datasets (two campaigns with the same name,
        say) get their dimension key appended.
        
        Returns:
            List[str]: Names in dataset order
        """
        counts = Counter(dataset.label for dataset in self.datasets)
        names = []
        for dataset in self.datasets:
            if counts[dataset.label] > 1:
                names.append(f"{dataset.label} ({dataset.key})")
            else:
                names.append(dataset.label)
        return names
    
    def to_frame(self) -> pd.DataFrame:
        """
        Get the series as a DataFrame indexed by day label.
        
        Returns:
            pd.DataFrame: One column per dataset
        """
        data = {name: dataset.data for name, dataset in zip(self.column_names(), self.datasets)}
        df = pd.DataFrame(data, index=pd.Index(self.labels, name="Date"))
        return df


class ChartDatasetBuilder:
    """
    Builds ``ChartSeries`` from materialized values.
    """
    
    def __init__(self, palette: Optional[Sequence[str]] = None, date_format: Optional[str] = None):
        """
        Initialize the builder.
        
        Args:
            palette (Optional[Sequence[str]]): Border colors, cycled in first-seen order
            date_format (Optional[str]): strftime pattern for day labels,
                defaults to the configured locale's pattern
        """
        self.palette = list(palette) if palette is not None else list(COLOR_PALETTE)
        if not self.palette:
            raise ValueError("Palette must contain at least one color")
        self.date_format = date_format or get_display_date_format()
    
    def color_for(self, index: int) -> str:
        return self.palette[index % len(self.palette)]
    
    def build(
        self,
        series: MaterializedSeries,
        metric: Metric = Metric.REVENUE,
        display_names: Optional[ReferenceLabeler] = None,
        grouped: bool = False
    ) -> ChartSeries:
        """
        Turn materialized values into chart datasets.
        
        Args:
            series (MaterializedSeries): Days and values per dimension key
            metric (Metric): Plotted metric
            display_names (Optional[ReferenceLabeler]): Labels for grouped keys
            grouped (bool): One dataset per key when True, a single total otherwise
        
        Returns:
            ChartSeries: The chart-ready series
        """
        metric = Metric(metric)
        labels = [format_date_for_display(day, self.date_format) for day in series.days]
        
        datasets = []
        if grouped:
            labeler = display_names or ReferenceLabeler()
            for index, (key, values) in enumerate(series.values.items()):
                border = self.color_for(index)
                datasets.append(ChartDataset(
                    label=labeler(key),
                    data=list(values),
                    border_color=border,
                    background_color=to_background_color(border),
                    key=key
                ))
        else:
            values = series.values.get(ALL_SALES_KEY)
            if values is None:
                zero = 0.0 if metric == Metric.REVENUE else 0
                values = [zero] * len(labels)
            border = self.color_for(0)
            datasets.append(ChartDataset(
                label=UNGROUPED_LABELS[metric],
                data=list(values),
                border_color=border,
                background_color=to_background_color(border),
                key=ALL_SALES_KEY
            ))
        
        return ChartSeries(
            labels=labels,
            datasets=datasets,
            metric=metric,
            axis_title=AXIS_TITLES[metric],
            show_legend=grouped,
            days=list(series.days)
        )
