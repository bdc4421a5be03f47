"""
Dense per-day series built from daily buckets.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional
import pandas as pd

from sales_analytics.data.models.sales import DailyBucket, DateWindow, Metric
from sales_analytics.utils.date_helpers import ISO_DAY_FORMAT, parse_day


@dataclass
class MaterializedSeries:
    """
    Calendar days of the display window and one value list per dimension.
    
    Every list in ``values`` has the same length as ``days``.
    """
    days: List[date] = field(default_factory=list)
    values: Dict[str, List[float]] = field(default_factory=dict)
    
    @property
    def is_empty(self) -> bool:
        return not self.days


class SeriesMaterializer:
    """
    Expands sparse buckets into gap-free day sequences.
    """
    
    def resolve_display_window(
        self,
        buckets: Dict[str, DailyBucket],
        window: Optional[DateWindow] = None
    ) -> DateWindow:
        """
        Pick the days to plot.
        
        A bounded filter window is used verbatim. Otherwise the window spans
        the earliest to the latest day with data across all buckets, and is
        unbounded when there is no data.
        
        Args:
            buckets (Dict[str, DailyBucket]): Aggregated buckets
            window (Optional[DateWindow]): Filter window
        
        Returns:
            DateWindow: The display window
        """
        if window is not None and window.is_bounded:
            return window
        
        first_days = [b.first_day() for b in buckets.values() if b.days]
        last_days = [b.last_day() for b in buckets.values() if b.days]
        if not first_days:
            return DateWindow.unbounded()
        return DateWindow(parse_day(min(first_days)), parse_day(max(last_days)))
    
    def materialize(
        self,
        buckets: Dict[str, DailyBucket],
        window: Optional[DateWindow] = None,
        metric: Metric = Metric.REVENUE
    ) -> MaterializedSeries:
        """
        Produce one value per calendar day for every bucket.
        
        Args:
            buckets (Dict[str, DailyBucket]): Aggregated buckets
            window (Optional[DateWindow]): Filter window
            metric (Metric): Which daily sum to read
        
        Returns:
            MaterializedSeries: Days and zero-filled values in bucket order
        """
        metric = Metric(metric)
        display = self.resolve_display_window(buckets, window)
        if not display.is_bounded:
            return MaterializedSeries()
        
        index = pd.date_range(display.start_date, display.end_date, freq='D')
        day_keys = index.strftime(ISO_DAY_FORMAT)
        
        values = {}
        for key, bucket in buckets.items():
            observed = pd.Series(
                {day: totals.value_for(metric) for day, totals in bucket.days.items()},
                dtype='float64' if metric == Metric.REVENUE else 'int64'
            )
            values[key] = observed.reindex(day_keys, fill_value=0).tolist()
        
        return MaterializedSeries(days=[ts.date() for ts in index], values=values)
