"""
Sales data models.
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Dict, Iterator, Optional

from sales_analytics.config.app_config import DEFAULT_METRIC, DEFAULT_REPORT, DEFAULT_TIME_RANGE


class Metric(str, Enum):
    """Value plotted for each day."""
    REVENUE = "revenue"
    QUANTITY = "quantity"


class Grouping(str, Enum):
    """How sale records are split into series."""
    NONE = "none"
    BY_DIMENSION = "byDimension"


@dataclass(frozen=True)
class SaleRecord:
    """
    One observed sale event.
    
    ``dimension_key`` is a campaign id or a product id depending on the
    report being built; ``None`` means unattributed (organic).
    """
    sale_date: date
    amount: float
    quantity: int = 1
    dimension_key: Optional[str] = None
    
    def __post_init__(self):
        if self.amount < 0:
            raise ValueError(f"Sale amount must be non-negative, got {self.amount}")
        if self.quantity < 1:
            raise ValueError(f"Sale quantity must be positive, got {self.quantity}")


@dataclass(frozen=True)
class DateWindow:
    """
    Inclusive ``[start_date, end_date]`` interval, or unbounded (all time).
    """
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    
    def __post_init__(self):
        if (self.start_date is None) != (self.end_date is None):
            raise ValueError("A bounded window needs both start_date and end_date")
        if self.is_bounded and self.start_date > self.end_date:
            raise ValueError(f"Window start {self.start_date} is after end {self.end_date}")
    
    @classmethod
    def unbounded(cls) -> "DateWindow":
        return cls()
    
    @property
    def is_bounded(self) -> bool:
        return self.start_date is not None
    
    def contains(self, day: date) -> bool:
        if not self.is_bounded:
            return True
        return self.start_date <= day <= self.end_date
    
    def days(self) -> int:
        """Number of calendar days covered, both ends included (0 when unbounded)."""
        if not self.is_bounded:
            return 0
        return (self.end_date - self.start_date).days + 1
    
    def iter_days(self) -> Iterator[date]:
        day = self.start_date
        while day is not None and day <= self.end_date:
            yield day
            day += timedelta(days=1)


@dataclass(frozen=True)
class DailyTotals:
    """Running sums for one calendar day."""
    revenue_sum: float = 0.0
    count_sum: int = 0
    
    def value_for(self, metric: Metric) -> float:
        if Metric(metric) == Metric.REVENUE:
            return self.revenue_sum
        return self.count_sum


@dataclass
class DailyBucket:
    """
    Aggregation result for one dimension value.
    
    Maps ISO day strings (``YYYY-MM-DD``) to the day's totals.
    """
    dimension_key: str
    days: Dict[str, DailyTotals] = field(default_factory=dict)
    
    def add(self, iso_day: str, revenue: float, count: int) -> None:
        current = self.days.get(iso_day, DailyTotals())
        self.days[iso_day] = DailyTotals(
            revenue_sum=current.revenue_sum + revenue,
            count_sum=current.count_sum + count
        )
    
    def get(self, iso_day: str) -> Optional[DailyTotals]:
        return self.days.get(iso_day)
    
    def first_day(self) -> Optional[str]:
        return min(self.days) if self.days else None
    
    def last_day(self) -> Optional[str]:
        return max(self.days) if self.days else None


@dataclass(frozen=True)
class ReportSelection:
    """
    Everything the user picked for one report render.
    """
    report: str = DEFAULT_REPORT
    time_range: str = DEFAULT_TIME_RANGE
    metric: str = DEFAULT_METRIC
    custom_start: Optional[date] = None
    custom_end: Optional[date] = None
