"""
Catalog models: product price history, campaign details with daily spend,
and manually entered sales.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Mapping, Optional

import pandas as pd

from sales_analytics.utils.date_helpers import parse_day


def _optional_float(value: Any) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return float(value)


def _optional_text(value: Any) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    return str(value)


@dataclass(frozen=True)
class ProductPrice:
    """One entry in a product's price history."""
    id: str
    product_id: str
    price: float
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ProductPrice":
        return cls(
            id=str(row['ID']),
            product_id=str(row['PRODUCT_ID']),
            price=float(row['PRICE']),
            created_at=_optional_text(row.get('CREATED_AT'))
        )


@dataclass(frozen=True)
class CampaignDetails:
    """
    A campaign with the planning fields kept alongside the synced totals.

    ``cpm`` is the cost per thousand impressions entered by hand.
    """
    id: str
    name: str
    start_date: Optional[date] = None
    duration_days: Optional[int] = None
    cpm: Optional[float] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CampaignDetails":
        start = row.get('START_DATE')
        duration = row.get('DURATION_DAYS')
        return cls(
            id=str(row['ID']),
            name=str(row['NAME']),
            start_date=None if start is None or pd.isna(start) else parse_day(start),
            duration_days=None if duration is None or pd.isna(duration) else int(duration),
            cpm=_optional_float(row.get('CPM'))
        )

    @property
    def end_date(self) -> Optional[date]:
        """Last day the campaign runs, counting the start day."""
        if self.start_date is None or not self.duration_days:
            return None
        return self.start_date + timedelta(days=self.duration_days - 1)


@dataclass(frozen=True)
class CampaignDailySpend:
    id: str
    campaign_id: str
    spend_date: date
    amount: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CampaignDailySpend":
        return cls(
            id=str(row['ID']),
            campaign_id=str(row['CAMPAIGN_ID']),
            spend_date=parse_day(row['SPEND_DATE']),
            amount=_optional_float(row['AMOUNT']) or 0.0
        )


@dataclass(frozen=True)
class ManualSale:
    """
    A sale entered by hand rather than synced from the store.

    Manual sales get negative ids so they never collide with store order ids.
    """
    id: int
    product_id: str
    quantity: int
    unit_price: float
    sale_date: date
    campaign_id: Optional[str] = None
    price_id: Optional[str] = None

    @property
    def total(self) -> float:
        return self.unit_price * self.quantity
