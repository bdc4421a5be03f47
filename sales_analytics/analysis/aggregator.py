"""
Aggregation of sale records into per-day buckets.
"""
import logging
from typing import Dict, Iterable, Optional
import pandas as pd

from sales_analytics.config.app_config import ALL_SALES_KEY, ORGANIC_KEY
from sales_analytics.data.models.sales import DailyBucket, DateWindow, Grouping, SaleRecord
from sales_analytics.utils.date_helpers import to_iso_day

logger = logging.getLogger(__name__)


class SalesAggregator:
    """
    Folds sale records into ``DailyBucket``s.
    
    Revenue and count sums are both computed; the metric only decides which
    one is read later.
    """
    
    def __init__(self, unattributed_key: str = ORGANIC_KEY):
        """
        Initialize the aggregator.
        
        Args:
            unattributed_key (str): Bucket for records without a dimension key
        """
        self.unattributed_key = unattributed_key
    
    def to_dataframe(self, records: Iterable[SaleRecord], window: Optional[DateWindow] = None) -> pd.DataFrame:
        """
        Convert records to a frame, dropping those outside a bounded window.
        
        Args:
            records (Iterable[SaleRecord]): Sale records
            window (Optional[DateWindow]): Filter window
        
        Returns:
            pd.DataFrame: Columns DAY, DIMENSION, AMOUNT, QUANTITY in input order
        """
        window = window or DateWindow.unbounded()
        rows = [
            {
                'DAY': to_iso_day(record.sale_date),
                'DIMENSION': record.dimension_key if record.dimension_key is not None else self.unattributed_key,
                'AMOUNT': float(record.amount),
                'QUANTITY': int(record.quantity),
            }
            for record in records
            if window.contains(record.sale_date)
        ]
        return pd.DataFrame(rows, columns=['DAY', 'DIMENSION', 'AMOUNT', 'QUANTITY'])
    
    def aggregate(
        self,
        records: Iterable[SaleRecord],
        window: Optional[DateWindow] = None,
        grouping: Grouping = Grouping.NONE
    ) -> Dict[str, DailyBucket]:
        """
        Aggregate records into daily buckets.
        
        Args:
            records (Iterable[SaleRecord]): Sale records
            window (Optional[DateWindow]): Records outside a bounded window are dropped
            grouping (Grouping): ``NONE`` for one bucket under ``"all"``,
                ``BY_DIMENSION`` for one bucket per dimension key
        
        Returns:
            Dict[str, DailyBucket]: Buckets keyed by dimension, in first-seen
            order; empty when nothing matches
        """
        df = self.to_dataframe(records, window)
        if df.empty:
            logger.debug("No sale records inside the window")
            return {}
        
        grouped = Grouping(grouping) == Grouping.BY_DIMENSION
        if not grouped:
            df['DIMENSION'] = ALL_SALES_KEY
        
        sums = df.groupby(['DIMENSION', 'DAY'], sort=False).agg(
            AMOUNT=('AMOUNT', 'sum'),
            QUANTITY=('QUANTITY', 'sum')
        )
        
        buckets: Dict[str, DailyBucket] = {}
        for (dimension, day), row in sums.iterrows():
            bucket = buckets.setdefault(dimension, DailyBucket(dimension_key=dimension))
            bucket.add(day, float(row['AMOUNT']), int(row['QUANTITY']))
        
        logger.debug(f"Aggregated {len(df)} records into {len(buckets)} buckets")
        return buckets
