"""
Sales repository for accessing sales and line-item data.
"""
import logging
from datetime import date
from typing import Dict, List, Optional
import pandas as pd
from sales_analytics.data.repositories.base_repository import BaseRepository, normalize_key
from sales_analytics.data.repositories.product_repository import ProductRepository, next_manual_id
from sales_analytics.data.models.catalog import ManualSale
from sales_analytics.data.models.sales import SaleRecord, DateWindow
from sales_analytics.data.models.platform import WooCommerceOrder
from sales_analytics.config.database_config import (
    SALES_QUERY_TEMPLATE,
    SALE_ITEMS_QUERY_TEMPLATE,
    DELETE_SALE_ITEMS_TEMPLATE,
    DELETE_SALE_TEMPLATE,
    INSERT_MANUAL_SALE_ITEM_TEMPLATE,
    INSERT_MANUAL_SALE_TEMPLATE,
    MERGE_SALE_TEMPLATE,
    MERGE_SALE_ITEM_TEMPLATE,
    NEXT_MANUAL_SALE_ID_QUERY
)
from sales_analytics.utils.date_helpers import parse_day, to_iso_day
from sales_analytics.utils.validation import validate_dataframe

logger = logging.getLogger(__name__)

SALES_COLUMNS = ['ID', 'DATE_CREATED', 'ORDER_TOTAL', 'CAMPAIGN_ID']
SALE_ITEM_COLUMNS = ['ID', 'SALE_ID', 'PRODUCT_ID', 'QUANTITY', 'UNIT_PRICE', 'DATE_CREATED']


def _window_params(window: Optional[DateWindow]) -> Dict[str, Optional[str]]:
    if window is None or not window.is_bounded:
        return {"start_date": None, "end_date": None}
    return {
        "start_date": window.start_date.isoformat(),
        "end_date": window.end_date.isoformat()
    }


class SalesRepository(BaseRepository[SaleRecord]):
    """
    Repository for accessing sales data.
    
    Order-level rows are attributed to campaigns; line-item rows are
    attributed to products.
    """
    
    def get_raw_data(self, window: Optional[DateWindow] = None) -> pd.DataFrame:
        """
        Get raw order rows as a pandas DataFrame.
        
        Args:
            window (Optional[DateWindow]): Inclusive day filter, None for all time
        
        Returns:
            pd.DataFrame: The sales rows ordered by creation date
        """
        params = _window_params(window)
        logger.info(f"Fetching sales from {params['start_date'] or 'the beginning'} to {params['end_date'] or 'now'}...")
        df = self._execute_query(SALES_QUERY_TEMPLATE, params)
        if not validate_dataframe(df, SALES_COLUMNS):
            raise ValueError(f"Sales query returned unexpected columns: {list(df.columns) if df is not None else None}")
        logger.info(f"Retrieved {len(df)} sales records.")
        return df
    
    def get_all(self, window: Optional[DateWindow] = None) -> List[SaleRecord]:
        """
        Get order-level sale records attributed to campaigns.
        
        Each order counts once towards quantity.
        
        Args:
            window (Optional[DateWindow]): Inclusive day filter
        
        Returns:
            List[SaleRecord]: One record per order
        """
        df = self.get_raw_data(window)
        
        records = []
        for _, row in df.iterrows():
            records.append(SaleRecord(
                sale_date=parse_day(row['DATE_CREATED']),
                amount=float(row['ORDER_TOTAL']) if not pd.isna(row['ORDER_TOTAL']) else 0.0,
                quantity=1,
                dimension_key=normalize_key(row['CAMPAIGN_ID'])
            ))
        
        return records
    
    def get_line_items_data(self, window: Optional[DateWindow] = None) -> pd.DataFrame:
        """
        Get raw line-item rows joined to their sale date.
        
        Args:
            window (Optional[DateWindow]): Inclusive day filter
        
        Returns:
            pd.DataFrame: The line-item rows
        """
        params = _window_params(window)
        logger.info("Fetching sale line items...")
        df = self._execute_query(SALE_ITEMS_QUERY_TEMPLATE, params)
        if not validate_dataframe(df, SALE_ITEM_COLUMNS):
            raise ValueError(f"Sale items query returned unexpected columns: {list(df.columns) if df is not None else None}")
        logger.info(f"Retrieved {len(df)} sale line items.")
        return df
    
    def get_line_items(self, window: Optional[DateWindow] = None) -> List[SaleRecord]:
        """
        Get line-item sale records attributed to products.
        
        Revenue is ``unit_price * quantity``.
        
        Args:
            window (Optional[DateWindow]): Inclusive day filter
        
        Returns:
            List[SaleRecord]: One record per line item
        """
        df = self.get_line_items_data(window)
        
        records = []
        for _, row in df.iterrows():
            quantity = int(row['QUANTITY']) if not pd.isna(row['QUANTITY']) else 1
            unit_price = float(row['UNIT_PRICE']) if not pd.isna(row['UNIT_PRICE']) else 0.0
            records.append(SaleRecord(
                sale_date=parse_day(row['DATE_CREATED']),
                amount=unit_price * quantity,
                quantity=quantity,
                dimension_key=normalize_key(row['PRODUCT_ID'])
            ))
        
        return records
    
    def upsert_orders(
        self,
        orders: List[WooCommerceOrder],
        campaign_ids: Optional[Dict[int, Optional[str]]] = None
    ) -> int:
        """
        Insert or update orders and their line items.
        
        The whole batch is one transaction: if any row fails, nothing from
        the batch is kept.
        
        Args:
            orders (List[WooCommerceOrder]): Validated orders from the store
            campaign_ids (Optional[Dict[int, Optional[str]]]): Campaign attributed to each order id
        
        Returns:
            int: Number of orders written
        """
        campaign_ids = campaign_ids or {}
        
        with self.connector.transaction():
            for order in orders:
                self._execute_statement(MERGE_SALE_TEMPLATE, {
                    "id": order.id,
                    "date_created": order.date_created,
                    "order_status": order.status,
                    "order_total": order.total,
                    "campaign_id": campaign_ids.get(order.id),
                    "utm_campaign": order.utm_campaign,
                    "utm_source": order.utm_source,
                    "utm_medium": order.utm_medium,
                    "utm_content": order.utm_content,
                    "utm_term": order.utm_term,
                    "traffic_source_type": order.traffic_source_type,
                    "device_type": order.device_type,
                    "referrer": order.referrer,
                    "has_bump": order.has_bump_purchase
                })
                for item in order.line_items:
                    self._execute_statement(MERGE_SALE_ITEM_TEMPLATE, {
                        "id": f"{order.id}-{item.id}",
                        "sale_id": order.id,
                        "product_id": item.product_id,
                        "product_name": item.name,
                        "quantity": item.quantity,
                        "unit_price": item.price,
                        "line_total": item.total,
                        "is_bump": item.is_bump
                    })
        
        logger.info(f"Upserted {len(orders)} orders.")
        return len(orders)
    
    def add_manual_sale(
        self,
        product_id: str,
        quantity: int,
        sale_date: date,
        campaign_id: Optional[str] = None,
        unit_price: Optional[float] = None,
        product_name: Optional[str] = None
    ) -> ManualSale:
        """
        Record a sale entered by hand as an order with one line item.
        
        Without an explicit ``unit_price`` the product's latest price is used.
        
        Args:
            product_id (str): Product sold
            quantity (int): Units sold, at least one
            sale_date (date): Day of the sale
            campaign_id (Optional[str]): Campaign the sale is attributed to
            unit_price (Optional[float]): Price per unit
            product_name (Optional[str]): Name stored on the line item
        
        Returns:
            ManualSale: The stored sale
        
        Raises:
            ValueError: If the quantity is not positive or no price is known
        """
        if not quantity or quantity <= 0:
            raise ValueError("Quantity must be greater than 0")
        
        price_id = None
        if unit_price is None:
            latest = ProductRepository(self.connector, self.user_id).get_latest_price(product_id)
            if latest is None:
                raise ValueError(f"Product {product_id} has no price")
            unit_price, price_id = latest.price, latest.id
        if unit_price < 0:
            raise ValueError("Unit price must be 0 or greater")
        
        day = parse_day(sale_date)
        with self.connector.transaction():
            sale_id = next_manual_id(self._execute_query(NEXT_MANUAL_SALE_ID_QUERY))
            sale = ManualSale(
                id=sale_id,
                product_id=str(product_id),
                quantity=int(quantity),
                unit_price=float(unit_price),
                sale_date=day,
                campaign_id=campaign_id,
                price_id=price_id
            )
            self._execute_statement(INSERT_MANUAL_SALE_TEMPLATE, {
                "id": sale.id,
                "date_created": to_iso_day(day),
                "order_total": sale.total,
                "campaign_id": campaign_id
            })
            self._execute_statement(INSERT_MANUAL_SALE_ITEM_TEMPLATE, {
                "id": f"{sale.id}-1",
                "sale_id": sale.id,
                "product_id": product_id,
                "product_name": product_name or f"Product {product_id}",
                "quantity": sale.quantity,
                "unit_price": sale.unit_price,
                "line_total": sale.total
            })
        
        logger.info(f"Added manual sale {sale.id}: {sale.quantity} x product {product_id}")
        return sale
    
    def delete_sale(self, sale_id: int) -> None:
        """
        Delete a sale and its line items.
        
        Args:
            sale_id (int): The sale to delete
        """
        params = {"sale_id": sale_id}
        with self.connector.transaction():
            self._execute_statement(DELETE_SALE_ITEMS_TEMPLATE, params)
            self._execute_statement(DELETE_SALE_TEMPLATE, params)
        logger.info(f"Deleted sale {sale_id}")
