"""
Repository for products and their price history.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional
import pandas as pd
from sales_analytics.data.repositories.base_repository import BaseRepository
from sales_analytics.data.repositories.reference_repository import ReferenceRepository
from sales_analytics.data.models.catalog import ProductPrice
from sales_analytics.data.models.reference import NamedReference
from sales_analytics.config.database_config import (
    DELETE_PRODUCT_PRICE_TEMPLATE,
    DELETE_PRODUCT_PRICES_TEMPLATE,
    DELETE_PRODUCT_TEMPLATE,
    INSERT_PRODUCT_PRICE_TEMPLATE,
    INSERT_PRODUCT_TEMPLATE,
    LATEST_PRODUCT_PRICE_QUERY_TEMPLATE,
    NEXT_MANUAL_PRODUCT_ID_QUERY,
    PRODUCT_PRICES_QUERY_TEMPLATE
)
from sales_analytics.utils.validation import validate_dataframe

logger = logging.getLogger(__name__)

PRICE_COLUMNS = ['ID', 'PRODUCT_ID', 'PRICE']


def next_manual_id(df: pd.DataFrame) -> int:
    """Read the ``NEXT_ID`` produced by a next-manual-id query; -1 when the table is empty."""
    if df is None or df.empty or pd.isna(df.iloc[0]['NEXT_ID']):
        return -1
    return int(df.iloc[0]['NEXT_ID'])


class ProductRepository(BaseRepository[NamedReference]):
    """
    Creates and deletes products and keeps each product's price history.

    Products entered by hand get negative ids; synced store products keep
    the store's positive ids.
    """

    def get_raw_data(self) -> pd.DataFrame:
        return ReferenceRepository(self.connector, self.user_id).get_raw_data("product")

    def get_all(self) -> List[NamedReference]:
        return ReferenceRepository(self.connector, self.user_id).get_all("product")

    def create_product(self, name: str) -> NamedReference:
        """
        Add a product by name.

        Args:
            name (str): Product name; surrounding whitespace is dropped

        Returns:
            NamedReference: The new product

        Raises:
            ValueError: If the name is blank
        """
        name = (name or "").strip()
        if not name:
            raise ValueError("Product name is required")

        with self.connector.transaction():
            product_id = next_manual_id(self._execute_query(NEXT_MANUAL_PRODUCT_ID_QUERY))
            self._execute_statement(INSERT_PRODUCT_TEMPLATE, {"id": product_id, "name": name})

        logger.info(f"Created product {product_id} ({name})")
        return NamedReference(id=str(product_id), name=name, kind="product")

    def delete_product(self, product_id: str) -> None:
        """
        Delete a product together with its price history.

        Args:
            product_id (str): The product to delete
        """
        params = {"product_id": product_id}
        with self.connector.transaction():
            self._execute_statement(DELETE_PRODUCT_PRICES_TEMPLATE, params)
            self._execute_statement(DELETE_PRODUCT_TEMPLATE, params)
        logger.info(f"Deleted product {product_id}")

    def _prices(self, query: str, product_id: str) -> List[ProductPrice]:
        df = self._execute_query(query, {"product_id": product_id})
        if df is None or df.empty:
            return []
        if not validate_dataframe(df, PRICE_COLUMNS):
            raise ValueError(f"Price query returned unexpected columns: {list(df.columns)}")
        return [ProductPrice.from_row(row) for _, row in df.iterrows()]

    def get_prices(self, product_id: str) -> List[ProductPrice]:
        """
        Get a product's price history, newest first.

        Args:
            product_id (str): The product

        Returns:
            List[ProductPrice]: Price entries
        """
        return self._prices(PRODUCT_PRICES_QUERY_TEMPLATE, product_id)

    def get_latest_price(self, product_id: str) -> Optional[ProductPrice]:
        prices = self._prices(LATEST_PRODUCT_PRICE_QUERY_TEMPLATE, product_id)
        return prices[0] if prices else None

    def add_price(self, product_id: str, price: float) -> ProductPrice:
        """
        Record a new current price for a product.

        Args:
            product_id (str): The product
            price (float): The price; zero is allowed

        Returns:
            ProductPrice: The stored entry

        Raises:
            ValueError: If the price is missing or negative
        """
        if price is None or price < 0:
            raise ValueError("Please enter a valid price")

        entry = ProductPrice(
            id=uuid.uuid4().hex,
            product_id=str(product_id),
            price=float(price),
            created_at=datetime.now(timezone.utc).isoformat()
        )
        self._execute_statement(INSERT_PRODUCT_PRICE_TEMPLATE, {
            "id": entry.id,
            "product_id": product_id,
            "price": entry.price,
            "created_at": entry.created_at
        })
        logger.info(f"Added price {entry.price} for product {product_id}")
        return entry

    def delete_price(self, price_id: str) -> None:
        self._execute_statement(DELETE_PRODUCT_PRICE_TEMPLATE, {"price_id": price_id})
