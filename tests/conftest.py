"""
Pytest configuration and shared fixtures.
"""
import os
import tempfile

# Keep test log files out of the working tree
os.environ.setdefault("SALES_ANALYTICS_LOG_DIR", os.path.join(tempfile.gettempdir(), "sales_analytics_test_logs"))

import pytest
import pandas as pd
from datetime import date
from typing import Any, Dict, List, Optional

from sales_analytics.config.database_config import (
    CAMPAIGNS_QUERY_TEMPLATE,
    PRODUCTS_QUERY_TEMPLATE,
    SALES_QUERY_TEMPLATE,
    SALE_ITEMS_QUERY_TEMPLATE
)
from sales_analytics.data.connectors.base_connector import BaseConnector
from sales_analytics.data.models.sales import SaleRecord

TRANSACTION_CONTROL = ("BEGIN", "COMMIT", "ROLLBACK")


class FakeConnector(BaseConnector):
    """In-memory connector returning canned frames per query template."""

    def __init__(
        self,
        frames: Optional[Dict[str, pd.DataFrame]] = None,
        fail_with: Exception = None,
        fail_on: Optional[str] = None
    ):
        self.frames = frames or {}
        self.fail_with = fail_with
        # Statement text that raises, for failures partway through a batch
        self.fail_on = fail_on
        self.queries: List[Dict[str, Any]] = []
        self.statements: List[Dict[str, Any]] = []
        self.connected = False

    @property
    def data_statements(self) -> List[Dict[str, Any]]:
        """Statements other than BEGIN/COMMIT/ROLLBACK."""
        return [s for s in self.statements if s["statement"] not in TRANSACTION_CONTROL]

    @property
    def transaction_log(self) -> List[str]:
        return [s["statement"] for s in self.statements if s["statement"] in TRANSACTION_CONTROL]

    def connect(self):
        self.connected = True
        return self

    def disconnect(self) -> None:
        self.connected = False

    def execute_query(self, query: str, params: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
        self.queries.append({"query": query, "params": dict(params or {})})
        if self.fail_with is not None:
            raise self.fail_with
        return self.frames.get(query, pd.DataFrame()).copy()

    def execute_statement(self, statement: str, params: Optional[Dict[str, Any]] = None) -> int:
        self.statements.append({"statement": statement, "params": dict(params or {})})
        if self.fail_with is not None and statement not in ("COMMIT", "ROLLBACK"):
            raise self.fail_with
        if self.fail_on is not None and statement == self.fail_on:
            raise RuntimeError("statement failed")
        return 1


@pytest.fixture
def sales_frame() -> pd.DataFrame:
    """Order rows as returned by the sales query."""
    return pd.DataFrame([
        {"ID": 1, "DATE_CREATED": "2024-03-01T09:15:00", "ORDER_TOTAL": 100.0, "CAMPAIGN_ID": "111"},
        {"ID": 2, "DATE_CREATED": "2024-03-01T17:40:00", "ORDER_TOTAL": 50.0, "CAMPAIGN_ID": None},
        {"ID": 3, "DATE_CREATED": "2024-03-03T12:00:00", "ORDER_TOTAL": 200.0, "CAMPAIGN_ID": "222"},
    ])


@pytest.fixture
def sale_items_frame() -> pd.DataFrame:
    """Line-item rows as returned by the sale items query."""
    return pd.DataFrame([
        {"ID": "1-10", "SALE_ID": 1, "PRODUCT_ID": 501.0, "PRODUCT_NAME": "Hoodie",
         "QUANTITY": 2, "UNIT_PRICE": 40.0, "DATE_CREATED": "2024-03-01T09:15:00"},
        {"ID": "1-11", "SALE_ID": 1, "PRODUCT_ID": 502.0, "PRODUCT_NAME": "Cap",
         "QUANTITY": 1, "UNIT_PRICE": 20.0, "DATE_CREATED": "2024-03-01T09:15:00"},
        {"ID": "3-12", "SALE_ID": 3, "PRODUCT_ID": None, "PRODUCT_NAME": "Deleted",
         "QUANTITY": 4, "UNIT_PRICE": 50.0, "DATE_CREATED": "2024-03-03T12:00:00"},
    ])


@pytest.fixture
def campaigns_frame() -> pd.DataFrame:
    return pd.DataFrame([
        {"ID": "111", "NAME": "Spring Launch"},
        {"ID": "222", "NAME": "Retargeting"},
    ])


@pytest.fixture
def products_frame() -> pd.DataFrame:
    return pd.DataFrame([
        {"ID": 501, "NAME": "Hoodie"},
    ])


@pytest.fixture
def fake_connector(sales_frame, sale_items_frame, campaigns_frame, products_frame) -> FakeConnector:
    """Connector preloaded with sales, line items, campaigns and products."""
    return FakeConnector({
        SALES_QUERY_TEMPLATE: sales_frame,
        SALE_ITEMS_QUERY_TEMPLATE: sale_items_frame,
        CAMPAIGNS_QUERY_TEMPLATE: campaigns_frame,
        PRODUCTS_QUERY_TEMPLATE: products_frame,
    })


@pytest.fixture
def sample_records() -> List[SaleRecord]:
    """Records across two campaigns and organic sales."""
    return [
        SaleRecord(date(2024, 3, 1), 100.0, 1, "A"),
        SaleRecord(date(2024, 3, 1), 25.0, 2, None),
        SaleRecord(date(2024, 3, 3), 200.0, 1, "B"),
        SaleRecord(date(2024, 3, 3), 10.0, 3, "A"),
    ]


@pytest.fixture
def meta_campaign_payload() -> Dict[str, Any]:
    """Campaign from the Graph API campaigns edge."""
    return {
        "id": "120210000000001",
        "name": "Spring Launch",
        "status": "ACTIVE",
        "objective": "OUTCOME_SALES",
        "daily_budget": "2500",
        "created_time": "2024-02-20T10:00:00+0000",
        "start_time": "2024-03-01T00:00:00+0000",
    }


@pytest.fixture
def meta_insight_payload() -> Dict[str, Any]:
    """Lifetime campaign insight row."""
    return {
        "campaign_id": "120210000000001",
        "campaign_name": "Spring Launch",
        "spend": "150.50",
        "impressions": "12000",
        "clicks": "340",
        "ctr": "2.83",
        "cpc": "0.44",
        "cpm": "12.54",
        "reach": "9000",
        "frequency": "1.33",
        "actions": [
            {"action_type": "link_click", "value": "340"},
            {"action_type": "omni_purchase", "value": "9"},
            {"action_type": "purchase", "value": "8"},
        ],
        "action_values": [
            {"action_type": "purchase", "value": "602.00"},
        ],
        "date_start": "2024-03-01",
        "date_stop": "2024-03-31",
    }


@pytest.fixture
def woo_order_payload() -> Dict[str, Any]:
    """Order from the WooCommerce orders endpoint with attribution meta."""
    return {
        "id": 4321,
        "status": "completed",
        "date_created": "2024-03-02T14:05:00",
        "total": "95.00",
        "customer_id": 17,
        "meta_data": [
            {"id": 1, "key": "_wc_order_attribution_utm_campaign", "value": "Spring Launch"},
            {"id": 2, "key": "_wc_order_attribution_utm_source", "value": "facebook"},
            {"id": 3, "key": "_wc_order_attribution_utm_medium", "value": "paid"},
            {"id": 4, "key": "_wc_order_attribution_source_type", "value": "utm"},
            {"id": 5, "key": "_wc_order_attribution_device_type", "value": "Mobile"},
            {"id": 6, "key": "_shipping_note", "value": "leave at door"},
        ],
        "line_items": [
            {"id": 10, "product_id": 501, "name": "Hoodie", "quantity": 1, "price": 75.0, "total": "75.00",
             "meta_data": []},
            {"id": 11, "product_id": 502, "name": "Cap", "quantity": 1, "price": 20.0, "total": "20.00",
             "meta_data": [{"key": "_bump_purchase", "value": "yes"}]},
        ],
    }


@pytest.fixture
def woo_organic_order_payload() -> Dict[str, Any]:
    return {
        "id": 4322,
        "status": "processing",
        "date_created": "2024-03-04T08:00:00",
        "total": "40.00",
        "meta_data": [],
        "line_items": [
            {"id": 12, "product_id": 0, "name": "Gift card", "quantity": 2, "price": 20.0, "total": "40.00"},
        ],
    }
