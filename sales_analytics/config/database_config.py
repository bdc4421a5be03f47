"""
Database configuration settings for Sales Analytics.
"""
import logging
import os
from typing import Dict, Any

logger = logging.getLogger(__name__)

def get_snowflake_config() -> Dict[str, Any]:
    """
    Get Snowflake configuration from environment variables or defaults.
    
    Returns:
        Dict[str, Any]: Snowflake configuration dictionary
    """
    default_config = {
        "account": "",
        "user": "",
        "password": "",
        "authenticator": "snowflake",
        "warehouse": "ANALYTICS_XS",
        "database": "SALES_APP",
        "schema": "PUBLIC"
    }
    
    # Override with environment variables if available
    config = {}
    for key in default_config:
        env_key = f"SNOWFLAKE_{key.upper()}"
        config[key] = os.environ.get(env_key, default_config[key])
    
    logger.debug(f"Using Snowflake config with account: {config['account']}, user: {config['user']}")
    
    return config

# Snowflake connection parameters
SNOWFLAKE_CONFIG: Dict[str, Any] = get_snowflake_config()

TABLE_PREFIX = f"{SNOWFLAKE_CONFIG['database']}.{SNOWFLAKE_CONFIG['schema']}"

# Query templates with placeholders
SALES_QUERY_TEMPLATE = f"""
SELECT
    s.ID,
    s.DATE_CREATED,
    s.ORDER_TOTAL,
    s.CAMPAIGN_ID
FROM
    {TABLE_PREFIX}.SALES s
WHERE
    s.USER_ID = :user_id
    AND (:start_date IS NULL OR s.DATE_CREATED::DATE >= TO_DATE(:start_date))
    AND (:end_date IS NULL OR s.DATE_CREATED::DATE <= TO_DATE(:end_date))
ORDER BY
    s.DATE_CREATED
"""

SALE_ITEMS_QUERY_TEMPLATE = f"""
SELECT
    i.ID,
    i.SALE_ID,
    i.PRODUCT_ID,
    i.PRODUCT_NAME,
    i.QUANTITY,
    i.UNIT_PRICE,
    s.DATE_CREATED
FROM
    {TABLE_PREFIX}.SALE_ITEMS i
JOIN
    {TABLE_PREFIX}.SALES s ON i.SALE_ID = s.ID
WHERE
    s.USER_ID = :user_id
    AND (:start_date IS NULL OR s.DATE_CREATED::DATE >= TO_DATE(:start_date))
    AND (:end_date IS NULL OR s.DATE_CREATED::DATE <= TO_DATE(:end_date))
ORDER BY
    s.DATE_CREATED
"""

CAMPAIGNS_QUERY_TEMPLATE = f"""
SELECT
    c.ID,
    c.NAME
FROM
    {TABLE_PREFIX}.CAMPAIGNS c
WHERE
    c.USER_ID = :user_id
"""

PRODUCTS_QUERY_TEMPLATE = f"""
SELECT
    p.ID,
    p.NAME
FROM
    {TABLE_PREFIX}.PRODUCTS p
WHERE
    p.USER_ID = :user_id
"""

MERGE_CAMPAIGN_TEMPLATE = f"""
MERGE INTO {TABLE_PREFIX}.CAMPAIGNS t
USING (
    SELECT
        :id AS ID,
        :user_id AS USER_ID,
        :name AS NAME,
        :budget AS BUDGET,
        :spend AS SPEND,
        :impressions AS IMPRESSIONS,
        :clicks AS CLICKS,
        :purchases AS PURCHASES,
        :purchase_value AS PURCHASE_VALUE,
        :updated_at AS UPDATED_AT
) src
ON t.ID = src.ID
WHEN MATCHED THEN UPDATE SET
    NAME = src.NAME,
    BUDGET = src.BUDGET,
    SPEND = src.SPEND,
    IMPRESSIONS = src.IMPRESSIONS,
    CLICKS = src.CLICKS,
    PURCHASES = src.PURCHASES,
    PURCHASE_VALUE = src.PURCHASE_VALUE,
    UPDATED_AT = src.UPDATED_AT
WHEN NOT MATCHED THEN INSERT
    (ID, USER_ID, NAME, BUDGET, SPEND, IMPRESSIONS, CLICKS, PURCHASES, PURCHASE_VALUE, UPDATED_AT)
VALUES
    (src.ID, src.USER_ID, src.NAME, src.BUDGET, src.SPEND, src.IMPRESSIONS, src.CLICKS,
     src.PURCHASES, src.PURCHASE_VALUE, src.UPDATED_AT)
"""

MERGE_SALE_TEMPLATE = f"""
MERGE INTO {TABLE_PREFIX}.SALES t
USING (
    SELECT
        :id AS ID,
        :user_id AS USER_ID,
        :date_created AS DATE_CREATED,
        :order_status AS ORDER_STATUS,
        :order_total AS ORDER_TOTAL,
        :campaign_id AS CAMPAIGN_ID,
        :utm_campaign AS UTM_CAMPAIGN,
        :utm_source AS UTM_SOURCE,
        :utm_medium AS UTM_MEDIUM,
        :utm_content AS UTM_CONTENT,
        :utm_term AS UTM_TERM,
        :traffic_source_type AS TRAFFIC_SOURCE_TYPE,
        :device_type AS DEVICE_TYPE,
        :referrer AS REFERRER,
        :has_bump AS HAS_BUMP
) src
ON t.ID = src.ID
WHEN MATCHED THEN UPDATE SET
    DATE_CREATED = src.DATE_CREATED,
    ORDER_STATUS = src.ORDER_STATUS,
    ORDER_TOTAL = src.ORDER_TOTAL,
    CAMPAIGN_ID = src.CAMPAIGN_ID,
    UTM_CAMPAIGN = src.UTM_CAMPAIGN,
    UTM_SOURCE = src.UTM_SOURCE,
    UTM_MEDIUM = src.UTM_MEDIUM,
    UTM_CONTENT = src.UTM_CONTENT,
    UTM_TERM = src.UTM_TERM,
    TRAFFIC_SOURCE_TYPE = src.TRAFFIC_SOURCE_TYPE,
    DEVICE_TYPE = src.DEVICE_TYPE,
    REFERRER = src.REFERRER,
    HAS_BUMP = src.HAS_BUMP
WHEN NOT MATCHED THEN INSERT
    (ID, USER_ID, DATE_CREATED, ORDER_STATUS, ORDER_TOTAL, CAMPAIGN_ID, UTM_CAMPAIGN, UTM_SOURCE,
     UTM_MEDIUM, UTM_CONTENT, UTM_TERM, TRAFFIC_SOURCE_TYPE, DEVICE_TYPE, REFERRER, HAS_BUMP)
VALUES
    (src.ID, src.USER_ID, src.DATE_CREATED, src.ORDER_STATUS, src.ORDER_TOTAL, src.CAMPAIGN_ID,
     src.UTM_CAMPAIGN, src.UTM_SOURCE, src.UTM_MEDIUM, src.UTM_CONTENT, src.UTM_TERM,
     src.TRAFFIC_SOURCE_TYPE, src.DEVICE_TYPE, src.REFERRER, src.HAS_BUMP)
"""

MERGE_SALE_ITEM_TEMPLATE = f"""
MERGE INTO {TABLE_PREFIX}.SALE_ITEMS t
USING (
    SELECT
        :id AS ID,
        :user_id AS USER_ID,
        :sale_id AS SALE_ID,
        :product_id AS PRODUCT_ID,
        :product_name AS PRODUCT_NAME,
        :quantity AS QUANTITY,
        :unit_price AS UNIT_PRICE,
        :line_total AS LINE_TOTAL,
        :is_bump AS IS_BUMP
) src
ON t.ID = src.ID
WHEN MATCHED THEN UPDATE SET
    PRODUCT_ID = src.PRODUCT_ID,
    PRODUCT_NAME = src.PRODUCT_NAME,
    QUANTITY = src.QUANTITY,
    UNIT_PRICE = src.UNIT_PRICE,
    LINE_TOTAL = src.LINE_TOTAL,
    IS_BUMP = src.IS_BUMP
WHEN NOT MATCHED THEN INSERT
    (ID, USER_ID, SALE_ID, PRODUCT_ID, PRODUCT_NAME, QUANTITY, UNIT_PRICE, LINE_TOTAL, IS_BUMP)
VALUES
    (src.ID, src.USER_ID, src.SALE_ID, src.PRODUCT_ID, src.PRODUCT_NAME, src.QUANTITY,
     src.UNIT_PRICE, src.LINE_TOTAL, src.IS_BUMP)
"""

# Catalog maintenance: products and their price history
NEXT_MANUAL_PRODUCT_ID_QUERY = f"""
SELECT LEAST(COALESCE(MIN(p.ID), 0), 0) - 1 AS NEXT_ID
FROM {TABLE_PREFIX}.PRODUCTS p
"""

INSERT_PRODUCT_TEMPLATE = f"""
INSERT INTO {TABLE_PREFIX}.PRODUCTS (ID, USER_ID, NAME, CREATED_AT, UPDATED_AT)
VALUES (:id, :user_id, :name, CURRENT_TIMESTAMP(), CURRENT_TIMESTAMP())
"""

DELETE_PRODUCT_TEMPLATE = f"""
DELETE FROM {TABLE_PREFIX}.PRODUCTS
WHERE ID = :product_id AND USER_ID = :user_id
"""

PRODUCT_PRICES_QUERY_TEMPLATE = f"""
SELECT
    pp.ID,
    pp.PRODUCT_ID,
    pp.PRICE,
    pp.CREATED_AT
FROM
    {TABLE_PREFIX}.PRODUCT_PRICES pp
WHERE
    pp.USER_ID = :user_id
    AND pp.PRODUCT_ID = :product_id
ORDER BY
    pp.CREATED_AT DESC
"""

LATEST_PRODUCT_PRICE_QUERY_TEMPLATE = f"""
SELECT
    pp.ID,
    pp.PRODUCT_ID,
    pp.PRICE,
    pp.CREATED_AT
FROM
    {TABLE_PREFIX}.PRODUCT_PRICES pp
WHERE
    pp.USER_ID = :user_id
    AND pp.PRODUCT_ID = :product_id
ORDER BY
    pp.CREATED_AT DESC
LIMIT 1
"""

INSERT_PRODUCT_PRICE_TEMPLATE = f"""
INSERT INTO {TABLE_PREFIX}.PRODUCT_PRICES (ID, USER_ID, PRODUCT_ID, PRICE, CREATED_AT)
VALUES (:id, :user_id, :product_id, :price, :created_at)
"""

DELETE_PRODUCT_PRICE_TEMPLATE = f"""
DELETE FROM {TABLE_PREFIX}.PRODUCT_PRICES
WHERE ID = :price_id AND USER_ID = :user_id
"""

DELETE_PRODUCT_PRICES_TEMPLATE = f"""
DELETE FROM {TABLE_PREFIX}.PRODUCT_PRICES
WHERE PRODUCT_ID = :product_id AND USER_ID = :user_id
"""

# Catalog maintenance: campaign planning fields and daily spend
CAMPAIGN_DETAILS_QUERY_TEMPLATE = f"""
SELECT
    c.ID,
    c.NAME,
    c.START_DATE,
    c.DURATION_DAYS,
    c.CPM
FROM
    {TABLE_PREFIX}.CAMPAIGNS c
WHERE
    c.USER_ID = :user_id
    AND c.ID = :campaign_id
"""

INSERT_CAMPAIGN_TEMPLATE = f"""
INSERT INTO {TABLE_PREFIX}.CAMPAIGNS
    (ID, USER_ID, NAME, START_DATE, DURATION_DAYS, CPM, SPEND, IMPRESSIONS, CLICKS, PURCHASES,
     PURCHASE_VALUE, UPDATED_AT)
VALUES
    (:id, :user_id, :name, TO_DATE(:start_date), :duration_days, :cpm, 0, 0, 0, 0, 0, CURRENT_TIMESTAMP())
"""

UPDATE_CAMPAIGN_CPM_TEMPLATE = f"""
UPDATE {TABLE_PREFIX}.CAMPAIGNS
SET CPM = :cpm, UPDATED_AT = CURRENT_TIMESTAMP()
WHERE ID = :campaign_id AND USER_ID = :user_id
"""

DELETE_CAMPAIGN_TEMPLATE = f"""
DELETE FROM {TABLE_PREFIX}.CAMPAIGNS
WHERE ID = :campaign_id AND USER_ID = :user_id
"""

CAMPAIGN_DAILY_SPEND_QUERY_TEMPLATE = f"""
SELECT
    ds.ID,
    ds.CAMPAIGN_ID,
    ds.SPEND_DATE,
    ds.AMOUNT
FROM
    {TABLE_PREFIX}.CAMPAIGN_DAILY_SPEND ds
WHERE
    ds.USER_ID = :user_id
    AND ds.CAMPAIGN_ID = :campaign_id
ORDER BY
    ds.SPEND_DATE
"""

MERGE_DAILY_SPEND_TEMPLATE = f"""
MERGE INTO {TABLE_PREFIX}.CAMPAIGN_DAILY_SPEND t
USING (
    SELECT
        :id AS ID,
        :user_id AS USER_ID,
        :campaign_id AS CAMPAIGN_ID,
        TO_DATE(:spend_date) AS SPEND_DATE,
        :amount AS AMOUNT
) src
ON t.CAMPAIGN_ID = src.CAMPAIGN_ID AND t.SPEND_DATE = src.SPEND_DATE
WHEN MATCHED THEN UPDATE SET
    AMOUNT = src.AMOUNT
WHEN NOT MATCHED THEN INSERT
    (ID, USER_ID, CAMPAIGN_ID, SPEND_DATE, AMOUNT)
VALUES
    (src.ID, src.USER_ID, src.CAMPAIGN_ID, src.SPEND_DATE, src.AMOUNT)
"""

DELETE_CAMPAIGN_DAILY_SPEND_TEMPLATE = f"""
DELETE FROM {TABLE_PREFIX}.CAMPAIGN_DAILY_SPEND
WHERE CAMPAIGN_ID = :campaign_id AND USER_ID = :user_id
"""

# Manual sale entry
NEXT_MANUAL_SALE_ID_QUERY = f"""
SELECT LEAST(COALESCE(MIN(s.ID), 0), 0) - 1 AS NEXT_ID
FROM {TABLE_PREFIX}.SALES s
"""

INSERT_MANUAL_SALE_TEMPLATE = f"""
INSERT INTO {TABLE_PREFIX}.SALES (ID, USER_ID, DATE_CREATED, ORDER_STATUS, ORDER_TOTAL, CAMPAIGN_ID, HAS_BUMP)
VALUES (:id, :user_id, :date_created, 'manual', :order_total, :campaign_id, FALSE)
"""

INSERT_MANUAL_SALE_ITEM_TEMPLATE = f"""
INSERT INTO {TABLE_PREFIX}.SALE_ITEMS
    (ID, USER_ID, SALE_ID, PRODUCT_ID, PRODUCT_NAME, QUANTITY, UNIT_PRICE, LINE_TOTAL, IS_BUMP)
VALUES
    (:id, :user_id, :sale_id, :product_id, :product_name, :quantity, :unit_price, :line_total, FALSE)
"""

DELETE_SALE_ITEMS_TEMPLATE = f"""
DELETE FROM {TABLE_PREFIX}.SALE_ITEMS
WHERE SALE_ID = :sale_id AND USER_ID = :user_id
"""

DELETE_SALE_TEMPLATE = f"""
DELETE FROM {TABLE_PREFIX}.SALES
WHERE ID = :sale_id AND USER_ID = :user_id
"""
