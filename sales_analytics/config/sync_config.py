"""
External platform settings for campaign and order sync.
"""
import os

META_API_VERSION = os.environ.get("META_API_VERSION", "v21.0")
META_BASE_URL = f"https://graph.facebook.com/{META_API_VERSION}"
META_ACCESS_TOKEN = os.environ.get("META_ACCESS_TOKEN", "")
META_AD_ACCOUNT_ID = os.environ.get("META_AD_ACCOUNT_ID", "")

META_CAMPAIGN_FIELDS = "id,name,status,objective,daily_budget,lifetime_budget,created_time,start_time,stop_time"
META_INSIGHT_FIELDS = (
    "campaign_id,campaign_name,spend,impressions,clicks,cpc,cpm,cpp,ctr,"
    "reach,frequency,actions,action_values,cost_per_action_type"
)
META_ACCOUNT_FIELDS = "id,name,account_id,account_status,currency,timezone_name"

WOO_URL = os.environ.get("WOO_URL", "")
WOO_CONSUMER_KEY = os.environ.get("WOO_CONSUMER_KEY", "")
WOO_CONSUMER_SECRET = os.environ.get("WOO_CONSUMER_SECRET", "")
WOO_API_PATH = "/wp-json/wc/v3"
WOO_ORDERS_PER_PAGE = int(os.environ.get("WOO_ORDERS_PER_PAGE", "100"))
WOO_MAX_PAGES = int(os.environ.get("WOO_MAX_PAGES", "50"))

REQUEST_TIMEOUT = float(os.environ.get("SYNC_REQUEST_TIMEOUT", "30"))
