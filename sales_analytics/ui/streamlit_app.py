"""
Streamlit web interface for Sales Analytics.
"""
import streamlit as st
import datetime
import traceback
import sys
import os

# Add the parent directory to the path so we can import the package
# This is only needed when running the script directly
parent_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

from sales_analytics.data.connectors.snowflake_connector import SnowflakeConnector
from sales_analytics.data.repositories.campaign_repository import CampaignRepository
from sales_analytics.data.repositories.reference_repository import ReferenceRepository
from sales_analytics.data.repositories.sales_repository import SalesRepository
from sales_analytics.analysis.report_factory import ReportFactory
from sales_analytics.analysis.report_controller import ReportController
from sales_analytics.exceptions import SalesAnalyticsError
from sales_analytics.sync.meta_client import MetaAdsClient
from sales_analytics.sync.sync_service import SyncService
from sales_analytics.sync.woocommerce_client import WooCommerceClient
from sales_analytics.ui.components.filters import REPORT_LABELS, create_all_filters
from sales_analytics.ui.components.visualizations import create_order_summary, render_snapshot
from sales_analytics.utils.logging_config import setup_logging


# Set page configuration
st.set_page_config(
    page_title="Sales Analytics",
    page_icon="📈",
    layout="wide"
)

# Page title and description
st.title("Sales Analytics")
st.markdown("Daily sales over time, in total, by campaign or by product.")

setup_logging()


# Initialize repositories
@st.cache_resource
def initialize_repositories():
    """Initialize database connection and repositories."""
    connector = SnowflakeConnector()
    sales_repository = SalesRepository(connector)
    reference_repository = ReferenceRepository(connector)
    campaign_repository = CampaignRepository(connector)
    
    return connector, sales_repository, reference_repository, campaign_repository


def create_sync_panel(sales_repository, reference_repository, campaign_repository) -> None:
    """Sidebar buttons that pull fresh data from the platforms."""
    st.sidebar.header("Sync")
    
    if st.sidebar.button("Sync Meta campaigns"):
        with st.spinner("Syncing campaigns from Meta..."):
            try:
                service = SyncService(sales_repository, reference_repository, campaign_repository,
                                      meta_client=MetaAdsClient())
                result = service.sync_meta_campaigns()
                st.sidebar.success(f"Synced {result.synced} campaigns.")
                st.session_state.controller_selection = None
            except (SalesAnalyticsError, ValueError) as e:
                st.sidebar.error(str(e))
    
    sync_days = st.sidebar.number_input("Order days to sync", min_value=1, max_value=365, value=30)
    if st.sidebar.button("Sync WooCommerce orders"):
        with st.spinner("Syncing orders from WooCommerce..."):
            try:
                end = datetime.date.today()
                start = end - datetime.timedelta(days=int(sync_days))
                service = SyncService(sales_repository, reference_repository, campaign_repository,
                                      woo_client=WooCommerceClient())
                result = service.sync_woo_orders({"start": start.isoformat(), "end": end.isoformat()})
                st.sidebar.success(f"Synced {result.synced} orders ({result.attributed} attributed).")
                create_order_summary(result.summary)
                st.session_state.controller_selection = None
            except (SalesAnalyticsError, ValueError) as e:
                st.sidebar.error(str(e))


try:
    connector, sales_repository, reference_repository, campaign_repository = initialize_repositories()
except Exception as e:
    st.error(f"Error connecting to the database: {str(e)}")
    st.error(f"Detailed error: {traceback.format_exc()}")
    st.stop()

# One controller per browser session
if 'controller' not in st.session_state:
    st.session_state.controller = ReportController(
        ReportFactory(sales_repository=sales_repository, reference_repository=reference_repository)
    )
    st.session_state.controller_selection = None

controller = st.session_state.controller
selection = create_all_filters()
create_sync_panel(sales_repository, reference_repository, campaign_repository)

# Recompute after a sync even when the selection is unchanged
if st.session_state.controller_selection is None:
    with st.spinner("Loading sales data..."):
        snapshot = controller.refresh(selection)
else:
    with st.spinner("Loading sales data..."):
        snapshot = controller.on_selection_changed(selection)
if snapshot.is_for(selection):
    st.session_state.controller_selection = selection

render_snapshot(
    snapshot,
    title=f"Daily Sales - {REPORT_LABELS.get(selection.report, selection.report)}",
    selection=selection
)
