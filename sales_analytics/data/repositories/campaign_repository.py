"""
Repository for ad campaigns: synced totals, planning fields and daily spend.
"""
import logging
import uuid
from datetime import date
from typing import List, Optional
import pandas as pd
from sales_analytics.data.repositories.base_repository import BaseRepository
from sales_analytics.data.repositories.reference_repository import ReferenceRepository
from sales_analytics.data.models.catalog import CampaignDailySpend, CampaignDetails
from sales_analytics.data.models.platform import CampaignRecord
from sales_analytics.data.models.reference import NamedReference
from sales_analytics.config.database_config import (
    CAMPAIGN_DAILY_SPEND_QUERY_TEMPLATE,
    CAMPAIGN_DETAILS_QUERY_TEMPLATE,
    DELETE_CAMPAIGN_DAILY_SPEND_TEMPLATE,
    DELETE_CAMPAIGN_TEMPLATE,
    INSERT_CAMPAIGN_TEMPLATE,
    MERGE_CAMPAIGN_TEMPLATE,
    MERGE_DAILY_SPEND_TEMPLATE,
    UPDATE_CAMPAIGN_CPM_TEMPLATE
)
from sales_analytics.utils.date_helpers import parse_day, to_iso_day

logger = logging.getLogger(__name__)


class CampaignRepository(BaseRepository[NamedReference]):
    """
    Campaign rows keyed by the ad platform's campaign id, or by a generated
    ``manual-`` id for campaigns entered by hand.
    """

    def get_raw_data(self) -> pd.DataFrame:
        return ReferenceRepository(self.connector, self.user_id).get_raw_data("campaign")

    def get_all(self) -> List[NamedReference]:
        return ReferenceRepository(self.connector, self.user_id).get_all("campaign")

    def upsert_campaigns(self, records: List[CampaignRecord]) -> int:
        """
        Insert or update campaign rows in one transaction.

        Args:
            records (List[CampaignRecord]): Rows built from the ad platform

        Returns:
            int: Number of campaigns written
        """
        with self.connector.transaction():
            for record in records:
                params = record.to_params()
                # Rows always belong to the repository's user
                params.pop("user_id", None)
                self._execute_statement(MERGE_CAMPAIGN_TEMPLATE, params)

        logger.info(f"Upserted {len(records)} campaigns.")
        return len(records)

    def get_campaign(self, campaign_id: str) -> Optional[CampaignDetails]:
        df = self._execute_query(CAMPAIGN_DETAILS_QUERY_TEMPLATE, {"campaign_id": campaign_id})
        if df is None or df.empty:
            return None
        return CampaignDetails.from_row(df.iloc[0])

    def create_campaign(
        self,
        name: str,
        start_date: date,
        duration_days: int,
        cpm: Optional[float] = None
    ) -> CampaignDetails:
        """
        Add a campaign planned by hand.

        Args:
            name (str): Campaign name
            start_date (date): First day of the campaign
            duration_days (int): Number of days it runs
            cpm (Optional[float]): Cost per thousand impressions

        Returns:
            CampaignDetails: The new campaign

        Raises:
            ValueError: If a field is missing or out of range
        """
        name = (name or "").strip()
        if not name:
            raise ValueError("Campaign name is required")
        if start_date is None:
            raise ValueError("Start date is required")
        if not duration_days or duration_days <= 0:
            raise ValueError("Duration must be greater than 0")
        if cpm is not None and cpm < 0:
            raise ValueError("CPM must be 0 or greater")

        campaign = CampaignDetails(
            id=f"manual-{uuid.uuid4().hex[:12]}",
            name=name,
            start_date=parse_day(start_date),
            duration_days=int(duration_days),
            cpm=cpm
        )
        self._execute_statement(INSERT_CAMPAIGN_TEMPLATE, {
            "id": campaign.id,
            "name": campaign.name,
            "start_date": to_iso_day(campaign.start_date),
            "duration_days": campaign.duration_days,
            "cpm": campaign.cpm
        })
        logger.info(f"Created campaign {campaign.id} ({campaign.name})")
        return campaign

    def update_cpm(self, campaign_id: str, cpm: Optional[float]) -> None:
        """
        Set or clear a campaign's CPM.

        Raises:
            ValueError: If the CPM is negative
        """
        if cpm is not None and cpm < 0:
            raise ValueError("CPM must be 0 or greater")
        self._execute_statement(UPDATE_CAMPAIGN_CPM_TEMPLATE, {"campaign_id": campaign_id, "cpm": cpm})

    def delete_campaign(self, campaign_id: str) -> None:
        """
        Delete a campaign and all of its daily spend rows.

        Args:
            campaign_id (str): The campaign to delete
        """
        params = {"campaign_id": campaign_id}
        with self.connector.transaction():
            self._execute_statement(DELETE_CAMPAIGN_DAILY_SPEND_TEMPLATE, params)
            self._execute_statement(DELETE_CAMPAIGN_TEMPLATE, params)
        logger.info(f"Deleted campaign {campaign_id}")

    def get_daily_spend(self, campaign_id: str) -> List[CampaignDailySpend]:
        """
        Get a campaign's spend per day, oldest first.

        Args:
            campaign_id (str): The campaign

        Returns:
            List[CampaignDailySpend]: One row per day with spend
        """
        df = self._execute_query(CAMPAIGN_DAILY_SPEND_QUERY_TEMPLATE, {"campaign_id": campaign_id})
        if df is None or df.empty:
            return []
        return [CampaignDailySpend.from_row(row) for _, row in df.iterrows()]

    def upsert_daily_spend(self, campaign_id: str, spend_date: date, amount: float) -> CampaignDailySpend:
        """
        Set the spend of one campaign day, replacing any earlier amount.

        Args:
            campaign_id (str): The campaign
            spend_date (date): The day
            amount (float): Amount spent; zero is allowed

        Returns:
            CampaignDailySpend: The row as written

        Raises:
            ValueError: If the amount is missing or negative
        """
        if amount is None or amount < 0:
            raise ValueError("Amount must be 0 or greater")

        spend = CampaignDailySpend(
            id=uuid.uuid4().hex,
            campaign_id=str(campaign_id),
            spend_date=parse_day(spend_date),
            amount=float(amount)
        )
        self._execute_statement(MERGE_DAILY_SPEND_TEMPLATE, {
            "id": spend.id,
            "campaign_id": spend.campaign_id,
            "spend_date": to_iso_day(spend.spend_date),
            "amount": spend.amount
        })
        return spend


def total_spend(spends: List[CampaignDailySpend]) -> float:
    return sum(spend.amount for spend in spends)
