"""
Repository for campaign and product reference names.
"""
import logging
from typing import Dict, List
import pandas as pd
from sales_analytics.data.repositories.base_repository import BaseRepository, normalize_key
from sales_analytics.data.models.reference import NamedReference, to_name_map
from sales_analytics.config.database_config import CAMPAIGNS_QUERY_TEMPLATE, PRODUCTS_QUERY_TEMPLATE
from sales_analytics.utils.validation import validate_dataframe

logger = logging.getLogger(__name__)

REFERENCE_QUERIES = {
    "campaign": CAMPAIGNS_QUERY_TEMPLATE,
    "product": PRODUCTS_QUERY_TEMPLATE,
}


class ReferenceRepository(BaseRepository[NamedReference]):
    """
    Reads ``(id, name)`` pairs used to label chart series.
    """
    
    def get_raw_data(self, kind: str = "campaign") -> pd.DataFrame:
        """
        Get reference rows as a DataFrame.
        
        Args:
            kind (str): "campaign" or "product"
        
        Returns:
            pd.DataFrame: Rows with ID and NAME columns
        """
        if kind not in REFERENCE_QUERIES:
            raise ValueError(f"Unknown reference kind: {kind}")
        
        df = self._execute_query(REFERENCE_QUERIES[kind])
        if not validate_dataframe(df, ['ID', 'NAME']):
            raise ValueError(f"Reference query for {kind} returned unexpected columns")
        logger.debug(f"Retrieved {len(df)} {kind} references.")
        return df
    
    def get_all(self, kind: str = "campaign") -> List[NamedReference]:
        """
        Get reference entities of one kind.
        
        Args:
            kind (str): "campaign" or "product"
        
        Returns:
            List[NamedReference]: Rows with a usable id
        """
        df = self.get_raw_data(kind)
        references = []
        for _, row in df.iterrows():
            key = normalize_key(row['ID'])
            if key is None:
                continue
            name = row['NAME'] if not pd.isna(row['NAME']) else key
            references.append(NamedReference(id=key, name=str(name), kind=kind))
        return references
    
    def get_campaign_names(self) -> Dict[str, str]:
        return to_name_map(self.get_all("campaign"))
    
    def get_product_names(self) -> Dict[str, str]:
        return to_name_map(self.get_all("product"))
