"""
Base repository interface for data access.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Dict, Optional, Generic, TypeVar
import pandas as pd
from sales_analytics.config.app_config import DEFAULT_USER_ID
from sales_analytics.data.connectors.base_connector import BaseConnector

# Generic type for repository entities
T = TypeVar('T')


def normalize_key(value: Any) -> Optional[str]:
    """
    Turn an id column value into a stable string key.
    
    Integral floats (pandas upcasts int columns holding NULLs) lose their
    ``.0`` suffix so ``12.0`` and ``12`` name the same product.
    
    Args:
        value (Any): Raw id value
    
    Returns:
        Optional[str]: String key, or None for NULL/NaN/empty
    """
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    key = str(value).strip()
    return key or None


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base class for repositories that provide data access.
    """
    
    def __init__(self, connector: BaseConnector, user_id: Optional[str] = None):
        """
        Initialize the repository with a database connector.
        
        Args:
            connector (BaseConnector): The database connector to use
            user_id (Optional[str]): Owner whose rows are read and written
        """
        self.connector = connector
        self.user_id = user_id if user_id is not None else DEFAULT_USER_ID
    
    @abstractmethod
    def get_all(self, *args, **kwargs) -> List[T]:
        """
        Get all entities that match the specified criteria.
        
        Returns:
            List[T]: A list of entity objects
        """
        pass
    
    @abstractmethod
    def get_raw_data(self, *args, **kwargs) -> pd.DataFrame:
        """
        Get raw data as a pandas DataFrame.
        
        Returns:
            pd.DataFrame: The raw data as a pandas DataFrame
        """
        pass
    
    def _execute_query(self, query: str, params: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
        """
        Execute a SQL query scoped to this repository's user.
        
        Args:
            query (str): The SQL query to execute
            params (Optional[Dict[str, Any]]): Parameters to bind to the query
            
        Returns:
            pd.DataFrame: The query results as a pandas DataFrame
        """
        bound = {"user_id": self.user_id}
        bound.update(params or {})
        return self.connector.execute_query(query, bound)
    
    def _execute_statement(self, statement: str, params: Optional[Dict[str, Any]] = None) -> int:
        """
        Execute a data-modifying statement scoped to this repository's user.
        
        Args:
            statement (str): The SQL statement to execute
            params (Optional[Dict[str, Any]]): Parameters to bind to the statement
            
        Returns:
            int: Number of rows affected
        """
        bound = {"user_id": self.user_id}
        bound.update(params or {})
        return self.connector.execute_statement(statement, bound)
