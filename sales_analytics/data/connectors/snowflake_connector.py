"""
Snowflake database connector implementation.
"""
import logging
import pandas as pd
from typing import Dict, Any, Optional
from snowflake.snowpark import Session
from sales_analytics.data.connectors.base_connector import BaseConnector, to_qmark
from sales_analytics.config.database_config import SNOWFLAKE_CONFIG

logger = logging.getLogger(__name__)


class SnowflakeConnector(BaseConnector):
    """
    Connector for the hosted Snowflake database holding sales, campaigns and products.

    Parameters are always sent to Snowflake as bind variables, never inlined
    into the SQL text.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Snowflake connector.

        Args:
            config (Optional[Dict[str, Any]]): Snowflake connection configuration.
                                              If None, uses the default from database_config.py
        """
        self.config = config if config is not None else SNOWFLAKE_CONFIG
        self.session = None

    def connect(self) -> Session:
        """
        Establish a connection to Snowflake.

        Returns:
            Session: The Snowflake session object
        """
        if self.session is None:
            try:
                self.session = Session.builder.configs(self.config).create()
                logger.info("Snowflake connection established.")
            except Exception as e:
                logger.error(f"Error connecting to Snowflake: {str(e)}")
                raise

        return self.session

    def disconnect(self) -> None:
        """
        Close the Snowflake connection.
        """
        try:
            if self.session is not None:
                self.session.close()
                logger.info("Snowflake connection closed.")
                self.session = None
        except Exception as e:
            logger.error(f"Error closing Snowflake connection: {str(e)}")
            raise

    def _sql(self, text: str, params: Optional[Dict[str, Any]]):
        if self.session is None:
            self.connect()
        query, values = to_qmark(text, params)
        logger.debug(f"Executing SQL with {len(values)} bound values: {query[:200]}...")
        return self.session.sql(query, params=values or None)

    def execute_query(self, query: str, params: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
        """
        Execute a SQL query on Snowflake and return the results as a DataFrame.

        Args:
            query (str): The SQL query to execute
            params (Optional[Dict[str, Any]]): Parameters to bind to the query

        Returns:
            pd.DataFrame: The query results as a pandas DataFrame
        """
        try:
            return self._sql(query, params).to_pandas()
        except Exception as e:
            logger.error(f"Error executing query: {str(e)}")
            raise

    def execute_statement(self, statement: str, params: Optional[Dict[str, Any]] = None) -> int:
        """
        Execute a MERGE/INSERT/DELETE or transaction control statement on Snowflake.

        Args:
            statement (str): The SQL statement to execute
            params (Optional[Dict[str, Any]]): Parameters to bind to the statement

        Returns:
            int: Number of rows inserted, updated or deleted
        """
        try:
            rows = self._sql(statement, params).collect()
            if not rows:
                return 0
            # DML reports its row counts in the first row
            return int(sum(value for value in rows[0] if isinstance(value, int) and not isinstance(value, bool)))
        except Exception as e:
            logger.error(f"Error executing statement: {str(e)}")
            raise
