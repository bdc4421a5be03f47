"""
Base database connector interface.
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
import math
import re
import pandas as pd
from typing import Dict, Any, Iterator, List, Optional, Tuple

_PLACEHOLDER_PATTERN = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def to_bind_value(value: Any) -> Any:
    """
    Normalize a value before handing it to the driver.

    NaN and infinite floats have no SQL counterpart and are sent as NULL.

    Args:
        value (Any): The raw parameter value

    Returns:
        Any: The value to bind
    """
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def to_qmark(query: str, params: Optional[Dict[str, Any]] = None) -> Tuple[str, List[Any]]:
    """
    Rewrite ``:name`` placeholders as positional ``?`` markers.

    Values never become part of the query text; the driver binds them. A name
    used twice is bound twice. Names missing from ``params`` (such as
    ``::DATE`` casts) are left alone.

    Args:
        query (str): Query text with named placeholders
        params (Optional[Dict[str, Any]]): Values to bind

    Returns:
        Tuple[str, List[Any]]: Query text with markers and the ordered values
    """
    if not params:
        return query, []

    values = []

    def _replace(match):
        name = match.group(1)
        if name not in params:
            return match.group(0)
        values.append(to_bind_value(params[name]))
        return "?"

    return _PLACEHOLDER_PATTERN.sub(_replace, query), values


class BaseConnector(ABC):
    """
    Abstract base class for database connections.
    """

    @abstractmethod
    def connect(self) -> Any:
        """
        Establish a connection to the database.

        Returns:
            Any: The database connection/session object
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """
        Close the database connection.
        """
        pass

    @abstractmethod
    def execute_query(self, query: str, params: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
        """
        Execute a SQL query and return the results as a DataFrame.

        Args:
            query (str): The SQL query to execute
            params (Optional[Dict[str, Any]]): Parameters to bind to the query

        Returns:
            pd.DataFrame: The query results as a pandas DataFrame
        """
        pass

    @abstractmethod
    def execute_statement(self, statement: str, params: Optional[Dict[str, Any]] = None) -> int:
        """
        Execute a data-modifying statement (MERGE, INSERT, ...).

        Args:
            statement (str): The SQL statement to execute
            params (Optional[Dict[str, Any]]): Parameters to bind to the statement

        Returns:
            int: Number of rows affected
        """
        pass

    @contextmanager
    def transaction(self) -> Iterator["BaseConnector"]:
        """
        Run the enclosed statements as one unit of work.

        Commits when the block finishes and rolls back when it raises; the
        original error is re-raised after the rollback.

        Yields:
            BaseConnector: This connector
        """
        self.execute_statement("BEGIN")
        try:
            yield self
        except BaseException:
            self.execute_statement("ROLLBACK")
            raise
        self.execute_statement("COMMIT")

    def __enter__(self):
        """
        Context manager entry point.

        Returns:
            BaseConnector: The connector instance
        """
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Context manager exit point.
        """
        self.disconnect()
