"""
Validation utilities for sales analytics.
"""
from typing import Any, List, Optional
import pandas as pd
from datetime import datetime


def validate_date_format(date_str: str) -> bool:
    """
    Validate that a date string is in YYYY-MM-DD format.
    
    Args:
        date_str (str): The date string to validate
        
    Returns:
        bool: True if the date is valid, False otherwise
    """
    try:
        datetime.strptime(date_str, '%Y-%m-%d')
        return True
    except (ValueError, TypeError):
        return False


def validate_choice(value: Any, choices: List[str], default: Optional[str] = None) -> Optional[str]:
    """
    Validate a value against a list of allowed choices.
    
    Args:
        value (Any): The value to validate
        choices (List[str]): Allowed values
        default (Optional[str]): Value returned when validation fails
        
    Returns:
        Optional[str]: The value if allowed, otherwise the default
    """
    if isinstance(value, str) and value in choices:
        return value
    return default


def validate_dataframe(df: pd.DataFrame, required_columns: List[str]) -> bool:
    """
    Validate that a DataFrame contains the required columns.
    
    An empty frame is valid as long as its columns are present.
    
    Args:
        df (pd.DataFrame): The DataFrame to validate
        required_columns (List[str]): List of required column names
        
    Returns:
        bool: True if all required columns exist, False otherwise
    """
    if df is None:
        return False
    
    missing_columns = [col for col in required_columns if col not in df.columns]
    return len(missing_columns) == 0
