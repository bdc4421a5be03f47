"""
Reference data models used to label report series.
"""
from dataclasses import dataclass
from typing import Dict, Iterable


@dataclass(frozen=True)
class NamedReference:
    """
    An ``(id, name)`` pair for a campaign or a product.
    """
    id: str
    name: str
    kind: str = "campaign"  # "campaign" or "product"


def to_name_map(references: Iterable[NamedReference]) -> Dict[str, str]:
    """
    Build an id -> name lookup; later duplicates win.
    
    Args:
        references (Iterable[NamedReference]): Reference rows
    
    Returns:
        Dict[str, str]: Mapping of stringified id to display name
    """
    return {str(ref.id): ref.name for ref in references}
