"""
Payload models for the ad platform (Meta) and the e-commerce platform (WooCommerce).

Every payload is validated at the boundary by a ``from_api`` constructor so
that only well-formed values reach the database and the report stages.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sales_analytics.exceptions import PlatformDataError

PURCHASE_ACTION_TYPES = ("purchase", "omni_purchase")
WOO_ATTRIBUTION_PREFIX = "_wc_order_attribution_"
WOO_ATTRIBUTION_FIELDS = {
    "utm_campaign": "utm_campaign",
    "utm_source": "utm_source",
    "utm_medium": "utm_medium",
    "utm_content": "utm_content",
    "utm_term": "utm_term",
    "source_type": "traffic_source_type",
    "device_type": "device_type",
    "referrer": "referrer",
}
WOO_BUMP_META_KEY = "_bump_purchase"


def _require(payload: Dict[str, Any], key: str, platform: str) -> Any:
    if not isinstance(payload, dict):
        raise PlatformDataError(
            "Payload is not an object", platform=platform,
            expected="dict", got=type(payload).__name__
        )
    value = payload.get(key)
    if value is None or value == "":
        raise PlatformDataError(f"Missing required field '{key}'", platform=platform, expected=key)
    return value


def _to_float(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _to_int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    if value is None or value == "":
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


# ─── Meta Ads ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MetaAction:
    """One entry of an insight's ``actions`` / ``action_values`` list."""
    action_type: str
    value: str
    
    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "MetaAction":
        return cls(
            action_type=str(_require(payload, "action_type", "meta")),
            value=str(payload.get("value", "0"))
        )


def _actions(payload: Dict[str, Any], key: str) -> Tuple[MetaAction, ...]:
    raw = payload.get(key) or []
    if not isinstance(raw, list):
        raise PlatformDataError(f"Field '{key}' must be a list", platform="meta",
                                expected="list", got=type(raw).__name__)
    return tuple(MetaAction.from_api(item) for item in raw)


def _find_action(actions: Tuple[MetaAction, ...]) -> Optional[MetaAction]:
    for action_type in PURCHASE_ACTION_TYPES:
        for action in actions:
            if action.action_type == action_type:
                return action
    return None


@dataclass(frozen=True)
class MetaAccountInfo:
    id: str
    name: str
    currency: Optional[str] = None
    timezone_name: Optional[str] = None
    
    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "MetaAccountInfo":
        return cls(
            id=str(_require(payload, "id", "meta")),
            name=str(payload.get("name") or ""),
            currency=payload.get("currency"),
            timezone_name=payload.get("timezone_name")
        )


@dataclass(frozen=True)
class MetaCampaign:
    """
    A campaign as returned by the Graph API ``/act_<id>/campaigns`` edge.
    
    Budgets are reported in cents as strings.
    """
    id: str
    name: str
    status: Optional[str] = None
    objective: Optional[str] = None
    daily_budget: Optional[str] = None
    lifetime_budget: Optional[str] = None
    created_time: Optional[str] = None
    start_time: Optional[str] = None
    stop_time: Optional[str] = None
    
    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "MetaCampaign":
        return cls(
            id=str(_require(payload, "id", "meta")),
            name=str(_require(payload, "name", "meta")),
            status=payload.get("status"),
            objective=payload.get("objective"),
            daily_budget=payload.get("daily_budget"),
            lifetime_budget=payload.get("lifetime_budget"),
            created_time=payload.get("created_time"),
            start_time=payload.get("start_time"),
            stop_time=payload.get("stop_time")
        )
    
    @property
    def budget(self) -> Optional[float]:
        """Daily budget if set, else lifetime budget, in currency units."""
        for raw in (self.daily_budget, self.lifetime_budget):
            cents = _to_float(raw, default=None)
            if cents is not None:
                return cents / 100
        return None


@dataclass(frozen=True)
class MetaCampaignInsight:
    """
    Campaign-level insight row from ``/act_<id>/insights``.
    """
    campaign_id: str
    campaign_name: str = ""
    spend: float = 0.0
    impressions: int = 0
    clicks: int = 0
    ctr: float = 0.0
    cpc: float = 0.0
    cpm: float = 0.0
    cpp: Optional[float] = None
    reach: int = 0
    frequency: Optional[float] = None
    actions: Tuple[MetaAction, ...] = ()
    action_values: Tuple[MetaAction, ...] = ()
    cost_per_action_type: Tuple[MetaAction, ...] = ()
    date_start: Optional[str] = None
    date_stop: Optional[str] = None
    
    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "MetaCampaignInsight":
        return cls(
            campaign_id=str(_require(payload, "campaign_id", "meta")),
            campaign_name=str(payload.get("campaign_name") or ""),
            spend=_to_float(payload.get("spend")),
            impressions=_to_int(payload.get("impressions")),
            clicks=_to_int(payload.get("clicks")),
            ctr=_to_float(payload.get("ctr")),
            cpc=_to_float(payload.get("cpc")),
            cpm=_to_float(payload.get("cpm")),
            cpp=_to_float(payload.get("cpp"), default=None),
            reach=_to_int(payload.get("reach")),
            frequency=_to_float(payload.get("frequency"), default=None),
            actions=_actions(payload, "actions"),
            action_values=_actions(payload, "action_values"),
            cost_per_action_type=_actions(payload, "cost_per_action_type"),
            date_start=payload.get("date_start"),
            date_stop=payload.get("date_stop")
        )
    
    @property
    def purchases(self) -> int:
        action = _find_action(self.actions)
        return _to_int(action.value) if action else 0
    
    @property
    def purchase_value(self) -> float:
        action = _find_action(self.action_values)
        return _to_float(action.value) if action else 0.0
    
    @property
    def roas(self) -> Optional[float]:
        """Return on ad spend; ``None`` when nothing was spent."""
        if not self.spend:
            return None
        return self.purchase_value / self.spend


@dataclass(frozen=True)
class CampaignRecord:
    """
    Database row upserted for a synced Meta campaign.
    """
    id: str
    user_id: str
    name: str
    budget: Optional[float]
    spend: float
    impressions: int
    clicks: int
    purchases: int
    purchase_value: float
    updated_at: str
    
    @classmethod
    def from_meta(
        cls,
        campaign: MetaCampaign,
        insight: Optional[MetaCampaignInsight],
        user_id: str,
        updated_at: datetime
    ) -> "CampaignRecord":
        return cls(
            id=campaign.id,
            user_id=user_id,
            name=campaign.name,
            budget=campaign.budget,
            spend=insight.spend if insight else 0.0,
            impressions=insight.impressions if insight else 0,
            clicks=insight.clicks if insight else 0,
            purchases=insight.purchases if insight else 0,
            purchase_value=insight.purchase_value if insight else 0.0,
            updated_at=updated_at.isoformat()
        )
    
    def to_params(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "budget": self.budget,
            "spend": self.spend,
            "impressions": self.impressions,
            "clicks": self.clicks,
            "purchases": self.purchases,
            "purchase_value": self.purchase_value,
            "updated_at": self.updated_at,
        }


# ─── WooCommerce ───────────────────────────────────────────────────────────

def _meta_entries(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    entries = payload.get("meta_data") or []
    if not isinstance(entries, list):
        raise PlatformDataError("Field 'meta_data' must be a list", platform="woocommerce",
                                expected="list", got=type(entries).__name__)
    return [entry for entry in entries if isinstance(entry, dict)]


@dataclass(frozen=True)
class WooStoreInfo:
    name: str
    version: str
    
    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "WooStoreInfo":
        store = payload.get("store") if isinstance(payload, dict) else None
        store = store or {}
        return cls(
            name=store.get("name") or "WooCommerce Store",
            version=store.get("version") or "Unknown"
        )


@dataclass(frozen=True)
class WooLineItem:
    id: int
    product_id: Optional[int]
    name: str
    quantity: int
    price: float
    total: float
    is_bump: bool = False
    
    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "WooLineItem":
        product_id = _to_int(payload.get("product_id"), default=None)
        return cls(
            id=_to_int(_require(payload, "id", "woocommerce")),
            # WooCommerce reports 0 for deleted products
            product_id=product_id or None,
            name=str(payload.get("name") or ""),
            quantity=max(1, _to_int(payload.get("quantity"), default=1)),
            price=_to_float(payload.get("price")),
            total=_to_float(payload.get("total")),
            is_bump=any(entry.get("key") == WOO_BUMP_META_KEY for entry in _meta_entries(payload))
        )


@dataclass(frozen=True)
class WooCommerceOrder:
    """
    An order from ``/wp-json/wc/v3/orders`` with its attribution metadata
    lifted into explicit fields.
    """
    id: int
    date_created: str
    status: str
    total: float
    customer_id: Optional[int] = None
    line_items: Tuple[WooLineItem, ...] = ()
    utm_campaign: Optional[str] = None
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_content: Optional[str] = None
    utm_term: Optional[str] = None
    traffic_source_type: Optional[str] = None
    device_type: Optional[str] = None
    referrer: Optional[str] = None
    has_bump_purchase: bool = False
    
    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "WooCommerceOrder":
        attribution = {}
        for entry in _meta_entries(payload):
            key = entry.get("key") or ""
            if key.startswith(WOO_ATTRIBUTION_PREFIX):
                name = WOO_ATTRIBUTION_FIELDS.get(key[len(WOO_ATTRIBUTION_PREFIX):])
                if name and entry.get("value") not in (None, ""):
                    attribution[name] = str(entry["value"])
        
        raw_items = payload.get("line_items") or []
        if not isinstance(raw_items, list):
            raise PlatformDataError("Field 'line_items' must be a list", platform="woocommerce",
                                    expected="list", got=type(raw_items).__name__)
        line_items = tuple(WooLineItem.from_api(item) for item in raw_items)
        
        return cls(
            id=_to_int(_require(payload, "id", "woocommerce")),
            date_created=str(_require(payload, "date_created", "woocommerce")),
            status=str(payload.get("status") or "unknown"),
            total=_to_float(payload.get("total")),
            customer_id=_to_int(payload.get("customer_id"), default=None),
            line_items=line_items,
            has_bump_purchase=any(item.is_bump for item in line_items),
            **attribution
        )
    
    @property
    def day(self) -> str:
        return self.date_created.split("T")[0]


@dataclass(frozen=True)
class WooCommerceSummary:
    total_orders: int = 0
    orders_with_utm: int = 0
    orders_without_utm: int = 0
    unique_campaigns: Tuple[str, ...] = ()
    date_range: Dict[str, str] = field(default_factory=lambda: {"start": "", "end": ""})
