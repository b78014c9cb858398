from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from enum import Enum
from datetime import datetime, timezone

# --- Enums ---
class AlertCategory(str, Enum):
    WEATHER = "weather"
    PEST = "pest"
    MARKET = "market"
    GENERAL = "general"

class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"

# --- Domain Models ---
class Alert(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: AlertCategory
    severity: AlertSeverity
    title: str
    message: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class PriceBand(BaseModel):
    min: float = 0.0
    max: float = 0.0
    modal: float

class PricePoint(BaseModel):
    month: str
    avg_price: float

class MarketSnapshot(BaseModel):
    """Mandi price summary for one crop (supplied by the market data service)."""
    crop_name: str
    current_price: Optional[PriceBand] = None
    price_history: List[PricePoint] = []

# --- API Request/Response Models ---
class AlertRequest(BaseModel):
    location: Optional[str] = None
    crop: Optional[str] = None
    market: Optional[MarketSnapshot] = None

class AlertResponse(BaseModel):
    alerts: List[Alert]
    source: str
    isSimulated: bool
    saved: bool

class AlertListResponse(BaseModel):
    alerts: List[Alert]
