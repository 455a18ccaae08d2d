"""
Trade models for the trade journal.
"""
import logging
import math
import uuid
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class TradeType(str, Enum):
    """Enum for trade direction"""
    LONG = "LONG"
    SHORT = "SHORT"


class TradeStatus(str, Enum):
    """Enum for trade outcome"""
    WIN = "WIN"
    LOSS = "LOSS"
    BREAK_EVEN = "BREAK_EVEN"
    OPEN = "OPEN"

    @classmethod
    def from_pnl(cls, pnl: Optional[float]) -> "TradeStatus":
        """Derive the outcome from the sign of the realized P&L."""
        if pnl is None or math.isnan(pnl):
            return cls.OPEN
        if pnl > 0:
            return cls.WIN
        if pnl < 0:
            return cls.LOSS
        return cls.BREAK_EVEN


class Trade(BaseModel):
    """
    Represents a single journal trade, using Pydantic for validation and serialization.

    Dates are canonical 'YYYY-MM-DD HH:mm' strings. Prices and quantity may be NaN
    when a broker export did not carry a usable value; NaN is serialized as null.
    """
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), min_length=1)
    symbol: str = Field(min_length=1)
    entry_date: str = Field(alias="entryDate")
    exit_date: str = Field(alias="exitDate")
    trade_type: TradeType = Field(alias="type")
    setup: str = Field(default="", max_length=255)
    entry_price: float = Field(alias="entryPrice")
    exit_price: float = Field(alias="exitPrice")
    stop_loss: Optional[float] = Field(default=None, alias="stopLoss")
    quantity: float
    pnl: float
    r_multiple: float = Field(default=0.0, alias="rMultiple")
    status: TradeStatus = Field(default=TradeStatus.OPEN)
    mistakes: List[str] = Field(default_factory=list)
    screenshot_url: Optional[str] = Field(default=None, alias="screenshotUrl")
    notes: Optional[str] = Field(default=None, max_length=5000)

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=False,  # Preserve enum objects (not strings) for type safety
        ser_json_inf_nan='null'
    )

    @field_validator('entry_price', 'exit_price', 'quantity', mode='before')
    @classmethod
    def null_as_nan(cls, v):
        # to_dict() sends unparsed numbers as null
        if v is None:
            return math.nan
        return v

    @field_validator('symbol')
    @classmethod
    def check_symbol_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Symbol must not be blank")
        return v

    @field_validator('pnl')
    @classmethod
    def check_pnl_is_number(cls, v: float) -> float:
        if math.isnan(v) or math.isinf(v):
            raise ValueError("PnL must be a finite number")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dictionary using the camelCase field names."""
        data = self.model_dump(mode='json', by_alias=True)
        for key, value in data.items():
            if isinstance(value, float) and math.isnan(value):
                data[key] = None
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Trade":
        """Create a Trade from a camelCase (or snake_case) dictionary."""
        return cls.model_validate(data)


class DashboardStats(BaseModel):
    """Headline performance figures over a set of trades."""
    net_pnl: float = Field(alias="netPnl")
    win_rate: float = Field(alias="winRate")
    profit_factor: float = Field(alias="profitFactor")
    avg_r: float = Field(alias="avgR")
    total_trades: int = Field(alias="totalTrades", ge=0)

    model_config = ConfigDict(populate_by_name=True)


class DailyStat(BaseModel):
    date: str
    pnl: float
    trade_count: int = Field(alias="tradeCount", ge=0)

    model_config = ConfigDict(populate_by_name=True)


class EquityPoint(BaseModel):
    name: str
    value: float
