"""
Payload model for trades pushed by the MetaTrader 5 sync bot.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MT5_BUY = 0
MT5_SELL = 1

SIDE_LABELS = {"buy": MT5_BUY, "sell": MT5_SELL}


class Mt5SyncPayload(BaseModel):
    """A closed MT5 deal as posted by the bot. Times are Unix seconds, type 0 is a buy."""
    user_id: str = Field(min_length=1)
    symbol: str = Field(min_length=1)
    ticket: str = Field(min_length=1)
    profit: float = 0.0
    volume: float = 0.0
    entry_time: int = Field(default=0, ge=0)
    exit_time: int = Field(default=0, ge=0)
    trade_type: Optional[int] = Field(default=None, alias="type")

    model_config = ConfigDict(
        populate_by_name=True,
        extra='ignore'
    )

    @field_validator('trade_type', mode='before')
    @classmethod
    def coerce_trade_type(cls, v):
        # MT5 deal types (0 buy, 1 sell) or the labels 'Buy'/'Sell'
        if isinstance(v, str):
            label = v.strip().lower()
            if label in SIDE_LABELS:
                return SIDE_LABELS[label]
            if label.isdigit():
                return int(label)
            raise ValueError(f"Unknown trade type '{v}', expected 0, 1, 'Buy' or 'Sell'")
        return v

    @field_validator('ticket', mode='before')
    @classmethod
    def coerce_ticket(cls, v):
        # The bot sends tickets as integers
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v
