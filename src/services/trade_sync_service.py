"""
Service module for trades pushed by the MetaTrader 5 sync bot.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from models.trade import Trade, TradeStatus, TradeType
from models.trade_sync import MT5_BUY, Mt5SyncPayload
from utils.import_config import get_import_config
from utils.trade_parser import CANONICAL_DATE_FORMAT
from utils.trade_utils import generate_import_id

logger = logging.getLogger(__name__)


def _format_epoch_seconds(seconds: int) -> str:
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime(CANONICAL_DATE_FORMAT)


def map_sync_payload(payload: Mt5SyncPayload) -> Trade:
    """
    Map a bot payload to a journal trade.

    The bot does not report prices, so both are 0. The outcome is WIN for any
    non-negative profit.
    """
    config = get_import_config()
    trade = Trade(
        id=generate_import_id("mt5", payload.ticket, config.import_id_prefix),
        symbol=payload.symbol,
        trade_type=TradeType.LONG if payload.trade_type == MT5_BUY else TradeType.SHORT,
        entry_date=_format_epoch_seconds(payload.entry_time),
        exit_date=_format_epoch_seconds(payload.exit_time),
        entry_price=0.0,
        exit_price=0.0,
        quantity=payload.volume,
        pnl=payload.profit,
        status=TradeStatus.WIN if payload.profit >= 0 else TradeStatus.LOSS,
        setup=config.sync_setup,
        notes=f"Ticket #{payload.ticket} synced from MT5",
        r_multiple=0.0,
        mistakes=[]
    )
    logger.info(f"Mapped MT5 ticket {payload.ticket} for user {payload.user_id}: {trade.symbol} {trade.pnl}")
    return trade


def sync_trade_from_payload(data: Dict[str, Any]) -> Trade:
    """Validate a raw bot payload and map it. Raises pydantic.ValidationError on bad input."""
    return map_sync_payload(Mt5SyncPayload.model_validate(data))
