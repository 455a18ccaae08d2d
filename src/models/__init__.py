"""
Models package for the trade journal import backend.
"""

from .trade import (
    Trade,
    TradeType,
    TradeStatus,
    DashboardStats,
    DailyStat,
    EquityPoint,
)

from .import_result import (
    BrokerFormat,
    ImportResult,
    ImportSummary,
)

from .trade_sync import Mt5SyncPayload

__all__ = [
    'Trade',
    'TradeType',
    'TradeStatus',
    'DashboardStats',
    'DailyStat',
    'EquityPoint',
    'BrokerFormat',
    'ImportResult',
    'ImportSummary',
    'Mt5SyncPayload',
]

__all__ = sorted(list(set(__all__)))
