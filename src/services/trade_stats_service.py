"""
Service module for trade performance aggregates: headline stats, per-day P&L and
the equity curve.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Sequence

from models.trade import DailyStat, DashboardStats, EquityPoint, Trade

logger = logging.getLogger(__name__)

# Reported when there are winners but no losers
MAX_PROFIT_FACTOR = 100.0


def compute_dashboard_stats(trades: Sequence[Trade]) -> DashboardStats:
    """
    Compute net P&L, win rate, profit factor and average R over a set of trades.

    Args:
        trades: Trades to aggregate

    Returns:
        DashboardStats, all zeros for an empty set
    """
    total = len(trades)
    if total == 0:
        return DashboardStats(net_pnl=0.0, win_rate=0.0, profit_factor=0.0, avg_r=0.0, total_trades=0)

    net_pnl = sum(t.pnl for t in trades)
    win_count = sum(1 for t in trades if t.pnl > 0)
    gross_profit = sum(t.pnl for t in trades if t.pnl > 0)
    gross_loss = abs(sum(t.pnl for t in trades if t.pnl < 0))

    if gross_loss == 0:
        profit_factor = MAX_PROFIT_FACTOR if gross_profit > 0 else 0.0
    else:
        profit_factor = round(gross_profit / gross_loss, 2)

    return DashboardStats(
        net_pnl=net_pnl,
        win_rate=round(win_count / total * 100, 1),
        profit_factor=profit_factor,
        avg_r=round(sum(t.r_multiple for t in trades) / total, 2),
        total_trades=total
    )


def compute_daily_stats(trades: Sequence[Trade]) -> List[DailyStat]:
    """Sum P&L and count trades per entry day, ordered by day."""
    pnl_by_day: Dict[str, float] = defaultdict(float)
    count_by_day: Dict[str, int] = defaultdict(int)
    for trade in trades:
        day = trade.entry_date.split(' ')[0]
        pnl_by_day[day] += trade.pnl
        count_by_day[day] += 1

    return [
        DailyStat(date=day, pnl=pnl_by_day[day], trade_count=count_by_day[day])
        for day in sorted(pnl_by_day)
    ]


def compute_equity_curve(trades: Sequence[Trade]) -> List[EquityPoint]:
    """Cumulative P&L in entry order, starting from a zero 'Start' point."""
    balance = 0.0
    points = [EquityPoint(name="Start", value=balance)]
    # Canonical dates sort lexically; sorted() is stable for equal timestamps
    for i, trade in enumerate(sorted(trades, key=lambda t: t.entry_date), start=1):
        balance += trade.pnl
        points.append(EquityPoint(name=str(i), value=balance))
    return points
