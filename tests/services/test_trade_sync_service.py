"""
Unit tests for the MT5 sync service.
"""
import unittest

from pydantic import ValidationError

from models.trade import TradeStatus, TradeType
from services.trade_sync_service import sync_trade_from_payload


class TestTradeSyncService(unittest.TestCase):
    def setUp(self):
        """Set up test fixtures."""
        self.payload = {
            "user_id": "user123",
            "symbol": "XAUUSD",
            "ticket": 998877,
            "profit": 42.5,
            "volume": 0.1,
            "entry_time": 1672912800,
            "exit_time": 1672920000,
            "type": 0,
            "magic": 1234,
        }

    def test_sync_buy(self):
        trade = sync_trade_from_payload(self.payload)

        self.assertEqual(trade.id, "imp_mt5_998877")
        self.assertEqual(trade.symbol, "XAUUSD")
        self.assertEqual(trade.trade_type, TradeType.LONG)
        self.assertEqual(trade.entry_date, "2023-01-05 10:00")
        self.assertEqual(trade.exit_date, "2023-01-05 12:00")
        self.assertEqual(trade.quantity, 0.1)
        self.assertEqual(trade.pnl, 42.5)
        self.assertEqual(trade.status, TradeStatus.WIN)
        self.assertEqual(trade.setup, "MT5 Bot")
        self.assertEqual(trade.notes, "Ticket #998877 synced from MT5")
        self.assertEqual(trade.entry_price, 0.0)
        self.assertEqual(trade.r_multiple, 0.0)

    def test_sync_sell_loss(self):
        self.payload.update({"type": 1, "profit": -12.0})

        trade = sync_trade_from_payload(self.payload)

        self.assertEqual(trade.trade_type, TradeType.SHORT)
        self.assertEqual(trade.status, TradeStatus.LOSS)

    def test_zero_profit_counts_as_win(self):
        self.payload["profit"] = 0
        self.assertEqual(sync_trade_from_payload(self.payload).status, TradeStatus.WIN)

    def test_missing_required_fields(self):
        """Test payloads without user, symbol or ticket are rejected."""
        for field in ("user_id", "symbol", "ticket"):
            with self.subTest(field=field):
                payload = dict(self.payload)
                del payload[field]
                with self.assertRaises(ValidationError):
                    sync_trade_from_payload(payload)

    def test_negative_time_rejected(self):
        self.payload["entry_time"] = -1
        with self.assertRaises(ValidationError):
            sync_trade_from_payload(self.payload)


class TestTradeSyncTypeLabels(unittest.TestCase):
    def setUp(self):
        """Set up test fixtures."""
        self.payload = {"user_id": "u", "symbol": "EURUSD", "ticket": 1, "profit": 5}

    def test_side_labels(self):
        """Test the bot's 'Buy'/'Sell' labels as well as MT5 deal type codes."""
        test_cases = [
            ("Buy", TradeType.LONG),
            ("SELL", TradeType.SHORT),
            (" buy ", TradeType.LONG),
            ("0", TradeType.LONG),
            ("1", TradeType.SHORT),
            (0, TradeType.LONG),
            (1, TradeType.SHORT),
        ]
        for trade_type, expected in test_cases:
            with self.subTest(trade_type=trade_type):
                payload = dict(self.payload, type=trade_type)
                self.assertEqual(sync_trade_from_payload(payload).trade_type, expected)

    def test_unknown_label_rejected(self):
        with self.assertRaises(ValidationError):
            sync_trade_from_payload(dict(self.payload, type="Hold"))

    def test_missing_type_is_short(self):
        self.assertEqual(sync_trade_from_payload(self.payload).trade_type, TradeType.SHORT)


if __name__ == '__main__':
    unittest.main()
