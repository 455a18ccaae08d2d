"""
Unit tests for the trade import service.
"""
import unittest
from unittest.mock import patch

from models.import_result import BrokerFormat
from models.trade import Trade, TradeType
from services.trade_import_service import (
    decode_file_content,
    import_trades_from_file,
    import_trades_from_s3,
    merge_imported_trades,
    validate_upload
)
from utils.auth import NotFound
from utils.import_config import ImportConfig

MT_CSV = (
    "Ticket,Open Time,Type,Size,Item,Open Price,S/L,T/P,Close Time,Close Price,Commission,Taxes,Swap,Profit\n"
    "1,2023.01.05 10:00,buy,1.0,EURUSD,1.1000,0,0,2023.01.05 12:00,1.1050,0,0,0,500\n"
    "2,2023.01.06 10:00,sell,2.0,GBPUSD,1.2500,0,0,2023.01.06 11:00,1.2550,0,0,0,-100\n"
)


class TestTradeImportService(unittest.TestCase):
    def setUp(self):
        """Set up test fixtures."""
        self.content = MT_CSV.encode('utf-8')
        self.existing_trade = Trade(
            id="3f2b6c1e-8d1a-4b7f-9a0e-2c5d7e9f1a3b",
            symbol="ES",
            entry_date="2022-12-30 15:00",
            exit_date="2022-12-30 15:30",
            trade_type=TradeType.LONG,
            entry_price=3800.0,
            exit_price=3810.0,
            quantity=1.0,
            pnl=500.0,
        )

    def test_decode_utf8_with_bom(self):
        self.assertEqual(decode_file_content(b'\xef\xbb\xbfTicket,Item'), 'Ticket,Item')

    def test_decode_falls_back_to_cp1252(self):
        """Test Windows-1252 exports from desktop platforms."""
        self.assertEqual(decode_file_content(b'Item\nEUR\x80'), 'Item\nEUR€')

    def test_decode_falls_back_to_latin1(self):
        self.assertEqual(decode_file_content(b'a\x81b'), 'a\x81b')

    def test_validate_upload(self):
        validate_upload("statement.csv", self.content)
        validate_upload("statement", self.content, "text/csv")

    def test_validate_upload_rejects_non_csv(self):
        with self.assertRaises(ValueError) as ctx:
            validate_upload("statement.xlsx", self.content)
        self.assertEqual(str(ctx.exception), "Please upload a valid CSV file.")

    def test_validate_upload_rejects_empty_file(self):
        with self.assertRaises(ValueError) as ctx:
            validate_upload("statement.csv", b"")
        self.assertEqual(str(ctx.exception), "Uploaded file is empty.")

    @patch('services.trade_import_service.get_import_config')
    def test_validate_upload_rejects_large_file(self, mock_config):
        mock_config.return_value = ImportConfig(max_upload_bytes=10)
        with self.assertRaises(ValueError) as ctx:
            validate_upload("statement.csv", self.content)
        self.assertIn("too large", str(ctx.exception))

    def test_import_trades_from_file(self):
        result = import_trades_from_file(self.content, "statement.csv")

        self.assertTrue(result.success)
        self.assertEqual(result.broker_format, BrokerFormat.METATRADER)
        self.assertEqual([t.symbol for t in result.trades], ["EURUSD", "GBPUSD"])
        self.assertEqual(result.summary.total_processed, 2)

    def test_import_trades_from_file_reports_unknown_format(self):
        result = import_trades_from_file(b"Date,Description,Amount\n2024-01-01,Coffee,-3.50", "bank.csv")

        self.assertFalse(result.success)
        self.assertEqual(len(result.errors), 1)

    @patch('services.trade_import_service.get_object_content')
    def test_import_trades_from_s3(self, mock_get_content):
        """Test importing an upload stored in S3."""
        mock_get_content.return_value = self.content

        result = import_trades_from_s3("uploads/statement.csv", "my-bucket")

        self.assertEqual(len(result.trades), 2)
        mock_get_content.assert_called_once_with("uploads/statement.csv", "my-bucket")

    @patch('services.trade_import_service.get_object_content')
    def test_import_trades_from_s3_missing(self, mock_get_content):
        mock_get_content.return_value = None

        with self.assertRaises(NotFound):
            import_trades_from_s3("uploads/missing.csv")

    def test_merge_imported_trades(self):
        """Test imported trades are appended after the existing ones."""
        imported = import_trades_from_file(self.content, "statement.csv").trades

        merged = merge_imported_trades([self.existing_trade], imported)

        self.assertEqual(len(merged), 3)
        self.assertIs(merged[0], self.existing_trade)
        self.assertEqual(merged[1:], imported)

    def test_merge_keeps_duplicates(self):
        merged = merge_imported_trades([self.existing_trade], [self.existing_trade])
        self.assertEqual(len(merged), 2)


if __name__ == '__main__':
    unittest.main()
