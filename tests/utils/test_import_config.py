"""
Unit tests for the trade import configuration.
"""
import os
import unittest
from unittest.mock import patch

import utils.import_config as import_config_module
from utils.import_config import ImportConfig, get_import_config, update_config_from_dict


class TestImportConfig(unittest.TestCase):
    def setUp(self):
        self.original_config = import_config_module.import_config

    def tearDown(self):
        import_config_module.import_config = self.original_config

    def test_defaults(self):
        config = ImportConfig()
        self.assertEqual(config.min_columns, 5)
        self.assertEqual(config.risk_unit, 100.0)
        self.assertEqual(config.imported_setup, "Imported")
        self.assertEqual(config.import_id_prefix, "imp_")
        self.assertEqual(config.sync_setup, "MT5 Bot")

    @patch.dict(os.environ, {
        'TRADE_IMPORT_MIN_COLUMNS': '3',
        'TRADE_IMPORT_RISK_UNIT': '250',
        'TRADE_IMPORT_MAX_UPLOAD_BYTES': '1024'
    })
    def test_from_environment(self):
        config = ImportConfig.from_environment()
        self.assertEqual(config.min_columns, 3)
        self.assertEqual(config.risk_unit, 250.0)
        self.assertEqual(config.max_upload_bytes, 1024)

    def test_update_config_from_dict(self):
        """Test overriding single values keeps the others."""
        update_config_from_dict({'risk_unit': 50.0})

        config = get_import_config()
        self.assertEqual(config.risk_unit, 50.0)
        self.assertEqual(config.min_columns, self.original_config.min_columns)


if __name__ == '__main__':
    unittest.main()
