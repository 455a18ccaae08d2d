"""
Trade import configuration settings.

This module contains the tunable values used by the broker CSV importer and the
MT5 sync mapping. Values can be adjusted through environment variables without
code changes.
"""
import os
from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class ImportConfig:
    """Configuration class for trade import settings."""

    # Rows with fewer tokenized fields are footer/blank lines and are skipped
    min_columns: int = 5

    # Fixed risk unit used to derive rMultiple for imported trades, which carry no stop-loss data
    risk_unit: float = 100.0

    # Labels and identifiers given to trades that have not been persisted yet
    imported_setup: str = "Imported"
    import_id_prefix: str = "imp_"
    sync_setup: str = "MT5 Bot"

    # Upload limits
    max_upload_bytes: int = 5 * 1024 * 1024

    @classmethod
    def from_environment(cls) -> 'ImportConfig':
        """
        Create configuration from environment variables with fallback to defaults.

        Environment variables:
        - TRADE_IMPORT_MIN_COLUMNS
        - TRADE_IMPORT_RISK_UNIT
        - TRADE_IMPORT_MAX_UPLOAD_BYTES
        """
        return cls(
            min_columns=int(os.getenv('TRADE_IMPORT_MIN_COLUMNS', 5)),
            risk_unit=float(os.getenv('TRADE_IMPORT_RISK_UNIT', 100.0)),
            max_upload_bytes=int(os.getenv('TRADE_IMPORT_MAX_UPLOAD_BYTES', 5 * 1024 * 1024))
        )


# Global configuration instance
import_config = ImportConfig.from_environment()


def get_import_config() -> ImportConfig:
    """Get the global import configuration instance."""
    return import_config


def update_config_from_dict(config_dict: Dict[str, Any]) -> None:
    """
    Update configuration from a dictionary (useful for testing).

    Args:
        config_dict: Dictionary with configuration values
    """
    global import_config

    current_values = {
        field.name: getattr(import_config, field.name)
        for field in import_config.__dataclass_fields__.values()
    }
    current_values.update(config_dict)
    import_config = ImportConfig(**current_values)
