"""
Utility functions for trade identifiers.
"""
import uuid
from typing import Optional, Union

from utils.import_config import get_import_config


def generate_import_batch_id() -> str:
    """Short random token shared by every trade of one import."""
    return uuid.uuid4().hex[:12]


def generate_import_id(batch_id: str, row_number: Union[int, str], prefix: Optional[str] = None) -> str:
    """
    Generate the temporary identifier of an imported trade.

    Args:
        batch_id: Token of the import the trade belongs to
        row_number: 1-based source row number of the trade, or another per-batch key such as a ticket
        prefix: Marker for not-yet-persisted trades, defaults to the configured import prefix

    Returns:
        str: An identifier carrying the import prefix, e.g. 'imp_3f9a0c1b2d4e_2'
    """
    if prefix is None:
        prefix = get_import_config().import_id_prefix
    return f"{prefix}{batch_id}_{row_number}"


def is_imported_trade_id(trade_id: str) -> bool:
    """True when the identifier marks a trade that has not been persisted yet."""
    return bool(trade_id) and trade_id.startswith(get_import_config().import_id_prefix)
