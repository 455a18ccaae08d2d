"""
File analyzer utilities for detecting broker export formats based on content inspection.
"""
import logging
import os
from typing import List, Optional, Sequence, Tuple

from models.import_result import BrokerFormat

logger = logging.getLogger(__name__)

# Checked in order, first match wins
BROKER_SIGNATURES: List[Tuple[BrokerFormat, Tuple[str, ...]]] = [
    (BrokerFormat.METATRADER, ("ticket", "open time")),
    (BrokerFormat.NINJATRADER, ("instrument", "market pos.")),
    (BrokerFormat.TRADINGVIEW, ("date/time", "profit")),
]

CSV_CONTENT_TYPES = {"text/csv", "application/csv"}


def detect_broker_format(header_row: Sequence[str]) -> BrokerFormat:
    """
    Detect the broker export layout from the tokenized header row.

    Args:
        header_row: Header fields as produced by the line splitter

    Returns:
        BrokerFormat enum value, UNKNOWN when no signature matches
    """
    header_string = ",".join(header_row).lower()

    for broker_format, required in BROKER_SIGNATURES:
        if all(marker in header_string for marker in required):
            return broker_format

    return BrokerFormat.UNKNOWN


def detect_broker_format_from_content(text_content: str) -> BrokerFormat:
    """
    Detect the broker export layout from raw file text by sniffing its first non-blank line.

    Args:
        text_content: Decoded file content

    Returns:
        BrokerFormat enum value
    """
    # Imported here to avoid a circular import with the parser
    from utils.trade_parser import split_csv_line

    for line in text_content.splitlines():
        if line.strip():
            detected = detect_broker_format(split_csv_line(line))
            logger.info(f"Broker format detection result: {detected.value}")
            return detected
    return BrokerFormat.UNKNOWN


def is_csv_upload(file_name: Optional[str], content_type: Optional[str] = None) -> bool:
    """
    Check whether an upload looks like a CSV file, by content type or by extension.

    Args:
        file_name: Name of the uploaded file
        content_type: Optional MIME type reported by the client

    Returns:
        True if the upload should be treated as CSV
    """
    if content_type and content_type.split(";")[0].strip().lower() in CSV_CONTENT_TYPES:
        return True
    _, extension = os.path.splitext(file_name or "")
    return extension.lower() == ".csv"
