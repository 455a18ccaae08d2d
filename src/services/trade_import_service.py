"""
Service module for importing broker CSV exports into the trade journal.

Reading the upload and handing the resulting trades to storage stay outside the
parser; this module covers the steps around it: upload validation, decoding,
loading uploads from S3 and merging imported trades with an existing set.
"""
import logging
from typing import List, Optional

from models.import_result import ImportResult
from models.trade import Trade
from utils.auth import NotFound
from utils.file_analyzer import is_csv_upload
from utils.import_config import get_import_config
from utils.s3_dao import get_object_content
from utils.trade_parser import parse_broker_csv

# Configure logging
logger = logging.getLogger(__name__)

ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")


def decode_file_content(content: bytes) -> str:
    """
    Decode uploaded bytes, trying the encodings broker platforms typically write.

    Args:
        content: Raw file content

    Returns:
        Decoded text
    """
    for encoding in ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    # latin-1 maps every byte, so this is only reached if ENCODINGS changes
    return content.decode("utf-8", errors="replace")


def validate_upload(file_name: Optional[str], content: bytes, content_type: Optional[str] = None) -> None:
    """
    Check an upload before parsing it.

    Raises:
        ValueError: If the upload is not a CSV file, is empty or is too large
    """
    if not is_csv_upload(file_name, content_type):
        raise ValueError("Please upload a valid CSV file.")
    if not content:
        raise ValueError("Uploaded file is empty.")
    max_bytes = get_import_config().max_upload_bytes
    if len(content) > max_bytes:
        raise ValueError(f"Uploaded file is too large ({len(content)} bytes, limit {max_bytes}).")


def import_trades_from_file(content: bytes, file_name: Optional[str], content_type: Optional[str] = None) -> ImportResult:
    """
    Validate, decode and parse an uploaded broker export.

    Args:
        content: Raw file content
        file_name: Name of the uploaded file
        content_type: Optional MIME type reported by the client

    Returns:
        ImportResult of the parse
    """
    validate_upload(file_name, content, content_type)
    text_content = decode_file_content(content)
    result = parse_broker_csv(text_content)
    logger.info(
        f"Imported {file_name}: format={result.broker_format.value} "
        f"processed={result.summary.total_processed} successful={result.summary.successful} "
        f"failed={result.summary.failed}"
    )
    return result


def import_trades_from_s3(key: str, bucket: Optional[str] = None) -> ImportResult:
    """
    Parse a broker export that was uploaded to S3.

    Args:
        key: S3 object key of the upload
        bucket: Optional bucket name (defaults to the file storage bucket)

    Returns:
        ImportResult of the parse

    Raises:
        NotFound: If the object cannot be read
    """
    content = get_object_content(key, bucket)
    if content is None:
        raise NotFound(f"Upload {key} not found")
    return import_trades_from_file(content, key)


def merge_imported_trades(current: List[Trade], imported: List[Trade]) -> List[Trade]:
    """Append imported trades after the already-loaded ones. No de-duplication is done."""
    return [*current, *imported]
