import csv
import logging
import logging.config
import math
import os
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from dateutil import parser as date_parser
from pydantic import ValidationError

from models.import_result import BrokerFormat, ImportResult, ImportSummary
from models.trade import Trade, TradeStatus, TradeType
from utils.file_analyzer import detect_broker_format
from utils.import_config import ImportConfig, get_import_config
from utils.trade_utils import generate_import_batch_id, generate_import_id

# Configure logging
log_conf = os.environ.get('LOGGING_CONFIG')
if log_conf:
    logging.config.fileConfig(log_conf)
else:
    logging.basicConfig(
        level=os.environ.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

# Get logger for this module
logger = logging.getLogger(__name__)

__all__ = [
    'parse_broker_csv',
    'split_csv_line',
    'parse_date',
    'parse_float',
    'build_header_index',
    'find_column_index',
    'find_last_column_index',
    'column_value',
    'map_row',
    'map_metatrader_row',
    'map_tradingview_row',
    'map_ninjatrader_row',
    'ROW_MAPPERS',
    'RowParseError',
    'RowSkipped',
]

CANONICAL_DATE_FORMAT = "%Y-%m-%d %H:%M"
NOT_FOUND = -1

EMPTY_FILE_MESSAGE = "CSV file is empty or missing headers."
UNKNOWN_FORMAT_MESSAGE = (
    "Could not detect broker format. Ensure headers match standard MT4, TradingView, or NinjaTrader exports."
)
MISSING_FIELDS_MESSAGE = "Missing required fields (Symbol or PnL)"

_LINE_SPLIT_RE = re.compile(r'\r?\n')
_LEADING_NUMBER_RE = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')

HeaderIndex = Dict[str, List[int]]


class RowParseError(ValueError):
    """Raised when a data row cannot be turned into a trade."""
    pass


class RowSkipped(Exception):
    """Raised by a row mapper for rows that are not trades (e.g. balance lines)."""
    pass


class QuotedDialect(csv.Dialect):
    delimiter = ','
    quotechar = '"'
    doublequote = True
    skipinitialspace = True
    lineterminator = '\n'
    quoting = csv.QUOTE_MINIMAL


def split_csv_line(line: str) -> List[str]:
    """
    Split one CSV row into trimmed fields. Double-quoted fields may hold commas and
    whitespace; the quotes are stripped. Never raises and always returns at least one field.
    """
    try:
        fields = next(csv.reader([line], dialect=QuotedDialect()), [])
    except csv.Error:
        fields = []
    if not fields:
        return [field.strip() for field in line.split(',')]
    return [field.strip() for field in fields]


def _format_datetime(dt: datetime) -> str:
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime(CANONICAL_DATE_FORMAT)


def parse_date(date_str: Optional[str]) -> str:
    """
    Normalize a broker date/time string to 'YYYY-MM-DD HH:mm'.

    Empty input falls back to the current UTC time. Values that cannot be parsed
    are returned unchanged.
    """
    date_str = (date_str or "").strip()
    if not date_str:
        return _format_datetime(datetime.now(timezone.utc))

    try:
        return _format_datetime(date_parser.parse(date_str))
    except (ValueError, OverflowError):
        pass

    # MetaTrader: YYYY.MM.DD HH:mm
    if '.' in date_str:
        date_part, _, rest = date_str.partition(' ')
        time_part = rest[:5] if rest else '00:00'
        return f"{date_part.replace('.', '-')} {time_part}"

    logger.debug(f"Could not parse date '{date_str}', passing it through")
    return date_str


def parse_float(value: Optional[str]) -> float:
    """Read the leading number of a string; NaN when there is none."""
    if value is None:
        return math.nan
    match = _LEADING_NUMBER_RE.match(value.strip())
    if not match:
        return math.nan
    return float(match.group(0))


def build_header_index(header_row: Sequence[str]) -> HeaderIndex:
    """Map every lower-cased header name to the positions it occupies."""
    index: HeaderIndex = {}
    for position, name in enumerate(header_row):
        index.setdefault(name.strip().lower(), []).append(position)
    return index


def find_column_index(header_index: HeaderIndex, name: str) -> int:
    """First position of a column, or NOT_FOUND."""
    positions = header_index.get(name.lower())
    return positions[0] if positions else NOT_FOUND


def find_last_column_index(header_index: HeaderIndex, name: str) -> int:
    """Last position of a column, or NOT_FOUND. MT4 templates reuse 'Price' for open and close."""
    positions = header_index.get(name.lower())
    return positions[-1] if positions else NOT_FOUND


def column_value(columns: Sequence[str], index: int) -> Optional[str]:
    """Value at a column position; None when the column is not found or the row is short."""
    if index < 0 or index >= len(columns):
        return None
    return columns[index]


def _first_non_empty(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value:
            return value
    return None


def _lookup(header_index: HeaderIndex, columns: Sequence[str], name: str) -> Optional[str]:
    return column_value(columns, find_column_index(header_index, name))


def _required(header_index: HeaderIndex, columns: Sequence[str], name: str) -> str:
    value = _lookup(header_index, columns, name)
    if value is None:
        raise RowParseError(f"Missing '{name}' column")
    return value


def map_metatrader_row(header_index: HeaderIndex, columns: Sequence[str]) -> Dict[str, Any]:
    """
    Map an MT4/MT5 statement row.

    Statement exports mix balance, deposit and withdrawal lines in with trades;
    rows whose type is neither buy nor sell raise RowSkipped.
    """
    type_str = _required(header_index, columns, 'type').lower()
    if 'buy' not in type_str and 'sell' not in type_str:
        raise RowSkipped(f"Non-trade row of type '{type_str}'")

    exit_price = _first_non_empty(
        _lookup(header_index, columns, 'close price'),
        column_value(columns, find_last_column_index(header_index, 'price'))
    )
    return {
        'entry_date': parse_date(_lookup(header_index, columns, 'open time')),
        'exit_date': parse_date(_lookup(header_index, columns, 'close time')),
        'symbol': _lookup(header_index, columns, 'item'),
        'trade_type': TradeType.LONG if 'buy' in type_str else TradeType.SHORT,
        'entry_price': parse_float(_lookup(header_index, columns, 'open price')),
        'exit_price': parse_float(exit_price),
        'quantity': parse_float(_lookup(header_index, columns, 'size')),
        'pnl': parse_float(_lookup(header_index, columns, 'profit')),
    }


def map_tradingview_row(header_index: HeaderIndex, columns: Sequence[str]) -> Dict[str, Any]:
    """
    Map a TradingView closed-trades row. The export carries a single timestamp and a
    single execution price per row, so entry and exit share them.
    """
    type_str = _required(header_index, columns, 'type').lower()
    entry_date = parse_date(_lookup(header_index, columns, 'date/time'))
    price = parse_float(_lookup(header_index, columns, 'price'))
    quantity = _first_non_empty(
        _lookup(header_index, columns, 'contracts'),
        _lookup(header_index, columns, 'quantity'),
        '1'
    )
    return {
        'entry_date': entry_date,
        'exit_date': entry_date,
        'symbol': _lookup(header_index, columns, 'symbol'),
        'trade_type': TradeType.SHORT if 'short' in type_str else TradeType.LONG,
        'entry_price': price,
        'exit_price': price,
        'quantity': parse_float(quantity),
        'pnl': parse_float(_first_non_empty(_lookup(header_index, columns, 'profit'), '0')),
    }


def map_ninjatrader_row(header_index: HeaderIndex, columns: Sequence[str]) -> Dict[str, Any]:
    """Map a NinjaTrader trade performance row."""
    position = _required(header_index, columns, 'market pos.').lower()
    return {
        'symbol': _lookup(header_index, columns, 'instrument'),
        'trade_type': TradeType.LONG if 'long' in position else TradeType.SHORT,
        'quantity': parse_float(_lookup(header_index, columns, 'qty')),
        'entry_price': parse_float(_lookup(header_index, columns, 'entry price')),
        'exit_price': parse_float(_lookup(header_index, columns, 'exit price')),
        'entry_date': parse_date(_lookup(header_index, columns, 'entry time')),
        'exit_date': parse_date(_lookup(header_index, columns, 'exit time')),
        'pnl': parse_float(_lookup(header_index, columns, 'pnl')),
    }


RowMapper = Callable[[HeaderIndex, Sequence[str]], Dict[str, Any]]

ROW_MAPPERS: Dict[BrokerFormat, RowMapper] = {
    BrokerFormat.METATRADER: map_metatrader_row,
    BrokerFormat.TRADINGVIEW: map_tradingview_row,
    BrokerFormat.NINJATRADER: map_ninjatrader_row,
}


def map_row(broker_format: BrokerFormat,
            header_index: HeaderIndex,
            columns: Sequence[str],
            row_number: int,
            batch_id: str,
            config: Optional[ImportConfig] = None) -> Trade:
    """
    Turn one tokenized data row into a trade.

    Args:
        broker_format: Detected export layout
        header_index: Lower-cased header name lookup built once per import
        columns: Tokenized fields of the row
        row_number: 1-based source row number (the header is row 1)
        batch_id: Token shared by all trades of the import
        config: Import settings, defaults to the global configuration

    Returns:
        Trade with derived status and R-multiple

    Raises:
        RowSkipped: The row is not a trade
        RowParseError: The row lacks a symbol or a numeric P&L
    """
    config = config or get_import_config()
    mapper = ROW_MAPPERS.get(broker_format)
    if mapper is None:
        raise RowParseError(f"Unsupported broker format: {broker_format.value}")

    fields = mapper(header_index, columns)
    symbol = (fields.get('symbol') or '').strip()
    pnl = fields['pnl']
    if not symbol or math.isnan(pnl):
        raise RowParseError(MISSING_FIELDS_MESSAGE)

    fields['symbol'] = symbol
    return Trade(
        id=generate_import_id(batch_id, row_number, config.import_id_prefix),
        setup=config.imported_setup,
        status=TradeStatus.from_pnl(pnl),
        # TODO: replace the fixed risk unit with the user's configured risk per trade
        r_multiple=round(pnl / config.risk_unit, 2),
        mistakes=[],
        **fields
    )


def _describe_row_error(error: Exception) -> str:
    if isinstance(error, ValidationError):
        return "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in error.errors()
        )
    return str(error)


def parse_broker_csv(content: str, config: Optional[ImportConfig] = None) -> ImportResult:
    """
    Parse a broker CSV export into journal trades.

    Args:
        content: The raw file text
        config: Import settings, defaults to the global configuration

    Returns:
        ImportResult with the parsed trades, one error per rejected row and the row counts.
        Empty files and unknown layouts are reported as a failed result, never raised.
    """
    config = config or get_import_config()
    lines = [line for line in _LINE_SPLIT_RE.split(content or '') if line.strip()]

    if len(lines) < 2:
        logger.warning("Import rejected: file is empty or has no data rows")
        return ImportResult.fatal(EMPTY_FILE_MESSAGE)

    header_row = split_csv_line(lines[0])
    broker_format = detect_broker_format(header_row)
    if broker_format == BrokerFormat.UNKNOWN:
        logger.warning(f"Import rejected: unrecognized header {header_row}")
        return ImportResult.fatal(UNKNOWN_FORMAT_MESSAGE)

    logger.info(f"Detected {broker_format.value} export with {len(lines) - 1} data rows")
    header_index = build_header_index(header_row)
    batch_id = generate_import_batch_id()

    trades: List[Trade] = []
    errors: List[str] = []
    total_processed = 0

    for row_number, line in enumerate(lines[1:], start=2):
        columns = split_csv_line(line)
        if len(columns) < config.min_columns:
            logger.debug(f"Row {row_number}: skipped, only {len(columns)} fields")
            continue

        try:
            trade = map_row(broker_format, header_index, columns, row_number, batch_id, config)
        except RowSkipped as e:
            logger.debug(f"Row {row_number}: skipped, {str(e)}")
            continue
        except Exception as e:
            total_processed += 1
            message = f"Row {row_number}: {_describe_row_error(e)}"
            logger.warning(message)
            errors.append(message)
            continue

        total_processed += 1
        trades.append(trade)

    logger.info(f"Import finished: {len(trades)} trades, {len(errors)} errors")
    return ImportResult(
        success=len(trades) > 0,
        trades=trades,
        errors=errors,
        summary=ImportSummary(
            total_processed=total_processed,
            successful=len(trades),
            failed=len(errors)
        ),
        broker_format=broker_format
    )
