"""
Lambda function for trade import operations.
"""
import logging
from typing import Dict, Any, List

from models.trade import Trade
from services.trade_import_service import import_trades_from_file, import_trades_from_s3
from services.trade_stats_service import compute_daily_stats, compute_dashboard_stats, compute_equity_curve
from utils.auth import get_header
from utils.handler_decorators import allow_cors_preflight, log_request, standard_error_handling
from utils.lambda_utils import get_json_body, get_raw_body_bytes, handle_error, mandatory_body_parameter

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_NAME = "upload.csv"


def import_csv_handler(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Parse a broker CSV posted as the request body.

    The file name is taken from the x-file-name header; the content type from
    the content-type header.
    """
    file_name = get_header(event, "x-file-name") or DEFAULT_UPLOAD_NAME
    content_type = get_header(event, "content-type")
    result = import_trades_from_file(get_raw_body_bytes(event), file_name, content_type)
    return result.to_dict()


def import_s3_handler(event: Dict[str, Any]) -> Dict[str, Any]:
    """Parse a broker CSV previously uploaded to S3."""
    key = mandatory_body_parameter(event, "key")
    bucket = get_json_body(event).get("bucket")
    result = import_trades_from_s3(key, bucket)
    return result.to_dict()


def trade_stats_handler(event: Dict[str, Any]) -> Dict[str, Any]:
    """Compute headline stats, daily P&L and the equity curve for the posted trades."""
    raw_trades = get_json_body(event).get("trades") or []
    if not isinstance(raw_trades, list):
        raise ValueError("trades must be a list")
    trades: List[Trade] = [Trade.from_dict(item) for item in raw_trades]
    return {
        "stats": compute_dashboard_stats(trades).model_dump(by_alias=True),
        "daily": [stat.model_dump(by_alias=True) for stat in compute_daily_stats(trades)],
        "equityCurve": [point.model_dump() for point in compute_equity_curve(trades)],
    }


ROUTES = {
    "POST /trades/import": import_csv_handler,
    "POST /trades/import/s3": import_s3_handler,
    "POST /trades/stats": trade_stats_handler,
}


@allow_cors_preflight
@log_request
@standard_error_handling
def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler for trade import operations.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response
    """
    route = event.get("routeKey")
    if not route:
        return handle_error(400, "Route not specified")

    route_handler = ROUTES.get(route)
    if route_handler is None:
        return handle_error(404, f"Route {route} not found")
    return route_handler(event)
