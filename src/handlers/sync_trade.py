"""
Lambda function receiving closed trades from the MetaTrader 5 sync bot.
"""
import logging
from typing import Dict, Any

from services.trade_sync_service import sync_trade_from_payload
from utils.auth import check_sync_api_key
from utils.handler_decorators import allow_cors_preflight, log_request, standard_error_handling
from utils.lambda_utils import get_json_body

# Configure logging
logger = logging.getLogger(__name__)


@allow_cors_preflight
@log_request
@standard_error_handling
def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Validate the bot's API key and map its payload to a journal trade.

    The mapped trade is returned to the caller, which owns persisting it.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response
    """
    check_sync_api_key(event)
    trade = sync_trade_from_payload(get_json_body(event))
    return {"success": True, "trade": trade.to_dict()}
