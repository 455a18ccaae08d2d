from typing import Dict, Any, Optional
import base64
import enum
import json
import math
from decimal import Decimal

class TradeJSONEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, Decimal):
            # Always return as string to preserve precision and ensure consistent type
            return str(obj)
        if isinstance(obj, enum.Enum):
            return obj.value
        return super(TradeJSONEncoder, self).default(obj)

def _replace_nan(value: Any) -> Any:
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, dict):
        return {k: _replace_nan(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_replace_nan(v) for v in value]
    return value

def create_response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    """Create a standardized API response."""
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Headers": "Content-Type,Authorization,x-api-key,x-file-name",
            "Access-Control-Allow-Methods": "POST,OPTIONS"
        },
        "body": json.dumps(_replace_nan(body), cls=TradeJSONEncoder)
    }

def handle_error(status_code: int, message: str) -> Dict[str, Any]:
    """Create a standardized error response."""
    return create_response(status_code, {"message": message})

def get_raw_body(event: Dict[str, Any]) -> str:
    """Return the request body as text, decoding base64 bodies from API Gateway."""
    body = event.get('body') or ''
    if event.get('isBase64Encoded'):
        return base64.b64decode(body).decode('utf-8-sig')
    return body

def get_raw_body_bytes(event: Dict[str, Any]) -> bytes:
    """Return the request body as bytes, decoding base64 bodies from API Gateway."""
    body = event.get('body') or ''
    if event.get('isBase64Encoded'):
        return base64.b64decode(body)
    return body.encode('utf-8')

def get_json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """Parse the json-encoded request body. Raises ValueError if it is not a JSON object."""
    payload = json.loads(get_raw_body(event) or '{}')
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object")
    return payload

# extract parameters from the json payload body
def optional_body_parameter(event: Dict[str, Any], parameter_name: str) -> Optional[Any]:
    """Extract a json-encoded body parameter from the event."""
    return get_json_body(event).get(parameter_name)

def mandatory_body_parameter(event: Dict[str, Any], parameter_name: str) -> Any:
    """Extract a mandatory json-encoded body parameter from the event."""
    parameter_value = optional_body_parameter(event, parameter_name)
    if not parameter_value:
        raise KeyError(f"Body parameter {parameter_name} is required")
    return parameter_value
