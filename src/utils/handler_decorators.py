"""
Handler decorators for reducing boilerplate code in Lambda handlers.

These decorators keep error mapping, CORS preflight handling and request logging
out of the individual route handlers.
"""

import logging
import traceback
from functools import wraps
from typing import Dict, Any, Callable

from pydantic import ValidationError

from utils.auth import NotAuthorized, NotFound
from utils.lambda_utils import create_response

logger = logging.getLogger(__name__)


def get_http_method(event: Dict[str, Any]) -> str:
    """HTTP method of an API Gateway v2 event, falling back to the v1 field."""
    method = event.get("requestContext", {}).get("http", {}).get("method") or event.get("httpMethod", "")
    return method.upper()


def standard_error_handling(func: Callable) -> Callable:
    """
    Decorator that provides standard error handling for Lambda handlers.

    Maps common exceptions to appropriate HTTP status codes:
    - ValidationError, ValueError, KeyError -> 400 Bad Request
    - NotAuthorized -> 401 Unauthorized
    - NotFound -> 404 Not Found
    - Exception -> 500 Internal Server Error

    Handlers decorated with this can focus on business logic and return raw data.
    The decorator will wrap the result in a proper API Gateway response.
    """
    @wraps(func)
    def wrapper(*args, **kwargs) -> Dict[str, Any]:
        try:
            result = func(*args, **kwargs)

            # If handler returns a dict with statusCode, it's already a response
            if isinstance(result, dict) and "statusCode" in result:
                return result

            # Otherwise, wrap in success response
            return create_response(200, result)

        except (ValidationError, ValueError, KeyError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors too
            logger.error(f"Validation error in {func.__name__}: {str(e)}")
            return create_response(400, {"message": str(e)})

        except NotAuthorized as e:
            logger.warning(f"Authorization error in {func.__name__}: {str(e)}")
            return create_response(401, {"message": str(e)})

        except NotFound as e:
            logger.warning(f"Resource not found in {func.__name__}: {str(e)}")
            return create_response(404, {"message": str(e)})

        except Exception as e:
            logger.error(f"Unexpected error in {func.__name__}: {str(e)}")
            logger.error(f"Stacktrace: {traceback.format_exc()}")
            return create_response(500, {"message": f"Error in {func.__name__.replace('_handler', '')}"})

    return wrapper


def allow_cors_preflight(func: Callable) -> Callable:
    """Answer OPTIONS requests before the handler runs."""
    @wraps(func)
    def wrapper(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
        if event and get_http_method(event) == "OPTIONS":
            return create_response(200, {"message": "OK"})
        return func(event, context)
    return wrapper


def log_request(func: Callable) -> Callable:
    """Log the route of every request."""
    @wraps(func)
    def wrapper(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
        route = event.get("routeKey") or f"{get_http_method(event)} {event.get('path', '')}"
        logger.info(f"Request: {route}")
        return func(event, context)
    return wrapper
