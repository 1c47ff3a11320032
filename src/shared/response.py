"""Response utilities for Lambda functions."""

import json
from typing import Any, Dict, Optional
from datetime import datetime, date

from pydantic import BaseModel


# Sentinel so that success_response() can omit "data" entirely
_NO_DATA = object()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type"
}


class ModelEncoder(json.JSONEncoder):
    """JSON encoder for pydantic models and datetime objects."""

    def default(self, obj):
        if isinstance(obj, BaseModel):
            return obj.model_dump()
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        return super().default(obj)


def json_response(
    body: Dict[str, Any],
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Create a Lambda proxy response carrying a JSON body and the CORS headers.

    Args:
        body: Response body, serialized with ModelEncoder
        status_code: HTTP status code (default: 200)
        headers: Optional additional headers

    Returns:
        Lambda proxy response dictionary
    """
    default_headers = {"Content-Type": "application/json", **CORS_HEADERS}

    if headers:
        default_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": default_headers,
        "body": json.dumps(body, cls=ModelEncoder)
    }


def success_response(
    data: Any = _NO_DATA,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Create a standardized success response.

    Args:
        data: Response data; the "data" key is left out when not given
        status_code: HTTP status code (default: 200)
        headers: Optional additional headers

    Returns:
        Lambda proxy response dictionary
    """
    body = {"success": True}

    if data is not _NO_DATA:
        body["data"] = data

    return json_response(body, status_code=status_code, headers=headers)


def error_response(
    message: str,
    status_code: int = 500,
    details: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Create a standardized error response.

    Args:
        message: Error message
        status_code: HTTP status code (default: 500)
        details: Optional error details
        headers: Optional additional headers

    Returns:
        Lambda proxy response dictionary
    """
    body = {
        "success": False,
        "error": message
    }

    if details is not None:
        body["details"] = details

    return json_response(body, status_code=status_code, headers=headers)


def method_not_allowed_response(message: str = "Method not allowed") -> Dict[str, Any]:
    """Create a method not allowed error response."""
    return error_response(message=message, status_code=405)


def payload_too_large_response(message: str = "Request body too large") -> Dict[str, Any]:
    """Create a payload too large error response."""
    return error_response(message=message, status_code=413)
