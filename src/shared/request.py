"""Helpers for reading Lambda proxy events."""

import json
import base64
import binascii
import logging
from typing import Any, Dict, Optional

from .exceptions import PayloadTooLargeError, RequestBodyError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_MAX_BODY_BYTES = 1000000


def get_http_method(event: Dict[str, Any]) -> str:
    """
    Extract the HTTP method from a REST API or HTTP API proxy event.

    Args:
        event: Lambda event

    Returns:
        Upper-cased HTTP method, or an empty string when absent
    """
    method = event.get('httpMethod')

    if not method:
        request_context = event.get('requestContext') or {}
        method = (request_context.get('http') or {}).get('method')

    return (method or '').upper()


def read_body(event: Dict[str, Any], max_bytes: int = DEFAULT_MAX_BODY_BYTES) -> str:
    """
    Read the request body out of a proxy event.

    Args:
        event: Lambda event
        max_bytes: Largest accepted body size in bytes

    Returns:
        Body text (empty string when there is no body)

    Raises:
        PayloadTooLargeError: If the body is larger than max_bytes
        RequestBodyError: If the body cannot be decoded
    """
    body: Optional[Any] = event.get('body')

    if body is None:
        return ''

    if event.get('isBase64Encoded'):
        try:
            raw = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError, TypeError) as e:
            raise RequestBodyError(f"Could not decode base64 body: {e}")
    elif isinstance(body, bytes):
        raw = body
    elif isinstance(body, str):
        raw = body.encode('utf-8', errors='surrogatepass')
    else:
        raise RequestBodyError(f"Unsupported body type: {type(body).__name__}")

    if len(raw) > max_bytes:
        logger.warning(f"Rejected body of {len(raw)} bytes (limit {max_bytes})")
        raise PayloadTooLargeError()

    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise RequestBodyError(str(e))


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_json_body(raw: str) -> Any:
    """
    Parse a JSON request body; an empty body parses as an empty object.

    Args:
        raw: Body text

    Returns:
        Parsed JSON value

    Raises:
        ValidationError: If the body is not valid JSON
    """
    if not raw:
        return {}

    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        raise ValidationError("Invalid JSON body")
