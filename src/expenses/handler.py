"""Lambda handler for expense operations."""

import os
import logging
from typing import Dict, Any
import sys

# Add parent directory to path for imports
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from shared.response import success_response, error_response, method_not_allowed_response
from shared.request import get_http_method, read_body, parse_json_body, DEFAULT_MAX_BODY_BYTES
from shared.exceptions import ExpenseTrackerException
from expenses.service import ExpenseService

# Configure logging
logger = logging.getLogger()
logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO'))

MAX_BODY_BYTES = int(os.environ.get('MAX_BODY_BYTES', DEFAULT_MAX_BODY_BYTES))

# Initialize service; its store lives as long as the process
expense_service = ExpenseService()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for expense operations.

    Handles:
    - OPTIONS /expenses - CORS preflight
    - GET /expenses - List expenses
    - POST /expenses - Create expense

    Args:
        event: Lambda event
        context: Lambda context

    Returns:
        API Gateway response
    """
    return handle_event(event, expense_service)


def handle_event(event: Dict[str, Any], service: ExpenseService) -> Dict[str, Any]:
    """
    Dispatch a proxy event to the matching operation.

    Args:
        event: Lambda event
        service: Expense service to operate on

    Returns:
        API Gateway response
    """
    try:
        http_method = get_http_method(event)

        # Log request
        logger.info(f"Request: {http_method} {event.get('path') or event.get('rawPath', '')}")

        if http_method == 'OPTIONS':
            return success_response(status_code=204)
        elif http_method == 'GET':
            return handle_list(service)
        elif http_method == 'POST':
            return handle_create(event, service)
        else:
            return method_not_allowed_response()

    except ExpenseTrackerException as e:
        logger.error(f"Application error: {str(e)}")
        return error_response(e.message, status_code=e.status_code, details=e.details)
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        return error_response("Server error", status_code=500)


def handle_list(service: ExpenseService) -> Dict[str, Any]:
    """
    Handle list expenses.

    Args:
        service: Expense service

    Returns:
        API Gateway response
    """
    return success_response(data=service.list_expenses())


def handle_create(event: Dict[str, Any], service: ExpenseService) -> Dict[str, Any]:
    """
    Handle create expense.

    Validation and body errors propagate to handle_event, which turns them
    into 400, 413 or 500 responses.

    Args:
        event: Lambda event
        service: Expense service

    Returns:
        API Gateway response
    """
    raw_body = read_body(event, max_bytes=MAX_BODY_BYTES)
    payload = parse_json_body(raw_body)

    expense = service.create_expense(payload)

    return success_response(data=expense, status_code=201)
