"""Integration tests for the expense endpoint handler."""

import pytest
import json
import base64
from unittest.mock import patch
import sys
import os

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from expenses import handler
from expenses.handler import handle_event, lambda_handler
from expenses.service import ExpenseService
from expenses.store import ExpenseStore

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET,POST,OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type'
}


def make_event(method, body=None, is_base64=False):
    """Build an API Gateway proxy event."""
    return {
        'httpMethod': method,
        'path': '/api/expenses',
        'headers': {'Content-Type': 'application/json'},
        'body': body,
        'isBase64Encoded': is_base64
    }


def post_event(payload):
    """Build a POST event with a JSON payload."""
    return make_event('POST', json.dumps(payload))


def body_of(response):
    """Decode the JSON body of a proxy response."""
    return json.loads(response['body'])


@pytest.fixture
def service():
    """Create a service backed by a fresh store."""
    return ExpenseService(ExpenseStore())


@pytest.fixture
def valid_payload():
    """Valid expense payload."""
    return {
        'amount': 12.5,
        'description': 'coffee',
        'category': 'food',
        'date': '2025-01-01'
    }


class TestExpenseEndpoint:
    """Test cases for the expense endpoint."""

    def test_options_preflight(self, service):
        """Test the CORS preflight response."""
        response = handle_event(make_event('OPTIONS'), service)

        assert response['statusCode'] == 204
        assert body_of(response) == {'success': True}

    def test_get_empty(self, service):
        """Test listing before any expense is created."""
        response = handle_event(make_event('GET'), service)

        assert response['statusCode'] == 200
        assert body_of(response) == {'success': True, 'data': []}

    def test_create_expense(self, service, valid_payload):
        """Test creating expenses assigns sequential ids."""
        first = handle_event(post_event(valid_payload), service)
        second = handle_event(post_event(valid_payload), service)

        assert first['statusCode'] == 201
        assert body_of(first) == {
            'success': True,
            'data': {
                'id': 1,
                'amount': 12.5,
                'description': 'coffee',
                'category': 'food',
                'date': '2025-01-01'
            }
        }
        assert body_of(second)['data']['id'] == 2

    def test_create_normalizes_timestamp(self, service, valid_payload):
        """Test that a timestamp is stored as a calendar date."""
        payload = {**valid_payload, 'date': '2025-03-10T08:45:00.000Z', 'amount': '19.99'}

        data = body_of(handle_event(post_event(payload), service))['data']

        assert data['date'] == '2025-03-10'
        assert data['amount'] == 19.99

    def test_missing_fields(self, service):
        """Test that every missing field is reported."""
        response = handle_event(post_event({'amount': 5, 'date': '2025-01-01'}), service)

        assert response['statusCode'] == 400
        assert body_of(response) == {
            'success': False,
            'error': 'Missing required fields: description, category'
        }

    @pytest.mark.parametrize('body', [None, ''])
    def test_empty_body(self, service, body):
        """Test that an empty body is treated as an empty object."""
        response = handle_event(make_event('POST', body), service)

        assert response['statusCode'] == 400
        assert body_of(response)['error'] == 'Missing required fields: amount, description, category, date'

    def test_invalid_json(self, service):
        """Test that malformed JSON is rejected."""
        response = handle_event(make_event('POST', '{"amount": '), service)

        assert response['statusCode'] == 400
        assert body_of(response) == {'success': False, 'error': 'Invalid JSON body'}

    def test_invalid_amount(self, service, valid_payload):
        """Test that a non-numeric amount is rejected."""
        response = handle_event(post_event({**valid_payload, 'amount': 'abc'}), service)

        assert response['statusCode'] == 400
        assert body_of(response)['error'] == 'Invalid field: amount must be a number'

    def test_invalid_date(self, service, valid_payload):
        """Test that an unparsable date is rejected."""
        response = handle_event(post_event({**valid_payload, 'date': 'not-a-date'}), service)

        assert response['statusCode'] == 400
        assert body_of(response)['error'] == (
            'Invalid field: date must be a valid date string (e.g. 2025-01-01)'
        )

    def test_date_out_of_range_after_utc_conversion(self, service, valid_payload):
        """Test that a date pushed out of range by its offset is rejected."""
        payload = {**valid_payload, 'date': '0001-01-01T00:00:00+01:00'}

        response = handle_event(post_event(payload), service)

        assert response['statusCode'] == 400
        assert body_of(response)['error'].startswith('Invalid field: date')

    def test_deeply_nested_body(self, service):
        """Test that deeply nested JSON is reported as invalid JSON."""
        response = handle_event(make_event('POST', '[' * 200000), service)

        assert response['statusCode'] == 400
        assert body_of(response) == {'success': False, 'error': 'Invalid JSON body'}

    def test_empty_array_and_object_fields_are_present(self, service):
        """Test that empty arrays and objects pass the required-field check."""
        payload = {'amount': 1, 'description': [], 'category': {}, 'date': '2025-01-01'}

        response = handle_event(post_event(payload), service)
        data = body_of(response)['data']

        assert response['statusCode'] == 201
        assert data['description'] == ''
        assert data['category'] == '[object Object]'

    def test_list_after_creates(self, service, valid_payload):
        """Test that listing returns every expense in insertion order."""
        for i in range(5):
            handle_event(post_event({**valid_payload, 'description': f'item {i}'}), service)

        data = body_of(handle_event(make_event('GET'), service))['data']

        assert [e['id'] for e in data] == [1, 2, 3, 4, 5]
        assert [e['description'] for e in data] == [f'item {i}' for i in range(5)]

    def test_get_is_idempotent(self, service, valid_payload):
        """Test that GET never changes the store."""
        handle_event(post_event(valid_payload), service)

        first = handle_event(make_event('GET'), service)
        second = handle_event(make_event('GET'), service)

        assert first['body'] == second['body']
        assert len(service.store) == 1

    @pytest.mark.parametrize('method', ['PUT', 'DELETE', 'PATCH', 'HEAD'])
    def test_method_not_allowed(self, service, method):
        """Test that unsupported methods are rejected."""
        response = handle_event(make_event(method), service)

        assert response['statusCode'] == 405
        assert body_of(response) == {'success': False, 'error': 'Method not allowed'}

    def test_body_too_large(self, service):
        """Test that an oversized body gets a 413 and stores nothing."""
        response = handle_event(make_event('POST', 'x' * (handler.MAX_BODY_BYTES + 1)), service)

        assert response['statusCode'] == 413
        assert body_of(response) == {'success': False, 'error': 'Request body too large'}
        assert len(service.store) == 0

    def test_base64_body(self, service, valid_payload):
        """Test that base64-encoded bodies are decoded."""
        encoded = base64.b64encode(json.dumps(valid_payload).encode('utf-8')).decode('ascii')

        response = handle_event(make_event('POST', encoded, is_base64=True), service)

        assert response['statusCode'] == 201

    def test_unreadable_body(self, service):
        """Test that a body that cannot be decoded is a server error."""
        encoded = base64.b64encode(b'\xff\xff').decode('ascii')

        response = handle_event(make_event('POST', encoded, is_base64=True), service)
        body = body_of(response)

        assert response['statusCode'] == 500
        assert body['success'] is False
        assert body['error'] == 'Server error'
        assert body['details']

    def test_unexpected_error(self, service):
        """Test that unexpected failures become a 500."""
        with patch.object(service, 'list_expenses', side_effect=RuntimeError('boom')):
            response = handle_event(make_event('GET'), service)

        assert response['statusCode'] == 500
        assert body_of(response) == {'success': False, 'error': 'Server error'}

    @pytest.mark.parametrize('event', [
        make_event('OPTIONS'),
        make_event('GET'),
        make_event('POST', '{"amount": 1, "description": "a", "category": "b", "date": "2025-01-01"}'),
        make_event('POST', '{'),
        make_event('POST', ''),
        make_event('DELETE'),
        make_event('POST', base64.b64encode(b'\xff').decode('ascii'), is_base64=True)
    ])
    def test_cors_headers_on_every_response(self, service, event):
        """Test that every response carries CORS and content-type headers."""
        response = handle_event(event, service)

        for name, value in CORS_HEADERS.items():
            assert response['headers'][name] == value
        assert response['headers']['Content-Type'] == 'application/json'

    def test_http_api_event(self, service):
        """Test that HTTP API (v2) events are routed by method."""
        event = {'rawPath': '/api/expenses', 'requestContext': {'http': {'method': 'GET'}}}

        response = handle_event(event, service)

        assert response['statusCode'] == 200


class TestLambdaHandler:
    """Test cases for the Lambda entry point."""

    def test_uses_process_service(self, service, valid_payload):
        """Test that lambda_handler delegates to the process-wide service."""
        with patch('expenses.handler.expense_service', service):
            lambda_handler(post_event(valid_payload), None)
            response = lambda_handler(make_event('GET'), None)

        assert len(body_of(response)['data']) == 1
        assert len(service.store) == 1


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
