#!/usr/bin/env python3
"""
Local development server for the expense endpoint.
Feeds real HTTP requests to the Lambda handler so a browser frontend can
talk to it, optionally preloaded with sample expenses.
"""

import os
import sys
import random
import logging
import argparse
from datetime import datetime, timedelta
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from expenses.handler import handle_event, MAX_BODY_BYTES
from expenses.service import ExpenseService
from shared.response import error_response, payload_too_large_response

logger = logging.getLogger(__name__)

SAMPLE_DESCRIPTIONS = {
    'food': ['Coffee', 'Lunch', 'Pizza', 'Groceries', 'Bakery'],
    'transport': ['Bus ticket', 'Taxi', 'Fuel', 'Parking'],
    'shopping': ['Books', 'Headphones', 'Shoes', 'Phone case'],
    'entertainment': ['Cinema', 'Concert ticket', 'Streaming subscription'],
    'utilities': ['Electricity', 'Water', 'Internet']
}


def seed_expenses(service, num_expenses=20):
    """Seed sample expenses through the service."""
    print(f"Creating {num_expenses} sample expenses...")

    expenses = []
    for i in range(num_expenses):
        # Random date within last 60 days
        days_ago = random.randint(0, 60)
        date = (datetime.utcnow() - timedelta(days=days_ago)).strftime('%Y-%m-%d')

        category = random.choice(list(SAMPLE_DESCRIPTIONS))

        expense = service.create_expense({
            'amount': round(random.uniform(2.0, 150.0), 2),
            'description': random.choice(SAMPLE_DESCRIPTIONS[category]),
            'category': category,
            'date': date
        })
        expenses.append(expense)

    print(f"Created {len(expenses)} expenses")
    return expenses


def make_request_handler(service):
    """Build a request handler class bound to an expense service."""

    class ExpenseRequestHandler(BaseHTTPRequestHandler):
        """Translates HTTP requests into proxy events and back."""

        def do_OPTIONS(self):
            self._dispatch()

        def do_GET(self):
            self._dispatch()

        def do_POST(self):
            self._dispatch()

        def do_PUT(self):
            self._dispatch()

        def do_PATCH(self):
            self._dispatch()

        def do_DELETE(self):
            self._dispatch()

        def _dispatch(self):
            self._responded = False

            try:
                content_length = int(self.headers.get('Content-Length') or 0)
            except ValueError:
                content_length = -1

            if content_length < 0:
                self.close_connection = True
                self._send(error_response("Invalid Content-Length header", status_code=400))
                return

            if content_length > MAX_BODY_BYTES:
                self.close_connection = True
                self._send(payload_too_large_response())
                return

            body = self.rfile.read(content_length) if content_length else b''

            event = {
                'httpMethod': self.command,
                'path': self.path,
                'headers': dict(self.headers.items()),
                'body': body.decode('utf-8', errors='surrogateescape') if body else None,
                'isBase64Encoded': False
            }

            self._send(handle_event(event, service))

        def _send(self, response):
            if self._responded:
                logger.warning(f"Dropped second response for {self.command} {self.path}")
                return
            self._responded = True

            status_code = response['statusCode']
            # HTTP forbids a body on 204 responses
            payload = b'' if status_code == 204 else response['body'].encode('utf-8')

            self.send_response(status_code)
            for name, value in response['headers'].items():
                self.send_header(name, value)
            if status_code != 204:
                self.send_header('Content-Length', str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def log_message(self, format, *args):
            logger.info(format % args)

    return ExpenseRequestHandler


def main():
    """Main function."""
    parser = argparse.ArgumentParser(description="Run the expense endpoint locally")
    parser.add_argument('--host', default='127.0.0.1')
    parser.add_argument('--port', type=int, default=3000)
    parser.add_argument('--seed', type=int, default=0, help="number of sample expenses to create")
    args = parser.parse_args()

    logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'INFO'))

    service = ExpenseService()
    if args.seed:
        seed_expenses(service, args.seed)

    server = ThreadingHTTPServer((args.host, args.port), make_request_handler(service))
    print(f"Serving expenses on http://{args.host}:{args.port}/api/expenses")

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down")
    finally:
        server.server_close()


if __name__ == '__main__':
    main()
