"""Expense service for managing expenses."""

import logging
from typing import Any, List, Optional

from expenses.models import Expense
from expenses.store import ExpenseStore
from shared.validators import (
    validate_required_fields,
    parse_amount,
    parse_date,
    to_text
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ['amount', 'description', 'category', 'date']


class ExpenseService:
    """Service for managing expenses."""

    def __init__(self, store: Optional[ExpenseStore] = None):
        """
        Initialize expense service.

        Args:
            store: Store to operate on; a new empty store when omitted
        """
        self.store = store if store is not None else ExpenseStore()

    def list_expenses(self) -> List[Expense]:
        """
        List every expense in creation order.

        Returns:
            List of expenses
        """
        return self.store.list()

    def create_expense(self, payload: Any) -> Expense:
        """
        Validate a request payload and store a new expense.

        Args:
            payload: Parsed JSON body; anything but an object has no fields

        Returns:
            Created expense

        Raises:
            ValidationError: If a field is missing or invalid
        """
        fields = payload if isinstance(payload, dict) else {}

        validate_required_fields(fields, REQUIRED_FIELDS)

        amount = parse_amount(fields['amount'])
        date = parse_date(fields['date'])

        expense = self.store.add(
            amount=amount,
            description=to_text(fields['description']),
            category=to_text(fields['category']),
            date=date
        )

        logger.info(f"Created expense {expense.id}")
        return expense
