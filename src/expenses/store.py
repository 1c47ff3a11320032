"""In-memory expense store."""

import threading
import logging
from typing import List, Union

from expenses.models import Expense

logger = logging.getLogger(__name__)


class ExpenseStore:
    """Append-only, ordered collection of expenses held in process memory."""

    def __init__(self):
        """Initialize an empty store."""
        self._expenses: List[Expense] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._expenses)

    def add(
        self,
        amount: Union[int, float],
        description: str,
        category: str,
        date: str
    ) -> Expense:
        """
        Append a new expense, assigning the next id.

        Args:
            amount: Parsed amount
            description: Expense description
            category: Expense category
            date: Normalized date (YYYY-MM-DD)

        Returns:
            The stored expense
        """
        # id assignment and append happen under one lock acquisition
        with self._lock:
            expense = Expense(
                id=len(self._expenses) + 1,
                amount=amount,
                description=description,
                category=category,
                date=date
            )
            self._expenses.append(expense)

        logger.debug(f"Stored expense {expense.id}")
        return expense

    def list(self) -> List[Expense]:
        """Return a snapshot of all expenses in creation order."""
        with self._lock:
            return list(self._expenses)
