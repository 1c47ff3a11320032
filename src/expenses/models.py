"""Expense data models."""

from typing import Union
from pydantic import BaseModel, Field


class Expense(BaseModel):
    """Expense model."""

    id: int = Field(..., gt=0, description="Position-based identifier, starting at 1")
    amount: Union[int, float] = Field(..., description="Expense amount")
    description: str = Field(..., description="What the money was spent on")
    category: str = Field(..., description="Expense category")
    date: str = Field(..., description="Expense date (YYYY-MM-DD)")

    class Config:
        """Pydantic config."""
        frozen = True
