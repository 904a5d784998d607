"""Wire models and request DTOs."""

from .category import Category, CategoryUpsertRequest
from .expense import CreateExpenseRequest, Expense, UpdateExpenseRequest
from .page import Page

__all__ = [
    "Category",
    "CategoryUpsertRequest",
    "CreateExpenseRequest",
    "Expense",
    "Page",
    "UpdateExpenseRequest",
]
