"""Service module exports."""

from . import category_list, expense_list
from .category_list import CategoryListController
from .expense_list import ExpenseListController, ListStatus

__all__ = [
    "CategoryListController",
    "ExpenseListController",
    "ListStatus",
    "category_list",
    "expense_list",
]
