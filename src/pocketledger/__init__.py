"""PocketLedger: month-scoped expense list client."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .domain import ExpenseCollection, PageCursor, Period
from .services import CategoryListController, ExpenseListController

__all__ = [
    "BaseConfig",
    "CategoryListController",
    "DevConfig",
    "ExpenseCollection",
    "ExpenseListController",
    "PageCursor",
    "Period",
]
