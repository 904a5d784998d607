"""Expense list core: period, paging, collection and criteria."""

from .collection import ExpenseCollection, day_key
from .criteria import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT,
    SORT_OPTIONS,
    CategoryCriteria,
    ExpenseCriteria,
    build_expense_criteria,
)
from .paging import PageCursor
from .period import Period
from .protocols import (
    CategoryApi,
    DialogHost,
    DialogKind,
    DialogResult,
    DialogRole,
    ExpenseApi,
    Notifier,
    Severity,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_SORT",
    "SORT_OPTIONS",
    "CategoryApi",
    "CategoryCriteria",
    "DialogHost",
    "DialogKind",
    "DialogResult",
    "DialogRole",
    "ExpenseApi",
    "ExpenseCollection",
    "ExpenseCriteria",
    "Notifier",
    "PageCursor",
    "Period",
    "Severity",
    "build_expense_criteria",
    "day_key",
]
