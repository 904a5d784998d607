"""Dialog builders for the PocketLedger desktop app."""

from .category_dialog import build_category_dialog
from .confirm_dialog import build_confirm_dialog
from .expense_dialog import build_expense_dialog

__all__ = [
    "build_category_dialog",
    "build_confirm_dialog",
    "build_expense_dialog",
]
