"""Collaborator protocols injected into the list controllers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Protocol

from ..models import (
    Category,
    CategoryUpsertRequest,
    CreateExpenseRequest,
    Expense,
    Page,
    UpdateExpenseRequest,
)
from .criteria import CategoryCriteria, ExpenseCriteria


class ExpenseApi(Protocol):
    """Expense endpoints of the backend."""

    async def find_all(self, criteria: ExpenseCriteria) -> Page:
        """Fetch one page of expenses."""
        ...

    async def find_one(self, expense_id: str) -> Expense:
        """Fetch a single expense."""
        ...

    async def create(self, request: CreateExpenseRequest) -> Expense:
        """Create an expense."""
        ...

    async def update(self, request: UpdateExpenseRequest) -> Expense:
        """Replace an existing expense."""
        ...

    async def delete(self, expense_id: str) -> None:
        """Delete an expense."""
        ...


class CategoryApi(Protocol):
    """Category endpoints of the backend."""

    async def find_all(self, criteria: CategoryCriteria | None = None) -> list[Category]:
        ...

    async def find_one(self, category_id: str) -> Category:
        ...

    async def create(self, request: CategoryUpsertRequest) -> Category:
        ...

    async def update(self, request: CategoryUpsertRequest) -> Category:
        ...

    async def delete(self, category_id: str) -> None:
        ...


class Severity(str, Enum):
    SUCCESS = "success"
    DANGER = "danger"


class Notifier(Protocol):
    """Surfaces transient messages; fire-and-forget."""

    def notify(self, message: str, severity: Severity) -> None:
        ...


class DialogKind(str, Enum):
    EXPENSE_FORM = "expense-form"
    CATEGORY_FORM = "category-form"
    CONFIRM_DELETE = "confirm-delete"


class DialogRole(str, Enum):
    SAVE = "save"
    CANCEL = "cancel"
    DELETE = "delete"
    SELECTED = "selected"


@dataclass(frozen=True)
class DialogResult:
    """What a dismissed dialog hands back: a role and an optional payload."""

    role: DialogRole
    data: Optional[Mapping[str, Any]] = None

    @classmethod
    def cancelled(cls) -> "DialogResult":
        return cls(DialogRole.CANCEL)


class DialogHost(Protocol):
    """Presents a modal and resolves once the user dismisses it."""

    async def present(self, kind: DialogKind, props: Mapping[str, Any] | None = None) -> DialogResult:
        ...
