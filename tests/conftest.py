"""Pytest configuration and shared fixtures for PocketLedger tests.

The backend, notifier and dialog host are replaced by in-memory fakes so the
list controllers can be driven deterministically with ``asyncio.run``.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping

import flet as ft
import pytest

from pocketledger.domain import DialogKind, DialogResult, DialogRole, Period, Severity
from pocketledger.domain.criteria import CategoryCriteria, ExpenseCriteria
from pocketledger.models import (
    Category,
    CategoryUpsertRequest,
    CreateExpenseRequest,
    Expense,
    Page,
    UpdateExpenseRequest,
)
from pocketledger.services import CategoryListController, ExpenseListController


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep config and logs away from the working directory."""

    monkeypatch.setenv("POCKETLEDGER_DATA_DIR", str(tmp_path / "instance"))
    for name in ("POCKETLEDGER_API_URL", "POCKETLEDGER_PAGE_SIZE", "POCKETLEDGER_REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Fakes
# =============================================================================


class FakeExpenseApi:
    """In-memory expense backend.

    Pages are registered per ``(yearMonth, page)``. With ``hold`` enabled every
    ``find_all`` call parks until ``release()`` is called, which lets tests
    interleave criteria changes with in-flight requests.
    """

    def __init__(self) -> None:
        self.pages: dict[tuple[str, int], Page] = {}
        self.requests: list[ExpenseCriteria] = []
        self.hold = False
        self._pending: list[asyncio.Future] = []
        self.find_all_error: Exception | None = None
        self.mutation_error: Exception | None = None
        self.created: list[CreateExpenseRequest] = []
        self.updated: list[UpdateExpenseRequest] = []
        self.deleted: list[str] = []

    def add_page(self, year_month: str, page: int, content: list[Expense], last: bool = True) -> None:
        total = sum(len(p.content) for (ym, _), p in self.pages.items() if ym == year_month)
        self.pages[(year_month, page)] = Page(
            content=content, last=last, total_elements=total + len(content)
        )

    def release(self) -> None:
        self._pending.pop(0).set_result(None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def find_all(self, criteria: ExpenseCriteria) -> Page:
        self.requests.append(criteria)
        # The outcome is fixed when the request is issued, not when it is released
        error = self.find_all_error
        if self.hold:
            gate = asyncio.get_running_loop().create_future()
            self._pending.append(gate)
            await gate
        if error is not None:
            raise error
        return self.pages.get((criteria.year_month, criteria.page), Page(content=[], last=True))

    async def find_one(self, expense_id: str) -> Expense:
        for page in self.pages.values():
            for item in page.content:
                if item.id == expense_id:
                    return item
        raise KeyError(expense_id)

    async def create(self, request: CreateExpenseRequest) -> Expense:
        if self.mutation_error is not None:
            raise self.mutation_error
        self.created.append(request)
        return Expense(
            id=f"new-{len(self.created)}",
            name=request.name,
            amount=request.amount,
            date=request.date,
        )

    async def update(self, request: UpdateExpenseRequest) -> Expense:
        if self.mutation_error is not None:
            raise self.mutation_error
        self.updated.append(request)
        return Expense(id=request.id, name=request.name, amount=request.amount, date=request.date)

    async def delete(self, expense_id: str) -> None:
        if self.mutation_error is not None:
            raise self.mutation_error
        self.deleted.append(expense_id)


class FakeCategoryApi:
    def __init__(self, categories: list[Category] | None = None) -> None:
        self.categories = list(categories or [])
        self.requests: list[CategoryCriteria | None] = []
        self.error: Exception | None = None
        self.created: list[CategoryUpsertRequest] = []
        self.updated: list[CategoryUpsertRequest] = []
        self.deleted: list[str] = []

    async def find_all(self, criteria: CategoryCriteria | None = None) -> list[Category]:
        self.requests.append(criteria)
        if self.error is not None:
            raise self.error
        result = sorted(self.categories, key=lambda c: c.name)
        if criteria is not None and criteria.name:
            result = [c for c in result if criteria.name.lower() in c.name.lower()]
        return result

    async def find_one(self, category_id: str) -> Category:
        return next(c for c in self.categories if c.id == category_id)

    async def create(self, request: CategoryUpsertRequest) -> Category:
        if self.error is not None:
            raise self.error
        self.created.append(request)
        category = Category(id=f"cat-{len(self.categories) + 1}", name=request.name)
        self.categories.append(category)
        return category

    async def update(self, request: CategoryUpsertRequest) -> Category:
        if self.error is not None:
            raise self.error
        self.updated.append(request)
        category = Category(id=request.id, name=request.name)
        self.categories = [category if c.id == request.id else c for c in self.categories]
        return category

    async def delete(self, category_id: str) -> None:
        if self.error is not None:
            raise self.error
        self.deleted.append(category_id)
        self.categories = [c for c in self.categories if c.id != category_id]


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[tuple[str, Severity]] = []

    def notify(self, message: str, severity: Severity) -> None:
        self.messages.append((message, Severity(severity)))

    def of(self, severity: Severity) -> list[str]:
        return [message for message, sev in self.messages if sev is severity]


class ScriptedDialogHost:
    """Answers dialogs from a queue; an empty queue means the user cancelled."""

    def __init__(self, *responses: DialogResult) -> None:
        self.responses = list(responses)
        self.presented: list[tuple[DialogKind, Mapping[str, Any]]] = []

    def script(self, *responses: DialogResult) -> None:
        self.responses.extend(responses)

    async def present(self, kind: DialogKind, props: Mapping[str, Any] | None = None) -> DialogResult:
        self.presented.append((DialogKind(kind), dict(props or {})))
        if not self.responses:
            return DialogResult(DialogRole.CANCEL)
        return self.responses.pop(0)


class PageStub:
    """Just enough of ``ft.Page`` for views, the notifier and the dialog host."""

    def __init__(self) -> None:
        self.opened: list[ft.Control] = []
        self.closed: list[ft.Control] = []
        self.tasks: list[Any] = []
        self.views: list[ft.View] = []
        self.route = "/"
        self.updates = 0

    def open(self, control: ft.Control) -> None:
        control.open = True
        self.opened.append(control)

    def close(self, control: ft.Control) -> None:
        control.open = False
        self.closed.append(control)

    def update(self, *controls) -> None:
        self.updates += 1

    def go(self, route: str) -> None:
        self.route = route

    def run_task(self, handler, *args):
        self.tasks.append((handler, args))


# =============================================================================
# Factories and fixtures
# =============================================================================


@pytest.fixture
def expense_factory():
    """Build ``Expense`` instances with sensible defaults."""

    def _create_expense(
        expense_id: str,
        occurred: str = "2025-03-05T12:00:00",
        *,
        name: str | None = None,
        amount: str = "10.00",
        created_at: str | None = None,
        category: Category | None = None,
    ) -> Expense:
        return Expense(
            id=expense_id,
            name=name or f"Expense {expense_id}",
            amount=Decimal(amount),
            date=datetime.fromisoformat(occurred),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
            category=category,
        )

    return _create_expense


@pytest.fixture
def march() -> Period:
    return Period(2025, 3)


@pytest.fixture
def expense_api() -> FakeExpenseApi:
    return FakeExpenseApi()


@pytest.fixture
def category_api() -> FakeCategoryApi:
    return FakeCategoryApi([Category(id="c2", name="Groceries"), Category(id="c1", name="Coffee")])


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def dialogs() -> ScriptedDialogHost:
    return ScriptedDialogHost()


@pytest.fixture
def controller(expense_api, notifier, dialogs, category_api, march) -> ExpenseListController:
    return ExpenseListController(
        expense_api, notifier, dialogs, category_api=category_api, period=march
    )


@pytest.fixture
def category_controller(category_api, notifier, dialogs) -> CategoryListController:
    return CategoryListController(category_api, notifier, dialogs)


@pytest.fixture
def page_stub() -> PageStub:
    return PageStub()
