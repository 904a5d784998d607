"""Month-scoped, incrementally loaded expense list.

The controller owns one ``ExpenseCollection`` and one ``PageCursor`` and is
the only thing that mutates them. Every request is tagged with the criteria
generation it was issued under; responses from an older generation are
dropped. Successful mutations never patch the list locally, they reload the
current period from page 0.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional

from pydantic import ValidationError

from ..domain.collection import ExpenseCollection
from ..domain.criteria import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT,
    CategoryCriteria,
    ExpenseCriteria,
    ListFilters,
    build_expense_criteria,
)
from ..domain.paging import PageCursor
from ..domain.period import Period
from ..domain.protocols import (
    CategoryApi,
    DialogHost,
    DialogKind,
    DialogRole,
    ExpenseApi,
    Notifier,
    Severity,
)
from ..errors import PocketLedgerError, user_message
from ..logging_config import get_logger
from ..models import Category, CreateExpenseRequest, Expense, UpdateExpenseRequest

logger = get_logger(__name__)


class ListStatus(str, Enum):
    """``ERROR`` behaves like ``IDLE``; it only records that the last load failed."""

    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


def describe_validation_error(exc: ValidationError) -> str:
    """First human-readable message of a pydantic error, prefixed with its field."""

    for error in exc.errors(include_url=False):
        loc = error.get("loc", ())
        field = str(loc[0]) if loc else "form"
        return f"{field}: {error.get('msg', 'Invalid value')}"
    return "Invalid input"


class ExpenseListController:
    """Orchestrates period, paging, collection and criteria against the backend."""

    LOAD_FAILED = "Could not load expenses"
    SAVE_FAILED = "Could not save the expense"
    DELETE_FAILED = "Could not delete the expense"

    def __init__(
        self,
        api: ExpenseApi,
        notifier: Notifier,
        dialogs: DialogHost,
        *,
        category_api: CategoryApi | None = None,
        period: Period | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        sort: str = DEFAULT_SORT,
        on_change: Callable[[], Any] | None = None,
    ) -> None:
        self.api = api
        self.notifier = notifier
        self.dialogs = dialogs
        self.category_api = category_api
        self.period = period or Period.current()
        self.page_size = page_size
        self.filters = ListFilters(sort=sort)
        self.collection = ExpenseCollection()
        self.cursor = PageCursor()
        self.status = ListStatus.IDLE
        self.total_elements = 0
        self.on_change = on_change
        self._generation = 0
        self._closed = False

    # Read-only view state

    @property
    def sort(self) -> str:
        return self.filters.sort

    @property
    def category_ids(self) -> tuple[str, ...]:
        return self.filters.category_ids

    @property
    def search(self) -> Optional[str]:
        return self.filters.name

    @property
    def closed(self) -> bool:
        return self._closed

    def groups(self) -> dict[str, list[Expense]]:
        return self.collection.group_by_day()

    def total_amount(self) -> Decimal:
        return self.collection.total_amount()

    def can_load_more(self) -> bool:
        return not self._closed and self.cursor.can_load_more()

    def current_criteria(self) -> ExpenseCriteria:
        return build_expense_criteria(
            self.period,
            self.cursor.next_page,
            sort=self.filters.sort,
            page_size=self.page_size,
            category_ids=self.filters.category_ids,
            name=self.filters.name,
        )

    # Criteria changes

    async def start(self) -> None:
        """Initial load of the current period."""

        await self.reset_and_reload()

    async def set_period(self, delta: int) -> None:
        self.period = self.period.shift(delta)
        logger.info(f"Period changed to {self.period.to_query_key()}")
        await self.reset_and_reload()

    async def change_sort(self, option: str) -> None:
        self.filters.sort = option
        await self.reset_and_reload()

    async def change_category_filter(self, category_ids: Iterable[Any]) -> None:
        self.filters.category_ids = tuple(str(category_id) for category_id in category_ids)
        await self.reset_and_reload()

    async def change_search(self, name: str | None) -> None:
        self.filters.name = (name or "").strip() or None
        await self.reset_and_reload()

    async def reset_and_reload(self) -> None:
        """Drop everything loaded so far and request page 0 of the current criteria.

        If a load is still in flight, the request is issued once that stale
        response arrives and is discarded.
        """

        if self._closed:
            return
        self.collection.reset()
        self.cursor.reset()
        self.total_elements = 0
        self._generation += 1
        self._changed()
        await self.load_next_page()

    # Paging

    async def load_next_page(self) -> None:
        """Fetch the next page; a no-op while loading or once exhausted."""

        if self._closed or not self.cursor.can_load_more():
            return
        if not self.cursor.begin_load():
            return

        generation = self._generation
        criteria = self.current_criteria()
        self.status = ListStatus.LOADING
        self._changed()
        logger.debug(
            "Requesting expenses page",
            extra={"page": criteria.page, "year_month": criteria.year_month, "sort": criteria.sort},
        )

        try:
            page = await self.api.find_all(criteria)
        except PocketLedgerError as exc:
            if generation != self._generation:
                await self._discard_stale(criteria)
                return
            logger.warning(f"Loading expenses failed: {exc.message}", extra={"page": criteria.page})
            self._fail_load(exc)
            return
        except Exception as exc:
            if generation != self._generation:
                await self._discard_stale(criteria)
                return
            logger.exception("Unexpected error while loading expenses")
            self._fail_load(exc)
            return

        if generation != self._generation:
            await self._discard_stale(criteria)
            return

        added = self.collection.append_page(page.content)
        self.total_elements = page.total_elements
        self.cursor.complete_load(page.last)
        self.status = ListStatus.IDLE
        logger.info(
            f"Loaded {added} expenses",
            extra={"page": criteria.page, "last": page.last, "year_month": criteria.year_month},
        )
        self._changed()

    def _fail_load(self, exc: BaseException) -> None:
        # Not exhausted and next_page untouched, so the same page can be retried
        self.cursor.abort_load()
        self.status = ListStatus.ERROR
        self.notifier.notify(user_message(exc, self.LOAD_FAILED), Severity.DANGER)
        self._changed()

    async def _discard_stale(self, criteria: ExpenseCriteria) -> None:
        logger.info(
            "Discarding response for outdated criteria",
            extra={"page": criteria.page, "year_month": criteria.year_month},
        )
        self.cursor.abort_load()
        self.status = ListStatus.IDLE
        if self._closed:
            return
        self._changed()
        await self.load_next_page()

    # Mutations

    async def create(self, request: CreateExpenseRequest) -> Optional[Expense]:
        try:
            created = await self.api.create(request)
        except Exception as exc:
            self._report_mutation_failure(exc, self.SAVE_FAILED)
            return None
        logger.info(f"Expense created: {created.id}")
        self.notifier.notify("Expense saved", Severity.SUCCESS)
        await self.reset_and_reload()
        return created

    async def update(self, expense_id: str, request: CreateExpenseRequest) -> Optional[Expense]:
        """Replace an expense; moving it out of the period drops it on reload."""

        if not isinstance(request, UpdateExpenseRequest) or request.id != expense_id:
            request = UpdateExpenseRequest.for_expense(expense_id, request)
        try:
            updated = await self.api.update(request)
        except Exception as exc:
            self._report_mutation_failure(exc, self.SAVE_FAILED)
            return None
        logger.info(f"Expense updated: {updated.id}")
        self.notifier.notify("Expense updated", Severity.SUCCESS)
        await self.reset_and_reload()
        return updated

    async def delete(self, expense_id: str) -> bool:
        """Ask for confirmation, then delete. Returns True when the expense was removed."""

        expense = self.collection.get(expense_id)
        result = await self.dialogs.present(
            DialogKind.CONFIRM_DELETE,
            {
                "title": "Delete expense",
                "message": f"Delete '{expense.name}'?" if expense else "Delete this expense?",
                "expense": expense,
            },
        )
        if result.role != DialogRole.DELETE:
            return False

        try:
            await self.api.delete(expense_id)
        except Exception as exc:
            self._report_mutation_failure(exc, self.DELETE_FAILED)
            return False
        logger.info(f"Expense deleted: {expense_id}")
        self.notifier.notify("Expense deleted", Severity.SUCCESS)
        await self.reset_and_reload()
        return True

    def _report_mutation_failure(self, exc: BaseException, fallback: str) -> None:
        if isinstance(exc, PocketLedgerError):
            logger.warning(f"{fallback}: {exc.message}", extra={"status_code": exc.status_code})
        else:
            logger.exception(fallback)
        self.notifier.notify(user_message(exc, fallback), Severity.DANGER)

    # Dialog flows

    async def open_create_dialog(self) -> Optional[Expense]:
        return await self._run_expense_dialog(None)

    async def open_edit_dialog(self, expense: Expense) -> Optional[Expense]:
        return await self._run_expense_dialog(expense)

    async def _run_expense_dialog(self, expense: Expense | None) -> Optional[Expense]:
        props = {
            "expense": expense,
            "categories": await self._dialog_categories(),
            "default_date": datetime.now().replace(microsecond=0),
        }
        result = await self.dialogs.present(DialogKind.EXPENSE_FORM, props)

        if result.role == DialogRole.SAVE:
            return await self._submit_expense(result.data or {}, expense)
        if result.role == DialogRole.DELETE and expense is not None:
            await self.delete(expense.id)
        return None

    async def _submit_expense(
        self, data: Mapping[str, Any], expense: Expense | None
    ) -> Optional[Expense]:
        try:
            request = CreateExpenseRequest.model_validate(dict(data))
        except ValidationError as exc:
            message = describe_validation_error(exc)
            logger.info(f"Expense form rejected: {message}")
            self.notifier.notify(f"Invalid expense ({message})", Severity.DANGER)
            return None
        if expense is None:
            return await self.create(request)
        return await self.update(expense.id, request)

    async def _dialog_categories(self) -> list[Category]:
        """Categories for one dialog session, fetched fresh each time a form opens."""

        if self.category_api is None:
            return []
        try:
            return await self.category_api.find_all(CategoryCriteria())
        except Exception as exc:
            logger.warning(f"Could not load categories for the expense form: {exc}")
            self.notifier.notify(user_message(exc, "Could not load categories"), Severity.DANGER)
            return []

    # Lifecycle

    def close(self) -> None:
        """Tear down; responses still in flight are ignored when they land."""

        self._closed = True
        self._generation += 1
        self.collection.reset()
        self.on_change = None

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
