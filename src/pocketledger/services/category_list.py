"""Category lookup list with name search and dialog-driven create/edit/delete."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from pydantic import ValidationError

from ..domain.criteria import CategoryCriteria
from ..domain.protocols import CategoryApi, DialogHost, DialogKind, DialogRole, Notifier, Severity
from ..errors import PocketLedgerError, user_message
from ..logging_config import get_logger
from ..models import Category, CategoryUpsertRequest
from .expense_list import ListStatus, describe_validation_error

logger = get_logger(__name__)


class CategoryListController:
    """Keeps the name-sorted category list in sync with the backend.

    Like the expense list, every successful mutation reloads from the server.
    """

    def __init__(
        self,
        api: CategoryApi,
        notifier: Notifier,
        dialogs: DialogHost,
        *,
        on_change: Callable[[], Any] | None = None,
    ) -> None:
        self.api = api
        self.notifier = notifier
        self.dialogs = dialogs
        self.on_change = on_change
        self.categories: list[Category] = []
        self.search: Optional[str] = None
        self.status = ListStatus.IDLE
        self._generation = 0

    async def load(self) -> None:
        self._generation += 1
        generation = self._generation
        criteria = CategoryCriteria(name=self.search)
        self.status = ListStatus.LOADING
        self._changed()
        try:
            categories = await self.api.find_all(criteria)
        except Exception as exc:
            if generation != self._generation:
                return
            if isinstance(exc, PocketLedgerError):
                logger.warning(f"Loading categories failed: {exc.message}")
            else:
                logger.exception("Unexpected error while loading categories")
            self.status = ListStatus.ERROR
            self.notifier.notify(user_message(exc, "Could not load categories"), Severity.DANGER)
            self._changed()
            return
        if generation != self._generation:
            logger.debug("Discarding category response for an outdated search")
            return
        self.categories = list(categories)
        self.status = ListStatus.IDLE
        self._changed()

    async def change_search(self, name: str | None) -> None:
        self.search = (name or "").strip() or None
        await self.load()

    async def create(self, request: CategoryUpsertRequest) -> Optional[Category]:
        try:
            created = await self.api.create(request)
        except Exception as exc:
            self._report_failure(exc, "Could not save the category")
            return None
        self.notifier.notify(f"Category '{created.name}' created", Severity.SUCCESS)
        await self.load()
        return created

    async def update(self, request: CategoryUpsertRequest) -> Optional[Category]:
        try:
            updated = await self.api.update(request)
        except Exception as exc:
            self._report_failure(exc, "Could not save the category")
            return None
        self.notifier.notify(f"Category '{updated.name}' updated", Severity.SUCCESS)
        await self.load()
        return updated

    async def delete(self, category: Category) -> bool:
        result = await self.dialogs.present(
            DialogKind.CONFIRM_DELETE,
            {"title": "Delete category", "message": f"Delete '{category.name}'?"},
        )
        if result.role != DialogRole.DELETE:
            return False
        try:
            await self.api.delete(category.id)
        except Exception as exc:
            self._report_failure(exc, "Could not delete the category")
            return False
        self.notifier.notify(f"Category '{category.name}' deleted", Severity.SUCCESS)
        await self.load()
        return True

    async def open_create_dialog(self) -> Optional[Category]:
        return await self._run_dialog(None)

    async def open_edit_dialog(self, category: Category) -> Optional[Category]:
        return await self._run_dialog(category)

    async def _run_dialog(self, category: Category | None) -> Optional[Category]:
        result = await self.dialogs.present(DialogKind.CATEGORY_FORM, {"category": category})
        if result.role == DialogRole.SAVE:
            return await self._submit(result.data or {}, category)
        if result.role == DialogRole.DELETE and category is not None:
            await self.delete(category)
        return None

    async def _submit(self, data: Mapping[str, Any], category: Category | None) -> Optional[Category]:
        payload = dict(data)
        if category is not None:
            payload["id"] = category.id
        try:
            request = CategoryUpsertRequest.model_validate(payload)
        except ValidationError as exc:
            self.notifier.notify(f"Invalid category ({describe_validation_error(exc)})", Severity.DANGER)
            return None
        if category is None:
            return await self.create(request)
        return await self.update(request)

    def _report_failure(self, exc: BaseException, fallback: str) -> None:
        if isinstance(exc, PocketLedgerError):
            logger.warning(f"{fallback}: {exc.message}", extra={"status_code": exc.status_code})
        else:
            logger.exception(fallback)
        self.notifier.notify(user_message(exc, fallback), Severity.DANGER)

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
