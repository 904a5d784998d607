"""Flet dialog host: each ``present`` call resolves when the dialog is dismissed."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Mapping

import flet as ft

from ..domain.protocols import DialogKind, DialogResult
from ..logging_config import get_logger
from .components.dialogs import (
    build_category_dialog,
    build_confirm_dialog,
    build_expense_dialog,
)

logger = get_logger(__name__)

DialogBuilder = Callable[[Mapping[str, Any], Callable[[DialogResult], None]], ft.AlertDialog]

BUILDERS: dict[DialogKind, DialogBuilder] = {
    DialogKind.EXPENSE_FORM: build_expense_dialog,
    DialogKind.CATEGORY_FORM: build_category_dialog,
    DialogKind.CONFIRM_DELETE: build_confirm_dialog,
}


class FletDialogHost:
    """Opens ``ft.AlertDialog`` modals and hands back the dismissing role and data."""

    def __init__(self, page: ft.Page, builders: Mapping[DialogKind, DialogBuilder] | None = None):
        self.page = page
        self.builders = dict(builders or BUILDERS)

    async def present(self, kind: DialogKind, props: Mapping[str, Any] | None = None) -> DialogResult:
        builder = self.builders.get(DialogKind(kind))
        if builder is None:
            raise ValueError(f"No dialog registered for {kind!r}")

        loop = asyncio.get_running_loop()
        outcome: asyncio.Future[DialogResult] = loop.create_future()
        dialog: ft.AlertDialog | None = None
        answered = False

        def _settle(result: DialogResult) -> None:
            if not outcome.done():
                outcome.set_result(result)

        def resolve(result: DialogResult) -> None:
            nonlocal answered
            if answered:
                return
            answered = True
            if dialog is not None and dialog.open:
                self.page.close(dialog)
            # Flet may run sync handlers off the event loop thread
            loop.call_soon_threadsafe(_settle, result)

        dialog = builder(props or {}, resolve)
        dialog.on_dismiss = lambda _: resolve(DialogResult.cancelled())
        logger.debug(f"Presenting dialog {DialogKind(kind).value}")
        self.page.open(dialog)
        result = await outcome
        logger.debug(f"Dialog {DialogKind(kind).value} dismissed with role {result.role.value}")
        return result
