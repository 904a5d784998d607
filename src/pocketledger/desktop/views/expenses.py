"""Expense list view: month navigation, day groups and incremental loading."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

import flet as ft

from ...domain.criteria import SORT_OPTIONS
from ...errors import PocketLedgerError
from ...logging_config import get_logger
from ...models import Expense
from ...services.expense_list import ExpenseListController, ListStatus

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)

ALL_CATEGORIES = "all"
# Pixels from the end of the list at which the next page is requested
SCROLL_THRESHOLD = 120


def _format_currency(amount: Decimal) -> str:
    return f"{amount:,.2f}"


def build_expenses_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the expenses page; the controller is exposed as ``view.data``."""

    ctx.require_page()

    month_label = ft.Text(size=20, weight=ft.FontWeight.BOLD)
    total_text = ft.Text(size=14)
    progress = ft.ProgressBar(visible=False)
    list_view = ft.ListView(expand=True, spacing=2, on_scroll_interval=100)
    load_more_button = ft.TextButton("Load more", visible=False)

    sort_dropdown = ft.Dropdown(
        label="Sort",
        options=[ft.dropdown.Option(key, text) for key, text in SORT_OPTIONS.items()],
        width=200,
    )
    category_filter = ft.Dropdown(
        label="Category",
        options=[ft.dropdown.Option(ALL_CATEGORIES, "All categories")],
        value=ALL_CATEGORIES,
        width=220,
    )
    search_field = ft.TextField(label="Search", hint_text="Name", width=220)

    def _safe_update() -> None:
        try:
            page.update()
        except AssertionError:
            # Controls not mounted yet
            pass

    def _edit_handler(expense: Expense):
        async def _open(_):
            await controller.open_edit_dialog(expense)

        return _open

    def _expense_tile(expense: Expense) -> ft.ListTile:
        return ft.ListTile(
            title=ft.Text(expense.name),
            subtitle=ft.Text(expense.category.name if expense.category else "No category"),
            trailing=ft.Text(_format_currency(expense.amount), weight=ft.FontWeight.BOLD),
            on_click=_edit_handler(expense),
            data=expense.id,
        )

    def _render() -> None:
        ctx.current_period = controller.period
        month_label.value = controller.period.label()
        total_text.value = f"Total loaded: {_format_currency(controller.total_amount())}"
        sort_dropdown.value = controller.sort

        rows: list[ft.Control] = []
        for day, expenses in controller.groups().items():
            rows.append(
                ft.Container(
                    content=ft.Text(day, weight=ft.FontWeight.BOLD),
                    padding=ft.padding.only(left=16, top=12, bottom=4),
                    data=day,
                )
            )
            rows.extend(_expense_tile(expense) for expense in expenses)
        if not rows and controller.status != ListStatus.LOADING:
            rows.append(ft.Text("No expenses for this month.", italic=True))

        list_view.controls = rows
        progress.visible = controller.status == ListStatus.LOADING
        load_more_button.visible = bool(controller.collection) and controller.can_load_more()
        _safe_update()

    controller = ExpenseListController(
        ctx.expense_api,
        ctx.notifier,
        ctx.dialogs,
        category_api=ctx.category_api,
        period=ctx.current_period,
        page_size=ctx.config.PAGE_SIZE,
        on_change=_render,
    )

    async def _previous_month(_):
        await controller.set_period(-1)

    async def _next_month(_):
        await controller.set_period(1)

    async def _load_more(_):
        await controller.load_next_page()

    async def _on_scroll(e: ft.OnScrollEvent):
        if e.max_scroll_extent and e.pixels >= e.max_scroll_extent - SCROLL_THRESHOLD:
            await controller.load_next_page()

    async def _sort_changed(_):
        await controller.change_sort(sort_dropdown.value or controller.sort)

    async def _filter_changed(_):
        value = category_filter.value
        await controller.change_category_filter([] if value in (None, ALL_CATEGORIES) else [value])

    async def _search_submitted(_):
        await controller.change_search(search_field.value)

    async def _add(_):
        await controller.open_create_dialog()

    async def _hydrate_category_filter() -> None:
        try:
            categories = await ctx.category_api.find_all()
        except PocketLedgerError as exc:
            logger.warning(f"Category filter unavailable: {exc.message}")
            return
        category_filter.options = [ft.dropdown.Option(ALL_CATEGORIES, "All categories")] + [
            ft.dropdown.Option(cat.id, cat.name) for cat in categories
        ]
        _safe_update()

    async def _start() -> None:
        await _hydrate_category_filter()
        await controller.start()

    load_more_button.on_click = _load_more
    list_view.on_scroll = _on_scroll
    sort_dropdown.on_change = _sort_changed
    category_filter.on_change = _filter_changed
    search_field.on_submit = _search_submitted

    _render()
    page.run_task(_start)

    view = ft.View(
        route="/expenses",
        appbar=ft.AppBar(
            title=ft.Text("Expenses"),
            actions=[
                ft.IconButton(
                    icon=ft.Icons.LABEL,
                    tooltip="Categories",
                    on_click=lambda _: page.go("/categories"),
                )
            ],
        ),
        floating_action_button=ft.FloatingActionButton(icon=ft.Icons.ADD, on_click=_add),
        controls=[
            ft.Row(
                [
                    ft.IconButton(icon=ft.Icons.ARROW_BACK, tooltip="Previous month", on_click=_previous_month),
                    month_label,
                    ft.IconButton(icon=ft.Icons.ARROW_FORWARD, tooltip="Next month", on_click=_next_month),
                ],
                alignment=ft.MainAxisAlignment.CENTER,
            ),
            ft.Row([sort_dropdown, category_filter, search_field], wrap=True, spacing=10),
            total_text,
            progress,
            list_view,
            load_more_button,
        ],
    )
    view.data = controller
    return view
