"""Category list view with name search."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from ...models import Category
from ...services.category_list import CategoryListController

if TYPE_CHECKING:
    from ..context import AppContext


def build_categories_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the categories page; the controller is exposed as ``view.data``."""

    ctx.require_page()
    list_view = ft.ListView(expand=True, spacing=2)
    search_field = ft.TextField(label="Search", hint_text="Category name", width=300)

    def _edit_handler(category: Category):
        async def _open(_):
            await controller.open_edit_dialog(category)

        return _open

    def _render() -> None:
        if controller.categories:
            list_view.controls = [
                ft.ListTile(title=ft.Text(cat.name), on_click=_edit_handler(cat), data=cat.id)
                for cat in controller.categories
            ]
        else:
            list_view.controls = [ft.Text("No categories yet.", italic=True)]
        try:
            page.update()
        except AssertionError:
            pass

    controller = CategoryListController(ctx.category_api, ctx.notifier, ctx.dialogs, on_change=_render)

    async def _search(_):
        await controller.change_search(search_field.value)

    async def _add(_):
        await controller.open_create_dialog()

    search_field.on_submit = _search
    page.run_task(controller.load)

    view = ft.View(
        route="/categories",
        appbar=ft.AppBar(
            title=ft.Text("Categories"),
            leading=ft.IconButton(icon=ft.Icons.ARROW_BACK, on_click=lambda _: page.go("/expenses")),
        ),
        floating_action_button=ft.FloatingActionButton(icon=ft.Icons.ADD, on_click=_add),
        controls=[search_field, list_view],
    )
    view.data = controller
    return view
