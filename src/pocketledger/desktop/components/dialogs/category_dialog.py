"""Category create/edit dialog."""

from __future__ import annotations

from typing import Any, Callable, Mapping

import flet as ft

from ....domain.protocols import DialogResult, DialogRole
from ....models import Category


def build_category_dialog(
    props: Mapping[str, Any],
    resolve: Callable[[DialogResult], None],
) -> ft.AlertDialog:
    category: Category | None = props.get("category")
    is_edit = category is not None

    name_field = ft.TextField(
        label="Category Name *",
        value=category.name if category else "",
        hint_text="e.g., Groceries, Rent",
        autofocus=True,
        width=400,
    )

    def _save(_):
        name = (name_field.value or "").strip()
        if not name:
            name_field.error_text = "Name is required"
            if name_field.page:
                name_field.update()
            return
        resolve(DialogResult(DialogRole.SAVE, {"name": name}))

    actions: list[ft.Control] = [
        ft.TextButton("Cancel", on_click=lambda _: resolve(DialogResult(DialogRole.CANCEL))),
    ]
    if is_edit:
        actions.append(
            ft.TextButton("Delete", on_click=lambda _: resolve(DialogResult(DialogRole.DELETE)))
        )
    actions.append(ft.ElevatedButton("Save", icon=ft.Icons.SAVE, on_click=_save))

    return ft.AlertDialog(
        modal=True,
        title=ft.Text("Edit Category" if is_edit else "New Category"),
        content=name_field,
        actions=actions,
        actions_alignment=ft.MainAxisAlignment.END,
    )
