"""Expense add/edit dialog.

Collects raw form values only; the list controller validates them into a
request DTO before anything is sent to the backend.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping

import flet as ft

from ....domain.protocols import DialogResult, DialogRole
from ....models import Category, Expense
from ....models.expense import WIRE_DATETIME_FORMAT

NO_CATEGORY = ""


def build_expense_dialog(
    props: Mapping[str, Any],
    resolve: Callable[[DialogResult], None],
) -> ft.AlertDialog:
    """Build the create or edit expense dialog.

    Args:
        props: ``expense`` (None to create), ``categories`` and ``default_date``
        resolve: Called once with the dismissing role and form data
    """
    expense: Expense | None = props.get("expense")
    categories: list[Category] = list(props.get("categories") or [])
    default_date: datetime = props.get("default_date") or datetime.now().replace(microsecond=0)
    is_edit = expense is not None

    name_field = ft.TextField(
        label="Name *",
        value=expense.name if expense else "",
        hint_text="e.g., Coffee",
        autofocus=True,
        width=400,
    )
    amount_field = ft.TextField(
        label="Amount *",
        value=str(expense.amount) if expense else "",
        hint_text="0.00",
        keyboard_type=ft.KeyboardType.NUMBER,
        width=150,
    )
    date_field = ft.TextField(
        label="Date *",
        value=(expense.date if expense else default_date).strftime(WIRE_DATETIME_FORMAT),
        hint_text="YYYY-MM-DDTHH:MM:SS",
        width=230,
    )
    category_dropdown = ft.Dropdown(
        label="Category",
        options=[ft.dropdown.Option(key=NO_CATEGORY, text="No category")]
        + [ft.dropdown.Option(key=cat.id, text=cat.name) for cat in categories],
        value=(expense.category_id if expense and expense.category_id else NO_CATEGORY),
        width=400,
    )

    def _save(_):
        resolve(
            DialogResult(
                DialogRole.SAVE,
                {
                    "name": name_field.value or "",
                    "amount": (amount_field.value or "").strip(),
                    "date": (date_field.value or "").strip(),
                    "category_id": category_dropdown.value or None,
                },
            )
        )

    actions: list[ft.Control] = [
        ft.TextButton("Cancel", on_click=lambda _: resolve(DialogResult(DialogRole.CANCEL))),
    ]
    if is_edit:
        actions.append(
            ft.TextButton(
                "Delete",
                icon=ft.Icons.DELETE,
                on_click=lambda _: resolve(DialogResult(DialogRole.DELETE)),
            )
        )
    actions.append(ft.ElevatedButton("Update" if is_edit else "Save", icon=ft.Icons.SAVE, on_click=_save))

    return ft.AlertDialog(
        modal=True,
        title=ft.Text("Edit Expense" if is_edit else "New Expense"),
        content=ft.Container(
            content=ft.Column(
                controls=[
                    name_field,
                    ft.Row([amount_field, date_field], spacing=10),
                    category_dropdown,
                ],
                tight=True,
                spacing=12,
            ),
            width=420,
        ),
        actions=actions,
        actions_alignment=ft.MainAxisAlignment.END,
    )
