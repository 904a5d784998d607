"""Delete confirmation dialog."""

from __future__ import annotations

from typing import Any, Callable, Mapping

import flet as ft

from ....domain.protocols import DialogResult, DialogRole


def build_confirm_dialog(
    props: Mapping[str, Any],
    resolve: Callable[[DialogResult], None],
) -> ft.AlertDialog:
    """Only the Delete button resolves with the ``delete`` role."""

    return ft.AlertDialog(
        modal=True,
        title=ft.Text(props.get("title") or "Confirm"),
        content=ft.Text(props.get("message") or "Are you sure?"),
        actions=[
            ft.TextButton("Cancel", on_click=lambda _: resolve(DialogResult(DialogRole.CANCEL))),
            ft.FilledButton(
                "Delete",
                style=ft.ButtonStyle(bgcolor=ft.Colors.RED_400),
                on_click=lambda _: resolve(DialogResult(DialogRole.DELETE)),
            ),
        ],
        actions_alignment=ft.MainAxisAlignment.END,
    )
