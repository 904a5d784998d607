"""Snack bar implementation of the notifier collaborator."""

from __future__ import annotations

import flet as ft

from ..domain.protocols import Severity
from ..logging_config import get_logger

logger = get_logger(__name__)

SEVERITY_COLORS = {
    Severity.SUCCESS: ft.Colors.GREEN_400,
    Severity.DANGER: ft.Colors.RED_400,
}


class SnackBarNotifier:
    """Shows each message as a coloured snack bar on the page."""

    def __init__(self, page: ft.Page):
        self.page = page

    def notify(self, message: str, severity: Severity | str) -> None:
        severity = Severity(severity)
        if severity is Severity.DANGER:
            logger.info(f"User notified of failure: {message}")
        snack = ft.SnackBar(content=ft.Text(message), bgcolor=SEVERITY_COLORS[severity])
        self.page.open(snack)
