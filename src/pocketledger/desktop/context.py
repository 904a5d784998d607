"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import flet as ft

from ..config import BaseConfig
from ..domain.period import Period
from ..infra.api import ApiClient, HttpCategoryApi, HttpExpenseApi
from .dialog_host import FletDialogHost
from .notifier import SnackBarNotifier


@dataclass
class AppContext:
    """Configuration, backend adapters and page-bound collaborators."""

    config: BaseConfig
    api_client: ApiClient
    expense_api: HttpExpenseApi
    category_api: HttpCategoryApi

    # UI state
    current_period: Period

    # Set once the page exists
    page: Optional[ft.Page] = None
    notifier: Optional[SnackBarNotifier] = None
    dialogs: Optional[FletDialogHost] = None

    def attach_page(self, page: ft.Page) -> None:
        self.page = page
        self.notifier = SnackBarNotifier(page)
        self.dialogs = FletDialogHost(page)

    def require_page(self) -> ft.Page:
        if self.page is None or self.notifier is None or self.dialogs is None:
            raise RuntimeError("No page attached to the application context")
        return self.page

    async def aclose(self) -> None:
        await self.api_client.aclose()


def create_app_context(
    config: Optional[BaseConfig] = None,
    api_client: Optional[ApiClient] = None,
) -> AppContext:
    """Create the application context; the page is attached later."""

    if config is None:
        config = BaseConfig()
    if api_client is None:
        api_client = ApiClient.from_config(config)

    return AppContext(
        config=config,
        api_client=api_client,
        expense_api=HttpExpenseApi(api_client),
        category_api=HttpCategoryApi(api_client),
        current_period=Period.current(),
    )
