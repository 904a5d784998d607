"""Navigation and routing for the Flet app."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict

import flet as ft

from ..logging_config import get_logger

if TYPE_CHECKING:
    from .context import AppContext

logger = get_logger(__name__)

ViewBuilder = Callable[["AppContext", ft.Page], ft.View]
DEFAULT_ROUTE = "/expenses"


class Router:
    """Maps routes to view builders; one view is on screen at a time."""

    def __init__(self, page: ft.Page, context: AppContext):
        self.page = page
        self.context = context
        self.routes: Dict[str, ViewBuilder] = {}

    def register(self, route: str, builder: ViewBuilder) -> None:
        logger.debug(f"Registering route: {route}")
        self.routes[route] = builder

    def route_change(self, e: ft.RouteChangeEvent) -> None:
        route = e.route or DEFAULT_ROUTE
        if route not in self.routes:
            logger.warning(f"Route not registered: {route}, defaulting to {DEFAULT_ROUTE}")
            route = DEFAULT_ROUTE

        builder = self.routes[route]
        try:
            view = builder(self.context, self.page)
        except Exception as ex:
            logger.error(f"Failed to build view for route {route}: {ex}", exc_info=True)
            if self.context.notifier is not None:
                self.context.notifier.notify(f"Error loading view: {ex}", "danger")
            return

        # The replaced view's controller must ignore responses still in flight
        for old in self.page.views:
            close = getattr(old.data, "close", None)
            if callable(close):
                close()
        self.page.views.clear()
        self.page.views.append(view)
        self.page.update()
        logger.info(f"Loaded view for route: {route}")

    def view_pop(self, e: ft.ViewPopEvent) -> None:
        self.page.go(DEFAULT_ROUTE)
