"""Main Flet desktop application entry point."""

from __future__ import annotations

import flet as ft

from ..logging_config import setup_logging
from .context import create_app_context
from .navigation import DEFAULT_ROUTE, Router
from .views.categories import build_categories_view
from .views.expenses import build_expenses_view


async def main(page: ft.Page) -> None:
    """Main entry point for the Flet desktop app."""

    ctx = create_app_context()
    logger = setup_logging(ctx.config)
    logger.info("PocketLedger desktop application starting")
    ctx.attach_page(page)

    async def _shutdown() -> None:
        logger.info("Application closing, releasing HTTP client")
        await ctx.aclose()

    page.on_close = lambda _: page.run_task(_shutdown)

    page.title = "PocketLedger (DEV)" if ctx.config.DEV_MODE else "PocketLedger"
    page.theme_mode = ft.ThemeMode.DARK
    page.padding = 0
    page.window.width = 900
    page.window.height = 800
    page.window.min_width = 600
    page.window.min_height = 500

    router = Router(page, ctx)
    route_builders = {
        "/": build_expenses_view,
        "/expenses": build_expenses_view,
        "/categories": build_categories_view,
    }
    for route, builder in route_builders.items():
        router.register(route, builder)

    page.on_route_change = router.route_change
    page.on_view_pop = router.view_pop
    page.go(DEFAULT_ROUTE)


def run() -> None:
    ft.app(target=main)


if __name__ == "__main__":
    run()
