"""aiohttp application exposing projection reports and what-if scenarios."""

from __future__ import annotations

import logging
import math
import os
from typing import Optional

from aiohttp import web

from .config import ProjectionSettings
from .engine import FinanceDataProvider, ProjectionEngine
from .finance_service import DataFetchError, FinanceDataService

LOGGER = logging.getLogger("finance_projection.api")


class ProjectionApplication:
    """Encapsulates the aiohttp application and projection handlers."""

    def __init__(
        self,
        provider: Optional[FinanceDataProvider] = None,
        *,
        settings: Optional[ProjectionSettings] = None,
        engine: Optional[ProjectionEngine] = None,
    ) -> None:
        self.settings = settings or ProjectionSettings.from_environment()
        self.engine = engine or ProjectionEngine(
            provider or FinanceDataService(settings=self.settings),
            settings=self.settings,
        )
        self.app = web.Application()
        self.app.router.add_get("/health", self.handle_health)
        self.app.router.add_get("/api/projections", self.handle_projections)
        self.app.router.add_post("/api/projections/what-if", self.handle_what_if)

    async def handle_health(self, request: web.Request) -> web.Response:
        return web.json_response({"status": "ok"})

    async def handle_projections(self, request: web.Request) -> web.Response:
        raw_months = request.query.get("months")
        months_ahead = None
        if raw_months is not None:
            try:
                months_ahead = int(raw_months)
            except ValueError:
                raise web.HTTPBadRequest(text="months must be an integer")
            if months_ahead < 1:
                raise web.HTTPBadRequest(text="months must be a positive integer")

        try:
            report = await self.engine.generate_projections(months_ahead)
        except DataFetchError as exc:
            LOGGER.error("Projection request failed: %s", exc)
            return web.json_response({"error": str(exc)}, status=502)

        return web.json_response(report.to_dict())

    async def handle_what_if(self, request: web.Request) -> web.Response:
        try:
            body = await request.json()
        except ValueError:
            raise web.HTTPBadRequest(text="Invalid JSON body")

        value = body.get("additional_monthly_savings") if isinstance(body, dict) else None
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise web.HTTPBadRequest(text="additional_monthly_savings must be a number")

        try:
            scenario = await self.engine.simulate_scenario(value)
        except DataFetchError as exc:
            LOGGER.error("Scenario request failed: %s", exc)
            return web.json_response({"error": str(exc)}, status=502)

        return web.json_response(scenario.to_dict())


def create_app(provider: Optional[FinanceDataProvider] = None) -> web.Application:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    server = ProjectionApplication(provider)
    return server.app


def main() -> None:
    settings = ProjectionSettings.from_environment()
    app = create_app()
    web.run_app(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
