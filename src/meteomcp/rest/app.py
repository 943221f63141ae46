"""FastAPI application factory for the REST front end.

Routes map 1:1 onto :class:`~meteomcp.operations.provider.WeatherOperations`.
Every error body has the shape ``{"error": "<message>"}``:

- invalid path values (bad year or month, non-integer segments) → 400
- any upstream failure or unexpected error → 500
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from meteomcp import __version__
from meteomcp.config import Settings
from meteomcp.operations.client import MeteoChileClient
from meteomcp.operations.errors import OperationError
from meteomcp.rest.routes import health, historical, weather

if TYPE_CHECKING:
    from meteomcp.operations.provider import WeatherOperations

logger = logging.getLogger(__name__)


def create_app(
    operations: WeatherOperations | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the REST application.

    When *operations* is given it is used as-is (the caller owns its
    lifetime). Otherwise a :class:`MeteoChileClient` is opened on startup
    and closed on shutdown.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if operations is not None:
            yield
            return
        async with MeteoChileClient(settings.meteochile) as client:
            app.state.operations = client
            logger.info("REST API using upstream %s", settings.meteochile.base_url)
            yield

    app = FastAPI(
        title="MeteoChile Weather API",
        version=__version__,
        description="Weather data from MeteoChile, also available as stdio tools.",
        lifespan=lifespan,
    )
    if operations is not None:
        app.state.operations = operations

    app.include_router(health.router)
    app.include_router(weather.router)
    app.include_router(historical.router)

    @app.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        return RedirectResponse(url="/docs")

    _install_error_handlers(app)
    return app


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(OperationError)
    async def _operation_error(request: Request, exc: OperationError) -> JSONResponse:
        logger.error("Upstream failure serving %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error serving %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        problems = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "; ".join(problems) or "Invalid request"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )
