"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from moolah.api.router import api_router
from moolah.config import settings
from moolah.errors import MoolahError
from moolah.identity import IdentityProvider, build_identity_provider
from moolah.services.market_service import MarketDataClient
from moolah.services.validation import format_errors
from moolah.store import RecordStore, build_store

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app(
    store: Optional[RecordStore] = None,
    identity_provider: Optional[IdentityProvider] = None,
    market_data: Optional[MarketDataClient] = None,
) -> FastAPI:
    """
    Build the application. Collaborators not passed in are constructed from
    settings when the app starts; the store is opened on startup and closed
    on shutdown either way.
    """
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.store = store or build_store(settings)
        app.state.identity_provider = identity_provider or build_identity_provider(settings)
        app.state.market_data = market_data or MarketDataClient.from_settings(settings)

        app.state.store.open()
        try:
            yield
        finally:
            app.state.store.close()

    app = FastAPI(
        title=settings.app_name,
        version=VERSION,
        description="Personal finance tracker: transactions, budgets, savings goals and categories",
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(MoolahError)
    async def handle_moolah_error(request: Request, exc: MoolahError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"detail": "Validation failed", "errors": format_errors(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})

    # Include API router
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    def read_root():
        """Root endpoint."""
        return {
            "name": settings.app_name,
            "version": VERSION,
            "status": "ok"
        }

    @app.get("/api/v1/health")
    def health_check():
        """Health check endpoint."""
        return {
            "status": "ok",
            "app_name": settings.app_name
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("moolah.main:app", host=settings.api_host, port=settings.api_port)
