"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from starlette.middleware.cors import CORSMiddleware

from dog_adoption.api.auth import router as auth_router
from dog_adoption.api.dogs import router as dogs_router
from dog_adoption.api.errors import register_exception_handlers
from dog_adoption.api.middleware import register_middleware
from dog_adoption.app_logging import configure_logging
from dog_adoption.config import parse_cors_origins
from dog_adoption.containers import AppContainer

API_PREFIX = "/api"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting Dog Adoption API",
            extra={"environment": container.settings.environment},
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Dog Adoption API", lifespan=lifespan)
    app.state.container = container

    register_middleware(app, container.rate_limiter)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    api = APIRouter(prefix=API_PREFIX)

    # Returns JSON {message}, not the plain-text welcome body.
    @api.get("/")
    async def welcome() -> dict[str, str]:
        """Landing endpoint for the API root."""
        return {"message": "Welcome to the Dog Adoption API!"}

    api.include_router(auth_router)
    api.include_router(dogs_router)
    app.include_router(api)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
