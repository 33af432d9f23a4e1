"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ._connections import ConnectionManager
from ._errors import register_error_handlers
from ._gateway import QueryGateway
from ._routes import _health, _query

logger = logging.getLogger(__name__)


def create_app(
    connections: ConnectionManager,
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        yield
        logger.info("Shutting down, closing connection pool")
        connections.dispose()

    app = FastAPI(
        title="sqlgate",
        description="HTTP gateway that executes raw SQL and returns JSON",
        lifespan=lifespan,
    )

    gateway = QueryGateway(connections.engine)
    app.dependency_overrides[_query.get_gateway] = lambda: gateway

    # CORS (consumer configurable)
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_error_handlers(app)

    app.include_router(_health.router)
    app.include_router(_query.router)

    return app
