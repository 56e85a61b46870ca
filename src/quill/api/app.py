"""
FastAPI application serving the Quill GraphQL API
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..database import init_database
from ..database.connection import test_database_connection
from ..logging import configure_logging, get_logger
from ..middleware import REQUEST_ID_HEADER, LoggingContextMiddleware

configure_logging(debug=settings.debug)
logger = get_logger(__name__)


def is_production() -> bool:
    return settings.environment.lower() in ("production", "prod")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database before serving; production refuses to start without it."""
    init_database()

    ok, error = await test_database_connection()
    if not ok:
        if is_production():
            raise RuntimeError(f"Database unavailable: {error}")
        logger.error("Database unreachable, posts cannot be served", error=error)

    logger.info(
        "Quill API started",
        version=__version__,
        environment=settings.environment,
        auth_provider=settings.auth_provider,
    )
    yield
    logger.info("Quill API stopped")


def mount_graphql(app: FastAPI) -> None:
    """Validate the post schema and serve it at /graphql."""
    from ..graphql.schema import create_graphql_router, validate_schema

    validate_schema()
    app.include_router(create_graphql_router())
    logger.info("GraphQL endpoint ready", endpoint="/graphql")


def create_app(*, graphql: bool | None = None) -> FastAPI:
    """Build the API.

    GraphQL is served unless ``graphql`` is False or, when it is left as None,
    QUILL_DISABLE_GRAPHQL is set.
    """
    app = FastAPI(
        title="Quill API",
        description="Publish drafts as posts over GraphQL",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )

    @app.get("/health")
    async def health() -> dict[str, str]:  # pyright: ignore [reportUnusedFunction]
        return {"status": "healthy", "version": __version__}

    if graphql is None:
        graphql = not os.getenv("QUILL_DISABLE_GRAPHQL")
    if graphql:
        mount_graphql(app)

    return app


app = create_app()
