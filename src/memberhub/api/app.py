"""
Main FastAPI application for Memberhub backend
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..database.connection import dispose_database, init_database, test_database_connection
from ..gateway import DataGateway, SqlDataGateway
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

# Configure logging before creating logger
configure_logging(debug=settings.debug)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Memberhub API...")
    init_database()

    ok, error = await test_database_connection()
    if ok:
        logger.info("Database connection verified")
    else:
        logger.error("Database connection check failed", error=error)
        if settings.environment.lower() in ("production", "prod"):
            raise RuntimeError(error)

    yield

    logger.info("Shutting down Memberhub API...")
    await dispose_database()


def create_app(gateway: DataGateway | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        gateway: Data gateway to serve from; defaults to the SQL gateway.
            Only the default gateway opens the database pool on startup.
    """
    app = FastAPI(
        title="Memberhub API",
        description="GraphQL API over users, profiles, posts and membership tiers",
        version=__version__,
        lifespan=lifespan if gateway is None else None,
        debug=settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    from ..graphql.schema import create_graphql_router, validate_schema

    # Fail fast on an invalid schema
    logger.info("Validating GraphQL schema...")
    validate_schema()

    app.include_router(create_graphql_router(gateway or SqlDataGateway()))
    logger.info("GraphQL endpoint initialized", endpoint="/", max_depth=settings.max_query_depth)

    return app


app = create_app()
