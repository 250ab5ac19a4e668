"""
Main FastAPI application for the Forum backend
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..auth import AuthContextMiddleware, CredentialServices, build_credential_services
from ..config import settings
from ..database import init_database
from ..database.connection import test_database_connection
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

# Configure logging before creating logger
configure_logging(debug=settings.debug)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Forum API...")
    init_database()

    ok, error = await test_database_connection()
    if ok:
        logger.info("Database connection verified")
    else:
        logger.error("Database connection check failed", error=error)
        if settings.is_production:
            raise RuntimeError(error)

    yield

    logger.info("Shutting down Forum API...")


def create_app(credentials: CredentialServices | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    # The signing secret is loaded once here and shared by every request
    credentials = credentials or build_credential_services()

    app = FastAPI(
        title="Forum API",
        description="Threads, replies and likes served over GraphQL",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.credentials = credentials

    # Middleware added last runs first: authentication resolves the caller
    # before the logging middleware binds the request context
    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(AuthContextMiddleware, tokens=credentials.tokens)

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

    try:
        from ..graphql.schema import create_graphql_router, validate_schema

        logger.info("Validating GraphQL schema...")
        validate_schema()

        graphql_router = create_graphql_router(credentials, graphiql=settings.debug)
        app.include_router(graphql_router, prefix="")
        logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        # Server should not start with a broken schema
        raise

    return app
