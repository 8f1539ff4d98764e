"""Main application entry point."""
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor

from config import (
    API_VERSION,
    CORS_ALLOW_HEADERS,
    CORS_ALLOW_METHODS,
    CORS_ALLOW_ORIGINS,
    DATABASE_URL,
    HOST,
    ORDERS_EMAIL_FOREIGN_KEY,
    PORT,
)
from database import Database
from errors import catch_unhandled_errors, register_exception_handlers
from logging_config import setup_logging
from routers import orders, users

# Setup structured logging
setup_logging()
logger = logging.getLogger(__name__)


def create_app(
    database_url: str = DATABASE_URL,
    orders_email_foreign_key: bool = ORDERS_EMAIL_FOREIGN_KEY,
    cors_allow_origins: Optional[List[str]] = None,
    cors_allow_methods: Optional[List[str]] = None,
    cors_allow_headers: Optional[List[str]] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        database_url: SQLAlchemy URL of the datastore
        orders_email_foreign_key: Declare orders.email -> users.email when creating the schema
        cors_allow_origins: Allowed origins, defaults to CORS_ALLOW_ORIGINS
        cors_allow_methods: Allowed methods, defaults to CORS_ALLOW_METHODS
        cors_allow_headers: Allowed request headers, defaults to CORS_ALLOW_HEADERS

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.

        Opens the datastore and ensures its schema on startup, releases it on shutdown.
        """
        logger.info("Starting application...")

        database = Database(database_url, orders_email_foreign_key=orders_email_foreign_key)
        SQLAlchemyInstrumentor().instrument(engine=database.engine)
        database.init_db()
        app.state.database = database
        logger.info("Database ready", extra={"location": database.location})

        logger.info("Application startup complete")

        yield

        logger.info("Shutting down application...")
        SQLAlchemyInstrumentor().uninstrument()
        database.dispose()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title="Orders API",
        version=API_VERSION,
        lifespan=lifespan
    )

    # Added before CORS so it runs inside it
    app.middleware("http")(catch_unhandled_errors)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allow_origins if cors_allow_origins is not None else CORS_ALLOW_ORIGINS,
        allow_methods=cors_allow_methods if cors_allow_methods is not None else CORS_ALLOW_METHODS,
        allow_headers=cors_allow_headers if cors_allow_headers is not None else CORS_ALLOW_HEADERS,
    )

    register_exception_handlers(app)
    FastAPIInstrumentor.instrument_app(app)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    app.include_router(users.router)
    app.include_router(orders.router)

    return app


app = create_app()


if __name__ == "__main__":
    logger.info(f"Server running at http://{HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
