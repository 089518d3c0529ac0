"""
Main FastAPI application entry point for the concept server.

Version: 1.0
"""

# External imports
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase
from starlette.middleware.sessions import SessionMiddleware
from typing import Optional
import structlog

# Internal imports
from concept_server.api.endpoints import router
from concept_server.api.routes import Routes
from concept_server.config.settings import Settings, get_settings
from concept_server.core.exceptions import BaseAPIException, handle_api_exception
from concept_server.core.logging import setup_logging
from concept_server.db.mongodb import close_mongodb_connection, get_database, init_mongodb
from concept_server.framework.doc import CollectionRegistry

# Configure structured logging
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect to MongoDB unless a database was injected, then build indexes."""
    setup_logging()
    owns_connection = False

    if getattr(app.state, "routes", None) is None:
        if not await init_mongodb():
            logger.error("Failed to initialize MongoDB")
            raise RuntimeError("Database initialization failed")
        owns_connection = True
        app.state.routes = Routes(CollectionRegistry(await get_database()))
        logger.info("MongoDB initialized successfully")

    await app.state.routes.setup()

    try:
        yield
    finally:
        if owns_connection:
            await close_mongodb_connection()
            app.state.routes = None
            logger.info("Cleaned up database connections")


def create_app(
    database: Optional[AsyncIOMotorDatabase] = None,
    settings: Optional[Settings] = None
) -> FastAPI:
    """
    Creates and configures the FastAPI application.

    Args:
        database: Database to serve from; when omitted the lifespan connects
            using the configured MongoDB settings
        settings: Settings override, defaults to ``get_settings()``
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        debug=settings.DEBUG,
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.routes = Routes(CollectionRegistry(database)) if database is not None else None

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY.get_secret_value(),
        session_cookie=settings.SESSION_COOKIE,
        https_only=settings.ENVIRONMENT == "production",
    )

    @app.exception_handler(BaseAPIException)
    async def api_exception_handler(request: Request, exc: BaseAPIException):
        error = handle_api_exception(exc)
        if error["status_code"] >= 500:
            logger.error("Request failed", path=request.url.path, error=error["detail"])
        return JSONResponse(status_code=error["status_code"], content={"msg": error["detail"]})

    app.include_router(router, prefix=settings.API_PREFIX)

    return app


# Create FastAPI application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "concept_server.main:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
        log_level="info"
    )
