"""FastAPI application entry point."""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.api.errors import register_exception_handlers
from taskboard.api.router import api_router
from taskboard.core.errors import SchemaInitError
from taskboard.core.settings import get_settings
from taskboard.db.init_db import init_db

# Configure root logging to show all application logs
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format='%(levelname)s:     %(name)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

# Configure logging levels for different modules
logging.getLogger("sqlalchemy.engine").setLevel(logging.ERROR)
logging.getLogger("sqlalchemy.pool").setLevel(logging.ERROR)
logging.getLogger("sqlalchemy.dialects").setLevel(logging.ERROR)

logger = logging.getLogger(__name__)


def create_application() -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    settings = get_settings()

    application = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(application)
    application.include_router(api_router, prefix=settings.api_prefix)

    @application.on_event("startup")
    def startup_event():
        """Initialize database on startup."""
        logger.info("Starting %s %s (%s)", settings.project_name, settings.version, settings.environment)
        try:
            init_db()
        except SchemaInitError as exc:
            # Keep serving; data requests will report the broken schema
            logger.error("Database initialization failed: %s", exc.details or exc.message)
            logger.error("Server is still running, but database operations may fail.")

    return application


app = create_application()
