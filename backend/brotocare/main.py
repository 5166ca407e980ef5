"""
Brotocare Grievance API - FastAPI application

Wires logging, middleware, error handlers and the versioned API router.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from . import __version__
from .config.settings import settings
from .api.routes import api_router
from .api.middleware import CORRELATION_HEADER, CorrelationIdMiddleware, register_error_handlers
from .repositories.mongo_client import (
    close_async_connection, close_connection, create_indexes, health_check,
    supports_transactions
)
from .utils.logger import setup_logging, get_logger

setup_logging()
logger = get_logger(__name__)

API_TITLE = "Brotocare Grievance API"


def _check_store() -> None:
    """Create indexes and confirm the server can honour the transaction setting"""
    try:
        create_indexes()
        if settings.mongo_transactions_enabled and not supports_transactions():
            logger.error(
                "MONGO_TRANSACTIONS_ENABLED is set but the server is not a replica set; "
                "status changes will fail until this is fixed"
            )
    except PyMongoError as e:
        logger.error(f"MongoDB not reachable at startup: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"Starting {API_TITLE} {__version__} ({settings.environment}); "
        f"transactions={'on' if settings.mongo_transactions_enabled else 'off'}, "
        f"timeline on every transition={'on' if settings.timeline_on_every_transition else 'off'}"
    )
    _check_store()
    
    yield
    
    close_connection()
    close_async_connection()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Build the FastAPI application"""
    docs_enabled = settings.debug and not settings.is_production
    application = FastAPI(
        title=API_TITLE,
        description="Student grievance filing, triage and resolution tracking",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs" if docs_enabled else None,
        redoc_url="/api/redoc" if docs_enabled else None,
        openapi_url="/api/openapi.json" if docs_enabled else None,
    )
    
    # Credentials cannot be combined with a wildcard origin
    allow_all = settings.cors_origins_list == ["*"]
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[CORRELATION_HEADER],
    )
    application.add_middleware(CorrelationIdMiddleware)
    
    register_error_handlers(application)
    application.include_router(api_router, prefix="/api/v1")
    
    @application.get("/health", tags=["Health"])
    async def health():
        """Liveness plus database connectivity (no auth required)"""
        mongo = health_check()
        return {
            "status": "healthy" if mongo["status"] == "healthy" else "degraded",
            "version": __version__,
            "environment": settings.environment,
            "mongo": mongo
        }
    
    @application.get("/", tags=["Health"])
    async def root():
        return {
            "name": API_TITLE,
            "version": __version__,
            "docs": "/api/docs" if docs_enabled else None
        }
    
    return application


app = create_app()
