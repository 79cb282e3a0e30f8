"""Screening Package API — FastAPI application factory."""


import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from screening_api.core.config import Settings, settings
from screening_api.core.exceptions import register_exception_handlers
from screening_api.db.base import create_tables
from screening_api.middleware.request_log import RequestLogMiddleware
from screening_api.repositories.catalog import JsonCatalogSource
from screening_api.schemas.common import HealthResponse
from screening_api.services.catalog import CatalogStore
from screening_api.services.rules import load_pricing_rules

from screening_api.routers.v1.packages import router as packages_v1_router
from screening_api.routers.v1.services import router as services_v1_router

logger = logging.getLogger(__name__)


def _configure_logging(config: Settings) -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if config.is_development else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def create_app(config: Settings = settings) -> FastAPI:
    _configure_logging(config)

    # Catalog problems are fatal here: never start with an empty catalog
    catalog_store = CatalogStore(JsonCatalogSource(config.catalog_path))
    pricing_rules = load_pricing_rules(config.pricing_rules_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.auto_create_tables:
            await create_tables()
        logger.info("%s started (%s)", config.app_name, config.app_env)
        yield

    app = FastAPI(
        title=config.app_name,
        version="1.0.0",
        docs_url="/docs" if config.is_development else None,
        redoc_url="/redoc" if config.is_development else None,
        lifespan=lifespan,
    )
    app.state.catalog_store = catalog_store
    app.state.pricing_rules = pricing_rules

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Request logging ---
    app.add_middleware(RequestLogMiddleware)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- v1 API routes (/api/v1/*) ---
    app.include_router(services_v1_router, prefix="/api/v1")
    app.include_router(packages_v1_router, prefix="/api/v1")

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(
            app=config.app_name,
            env=config.app_env,
            catalog_services=len(catalog_store.snapshot()),
            catalog_generation=catalog_store.generation,
        )

    return app


app = create_app()
