"""
==============================================================================
Storefront Dashboard - Application Entry Point
==============================================================================

FastAPI application with:
- RESTful API endpoints for catalog, orders, overview, feedback and settings
- WebSocket live product search
- JWT authentication
- Local image storage served under MEDIA_URL_PREFIX

Usage:
------
    # Development
    uvicorn dashboard.main:app --reload

    # Production
    uvicorn dashboard.main:app --host 0.0.0.0 --port 8000

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from dashboard.config import get_settings
from dashboard.core.exceptions import register_exception_handlers
from dashboard.db import init_db
from dashboard.db.database import get_database_manager
from dashboard.api.router import api_router
from dashboard.websockets import search_router
from dashboard.catalog.feed import CatalogFeed
from dashboard.storage.images import ImageStorage
from dashboard.services.product_service import ProductService


# ============================================================================
# LOGGING SETUP
# ============================================================================

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class Application:
    """
    FastAPI application factory and manager.

    Handles application lifecycle including:
    - Startup and shutdown events
    - Middleware configuration
    - Router registration
    - Exception handler setup

    The CatalogFeed and ImageStorage live on app.state and are shared by
    every request and WebSocket session.
    """

    def __init__(self):
        """Initialize the application."""
        self._settings = get_settings()
        self._settings.ensure_directories()
        self._feed = CatalogFeed()
        self._storage = ImageStorage()
        self._app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title=self._settings.app_name,
            version="1.0.0",
            description="Administrative dashboard for a small storefront",
            lifespan=self._lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )

        app.state.catalog_feed = self._feed
        app.state.image_storage = self._storage

        # Configure middleware
        self._configure_middleware(app)

        # Register exception handlers
        register_exception_handlers(app)

        # Register routers
        self._register_routers(app)

        # Serve stored product images
        app.mount(
            self._settings.media_url_prefix,
            StaticFiles(directory=str(self._settings.media_path)),
            name="media",
        )

        # Register root endpoint
        self._register_root(app)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Application lifespan manager."""
        # Startup
        self._startup()
        yield
        # Shutdown
        self._shutdown()

    def _startup(self) -> None:
        """Application startup tasks."""
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {self._settings.app_name}")
        logger.info("=" * 60)

        # Initialize database
        init_db()

        # Publish the stored catalog to live search
        self._load_catalog()

        logger.info("=" * 60)
        logger.info(f"✅ {self._settings.app_name} ready")
        logger.info(f"📍 Running on http://{self._settings.host}:{self._settings.port}")
        logger.info(f"📖 API Docs: http://{self._settings.host}:{self._settings.port}/docs")
        logger.info("=" * 60)

    def _shutdown(self) -> None:
        """Application shutdown tasks."""
        logger.info("🛑 Shutting down...")
        get_database_manager().dispose()
        logger.info("✅ Shutdown complete")

    def _load_catalog(self) -> None:
        """Load the product catalog into the feed."""
        try:
            with get_database_manager().session_scope() as session:
                snapshot = ProductService(session, self._feed, self._storage).publish()
            logger.info(f"✅ Loaded {len(snapshot)} products (catalog v{snapshot.version})")
        except Exception as e:
            logger.error(f"❌ Failed to load catalog: {e}")

    def _configure_middleware(self, app: FastAPI) -> None:
        """Configure application middleware."""
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _register_routers(self, app: FastAPI) -> None:
        """Register API routers."""
        # REST API routes
        app.include_router(api_router)

        # WebSocket routes
        app.include_router(search_router)

    def _register_root(self, app: FastAPI) -> None:
        """Register root endpoint."""

        @app.get("/", include_in_schema=False)
        async def root():
            """Redirect to the API documentation."""
            return RedirectResponse(url="/docs")

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self._app


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

# Create application instance
application = Application()
app = application.app


# ============================================================================
# ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "dashboard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
