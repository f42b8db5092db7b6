"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text

from dashboard.db.database import get_db
from dashboard.catalog.feed import CatalogFeed
from dashboard.core.dependencies import get_catalog_feed


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, db: Session, feed: CatalogFeed):
        self._db = db
        self._feed = feed

    def check_database(self) -> str:
        """Check database connectivity."""
        try:
            self._db.execute(text("SELECT 1"))
            return "healthy"
        except Exception:
            return "unhealthy"

    def check_catalog(self) -> dict:
        """Check catalog feed status."""
        snapshot = self._feed.snapshot()
        status = "healthy" if snapshot.version > 0 else "not_loaded"
        return {
            "status": status,
            "products": len(snapshot),
            "version": snapshot.version,
            "subscribers": self._feed.subscriber_count,
        }

    def get_health(self) -> dict:
        """Get full health status."""
        db_status = self.check_database()
        catalog_info = self.check_catalog()

        overall = "healthy" if db_status == "healthy" else "degraded"

        return {
            "status": overall,
            "components": {
                "api": "healthy",
                "database": db_status,
                "catalog": catalog_info["status"]
            },
            "details": {
                "products_loaded": catalog_info["products"],
                "catalog_version": catalog_info["version"],
                "live_subscribers": catalog_info["subscribers"]
            }
        }


@router.get("")
async def health_check(
    db: Session = Depends(get_db),
    feed: CatalogFeed = Depends(get_catalog_feed)
):
    """
    Health check endpoint.

    Returns system status including API, database, and catalog feed.
    """
    controller = HealthController(db, feed)
    return controller.get_health()


@router.get("/ready")
async def readiness_check():
    """Readiness probe for container orchestration."""
    return {"ready": True}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
