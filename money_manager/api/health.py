"""
Service information endpoints.

Used by load balancers, monitoring systems, and humans
to verify the application is running and responsive.
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from money_manager.config import get_settings
from money_manager.models.base import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

SERVICE_NAME = "money-manager-api"


@router.get("/")
def api_info():
    """Name, version and environment of the running API."""
    settings = get_settings()
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "docs": "/docs",
    }


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Return application health status including database connectivity.

    The database check executes a simple query to verify
    the connection is alive. If it fails the service is
    reported as degraded instead of erroring.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError:
        logger.exception("Health check database query failed")
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": SERVICE_NAME,
        "database": db_status,
    }


@router.get("/api/routes")
def list_routes(request: Request):
    """
    Every documented API route with its methods.

    Read from the OpenAPI schema, which covers routes added
    through included routers as well as those on the app.
    """
    paths = request.app.openapi().get("paths", {})
    routes = [
        {"path": path, "methods": sorted(method.upper() for method in operations)}
        for path, operations in sorted(paths.items())
    ]
    return {"count": len(routes), "routes": routes}
