"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
Everything except the health check and login requires a bearer
token; the guard is attached here, per included router, so that
endpoint modules do not have to repeat it.
"""

from fastapi import APIRouter, Depends

from cable_network_api.app.core.security import get_current_admin
from .endpoints import admin, auth, catalog, health, locations

router = APIRouter()

protected = [Depends(get_current_admin)]

router.include_router(health.router, prefix="/health", tags=["health"])
# /auth/verify declares the guard itself; /auth/login is public.
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(admin.router, prefix="/admin", tags=["admin"], dependencies=protected)
router.include_router(locations.router, prefix="/locations", tags=["locations"], dependencies=protected)
router.include_router(catalog.services_router, prefix="/services", tags=["services"], dependencies=protected)
router.include_router(
    catalog.service_types_router,
    prefix="/service-types",
    tags=["service-types"],
    dependencies=protected,
)
