"""
Administrator endpoints for API v1.

The map editor saves the whole GeoJSON of an administrator through
``PUT /admin/{admin_id}/geojson``.  Individual features are removed
by the location delete route, not here.
"""

from fastapi import APIRouter

from cable_network_api.app.schemas.admin import GeoJSONUpdate, GeoJSONUpdateResponse
from cable_network_api.app.services.admin_service import AdminService
from cable_network_api.app.services.geojson_service import GeoJSONService

router = APIRouter()


@router.put("/{admin_id}/geojson", response_model=GeoJSONUpdateResponse)
async def update_geojson(admin_id: int, payload: GeoJSONUpdate) -> GeoJSONUpdateResponse:
    """Replace the administrator's GeoJSON document.

    Returns 400 if ``geojson`` is missing or not an object and 404 if
    the administrator does not exist.
    """
    admin = await GeoJSONService.replace_geojson(admin_id, payload.geojson)
    return GeoJSONUpdateResponse(
        message="GeoJSON updated successfully",
        user=AdminService.public_profile(admin),
    )
