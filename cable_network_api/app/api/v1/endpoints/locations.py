"""
Location endpoints for API v1.

CRUD routes for locations plus the dashboard counters.  Deleting a
location takes the id of the administrator whose GeoJSON should be
pruned as a second path parameter.  All routes require a bearer token
(enforced where the router is included).
"""

from typing import List

from fastapi import APIRouter, status

from cable_network_api.app.schemas.admin import LocationDeleteResponse
from cable_network_api.app.schemas.location import LocationPayload, LocationRead, LocationStats
from cable_network_api.app.services.location_service import LocationService

router = APIRouter()


@router.get("", response_model=List[LocationRead])
async def list_locations() -> List[LocationRead]:
    """Return every location with its service and service type resolved."""
    return await LocationService.list_all()


@router.get("/filter/service-type/{service_type_id}", response_model=List[LocationRead])
async def list_locations_by_service_type(service_type_id: int) -> List[LocationRead]:
    return await LocationService.list_by_service_type(service_type_id)


@router.get("/stats/dashboard", response_model=LocationStats)
async def dashboard_stats() -> LocationStats:
    """Counts of locations, services and service types."""
    return await LocationService.stats()


@router.get("/{location_id}", response_model=LocationRead)
async def get_location(location_id: int) -> LocationRead:
    return await LocationService.get_by_id(location_id)


@router.post("", response_model=LocationRead, status_code=status.HTTP_201_CREATED)
async def create_location(payload: LocationPayload) -> LocationRead:
    """Create a location.

    ``serviceName``, ``serviceType``, ``latitude`` and ``longitude`` are
    required; a coordinate of ``0`` is valid.
    """
    return await LocationService.create(payload)


@router.put("/{location_id}", response_model=LocationRead)
async def update_location(location_id: int, payload: LocationPayload) -> LocationRead:
    """Replace a location.

    Send the full payload: omitted ``serviceName``, ``serviceType`` and
    ``notes`` are cleared.  Images are only touched when present.
    """
    return await LocationService.update(location_id, payload)


@router.delete("/{location_id}/{admin_id}", response_model=LocationDeleteResponse)
async def delete_location(location_id: int, admin_id: int) -> LocationDeleteResponse:
    """Delete a location and remove its feature from the admin's GeoJSON."""
    return await LocationService.delete(location_id, admin_id)
