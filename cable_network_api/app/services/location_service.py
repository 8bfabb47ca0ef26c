"""
Service layer for locations.

A location is a geo-tagged service record.  It references one service
and one service type by id; every read resolves those ids into the
full catalog entries (a missing entry resolves to ``None``).  Image
URLs are accepted only when they point at the configured CDN account.

Deleting a location also prunes the matching feature(s) from an
administrator's GeoJSON through ``GeoJSONService``.  The two writes
are committed separately: if the administrator lookup fails after the
location row is gone, the caller gets a 404 and the location stays
deleted.

Validation rules differ on purpose between create and update:

* ``create`` treats ``latitude``/``longitude`` as present unless they
  are ``None``, so ``0`` is accepted.
* ``update`` rejects any falsy coordinate, so ``0`` is refused with
  "Valid coordinates required".
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional
from urllib.parse import urlsplit

from cable_network_api.app.core.config import settings
from cable_network_api.app.core.db import get_connection
from cable_network_api.app.core.exceptions import NotFoundError, ValidationError
from cable_network_api.app.schemas.admin import LocationDeleteResponse
from cable_network_api.app.schemas.catalog import ServiceRead, ServiceTypeRead
from cable_network_api.app.schemas.location import (
    Coordinates,
    LocationPayload,
    LocationRead,
    LocationStats,
)
from cable_network_api.app.services.admin_service import AdminService
from cable_network_api.app.services.catalog_service import ServiceCatalog, ServiceTypeCatalog
from cable_network_api.app.services.geojson_service import GeoJSONService

logger = logging.getLogger(__name__)

_RESOLVED_SELECT = """
    SELECT l.*,
           s.id AS s_id, s.name AS s_name, s.description AS s_description,
           s.created_at AS s_created_at, s.updated_at AS s_updated_at,
           t.id AS t_id, t.name AS t_name, t.description AS t_description,
           t.created_at AS t_created_at, t.updated_at AS t_updated_at
    FROM locations l
    LEFT JOIN services s ON s.id = l.service_name
    LEFT JOIN service_types t ON t.id = l.service_type
"""


def is_valid_cdn_url(url: str) -> bool:
    """Check that ``url`` points at the configured CDN account.

    The URL must parse with a scheme and a host, the host must equal
    ``settings.cdn_host`` and the path must start with
    ``/<settings.cloud_name>/``.
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except (TypeError, ValueError):
        return False
    if not parts.scheme or not hostname:
        return False
    return hostname == settings.cdn_host and parts.path.startswith(f"/{settings.cloud_name}/")


class LocationService:
    """CRUD operations on locations."""

    geojson = GeoJSONService
    admins = AdminService

    @classmethod
    async def list_all(cls) -> List[LocationRead]:
        conn = get_connection()
        try:
            rows = conn.execute(_RESOLVED_SELECT + " ORDER BY l.id ASC").fetchall()
            return [cls._row_to_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_by_service_type(cls, service_type_id: int) -> List[LocationRead]:
        conn = get_connection()
        try:
            rows = conn.execute(
                _RESOLVED_SELECT + " WHERE l.service_type = ? ORDER BY l.id ASC",
                (service_type_id,),
            ).fetchall()
            return [cls._row_to_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_by_id(cls, location_id: int) -> LocationRead:
        conn = get_connection()
        try:
            row = conn.execute(_RESOLVED_SELECT + " WHERE l.id = ?", (location_id,)).fetchone()
        finally:
            conn.close()
        if row is None:
            raise NotFoundError("Location not found")
        return cls._row_to_read(row)

    @classmethod
    async def create(cls, data: LocationPayload) -> LocationRead:
        """Validate and store a new location, returning it resolved."""
        if (
            not data.serviceName
            or not data.serviceType
            or data.latitude is None
            or data.longitude is None
        ):
            raise ValidationError("Missing required fields")
        cls._check_images(data.image, data.image2)

        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO locations (service_name, service_type, notes, latitude, longitude, image, image2)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data.serviceName,
                    data.serviceType,
                    data.notes or "",
                    float(data.latitude),
                    float(data.longitude),
                    data.image or None,
                    data.image2 or None,
                ),
            )
            location_id = cursor.lastrowid
            conn.commit()
        finally:
            conn.close()
        logger.info("Created location %s", location_id)
        return await cls.get_by_id(location_id)

    @classmethod
    async def update(cls, location_id: int, data: LocationPayload) -> LocationRead:
        """Replace a location's fields.

        ``serviceName``, ``serviceType`` and ``notes`` are always
        overwritten, with ``None`` when absent from the payload.
        ``image`` and ``image2`` change only when the payload names them,
        so an explicit ``null`` clears an image while omission keeps it.
        """
        if not data.latitude or not data.longitude:
            raise ValidationError("Valid coordinates required")
        cls._check_images(data.image, data.image2)

        columns = {
            "service_name": data.serviceName,
            "service_type": data.serviceType,
            "notes": data.notes,
            "latitude": float(data.latitude),
            "longitude": float(data.longitude),
        }
        provided = data.model_fields_set
        if "image" in provided:
            columns["image"] = data.image
        if "image2" in provided:
            columns["image2"] = data.image2

        assignments = ", ".join(f"{column} = ?" for column in columns)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"UPDATE locations SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                (*columns.values(), location_id),
            )
            affected = cursor.rowcount
            conn.commit()
        finally:
            conn.close()
        if not affected:
            raise NotFoundError("Location not found")
        logger.info("Updated location %s", location_id)
        return await cls.get_by_id(location_id)

    @classmethod
    async def delete(cls, location_id: int, admin_id: int) -> LocationDeleteResponse:
        """Delete a location and prune its feature from the admin's GeoJSON."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute(
                "SELECT latitude, longitude FROM locations WHERE id = ?", (location_id,)
            ).fetchone()
            if row is None:
                raise NotFoundError("Location not found")
            cursor.execute("DELETE FROM locations WHERE id = ?", (location_id,))
            conn.commit()
        finally:
            conn.close()
        logger.info("Deleted location %s", location_id)

        latitude, longitude = row["latitude"], row["longitude"]
        try:
            admin = await cls.geojson.remove_feature_for_coordinates(admin_id, latitude, longitude)
        except NotFoundError:
            logger.warning(
                "Location %s was deleted but GeoJSON of admin %s could not be updated",
                location_id,
                admin_id,
            )
            raise
        return LocationDeleteResponse(
            message="Location deleted and geojson updated successfully",
            updatedUser=cls.admins.public_profile(admin),
        )

    @classmethod
    async def stats(cls) -> LocationStats:
        conn = get_connection()
        try:
            total_locations = conn.execute("SELECT COUNT(*) FROM locations").fetchone()[0]
        finally:
            conn.close()
        return LocationStats(
            totalLocations=total_locations,
            totalServices=await ServiceCatalog.count(),
            totalServiceTypes=await ServiceTypeCatalog.count(),
        )

    @staticmethod
    def _check_images(image: Optional[str], image2: Optional[str]) -> None:
        if image and not is_valid_cdn_url(image):
            raise ValidationError("Invalid Cloudinary image URL")
        if image2 and not is_valid_cdn_url(image2):
            raise ValidationError("Invalid Cloudinary image2 URL")

    @staticmethod
    def _row_to_read(row: sqlite3.Row) -> LocationRead:
        service = None
        if row["s_id"] is not None:
            service = ServiceRead(
                id=row["s_id"],
                name=row["s_name"],
                description=row["s_description"],
                createdAt=row["s_created_at"],
                updatedAt=row["s_updated_at"],
            )
        service_type = None
        if row["t_id"] is not None:
            service_type = ServiceTypeRead(
                id=row["t_id"],
                name=row["t_name"],
                description=row["t_description"],
                createdAt=row["t_created_at"],
                updatedAt=row["t_updated_at"],
            )
        return LocationRead(
            id=row["id"],
            serviceName=service,
            serviceType=service_type,
            notes=row["notes"],
            coordinates=Coordinates(latitude=row["latitude"], longitude=row["longitude"]),
            image=row["image"],
            image2=row["image2"],
            createdAt=row["created_at"],
            updatedAt=row["updated_at"],
        )
