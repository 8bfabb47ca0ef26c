"""
Consistency manager for administrator GeoJSON.

Each administrator owns a GeoJSON-like document, logically a
FeatureCollection ``{"type": ..., "features": [...]}``, drawn in the
front-end map editor.  Every feature carries a
``coordinates: {latitude, longitude}`` property, and that pair is the
only link between a feature and the location it marks: there is no
location id on the feature.  When a location is deleted its feature
has to be pruned here by value.

Matching uses exact float equality on both coordinates.  Several
features sharing the same coordinates are all removed together.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from cable_network_api.app.core.db import dump_json, get_connection
from cable_network_api.app.core.exceptions import NotFoundError, ValidationError
from cable_network_api.app.services.admin_service import AdminService

logger = logging.getLogger(__name__)


def feature_matches(feature: Any, latitude: float, longitude: float) -> bool:
    """Return ``True`` if ``feature`` sits exactly at the given point."""
    if not isinstance(feature, dict):
        return False
    coordinates = feature.get("coordinates")
    if not isinstance(coordinates, dict):
        return False
    return _same_number(coordinates.get("longitude"), longitude) and _same_number(
        coordinates.get("latitude"), latitude
    )


def _same_number(value: Any, expected: float) -> bool:
    # JSON booleans are not coordinates, even though True == 1.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value == expected


def prune_features(geojson: Dict[str, Any], latitude: float, longitude: float) -> int:
    """Remove every feature at the given point from ``geojson`` in place.

    Returns the number of removed features.  A document without a
    ``features`` list is left untouched.
    """
    features = geojson.get("features")
    if not isinstance(features, list):
        return 0
    kept: List[Any] = [f for f in features if not feature_matches(f, latitude, longitude)]
    geojson["features"] = kept
    return len(features) - len(kept)


class GeoJSONService:
    """Keeps administrator GeoJSON in step with locations."""

    admins = AdminService

    @classmethod
    async def remove_feature_for_coordinates(
        cls, admin_id: int, latitude: float, longitude: float
    ) -> Dict[str, Any]:
        """Pull all features located at ``(latitude, longitude)``.

        Raises ``NotFoundError`` if the administrator does not exist or
        has no GeoJSON.  When nothing matches the document is written
        back unchanged.  Returns the updated administrator record.
        """
        admin = await cls.admins.get_by_id(admin_id)
        if admin is None or admin["geojson"] is None:
            raise NotFoundError("Admin or geojson not found")

        geojson = admin["geojson"]
        removed = prune_features(geojson, latitude, longitude) if isinstance(geojson, dict) else 0
        conn = get_connection()
        try:
            conn.execute(
                "UPDATE admins SET geojson = ? WHERE id = ?",
                (dump_json(geojson), admin_id),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info(
            "Removed %d feature(s) at (%s, %s) from admin %s", removed, latitude, longitude, admin_id
        )
        admin["geojson"] = geojson
        return admin

    @classmethod
    async def replace_geojson(cls, admin_id: int, geojson: Any) -> Dict[str, Any]:
        """Replace an administrator's GeoJSON wholesale."""
        if not isinstance(geojson, dict):
            raise ValidationError("Valid GeoJSON required")
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE admins SET geojson = ? WHERE id = ?",
                (dump_json(geojson), admin_id),
            )
            affected = cursor.rowcount
            conn.commit()
        finally:
            conn.close()
        if not affected:
            raise NotFoundError("Admin not found")
        logger.info("Replaced GeoJSON of admin %s", admin_id)
        return await cls.admins.get_by_id(admin_id)
