"""
Business logic for administrator accounts.

``AdminService`` is the repository for the ``admins`` table.  Other
services (authentication, the GeoJSON consistency manager) receive it
as a collaborator instead of reaching into the table themselves.
Records are returned as plain dictionaries with the ``geojson``
column already decoded; use ``public_profile`` before sending one to
a client so that the password hash never leaves the server.
"""

import logging
import sqlite3
from typing import Any, Dict, Optional

from cable_network_api.app.core.db import get_connection, load_json
from cable_network_api.app.core.security import hash_password
from cable_network_api.app.schemas.admin import AdminProfile

logger = logging.getLogger(__name__)


class AdminService:
    """Repository operations on administrator records."""

    @classmethod
    async def get_by_id(cls, admin_id: int) -> Optional[Dict[str, Any]]:
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM admins WHERE id = ?", (admin_id,)).fetchone()
            return cls._row_to_record(row) if row else None
        finally:
            conn.close()

    @classmethod
    async def get_by_username(cls, username: str) -> Optional[Dict[str, Any]]:
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM admins WHERE username = ?", (username,)).fetchone()
            return cls._row_to_record(row) if row else None
        finally:
            conn.close()

    @classmethod
    async def create(cls, username: str, password: str, role: str = "admin") -> Dict[str, Any]:
        """Create an administrator, hashing ``password`` before storage.

        Raises ``sqlite3.IntegrityError`` if the username is taken.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO admins (username, password, role) VALUES (?, ?, ?)",
                (username, hash_password(password), role),
            )
            admin_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute("SELECT * FROM admins WHERE id = ?", (admin_id,)).fetchone()
        finally:
            conn.close()
        logger.info("Created admin %s (%s)", admin_id, username)
        return cls._row_to_record(row)

    @staticmethod
    def public_profile(admin: Dict[str, Any]) -> AdminProfile:
        return AdminProfile(
            id=admin["id"],
            username=admin["username"],
            role=admin["role"],
            geojson=admin["geojson"],
        )

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> Dict[str, Any]:
        return {
            "id": row["id"],
            "username": row["username"],
            "password": row["password"],
            "role": row["role"],
            "geojson": load_json(row["geojson"]),
            "created_at": row["created_at"],
        }
