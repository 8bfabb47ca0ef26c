"""
Service layer for the service catalog.

Locations refer to two kinds of catalog entries: services (what is
installed, e.g. "Fiber") and service types (how it is classified).
Both are stored in tables of the same shape, so a single
``CatalogService`` implements the CRUD operations and the concrete
subclasses only name their table and read schema.

References from locations are not enforced: deleting a catalog entry
leaves locations pointing at it, and those references resolve to
``None`` afterwards.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Type

from cable_network_api.app.core.db import get_connection
from cable_network_api.app.core.exceptions import NotFoundError, ValidationError
from cable_network_api.app.schemas.catalog import (
    CatalogItemCreate,
    CatalogItemRead,
    CatalogItemUpdate,
    ServiceRead,
    ServiceTypeRead,
)

logger = logging.getLogger(__name__)


class CatalogService:
    """CRUD operations over one catalog table."""

    table: str = ""
    label: str = "Catalog item"
    read_model: Type[CatalogItemRead] = CatalogItemRead

    @classmethod
    async def list_all(cls) -> List[CatalogItemRead]:
        conn = get_connection()
        try:
            rows = conn.execute(f"SELECT * FROM {cls.table} ORDER BY id ASC").fetchall()
            return [cls._row_to_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get(cls, item_id: int) -> CatalogItemRead:
        """Return one entry or raise ``NotFoundError``."""
        conn = get_connection()
        try:
            row = conn.execute(f"SELECT * FROM {cls.table} WHERE id = ?", (item_id,)).fetchone()
        finally:
            conn.close()
        if row is None:
            raise NotFoundError(f"{cls.label} not found")
        return cls._row_to_read(row)

    @classmethod
    async def create(cls, data: CatalogItemCreate) -> CatalogItemRead:
        name = (data.name or "").strip()
        if not name:
            raise ValidationError("Name is required")
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"INSERT INTO {cls.table} (name, description) VALUES (?, ?)",
                (name, data.description),
            )
            item_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute(f"SELECT * FROM {cls.table} WHERE id = ?", (item_id,)).fetchone()
        finally:
            conn.close()
        logger.info("Created %s %s", cls.table, item_id)
        return cls._row_to_read(row)

    @classmethod
    async def update(cls, item_id: int, data: CatalogItemUpdate) -> CatalogItemRead:
        """Apply a partial update.  A blank name is rejected."""
        updates = data.model_dump(exclude_unset=True)
        if "name" in updates:
            updates["name"] = (updates["name"] or "").strip()
            if not updates["name"]:
                raise ValidationError("Name is required")
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute(f"SELECT id FROM {cls.table} WHERE id = ?", (item_id,)).fetchone()
            if row is None:
                raise NotFoundError(f"{cls.label} not found")
            if updates:
                fields = ", ".join(f"{key} = ?" for key in updates)
                cursor.execute(
                    f"UPDATE {cls.table} SET {fields}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (*updates.values(), item_id),
                )
                conn.commit()
            row = cursor.execute(f"SELECT * FROM {cls.table} WHERE id = ?", (item_id,)).fetchone()
        finally:
            conn.close()
        logger.info("Updated %s %s", cls.table, item_id)
        return cls._row_to_read(row)

    @classmethod
    async def delete(cls, item_id: int) -> None:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(f"DELETE FROM {cls.table} WHERE id = ?", (item_id,))
            affected = cursor.rowcount
            conn.commit()
        finally:
            conn.close()
        if not affected:
            raise NotFoundError(f"{cls.label} not found")
        logger.info("Deleted %s %s", cls.table, item_id)

    @classmethod
    async def count(cls) -> int:
        conn = get_connection()
        try:
            return conn.execute(f"SELECT COUNT(*) FROM {cls.table}").fetchone()[0]
        finally:
            conn.close()

    @classmethod
    def _row_to_read(cls, row: sqlite3.Row) -> CatalogItemRead:
        return cls.read_model(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            createdAt=row["created_at"],
            updatedAt=row["updated_at"],
        )


class ServiceCatalog(CatalogService):
    table = "services"
    label = "Service"
    read_model = ServiceRead


class ServiceTypeCatalog(CatalogService):
    table = "service_types"
    label = "Service type"
    read_model = ServiceTypeRead
