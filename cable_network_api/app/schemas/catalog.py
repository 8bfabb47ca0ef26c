"""
Pydantic models for services and service types.

Services and service types form the catalog that locations refer to.
Both carry a name and an optional description, so they share the
same base schemas.  Field names are camelCase on the wire to match
the front-end clients.
"""

from typing import Optional

from pydantic import BaseModel, Field


class CatalogItemCreate(BaseModel):
    """Schema for creating a service or a service type.

    ``name`` is optional at the schema level so that a missing name is
    reported by the service layer as a 400 with a readable message.
    """

    name: Optional[str] = Field(None, example="Fiber")
    description: Optional[str] = Field(None, example="Fiber optic connection")


class CatalogItemUpdate(BaseModel):
    """Schema for updating a catalog entry.  Only provided fields change."""

    name: Optional[str] = None
    description: Optional[str] = None


class CatalogItemRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class ServiceRead(CatalogItemRead):
    """Schema for reading a service."""


class ServiceTypeRead(CatalogItemRead):
    """Schema for reading a service type."""
