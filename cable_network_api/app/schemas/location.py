"""
Pydantic models for location data.

A location is a geo-tagged service record.  On input the client sends
flat ``latitude``/``longitude`` values and the ids of the referenced
service and service type; on output the coordinates are grouped under
``coordinates`` and the references are resolved into full catalog
objects.

Every input field is optional here: which fields are required (and
whether zero counts as present) differs between create and update,
so presence checks live in ``LocationService``.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .catalog import ServiceRead, ServiceTypeRead


class Coordinates(BaseModel):
    latitude: float = Field(..., example=10.5)
    longitude: float = Field(..., example=20.5)


class LocationPayload(BaseModel):
    """Request body for creating or updating a location."""

    serviceName: Optional[int] = Field(None, example=1, description="Id of the referenced service")
    serviceType: Optional[int] = Field(None, example=1, description="Id of the referenced service type")
    notes: Optional[str] = Field(None, example="Pole next to the gate")
    latitude: Optional[float] = Field(None, allow_inf_nan=False, example=10.5)
    longitude: Optional[float] = Field(None, allow_inf_nan=False, example=20.5)
    image: Optional[str] = Field(None, example="https://res.cloudinary.com/demo/image/upload/a.jpg")
    image2: Optional[str] = None


class LocationRead(BaseModel):
    """A location with its references resolved."""

    id: int
    serviceName: Optional[ServiceRead] = None
    serviceType: Optional[ServiceTypeRead] = None
    notes: Optional[str] = None
    coordinates: Coordinates
    image: Optional[str] = None
    image2: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class LocationStats(BaseModel):
    totalLocations: int
    totalServices: int
    totalServiceTypes: int
