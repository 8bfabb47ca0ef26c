"""
Pydantic models for administrators and authentication.

Only the public profile of an administrator (id, username, role and
GeoJSON) ever leaves the API; the password hash stays in the
database.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class AdminProfile(BaseModel):
    id: int
    username: str
    role: str
    geojson: Optional[Dict[str, Any]] = None


class LoginRequest(BaseModel):
    username: Optional[str] = Field(None, example="admin")
    password: Optional[str] = Field(None, example="admin123")


class LoginResponse(BaseModel):
    message: str
    token: str
    user: AdminProfile


class VerifyResponse(BaseModel):
    message: str
    user: Dict[str, Any]


class GeoJSONUpdate(BaseModel):
    """Body of ``PUT /admin/{admin_id}/geojson``.

    ``geojson`` is typed loosely so that a non-object value reaches the
    service layer and is rejected there with a 400.
    """

    geojson: Any = None


class GeoJSONUpdateResponse(BaseModel):
    message: str
    user: AdminProfile


class LocationDeleteResponse(BaseModel):
    message: str
    updatedUser: AdminProfile
