"""
Authentication endpoints for API v1.

``POST /auth/login`` exchanges administrator credentials for a bearer
token; ``GET /auth/verify`` lets a client check that its token is
still accepted and returns the decoded claims.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from cable_network_api.app.core.security import get_current_admin
from cable_network_api.app.schemas.admin import LoginRequest, LoginResponse, VerifyResponse
from cable_network_api.app.services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(credentials: LoginRequest) -> LoginResponse:
    return await AuthService.login(credentials.username, credentials.password)


@router.get("/verify", response_model=VerifyResponse)
async def verify(current_admin: Dict[str, Any] = Depends(get_current_admin)) -> VerifyResponse:
    return VerifyResponse(message="Token is valid", user=current_admin)
