"""Health check endpoint; no authentication required."""

from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter

from cable_network_api.app.core.config import settings

router = APIRouter()


@router.get("", response_model=Dict[str, str])
async def health() -> Dict[str, str]:
    return {
        "message": f"{settings.project_name} is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
