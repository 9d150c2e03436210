"""Greeting endpoint used as a liveness check."""

from typing import Dict

from fastapi import APIRouter

from user_manager_api.app.core.config import settings

router = APIRouter()


@router.get("/")
async def home() -> Dict[str, str]:
    """Return a greeting; has no side effects."""
    return {"message": f"Hello from the {settings.project_name}"}
