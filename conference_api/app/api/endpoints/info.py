"""
Conference information and health endpoints.

``/info`` returns the static conference metadata used by the site's
header, footer and page titles.  ``/health`` reports which storage
backend the process is running with.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from conference_api.app.core.config import Settings
from conference_api.app.core.deps import get_settings, get_store
from conference_api.app.services.info_service import get_conference_info
from conference_api.app.storage.base import RecordStore

router = APIRouter()


@router.get("/info", response_model=Dict[str, Any])
async def get_info() -> Dict[str, Any]:
    return get_conference_info()


@router.get("/health", response_model=Dict[str, Any])
async def health(
    store: RecordStore = Depends(get_store),
    app_settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    return {
        "service": app_settings.project_name,
        "version": app_settings.api_version,
        "storage": store.name,
        "status": "ok",
    }
