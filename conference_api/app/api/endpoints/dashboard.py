"""
Admin dashboard endpoint.

Returns aggregate counts for the admin panel's landing page.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from conference_api.app.core.deps import get_store
from conference_api.app.core.security import require_admin
from conference_api.app.services.dashboard_service import DashboardService
from conference_api.app.storage.base import RecordStore

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def dashboard(
    store: RecordStore = Depends(get_store),
    current_user: dict = Depends(require_admin),
) -> Dict[str, Any]:
    return await DashboardService(store).overview()
