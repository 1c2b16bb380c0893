"""
Admin registration endpoints.

Registrations are listed newest first, optionally filtered by workflow
status, and paginated.  Reviewing a registration changes its status
and may record payment details and notes at the same time.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query

from conference_api.app.api.errors import CLIENT_ERRORS, to_http_exception
from conference_api.app.core.deps import get_store
from conference_api.app.core.security import require_admin
from conference_api.app.schemas.registration import RegistrationPage, RegistrationRead
from conference_api.app.services.registration_service import RegistrationService
from conference_api.app.storage.base import RecordStore

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=RegistrationPage)
async def list_registrations(
    status: Optional[str] = Query(None, description="pending, approved, rejected, cancelled or all"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
    store: RecordStore = Depends(get_store),
) -> RegistrationPage:
    try:
        result = await RegistrationService(store).list_registrations(status=status, page=page, limit=limit)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e
    return RegistrationPage(
        registrations=[RegistrationRead.model_validate(item) for item in result.items],
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )


@router.get("/{registration_id}", response_model=RegistrationRead)
async def get_registration(registration_id: str, store: RecordStore = Depends(get_store)) -> dict:
    try:
        return await RegistrationService(store).get(registration_id)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e


@router.put("/{registration_id}/status", response_model=RegistrationRead)
async def update_registration_status(
    registration_id: str,
    payload: Any = Body(...),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Set a registration's workflow ``status`` (and optionally payment details)."""
    try:
        return await RegistrationService(store).review(registration_id, payload)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e
