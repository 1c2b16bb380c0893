"""
Public registration endpoints.

Attendees submit the registration form here and can later look up the
review status of their submission by email address.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from conference_api.app.api.errors import CLIENT_ERRORS, to_http_exception
from conference_api.app.core.deps import get_store
from conference_api.app.schemas.registration import RegistrationStatusRead, RegistrationSubmitted
from conference_api.app.services.registration_service import RegistrationService
from conference_api.app.storage.base import RecordStore

router = APIRouter()


@router.post("/register", response_model=RegistrationSubmitted, status_code=status.HTTP_201_CREATED)
async def submit_registration(
    payload: Any = Body(...),
    store: RecordStore = Depends(get_store),
) -> RegistrationSubmitted:
    """Submit a registration.

    Every invalid field is reported in a single 400 response.  An email
    address that is already registered (in any letter case) is
    rejected with 400 and nothing is stored.
    """
    try:
        record = await RegistrationService(store).submit(payload)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e
    return RegistrationSubmitted(message="Registration submitted successfully", registration_id=record["id"])


@router.get("/registration-status/{email}", response_model=RegistrationStatusRead)
async def registration_status(email: str, store: RecordStore = Depends(get_store)) -> dict:
    """Return the review status and submission time for an email address."""
    try:
        return await RegistrationService(store).find_by_email(email)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e
