"""
Admin speaker management endpoints.

Same CRUD surface as the content endpoints; unpublished profiles are
included in the listing.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status

from conference_api.app.api.errors import CLIENT_ERRORS, to_http_exception
from conference_api.app.core.deps import get_store
from conference_api.app.core.security import require_admin
from conference_api.app.schemas.speaker import SpeakerRead
from conference_api.app.services.speaker_service import SpeakerService
from conference_api.app.storage.base import RecordStore

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=List[SpeakerRead])
async def list_all_speakers(store: RecordStore = Depends(get_store)) -> List[dict]:
    return await SpeakerService(store).list_all()


@router.post("", response_model=SpeakerRead, status_code=status.HTTP_201_CREATED)
async def create_speaker(payload: Any = Body(...), store: RecordStore = Depends(get_store)) -> dict:
    try:
        return await SpeakerService(store).create(payload)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e


@router.put("/{speaker_id}", response_model=SpeakerRead)
async def update_speaker(
    speaker_id: str,
    payload: Any = Body(...),
    store: RecordStore = Depends(get_store),
) -> dict:
    try:
        return await SpeakerService(store).update(speaker_id, payload)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e


@router.delete("/{speaker_id}", response_model=Dict[str, str])
async def delete_speaker(speaker_id: str, store: RecordStore = Depends(get_store)) -> Dict[str, str]:
    try:
        await SpeakerService(store).delete(speaker_id)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e
    return {"message": "Speaker deleted successfully"}
