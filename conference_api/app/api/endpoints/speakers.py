"""
Public speaker endpoints.

Only published speaker profiles are returned, ordered by ``order``
then ``name``.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from conference_api.app.api.errors import CLIENT_ERRORS, to_http_exception
from conference_api.app.core.deps import get_store
from conference_api.app.schemas.speaker import SpeakerRead
from conference_api.app.services.speaker_service import SpeakerService
from conference_api.app.storage.base import RecordStore

router = APIRouter()


@router.get("", response_model=List[SpeakerRead])
async def list_speakers(
    type: Optional[str] = Query(None, description="Talk type: keynote, plenary, invited or contributed"),
    store: RecordStore = Depends(get_store),
) -> List[dict]:
    try:
        return await SpeakerService(store).list_published(talk_type=type)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e


@router.get("/keynotes", response_model=List[SpeakerRead])
async def list_keynote_speakers(store: RecordStore = Depends(get_store)) -> List[dict]:
    """Return published keynote speakers."""
    return await SpeakerService(store).list_keynotes()
