"""
Public content endpoints.

Only published content blocks are visible here, whatever filters the
client sends.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from conference_api.app.api.errors import CLIENT_ERRORS, to_http_exception
from conference_api.app.core.deps import get_store
from conference_api.app.schemas.content import ContentRead
from conference_api.app.services.content_service import ContentService
from conference_api.app.storage.base import RecordStore

router = APIRouter()


@router.get("", response_model=List[ContentRead])
async def list_content(
    category: Optional[str] = Query(None),
    key: Optional[str] = Query(None),
    store: RecordStore = Depends(get_store),
) -> List[dict]:
    """List published content blocks ordered by ``order``.

    - **category** - restrict to one page section (`home`, `venue`, ...).
    - **key** - restrict to a single block key.
    """
    try:
        return await ContentService(store).list_published(category=category, key=key)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e


@router.get("/{key}", response_model=ContentRead)
async def get_content(key: str, store: RecordStore = Depends(get_store)) -> dict:
    """Return a single published content block by its key.  404 if missing or unpublished."""
    try:
        return await ContentService(store).get_published(key)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e
