"""
Admin content management endpoints.

Administrators see every content block, including unpublished ones,
and can create, update and delete them.  Updates are partial: fields
absent from the body keep their stored values.  Deleting a block
removes it permanently.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from conference_api.app.api.errors import CLIENT_ERRORS, to_http_exception
from conference_api.app.core.deps import get_store
from conference_api.app.core.security import require_admin
from conference_api.app.schemas.content import ContentRead
from conference_api.app.services.content_service import ContentService
from conference_api.app.storage.base import RecordStore

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=List[ContentRead])
async def list_all_content(
    category: Optional[str] = Query(None),
    store: RecordStore = Depends(get_store),
) -> List[dict]:
    try:
        return await ContentService(store).list_all({"category": category})
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e


@router.post("", response_model=ContentRead, status_code=status.HTTP_201_CREATED)
async def create_content(payload: Any = Body(...), store: RecordStore = Depends(get_store)) -> dict:
    """Create a content block.  The ``key`` must not be in use."""
    try:
        return await ContentService(store).create(payload)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e


@router.put("/{content_id}", response_model=ContentRead)
async def update_content(
    content_id: str,
    payload: Any = Body(...),
    store: RecordStore = Depends(get_store),
) -> dict:
    try:
        return await ContentService(store).update(content_id, payload)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e


@router.delete("/{content_id}", response_model=Dict[str, str])
async def delete_content(content_id: str, store: RecordStore = Depends(get_store)) -> Dict[str, str]:
    try:
        await ContentService(store).delete(content_id)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e
    return {"message": "Content deleted successfully"}
