"""
Admin endpoints for editing the site's static pages.

Only the whitelisted page files can be read or written.  Saving a page
first copies the current version into the backup directory.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from conference_api.app.api.errors import CLIENT_ERRORS, to_http_exception
from conference_api.app.core.config import Settings, resolve_path
from conference_api.app.core.deps import get_settings
from conference_api.app.core.security import require_admin
from conference_api.app.services.page_service import PageService

router = APIRouter(dependencies=[Depends(require_admin)])


def get_page_service(app_settings: Settings = Depends(get_settings)) -> PageService:
    return PageService(resolve_path(app_settings.pages_dir), resolve_path(app_settings.backup_dir))


@router.get("/{filename}", response_model=Dict[str, Any])
async def read_page(filename: str, pages: PageService = Depends(get_page_service)) -> Dict[str, Any]:
    try:
        return await pages.read_page(filename)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e


@router.put("/{filename}", response_model=Dict[str, Any])
async def save_page(
    filename: str,
    payload: Any = Body(...),
    pages: PageService = Depends(get_page_service),
) -> Dict[str, Any]:
    """Overwrite a page with ``{"content": "..."}`` after backing it up."""
    content = payload.get("content") if isinstance(payload, dict) else None
    try:
        return await pages.save_page(filename, content)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e
