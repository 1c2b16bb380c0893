"""
Top‑level API router.

This router aggregates the domain routers.  Public routes sit at the
root of the ``/api`` prefix; every admin route lives under ``/admin``
and is protected by the ``require_admin`` dependency inside its own
module.
"""

from fastapi import APIRouter

from .endpoints import (
    admin_content,
    admin_pages,
    admin_registrations,
    admin_speakers,
    auth,
    content,
    dashboard,
    info,
    registrations,
    speakers,
)

router = APIRouter()

router.include_router(content.router, prefix="/content", tags=["content"])
router.include_router(speakers.router, prefix="/speakers", tags=["speakers"])
# Registration routes define their own paths (/register, /registration-status).
router.include_router(registrations.router, tags=["registrations"])
router.include_router(info.router, tags=["info"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])

router.include_router(dashboard.router, prefix="/admin/dashboard", tags=["admin"])
router.include_router(admin_content.router, prefix="/admin/content", tags=["admin"])
router.include_router(admin_speakers.router, prefix="/admin/speakers", tags=["admin"])
router.include_router(admin_registrations.router, prefix="/admin/registrations", tags=["admin"])
router.include_router(admin_pages.router, prefix="/admin/pages", tags=["admin"])
