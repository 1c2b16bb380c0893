"""
FastAPI dependencies for process-scoped objects.

``create_app`` builds one ``Settings`` instance and one
``RecordStore`` per process and attaches them to ``app.state``.
Handlers receive them through these dependencies instead of
importing globals, which lets tests run several apps side by side
against temporary stores.
"""

from fastapi import Request

from .config import Settings
from ..storage.base import RecordStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> RecordStore:
    return request.app.state.store
