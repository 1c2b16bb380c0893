"""
Business logic for content blocks.

Public reads only ever see published blocks.  Keys are unique across
all blocks; the check runs before every insert and before any update
that changes a key, for every storage backend.
"""

from typing import Any, Dict, List, Optional

from ..core.errors import DuplicateRecordError, RecordNotFoundError
from ..schemas.content import ContentCreate, ContentUpdate
from ..storage.base import Record
from .query import build_query
from .record_service import RecordService


class ContentService(RecordService):
    """Service for managing content blocks."""

    collection = "content"
    label = "Content"
    create_model = ContentCreate
    update_model = ContentUpdate

    def _before_write(self, document: Dict[str, Any], record_id: Optional[str] = None) -> None:
        key = document.get("key")
        if key is None:
            return
        existing = self.store.find_one(self.collection, {"key": key})
        if existing is not None and existing.get("id") != record_id:
            raise DuplicateRecordError(f"Content key '{key}' already exists")

    async def list_published(self, category: Optional[str] = None, key: Optional[str] = None) -> List[Record]:
        """Return published blocks, optionally filtered by category and key."""
        query = build_query(self.collection, {"category": category, "key": key}, public=True)
        return self.store.find(self.collection, query)

    async def get_published(self, key: str) -> Record:
        """Return the published block with ``key``.

        Unpublished blocks are reported as missing.
        """
        record = self.store.find_one(self.collection, {"key": key, "isPublished": True})
        if record is None:
            raise RecordNotFoundError("Content not found")
        return record
