"""
Business logic for speaker profiles.

Public listings are restricted to published speakers and ordered by
``order`` then ``name``.
"""

from typing import List, Optional

from ..schemas.speaker import SpeakerCreate, SpeakerUpdate
from ..storage.base import Record
from .query import build_query
from .record_service import RecordService


class SpeakerService(RecordService):
    """Service for managing speaker profiles."""

    collection = "speakers"
    label = "Speaker"
    create_model = SpeakerCreate
    update_model = SpeakerUpdate

    async def list_published(self, talk_type: Optional[str] = None) -> List[Record]:
        """Return published speakers, optionally only those giving ``talk_type`` talks."""
        query = build_query(self.collection, {"talkType": talk_type}, public=True)
        return self.store.find(self.collection, query)

    async def list_keynotes(self) -> List[Record]:
        query = build_query(self.collection, {"isKeynote": True}, public=True)
        return self.store.find(self.collection, query)
