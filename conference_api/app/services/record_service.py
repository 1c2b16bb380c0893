"""
Shared CRUD logic for admin-managed collections.

``RecordService`` implements the list/get/create/update/delete cycle
once; ``ContentService`` and ``SpeakerService`` configure it with a
collection name and schemas and add their public read operations.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel

from ..core.errors import RecordNotFoundError
from ..storage.base import Record, RecordStore
from .query import build_query
from .validation import to_document, validate_patch, validate_payload

logger = logging.getLogger(__name__)


class RecordService:
    """Base class for services over one collection of the record store."""

    collection: str = ""
    label: str = "Record"
    create_model: Type[BaseModel] = BaseModel
    update_model: Type[BaseModel] = BaseModel

    def __init__(self, store: RecordStore):
        self.store = store

    def _not_found(self) -> RecordNotFoundError:
        return RecordNotFoundError(f"{self.label} not found")

    def _before_write(self, document: Dict[str, Any], record_id: Optional[str] = None) -> None:
        """Hook for uniqueness checks; ``record_id`` is set on updates."""

    async def list_all(self, filters: Optional[Mapping[str, Any]] = None) -> List[Record]:
        """Return every record, published or not, in display order."""
        return self.store.find(self.collection, build_query(self.collection, filters))

    async def get(self, record_id: str) -> Record:
        record = self.store.get(self.collection, record_id)
        if record is None:
            raise self._not_found()
        return record

    async def create(self, payload: Any) -> Record:
        """Validate ``payload`` and store it as a new record."""
        document = to_document(validate_payload(self.create_model, payload))
        self._before_write(document)
        record = self.store.insert(self.collection, document)
        logger.info("Created %s %s", self.collection, record["id"])
        return record

    async def update(self, record_id: str, payload: Any) -> Record:
        """Merge the validated fields of ``payload`` into an existing record.

        Raises ``RecordNotFoundError`` without writing anything when
        ``record_id`` is unknown.
        """
        patch = validate_patch(self.update_model, payload, self.create_model)
        if self.store.get(self.collection, record_id) is None:
            raise self._not_found()
        self._before_write(patch, record_id)
        record = self.store.update(self.collection, record_id, patch)
        if record is None:
            raise self._not_found()
        logger.info("Updated %s %s (%s)", self.collection, record_id, ", ".join(sorted(patch)) or "no fields")
        return record

    async def delete(self, record_id: str) -> None:
        if not self.store.delete(self.collection, record_id):
            raise self._not_found()
        logger.info("Deleted %s %s", self.collection, record_id)
