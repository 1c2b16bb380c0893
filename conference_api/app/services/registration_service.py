"""
Business logic for attendee registrations.

Submissions are validated in full before anything is written; a
submission whose normalised email is already registered is rejected
whatever the status of the earlier registration.  Organisers review
registrations by changing their workflow ``status`` and payment
details.
"""

import logging
from typing import Any, Optional, get_args

from ..core.errors import DuplicateRecordError, RecordNotFoundError, RecordValidationError
from ..schemas.common import normalize_email
from ..schemas.registration import RegistrationCreate, RegistrationRead, RegistrationReview, RegistrationStatus
from ..storage.base import Record, RecordStore, utc_now
from .query import DEFAULT_LIMIT, DEFAULT_PAGE, Page, build_filters, paginate
from .validation import to_document, validate_patch, validate_payload

logger = logging.getLogger(__name__)

COLLECTION = "registrations"


class RegistrationService:
    """Service for submitting, looking up and reviewing registrations."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def submit(self, payload: Any) -> Record:
        """Validate and store a public registration.

        The stored record always starts in the ``pending`` workflow and
        payment states with ``submittedAt`` set to the current time.

        Raises
        ------
        RecordValidationError
            If any field is missing or invalid.
        DuplicateRecordError
            If the email address is already registered.
        """
        document = to_document(validate_payload(RegistrationCreate, payload))
        if self.store.find_one_ignore_case(COLLECTION, "email", document["email"]) is not None:
            logger.info("Rejected duplicate registration for %s", document["email"])
            raise DuplicateRecordError("Email already registered")
        document.update(
            status="pending",
            paymentStatus="pending",
            registrationFee=0,
            notes=None,
            submittedAt=utc_now(),
        )
        record = self.store.insert(COLLECTION, document)
        logger.info("Registration %s submitted (%s)", record["id"], record["registrationType"])
        return record

    async def find_by_email(self, email: str) -> Record:
        """Return the registration for ``email`` (case-insensitive)."""
        normalized = normalize_email(email)
        record = self.store.find_one_ignore_case(COLLECTION, "email", normalized) if normalized else None
        if record is None:
            raise RecordNotFoundError("Registration not found")
        return record

    async def list_registrations(
        self,
        status: Optional[str] = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> Page:
        """Return one page of registrations, newest first.

        ``status`` of ``None``, ``""`` or ``"all"`` disables the status filter.
        """
        if status == "all":
            status = None
        if status and status not in get_args(RegistrationStatus):
            raise RecordValidationError([{"field": "status", "message": "Invalid status"}])
        filters = build_filters(COLLECTION, {"status": status})
        return paginate(self.store, COLLECTION, filters, page=page, limit=limit)

    async def get(self, registration_id: str) -> Record:
        record = self.store.get(COLLECTION, registration_id)
        if record is None:
            raise RecordNotFoundError("Registration not found")
        return record

    async def review(self, registration_id: str, payload: Any) -> Record:
        """Apply an organiser's decision (status, payment, notes) to a registration.

        Only the fields present in ``payload`` change; ``notes`` may be
        cleared with ``null``.
        """
        changes = validate_patch(RegistrationReview, payload, RegistrationRead)
        record = self.store.update(COLLECTION, registration_id, changes)
        if record is None:
            raise RecordNotFoundError("Registration not found")
        logger.info("Registration %s set to %s", registration_id, record["status"])
        return record
