"""
Service layer for the admin dashboard.

Provides aggregate counts across content, speakers and registrations.
All queries are read-only ``count`` calls, so they are evaluated by
the database engine where the backend has one.
"""

from typing import Any, Dict

from ..storage.base import RecordStore


class DashboardService:
    """Service providing aggregated statistics for administrators."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def overview(self) -> Dict[str, Any]:
        """Return registration, speaker and content totals.

        ``abstractSubmissions`` counts registrations that submitted an
        abstract; ``publishedSpeakers`` excludes hidden profiles.
        """
        count = self.store.count
        return {
            "totalRegistrations": count("registrations"),
            "pendingRegistrations": count("registrations", {"status": "pending"}),
            "approvedRegistrations": count("registrations", {"status": "approved"}),
            "abstractSubmissions": count("registrations", {"abstractSubmission": True}),
            "publishedSpeakers": count("speakers", {"isPublished": True}),
            "contentItems": count("content"),
        }
