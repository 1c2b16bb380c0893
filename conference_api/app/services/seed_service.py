"""
Sample data for a fresh installation.

``seed_sample_data`` fills the ``speakers`` and ``content`` collections
with a starter set when they are empty, so the public pages render
something before organisers have entered real data.  Collections that
already hold records are left alone.
"""

import logging
from typing import Dict

from ..storage.base import RecordStore
from .content_service import ContentService
from .speaker_service import SpeakerService

logger = logging.getLogger(__name__)

SAMPLE_SPEAKERS = [
    {
        "name": "Dr. Sarah Johnson",
        "title": "Professor of Microbiology",
        "affiliation": "Harvard Medical School",
        "bio": "Dr. Johnson is a leading researcher in bacterial pathogenesis with over 20 years of experience.",
        "email": "sarah.johnson@harvard.edu",
        "talkTitle": "Host-Pathogen Interactions in Bacterial Infections",
        "talkType": "keynote",
        "isKeynote": True,
        "isPublished": True,
        "order": 1,
    },
    {
        "name": "Prof. Michael Chen",
        "title": "Director of Infectious Disease Research",
        "affiliation": "Stanford University",
        "bio": "Prof. Chen specializes in antimicrobial resistance and novel therapeutic approaches.",
        "email": "mchen@stanford.edu",
        "talkTitle": "Novel Therapeutic Strategies Against Bacterial Pathogens",
        "talkType": "plenary",
        "isKeynote": False,
        "isPublished": True,
        "order": 2,
    },
]

SAMPLE_CONTENT = [
    {
        "key": "conference-overview",
        "title": "Conference Overview",
        "content": "This conference brings together leading scientists in bacterial pathogenesis research.",
        "type": "html",
        "category": "home",
        "order": 1,
    },
    {
        "key": "key-topics",
        "title": "Key Topics",
        "content": (
            "<ul><li>Cellular Microbiology of Intracellular Pathogens</li>"
            "<li>Host Responses and Defense Mechanisms</li>"
            "<li>Microbiota in Health and Disease</li>"
            "<li>Novel Treatment Strategies</li></ul>"
        ),
        "type": "html",
        "category": "home",
        "order": 2,
    },
    {
        "key": "committee-chair",
        "title": "Conference Chair Information",
        "content": (
            "<h4>Prof. Jean Tran Thanh Van</h4><p>Founder, Rencontres du Vietnam</p>"
            "<p>International Centre for Interdisciplinary Science and Education (ICISE)</p>"
        ),
        "type": "html",
        "category": "committee",
        "order": 1,
    },
    {
        "key": "venue-description",
        "title": "Venue Description",
        "content": (
            "<p>ICISE provides an inspiring environment for scientific collaboration and discovery. "
            "Located in the beautiful coastal city of Quy Nhon, Central Vietnam.</p>"
        ),
        "type": "html",
        "category": "venue",
        "order": 1,
    },
    {
        "key": "registration-info",
        "title": "Registration Information",
        "content": (
            "<p>Registration includes access to all sessions, meals, and conference materials. "
            "Early bird rates available until July 30, 2025.</p>"
        ),
        "type": "html",
        "category": "registration",
        "order": 1,
    },
]


async def seed_sample_data(store: RecordStore) -> Dict[str, int]:
    """Insert the sample speakers and content into empty collections.

    Returns the number of records inserted per collection.
    """
    inserted = {"speakers": 0, "content": 0}
    for service, samples in ((SpeakerService(store), SAMPLE_SPEAKERS), (ContentService(store), SAMPLE_CONTENT)):
        if store.count(service.collection) > 0:
            continue
        for sample in samples:
            await service.create(sample)
        inserted[service.collection] = len(samples)
        logger.info("Seeded %d sample %s records", len(samples), service.collection)
    return inserted
