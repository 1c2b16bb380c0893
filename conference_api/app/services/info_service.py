"""Static conference metadata served by ``GET /api/info``."""

import copy
from typing import Any, Dict

CONFERENCE_INFO: Dict[str, Any] = {
    "title": "Bacterial Pathogens and Host Cell Interactions",
    "date": "September 29 - October 3, 2025",
    "location": "ICISE, Quy Nhon, Vietnam",
    "description": (
        "This conference will bring together scientists specializing in various aspects of "
        "infection biology to explore the fundamental mechanisms of host-microbe interactions."
    ),
    "keyTopics": [
        "Cellular Microbiology of Intracellular Pathogens",
        "Host Responses and Intracellular Defense Mechanisms",
        "Microbiota in Health and Disease",
        "Bacterial Pathogenesis & Novel Treatment Strategies",
    ],
    "importantDates": {
        "registrationOpen": "2025-05-05",
        "earlyBirdDeadline": "2025-07-30",
        "conferenceStart": "2025-09-29",
        "conferenceEnd": "2025-10-03",
    },
    "contact": {
        "phone": "+84 2563 646 609",
        "email": "contact@icisequynhon.com",
        "address": "07 Science Avenue, Quy Nhon Nam, Gia Lai province, Vietnam",
    },
}


def get_conference_info() -> Dict[str, Any]:
    return copy.deepcopy(CONFERENCE_INFO)
