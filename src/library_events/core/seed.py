"""Sample records written on first start when storage holds nothing."""

from __future__ import annotations

from typing import Any, Dict, List

SAMPLE_EVENTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "Children's Storytime: Winter Tales",
        "library": "Central Library",
        "category": "Children's Storytime",
        "date": "2024-12-15",
        "attendees": {"adults": 8, "children": 25},
        "cost": 150,
        "fundingSource": "Library Budget",
        "description": "Winter themed stories for children aged 3-7",
    },
    {
        "id": 2,
        "title": "Author Talk: Local History",
        "library": "Westside Branch",
        "category": "Author Talk",
        "date": "2024-12-20",
        "attendees": {"adults": 45, "children": 0},
        "cost": 500,
        "fundingSource": "Donation",
        "description": "Meet local author discussing city heritage",
    },
    {
        "id": 3,
        "title": "Digital Literacy Workshop",
        "library": "Central Library",
        "category": "Computer Class",
        "date": "2025-01-10",
        "attendees": {"adults": 20, "children": 0},
        "cost": 200,
        "fundingSource": "Library Budget",
        "description": "Basic computer skills for seniors",
    },
    {
        "id": 4,
        "title": "Book Club: Modern Fiction",
        "library": "Eastside Branch",
        "category": "Book Club",
        "date": "2025-01-15",
        "attendees": {"adults": 15, "children": 0},
        "cost": 50,
        "fundingSource": "Other",
        "description": "Monthly book discussion group",
    },
    {
        "id": 5,
        "title": "Children's Art Workshop",
        "library": "Westside Branch",
        "category": "Workshop",
        "date": "2025-01-20",
        "attendees": {"adults": 5, "children": 18},
        "cost": 300,
        "fundingSource": "Donation",
        "description": "Creative arts for ages 8-12",
    },
]

SAMPLE_LIBRARIES: List[Dict[str, Any]] = [
    {"id": 1, "name": "Central Library", "location": "123 Main Street", "capacity": 200},
    {"id": 2, "name": "Westside Branch", "location": "456 West Avenue", "capacity": 100},
    {"id": 3, "name": "Eastside Branch", "location": "789 East Boulevard", "capacity": 80},
]
