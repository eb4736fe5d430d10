import logging
from datetime import timedelta

from portal.models import EntityKind
from portal.services.storage import Storage
from portal.utils.utils import today, utcnow

logger = logging.getLogger(__name__)


def seed_demo_data(storage: Storage) -> bool:
    """Populate demo content once; returns False when content already exists."""
    if storage.list(EntityKind.assignments):
        logger.info("Demo data already present, skipping seed")
        return False

    now = today()

    storage.create(EntityKind.assignments, {
        "title": "Database Normalization Exercise",
        "course": "Database Systems",
        "course_code": "CSE-301",
        "due_date": now + timedelta(days=7),
        "description": "Complete the database normalization exercises from chapter 4",
    })
    storage.create(EntityKind.assignments, {
        "title": "Network Security Protocol Analysis",
        "course": "Network Security",
        "course_code": "CSE-305",
        "due_date": now + timedelta(days=10),
        "description": "Analyze the security protocols discussed in class",
    })

    storage.create(EntityKind.resources, {
        "title": "Database Systems Concepts Ch.4-6",
        "course_code": "CSE-301",
        "category": "Textbooks",
        "file_type": "PDF",
        "file_size": "5.2 MB",
        "file_url": "/resources/db-concepts-ch4-6.pdf",
    })
    storage.create(EntityKind.resources, {
        "title": "Network Security Lecture Notes Week 8",
        "course_code": "CSE-305",
        "category": "Lecture Notes",
        "file_type": "DOC",
        "file_size": "1.8 MB",
        "file_url": "/resources/network-security-week8.doc",
    })

    storage.create(EntityKind.notices, {
        "title": "Lab Cancelled",
        "content": "The Database Systems lab scheduled this week has been cancelled.",
        "category": "Urgent",
        "expiry_date": utcnow() + timedelta(days=7),
    })
    storage.create(EntityKind.notices, {
        "title": "Holiday Announcement",
        "content": "The campus will be closed for the national holiday.",
        "category": "General",
        "expiry_date": utcnow() + timedelta(days=15),
    })

    storage.create(EntityKind.schedule, {
        "day": "Thursday",
        "start_time": "10:00",
        "end_time": "11:30",
        "course": "Database Systems",
        "course_code": "CSE-301",
        "room": "Lab 3",
        "building": "Block B",
        "class_type": "Lab",
        "status": "Cancelled",
    })
    storage.create(EntityKind.schedule, {
        "day": "Thursday",
        "start_time": "13:00",
        "end_time": "14:30",
        "course": "Network Security",
        "course_code": "CSE-305",
        "room": "Room 204",
        "building": "Block A",
        "class_type": "Lecture",
        "status": "Active",
    })

    storage.create(EntityKind.events, {
        "title": "Database Assignment Due",
        "date": now + timedelta(days=7),
        "category": "Assignment",
        "description": "Database Normalization Exercise due",
    })
    storage.create(EntityKind.events, {
        "title": "Database Systems Exam",
        "date": now + timedelta(days=9),
        "category": "Exam",
        "description": "Midterm exam covering chapters 1-6",
    })

    logger.info("Seeded demo data")
    return True
