import unittest
from datetime import timedelta

from fastapi.testclient import TestClient

from portal.auth.auth_handler import create_session_token, get_password_hash
from portal.auth.sessions import MemorySessionDirectory
from portal.configs.settings import Settings
from portal.main import create_app
from portal.models import EntityKind, UserRole
from portal.services.memory_storage import MemStorage
from portal.utils.utils import today

PASSWORD = "password123"
_password_hash = None


def password_hash() -> str:
    # bcrypt is slow on purpose, hash the shared test password once
    global _password_hash
    if _password_hash is None:
        _password_hash = get_password_hash(PASSWORD)
    return _password_hash


def make_settings(**overrides) -> Settings:
    values = {
        "STORAGE_BACKEND": "memory",
        "SESSION_SECRET": "test-secret",
        "SEED_DEMO_DATA": False,
        "ALLOW_ADMIN_REGISTRATION": False,
    }
    values.update(overrides)
    return Settings(**values)


def add_user(storage, username, role=UserRole.student, **extra):
    return storage.create(EntityKind.users, {
        "username": username,
        "full_name": username.title(),
        "role": role,
        "password": password_hash(),
        **extra,
    })


def assignment_payload(**overrides) -> dict:
    payload = {
        "title": "Database Normalization Exercise",
        "course": "Database Systems",
        "course_code": "CSE-301",
        "due_date": (today() + timedelta(days=7)).isoformat(),
        "description": "Chapter 4 exercises",
    }
    payload.update(overrides)
    return payload


def resource_payload(**overrides) -> dict:
    payload = {
        "title": "Database Systems Concepts Ch.4-6",
        "course_code": "CSE-301",
        "category": "Textbooks",
        "file_type": "PDF",
        "file_size": "5.2 MB",
        "file_url": "/resources/db-concepts.pdf",
    }
    payload.update(overrides)
    return payload


class ApiTestCase(unittest.TestCase):
    """App on in-memory backends with one admin and two students."""

    def setUp(self):
        self.settings = make_settings()
        self.storage = MemStorage()
        self.sessions = MemorySessionDirectory(timedelta(hours=1))
        self.app = create_app(self.settings, storage=self.storage, sessions=self.sessions)
        self.client = TestClient(self.app)
        self.admin = add_user(self.storage, "admin", UserRole.admin)
        self.alice = add_user(self.storage, "alice")
        self.bob = add_user(self.storage, "bob")

    def auth_headers(self, user) -> dict:
        sid = self.sessions.create(user.id)
        token = create_session_token(sid, user.id, self.settings.SESSION_SECRET)
        return {"Authorization": f"Bearer {token}"}
