import unittest
from unittest.mock import patch

from portal.auth.auth_handler import create_session_token
from portal.models import EntityKind, UserRole
from tests.helpers import PASSWORD, ApiTestCase


class RegisterTest(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.entry = self.storage.create(EntityKind.student_ids, {
            "student_id": "2021-CSE-042", "section": "A", "department": "CSE", "year": 3, "semester": "Fall",
        })

    def register(self, **overrides):
        payload = {"username": "carol", "password": "secret123", "full_name": "Carol Jones",
                   "student_id": "2021-CSE-042"}
        payload.update(overrides)
        return self.client.post("/api/register", json=payload)

    def test_student_registration_claims_roster_entry(self):
        response = self.register()
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["user"]["username"], "carol")
        self.assertEqual(body["user"]["role"], "student")
        self.assertEqual(body["user"]["department"], "CSE")
        self.assertEqual(body["user"]["year"], 3)
        self.assertNotIn("password", body["user"])
        self.assertIn("portal.sid", response.cookies)

        entry = self.storage.get(EntityKind.student_ids, self.entry.id)
        self.assertTrue(entry.assigned)
        self.assertEqual(entry.user_id, body["user"]["id"])

    def test_registered_user_is_logged_in(self):
        token = self.register().json()["access_token"]
        response = self.client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["username"], "carol")

    def test_password_is_stored_hashed(self):
        self.register()
        user = self.storage.get_user_by_username("carol")
        self.assertNotEqual(user.password, "secret123")
        self.assertTrue(user.password.startswith("$2"))

    def test_student_id_is_required(self):
        response = self.register(student_id=None)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Student ID is required")

    def test_unknown_student_id_is_rejected(self):
        response = self.register(student_id="1999-XXX-000")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Invalid student ID")
        self.assertIsNone(self.storage.get_user_by_username("carol"))

    def test_student_id_can_be_claimed_once(self):
        self.assertEqual(self.register().status_code, 201)
        response = self.register(username="dave")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Student ID already registered")

    def test_roster_entry_claimed_after_lookup_is_not_shared(self):
        stale = self.storage.get(EntityKind.student_ids, self.entry.id)
        carol = self.register().json()["user"]
        # a second registration that read the entry before carol claimed it
        with patch("portal.services.user_service._claimable_student_id", return_value=stale):
            response = self.register(username="dave")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Student ID already registered")
        self.assertIsNone(self.storage.get_user_by_username("dave"))
        self.assertEqual(self.storage.get(EntityKind.student_ids, self.entry.id).user_id, carol["id"])

    def test_failed_user_create_releases_roster_claim(self):
        # username taken between the early check and the insert
        with patch.object(self.storage, "get_user_by_username", return_value=None):
            response = self.register(username="alice")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Username already exists")
        self.assertFalse(self.storage.get(EntityKind.student_ids, self.entry.id).assigned)
        self.assertEqual(self.register().status_code, 201)

    def test_duplicate_username_is_rejected(self):
        response = self.register(username="alice")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Username already exists")
        self.assertFalse(self.storage.get(EntityKind.student_ids, self.entry.id).assigned)

    def test_short_password_is_rejected_with_details(self):
        response = self.register(password="abc")
        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.json()["errors"])

    def test_admin_registration_is_disabled_by_default(self):
        response = self.register(username="root", role="admin", student_id=None)
        self.assertEqual(response.status_code, 403)
        self.assertIsNone(self.storage.get_user_by_username("root"))

    def test_admin_registration_when_enabled(self):
        self.app.state.settings = self.settings.model_copy(update={"ALLOW_ADMIN_REGISTRATION": True})
        response = self.register(username="root", role="admin", student_id=None)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["user"]["role"], "admin")


class LoginTest(ApiTestCase):

    def login(self, username="alice", password=PASSWORD):
        return self.client.post("/api/login", json={"username": username, "password": password})

    def test_login_returns_token_and_cookie(self):
        response = self.login()
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["token_type"], "bearer")
        self.assertEqual(body["user"]["id"], self.alice.id)
        self.assertEqual(response.cookies["portal.sid"], body["access_token"])

    def test_wrong_password(self):
        response = self.login(password="wrong-password")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Invalid username or password")

    def test_unknown_user(self):
        self.assertEqual(self.login(username="nobody").status_code, 401)

    def test_logout_revokes_only_current_session(self):
        first = self.login().json()["access_token"]
        second = self.login().json()["access_token"]
        self.client.cookies.clear()

        response = self.client.post("/api/logout", headers={"Authorization": f"Bearer {first}"})
        self.assertEqual(response.status_code, 204)
        self.assertEqual(response.content, b"")

        self.assertEqual(self.client.get("/api/user", headers={"Authorization": f"Bearer {first}"}).status_code, 401)
        self.assertEqual(self.client.get("/api/user", headers={"Authorization": f"Bearer {second}"}).status_code, 200)

    def test_session_cookie_authenticates(self):
        self.login()
        response = self.client.get("/api/user")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["username"], "alice")

    def test_no_credentials(self):
        response = self.client.get("/api/user")
        self.assertEqual(response.status_code, 401)
        self.assertIn("message", response.json())

    def test_tampered_token_is_rejected(self):
        sid = self.sessions.create(self.alice.id)
        forged = create_session_token(sid, self.alice.id, "another-secret")
        response = self.client.get("/api/user", headers={"Authorization": f"Bearer {forged}"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Invalid session")

    def test_token_for_unknown_session_is_rejected(self):
        token = create_session_token("never-issued", self.alice.id, self.settings.SESSION_SECRET)
        response = self.client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Session expired")

    def test_session_of_deleted_user_is_rejected(self):
        headers = self.auth_headers(self.bob)
        self.storage.delete(EntityKind.users, self.bob.id)
        self.assertEqual(self.client.get("/api/user", headers=headers).status_code, 401)
        self.assertEqual(len(self.sessions), 0)

    def test_current_user_reports_role(self):
        response = self.client.get("/api/user", headers=self.auth_headers(self.admin))
        self.assertEqual(response.json()["role"], UserRole.admin.value)


if __name__ == "__main__":
    unittest.main()
