import unittest
from datetime import timedelta

from portal.models import EntityKind
from portal.utils.utils import today, utcnow
from tests.helpers import ApiTestCase, assignment_payload, resource_payload


class AssignmentApiTest(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.admin_headers = self.auth_headers(self.admin)
        self.student_headers = self.auth_headers(self.alice)

    def create_assignment(self, **overrides):
        response = self.client.post("/api/assignments", json=assignment_payload(**overrides), headers=self.admin_headers)
        self.assertEqual(response.status_code, 201)
        return response.json()

    def test_admin_creates_and_student_reads(self):
        created = self.create_assignment()
        self.assertEqual(created["status"], "pending")
        self.assertEqual(created["posted_date"], today().isoformat())

        response = self.client.get(f"/api/assignments/{created['id']}", headers=self.student_headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), created)

    def test_list_filters_by_status_and_course(self):
        self.create_assignment(course_code="CSE-301")
        self.create_assignment(course_code="CSE-305")
        response = self.client.get("/api/assignments", params={"course_code": "CSE-305"}, headers=self.student_headers)
        self.assertEqual([item["course_code"] for item in response.json()], ["CSE-305"])
        response = self.client.get("/api/assignments", params={"status": "graded"}, headers=self.student_headers)
        self.assertEqual(response.json(), [])

    def test_invalid_filter_value_is_rejected(self):
        response = self.client.get("/api/assignments", params={"status": "lost"}, headers=self.student_headers)
        self.assertEqual(response.status_code, 400)

    def test_status_follows_allowed_transitions(self):
        created = self.create_assignment()
        url = f"/api/assignments/{created['id']}"
        self.assertEqual(self.client.put(url, json={"status": "submitted"}, headers=self.admin_headers).json()["status"],
                         "submitted")
        self.assertEqual(self.client.put(url, json={"status": "graded"}, headers=self.admin_headers).status_code, 200)

    def test_illegal_transition_is_rejected(self):
        created = self.create_assignment()
        response = self.client.put(f"/api/assignments/{created['id']}", json={"status": "graded"},
                                   headers=self.admin_headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Cannot move assignment from pending to graded")
        self.assertEqual(self.storage.get(EntityKind.assignments, created["id"]).status.value, "pending")

    def test_missing_fields_are_reported(self):
        response = self.client.post("/api/assignments", json={"title": "No course"}, headers=self.admin_headers)
        self.assertEqual(response.status_code, 400)
        fields = {error["loc"][-1] for error in response.json()["errors"]}
        self.assertTrue({"course", "course_code", "due_date"} <= fields)
        self.assertEqual(self.storage.list(EntityKind.assignments), [])

    def test_delete(self):
        created = self.create_assignment()
        url = f"/api/assignments/{created['id']}"
        response = self.client.delete(url, headers=self.admin_headers)
        self.assertEqual(response.status_code, 204)
        self.assertEqual(response.content, b"")
        self.assertEqual(self.client.get(url, headers=self.admin_headers).status_code, 404)
        self.assertEqual(self.client.delete(url, headers=self.admin_headers).status_code, 404)

    def test_missing_assignment(self):
        response = self.client.get("/api/assignments/999", headers=self.student_headers)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Assignment not found")
        response = self.client.put("/api/assignments/999", json={"title": "x"}, headers=self.admin_headers)
        self.assertEqual(response.status_code, 404)


class ResourceApiTest(ApiTestCase):

    def test_create_list_and_filter(self):
        admin = self.auth_headers(self.admin)
        self.client.post("/api/resources", json=resource_payload(), headers=admin)
        self.client.post("/api/resources", json=resource_payload(category="Lecture Notes", course_code="CSE-305"),
                         headers=admin)
        student = self.auth_headers(self.alice)
        all_resources = self.client.get("/api/resources", headers=student).json()
        self.assertEqual(len(all_resources), 2)
        textbooks = self.client.get("/api/resources", params={"category": "Textbooks"}, headers=student).json()
        self.assertEqual([item["category"] for item in textbooks], ["Textbooks"])

    def test_delete_missing_resource(self):
        response = self.client.delete("/api/resources/5", headers=self.auth_headers(self.admin))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Resource not found")


class NoticeApiTest(ApiTestCase):

    def test_active_filter_hides_expired_notices(self):
        now = utcnow()
        self.storage.create(EntityKind.notices, {
            "title": "Old", "content": "Gone", "category": "General", "expiry_date": now - timedelta(days=1),
        })
        self.storage.create(EntityKind.notices, {
            "title": "Current", "content": "Still on", "category": "General", "expiry_date": now + timedelta(days=1),
        })
        self.storage.create(EntityKind.notices, {"title": "Forever", "content": "No expiry", "category": "Urgent"})
        headers = self.auth_headers(self.alice)

        everything = self.client.get("/api/notices", headers=headers).json()
        self.assertEqual(len(everything), 3)
        active = self.client.get("/api/notices", params={"active": "true"}, headers=headers).json()
        self.assertEqual(sorted(item["title"] for item in active), ["Current", "Forever"])
        urgent = self.client.get("/api/notices", params={"category": "Urgent"}, headers=headers).json()
        self.assertEqual([item["title"] for item in urgent], ["Forever"])

    def test_update_notice(self):
        notice = self.storage.create(EntityKind.notices, {"title": "Lab", "content": "Moved", "category": "General"})
        response = self.client.put(f"/api/notices/{notice.id}", json={"category": "Urgent"},
                                   headers=self.auth_headers(self.admin))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["category"], "Urgent")
        self.assertEqual(response.json()["title"], "Lab")


class ScheduleApiTest(ApiTestCase):

    def schedule_item(self, **overrides):
        item = {
            "day": "Thursday", "start_time": "10:00", "end_time": "11:30",
            "course": "Database Systems", "course_code": "CSE-301", "room": "Lab 3", "class_type": "Lab",
        }
        item.update(overrides)
        return item

    def test_create_and_filter_by_day(self):
        admin = self.auth_headers(self.admin)
        self.assertEqual(self.client.post("/api/schedule", json=self.schedule_item(), headers=admin).status_code, 201)
        self.client.post("/api/schedule", json=self.schedule_item(day="Monday"), headers=admin)
        response = self.client.get("/api/schedule", params={"day": "Thursday"}, headers=self.auth_headers(self.alice))
        self.assertEqual([item["day"] for item in response.json()], ["Thursday"])
        self.assertEqual(response.json()[0]["status"], "Active")

    def test_times_are_validated(self):
        admin = self.auth_headers(self.admin)
        self.assertEqual(self.client.post("/api/schedule", json=self.schedule_item(start_time="25:00"),
                                          headers=admin).status_code, 400)
        self.assertEqual(self.client.post("/api/schedule", json=self.schedule_item(end_time="09:00"),
                                          headers=admin).status_code, 400)

    def test_cancel_class(self):
        admin = self.auth_headers(self.admin)
        created = self.client.post("/api/schedule", json=self.schedule_item(), headers=admin).json()
        response = self.client.put(f"/api/schedule/{created['id']}", json={"status": "Cancelled"}, headers=admin)
        self.assertEqual(response.json()["status"], "Cancelled")
        self.assertEqual(self.client.get("/api/schedule/77", headers=admin).json()["message"], "Schedule item not found")


class EventApiTest(ApiTestCase):

    def test_event_crud(self):
        admin = self.auth_headers(self.admin)
        event = {"title": "Database Systems Exam", "date": (today() + timedelta(days=9)).isoformat(),
                 "category": "Exam"}
        created = self.client.post("/api/events", json=event, headers=admin).json()
        response = self.client.put(f"/api/events/{created['id']}", json={"description": "Chapters 1-6"}, headers=admin)
        self.assertEqual(response.json()["description"], "Chapters 1-6")
        exams = self.client.get("/api/events", params={"category": "Exam"}, headers=self.auth_headers(self.alice))
        self.assertEqual(len(exams.json()), 1)
        self.assertEqual(self.client.delete(f"/api/events/{created['id']}", headers=admin).status_code, 204)


if __name__ == "__main__":
    unittest.main()
