import unittest

from portal.models import EntityKind
from tests.helpers import ApiTestCase


class TodoApiTest(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.alice_headers = self.auth_headers(self.alice)
        self.bob_headers = self.auth_headers(self.bob)

    def test_todos_belong_to_their_creator(self):
        response = self.client.post("/api/todos", json={"text": "Buy milk"}, headers=self.alice_headers)
        self.assertEqual(response.status_code, 201)
        todo = response.json()
        self.assertEqual(todo["user_id"], self.alice.id)
        self.assertFalse(todo["completed"])

        self.assertEqual(len(self.client.get("/api/todos", headers=self.alice_headers).json()), 1)
        self.assertEqual(self.client.get("/api/todos", headers=self.bob_headers).json(), [])

    def test_owner_updates_and_deletes(self):
        todo = self.client.post("/api/todos", json={"text": "Read chapter 4"}, headers=self.alice_headers).json()
        response = self.client.put(f"/api/todos/{todo['id']}", json={"completed": True}, headers=self.alice_headers)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["completed"])
        self.assertEqual(response.json()["text"], "Read chapter 4")

        response = self.client.delete(f"/api/todos/{todo['id']}", headers=self.alice_headers)
        self.assertEqual(response.status_code, 204)
        self.assertIsNone(self.storage.get(EntityKind.todos, todo["id"]))

    def test_other_users_todo_is_forbidden_and_unchanged(self):
        todo = self.storage.create(EntityKind.todos, {"user_id": self.bob.id, "text": "Bob's task"})

        response = self.client.put(f"/api/todos/{todo.id}", json={"completed": True}, headers=self.alice_headers)
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "You do not own this todo")
        response = self.client.delete(f"/api/todos/{todo.id}", headers=self.alice_headers)
        self.assertEqual(response.status_code, 403)

        stored = self.storage.get(EntityKind.todos, todo.id)
        self.assertFalse(stored.completed)
        self.assertEqual(stored.text, "Bob's task")

    def test_owner_is_taken_from_the_session(self):
        response = self.client.post("/api/todos", json={"text": "Sneaky", "user_id": self.bob.id},
                                    headers=self.alice_headers)
        self.assertEqual(response.json()["user_id"], self.alice.id)

    def test_missing_todo(self):
        response = self.client.put("/api/todos/404", json={"text": "x"}, headers=self.alice_headers)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Todo not found")

    def test_empty_text_is_rejected(self):
        response = self.client.post("/api/todos", json={"text": ""}, headers=self.alice_headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.storage.list(EntityKind.todos), [])


if __name__ == "__main__":
    unittest.main()
