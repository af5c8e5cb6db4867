import unittest

from models.assignment import Assignment
from models.task import Task
from tests.utils.db import DatabaseTestCase


class TaskApiTestCase(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.project_id = self.seed_project("Website")

    def test_create_applies_defaults(self):
        response = self.client.post(
            "/api/tasks", json={"name": "Landing page", "projectId": self.project_id}
        )

        self.assertEqual(response.status_code, 201)
        body = response.get_json()
        self.assertEqual(body["projectId"], self.project_id)
        self.assertEqual(body["priority"], "Normal")
        self.assertEqual(body["status"], "Not started")
        self.assertEqual(body["estimatedHours"], 0)
        self.assertEqual(body["weeklyEffort"], 0)
        self.assertEqual(body["note"], "")
        self.assertIsNone(body["completed"])
        self.assertTrue(body["added"].endswith("Z"))

    def test_free_text_status_and_priority_are_stored(self):
        response = self.client.post(
            "/api/tasks",
            json={
                "name": "Research",
                "projectId": self.project_id,
                "priority": "Whenever",
                "status": "Blocked",
                "estimatedHours": 12.5,
            },
        )

        self.assertEqual(response.status_code, 201)
        body = response.get_json()
        self.assertEqual(body["priority"], "Whenever")
        self.assertEqual(body["status"], "Blocked")
        self.assertEqual(body["estimatedHours"], 12.5)

    def test_unknown_project_is_rejected(self):
        response = self.client.post("/api/tasks", json={"name": "Orphan", "projectId": 999})

        self.assertEqual(response.status_code, 400)
        self.assertIn("projectId", response.get_json()["errors"])
        self.assertEqual(self.count(Task), 0)

    def test_missing_project_is_rejected(self):
        response = self.client.post("/api/tasks", json={"name": "Orphan"})

        self.assertEqual(response.status_code, 400)
        self.assertIn("projectId", response.get_json()["errors"])

    def test_project_id_beyond_integer_range_is_rejected(self):
        response = self.client.post(
            "/api/tasks", json={"name": "Orphan", "projectId": 99999999999999999999999}
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("projectId", response.get_json()["errors"])
        self.assertEqual(self.count(Task), 0)

    def test_boolean_project_id_is_rejected(self):
        response = self.client.post("/api/tasks", json={"name": "Orphan", "projectId": True})

        self.assertEqual(response.status_code, 400)
        self.assertIn("projectId", response.get_json()["errors"])
        self.assertEqual(self.count(Task), 0)

    def test_non_finite_hours_are_rejected(self):
        for field in ("estimatedHours", "weeklyEffort"):
            with self.subTest(field=field):
                response = self.client.post(
                    "/api/tasks",
                    json={"name": "Ship", "projectId": self.project_id, field: "Infinity"},
                )
                self.assertEqual(response.status_code, 400)
                self.assertIn(field, response.get_json()["errors"])
        self.assertEqual(self.count(Task), 0)

    def test_invalid_completed_timestamp_is_rejected(self):
        response = self.client.post(
            "/api/tasks",
            json={"name": "Ship", "projectId": self.project_id, "completed": "yesterday"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("completed", response.get_json()["errors"])

    def test_completed_timestamp_is_normalized_to_utc(self):
        response = self.client.post(
            "/api/tasks",
            json={
                "name": "Ship",
                "projectId": self.project_id,
                "status": "Completed",
                "completed": "2026-03-01T12:00:00+02:00",
            },
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.get_json()["completed"], "2026-03-01T10:00:00Z")

    def test_update_moves_task_and_keeps_added(self):
        other_project_id = self.seed_project("Mobile")
        task_id = self.seed_task(self.project_id, "Landing page", estimated_hours=8)
        original = self.client.get(f"/api/tasks/{task_id}").get_json()

        response = self.client.put(
            f"/api/tasks/{task_id}",
            json={
                "name": "App screen",
                "projectId": other_project_id,
                "estimatedHours": 16,
                "status": "In progress",
                "added": "2000-01-01T00:00:00Z",
            },
        )

        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body["name"], "App screen")
        self.assertEqual(body["projectId"], other_project_id)
        self.assertEqual(body["estimatedHours"], 16)
        self.assertEqual(body["status"], "In progress")
        self.assertEqual(body["added"], original["added"])

    def test_update_replaces_omitted_fields_with_defaults(self):
        task_id = self.seed_task(
            self.project_id, priority="Critical", status="In progress", note="Blocked on design"
        )

        response = self.client.put(
            f"/api/tasks/{task_id}", json={"name": "Landing page", "projectId": self.project_id}
        )

        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body["priority"], "Normal")
        self.assertEqual(body["status"], "Not started")
        self.assertEqual(body["note"], "")
        self.assertEqual(body["estimatedHours"], 0)

    def test_update_to_unknown_project_is_rejected(self):
        task_id = self.seed_task(self.project_id)

        response = self.client.put(
            f"/api/tasks/{task_id}", json={"name": "Moved", "projectId": 999}
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            self.client.get(f"/api/tasks/{task_id}").get_json()["projectId"], self.project_id
        )

    def test_delete_cascades_to_assignments(self):
        coworker_id = self.seed_coworker()
        task_id = self.seed_task(self.project_id, "Landing page")
        kept_task_id = self.seed_task(self.project_id, "Footer")
        self.seed_assignment(coworker_id, task_id, 5)
        self.seed_assignment(coworker_id, task_id, 3)
        self.seed_assignment(coworker_id, kept_task_id, 2)

        response = self.client.delete(f"/api/tasks/{task_id}")

        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.count(Assignment), 1)
        self.assertEqual(self.client.get(f"/api/projects/{self.project_id}").status_code, 200)

    def test_rollup_clamps_remaining_and_reports_over_allocation(self):
        task_id = self.seed_task(self.project_id, estimated_hours=10)
        self.seed_assignment(self.seed_coworker("Alice"), task_id, 9)
        self.seed_assignment(self.seed_coworker("Bob"), task_id, 6)

        response = self.client.get(f"/api/tasks/{task_id}/rollup")

        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body["taskItemId"], task_id)
        self.assertEqual(body["totalAssigned"], 15)
        self.assertEqual(body["remaining"], 0)
        self.assertEqual(body["overAllocatedHours"], 5)
        self.assertEqual(body["assignmentCount"], 2)


if __name__ == "__main__":
    unittest.main()
