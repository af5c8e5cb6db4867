import unittest

from models.assignment import Assignment
from tests.utils.db import DatabaseTestCase


class AssignmentApiTestCase(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.coworker_id = self.seed_coworker("Alice", capacity=10)
        self.project_id = self.seed_project("Website")
        self.task_id = self.seed_task(self.project_id, "Landing page", estimated_hours=10)

    def _assign(self, hours, **extra):
        payload = {"coworkerId": self.coworker_id, "taskItemId": self.task_id, "hoursAssigned": hours}
        payload.update(extra)
        return self.client.post("/api/assignments", json=payload)

    def test_create_embeds_coworker_and_task(self):
        response = self._assign(6, note="Hero section", assignedBy="Dana")

        self.assertEqual(response.status_code, 201)
        body = response.get_json()
        self.assertEqual(body["coworkerId"], self.coworker_id)
        self.assertEqual(body["taskItemId"], self.task_id)
        self.assertEqual(body["hoursAssigned"], 6)
        self.assertEqual(body["note"], "Hero section")
        self.assertEqual(body["assignedBy"], "Dana")
        self.assertTrue(body["assignedDate"].endswith("Z"))
        self.assertEqual(body["coworker"]["name"], "Alice")
        self.assertEqual(body["taskItem"]["name"], "Landing page")
        self.assertNotIn("assignments", body["coworker"])
        self.assertNotIn("assignments", body["taskItem"])

    def test_list_and_get_embed_related_records(self):
        assignment_id = self.seed_assignment(self.coworker_id, self.task_id, 4)

        listed = self.client.get("/api/assignments").get_json()
        fetched = self.client.get(f"/api/assignments/{assignment_id}").get_json()

        self.assertEqual(len(listed), 1)
        self.assertEqual(listed[0], fetched)
        self.assertEqual(fetched["coworker"]["id"], self.coworker_id)
        self.assertEqual(fetched["taskItem"]["projectId"], self.project_id)

    def test_unknown_references_are_rejected(self):
        response = self.client.post(
            "/api/assignments", json={"coworkerId": 999, "taskItemId": 998, "hoursAssigned": 1}
        )

        self.assertEqual(response.status_code, 400)
        errors = response.get_json()["errors"]
        self.assertIn("coworkerId", errors)
        self.assertIn("taskItemId", errors)
        self.assertEqual(self.count(Assignment), 0)

    def test_references_beyond_integer_range_are_rejected(self):
        huge_id = 99999999999999999999999

        response = self.client.post(
            "/api/assignments",
            json={"coworkerId": huge_id, "taskItemId": huge_id, "hoursAssigned": 1},
        )

        self.assertEqual(response.status_code, 400)
        errors = response.get_json()["errors"]
        self.assertIn("coworkerId", errors)
        self.assertIn("taskItemId", errors)
        self.assertEqual(self.client.get(f"/api/assignments/{huge_id}").status_code, 404)

    def test_non_finite_hours_are_rejected_and_rollups_stay_finite(self):
        for value in ("Infinity", "NaN"):
            with self.subTest(value=value):
                response = self._assign(value)
                self.assertEqual(response.status_code, 400)
                self.assertIn("hoursAssigned", response.get_json()["errors"])

        utilization = self.client.get(f"/api/coworkers/{self.coworker_id}/utilization")
        self.assertEqual(utilization.status_code, 200)
        self.assertEqual(utilization.get_json()["assignedHours"], 0)
        self.assertEqual(self.count(Assignment), 0)

    def test_boolean_references_are_rejected(self):
        response = self.client.post(
            "/api/assignments", json={"coworkerId": True, "taskItemId": True, "hoursAssigned": 1}
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.count(Assignment), 0)

    def test_hours_are_not_checked_against_estimate_or_capacity(self):
        self.assertEqual(self._assign(9).status_code, 201)
        self.assertEqual(self._assign(6).status_code, 201)
        self.assertEqual(self._assign(-2).status_code, 201)

        self.assertEqual(self.count(Assignment), 3)

    def test_explicit_assigned_date_is_kept(self):
        response = self._assign(3, assignedDate="2026-02-01T09:30:00Z")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.get_json()["assignedDate"], "2026-02-01T09:30:00Z")

    def test_update_moves_assignment_and_keeps_assigned_date(self):
        other_coworker_id = self.seed_coworker("Bob")
        created = self._assign(3, assignedDate="2026-02-01T09:30:00Z").get_json()

        response = self.client.put(
            f"/api/assignments/{created['id']}",
            json={
                "coworkerId": other_coworker_id,
                "taskItemId": self.task_id,
                "hoursAssigned": 7,
                "assignedDate": "2030-01-01T00:00:00Z",
            },
        )

        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body["coworkerId"], other_coworker_id)
        self.assertEqual(body["coworker"]["name"], "Bob")
        self.assertEqual(body["hoursAssigned"], 7)
        self.assertEqual(body["assignedDate"], "2026-02-01T09:30:00Z")

    def test_delete_leaves_coworker_and_task(self):
        assignment_id = self.seed_assignment(self.coworker_id, self.task_id, 4)

        response = self.client.delete(f"/api/assignments/{assignment_id}")

        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.client.get(f"/api/assignments/{assignment_id}").status_code, 404)
        self.assertEqual(self.client.get(f"/api/coworkers/{self.coworker_id}").status_code, 200)
        self.assertEqual(self.client.get(f"/api/tasks/{self.task_id}").status_code, 200)

    def test_over_commitment_is_visible_in_rollups(self):
        self._assign(9)
        self._assign(6)

        utilization = self.client.get(f"/api/coworkers/{self.coworker_id}/utilization").get_json()
        rollup = self.client.get(f"/api/tasks/{self.task_id}/rollup").get_json()

        self.assertEqual(utilization["assignedHours"], 15)
        self.assertEqual(utilization["available"], -5)
        self.assertEqual(utilization["percentage"], 150)
        self.assertEqual(rollup["remaining"], 0)
        self.assertEqual(rollup["overAllocatedHours"], 5)

    def test_dashboard_combines_all_rollups(self):
        self._assign(4)

        response = self.client.get("/api/dashboard")

        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body["summary"]["coworkerCount"], 1)
        self.assertEqual(body["summary"]["totalAssigned"], 4)
        self.assertEqual(body["coworkers"][0]["coworker"]["name"], "Alice")
        self.assertEqual(body["coworkers"][0]["utilization"]["assignedHours"], 4)
        self.assertEqual(body["projects"][0]["rollup"]["taskCount"], 1)
        self.assertEqual(body["tasks"][0]["rollup"]["remaining"], 6)


if __name__ == "__main__":
    unittest.main()
