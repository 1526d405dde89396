"""API tests for /complaints: role-scoped access, ownership, validation and notifications."""

import unittest

from complaintdesk.core.config import settings
from complaintdesk.core.security import create_access_token
from support import OPERATOR_EMAIL, ApiTestCase, complaint_fields


class TestComplaintsApi(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user_a, self.a_id = self.signup("User A", "a@example.com")
        self.user_b, self.b_id = self.signup("User B", "b@example.com")
        self.admin, self.admin_id = self.signup("Admin", "admin@example.com", role="admin")

    def _create(self, client=None, **kwargs: object) -> dict:
        resp = (client or self.user_a).post("/api/complaints", json=complaint_fields(**kwargs))
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def test_lost_bag_scenario(self) -> None:
        created = self._create()
        self.assertEqual(created["status"], "Pending")
        self.assertEqual(created["owner"], self.a_id)
        self.assertEqual(self.subjects(), ["New Complaint Submitted"])

        resp = self.admin.put(f"/api/complaints/{created['id']}", json={"status": "Resolved"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "Resolved")
        self.assertEqual(self.subjects(), ["New Complaint Submitted", "Complaint Status Updated"])
        status_mail = self.mailer.sent[1]
        self.assertEqual(status_mail["to"], OPERATOR_EMAIL)
        self.assertIn("Old Status: Pending", status_mail["text"])
        self.assertIn("New Status: Resolved", status_mail["text"])

        resp = self.user_b.delete(f"/api/complaints/{created['id']}")
        self.assertEqual(resp.status_code, 403)

    def test_owner_in_body_is_ignored(self) -> None:
        created = self._create(owner=self.b_id, owner_id=self.b_id, status="Resolved")
        self.assertEqual(created["owner"], self.a_id)
        self.assertEqual(created["status"], "Pending")

    def test_user_lists_only_own_admin_lists_all(self) -> None:
        mine = self._create(title="Mine")
        theirs = self._create(client=self.user_b, title="Theirs")

        a_list = self.user_a.get("/api/complaints").json()["complaints"]
        self.assertEqual([c["id"] for c in a_list], [mine["id"]])
        self.assertIsNone(a_list[0]["owner_info"])

        admin_list = self.admin.get("/api/complaints").json()["complaints"]
        self.assertEqual({c["id"] for c in admin_list}, {mine["id"], theirs["id"]})
        owners = {c["id"]: c["owner_info"]["email"] for c in admin_list}
        self.assertEqual(owners[theirs["id"]], "b@example.com")

    def test_unauthenticated_requests_are_401(self) -> None:
        anon = self.new_client()
        self.assertEqual(anon.get("/api/complaints").status_code, 401)
        self.assertEqual(anon.post("/api/complaints", json=complaint_fields()).status_code, 401)
        self.assertEqual(anon.put("/api/complaints/1", json={"status": "Resolved"}).status_code, 401)
        self.assertEqual(anon.delete("/api/complaints/1").status_code, 401)

    def test_token_with_unknown_role_is_401(self) -> None:
        client = self.new_client()
        client.cookies.set(settings.SESSION_COOKIE_NAME, create_access_token(sub=self.a_id, role="root"))
        self.assertEqual(client.get("/api/complaints").status_code, 401)

    def test_validation_errors_name_fields(self) -> None:
        resp = self.user_a.post(
            "/api/complaints", json=complaint_fields(description="Too short")
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual([e["field"] for e in resp.json()["errors"]], ["description"])

        resp = self.user_a.post("/api/complaints", json=complaint_fields(title="x" * 101))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual([e["field"] for e in resp.json()["errors"]], ["title"])

        resp = self.user_a.post(
            "/api/complaints",
            json=complaint_fields(title="", category="Billing", priority="Urgent"),
        )
        self.assertEqual(
            sorted(e["field"] for e in resp.json()["errors"]), ["category", "priority", "title"]
        )
        self.assertEqual(self.mailer.sent, [])

    def test_missing_fields_are_400(self) -> None:
        resp = self.user_a.post("/api/complaints", json={"title": "Only a title"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(
            sorted(e["field"] for e in resp.json()["errors"]),
            ["category", "description", "priority"],
        )

    def test_missing_field_reported_with_length_error(self) -> None:
        body = complaint_fields(description="short")
        del body["title"]
        resp = self.user_a.post("/api/complaints", json=body)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(sorted(e["field"] for e in resp.json()["errors"]), ["description", "title"])

    def test_mistyped_field_reported_with_enum_error(self) -> None:
        resp = self.user_a.post(
            "/api/complaints", json=complaint_fields(title=123, category="Billing")
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(sorted(e["field"] for e in resp.json()["errors"]), ["category", "title"])

    def test_update_reports_every_invalid_field(self) -> None:
        created = self._create()
        url = f"/api/complaints/{created['id']}"
        resp = self.admin.put(url, json={"title": 123, "status": "Bogus"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(sorted(e["field"] for e in resp.json()["errors"]), ["status", "title"])
        self.assertEqual(self.admin.get(url).json()["status"], "Pending")

    def test_non_owner_update_forbidden_admin_succeeds(self) -> None:
        created = self._create()
        url = f"/api/complaints/{created['id']}"
        self.assertEqual(self.user_b.put(url, json={"priority": "Low"}).status_code, 403)
        self.assertEqual(self.user_b.get(url).status_code, 403)
        resp = self.admin.put(url, json={"priority": "Low"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["priority"], "Low")

    def test_owner_can_edit_and_status_change_does_not_notify(self) -> None:
        created = self._create()
        resp = self.user_a.put(
            f"/api/complaints/{created['id']}",
            json={"status": "Resolved", "description": "Found it at the lost and found desk."},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "Resolved")
        self.assertEqual(self.subjects(), ["New Complaint Submitted"])

    def test_user_cannot_set_admin_notes(self) -> None:
        created = self._create()
        url = f"/api/complaints/{created['id']}"
        self.assertEqual(self.user_a.put(url, json={"admin_notes": "approve me"}).status_code, 403)
        resp = self.admin.put(url, json={"admin_notes": "Courier contacted"})
        self.assertEqual(resp.json()["admin_notes"], "Courier contacted")

    def test_update_and_delete_missing_id_is_404(self) -> None:
        self.assertEqual(self.admin.put("/api/complaints/999", json={"status": "Resolved"}).status_code, 404)
        self.assertEqual(self.user_b.put("/api/complaints/999", json={"status": "Resolved"}).status_code, 404)
        self.assertEqual(self.user_b.delete("/api/complaints/999").status_code, 404)

    def test_invalid_update_is_400_and_unchanged(self) -> None:
        created = self._create()
        url = f"/api/complaints/{created['id']}"
        resp = self.admin.put(url, json={"status": "Closed"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["errors"][0]["field"], "status")
        self.assertEqual(self.admin.get(url).json()["status"], "Pending")

    def test_repeated_identical_update_yields_same_record(self) -> None:
        created = self._create()
        url = f"/api/complaints/{created['id']}"
        payload = {"status": "In Progress", "priority": "Medium"}
        first = self.admin.put(url, json=payload).json()
        second = self.admin.put(url, json=payload).json()
        keys = ("id", "title", "description", "category", "priority", "status", "owner")
        self.assertEqual({k: first[k] for k in keys}, {k: second[k] for k in keys})
        self.assertEqual(self.subjects().count("Complaint Status Updated"), 1)

    def test_delete_by_owner_then_again_is_404(self) -> None:
        created = self._create()
        url = f"/api/complaints/{created['id']}"
        resp = self.user_a.delete(url)
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["success"])
        self.assertEqual(self.user_a.delete(url).status_code, 404)
        self.assertEqual(self.subjects(), ["New Complaint Submitted"])

    def test_admin_can_delete_any(self) -> None:
        created = self._create()
        self.assertEqual(self.admin.delete(f"/api/complaints/{created['id']}").status_code, 200)
        self.assertEqual(self.admin.get("/api/complaints").json()["complaints"], [])


class TestComplaintsApiWithFailingMail(ApiTestCase):
    mailer_fails = True

    def test_failing_transport_does_not_change_responses(self) -> None:
        user, _ = self.signup("User A", "a@example.com")
        admin, _ = self.signup("Admin", "admin@example.com", role="admin")

        resp = user.post("/api/complaints", json=complaint_fields())
        self.assertEqual(resp.status_code, 201)
        complaint_id = resp.json()["id"]

        resp = admin.put(f"/api/complaints/{complaint_id}", json={"status": "Resolved"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "Resolved")
        self.assertEqual(len(self.mailer.sent), 2)
        self.assertIn("Old Status: Pending", self.mailer.sent[1]["text"])


class TestComplaintsApiWithoutOperator(ApiTestCase):
    def test_unconfigured_operator_address_is_a_no_op(self) -> None:
        self.dispatcher.recipient = None
        user, _ = self.signup("User A", "a@example.com")
        resp = user.post("/api/complaints", json=complaint_fields())
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(self.mailer.sent, [])


if __name__ == "__main__":
    unittest.main()
