import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from askboard.app import create_app
from askboard.blobstore import InMemoryBlobStore
from askboard.dependencies import get_document_store
from askboard.replication import ReplicatedDocumentStore


class BoardApiTests(unittest.TestCase):
    def setUp(self):
        self.primary = InMemoryBlobStore()
        self.backup = InMemoryBlobStore()
        self.store = ReplicatedDocumentStore(self.primary, self.backup)
        self.app = create_app()
        self.app.dependency_overrides[get_document_store] = lambda: self.store
        self.client = TestClient(self.app)

    def tearDown(self):
        self.store.close()

    def _create(self, text="hello"):
        response = self.client.post("/api/questions", json={"text": text})
        self.assertEqual(response.status_code, 201)
        return response.json()

    def test_list_empty(self):
        response = self.client.get("/api/questions")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [])
        self.assertTrue(response.headers["content-type"].startswith("application/json"))

    def test_list_returns_document_verbatim(self):
        document = [{"id": "a", "text": "t"}, "legacy", 3, None]
        self.primary.document = document
        response = self.client.get("/api/questions")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), document)

    def test_create_accepts_scalar_text(self):
        response = self.client.post("/api/questions", json={"text": 123})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["text"], "123")

        response = self.client.post("/api/questions", json={"text": 0})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "text_required"})

    def test_delete_all_accepts_any_truthy_flag(self):
        self._create("a")
        self._create("b")
        response = self.client.request("DELETE", "/api/questions", json={"all": "x"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get("/api/questions").json(), [])

    def test_create_and_list(self):
        first = self._create("first")
        second = self._create("second")
        self.assertEqual(set(second), {"id", "text", "createdAt", "votes", "hidden"})
        self.assertEqual(second["votes"], 0)
        self.assertFalse(second["hidden"])

        rows = self.client.get("/api/questions").json()
        self.assertEqual([row["id"] for row in rows], [second["id"], first["id"]])

    def test_create_requires_text(self):
        for body in [{"text": "   "}, {}]:
            response = self.client.post("/api/questions", json=body)
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json(), {"error": "text_required"})
        response = self.client.post("/api/questions")
        self.assertEqual(response.json(), {"error": "text_required"})
        self.assertEqual(self.primary.writes, 0)

    def test_create_with_malformed_body(self):
        response = self.client.post(
            "/api/questions",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "invalid_body"})

    def test_patch_upvote_and_hide(self):
        record = self._create()
        response = self.client.patch(
            "/api/questions", json={"id": record["id"], "action": "upvote"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["ok"], True)
        self.assertEqual(response.json()["row"]["votes"], 1)

        response = self.client.patch(
            "/api/questions", json={"id": record["id"], "action": "mute"}
        )
        self.assertTrue(response.json()["row"]["hidden"])

    def test_patch_errors(self):
        record = self._create()
        response = self.client.patch("/api/questions", json={"id": record["id"]})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "id_action_required"})

        response = self.client.patch(
            "/api/questions", json={"id": "missing", "action": "upvote"}
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "not_found"})

        response = self.client.patch(
            "/api/questions", json={"id": record["id"], "action": "explode"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "unknown_action"})

    def test_delete_one_and_all(self):
        keep = self._create("keep")
        drop = self._create("drop")

        response = self.client.request(
            "DELETE", "/api/questions", json={"id": drop["id"]}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"ok": True})
        self.assertEqual(
            [row["id"] for row in self.client.get("/api/questions").json()],
            [keep["id"]],
        )

        response = self.client.request("DELETE", "/api/questions", json={"all": True})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get("/api/questions").json(), [])

    def test_delete_missing_id_is_ok(self):
        self._create()
        response = self.client.request(
            "DELETE", "/api/questions", json={"id": "missing"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(self.client.get("/api/questions").json()), 1)

    def test_other_methods_not_allowed(self):
        response = self.client.put("/api/questions", json={})
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.json(), {"error": "method_not_allowed"})

    def test_read_failure_is_server_error(self):
        self.primary.fail_reads = True
        self.backup.fail_reads = True
        response = self.client.get("/api/questions")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "server_error"})

    def test_write_failure_is_server_error(self):
        self.primary.fail_writes = True
        self.backup.fail_writes = True
        response = self.client.post("/api/questions", json={"text": "hello"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "server_error"})

    def test_partial_write_is_reported_as_success(self):
        self.backup.fail_writes = True
        response = self.client.post("/api/questions", json={"text": "hello"})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(len(self.primary.document), 1)
        self.assertEqual(self.backup.document, [])

    def test_primary_outage_served_from_backup(self):
        self.backup.document = [
            {"id": "b", "text": "from backup", "createdAt": "x", "votes": 2, "hidden": False}
        ]
        self.primary.fail_reads = True
        response = self.client.get("/api/questions")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()[0]["id"], "b")

    def test_unexpected_error_is_server_error(self):
        client = TestClient(self.app, raise_server_exceptions=False)
        with patch.object(self.store, "read", side_effect=RuntimeError("boom")):
            response = client.get("/api/questions")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "server_error"})

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")


if __name__ == "__main__":
    unittest.main()
