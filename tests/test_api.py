import json
import unittest

from fastapi.testclient import TestClient

from merge_designer.api.main import app
from merge_designer.domain.schema import dump_document
from merge_designer.services.document_editor import create_default_document
from merge_designer.services.mail_merge import DOCX_MEDIA_TYPE

CSV = b"Name,Title\nAda,Engineer\nGrace,Admiral\n"


class TestApi(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.document = dump_document(create_default_document("label"))

    def test_root(self):
        response = self.client.get("/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["main_endpoint"]["url"], "/export")

    def test_document_types(self):
        response = self.client.get("/document-types")

        types = {item["id"]: item for item in response.json()}
        self.assertEqual(set(types), {"letter", "certificate", "label", "envelope"})
        self.assertTrue(types["label"]["multiLabel"])
        self.assertEqual(types["label"]["dimensions"]["labelsPerPage"], 6)

    def test_dataset_summary(self):
        response = self.client.post(
            "/dataset",
            files={"file": ("people.csv", CSV, "text/csv")},
            data={"field_count": "2"},
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["summary"]["status"], "match")
        self.assertEqual(body["summary"]["rowCount"], 2)
        self.assertEqual(body["rows"][1]["Name"], "Grace")

    def test_dataset_parse_failure(self):
        response = self.client.post("/dataset", files={"file": ("empty.csv", b"", "text/csv")})

        self.assertEqual(response.status_code, 400)

    def test_unsupported_extension(self):
        response = self.client.post("/dataset", files={"file": ("notes.txt", b"hello", "text/plain")})

        self.assertEqual(response.status_code, 400)

    def test_validate_document(self):
        valid = self.client.post("/documents/validate", json=self.document).json()
        invalid = self.client.post("/documents/validate", json={"fields": "nope"}).json()

        self.assertTrue(valid["valid"])
        self.assertFalse(invalid["valid"])
        self.assertTrue(invalid["errors"])

    def test_sync_headers(self):
        response = self.client.post(
            "/documents/sync-headers",
            json={"document": self.document, "headers": ["Name", "", "Company", "Email", "Phone"]},
        )

        fields = response.json()["document"]["fields"]
        self.assertEqual([f["name"] for f in fields], ["Name", "Field 2", "Company", "Email", "Phone"])
        self.assertEqual(fields[0]["x"], self.document["fields"][0]["x"])

    def test_preview(self):
        response = self.client.post("/preview", json={"document": self.document, "row": {"Name": "Ada"}})

        texts = [f["text"] for f in response.json()["fields"]]
        self.assertIn("Ada", texts)
        self.assertIn("{{Title}}", texts)

    def test_export(self):
        response = self.client.post(
            "/export",
            files={"file": ("people.csv", CSV, "text/csv")},
            data={"document": json.dumps(self.document)},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["content-type"], DOCX_MEDIA_TYPE)
        self.assertEqual(response.headers["x-records-exported"], "2")
        self.assertIn("mail-merge-label-", response.headers["content-disposition"])
        self.assertTrue(response.content.startswith(b"PK"))

    def test_export_rejects_invalid_document(self):
        response = self.client.post(
            "/export",
            files={"file": ("people.csv", CSV, "text/csv")},
            data={"document": json.dumps({"documentType": "poster"})},
        )

        self.assertEqual(response.status_code, 422)

    def test_export_without_rows(self):
        response = self.client.post(
            "/export",
            files={"file": ("people.csv", b"Name\n", "text/csv")},
            data={"document": json.dumps(self.document)},
        )

        self.assertEqual(response.status_code, 400)


if __name__ == "__main__":
    unittest.main()
