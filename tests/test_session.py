import unittest

from merge_designer.domain.exceptions import ExportError
from merge_designer.services.session import MergeSession

CSV = b"Name,Title,Company,Email,Phone\nAda,Engineer,Analytical,ada@example.com,555\n"


class TestMergeSession(unittest.TestCase):

    def test_import_with_header_sync(self):
        session = MergeSession(document_type="label")

        summary = session.import_dataset(CSV, "people.csv")

        self.assertEqual(summary.status, "match")
        self.assertEqual(session.document.fields[4].text, "{{Phone}}")

    def test_import_without_header_sync(self):
        session = MergeSession(document_type="label", sync_headers=False)

        summary = session.import_dataset(CSV, "people.csv")

        self.assertEqual(summary.layer_count, 4)
        self.assertEqual(summary.status, "needs-layers")

    def test_field_edits_update_summary(self):
        session = MergeSession(document_type="label", sync_headers=False)
        session.import_dataset(CSV, "people.csv")

        session.add_field()

        self.assertEqual(session.summary.status, "match")

        session.remove_field(session.document.fields[0].id)
        self.assertEqual(session.summary.status, "needs-layers")

    def test_export_requires_rows(self):
        with self.assertRaises(ExportError):
            MergeSession().export()

    def test_export(self):
        session = MergeSession(document_type="label")
        session.import_dataset(CSV, "people.csv")

        result = session.export()

        self.assertEqual(result.record_count, 1)
        self.assertTrue(result.filename.startswith("mail-merge-label-"))


if __name__ == "__main__":
    unittest.main()
