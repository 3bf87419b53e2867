import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from merge_designer.cli.main import load_session, main
from merge_designer.domain.schema import dump_document
from merge_designer.services.document_editor import create_default_document


class TestCli(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.data = self.dir / "people.csv"
        self.data.write_text("FirstName,LastName\nAda,Lovelace\nGrace,Hopper\n", encoding="utf-8")

    def tearDown(self):
        self.tmp.cleanup()

    def test_load_session_from_type(self):
        session = load_session("envelope")

        self.assertEqual(session.document.document_type, "envelope")
        self.assertTrue(session.sync_headers)

    def test_load_session_from_design_file(self):
        design = self.dir / "design.json"
        design.write_text(json.dumps(dump_document(create_default_document("letter"))), encoding="utf-8")

        session = load_session(str(design))

        self.assertEqual(session.document.document_type, "letter")
        self.assertFalse(session.sync_headers)

    def test_main_writes_docx(self):
        output = self.dir / "out.docx"

        with redirect_stdout(io.StringIO()) as stdout:
            main(str(self.data), "letter", str(output))

        self.assertTrue(output.read_bytes().startswith(b"PK"))
        self.assertIn("Records merged: 2", stdout.getvalue())

    def test_missing_data_file_exits(self):
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit):
            main(str(self.dir / "missing.csv"))


if __name__ == "__main__":
    unittest.main()
