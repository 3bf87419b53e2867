import unittest

from merge_designer.domain.exceptions import DocumentValidationError
from merge_designer.domain.schema import dump_document, parse_document_json, validate_document
from merge_designer.services.document_editor import create_default_document


def payload(**overrides):
    data = dump_document(create_default_document("letter"))
    data.update(overrides)
    return data


class TestValidateDocument(unittest.TestCase):

    def test_round_trip_of_valid_document(self):
        original = create_default_document("letter")

        result = validate_document(dump_document(original))

        self.assertTrue(result.ok)
        self.assertEqual(result.document, original)

    def test_missing_document_type_defaults_to_label(self):
        data = payload()
        del data["documentType"]

        result = validate_document(data)

        self.assertEqual(result.document.document_type, "label")

    def test_invalid_text_align_rejects_whole_payload(self):
        result = validate_document(payload(textAlign="justify"))

        self.assertFalse(result.ok)
        self.assertIsNone(result.document)
        self.assertTrue(any("textAlign" in e for e in result.errors))

    def test_wrongly_typed_field_rejected(self):
        data = payload()
        data["fields"][0]["fontSize"] = "14"

        self.assertFalse(validate_document(data).ok)

    def test_boolean_is_not_a_number(self):
        data = payload()
        data["fields"][0]["x"] = True

        self.assertFalse(validate_document(data).ok)

    def test_unknown_document_type_rejected(self):
        self.assertFalse(validate_document(payload(documentType="poster")).ok)

    def test_non_object_rejected(self):
        self.assertFalse(validate_document([1, 2, 3]).ok)

    def test_unwrap_raises(self):
        with self.assertRaises(DocumentValidationError):
            validate_document(payload(fields="nope")).unwrap()

    def test_parse_invalid_json(self):
        result = parse_document_json("{not json")
        self.assertFalse(result.ok)
        self.assertTrue(result.errors[0].startswith("Invalid JSON"))


if __name__ == "__main__":
    unittest.main()
