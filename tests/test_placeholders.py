import unittest

from merge_designer.utils.placeholders import find_placeholders, placeholder_for, resolve


class TestResolve(unittest.TestCase):

    def test_substitutes_every_token(self):
        self.assertEqual(resolve("{{A}} and {{B}}", {"A": "x", "B": "y"}), "x and y")

    def test_missing_key_is_left_verbatim(self):
        self.assertEqual(resolve("{{Missing}}", {"A": "x"}), "{{Missing}}")

    def test_no_row_leaves_tokens(self):
        self.assertEqual(resolve("{{A}}", None), "{{A}}")

    def test_empty_value_is_left_verbatim(self):
        self.assertEqual(resolve("Hi {{A}}!", {"A": ""}), "Hi {{A}}!")

    def test_token_name_is_trimmed(self):
        self.assertEqual(resolve("{{  First Name }}", {"First Name": "Ada"}), "Ada")

    def test_lookup_is_case_sensitive(self):
        self.assertEqual(resolve("{{name}}", {"Name": "Ada"}), "{{name}}")

    def test_substituted_values_are_not_rescanned(self):
        self.assertEqual(resolve("{{A}}", {"A": "{{B}}", "B": "nope"}), "{{B}}")

    def test_literal_text_is_preserved(self):
        self.assertEqual(
            resolve("Dear {{FirstName}}, welcome to {{City}}.", {"FirstName": "Ada", "City": "Paris"}),
            "Dear Ada, welcome to Paris.",
        )


class TestPlaceholderHelpers(unittest.TestCase):

    def test_find_placeholders_in_order(self):
        self.assertEqual(find_placeholders("{{City}}, {{ State }} {{Zip}}"), ["City", "State", "Zip"])

    def test_placeholder_for(self):
        self.assertEqual(placeholder_for("Name"), "{{Name}}")


if __name__ == "__main__":
    unittest.main()
