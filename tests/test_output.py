import io
import json
import unittest

from hcptf.output import Formatter, format_value


class FormatterTest(unittest.TestCase):
    def _formatter(self, output_format="table"):
        out = io.StringIO()
        err = io.StringIO()
        return Formatter(output_format, out=out, err=err), out, err

    def test_unknown_format_defaults_to_table(self):
        self.assertEqual(Formatter("yaml").output_format, "table")
        self.assertEqual(Formatter("json").output_format, "json")

    def test_default_streams(self):
        import sys

        formatter = Formatter()
        self.assertIs(formatter.out, sys.stdout)
        self.assertIs(formatter.err, sys.stderr)

    def test_table(self):
        formatter, out, _ = self._formatter()
        formatter.table(["ID", "Name"], [["1", "alice"], ["22", "b"]])
        self.assertEqual(
            out.getvalue().splitlines(),
            [
                "| ID | Name  |",
                "|----|-------|",
                "| 1  | alice |",
                "| 22 | b     |",
            ],
        )

    def test_table_as_json(self):
        formatter, out, _ = self._formatter("json")
        formatter.table(["ID", "Name"], [["1", "alice"]])
        self.assertEqual(json.loads(out.getvalue()), [{"ID": "1", "Name": "alice"}])

    def test_key_value_aligned(self):
        formatter, out, _ = self._formatter()
        formatter.key_value({"count": 2, "response": ["a", "b"], "x": None})
        self.assertEqual(
            out.getvalue().splitlines(),
            [
                "count:    2",
                'response: ["a", "b"]',
                "x:        -",
            ],
        )

    def test_key_value_as_json(self):
        formatter, out, _ = self._formatter("json")
        formatter.key_value({"count": 2})
        self.assertEqual(json.loads(out.getvalue()), {"count": 2})

    def test_key_value_empty(self):
        formatter, out, _ = self._formatter()
        formatter.key_value({})
        self.assertEqual(out.getvalue(), "")

    def test_json_indented(self):
        formatter, out, _ = self._formatter("json")
        formatter.json({"a": [1]})
        self.assertEqual(out.getvalue(), json.dumps({"a": [1]}, indent=2) + "\n")

    def test_json_keeps_non_ascii_text(self):
        formatter, out, _ = self._formatter("json")
        formatter.json({"name": "caf\u00e9"})
        self.assertIn("caf\u00e9", out.getvalue())
        self.assertNotIn("\\u00e9", out.getvalue())

    def test_json_null(self):
        formatter, out, _ = self._formatter()
        formatter.json(None)
        self.assertEqual(out.getvalue(), "null\n")

    def test_json_mapping_in_table_mode(self):
        formatter, out, _ = self._formatter()
        formatter.json({"a": 1, "b": True})
        self.assertEqual(out.getvalue().splitlines(), ["a: 1", "b: true"])

    def test_json_encoding_error_reported(self):
        formatter, out, err = self._formatter("json")
        formatter.json({"a": object()})
        self.assertEqual(out.getvalue(), "")
        self.assertIn("Error encoding JSON", err.getvalue())


class FormatValueTest(unittest.TestCase):
    def test_values(self):
        self.assertEqual(format_value(None), "-")
        self.assertEqual(format_value(False), "false")
        self.assertEqual(format_value({"k": "v"}), '{"k": "v"}')
        self.assertEqual(format_value(3), "3")
        self.assertEqual(format_value(["\u00fcber"]), '["\u00fcber"]')


if __name__ == "__main__":
    unittest.main()
