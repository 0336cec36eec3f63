from __future__ import annotations

import json
import sys
from typing import Any, TextIO

FORMAT_TABLE = "table"
FORMAT_JSON = "json"
OUTPUT_FORMATS = [FORMAT_TABLE, FORMAT_JSON]


def format_value(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


class Formatter:
    """Writes tables, key/value blocks and JSON documents in the selected output format.

    Unknown formats fall back to table output.
    """

    def __init__(self, output_format: str = FORMAT_TABLE, out: TextIO | None = None, err: TextIO | None = None):
        self.output_format = output_format if output_format in OUTPUT_FORMATS else FORMAT_TABLE
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr

    def _print(self, text: str) -> None:
        print(text, file=self.out)

    def table(self, headers: list[str], rows: list[list[str]]) -> None:
        if self.output_format == FORMAT_JSON:
            self.json([{header: cell for header, cell in zip(headers, row)} for row in rows])
            return

        col_widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row[: len(headers)]):
                col_widths[i] = max(col_widths[i], len(cell))
        self._print("| " + " | ".join(h.ljust(col_widths[i]) for i, h in enumerate(headers)) + " |")
        self._print("|-" + "-|-".join("-" * w for w in col_widths) + "-|")
        for row in rows:
            self._print("| " + " | ".join(cell.ljust(col_widths[i]) for i, cell in enumerate(row[: len(headers)])) + " |")

    def key_value(self, data: dict[str, Any]) -> None:
        if self.output_format == FORMAT_JSON:
            self.json(data)
            return

        width = max((len(k) for k in data), default=0)
        for key, value in data.items():
            padding = " " * (width - len(key))
            self._print(f"{key}:{padding} {format_value(value)}")

    def json(self, data: Any) -> None:
        if self.output_format == FORMAT_TABLE and isinstance(data, dict):
            for key, value in data.items():
                self._print(f"{key}: {format_value(value)}")
            return

        try:
            self._print(json.dumps(data, indent=2, ensure_ascii=False))
        except (TypeError, ValueError) as e:
            print(f"Error encoding JSON: {e}", file=self.err)

