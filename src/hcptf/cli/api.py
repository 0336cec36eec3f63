from __future__ import annotations

import argparse
import json
import sys

from hcptf.cli._request import add_common_arguments, load_cli_config, run_api_command

COMMAND = "api"

METHODS = ["get", "post", "put", "patch", "delete"]


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    api_parser = subparsers.add_parser(
        COMMAND,
        help="Make an authenticated request to any API endpoint",
    )
    api_parser.add_argument(
        "method",
        metavar="METHOD",
        type=str.lower,
        choices=METHODS,
        help=f"HTTP method ({', '.join(METHODS)})",
    )
    api_parser.add_argument(
        "path",
        metavar="PATH",
        help="API path relative to the address, with segments already escaped (e.g. /api/v2/organizations)",
    )
    api_parser.add_argument("-d", "--data", help="Request body (JSON string)")
    add_common_arguments(api_parser)


def _normalize_path(path: str) -> str:
    path = path.strip()
    return path if path.startswith("/") else f"/{path}"


def run(parsed: argparse.Namespace) -> int:
    if parsed.data:
        try:
            json.loads(parsed.data)
        except json.JSONDecodeError as e:
            print(f"Error: --data must be valid JSON: {e}", file=sys.stderr)
            return 1

    config = load_cli_config(parsed)
    if config is None:
        return 1

    return run_api_command(
        parsed,
        config,
        action="making API request",
        method=parsed.method.upper(),
        endpoint=_normalize_path(parsed.path),
        body=parsed.data or None,
    )
