from __future__ import annotations

import argparse
import json
import sys
from urllib.parse import quote

from hcptf.cli._request import add_common_arguments, add_organization_argument, load_cli_config, run_api_command

COMMAND = "organizationtag"


def register_parser(subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        COMMAND,
        help="Manage organization tags",
    )
    subs = parser.add_subparsers(dest="organizationtag_action")

    create_p = subs.add_parser("create", help="Create a tag in an organization")
    add_organization_argument(create_p)
    create_p.add_argument("--name", help="Tag name (required)")
    add_common_arguments(create_p)

    return parser


def run(parsed: argparse.Namespace) -> int:
    if parsed.organizationtag_action == "create":
        return _run_create(parsed)
    print("Usage: hcptf organizationtag create --org ORG --name NAME", file=sys.stderr)
    return 1


def _run_create(parsed: argparse.Namespace) -> int:
    config = load_cli_config(parsed)
    if config is None:
        return 1

    organization = parsed.organization or config.default_organization
    if not organization:
        print("Error: --organization flag is required", file=sys.stderr)
        return 1
    if not parsed.name:
        print("Error: --name flag is required", file=sys.stderr)
        return 1

    body = json.dumps({"data": {"type": "tags", "attributes": {"name": parsed.name}}})
    return run_api_command(
        parsed,
        config,
        action="creating organization tag",
        method="POST",
        endpoint=f"/api/v2/organizations/{quote(organization, safe='')}/tags",
        body=body,
    )
