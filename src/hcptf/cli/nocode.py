from __future__ import annotations

import argparse
import json
import sys
from urllib.parse import quote

from hcptf.cli._request import add_common_arguments, add_organization_argument, load_cli_config, run_api_command

COMMAND = "nocode"

_ACTIONS = {
    "create": ("POST", "creating no-code provisioning"),
    "update": ("PATCH", "updating no-code provisioning"),
}


def register_parser(subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        COMMAND,
        help="Manage no-code provisioning settings for an organization",
    )
    subs = parser.add_subparsers(dest="nocode_action")

    for action in _ACTIONS:
        action_p = subs.add_parser(action, help=f"{action.capitalize()} no-code provisioning settings")
        add_organization_argument(action_p)
        action_p.add_argument("--payload", help="JSON payload for the request (required)")
        add_common_arguments(action_p)

    return parser


def run(parsed: argparse.Namespace) -> int:
    if parsed.nocode_action not in _ACTIONS:
        print("Usage: hcptf nocode {create,update} --org ORG --payload JSON", file=sys.stderr)
        return 1

    config = load_cli_config(parsed)
    if config is None:
        return 1

    organization = parsed.organization or config.default_organization
    if not organization:
        print("Error: --organization flag is required", file=sys.stderr)
        return 1
    if not parsed.payload:
        print("Error: --payload flag is required", file=sys.stderr)
        print("Provide a JSON object representing the provisioning settings", file=sys.stderr)
        return 1
    try:
        json.loads(parsed.payload)
    except json.JSONDecodeError:
        print("Error: --payload must be valid JSON", file=sys.stderr)
        return 1

    method, action = _ACTIONS[parsed.nocode_action]
    return run_api_command(
        parsed,
        config,
        action=action,
        method=method,
        endpoint=f"/api/v2/organizations/{quote(organization, safe='')}/no-code-provisioning",
        body=parsed.payload,
    )
