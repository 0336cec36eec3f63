from __future__ import annotations

import argparse
import sys
from urllib.parse import urlparse

from hcptf.config import get_address, get_terraform_credentials_path, remove_credential, save_credential
from hcptf.errors import ConfigError
from hcptf.internal.credentials_store import clear_token, load_token, save_token

COMMAND = "credentials"


def _default_hostname() -> str:
    address = get_address()
    return urlparse(address).hostname or address


def register_parser(subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        COMMAND,
        help="Manage stored API tokens",
    )
    subs = parser.add_subparsers(dest="credentials_action")

    put_p = subs.add_parser("put", help="Store an API token in the system keyring")
    put_p.add_argument("--token", help="API token (default: read from stdin)")

    get_p = subs.add_parser("get", help="Print the API token stored in the system keyring")
    clear_p = subs.add_parser("clear", help="Remove a stored API token")

    for action_p in (put_p, get_p, clear_p):
        action_p.add_argument(
            "--hostname",
            default=None,
            help="Hostname the token belongs to (default: host of $HCPTF_ADDRESS, $TFE_ADDRESS or app.terraform.io)",
        )
    for action_p in (put_p, clear_p):
        action_p.add_argument(
            "--terraform-credentials-file",
            action="store_true",
            default=False,
            help=f"Use the Terraform CLI credentials file ({get_terraform_credentials_path()}) instead of the keyring",
        )

    return parser


def run(parsed: argparse.Namespace) -> int:
    if parsed.credentials_action == "put":
        return _run_put(parsed)
    if parsed.credentials_action == "get":
        return _run_get(parsed)
    if parsed.credentials_action == "clear":
        return _run_clear(parsed)
    return 0


def _run_put(parsed: argparse.Namespace) -> int:
    hostname = parsed.hostname or _default_hostname()
    token = parsed.token or sys.stdin.readline().strip()
    if not token:
        print("Error: no token provided", file=sys.stderr)
        return 1
    try:
        if parsed.terraform_credentials_file:
            save_credential(hostname, token)
            print(f"Token for {hostname!r} stored in {get_terraform_credentials_path()}")
        else:
            save_token(hostname, token)
            print(f"Token for {hostname!r} stored in keyring")
        return 0
    except (ConfigError, OSError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _run_get(parsed: argparse.Namespace) -> int:
    hostname = parsed.hostname or _default_hostname()
    token = load_token(hostname)
    if token is None:
        print(f"No token found in keyring for {hostname!r}", file=sys.stderr)
        return 1
    print(token)
    return 0


def _run_clear(parsed: argparse.Namespace) -> int:
    hostname = parsed.hostname or _default_hostname()
    try:
        if parsed.terraform_credentials_file:
            remove_credential(hostname)
            print(f"Token for {hostname!r} removed from {get_terraform_credentials_path()}")
        else:
            clear_token(hostname)
            print(f"Token for {hostname!r} cleared from keyring")
        return 0
    except (ConfigError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
