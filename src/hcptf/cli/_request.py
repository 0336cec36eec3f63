"""Shared flow for commands that call an API endpoint and render the JSON:API response."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from hcptf.api_response import parse_api_response, print_api_response
from hcptf.config import Config, load_config
from hcptf.errors import ApiRequestError, ConfigError, ResponseParseError
from hcptf.output import OUTPUT_FORMATS, Formatter
from hcptf.requests.client import ApiClient, RequestBody, execute_api_request

log = logging.getLogger(__name__)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format: table or json (default: output_format from config, else table)",
    )
    parser.add_argument(
        "--config-file-path",
        default=None,
        help="Config file path (default: $HCPTF_CONFIG or ~/.hcptfrc)",
    )


def add_organization_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--organization",
        "--org",
        dest="organization",
        help="Organization name (default: default_organization from config)",
    )


def load_cli_config(parsed: argparse.Namespace) -> Optional[Config]:
    try:
        return load_config(parsed.config_file_path)
    except ConfigError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return None


def _decode(payload: bytes) -> str:
    return payload.decode("utf-8", errors="replace")


def run_api_command(
    parsed: argparse.Namespace,
    config: Config,
    *,
    action: str,
    method: str,
    endpoint: str,
    body: RequestBody = None,
) -> int:
    """Execute one request and print the rendered response. Returns the process exit code."""
    output_format = parsed.output_format or config.output_format

    try:
        client = ApiClient.from_config(config, command_name=parsed.command)
    except ConfigError as e:
        print(f"Error initializing client: {e}", file=sys.stderr)
        return 1

    try:
        response_body, status = execute_api_request(client, method, endpoint, body)
    except ApiRequestError as e:
        print(f"Error {action}: {e}", file=sys.stderr)
        return 1

    if status < 200 or status >= 300:
        print(f"API request failed with status {status}: {_decode(response_body)}", file=sys.stderr)
        return 1

    if not response_body.strip():
        log.debug("Empty response body with status %d", status)
        return 0

    try:
        payload = parse_api_response(response_body)
    except ResponseParseError as e:
        if output_format == "json":
            print(_decode(response_body))
            return 0
        print(f"Error parsing response: {e}", file=sys.stderr)
        print(_decode(response_body), file=sys.stderr)
        return 1

    print_api_response(Formatter(output_format), payload)
    return 0
