"""API client and raw request execution using requests."""

from __future__ import annotations

import logging
import re
import sys
from typing import IO, TYPE_CHECKING, Optional, Union
from urllib.parse import urlparse

if TYPE_CHECKING:
    from typing import Self

    from hcptf.config import Config

import requests
from requests import Session

from hcptf import DEFAULT_REQUEST_TIMEOUT, JSONAPI_CONTENT_TYPE, __version__
from hcptf.errors import ApiRequestError, ConfigError
from hcptf.requests.bearer_auth import BearerTokenAuth

logger = logging.getLogger(__name__)

RequestBody = Union[bytes, str, IO[bytes], None]

# RFC 9110 token characters
_METHOD_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

_PY_VERSION = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"


def user_agent(command_name: Optional[str] = None) -> str:
    """Identify hcptf, the interpreter and requests; the CLI command, when known, goes last."""
    agent = f"hcptf/{__version__} python/{_PY_VERSION} requests/{requests.__version__}"
    return f"{agent} {command_name}" if command_name else agent


def create_session(*, token: str, command_name: Optional[str] = None) -> Session:
    """Create a requests session with bearer token auth and a hcptf User-Agent.

    No retrying adapter is mounted: a failed request is reported to the caller as is.
    """
    session = requests.Session()
    session.auth = BearerTokenAuth(token)
    session.headers["User-Agent"] = user_agent(command_name)
    return session


class ApiClient:
    """Authenticated client for one HCP Terraform / Terraform Enterprise address.

    The requests Session is lazily initialized on first access.

    Example:
        client = ApiClient.from_config(load_config())
        payload, status = execute_api_request(client, "GET", "/api/v2/organizations")
    """

    def __init__(
        self,
        *,
        address: str,
        token: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        command_name: Optional[str] = None,
    ):
        self._session: Optional[Session] = None
        self.address = address
        self.token = token
        self.timeout = timeout
        self._command_name = command_name

    @property
    def hostname(self) -> str:
        return urlparse(self.address).hostname or self.address

    @property
    def session(self) -> Session:
        if self._session is None:
            self._session = create_session(token=self.token, command_name=self._command_name)
        return self._session

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> Self:
        """Create a client for the configured address using the token resolved for its hostname.

        Raises:
            ConfigError: no token is configured for the address.
        """
        from hcptf.config import get_address

        address = kwargs.pop("address", None) or get_address()
        hostname = urlparse(address).hostname or address
        token = config.get_token(hostname)
        if not token:
            raise ConfigError(
                f"no API token found for {hostname}. "
                "Set TFE_TOKEN, add credentials to your config file, or run 'hcptf credentials put'"
            )
        return cls(address=address, token=token, **kwargs)


def build_url(address: str, endpoint: str) -> str:
    """Join the base address and an already-escaped API path."""
    base = address[:-1] if address.endswith("/") else address
    return base + endpoint.strip()


def execute_api_request(
    client: ApiClient,
    method: str,
    endpoint: str,
    body: RequestBody = None,
) -> tuple[bytes, int]:
    """Send one authenticated JSON:API request and return the raw body and status code.

    The endpoint is appended to the client address without re-escaping, so callers
    must escape path segments themselves. A non-2xx status is returned, not raised.
    The request is sent once, bounded by ``client.timeout``.

    Raises:
        ApiRequestError: the request could not be built, sending failed (network
            error, timeout), or the response body could not be read.
    """
    if not _METHOD_RE.fullmatch(method or ""):
        raise ApiRequestError(f"error creating request: invalid method {method!r}")

    if isinstance(body, str):
        body = body.encode("utf-8")

    session = client.session
    url = build_url(client.address, endpoint)
    try:
        prepared = session.prepare_request(
            requests.Request(
                method=method,
                url=url,
                data=body,
                headers={"Content-Type": JSONAPI_CONTENT_TYPE},
            )
        )
        settings = session.merge_environment_settings(prepared.url, {}, True, None, None)
    except (requests.RequestException, ValueError) as e:
        raise ApiRequestError(f"error creating request: {e}") from e

    logger.debug("Sending %s %s", method, prepared.url)
    try:
        response = session.send(prepared, timeout=client.timeout, **settings)
    except requests.RequestException as e:
        raise ApiRequestError(f"error making request: {e}") from e

    with response:
        try:
            payload = response.content
        except requests.RequestException as e:
            raise ApiRequestError(f"error reading response: {e}", status_code=response.status_code) from e

    logger.debug("Received status %d (%d bytes) from %s %s", response.status_code, len(payload), method, prepared.url)
    return payload, response.status_code
