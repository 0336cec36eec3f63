"""Bearer token auth handler for requests."""

from __future__ import annotations

import requests
from requests.auth import AuthBase


class BearerTokenAuth(AuthBase):
    """Injects a static API token as a Bearer Authorization header into each request."""

    def __init__(self, token: str) -> None:
        self._token = token

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        r.headers["Authorization"] = f"Bearer {self._token}"
        return r

    def __eq__(self, other) -> bool:
        return isinstance(other, BearerTokenAuth) and other._token == self._token

    def __repr__(self) -> str:
        return "BearerTokenAuth(token=***)"
