"""Keyring-based storage for HCP Terraform API tokens, keyed by hostname."""

from __future__ import annotations

import logging
from typing import Optional

SERVICE_NAME = "hcptf-credentials"

log = logging.getLogger(__name__)


def _get_keyring():
    """Return the keyring module if a usable backend is available, else None."""
    try:
        import keyring

        backend = keyring.get_keyring()
        if "fail" in type(backend).__name__.lower():
            return None
        return keyring
    except Exception:
        return None


def load_token(hostname: str) -> Optional[str]:
    """Load the API token for a hostname from keyring, or None if not found."""
    kr = _get_keyring()
    if kr is None:
        return None
    try:
        return kr.get_password(SERVICE_NAME, hostname)
    except Exception:
        log.debug("Failed to load token from keyring", exc_info=True)
        return None


def save_token(hostname: str, token: str) -> None:
    """Store an API token in keyring. Raises RuntimeError if keyring is unavailable."""
    kr = _get_keyring()
    if kr is None:
        raise RuntimeError(
            "No usable keyring backend available. "
            "Install a keyring backend or use the TFE_TOKEN environment variable instead."
        )
    kr.set_password(SERVICE_NAME, hostname, token)
    log.debug("Saved token to keyring for hostname=%s", hostname)


def clear_token(hostname: str) -> None:
    """Remove a token from keyring. Silently does nothing if not found or keyring unavailable."""
    kr = _get_keyring()
    if kr is None:
        return
    try:
        kr.delete_password(SERVICE_NAME, hostname)
        log.debug("Cleared token from keyring for hostname=%s", hostname)
    except Exception:
        log.debug("Failed to clear token from keyring", exc_info=True)
