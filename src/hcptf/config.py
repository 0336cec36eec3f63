import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from hcptf import DEFAULT_ADDRESS, DEFAULT_OUTPUT_FORMAT
from hcptf.errors import ConfigError

log = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = "HCPTF_CONFIG"
TOKEN_ENV_VARS = ("TFE_TOKEN", "HCPTF_TOKEN")
ADDRESS_ENV_VARS = ("HCPTF_ADDRESS", "TFE_ADDRESS")


@dataclass
class Credential:
    hostname: str
    token: str


@dataclass
class Config:
    credentials: dict = field(default_factory=dict)
    default_organization: Optional[str] = None
    output_format: str = DEFAULT_OUTPUT_FORMAT

    def get_token(self, hostname: str) -> str:
        """Return the API token for a hostname.

        Resolution order:
        1. TFE_TOKEN environment variable
        2. HCPTF_TOKEN environment variable
        3. Credentials from the hcptfrc or Terraform CLI credentials file
        4. Token stored in the system keyring (``hcptf credentials put``)

        Returns an empty string when no token is found.
        """
        for env_var in TOKEN_ENV_VARS:
            token = os.environ.get(env_var)
            if token:
                return token

        cred = self.credentials.get(hostname)
        if cred is not None and cred.token:
            return cred.token

        from hcptf.internal.credentials_store import load_token

        return load_token(hostname) or ""


def get_address() -> str:
    """HCPTF_ADDRESS, then TFE_ADDRESS, then the public HCP Terraform address."""
    for env_var in ADDRESS_ENV_VARS:
        address = os.environ.get(env_var)
        if address:
            return address
    return DEFAULT_ADDRESS


def get_config_path() -> Path:
    path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if path:
        return Path(path).expanduser()
    return Path.home() / ".hcptfrc"


def get_terraform_credentials_path() -> Path:
    return Path.home() / ".terraform.d" / "credentials.tfrc.json"


def _read_json(path: Path) -> dict:
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ConfigError(f"failed to parse {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"failed to read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"failed to parse {path}: expected a JSON object")
    return data


def _parse_credentials(data: dict) -> dict:
    credentials = {}
    for hostname, cred_data in (data.get("credentials") or {}).items():
        if isinstance(cred_data, dict) and cred_data.get("token"):
            credentials[hostname] = Credential(hostname=hostname, token=cred_data["token"])
    return credentials


def load_config(path: Optional[str] = None, terraform_credentials_path: Optional[str] = None) -> Config:
    """Load config from the hcptfrc file and merge in Terraform CLI credentials.

    Missing files are skipped. Credentials from the hcptfrc file take precedence
    over the Terraform CLI credentials file for the same hostname.
    """
    config_path = Path(path).expanduser() if path else get_config_path()
    tf_creds_path = (
        Path(terraform_credentials_path).expanduser() if terraform_credentials_path else get_terraform_credentials_path()
    )

    config = Config()

    if config_path.exists():
        data = _read_json(config_path)
        config.credentials = _parse_credentials(data)
        config.default_organization = data.get("default_organization") or None
        config.output_format = data.get("output_format") or DEFAULT_OUTPUT_FORMAT
        log.debug("Loaded config from %s", config_path)

    if tf_creds_path.exists():
        for hostname, cred in _parse_credentials(_read_json(tf_creds_path)).items():
            config.credentials.setdefault(hostname, cred)
        log.debug("Merged Terraform CLI credentials from %s", tf_creds_path)

    return config


def _write_terraform_credentials(path: Path, data: dict) -> None:
    path.write_text(json.dumps(data, indent=2))
    os.chmod(path, 0o600)


def save_credential(hostname: str, token: str, path: Optional[str] = None) -> None:
    """Add or replace a credential in the Terraform CLI credentials file."""
    creds_path = Path(path).expanduser() if path else get_terraform_credentials_path()
    creds_path.parent.mkdir(mode=0o755, parents=True, exist_ok=True)

    data = _read_json(creds_path) if creds_path.exists() else {}
    data.setdefault("credentials", {})[hostname] = {"token": token}
    _write_terraform_credentials(creds_path, data)


def remove_credential(hostname: str, path: Optional[str] = None) -> None:
    """Remove a credential from the Terraform CLI credentials file.

    The file is deleted once its last credential is removed.
    """
    creds_path = Path(path).expanduser() if path else get_terraform_credentials_path()
    if not creds_path.exists():
        raise ConfigError(f"failed to load credentials: {creds_path} does not exist")

    data = _read_json(creds_path)
    credentials = data.get("credentials") or {}
    credentials.pop(hostname, None)

    if not credentials:
        creds_path.unlink(missing_ok=True)
        return

    data["credentials"] = credentials
    _write_terraform_credentials(creds_path, data)
