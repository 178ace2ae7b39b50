"""Application configuration and credential storage."""
import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from ns_fetch.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".nsfetch-config.json"

# Credential file keys, in the order they are prompted and written
CREDENTIAL_KEYS = {
    "consumer_key": "consumerKey",
    "consumer_secret": "consumerSecret",
    "token": "token",
    "token_secret": "tokenSecret",
    "realm": "realm",
}


@dataclass(frozen=True)
class Credentials:
    """OAuth 1.0a token-based credentials for one NetSuite account."""

    consumer_key: str = ""
    consumer_secret: str = ""
    token: str = ""
    token_secret: str = ""
    realm: str = ""  # Account ID, e.g. 1234567_SB1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Credentials":
        """Build credentials from the on-disk (camelCase) representation."""
        values = {}
        for attr, key in CREDENTIAL_KEYS.items():
            value = data.get(key)
            values[attr] = "" if value is None else str(value).strip()
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        """Convert to the on-disk representation."""
        return {key: getattr(self, attr) for attr, key in CREDENTIAL_KEYS.items()}

    def missing_fields(self) -> List[str]:
        """Return the on-disk names of empty fields."""
        return [
            CREDENTIAL_KEYS[f.name]
            for f in fields(self)
            if not getattr(self, f.name)
        ]


@dataclass
class NetSuiteApiConfig:
    """Configuration for the SuiteTalk REST API."""

    domain_suffix: str = "suitetalk.api.netsuite.com"
    record_path: str = "/services/rest/record/v1"
    timeout: Optional[int] = 60

    @classmethod
    def from_env(cls) -> "NetSuiteApiConfig":
        """Load config from environment variables."""
        timeout = os.getenv("NSFETCH_TIMEOUT", "60").strip()
        if not timeout:
            return cls(timeout=None)
        try:
            return cls(timeout=int(timeout))
        except ValueError:
            raise ConfigError(
                f"NSFETCH_TIMEOUT must be an integer number of seconds, got {timeout!r}"
            ) from None


@dataclass
class AppConfig:
    """Application configuration."""

    config_path: Path = DEFAULT_CONFIG_PATH
    netsuite_api: NetSuiteApiConfig = field(default_factory=NetSuiteApiConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load config from environment variables."""
        return cls(
            config_path=Path(os.getenv("NSFETCH_CONFIG", str(DEFAULT_CONFIG_PATH))),
            netsuite_api=NetSuiteApiConfig.from_env(),
        )


def load_credentials(path: Path) -> Credentials:
    """
    Load credentials saved by `ns-fetch init`.

    Args:
        path: Credential file path

    Returns:
        Credentials: Loaded credentials

    Raises:
        ConfigError: If the file is missing, unreadable or incomplete
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError("No credentials found. Run `ns-fetch init` first.")
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read credentials from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Credential file {path} must contain a JSON object")

    credentials = Credentials.from_dict(data)
    missing = credentials.missing_fields()
    if missing:
        raise ConfigError(
            f"Credential file {path} is missing: {', '.join(missing)}. "
            "Run `ns-fetch init` again."
        )

    logger.debug(f"Loaded credentials for realm {credentials.realm} from {path}")
    return credentials


def save_credentials(credentials: Credentials, path: Path) -> Path:
    """Write credentials as JSON, readable by the owner only."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        json.dump(credentials.to_dict(), f, indent=2)
    # O_CREAT mode is ignored for existing files
    os.chmod(path, 0o600)

    logger.debug(f"Saved credentials to {path}")
    return path
