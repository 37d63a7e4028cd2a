"""Configuration for the Polymer proof toolkit.

Values are merged, lowest precedence first, from built-in defaults, a
dotenv-format config file, ``POLYMER_*`` environment variables and explicit
overrides (the CLI flags). The resulting ProofConfig is immutable and is
handed to the clients that need it.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import dotenv_values

from polymer_toolkit.shared.exceptions import ConfigurationError

DEFAULT_API_URL = "https://proof.testnet.polymer.zone"
DEFAULT_MAX_ATTEMPTS = 20
DEFAULT_POLL_INTERVAL_MS = 3000
DEFAULT_CONFIG_FILE = Path.home() / ".polymer-cli.env"

# Config key -> field name
_KEYS = {
    "POLYMER_API_KEY": "api_key",
    "POLYMER_API_URL": "api_url",
    "POLYMER_DEBUG": "debug",
    "POLYMER_MAX_ATTEMPTS": "max_attempts",
    "POLYMER_INTERVAL": "poll_interval_ms",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class ProofConfig:
    """Settings shared by the proof service client and the CLI."""

    api_key: str = ""
    api_url: str = DEFAULT_API_URL
    debug: bool = False
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS

    @property
    def poll_interval(self) -> float:
        """Poll interval in seconds."""
        return self.poll_interval_ms / 1000

    def validate(self) -> None:
        if not self.api_key:
            raise ConfigurationError(
                "API key is required. Set it using --api-key flag, "
                "POLYMER_API_KEY environment variable, or in the config file"
            )
        if self.max_attempts <= 0:
            raise ConfigurationError("max-attempts must be greater than 0")
        if self.poll_interval_ms <= 0:
            raise ConfigurationError("interval must be greater than 0")


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigurationError(f"Invalid boolean for {key}: {value!r}")


def _parse_int(key: str, value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    try:
        return int(str(value).strip(), 10)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid integer for {key}: {value!r}", cause=e
        )


def _coerce(field_name: str, key: str, value: Any) -> Any:
    if field_name == "debug":
        return _parse_bool(key, value)
    if field_name in ("max_attempts", "poll_interval_ms"):
        return _parse_int(key, value)
    return str(value)


def _from_mapping(values: Mapping[str, Optional[str]]) -> Dict[str, Any]:
    fields = {}
    for key, field_name in _KEYS.items():
        value = values.get(key)
        if value is not None:
            fields[field_name] = _coerce(field_name, key, value)
    return fields


def load_config(
    config_file: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ProofConfig:
    """
    Build a ProofConfig from the config file, environment and overrides.

    Args:
        config_file: Path to a dotenv-format file. When omitted,
            ~/.polymer-cli.env is read if it exists.
        overrides: Field name -> value; None values are ignored
        environ: Environment mapping (defaults to os.environ)

    Returns:
        ProofConfig: Merged, not yet validated, configuration

    Raises:
        ConfigurationError: If the config file is missing or a value
            cannot be parsed
    """
    config = ProofConfig()

    if config_file:
        path = Path(config_file).expanduser()
        if not path.is_file():
            raise ConfigurationError(f"Config file not found: {path}")
    else:
        path = DEFAULT_CONFIG_FILE if DEFAULT_CONFIG_FILE.is_file() else None

    if path is not None:
        config = replace(config, **_from_mapping(dotenv_values(path)))

    env = os.environ if environ is None else environ
    config = replace(config, **_from_mapping(env))

    if overrides:
        fields = {}
        for field_name, value in overrides.items():
            if value is None:
                continue
            fields[field_name] = _coerce(field_name, field_name, value)
        config = replace(config, **fields)

    return config
