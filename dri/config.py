"""Configuration loading and constants for dri."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml


DEFAULT_CONFIG_PATH = Path("~/.config/dri/config.yaml")
DEFAULT_LOG_PATH = Path("~/.cache/dri/dri.log")

DEFAULT_TIMEOUT = 30
DEFAULT_MIN_LOADING_MS = 500
DEFAULT_LOG_LEVEL = "WARNING"


class ConfigError(RuntimeError):
    """Raised when the configuration is missing or unusable."""


@dataclass
class Config:
    server: str
    token: str
    timeout: int = DEFAULT_TIMEOUT
    min_loading_ms: int = DEFAULT_MIN_LOADING_MS
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Path = DEFAULT_LOG_PATH

    @property
    def min_loading(self) -> float:
        """Minimum loading-screen duration in seconds."""
        return max(0, self.min_loading_ms) / 1000.0


def get_config_path(override: Optional[str] = None) -> Path:
    """Get the config file path.

    Resolved in this order: explicit override (--config), the DRI_CONFIG
    environment variable, then ~/.config/dri/config.yaml.
    """
    if override:
        return Path(override).expanduser()
    env_override = os.environ.get("DRI_CONFIG")
    if env_override:
        return Path(env_override).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def _load_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML config file.

    Returns:
        Parsed YAML config dict, or empty dict if the file does not exist

    Raises:
        ConfigError: If the file exists but cannot be read or parsed
    """
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read {path}: {e}")
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def load_config(
    path: Optional[str] = None,
    *,
    server: Optional[str] = None,
    token: Optional[str] = None,
) -> Config:
    """Build the effective configuration.

    Precedence, highest first: explicit arguments (CLI flags), the
    DRONE_SERVER / DRONE_TOKEN environment variables, the config file.

    Raises:
        ConfigError: If no server URL or token can be found
    """
    config_path = get_config_path(path)
    file_config = _load_config_file(config_path)

    server = server or os.environ.get("DRONE_SERVER") or file_config.get("server")
    token = token or os.environ.get("DRONE_TOKEN") or file_config.get("token")

    if not server:
        raise ConfigError(
            f"Drone server not configured. Set DRONE_SERVER or add 'server:' to {config_path}"
        )
    if not token:
        raise ConfigError(
            f"Drone token not configured. Set DRONE_TOKEN or add 'token:' to {config_path}"
        )

    try:
        timeout = int(file_config.get("timeout", DEFAULT_TIMEOUT))
        min_loading_ms = int(file_config.get("min_loading_ms", DEFAULT_MIN_LOADING_MS))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid number in {config_path}: {e}")

    log_file = file_config.get("log_file")
    return Config(
        server=str(server),
        token=str(token),
        timeout=timeout,
        min_loading_ms=min_loading_ms,
        log_level=str(file_config.get("log_level", DEFAULT_LOG_LEVEL)).upper(),
        log_file=Path(log_file).expanduser() if log_file else DEFAULT_LOG_PATH.expanduser(),
    )
