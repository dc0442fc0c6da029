"""Configuration management for fiobank."""

import json
import os
from pathlib import Path
from typing import Any

from fiobank.client import DEFAULT_BASE_URL

# Default config filename
CONFIG_FILENAME = "config.json"

TOKEN_ENV_VAR = "FIO_API_TOKEN"
BASE_URL_ENV_VAR = "FIO_API_BASE_URL"


def get_config_dir() -> Path:
    """Get the config directory path (XDG compliant)."""
    xdg_config_home = os.getenv("XDG_CONFIG_HOME", str(Path.home() / ".config"))
    return Path(xdg_config_home) / "fiobank"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_config_dir() / CONFIG_FILENAME


def find_config_file() -> Path | None:
    """Find the config file in standard locations.

    Searches for config in the following order:
    1. config.json in current directory
    2. XDG config: ~/.config/fiobank/config.json
    """
    config_paths = [
        Path(CONFIG_FILENAME),
        get_config_path(),
    ]

    for path in config_paths:
        if path.exists():
            return path

    return None


def load_json_config(config_path: Path) -> dict[str, Any]:
    """Load configuration from a JSON file."""
    with open(config_path) as f:
        return json.load(f)  # type: ignore[no-any-return]


def save_json_config(config: dict[str, Any], config_path: Path | None = None) -> Path:
    """Save configuration to a JSON file.

    The file holds the API token, so it is created readable by the owner only.

    Args:
        config: Configuration dictionary to save
        config_path: Path to save to (defaults to XDG config location)

    Returns:
        Path where config was saved
    """
    if config_path is None:
        config_path = get_config_path()

    # Ensure directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        json.dump(config, f, indent=2)
        f.write("\n")
    config_path.chmod(0o600)

    return config_path


def load_config(config_path: Path | None = None) -> dict[str, Any] | None:
    """Load configuration from config file.

    Args:
        config_path: Explicit path to config.json file

    Returns:
        Loaded config dict or None if not found
    """
    if config_path:
        return load_json_config(config_path)

    config_file = find_config_file()
    if config_file:
        return load_json_config(config_file)

    return None


def _fio_section(config: dict[str, Any] | None) -> dict[str, Any]:
    if not config:
        return {}
    return config.get("fio") or {}


def get_api_token(
    config: dict[str, Any] | None = None,
    override: str | None = None,
) -> str | None:
    """Get the Fio API token.

    Args:
        config: Loaded JSON config
        override: Optional token to use instead of environment or config

    Returns:
        Token string or None if not configured
    """
    if override:
        return override

    if token := os.getenv(TOKEN_ENV_VAR):
        return token

    if token := _fio_section(config).get("token"):
        return token  # type: ignore[no-any-return]

    return None


def get_base_url(
    config: dict[str, Any] | None = None,
    override: str | None = None,
) -> str:
    """Get the API base URL, falling back to the public Fio endpoint."""
    if override:
        return override

    if base_url := os.getenv(BASE_URL_ENV_VAR):
        return base_url

    if base_url := _fio_section(config).get("base_url"):
        return base_url  # type: ignore[no-any-return]

    return DEFAULT_BASE_URL


def create_default_config() -> dict[str, Any]:
    """Create a default empty configuration."""
    return {
        "fio": {
            "token": None,
            "base_url": None,
        },
    }
