"""Interactive setup wizard for fiobank."""

from pathlib import Path
from typing import Any

from fiobank.client import DEFAULT_BASE_URL, TOKEN_LENGTH, FioClient, mask_token
from fiobank.config import (
    create_default_config,
    get_config_path,
    load_config,
    save_json_config,
)
from fiobank.errors import FioError


def verify_token(token: str, base_url: str) -> str:
    """Check a token against the API by asking for the last statement.

    Returns:
        Human readable description of the last statement

    Raises:
        FioError: If the API rejects the token or cannot be reached
    """
    client = FioClient(token, base_url=base_url)
    info = client.fetch_last_statement_info()
    return f"last statement {info.statement_id}/{info.year}"


def prompt_token(existing: str | None = None) -> str | None:
    """Ask for an API token until one of the right length is entered."""
    if existing:
        print(f"\nExisting Fio API token: {mask_token(existing)}")
        use_existing = input("Use this token? [Y/n]: ").strip().lower()
        if use_existing in ("", "y", "yes"):
            return existing

    print("\nGenerate a token in Fio internet banking under Settings > API.")
    while True:
        token = input("Fio API token (empty to cancel): ").strip()
        if not token:
            return None
        if len(token) == TOKEN_LENGTH:
            return token
        print(f"  Token must be {TOKEN_LENGTH} characters, got {len(token)}.")


def run_setup(
    token: str | None = None,
    base_url: str | None = None,
    config_path: Path | None = None,
    verify: bool = True,
) -> dict[str, Any]:
    """Run the setup wizard.

    The flow:
    1. Ask for the API token (or reuse the configured one)
    2. Optionally verify it against the API
    3. Save token and base URL to the config file

    Args:
        token: API token (prompts if not provided)
        base_url: Alternate API base URL to store
        config_path: Where to save the config (defaults to XDG location)
        verify: Call the API once to check the token

    Returns:
        The configuration dictionary
    """
    print("\n" + "=" * 50)
    print("  FIOBANK SETUP")
    print("=" * 50)

    # Load existing config or create new
    config = load_config(config_path if config_path and config_path.exists() else None)
    if config is None:
        config = create_default_config()

    fio = config.setdefault("fio", {})

    if not token:
        token = prompt_token(fio.get("token"))

    if not token:
        print("\nNo token provided. Cannot complete setup.")
        return config

    if len(token) != TOKEN_LENGTH:
        print(f"\nToken must be {TOKEN_LENGTH} characters, got {len(token)}.")
        return config

    fio["token"] = token
    if base_url:
        fio["base_url"] = base_url

    if verify:
        print("\nChecking token...")
        try:
            description = verify_token(token, fio.get("base_url") or DEFAULT_BASE_URL)
        except FioError as e:
            print(f"Error verifying token: {e}")
            print("Please check your token and try again.")
            return config
        print(f"Token OK, {description}.")

    saved_path = save_json_config(config, config_path or get_config_path())

    print("\n" + "=" * 50)
    print("SETUP COMPLETE")
    print("=" * 50)
    print(f"\nConfiguration saved to: {saved_path}")

    print("\nYou can now run:")
    print("  fiobank fetch-last")
    print("  fiobank fetch-period --start 2024-01-01 --end 2024-01-31")

    return config


def show_current_config(config: dict[str, Any]) -> None:
    """Display the current configuration."""
    print("\n" + "=" * 50)
    print("CURRENT CONFIGURATION")
    print("=" * 50)

    fio = config.get("fio") or {}
    token = fio.get("token")
    if token:
        print(f"\nFio API token: {mask_token(token)}")
    else:
        print("\nFio API token: Not configured")

    print(f"Base URL: {fio.get('base_url') or DEFAULT_BASE_URL}")
