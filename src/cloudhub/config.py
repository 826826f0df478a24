"""Environment-driven settings.

Every value is read when the helper is called, so tests and the CLI can
override settings through environment variables without reloading modules.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_AUTOSAVE_DELAY = 0.5
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class AdminBootstrap:
    """Credentials for the admin account created at start-up."""

    email: str
    password: str
    full_name: str = "Admin User"


def get_storage_root() -> Path:
    """Return the root directory for uploaded files."""
    env_root = os.getenv("CLOUDHUB_STORAGE_DIR")
    if env_root:
        return Path(env_root).expanduser().resolve()
    return PROJECT_ROOT / ".cloudhub_storage"


def get_public_base_url() -> str:
    """Return the prefix used when building public file URLs."""
    return os.getenv("CLOUDHUB_PUBLIC_BASE_URL", "").rstrip("/")


def get_api_token() -> str | None:
    """Return the static bearer token, or None when the API is open."""
    return os.getenv("CLOUDHUB_API_TOKEN") or None


def get_admin_bootstrap() -> AdminBootstrap | None:
    """Return admin bootstrap credentials if both email and password are set."""
    email = os.getenv("CLOUDHUB_ADMIN_EMAIL")
    password = os.getenv("CLOUDHUB_ADMIN_PASSWORD")
    if not email or not password:
        return None
    full_name = os.getenv("CLOUDHUB_ADMIN_NAME") or "Admin User"
    return AdminBootstrap(email=email, password=password, full_name=full_name)


def get_log_level() -> str:
    return os.getenv("CLOUDHUB_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def get_autosave_delay() -> float:
    """Return the client auto-save debounce delay in seconds."""
    raw = os.getenv("CLOUDHUB_AUTOSAVE_DELAY")
    if not raw:
        return DEFAULT_AUTOSAVE_DELAY
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_AUTOSAVE_DELAY
    return value if value >= 0 else DEFAULT_AUTOSAVE_DELAY
