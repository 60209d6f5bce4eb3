"""Load and validate environment variables. Uses python-dotenv.

This module is intentionally thin and side-effect free except for loading `.env`.
Callers should use the accessor functions below rather than reading `os.environ`
directly, to keep environment handling consistent.
"""

from __future__ import annotations

import os

from dotenv import find_dotenv, load_dotenv

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")

PAYLOAD_FORMATS = ("form", "json")


def load_config() -> None:
    """
    Load the nearest .env, searching upward from the working directory.
    Idempotent; values already present in the environment win.
    """
    load_dotenv(find_dotenv(usecwd=True), override=False)


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    """Get optional env var as int; return default if missing or invalid."""
    raw = get_optional(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_optional_float(key: str, default: float) -> float:
    """Get optional env var as float; return default if missing or invalid."""
    raw = get_optional(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def get_optional_bool(key: str, default: bool) -> bool:
    """Get optional env var as bool (1/true/yes/on); return default if missing or invalid."""
    raw = get_optional(key).lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    return default


# --- Public config accessors ---

def request_timeout() -> float:
    """Optional: seconds before the default transport gives up on a request. Default 30."""
    return get_optional_float("EASYAPI_TIMEOUT", 30.0)


def max_workers() -> int:
    """Optional: size of the default transport's thread pool. Default 4."""
    return max(1, get_optional_int("EASYAPI_MAX_WORKERS", 4))


def raise_for_status() -> bool:
    """Optional: fail the request future on non-2xx responses. Default false, like fetch."""
    return get_optional_bool("EASYAPI_RAISE_FOR_STATUS", False)


def payload_format() -> str:
    """Optional: how the default transport encodes request data, form or json. Default form."""
    val = get_optional("EASYAPI_PAYLOAD_FORMAT", "form").lower()
    return val if val in PAYLOAD_FORMATS else "form"


def log_level() -> str:
    """Optional: level name for setup_logger. Default INFO."""
    return get_optional("EASYAPI_LOG_LEVEL", "INFO").upper()
