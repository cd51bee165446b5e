# SPDX-License-Identifier: MIT
"""Configuration management for sora-relay MCP server.

This module handles:
- API credential lookup
- Remote endpoint and timeout settings
- Logging setup
"""

import logging
import os
import sys

from .exceptions import MissingCredentialError

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_HTTP_TIMEOUT = 60.0

# ---------- Logging configuration ----------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,  # Log to stderr to avoid interfering with stdio MCP transport
)
logger = logging.getLogger("sora_relay")


# ---------- Credentials (read per call) ----------
def get_api_key() -> str:
    """Get the bearer credential for the Sora API.

    Returns:
        The value of OPENAI_API_KEY

    Raises:
        MissingCredentialError: If OPENAI_API_KEY is not set or blank
    """
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key or not api_key.strip():
        raise MissingCredentialError("OPENAI_API_KEY environment variable is not set")
    return api_key.strip()


def get_base_url() -> str:
    """Base endpoint of the video API, without trailing slash."""
    base_url = os.getenv("OPENAI_BASE_URL", "").strip()
    return (base_url or DEFAULT_BASE_URL).rstrip("/")


def get_http_timeout() -> float:
    """Get the per-request HTTP timeout in seconds.

    Raises:
        RuntimeError: If SORA_HTTP_TIMEOUT is not a positive number
    """
    raw = os.getenv("SORA_HTTP_TIMEOUT", "").strip()
    if not raw:
        return DEFAULT_HTTP_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError as e:
        raise RuntimeError(f"Invalid SORA_HTTP_TIMEOUT '{raw}': must be a number of seconds") from e
    if timeout <= 0:
        raise RuntimeError(f"Invalid SORA_HTTP_TIMEOUT '{raw}': must be positive")
    return timeout
