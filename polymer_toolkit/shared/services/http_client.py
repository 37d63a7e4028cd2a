"""
Shared HTTP client utilities.

Centralizes httpx client creation with a fixed overall timeout and a
consistent User-Agent. Each caller owns the client it builds and closes it
when done; nothing is shared process-wide.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

import httpx

from polymer_toolkit import __version__

DEFAULT_TIMEOUT = float(os.getenv("POLYMER_HTTP_TIMEOUT", "60"))
USER_AGENT = os.getenv("POLYMER_HTTP_UA", f"polymer-cli/{__version__}")


def _build_timeout(timeout: float) -> httpx.Timeout:
    return httpx.Timeout(timeout)


def _default_headers() -> Dict[str, str]:
    return {
        "User-Agent": USER_AGENT,
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


def build_client(
    timeout: float = DEFAULT_TIMEOUT,
    headers: Optional[Dict[str, str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Build a synchronous httpx client for JSON-RPC calls."""
    merged = _default_headers()
    if headers:
        merged.update(headers)
    return httpx.Client(
        timeout=_build_timeout(timeout),
        headers=merged,
        transport=transport,
    )
