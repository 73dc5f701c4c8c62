"""Shared HTTP clients."""

from __future__ import annotations

import functools

import httpx

from cliforge.app.paths import APP_NAME
from cliforge.post_setup import PACKAGE_VERSION

USER_AGENT = f"{APP_NAME}/{PACKAGE_VERSION}"
TIMEOUT_SECS = 30.0


@functools.cache
def client() -> httpx.Client:
    """Return the shared client, with a 30-second overall timeout."""
    return httpx.Client(
        headers={"User-Agent": USER_AGENT},
        timeout=httpx.Timeout(TIMEOUT_SECS),
    )


@functools.cache
def download_client() -> httpx.Client:
    """Return the client for large downloads.

    Only connecting is timed, and uncompressed bodies are requested so binary
    payloads arrive as they are stored.
    """
    return httpx.Client(
        headers={"User-Agent": USER_AGENT, "Accept-Encoding": "identity"},
        timeout=httpx.Timeout(None, connect=TIMEOUT_SECS),
    )