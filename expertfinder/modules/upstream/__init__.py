"""
Upstream Module - shared plumbing for third-party API calls.

Purpose: One HTTP client and one error type for the LLM and search modules
Interface: build_http_client(), UpstreamServiceError
"""

from typing import Optional

import httpx


class UpstreamServiceError(RuntimeError):
    """A third-party API call failed or returned an unusable payload."""

    def __init__(self, service: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{service}: {message}")
        self.service = service
        self.status_code = status_code


def build_http_client(timeout: float = 30.0) -> httpx.AsyncClient:
    """Create the shared async HTTP client used for all upstream calls."""
    return httpx.AsyncClient(timeout=httpx.Timeout(timeout))


__all__ = ["UpstreamServiceError", "build_http_client"]
