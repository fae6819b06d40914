"""
Authentication Service Facade.

This module provides:
- A clean interface the HTTP layer uses for authentication
- Standardized authentication results
- Bearer credential extraction from the Authorization header
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from .authority import TokenAuthority, fingerprint

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the session token out of an Authorization header value.

    Accepts both "Bearer <token>" (prefix matched case-insensitively) and
    the raw token.

    Returns:
        The token, or None if the header is missing or blank
    """
    if not authorization or not authorization.strip():
        return None

    if authorization.lower().startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX):].strip()
    else:
        token = authorization.strip()

    return token or None


@dataclass
class AuthResult:
    """Standardized authentication result."""
    ok: bool
    session_token: Optional[str]
    error: Optional[str] = None


class AuthenticationService(Protocol):
    """Protocol for authentication services."""

    authority: TokenAuthority

    def exchange(self, one_time_token: Optional[str]) -> Optional[str]:
        """Redeem a one-time token, returning a session token or None."""
        ...

    def authenticate(self, authorization: Optional[str]) -> AuthResult:
        """Validate the session credential carried by an Authorization header."""
        ...

    def revoke(self, authorization: Optional[str]) -> None:
        """End the session carried by an Authorization header."""
        ...


class DefaultAuthenticationService:
    """
    Default implementation of AuthenticationService.

    Wraps a TokenAuthority and writes an audit trail to the log. Token values
    never appear in the log; sessions are identified by a fingerprint.
    """

    def __init__(self, authority: TokenAuthority):
        self.authority = authority

    def exchange(self, one_time_token: Optional[str]) -> Optional[str]:
        session_token = self.authority.consume_one_time_token(one_time_token)

        if session_token is None:
            self._log_event("one_time_token_rejected", {})
            return None

        self._log_event(
            "session_created",
            {
                "session": fingerprint(session_token),
                "lifetime_seconds": int(self.authority.session_lifetime.total_seconds()),
            },
        )
        return session_token

    def authenticate(self, authorization: Optional[str]) -> AuthResult:
        session_token = extract_bearer_token(authorization)

        if session_token and self.authority.validate_session(session_token):
            return AuthResult(ok=True, session_token=session_token)

        return AuthResult(ok=False, session_token=None, error="Invalid credentials")

    def revoke(self, authorization: Optional[str]) -> None:
        session_token = extract_bearer_token(authorization)
        if not session_token:
            return

        self.authority.revoke_session(session_token)
        self._log_event("session_revoked", {"session": fingerprint(session_token)})

    def _log_event(self, event_type: str, data: dict) -> None:
        """Log a security event for audit."""
        logger.info(f"auth event={event_type} {data}")
