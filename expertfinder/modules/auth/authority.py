"""
Token authority for the ExpertFinder API.

Owns the two in-memory stores behind authentication:
- one-time tokens handed out of band, each redeemable exactly once
- session tokens issued on redemption, valid for a fixed window

Nothing is persisted. A process restart forgets every session and restores
the configured one-time tokens.
"""

import hashlib
import logging
import threading
import uuid
from datetime import UTC, datetime, timedelta
from typing import Callable, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

DEFAULT_SESSION_LIFETIME = timedelta(hours=4)


class MisconfiguredAuthorityError(ValueError):
    """Raised when the authority is constructed without a token source."""


def _utc_now() -> datetime:
    return datetime.now(UTC)


def fingerprint(value: str) -> str:
    """Short, non-reversible identifier for logging a secret."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:12]


class TokenAuthority:
    """
    Exchanges one-time tokens for expiring session tokens.

    All state lives inside the instance. Every public method is safe to call
    from any number of threads at once; callers never need their own lock.
    """

    def __init__(
        self,
        tokens: Optional[Iterable[str]],
        session_lifetime: timedelta = DEFAULT_SESSION_LIFETIME,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Initialize the authority.

        Args:
            tokens: Already-parsed one-time tokens. Blank entries are ignored.
            session_lifetime: Fixed validity window of an issued session
            clock: Returns the current time (timezone-aware)

        Raises:
            MisconfiguredAuthorityError: If tokens is None
        """
        if tokens is None:
            raise MisconfiguredAuthorityError(
                "TokenAuthority requires a collection of one-time tokens"
            )

        self.session_lifetime = session_lifetime
        self._clock = clock
        self._lock = threading.Lock()

        # dict.pop gives test-and-remove in a single step
        self._one_time_tokens: Dict[str, bool] = {}
        self._sessions: Dict[str, datetime] = {}

        for token in tokens:
            if token and token.strip():
                self._one_time_tokens[token.strip()] = True

        if not self._one_time_tokens:
            logger.warning("Token authority started with no one-time tokens; nobody can sign in")
        else:
            logger.info(f"Token authority loaded {len(self._one_time_tokens)} one-time tokens")

    def consume_one_time_token(self, token: Optional[str]) -> Optional[str]:
        """
        Redeem a one-time token for a new session token.

        Args:
            token: Candidate one-time token (surrounding whitespace ignored)

        Returns:
            New session token, or None if the token is blank, unknown or
            already used. The caller cannot tell those cases apart.
        """
        if not token or not token.strip():
            return None
        token = token.strip()

        with self._lock:
            if not self._one_time_tokens.pop(token, False):
                return None

            session_token = uuid.uuid4().hex
            self._sessions[session_token] = self._clock() + self.session_lifetime

        return session_token

    def validate_session(self, session_token: Optional[str]) -> bool:
        """
        Check whether a session token is currently valid.

        An expired session is removed as a side effect. The expiry of a valid
        session is never extended.
        """
        if not session_token or not session_token.strip():
            return False

        with self._lock:
            expires_at = self._sessions.get(session_token)
            if expires_at is None:
                return False

            if expires_at <= self._clock():
                del self._sessions[session_token]
                logger.info(f"Session {fingerprint(session_token)} expired")
                return False

        return True

    def revoke_session(self, session_token: Optional[str]) -> None:
        """Forget a session token. Unknown or blank tokens are ignored."""
        if not session_token or not session_token.strip():
            return

        with self._lock:
            self._sessions.pop(session_token, None)

    def is_one_time_token_unused(self, token: Optional[str]) -> bool:
        """Return True if the one-time token exists and has not been redeemed."""
        if not token or not token.strip():
            return False

        with self._lock:
            return token.strip() in self._one_time_tokens

    def sweep_expired(self) -> int:
        """
        Remove every expired session.

        Validation already evicts expired sessions lazily; this only keeps
        memory bounded when many sessions are never looked at again.

        Returns:
            Number of sessions removed
        """
        with self._lock:
            now = self._clock()
            expired = [s for s, expires_at in self._sessions.items() if expires_at <= now]
            for session_token in expired:
                del self._sessions[session_token]

        return len(expired)

    def active_session_count(self) -> int:
        """Number of stored sessions, including expired ones not yet evicted."""
        with self._lock:
            return len(self._sessions)

    def unused_token_count(self) -> int:
        """Number of one-time tokens still available."""
        with self._lock:
            return len(self._one_time_tokens)
