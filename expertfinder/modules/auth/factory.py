"""
Authentication Factory.

This factory:
- Constructs the authentication stack based on configuration
- Wires dependencies together
- Returns only the service facade (the authority is reachable through it)
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from .authority import DEFAULT_SESSION_LIFETIME, TokenAuthority
from .service import AuthenticationService, DefaultAuthenticationService
from ...config.provider import ConfigProvider

logger = logging.getLogger(__name__)


class AuthFactory:
    """
    Factory for building the authentication stack.

    This is the composition root that:
    - Creates the token authority from configured one-time tokens
    - Wraps it in the service facade
    """

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        session_lifetime: timedelta = DEFAULT_SESSION_LIFETIME,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> AuthenticationService:
        """
        Build the complete authentication stack.

        Args:
            config_provider: Configuration provider
            session_lifetime: Validity window of issued sessions
            clock: Optional clock override (tests)

        Returns:
            AuthenticationService facade

        Raises:
            ValueError: If no one-time token source is configured
        """
        auth_config = config_provider.get_auth_config()

        kwargs = {"session_lifetime": session_lifetime}
        if clock is not None:
            kwargs["clock"] = clock

        authority = TokenAuthority(auth_config.tokens, **kwargs)
        logger.info(
            f"Built authentication stack (session lifetime {session_lifetime}, "
            f"{authority.unused_token_count()} one-time tokens)"
        )

        return DefaultAuthenticationService(authority)

    @staticmethod
    def build_for_testing(
        tokens,
        session_lifetime: timedelta = DEFAULT_SESSION_LIFETIME,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> AuthenticationService:
        """
        Build an auth stack from a literal token list, bypassing configuration.

        Args:
            tokens: One-time tokens to load
            session_lifetime: Validity window of issued sessions
            clock: Optional clock override

        Returns:
            AuthenticationService for testing
        """
        kwargs = {"session_lifetime": session_lifetime}
        if clock is not None:
            kwargs["clock"] = clock
        return DefaultAuthenticationService(TokenAuthority(tokens, **kwargs))
