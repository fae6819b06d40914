"""
Authentication Module - Black Box Interface

Purpose: Exchange one-time tokens for sessions and validate sessions
Interface: TokenAuthority, AuthFactory.build(), AuthenticationService
Hidden: Token storage, locking, expiry bookkeeping

This module can be replaced with any other auth implementation (OAuth, JWT,
external session store) without affecting other modules.
"""

from .authority import MisconfiguredAuthorityError, TokenAuthority
from .factory import AuthFactory
from .service import (
    AuthenticationService,
    AuthResult,
    DefaultAuthenticationService,
    extract_bearer_token,
)

__all__ = [
    "AuthFactory",
    "AuthResult",
    "AuthenticationService",
    "DefaultAuthenticationService",
    "MisconfiguredAuthorityError",
    "TokenAuthority",
    "extract_bearer_token",
]
