"""
API Module - Black Box Interface

Purpose: Request and response models for the HTTP layer
Interface: Pydantic models
Hidden: Field aliases, defaults

The API layer only orchestrates - it contains no business logic.
All logic is delegated to the auth, llm, search and render modules.
"""

from .models import (
    ExpertLink,
    MessageResponse,
    SearchRequest,
    SearchResponse,
    TokenExchangeRequest,
    TokenExchangeResponse,
    TokenRejectedResponse,
)

__all__ = [
    "ExpertLink",
    "MessageResponse",
    "SearchRequest",
    "SearchResponse",
    "TokenExchangeRequest",
    "TokenExchangeResponse",
    "TokenRejectedResponse",
]
