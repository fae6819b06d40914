"""
ExpertFinder shared data models.

These models define the structure of all data passed between
the HTTP layer, the upstream clients and API callers.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Request Models (API Input)


class TokenExchangeRequest(BaseModel):
    """Request to redeem a one-time token."""

    token: Optional[str] = Field(None, description="One-time access token")


class SearchRequest(BaseModel):
    """Request to find experts for a free-text query."""

    query: Optional[str] = Field(None, description="Free-text question")
    location: Optional[str] = Field(None, description="Location to search experts in")


# Response Models (API Output)


class TokenExchangeResponse(BaseModel):
    """Successful token exchange."""

    model_config = ConfigDict(populate_by_name=True)

    valid: bool = True
    session_token: str = Field(..., alias="sessionToken")


class TokenRejectedResponse(BaseModel):
    """Failed token exchange. Does not say why."""

    valid: bool = False
    message: str = "Invalid Token - Please add a Valid Token"


class MessageResponse(BaseModel):
    """Plain message, used for client errors."""

    message: str


class ExpertLink(BaseModel):
    """A single profile link returned by web search."""

    title: str = ""
    url: str = ""
    snippet: str = ""


class SearchResponse(BaseModel):
    """Combined answer, topic and expert links."""

    answer: str = Field(..., description="Sanitized HTML rendering of the LLM answer")
    topic: str = Field(..., description="Topic used for the expert search")
    experts: List[ExpertLink] = Field(default_factory=list)
