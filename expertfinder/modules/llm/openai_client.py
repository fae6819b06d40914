"""
OpenAI chat-completions client.

Two calls are made per search: one for the free-text answer and one for a
short topic that drives the expert search.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ...config.provider import OpenAIConfig
from ..config import get_prompt
from ..upstream import UpstreamServiceError

logger = logging.getLogger(__name__)

SERVICE_NAME = "openai"


class OpenAIClient:
    """Thin async wrapper over the chat-completions endpoint."""

    def __init__(self, config: OpenAIConfig, http_client: httpx.AsyncClient):
        """
        Initialize the client.

        Args:
            config: LLM provider configuration
            http_client: Shared async HTTP client (owned by the caller)
        """
        self.config = config
        self.http = http_client
        self.url = f"{config.base_url}/chat/completions"

    async def get_answer(self, query: str) -> str:
        """
        Ask the model to answer a query.

        Returns:
            Markdown/plain-text answer, or "" if the model returned no content
        """
        content = await self._complete(
            [
                {"role": "system", "content": get_prompt("answer")},
                {"role": "user", "content": f"Answer the following query:\n\n{query}"},
            ],
            max_tokens=self.config.answer_max_tokens,
        )
        return content or ""

    async def extract_topic(self, query: str) -> Optional[str]:
        """
        Ask the model for the main topic (1-3 words) of a query.

        Returns:
            Trimmed topic, or None if the model returned no content
        """
        content = await self._complete(
            [
                {"role": "system", "content": get_prompt("topic")},
                {
                    "role": "user",
                    "content": f"Extract the single main topic (1-3 words) from:\n\n{query}",
                },
            ],
            max_tokens=self.config.topic_max_tokens,
            temperature=0,
        )
        return content.strip() if content else None

    async def _complete(
        self,
        messages: List[Dict[str, str]],
        max_tokens: int,
        temperature: Optional[float] = None,
    ) -> Optional[str]:
        body: Dict[str, Any] = {
            "model": self.config.model,
            "messages": messages,
            "max_tokens": max_tokens,
        }
        if temperature is not None:
            body["temperature"] = temperature

        try:
            response = await self.http.post(
                self.url,
                json=body,
                headers={"Authorization": f"Bearer {self.config.api_key}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"OpenAI request failed: {e}")
            raise UpstreamServiceError(SERVICE_NAME, f"request failed: {e}") from e

        if response.is_error:
            logger.error(
                f"OpenAI returned {response.status_code}. Body: {response.text[:1000]}"
            )
            raise UpstreamServiceError(
                SERVICE_NAME, f"returned {response.status_code}", response.status_code
            )

        try:
            return response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected OpenAI payload: {e}")
            raise UpstreamServiceError(SERVICE_NAME, "unexpected response payload") from e
