"""
Google Custom Search client for expert profile links.
"""

import logging
from typing import List

import httpx

from ...config.provider import SearchConfig
from ..api.models import ExpertLink
from ..upstream import UpstreamServiceError

logger = logging.getLogger(__name__)

SERVICE_NAME = "google-search"

# Google Custom Search returns at most 10 results per request
MAX_RESULTS_PER_REQUEST = 10


def build_query(topic: str, location: str) -> str:
    """Build a query like: site:linkedin.com/in "computer vision" Stuttgart"""
    return f'site:linkedin.com/in "{topic}" {location}'


class GoogleSearchClient:
    """Searches LinkedIn profiles matching a topic and location."""

    def __init__(self, config: SearchConfig, http_client: httpx.AsyncClient):
        self.config = config
        self.http = http_client

    async def search(self, topic: str, location: str, max_results: int = 8) -> List[ExpertLink]:
        """
        Find expert profile links.

        Args:
            topic: Topic to search for (quoted in the query)
            location: Free-text location
            max_results: Requested result count, clamped to 1..10

        Returns:
            Links with linkedin.com URLs first, original order otherwise

        Raises:
            UpstreamServiceError: If the search API fails
        """
        num = max(1, min(max_results, MAX_RESULTS_PER_REQUEST))
        params = {
            "key": self.config.api_key,
            "cx": self.config.engine_id,
            "q": build_query(topic, location),
            "num": num,
        }

        logger.info(f"Google search: q={params['q']!r} num={num}")

        try:
            response = await self.http.get(self.config.base_url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Google Custom Search request failed: {e}")
            raise UpstreamServiceError(SERVICE_NAME, f"request failed: {e}") from e

        if response.is_error:
            logger.error(
                f"Google Custom Search returned {response.status_code}. Body: {response.text}"
            )
            raise UpstreamServiceError(
                SERVICE_NAME, f"returned {response.status_code}", response.status_code
            )

        try:
            items = response.json().get("items") or []
        except ValueError as e:
            raise UpstreamServiceError(SERVICE_NAME, "response is not JSON") from e

        links = [
            ExpertLink(
                title=item.get("title") or "",
                url=item.get("link") or "",
                snippet=item.get("snippet") or "",
            )
            for item in items
        ]

        # sorted() is stable, so order within each group is preserved
        links = sorted(links, key=lambda link: "linkedin.com" not in link.url)
        return links[:num]
