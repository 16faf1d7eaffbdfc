from __future__ import annotations
from typing import Dict, Any

import httpx

from ..config import ARXIV_API, DEFAULT_USER_AGENT, REQUEST_TIMEOUT, MAX_RESULTS_DEFAULT
from ..errors import SearchTimeout, SearchUnavailable
from ..utils.http import http_get
from ..utils.ratelimit import RateLimiter


class SearchAgent:
    """
    Sends a free-text query to the arXiv export API and returns the raw
    Atom response text.

    Every call first waits on the shared RateLimiter, so arXiv never sees two
    requests from this agent closer together than the limiter's interval.
    """
    def __init__(
        self,
        rate_limiter: RateLimiter,
        timeout: float = REQUEST_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.AsyncClient | None = None,
        base_url: str = ARXIV_API,
    ):
        """
        Initializes the SearchAgent.

        Args:
            rate_limiter (RateLimiter): Limiter shared by all searches of the agent.
            timeout (float): Transport timeout for API requests in seconds.
            user_agent (str): Value of the identifying User-Agent header.
            client (httpx.AsyncClient | None): Optional client to reuse (tests inject a mock transport).
            base_url (str): The arXiv query endpoint.
        """
        self.rate_limiter = rate_limiter
        self.timeout = timeout
        self.user_agent = user_agent
        self.client = client
        self.base_url = base_url

    def plan(self, query: str, max_results: int = MAX_RESULTS_DEFAULT) -> Dict[str, Any]:
        """
        Builds the query parameters for one arXiv search.

        Args:
            query (str): The search query string.
            max_results (int): Number of papers to request.

        Returns:
            Dict[str, Any]: The query-string parameters.
        """
        return {
            "search_query": f"all:{query}",
            "start": 0,
            "max_results": int(max_results),
            "sortBy": "relevance",
            "sortOrder": "descending",
        }

    async def search(self, query: str, max_results: int = MAX_RESULTS_DEFAULT) -> str:
        """
        Runs one rate-limited arXiv search.

        Args:
            query (str): The search query string.
            max_results (int): Number of papers to request.

        Returns:
            str: The raw response body.

        Raises:
            SearchTimeout: The transport timed out.
            SearchUnavailable: arXiv returned a non-success status or the transport failed.
        """
        params = self.plan(query, max_results)
        headers = {"User-Agent": self.user_agent}

        await self.rate_limiter.wait()
        try:
            status, text = await http_get(
                self.base_url,
                params=params,
                headers=headers,
                timeout=self.timeout,
                client=self.client,
            )
        except httpx.TimeoutException as e:
            raise SearchTimeout(f"arXiv request timeout: {e}") from e
        except httpx.HTTPError as e:
            raise SearchUnavailable(f"arXiv request failed: {e}") from e

        if not 200 <= status < 300:
            raise SearchUnavailable(f"ArXiv API error: {status}", status_code=status)
        return text
