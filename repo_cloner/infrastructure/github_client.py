import aiohttp
import logging
from typing import Any, Dict, List

from repo_cloner.domain.exceptions import GitHubAPIError, ResponseDecodeError
from repo_cloner.infrastructure.config import Settings

logger = logging.getLogger(__name__)

# Versioned JSON media type of the GitHub REST API
ACCEPT_HEADER = "application/vnd.github.v3+json"


class GitHubRESTClient:
    """
    Client for the GitHub REST API.
    Builds authenticated requests, issues them and decodes the JSON bodies.
    """

    def __init__(self, settings: Settings):
        self.headers = {
            "Accept": ACCEPT_HEADER,
            "User-Agent": settings.user_agent,
            "Authorization": f"token {settings.token}",
        }
        self.api_url = settings.api_url

    def repos_url(self, user: str) -> str:
        return f"{self.api_url}/users/{user}/repos"

    def request(self, session: aiohttp.ClientSession, method: str, url: str):
        """Returns an authenticated request, sent when entered with `async with`."""
        return session.request(method, url, headers=self.headers)

    async def issue(self, request) -> Any:
        """
        Sends a request built by `request` and decodes its JSON body.

        Raises:
            GitHubAPIError: On a non-success status; carries the raw body text.
            ResponseDecodeError: If the body is not valid JSON.
        """
        async with request as response:
            url = str(response.url)
            if not 200 <= response.status < 300:
                # Error bodies are not guaranteed to be valid in the declared charset
                body = await response.text(errors="replace")
                logger.debug(f"GET {url} failed with status {response.status}")
                raise GitHubAPIError(status=response.status, body=body, url=url)
            try:
                return await response.json(content_type=None)
            except ValueError as e:
                raise ResponseDecodeError(url=url, reason=str(e)) from e

    async def list_repositories(self, session: aiohttp.ClientSession, user: str) -> List[Dict[str, Any]]:
        """
        Fetches the public repositories of a user.

        Only the first page returned by the API is read; pagination links are not followed.
        """
        url = self.repos_url(user)
        data = await self.issue(self.request(session, "GET", url))
        if not isinstance(data, list):
            raise ResponseDecodeError(url=url, reason=f"expected a JSON array, got {type(data).__name__}")
        return data

    async def fetch_languages(self, session: aiohttp.ClientSession, url: str) -> Dict[str, int]:
        """Fetches the language name to byte count mapping of one repository."""
        data = await self.issue(self.request(session, "GET", url))
        if not isinstance(data, dict):
            raise ResponseDecodeError(url=url, reason=f"expected a JSON object, got {type(data).__name__}")
        for language, count in data.items():
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise ResponseDecodeError(url=url, reason=f"invalid byte count for '{language}': {count!r}")
        return data
