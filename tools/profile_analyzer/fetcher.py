"""GitHub REST calls for a user's repositories and public events."""

import os
from typing import Iterator, List, Optional
from urllib.parse import quote

import httpx

from shared.logger import get_logger

from .models import ActivityEvent, Repository

logger = get_logger(__name__)

DEFAULT_API_URL = "https://api.github.com"
PAGE_SIZE = 100

FETCH_FAILED_MESSAGE = "Failed to fetch GitHub data. Please check the username."


def user_path(username: str) -> str:
    """
    API path of a user, with the login encoded as a single path segment.

    Dots are escaped too, so "." and ".." never collapse into other paths.
    """
    return "/users/" + quote(username, safe="").replace(".", "%2E")


class ProfileAnalyzerError(Exception):
    """Base error for profile analysis."""


class GitHubFetchError(ProfileAnalyzerError):
    """
    Any failed call to the GitHub API.

    The message is always the generic user-facing one; status_code is kept
    for logging (None for transport errors).
    """

    def __init__(self, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(FETCH_FAILED_MESSAGE)
        self.status_code = status_code
        self.url = url


class GitHubProfileFetcher:
    """
    Fetch a user's public repositories and recent events.

    Uses GitHub API v3 (REST). Requests are sequential and never retried;
    there is no rate-limit handling.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            token: GitHub personal access token (optional)
            base_url: API root, defaults to GITHUB_API_URL or api.github.com
            timeout: Per-request timeout in seconds
            transport: Custom httpx transport (used by tests)
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        self.base_url = (base_url or os.getenv("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/")
        self.timeout = timeout
        self.transport = transport

        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "github-profile-analyzer",
        }

        if self.token:
            self.headers["Authorization"] = f"token {self.token}"
            logger.debug("Using authenticated GitHub API")
        else:
            logger.warning("No GitHub token found. Rate limits: 60 req/hour (vs 5000 with token)")

    def _client(self) -> httpx.Client:
        return httpx.Client(
            headers=self.headers,
            timeout=self.timeout,
            transport=self.transport,
        )

    def _get(self, client: httpx.Client, path: str, params: Optional[dict] = None):
        url = f"{self.base_url}{path}"
        try:
            response = client.get(url, params=params)
        except httpx.RequestError as e:
            logger.error(f"Network error: {e}")
            raise GitHubFetchError(url=url) from e

        if not response.is_success:
            logger.error(f"GET {url} failed: {response.status_code}")
            raise GitHubFetchError(status_code=response.status_code, url=url)

        return response.json()

    def iter_repository_pages(self, username: str) -> Iterator[List[dict]]:
        """
        Lazily yield raw repository pages, stopping at the first empty page.

        Args:
            username: GitHub login

        Yields:
            Non-empty lists of repository objects, in API order
        """
        page = 1
        with self._client() as client:
            while True:
                logger.debug(f"Fetching repositories for {username}, page {page}")
                items = self._get(
                    client,
                    f"{user_path(username)}/repos",
                    params={"sort": "updated", "per_page": PAGE_SIZE, "page": page},
                )
                if not items:
                    return
                yield items
                page += 1

    def fetch_repositories(self, username: str) -> List[Repository]:
        """
        Get every public repository of a user, most recently updated first.

        Args:
            username: GitHub login

        Returns:
            List of Repository; empty when the user has none

        Raises:
            GitHubFetchError: on any failed page (nothing partial is returned)
        """
        logger.info(f"Fetching repositories for {username}")

        repositories: List[Repository] = []
        for items in self.iter_repository_pages(username):
            repositories.extend(Repository.from_api(item) for item in items)

        logger.info(f"Fetched {len(repositories)} repositories for {username}")
        return repositories

    def fetch_events(self, username: str) -> List[ActivityEvent]:
        """
        Get one page of a user's recent public events.

        The API only exposes a short recent window, so older activity is absent.

        Args:
            username: GitHub login

        Returns:
            List of ActivityEvent

        Raises:
            GitHubFetchError: if the request fails
        """
        logger.info(f"Fetching public events for {username}")

        with self._client() as client:
            items = self._get(client, f"{user_path(username)}/events/public")

        events = [ActivityEvent.from_api(item) for item in items]
        logger.debug(f"Fetched {len(events)} events for {username}")
        return events
