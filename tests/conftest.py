"""Fixtures: an in-memory stand-in for the GitHub REST API."""

from typing import Any, Dict, List

import httpx
import pytest

from tools.profile_analyzer.fetcher import GitHubProfileFetcher


class FakeGitHub:
    """
    Serves /users/{user}/repos page by page and /users/{user}/events/public.

    Attributes:
        pages: Repository pages; any page past the end is empty
        events: Events returned by the events endpoint
        fail_on: Map of "repos:<page>" or "events" to an HTTP status to return
        requests: Every request received, in order
    """

    def __init__(self):
        self.pages: List[List[Dict[str, Any]]] = []
        self.events: List[Dict[str, Any]] = []
        self.fail_on: Dict[str, int] = {}
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.endswith("/repos"):
            page = int(request.url.params.get("page", "1"))
            status = self.fail_on.get(f"repos:{page}")
            if status:
                return httpx.Response(status, json={"message": "Not Found"})
            items = self.pages[page - 1] if page <= len(self.pages) else []
            return httpx.Response(200, json=items)

        if path.endswith("/events/public"):
            status = self.fail_on.get("events")
            if status:
                return httpx.Response(status, json={"message": "Not Found"})
            return httpx.Response(200, json=self.events)

        return httpx.Response(404, json={"message": "Not Found"})

    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]

    def raw_paths(self) -> List[str]:
        """Paths as sent on the wire, still percent-encoded, without the query."""
        return [r.url.raw_path.decode("ascii").split("?")[0] for r in self.requests]

    def fetcher(self, **kwargs) -> GitHubProfileFetcher:
        kwargs.setdefault("token", "test-token")
        return GitHubProfileFetcher(transport=httpx.MockTransport(self.handler), **kwargs)


@pytest.fixture
def github():
    """Fresh fake GitHub API."""
    return FakeGitHub()
