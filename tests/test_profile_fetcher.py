"""Tests for the GitHub profile fetcher."""

from datetime import datetime, timezone

import httpx
import pytest

from tests.helpers import make_event, make_repo
from tools.profile_analyzer.fetcher import (
    FETCH_FAILED_MESSAGE,
    PAGE_SIZE,
    GitHubFetchError,
    GitHubProfileFetcher,
)
from tools.profile_analyzer.models import ActivityEvent, Repository


def full_page(start: int):
    return [make_repo(i) for i in range(start, start + PAGE_SIZE)]


class TestRepositoryModel:
    """Test parsing repository payloads."""

    def test_from_api(self):
        """Test mapping of API fields."""
        data = make_repo(
            7,
            created_at="2024-05-01T10:00:00Z",
            stars=3,
            forks=1,
            name="hello",
            description="Hello world",
            language="Python",
        )

        r = Repository.from_api(data)

        assert r.id == 7
        assert r.name == "hello"
        assert r.description == "Hello world"
        assert r.stars == 3
        assert r.forks == 1
        assert r.language == "Python"
        assert r.created_at == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
        assert r.url == "https://github.com/octocat/hello"

    def test_optional_fields(self):
        """Test missing description and language."""
        r = Repository.from_api(make_repo(1))
        assert r.description is None
        assert r.language is None

    def test_immutable(self):
        """Test that repositories cannot be modified."""
        r = Repository.from_api(make_repo(1))
        with pytest.raises(AttributeError):
            r.stars = 10


class TestActivityEventModel:
    """Test parsing event payloads."""

    def test_push_event(self):
        """Test that push events carry their commit count."""
        event = ActivityEvent.from_api(make_event("PushEvent", "2024-06-10T12:00:00Z", size=4))

        assert event.is_push
        assert event.size == 4
        assert event.created_at == datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)

    def test_other_event(self):
        """Test that non-push events have no size."""
        event = ActivityEvent.from_api(make_event("WatchEvent"))

        assert not event.is_push
        assert event.size == 0


class TestFetchRepositories:
    """Test repository pagination."""

    def test_no_repositories(self, github):
        """Test that a user without repositories yields an empty list."""
        repos = github.fetcher().fetch_repositories("octocat")

        assert repos == []
        assert github.paths() == ["/users/octocat/repos"]

    def test_single_page(self, github):
        """Test a partial first page followed by an empty page."""
        github.pages = [[make_repo(1), make_repo(2)]]

        repos = github.fetcher().fetch_repositories("octocat")

        assert [r.id for r in repos] == [1, 2]
        assert len(github.requests) == 2

    def test_full_page_then_empty(self, github):
        """Test that a full page is followed by exactly one more request."""
        github.pages = [full_page(1)]

        repos = github.fetcher().fetch_repositories("octocat")

        assert len(repos) == PAGE_SIZE
        assert [r.id for r in repos] == list(range(1, PAGE_SIZE + 1))
        assert [r.url.params["page"] for r in github.requests] == ["1", "2"]

    def test_concatenates_pages_in_order(self, github):
        """Test several pages are joined in API order."""
        github.pages = [full_page(1), full_page(101), [make_repo(201), make_repo(202)]]

        repos = github.fetcher().fetch_repositories("octocat")

        assert [r.id for r in repos] == list(range(1, 203))
        assert [r.url.params["page"] for r in github.requests] == ["1", "2", "3", "4"]

    def test_request_parameters(self, github):
        """Test sort order and page size sent upstream."""
        github.fetcher().fetch_repositories("octocat")

        params = github.requests[0].url.params
        assert params["sort"] == "updated"
        assert params["per_page"] == "100"
        assert params["page"] == "1"

    def test_failure_discards_partial_results(self, github):
        """Test that a failed later page raises instead of returning page 1."""
        github.pages = [full_page(1), full_page(101)]
        github.fail_on["repos:2"] = 500

        with pytest.raises(GitHubFetchError) as exc_info:
            github.fetcher().fetch_repositories("octocat")

        assert exc_info.value.status_code == 500
        assert str(exc_info.value) == FETCH_FAILED_MESSAGE
        assert len(github.requests) == 2

    def test_unknown_user(self, github):
        """Test that a 404 raises the generic error."""
        github.fail_on["repos:1"] = 404

        with pytest.raises(GitHubFetchError) as exc_info:
            github.fetcher().fetch_repositories("nobody")

        assert exc_info.value.status_code == 404
        assert exc_info.value.url.endswith("/users/nobody/repos")

    def test_rate_limited(self, github):
        """Test that a 403 is not retried."""
        github.fail_on["repos:1"] = 403

        with pytest.raises(GitHubFetchError):
            github.fetcher().fetch_repositories("octocat")

        assert len(github.requests) == 1

    def test_network_error(self):
        """Test that transport errors become the generic error."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        fetcher = GitHubProfileFetcher(token="t", transport=httpx.MockTransport(handler))

        with pytest.raises(GitHubFetchError) as exc_info:
            fetcher.fetch_repositories("octocat")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.parametrize(
        "username, expected",
        [
            ("octo?cat", "/users/octo%3Fcat/repos"),
            ("a/b", "/users/a%2Fb/repos"),
            ("..", "/users/%2E%2E/repos"),
            ("octo cat#1", "/users/octo%20cat%231/repos"),
        ],
    )
    def test_username_is_one_path_segment(self, github, username, expected):
        """Test that reserved characters in the username are percent-encoded."""
        github.fail_on["repos:1"] = 404

        with pytest.raises(GitHubFetchError) as exc_info:
            github.fetcher().fetch_repositories(username)

        assert str(exc_info.value) == FETCH_FAILED_MESSAGE
        assert github.raw_paths() == [expected]
        assert github.requests[0].url.params["per_page"] == "100"

    def test_encoded_events_path(self, github):
        """Test that the events request encodes the username the same way."""
        github.fetcher().fetch_events("octocat?")

        assert github.raw_paths() == ["/users/octocat%3F/events/public"]

    def test_pages_are_lazy(self, github):
        """Test that pages are only requested as they are consumed."""
        github.pages = [full_page(1), full_page(101)]

        pages = github.fetcher().iter_repository_pages("octocat")
        first = next(pages)

        assert len(first) == PAGE_SIZE
        assert len(github.requests) == 1
        pages.close()


class TestFetchEvents:
    """Test the events request."""

    def test_events(self, github):
        """Test parsing a page of events."""
        github.events = [
            make_event("PushEvent", "2024-06-10T12:00:00Z", size=4),
            make_event("CreateEvent", "2024-06-09T12:00:00Z"),
        ]

        events = github.fetcher().fetch_events("octocat")

        assert [e.kind for e in events] == ["PushEvent", "CreateEvent"]
        assert events[0].size == 4
        assert github.paths() == ["/users/octocat/events/public"]

    def test_events_failure(self, github):
        """Test that a failed events request raises."""
        github.fail_on["events"] = 404

        with pytest.raises(GitHubFetchError) as exc_info:
            github.fetcher().fetch_events("octocat")

        assert exc_info.value.status_code == 404


class TestConfiguration:
    """Test fetcher settings."""

    def test_token_header(self, github):
        """Test that a token is sent as an Authorization header."""
        github.fetcher(token="abc123").fetch_events("octocat")

        headers = github.requests[0].headers
        assert headers["Authorization"] == "token abc123"
        assert headers["Accept"] == "application/vnd.github.v3+json"
        assert headers["User-Agent"] == "github-profile-analyzer"

    def test_token_from_env(self, monkeypatch):
        """Test GITHUB_TOKEN fallback."""
        monkeypatch.setenv("GITHUB_TOKEN", "from-env")
        fetcher = GitHubProfileFetcher()
        assert fetcher.headers["Authorization"] == "token from-env"

    def test_unauthenticated(self, monkeypatch):
        """Test that no Authorization header is sent without a token."""
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        fetcher = GitHubProfileFetcher()
        assert fetcher.token is None
        assert "Authorization" not in fetcher.headers

    def test_base_url_from_env(self, monkeypatch, github):
        """Test GITHUB_API_URL override."""
        monkeypatch.setenv("GITHUB_API_URL", "https://github.example.com/api/v3/")

        github.fetcher().fetch_events("octocat")

        url = github.requests[0].url
        assert url.host == "github.example.com"
        assert url.path == "/api/v3/users/octocat/events/public"

    def test_default_base_url(self, monkeypatch):
        """Test the public API is used by default."""
        monkeypatch.delenv("GITHUB_API_URL", raising=False)
        assert GitHubProfileFetcher(token="t").base_url == "https://api.github.com"
