"""Fetch-then-aggregate flow for a single username."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from shared.logger import get_logger

from .aggregator import aggregate_monthly
from .fetcher import FETCH_FAILED_MESSAGE, GitHubFetchError, GitHubProfileFetcher, ProfileAnalyzerError
from .models import MonthlyBucket, Repository
from .state import ErrorKind, InvalidTransition, Phase, ViewState

logger = get_logger(__name__)

EMPTY_USERNAME_MESSAGE = "Please enter a GitHub username"

# Shown next to the commit chart: the events endpoint only reaches back a
# few months, so older commit counts read as zero.
COMMITS_NOTE = (
    "Commit counts come from the public events feed, which only covers "
    "recent activity (roughly the last 90 events); older months may show zero."
)


class EmptyUsernameError(ProfileAnalyzerError):
    """Raised before any network call when no username was given."""

    def __init__(self):
        super().__init__(EMPTY_USERNAME_MESSAGE)


@dataclass
class ProfileReport:
    """Result of analyzing one user."""

    username: str
    repositories: List[Repository]
    buckets: List[MonthlyBucket]
    event_count: int = 0

    @property
    def total_stars(self) -> int:
        return sum(r.stars for r in self.repositories)

    @property
    def total_forks(self) -> int:
        return sum(r.forks for r in self.repositories)


class ProfileAnalyzer:
    """Runs an analysis and drives the view state through it."""

    def __init__(self, fetcher: Optional[GitHubProfileFetcher] = None):
        self.fetcher = fetcher or GitHubProfileFetcher()

    def analyze(self, username: str, anchor: Optional[datetime] = None) -> ProfileReport:
        """
        Fetch all repositories, then recent events, then aggregate.

        Args:
            username: GitHub login (surrounding whitespace ignored)
            anchor: Reference time for the monthly window (defaults to now)

        Returns:
            ProfileReport

        Raises:
            EmptyUsernameError: if username is blank
            GitHubFetchError: if any request fails
        """
        username = (username or "").strip()
        if not username:
            raise EmptyUsernameError()

        logger.info(f"Analyzing {username}")
        repositories = self.fetcher.fetch_repositories(username)
        events = self.fetcher.fetch_events(username)
        buckets = aggregate_monthly(repositories, events, anchor=anchor)

        return ProfileReport(
            username=username,
            repositories=repositories,
            buckets=buckets,
            event_count=len(events),
        )

    def run(self, state: ViewState, username: str, anchor: Optional[datetime] = None) -> ViewState:
        """
        Analyze a username and record the outcome in state.

        A state left in success or error is reset first; a state that is
        still loading raises InvalidTransition. Errors other than
        GitHubFetchError move the state to error and are re-raised.

        Args:
            state: View state to update
            username: Submitted username
            anchor: Reference time for the monthly window

        Returns:
            The same state, now in success or error
        """
        if state.loading:
            raise InvalidTransition(state.phase, Phase.LOADING)
        if state.phase in (Phase.SUCCESS, Phase.ERROR):
            state.reset()

        username = (username or "").strip()
        if not username:
            state.username = ""
            state.fail(EMPTY_USERNAME_MESSAGE, kind=ErrorKind.INPUT)
            return state

        state.begin(username)
        try:
            report = self.analyze(username, anchor=anchor)
        except GitHubFetchError as e:
            logger.error(f"Analysis of {username} failed (status {e.status_code})")
            state.fail(str(e), kind=ErrorKind.FETCH)
            return state
        except Exception:
            # Unexpected payloads still end the request; the error propagates
            logger.exception(f"Analysis of {username} failed unexpectedly")
            state.fail(FETCH_FAILED_MESSAGE, kind=ErrorKind.UNEXPECTED)
            raise

        state.succeed(report.repositories, report.buckets)
        return state
