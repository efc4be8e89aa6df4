"""GitHub Profile Analyzer - monthly activity charts for a GitHub user."""

from .aggregator import aggregate_monthly, month_window
from .analyzer import EmptyUsernameError, ProfileAnalyzer, ProfileReport
from .fetcher import GitHubFetchError, GitHubProfileFetcher, ProfileAnalyzerError
from .models import ActivityEvent, MonthKey, MonthlyBucket, Repository, format_month
from .state import ErrorKind, InvalidTransition, Phase, ViewState

__all__ = [
    "ActivityEvent",
    "EmptyUsernameError",
    "ErrorKind",
    "GitHubFetchError",
    "GitHubProfileFetcher",
    "InvalidTransition",
    "MonthKey",
    "MonthlyBucket",
    "Phase",
    "ProfileAnalyzer",
    "ProfileAnalyzerError",
    "ProfileReport",
    "Repository",
    "ViewState",
    "aggregate_monthly",
    "format_month",
    "month_window",
]
