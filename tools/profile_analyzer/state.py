"""Presentation state for one profile analysis."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from shared.logger import get_logger

from .models import MonthlyBucket, Repository

logger = get_logger(__name__)


class Phase(str, Enum):
    """Lifecycle of an analysis request."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class ErrorKind(str, Enum):
    """Why an analysis ended in the error phase."""

    INPUT = "input"
    FETCH = "fetch"
    UNEXPECTED = "unexpected"


TRANSITIONS = {
    Phase.IDLE: {Phase.LOADING, Phase.ERROR},
    Phase.LOADING: {Phase.SUCCESS, Phase.ERROR},
    Phase.SUCCESS: {Phase.IDLE},
    Phase.ERROR: {Phase.IDLE},
}


class InvalidTransition(Exception):
    """Raised when a state change is not allowed from the current phase."""

    def __init__(self, current: Phase, target: Phase):
        super().__init__(f"Cannot go from {current.value} to {target.value}")
        self.current = current
        self.target = target


@dataclass
class ViewState:
    """
    Everything the dashboard renders, changed only through transitions.

    Attributes:
        phase: Current lifecycle phase
        username: Username of the current or last request
        repositories: Fetched repositories (success only)
        buckets: Monthly series (success only)
        error: User-facing error message (error only)
        error_kind: Category of the error (error only)
    """

    phase: Phase = Phase.IDLE
    username: str = ""
    repositories: List[Repository] = field(default_factory=list)
    buckets: List[MonthlyBucket] = field(default_factory=list)
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @property
    def loading(self) -> bool:
        return self.phase == Phase.LOADING

    def _move(self, target: Phase) -> None:
        if target not in TRANSITIONS[self.phase]:
            raise InvalidTransition(self.phase, target)
        logger.debug(f"State {self.phase.value} -> {target.value}")
        self.phase = target

    def begin(self, username: str) -> None:
        """idle -> loading."""
        self._move(Phase.LOADING)
        self.username = username
        self.repositories = []
        self.buckets = []
        self.error = None
        self.error_kind = None

    def succeed(self, repositories: List[Repository], buckets: List[MonthlyBucket]) -> None:
        """loading -> success."""
        self._move(Phase.SUCCESS)
        self.repositories = list(repositories)
        self.buckets = list(buckets)

    def fail(self, message: str, kind: ErrorKind = ErrorKind.FETCH) -> None:
        """idle|loading -> error. Nothing fetched so far is kept."""
        self._move(Phase.ERROR)
        self.repositories = []
        self.buckets = []
        self.error = message
        self.error_kind = kind

    def reset(self) -> None:
        """success|error -> idle. The username stays in the input."""
        self._move(Phase.IDLE)
        self.repositories = []
        self.buckets = []
        self.error = None
        self.error_kind = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase.value,
            "username": self.username,
            "error": self.error,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "repository_count": len(self.repositories),
            "repositories": [r.to_dict() for r in self.repositories],
            "monthly": [b.to_dict() for b in self.buckets],
        }
