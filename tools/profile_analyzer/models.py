"""Data types for profile analysis."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, NamedTuple, Optional

PUSH_EVENT = "PushEvent"

# Fixed English names so labels never depend on the process locale
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO-8601 timestamp ("2024-06-10T12:00:00Z")."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def to_utc(dt: datetime) -> datetime:
    """Return dt in UTC; naive datetimes are taken to be UTC already."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class MonthKey(NamedTuple):
    """Canonical identity of a calendar month."""

    year: int
    month: int

    @classmethod
    def of(cls, dt: datetime) -> "MonthKey":
        """Month of a timestamp, in UTC."""
        dt = to_utc(dt)
        return cls(dt.year, dt.month)

    def shift(self, months: int) -> "MonthKey":
        """Move by a number of months, rolling over year boundaries."""
        index = self.year * 12 + (self.month - 1) + months
        return MonthKey(index // 12, index % 12 + 1)

    @property
    def label(self) -> str:
        return format_month(self)


def format_month(key: MonthKey) -> str:
    """Display label for a month: long month name and year ("June 2024")."""
    return f"{MONTH_NAMES[key.month - 1]} {key.year}"


@dataclass(frozen=True)
class Repository:
    """Snapshot of a public repository as returned by the API."""

    id: int
    name: str
    description: Optional[str]
    stars: int
    forks: int
    language: Optional[str]
    created_at: datetime
    url: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Repository":
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description"),
            stars=data["stargazers_count"],
            forks=data["forks_count"],
            language=data.get("language"),
            created_at=parse_timestamp(data["created_at"]),
            url=data["html_url"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "stars": self.stars,
            "forks": self.forks,
            "language": self.language,
            "created_at": self.created_at.isoformat(),
            "url": self.url,
        }


@dataclass(frozen=True)
class ActivityEvent:
    """A public activity event; only push events carry a meaningful size."""

    kind: str
    created_at: datetime
    size: int = 0

    @property
    def is_push(self) -> bool:
        return self.kind == PUSH_EVENT

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ActivityEvent":
        kind = data["type"]
        size = 0
        if kind == PUSH_EVENT:
            size = data["payload"].get("size", 0)
        return cls(kind=kind, created_at=parse_timestamp(data["created_at"]), size=size)


@dataclass
class MonthlyBucket:
    """Rolled-up counters for one calendar month."""

    key: MonthKey
    commits: int = 0
    repositories: int = 0
    stars: int = 0
    forks: int = 0

    @property
    def label(self) -> str:
        return self.key.label

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.label,
            "year": self.key.year,
            "month_number": self.key.month,
            "commits": self.commits,
            "repositories": self.repositories,
            "stars": self.stars,
            "forks": self.forks,
        }
