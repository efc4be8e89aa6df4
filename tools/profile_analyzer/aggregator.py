"""Roll repositories and push events up into a trailing 12-month series."""

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from shared.logger import get_logger

from .models import ActivityEvent, MonthKey, MonthlyBucket, Repository

logger = get_logger(__name__)

WINDOW_MONTHS = 12


def month_window(anchor: Optional[datetime] = None, months: int = WINDOW_MONTHS) -> List[MonthKey]:
    """
    Calendar months ending at the anchor's month, oldest first.

    Args:
        anchor: Reference time (defaults to now, UTC)
        months: Window length

    Returns:
        List of MonthKey in chronological order
    """
    if anchor is None:
        anchor = datetime.now(timezone.utc)
    current = MonthKey.of(anchor)
    return [current.shift(-offset) for offset in range(months - 1, -1, -1)]


def aggregate_monthly(
    repositories: Iterable[Repository],
    events: Iterable[ActivityEvent],
    anchor: Optional[datetime] = None,
) -> List[MonthlyBucket]:
    """
    Build the monthly activity series.

    Repositories count towards the month they were created in (count, stars,
    forks); push events add their commit count to the month they happened
    in. Anything outside the window is dropped.

    Args:
        repositories: Repositories of the user
        events: Recent public events of the user
        anchor: Reference time (defaults to now, UTC)

    Returns:
        Exactly 12 MonthlyBucket, chronological
    """
    buckets: Dict[MonthKey, MonthlyBucket] = {
        key: MonthlyBucket(key=key) for key in month_window(anchor)
    }

    for repo in repositories:
        bucket = buckets.get(MonthKey.of(repo.created_at))
        if bucket is None:
            continue
        bucket.repositories += 1
        bucket.stars += repo.stars
        bucket.forks += repo.forks

    for event in events:
        if not event.is_push:
            continue
        bucket = buckets.get(MonthKey.of(event.created_at))
        if bucket is not None:
            bucket.commits += event.size

    # dicts keep insertion order, which is the window order
    series = list(buckets.values())
    logger.debug(
        f"Aggregated {series[0].label} .. {series[-1].label}: "
        f"{sum(b.repositories for b in series)} repos, {sum(b.commits for b in series)} commits"
    )
    return series
