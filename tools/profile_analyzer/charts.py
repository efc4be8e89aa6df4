"""Bar-chart layout shared by the dashboard and the terminal output."""

from dataclasses import dataclass
from typing import List, Tuple

from .models import MonthlyBucket


@dataclass
class ChartRow:
    """One month of a chart: (value, fraction of the chart maximum) per series."""

    label: str
    values: List[Tuple[int, float]]


@dataclass
class Chart:
    title: str
    series: List[str]
    unit: str
    rows: List[ChartRow]


# (title, counters, unit)
CHART_DEFINITIONS = [
    ("Commit Activity", ["commits"], "commits"),
    ("New Repositories", ["repositories"], "repos"),
    ("Stars and Forks", ["stars", "forks"], ""),
]


def build_charts(buckets: List[MonthlyBucket]) -> List[Chart]:
    """
    Lay out the three monthly charts.

    Each chart is scaled to its own largest value, so an all-zero chart has
    all fractions at 0.0.
    """
    charts = []
    for title, series, unit in CHART_DEFINITIONS:
        peak = max((getattr(b, name) for b in buckets for name in series), default=0)
        rows = []
        for bucket in buckets:
            values = []
            for name in series:
                value = getattr(bucket, name)
                values.append((value, value / peak if peak else 0.0))
            rows.append(ChartRow(label=bucket.label, values=values))
        charts.append(Chart(title=title, series=series, unit=unit, rows=rows))
    return charts
