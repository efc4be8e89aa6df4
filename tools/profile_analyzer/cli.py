"""CLI interface for the GitHub Profile Analyzer."""

import json
import sys
from typing import List, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from shared.cli import create_table, error, handle_errors, info, print_table, success
from shared.logger import setup_logger

from .analyzer import COMMITS_NOTE, ProfileAnalyzer, ProfileReport
from .charts import Chart, build_charts
from .fetcher import GitHubProfileFetcher, ProfileAnalyzerError
from .models import Repository

console = Console()

BAR_WIDTH = 25
SERIES_STYLES = ["cyan", "yellow"]


def render_bar(fraction: float) -> str:
    bar_length = int(fraction * BAR_WIDTH)
    return "█" * bar_length + "░" * (BAR_WIDTH - bar_length)


def display_chart(chart: Chart) -> None:
    """Display one monthly chart as a table of bars."""
    console.print(f"\n[bold yellow]{chart.title}:[/bold yellow]")

    table = create_table(title=None)
    table.add_column("Month", style="bold")
    for name, style in zip(chart.series, SERIES_STYLES):
        table.add_column(name.capitalize(), justify="right", style=style)
        table.add_column("", width=BAR_WIDTH + 2, style=style)

    for row in chart.rows:
        cells = [row.label]
        for value, fraction in row.values:
            cells.append(f"{value:,}")
            cells.append(render_bar(fraction))
        table.add_row(*cells)

    print_table(table)


def display_repositories(repositories: List[Repository]) -> None:
    """Display the repository list."""
    if not repositories:
        info("No public repositories")
        return

    console.print(f"\n[bold yellow]Public Repositories ({len(repositories)}):[/bold yellow]")

    table = create_table(title=None)
    table.add_column("Repository", style="bold cyan")
    table.add_column("Language", style="dim")
    table.add_column("Stars", justify="right", style="yellow")
    table.add_column("Forks", justify="right")
    table.add_column("Description", style="dim", no_wrap=False)
    table.add_column("URL", style="blue")

    for repo in repositories:
        table.add_row(
            repo.name,
            repo.language or "N/A",
            f"{repo.stars:,}",
            f"{repo.forks:,}",
            (repo.description or "")[:60],
            repo.url,
        )

    print_table(table)


def display_report(report: ProfileReport) -> None:
    """Display charts and repositories for a report."""
    console.print(
        Panel(
            f"[bold cyan]{report.username}[/bold cyan]\n"
            f"[dim]{len(report.repositories)} repositories · "
            f"{report.total_stars:,} stars · {report.total_forks:,} forks · "
            f"{report.event_count} recent events[/dim]",
            title="Monthly Activity Analysis (Last 12 Months)",
        )
    )

    for chart in build_charts(report.buckets):
        display_chart(chart)
        if chart.series == ["commits"]:
            console.print(f"[dim]{COMMITS_NOTE}[/dim]")

    display_repositories(report.repositories)
    console.print()


def report_to_dict(report: ProfileReport) -> dict:
    return {
        "username": report.username,
        "repository_count": len(report.repositories),
        "event_count": report.event_count,
        "monthly": [b.to_dict() for b in report.buckets],
        "repositories": [r.to_dict() for r in report.repositories],
    }


@click.command()
@click.argument("username")
@click.option(
    "--output",
    "-o",
    type=click.Choice(["rich", "json"], case_sensitive=False),
    default="rich",
    help="Output format",
)
@click.option("--token", help="GitHub personal access token (or set GITHUB_TOKEN env var)")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@handle_errors
def main(username: str, output: str, token: Optional[str], verbose: bool):
    """
    GitHub Profile Analyzer - monthly activity for a GitHub user.

    Shows commits, new repositories, stars and forks per month over the
    last 12 months, followed by the user's public repositories.

    Examples:

        \b
        # Charts and repository list
        gh-profile torvalds

        \b
        # JSON output
        gh-profile torvalds --output json
    """
    # JSON goes to stdout, so only warnings are logged unless verbose
    if verbose:
        log_level = "DEBUG"
    else:
        log_level = "WARNING" if output == "json" else "INFO"
    setup_logger(__name__, level=log_level)

    analyzer = ProfileAnalyzer(GitHubProfileFetcher(token=token))

    try:
        if output == "json":
            report = analyzer.analyze(username)
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
                transient=True,
            ) as progress:
                progress.add_task(f"Analyzing {username}...", total=None)
                report = analyzer.analyze(username)
    except ProfileAnalyzerError as e:
        error(str(e))
        sys.exit(1)

    if output == "json":
        print(json.dumps(report_to_dict(report), indent=2))
        sys.exit(0)

    display_report(report)
    success("Analysis completed!")
    sys.exit(0)


if __name__ == "__main__":
    main()
