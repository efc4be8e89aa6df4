"""Browser dashboard for the GitHub Profile Analyzer."""

from pathlib import Path
from typing import Optional

import click
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from shared.cli import info
from shared.logger import setup_logger

from .analyzer import COMMITS_NOTE, ProfileAnalyzer
from .charts import build_charts
from .fetcher import GitHubProfileFetcher
from .state import ErrorKind, Phase, ViewState

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def create_app(analyzer: Optional[ProfileAnalyzer] = None) -> FastAPI:
    """
    Build the dashboard application.

    Args:
        analyzer: Analyzer to use; created on first request if None

    Returns:
        FastAPI app
    """
    app = FastAPI(
        title="GitHub Profile Analyzer",
        description="Monthly activity dashboard for a GitHub user",
        version="0.1.0",
    )
    app.state.analyzer = analyzer

    def get_analyzer() -> ProfileAnalyzer:
        if app.state.analyzer is None:
            app.state.analyzer = ProfileAnalyzer()
        return app.state.analyzer

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request, username: Optional[str] = None):
        """Username form, plus charts and repository list once submitted."""
        # A fresh state per request; nothing is shared between requests
        state = ViewState()
        if username is not None:
            get_analyzer().run(state, username)

        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "state": state,
                "submitted": username is not None,
                "username": username or "",
                "charts": build_charts(state.buckets) if state.phase == Phase.SUCCESS else [],
                "commits_note": COMMITS_NOTE,
            },
        )

    @app.get("/api/profile/{username}")
    def profile(username: str):
        """View state for a username as JSON."""
        state = get_analyzer().run(ViewState(), username)

        if state.phase == Phase.SUCCESS:
            status_code = 200
        elif state.error_kind == ErrorKind.INPUT:
            status_code = 400
        else:
            status_code = 502

        return JSONResponse(content=state.to_dict(), status_code=status_code)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


@click.command()
@click.option(
    "--port",
    "-p",
    type=int,
    default=8000,
    show_default=True,
    help="Port to run server on",
)
@click.option(
    "--host",
    default="127.0.0.1",
    show_default=True,
    help="Host to bind to",
)
@click.option("--token", help="GitHub personal access token (or set GITHUB_TOKEN env var)")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def main(port: int, host: str, token: Optional[str], verbose: bool):
    """
    GitHub Profile Analyzer dashboard.

    Serves a page with a username box. Submitting it shows the user's
    monthly activity over the last 12 months and their public repositories.

    Examples:

        \b
        # Start on the default port (8000)
        gh-profile-dashboard

        \b
        # Authenticated, on another port
        gh-profile-dashboard --port 8080 --token ghp_xxx

    Endpoints:
        GET /                      - Dashboard (?username=...)
        GET /api/profile/{user}    - Analysis as JSON
        GET /health                - Status
    """
    log_level = "DEBUG" if verbose else "INFO"
    setup_logger(__name__, level=log_level)

    app = create_app(ProfileAnalyzer(GitHubProfileFetcher(token=token)))

    info(f"Starting GitHub Profile Analyzer on http://{host}:{port}")
    info("Press CTRL+C to stop")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="error" if not verbose else "info",
    )


if __name__ == "__main__":
    main()
