"""Builders for GitHub API payloads used across the tests."""

from typing import Any, Dict, Optional


def make_repo(
    repo_id: int,
    created_at: str = "2024-05-01T10:00:00Z",
    stars: int = 0,
    forks: int = 0,
    name: Optional[str] = None,
    description: Optional[str] = None,
    language: Optional[str] = None,
) -> Dict[str, Any]:
    name = name or f"repo-{repo_id}"
    return {
        "id": repo_id,
        "name": name,
        "full_name": f"octocat/{name}",
        "description": description,
        "stargazers_count": stars,
        "forks_count": forks,
        "language": language,
        "created_at": created_at,
        "updated_at": created_at,
        "html_url": f"https://github.com/octocat/{name}",
    }


def make_event(kind: str = "PushEvent", created_at: str = "2024-06-10T12:00:00Z", size: int = 1) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"size": size} if kind == "PushEvent" else {}
    return {"id": "1", "type": kind, "created_at": created_at, "payload": payload}
