"""Shared pytest fixtures."""

from __future__ import annotations

import json
import shutil
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from issueflow.ranking.models import Issue

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time so scores and ages are reproducible."""
    return NOW


@pytest.fixture
def make_issue() -> Callable[..., Issue]:
    """Factory for issues created *days_old* days before ``NOW``."""

    def _make(number: int = 1, days_old: float | None = 0, **kwargs: Any) -> Issue:
        created_at = None if days_old is None else NOW - timedelta(days=days_old)
        kwargs.setdefault("title", f"Issue {number}")
        kwargs.setdefault("comment_count", 0)
        return Issue(number=number, created_at=created_at, **kwargs)

    return _make


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text(f"""[display]
colored_output = false

[sort]
by = "comments"
direction = "desc"

[history]
file = "{temp_dir / 'history.json'}"
""")
    return config_path


@pytest.fixture
def issues_file(temp_dir: Path) -> Path:
    """A small GraphQL-shaped issue export."""
    created = (NOW - timedelta(days=2)).isoformat().replace("+00:00", "Z")
    old = (NOW - timedelta(days=400)).isoformat().replace("+00:00", "Z")
    issues = [
        {
            "number": 1,
            "title": "Crash on startup",
            "url": "https://github.com/acme/app/issues/1",
            "createdAt": old,
            "comments": {"totalCount": 12},
            "labels": {"nodes": [{"name": "bug"}]},
            "author": {"login": "alice"},
            "state": "OPEN",
        },
        {
            "number": 2,
            "title": "Fix typo in README",
            "url": "https://github.com/acme/app/issues/2",
            "createdAt": created,
            "comments": {"totalCount": 0},
            "labels": {"nodes": [{"name": "good first issue"}, {"name": "docs"}]},
            "author": {"login": "bob"},
            "reactionGroups": [
                {"content": "THUMBS_UP", "reactors": {"totalCount": 3}},
            ],
            "state": "OPEN",
        },
        {
            "number": 3,
            "title": "Add dark mode",
            "url": "https://github.com/acme/app/issues/3",
            "createdAt": old,
            "comments": {"totalCount": 3},
            "labels": {"nodes": [{"name": "feature"}]},
            "author": {"login": "alice"},
            "state": "CLOSED",
        },
    ]
    path = temp_dir / "issues.json"
    path.write_text(json.dumps(issues))
    return path
