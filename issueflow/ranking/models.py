"""Issue records consumed by the ranking engine and local filtering.

Issues arrive as JSON dumps from the GitHub API, either in the GraphQL
shape (``comments.totalCount``, ``labels.nodes``, ``reactionGroups``) or
the REST shape (``comments`` as an int, ``labels`` as a list, ``reactions``
as a summary object). Both are normalised into :class:`Issue`; anything
missing becomes None or empty rather than an error.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from issueflow.exceptions import DataFileError
from issueflow.ranking.freshness import as_utc

logger = logging.getLogger(__name__)

# REST reaction summary keys -> GraphQL ReactionContent names
_REST_REACTIONS: dict[str, str] = {
    "+1": "THUMBS_UP",
    "-1": "THUMBS_DOWN",
    "laugh": "LAUGH",
    "hooray": "HOORAY",
    "confused": "CONFUSED",
    "heart": "HEART",
    "rocket": "ROCKET",
    "eyes": "EYES",
}


@dataclass
class Issue:
    """A repository issue as seen by the engine.

    Attributes:
        number: Issue number within its repository.
        title: Issue title.
        url: Web URL of the issue.
        created_at: Creation time, None if unknown. Naive values are read as UTC.
        comment_count: Number of comments, None if unknown.
        labels: Label names.
        reactions: Reaction counts keyed by GraphQL content name
            (``THUMBS_UP``, ``HEART``, ...).
        author: Author login.
        assignees: Assignee logins.
        state: ``open`` or ``closed``.
        is_pull_request: True for pull requests.
    """

    number: int
    title: str = ""
    url: str = ""
    created_at: datetime | None = None
    comment_count: int | None = None
    labels: list[str] = field(default_factory=list)
    reactions: dict[str, int] = field(default_factory=dict)
    author: str | None = None
    assignees: list[str] = field(default_factory=list)
    state: str = "open"
    is_pull_request: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Issue:
        """Build an Issue from a GraphQL or REST issue object."""
        return cls(
            number=_as_int(data.get("number")) or 0,
            title=str(data.get("title") or ""),
            url=str(data.get("html_url") or data.get("url") or ""),
            created_at=parse_timestamp(data.get("createdAt") or data.get("created_at")),
            comment_count=_comment_count(data.get("comments")),
            labels=_names(data.get("labels"), "name"),
            reactions=_reactions(data),
            author=_login(data.get("author") or data.get("user")),
            assignees=_names(data.get("assignees"), "login"),
            state=str(data.get("state") or "open").lower(),
            is_pull_request=_is_pull_request(data),
        )


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC.

    Returns None for missing or unparseable input.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Unparseable timestamp: %r", value)
            return None
    else:
        return None
    return as_utc(parsed)


def _as_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    return None


def _comment_count(value: object) -> int | None:
    if isinstance(value, dict):
        return _as_int(value.get("totalCount"))
    return _as_int(value)


def _nodes(value: object) -> list[Any]:
    """Unwrap a GraphQL connection (``{"nodes": [...]}``) or a plain list."""
    if isinstance(value, dict):
        value = value.get("nodes")
    if isinstance(value, list):
        return value
    return []


def _names(value: object, key: str) -> list[str]:
    names: list[str] = []
    for node in _nodes(value):
        if isinstance(node, str):
            names.append(node)
        elif isinstance(node, dict) and isinstance(node.get(key), str):
            names.append(node[key])
    return names


def _login(value: object) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and isinstance(value.get("login"), str):
        return value["login"]
    return None


def _reactions(data: dict[str, Any]) -> dict[str, int]:
    counts: dict[str, int] = {}

    groups = data.get("reactionGroups")
    if isinstance(groups, list):
        for group in groups:
            if not isinstance(group, dict) or not isinstance(group.get("content"), str):
                continue
            reactors = group.get("reactors") or group.get("users") or {}
            count = _as_int(reactors.get("totalCount")) if isinstance(reactors, dict) else None
            counts[group["content"].upper()] = count or 0
        return counts

    summary = data.get("reactions")
    if isinstance(summary, dict):
        for key, value in summary.items():
            count = _as_int(value)
            if count is None:
                continue
            if key in _REST_REACTIONS:
                counts[_REST_REACTIONS[key]] = count
            elif key.upper() in _REST_REACTIONS.values():
                counts[key.upper()] = count
    return counts


def _is_pull_request(data: dict[str, Any]) -> bool:
    if data.get("__typename") == "PullRequest":
        return True
    if data.get("pull_request"):
        return True
    return bool(data.get("isPullRequest") or data.get("is_pull_request"))


def load_issues(path: Path) -> list[Issue]:
    """Load issues from a JSON file.

    Accepts a JSON array of issue objects, or an object holding that array
    under ``issues`` or ``nodes``. Non-object entries are skipped.

    Raises:
        DataFileError: If the file cannot be read or is not such a document.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DataFileError(path, str(e)) from e
    except json.JSONDecodeError as e:
        raise DataFileError(path, f"invalid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("issues", data.get("nodes"))
    if not isinstance(data, list):
        raise DataFileError(path, "expected a JSON array of issues")

    issues: list[Issue] = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            logger.warning("Skipping non-object issue entry #%d in %s", index, path)
            continue
        issues.append(Issue.from_dict(entry))
    return issues
