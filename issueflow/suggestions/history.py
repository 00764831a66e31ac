"""Past repository searches, used as the recency source for suggestions.

The helpers here are pure: they take a history list and return a new one.
Reading and writing the JSON file is left to whoever owns it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Any

from issueflow.exceptions import DataFileError
from issueflow.ranking.freshness import utc_now
from issueflow.ranking.models import parse_timestamp

logger = logging.getLogger(__name__)

MAX_HISTORY_ITEMS = 20


@dataclass(frozen=True)
class HistoryRecord:
    """One searched repository, most recent first in a history list."""

    owner: str
    repo: str
    full_url: str
    last_searched: datetime
    search_count: int = 1
    issue_count: int | None = None

    @property
    def display_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def same_repo(self, owner: str, repo: str) -> bool:
        return self.owner.lower() == owner.lower() and self.repo.lower() == repo.lower()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryRecord | None:
        """Build a record from its JSON form; None if required keys are bad."""
        owner = data.get("owner")
        repo = data.get("repo")
        full_url = data.get("fullUrl", data.get("full_url"))
        last_searched = parse_timestamp(data.get("lastSearched", data.get("last_searched")))
        count = data.get("searchCount", data.get("search_count"))
        if not (isinstance(owner, str) and isinstance(repo, str) and isinstance(full_url, str)):
            return None
        if last_searched is None or not isinstance(count, int) or isinstance(count, bool):
            return None
        issue_count = data.get("issueCount", data.get("issue_count"))
        return cls(
            owner=owner,
            repo=repo,
            full_url=full_url,
            last_searched=last_searched,
            search_count=count,
            issue_count=issue_count if isinstance(issue_count, int) else None,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "owner": self.owner,
            "repo": self.repo,
            "fullUrl": self.full_url,
            "lastSearched": self.last_searched.isoformat(),
            "searchCount": self.search_count,
        }
        if self.issue_count is not None:
            data["issueCount"] = self.issue_count
        return data


def record_search(
    history: list[HistoryRecord],
    owner: str,
    repo: str,
    full_url: str,
    issue_count: int | None = None,
    now: datetime | None = None,
) -> list[HistoryRecord]:
    """Move (or add) a repository to the front of *history*.

    An existing entry (matched case-insensitively) keeps its count plus one;
    the result is capped at ``MAX_HISTORY_ITEMS``.
    """
    now = now or utc_now()
    existing = next((r for r in history if r.same_repo(owner, repo)), None)
    rest = [r for r in history if not r.same_repo(owner, repo)]

    if existing is not None:
        entry = replace(
            existing,
            full_url=full_url,
            last_searched=now,
            search_count=existing.search_count + 1,
            issue_count=issue_count if issue_count is not None else existing.issue_count,
        )
    else:
        entry = HistoryRecord(owner, repo, full_url, now, 1, issue_count)

    return [entry, *rest][:MAX_HISTORY_ITEMS]


def forget(history: list[HistoryRecord], owner: str, repo: str) -> list[HistoryRecord]:
    """Return *history* without the given repository."""
    return [r for r in history if not r.same_repo(owner, repo)]


def load_history(path: Path) -> list[HistoryRecord]:
    """Read a history file. A missing file is an empty history.

    Entries that don't look like history records are skipped.

    Raises:
        DataFileError: If the file exists but is not valid JSON.
    """
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DataFileError(path, str(e)) from e
    except json.JSONDecodeError as e:
        raise DataFileError(path, f"invalid JSON: {e}") from e

    if not isinstance(data, list):
        logger.warning("History file %s is not a JSON array, ignoring it", path)
        return []

    records: list[HistoryRecord] = []
    for entry in data:
        record = HistoryRecord.from_dict(entry) if isinstance(entry, dict) else None
        if record is None:
            logger.debug("Skipping invalid history entry: %r", entry)
            continue
        records.append(record)
    return records


def save_history(path: Path, history: list[HistoryRecord]) -> None:
    """Write *history* to *path* as a JSON array."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [record.to_dict() for record in history[:MAX_HISTORY_ITEMS]]
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
