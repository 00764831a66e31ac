"""Unit tests for the suggest command."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from click.testing import CliRunner

from issueflow.cli import Context
from issueflow.commands.suggest import EXIT_DATA_ERROR, cli
from issueflow.config import Config
from issueflow.suggestions.history import HistoryRecord, save_history


def _invoke(*args: str, config: Config | None = None):
    ctx = Context()
    ctx.config = config
    return CliRunner().invoke(cli, list(args), obj=ctx)


def _write_history(path: Path, now: datetime) -> Path:
    save_history(
        path,
        [
            HistoryRecord("acme", "app", "https://github.com/acme/app", now, 3),
            HistoryRecord("acme", "react-kit", "https://github.com/acme/react-kit", now),
        ],
    )
    return path


class TestSuggestCommand:
    def test_json_with_history(self, temp_dir: Path, now: datetime) -> None:
        history = _write_history(temp_dir / "history.json", now)
        result = _invoke("--history", str(history), "--format", "json")
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert len(payload) == 5
        assert [p["display_name"] for p in payload[:2]] == ["acme/app", "acme/react-kit"]
        assert [p["score"] for p in payload[:2]] == [100, 90]
        assert payload[0]["use_count"] == 3
        assert payload[2]["origin"] == "popular"

    def test_prefix(self, temp_dir: Path, now: datetime) -> None:
        history = _write_history(temp_dir / "history.json", now)
        result = _invoke("react", "--history", str(history), "-f", "json")
        names = [p["display_name"] for p in json.loads(result.output)]
        assert names == ["acme/react-kit", "facebook/react"]

    def test_history_from_config(self, temp_dir: Path, now: datetime) -> None:
        history = _write_history(temp_dir / "history.json", now)
        result = _invoke("-f", "json", config=Config(history_file=history))
        assert json.loads(result.output)[0]["display_name"] == "acme/app"

    def test_missing_history_gives_popular(self, temp_dir: Path) -> None:
        result = _invoke("--history", str(temp_dir / "none.json"), "-f", "json")
        assert result.exit_code == 0
        assert all(p["origin"] == "popular" for p in json.loads(result.output))

    def test_html(self, temp_dir: Path) -> None:
        result = _invoke("face", "--history", str(temp_dir / "none.json"), "--format", "html")
        assert result.exit_code == 0
        assert result.output.strip() == (
            '<mark class="autocomplete-highlight">face</mark>book/react'
        )

    def test_table(self, temp_dir: Path, now: datetime) -> None:
        history = _write_history(temp_dir / "history.json", now)
        result = _invoke("--history", str(history))
        assert result.exit_code == 0
        assert "acme/app" in result.output

    def test_no_suggestions(self, temp_dir: Path) -> None:
        result = _invoke("zzz", "--history", str(temp_dir / "none.json"))
        assert result.exit_code == 0
        assert "No suggestions" in result.output

    def test_corrupt_history(self, temp_dir: Path) -> None:
        path = temp_dir / "history.json"
        path.write_text("[")
        result = _invoke("--history", str(path))
        assert result.exit_code == EXIT_DATA_ERROR
