"""Suggest repositories from search history and popular projects."""

from __future__ import annotations

import json
from pathlib import Path

import click
from rich.markup import escape

from issueflow.cli import Context, pass_context
from issueflow.config import get_default_history_path
from issueflow.exceptions import DataError
from issueflow.ranking.freshness import relative_time
from issueflow.suggestions.history import load_history
from issueflow.suggestions.ranker import highlight_match, rank_suggestions
from issueflow.utils.output import console, create_table, error, info, verbose

EXIT_SUCCESS = 0
EXIT_DATA_ERROR = 2


@click.command("suggest")
@click.argument("query", required=False, default="")
@click.option(
    "--history",
    "history_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Search history JSON file (default: from config)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json", "html"]),
    default="table",
    help="Output format; html prints highlighted labels (default: table)",
)
@pass_context
def cli(ctx: Context, query: str, history_file: Path | None, output_format: str) -> None:
    """Suggest up to five repositories starting with QUERY.

    Recently searched repositories rank first, followed by a fixed list
    of popular projects. QUERY matches the start of "owner/repo" or of
    the bare repository name, ignoring case.

    \b
    Examples:
      issueflow suggest
      issueflow suggest re
      issueflow suggest facebook/ --format html
    """
    if history_file is None:
        config = ctx.config
        history_file = config.history_file if config is not None else get_default_history_path()

    try:
        history = load_history(history_file)
    except DataError as e:
        error(str(e))
        raise SystemExit(EXIT_DATA_ERROR)
    verbose(f"Loaded {len(history)} history entries from {history_file}")

    suggestions = rank_suggestions(history, query)

    if output_format == "json":
        results = [
            {
                "origin": s.origin.value,
                "owner": s.owner,
                "repo": s.repo,
                "display_name": s.display_name,
                "full_url": s.full_url,
                "score": s.score,
                "last_used": s.last_used.isoformat() if s.last_used else None,
                "use_count": s.use_count,
            }
            for s in suggestions
        ]
        click.echo(json.dumps(results, indent=2))
        raise SystemExit(EXIT_SUCCESS)

    if output_format == "html":
        for s in suggestions:
            click.echo(highlight_match(s.display_name, query))
        raise SystemExit(EXIT_SUCCESS)

    if not suggestions:
        info(f"No suggestions for: {escape(query)}")
        raise SystemExit(EXIT_SUCCESS)

    table = create_table(show_header=True, header_style="bold")
    table.add_column("Repository")
    table.add_column("Source")
    table.add_column("Last searched")
    table.add_column("Score", justify="right")
    for s in suggestions:
        last = relative_time(s.last_used) if s.last_used else ""
        table.add_row(escape(s.display_name), s.origin.value, last, str(s.score))
    console.print(table)
    raise SystemExit(EXIT_SUCCESS)
