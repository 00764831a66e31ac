"""Filter and rank an exported list of issues."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import click
from rich.markup import escape

from issueflow.cli import Context, pass_context
from issueflow.exceptions import DataError
from issueflow.ranking.freshness import freshness_level, relative_time, utc_now
from issueflow.ranking.models import Issue, load_issues
from issueflow.ranking.relevance import score_breakdown, score_issues, total_reaction_count
from issueflow.ranking.sorting import (
    SORT_CRITERION_LABELS,
    SortCriterion,
    SortDirection,
    default_direction,
    filter_zero_comment,
    sort_issues,
)
from issueflow.search.parser import parse_filter_query
from issueflow.search.query import filter_issues
from issueflow.utils.output import console, create_table, error, info, verbose

EXIT_SUCCESS = 0
EXIT_PARSE_ERROR = 1
EXIT_DATA_ERROR = 2


def _format_score(value: float) -> str:
    return f"{value:g}"


@click.command("sort")
@click.argument("issues_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--by",
    "-b",
    "sort_by",
    type=click.Choice([c.value for c in SortCriterion]),
    default=None,
    help="Sort criterion (default: from config, else relevance)",
)
@click.option(
    "--direction",
    "-d",
    type=click.Choice([d.value for d in SortDirection]),
    default=None,
    help="Sort direction (default: the criterion's natural direction)",
)
@click.option(
    "--filter",
    "-F",
    "filter_query",
    default=None,
    help='Filter query, e.g. "label:bug -author:bot"',
)
@click.option(
    "--zero-comments",
    is_flag=True,
    default=False,
    help="Only keep issues nobody has commented on yet",
)
@click.option(
    "--limit",
    "-l",
    type=int,
    default=None,
    help="Limit number of results",
)
@click.option(
    "--explain",
    is_flag=True,
    default=False,
    help="Show the relevance score components for each issue",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table)",
)
@pass_context
def cli(
    ctx: Context,
    issues_file: Path,
    sort_by: str | None,
    direction: str | None,
    filter_query: str | None,
    zero_comments: bool,
    limit: int | None,
    explain: bool,
    output_format: str,
) -> None:
    """Rank issues from ISSUES_FILE.

    ISSUES_FILE is a JSON array of issues as returned by the GitHub
    GraphQL or REST API (or an object with an "issues" array).

    \b
    Relevance favours beginner-friendly labels, fresh issues and
    positive reactions, and penalises long discussions:
      score = 2 x reactions + freshness (<=15) + label bonus - comments/2 (<=10)

    \b
    Examples:
      issueflow sort issues.json
      issueflow sort issues.json --by comments
      issueflow sort issues.json -F 'label:"good first issue",label:easy' --explain
    """
    config = ctx.config

    try:
        issues = load_issues(issues_file)
    except DataError as e:
        error(str(e))
        raise SystemExit(EXIT_DATA_ERROR)
    verbose(f"Loaded {len(issues)} issues from {issues_file}")

    if filter_query:
        result = parse_filter_query(filter_query)
        if not result.success:
            error(f"Invalid filter query: {escape(filter_query)}", hint="Try: issueflow parse")
            raise SystemExit(EXIT_PARSE_ERROR)
        issues = filter_issues(issues, result.ast)

    if zero_comments:
        issues = filter_zero_comment(issues)

    if sort_by is not None:
        criterion = SortCriterion(sort_by)
        order = SortDirection(direction) if direction else default_direction(criterion)
    elif config is not None:
        preferences = config.sort_preferences
        criterion = preferences.by
        order = SortDirection(direction) if direction else preferences.direction
    else:
        criterion = SortCriterion.RELEVANCE
        order = SortDirection(direction) if direction else default_direction(criterion)

    now = utc_now()
    ranked = sort_issues(issues, criterion, order, now=now)
    if limit is not None:
        ranked = ranked[:limit]

    if output_format == "json":
        _print_json(ranked, now)
        raise SystemExit(EXIT_SUCCESS)

    if not ranked:
        info("No matching issues")
        raise SystemExit(EXIT_SUCCESS)

    info(f"{len(ranked)} issues by {SORT_CRITERION_LABELS[criterion].lower()} ({order.value})")
    _print_table(ranked, now, explain)
    raise SystemExit(EXIT_SUCCESS)


def _print_table(issues: list[Issue], now: datetime, explain: bool) -> None:
    table = create_table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="issue.number")
    table.add_column("Title", style="issue.title", no_wrap=True, max_width=60)
    table.add_column("Age")
    table.add_column("Comments", justify="right")
    table.add_column("Reactions", justify="right")
    if explain:
        for header in ("React", "Fresh", "Label", "-Comm"):
            table.add_column(header, justify="right")
    table.add_column("Score", justify="right")

    for issue in issues:
        breakdown = score_breakdown(issue, now)
        age_style = f"freshness.{freshness_level(issue.created_at, now).value}"
        row = [
            str(issue.number),
            escape(issue.title),
            f"[{age_style}]{relative_time(issue.created_at, now)}[/{age_style}]",
            "" if issue.comment_count is None else str(issue.comment_count),
            str(total_reaction_count(issue)),
        ]
        if explain:
            row.extend(
                _format_score(v)
                for v in (
                    breakdown.reaction_score,
                    breakdown.freshness_bonus,
                    breakdown.label_bonus,
                    breakdown.comment_penalty,
                )
            )
        row.append(_format_score(breakdown.total))
        table.add_row(*row)

    console.print(table)


def _print_json(issues: list[Issue], now: datetime) -> None:
    results = []
    for scored in score_issues(issues, now):
        issue = scored.issue
        results.append(
            {
                "number": issue.number,
                "title": issue.title,
                "url": issue.url,
                "created_at": issue.created_at.isoformat() if issue.created_at else None,
                "comments": issue.comment_count,
                "reactions": total_reaction_count(issue),
                "labels": issue.labels,
                "score": scored.relevance_score,
            }
        )
    click.echo(json.dumps(results, indent=2))
