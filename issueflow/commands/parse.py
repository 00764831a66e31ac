"""Show how a filter query is understood."""

from __future__ import annotations

import json

import click
from rich.markup import escape

from issueflow.cli import Context, pass_context
from issueflow.search.fields import FIELD_LABELS
from issueflow.search.parser import parse_filter_query
from issueflow.search.serializer import to_canonical_query
from issueflow.utils.output import console, create_table, error, info

EXIT_SUCCESS = 0
EXIT_PARSE_ERROR = 1


@click.command("parse")
@click.argument("query", nargs=-1, required=True)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table)",
)
@pass_context
def cli(ctx: Context, query: tuple[str, ...], output_format: str) -> None:
    """Parse a filter query and show its canonical form and conditions.

    QUERY arguments are joined with spaces. Unknown fields and stray
    words are dropped; run with --debug to see what was skipped.

    \b
    Syntax examples:
      issueflow parse label:bug author:alice
      issueflow parse "label:bug,label:feature"
      issueflow parse -- -author:bob
      issueflow parse '(label:bug OR label:feature) state:open'
      issueflow parse 'label:"good first issue"'
    """
    query_string = " ".join(query)
    result = parse_filter_query(query_string)

    if not result.success:
        error(
            f"{result.error} at offset {result.error_offset}: {escape(query_string)}",
            hint="Use field:value with one of: " + ", ".join(FIELD_LABELS),
        )
        raise SystemExit(EXIT_PARSE_ERROR)

    canonical = to_canonical_query(result.ast) if result.ast is not None else ""

    if output_format == "json":
        payload = {
            "query": query_string,
            "canonical": canonical,
            "conditions": [
                {"field": c.field, "value": c.value, "negated": c.negated, "label": c.label}
                for c in result.conditions
            ],
        }
        click.echo(json.dumps(payload, indent=2))
        raise SystemExit(EXIT_SUCCESS)

    if not result.conditions:
        info("No filters")
        raise SystemExit(EXIT_SUCCESS)

    info(f"Canonical: {escape(canonical)}")
    table = create_table(show_header=True, header_style="bold")
    table.add_column("Field")
    table.add_column("Value")
    table.add_column("Condition")
    for chip in result.conditions:
        style = "chip.negated" if chip.negated else "chip"
        table.add_row(
            FIELD_LABELS.get(chip.field, chip.field),
            escape(chip.value),
            escape(chip.label),
            style=style,
        )
    console.print(table)
    raise SystemExit(EXIT_SUCCESS)
