"""Write a starter configuration file for issueflow."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import click
from jinja2 import Environment, StrictUndefined

from issueflow.cli import Context, pass_context
from issueflow.config import get_default_config_path, load_config
from issueflow.exceptions import ConfigError
from issueflow.ranking.sorting import SORT_CRITERION_LABELS, SortCriterion, SortDirection
from issueflow.utils.output import error, info, success, warning

DEFAULT_HISTORY_FILE = "~/.local/share/issueflow/history.json"

_env = Environment(autoescape=False, undefined=StrictUndefined, keep_trailing_newline=True)


def render_config(
    sort_by: SortCriterion | str = SortCriterion.RELEVANCE,
    direction: SortDirection | str | None = None,
    colored_output: bool = True,
    history_file: str = DEFAULT_HISTORY_FILE,
) -> str:
    """Render the packaged config template with the given defaults.

    Without a direction the ``direction`` key is written commented out, so
    each criterion keeps its natural order.
    """
    source = resources.files("issueflow").joinpath("config.toml.j2").read_text()
    return _env.from_string(source).render(
        sort_by=SortCriterion(sort_by).value,
        direction=SortDirection(direction).value if direction else None,
        colored_output=colored_output,
        history_file=history_file,
    )


@click.command("init-config")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Overwrite existing config file",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output path for config file (default: ~/.config/issueflow/config.toml)",
)
@click.option(
    "--sort-by",
    "-b",
    type=click.Choice([c.value for c in SortCriterion]),
    default=SortCriterion.RELEVANCE.value,
    show_default=True,
    help="Default sort criterion",
)
@click.option(
    "--direction",
    "-d",
    type=click.Choice([d.value for d in SortDirection]),
    default=None,
    help="Default sort direction (default: the criterion's natural direction)",
)
@click.option(
    "--history",
    "history_file",
    default=DEFAULT_HISTORY_FILE,
    show_default=True,
    help="Search history file used by suggest",
)
@click.option(
    "--no-color",
    "no_color",
    is_flag=True,
    default=False,
    help="Write colored_output = false",
)
@pass_context
def cli(
    ctx: Context,
    force: bool,
    output: Path | None,
    sort_by: str,
    direction: str | None,
    history_file: str,
    no_color: bool,
) -> None:
    """Create a configuration file with your preferred defaults.

    The file is written to ~/.config/issueflow/config.toml unless --output
    is given, then loaded back to check that issueflow accepts it.

    Examples:

    \b
      # Create config at default location
      issueflow init-config

    \b
      # Quiet issues first, and no colors
      issueflow init-config --sort-by comments --no-color

    \b
      # Overwrite existing config
      issueflow init-config --force
    """
    config_path = output if output is not None else get_default_config_path()
    config_path = config_path.expanduser().resolve()

    if config_path.exists() and not force:
        error(
            f"Config file already exists: {config_path}",
            hint="Use --force to overwrite",
        )
        raise SystemExit(1)

    content = render_config(
        sort_by=sort_by,
        direction=direction,
        colored_output=not no_color,
        history_file=history_file,
    )

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(content)
    except OSError as e:
        error(f"Failed to write config file: {e}")
        raise SystemExit(1)

    try:
        config, warnings = load_config(config_path)
    except ConfigError as e:
        error(f"Written config does not load: {e}", hint="Fix the file or rerun with --force")
        raise SystemExit(1)

    for message in warnings:
        warning(message)

    preferences = config.sort_preferences
    success(f"Created config file: {config_path}")
    info(
        f"Sorting by {SORT_CRITERION_LABELS[preferences.by].lower()} "
        f"({preferences.direction.value}), history in {config.history_file}"
    )
