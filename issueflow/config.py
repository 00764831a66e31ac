"""Configuration management for issueflow."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from issueflow.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)
from issueflow.ranking.sorting import (
    SortCriterion,
    SortDirection,
    SortPreferences,
    default_direction,
)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "issueflow" / "config.toml"


def get_default_history_path() -> Path:
    """Get the default search history file path."""
    return Path.home() / ".local" / "share" / "issueflow" / "history.json"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        colored_output: Whether to use colored terminal output.
        sort_by: Default sort criterion for ``issueflow sort``.
        sort_direction: Default direction; None uses the criterion's own
            default (comments ascend, everything else descends).
        history_file: JSON file holding past repository searches.
        config_path: Path where config was loaded from (None if defaults).
    """

    colored_output: bool = True
    sort_by: SortCriterion = SortCriterion.RELEVANCE
    sort_direction: SortDirection | None = None
    history_file: Path = field(default_factory=get_default_history_path)
    config_path: Path | None = None

    @property
    def sort_preferences(self) -> SortPreferences:
        direction = self.sort_direction or default_direction(self.sort_by)
        return SortPreferences(by=self.sort_by, direction=direction)

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.
        """
        warnings: list[str] = []

        self.history_file = self.history_file.expanduser().resolve()
        if self.history_file.exists() and not self.history_file.is_file():
            warnings.append(f"History path is not a file: {self.history_file}")

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        # Use defaults
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: issueflow init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    # Load from file
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    # Parse [sort] section
    sort = data.get("sort", {})
    if "by" in sort:
        value = sort["by"]
        choices = [c.value for c in SortCriterion]
        if value not in choices:
            raise ConfigValidationError("sort.by", value, f"must be one of {', '.join(choices)}")
        config.sort_by = SortCriterion(value)

    if "direction" in sort:
        value = sort["direction"]
        if value not in ("asc", "desc"):
            raise ConfigValidationError("sort.direction", value, "must be 'asc' or 'desc'")
        config.sort_direction = SortDirection(value)

    # Parse [history] section
    history = data.get("history", {})
    if "file" in history:
        value = history["file"]
        if not isinstance(value, str):
            raise ConfigValidationError("history.file", value, "must be a string path")
        config.history_file = Path(value)

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    # Ensure directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Build TOML structure
    data: dict[str, Any] = {
        "display": {
            "colored_output": config.colored_output,
        },
        "sort": {
            "by": config.sort_by.value,
        },
        "history": {
            "file": str(config.history_file),
        },
    }

    if config.sort_direction is not None:
        data["sort"]["direction"] = config.sort_direction.value

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
