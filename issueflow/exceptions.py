"""Exception hierarchy for issueflow."""

from pathlib import Path


class IssueflowError(Exception):
    """Base exception for all issueflow errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all issueflow errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(IssueflowError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Data Errors
class DataError(IssueflowError):
    """Errors reading issue or history data files."""

    pass


class DataFileError(DataError):
    """A data file could not be read or has an unusable shape."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot read {path}: {detail}")


# Validation Errors
class ValidationError(IssueflowError):
    """Invalid input value."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")
