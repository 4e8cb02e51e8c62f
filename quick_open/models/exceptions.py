"""Exception hierarchy for Quick Open.

Errors carry an optional suggestion so the host can show something useful.
"""


class QuickOpenError(Exception):
    """Base exception for all Quick Open errors.

    All domain-specific exceptions inherit from this base class,
    enabling consistent error handling across the application.
    """

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message} ({self.suggestion})"
        return self.message


class ConfigError(QuickOpenError):
    """Configuration is invalid or missing."""

    pass


class ConfigValidationError(ConfigError):
    """Configuration value failed validation."""

    pass


class SearchError(QuickOpenError):
    """Search operation failed."""

    pass


class SelectionError(SearchError):
    """Selected result does not exist."""

    pass
