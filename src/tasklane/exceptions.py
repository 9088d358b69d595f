"""Custom exceptions for tasklane."""


class TasklaneError(Exception):
    """Base exception for all tasklane errors."""

    pass


class ValidationError(TasklaneError):
    """Raised when validation fails."""

    pass


class InvalidViewportError(ValidationError):
    """Raised when a viewport range or column count is unusable."""

    pass


class ParseError(TasklaneError):
    """Raised when YAML parsing fails."""

    pass
