"""Shared exception types for powerprompt."""


class PromptError(Exception):
    """Base exception for all powerprompt errors."""


class ConfigError(PromptError):
    """Configuration is invalid."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = fields
