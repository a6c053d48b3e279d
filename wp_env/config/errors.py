"""Exceptions raised while reading a wp-env configuration."""

from __future__ import annotations


class ConfigValidationError(ValueError):
    """The configuration file could not be read, parsed or validated."""


class InvalidSourceError(ConfigValidationError):
    """A source descriptor matched none of the known source grammars."""

    def __init__(self, descriptor: str, field: str | None = None) -> None:
        self.descriptor = descriptor
        self.field = field
        if field is None:
            message = f'Invalid or unrecognized source: "{descriptor}".'
        else:
            message = f'Invalid or unrecognized source for "{field}": "{descriptor}".'
        super().__init__(message)
