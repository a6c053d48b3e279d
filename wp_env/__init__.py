"""Read and resolve wp-env development environment configurations."""

from .config import ConfigValidationError, read_config

__all__ = ["ConfigValidationError", "read_config"]
