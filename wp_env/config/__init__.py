"""Configuration reading for wp-env."""

from .errors import ConfigValidationError, InvalidSourceError
from .host import HostSnapshot
from .loader import dump_config, read_config
from .models import Config, Environment, GitSource, LocalSource, Source, ZipSource

__all__ = [
    "Config",
    "ConfigValidationError",
    "Environment",
    "GitSource",
    "HostSnapshot",
    "InvalidSourceError",
    "LocalSource",
    "Source",
    "ZipSource",
    "dump_config",
    "read_config",
]
