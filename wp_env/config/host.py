"""Point-in-time view of the process environment."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class HostSnapshot:
    """Environment variables, platform and home directory of the caller.

    Captured once per :func:`~wp_env.config.read_config` call so that every
    step sees the same values.
    """

    variables: Mapping[str, str] = field(default_factory=dict)
    platform: str = sys.platform
    home_directory: Path = field(default_factory=Path.home)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))
        object.__setattr__(self, "home_directory", Path(self.home_directory))

    @classmethod
    def capture(cls) -> "HostSnapshot":
        return cls(variables=os.environ, platform=sys.platform, home_directory=Path.home())

    def get(self, name: str) -> str | None:
        """Return the variable *name*, treating empty values as unset."""

        value = self.variables.get(name)
        if value is None or value == "":
            return None
        return value

    @property
    def is_linux(self) -> bool:
        return self.platform.startswith("linux")
