"""Typed containers for a resolved wp-env configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Union

ENVIRONMENT_NAMES = ("development", "tests")


@dataclass(frozen=True)
class LocalSource:
    """A directory that already exists on the host."""

    type: ClassVar[str] = "local"

    path: Path
    basename: str
    tests_path: Path | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "path": str(self.path),
            "basename": self.basename,
        }
        if self.tests_path is not None:
            data["testsPath"] = str(self.tests_path)
        return data


@dataclass(frozen=True)
class GitSource:
    """A GitHub repository checked out into the work directory."""

    type: ClassVar[str] = "git"

    url: str
    ref: str
    path: Path
    basename: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "url": self.url,
            "ref": self.ref,
            "path": str(self.path),
            "basename": self.basename,
        }


@dataclass(frozen=True)
class ZipSource:
    """A remote ``.zip`` archive extracted into the work directory."""

    type: ClassVar[str] = "zip"

    url: str
    path: Path
    basename: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "url": self.url,
            "path": str(self.path),
            "basename": self.basename,
        }


Source = Union[LocalSource, GitSource, ZipSource]


def _freeze(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class Environment:
    """One runnable variant of the environment (``development`` or ``tests``)."""

    port: int
    core_source: Source | None = None
    plugin_sources: tuple[Source, ...] = ()
    theme_sources: tuple[Source, ...] = ()
    mappings: Mapping[str, Source] = field(default_factory=lambda: _freeze({}))

    def __post_init__(self) -> None:
        # Callers may hand in lists and dicts; store read-only views.
        object.__setattr__(self, "plugin_sources", tuple(self.plugin_sources))
        object.__setattr__(self, "theme_sources", tuple(self.theme_sources))
        object.__setattr__(self, "mappings", _freeze(self.mappings))

    def to_dict(self) -> dict[str, Any]:
        return {
            "port": self.port,
            "coreSource": self.core_source.to_dict() if self.core_source else None,
            "pluginSources": [source.to_dict() for source in self.plugin_sources],
            "themeSources": [source.to_dict() for source in self.theme_sources],
            "mappings": {key: source.to_dict() for key, source in self.mappings.items()},
        }


class _Unset:
    """Marker for override fields that were not given."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class EnvironmentOverride:
    """Fields of one ``env.<name>`` block.

    Any field left as ``UNSET`` keeps the value of the environment it is
    merged into. ``core_source`` may be set to ``None`` to drop the core.
    """

    port: Any = UNSET
    core_source: Any = UNSET
    plugin_sources: Any = UNSET
    theme_sources: Any = UNSET
    mappings: Any = UNSET

    def is_empty(self) -> bool:
        return all(
            value is UNSET
            for value in (
                self.port,
                self.core_source,
                self.plugin_sources,
                self.theme_sources,
                self.mappings,
            )
        )


@dataclass(frozen=True)
class Config:
    """The fully resolved configuration of a project."""

    name: str
    config_directory_path: Path
    work_directory_path: Path
    environments: Mapping[str, Environment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "environments", _freeze(self.environments))

    @property
    def docker_compose_config_path(self) -> Path:
        return self.work_directory_path / "docker-compose.yml"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "configDirectoryPath": str(self.config_directory_path),
            "workDirectoryPath": str(self.work_directory_path),
            "dockerComposeConfigPath": str(self.docker_compose_config_path),
            "env": {name: env.to_dict() for name, env in self.environments.items()},
        }
