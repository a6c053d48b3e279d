"""Build the ``development`` and ``tests`` environments from a validated document."""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from .errors import ConfigValidationError
from .host import HostSnapshot
from .models import ENVIRONMENT_NAMES, UNSET, Environment, EnvironmentOverride, Source
from .sources import SourceContext, resolve_source

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"development": 8888, "tests": 8889}
PORT_VARIABLES = {"development": "WP_ENV_PORT", "tests": "WP_ENV_TESTS_PORT"}
# Root-level key holding each environment's port.
ROOT_PORT_FIELDS = {"development": "port", "tests": "testsPort"}

DirectoryTypeDetector = Callable[[Path], Optional[str]]

_PORT_VALUE_RE = re.compile(r"^\s*\d+\s*$")


def merge_environment(base: Environment, override: EnvironmentOverride) -> Environment:
    """Return *base* with every field set on *override* replaced.

    Replacement is whole-field: an overridden plugin list is not merged with
    the base list.
    """

    if override.is_empty():
        return base
    changes = {
        name: getattr(override, name)
        for name in ("port", "core_source", "plugin_sources", "theme_sources", "mappings")
        if getattr(override, name) is not UNSET
    }
    return replace(base, **changes)


def _resolve_list(descriptors: list[str], context: SourceContext) -> tuple[Source, ...]:
    return tuple(resolve_source(descriptor, context) for descriptor in descriptors)


def _resolve_mappings(raw: Mapping[str, str], field: str, context: SourceContext) -> dict[str, Source]:
    return {
        key: resolve_source(descriptor, context, field=f"{field}.{key}")
        for key, descriptor in raw.items()
    }


def parse_override(
    block: Mapping[str, Any],
    context: SourceContext,
    *,
    prefix: str = "",
    port_field: str | None = "port",
) -> EnvironmentOverride:
    """Resolve the fields of one validated configuration block.

    ``port_field`` names the key holding the port; ``None`` leaves the port unset.
    """

    values: dict[str, Any] = {}
    if "core" in block:
        core = block["core"]
        values["core_source"] = (
            None if core is None else resolve_source(core, context, is_core=True)
        )
    if "plugins" in block:
        values["plugin_sources"] = _resolve_list(block["plugins"], context)
    if "themes" in block:
        values["theme_sources"] = _resolve_list(block["themes"], context)
    if port_field is not None and port_field in block:
        values["port"] = block[port_field]
    if "mappings" in block:
        values["mappings"] = _resolve_mappings(block["mappings"], f"{prefix}mappings", context)
    return EnvironmentOverride(**values)


def detected_override(directory_type: str | None, context: SourceContext) -> EnvironmentOverride:
    """Return the implicit sources for a project of *directory_type*."""

    if directory_type is None:
        return EnvironmentOverride()
    if directory_type == "core":
        return EnvironmentOverride(core_source=resolve_source(".", context, is_core=True))
    if directory_type == "plugin":
        return EnvironmentOverride(plugin_sources=(resolve_source(".", context),))
    if directory_type == "theme":
        return EnvironmentOverride(theme_sources=(resolve_source(".", context),))
    raise ConfigValidationError(f"Unknown directory type {directory_type!r}.")


def port_from_environment(env_name: str, snapshot: HostSnapshot) -> int | None:
    """Return the port set through the environment variable for *env_name*."""

    variable = PORT_VARIABLES[env_name]
    value = snapshot.get(variable)
    if value is None:
        return None
    if not _PORT_VALUE_RE.match(value):
        raise ConfigValidationError(
            f"Invalid environment variable: {variable} must be a number."
        )
    port = int(value)
    if port <= 0:
        raise ConfigValidationError(
            f"Invalid environment variable: {variable} must be greater than zero."
        )
    return port


def has_source_config(raw: Mapping[str, Any]) -> bool:
    """Return ``True`` if *raw* names core, plugins or themes anywhere."""

    fields = ("core", "plugins", "themes")
    if any(name in raw for name in fields):
        return True
    overrides = raw.get("env") or {}
    return any(
        name in (overrides.get(env_name) or {})
        for env_name in ENVIRONMENT_NAMES
        for name in fields
    )


def build_environments(
    raw: Mapping[str, Any],
    context: SourceContext,
    snapshot: HostSnapshot,
    *,
    config_exists: bool = True,
    detect_directory_type: DirectoryTypeDetector | None = None,
    config_file: str = ".wp-env.json",
) -> dict[str, Environment]:
    """Return the ``development`` and ``tests`` environments of *raw*.

    *raw* must already have passed :func:`~wp_env.config.validation.validate_config`.
    """

    if not has_source_config(raw) and not config_exists and detect_directory_type is not None:
        directory_type = detect_directory_type(context.config_directory_path)
        logger.debug("Detected directory type %r for %s", directory_type, context.config_directory_path)
        root = detected_override(directory_type, context)
    else:
        root = parse_override(raw, context, port_field=None)

    overrides = raw.get("env") or {}
    environments: dict[str, Environment] = {}
    for env_name in ENVIRONMENT_NAMES:
        env = merge_environment(Environment(port=DEFAULT_PORTS[env_name]), root)

        # The root port belongs to development only; tests reads testsPort.
        root_port = raw.get(ROOT_PORT_FIELDS[env_name], UNSET)
        env = merge_environment(env, EnvironmentOverride(port=root_port))

        block = overrides.get(env_name) or {}
        env = merge_environment(env, parse_override(block, context, prefix=f"env.{env_name}."))

        env_port = port_from_environment(env_name, snapshot)
        if env_port is not None:
            env = replace(env, port=env_port)
        environments[env_name] = env

    ports = [env.port for env in environments.values()]
    if len(set(ports)) != len(ports):
        raise ConfigValidationError(f"Invalid {config_file}: Each port value must be unique.")
    return environments
