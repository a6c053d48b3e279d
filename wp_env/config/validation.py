"""Validation helpers for raw ``.wp-env.json`` payloads."""

from __future__ import annotations

import logging
from typing import Any

from .errors import ConfigValidationError
from .models import ENVIRONMENT_NAMES
from .sources import SourceContext, resolve_source

logger = logging.getLogger(__name__)

OVERRIDE_FIELDS = ("core", "plugins", "themes", "port", "mappings")
ROOT_FIELDS = ("core", "plugins", "themes", "port", "testsPort", "mappings", "env")


def field_error(config_file: str, field: str, message: str) -> ConfigValidationError:
    return ConfigValidationError(f'Invalid {config_file}: "{field}" {message}.')


def ensure_mapping(value: Any, *, name: str, config_file: str) -> dict[str, Any]:
    """Return *value* as ``dict`` or raise a descriptive error."""

    if not isinstance(value, dict):
        raise field_error(config_file, name, "must be an object")
    return value


def _is_integer(value: Any) -> bool:
    # bool is a subclass of int but ``true`` is not a port.
    return isinstance(value, int) and not isinstance(value, bool)


def _check_core(value: Any, field: str, config_file: str) -> None:
    if value is not None and not isinstance(value, str):
        raise field_error(config_file, field, "must be null or a string")


def _check_string_list(value: Any, field: str, config_file: str) -> None:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise field_error(config_file, field, "must be an array of strings")


def _check_port(value: Any, field: str, config_file: str) -> None:
    if not _is_integer(value):
        raise field_error(config_file, field, "must be an integer")
    if value <= 0:
        raise field_error(config_file, field, "must be greater than zero")


def _check_mappings(value: Any, field: str, config_file: str, context: SourceContext) -> None:
    ensure_mapping(value, name=field, config_file=config_file)
    for key, descriptor in value.items():
        entry = f"{field}.{key}"
        if not isinstance(descriptor, str):
            raise field_error(config_file, entry, "should be a string")
        resolve_source(descriptor, context, field=entry)


def _warn_unknown(block: dict[str, Any], known: tuple[str, ...], prefix: str) -> None:
    for key in block:
        if key not in known:
            logger.warning("Ignoring unknown configuration field %r", f"{prefix}{key}")


def _validate_block(
    block: dict[str, Any],
    prefix: str,
    config_file: str,
    context: SourceContext,
) -> None:
    if "core" in block:
        _check_core(block["core"], f"{prefix}core", config_file)
    for name in ("plugins", "themes"):
        if name in block:
            _check_string_list(block[name], f"{prefix}{name}", config_file)
    if "port" in block:
        _check_port(block["port"], f"{prefix}port", config_file)
    if prefix == "" and "testsPort" in block:
        # The root testsPort is the root port of the tests environment.
        _check_port(block["testsPort"], "env.tests.port", config_file)
    if "mappings" in block:
        _check_mappings(block["mappings"], f"{prefix}mappings", config_file, context)


def validate_config(
    raw: Any,
    context: SourceContext,
    *,
    config_file: str = ".wp-env.json",
) -> dict[str, Any]:
    """Validate the parsed document *raw* and return it.

    Fields are checked in declaration order and the first violation raises
    :class:`ConfigValidationError`.
    """

    if not isinstance(raw, dict):
        raise ConfigValidationError(
            f"Invalid {config_file}: the top level must be a JSON object."
        )

    _warn_unknown(raw, ROOT_FIELDS, "")
    _validate_block(raw, "", config_file, context)

    if "env" in raw:
        overrides = ensure_mapping(raw["env"], name="env", config_file=config_file)
        _warn_unknown(overrides, ENVIRONMENT_NAMES, "env.")
        for env_name in ENVIRONMENT_NAMES:
            if env_name not in overrides:
                continue
            block = overrides[env_name]
            prefix = f"env.{env_name}."
            ensure_mapping(block, name=f"env.{env_name}", config_file=config_file)
            _warn_unknown(block, OVERRIDE_FIELDS, prefix)
            _validate_block(block, prefix, config_file, context)
    return raw
