"""Helper utilities for debugging wp-env configuration reads."""

from __future__ import annotations

import logging
import os
from typing import Mapping


def is_debug_enabled(variables: Mapping[str, str] | None = None) -> bool:
    """Return ``True`` if ``WP_ENV_DEBUG`` is set to a truthy value.

    *variables* defaults to ``os.environ``.
    """
    if variables is None:
        variables = os.environ
    val = variables.get("WP_ENV_DEBUG", "")
    return bool(val) and val.lower() not in {"0", "false", "no"}


def enable_debug_logging(
    default_level: str = "DEBUG",
    variables: Mapping[str, str] | None = None,
) -> None:
    """Configure the ``wp_env`` logger when debug mode is active.

    If ``WP_ENV_DEBUG`` is enabled this sets up the ``wp_env`` logger to emit
    messages to ``stderr`` using the log level from ``WP_ENV_LOG_LEVEL`` if
    defined or ``default_level`` otherwise. A logger that already has
    handlers is left untouched.
    """
    if variables is None:
        variables = os.environ
    if not is_debug_enabled(variables):
        return

    logger = logging.getLogger("wp_env")
    if logger.handlers:
        return

    level_name = variables.get("WP_ENV_LOG_LEVEL", default_level).upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.DEBUG

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s wp_env: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
