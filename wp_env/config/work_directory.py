"""Locate the directory where wp-env caches downloaded sources."""

from __future__ import annotations

import hashlib
import logging
import os
from pathlib import Path
from typing import Callable

from .host import HostSnapshot

logger = logging.getLogger(__name__)

ENV_HOME = "WP_ENV_HOME"
HOME_DIRECTORY_NAME = ".wp-env"
# Snap confines Docker so it cannot read hidden directories in $HOME.
SNAP_DOCKER_MARKER = "/snap/bin/docker"


def get_home_directory(
    snapshot: HostSnapshot,
    *,
    path_exists: Callable[[str], bool] = os.path.exists,
) -> Path:
    """Return the root directory for all wp-env caches.

    Order of precedence:
    1. ``WP_ENV_HOME`` environment variable when set.
    2. ``~/.wp-env``, or ``~/wp-env`` on Linux with Snap-installed Docker.
    """

    env_home = snapshot.get(ENV_HOME)
    if env_home:
        return Path(os.path.abspath(os.path.expanduser(env_home)))

    name = HOME_DIRECTORY_NAME
    if snapshot.is_linux and path_exists(SNAP_DOCKER_MARKER):
        logger.debug("Snap-installed Docker detected, using a non-hidden home directory")
        name = name.lstrip(".")
    return snapshot.home_directory / name


def resolve_work_directory(
    config_path: Path,
    snapshot: HostSnapshot,
    *,
    path_exists: Callable[[str], bool] = os.path.exists,
) -> Path:
    """Return the cache directory for the project configured by *config_path*.

    Each configuration file gets its own subdirectory keyed by the MD5 digest
    of its absolute path.
    """

    digest = hashlib.md5(str(config_path).encode("utf-8")).hexdigest()
    return get_home_directory(snapshot, path_exists=path_exists) / digest
