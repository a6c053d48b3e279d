"""Read a ``.wp-env.json`` file into a :class:`~wp_env.config.models.Config`."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable

import yaml

from wp_env.debug_utils import enable_debug_logging
from wp_env.detect_directory_type import detect_directory_type as default_detect_directory_type

from .environment import DirectoryTypeDetector, build_environments
from .errors import ConfigValidationError
from .host import HostSnapshot
from .models import Config
from .sources import SourceContext
from .validation import validate_config
from .work_directory import resolve_work_directory

logger = logging.getLogger(__name__)


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _read_data_file(
    path: Path,
    read_file: Callable[[Path], str],
) -> tuple[Any, bool]:
    """Load the JSON document at *path*.

    Returns the parsed value and whether the file exists. A missing file
    yields an empty mapping.
    """

    try:
        text = read_file(path)
    except FileNotFoundError:
        return {}, False
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigValidationError(f"Could not read {path.name}: {exc}") from exc

    try:
        return json.loads(text), True
    except json.JSONDecodeError as exc:
        raise ConfigValidationError(f"Invalid {path.name}: {exc}") from exc


def read_config(
    config_path: str | os.PathLike[str],
    *,
    snapshot: HostSnapshot | None = None,
    detect_directory_type: DirectoryTypeDetector | None = None,
    path_exists: Callable[[str], bool] = os.path.exists,
    read_file: Callable[[Path], str] = _read_text,
) -> Config:
    """Read, validate and resolve the configuration file at *config_path*.

    ``snapshot`` defaults to the current process environment. The detector
    is only consulted when the file is missing and names no sources.

    Raises:
        ConfigValidationError: the file cannot be read or parsed, a field is
            malformed, a source is unrecognized or the ports collide.
    """

    snapshot = snapshot or HostSnapshot.capture()
    enable_debug_logging(variables=snapshot.variables)
    if detect_directory_type is None:
        detect_directory_type = default_detect_directory_type

    config_path = Path(os.path.abspath(config_path))
    config_directory_path = config_path.parent
    config_file = config_path.name

    raw, exists = _read_data_file(config_path, read_file)
    if not exists:
        logger.debug("%s not found, using an empty configuration", config_path)

    work_directory_path = resolve_work_directory(config_path, snapshot, path_exists=path_exists)
    context = SourceContext(
        work_directory_path=work_directory_path,
        config_directory_path=config_directory_path,
        home_directory=snapshot.home_directory,
    )

    raw = validate_config(raw, context, config_file=config_file)
    environments = build_environments(
        raw,
        context,
        snapshot,
        config_exists=exists,
        detect_directory_type=detect_directory_type,
        config_file=config_file,
    )

    config = Config(
        name=config_directory_path.name,
        config_directory_path=config_directory_path,
        work_directory_path=work_directory_path,
        environments=environments,
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Resolved configuration:\n%s", dump_config(config))
    return config


def dump_config(config: Config) -> str:
    """Return *config* rendered as YAML."""

    return yaml.safe_dump(config.to_dict(), sort_keys=False, default_flow_style=False)
