"""Guess whether a directory holds WordPress core, a plugin or a theme."""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

CORE_MARKERS = ("wp-settings.php", "src/wp-settings.php")
_PLUGIN_HEADER = re.compile(r"^[ \t/*#@]*Plugin Name:", re.MULTILINE)
_THEME_HEADER = re.compile(r"^[ \t/*#@]*Theme Name:", re.MULTILINE)
# Headers live in the first 8 KiB of the file.
_HEADER_SIZE = 8192


def _read_header(path: Path) -> str:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as fh:
            return fh.read(_HEADER_SIZE)
    except OSError as exc:
        logger.debug("Could not read %s: %s", path, exc)
        return ""


def detect_directory_type(directory: str | Path) -> str | None:
    """Return ``"core"``, ``"plugin"``, ``"theme"`` or ``None`` for *directory*."""

    directory = Path(directory)
    if any((directory / marker).is_file() for marker in CORE_MARKERS):
        return "core"

    for php_file in sorted(directory.glob("*.php")):
        if _PLUGIN_HEADER.search(_read_header(php_file)):
            return "plugin"

    stylesheet = directory / "style.css"
    if stylesheet.is_file() and _THEME_HEADER.search(_read_header(stylesheet)):
        return "theme"
    return None
