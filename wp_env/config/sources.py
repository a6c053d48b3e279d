"""Turn source descriptor strings into typed sources.

Three grammars are recognised, tried in order:

1. local paths (``./x``, ``../x``, ``~/x``, ``.``, ``~`` or absolute paths),
2. GitHub shorthand (``owner/repo`` or ``owner/repo#ref``),
3. archive URLs (``https://host/.../name[-version].zip``).

Resolution is a pure function of the descriptor and the :class:`SourceContext`;
the filesystem is never touched.
"""

from __future__ import annotations

import logging
import os
import posixpath
import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlsplit

from .errors import InvalidSourceError
from .models import GitSource, LocalSource, Source, ZipSource

logger = logging.getLogger(__name__)

DEFAULT_GIT_REF = "master"

_GITHUB_RE = re.compile(r"^(?P<owner>[A-Za-z0-9][A-Za-z0-9-]*)/(?P<repo>[^/#:\s]+)(?:#(?P<ref>\S+))?$")
_ZIP_URL_RE = re.compile(r"^https?://[^\s/?#]+/\S*\.zip$", re.IGNORECASE)
# Trailing version such as ``-1.3`` or ``.8.1.0``. Names made only of digits
# and separators (``2020``, ``1.2.3``) are kept whole by archive_basename().
_VERSION_SUFFIX_RE = re.compile(r"(?<=[^.\-])[.\-]v?\d+(?:\.\d+)*$")
_ARCHIVE_KINDS = ("plugin", "theme")


@dataclass(frozen=True)
class SourceContext:
    """Directories that source paths are resolved against."""

    work_directory_path: Path
    config_directory_path: Path
    home_directory: Path


def _is_local_path(descriptor: str) -> bool:
    if descriptor in (".", "..", "~"):
        return True
    if descriptor.startswith(("./", "../", "~/")):
        return True
    return os.path.isabs(descriptor)


def _resolve_local(descriptor: str, context: SourceContext, is_core: bool) -> LocalSource:
    if descriptor == "~" or descriptor.startswith("~/"):
        raw = str(context.home_directory) + descriptor[1:]
    else:
        raw = descriptor
    # normpath keeps this pure; Path.resolve() would follow symlinks on disk.
    path = Path(os.path.normpath(os.path.join(context.config_directory_path, raw)))
    tests_path = None
    if is_core:
        tests_path = path.parent / f"tests-{path.name}"
    return LocalSource(path=path, basename=path.name, tests_path=tests_path)


def _resolve_github(match: re.Match, context: SourceContext) -> GitSource:
    owner, repo = match.group("owner"), match.group("repo")
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    return GitSource(
        url=f"https://github.com/{owner}/{repo}.git",
        ref=match.group("ref") or DEFAULT_GIT_REF,
        path=context.work_directory_path / repo,
        basename=repo,
    )


def archive_basename(url: str) -> str:
    """Return the stable add-on name of an archive URL.

    ``https://downloads.wordpress.org/plugin/gutenberg.8.1.0.zip`` becomes
    ``gutenberg``.
    """

    segment = posixpath.basename(unquote(urlsplit(url).path))
    stem = segment[: -len(".zip")] if segment.lower().endswith(".zip") else segment
    stripped = _VERSION_SUFFIX_RE.sub("", stem)
    if not re.search(r"[^\d.\-]", stripped):
        return stem
    return stripped


def archive_kind(url: str) -> str | None:
    """Return ``"plugin"`` or ``"theme"`` when the URL path names one."""

    segments = [part for part in urlsplit(url).path.split("/") if part]
    for part in segments[:-1]:
        candidate = part.lower().rstrip("s")
        if candidate in _ARCHIVE_KINDS:
            return candidate
    return None


def _resolve_zip(url: str, context: SourceContext) -> ZipSource:
    basename = archive_basename(url)
    if not basename:
        raise InvalidSourceError(url)
    logger.debug("Archive %s resolved as %s %r", url, archive_kind(url) or "archive", basename)
    return ZipSource(url=url, path=context.work_directory_path / basename, basename=basename)


def resolve_source(
    descriptor: str,
    context: SourceContext,
    *,
    is_core: bool = False,
    field: str | None = None,
) -> Source:
    """Classify *descriptor* and return the matching source.

    ``is_core`` adds the ``tests_path`` sibling to local sources. ``field``
    only scopes the error message.
    """

    if not isinstance(descriptor, str):
        raise InvalidSourceError(repr(descriptor), field)

    if _is_local_path(descriptor):
        return _resolve_local(descriptor, context, is_core)

    github = _GITHUB_RE.match(descriptor)
    if github:
        return _resolve_github(github, context)

    if _ZIP_URL_RE.match(descriptor):
        return _resolve_zip(descriptor, context)

    raise InvalidSourceError(descriptor, field)
