"""Uniform file walking over directories and zip archives.

A zip archive is read from its member list, so names come out the same as
the root-relative paths of an unpacked directory. Every yielded path starts
with ``/`` and uses forward slashes, whichever source produced it.
"""
from __future__ import annotations

import logging
import os
import zipfile
from typing import Callable, Iterator, NamedTuple, Optional, Set

from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[str, Exception], None]


class WalkedFile(NamedTuple):
    """One regular file found beneath a walk root."""
    path: str  # root-relative, leading "/"
    size: int


def _log_error(path: str, exc: Exception) -> None:
    logger.warning("Could not read %s: %s", path, exc)


def walk_directory(root: str, on_error: Optional[ErrorHandler] = None) -> Iterator[WalkedFile]:
    """Yield every regular file beneath a real directory.

    Symbolic links are followed, but each resolved directory is entered only
    once so link cycles terminate. Files that cannot be stat'ed are reported
    through ``on_error`` and skipped.
    """
    report = on_error or _log_error
    seen: Set[str] = set()

    def _onerror(exc: OSError) -> None:
        report(getattr(exc, "filename", None) or root, exc)

    for dirpath, dirnames, filenames in os.walk(root, followlinks=True, onerror=_onerror):
        real = os.path.realpath(dirpath)
        if real in seen:
            dirnames[:] = []
            continue
        seen.add(real)
        dirnames.sort()
        for name in sorted(filenames):
            full = os.path.join(dirpath, name)
            try:
                st = os.stat(full)
            except OSError as exc:
                report(full, exc)
                continue
            rel = os.path.relpath(full, root).replace(os.sep, "/")
            yield WalkedFile("/" + rel, st.st_size)


def _member_path(info: zipfile.ZipInfo) -> str:
    return "/" + info.filename.lstrip("/")


def walk_archive(archive_path: str,
                 on_error: Optional[ErrorHandler] = None,  # pylint: disable=unused-argument
                 ) -> Iterator[WalkedFile]:
    """Yield every regular file inside a zip-format archive.

    Members are listed once from the central directory, in name order.
    Names stored with a leading ``/`` are normalized like any other. The
    archive handle is closed when the generator finishes, is closed early,
    or raises. ``on_error`` is accepted for symmetry with
    ``walk_directory``; a member list has no per-file failures.

    Raises:
        OSError: If the archive cannot be opened.
        zipfile.BadZipFile: If the file is not a zip archive.
    """
    with zipfile.ZipFile(archive_path) as archive:
        members = [info for info in archive.infolist() if not info.is_dir()]
        if is_debug_enabled(logger):
            logger.debug("Opened archive", extra=extra_context(
                event="function_entry", component="walker", action="walk_archive",
                target=archive_path, count=len(members),
            ))
        for info in sorted(members, key=_member_path):
            yield WalkedFile(_member_path(info), info.file_size)


def walk(root: str, on_error: Optional[ErrorHandler] = None) -> Iterator[WalkedFile]:
    """Walk a directory or a zip archive, whichever ``root`` names.

    Filtering is left to the caller.
    """
    if os.path.isdir(root):
        return walk_directory(root, on_error)
    return walk_archive(root, on_error)
