"""Lazy, memoized resource inventory of classpath entries."""
from __future__ import annotations

import logging
import zipfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Set

from common.logging_utils import extra_context, is_debug_enabled

from .models import ClasspathEntry, ResourceVersion
from .walker import walk_archive, walk_directory

logger = logging.getLogger(__name__)

EVENT_EXTRACT = "extract"
EVENT_ENTRY_START = "entry_start"
EVENT_ENTRY_END = "entry_end"


@dataclass(frozen=True)
class ScanEvent:
    """Progress notification emitted while staging or indexing."""
    kind: str
    name: str
    count: Optional[int] = None


ScanListener = Callable[[ScanEvent], None]


def _walk_entry(entry: ClasspathEntry) -> List[ResourceVersion]:
    walker = walk_directory if entry.is_class_folder else walk_archive
    versions: List[ResourceVersion] = []
    seen: Set[str] = set()
    for walked in walker(entry.path):
        if walked.path in seen:
            if is_debug_enabled(logger):
                logger.debug("Skipping repeated resource", extra=extra_context(
                    event="decision", component="indexer", action="dedupe",
                    target=walked.path, outcome="skipped",
                ))
            continue
        seen.add(walked.path)
        versions.append(ResourceVersion(entry, walked.path, walked.size))
    return versions


def index_entry(entry: ClasspathEntry, listener: Optional[ScanListener] = None) -> List[ResourceVersion]:
    """Return the resource inventory of ``entry``, walking it at most once.

    A jar that cannot be opened is logged and gets an empty inventory; it
    stays on the classpath but contributes nothing. If the walk is
    interrupted nothing is memoized.
    """
    if entry.is_indexed:
        return entry.resource_versions
    with entry._lock:  # pylint: disable=protected-access
        if entry.is_indexed:
            return entry.resource_versions
        if listener is not None:
            listener(ScanEvent(EVENT_ENTRY_START, entry.display_name))
        kind = "class folder" if entry.is_class_folder else "jar"
        logger.debug("Scanning %s: %s", kind, entry.url)
        try:
            versions = _walk_entry(entry)
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as exc:
            logger.warning("Could not scan %s: %s - reason: %s", kind, entry.url, exc)
            versions = []
        entry._fill(versions)  # pylint: disable=protected-access
        if listener is not None:
            listener(ScanEvent(EVENT_ENTRY_END, entry.display_name, len(versions)))
    return versions


def index_entries(entries: Iterable[ClasspathEntry], listener: Optional[ScanListener] = None,
                  jobs: int = 1) -> None:
    """Force indexing of every entry, optionally on a thread pool."""
    pending = [e for e in entries if not e.is_indexed]
    if jobs <= 1 or len(pending) <= 1:
        for entry in pending:
            index_entry(entry, listener)
        return
    with ThreadPoolExecutor(max_workers=jobs) as pool:
        futures = [pool.submit(index_entry, entry, listener) for entry in pending]
        for future in futures:
            future.result()
