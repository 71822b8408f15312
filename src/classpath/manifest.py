"""Class-Path discovery from jar manifests.

A manifest main section is a list of ``Name: Value`` lines; long values are
wrapped onto continuation lines that start with a single space.
"""
from __future__ import annotations

import logging
import os
import zipfile
from typing import Dict, Iterable, List, Optional
from urllib.parse import unquote

from constants import Constants

from .models import ClasspathEntry

logger = logging.getLogger(__name__)


def parse_manifest(text: str) -> Dict[str, str]:
    """Parse the main section of a manifest into a header dict."""
    headers: Dict[str, str] = {}
    current: Optional[str] = None
    for raw in text.splitlines():
        if not raw.strip():
            break  # end of main section
        if raw.startswith(" ") and current is not None:
            headers[current] += raw[1:]
            continue
        name, sep, value = raw.partition(":")
        if not sep:
            continue
        current = name.strip()
        headers[current] = value.strip()
    return headers


def read_manifest_classpath(jar_path: str) -> List[str]:
    """Return the raw ``Class-Path`` URLs declared by a jar, in order.

    Raises:
        OSError, zipfile.BadZipFile: If the jar cannot be read.
    """
    with zipfile.ZipFile(jar_path) as jar:
        try:
            data = jar.read(Constants.MANIFEST_PATH)
        except KeyError:
            return []
    headers = parse_manifest(data.decode("utf-8", errors="replace"))
    value = headers.get(Constants.MANIFEST_CLASS_PATH, "")
    return value.split()


def find_manifest_classpath_entries(entry: ClasspathEntry) -> List[ClasspathEntry]:
    """Entries linked from a jar via its manifest ``Class-Path`` header.

    Relative URLs resolve against the jar's directory; targets that do not
    exist are skipped.
    """
    if not entry.is_jar:
        return []
    try:
        urls = read_manifest_classpath(entry.path)
    except (OSError, zipfile.BadZipFile) as exc:
        logger.warning("Problem scanning Manifest classpath of %s: %s", entry.display_name, exc)
        return []
    base = os.path.dirname(entry.path)
    found: List[ClasspathEntry] = []
    for url in urls:
        logger.debug("Manifest jar path: %s", url)
        target = unquote(url[len("file:"):] if url.startswith("file:") else url)
        target = os.path.normpath(os.path.join(base, target))
        if not os.path.exists(target):
            logger.debug("Manifest classpath target missing: %s", target)
            continue
        found.append(ClasspathEntry(target, class_folder=os.path.isdir(target)))
    return found


def expand_manifest_classpath(entries: Iterable[ClasspathEntry]) -> List[ClasspathEntry]:
    """Add entries reachable through manifest Class-Path links, transitively."""
    result: List[ClasspathEntry] = []
    seen = set()
    queue = list(entries)
    while queue:
        entry = queue.pop(0)
        if entry in seen:
            continue
        seen.add(entry)
        result.append(entry)
        queue.extend(e for e in find_manifest_classpath_entries(entry) if e not in seen)
    return result
