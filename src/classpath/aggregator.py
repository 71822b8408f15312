"""Merge per-entry inventories into a global resource map."""
from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Pattern, Union

from .indexer import ScanListener, index_entries
from .models import ClasspathEntry, ClasspathResource, ResourceMap

logger = logging.getLogger(__name__)


def unique_entries(entries: Iterable[ClasspathEntry]) -> List[ClasspathEntry]:
    """Drop repeated entries (same URL) and sort by URL."""
    by_url: Dict[str, ClasspathEntry] = {}
    for entry in entries:
        by_url.setdefault(entry.url, entry)
    return [by_url[url] for url in sorted(by_url)]


def aggregate(entries: Iterable[ClasspathEntry], listener: Optional[ScanListener] = None,
              jobs: int = 1) -> ResourceMap:
    """Group every indexed resource version by resource name.

    Entries are indexed first (in parallel when ``jobs`` > 1) and merged in URL
    order, so the result does not depend on the input order. Keys are
    returned sorted.
    """
    ordered = unique_entries(entries)
    index_entries(ordered, listener=listener, jobs=jobs)
    grouped: Dict[str, ClasspathResource] = {}
    for entry in ordered:
        for version in entry.resource_versions:
            resource = grouped.get(version.name)
            if resource is None:
                resource = grouped[version.name] = ClasspathResource(version.name)
            resource.add(version)
    logger.debug("Aggregated %d resources from %d entries", len(grouped), len(ordered))
    return {name: grouped[name] for name in sorted(grouped)}


def with_duplicates(resources: ResourceMap) -> ResourceMap:
    """Resources provided by two or more entries."""
    return {name: r for name, r in resources.items() if r.has_duplicates}


def with_size_differing_duplicates(resources: ResourceMap) -> ResourceMap:
    """Resources provided by two or more entries whose sizes are not all equal."""
    return {name: r for name, r in resources.items() if r.has_size_differing_duplicates}


def find_by_regex(resources: ResourceMap, expression: Union[str, Pattern]) -> List[ClasspathResource]:
    """Resources whose name contains a match for ``expression``.

    Raises:
        re.error: If ``expression`` is not a valid regular expression.
    """
    pattern = re.compile(expression) if isinstance(expression, str) else expression
    return [r for name, r in resources.items() if pattern.search(name)]
