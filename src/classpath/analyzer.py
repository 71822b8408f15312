"""Overlapping-jar statistics and multi-version resource lists."""
from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from constants import Constants

from .models import ClasspathResource, JarPair, ResourceMap


def _is_counted(resource: ClasspathResource, exclude_same_size: bool, classes_only: bool) -> bool:
    if not resource.has_duplicates:
        return False
    if classes_only and not resource.name.endswith(Constants.CLASS_SUFFIX):
        return False
    if exclude_same_size and not resource.has_size_differing_duplicates:
        return False
    return True


def find_overlapping_jars(resources: ResourceMap, exclude_same_size: bool = False,
                          classes_only: bool = False) -> List[JarPair]:
    """Count shared resources for every pair of entries.

    Each counted resource adds one to every unordered pair of its distinct
    contributing entries. Only pairs with a positive count are returned,
    ordered by decreasing count, then by the two entry URLs.
    """
    pairs: Dict[Tuple[str, str], JarPair] = {}
    for resource in resources.values():
        if not _is_counted(resource, exclude_same_size, classes_only):
            continue
        entries = sorted(set(resource.entries))
        for first, second in itertools.combinations(entries, 2):
            pair = JarPair(first, second)
            pairs.setdefault(pair.key, pair).increment()
    return sorted(pairs.values(), key=lambda p: (-p.dup_classes_total, p.jar1.url, p.jar2.url))


def find_class_file_duplicates(resources: ResourceMap, exclude_same_size: bool = False,
                               classes_only: bool = False) -> List[ClasspathResource]:
    """Resources with two or more versions, in name order.

    With ``exclude_same_size`` the versions must not all share one size.
    """
    return [r for r in resources.values() if _is_counted(r, exclude_same_size, classes_only)]


@dataclass
class OverlapAnalysis:
    """Everything the report needs from one analysis run."""
    resources: ResourceMap
    pairs: List[JarPair] = field(default_factory=list)
    duplicates: List[ClasspathResource] = field(default_factory=list)

    @property
    def total_duplicates(self) -> int:
        return sum(p.dup_classes_total for p in self.pairs)


def analyze(resources: ResourceMap, exclude_same_size: bool = False,
            classes_only: bool = False) -> OverlapAnalysis:
    return OverlapAnalysis(
        resources=resources,
        pairs=find_overlapping_jars(resources, exclude_same_size, classes_only),
        duplicates=find_class_file_duplicates(resources, exclude_same_size, classes_only),
    )
