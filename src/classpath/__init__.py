"""Classpath scanning package.

- walker.py: file walking over directories and zip archives
- models.py: ClasspathEntry, ResourceVersion, ClasspathResource, JarPair
- indexer.py: lazy per-entry resource inventories and scan events
- aggregator.py: name -> resource map across entries
- analyzer.py: overlapping jar pairs and duplicate resources
- manifest.py: optional manifest Class-Path discovery
"""

from .models import ClasspathEntry, ResourceVersion, ClasspathResource, JarPair
from .indexer import ScanEvent, index_entry, index_entries
from .aggregator import aggregate, with_duplicates, with_size_differing_duplicates, find_by_regex
from .analyzer import OverlapAnalysis, analyze, find_overlapping_jars, find_class_file_duplicates

__all__ = [
    "ClasspathEntry",
    "ResourceVersion",
    "ClasspathResource",
    "JarPair",
    "ScanEvent",
    "index_entry",
    "index_entries",
    "aggregate",
    "with_duplicates",
    "with_size_differing_duplicates",
    "find_by_regex",
    "OverlapAnalysis",
    "analyze",
    "find_overlapping_jars",
    "find_class_file_duplicates",
]
