"""Data model for classpath entries, their resources and overlapping pairs."""
from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
from urllib.parse import unquote, urlparse

from constants import Constants
from versioning import Coordinates, parse_coordinates


def normalize_url(location: str, class_folder: bool = False) -> str:
    """Return the ``file://`` URL used as identity for a classpath entry.

    Class folder URLs always end with ``/``.
    """
    if location.startswith("file:"):
        url = location
    else:
        url = Path(os.path.abspath(location)).as_uri()
    if class_folder and not url.endswith("/"):
        url += "/"
    return url


def url_to_path(url: str) -> str:
    """Convert a ``file://`` URL back into a local filesystem path."""
    parsed = urlparse(url)
    path = unquote(parsed.path)
    if os.name == "nt" and path.startswith("/") and len(path) > 2 and path[2] == ":":
        path = path[1:]
    return path.rstrip("/") or "/"


class ClasspathEntry:
    """A class folder or a jar-like archive on the classpath.

    Equality and hashing use the normalized origin URL only. The resource
    inventory is filled at most once, on first access, by
    ``classpath.indexer.index_entry``.
    """

    def __init__(self, location: str, class_folder: Optional[bool] = None):
        if class_folder is None:
            class_folder = location.endswith("/") or os.path.isdir(location)
        self.url = normalize_url(location, class_folder=class_folder)
        self.path = url_to_path(self.url)
        self.jar_name = "" if class_folder else os.path.basename(self.path)
        self.coordinates: Coordinates = parse_coordinates(self.jar_name)
        self._versions: Optional[List[ResourceVersion]] = None
        self._class_count = 0
        self._lock = threading.Lock()

    @property
    def is_class_folder(self) -> bool:
        return self.url.endswith("/")

    @property
    def is_jar(self) -> bool:
        return not self.is_class_folder

    @property
    def artifact_id(self) -> str:
        return self.coordinates.artifact_id

    @property
    def version(self):
        return self.coordinates.version

    @property
    def display_name(self) -> str:
        """Archive file name, or the trailing path of a class folder."""
        if self.jar_name:
            return self.jar_name
        parts = self.path.replace("\\", "/").rstrip("/").split("/")
        return "/".join(parts[-2:])

    @property
    def is_indexed(self) -> bool:
        return self._versions is not None

    @property
    def resource_versions(self) -> List[ResourceVersion]:
        """Resource inventory; indexes the entry on first access."""
        if self._versions is None:
            from classpath.indexer import index_entry  # pylint: disable=import-outside-toplevel
            return index_entry(self)
        return self._versions

    @property
    def class_count(self) -> int:
        """Number of resources whose name ends with ``.class``."""
        if self._versions is None:
            _ = self.resource_versions
        return self._class_count

    def _fill(self, versions: List[ResourceVersion]) -> None:
        """Single assignment of the inventory; callers hold ``_lock``."""
        self._versions = versions
        self._class_count = sum(1 for v in versions if v.is_class)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClasspathEntry):
            return NotImplemented
        return self.url == other.url

    def __hash__(self) -> int:
        return hash(self.url)

    def __lt__(self, other: ClasspathEntry) -> bool:
        return self.url < other.url

    def __repr__(self) -> str:
        return f"ClasspathEntry({self.url!r})"


@dataclass(frozen=True)
class ResourceVersion:
    """One physical occurrence of a resource inside one classpath entry."""
    entry: ClasspathEntry = field(compare=False, repr=False)
    name: str
    size: int

    @property
    def url(self) -> str:
        return self.entry.url

    @property
    def is_class(self) -> bool:
        return self.name.endswith(Constants.CLASS_SUFFIX)


@dataclass
class ClasspathResource:
    """A resource name with every version that provides it."""
    name: str
    versions: List[ResourceVersion] = field(default_factory=list)

    def add(self, version: ResourceVersion) -> None:
        if version.name != self.name:
            raise ValueError(f"{version.name!r} does not belong to {self.name!r}")
        self.versions.append(version)

    @property
    def entries(self) -> List[ClasspathEntry]:
        return [v.entry for v in self.versions]

    @property
    def has_duplicates(self) -> bool:
        return len(self.versions) > 1

    @property
    def has_size_differing_duplicates(self) -> bool:
        return self.has_duplicates and len({v.size for v in self.versions}) > 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClasspathResource):
            return NotImplemented
        return self.name == other.name and self._key() == other._key()

    def _key(self):
        return sorted((v.url, v.size) for v in self.versions)


class JarPair:
    """An unordered pair of entries sharing one or more resources.

    ``jar1`` is always the entry with the lexicographically smaller URL.
    """

    def __init__(self, first: ClasspathEntry, second: ClasspathEntry, dup_classes_total: int = 0):
        if first == second:
            raise ValueError(f"A pair needs two distinct entries, got {first.url!r} twice")
        self.jar1, self.jar2 = (first, second) if first.url <= second.url else (second, first)
        self.dup_classes_total = dup_classes_total

    def increment(self) -> None:
        self.dup_classes_total += 1

    @property
    def key(self):
        return (self.jar1.url, self.jar2.url)

    @property
    def smaller_jar(self) -> ClasspathEntry:
        """Entry with fewer class files; ties go to ``jar1``."""
        if self.jar1.class_count <= self.jar2.class_count:
            return self.jar1
        return self.jar2

    @property
    def larger_jar(self) -> ClasspathEntry:
        if self.jar1.class_count <= self.jar2.class_count:
            return self.jar2
        return self.jar1

    def percent_overlap(self) -> float:
        """Share of the more-covered entry's classes that are duplicated.

        A side with no class files contributes 0%. The result is in [0, 100].
        """
        def _side(count: int) -> float:
            if count <= 0:
                return 0.0
            return min(Constants.FULL_OVERLAP, self.dup_classes_total * 100.0 / count)

        return max(_side(self.jar1.class_count), _side(self.jar2.class_count))

    def is_containment(self) -> bool:
        return round(self.percent_overlap(), 2) >= Constants.FULL_OVERLAP

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JarPair):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"JarPair({self.jar1.url!r}, {self.jar2.url!r}, {self.dup_classes_total})"


ResourceMap = Dict[str, ClasspathResource]
