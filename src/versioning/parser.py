"""Archive file name parsing and version comparison.

Names are expected as ``<artifact-id>-<version>[-<qualifier>].<ext>``, e.g.
``commons-lang3-3.12.0.jar`` or ``geomesa-hbase-gs-plugin_2.11-2.3.2-shaded.jar``.
"""

import os
from typing import List, Optional

import semantic_version

from .models import Coordinates, CoordinateError


def _strip_extension(file_name: str) -> str:
    """Return the base name without its final extension."""
    base = os.path.basename(file_name)
    stem, _ = os.path.splitext(base)
    return stem


def _parse_semver(token: str) -> Optional[semantic_version.Version]:
    """Parse a strict MAJOR.MINOR.PATCH version, or return None."""
    try:
        return semantic_version.Version(token)
    except ValueError:
        return None


def tokenize_name(file_name: str) -> List[str]:
    """Split an archive name (extension removed) on dashes."""
    stem = _strip_extension(file_name)
    return stem.split("-") if stem else []


def parse_coordinates(file_name: str) -> Coordinates:
    """Split an archive file name into artifact id and semantic version.

    The first dash-separated token that parses as a semantic version wins;
    the artifact id is everything before it. When no token parses the whole
    name without extension is the artifact id and the version is unset.
    """
    tokens = tokenize_name(file_name or "")
    for i, token in enumerate(tokens):
        version = _parse_semver(token)
        if version is None:
            continue
        qualifier = "-".join(tokens[i + 1:]) or None
        return Coordinates(
            file_name=file_name,
            artifact_id="-".join(tokens[:i]),
            version=version,
            qualifier=qualifier,
        )
    return Coordinates(file_name=file_name, artifact_id=_strip_extension(file_name or ""))


def is_same_artifact(first: Coordinates, second: Coordinates) -> bool:
    """Return True if both archives look like copies of the same artifact.

    Ids match when equal or when one is a prefix of the other. Empty ids
    (class folders, names starting with a version) never match.
    """
    a, b = first.artifact_id, second.artifact_id
    if not a or not b:
        return False
    return a.startswith(b) or b.startswith(a)


def older_of(first: Coordinates, second: Coordinates) -> Coordinates:
    """Return the coordinates with the lower SemVer precedence.

    Equal versions resolve to ``second``.

    Raises:
        CoordinateError: If either side has no parsed version.
    """
    if first.version is None or second.version is None:
        raise CoordinateError(
            f"SemVer not available for {first.file_name!r} / {second.file_name!r}"
        )
    if first.version < second.version:
        return first
    return second
