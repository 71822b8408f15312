"""Data models for archive coordinates and version comparison."""

from dataclasses import dataclass
from typing import Optional

import semantic_version


class CoordinateError(ValueError):
    """Raised when SemVer precedence cannot be applied to a pair of archives."""


@dataclass(frozen=True)
class Coordinates:
    """Artifact id and version derived from an archive file name."""
    file_name: str
    artifact_id: str
    version: Optional[semantic_version.Version] = None
    qualifier: Optional[str] = None  # tokens after the version, e.g. "shaded"

    @property
    def has_version(self) -> bool:
        return self.version is not None

    def __str__(self) -> str:
        if self.version is None:
            return self.artifact_id
        return f"{self.artifact_id}:{self.version}"
