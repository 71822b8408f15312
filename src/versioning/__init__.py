"""Archive coordinate parsing (artifact id + semantic version)."""

from .models import Coordinates, CoordinateError
from .parser import parse_coordinates, older_of, is_same_artifact, tokenize_name

__all__ = [
    "Coordinates",
    "CoordinateError",
    "parse_coordinates",
    "older_of",
    "is_same_artifact",
    "tokenize_name",
]
