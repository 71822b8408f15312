"""JSON and CSV export of the overlapping jar pairs."""
import csv
import json
import logging
import sys

from constants import ExitCodes
from versioning import CoordinateError, is_same_artifact, older_of

logger = logging.getLogger(__name__)

HEADERS = [
    "jar1",
    "jar2",
    "url1",
    "url2",
    "overlappingClasses",
    "percentOverlap",
    "smallerJar",
    "largerJar",
    "contained",
    "sameArtifact",
    "olderJar",
]


def pair_record(pair):
    """Flatten a JarPair into an export record keyed by HEADERS."""
    same = is_same_artifact(pair.jar1.coordinates, pair.jar2.coordinates)
    older = None
    if same:
        try:
            older = older_of(pair.jar1.coordinates, pair.jar2.coordinates).file_name
        except CoordinateError:
            older = None
    return {
        "jar1": pair.jar1.display_name,
        "jar2": pair.jar2.display_name,
        "url1": pair.jar1.url,
        "url2": pair.jar2.url,
        "overlappingClasses": pair.dup_classes_total,
        "percentOverlap": round(pair.percent_overlap(), 2),
        "smallerJar": pair.smaller_jar.display_name,
        "largerJar": pair.larger_jar.display_name,
        "contained": pair.is_containment(),
        "sameArtifact": same,
        "olderJar": older,
    }


def export_csv(pairs, path):
    """Exports the overlapping pairs to a CSV file.

    Args:
        pairs (list): List of JarPair instances.
        path (str): File path to export the CSV.
    """
    def _nv(v):
        return "" if v is None else v

    rows = [HEADERS]
    for pair in pairs:
        rec = pair_record(pair)
        rows.append([_nv(rec[h]) for h in HEADERS])
    try:
        with open(path, 'w', newline='', encoding='utf-8') as file:
            export = csv.writer(file)
            export.writerows(rows)
        logging.info("CSV file has been successfully exported at: %s", path)
    except (OSError, csv.Error) as e:
        logging.error("CSV file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def export_json(pairs, path):
    """Exports the overlapping pairs to a JSON file.

    Args:
        pairs (list): List of JarPair instances.
        path (str): File path to export the JSON.
    """
    data = [pair_record(pair) for pair in pairs]
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(data, file, ensure_ascii=False, indent=4)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def infer_format(path, explicit=None):
    """Pick the export format from -f, else the output extension, else json."""
    if explicit:
        return explicit.lower()
    lower = path.lower()
    if lower.endswith(".csv"):
        return "csv"
    return "json"


def export_pairs(pairs, path, fmt=None):
    if infer_format(path, fmt) == "csv":
        export_csv(pairs, path)
    else:
        export_json(pairs, path)
