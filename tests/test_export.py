import csv
import json

import pytest

from conftest import classes
from classpath.aggregator import aggregate
from classpath.analyzer import find_overlapping_jars
from classpath.models import ClasspathEntry
from constants import ExitCodes
from report.export import HEADERS, export_csv, export_json, export_pairs, infer_format


@pytest.fixture
def pairs(make_jar):
    shared = classes("com/lib", 3)
    old = make_jar("lib-1.2.0.jar", shared)
    new = make_jar("lib-1.3.0.jar", {**shared, **classes("com/new", 3)})
    vendor = make_jar("vendor.jar", {"com/lib/C0.class": b"other"})
    entries = [ClasspathEntry(str(p)) for p in (old, new, vendor)]
    return find_overlapping_jars(aggregate(entries))


def test_json_records(tmp_path, pairs):
    out = tmp_path / "out.json"
    export_json(pairs, str(out))

    data = json.loads(out.read_text(encoding="utf-8"))
    assert len(data) == len(pairs) == 3
    first = data[0]
    assert list(first) == HEADERS
    assert first["jar1"] == "lib-1.2.0.jar"
    assert first["jar2"] == "lib-1.3.0.jar"
    assert first["overlappingClasses"] == 3
    assert first["percentOverlap"] == 100.0
    assert first["contained"] is True
    assert first["sameArtifact"] is True
    assert first["olderJar"] == "lib-1.2.0.jar"
    # vendor.jar shares no artifact id with lib
    assert all(rec["olderJar"] is None for rec in data[1:])


def test_csv_headers_and_defaults(tmp_path, pairs):
    out = tmp_path / "out.csv"
    export_csv(pairs, str(out))

    rows = list(csv.reader(out.open("r", encoding="utf-8")))
    assert rows[0] == HEADERS
    assert len(rows) == 4
    # Empty string for a missing olderJar
    assert rows[-1][-1] == ""


def test_unwritable_path_exits(tmp_path, pairs):
    with pytest.raises(SystemExit) as exc_info:
        export_json(pairs, str(tmp_path / "missing" / "out.json"))
    assert exc_info.value.code == ExitCodes.FILE_ERROR.value


@pytest.mark.parametrize("path,explicit,expected", [
    ("out.csv", None, "csv"),
    ("out.CSV", None, "csv"),
    ("out.json", None, "json"),
    ("out.txt", None, "json"),
    ("out.json", "CSV", "csv"),
])
def test_infer_format(path, explicit, expected):
    assert infer_format(path, explicit) == expected


def test_export_pairs_dispatch(tmp_path, pairs):
    out = tmp_path / "pairs.csv"
    export_pairs(pairs, str(out))
    assert out.read_text(encoding="utf-8").startswith("jar1,jar2,")
