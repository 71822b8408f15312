"""Tests for the plain-text overlap report."""

import io
import logging

from conftest import classes
from cli_config import ScanConfig
from driver import run_scan
from report.text import build_report, format_percent, render_report

HINT = "Use --exclude-same-size-dups"


def _report(target, **options):
    config = ScanConfig(**options)
    return build_report(run_scan(str(target), config), config)


def test_format_percent_two_digits():
    assert format_percent(100) == "100.00"
    assert format_percent(12.345) == "12.35"
    assert format_percent(0) == "0.00"


def test_no_overlaps_layout(tmp_path, make_jar):
    make_jar("a.jar", {"A.class": b"a"})
    make_jar("b.jar", {"B.class": b"b"})

    text = _report(tmp_path, exclude_same_size_dups=True, classes_only=True)

    assert text == (
        "\n"
        ">>>> Jar overlap report: \n"
        "\n"
        "\n"
        "Total number of classes with more than one version: 0\n"
        "\n"
    )


def test_two_identical_copies(tmp_path, make_jar):
    files = classes("com/a", 4)
    make_jar("a-1.0.0.jar", files, directory=tmp_path / "one")
    make_jar("a-1.0.0.jar", files, directory=tmp_path / "two")

    lines = _report(tmp_path).splitlines()

    assert ("a-1.0.0.jar overlaps with a-1.0.0.jar - total overlapping classes: 4 "
            "(percent overlap: 100.00)") in lines
    assert "** WARNING: a-1.0.0.jar is entirely contained in a-1.0.0.jar" in lines
    assert "** WARNING: Possible duplicate jars: a-1.0.0.jar a-1.0.0.jar" in lines
    assert "** WARNING: Consider removing the older version: a-1.0.0.jar" in lines


def test_older_vs_newer(tmp_path, make_jar):
    shared = classes("com/lib", 5)
    make_jar("lib-1.2.0.jar", shared)
    make_jar("lib-1.3.0.jar", {**shared, **classes("com/extra", 3)})

    lines = _report(tmp_path).splitlines()

    assert lines[:3] == ["", ">>>> Jar overlap report: ", ""]
    assert lines[3] == ("lib-1.2.0.jar overlaps with lib-1.3.0.jar - total overlapping classes: 5 "
                        "(percent overlap: 100.00)")
    assert lines[4] == "** WARNING: lib-1.2.0.jar is entirely contained in lib-1.3.0.jar"
    assert lines[5] == "** WARNING: Possible duplicate jars: lib-1.2.0.jar lib-1.3.0.jar"
    assert lines[6] == "** WARNING: Consider removing the older version: lib-1.2.0.jar"
    assert "Total number of classes with more than one version: 5" in lines
    assert any(line.startswith(HINT) for line in lines)


def test_size_distinct_duplicate(tmp_path, make_jar):
    make_jar("a.jar", {"X.class": b"x" * 1000})
    make_jar("b.jar", {"X.class": b"x" * 1200})

    text = _report(tmp_path, exclude_same_size_dups=True)

    assert "a.jar overlaps with b.jar - total overlapping classes: 1 (percent overlap: 100.00)" in text
    assert HINT not in text


def test_same_size_duplicate_is_excluded(tmp_path, make_jar):
    make_jar("a.jar", {"X.class": b"x" * 1000})
    make_jar("b.jar", {"X.class": b"y" * 1000})

    text = _report(tmp_path, exclude_same_size_dups=True)

    assert "overlaps with" not in text
    assert "Total number of classes with more than one version: 0" in text


def test_containment_names_smaller_jar(tmp_path, make_jar):
    core = classes("core", 200)
    make_jar("core-2.0.0.jar", core)
    make_jar("fat-app.jar", {**core, **classes("app", 800)})

    lines = _report(tmp_path).splitlines()

    assert ("core-2.0.0.jar overlaps with fat-app.jar - total overlapping classes: 200 "
            "(percent overlap: 100.00)") in lines
    assert "** WARNING: core-2.0.0.jar is entirely contained in fat-app.jar" in lines
    assert not any("Possible duplicate jars" in line for line in lines)


def test_unparseable_names(tmp_path, make_jar):
    files = classes("v", 2)
    make_jar("vendor.jar", files, directory=tmp_path / "x")
    make_jar("vendor.jar", {**files, **classes("w", 2)}, directory=tmp_path / "y")

    lines = _report(tmp_path).splitlines()

    assert "** WARNING: Possible duplicate jars: vendor.jar vendor.jar" in lines
    assert ("** WARNING: Could not determine which jar is older.  "
            "Version numbering may not follow SemVer.") in lines


def test_shared_manifest_only_points_to_classes_only(tmp_path, make_jar):
    make_jar("a.jar", {"META-INF/MANIFEST.MF": b"Manifest-Version: 1.0\n", "A.class": b"a"})
    make_jar("b.jar", {"META-INF/MANIFEST.MF": b"Manifest-Version: 1.0\nX: y\n", "B.class": b"b"})

    text = _report(tmp_path)
    assert "a.jar overlaps with b.jar - total overlapping classes: 1" in text
    assert "Use --classes-only" in text

    text = _report(tmp_path, classes_only=True)
    assert "overlaps with" not in text
    assert "entirely contained" not in text
    assert "Use --classes-only" not in text


def test_partial_overlap_has_no_containment_warning(tmp_path, make_jar):
    make_jar("a.jar", {**classes("s", 1), **classes("a", 3)})
    make_jar("b.jar", {**classes("s", 1), **classes("b", 7)})

    text = _report(tmp_path)

    assert "(percent overlap: 25.00)" in text
    assert "entirely contained" not in text


def test_search_mode(tmp_path, make_war):
    war = make_war("app.war", jars={
        "x-1.0.0.jar": {"META-INF/services/foo.Bar": b"impl.X"},
        "y-1.0.0.jar": {"META-INF/services/foo.Bar": b"impl.Y"},
    })
    config = ScanConfig(search_by_file_name=r"foo\.Bar$")
    analysis = run_scan(str(war), config, workdir=str(tmp_path / "work"))

    lines = build_report(analysis, config).splitlines()

    start = lines.index("Search results using regular expression: foo\\.Bar$")
    block = lines[start:]
    assert "/META-INF/services/foo.Bar" in block
    urls = [line.strip() for line in block if line.startswith("    file:")]
    assert len(urls) == 2
    assert urls[0].endswith("/WEB-INF/lib/x-1.0.0.jar")
    assert urls[1].endswith("/WEB-INF/lib/y-1.0.0.jar")


def test_invalid_search_expression_is_skipped(tmp_path, make_jar, caplog):
    make_jar("a.jar", {"A.class": b"a"})
    make_jar("b.jar", {"A.class": b"a"})

    with caplog.at_level(logging.ERROR):
        text = _report(tmp_path, search_by_file_name="([bad")

    assert "Search results" not in text
    assert "a.jar overlaps with b.jar" in text
    assert "Invalid search expression" in caplog.text


def test_detail_mode(tmp_path, make_jar):
    a = make_jar("a.jar", {"X.class": b"x" * 10, "Y.class": b"y"})
    b = make_jar("b.jar", {"X.class": b"x" * 12})

    lines = _report(tmp_path, detail=True).splitlines()

    start = lines.index(">>>> Classpath resources with more than one version: ")
    block = lines[start:]
    assert block[2] == "/X.class"
    assert block[3] == f"    {a.as_uri()} - 10 bytes"
    assert block[4] == f"    {b.as_uri()} - 12 bytes"
    assert "/Y.class" not in block


def test_report_is_byte_stable(tmp_path, make_jar):
    for i in range(4):
        make_jar(f"lib{i}-1.{i}.0.jar", {**classes("shared", 3), **classes(f"own{i}", i + 1)})
    config = ScanConfig(detail=True)

    first = build_report(run_scan(str(tmp_path), config), config)
    second = build_report(run_scan(str(tmp_path), config), config)

    assert first == second


def test_render_report_writes_to_stream(tmp_path, make_jar):
    make_jar("a.jar", {"A.class": b"a"})
    config = ScanConfig()
    out = io.StringIO()

    render_report(run_scan(str(tmp_path), config), config, stream=out)

    assert out.getvalue().startswith("\n>>>> Jar overlap report: \n")
