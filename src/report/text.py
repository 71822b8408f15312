"""Plain-text overlap report written to standard output."""
from __future__ import annotations

import logging
import re
import sys
from typing import List, Optional, TextIO

from cli_config import ScanConfig
from classpath.aggregator import find_by_regex
from classpath.analyzer import OverlapAnalysis
from classpath.models import ClasspathResource, JarPair
from constants import Constants
from versioning import CoordinateError, is_same_artifact, older_of

logger = logging.getLogger(__name__)

WARN = Constants.WARNING_PREFIX


def format_percent(value: float) -> str:
    return Constants.PERCENT_FORMAT.format(value)


def overlap_line(pair: JarPair) -> str:
    return (
        f"{pair.jar1.display_name} overlaps with {pair.jar2.display_name}"
        f" - total overlapping classes: {pair.dup_classes_total}"
        f" (percent overlap: {format_percent(pair.percent_overlap())})"
    )


def containment_warning(pair: JarPair) -> Optional[str]:
    if not pair.is_containment():
        return None
    return (
        f"{WARN}: {pair.smaller_jar.display_name} is entirely contained in "
        f"{pair.larger_jar.display_name}"
    )


def same_name_warnings(pair: JarPair) -> List[str]:
    """Possible-duplicate warning plus the older-version recommendation."""
    first, second = pair.jar1.coordinates, pair.jar2.coordinates
    if not is_same_artifact(first, second):
        return []
    lines = [f"{WARN}: Possible duplicate jars: {pair.jar1.display_name} {pair.jar2.display_name}"]
    try:
        older = older_of(first, second)
        lines.append(f"{WARN}: Consider removing the older version: {older.file_name}")
    except CoordinateError:
        lines.append(
            f"{WARN}: Could not determine which jar is older.  "
            "Version numbering may not follow SemVer."
        )
    return lines


def overlap_section(analysis: OverlapAnalysis, config: ScanConfig) -> List[str]:
    lines = ["", ">>>> Jar overlap report: ", ""]
    for pair in analysis.pairs:
        lines.append(overlap_line(pair))
        warning = containment_warning(pair)
        if warning:
            lines.append(warning)
        lines.extend(same_name_warnings(pair))
    lines += ["", f"Total number of classes with more than one version: {analysis.total_duplicates}", ""]
    if not config.exclude_same_size_dups:
        lines += [
            "",
            "Use --exclude-same-size-dups (or -D exclude.same.size.dups=true) for considering "
            "as a duplicate only classes with multiple class files of different sizes.",
            "",
        ]
    if not config.classes_only:
        lines += [
            "Use --classes-only (or -D classes.only=true) for counting only .class files; "
            "percent overlap is always relative to the class files of each jar.",
            "",
        ]
    return lines


def detail_section(duplicates: List[ClasspathResource]) -> List[str]:
    lines = ["", ">>>> Classpath resources with more than one version: ", ""]
    if not duplicates:
        lines += ["No duplicate resources found.", ""]
        return lines
    for resource in duplicates:
        lines.append(resource.name)
        for version in resource.versions:
            lines.append(f"    {version.url} - {version.size} bytes")
        lines.append("")
    return lines


def search_section(analysis: OverlapAnalysis, expression: str) -> List[str]:
    """Grep-style listing; an invalid expression is logged and yields nothing."""
    try:
        matches = find_by_regex(analysis.resources, expression)
    except re.error as exc:
        logger.error("Invalid search expression '%s': %s", expression, exc)
        return []
    if not matches:
        logger.info("No resources match the search expression: %s", expression)
        return []
    lines = ["", f"Search results using regular expression: {expression}", ""]
    for match in matches:
        lines += [match.name, ""]
        for version in match.versions:
            lines.append(f"    {version.url}")
        lines.append("")
    return lines


def build_report(analysis: OverlapAnalysis, config: ScanConfig) -> str:
    lines = overlap_section(analysis, config)
    if config.detail:
        lines += detail_section(analysis.duplicates)
    if config.search_by_file_name:
        lines += search_section(analysis, config.search_by_file_name)
    return "\n".join(lines) + "\n"


def render_report(analysis: OverlapAnalysis, config: ScanConfig, stream: Optional[TextIO] = None) -> None:
    """Write the report to ``stream`` (stdout by default)."""
    out = stream or sys.stdout
    out.write(build_report(analysis, config))
    out.flush()
