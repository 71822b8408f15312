"""Scan driver: classify the target, stage a WAR, collect entries, analyze.

    Init -> classify -> directory: collect -> analyze
                     -> war: wipe workdir -> extract -> collect -> analyze
                     -> reject: error
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
import zipfile
from typing import List, Optional

from classpath.aggregator import aggregate
from classpath.analyzer import OverlapAnalysis, analyze
from classpath.indexer import EVENT_EXTRACT, ScanEvent, ScanListener
from classpath.manifest import expand_manifest_classpath
from classpath.models import ClasspathEntry
from cli_config import ScanConfig
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants, TargetKind

logger = logging.getLogger(__name__)


class StagingError(Exception):
    """Fatal failure preparing the working directory or extracting the archive."""


class UnsupportedTargetError(ValueError):
    """The scan target is neither a directory nor a web-application archive."""


def default_workdir() -> str:
    return os.path.join(tempfile.gettempdir(), Constants.DEFAULT_WORKDIR_NAME)


def classify_target(path: str) -> TargetKind:
    if os.path.isdir(path):
        return TargetKind.DIRECTORY
    if os.path.isfile(path) and path.lower().endswith(Constants.WAR_SUFFIX):
        return TargetKind.WAR
    return TargetKind.REJECT


def _is_jar(name: str) -> bool:
    return name.lower().endswith(Constants.JAR_SUFFIX)


def _safe_member_path(workdir: str, member: str) -> Optional[str]:
    """Destination of an archive member, or None if it escapes ``workdir``."""
    root = os.path.realpath(workdir)
    dest = os.path.realpath(os.path.join(root, member))
    if dest != root and not dest.startswith(root + os.sep):
        return None
    return dest


def stage_archive(archive_path: str, workdir: str, listener: Optional[ScanListener] = None) -> str:
    """Wipe ``workdir`` and extract the archive into it.

    Raises:
        StagingError: If the directory cannot be prepared or the archive
            cannot be extracted.
    """
    try:
        if os.path.exists(workdir):
            logger.info("Deleting temporary directory")
            shutil.rmtree(workdir)
        os.makedirs(workdir)
    except OSError as exc:
        raise StagingError(f"Could not prepare working directory {workdir}: {exc}") from exc

    logger.info("Unzipping WAR")
    try:
        with zipfile.ZipFile(archive_path) as archive:
            for member in archive.infolist():
                if _safe_member_path(workdir, member.filename) is None:
                    logger.warning("Skipping archive member outside the working directory: %s",
                                   member.filename)
                    continue
                if listener is not None and _is_jar(member.filename):
                    listener(ScanEvent(EVENT_EXTRACT, os.path.basename(member.filename)))
                archive.extract(member, workdir)
    except (OSError, zipfile.BadZipFile) as exc:
        raise StagingError(f"Could not extract {archive_path}: {exc}") from exc
    return workdir


def _find_jars(root: str) -> List[str]:
    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            if _is_jar(name):
                found.append(os.path.join(dirpath, name))
    return found


def collect_directory_entries(directory: str) -> List[ClasspathEntry]:
    """Every ``*.jar`` beneath ``directory`` becomes an archive entry."""
    entries = []
    for jar_path in _find_jars(directory):
        logger.debug("Adding jar: %s", jar_path)
        entries.append(ClasspathEntry(jar_path, class_folder=False))
    return entries


def collect_war_entries(workdir: str) -> List[ClasspathEntry]:
    """``WEB-INF/classes`` (if present) plus every jar under ``WEB-INF/lib``."""
    entries = []
    classes_dir = os.path.join(workdir, *Constants.WEB_INF_CLASSES.split("/"))
    if os.path.isdir(classes_dir):
        entries.append(ClasspathEntry(classes_dir, class_folder=True))
    lib_dir = os.path.join(workdir, *Constants.WEB_INF_LIB.split("/"))
    if os.path.isdir(lib_dir):
        entries.extend(collect_directory_entries(lib_dir))
    return entries


def collect_entries(target: str, workdir: Optional[str] = None,
                    listener: Optional[ScanListener] = None) -> List[ClasspathEntry]:
    """Classify ``target`` and return its classpath entries.

    Raises:
        UnsupportedTargetError: For anything but a directory or a ``.war`` file.
        StagingError: If the WAR cannot be extracted.
    """
    kind = classify_target(target)
    if is_debug_enabled(logger):
        logger.debug("Classified scan target", extra=extra_context(
            event="decision", component="driver", action="classify_target",
            target=target, outcome=kind.value,
        ))
    if kind == TargetKind.DIRECTORY:
        return collect_directory_entries(target)
    if kind == TargetKind.WAR:
        staged = stage_archive(target, workdir or default_workdir(), listener)
        logger.info("Scanning WAR")
        return collect_war_entries(staged)
    raise UnsupportedTargetError(f"Can only scan wars and jar dirs: {target}")


def run_scan(target: str, config: ScanConfig, workdir: Optional[str] = None,
             listener: Optional[ScanListener] = None) -> OverlapAnalysis:
    """Run the whole pipeline for one target and return the analysis."""
    entries = collect_entries(target, workdir, listener)
    if config.manifest_classpath:
        entries = expand_manifest_classpath(entries)
    logger.info("Found %d classpath entries", len(entries))
    resources = aggregate(entries, listener=listener, jobs=config.jobs)
    return analyze(resources, config.exclude_same_size_dups, config.classes_only)
