"""Scan configuration: defaults, config file, environment and CLI overrides.

Precedence from lowest to highest: built-in defaults, the ``--config`` file,
``WARSCAN_*`` environment variables, then CLI flags (``-D key=value`` included).
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

from constants import Constants

logger = logging.getLogger(__name__)

_TRUE = ("true", "1", "yes", "on")
_FALSE = ("false", "0", "no", "off", "")


@dataclass(frozen=True)
class ScanConfig:
    """Options threaded through the driver and the report."""
    detail: bool = False
    exclude_same_size_dups: bool = False
    search_by_file_name: Optional[str] = None
    manifest_classpath: bool = False
    classes_only: bool = False
    jobs: int = 1


# property name (as in config files and -D) -> ScanConfig field
_PROPERTIES = {
    Constants.PROP_DETAIL: "detail",
    Constants.PROP_EXCLUDE_SAME_SIZE_DUPS: "exclude_same_size_dups",
    Constants.PROP_SEARCH_BY_FILE_NAME: "search_by_file_name",
    Constants.PROP_MANIFEST_CLASSPATH: "manifest_classpath",
    Constants.PROP_CLASSES_ONLY: "classes_only",
    Constants.PROP_JOBS: "jobs",
}

_ENV = {
    Constants.ENV_DETAIL: "detail",
    Constants.ENV_EXCLUDE_SAME_SIZE_DUPS: "exclude_same_size_dups",
    Constants.ENV_SEARCH_BY_FILE_NAME: "search_by_file_name",
    Constants.ENV_MANIFEST_CLASSPATH: "manifest_classpath",
    Constants.ENV_CLASSES_ONLY: "classes_only",
    Constants.ENV_JOBS: "jobs",
}


def parse_bool(value: Any) -> bool:
    """Coerce a config/env value to bool.

    Raises:
        ValueError: If a string value is not a recognised boolean.
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Not a boolean: {value!r}")


def _coerce(field_name: str, value: Any) -> Any:
    if field_name == "search_by_file_name":
        return None if value in (None, "") else str(value)
    if field_name == "jobs":
        return max(1, int(value))
    return parse_bool(value)


def _field_for(key: str) -> Optional[str]:
    key = key.strip()
    if key in _PROPERTIES:
        return _PROPERTIES[key]
    dotted = key.replace("_", ".").replace("-", ".")
    return _PROPERTIES.get(dotted)


def apply_properties(config: ScanConfig, props: Mapping[str, Any], source: str) -> ScanConfig:
    """Return ``config`` updated from a property mapping; bad values are logged and skipped."""
    changes: Dict[str, Any] = {}
    for key, value in props.items():
        field_name = _field_for(str(key))
        if field_name is None:
            logger.warning("Ignoring unknown option '%s' from %s", key, source)
            continue
        try:
            changes[field_name] = _coerce(field_name, value)
        except (TypeError, ValueError) as exc:
            logger.warning("Ignoring invalid value for '%s' from %s: %s", key, source, exc)
    return replace(config, **changes)


def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load options from a YAML (or JSON, by extension) config file.

    A top-level ``warscan:`` section is used when present. Missing or
    unreadable files are logged and yield an empty mapping.
    """
    if not path:
        return {}
    if not os.path.isfile(path):
        logger.warning("Config file not found: %s", path)
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            if path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                import yaml  # pylint: disable=import-outside-toplevel

                data = yaml.safe_load(fh)
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Failed to load config: %s", e)
        return {}
    if not isinstance(data, dict):
        return {}
    section = data.get(Constants.CONFIG_SECTION, data)
    return section if isinstance(section, dict) else {}


def env_properties(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect ``WARSCAN_*`` option overrides from the environment."""
    env = os.environ if environ is None else environ
    props: Dict[str, str] = {}
    for var, field_name in _ENV.items():
        if var in env:
            props[field_name] = env[var]
    return props


def parse_define(items) -> Dict[str, str]:
    """Turn ``-D key=value`` items into a dict; a bare key means ``true``."""
    props: Dict[str, str] = {}
    for item in items or []:
        key, sep, value = str(item).partition("=")
        props[key.strip()] = value.strip() if sep else "true"
    return props


def build_config(args, environ: Optional[Mapping[str, str]] = None) -> ScanConfig:
    """Build the effective ScanConfig for parsed CLI arguments."""
    config = ScanConfig()
    config = apply_properties(config, load_config_file(getattr(args, "CONFIG", None)), "config file")
    config = apply_properties(config, env_properties(environ), "environment")
    config = apply_properties(config, parse_define(getattr(args, "DEFINE", None)), "-D")

    flags: Dict[str, Any] = {}
    if getattr(args, "DETAIL", False):
        flags["detail"] = True
    if getattr(args, "EXCLUDE_SAME_SIZE_DUPS", False):
        flags["exclude_same_size_dups"] = True
    if getattr(args, "SEARCH_BY_FILE_NAME", None):
        flags["search_by_file_name"] = args.SEARCH_BY_FILE_NAME
    if getattr(args, "MANIFEST_CLASSPATH", False):
        flags["manifest_classpath"] = True
    if getattr(args, "CLASSES_ONLY", False):
        flags["classes_only"] = True
    if getattr(args, "JOBS", None) is not None:
        flags["jobs"] = args.JOBS
    return apply_properties(config, flags, "command line")
