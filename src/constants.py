"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    USAGE_ERROR = 2
    EXIT_WARNINGS = 3


class TargetKind(Enum):
    """Kinds of scan targets the driver can handle.

    Args:
        Enum (string): Target classification.
    """

    DIRECTORY = "directory"
    WAR = "war"
    REJECT = "reject"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    CLASS_SUFFIX = ".class"
    JAR_SUFFIX = ".jar"
    WAR_SUFFIX = ".war"
    WEB_INF_CLASSES = "WEB-INF/classes"
    WEB_INF_LIB = "WEB-INF/lib"
    MANIFEST_PATH = "META-INF/MANIFEST.MF"
    MANIFEST_CLASS_PATH = "Class-Path"
    DEFAULT_WORKDIR_NAME = "warscan"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    WARNING_PREFIX = "** WARNING"
    PERCENT_FORMAT = "{:.2f}"
    FULL_OVERLAP = 100.0

    # Environment overrides
    ENV_LOG_LEVEL = "WARSCAN_LOG_LEVEL"
    ENV_DETAIL = "WARSCAN_DETAIL"
    ENV_EXCLUDE_SAME_SIZE_DUPS = "WARSCAN_EXCLUDE_SAME_SIZE_DUPS"
    ENV_SEARCH_BY_FILE_NAME = "WARSCAN_SEARCH_BY_FILE_NAME"
    ENV_MANIFEST_CLASSPATH = "WARSCAN_MANIFEST_CLASSPATH"
    ENV_CLASSES_ONLY = "WARSCAN_CLASSES_ONLY"
    ENV_JOBS = "WARSCAN_JOBS"

    # Property names accepted in config files and -D overrides
    PROP_DETAIL = "detail"
    PROP_EXCLUDE_SAME_SIZE_DUPS = "exclude.same.size.dups"
    PROP_SEARCH_BY_FILE_NAME = "search.by.file.name"
    PROP_MANIFEST_CLASSPATH = "manifest.classpath"
    PROP_CLASSES_ONLY = "classes.only"
    PROP_JOBS = "jobs"
    CONFIG_SECTION = "warscan"

    OUTPUT_FORMATS = ["json", "csv"]
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
