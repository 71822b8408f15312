"""Argument parsing functionality for WarScan."""

import argparse
from constants import Constants

USAGE_EPILOG = """\
Options may also be given as -D properties:

    -D detail=true                  displays classes with duplicates and their locations
    -D exclude.same.size.dups=true  don't count as duplicates the classes that have
                                    multiple class files which all have the same size
    -D search.by.file.name=REGEX    searches the WAR for a resource file using a
                                    regular expression
"""


def build_parser():
    """Build the argument parser (exposed for usage printing)."""
    parser = argparse.ArgumentParser(
        prog="warscan",
        description=(
            "WarScan - reports classes and resources present in more than one jar "
            "of a WAR file or a directory of jars"
        ),
        epilog=USAGE_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=True,
    )

    parser.add_argument("TARGET",
                        help="Path to your war file, or a directory containing jars",
                        type=str)
    parser.add_argument("WORKDIR",
                        help="Path to a temporary directory, needed to unzip files (optional)",
                        nargs="?",
                        default=None,
                        type=str)

    parser.add_argument("--detail",
                        dest="DETAIL",
                        help="Display classes with duplicates and their locations.",
                        action="store_true")
    parser.add_argument("--exclude-same-size-dups",
                        dest="EXCLUDE_SAME_SIZE_DUPS",
                        help="Only count as duplicates resources whose copies differ in size.",
                        action="store_true")
    parser.add_argument("--search-by-file-name",
                        dest="SEARCH_BY_FILE_NAME",
                        help="Search the scanned resources by name using a regular expression.",
                        action="store",
                        type=str)
    parser.add_argument("-D",
                        dest="DEFINE",
                        metavar="KEY=VALUE",
                        help="Set an option as a property (detail, exclude.same.size.dups, "
                             "search.by.file.name, manifest.classpath, classes.only, jobs).",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("--manifest-classpath",
                        dest="MANIFEST_CLASSPATH",
                        help="Also scan jars referenced from manifest Class-Path headers.",
                        action="store_true")
    parser.add_argument("--classes-only",
                        dest="CLASSES_ONLY",
                        help="Only count .class files when computing overlaps.",
                        action="store_true")
    parser.add_argument("-j", "--jobs",
                        dest="JOBS",
                        help="Number of jars to index in parallel (default: 1).",
                        action="store",
                        type=int)

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output file (JSON or CSV) for the overlap pairs",
                        action="store",
                        type=str)
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (json or csv). If not specified, inferred from "
                             "--output extension; defaults to json.",
                        action="store",
                        type=str.lower,
                        choices=Constants.OUTPUT_FORMATS)
    parser.add_argument("--error-on-warnings",
                        dest="ERROR_ON_WARNINGS",
                        help="Exit with a non-zero status code if overlaps are found.",
                        action="store_true")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS,
                        default="INFO")
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
