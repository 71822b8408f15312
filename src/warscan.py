"""WarScan - duplicate class and overlapping jar checker for WAR files.

    Raises:
        SystemExit: With one of the ExitCodes values

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from args import build_parser, parse_args
from cli_config import build_config
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from classpath.indexer import EVENT_ENTRY_END, EVENT_ENTRY_START, EVENT_EXTRACT, ScanEvent
from driver import StagingError, UnsupportedTargetError, default_workdir, run_scan
from report import export_pairs, render_report

logger = logging.getLogger(__name__)

_EVENT_MESSAGES = {
    EVENT_EXTRACT: "Extracting jar %s",
    EVENT_ENTRY_START: "Processing jar %s",
    EVENT_ENTRY_END: "Finished processing jar %s",
}


def log_scan_event(event: ScanEvent) -> None:
    """Forward indexer/stager progress to the log."""
    template = _EVENT_MESSAGES.get(event.kind)
    if template:
        logger.info(template, event.name)


def setup_logging(args) -> None:
    """Configure logging from --loglevel and --logfile."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()
    try:
        _level_name = str(args.LOG_LEVEL).upper()
        logging.getLogger().setLevel(getattr(logging, _level_name, logging.INFO))
    except (ValueError, AttributeError, TypeError):
        pass
    if getattr(args, "LOG_FILE", None):
        add_file_handler(args.LOG_FILE)
        logger.info("Logging to file: %s", args.LOG_FILE)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    setup_logging(args)
    config = build_config(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    workdir = args.WORKDIR or default_workdir()
    logger.info("warFilePath/directory to analyze = %s", args.TARGET)
    logger.info("tmpPath = %s", workdir)

    try:
        analysis = run_scan(args.TARGET, config, workdir=workdir, listener=log_scan_event)
    except UnsupportedTargetError as exc:
        logger.error("%s", exc)
        build_parser().print_usage(sys.stderr)
        sys.exit(ExitCodes.USAGE_ERROR.value)
    except StagingError as exc:
        logger.error("%s", exc)
        sys.exit(ExitCodes.FILE_ERROR.value)

    render_report(analysis, config)

    if getattr(args, "OUTPUT", None):
        export_pairs(analysis.pairs, args.OUTPUT, getattr(args, "OUTPUT_FORMAT", None))

    if analysis.pairs:
        logger.warning("Found %d overlapping jar pairs.", len(analysis.pairs))
        if args.ERROR_ON_WARNINGS:
            logger.error("Warnings present, exiting with non-zero status code.")
            sys.exit(ExitCodes.EXIT_WARNINGS.value)

    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
