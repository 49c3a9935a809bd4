"""
Command-line interface for inspecting and maintaining monitoring log folders.

Jobs save their reports themselves (see spark_helper.monitoring.Monitor);
this CLI is for operators and downstream schedulers:

    spark-helper-report status [folder]       # print the current report
    spark-helper-report purge [folder] -w 7   # delete outdated reports
    spark-helper-report kpi-history [folder]  # print the KPI history

The ``status`` exit code tells the state of the last run: 0 success,
1 failed, 2 no report found.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..config import get_config, set_config_path
from ..models.config import AppConfig
from ..monitoring import load_kpi_history, purge_outdated_logs, read_current_report
from ..storage import FileStorage, create_storage
from ..validation import ValidationError, handle_cli_error, validate_positive_integer

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILED = 1
EXIT_NO_REPORT = 2


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _create_cli_storage(app_config: AppConfig) -> FileStorage:
    spark_context = None
    if app_config.storage.backend == "hdfs":
        # pyspark is an optional dependency, only needed to reach HDFS
        from pyspark import SparkContext

        spark_context = SparkContext.getOrCreate()
    return create_storage(
        app_config.storage.backend,
        spark_context=spark_context,
        compression=app_config.storage.compression,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spark-helper-report",
        description="Inspect and maintain the log folders of monitored Spark jobs.",
    )
    parser.add_argument("-c", "--config", type=Path, help="Path to config.toml.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    status = subparsers.add_parser("status", help="Print the current report of a log folder.")
    status.add_argument("folder", nargs="?", help="Log folder (defaults to monitor.log_folder).")

    purge = subparsers.add_parser("purge", help="Delete reports older than the purge window.")
    purge.add_argument("folder", nargs="?", help="Log folder (defaults to monitor.log_folder).")
    purge.add_argument(
        "-w",
        "--window",
        type=str,
        help="Purge window in days (defaults to monitor.purge_window).",
    )

    history = subparsers.add_parser("kpi-history", help="Print the KPI history of a log folder.")
    history.add_argument("folder", nargs="?", help="Log folder (defaults to monitor.log_folder).")

    return parser


def main_cli(argv: Optional[List[str]] = None) -> int:
    """
    Entry point of the ``spark-helper-report`` command.

    Args:
        argv: Command-line arguments, ``sys.argv[1:]`` when None

    Returns:
        Process exit code
    """
    args = _build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    if args.config:
        set_config_path(args.config)

    try:
        app_config = get_config()
        storage = _create_cli_storage(app_config)
    except (FileNotFoundError, KeyError, ValidationError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            logger=logger,
        )

    folder = args.folder or app_config.monitor.log_folder

    if args.command == "status":
        current = read_current_report(storage, folder)
        if current is None:
            logger.warning(f"No current report in {folder}")
            return EXIT_NO_REPORT
        success, content = current
        print(content)
        return EXIT_SUCCESS if success else EXIT_FAILED

    if args.command == "purge":
        window = app_config.monitor.purge_window
        if args.window is not None:
            try:
                window = validate_positive_integer(
                    args.window, min_value=0, field_name="--window argument"
                )
            except ValidationError as e:
                handle_cli_error(
                    error=e,
                    context="window argument validation",
                    exit_code=1,
                    logger=logger,
                )
        purged = purge_outdated_logs(storage, folder, window)
        for file_name in purged:
            print(file_name)
        logger.info(f"Purged {len(purged)} reports from {folder}")
        return EXIT_SUCCESS

    # kpi-history
    history = load_kpi_history(storage, folder)
    print(history)
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main_cli())
