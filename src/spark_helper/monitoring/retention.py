"""
Persistence and retention of monitoring reports.

A report is archived in its log folder under a timestamped name
(``20170327_154512.log.success``) and, for downstream projects that need a
fixed name to look for, as ``current.success`` or ``current.failed``. Only
one of the two ``current`` aliases exists at a time.

Archived reports can be purged once older than a retention window. The age
of a report is read from the first 8 characters of its name (``yyyyMMdd``).
"""

import logging
import posixpath
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Tuple, Union

import polars as pl

from ..storage import FileStorage
from .kpi import KpiResult

logger = logging.getLogger(__name__)

CURRENT_PREFIX = "current"
KPI_HISTORY_FILE = "kpi_history.parquet"

KPI_HISTORY_SCHEMA = {
    "evaluated_at": pl.Datetime("us"),
    "suite": pl.Utf8,
    "name": pl.Utf8,
    "value": pl.Float64,
    "comparator": pl.Utf8,
    "threshold": pl.Float64,
    "unit": pl.Utf8,
    "validated": pl.Boolean,
}


def status_suffix(success: bool) -> str:
    return "success" if success else "failed"


def report_file_name(now: datetime, success: bool) -> str:
    """Timestamped archive name, e.g. ``20170327_154512.log.failed``."""
    return f"{now:%Y%m%d_%H%M%S}.log.{status_suffix(success)}"


def current_file_name(success: bool) -> str:
    return f"{CURRENT_PREFIX}.{status_suffix(success)}"


def join_path(folder: str, name: str) -> str:
    return posixpath.join(folder, name)


def write_report(
    storage: FileStorage, content: str, log_folder: str, success: bool, now: datetime
) -> str:
    """
    Archive a final report and point the ``current`` alias at it.

    Args:
        storage: Storage the log folder lives in
        content: Full report text
        log_folder: Folder the report is archived in
        success: Status of the monitored job
        now: Save time, used for the archive name

    Returns:
        Path of the timestamped archive
    """
    archive_path = join_path(log_folder, report_file_name(now, success))
    storage.write_text(content, archive_path)

    for status in (True, False):
        storage.delete_file(join_path(log_folder, current_file_name(status)))
    storage.write_text(content, join_path(log_folder, current_file_name(success)))

    logger.info(f"Saved {status_suffix(success)} report to {archive_path}")
    return archive_path


def read_current_report(
    storage: FileStorage, log_folder: str
) -> Optional[Tuple[bool, str]]:
    """
    Read the report the ``current`` alias points at.

    Returns:
        ``(success, content)``, or None if the folder holds no current report
    """
    for success in (True, False):
        path = join_path(log_folder, current_file_name(success))
        if storage.file_exists(path):
            return success, storage.read_text(path)
    return None


def _log_date(file_name: str) -> Optional[date]:
    try:
        return datetime.strptime(file_name[:8], "%Y%m%d").date()
    except ValueError:
        return None


def purge_outdated_logs(
    storage: FileStorage,
    log_folder: str,
    purge_window: int,
    today: Union[date, datetime, None] = None,
) -> List[str]:
    """
    Delete archived reports older than the retention window.

    A report dated strictly before ``today - purge_window days`` is deleted.
    The ``current`` aliases and files whose name does not start with a
    ``yyyyMMdd`` date (such as the KPI history) are never touched. A missing
    log folder is not an error: there is simply nothing to purge.

    Args:
        storage: Storage the log folder lives in
        log_folder: Folder to purge
        purge_window: Retention window, in days
        today: Reference day, defaults to the current day

    Returns:
        Names of the deleted files
    """
    if today is None:
        today = date.today()
    elif isinstance(today, datetime):
        today = today.date()

    if not storage.folder_exists(log_folder):
        logger.debug(f"Log folder {log_folder} doesn't exist, nothing to purge")
        return []

    oldest_kept = today - timedelta(days=purge_window)
    purged = []

    for file_name in storage.list_file_names(log_folder):
        if file_name.startswith(CURRENT_PREFIX):
            continue
        log_date = _log_date(file_name)
        if log_date is None:
            logger.debug(f"Skipping {file_name}: not a dated report")
            continue
        if log_date < oldest_kept:
            storage.delete_file(join_path(log_folder, file_name))
            purged.append(file_name)

    if purged:
        logger.info(f"Purged {len(purged)} reports older than {oldest_kept} from {log_folder}")
    return purged


def kpi_results_to_dataframe(results: Sequence[KpiResult]) -> pl.DataFrame:
    columns = {column: [getattr(result, column) for result in results] for column in KPI_HISTORY_SCHEMA}
    return pl.DataFrame(columns, schema=KPI_HISTORY_SCHEMA)


def append_kpi_history(
    storage: FileStorage, log_folder: str, results: Sequence[KpiResult]
) -> Optional[str]:
    """
    Append KPI results to the Parquet KPI history of a log folder.

    Returns:
        Path of the history file, or None when there was nothing to append
    """
    if not results:
        return None
    history_path = join_path(log_folder, KPI_HISTORY_FILE)
    storage.append_dataframe(kpi_results_to_dataframe(results), history_path)
    logger.info(f"Appended {len(results)} KPI results to {history_path}")
    return history_path


def load_kpi_history(storage: FileStorage, log_folder: str) -> pl.DataFrame:
    """Load the KPI history of a log folder (empty if none was recorded)."""
    history_path = join_path(log_folder, KPI_HISTORY_FILE)
    if not storage.file_exists(history_path):
        return pl.DataFrame(schema=KPI_HISTORY_SCHEMA)
    return storage.load_dataframe(history_path)
