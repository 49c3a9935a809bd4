"""
A facility used to monitor a Spark job.

The Monitor is a simple report you update while orchestrating your job. It
holds a report and a success status. At the end of the job, the report is
stored in a log folder (HDFS or local) where it is easy to find, unlike the
yarn logs of the job.

Typical usage:

    monitor = Monitor("My Simple Job", storage=create_storage("hdfs", sc))

    try:
        processed = sc.textFile("/my/hdfs/input/path").map(parse)
        output_is_valid = monitor.update_by_kpis_validation(
            [
                KpiTest("Nbr of output records", processed.count(), "greater-than", 10e6, "nbr"),
                KpiTest("Some pct of invalid output", pct_invalid, "less-than", 3, "pct"),
            ],
            "My pipeline description",
        )
        if output_is_valid:
            processed.saveAsTextFile("wherever/folder")
    except Exception as e:
        monitor.update_report_with_error(e, "My pipeline description")

    monitor.save_report("/my/hdfs/functional/logs/folder")

    if not monitor.is_success():
        raise RuntimeError("My Simple Job failed")

which stores a report such as:

    					My Simple Job

    [10:23] Beginning
    [10:23-10:41] My pipeline description: success
    	KPI: Nbr of output records
    		Value: 14669071.0
    		Must be greater than 10000000.0
    		Validated: true
    	KPI: Some pct of invalid output
    		Value: 0.06%
    		Must be less than 3.0%
    		Validated: true
    [10:42] Duration: 00:19:23

The monitor is meant to be updated from the driver, between pipelines, and
never from within Spark transformations or actions.
"""

import logging
import dataclasses
import traceback
from datetime import datetime
from typing import Any, Callable, Iterable, List, Optional

from ..models.config import AppConfig, MonitorConfig
from ..storage import FileStorage, create_storage
from .kpi import KpiResult, KpiTest
from .report import Report, ReportLine, duration_line, header_lines
from . import retention

logger = logging.getLogger(__name__)


def _error_lines(error: BaseException) -> List[str]:
    """The error's description followed by its stack trace, one entry per line."""
    description = "".join(traceback.format_exception_only(type(error), error))
    lines = description.rstrip("\n").splitlines()
    for entry in traceback.format_tb(error.__traceback__):
        lines.extend(line.strip() for line in entry.rstrip("\n").splitlines())
    return lines


class Monitor:
    """
    Report and success status of a job.

    The success status only ever goes from success to failure: once a failure
    is reported, later successes don't make the job successful again.

    Args:
        report_title: First line of the report
        point_of_contact: The persons in charge of the job
        additional_info: Anything to write at the beginning of the report
        storage: Where reports are saved, local filesystem by default
        clock: Returns the current time, ``datetime.now`` by default
    """

    def __init__(
        self,
        report_title: str = "",
        point_of_contact: str = "",
        additional_info: str = "",
        storage: Optional[FileStorage] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.storage = storage if storage is not None else create_storage("local")
        self.config = MonitorConfig(
            report_title=report_title,
            point_of_contact=point_of_contact,
            additional_info=additional_info,
        )
        self.kpi_history = False

        self._clock = clock or datetime.now
        self._success = True
        self._started_at = self._clock()
        self._last_update = self._started_at
        self._report = Report(
            header_lines(report_title, point_of_contact, additional_info, self._started_at)
        )
        self._kpi_results: List[KpiResult] = []
        self._saved_kpi_results = 0

    @classmethod
    def from_config(
        cls,
        app_config: AppConfig,
        storage: Optional[FileStorage] = None,
        spark_context: Optional[Any] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "Monitor":
        """
        Create a monitor from the application configuration.

        The configured log folder, purge policy and KPI history become the
        defaults of save_report(). Unless given, the storage is created from
        the ``[storage]`` section (the 'hdfs' backend needs ``spark_context``).
        """
        if storage is None:
            storage = create_storage(
                app_config.storage.backend,
                spark_context=spark_context,
                compression=app_config.storage.compression,
            )
        monitor = cls(
            app_config.monitor.report_title,
            app_config.monitor.point_of_contact,
            app_config.monitor.additional_info,
            storage=storage,
            clock=clock,
        )
        # private copy, app_config is usually the cached get_config()
        monitor.config = dataclasses.replace(app_config.monitor)
        monitor.kpi_history = app_config.storage.kpi_history
        return monitor

    def is_success(self) -> bool:
        """Return whether all the stages reported so far were successful."""
        return self._success

    def get_report(self) -> str:
        """Return the current state of the report."""
        return self._report.render()

    @property
    def kpi_results(self) -> List[KpiResult]:
        """Every KPI evaluated by this monitor, in evaluation order."""
        return list(self._kpi_results)

    def update_report(self, text: str) -> None:
        """
        Append a line covering the time since the previous update.

        ``monitor.update_report("Some text")`` appends
        ``[10:35-10:37] Some text``. The success status is left unchanged.
        """
        now = self._clock()
        self._report.append(ReportLine(text, start=self._last_update, end=now))
        self._last_update = now

    def update_report_with_success(self, task_description: str) -> bool:
        """
        Report a successful task.

        The status is not modified: a failed monitoring stays failed.

        Returns:
            True, since it's a success
        """
        self.update_report(f"{task_description}: success")
        return True

    def update_report_with_failure(self, task_description: str) -> bool:
        """
        Report a failed task and mark the monitoring as failed for good.

        Returns:
            False, since it's a failure
        """
        self.update_report(f"{task_description}: failed")
        self._success = False
        return False

    def update_report_with_error(
        self, error: BaseException, task_description: str, diagnostic: str = ""
    ) -> bool:
        """
        Report an error with its stack trace and mark the monitoring as failed.

        The error is recorded, not raised: check is_success() once the report
        is saved to decide whether the job should crash.

            monitor.update_report_with_error(e, "My pipeline", diagnostic="No input data!")

        appends:

            [10:23-10:24] My pipeline: failed
            	Diagnostic: No input data!
            		FileNotFoundError: Input path does not exist: /my/input
            		File "job.py", line 12, in run
            		...

        Args:
            error: The caught error
            task_description: Description of the failed step; no status line
                is written when empty
            diagnostic: Optional message clarifying the source of the problem

        Returns:
            False, since it's a failure
        """
        self._success = False

        if task_description:
            self.update_report(f"{task_description}: failed")
        if diagnostic:
            self._report.append(ReportLine(f"Diagnostic: {diagnostic}", indent=1))

        self._report.extend([ReportLine(line, indent=2) for line in _error_lines(error)])

        logger.debug(f"Reported error for '{task_description}': {error!r}")
        return False

    def update_by_kpis_validation(self, tests: Iterable[KpiTest], test_suite_name: str) -> bool:
        """
        Validate KPIs and write the detail of the validation to the report.

        If at least one KPI isn't valid, the monitoring is marked as failed for
        good. A ``<test_suite_name>: success|failed`` line heads the section
        when a suite name is given.

        Args:
            tests: The KPI tests to validate
            test_suite_name: Description of the task being tested

        Returns:
            Whether all tests were successful
        """
        tests = list(tests)
        tests_are_valid = all(test.evaluate() for test in tests)

        if not tests_are_valid:
            self._success = False

        if test_suite_name:
            validation = "success" if tests_are_valid else "failed"
            self.update_report(f"{test_suite_name}: {validation}")

        evaluated_at = self._clock()
        for test in tests:
            self._report.extend(test.report_lines())
            self._kpi_results.append(test.to_result(test_suite_name, evaluated_at))

        return tests_are_valid

    def update_by_kpi_validation(self, test: KpiTest, test_suite_name: str) -> bool:
        """Validate a single KPI, see update_by_kpis_validation()."""
        return self.update_by_kpis_validation([test], test_suite_name)

    def final_report(self, now: Optional[datetime] = None) -> str:
        """The report followed by the job duration line, as it is saved."""
        now = now or self._clock()
        return self.get_report() + duration_line(self._started_at, now).render()

    def save_report(
        self,
        log_folder: Optional[str] = None,
        purge_logs: Optional[bool] = None,
        purge_window: Optional[int] = None,
        kpi_history: Optional[bool] = None,
    ) -> str:
        """
        Save the report in a single text file.

        The report is stored as ``<log_folder>/yyyyMMdd_HHmmss.log.success``
        (or ``.log.failed``) and under the fixed name ``current.success`` (or
        ``current.failed``), the previous current alias being deleted.

        For high frequency jobs, reports older than ``purge_window`` days can
        be purged with ``purge_logs``.

        Arguments left to None take their value from the monitor's
        configuration (no purge, 7 days window, no KPI history by default).

        Args:
            log_folder: Folder in which the report is archived
            purge_logs: Whether outdated reports are purged
            purge_window: Age in days after which a report is outdated
            kpi_history: Whether KPI results are appended to the Parquet
                KPI history of the folder

        Returns:
            Path of the timestamped report
        """
        log_folder = log_folder if log_folder is not None else self.config.log_folder
        purge_logs = purge_logs if purge_logs is not None else self.config.purge_logs
        purge_window = purge_window if purge_window is not None else self.config.purge_window
        kpi_history = kpi_history if kpi_history is not None else self.kpi_history

        now = self._clock()
        archive_path = retention.write_report(
            self.storage, self.final_report(now), log_folder, self._success, now
        )

        if kpi_history:
            retention.append_kpi_history(
                self.storage, log_folder, self._kpi_results[self._saved_kpi_results:]
            )
            self._saved_kpi_results = len(self._kpi_results)

        if purge_logs:
            retention.purge_outdated_logs(self.storage, log_folder, purge_window, today=now)

        return archive_path
