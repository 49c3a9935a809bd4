"""
Job monitoring: report accumulation, KPI validation and report retention.
"""

from .kpi import Comparator, KpiBuildResult, KpiResult, KpiTest, Unit, build_kpi_test
from .monitor import Monitor
from .report import Report, ReportLine, format_duration
from .retention import (
    append_kpi_history,
    load_kpi_history,
    purge_outdated_logs,
    read_current_report,
    write_report,
)

__all__ = [
    "Monitor",
    "KpiTest",
    "KpiResult",
    "KpiBuildResult",
    "Comparator",
    "Unit",
    "build_kpi_test",
    "Report",
    "ReportLine",
    "format_duration",
    "write_report",
    "read_current_report",
    "purge_outdated_logs",
    "append_kpi_history",
    "load_kpi_history",
]
