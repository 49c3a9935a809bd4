"""
Report line records and their text rendering.

A monitoring report is kept as an append-only list of ReportLine records and
only turned into text when it is read or saved. Each line carries its own
indentation and optional time stamps:

    [10:23] Beginning
    [10:23-10:41] My pipeline: success
    	KPI: Nbr of output records
    		Value: 14669071.0
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

TITLE_INDENT = 5


@dataclass(frozen=True)
class ReportLine:
    """
    One line of a monitoring report.

    Attributes:
        text: Line content, without indentation nor time stamp
        indent: Number of leading tabs
        start: Beginning of the time range the line covers
        end: Time stamp of the line; alone it renders as ``[HH:MM]``,
            together with ``start`` as ``[HH:MM-HH:MM]``
    """

    text: str
    indent: int = 0
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def render(self) -> str:
        stamp = ""
        if self.end is not None:
            if self.start is not None:
                stamp = f"[{self.start:%H:%M}-{self.end:%H:%M}] "
            else:
                stamp = f"[{self.end:%H:%M}] "
        return "\t" * self.indent + stamp + self.text


class Report:
    """Append-only ordered collection of report lines."""

    def __init__(self, lines: Optional[List[ReportLine]] = None):
        self._lines: List[ReportLine] = list(lines or [])

    def append(self, line: ReportLine) -> None:
        self._lines.append(line)

    def extend(self, lines: List[ReportLine]) -> None:
        self._lines.extend(lines)

    @property
    def lines(self) -> Tuple[ReportLine, ...]:
        return tuple(self._lines)

    def render(self) -> str:
        """Render the report, every line terminated by a newline."""
        return "".join(line.render() + "\n" for line in self._lines)

    def __len__(self) -> int:
        return len(self._lines)


def header_lines(
    report_title: str, point_of_contact: str, additional_info: str, started_at: datetime
) -> List[ReportLine]:
    """
    Build the lines a report starts with.

    Title, point of contact and additional info are only written when not
    empty; the ``Beginning`` line is always there.
    """
    lines = []
    if report_title:
        lines.append(ReportLine(report_title, indent=TITLE_INDENT))
        lines.append(ReportLine(""))
    if point_of_contact:
        lines.append(ReportLine(f"Point of contact: {point_of_contact}"))
    if additional_info:
        lines.append(ReportLine(additional_info))
    lines.append(ReportLine("Beginning", end=started_at))
    return lines


def format_duration(duration: timedelta) -> str:
    """
    Format a duration as ``HH:MM:SS``.

    Hours are not wrapped at 24 and negative durations (clock set back during
    the job) are reported as zero.
    """
    total_seconds = max(int(duration.total_seconds()), 0)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def duration_line(started_at: datetime, now: datetime) -> ReportLine:
    return ReportLine(f"Duration: {format_duration(now - started_at)}", end=now)
