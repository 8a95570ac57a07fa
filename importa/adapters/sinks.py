"""
Report sinks: file, text stream and logger.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO, Union

from importa.core.config import ImportaSettings, settings as default_settings
from importa.ports.sinks import ReportSink

logger = logging.getLogger(__name__)


class FileReportSink(ReportSink):
    """Write the report to a file, replacing previous content."""

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding

    def emit(self, text: str) -> None:
        if self.path.parent != Path("."):
            self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding=self.encoding)
        logger.info("Report written to %s", self.path)

    def __repr__(self) -> str:
        return f"<FileReportSink: {self.path}>"


class StreamReportSink(ReportSink):
    """Write the report to a text stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def emit(self, text: str) -> None:
        stream = self.stream or sys.stdout
        stream.write(text + "\n")
        stream.flush()


class LoggingReportSink(ReportSink):
    """Send the report to a logger as a single record."""

    def __init__(self, target: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.target = target or logging.getLogger("importa.report")
        self.level = level

    def emit(self, text: str) -> None:
        self.target.log(self.level, "%s", text)


def default_sinks(settings: Optional[ImportaSettings] = None) -> List[ReportSink]:
    """File sink at ``report_path`` when configured, otherwise the log."""
    settings = settings or default_settings
    if settings.report_path:
        return [FileReportSink(settings.report_path)]
    return [LoggingReportSink()]
