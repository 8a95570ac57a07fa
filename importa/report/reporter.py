"""
Run reporter - counts transformed rows, keeps invalid rows and their errors,
and renders the end-of-run summary.

One reporter may be shared by several batches; it is not thread-safe.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from importa.adapters.sinks import default_sinks
from importa.core.clock import Clock, local_now
from importa.ports.sinks import ReportSink

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"


@dataclass
class ReportEntry:
    """An invalid row and the errors it produced."""

    row: Optional[int]
    errors: List[Tuple[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "row": self.row,
            "errors": [{"field": name, "message": message} for name, message in self.errors],
        }


@dataclass
class RunStats:
    """Mutable counters for one reporting run."""

    started_at: datetime
    transformed_count: int = 0
    invalid_entries: List[ReportEntry] = field(default_factory=list)

    @property
    def invalid_count(self) -> int:
        return len(self.invalid_entries)

    @property
    def total_count(self) -> int:
        return self.transformed_count + self.invalid_count


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT).rstrip()


class Reporter:
    """
    Accumulates run statistics and emits a plain-text summary.

    Args:
        sinks: Where ``report()`` sends the text. Defaults to settings
            (``report_path`` file, or the log when unset).
        clock: Time source; called once here and once per ``report()``.
    """

    def __init__(self, sinks: Optional[Iterable[ReportSink]] = None, clock: Optional[Clock] = None):
        self.clock: Clock = clock or local_now
        self.sinks: List[ReportSink] = list(sinks) if sinks is not None else default_sinks()
        self.stats = RunStats(started_at=self.clock())
        self.finished_at: Optional[datetime] = None

    @property
    def started_at(self) -> datetime:
        return self.stats.started_at

    @property
    def transformed_records(self) -> int:
        return self.stats.transformed_count

    @property
    def invalid_records(self) -> List[ReportEntry]:
        return self.stats.invalid_entries

    @property
    def total_records(self) -> int:
        return self.stats.total_count

    def record_transformed(self) -> None:
        self.stats.transformed_count += 1

    def record_invalid(self, row: Optional[int], errors: Sequence[Tuple[str, str]]) -> None:
        self.stats.invalid_entries.append(ReportEntry(row=row, errors=list(errors)))

    def render(self, finished_at: datetime) -> str:
        """Build the summary text for a run that ended at ``finished_at``."""
        duration = (finished_at - self.started_at).total_seconds()
        lines = [
            "Importa report:",
            "---------------",
            f"Started at: {format_timestamp(self.started_at)}",
            f"Finished at: {format_timestamp(finished_at)}",
            f"Duration: {duration} seconds",
            f"Total records: {self.total_records}",
            f"Transformed records: {self.transformed_records}",
            f"Invalid records: {len(self.invalid_records)}",
            "Errors:",
        ]
        for entry in self.invalid_records:
            row = "" if entry.row is None else entry.row
            lines.append(f"Row {row}, Errors: {len(entry.errors)}")
            for name, message in entry.errors:
                lines.append(f"- {name} {message}")
        return "\n".join(lines)

    def report(self) -> str:
        """
        Render the summary, hand it to every sink and return it.

        A sink that fails is logged and skipped; the remaining sinks still
        receive the text.
        """
        self.finished_at = self.clock()
        text = self.render(self.finished_at)
        for sink in self.sinks:
            try:
                sink.emit(text)
            except Exception:
                logger.exception("Report sink %r failed", sink)
        logger.info(
            "Import finished: %s total, %s transformed, %s invalid",
            self.total_records,
            self.transformed_records,
            len(self.invalid_records),
        )
        return text

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        finished = self.finished_at
        return {
            "started_at": self.started_at.isoformat(),
            "finished_at": finished.isoformat() if finished else None,
            "duration_seconds": (finished - self.started_at).total_seconds() if finished else None,
            "summary": {
                "total_records": self.total_records,
                "transformed_records": self.transformed_records,
                "invalid_records": len(self.invalid_records),
            },
            "errors": [entry.to_dict() for entry in self.invalid_records],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def __repr__(self) -> str:
        return (
            f"<Reporter: {self.transformed_records} transformed, "
            f"{len(self.invalid_records)} invalid>"
        )
