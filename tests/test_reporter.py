"""
Tests for Reporter and report sinks.
"""
import io
import json
import logging

from importa.adapters.sinks import FileReportSink, LoggingReportSink, StreamReportSink, default_sinks
from importa.core.config import ImportaSettings
from importa.report import Reporter


EXPECTED_REPORT = "\n".join([
    "Importa report:",
    "---------------",
    "Started at: 2024-01-01 12:00:00 +0000",
    "Finished at: 2024-01-01 12:00:01 +0000",
    "Duration: 1.5 seconds",
    "Total records: 3",
    "Transformed records: 1",
    "Invalid records: 2",
    "Errors:",
    "Row 1, Errors: 2",
    "- last_name is required",
    "- dob is required",
    "Row 2, Errors: 1",
    "- member_id is required",
])


def _populated(reporter):
    reporter.record_transformed()
    reporter.record_invalid(1, [("last_name", "is required"), ("dob", "is required")])
    reporter.record_invalid(2, [("member_id", "is required")])
    return reporter


class TestReporter:
    """Tests for counting and rendering."""

    def test_counts(self, memory_sink, clock):
        reporter = _populated(Reporter(sinks=[memory_sink], clock=clock))

        assert reporter.transformed_records == 1
        assert len(reporter.invalid_records) == 2
        assert reporter.total_records == 3
        assert reporter.stats.invalid_count == 2

    def test_report_text(self, memory_sink, clock):
        reporter = _populated(Reporter(sinks=[memory_sink], clock=clock))

        text = reporter.report()

        assert text == EXPECTED_REPORT
        assert memory_sink.reports == [EXPECTED_REPORT]

    def test_clock_read_at_start_and_finish_only(self, memory_sink, clock):
        reporter = _populated(Reporter(sinks=[memory_sink], clock=clock))
        reporter.report()
        assert clock.calls == 2

    def test_no_errors_section_is_empty(self, memory_sink, clock):
        reporter = Reporter(sinks=[memory_sink], clock=clock)
        reporter.record_transformed()

        text = reporter.report()

        assert text.endswith("Invalid records: 0\nErrors:")

    def test_row_without_number(self, memory_sink, clock):
        reporter = Reporter(sinks=[memory_sink], clock=clock)
        reporter.record_invalid(None, [("x", "is required")])

        assert "Row , Errors: 1" in reporter.report()

    def test_every_sink_receives_report(self, clock):
        first, second = io.StringIO(), io.StringIO()
        reporter = Reporter(sinks=[StreamReportSink(first), StreamReportSink(second)], clock=clock)

        text = reporter.report()

        assert first.getvalue() == text + "\n"
        assert second.getvalue() == text + "\n"

    def test_to_dict(self, memory_sink, clock):
        reporter = _populated(Reporter(sinks=[memory_sink], clock=clock))
        assert reporter.to_dict()["finished_at"] is None

        reporter.report()
        data = json.loads(reporter.to_json())

        assert data["summary"] == {"total_records": 3, "transformed_records": 1, "invalid_records": 2}
        assert data["duration_seconds"] == 1.5
        assert data["errors"][1] == {"row": 2, "errors": [{"field": "member_id", "message": "is required"}]}

    def test_report_logged(self, memory_sink, clock, caplog):
        reporter = Reporter(sinks=[memory_sink], clock=clock)
        with caplog.at_level(logging.INFO, logger="importa.report.reporter"):
            reporter.report()
        assert "0 total" in caplog.text

    def test_failing_sink_is_logged_and_skipped(self, broken_sink, memory_sink, clock, caplog):
        reporter = _populated(Reporter(sinks=[broken_sink, memory_sink], clock=clock))

        with caplog.at_level(logging.ERROR, logger="importa.report.reporter"):
            text = reporter.report()

        assert text == EXPECTED_REPORT
        assert memory_sink.reports == [EXPECTED_REPORT]
        assert "Report sink" in caplog.text
        assert "read-only directory" in caplog.text

    def test_unwritable_report_path(self, tmp_path, memory_sink, clock):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        sink = FileReportSink(blocker / "report.txt")
        reporter = Reporter(sinks=[sink, memory_sink], clock=clock)

        reporter.report()

        assert len(memory_sink.reports) == 1


class TestSinks:
    """Tests for report sink adapters."""

    def test_file_sink_creates_parent(self, tmp_path):
        path = tmp_path / "reports" / "run.txt"
        FileReportSink(path).emit("hello")
        assert path.read_text(encoding="utf-8") == "hello"

    def test_file_sink_overwrites(self, tmp_path):
        path = tmp_path / "report.txt"
        sink = FileReportSink(path)
        sink.emit("first")
        sink.emit("second")
        assert path.read_text(encoding="utf-8") == "second"

    def test_logging_sink(self, caplog):
        with caplog.at_level(logging.INFO, logger="importa.report"):
            LoggingReportSink().emit("Importa report:")
        assert "Importa report:" in caplog.text

    def test_default_sinks_file(self):
        sinks = default_sinks(ImportaSettings(report_path="out/report.txt"))
        assert len(sinks) == 1
        assert isinstance(sinks[0], FileReportSink)
        assert sinks[0].path.as_posix() == "out/report.txt"

    def test_default_sinks_without_path_logs(self):
        sinks = default_sinks(ImportaSettings(report_path=None))
        assert len(sinks) == 1
        assert isinstance(sinks[0], LoggingReportSink)
