"""
Shared fixtures for importa tests.
"""
from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from importa.ports.sinks import ReportSink
from importa.schema import SchemaBuilder


class MemorySink(ReportSink):
    """Keeps every emitted report in memory."""

    def __init__(self):
        self.reports: List[str] = []

    def emit(self, text: str) -> None:
        self.reports.append(text)


class BrokenSink(ReportSink):
    """Fails like a file sink in a read-only directory."""

    def emit(self, text: str) -> None:
        raise PermissionError("read-only directory")


class StepClock:
    """Deterministic clock: each call advances by ``step`` seconds."""

    def __init__(self, start: datetime, step: float = 1.5):
        self.current = start
        self.step = timedelta(seconds=step)
        self.calls = 0

    def __call__(self) -> datetime:
        moment = self.current
        self.current += self.step
        self.calls += 1
        return moment


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Default file sinks write report.txt into the cwd; keep it in tmp_path."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def memory_sink():
    return MemorySink()


@pytest.fixture
def clock():
    return StepClock(datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def member_schema():
    """Member import schema used across the suite."""
    return (
        SchemaBuilder(strict_numbers=False)
        .field("first_name")
        .field("last_name")
        .field("dob", "date")
        .field("member_id")
        .field("effective_date", "date")
        .field("expiry_date", "date", optional=True)
        .field("phone_number", "phone", optional=True)
        .build()
    )


@pytest.fixture
def member_record():
    """A complete, valid member record."""
    return {
        "first_name": "John",
        "last_name": "Doe",
        "dob": "01/01/2000",
        "member_id": "123",
        "effective_date": "01/01/2020",
        "expiry_date": "01/01/2021",
        "phone_number": "(303) 555-4202",
    }


@pytest.fixture
def member_values():
    """Expected output for ``member_record``."""
    return ["John", "Doe", "2000-01-01", "123", "2020-01-01", "2021-01-01", "+13035554202"]


@pytest.fixture
def broken_sink():
    return BrokenSink()
