"""
Adapters - concrete implementations of ports plus record sources.
"""
from importa.adapters.sinks import FileReportSink, StreamReportSink, LoggingReportSink, default_sinks
from importa.adapters.sources import read_csv_records

__all__ = [
    "FileReportSink",
    "StreamReportSink",
    "LoggingReportSink",
    "default_sinks",
    "read_csv_records",
]
