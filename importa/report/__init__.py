"""
Report module - run statistics and the end-of-run summary.
"""
from importa.report.reporter import Reporter, ReportEntry, RunStats

__all__ = ["Reporter", "ReportEntry", "RunStats"]
