"""
Ports - interface definitions for external collaborators.

Ports define interfaces, adapters provide concrete implementations.
"""
from importa.ports.sinks import ReportSink

__all__ = ["ReportSink"]
