"""
Report sink interface.

Where a run summary ends up (file, stream, log) is the caller's choice;
the reporter only guarantees the text.
"""
from abc import ABC, abstractmethod


class ReportSink(ABC):
    """Destination for a rendered run report."""

    @abstractmethod
    def emit(self, text: str) -> None:
        """
        Deliver the rendered report.

        Args:
            text: Full report text, lines separated by "\\n"
        """
        pass
