"""Errors raised by importa.

Only structural problems raise. A bad value in a single record is reported
as a FieldError on that row and never interrupts a batch.
"""


class ImportaError(Exception):
    """Base error for this package."""


class SchemaError(ImportaError):
    """Raised when a schema is structurally broken."""


class UnknownFormatterError(SchemaError, KeyError):
    """Raised when a formatter name was never registered."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown formatter: {self.name!r}"


class DuplicateFieldError(SchemaError):
    """Raised when a field name is declared twice on one schema."""


class SchemaLoadError(SchemaError):
    """Raised when a schema file cannot be read or references a missing callable."""
