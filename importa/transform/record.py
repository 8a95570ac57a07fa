"""
Record transformer - applies a schema to one input record.

A transform pass evaluates every declared field in order, collects
"is required" errors for blank non-optional fields and notifies the
reporter once. The pass runs at most once per transformer instance;
later calls reuse the cached result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, NamedTuple, Optional

if TYPE_CHECKING:
    from importa.report.reporter import Reporter
    from importa.schema.fields import Record, Schema

logger = logging.getLogger(__name__)


class FieldError(NamedTuple):
    """A validation error on one field. Compares equal to a (field, message) tuple."""

    field: str
    message: str


@dataclass(frozen=True)
class TransformResult:
    """Output of one transform pass: one value per declared field, plus errors."""

    field_names: List[str]
    values: List[Any]
    errors: List[FieldError] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def as_dict(self) -> Dict[str, Any]:
        """Field name -> final value."""
        return dict(zip(self.field_names, self.values))


class RecordTransformer:
    """
    Transforms a single record against a schema.

    Attributes:
        record: The raw input mapping (never mutated)
        row_number: Position of the record in its batch, if any
        reporter: Notified once when the transform pass completes
    """

    def __init__(
        self,
        schema: Schema,
        record: Record,
        row_number: Optional[int] = None,
        reporter: Optional[Reporter] = None,
    ):
        self.schema = schema
        self.record = record
        self.row_number = row_number
        self.reporter = reporter
        self._result: Optional[TransformResult] = None

    def __getitem__(self, name: str) -> Any:
        """Final value of one field. Does not run validation or touch the reporter."""
        return self.schema.evaluate(name, self.record)

    def transform(self) -> TransformResult:
        """
        Run the transform pass (once) and return its result.

        Returns:
            TransformResult with len(values) == number of schema fields
        """
        if self._result is not None:
            return self._result

        values: List[Any] = []
        errors: List[FieldError] = []
        for declaration in self.schema.fields:
            value = self.schema.evaluate(declaration, self.record)
            message = declaration.check(value)
            if message:
                errors.append(FieldError(declaration.name, message))
            values.append(value)

        self._result = TransformResult(
            field_names=list(self.schema.field_names),
            values=values,
            errors=errors,
        )

        if errors:
            logger.debug("Row %s invalid: %s", self.row_number, errors)
        self._notify()
        return self._result

    def valid(self) -> bool:
        """True when the transform pass produced no errors."""
        return self.transform().valid

    @property
    def errors(self) -> List[FieldError]:
        return list(self.transform().errors)

    @property
    def transformed(self) -> bool:
        return self._result is not None

    def _notify(self) -> None:
        if self.reporter is None:
            return
        if self._result.valid:
            self.reporter.record_transformed()
        else:
            self.reporter.record_invalid(self.row_number, list(self._result.errors))

    def __repr__(self) -> str:
        state = "pending" if self._result is None else ("valid" if self._result.valid else "invalid")
        return f"<RecordTransformer row={self.row_number} {state}>"
