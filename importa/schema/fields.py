"""
Field schema - ordered field declarations bound to formatters.

A schema is built once with ``SchemaBuilder`` and is immutable afterwards:

    schema = (
        SchemaBuilder()
        .field("first_name")
        .field("dob", "date")
        .field("phone_number", "phone", optional=True)
        .build()
    )

Declaration order is output column order.
"""
from __future__ import annotations

import logging
from collections.abc import Sized
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterator, List, Mapping, Optional, Tuple, Union

from importa.core.config import settings
from importa.core.errors import DuplicateFieldError
from importa.transform.formatters import FormatterFn, FormatterRegistry, safe_formatter

if TYPE_CHECKING:
    from importa.report.reporter import Reporter
    from importa.transform.record import RecordTransformer, TransformResult

logger = logging.getLogger(__name__)

RefineFn = Callable[[Any], Any]
Record = Mapping[str, Any]

REQUIRED_MESSAGE = "is required"


def is_blank(value: Any) -> bool:
    """None, empty text or an empty container."""
    if value is None:
        return True
    if isinstance(value, Sized):
        return len(value) == 0
    return False


@dataclass(frozen=True)
class FieldDeclaration:
    """Specification for a single output field."""

    name: str
    formatter: str = "string"
    optional: bool = False
    refine: Optional[RefineFn] = None
    custom: Optional[FormatterFn] = None  # inline formatter, bypasses the registry

    def check(self, value: Any) -> Optional[str]:
        """Validation message for a final value, or None if it is acceptable."""
        if not self.optional and is_blank(value):
            return REQUIRED_MESSAGE
        return None


@dataclass(frozen=True)
class Schema:
    """Ordered, immutable field declarations plus a private formatter registry."""

    fields: Tuple[FieldDeclaration, ...]
    registry: FormatterRegistry = field(repr=False, compare=False)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def declaration(self, name: str) -> FieldDeclaration:
        for declaration in self.fields:
            if declaration.name == name:
                return declaration
        raise KeyError(name)

    def evaluate(self, target: Union[str, FieldDeclaration], record: Record) -> Any:
        """
        Final value of one field for one record.

        value = refine(formatter(record[name])) when a refinement is set,
        formatter(record[name]) otherwise. A missing key reads as None.
        """
        declaration = target if isinstance(target, FieldDeclaration) else self.declaration(target)
        formatter = declaration.custom or self.registry.resolve(declaration.formatter)
        value = formatter(record.get(declaration.name))
        if declaration.refine is not None:
            value = declaration.refine(value)
        return value

    def transformer(
        self,
        record: Record,
        row_number: Optional[int] = None,
        reporter: Optional["Reporter"] = None,
    ) -> "RecordTransformer":
        from importa.transform.record import RecordTransformer

        return RecordTransformer(self, record, row_number=row_number, reporter=reporter)

    def transform(
        self,
        record: Record,
        row_number: Optional[int] = None,
        reporter: Optional["Reporter"] = None,
    ) -> "TransformResult":
        """Transform a single record."""
        return self.transformer(record, row_number=row_number, reporter=reporter).transform()

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[FieldDeclaration]:
        return iter(self.fields)

    def __repr__(self) -> str:
        return f"<Schema: {', '.join(self.field_names)}>"


class SchemaBuilder:
    """
    Collects field and formatter declarations, then freezes them into a Schema.

    Formatter names are resolved in ``build()``, so a custom formatter can be
    registered after the field that uses it.
    """

    def __init__(
        self,
        registry: Optional[FormatterRegistry] = None,
        strict_numbers: Optional[bool] = None,
    ):
        """
        Args:
            registry: Registry to start from (copied). Defaults to the built-ins.
            strict_numbers: integer/float yield None on non-numeric input.
                Defaults to ``settings.strict_numbers``. Ignored when a
                registry is given.
        """
        if registry is None:
            if strict_numbers is None:
                strict_numbers = settings.strict_numbers
            registry = FormatterRegistry.with_builtins(strict_numbers=strict_numbers)
        self._registry = registry.copy()
        self._fields: List[FieldDeclaration] = []

    def field(
        self,
        name: str,
        formatter: Union[str, FormatterFn] = "string",
        optional: bool = False,
        refine: Optional[RefineFn] = None,
    ) -> "SchemaBuilder":
        """
        Append a field declaration.

        Args:
            name: Record key to read and output column name
            formatter: Registered formatter name, or a callable used inline
            optional: Allow the final value to be None or empty
            refine: Second-stage function applied to the formatter output

        Raises:
            DuplicateFieldError: If ``name`` is already declared
        """
        if any(f.name == name for f in self._fields):
            raise DuplicateFieldError(f"Field '{name}' declared twice")

        custom = None
        if callable(formatter):
            custom = safe_formatter(formatter, label=f"{name}:{getattr(formatter, '__name__', 'custom')}")
            formatter = getattr(formatter, "__name__", "custom")

        self._fields.append(FieldDeclaration(
            name=name,
            formatter=formatter,
            optional=optional,
            refine=safe_formatter(refine, label=f"{name}:refine") if refine else None,
            custom=custom,
        ))
        return self

    def formatter(self, name: str, fn: FormatterFn) -> "SchemaBuilder":
        """Register a schema-local formatter."""
        self._registry.register(name, fn)
        return self

    def build(self) -> Schema:
        """
        Freeze the declarations.

        Raises:
            UnknownFormatterError: If a field names an unregistered formatter
        """
        for declaration in self._fields:
            if declaration.custom is None:
                self._registry.resolve(declaration.formatter)

        schema = Schema(fields=tuple(self._fields), registry=self._registry.copy())
        logger.debug("Built schema with %s fields: %s", len(schema), ", ".join(schema.field_names))
        return schema
