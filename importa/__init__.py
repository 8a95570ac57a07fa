"""
importa - declarative record transformation and validation.

Declare a schema of named fields, each bound to a formatter, then transform
raw string-keyed records into ordered, normalized values. Invalid rows are
collected by a Reporter that renders a run summary.
"""
from importa.transform import (
    FormatterRegistry,
    FieldError,
    RecordTransformer,
    TransformResult,
    transform_batch,
    transform_frame,
)
from importa.schema import FieldDeclaration, Schema, SchemaBuilder, SchemaLoader, schema_from_dict
from importa.report import Reporter, ReportEntry, RunStats
from importa.core.errors import (
    ImportaError,
    SchemaError,
    UnknownFormatterError,
    DuplicateFieldError,
    SchemaLoadError,
)

__version__ = "0.1.0"

__all__ = [
    "FormatterRegistry",
    "FieldError",
    "RecordTransformer",
    "TransformResult",
    "transform_batch",
    "transform_frame",
    "FieldDeclaration",
    "Schema",
    "SchemaBuilder",
    "SchemaLoader",
    "schema_from_dict",
    "Reporter",
    "ReportEntry",
    "RunStats",
    "ImportaError",
    "SchemaError",
    "UnknownFormatterError",
    "DuplicateFieldError",
    "SchemaLoadError",
    "__version__",
]
