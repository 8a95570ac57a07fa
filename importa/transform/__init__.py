"""
Transform module - formatters, single-record transformation and batch runs.
"""
from importa.transform.formatters import (
    BUILTIN_FORMATTERS,
    DATE_PATTERNS,
    FormatterRegistry,
    format_boolean,
    format_date,
    format_float,
    format_integer,
    format_phone,
    format_raw,
    format_string,
    safe_formatter,
)
from importa.transform.record import FieldError, RecordTransformer, TransformResult
from importa.transform.batch import transform_batch, transform_frame

__all__ = [
    "BUILTIN_FORMATTERS",
    "DATE_PATTERNS",
    "FormatterRegistry",
    "format_boolean",
    "format_date",
    "format_float",
    "format_integer",
    "format_phone",
    "format_raw",
    "format_string",
    "safe_formatter",
    "FieldError",
    "RecordTransformer",
    "TransformResult",
    "transform_batch",
    "transform_frame",
]
