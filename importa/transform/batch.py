"""
Batch runner - transform an ordered sequence of records under one reporter.

Invalid rows are dropped from the output and kept in the reporter with
their 0-based row index. The reporter's ``report()`` runs once at the end.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

import polars as pl

from importa.report.reporter import Reporter
from importa.transform import formatters
from importa.transform.record import RecordTransformer

if TYPE_CHECKING:
    from importa.schema.fields import Record, Schema

logger = logging.getLogger(__name__)

# Column types for built-in formatters; anything else is left to inference.
FRAME_DTYPES = {
    formatters.format_string: pl.Utf8,
    formatters.format_date: pl.Utf8,
    formatters.format_phone: pl.Utf8,
    formatters.format_integer: pl.Int64,
    formatters.strict_integer: pl.Int64,
    formatters.format_float: pl.Float64,
    formatters.strict_float: pl.Float64,
    formatters.format_boolean: pl.Boolean,
}


def frame_dtypes(schema: Schema) -> Dict[str, Any]:
    """Polars dtype per field whose formatter is a built-in with a fixed output type."""
    dtypes = {}
    for declaration in schema:
        fn = declaration.custom or schema.registry.resolve(declaration.formatter)
        dtype = FRAME_DTYPES.get(fn)
        if dtype is not None:
            dtypes[declaration.name] = dtype
    return dtypes


def transform_batch(
    schema: Schema,
    records: Iterable[Record],
    reporter: Optional[Reporter] = None,
) -> List[List[Any]]:
    """
    Transform records in order and keep the values of the valid ones.

    Args:
        schema: Field schema to apply
        records: Input records; iterated once
        reporter: Reporter to accumulate into. A new one is created if omitted.

    Returns:
        Value lists of valid rows, in input order
    """
    reporter = reporter if reporter is not None else Reporter()
    results: List[List[Any]] = []

    logger.info("Starting batch with %s fields", len(schema))

    seen = 0
    for index, record in enumerate(records):
        seen += 1
        transformer = RecordTransformer(schema, record, row_number=index, reporter=reporter)
        result = transformer.transform()
        if transformer.valid():
            results.append(result.values)

    logger.info("Batch completed: %s rows read, %s valid", seen, len(results))

    reporter.report()
    return results


def transform_frame(
    schema: Schema,
    df: pl.DataFrame,
    reporter: Optional[Reporter] = None,
) -> pl.DataFrame:
    """
    Transform a Polars DataFrame row by row.

    Args:
        schema: Field schema to apply
        df: Input frame; column names are record keys
        reporter: Reporter to accumulate into

    Returns:
        Frame of valid rows with one column per schema field, in declaration
        order. Fields with a built-in formatter get its dtype (see
        FRAME_DTYPES) whether or not any row survived. Other fields are
        inferred from the values, and are Utf8 when the frame is empty.
    """
    columns = list(schema.field_names)
    dtypes = frame_dtypes(schema)
    rows = transform_batch(schema, df.iter_rows(named=True), reporter=reporter)

    if not rows:
        return pl.DataFrame(schema={name: dtypes.get(name, pl.Utf8) for name in columns})
    frame = pl.DataFrame(rows, schema=columns, orient="row", infer_schema_length=None)
    return frame.cast(dtypes)
