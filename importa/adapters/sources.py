"""
Record sources - turn tabular files into the string-keyed records importa consumes.
"""
from pathlib import Path
from typing import Any, Dict, List, Union
import logging

import polars as pl

logger = logging.getLogger(__name__)


def read_csv_records(file_path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Read a CSV file into a list of records.

    Every column is read as text; empty cells become None.

    Args:
        file_path: Path to a .csv file with a header row

    Returns:
        One dict per data row, in file order
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    if file_path.suffix.lower() != ".csv":
        raise ValueError(f"Unsupported file format: {file_path.suffix}")

    df = pl.read_csv(file_path, infer_schema_length=0)
    logger.info("Loaded %s rows × %s columns from %s", df.height, df.width, file_path)
    return df.to_dicts()
