"""
Core plumbing shared by every importa module: settings, logging, clock, errors.
"""
from importa.core.config import ImportaSettings, settings
from importa.core.clock import Clock, local_now
from importa.core.errors import (
    ImportaError,
    SchemaError,
    UnknownFormatterError,
    DuplicateFieldError,
    SchemaLoadError,
)
from importa.core.logging_config import setup_logger

__all__ = [
    "ImportaSettings",
    "settings",
    "Clock",
    "local_now",
    "ImportaError",
    "SchemaError",
    "UnknownFormatterError",
    "DuplicateFieldError",
    "SchemaLoadError",
    "setup_logger",
]
