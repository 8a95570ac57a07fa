"""
Schema loader - builds a Schema from YAML configuration.

Format:

    formatters:                 # optional, name -> "package.module:attr"
      upper: "builtins:str.upper"
    fields:
      - first_name              # bare name: string formatter, required
      - name: dob
        type: date
      - name: phone_number
        type: phone
        optional: true
        refine: "package.module:function"
"""
import importlib
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import yaml

from importa.core.errors import SchemaError, SchemaLoadError
from importa.schema.fields import Schema, SchemaBuilder
from importa.transform.formatters import FormatterRegistry

logger = logging.getLogger(__name__)

FIELD_KEYS = {"name", "type", "optional", "refine"}


def import_callable(reference: str) -> Callable[[Any], Any]:
    """
    Resolve "package.module:attr.path" (or "package.module.attr") to a callable.

    Raises:
        SchemaLoadError: If the module or attribute is missing or not callable
    """
    if ":" in reference:
        module_path, attr_path = reference.split(":", 1)
    else:
        module_path, _, attr_path = reference.rpartition(".")
    if not module_path or not attr_path:
        raise SchemaLoadError(f"Invalid callable reference: {reference!r}")

    try:
        target: Any = importlib.import_module(module_path)
    except ImportError as e:
        raise SchemaLoadError(f"Cannot import module for {reference!r}: {e}") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError:
            raise SchemaLoadError(f"{reference!r}: {attr!r} not found") from None

    if not callable(target):
        raise SchemaLoadError(f"{reference!r} is not callable")
    return target


def schema_from_dict(data: Dict[str, Any], registry: Optional[FormatterRegistry] = None) -> Schema:
    """
    Build a schema from parsed configuration.

    Args:
        data: Mapping with a "fields" list and an optional "formatters" mapping
        registry: Starting registry (defaults to the built-ins)

    Raises:
        SchemaLoadError: If the structure is malformed
        UnknownFormatterError: If a field names an unregistered formatter
    """
    if not isinstance(data, dict):
        raise SchemaLoadError("Schema document must be a mapping")

    fields = data.get("fields")
    if not isinstance(fields, list) or not fields:
        raise SchemaLoadError("Schema must define a non-empty 'fields' list")

    builder = SchemaBuilder(registry=registry)

    formatters = data.get("formatters") or {}
    if not isinstance(formatters, dict):
        raise SchemaLoadError("'formatters' must be a mapping of name -> callable reference")
    for name, reference in formatters.items():
        builder.formatter(str(name), import_callable(str(reference)))

    for position, entry in enumerate(fields):
        if isinstance(entry, str):
            entry = {"name": entry}
        if not isinstance(entry, dict) or "name" not in entry:
            raise SchemaLoadError(f"Field #{position} must be a name or a mapping with 'name'")

        unknown = set(entry) - FIELD_KEYS
        if unknown:
            raise SchemaLoadError(f"Field '{entry['name']}': unknown keys {sorted(unknown)}")

        optional = entry.get("optional", False)
        if not isinstance(optional, bool):
            raise SchemaLoadError(f"Field '{entry['name']}': 'optional' must be true or false, got {optional!r}")

        refine = entry.get("refine")
        builder.field(
            str(entry["name"]),
            str(entry.get("type", "string")),
            optional=optional,
            refine=import_callable(str(refine)) if refine else None,
        )

    return builder.build()


class SchemaLoader:
    """
    Loader for YAML schema files.

    Caches the parsed schema in memory.
    """

    def __init__(self, schema_path: Union[str, Path], registry: Optional[FormatterRegistry] = None):
        self.schema_path = Path(schema_path)
        self.registry = registry
        self._cache: Optional[Schema] = None

    def load(self, force_reload: bool = False) -> Schema:
        """
        Load and build the schema.

        Args:
            force_reload: If True, bypass cache and reload from disk
        """
        if self._cache and not force_reload:
            return self._cache

        try:
            with open(self.schema_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise SchemaLoadError(f"Cannot read schema file {self.schema_path}: {e}") from e
        except yaml.YAMLError as e:
            raise SchemaLoadError(f"Invalid YAML in {self.schema_path}: {e}") from e

        try:
            schema = schema_from_dict(data, registry=self.registry)
        except SchemaError:
            logger.error("Schema %s is invalid", self.schema_path)
            raise

        logger.info("Loaded schema %s (%s fields)", self.schema_path, len(schema))
        self._cache = schema
        return schema
