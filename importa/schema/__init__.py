"""
Schema module - field declarations, the schema builder and YAML loading.
"""
from importa.schema.fields import FieldDeclaration, Schema, SchemaBuilder, REQUIRED_MESSAGE
from importa.schema.loader import SchemaLoader, schema_from_dict

__all__ = [
    "FieldDeclaration",
    "Schema",
    "SchemaBuilder",
    "REQUIRED_MESSAGE",
    "SchemaLoader",
    "schema_from_dict",
]
