"""Schema management exports."""

from .name_validation import NamingError, SchemaError, validate_enum_symbol, validate_fqn
from .schema_models import (
    ArraySchema,
    EnumSchema,
    FixedSchema,
    Fqn,
    NamedSchema,
    NullSchema,
    PrimitiveSchema,
    RecordSchema,
    Schema,
    SchemaField,
    SchemaType,
    UnionSchema,
    is_nullable,
)
from .schema_reading import parse_schema_text, parse_schema_tree, read_dependency_fqns
from .schema_writing import find_named_type, schema_to_json, write_schema_text

__all__ = [
    "ArraySchema",
    "EnumSchema",
    "FixedSchema",
    "Fqn",
    "NamedSchema",
    "NullSchema",
    "PrimitiveSchema",
    "RecordSchema",
    "Schema",
    "SchemaField",
    "SchemaType",
    "UnionSchema",
    "is_nullable",
    "SchemaError",
    "NamingError",
    "validate_fqn",
    "validate_enum_symbol",
    "parse_schema_text",
    "parse_schema_tree",
    "read_dependency_fqns",
    "schema_to_json",
    "write_schema_text",
    "find_named_type",
]
