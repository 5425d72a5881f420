"""Conversion domain exports."""

from .conversion_contracts import ConversionError, ConversionHooks, StructuralError
from .default_values import apply_json_default, default_to_json, json_integer_width
from .form_to_schema import convert_form_to_schema
from .named_type_registry import EmittedTypeNames, NamedSchemaRegistry
from .schema_form_converter import SchemaFormConverter
from .schema_to_form import convert_schema_to_form

__all__ = [
    "ConversionError",
    "ConversionHooks",
    "StructuralError",
    "apply_json_default",
    "default_to_json",
    "json_integer_width",
    "convert_form_to_schema",
    "convert_schema_to_form",
    "EmittedTypeNames",
    "NamedSchemaRegistry",
    "SchemaFormConverter",
]
