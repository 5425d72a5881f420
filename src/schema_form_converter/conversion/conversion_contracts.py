"""Conversion errors and extension contracts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from schema_form_converter.form_model.form_models import FieldType, FormField
from schema_form_converter.schema_management.schema_models import Schema, SchemaField


class ConversionError(Exception):
    """Raised when a schema or form tree cannot be converted."""


class StructuralError(ConversionError):
    """Raised when the two trees cannot be kept structurally consistent."""


@dataclass(frozen=True)
class ConversionHooks:
    """Optional callbacks invoked once per node after it is fully populated.

    Attributes:
      on_form_type: Receives each field-type built from a schema type.
      on_form_field: Receives each form field built from a schema field.
      on_schema_type: Receives each schema type built from a field-type.
      on_schema_field: Receives each schema field built from a form field.
    """

    on_form_type: Callable[[FieldType, Schema], None] | None = None
    on_form_field: Callable[[FormField, SchemaField], None] | None = None
    on_schema_type: Callable[[Schema, FieldType | None], None] | None = None
    on_schema_field: Callable[[SchemaField, FormField], None] | None = None
