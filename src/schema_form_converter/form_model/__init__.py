"""Form model exports."""

from .field_ordering import normalize_field_order
from .form_models import (
    ArrayFieldType,
    BooleanFieldType,
    BytesFieldType,
    DoubleFieldType,
    EnumFieldType,
    EnumSymbol,
    FieldAccess,
    FieldKind,
    FieldType,
    FixedFieldType,
    FloatFieldType,
    FormField,
    FqnVersion,
    InputType,
    IntegerFieldType,
    LongFieldType,
    NamedFieldType,
    NamedReferenceFieldType,
    RecordFieldType,
    StringFieldType,
    UnionFieldType,
)
from .form_serialization import (
    FormModelError,
    form_from_json,
    form_to_json,
    read_form_text,
    write_form_text,
)
from .form_template import (
    FormShape,
    FormShapeCatalog,
    FormTemplateError,
    ShapeAttribute,
    load_form_template,
)

__all__ = [
    "ArrayFieldType",
    "BooleanFieldType",
    "BytesFieldType",
    "DoubleFieldType",
    "EnumFieldType",
    "EnumSymbol",
    "FieldAccess",
    "FieldKind",
    "FieldType",
    "FixedFieldType",
    "FloatFieldType",
    "FormField",
    "FqnVersion",
    "InputType",
    "IntegerFieldType",
    "LongFieldType",
    "NamedFieldType",
    "NamedReferenceFieldType",
    "RecordFieldType",
    "StringFieldType",
    "UnionFieldType",
    "normalize_field_order",
    "FormModelError",
    "form_from_json",
    "form_to_json",
    "read_form_text",
    "write_form_text",
    "FormShape",
    "FormShapeCatalog",
    "FormTemplateError",
    "ShapeAttribute",
    "load_form_template",
]
