"""Form model entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, TypeAlias

from schema_form_converter.schema_management.schema_models import Fqn


class FieldKind(str, Enum):
    """Closed set of form field-type kinds."""

    STRING = "string"
    INTEGER = "integer"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    BYTES = "bytes"
    FIXED = "fixed"
    ENUM = "enum"
    RECORD = "record"
    ARRAY = "array"
    UNION = "union"
    NAMED_REFERENCE = "named_reference"


class InputType(str, Enum):
    """How a string field is rendered for input."""

    PLAIN = "plain"
    PASSWORD = "password"


class FieldAccess(str, Enum):
    """Editing access of a form attribute."""

    EDITABLE = "editable"
    READ_ONLY = "read_only"
    HIDDEN = "hidden"


@dataclass
class StringFieldType:
    max_length: int | None = None
    input_type: InputType | None = None
    default_value: str | None = None

    kind: ClassVar[FieldKind] = FieldKind.STRING


@dataclass
class IntegerFieldType:
    max_length: int | None = None
    default_value: int | None = None

    kind: ClassVar[FieldKind] = FieldKind.INTEGER


@dataclass
class LongFieldType:
    max_length: int | None = None
    default_value: int | None = None

    kind: ClassVar[FieldKind] = FieldKind.LONG


@dataclass
class FloatFieldType:
    max_length: int | None = None
    default_value: float | None = None

    kind: ClassVar[FieldKind] = FieldKind.FLOAT


@dataclass
class DoubleFieldType:
    max_length: int | None = None
    default_value: float | None = None

    kind: ClassVar[FieldKind] = FieldKind.DOUBLE


@dataclass
class BooleanFieldType:
    default_value: bool | None = None

    kind: ClassVar[FieldKind] = FieldKind.BOOLEAN


@dataclass
class BytesFieldType:
    """Variable-length bytes; the default is base64 text."""

    default_value: str | None = None

    kind: ClassVar[FieldKind] = FieldKind.BYTES


@dataclass
class FixedFieldType:
    """Named fixed-size bytes; the default is base64 text."""

    record_name: str
    record_namespace: str | None = None
    size: int = 0
    default_value: str | None = None

    kind: ClassVar[FieldKind] = FieldKind.FIXED


@dataclass
class EnumSymbol:
    symbol: str
    display_name: str | None = None


@dataclass
class EnumFieldType:
    record_name: str
    record_namespace: str | None = None
    symbols: list[EnumSymbol] = field(default_factory=list)
    default_value: str | None = None

    kind: ClassVar[FieldKind] = FieldKind.ENUM


@dataclass(frozen=True)
class FqnVersion:
    """Versioned reference to a type defined in another schema."""

    fqn: Fqn
    version: int


@dataclass
class RecordFieldType:
    """Named record with its member fields.

    ``record_namespace`` is None when the record inherits the root namespace.
    ``version`` and ``dependencies`` are only populated in CTL mode.
    """

    record_name: str
    record_namespace: str | None = None
    version: int | None = None
    display_name: str | None = None
    description: str | None = None
    dependencies: list[FqnVersion] | None = None
    fields: list[FormField] = field(default_factory=list)

    kind: ClassVar[FieldKind] = FieldKind.RECORD


@dataclass
class ArrayFieldType:
    item: FieldType | None = None
    min_row_count: int | None = None

    kind: ClassVar[FieldKind] = FieldKind.ARRAY


@dataclass
class UnionFieldType:
    """Union of acceptable branches; null branches are folded into ``FormField.optional``.

    ``default_value`` is a copy of the selected branch carrying its own default.
    """

    acceptable_values: list[FieldType] = field(default_factory=list)
    default_value: FieldType | None = None

    kind: ClassVar[FieldKind] = FieldKind.UNION


@dataclass
class NamedReferenceFieldType:
    """Stand-in for a named type materialized earlier in the same tree."""

    fqn: str

    kind: ClassVar[FieldKind] = FieldKind.NAMED_REFERENCE


@dataclass
class FormField:
    """Record member as shown in the form."""

    field_name: str
    field_type: FieldType | None = None
    optional: bool = False
    display_name: str | None = None
    description: str | None = None
    display_prompt: str | None = None
    weight: float | None = None
    key_index: int | None = None


FieldType: TypeAlias = (
    StringFieldType
    | IntegerFieldType
    | LongFieldType
    | FloatFieldType
    | DoubleFieldType
    | BooleanFieldType
    | BytesFieldType
    | FixedFieldType
    | EnumFieldType
    | RecordFieldType
    | ArrayFieldType
    | UnionFieldType
    | NamedReferenceFieldType
)
NamedFieldType: TypeAlias = FixedFieldType | EnumFieldType | RecordFieldType

FIELD_TYPE_CLASSES: dict[FieldKind, type] = {
    FieldKind.STRING: StringFieldType,
    FieldKind.INTEGER: IntegerFieldType,
    FieldKind.LONG: LongFieldType,
    FieldKind.FLOAT: FloatFieldType,
    FieldKind.DOUBLE: DoubleFieldType,
    FieldKind.BOOLEAN: BooleanFieldType,
    FieldKind.BYTES: BytesFieldType,
    FieldKind.FIXED: FixedFieldType,
    FieldKind.ENUM: EnumFieldType,
    FieldKind.RECORD: RecordFieldType,
    FieldKind.ARRAY: ArrayFieldType,
    FieldKind.UNION: UnionFieldType,
    FieldKind.NAMED_REFERENCE: NamedReferenceFieldType,
}


def declared_fqn(field_type: NamedFieldType, root_namespace: str | None) -> Fqn:
    """FQN of a named field type, re-attaching the root namespace when elided."""
    namespace = field_type.record_namespace or root_namespace
    return Fqn(namespace=namespace or None, name=field_type.record_name)
