"""Canonical schema entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, TypeAlias


class SchemaType(str, Enum):
    """Closed set of canonical schema node types."""

    NULL = "null"
    BOOLEAN = "boolean"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    BYTES = "bytes"
    STRING = "string"
    RECORD = "record"
    ENUM = "enum"
    FIXED = "fixed"
    ARRAY = "array"
    UNION = "union"


PRIMITIVE_TYPES: frozenset[SchemaType] = frozenset(
    {
        SchemaType.BOOLEAN,
        SchemaType.INT,
        SchemaType.LONG,
        SchemaType.FLOAT,
        SchemaType.DOUBLE,
        SchemaType.BYTES,
        SchemaType.STRING,
    }
)
NAMED_TYPES: frozenset[SchemaType] = frozenset(
    {SchemaType.RECORD, SchemaType.ENUM, SchemaType.FIXED}
)


@dataclass(frozen=True)
class Fqn:
    """Fully-qualified name of a named type."""

    namespace: str | None
    name: str

    @staticmethod
    def parse(text: str) -> Fqn:
        namespace, _, name = text.rpartition(".")
        return Fqn(namespace=namespace or None, name=name)

    def __str__(self) -> str:
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name


@dataclass(eq=False)
class PrimitiveSchema:
    """Leaf schema of one of the primitive types."""

    schema_type: SchemaType
    props: dict[str, Any] = field(default_factory=dict)


@dataclass(eq=False)
class NullSchema:
    """The null type; marks optionality inside unions."""

    props: dict[str, Any] = field(default_factory=dict)

    schema_type: ClassVar[SchemaType] = SchemaType.NULL


@dataclass(eq=False)
class SchemaField:
    """Record member with its type and JSON annotations."""

    name: str
    type: Schema
    props: dict[str, Any] = field(default_factory=dict)


@dataclass(eq=False)
class RecordSchema:
    """Named record type.

    Fields are attached after the record is registered so that recursive
    field types can refer back to it.
    """

    name: str
    namespace: str | None = None
    fields: list[SchemaField] = field(default_factory=list)
    props: dict[str, Any] = field(default_factory=dict)

    schema_type: ClassVar[SchemaType] = SchemaType.RECORD

    @property
    def fqn(self) -> Fqn:
        return Fqn(namespace=self.namespace or None, name=self.name)


@dataclass(eq=False)
class EnumSchema:
    """Named enumeration type."""

    name: str
    namespace: str | None = None
    symbols: list[str] = field(default_factory=list)
    props: dict[str, Any] = field(default_factory=dict)

    schema_type: ClassVar[SchemaType] = SchemaType.ENUM

    @property
    def fqn(self) -> Fqn:
        return Fqn(namespace=self.namespace or None, name=self.name)


@dataclass(eq=False)
class FixedSchema:
    """Named fixed-length byte block."""

    name: str
    namespace: str | None = None
    size: int = 0
    props: dict[str, Any] = field(default_factory=dict)

    schema_type: ClassVar[SchemaType] = SchemaType.FIXED

    @property
    def fqn(self) -> Fqn:
        return Fqn(namespace=self.namespace or None, name=self.name)


@dataclass(eq=False)
class ArraySchema:
    """Array of a single element type."""

    items: Schema
    props: dict[str, Any] = field(default_factory=dict)

    schema_type: ClassVar[SchemaType] = SchemaType.ARRAY


@dataclass(eq=False)
class UnionSchema:
    """Ordered union of branch types; never directly nests another union."""

    types: list[Schema] = field(default_factory=list)

    schema_type: ClassVar[SchemaType] = SchemaType.UNION


NamedSchema: TypeAlias = RecordSchema | EnumSchema | FixedSchema
Schema: TypeAlias = (
    PrimitiveSchema
    | NullSchema
    | RecordSchema
    | EnumSchema
    | FixedSchema
    | ArraySchema
    | UnionSchema
)


def is_nullable(schema: Schema) -> bool:
    """Return True for the null type or a union with a null branch."""
    if isinstance(schema, NullSchema):
        return True
    if isinstance(schema, UnionSchema):
        return any(isinstance(branch, NullSchema) for branch in schema.types)
    return False
