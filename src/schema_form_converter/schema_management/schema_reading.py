"""Schema document reading service."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .constants import DEPENDENCIES, FQN
from .name_validation import SchemaError
from .schema_models import (
    PRIMITIVE_TYPES,
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
)

_PRIMITIVE_NAMES = {schema_type.value: schema_type for schema_type in PRIMITIVE_TYPES}
_RECORD_KEYS = frozenset({"type", "name", "namespace", "fields"})
_ENUM_KEYS = frozenset({"type", "name", "namespace", "symbols"})
_FIXED_KEYS = frozenset({"type", "name", "namespace", "size"})
_FIELD_KEYS = frozenset({"name", "type"})


@dataclass
class _ReadingState:
    """Named types known while reading one document."""

    names: dict[str, NamedSchema] = field(default_factory=dict)


def parse_schema_text(
    text: str, *, predeclared: Mapping[Fqn, NamedSchema] | None = None
) -> Schema:
    """Parse schema JSON text into a canonical schema."""
    try:
        tree = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Invalid schema JSON: {exc}") from exc
    return parse_schema_tree(tree, predeclared=predeclared)


def parse_schema_tree(
    tree: Any, *, predeclared: Mapping[Fqn, NamedSchema] | None = None
) -> Schema:
    """Build a canonical schema from an already-parsed JSON tree.

    Predeclared named types resolve like definitions that appeared earlier
    in the document, so redefining one is an error as well.
    """
    state = _ReadingState()
    for fqn, schema in (predeclared or {}).items():
        state.names[str(fqn)] = schema
    return _read_node(tree, namespace=None, state=state)


def read_dependency_fqns(tree: Any) -> list[Fqn]:
    """Return the FQNs listed in the root ``dependencies`` annotation."""
    if not isinstance(tree, Mapping):
        return []
    dependencies = tree.get(DEPENDENCIES)
    if dependencies is None:
        return []
    if not isinstance(dependencies, Sequence) or isinstance(dependencies, str):
        raise SchemaError("Schema dependencies must be a list.")
    fqns: list[Fqn] = []
    for entry in dependencies:
        if not isinstance(entry, Mapping) or not isinstance(entry.get(FQN), str):
            raise SchemaError("Schema dependency entries must define a textual fqn.")
        fqns.append(Fqn.parse(entry[FQN]))
    return fqns


def _read_node(node: Any, *, namespace: str | None, state: _ReadingState) -> Schema:
    if isinstance(node, str):
        return _read_type_name(node, namespace=namespace, state=state)
    if isinstance(node, list):
        return _read_union(node, namespace=namespace, state=state)
    if isinstance(node, Mapping):
        return _read_complex(node, namespace=namespace, state=state)
    raise SchemaError(f"Unsupported schema segment: {node!r}")


def _read_type_name(name: str, *, namespace: str | None, state: _ReadingState) -> Schema:
    if name == SchemaType.NULL.value:
        return NullSchema()
    if name in _PRIMITIVE_NAMES:
        return PrimitiveSchema(schema_type=_PRIMITIVE_NAMES[name])
    candidates = [name] if "." in name or not namespace else [f"{namespace}.{name}", name]
    for candidate in candidates:
        if candidate in state.names:
            return state.names[candidate]
    raise SchemaError(f"Undefined schema type name: {name}")


def _read_union(branches: list[Any], *, namespace: str | None, state: _ReadingState) -> Schema:
    types: list[Schema] = []
    for branch in branches:
        schema = _read_node(branch, namespace=namespace, state=state)
        if isinstance(schema, UnionSchema):
            raise SchemaError("Unions may not immediately contain other unions.")
        types.append(schema)
    return UnionSchema(types=types)


def _read_complex(
    node: Mapping[str, Any], *, namespace: str | None, state: _ReadingState
) -> Schema:
    type_value = node.get("type")
    if isinstance(type_value, (list, Mapping)):
        return _read_node(type_value, namespace=namespace, state=state)
    if not isinstance(type_value, str):
        raise SchemaError("Schema objects must declare a type.")

    if type_value in ("record", "error"):
        return _read_record(node, namespace=namespace, state=state)
    if type_value == SchemaType.ENUM.value:
        return _read_enum(node, namespace=namespace, state=state)
    if type_value == SchemaType.FIXED.value:
        return _read_fixed(node, namespace=namespace, state=state)
    if type_value == SchemaType.ARRAY.value:
        if "items" not in node:
            raise SchemaError("Array schema requires items.")
        items = _read_node(node["items"], namespace=namespace, state=state)
        return ArraySchema(items=items, props=_extra_props(node, {"type", "items"}))
    if type_value == SchemaType.NULL.value:
        return NullSchema(props=_extra_props(node, {"type"}))
    if type_value in _PRIMITIVE_NAMES:
        return PrimitiveSchema(
            schema_type=_PRIMITIVE_NAMES[type_value], props=_extra_props(node, {"type"})
        )
    if type_value == "map":
        raise SchemaError("Unsupported schema type: map")
    return _read_type_name(type_value, namespace=namespace, state=state)


def _read_record(
    node: Mapping[str, Any], *, namespace: str | None, state: _ReadingState
) -> RecordSchema:
    fqn = _declared_fqn(node, namespace)
    raw_fields = node.get("fields")
    if not isinstance(raw_fields, list):
        raise SchemaError(f"Record {fqn} requires a list of fields.")

    record = RecordSchema(
        name=fqn.name, namespace=fqn.namespace, props=_extra_props(node, _RECORD_KEYS)
    )
    _register(record, state)
    fields: list[SchemaField] = []
    for raw_field in raw_fields:
        if not isinstance(raw_field, Mapping) or not isinstance(raw_field.get("name"), str):
            raise SchemaError(f"Fields of record {fqn} must include a name.")
        if "type" not in raw_field:
            raise SchemaError(f"Field {raw_field['name']} of record {fqn} requires a type.")
        fields.append(
            SchemaField(
                name=raw_field["name"],
                type=_read_node(raw_field["type"], namespace=fqn.namespace, state=state),
                props=_extra_props(raw_field, _FIELD_KEYS),
            )
        )
    record.fields = fields
    return record


def _read_enum(
    node: Mapping[str, Any], *, namespace: str | None, state: _ReadingState
) -> EnumSchema:
    fqn = _declared_fqn(node, namespace)
    symbols = node.get("symbols")
    if not isinstance(symbols, list) or not all(isinstance(symbol, str) for symbol in symbols):
        raise SchemaError(f"Enum {fqn} requires a list of textual symbols.")
    if len(set(symbols)) != len(symbols):
        raise SchemaError(f"Enum {fqn} has duplicate symbols.")
    enum = EnumSchema(
        name=fqn.name,
        namespace=fqn.namespace,
        symbols=list(symbols),
        props=_extra_props(node, _ENUM_KEYS),
    )
    _register(enum, state)
    return enum


def _read_fixed(
    node: Mapping[str, Any], *, namespace: str | None, state: _ReadingState
) -> FixedSchema:
    fqn = _declared_fqn(node, namespace)
    size = node.get("size")
    if isinstance(size, bool) or not isinstance(size, int) or size < 0:
        raise SchemaError(f"Fixed {fqn} requires a non-negative integer size.")
    fixed = FixedSchema(
        name=fqn.name, namespace=fqn.namespace, size=size, props=_extra_props(node, _FIXED_KEYS)
    )
    _register(fixed, state)
    return fixed


def _declared_fqn(node: Mapping[str, Any], enclosing_namespace: str | None) -> Fqn:
    name = node.get("name")
    if not isinstance(name, str) or not name:
        raise SchemaError(f"Named schema of type {node.get('type')} requires a name.")
    if "." in name:
        return Fqn.parse(name)
    if "namespace" in node:
        declared = node["namespace"]
        if declared is not None and not isinstance(declared, str):
            raise SchemaError(f"Namespace of {name} must be a string.")
        return Fqn(namespace=declared or None, name=name)
    return Fqn(namespace=enclosing_namespace or None, name=name)


def _register(schema: NamedSchema, state: _ReadingState) -> None:
    key = str(schema.fqn)
    if key in state.names:
        raise SchemaError(f"Can't redefine: {key}")
    state.names[key] = schema


def _extra_props(node: Mapping[str, Any], reserved: frozenset[str] | set[str]) -> dict[str, Any]:
    return {key: value for key, value in node.items() if key not in reserved}
