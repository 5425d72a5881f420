"""Schema document writing service."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .constants import DEPENDENCIES, FQN
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
    UnionSchema,
)


@dataclass
class _WritingState:
    """Names already written to the output document."""

    written: set[str] = field(default_factory=set)


def schema_to_json(schema: Schema, *, external_fqns: Iterable[Fqn | str] = ()) -> Any:
    """Convert a canonical schema into its JSON tree.

    Named types listed in ``external_fqns`` are treated as defined elsewhere
    and are always written by name.
    """
    state = _WritingState(written={str(fqn) for fqn in external_fqns})
    return _write_node(schema, namespace=None, state=state)


def write_schema_text(schema: Schema, *, pretty: bool = False) -> str:
    """Serialize a schema document, keeping declared dependency types by reference."""
    external: list[str] = []
    if isinstance(schema, RecordSchema):
        for entry in schema.props.get(DEPENDENCIES) or ():
            if not isinstance(entry, Mapping) or not isinstance(entry.get(FQN), str):
                continue
            dependency = Fqn.parse(entry[FQN])
            if dependency != schema.fqn and find_named_type(schema, dependency) is not None:
                external.append(str(dependency))
    tree = schema_to_json(schema, external_fqns=external)
    if pretty:
        return json.dumps(tree, indent=2)
    return json.dumps(tree, separators=(",", ":"))


def find_named_type(schema: Schema, fqn: Fqn) -> NamedSchema | None:
    """Find a named type by FQN anywhere below ``schema``."""
    return _find_named_type(schema, fqn, visited=set())


def _find_named_type(schema: Schema, fqn: Fqn, *, visited: set[Fqn]) -> NamedSchema | None:
    if isinstance(schema, ArraySchema):
        return _find_named_type(schema.items, fqn, visited=visited)
    if isinstance(schema, UnionSchema):
        for branch in schema.types:
            found = _find_named_type(branch, fqn, visited=visited)
            if found is not None:
                return found
        return None
    if isinstance(schema, (RecordSchema, EnumSchema, FixedSchema)):
        if schema.fqn == fqn:
            return schema
        if not isinstance(schema, RecordSchema) or schema.fqn in visited:
            return None
        visited.add(schema.fqn)
        for record_field in schema.fields:
            found = _find_named_type(record_field.type, fqn, visited=visited)
            if found is not None:
                return found
    return None


def _write_node(schema: Schema, *, namespace: str | None, state: _WritingState) -> Any:
    if isinstance(schema, (PrimitiveSchema, NullSchema)):
        if schema.props:
            return {"type": schema.schema_type.value, **schema.props}
        return schema.schema_type.value
    if isinstance(schema, ArraySchema):
        items = _write_node(schema.items, namespace=namespace, state=state)
        return {"type": "array", "items": items, **schema.props}
    if isinstance(schema, UnionSchema):
        return [_write_node(branch, namespace=namespace, state=state) for branch in schema.types]
    return _write_named(schema, namespace=namespace, state=state)


def _write_named(schema: NamedSchema, *, namespace: str | None, state: _WritingState) -> Any:
    own_namespace = schema.namespace or None
    key = str(schema.fqn)
    if key in state.written:
        if own_namespace == namespace:
            return schema.name
        return key
    state.written.add(key)

    node: dict[str, Any] = {"type": schema.schema_type.value, "name": schema.name}
    if own_namespace != namespace:
        node["namespace"] = own_namespace or ""
    if isinstance(schema, RecordSchema):
        node["fields"] = [
            {
                "name": record_field.name,
                "type": _write_node(record_field.type, namespace=own_namespace, state=state),
                **record_field.props,
            }
            for record_field in schema.fields
        ]
    elif isinstance(schema, EnumSchema):
        node["symbols"] = list(schema.symbols)
    else:
        node["size"] = schema.size
    node.update(schema.props)
    return node
