"""Form document reading and writing service."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from typing import Any

from schema_form_converter.schema_management.schema_models import Fqn

from .form_models import (
    FIELD_TYPE_CLASSES,
    ArrayFieldType,
    EnumFieldType,
    EnumSymbol,
    FieldKind,
    FieldType,
    FormField,
    FqnVersion,
    InputType,
    RecordFieldType,
    UnionFieldType,
)

_NESTED_ATTRIBUTES = frozenset(
    {"fields", "item", "acceptable_values", "symbols", "dependencies", "input_type"}
)


class FormModelError(Exception):
    """Raised when a form document is malformed."""


def form_to_json(field_type: FieldType | None) -> Any:
    """Convert a form tree into a JSON tree tagged by field kind."""
    if field_type is None:
        return None
    node: dict[str, Any] = {"kind": field_type.kind.value}
    for attribute in dataclasses.fields(field_type):
        value = getattr(field_type, attribute.name)
        if value is None:
            continue
        if attribute.name == "fields":
            node["fields"] = [_form_field_to_json(item) for item in value]
        elif attribute.name in ("item", "default_value") and not _is_scalar(value):
            node[attribute.name] = form_to_json(value)
        elif attribute.name == "acceptable_values":
            node["acceptable_values"] = [form_to_json(item) for item in value]
        elif attribute.name == "symbols":
            node["symbols"] = [_omit_none(dataclasses.asdict(symbol)) for symbol in value]
        elif attribute.name == "dependencies":
            node["dependencies"] = [
                {"fqn": str(dependency.fqn), "version": dependency.version} for dependency in value
            ]
        elif attribute.name == "input_type":
            node["input_type"] = value.value
        else:
            node[attribute.name] = value
    return node


def form_from_json(tree: Any) -> FieldType | None:
    """Rebuild a form tree from its JSON tree."""
    if tree is None:
        return None
    if not isinstance(tree, Mapping):
        raise FormModelError("Form nodes must be objects.")
    try:
        kind = FieldKind(tree.get("kind"))
    except ValueError as exc:
        raise FormModelError(f"Unknown form node kind: {tree.get('kind')!r}") from exc

    cls = FIELD_TYPE_CLASSES[kind]
    known = {attribute.name for attribute in dataclasses.fields(cls)}
    values = {
        key: value
        for key, value in tree.items()
        if key in known and key not in _NESTED_ATTRIBUTES and key != "default_value"
    }
    if "default_value" in tree:
        values["default_value"] = (
            form_from_json(tree["default_value"])
            if cls is UnionFieldType
            else tree["default_value"]
        )
    if cls is RecordFieldType:
        values["fields"] = [_form_field_from_json(item) for item in _list(tree, "fields")]
        if tree.get("dependencies") is not None:
            values["dependencies"] = [
                _dependency_from_json(item) for item in _list(tree, "dependencies")
            ]
    elif cls is EnumFieldType:
        values["symbols"] = [_symbol_from_json(item) for item in _list(tree, "symbols")]
    elif cls is ArrayFieldType:
        values["item"] = form_from_json(tree.get("item"))
    elif cls is UnionFieldType:
        values["acceptable_values"] = [
            form_from_json(item) for item in _list(tree, "acceptable_values")
        ]
    elif "input_type" in tree and tree["input_type"] is not None:
        try:
            values["input_type"] = InputType(tree["input_type"])
        except ValueError as exc:
            raise FormModelError(f"Unknown input type: {tree['input_type']!r}") from exc

    try:
        return cls(**values)
    except TypeError as exc:
        raise FormModelError(f"Malformed {kind.value} form node: {exc}") from exc


def read_form_text(text: str) -> FieldType | None:
    """Parse form JSON text."""
    try:
        tree = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FormModelError(f"Invalid form JSON: {exc}") from exc
    return form_from_json(tree)


def write_form_text(field_type: FieldType | None, *, pretty: bool = True) -> str:
    """Serialize a form tree to JSON text."""
    tree = form_to_json(field_type)
    if pretty:
        return json.dumps(tree, indent=2)
    return json.dumps(tree, separators=(",", ":"))


def _form_field_to_json(form_field: FormField) -> dict[str, Any]:
    node = _omit_none(
        {
            attribute.name: getattr(form_field, attribute.name)
            for attribute in dataclasses.fields(form_field)
            if attribute.name != "field_type"
        }
    )
    node["field_type"] = form_to_json(form_field.field_type)
    return node


def _form_field_from_json(tree: Any) -> FormField:
    if not isinstance(tree, Mapping) or not isinstance(tree.get("field_name"), str):
        raise FormModelError("Form fields must be objects with a field_name.")
    known = {attribute.name for attribute in dataclasses.fields(FormField)}
    values = {key: value for key, value in tree.items() if key in known and key != "field_type"}
    return FormField(field_type=form_from_json(tree.get("field_type")), **values)


def _symbol_from_json(tree: Any) -> EnumSymbol:
    if not isinstance(tree, Mapping) or not isinstance(tree.get("symbol"), str):
        raise FormModelError("Enum symbols must be objects with a textual symbol.")
    return EnumSymbol(symbol=tree["symbol"], display_name=tree.get("display_name"))


def _dependency_from_json(tree: Any) -> FqnVersion:
    if not isinstance(tree, Mapping) or not isinstance(tree.get("fqn"), str):
        raise FormModelError("Dependencies must be objects with a textual fqn.")
    version = tree.get("version")
    if isinstance(version, bool) or not isinstance(version, int):
        raise FormModelError(f"Dependency {tree['fqn']} requires an integer version.")
    return FqnVersion(fqn=Fqn.parse(tree["fqn"]), version=version)


def _list(tree: Mapping[str, Any], key: str) -> list[Any]:
    value = tree.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise FormModelError(f"Form attribute '{key}' must be a list.")
    return value


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def _omit_none(values: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}
