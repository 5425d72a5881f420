"""Form template loading service.

The template tells the converters which attributes each form shape carries.
It is read once per source and shared read-only by every converter.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from .form_models import FIELD_TYPE_CLASSES, EnumSymbol, FieldAccess, FieldKind, FormField

_LOGGER = logging.getLogger(__name__)

TEMPLATE_RESOURCE = "form_template.yaml"
FIELD_SHAPE = "field"
ENUM_SYMBOL_SHAPE = "enum_symbol"

_SHAPE_CLASSES: dict[str, type] = {
    FIELD_SHAPE: FormField,
    ENUM_SYMBOL_SHAPE: EnumSymbol,
    **{kind.value: cls for kind, cls in FIELD_TYPE_CLASSES.items()},
}
_REQUIRED_ATTRIBUTES: dict[str, tuple[str, ...]] = {
    FIELD_SHAPE: ("field_name", "field_type"),
    ENUM_SYMBOL_SHAPE: ("symbol",),
    FieldKind.FIXED.value: ("record_name", "record_namespace", "size"),
    FieldKind.ENUM.value: ("record_name", "record_namespace", "symbols"),
    FieldKind.RECORD.value: ("record_name", "record_namespace", "fields"),
    FieldKind.ARRAY.value: ("item",),
    FieldKind.UNION.value: ("acceptable_values",),
    FieldKind.NAMED_REFERENCE.value: ("fqn",),
}


class FormTemplateError(Exception):
    """Raised when the form template cannot be loaded or is malformed."""


@dataclass(frozen=True)
class ShapeAttribute:
    """One editable attribute of a form shape."""

    name: str
    display_name: str
    access: FieldAccess = FieldAccess.EDITABLE
    display_prompt: str | None = None


@dataclass(frozen=True)
class FormShape:
    """Attributes carried by one kind of form node."""

    name: str
    display_name: str
    attributes: tuple[ShapeAttribute, ...]

    def supports(self, attribute_name: str) -> bool:
        return any(attribute.name == attribute_name for attribute in self.attributes)

    def attribute(self, attribute_name: str) -> ShapeAttribute | None:
        for attribute in self.attributes:
            if attribute.name == attribute_name:
                return attribute
        return None


@dataclass(frozen=True)
class _CtlAttribute:
    attribute: ShapeAttribute
    after: str | None
    before: str | None


@dataclass(frozen=True)
class FormShapeCatalog:
    """Form shapes keyed by symbolic shape name."""

    shapes: Mapping[str, FormShape]
    ctl_attributes: Mapping[str, tuple[_CtlAttribute, ...]]

    def shape(self, name: str | FieldKind) -> FormShape:
        key = name.value if isinstance(name, FieldKind) else name
        try:
            return self.shapes[key]
        except KeyError as exc:
            raise FormTemplateError(f"Invalid form shape name: {key}") from exc

    def with_ctl_attributes(self) -> FormShapeCatalog:
        """Return a catalog whose shapes also carry the editable CTL attributes."""
        shapes = dict(self.shapes)
        for shape_name, extras in self.ctl_attributes.items():
            attributes = list(shapes[shape_name].attributes)
            for extra in extras:
                if any(attribute.name == extra.attribute.name for attribute in attributes):
                    continue
                editable = dataclasses.replace(extra.attribute, access=FieldAccess.EDITABLE)
                attributes.insert(_insertion_index(attributes, extra), editable)
            shapes[shape_name] = dataclasses.replace(
                shapes[shape_name], attributes=tuple(attributes)
            )
        return FormShapeCatalog(shapes=shapes, ctl_attributes={})


def load_form_template(path: Path | str | None = None) -> FormShapeCatalog:
    """Load the packaged template, or the one at ``path``, memoized per source."""
    source = None if path is None else str(Path(path).resolve())
    return _load_cached(source)


@lru_cache(maxsize=None)
def _load_cached(source: str | None) -> FormShapeCatalog:
    if source is None:
        text = resources.files(__package__).joinpath(TEMPLATE_RESOURCE).read_text(encoding="utf-8")
        origin = TEMPLATE_RESOURCE
    else:
        try:
            text = Path(source).read_text(encoding="utf-8")
        except OSError as exc:
            raise FormTemplateError(f"Form template not readable: {source}: {exc}") from exc
        origin = source
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise FormTemplateError(f"Failed to parse form template {origin}: {exc}") from exc

    catalog = _build_catalog(parsed, origin)
    _LOGGER.debug("Loaded form template %s with %d shapes", origin, len(catalog.shapes))
    return catalog


def _build_catalog(parsed: Any, origin: str) -> FormShapeCatalog:
    if not isinstance(parsed, Mapping) or not isinstance(parsed.get("shapes"), Mapping):
        raise FormTemplateError(f"Form template {origin} must define a shapes mapping.")

    shapes: dict[str, FormShape] = {}
    for shape_name, definition in parsed["shapes"].items():
        if shape_name not in _SHAPE_CLASSES:
            raise FormTemplateError(f"Unknown form shape '{shape_name}' in {origin}.")
        if not isinstance(definition, Mapping):
            raise FormTemplateError(f"Form shape '{shape_name}' must be a mapping.")
        attributes = tuple(
            _parse_attribute(shape_name, raw) for raw in definition.get("attributes") or ()
        )
        shapes[shape_name] = FormShape(
            name=shape_name,
            display_name=str(definition.get("display_name") or shape_name),
            attributes=attributes,
        )

    missing = [name for name in _SHAPE_CLASSES if name not in shapes]
    if missing:
        raise FormTemplateError(f"Form template {origin} lacks shapes: {', '.join(missing)}")
    for shape_name, required in _REQUIRED_ATTRIBUTES.items():
        for attribute_name in required:
            if not shapes[shape_name].supports(attribute_name):
                raise FormTemplateError(
                    f"Form shape '{shape_name}' requires attribute '{attribute_name}'."
                )

    return FormShapeCatalog(
        shapes=shapes, ctl_attributes=_parse_ctl_attributes(parsed.get("ctl_attributes"))
    )


def _parse_ctl_attributes(value: Any) -> dict[str, tuple[_CtlAttribute, ...]]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise FormTemplateError("ctl_attributes must be a mapping of shape names.")
    parsed: dict[str, tuple[_CtlAttribute, ...]] = {}
    for shape_name, entries in value.items():
        if shape_name != FieldKind.RECORD.value:
            raise FormTemplateError("CTL attributes are only defined for the record shape.")
        if not isinstance(entries, Sequence):
            raise FormTemplateError("CTL attributes must be a list.")
        parsed[shape_name] = tuple(
            _CtlAttribute(
                attribute=_parse_attribute(shape_name, entry),
                after=entry.get("after"),
                before=entry.get("before"),
            )
            for entry in entries
        )
    return parsed


def _parse_attribute(shape_name: str, raw: Any) -> ShapeAttribute:
    if not isinstance(raw, Mapping) or not isinstance(raw.get("name"), str):
        raise FormTemplateError(f"Attributes of shape '{shape_name}' must have a name.")
    name = raw["name"]
    field_names = {item.name for item in dataclasses.fields(_SHAPE_CLASSES[shape_name])}
    if name not in field_names:
        raise FormTemplateError(f"Shape '{shape_name}' has no attribute '{name}'.")
    try:
        access = FieldAccess(raw.get("access", FieldAccess.EDITABLE.value))
    except ValueError as exc:
        raise FormTemplateError(f"Invalid access for '{shape_name}.{name}'.") from exc
    return ShapeAttribute(
        name=name,
        display_name=str(raw.get("display_name") or name),
        access=access,
        display_prompt=raw.get("display_prompt"),
    )


def _insertion_index(attributes: list[ShapeAttribute], extra: _CtlAttribute) -> int:
    names = [attribute.name for attribute in attributes]
    if extra.after in names:
        return names.index(extra.after) + 1
    if extra.before in names:
        return names.index(extra.before)
    return len(attributes)
