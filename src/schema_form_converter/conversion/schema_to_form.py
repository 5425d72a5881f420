"""Schema to form conversion service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from schema_form_converter.form_model.form_models import (
    ArrayFieldType,
    BooleanFieldType,
    BytesFieldType,
    DoubleFieldType,
    EnumFieldType,
    EnumSymbol,
    FieldKind,
    FieldType,
    FixedFieldType,
    FloatFieldType,
    FormField,
    FqnVersion,
    InputType,
    IntegerFieldType,
    LongFieldType,
    NamedReferenceFieldType,
    RecordFieldType,
    StringFieldType,
    UnionFieldType,
)
from schema_form_converter.form_model.form_template import (
    ENUM_SYMBOL_SHAPE,
    FIELD_SHAPE,
    FormShape,
    FormShapeCatalog,
    FormTemplateError,
)
from schema_form_converter.schema_management.constants import (
    BY_DEFAULT,
    DEPENDENCIES,
    DESCRIPTION,
    DISPLAY_NAME,
    DISPLAY_NAMES,
    DISPLAY_PROMPT,
    FQN,
    INPUT_TYPE,
    KEY_INDEX,
    MAX_LENGTH,
    MIN_ROW_COUNT,
    VERSION,
    WEIGHT,
)
from schema_form_converter.schema_management.name_validation import (
    validate_enum_symbol,
    validate_fqn,
)
from schema_form_converter.schema_management.schema_models import (
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

from .conversion_contracts import ConversionHooks, StructuralError
from .default_values import apply_json_default
from .named_type_registry import EmittedTypeNames

_LOGGER = logging.getLogger(__name__)

_PRIMITIVE_FIELD_TYPES: dict[SchemaType, type] = {
    SchemaType.STRING: StringFieldType,
    SchemaType.INT: IntegerFieldType,
    SchemaType.LONG: LongFieldType,
    SchemaType.FLOAT: FloatFieldType,
    SchemaType.DOUBLE: DoubleFieldType,
    SchemaType.BOOLEAN: BooleanFieldType,
    SchemaType.BYTES: BytesFieldType,
}
_MAX_LENGTH_KINDS = frozenset(
    {FieldKind.STRING, FieldKind.INTEGER, FieldKind.LONG, FieldKind.FLOAT, FieldKind.DOUBLE}
)


@dataclass(frozen=True)
class _SchemaToFormContext:
    """Read-only settings shared by one schema-to-form pass."""

    catalog: FormShapeCatalog
    ctl_enabled: bool
    hooks: ConversionHooks
    root_namespace: str


def convert_schema_to_form(
    schema: Schema,
    *,
    catalog: FormShapeCatalog,
    ctl_enabled: bool = False,
    hooks: ConversionHooks | None = None,
    emitted: EmittedTypeNames | None = None,
) -> FieldType | None:
    """Build the form tree of ``schema``.

    Returns None for the null type. Types already listed in ``emitted``
    become named references.
    """
    root_namespace = ""
    if isinstance(schema, (RecordSchema, EnumSchema, FixedSchema)):
        root_namespace = schema.namespace or ""
    context = _SchemaToFormContext(
        catalog=catalog,
        ctl_enabled=ctl_enabled,
        hooks=hooks or ConversionHooks(),
        root_namespace=root_namespace,
    )
    return _type_to_form(
        schema,
        context=context,
        emitted=emitted if emitted is not None else EmittedTypeNames(),
        is_root=True,
    )


def _type_to_form(
    schema: Schema,
    *,
    context: _SchemaToFormContext,
    emitted: EmittedTypeNames,
    is_root: bool,
) -> FieldType | None:
    field_type: FieldType
    if isinstance(schema, NullSchema):
        return None
    if isinstance(schema, PrimitiveSchema):
        if schema.schema_type not in _PRIMITIVE_FIELD_TYPES:
            raise StructuralError(f"Unsupported schema type: {schema.schema_type.value}")
        field_type = _PRIMITIVE_FIELD_TYPES[schema.schema_type]()
    elif isinstance(schema, (RecordSchema, EnumSchema, FixedSchema)):
        field_type = _named_type_to_form(schema, context=context, emitted=emitted, is_root=is_root)
    elif isinstance(schema, ArraySchema):
        field_type = ArrayFieldType(
            item=_type_to_form(schema.items, context=context, emitted=emitted, is_root=False)
        )
    elif isinstance(schema, UnionSchema):
        branches: list[FieldType] = []
        for branch in schema.types:
            if isinstance(branch, NullSchema):
                continue
            converted = _type_to_form(branch, context=context, emitted=emitted, is_root=False)
            if converted is not None:
                branches.append(converted)
        field_type = UnionFieldType(acceptable_values=branches)
    else:
        raise StructuralError(f"Unsupported schema node: {schema!r}")

    _shape(context, field_type.kind)
    if context.hooks.on_form_type is not None:
        context.hooks.on_form_type(field_type, schema)
    return field_type


def _named_type_to_form(
    schema: NamedSchema,
    *,
    context: _SchemaToFormContext,
    emitted: EmittedTypeNames,
    is_root: bool,
) -> FieldType:
    fqn = schema.fqn
    if fqn in emitted:
        return NamedReferenceFieldType(fqn=str(fqn))
    validate_fqn(fqn)
    emitted.register(fqn)

    namespace = schema.namespace or None
    if not is_root and (namespace or "") == context.root_namespace:
        namespace = None

    if isinstance(schema, FixedSchema):
        return FixedFieldType(record_name=schema.name, record_namespace=namespace, size=schema.size)
    if isinstance(schema, EnumSchema):
        symbols = []
        for symbol in schema.symbols:
            validate_enum_symbol(symbol)
            symbols.append(EnumSymbol(symbol=symbol))
        return EnumFieldType(record_name=schema.name, record_namespace=namespace, symbols=symbols)
    return _record_to_form(schema, namespace=namespace, context=context, emitted=emitted)


def _record_to_form(
    schema: RecordSchema,
    *,
    namespace: str | None,
    context: _SchemaToFormContext,
    emitted: EmittedTypeNames,
) -> RecordFieldType:
    shape = _shape(context, FieldKind.RECORD)
    seen_names: set[str] = set()
    fields: list[FormField] = []
    for schema_field in schema.fields:
        lowered = schema_field.name.lower()
        if lowered in seen_names:
            raise StructuralError(f"Duplicate field name: {lowered}")
        seen_names.add(lowered)
        fields.append(_field_to_form(schema_field, context=context, emitted=emitted))

    record = RecordFieldType(record_name=schema.name, record_namespace=namespace, fields=fields)
    if shape.supports("display_name"):
        record.display_name = _text_prop(schema.props, DISPLAY_NAME)
    if shape.supports("description"):
        record.description = _text_prop(schema.props, DESCRIPTION)
    if context.ctl_enabled:
        if shape.supports("version"):
            record.version = _int_prop(schema.props, VERSION)
        if shape.supports("dependencies") and isinstance(schema.props.get(DEPENDENCIES), list):
            record.dependencies = _dependencies_from_props(schema.props[DEPENDENCIES], schema.fqn)
    _LOGGER.debug("Converted record %s with %d fields", schema.fqn, len(fields))
    return record


def _field_to_form(
    schema_field: SchemaField,
    *,
    context: _SchemaToFormContext,
    emitted: EmittedTypeNames,
) -> FormField:
    field_shape = _shape(context, FIELD_SHAPE)
    props = schema_field.props
    form_field = FormField(field_name=schema_field.name)
    if field_shape.supports("optional"):
        form_field.optional = is_nullable(schema_field.type)
    if field_shape.supports("display_name"):
        form_field.display_name = _text_prop(props, DISPLAY_NAME)
    if field_shape.supports("description"):
        form_field.description = _text_prop(props, DESCRIPTION)
    if field_shape.supports("display_prompt"):
        form_field.display_prompt = _text_prop(props, DISPLAY_PROMPT)
    if field_shape.supports("weight") and isinstance(props.get(WEIGHT), float):
        form_field.weight = props[WEIGHT]
    if field_shape.supports("key_index"):
        form_field.key_index = _int_prop(props, KEY_INDEX)

    field_type = _type_to_form(schema_field.type, context=context, emitted=emitted, is_root=False)
    if field_type is not None:
        shape = _shape(context, field_type.kind)
        if shape.supports("default_value") and BY_DEFAULT in props:
            apply_json_default(field_type, props[BY_DEFAULT])
        _copy_kind_annotations(field_type, props, shape=shape, context=context)
    form_field.field_type = field_type

    if context.hooks.on_form_field is not None:
        context.hooks.on_form_field(form_field, schema_field)
    return form_field


def _copy_kind_annotations(
    field_type: FieldType,
    props: Mapping[str, Any],
    *,
    shape: FormShape,
    context: _SchemaToFormContext,
) -> None:
    if field_type.kind in _MAX_LENGTH_KINDS and shape.supports("max_length"):
        field_type.max_length = _int_prop(props, MAX_LENGTH)  # type: ignore[union-attr]
    if isinstance(field_type, StringFieldType) and shape.supports("input_type"):
        raw_input_type = _text_prop(props, INPUT_TYPE)
        if raw_input_type is not None:
            try:
                field_type.input_type = InputType(raw_input_type.lower())
            except ValueError:
                _LOGGER.debug("Ignored unknown input type %r", raw_input_type)
    elif isinstance(field_type, EnumFieldType):
        display_names = props.get(DISPLAY_NAMES)
        symbol_shape = _shape(context, ENUM_SYMBOL_SHAPE)
        if (
            symbol_shape.supports("display_name")
            and isinstance(display_names, list)
            and len(display_names) == len(field_type.symbols)
        ):
            for symbol, display_name in zip(field_type.symbols, display_names, strict=True):
                symbol.display_name = str(display_name)
    elif isinstance(field_type, ArrayFieldType) and shape.supports("min_row_count"):
        field_type.min_row_count = _int_prop(props, MIN_ROW_COUNT)


def _dependencies_from_props(entries: list[Any], owner: Fqn) -> list[FqnVersion]:
    dependencies: list[FqnVersion] = []
    for entry in entries:
        if not isinstance(entry, Mapping) or not isinstance(entry.get(FQN), str):
            raise StructuralError(f"Dependency of {owner} must define a textual fqn.")
        version = entry.get(VERSION)
        if isinstance(version, bool) or not isinstance(version, int):
            raise StructuralError(
                f"Dependency {entry[FQN]} of {owner} requires an integer version."
            )
        dependencies.append(FqnVersion(fqn=Fqn.parse(entry[FQN]), version=version))
    return dependencies


def _shape(context: _SchemaToFormContext, name: str | FieldKind) -> FormShape:
    try:
        return context.catalog.shape(name)
    except FormTemplateError as exc:
        raise StructuralError(str(exc)) from exc


def _text_prop(props: Mapping[str, Any], key: str) -> str | None:
    value = props.get(key)
    return value if isinstance(value, str) else None


def _int_prop(props: Mapping[str, Any], key: str) -> int | None:
    value = props.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value
