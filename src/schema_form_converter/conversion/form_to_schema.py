"""Form to schema conversion service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from schema_form_converter.form_model.form_models import (
    ArrayFieldType,
    BooleanFieldType,
    BytesFieldType,
    DoubleFieldType,
    EnumFieldType,
    FieldType,
    FixedFieldType,
    FloatFieldType,
    FormField,
    IntegerFieldType,
    LongFieldType,
    NamedReferenceFieldType,
    RecordFieldType,
    StringFieldType,
    UnionFieldType,
    declared_fqn,
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
from .default_values import default_to_json
from .named_type_registry import NamedSchemaRegistry

_LOGGER = logging.getLogger(__name__)

_PRIMITIVE_SCHEMA_TYPES: dict[type, SchemaType] = {
    StringFieldType: SchemaType.STRING,
    IntegerFieldType: SchemaType.INT,
    LongFieldType: SchemaType.LONG,
    FloatFieldType: SchemaType.FLOAT,
    DoubleFieldType: SchemaType.DOUBLE,
    BooleanFieldType: SchemaType.BOOLEAN,
    BytesFieldType: SchemaType.BYTES,
}
_MAX_LENGTH_TYPES = (
    StringFieldType,
    IntegerFieldType,
    LongFieldType,
    FloatFieldType,
    DoubleFieldType,
)


@dataclass(frozen=True)
class _FormToSchemaContext:
    """Read-only settings shared by one form-to-schema pass."""

    ctl_enabled: bool
    hooks: ConversionHooks
    root_namespace: str


def convert_form_to_schema(
    field_type: FieldType | None,
    *,
    ctl_enabled: bool = False,
    hooks: ConversionHooks | None = None,
    registry: NamedSchemaRegistry | None = None,
) -> Schema:
    """Build the canonical schema of a form tree.

    Named types without a namespace take the namespace of the root node.
    """
    root_namespace = ""
    if isinstance(field_type, (RecordFieldType, EnumFieldType, FixedFieldType)):
        root_namespace = field_type.record_namespace or ""
    context = _FormToSchemaContext(
        ctl_enabled=ctl_enabled,
        hooks=hooks or ConversionHooks(),
        root_namespace=root_namespace,
    )
    return _type_to_schema(
        field_type,
        context=context,
        registry=registry if registry is not None else NamedSchemaRegistry(),
    )


def _type_to_schema(
    field_type: FieldType | None,
    *,
    context: _FormToSchemaContext,
    registry: NamedSchemaRegistry,
) -> Schema:
    schema: Schema
    if field_type is None:
        schema = NullSchema()
    elif type(field_type) in _PRIMITIVE_SCHEMA_TYPES:
        schema = PrimitiveSchema(schema_type=_PRIMITIVE_SCHEMA_TYPES[type(field_type)])
    elif isinstance(field_type, (RecordFieldType, EnumFieldType, FixedFieldType)):
        schema = _named_type_to_schema(field_type, context=context, registry=registry)
    elif isinstance(field_type, NamedReferenceFieldType):
        schema = registry.resolve(_reference_fqn(field_type, context=context, registry=registry))
    elif isinstance(field_type, ArrayFieldType):
        items = _type_to_schema(field_type.item, context=context, registry=registry)
        schema = ArraySchema(items=items)
    elif isinstance(field_type, UnionFieldType):
        branches: list[Schema] = []
        for acceptable_value in field_type.acceptable_values:
            branch = _type_to_schema(acceptable_value, context=context, registry=registry)
            if isinstance(branch, UnionSchema):
                raise StructuralError("Unions may not immediately contain other unions.")
            branches.append(branch)
        schema = UnionSchema(types=branches)
    else:
        raise StructuralError(f"Unsupported form node: {field_type!r}")

    if context.hooks.on_schema_type is not None:
        context.hooks.on_schema_type(schema, field_type)
    return schema


def _reference_fqn(
    reference: NamedReferenceFieldType,
    *,
    context: _FormToSchemaContext,
    registry: NamedSchemaRegistry,
) -> Fqn:
    """FQN a reference points at; a bare name falls back to the root namespace."""
    fqn = Fqn.parse(reference.fqn)
    if fqn.namespace is None and fqn not in registry and context.root_namespace:
        return Fqn(namespace=context.root_namespace, name=fqn.name)
    return fqn


def _named_type_to_schema(
    field_type: FixedFieldType | EnumFieldType | RecordFieldType,
    *,
    context: _FormToSchemaContext,
    registry: NamedSchemaRegistry,
) -> NamedSchema:
    fqn = declared_fqn(field_type, context.root_namespace)
    validate_fqn(fqn)

    if isinstance(field_type, FixedFieldType):
        fixed = FixedSchema(name=fqn.name, namespace=fqn.namespace, size=field_type.size)
        registry.register(fqn, fixed)
        return fixed
    if isinstance(field_type, EnumFieldType):
        enum = EnumSchema(name=fqn.name, namespace=fqn.namespace)
        registry.register(fqn, enum)
        for symbol in field_type.symbols:
            validate_enum_symbol(symbol.symbol)
            enum.symbols.append(symbol.symbol)
        return enum

    record = RecordSchema(name=fqn.name, namespace=fqn.namespace)
    registry.register(fqn, record)
    if context.ctl_enabled:
        if field_type.version is not None:
            record.props[VERSION] = field_type.version
        if field_type.dependencies is not None:
            record.props[DEPENDENCIES] = [
                {FQN: str(dependency.fqn), VERSION: dependency.version}
                for dependency in field_type.dependencies
            ]
    if field_type.display_name is not None:
        record.props[DISPLAY_NAME] = field_type.display_name
    if field_type.description is not None:
        record.props[DESCRIPTION] = field_type.description

    seen_names: set[str] = set()
    fields: list[SchemaField] = []
    for form_field in field_type.fields:
        lowered = form_field.field_name.lower()
        if lowered in seen_names:
            raise StructuralError(f"Duplicate field name: {lowered}")
        seen_names.add(lowered)
        fields.append(_field_to_schema(form_field, context=context, registry=registry))
    record.fields = fields
    _LOGGER.debug("Built record schema %s with %d fields", fqn, len(fields))
    return record


def _field_to_schema(
    form_field: FormField,
    *,
    context: _FormToSchemaContext,
    registry: NamedSchemaRegistry,
) -> SchemaField:
    field_type = form_field.field_type
    field_schema = _type_to_schema(field_type, context=context, registry=registry)
    if form_field.optional and not is_nullable(field_schema):
        if isinstance(field_schema, UnionSchema):
            field_schema = UnionSchema(types=[*field_schema.types, NullSchema()])
        else:
            field_schema = UnionSchema(types=[field_schema, NullSchema()])

    props: dict[str, Any] = {}
    if form_field.display_name is not None:
        props[DISPLAY_NAME] = form_field.display_name
    if form_field.description is not None:
        props[DESCRIPTION] = form_field.description
    if form_field.display_prompt is not None:
        props[DISPLAY_PROMPT] = form_field.display_prompt
    weight = form_field.weight
    if isinstance(weight, (int, float)) and not isinstance(weight, bool):
        props[WEIGHT] = float(weight)
    if form_field.key_index is not None:
        props[KEY_INDEX] = form_field.key_index
    default = default_to_json(field_type)
    if default is not None:
        props[BY_DEFAULT] = default
    _copy_kind_annotations(field_type, props)

    schema_field = SchemaField(name=form_field.field_name, type=field_schema, props=props)
    if context.hooks.on_schema_field is not None:
        context.hooks.on_schema_field(schema_field, form_field)
    return schema_field


def _copy_kind_annotations(field_type: FieldType | None, props: dict[str, Any]) -> None:
    if isinstance(field_type, _MAX_LENGTH_TYPES) and field_type.max_length is not None:
        props[MAX_LENGTH] = field_type.max_length
    if isinstance(field_type, StringFieldType) and field_type.input_type is not None:
        props[INPUT_TYPE] = field_type.input_type.value
    elif isinstance(field_type, EnumFieldType):
        display_names = [
            symbol.display_name for symbol in field_type.symbols if symbol.display_name is not None
        ]
        if display_names and len(display_names) == len(field_type.symbols):
            props[DISPLAY_NAMES] = display_names
    elif isinstance(field_type, ArrayFieldType) and field_type.min_row_count is not None:
        props[MIN_ROW_COUNT] = field_type.min_row_count
