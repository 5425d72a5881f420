"""Schema to form conversion tests."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest
from schema_form_converter.conversion import (
    ConversionHooks,
    EmittedTypeNames,
    StructuralError,
    convert_schema_to_form,
)
from schema_form_converter.form_model import (
    ArrayFieldType,
    DoubleFieldType,
    EnumFieldType,
    FixedFieldType,
    FormShapeCatalog,
    FqnVersion,
    InputType,
    IntegerFieldType,
    NamedReferenceFieldType,
    RecordFieldType,
    StringFieldType,
    UnionFieldType,
    load_form_template,
)
from schema_form_converter.schema_management import (
    Fqn,
    NamingError,
    parse_schema_text,
    parse_schema_tree,
)


def _sample_text(name: str) -> str:
    return (Path(__file__).resolve().parents[3] / "samples" / name).read_text(encoding="utf-8")


def _record(*fields: dict, **extra: object) -> dict:
    return {
        "type": "record",
        "name": "Root",
        "namespace": "com.example",
        "fields": list(fields),
        **extra,
    }


def _convert(tree: object, **kwargs):
    return convert_schema_to_form(
        parse_schema_tree(tree), catalog=kwargs.pop("catalog", load_form_template()), **kwargs
    )


def test_sample_schema_converts_every_field_kind() -> None:
    form = convert_schema_to_form(
        parse_schema_text(_sample_text("person.avsc")), catalog=load_form_template()
    )

    assert isinstance(form, RecordFieldType)
    assert form.record_name == "Person"
    assert form.record_namespace == "com.example.people"
    assert form.display_name == "Person"
    assert form.description == "Someone known to the address book."
    assert form.dependencies is None
    fields = {field.field_name: field for field in form.fields}

    name = fields["name"]
    assert name.display_name == "Name"
    assert name.weight == 0.5
    assert name.optional is False
    assert name.field_type == StringFieldType(max_length=64, default_value="anonymous")

    age = fields["age"]
    assert age.optional is True
    assert age.field_type == UnionFieldType(
        acceptable_values=[IntegerFieldType()],
        default_value=IntegerFieldType(default_value=30),
    )

    password = fields["password"]
    assert password.display_prompt == "Choose a password"
    assert password.field_type == StringFieldType(input_type=InputType.PASSWORD)

    status = fields["status"].field_type
    assert isinstance(status, EnumFieldType)
    assert status.record_namespace is None
    assert [(symbol.symbol, symbol.display_name) for symbol in status.symbols] == [
        ("ACTIVE", "Active"),
        ("INACTIVE", "Inactive"),
    ]
    assert status.default_value == "ACTIVE"

    assert fields["tags"].field_type == ArrayFieldType(item=StringFieldType(), min_row_count=1)
    address = fields["address"].field_type
    assert isinstance(address, RecordFieldType)
    assert address.record_namespace is None
    assert address.fields[1].key_index == 0
    assert fields["previousAddress"].field_type == UnionFieldType(
        acceptable_values=[NamedReferenceFieldType(fqn="com.example.people.Address")]
    )
    assert fields["token"].field_type == FixedFieldType(
        record_name="Token", size=4, default_value="AQID/w=="
    )
    assert fields["score"].field_type == DoubleFieldType(default_value=1.5)
    assert fields["friend"].field_type == UnionFieldType(
        acceptable_values=[NamedReferenceFieldType(fqn="com.example.people.Person")]
    )


def test_nested_namespace_is_kept_when_it_differs_from_root() -> None:
    form = _convert(
        _record(
            {
                "name": "color",
                "type": {
                    "type": "enum",
                    "name": "Color",
                    "namespace": "org.palette",
                    "symbols": ["RED"],
                },
            }
        )
    )

    assert form.fields[0].field_type.record_namespace == "org.palette"


def test_duplicate_field_names_differing_only_in_case_are_rejected() -> None:
    with pytest.raises(StructuralError, match="Duplicate field name: foo"):
        _convert(_record({"name": "Foo", "type": "string"}, {"name": "foo", "type": "int"}))


def test_illegal_names_and_symbols_raise_naming_errors() -> None:
    with pytest.raises(NamingError):
        _convert({"type": "record", "name": "bad-name", "fields": []})
    with pytest.raises(NamingError):
        _convert({"type": "enum", "name": "E", "symbols": ["not ok"]})


def test_null_root_has_no_form() -> None:
    assert _convert("null") is None


def test_soft_data_errors_leave_attributes_unset() -> None:
    form = _convert(
        _record(
            {"name": "label", "type": "string", "by_default": 5, "inputType": "fancy"},
            {
                "name": "status",
                "type": {"type": "enum", "name": "Status", "symbols": ["A", "B"]},
                "displayNames": ["Only one"],
            },
            {"name": "count", "type": "int", "weight": 2, "keyIndex": "first"},
        )
    )

    label, status, count = form.fields
    assert label.field_type == StringFieldType()
    assert all(symbol.display_name is None for symbol in status.field_type.symbols)
    assert count.weight is None
    assert count.key_index is None


def test_input_type_is_case_insensitive() -> None:
    form = _convert(_record({"name": "secret", "type": "string", "inputType": "PASSWORD"}))

    assert form.fields[0].field_type.input_type is InputType.PASSWORD


def test_bare_null_field_is_optional_without_a_type() -> None:
    form = _convert(_record({"name": "nothing", "type": "null"}))

    assert form.fields[0].optional is True
    assert form.fields[0].field_type is None


def test_ctl_mode_copies_versions_and_dependencies() -> None:
    tree = _record(
        {"name": "id", "type": "long"},
        version=3,
        dependencies=[{"fqn": "org.dep.Thing", "version": 4}],
    )
    catalog = load_form_template().with_ctl_attributes()

    ctl_form = _convert(tree, catalog=catalog, ctl_enabled=True)
    plain_form = _convert(tree)

    assert ctl_form.version == 3
    assert ctl_form.dependencies == [FqnVersion(fqn=Fqn("org.dep", "Thing"), version=4)]
    assert plain_form.version is None
    assert plain_form.dependencies is None


def test_malformed_ctl_dependency_is_a_structural_error() -> None:
    tree = _record({"name": "id", "type": "long"}, dependencies=[{"fqn": "org.dep.Thing"}])

    with pytest.raises(StructuralError, match="integer version"):
        _convert(tree, catalog=load_form_template().with_ctl_attributes(), ctl_enabled=True)


def test_pre_emitted_types_become_named_references() -> None:
    placeholder_tree = {"type": "record", "name": "Thing", "namespace": "org.dep", "fields": []}
    tree = _record({"name": "thing", "type": placeholder_tree})

    form = _convert(tree, emitted=EmittedTypeNames([Fqn("org.dep", "Thing")]))

    assert form.fields[0].field_type == NamedReferenceFieldType(fqn="org.dep.Thing")


def test_attributes_missing_from_the_template_are_not_populated() -> None:
    catalog = load_form_template()
    field_shape = catalog.shape("field")
    reduced = FormShapeCatalog(
        shapes={
            **catalog.shapes,
            "field": dataclasses.replace(
                field_shape,
                attributes=tuple(a for a in field_shape.attributes if a.name != "weight"),
            ),
        },
        ctl_attributes=catalog.ctl_attributes,
    )

    form = _convert(_record({"name": "n", "type": "int", "weight": 0.5}), catalog=reduced)

    assert form.fields[0].weight is None


def test_missing_shape_is_a_structural_error() -> None:
    catalog = load_form_template()
    shapes = {name: shape for name, shape in catalog.shapes.items() if name != "union"}
    reduced = FormShapeCatalog(shapes=shapes, ctl_attributes={})

    with pytest.raises(StructuralError, match="Invalid form shape name: union"):
        _convert(["string", "int"], catalog=reduced)


def test_hooks_run_once_per_converted_node() -> None:
    seen_types: list[str] = []
    seen_fields: list[str] = []
    hooks = ConversionHooks(
        on_form_type=lambda field_type, schema: seen_types.append(field_type.kind.value),
        on_form_field=lambda form_field, schema_field: seen_fields.append(form_field.field_name),
    )

    _convert(
        _record(
            {"name": "a", "type": ["string", "null"]},
            {"name": "b", "type": {"type": "array", "items": "Root"}},
        ),
        hooks=hooks,
    )

    assert seen_fields == ["a", "b"]
    assert seen_types == ["string", "union", "named_reference", "array", "record"]
