"""Schema document writing tests."""

from __future__ import annotations

import json

from schema_form_converter.schema_management import (
    ArraySchema,
    EnumSchema,
    Fqn,
    NullSchema,
    PrimitiveSchema,
    RecordSchema,
    SchemaField,
    SchemaType,
    UnionSchema,
    find_named_type,
    parse_schema_tree,
    schema_to_json,
    write_schema_text,
)


def _self_referencing_node() -> RecordSchema:
    node = RecordSchema(name="Node", namespace="com.example")
    node.fields = [
        SchemaField(name="value", type=PrimitiveSchema(schema_type=SchemaType.INT)),
        SchemaField(name="next", type=UnionSchema(types=[node, NullSchema()])),
    ]
    return node


def test_named_types_are_written_once_then_by_short_name() -> None:
    tree = schema_to_json(_self_referencing_node())

    assert tree == {
        "type": "record",
        "name": "Node",
        "namespace": "com.example",
        "fields": [
            {"name": "value", "type": "int"},
            {"name": "next", "type": ["Node", "null"]},
        ],
    }


def test_namespace_is_written_only_when_it_changes() -> None:
    color = EnumSchema(name="Color", namespace="org.palette", symbols=["RED"])
    local = RecordSchema(name="Local", namespace="com.example")
    root = RecordSchema(
        name="Root",
        namespace="com.example",
        fields=[
            SchemaField(name="local", type=local),
            SchemaField(name="color", type=color),
            SchemaField(name="colors", type=ArraySchema(items=color)),
        ],
    )

    tree = schema_to_json(root)

    assert tree["fields"][0]["type"] == {"type": "record", "name": "Local", "fields": []}
    assert tree["fields"][1]["type"] == {
        "type": "enum",
        "name": "Color",
        "namespace": "org.palette",
        "symbols": ["RED"],
    }
    assert tree["fields"][2]["type"] == {"type": "array", "items": "org.palette.Color"}


def test_written_tree_reads_back_to_the_same_tree() -> None:
    tree = schema_to_json(_self_referencing_node())

    assert schema_to_json(parse_schema_tree(tree)) == tree


def test_declared_dependencies_are_written_by_reference() -> None:
    person = RecordSchema(name="Person", namespace="com.example.people")
    order = RecordSchema(
        name="Order",
        namespace="com.example.orders",
        fields=[SchemaField(name="customer", type=person)],
        props={"dependencies": [{"fqn": "com.example.people.Person", "version": 1}]},
    )

    written = json.loads(write_schema_text(order))

    assert written["fields"] == [{"name": "customer", "type": "com.example.people.Person"}]
    assert written["dependencies"] == [{"fqn": "com.example.people.Person", "version": 1}]


def test_compact_and_pretty_output() -> None:
    schema = RecordSchema(name="R", fields=[SchemaField(name="a", type=NullSchema())])

    assert write_schema_text(schema) == (
        '{"type":"record","name":"R","fields":[{"name":"a","type":"null"}]}'
    )
    assert write_schema_text(schema, pretty=True).startswith('{\n  "type": "record"')


def test_find_named_type_is_cycle_safe() -> None:
    node = _self_referencing_node()

    assert find_named_type(node, Fqn("com.example", "Node")) is node
    assert find_named_type(node, Fqn("com.example", "Missing")) is None
