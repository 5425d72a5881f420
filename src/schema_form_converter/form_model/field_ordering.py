"""Form field-order normalization.

Editing a form can move a named reference above the definition it points
to. Before a form is turned back into a schema every definition has to
precede its references in depth-first field order.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from schema_form_converter.schema_management.schema_models import Fqn

from .form_models import (
    ArrayFieldType,
    EnumFieldType,
    FieldType,
    FixedFieldType,
    NamedFieldType,
    NamedReferenceFieldType,
    RecordFieldType,
    UnionFieldType,
    declared_fqn,
)


@dataclass
class _OrderingState:
    root_namespace: str | None
    definitions: dict[Fqn, NamedFieldType]
    defined: set[Fqn] = field(default_factory=set)


def normalize_field_order(root: FieldType | None) -> None:
    """Move named-type definitions ahead of their first reference, in place.

    Definitions met after their FQN is already defined are replaced by named
    references. Running this twice leaves the tree unchanged.
    """
    if root is None:
        return
    root_namespace = (
        root.record_namespace
        if isinstance(root, (RecordFieldType, EnumFieldType, FixedFieldType))
        else None
    )
    definitions: dict[Fqn, NamedFieldType] = {}
    _collect_definitions(root, root_namespace, definitions)
    _place(root, _OrderingState(root_namespace=root_namespace, definitions=definitions))


def _collect_definitions(
    node: FieldType | None, root_namespace: str | None, definitions: dict[Fqn, NamedFieldType]
) -> None:
    if isinstance(node, (RecordFieldType, EnumFieldType, FixedFieldType)):
        fqn = declared_fqn(node, root_namespace)
        if fqn in definitions:
            return
        definitions[fqn] = node
        if isinstance(node, RecordFieldType):
            for form_field in node.fields:
                _collect_definitions(form_field.field_type, root_namespace, definitions)
    elif isinstance(node, ArrayFieldType):
        _collect_definitions(node.item, root_namespace, definitions)
    elif isinstance(node, UnionFieldType):
        for branch in node.acceptable_values:
            _collect_definitions(branch, root_namespace, definitions)


def _place(node: FieldType | None, state: _OrderingState) -> FieldType | None:
    if isinstance(node, NamedReferenceFieldType):
        fqn = Fqn.parse(node.fqn)
        if fqn.namespace is None and fqn not in state.definitions and state.root_namespace:
            fqn = Fqn(namespace=state.root_namespace, name=fqn.name)
        if fqn not in state.defined and fqn in state.definitions:
            return _place_definition(state.definitions[fqn], fqn, state)
        return node
    if isinstance(node, (RecordFieldType, EnumFieldType, FixedFieldType)):
        fqn = declared_fqn(node, state.root_namespace)
        if fqn in state.defined:
            return NamedReferenceFieldType(fqn=str(fqn))
        return _place_definition(node, fqn, state)
    if isinstance(node, ArrayFieldType):
        node.item = _place(node.item, state)
    elif isinstance(node, UnionFieldType):
        node.acceptable_values = [
            placed
            for placed in (_place(branch, state) for branch in node.acceptable_values)
            if placed is not None
        ]
    return node


def _place_definition(node: NamedFieldType, fqn: Fqn, state: _OrderingState) -> NamedFieldType:
    state.defined.add(fqn)
    if isinstance(node, RecordFieldType):
        for form_field in node.fields:
            form_field.field_type = _place(form_field.field_type, state)
    return node
