"""Per-conversion registries of named types.

Both are owned by a single top-level conversion call and threaded through
its recursion; they are never shared between conversions.
"""

from __future__ import annotations

from collections.abc import Iterable

from schema_form_converter.schema_management.schema_models import Fqn, NamedSchema, RecordSchema

from .conversion_contracts import StructuralError


class EmittedTypeNames:
    """FQNs already materialized while building one form tree."""

    def __init__(self, fqns: Iterable[Fqn] = ()) -> None:
        self._fqns: set[Fqn] = set(fqns)

    def __contains__(self, fqn: object) -> bool:
        return fqn in self._fqns

    def __len__(self) -> int:
        return len(self._fqns)

    def register(self, fqn: Fqn) -> None:
        self._fqns.add(fqn)


class NamedSchemaRegistry:
    """Named schemas built while converting one form tree, keyed by FQN."""

    def __init__(self) -> None:
        self._schemas: dict[Fqn, NamedSchema] = {}
        self._placeholders: set[Fqn] = set()

    @classmethod
    def with_placeholders(cls, fqns: Iterable[Fqn]) -> NamedSchemaRegistry:
        """Seed empty records for types defined in other schemas."""
        registry = cls()
        for fqn in fqns:
            registry._schemas[fqn] = RecordSchema(name=fqn.name, namespace=fqn.namespace)
            registry._placeholders.add(fqn)
        return registry

    def __contains__(self, fqn: object) -> bool:
        return fqn in self._schemas

    def register(self, fqn: Fqn, schema: NamedSchema) -> None:
        """Register a definition; only placeholders may be replaced."""
        if fqn in self._schemas and fqn not in self._placeholders:
            raise StructuralError(f"Type with FQN '{fqn}' is defined more than once.")
        self._placeholders.discard(fqn)
        self._schemas[fqn] = schema

    def resolve(self, fqn: Fqn) -> NamedSchema:
        try:
            return self._schemas[fqn]
        except KeyError as exc:
            raise StructuralError(f"Type with FQN '{fqn}' is not defined in schema.") from exc
