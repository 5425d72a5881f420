"""Name legality checks for named types and enum symbols."""

from __future__ import annotations

import re

from .schema_models import Fqn

_NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class SchemaError(Exception):
    """Raised for schema parsing or structure failures."""


class NamingError(SchemaError):
    """Raised when a type name, namespace or enum symbol is malformed."""


def validate_fqn(fqn: Fqn) -> None:
    """Reject a fully-qualified name whose name or namespace is illegal."""
    if not _is_legal_name(fqn.name):
        raise NamingError(f"Invalid name '{fqn.name}' in fully-qualified name '{fqn}'.")
    if fqn.namespace:
        for segment in fqn.namespace.split("."):
            if not _is_legal_name(segment):
                raise NamingError(f"Invalid namespace '{fqn.namespace}' in '{fqn}'.")


def validate_enum_symbol(symbol: str) -> None:
    """Reject an enum symbol that is not a plain identifier."""
    if not _is_legal_name(symbol):
        raise NamingError(f"Invalid enum symbol: '{symbol}'.")


def _is_legal_name(text: object) -> bool:
    return isinstance(text, str) and _NAME_PATTERN.fullmatch(text) is not None
