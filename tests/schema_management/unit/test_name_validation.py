"""Name legality tests."""

from __future__ import annotations

import pytest
from schema_form_converter.schema_management import (
    Fqn,
    NamingError,
    SchemaError,
    validate_enum_symbol,
    validate_fqn,
)


@pytest.mark.parametrize(
    "fqn",
    [Fqn(None, "Person"), Fqn("com.example", "_Person2"), Fqn("", "A")],
)
def test_legal_fqns_pass(fqn: Fqn) -> None:
    validate_fqn(fqn)


@pytest.mark.parametrize(
    "fqn",
    [Fqn(None, "2Person"), Fqn(None, ""), Fqn("com..example", "A"), Fqn("com.ex-ample", "A")],
)
def test_illegal_fqns_raise_naming_error(fqn: Fqn) -> None:
    with pytest.raises(NamingError):
        validate_fqn(fqn)


def test_enum_symbols_must_be_identifiers() -> None:
    validate_enum_symbol("ACTIVE_1")

    with pytest.raises(NamingError, match="Invalid enum symbol: 'not active'"):
        validate_enum_symbol("not active")


def test_naming_error_is_a_schema_error() -> None:
    assert issubclass(NamingError, SchemaError)


def test_fqn_text_form_and_parsing() -> None:
    assert str(Fqn("a.b", "C")) == "a.b.C"
    assert str(Fqn(None, "C")) == "C"
    assert Fqn.parse("a.b.C") == Fqn("a.b", "C")
    assert Fqn.parse("C") == Fqn(None, "C")
