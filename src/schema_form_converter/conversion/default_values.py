"""Default-value coercion between JSON values and form field-types.

Defaults are optional, so a value of the wrong shape is dropped rather
than reported.
"""

from __future__ import annotations

import base64
import binascii
import dataclasses
import logging
import math
from typing import Any

from schema_form_converter.form_model.form_models import (
    BooleanFieldType,
    BytesFieldType,
    DoubleFieldType,
    EnumFieldType,
    FieldType,
    FixedFieldType,
    FloatFieldType,
    IntegerFieldType,
    LongFieldType,
    StringFieldType,
    UnionFieldType,
)

_LOGGER = logging.getLogger(__name__)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
_INT64_MODULUS = 2**64
_INT32_MODULUS = 2**32


def json_integer_width(value: int) -> int:
    """Bit width of the JSON integer literal that carries ``value``.

    Values in the signed 32-bit range are 32-bit literals, everything else
    is a 64-bit literal.
    """
    return 32 if INT32_MIN <= value <= INT32_MAX else 64


def apply_json_default(field_type: FieldType, value: Any) -> None:
    """Store ``value`` as the default of ``field_type`` when its shape fits."""
    if value is None:
        return
    if isinstance(field_type, UnionFieldType):
        field_type.default_value = select_union_default(field_type, value)
        return
    coerced = _coerce(field_type, value)
    if coerced is None:
        _LOGGER.debug("Dropped %s default %r of incompatible shape", field_type.kind.value, value)
        return
    field_type.default_value = coerced  # type: ignore[union-attr]


def select_union_default(union: UnionFieldType, value: Any) -> FieldType | None:
    """Pick the first acceptable branch whose kind matches ``value``.

    The winning branch is copied and the copy carries the coerced default.
    Returns None when no branch matches.
    """
    for branch in union.acceptable_values:
        if not _matches_union_branch(branch, value):
            continue
        if isinstance(branch, EnumFieldType) and value not in {
            symbol.symbol for symbol in branch.symbols
        }:
            continue
        selected = dataclasses.replace(branch)
        apply_json_default(selected, value)
        return selected
    _LOGGER.debug("No union branch accepts default %r", value)
    return None


def default_to_json(field_type: FieldType | None) -> Any:
    """Return the JSON value of the stored default, or None when unset."""
    if field_type is None:
        return None
    if isinstance(field_type, UnionFieldType):
        return default_to_json(field_type.default_value)
    value = getattr(field_type, "default_value", None)
    if value is None:
        return None
    emitted = _stored_to_json(field_type, value)
    if emitted is None:
        _LOGGER.debug("Dropped stored %s default %r", field_type.kind.value, value)
    return emitted


def _stored_to_json(field_type: FieldType, value: Any) -> Any:
    if isinstance(field_type, (StringFieldType, EnumFieldType)):
        return value if isinstance(value, str) else None
    if isinstance(field_type, (IntegerFieldType, LongFieldType)):
        return value if _is_integral(value) else None
    if isinstance(field_type, (FloatFieldType, DoubleFieldType)):
        return float(value) if _is_number(value) else None
    if isinstance(field_type, BooleanFieldType):
        return value if isinstance(value, bool) else None
    if isinstance(field_type, (BytesFieldType, FixedFieldType)):
        return _base64_to_byte_list(value) if isinstance(value, str) else None
    return None


def _coerce(field_type: FieldType, value: Any) -> Any:
    if isinstance(field_type, (StringFieldType, EnumFieldType)):
        return value if isinstance(value, str) else None
    if isinstance(field_type, IntegerFieldType):
        return _wrap(int(value), _INT32_MODULUS) if _is_number(value) else None
    if isinstance(field_type, LongFieldType):
        return _wrap(int(value), _INT64_MODULUS) if _is_number(value) else None
    if isinstance(field_type, (FloatFieldType, DoubleFieldType)):
        return value if isinstance(value, float) else None
    if isinstance(field_type, BooleanFieldType):
        return value if isinstance(value, bool) else None
    if isinstance(field_type, (BytesFieldType, FixedFieldType)):
        return _bytes_default(value)
    return None


def _matches_union_branch(branch: FieldType, value: Any) -> bool:
    if isinstance(branch, BooleanFieldType):
        return isinstance(value, bool)
    if isinstance(branch, IntegerFieldType):
        return _is_integral(value) and json_integer_width(value) == 32
    if isinstance(branch, LongFieldType):
        return _is_integral(value)
    if isinstance(branch, (FloatFieldType, DoubleFieldType)):
        return isinstance(value, float)
    if isinstance(branch, (StringFieldType, EnumFieldType)):
        return isinstance(value, str)
    if isinstance(branch, (BytesFieldType, FixedFieldType)):
        return _is_byte_list(value)
    return False


def _bytes_default(value: Any) -> str | None:
    if isinstance(value, str):
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            return None
        return value
    if _is_byte_list(value):
        return base64.b64encode(bytes(item & 0xFF for item in value)).decode("ascii")
    return None


def _base64_to_byte_list(text: str) -> list[int] | None:
    try:
        data = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError):
        _LOGGER.debug("Dropped malformed base64 default %r", text)
        return None
    return [item - 256 if item > 127 else item for item in data]


def _wrap(value: int, modulus: int) -> int:
    half = modulus // 2
    return (value + half) % modulus - half


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_integral(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_byte_list(value: Any) -> bool:
    return isinstance(value, list) and all(_is_integral(item) for item in value)
