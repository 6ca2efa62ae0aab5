"""Shape-checked decoding of daemon return values.

Decoded payloads are untyped trees of scalars, sequences and mappings. Every
decoder classifies a value with :func:`kind_of` first and raises a
:class:`~ccdeluge.exceptions.ShapeError` subclass when the shape does not match,
so no caller ever sees a partially decoded value.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any, TypeVar

from ccdeluge.exceptions import InvalidDictionaryResponseError, InvalidReturnValueError

T = TypeVar("T")

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT16_MAX = 2**16 - 1


class ValueKind(str, Enum):
    """Shape of a decoded value."""

    NONE = "none"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    BYTES = "bytes"
    STRING = "string"
    LIST = "list"
    DICT = "dict"
    UNKNOWN = "unknown"


def kind_of(value: Any) -> ValueKind:
    """Classify a decoded value."""
    if value is None:
        return ValueKind.NONE
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INT
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, (bytes, bytearray)):
        return ValueKind.BYTES
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.LIST
    if isinstance(value, dict):
        return ValueKind.DICT
    return ValueKind.UNKNOWN


def _mismatch(expected: str, value: Any) -> InvalidReturnValueError:
    return InvalidReturnValueError(
        "invalid return value",
        details={"expected": expected, "got": kind_of(value).value},
    )


def expect_arity(values: Sequence[Any], count: int) -> list[Any]:
    """Return ``values`` as a list after checking it holds exactly ``count`` items."""
    if kind_of(values) is not ValueKind.LIST:
        raise _mismatch("list", values)
    if len(values) != count:
        raise InvalidReturnValueError(
            "invalid return value",
            details={"expected_count": count, "count": len(values)},
        )
    return list(values)


def single(values: Sequence[Any]) -> Any:
    """Return the only element of a one-value response."""
    return expect_arity(values, 1)[0]


def as_int(value: Any, minimum: int = INT64_MIN, maximum: int = INT64_MAX) -> int:
    """Decode an integer within ``[minimum, maximum]``."""
    if kind_of(value) is not ValueKind.INT:
        raise _mismatch("int", value)
    if not minimum <= value <= maximum:
        raise InvalidReturnValueError(
            "integer out of range",
            details={"value": value, "min": minimum, "max": maximum},
        )
    return value


def as_bool(value: Any) -> bool:
    """Decode a boolean."""
    if kind_of(value) is not ValueKind.BOOL:
        raise _mismatch("bool", value)
    return value


def as_str(value: Any) -> str:
    """Decode a byte-string or text value as text."""
    kind = kind_of(value)
    if kind is ValueKind.STRING:
        return value
    if kind is ValueKind.BYTES:
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidReturnValueError(
                "invalid return value", details={"expected": "utf-8 string"}
            ) from e
    raise _mismatch("string", value)


def as_list(value: Any) -> list[Any]:
    """Decode an ordered sequence."""
    if kind_of(value) is not ValueKind.LIST:
        raise _mismatch("list", value)
    return list(value)


def as_str_list(value: Any) -> list[str]:
    """Decode a sequence of strings."""
    return [as_str(item) for item in as_list(value)]


def as_dict(value: Any) -> dict[str, Any]:
    """Decode a mapping, normalizing byte-string keys to text."""
    if kind_of(value) is not ValueKind.DICT:
        raise InvalidDictionaryResponseError(details={"got": kind_of(value).value})

    out: dict[str, Any] = {}
    for key, item in value.items():
        try:
            out[as_str(key)] = item
        except InvalidReturnValueError as e:
            raise InvalidDictionaryResponseError(details={"key": repr(key)}) from e
    return out


def optional(decoder: Callable[[Any], T]) -> Callable[[Any], T | None]:
    """Wrap ``decoder`` so that an absent value decodes to ``None``."""

    def decode(value: Any) -> T | None:
        if value is None:
            return None
        return decoder(value)

    return decode


def scan(values: Sequence[Any], *decoders: Callable[[Any], Any]) -> tuple[Any, ...]:
    """Decode a response value list with one decoder per expected element.

    The number of values must equal the number of decoders.
    """
    return tuple(
        decoder(value)
        for decoder, value in zip(decoders, expect_arity(values, len(decoders)))
    )
