"""Tests for shape-checked decoding of daemon return values."""

from __future__ import annotations

import pytest

from ccdeluge.exceptions import InvalidDictionaryResponseError, InvalidReturnValueError
from ccdeluge.rpc.decoding import (
    INT32_MAX,
    UINT16_MAX,
    ValueKind,
    as_bool,
    as_dict,
    as_int,
    as_list,
    as_str,
    as_str_list,
    expect_arity,
    kind_of,
    optional,
    scan,
    single,
)

pytestmark = [pytest.mark.unit, pytest.mark.rpc]


class TestKindOf:
    """Test cases for value classification."""

    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (None, ValueKind.NONE),
            (True, ValueKind.BOOL),
            (0, ValueKind.INT),
            (1.5, ValueKind.FLOAT),
            (b"abc", ValueKind.BYTES),
            ("abc", ValueKind.STRING),
            ([1], ValueKind.LIST),
            ((1, 2), ValueKind.LIST),
            ({b"k": 1}, ValueKind.DICT),
            (object(), ValueKind.UNKNOWN),
        ],
    )
    def test_kind_of(self, value, kind):
        assert kind_of(value) is kind

    def test_bool_is_not_int(self):
        """Booleans are classified before integers."""
        assert kind_of(False) is ValueKind.BOOL


class TestArity:
    """Test cases for response arity checks."""

    def test_single_value(self):
        assert single([42]) == 42

    def test_single_none_value_is_allowed(self):
        assert single([None]) is None

    def test_empty_response_is_shape_error(self):
        with pytest.raises(InvalidReturnValueError):
            single([])

    def test_too_many_values_is_shape_error(self):
        with pytest.raises(InvalidReturnValueError) as exc_info:
            expect_arity([1, 2], 1)
        assert exc_info.value.details == {"expected_count": 1, "count": 2}

    def test_non_sequence_is_shape_error(self):
        with pytest.raises(InvalidReturnValueError):
            expect_arity(7, 1)  # type: ignore[arg-type]


class TestScalars:
    """Test cases for scalar decoders."""

    def test_as_int(self):
        assert as_int(1234567890123) == 1234567890123

    def test_as_int_rejects_bool(self):
        with pytest.raises(InvalidReturnValueError):
            as_int(True)

    def test_as_int_rejects_bytes(self):
        with pytest.raises(InvalidReturnValueError):
            as_int(b"12")

    def test_as_int_range(self):
        assert as_int(INT32_MAX, maximum=INT32_MAX) == INT32_MAX
        with pytest.raises(InvalidReturnValueError) as exc_info:
            as_int(UINT16_MAX + 1, minimum=0, maximum=UINT16_MAX)
        assert exc_info.value.message == "integer out of range"

    def test_as_bool(self):
        assert as_bool(True) is True
        assert as_bool(False) is False

    @pytest.mark.parametrize("value", [None, 0, 1, b"true", []])
    def test_as_bool_rejects_non_bool(self, value):
        with pytest.raises(InvalidReturnValueError):
            as_bool(value)

    def test_as_str_decodes_bytes(self):
        assert as_str(b"ubuntu") == "ubuntu"
        assert as_str("ubuntu") == "ubuntu"

    def test_as_str_rejects_invalid_utf8(self):
        with pytest.raises(InvalidReturnValueError):
            as_str(b"\xff\xfe")

    def test_as_str_rejects_int(self):
        with pytest.raises(InvalidReturnValueError):
            as_str(5)


class TestCollections:
    """Test cases for sequence and mapping decoders."""

    def test_as_list_accepts_tuple(self):
        assert as_list((1, 2)) == [1, 2]

    def test_as_list_rejects_dict(self):
        with pytest.raises(InvalidReturnValueError):
            as_list({})

    def test_as_str_list(self):
        assert as_str_list([b"Label", "Stats"]) == ["Label", "Stats"]

    def test_as_str_list_rejects_mixed(self):
        with pytest.raises(InvalidReturnValueError):
            as_str_list([b"Label", 3])

    def test_as_dict_normalizes_keys(self):
        assert as_dict({b"username": b"localclient"}) == {"username": b"localclient"}

    def test_as_dict_rejects_list(self):
        with pytest.raises(InvalidDictionaryResponseError):
            as_dict([1, 2])

    def test_as_dict_rejects_int_key(self):
        with pytest.raises(InvalidDictionaryResponseError):
            as_dict({1: b"x"})


class TestScan:
    """Test cases for scanning a value list into a shape."""

    def test_scan(self):
        assert scan([b"a", 2], as_str, as_int) == ("a", 2)

    def test_scan_arity_mismatch(self):
        with pytest.raises(InvalidReturnValueError):
            scan([b"a"], as_str, as_int)

    def test_optional(self):
        decode = optional(as_str)
        assert decode(None) is None
        assert decode(b"x") == "x"
        with pytest.raises(InvalidReturnValueError):
            decode(1)
