import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from rvsix.printf import format_string, fprintf

INT32 = st.integers(min_value=-(2**31), max_value=2**31 - 1)


@given(INT32)
def test_decimal_matches_int32(n):
    assert format_string("%d", n) == str(n)


@given(INT32)
def test_decimal_wraps_to_32_bits(n):
    assert format_string("%d", n + 2**32) == format_string("%d", n)


@given(INT32)
def test_hex_is_unsigned_uppercase(n):
    out = format_string("%x", n)
    assert int(out, 16) == n & 0xFFFFFFFF
    assert out == out.upper()
    assert out == "0" or not out.startswith("0")


@given(st.integers(min_value=0, max_value=2**64 - 1))
def test_pointer_is_zero_padded(value):
    out = format_string("%p", value)
    assert out.startswith("0x")
    assert len(out) == 18
    assert int(out, 16) == value


@given(st.integers(min_value=0, max_value=2**64 - 1))
def test_long_shows_low_32_bits(value):
    assert int(format_string("%l", value)) == value & 0xFFFFFFFF


def test_null_string():
    assert format_string("%s", None) == "(null)"


def test_string_and_char():
    assert format_string("<%s|%c>", "abc", ord("z")) == "<abc|z>"


def test_percent_and_unknown():
    assert format_string("100%%") == "100%"
    assert format_string("%q") == "%q"
    assert format_string("abc%") == "abc"


def test_missing_argument():
    with pytest.raises(TypeError):
        format_string("%d")


def test_fprintf_writes_to_stream():
    stream = io.StringIO()
    fprintf(stream, "%s=%d\n", "n", 7)
    assert stream.getvalue() == "n=7\n"