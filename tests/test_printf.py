import io

import pytest

from rvkit.printf import format, fprintf, printf


@pytest.mark.parametrize("n", [0, 1, -1, 42, -12345, 2**31 - 1, -(2**31)])
def test_decimal_round_trip(n):
    assert int(format("%d", n)) == n


@pytest.mark.parametrize("n", [0, 9, 10, 255, 4096, 2**32 - 1])
def test_hex_round_trip(n):
    text = format("%x", n)
    assert int(text, 16) == n
    assert text == text.upper()


@pytest.mark.parametrize("spec", ["d", "u", "x"])
@pytest.mark.parametrize("n", [5, 300, 2**20])
def test_long_forms_match_plain(spec, n):
    plain = format("%" + spec, n)
    assert format("%l" + spec, n) == plain
    assert format("%ll" + spec, n) == plain


def test_unsigned_of_negative_is_32_bit():
    assert int(format("%u", -1)) == 2**32 - 1


def test_pointer_is_sixteen_hex_digits():
    text = format("%p", 0x1234)
    assert text.startswith("0x")
    assert len(text) == 18
    assert int(text, 16) == 0x1234


def test_string_and_null():
    assert format("<%s>", "abc") == "<abc>"
    assert format("%s", None) == "(null)"


def test_percent_and_unknown():
    assert format("100%%") == "100%"
    assert format("%q") == "%q"


def test_trailing_percent_dropped():
    assert format("abc%") == "abc"


def test_mixed():
    assert format("%s=%d", "x", 7) == "x=7"


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        format("%d")


def test_fprintf_writes_to_stream():
    out = io.StringIO()
    fprintf(out, "%s %d\n", "n", 3)
    assert out.getvalue() == "n 3\n"


def test_printf_writes_stdout(capsys):
    printf("%d-%s", 12, "ab")
    assert capsys.readouterr().out == "12-ab"