import pytest

from base_convert import Base, base_views, group_digits, is_digit_allowed, max_digit, parse_display, to_display_string


def test_hex_grouping():
    assert to_display_string(255, Base.HEX) == "FF"
    assert to_display_string(4095, Base.HEX) == "FFF"
    assert to_display_string(65535, Base.HEX) == "FFFF"
    assert to_display_string(65536, Base.HEX) == "1 0000"
    assert to_display_string(0xDEADBEEF, Base.HEX) == "DEAD BEEF"


def test_bin_and_oct_grouping():
    assert to_display_string(5, Base.BIN) == "101"
    assert to_display_string(255, Base.BIN) == "1111 1111"
    assert to_display_string(256, Base.BIN) == "1 0000 0000"
    assert to_display_string(511, Base.OCT) == "777"
    assert to_display_string(512, Base.OCT) == "1 000"


def test_decimal_is_never_grouped():
    assert to_display_string(1234567, Base.DEC) == "1234567"
    assert to_display_string(-1234567, Base.DEC) == "-1234567"


def test_negative_values_use_32_bit_pattern():
    assert to_display_string(-1, Base.HEX) == "FFFF FFFF"
    assert to_display_string(-1, Base.OCT) == "37 777 777 777"
    assert to_display_string(-2, Base.BIN) == "1111 1111 1111 1111 1111 1111 1111 1110"


def test_negative_values_outside_32_bits_are_truncated():
    # -(2**32 + 1) wraps to 0xFFFFFFFF
    assert to_display_string(-(2 ** 32 + 1), Base.HEX) == "FFFF FFFF"
    assert to_display_string(-(2 ** 31) - 1, Base.HEX) == "7FFF FFFF"


def test_zero():
    for base in Base:
        assert to_display_string(0, base) == "0"


@pytest.mark.parametrize("base", list(Base))
@pytest.mark.parametrize("value", [0, 1, 7, 255, 4096, 123456789, 2 ** 31 - 1, 2 ** 40])
def test_round_trip_non_negative(value, base):
    assert parse_display(to_display_string(value, base), base) == value


@pytest.mark.parametrize("value", [-1, -255, -(2 ** 31), -(2 ** 33) - 5])
def test_round_trip_negative(value):
    assert parse_display(to_display_string(value, Base.DEC), Base.DEC) == value
    for base in (Base.HEX, Base.OCT, Base.BIN):
        assert parse_display(to_display_string(value, base), base) == value % 2 ** 32


@pytest.mark.parametrize("base", list(Base))
def test_output_digits_are_valid_for_base(base):
    valid = set("0123456789ABCDEF"[:base.radix]) | {" "}
    for value in (-1, 8, 9, 10, 15, 16, 999, 2 ** 31 + 7):
        text = to_display_string(value, base)
        if base is Base.DEC:
            text = text.lstrip("-")
        assert set(text) <= valid


def test_parse_strips_group_separators():
    assert parse_display("1 0000", Base.HEX) == 65536
    assert parse_display("1111 1111", Base.BIN) == 255
    assert parse_display("ff", Base.HEX) == 255


def test_parse_reads_leading_digits_only():
    assert parse_display("9.5", Base.DEC) == 9
    assert parse_display("1012", Base.BIN) == 5
    assert parse_display("-42", Base.DEC) == -42


def test_parse_garbage_is_zero():
    assert parse_display("", Base.DEC) == 0
    assert parse_display("xyz", Base.HEX) == 0
    assert parse_display("9", Base.OCT) == 0
    assert parse_display(".5", Base.DEC) == 0


def test_group_digits():
    assert group_digits("123", 4) == "123"
    assert group_digits("12345", 4) == "1 2345"
    assert group_digits("1234567", 3) == "1 234 567"
    assert group_digits("1234567", 0) == "1234567"


def test_digit_limits():
    assert max_digit(Base.BIN) == 1
    assert max_digit(Base.OCT) == 7
    assert max_digit(Base.DEC) == 9
    assert max_digit(Base.HEX) == 9
    assert is_digit_allowed(1, Base.BIN)
    assert not is_digit_allowed(2, Base.BIN)
    assert not is_digit_allowed(8, Base.OCT)


def test_base_views():
    views = base_views(255)
    assert views == {Base.HEX: "FF", Base.DEC: "255", Base.OCT: "377", Base.BIN: "1111 1111"}
    assert list(views) == [Base.HEX, Base.DEC, Base.OCT, Base.BIN]
