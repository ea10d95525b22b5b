import pytest

from evaluator import bitwise, bitwise_not, calculate, clamp_shift, evaluate, is_bitwise, to_register


def test_arithmetic():
    assert calculate(2, 3, "+") == 5
    assert calculate(2, 3, "-") == -1
    assert calculate(2, 3, "×") == 6
    assert calculate(3, 2, "÷") == 1.5


def test_division_by_zero_is_zero():
    assert calculate(5, 0, "÷") == 0
    assert evaluate(5, 0, "÷", programmer=True) == 0
    assert evaluate(5.0, 0.0, "÷") == 0


def test_programmer_arithmetic_floors():
    assert evaluate(7, 2, "÷", programmer=True) == 3
    assert evaluate(-7, 2, "÷", programmer=True) == -4
    assert evaluate(2 ** 60 + 1, 1, "÷", programmer=True) == 2 ** 60 + 1
    assert evaluate(7, 2, "÷") == 3.5


def test_bitwise_ops():
    assert bitwise(12, 10, "AND") == 8
    assert bitwise(12, 10, "OR") == 14
    assert bitwise(12, 10, "XOR") == 6
    assert bitwise(1, 4, "<<") == 16
    assert bitwise(16, 2, ">>") == 4


def test_shift_right_is_arithmetic():
    assert bitwise(-16, 2, ">>") == -4


def test_shift_left_wraps_to_32_bits():
    assert bitwise(1, 31, "<<") == -(2 ** 31)
    assert bitwise(0x40000000, 2, "<<") == 0


def test_shift_amount_is_clamped():
    assert clamp_shift(-3) == 0
    assert clamp_shift(100) == 31
    assert bitwise(1, 100, "<<") == -(2 ** 31)
    assert bitwise(8, -1, ">>") == 8
    assert bitwise(-1, 64, ">>") == -1


def test_not():
    assert bitwise_not(0) == -1
    assert bitwise_not(5) == -6
    assert bitwise_not(-1) == 0


def test_to_register():
    assert to_register(2 ** 31) == -(2 ** 31)
    assert to_register(2 ** 32 + 3) == 3
    assert to_register(-1) == -1


def test_is_bitwise():
    assert is_bitwise("AND")
    assert is_bitwise("NOT")
    assert not is_bitwise("+")


def test_unknown_operator():
    with pytest.raises(ValueError):
        calculate(1, 2, "%")
    with pytest.raises(ValueError):
        bitwise(1, 2, "NAND")


def test_float_overflow_is_zero():
    assert evaluate(1e308, 10.0, "×") == 0
    assert evaluate(-1e308, 1e308, "-") == 0
    assert evaluate(1e308, 10.0, "×", programmer=True) == 0


def test_non_finite_operands_read_as_zero():
    inf = float("inf")
    assert evaluate(inf, 1, "+", programmer=True) == 1
    assert evaluate(float("nan"), 2.0, "+") == 2.0
    assert evaluate(inf, 12, "AND", programmer=True) == 0


def test_int_too_large_for_float_is_zero():
    assert evaluate(10 ** 400, 1.0, "+") == 0
    assert evaluate(10 ** 400, 0.5, "÷", programmer=True) == 0
