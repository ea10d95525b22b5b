"""
Operand math for the calculator: arithmetic and 32-bit register bitwise ops.
"""

import math

from base_convert import REGISTER_BITS, REGISTER_MASK


ARITHMETIC_OPS = ("+", "-", "×", "÷")
BITWISE_OPS = ("AND", "OR", "XOR", "<<", ">>")
UNARY_OPS = ("NOT",)

OPERATOR_SYMBOLS = {
    "+": "+", "-": "-", "×": "*", "÷": "/",
    "AND": "&", "OR": "|", "XOR": "^", "<<": "<<", ">>": ">>", "NOT": "~",
}

MAX_SHIFT = REGISTER_BITS - 1


def is_bitwise(op):
    return op in BITWISE_OPS or op in UNARY_OPS


def to_register(value):
    """Wrap a value into a signed 32-bit register"""
    value = int(value) & REGISTER_MASK
    if value >> (REGISTER_BITS - 1):
        value -= 1 << REGISTER_BITS
    return value


def clamp_shift(amount):
    """Shift amounts outside [0, 31] are clamped to that range"""
    return max(0, min(int(amount), MAX_SHIFT))


def calculate(a, b, op):
    """Four-function arithmetic. Division by zero yields 0."""
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    if op == "×":
        return a * b
    if op == "÷":
        if b == 0:
            return 0
        return a / b
    raise ValueError(f"Unknown arithmetic operator: {op!r}")


def bitwise(a, b, op):
    """Binary bitwise operation on signed 32-bit operands"""
    a = to_register(a)
    b = to_register(b)

    if op == "AND":
        result = a & b
    elif op == "OR":
        result = a | b
    elif op == "XOR":
        result = a ^ b
    elif op == "<<":
        result = a << clamp_shift(b)
    elif op == ">>":
        result = a >> clamp_shift(b)
    else:
        raise ValueError(f"Unknown bitwise operator: {op!r}")

    return to_register(result)


def bitwise_not(a):
    return to_register(~to_register(a))


def _finite(value):
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return value


def evaluate(a, b, op, programmer=False):
    """
    Apply a pending binary operator to (a, b).
    In programmer mode arithmetic results are floored to an integer.
    Results that overflow a float come back as 0.
    """
    a, b = _finite(a), _finite(b)
    if op in BITWISE_OPS:
        return bitwise(a, b, op)

    try:
        if programmer and op == "÷":
            # integer floor division, same as floor(a / b)
            result = a // b if b != 0 else 0
        else:
            result = calculate(a, b, op)
    except OverflowError:
        return 0

    # overflow to inf or nan reads as 0, like division by zero
    if isinstance(result, float) and not math.isfinite(result):
        return 0
    if programmer:
        return math.floor(result)
    return result
