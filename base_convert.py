"""
Base conversion helpers for the programmer calculator.
Values are plain Python ints; display strings are grouped digit runs.
"""

from enum import Enum


REGISTER_BITS = 32
REGISTER_MASK = (1 << REGISTER_BITS) - 1

DIGITS = "0123456789ABCDEF"


class Base(Enum):
    BIN = 2
    OCT = 8
    DEC = 10
    HEX = 16

    @property
    def radix(self):
        return self.value


# Digits per group, counted from the least-significant end
GROUP_SIZES = {
    Base.BIN: 4,
    Base.OCT: 3,
    Base.DEC: 0,
    Base.HEX: 4,
}


def max_digit(base):
    """Largest numeric-key digit (0-9) accepted in this base"""
    return min(base.radix, 10) - 1


def is_digit_allowed(digit, base):
    return 0 <= digit <= max_digit(base)


def group_digits(digits: str, size: int) -> str:
    """Split digits into space separated blocks counted from the right"""
    if size <= 0 or len(digits) <= size:
        return digits

    groups = []
    end = len(digits)
    while end > 0:
        start = max(end - size, 0)
        groups.insert(0, digits[start:end])
        end = start
    return " ".join(groups)


def _to_digits(value, radix):
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, radix)
        out.append(DIGITS[rem])
    return "".join(reversed(out))


def to_display_string(value: int, base: Base) -> str:
    """
    Render an integer for display.
    Non-decimal bases show negative values as the unsigned 32-bit pattern.
    """
    if base is Base.DEC:
        return str(value)

    if value < 0:
        value &= REGISTER_MASK

    return group_digits(_to_digits(value, base.radix), GROUP_SIZES[base])


def parse_display(text: str, base: Base) -> int:
    """
    Parse display text under the given base.
    Group separators are ignored and only the leading run of valid digits
    is read, so '9.5' parses as 9 in DEC. Returns 0 if nothing is readable.
    """
    clean = "".join(str(text).split()).upper()

    sign = 1
    if clean[:1] in ("+", "-"):
        if clean[0] == "-":
            sign = -1
        clean = clean[1:]

    valid = DIGITS[:base.radix]
    end = 0
    while end < len(clean) and clean[end] in valid:
        end += 1

    if end == 0:
        return 0
    return sign * int(clean[:end], base.radix)


def base_views(value: int) -> dict:
    """All four representations of a value, keyed by base"""
    return {base: to_display_string(value, base) for base in (Base.HEX, Base.DEC, Base.OCT, Base.BIN)}
