"""
Calculator state and input handling.

CalculatorState is immutable; every key press maps to a pure function that
takes the old state and returns the new one. Calculator wraps those functions
behind the key press events the window sends.
"""

import logging
import math
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from base_convert import Base, base_views as _base_views, is_digit_allowed, parse_display, to_display_string
from evaluator import ARITHMETIC_OPS, BITWISE_OPS, OPERATOR_SYMBOLS, bitwise_not, evaluate, is_bitwise

logger = logging.getLogger(__name__)

HEX_LETTERS = "ABCDEF"
HISTORY_LIMIT = 50

# integral floats at or above this print in exponent form
EXACT_FLOAT_LIMIT = 1e16

_NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


class Mode(Enum):
    STANDARD = "standard"
    PROGRAMMER = "programmer"


@dataclass(frozen=True)
class CalculatorState:
    mode: Mode = Mode.STANDARD
    base: Base = Base.DEC
    display_text: str = "0"
    previous_value: Optional[Union[int, float]] = None
    pending_operator: Optional[str] = None
    awaiting_new_operand: bool = False

    @property
    def programmer(self):
        return self.mode is Mode.PROGRAMMER


def parse_number(text):
    """Read the leading decimal number of a standard-mode display, 0 if none"""
    match = _NUMBER_RE.match("".join(str(text).split()))
    if not match:
        return 0.0
    value = float(match.group(0))
    if not math.isfinite(value):
        return 0.0
    return value


def format_number(value):
    """
    Standard-mode rendering: integral values below 1e16 drop the fractional
    part, larger ones use the shortest float repr. Non-finite values show 0.
    """
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        return "0"
    if value.is_integer() and abs(value) < EXACT_FLOAT_LIMIT:
        return str(int(value))
    return repr(value)


def current_value(state):
    if state.programmer:
        return parse_display(state.display_text, state.base)
    return parse_number(state.display_text)


def render(state, value):
    if state.programmer:
        return to_display_string(int(value), state.base)
    return format_number(value)


def base_views(state):
    """HEX/DEC/OCT/BIN views of the current display value"""
    return _base_views(parse_display(state.display_text, state.base))


def _enter(state, char):
    if state.awaiting_new_operand:
        text = char
    else:
        clean = "".join(state.display_text.split())
        text = char if clean == "0" else clean + char

    if state.programmer:
        text = to_display_string(parse_display(text, state.base), state.base)

    return replace(state, display_text=text, awaiting_new_operand=False)


def apply_digit(state, digit):
    """Numeric key 0-9. Digits invalid for the programmer base are ignored."""
    if not 0 <= digit <= 9:
        return state
    if state.programmer and not is_digit_allowed(digit, state.base):
        return state
    return _enter(state, str(digit))


def apply_hex_digit(state, letter):
    """A-F keys, only live in programmer mode with HEX selected"""
    letter = letter.upper()
    if len(letter) != 1 or letter not in HEX_LETTERS:
        return state
    if not state.programmer or state.base is not Base.HEX:
        return state
    return _enter(state, letter)


def apply_decimal_point(state):
    if state.programmer:
        return state
    if state.awaiting_new_operand:
        return replace(state, display_text="0.", awaiting_new_operand=False)
    if "." in state.display_text:
        return state
    return replace(state, display_text=state.display_text + ".")


def apply_clear(state):
    return replace(
        state,
        display_text="0",
        previous_value=None,
        pending_operator=None,
        awaiting_new_operand=False,
    )


def apply_base_change(state, new_base):
    """
    Re-render the display under a new base.
    The pending operation is kept; previous_value is a plain number and
    shows up in the new base once it is displayed again.
    """
    if not state.programmer or new_base is state.base:
        return state
    value = parse_display(state.display_text, state.base)
    return replace(state, base=new_base, display_text=to_display_string(value, new_base))


def apply_mode_change(state, new_mode):
    """
    Switch between standard and programmer mode.
    The display is left as is, it is only re-validated by the next edit or
    base change. The selected base is remembered for the next programmer
    session; standard mode always reads the display as decimal.
    """
    if new_mode is state.mode:
        return state
    return replace(state, mode=new_mode)


def apply_not(state):
    """Unary complement of the display, kept as the left operand"""
    if not state.programmer:
        return state
    result = bitwise_not(parse_display(state.display_text, state.base))
    return replace(
        state,
        display_text=render(state, result),
        previous_value=result,
        pending_operator=None,
        awaiting_new_operand=False,
    )


def apply_equals(state):
    if state.pending_operator is None:
        return state

    result = evaluate(state.previous_value, current_value(state), state.pending_operator, state.programmer)
    return replace(
        state,
        display_text=render(state, result),
        previous_value=None,
        pending_operator=None,
        awaiting_new_operand=False,
    )


def apply_operator(state, op):
    """
    Operator key. Evaluation is strictly left to right: a pending operator
    is applied first and its result becomes the new left operand.
    """
    if op == "=":
        return apply_equals(state)
    if is_bitwise(op) and not state.programmer:
        return state
    if op == "NOT":
        return apply_not(state)
    if op not in ARITHMETIC_OPS and op not in BITWISE_OPS:
        raise ValueError(f"Unknown operator: {op!r}")

    value = current_value(state)
    if state.pending_operator is None:
        return replace(state, previous_value=value, pending_operator=op, awaiting_new_operand=True)

    result = evaluate(state.previous_value, value, state.pending_operator, state.programmer)
    return replace(
        state,
        display_text=render(state, result),
        previous_value=result,
        pending_operator=op,
        awaiting_new_operand=True,
    )


def apply_paste(state, text):
    """
    Replace the display with a pasted number.
    0x/0o/0b prefixes, commas and spaces are accepted. Unreadable text is
    ignored.
    """
    clean = str(text).strip().replace(",", "").replace(" ", "")
    if not clean:
        return state

    try:
        if state.programmer:
            prefix = clean.lstrip("+-")[:2].lower()
            if prefix == "0x":
                value = int(clean, 16)
            elif prefix == "0o":
                value = int(clean, 8)
            elif prefix == "0b":
                value = int(clean, 2)
            else:
                value = int(clean, state.base.radix)
        else:
            value = float(clean)
            if not math.isfinite(value):
                raise ValueError(clean)
    except ValueError:
        logger.warning("Could not paste: %r", text)
        return state

    return replace(state, display_text=render(state, value), awaiting_new_operand=False)


class Calculator:
    """Key press front end over CalculatorState, with a calculation history"""

    def __init__(self, history_limit=HISTORY_LIMIT):
        self.state = CalculatorState()
        self.history = []
        self.history_limit = history_limit

    @property
    def display_text(self):
        return self.state.display_text

    @property
    def base(self):
        return self.state.base

    @property
    def mode(self):
        return self.state.mode

    def views(self):
        return base_views(self.state)

    def digit_pressed(self, digit):
        if isinstance(digit, str):
            if digit.upper() in HEX_LETTERS and len(digit) == 1:
                self.state = apply_hex_digit(self.state, digit)
                return
            if not digit.isdigit() or len(digit) != 1:
                return
            digit = int(digit)
        self.state = apply_digit(self.state, digit)

    def operator_pressed(self, op):
        old = self.state
        self.state = apply_operator(old, op)
        if op != "NOT":
            self._record(old, self.state)

    def equals_pressed(self):
        self.operator_pressed("=")

    def clear_pressed(self):
        self.state = apply_clear(self.state)

    def decimal_point_pressed(self):
        self.state = apply_decimal_point(self.state)

    def base_pressed(self, new_base):
        self.state = apply_base_change(self.state, new_base)

    def mode_pressed(self, new_mode):
        self.state = apply_mode_change(self.state, new_mode)

    def paste(self, text):
        self.state = apply_paste(self.state, text)

    def clear_history(self):
        self.history.clear()

    def _record(self, old, new):
        """Add 'a op b = r' to the history when a key press evaluated something"""
        if old.pending_operator is None or new is old:
            return
        left = render(old, old.previous_value)
        symbol = OPERATOR_SYMBOLS.get(old.pending_operator, old.pending_operator)
        self.history.insert(0, f"{left} {symbol} {old.display_text} = {new.display_text}")
        del self.history[self.history_limit:]
