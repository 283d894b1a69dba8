"""Runtime values of the language and the operations defined on them."""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass
from typing import TextIO

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[+-]?[0-9]*\.[0-9]+([eE][+-]?[0-9]+)?|[+-]?[0-9]+\.[0-9]*([eE][+-]?[0-9]+)?"
)


class YoplError(Exception):
    """Raised when a program does something the language does not allow."""


class ValueKind(enum.Enum):
    """The kind of a runtime value."""

    INTEGER = "integer"
    DECIMAL = "decimal"
    STRING = "string"
    BOOL = "bool"
    NIL = "nil"

    @property
    def is_number(self) -> bool:
        return self in (ValueKind.INTEGER, ValueKind.DECIMAL)


def _int_div(left: int, right: int) -> int:
    if right == 0:
        raise YoplError("Division by zero")
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _int_mod(left: int, right: int) -> int:
    if right == 0:
        raise YoplError("Modulo by zero")
    remainder = abs(left) % abs(right)
    return -remainder if left < 0 else remainder


def _float_div(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


@dataclass(frozen=True, eq=False)
class Value:
    """An immutable runtime value: integer, decimal, string, boolean or nil."""

    kind: ValueKind
    payload: object = None

    @staticmethod
    def integer(value: int) -> Value:
        return Value(ValueKind.INTEGER, int(value))

    @staticmethod
    def decimal(value: float) -> Value:
        return Value(ValueKind.DECIMAL, float(value))

    @staticmethod
    def string(value: str) -> Value:
        return Value(ValueKind.STRING, str(value))

    @staticmethod
    def boolean(value: bool) -> Value:
        return Value(ValueKind.BOOL, bool(value))

    @staticmethod
    def nil() -> Value:
        return Value(ValueKind.NIL, None)

    @property
    def is_number(self) -> bool:
        return self.kind.is_number

    def is_truthy(self) -> bool:
        """Truth of the value when used as a condition."""
        if self.kind is ValueKind.BOOL:
            return bool(self.payload)
        if self.kind is ValueKind.STRING:
            return self.payload != ""
        if self.kind.is_number:
            return self.payload > 0
        return False

    def describe(self) -> str:
        """Tagged form used in syntax-tree dumps."""
        if self.kind is ValueKind.INTEGER:
            return f" (Int) {self.payload}"
        if self.kind is ValueKind.DECIMAL:
            return f" (Float) {self.payload:f}"
        if self.kind is ValueKind.STRING:
            return f" (String) {self.payload}"
        if self.kind is ValueKind.BOOL:
            return " (Boolean) " + ("True" if self.payload else "False")
        return " (NULL) "

    def display(self) -> str:
        """Text written by the print builtin."""
        if self.kind is ValueKind.INTEGER:
            return str(self.payload)
        if self.kind is ValueKind.DECIMAL:
            return f"{self.payload:g}"
        if self.kind is ValueKind.STRING:
            return self.payload
        if self.kind is ValueKind.BOOL:
            return "true" if self.payload else "false"
        return "NULL"

    def type_name(self) -> str:
        """Name reported by the typeof builtin."""
        if self.kind.is_number:
            return "Number"
        if self.kind is ValueKind.STRING:
            return "String"
        if self.kind is ValueKind.BOOL:
            return "Boolean"
        return "NULL"

    def _number_text(self) -> str:
        if self.kind is ValueKind.DECIMAL:
            return f"{self.payload:f}"
        return str(self.payload)

    def _arithmetic(self, other: Value, symbol: str, int_op, float_op) -> Value:
        if self.is_number and other.is_number:
            if self.kind is ValueKind.INTEGER and other.kind is ValueKind.INTEGER:
                return Value.integer(int_op(self.payload, other.payload))
            return Value.decimal(float_op(float(self.payload), float(other.payload)))
        raise YoplError(f"Invalid operation {symbol} on unsupported types!")

    def __add__(self, other: object) -> Value:
        if not isinstance(other, Value):
            return NotImplemented
        if self.kind is ValueKind.STRING and other.kind is ValueKind.STRING:
            return Value.string(self.payload + other.payload)
        if self.kind is ValueKind.STRING and other.is_number:
            return Value.string(self.payload + other._number_text())
        if self.is_number and other.kind is ValueKind.STRING:
            return Value.string(self._number_text() + other.payload)
        return self._arithmetic(other, "+", lambda a, b: a + b, lambda a, b: a + b)

    def __sub__(self, other: object) -> Value:
        if not isinstance(other, Value):
            return NotImplemented
        return self._arithmetic(other, "-", lambda a, b: a - b, lambda a, b: a - b)

    def __mul__(self, other: object) -> Value:
        if not isinstance(other, Value):
            return NotImplemented
        return self._arithmetic(other, "*", lambda a, b: a * b, lambda a, b: a * b)

    def __truediv__(self, other: object) -> Value:
        if not isinstance(other, Value):
            return NotImplemented
        return self._arithmetic(other, "/", _int_div, _float_div)

    def __mod__(self, other: object) -> Value:
        if not isinstance(other, Value):
            return NotImplemented
        if self.kind is ValueKind.INTEGER and other.kind is ValueKind.INTEGER:
            return Value.integer(_int_mod(self.payload, other.payload))
        raise YoplError("Invalid operation % on unsupported types!")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.kind is other.kind and self.payload == other.payload

    def __hash__(self) -> int:
        return hash((self.kind, self.payload))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if self.is_number and other.is_number:
            if self.kind is not other.kind:
                return False
            return self.payload < other.payload
        if self.kind is not other.kind:
            raise YoplError("Cannot compare different datatypes")
        if self.kind is ValueKind.STRING:
            return self.payload < other.payload
        raise YoplError("Invalid operation < on invalid types")

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return other.__lt__(self)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return not other.__lt__(self)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return not self.__lt__(other)


def is_float(text: str) -> bool:
    """Whether a numeric literal's text denotes a decimal."""
    return "." in text


def parse_input(text: str) -> Value:
    """Turn a line of user input into an integer, decimal, string or nil."""
    if not text:
        return Value.nil()
    if _INT_PATTERN.fullmatch(text):
        number = int(text)
        if not _INT_MIN <= number <= _INT_MAX:
            raise YoplError(f"Integer input out of range: {text}")
        return Value.integer(number)
    if _FLOAT_PATTERN.fullmatch(text):
        return Value.decimal(float(text))
    return Value.string(text)


def read_input(stream: TextIO) -> Value:
    """Read one line from a stream and parse it as user input."""
    line = stream.readline()
    if line.endswith("\n"):
        line = line[:-1]
    return parse_input(line)