"""
Runtime values produced by the evaluator.

A Value pairs raw Python data with one of a closed set of runtime tags.
Values are immutable; every operation builds a new one.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ValueType(Enum):
    """Runtime tag of a value."""
    INTEGER = "integer"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Value:
    """
    A runtime value with its tag.

    The `data` field holds a Python int (within the signed 64-bit range)
    or bool; the `type` field says which.
    """
    data: Any
    type: ValueType

    def __repr__(self) -> str:
        return f"Value({self.data!r}, {self.type.name})"

    def __str__(self) -> str:
        return self.inspect()

    def inspect(self) -> str:
        """Render the value as program text, e.g. "5" or "true"."""
        if self.type == ValueType.BOOLEAN:
            return "true" if self.data else "false"
        return str(self.data)


# Convenience constructors

def int_val(n: int) -> Value:
    """Create an integer value."""
    return Value(int(n), ValueType.INTEGER)


def bool_val(b: bool) -> Value:
    """Create a boolean value."""
    return Value(bool(b), ValueType.BOOLEAN)


def in_int64_range(n: int) -> bool:
    return INT64_MIN <= n <= INT64_MAX
