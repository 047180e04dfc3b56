"""
Runtime values for the minipy interpreter.

A Value is a closed tagged union: `kind` says which variant is active and
`data` holds the Python payload. List, dict and function payloads are
shared by reference, so two variables bound to the same list see each
other's changes; nothing is copied on assignment.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from ..errors import error_unsupported_type


class ValueKind(Enum):
    """The variants a Value can hold."""
    NONE = "none"           # "no value", e.g. the result of an empty body
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STR = "str"
    LIST = "list"
    DICT = "dict"
    FUNCTION = "function"


NUMERIC_KINDS = (ValueKind.INT, ValueKind.FLOAT)
REFERENCE_KINDS = (ValueKind.LIST, ValueKind.DICT, ValueKind.FUNCTION)


@dataclass(frozen=True)
class Value:
    """
    A runtime value.

    Value() with no arguments is the "no value" marker; it is distinct from
    every payload variant and cannot be tested for truthiness.
    """
    kind: ValueKind = ValueKind.NONE
    data: Any = None

    def __repr__(self) -> str:
        return f"Value({self.kind.name}, {self.data!r})"

    @property
    def is_none(self) -> bool:
        return self.kind == ValueKind.NONE

    @property
    def is_numeric(self) -> bool:
        return self.kind in NUMERIC_KINDS

    def is_truthy(self) -> bool:
        """Check if this value is truthy in a condition.

        Numbers are true when non-zero, strings when non-empty. A list,
        dict or function is true whenever a container is attached, even an
        empty one.

        Raises:
            EvalError: For the "no value" marker
        """
        if self.kind in NUMERIC_KINDS:
            return self.data != 0
        if self.kind == ValueKind.BOOL:
            return bool(self.data)
        if self.kind == ValueKind.STR:
            return len(self.data) > 0
        if self.kind in REFERENCE_KINDS:
            return self.data is not None
        raise error_unsupported_type(self.kind.value, "in a condition")

    def to_repr(self) -> str:
        """Render the value the way the interactive prompt echoes it."""
        if self.kind == ValueKind.INT:
            return str(self.data)
        if self.kind == ValueKind.FLOAT:
            return repr(self.data)
        if self.kind == ValueKind.BOOL:
            return "True" if self.data else "False"
        if self.kind == ValueKind.STR:
            return repr(self.data)
        if self.kind == ValueKind.LIST:
            return "[...]"
        if self.kind == ValueKind.DICT:
            return "{...}"
        if self.kind == ValueKind.FUNCTION:
            return "<function>"
        return "None"

    def __str__(self) -> str:
        return self.to_repr()


NO_VALUE = Value()


# Convenience constructors

def int_val(n: int) -> Value:
    """Create an integer value."""
    return Value(ValueKind.INT, int(n))


def float_val(x: float) -> Value:
    """Create a float value."""
    return Value(ValueKind.FLOAT, float(x))


def bool_val(b: bool) -> Value:
    """Create a boolean value."""
    return Value(ValueKind.BOOL, bool(b))


def string_val(s: str) -> Value:
    """Create a string value."""
    return Value(ValueKind.STR, str(s))


def list_val(items: Optional[List[Value]] = None) -> Value:
    """Create a list value. The list object itself is shared, not copied."""
    return Value(ValueKind.LIST, items if items is not None else [])


def dict_val(items: Optional[Dict[str, Value]] = None) -> Value:
    """Create a dict value. Insertion order is preserved."""
    return Value(ValueKind.DICT, items if items is not None else {})


def function_val(node: Any) -> Value:
    """Create a function value referring to an AST node."""
    return Value(ValueKind.FUNCTION, node)


def number_val(x: Any) -> Value:
    """Wrap a Python number, keeping int results as INT."""
    if isinstance(x, int) and not isinstance(x, bool):
        return int_val(x)
    return float_val(x)
