"""
minipy runtime - tree-walking evaluation.

This module provides:
- Value: Tagged runtime values and their constructors
- Environment: The flat variable table of a session
- Interpreter: Evaluates AST nodes against an Environment
- Completion: Normal/break/continue results of statement execution
"""

from .values import (
    Value,
    ValueKind,
    NO_VALUE,
    int_val,
    float_val,
    bool_val,
    string_val,
    list_val,
    dict_val,
    function_val,
    number_val,
)

from .environment import (
    Environment,
)

from .interpreter import (
    Interpreter,
    Completion,
    Signal,
    apply_operator,
)

__all__ = [
    # Values
    'Value',
    'ValueKind',
    'NO_VALUE',
    'int_val',
    'float_val',
    'bool_val',
    'string_val',
    'list_val',
    'dict_val',
    'function_val',
    'number_val',
    # Environment
    'Environment',
    # Interpreter
    'Interpreter',
    'Completion',
    'Signal',
    'apply_operator',
]
