"""
Tree-walking interpreter for minipy.

Statements execute to a Completion record rather than raising for control
flow: `break` and `continue` come back up the call chain as BREAK and
CONTINUE completions, every statement sequence hands them on untouched,
and only a while loop consumes them. One that reaches evaluate() was used
outside any loop and becomes an EvalError there.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum

from .values import (
    Value, ValueKind, NO_VALUE,
    bool_val, float_val, number_val, string_val,
)
from .environment import Environment

from ..ast import (
    AstNode, Program,
    IfStatement, WhileStatement, BreakStatement, ContinueStatement,
    Expression, Literal, Variable, BinaryOp, Comparison, Assignment,
)
from ..errors import (
    error_division_by_zero,
    error_numeric_overflow,
    error_signal_outside_loop,
    error_unsupported_operation,
)

logger = logging.getLogger(__name__)


class Signal(Enum):
    """How a statement finished."""
    NORMAL = "normal"
    BREAK = "break"
    CONTINUE = "continue"


@dataclass(frozen=True)
class Completion:
    """Result of executing a statement."""
    signal: Signal = Signal.NORMAL
    value: Value = NO_VALUE

    @property
    def is_normal(self) -> bool:
        return self.signal == Signal.NORMAL


BREAK = Completion(Signal.BREAK)
CONTINUE = Completion(Signal.CONTINUE)


class Interpreter:
    """
    Tree-walking interpreter for minipy.

    Evaluates AST nodes by dispatching on the node class. The environment
    is passed explicitly and is the only state that survives a call.
    """

    def evaluate(self, node: AstNode, env: Environment) -> Value:
        """
        Run a statement or program and return its value.

        Args:
            node: Root of the tree returned by the parser
            env: The session environment, mutated by assignments

        Returns:
            The value of the last statement evaluated, or NO_VALUE

        Raises:
            EvalError: On any runtime failure, including a break or
                continue that is not inside a loop
        """
        logger.debug("evaluating %s", type(node).__name__)
        completion = self.execute(node, env)
        if completion.signal == Signal.BREAK:
            raise error_signal_outside_loop("break")
        if completion.signal == Signal.CONTINUE:
            raise error_signal_outside_loop("continue")
        return completion.value

    # =========================================================================
    # Statements
    # =========================================================================

    def execute(self, node: AstNode, env: Environment) -> Completion:
        """Execute a statement."""
        if isinstance(node, Expression):
            return Completion(Signal.NORMAL, self._evaluate(node, env))
        elif isinstance(node, IfStatement):
            return self._execute_if(node, env)
        elif isinstance(node, WhileStatement):
            return self._execute_while(node, env)
        elif isinstance(node, BreakStatement):
            return BREAK
        elif isinstance(node, ContinueStatement):
            return CONTINUE
        elif isinstance(node, Program):
            return self._execute_body(node.statements, env)
        else:
            raise RuntimeError(f"Unknown statement type: {type(node).__name__}")

    def _execute_body(self, statements: list, env: Environment) -> Completion:
        """Run statements in order; a break/continue is handed back as is."""
        last = NO_VALUE
        for stmt in statements:
            completion = self.execute(stmt, env)
            if not completion.is_normal:
                return completion
            last = completion.value
        return Completion(Signal.NORMAL, last)

    def _execute_if(self, stmt: IfStatement, env: Environment) -> Completion:
        """Execute the first branch whose condition holds."""
        if self._evaluate(stmt.condition, env).is_truthy():
            return self._execute_body(stmt.body, env)

        for branch in stmt.elif_branches:
            if self._evaluate(branch.condition, env).is_truthy():
                return self._execute_body(branch.body, env)

        if stmt.else_body is not None:
            return self._execute_body(stmt.else_body, env)

        return Completion()

    def _execute_while(self, stmt: WhileStatement, env: Environment) -> Completion:
        """Execute a while loop, consuming break and continue."""
        last = NO_VALUE
        broken = False

        while not broken and self._evaluate(stmt.condition, env).is_truthy():
            for body_stmt in stmt.body:
                completion = self.execute(body_stmt, env)
                if completion.signal == Signal.BREAK:
                    broken = True
                    break
                if completion.signal == Signal.CONTINUE:
                    break
                last = completion.value

        if not broken and stmt.else_body is not None:
            for else_stmt in stmt.else_body:
                completion = self.execute(else_stmt, env)
                if not completion.is_normal:
                    # belongs to an enclosing loop
                    return completion
                last = completion.value

        return Completion(Signal.NORMAL, last)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _evaluate(self, expr: Expression, env: Environment) -> Value:
        """Evaluate an expression to produce a Value."""
        if isinstance(expr, Literal):
            return expr.value
        elif isinstance(expr, Variable):
            return env.get(expr.name)
        elif isinstance(expr, Assignment):
            return self._eval_assignment(expr, env)
        elif isinstance(expr, BinaryOp):
            return self._eval_binary_op(expr, env)
        elif isinstance(expr, Comparison):
            return self._eval_comparison(expr, env)
        else:
            raise RuntimeError(f"Unknown expression type: {type(expr).__name__}")

    def _eval_assignment(self, expr: Assignment, env: Environment) -> Value:
        value = self._evaluate(expr.value, env)
        env.set(expr.name, value)
        return value

    def _eval_binary_op(self, op: BinaryOp, env: Environment) -> Value:
        """Evaluate both operands, then apply the operator."""
        left = self._evaluate(op.left, env)
        right = self._evaluate(op.right, env)
        return apply_operator(op.operator, left, right)

    def _eval_comparison(self, comp: Comparison, env: Environment) -> Value:
        """Evaluate a chain pairwise, stopping at the first false pair.

        `a < b < c` means `a < b and b < c` with `b` evaluated once; operands
        after the first false pair are never evaluated.
        """
        left = self._evaluate(comp.first, env)
        for operator, operand in comp.comparisons:
            right = self._evaluate(operand, env)
            if not apply_operator(operator, left, right).data:
                return bool_val(False)
            left = right
        return bool_val(True)


# =============================================================================
# Operators
# =============================================================================

_COMPARATORS = {
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
    ">": lambda a, b: a > b,
    ">=": lambda a, b: a >= b,
}


def apply_operator(operator: str, left: Value, right: Value) -> Value:
    """
    Apply a binary operator, dispatching on the runtime kinds of both operands.

    Supported pairings:
    - number, number: arithmetic and comparison
    - str, str: concatenation and lexicographic comparison
    - int, str (either order): repetition with '*'

    Raises:
        EvalError: For any other pairing or operator, division by zero,
            or an int operand too large to convert (E206)
    """
    try:
        if left.is_numeric and right.is_numeric:
            return _numeric_op(operator, left, right)
        if left.kind == ValueKind.STR and right.kind == ValueKind.STR:
            return _string_op(operator, left, right)
        if left.kind == ValueKind.INT and right.kind == ValueKind.STR:
            return _repeat_op(operator, right, left, reverse=True)
        if left.kind == ValueKind.STR and right.kind == ValueKind.INT:
            return _repeat_op(operator, left, right)
    except OverflowError:
        # huge int mixed with a float, or used as a repeat count
        raise error_numeric_overflow(operator, left.kind.value, right.kind.value) from None
    raise error_unsupported_operation(operator, left.kind.value, right.kind.value)


def _numeric_op(operator: str, left: Value, right: Value) -> Value:
    a, b = left.data, right.data

    if operator in _COMPARATORS:
        return bool_val(_COMPARATORS[operator](a, b))

    if operator == "+":
        return number_val(a + b)
    if operator == "-":
        return number_val(a - b)
    if operator == "*":
        return number_val(a * b)
    if operator == "**":
        return _power(a, b)

    if operator in ("/", "//", "%"):
        if b == 0:
            raise error_division_by_zero(operator)
        if operator == "/":
            return float_val(a / b)
        if operator == "//":
            return number_val(a // b)
        return number_val(a % b)

    raise error_unsupported_operation(operator, left.kind.value, right.kind.value)


def _power(a, b) -> Value:
    if a == 0 and b < 0:
        raise error_division_by_zero("**")
    try:
        result = a ** b
    except OverflowError:
        return float_val(math.inf)
    if isinstance(result, complex):
        # negative base, fractional exponent
        return float_val(math.nan)
    return number_val(result)


def _string_op(operator: str, left: Value, right: Value) -> Value:
    if operator == "+":
        return string_val(left.data + right.data)
    if operator in _COMPARATORS:
        return bool_val(_COMPARATORS[operator](left.data, right.data))
    raise error_unsupported_operation(operator, "str", "str")


def _repeat_op(operator: str, text: Value, count: Value, reverse: bool = False) -> Value:
    if operator == "*":
        return string_val(text.data * count.data)
    if reverse:
        raise error_unsupported_operation(operator, "int", "str")
    raise error_unsupported_operation(operator, "str", "int")

