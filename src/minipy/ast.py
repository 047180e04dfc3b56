"""
Abstract Syntax Tree (AST) node definitions for minipy.

The node set is closed: the interpreter dispatches on the concrete node
class, and SourceRenderer turns any node back into canonical source text
(every binary operation parenthesised), which is what str(node) returns.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Optional, Tuple
from abc import ABC

if TYPE_CHECKING:
    from .runtime.values import Value


# =============================================================================
# Base Classes
# =============================================================================

@dataclass
class AstNode(ABC):
    """Base class for all AST nodes."""

    def accept(self, visitor: "AstVisitor") -> Any:
        """Accept a visitor for traversal."""
        method_name = f"visit_{self.__class__.__name__}"
        method = getattr(visitor, method_name, visitor.generic_visit)
        return method(self)

    def __str__(self) -> str:
        return SourceRenderer().render(self)


class AstVisitor(ABC):
    """Base class for AST visitors."""

    def generic_visit(self, node: AstNode) -> Any:
        """Default visit method."""
        raise NotImplementedError(f"No visitor for {node.__class__.__name__}")


@dataclass
class Statement(AstNode):
    """Base class for all statements."""
    pass


@dataclass
class Expression(Statement):
    """Base class for expressions. Any expression can stand as a statement."""
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class Literal(Expression):
    """A literal value (int, float, string, bool)."""
    value: "Value"


@dataclass
class Variable(Expression):
    """A variable reference."""
    name: str


@dataclass
class BinaryOp(Expression):
    """A binary operation (e.g., a + b). Unary minus is stored as 0 - x."""
    left: Expression
    operator: str
    right: Expression


@dataclass
class Comparison(Expression):
    """A comparison chain: first op1 right1 op2 right2 ...

    Stored flat rather than as nested BinaryOps so that `a < b < c`
    can be evaluated pairwise, each operand at most once.
    """
    first: Expression
    comparisons: List[Tuple[str, Expression]] = field(default_factory=list)


@dataclass
class Assignment(Expression):
    """An assignment to a variable (e.g., x = 5). Yields the assigned value."""
    name: str
    value: Expression


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class ElifBranch(AstNode):
    """An elif branch in an if statement."""
    condition: Expression
    body: List[Statement]


@dataclass
class IfStatement(Statement):
    """An if statement.

    Syntax:
        if condition:
            ...
        elif condition:
            ...
        else:
            ...
    """
    condition: Expression
    body: List[Statement]
    elif_branches: List[ElifBranch] = field(default_factory=list)
    else_body: Optional[List[Statement]] = None


@dataclass
class WhileStatement(Statement):
    """A while loop, with an else block run when the loop ends without break."""
    condition: Expression
    body: List[Statement]
    else_body: Optional[List[Statement]] = None


@dataclass
class BreakStatement(Statement):
    """break"""
    pass


@dataclass
class ContinueStatement(Statement):
    """continue"""
    pass


@dataclass
class Program(AstNode):
    """A whole script: statements run in order against one environment."""
    statements: List[Statement] = field(default_factory=list)


# =============================================================================
# Visitor Helpers
# =============================================================================

class SourceRenderer(AstVisitor):
    """Renders nodes back to canonical source text."""

    INDENT = "    "

    def __init__(self, depth: int = 0):
        self.depth = depth

    def render(self, node: AstNode) -> str:
        return node.accept(self)

    def _block(self, statements: List[Statement]) -> List[str]:
        inner = SourceRenderer(self.depth + 1)
        prefix = self.INDENT * (self.depth + 1)
        lines = []
        for stmt in statements:
            text = inner.render(stmt)
            # compound statements come back already indented after line one
            lines.append(prefix + text)
        return lines

    def _header(self, text: str) -> str:
        return self.INDENT * self.depth + text

    def visit_Literal(self, node: Literal) -> str:
        return node.value.to_repr()

    def visit_Variable(self, node: Variable) -> str:
        return node.name

    def visit_BinaryOp(self, node: BinaryOp) -> str:
        return f"({self.render(node.left)} {node.operator} {self.render(node.right)})"

    def visit_Comparison(self, node: Comparison) -> str:
        parts = [self.render(node.first)]
        for operator, operand in node.comparisons:
            parts.append(operator)
            parts.append(self.render(operand))
        return "(" + " ".join(parts) + ")"

    def visit_Assignment(self, node: Assignment) -> str:
        return f"{node.name} = {self.render(node.value)}"

    def visit_IfStatement(self, node: IfStatement) -> str:
        lines = [f"if {self.render(node.condition)}:"]
        lines.extend(self._block(node.body))
        for branch in node.elif_branches:
            lines.append(self._header(f"elif {self.render(branch.condition)}:"))
            lines.extend(self._block(branch.body))
        if node.else_body is not None:
            lines.append(self._header("else:"))
            lines.extend(self._block(node.else_body))
        return "\n".join(lines)

    def visit_WhileStatement(self, node: WhileStatement) -> str:
        lines = [f"while {self.render(node.condition)}:"]
        lines.extend(self._block(node.body))
        if node.else_body is not None:
            lines.append(self._header("else:"))
            lines.extend(self._block(node.else_body))
        return "\n".join(lines)

    def visit_BreakStatement(self, node: BreakStatement) -> str:
        return "break"

    def visit_ContinueStatement(self, node: ContinueStatement) -> str:
        return "continue"

    def visit_Program(self, node: Program) -> str:
        return "\n".join(self.render(stmt) for stmt in node.statements)
