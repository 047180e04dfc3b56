"""
Interpreter exceptions and diagnostics.

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E2xx: Evaluation errors

Every error is fatal for the tokenize/parse/evaluate call that raised it.
Recovery (printing the message and reading the next statement) belongs to
the caller, normally the interactive shell.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List


class ErrorSeverity(Enum):
    """Severity levels for diagnostics."""
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    code: str                       # E001, E101, etc.
    message: str                    # Human-readable message
    severity: ErrorSeverity = ErrorSeverity.ERROR
    line: Optional[int] = None      # 1-indexed, None when unknown
    column: Optional[int] = None    # 1-indexed, None when unknown
    source_line: Optional[str] = None
    hints: List[str] = field(default_factory=list)

    def format(self, show_source: bool = True) -> str:
        """Format the diagnostic for display."""
        parts = []

        header = f"{self.severity.value}[{self.code}]: {self.message}"
        if self.line is not None:
            header = f"line {self.line}: {header}"
        parts.append(header)

        if show_source and self.source_line is not None and self.line is not None:
            parts.append("  |")
            parts.append(f"{self.line:>3} | {self.source_line}")
            if self.column is not None:
                parts.append(f"    | {' ' * (self.column - 1)}^")

        for hint in self.hints:
            parts.append(f"    = hint: {hint}")

        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert to a JSON-serializable dict."""
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "line": self.line,
            "column": self.column,
            "hints": self.hints,
        }


class MinipyError(Exception):
    """Base exception for interpreter errors."""

    kind = "Error"

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def code(self) -> str:
        return self.diagnostic.code

    def with_source(self, source: str) -> "MinipyError":
        """Attach the offending source line, if the location is known."""
        line = self.diagnostic.line
        if line is not None and self.diagnostic.source_line is None:
            lines = source.splitlines()
            if 1 <= line <= len(lines):
                self.diagnostic.source_line = lines[line - 1]
        return self

    def __str__(self) -> str:
        return self.diagnostic.format()


class LexerError(MinipyError):
    """Error during lexical analysis (E0xx)."""
    kind = "LexError"


class ParserError(MinipyError):
    """Error during parsing (E1xx)."""
    kind = "ParseError"


class EvalError(MinipyError):
    """Error during evaluation (E2xx)."""
    kind = "EvalError"


# --- Lexer error codes ---

def error_unterminated_string(line: int, column: int) -> LexerError:
    """E001: Unterminated string literal."""
    diag = Diagnostic(
        code="E001",
        message="unterminated string literal",
        line=line,
        column=column,
        hints=["string literals must be closed with the same quote they open with"],
    )
    return LexerError(diag)


# --- Parser error codes ---

def error_unexpected_token(found: str, line: Optional[int] = None,
                           column: Optional[int] = None) -> ParserError:
    """E101: Unexpected token."""
    diag = Diagnostic(
        code="E101",
        message=f"unexpected token: {found}",
        line=line,
        column=column,
    )
    return ParserError(diag)


def error_expected(expected: str, context: str, line: Optional[int] = None,
                   column: Optional[int] = None) -> ParserError:
    """E102: A required token is missing."""
    diag = Diagnostic(
        code="E102",
        message=f"expected {expected} {context}",
        line=line,
        column=column,
    )
    return ParserError(diag)


def error_invalid_assignment_target(line: Optional[int] = None,
                                    column: Optional[int] = None) -> ParserError:
    """E103: Left-hand side of '=' is not a variable."""
    diag = Diagnostic(
        code="E103",
        message="invalid assignment target",
        line=line,
        column=column,
        hints=["only plain variable names can be assigned to"],
    )
    return ParserError(diag)


def error_invalid_number(text: str, line: Optional[int] = None,
                         column: Optional[int] = None) -> ParserError:
    """E104: Number literal with more than one decimal point."""
    diag = Diagnostic(
        code="E104",
        message=f"invalid number format '{text}'",
        line=line,
        column=column,
    )
    return ParserError(diag)


def error_unexpected_eof(expected: str) -> ParserError:
    """E105: Input ended inside a construct."""
    diag = Diagnostic(
        code="E105",
        message=f"unexpected end of input, expected {expected}",
    )
    return ParserError(diag)


# --- Evaluation error codes ---

def error_undefined_variable(name: str) -> EvalError:
    """E201: Lookup of a name that was never assigned."""
    diag = Diagnostic(
        code="E201",
        message=f"undefined variable '{name}'",
    )
    return EvalError(diag)


def error_division_by_zero(operator: str) -> EvalError:
    """E202: Right operand of / // % is zero."""
    diag = Diagnostic(
        code="E202",
        message=f"division by zero in '{operator}'",
    )
    return EvalError(diag)


def error_unsupported_operation(operator: str, left: str, right: str) -> EvalError:
    """E203: Operator not defined for the operand kinds."""
    diag = Diagnostic(
        code="E203",
        message=f"unsupported operation: {left} {operator} {right}",
    )
    return EvalError(diag)


def error_unsupported_type(kind: str, context: str) -> EvalError:
    """E204: Value kind cannot be used in the given context."""
    diag = Diagnostic(
        code="E204",
        message=f"unsupported type '{kind}' {context}",
    )
    return EvalError(diag)


def error_signal_outside_loop(keyword: str) -> EvalError:
    """E205: break/continue reached the top of an evaluation."""
    diag = Diagnostic(
        code="E205",
        message=f"'{keyword}' outside loop",
    )
    return EvalError(diag)


def error_numeric_overflow(operator: str, left: str, right: str) -> EvalError:
    """E206: Result or operand does not fit a float."""
    diag = Diagnostic(
        code="E206",
        message=f"numeric overflow: {left} {operator} {right}",
        hints=["the int operand is too large to convert for this operator"],
    )
    return EvalError(diag)
