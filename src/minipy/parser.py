"""
Recursive descent parser for minipy.

Converts a token stream into an Abstract Syntax Tree (AST).
Supports Python-style indentation-based blocks as well as a single simple
statement on the same line as the ':'.
"""

import logging
from typing import List, Optional

from .tokens import (
    Token, TokenType,
    COMPARISON_OPERATORS, ADDITIVE_OPERATORS, TERM_OPERATORS,
    AUGMENTED_ASSIGNMENTS,
)
from .ast import (
    Statement, Expression, Literal, Variable, BinaryOp, Comparison, Assignment,
    ElifBranch, IfStatement, WhileStatement, BreakStatement, ContinueStatement,
    Program,
)
from .runtime.values import int_val, float_val, bool_val, string_val
from .errors import (
    error_unexpected_token,
    error_expected,
    error_invalid_assignment_target,
    error_invalid_number,
    error_unexpected_eof,
)

logger = logging.getLogger(__name__)


class Parser:
    """
    Recursive descent parser for minipy.

    Usage:
        parser = Parser(tokens)
        stmt = parser.parse()

    A parser keeps a cursor into its token list and is used once; build a
    new one for every statement or script.

    Expressions are parsed by a precedence cascade, lowest first:
        Lowest:  =  += -=      (right-associative)
                 == != < <= > >=  (one chained Comparison node)
                 + -
                 * / // %
                 unary -       (desugared to 0 - x)
        Highest: **            (right operand parsed at unary level)
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0
        if tokens:
            last = tokens[-1]
            self._eof = Token(TokenType.EOF, "", last.line, last.column + len(last.lexeme))
        else:
            self._eof = Token(TokenType.EOF, "", 1, 1)

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _current(self) -> Token:
        """Get current token, or EOF past the end."""
        if self.pos >= len(self.tokens):
            return self._eof
        return self.tokens[self.pos]

    def _is_at_end(self) -> bool:
        return self._current().type == TokenType.EOF

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token is of given type."""
        return self._current().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self._current()
        if not self._is_at_end():
            self.pos += 1
        return token

    def _match_op(self, *lexemes: str) -> Optional[Token]:
        """Consume an operator token if it is one of the given lexemes."""
        if self._current().is_op(*lexemes):
            return self._advance()
        return None

    def _consume_op(self, lexeme: str, context: str) -> Token:
        """Consume the given operator, or raise 'expected ...'."""
        token = self._current()
        if token.is_op(lexeme):
            return self._advance()
        raise error_expected(f"'{lexeme}'", context, token.line, token.column)

    def _skip_newlines(self) -> None:
        """Skip any NEWLINE tokens."""
        while self._check(TokenType.NEWLINE):
            self._advance()

    def _skip_separators(self) -> None:
        """Skip NEWLINEs and stray DEDENTs between top-level statements."""
        while self._check(TokenType.NEWLINE) or self._check(TokenType.DEDENT):
            self._advance()

    def _expect_newline_or_eof(self) -> None:
        """Expect the end of a simple statement."""
        if self._check(TokenType.NEWLINE):
            self._advance()
            return
        # A block may close right after its last statement
        if self._is_at_end() or self._check(TokenType.DEDENT):
            return
        self._error()

    def _error(self) -> None:
        """Raise an error for the current token."""
        token = self._current()
        if token.type == TokenType.EOF:
            raise error_unexpected_eof("more input")
        raise error_unexpected_token(token.describe(), token.line, token.column)

    @staticmethod
    def _require(expr: Optional[Expression], expected: str) -> Expression:
        """Turn an empty operand (input ran out) into an error."""
        if expr is None:
            raise error_unexpected_eof(expected)
        return expr

    # =========================================================================
    # Expression Parsing
    # =========================================================================

    def _parse_assignment(self) -> Optional[Expression]:
        """Parse an assignment, or fall through to a comparison."""
        expr = self._parse_comparison()

        op = self._match_op("=", *AUGMENTED_ASSIGNMENTS)
        if op is None:
            return expr

        if not isinstance(expr, Variable):
            raise error_invalid_assignment_target(op.line, op.column)

        if op.lexeme == "=":
            value = self._require(self._parse_assignment(), "expression after '='")
            return Assignment(expr.name, value)

        # x += e  ->  x = (x + e)
        value = self._require(self._parse_comparison(), f"expression after '{op.lexeme}'")
        return Assignment(
            expr.name,
            BinaryOp(Variable(expr.name), AUGMENTED_ASSIGNMENTS[op.lexeme], value),
        )

    def _parse_comparison(self) -> Optional[Expression]:
        """Parse a comparison chain into one flat Comparison node."""
        first = self._parse_additive()

        comparisons = []
        while self._current().is_op(*COMPARISON_OPERATORS):
            op = self._advance()
            right = self._require(self._parse_additive(), f"expression after '{op.lexeme}'")
            comparisons.append((op.lexeme, right))

        if not comparisons:
            return first
        return Comparison(self._require(first, "expression"), comparisons)

    def _parse_additive(self) -> Optional[Expression]:
        left = self._parse_term()
        while self._current().is_op(*ADDITIVE_OPERATORS):
            op = self._advance()
            right = self._require(self._parse_term(), f"expression after '{op.lexeme}'")
            left = BinaryOp(self._require(left, "expression"), op.lexeme, right)
        return left

    def _parse_term(self) -> Optional[Expression]:
        left = self._parse_unary()
        while self._current().is_op(*TERM_OPERATORS):
            op = self._advance()
            right = self._require(self._parse_unary(), f"expression after '{op.lexeme}'")
            left = BinaryOp(self._require(left, "expression"), op.lexeme, right)
        return left

    def _parse_unary(self) -> Optional[Expression]:
        """Parse unary minus, stored as a subtraction from zero."""
        if self._match_op("-"):
            operand = self._require(self._parse_unary(), "operand after '-'")
            return BinaryOp(Literal(int_val(0)), "-", operand)
        return self._parse_power()

    def _parse_power(self) -> Optional[Expression]:
        """Parse '**'; the exponent goes back through the unary level, so
        `2 ** 3 ** 2` nests to the right and `2 ** -1` is accepted."""
        base = self._parse_primary()
        if self._match_op("**"):
            exponent = self._require(self._parse_unary(), "expression after '**'")
            return BinaryOp(self._require(base, "expression"), "**", exponent)
        return base

    def _parse_primary(self) -> Optional[Expression]:
        """Parse primary expressions. Returns None at end of input."""
        token = self._current()

        if token.type == TokenType.EOF:
            return None

        if token.type == TokenType.NUMBER:
            self._advance()
            return Literal(self._parse_number(token))

        if token.type == TokenType.STRING:
            self._advance()
            return Literal(string_val(token.lexeme))

        if token.type == TokenType.BOOL:
            self._advance()
            return Literal(bool_val(token.lexeme == "True"))

        if token.type == TokenType.ID:
            self._advance()
            return Variable(token.lexeme)

        if token.is_op("("):
            self._advance()
            expr = self._require(self._parse_comparison(), "expression after '('")
            self._consume_op(")", "to close '('")
            return expr

        raise error_unexpected_token(token.describe(), token.line, token.column)

    def _parse_number(self, token: Token):
        dots = token.lexeme.count(".")
        try:
            if dots == 0:
                return int_val(int(token.lexeme))
            if dots == 1:
                return float_val(float(token.lexeme))
        except ValueError:
            pass  # e.g. a lone '.' in a hand-built token
        raise error_invalid_number(token.lexeme, token.line, token.column)

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_statement(self) -> Statement:
        """Parse a statement."""
        token = self._current()

        if token.is_keyword("if"):
            return self._parse_if_statement()
        if token.is_keyword("while"):
            return self._parse_while_statement()

        return self._parse_simple_statement()

    def _parse_simple_statement(self) -> Statement:
        """Parse a one-line statement and its terminating newline."""
        token = self._current()

        if token.is_keyword("break"):
            self._advance()
            stmt = BreakStatement()
        elif token.is_keyword("continue"):
            self._advance()
            stmt = ContinueStatement()
        else:
            stmt = self._require(self._parse_assignment(), "statement")

        self._expect_newline_or_eof()
        return stmt

    def _parse_if_statement(self) -> IfStatement:
        """Parse an if statement."""
        self._advance()  # consume 'if'
        condition = self._require(self._parse_assignment(), "condition after 'if'")
        body = self._parse_block("after if condition")

        elif_branches = []
        while self._current().is_keyword("elif"):
            self._advance()  # consume 'elif'
            elif_cond = self._require(self._parse_assignment(), "condition after 'elif'")
            elif_body = self._parse_block("after elif condition")
            elif_branches.append(ElifBranch(elif_cond, elif_body))

        else_body = None
        if self._current().is_keyword("else"):
            self._advance()
            else_body = self._parse_block("after 'else'")

        return IfStatement(condition, body, elif_branches, else_body)

    def _parse_while_statement(self) -> WhileStatement:
        """Parse a while loop with its optional else block."""
        self._advance()  # consume 'while'
        condition = self._require(self._parse_assignment(), "condition after 'while'")
        body = self._parse_block("after while condition")

        else_body = None
        if self._current().is_keyword("else"):
            self._advance()
            else_body = self._parse_block("after 'else'")

        return WhileStatement(condition, body, else_body)

    def _parse_block(self, context: str) -> List[Statement]:
        """Parse ':' and the suite after it.

        The suite is either one simple statement on the same line, or
        NEWLINE INDENT statements... DEDENT.
        """
        self._consume_op(":", context)

        if self._is_at_end():
            raise error_expected("newline", "after ':'", self._eof.line, self._eof.column)

        if not self._check(TokenType.NEWLINE):
            return [self._parse_simple_statement()]

        self._advance()  # NEWLINE
        self._skip_newlines()

        if self._is_at_end():
            raise error_unexpected_eof("an indented block")
        if not self._check(TokenType.INDENT):
            token = self._current()
            raise error_expected("an indented block", "after ':'", token.line, token.column)
        self._advance()  # INDENT

        statements = []
        while True:
            self._skip_newlines()
            if self._check(TokenType.DEDENT):
                self._advance()
                break
            if self._is_at_end():
                raise error_unexpected_eof("dedent")
            statements.append(self._parse_statement())

        return statements

    # =========================================================================
    # Entry Points
    # =========================================================================

    def parse(self) -> Optional[Statement]:
        """
        Parse exactly one statement.

        Returns:
            The statement, or None if the input holds no tokens besides
            newlines

        Raises:
            ParserError: On any grammar violation, including tokens left
                over after the statement
        """
        self._skip_newlines()
        if self._is_at_end():
            return None

        stmt = self._parse_statement()

        self._skip_separators()
        if not self._is_at_end():
            self._error()

        logger.debug("parsed %s", type(stmt).__name__)
        return stmt

    def parse_program(self) -> Program:
        """Parse a whole script into a Program."""
        statements = []
        self._skip_separators()
        while not self._is_at_end():
            statements.append(self._parse_statement())
            self._skip_separators()

        logger.debug("parsed program of %d statements", len(statements))
        return Program(statements)


def parse(tokens: List[Token]) -> Optional[Statement]:
    """
    Convenience function to parse tokens into a single statement.

    Args:
        tokens: List of tokens from the lexer

    Returns:
        Parsed statement, or None for empty input

    Raises:
        ParserError: If parsing fails
    """
    return Parser(tokens).parse()


def parse_program(tokens: List[Token]) -> Program:
    """Convenience function to parse a whole script."""
    return Parser(tokens).parse_program()
