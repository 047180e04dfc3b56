"""
Token types for the minipy lexer.

Tokens are deliberately coarse: every operator and delimiter is an OP token
distinguished by its lexeme, and every reserved word is a KEYWORD token.
The parser matches on (type, lexeme) pairs.
"""

from enum import Enum, auto
from dataclasses import dataclass


class TokenType(Enum):
    """All token kinds produced by the lexer."""

    ID = auto()         # user-defined names
    NUMBER = auto()     # 42, 3.14 (validated by the parser)
    STRING = auto()     # 'text' or "text", lexeme holds the unquoted text
    BOOL = auto()       # True, False
    KEYWORD = auto()    # if, elif, else, while, break, continue, def
    OP = auto()         # operators and delimiters: + - ( ) : ...

    # --- Layout tokens (Python-style blocks) ---
    NEWLINE = auto()    # end of a logical line
    INDENT = auto()     # increase in indentation level
    DEDENT = auto()     # decrease in indentation level

    # --- Special ---
    EOF = auto()        # end of input, never part of a tokenize() result


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""
    type: TokenType
    lexeme: str         # source text (unquoted contents for strings)
    line: int           # 1-indexed line the token starts on
    column: int = 1     # 1-indexed column the token starts on

    def is_op(self, *lexemes: str) -> bool:
        """Check for an operator token with one of the given lexemes."""
        return self.type == TokenType.OP and self.lexeme in lexemes

    def is_keyword(self, *words: str) -> bool:
        """Check for a keyword token with one of the given words."""
        return self.type == TokenType.KEYWORD and self.lexeme in words

    def describe(self) -> str:
        """Human-readable form for error messages."""
        if self.type in (TokenType.NEWLINE, TokenType.INDENT,
                         TokenType.DEDENT, TokenType.EOF):
            return self.type.name
        if self.type == TokenType.STRING:
            return repr(self.lexeme)
        return self.lexeme

    def __str__(self) -> str:
        if self.type in (TokenType.ID, TokenType.NUMBER, TokenType.STRING,
                         TokenType.BOOL, TokenType.KEYWORD, TokenType.OP):
            return f"{self.type.name}({self.lexeme!r})"
        return self.type.name


# Reserved words. 'def' is reserved but has no statement form.
KEYWORDS: frozenset = frozenset({
    "if",
    "elif",
    "else",
    "while",
    "break",
    "continue",
    "def",
})

BOOL_LITERALS: frozenset = frozenset({"True", "False"})

# Two-character operators, matched before falling back to single characters.
TWO_CHAR_OPERATORS: frozenset = frozenset({
    "==",
    "!=",
    "<=",
    ">=",
    "+=",
    "-=",
    "//",
    "**",
})

COMPARISON_OPERATORS: tuple = ("==", "!=", "<", "<=", ">", ">=")
ADDITIVE_OPERATORS: tuple = ("+", "-")
TERM_OPERATORS: tuple = ("*", "/", "//", "%")
AUGMENTED_ASSIGNMENTS: dict = {
    "+=": "+",
    "-=": "-",
}


def is_keyword(word: str) -> bool:
    """Check if a word is reserved."""
    return word in KEYWORDS
