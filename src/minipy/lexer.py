"""
Lexer for minipy.

Converts source text into a list of tokens for the parser.
Supports:
- Python-style indentation (INDENT/DEDENT tokens)
- Significant newlines (NEWLINE tokens)
- Single-line comments (#)
- Single- and double-quoted strings, which may span lines
- Numbers as runs of digits and dots (validated later by the parser)
- Reserved words, boolean literals and identifiers
- One- and two-character operators

Anything the lexer does not recognise becomes a single-character OP token;
rejecting it is left to the parser. The only lexing error is an
unterminated string literal.
"""

import logging
from typing import List, Optional

from .tokens import Token, TokenType, KEYWORDS, BOOL_LITERALS, TWO_CHAR_OPERATORS
from .errors import error_unterminated_string

logger = logging.getLogger(__name__)

# Token kinds that legitimately carry an empty lexeme
_EMPTY_LEXEME_OK = (TokenType.STRING, TokenType.INDENT, TokenType.DEDENT)

_ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '\\': '\\',
    '"': '"',
    "'": "'",
    '0': '\0',
}


def _is_digit(ch: str) -> bool:
    """ASCII digits only; str.isdigit() also accepts superscripts."""
    return '0' <= ch <= '9'


class Lexer:
    """
    Tokenizer for minipy with Python-style indentation.

    A single instance can be reused: every call to tokenize() starts from a
    clean scan state and leaves the instance reset afterwards, even when it
    fails.

    Usage:
        lexer = Lexer()
        tokens = lexer.tokenize("x = 1 + 2")
    """

    def __init__(self):
        self._reset("")

    def _reset(self, source: str) -> None:
        self.source = source
        self.pos = 0            # Current position in source
        self.line = 1           # Current line (1-indexed)
        self.column = 1         # Current column (1-indexed)

        # Indentation tracking
        self.indent_stack = [0]
        self.at_line_start = True
        self.line_has_tokens = False     # anything emitted since last NEWLINE
        self.pending_tokens: List[Token] = []

    def tokenize(self, source: str) -> List[Token]:
        """Tokenize the entire source, returning a list of tokens.

        The returned list never contains the EOF token.

        Raises:
            LexerError: If a string literal is not terminated
        """
        self._reset(source)
        tokens = []
        try:
            while True:
                token = self._scan_token()
                if token.type == TokenType.EOF:
                    break
                if token.lexeme or token.type in _EMPTY_LEXEME_OK:
                    tokens.append(token)
        finally:
            self._reset("")
        logger.debug("tokenized %d characters into %d tokens", len(source), len(tokens))
        return tokens

    # =========================================================================
    # Character Navigation
    # =========================================================================

    def _peek(self, offset: int = 0) -> str:
        """Look at character at current position + offset without consuming."""
        idx = self.pos + offset
        if idx >= len(self.source):
            return '\0'
        return self.source[idx]

    def _advance(self) -> str:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return '\0'
        ch = self.source[self.pos]
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _make_token(self, token_type: TokenType, lexeme: str,
                    line: int, column: int) -> Token:
        if token_type not in (TokenType.NEWLINE, TokenType.INDENT, TokenType.DEDENT):
            self.line_has_tokens = True
        return Token(token_type, lexeme, line, column)

    # =========================================================================
    # Whitespace, Comments, Layout
    # =========================================================================

    def _skip_whitespace_within_line(self) -> None:
        """Skip horizontal whitespace, never newlines."""
        while not self._is_at_end() and self._peek() != '\n' and self._peek().isspace():
            self._advance()

    def _skip_comment(self) -> None:
        """Skip a # comment up to (not including) the end of the line."""
        while not self._is_at_end() and self._peek() != '\n':
            self._advance()

    def _handle_line_start(self) -> Optional[Token]:
        """
        Measure indentation at the start of a logical line.

        Blank and comment-only lines are consumed entirely. Returns an
        INDENT or the first DEDENT token when the level changes; any
        further DEDENTs are queued.
        """
        while True:
            indent = 0
            while self._peek() in ' \t':
                indent += 1  # a tab counts as one unit
                self._advance()
            if self._peek() == '#':
                self._skip_comment()
            if self._peek() == '\r' and self._peek(1) == '\n':
                self._advance()
            if self._peek() == '\n':
                self._advance()
                continue
            break

        self.at_line_start = False
        if self._is_at_end():
            return None

        line, column = self.line, self.column
        current = self.indent_stack[-1]

        if indent > current:
            self.indent_stack.append(indent)
            return self._make_token(TokenType.INDENT, self.source[self.pos - indent:self.pos],
                                    line, 1)

        if indent < current:
            dedents = []
            while self.indent_stack[-1] > indent:
                self.indent_stack.pop()
                dedents.append(self._make_token(TokenType.DEDENT, "", line, column))
            if self.indent_stack[-1] != indent:
                # Dedent to a level that was never opened; accept it as new
                self.indent_stack.append(indent)
            self.pending_tokens.extend(dedents[1:])
            return dedents[0]

        return None

    def _end_of_input(self) -> Token:
        """Close the last logical line and every open block, then EOF."""
        if self.line_has_tokens:
            self.line_has_tokens = False
            return self._make_token(TokenType.NEWLINE, "\\n", self.line, self.column)
        while len(self.indent_stack) > 1:
            self.indent_stack.pop()
            self.pending_tokens.append(
                self._make_token(TokenType.DEDENT, "", self.line, self.column)
            )
        if self.pending_tokens:
            return self.pending_tokens.pop(0)
        return Token(TokenType.EOF, "", self.line, self.column)

    # =========================================================================
    # Scanners
    # =========================================================================

    def _scan_number(self) -> Token:
        """Scan digits and dots greedily; '1.2.3' is rejected by the parser."""
        line, column, start = self.line, self.column, self.pos
        while _is_digit(self._peek()) or self._peek() == '.':
            self._advance()
        return self._make_token(TokenType.NUMBER, self.source[start:self.pos], line, column)

    def _scan_string(self) -> Token:
        """Scan a quoted string literal, decoding escapes."""
        line, column = self.line, self.column
        quote = self._advance()
        chars = []

        while not self._is_at_end() and self._peek() != quote:
            ch = self._advance()
            if ch == '\\':
                if self._is_at_end():
                    break
                esc = self._advance()
                chars.append(_ESCAPES.get(esc, '\\' + esc))
            else:
                chars.append(ch)

        if self._is_at_end():
            raise error_unterminated_string(line, column)

        self._advance()  # closing quote
        return self._make_token(TokenType.STRING, ''.join(chars), line, column)

    def _scan_identifier_or_keyword(self) -> Token:
        """Scan an identifier, reserved word or boolean literal."""
        line, column, start = self.line, self.column, self.pos
        while self._peek().isalnum() or self._peek() == '_':
            self._advance()
        word = self.source[start:self.pos]

        if word in KEYWORDS:
            return self._make_token(TokenType.KEYWORD, word, line, column)
        if word in BOOL_LITERALS:
            return self._make_token(TokenType.BOOL, word, line, column)
        return self._make_token(TokenType.ID, word, line, column)

    def _scan_operator(self) -> Token:
        """Scan an operator, preferring the two-character form."""
        line, column = self.line, self.column
        ch = self._advance()
        if ch + self._peek() in TWO_CHAR_OPERATORS:
            ch += self._advance()
        return self._make_token(TokenType.OP, ch, line, column)

    def _scan_token(self) -> Token:
        """Scan the next token."""
        if self.pending_tokens:
            return self.pending_tokens.pop(0)

        if self.at_line_start:
            layout = self._handle_line_start()
            if layout:
                return layout

        self._skip_whitespace_within_line()
        if self._peek() == '#':
            self._skip_comment()

        if self._is_at_end():
            return self._end_of_input()

        line, column = self.line, self.column
        ch = self._peek()

        if ch == '\n':
            self._advance()
            self.at_line_start = True
            self.line_has_tokens = False
            return self._make_token(TokenType.NEWLINE, "\\n", line, column)

        if _is_digit(ch):
            return self._scan_number()

        if ch in '"\'':
            return self._scan_string()

        if ch.isalpha() or ch == '_':
            return self._scan_identifier_or_keyword()

        return self._scan_operator()


def tokenize(source: str) -> List[Token]:
    """
    Convenience function to tokenize source code.

    Args:
        source: The source code to tokenize

    Returns:
        List of tokens (without an EOF marker)

    Raises:
        LexerError: If tokenization fails
    """
    return Lexer().tokenize(source)
