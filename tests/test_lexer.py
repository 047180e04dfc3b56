"""
Unit tests for the minipy lexer.
"""

import pytest
from minipy import tokenize, Lexer, Token, TokenType, LexerError


def types_of(source):
    return [t.type for t in tokenize(source)]


def lexemes_of(source, token_type=None):
    return [t.lexeme for t in tokenize(source)
            if token_type is None or t.type == token_type]


class TestLexerBasics:
    """Test basic lexer functionality."""

    def test_empty_source(self):
        """Empty source produces no tokens; EOF is never returned."""
        assert tokenize("") == []

    def test_whitespace_only(self):
        """Whitespace-only source produces no tokens."""
        assert tokenize("   \t  ") == []

    def test_simple_assignment(self):
        """Basic assignment tokenization."""
        assert types_of("x = 1 + 2") == [
            TokenType.ID,
            TokenType.OP,
            TokenType.NUMBER,
            TokenType.OP,
            TokenType.NUMBER,
            TokenType.NEWLINE,
        ]
        assert lexemes_of("x = 1 + 2")[:-1] == ["x", "=", "1", "+", "2"]

    def test_position_tracking(self):
        """Token positions are tracked correctly."""
        tokens = tokenize("x = 15")
        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert tokens[1].column == 3
        assert tokens[2].column == 5

    def test_multiline_position_tracking(self):
        """Position tracking across multiple lines."""
        tokens = tokenize("a = 1\nb = 2")
        ids = [t for t in tokens if t.type == TokenType.ID]
        assert ids[0].line == 1
        assert ids[1].line == 2
        assert ids[1].column == 1

    def test_unknown_character_is_operator(self):
        """Characters the language does not use still lex as operators."""
        tokens = tokenize("x $ y")
        assert tokens[1].type == TokenType.OP
        assert tokens[1].lexeme == "$"

    def test_crlf_line_endings(self):
        """Windows line endings behave like plain newlines."""
        assert types_of("a\r\nb\r\n") == [
            TokenType.ID, TokenType.NEWLINE, TokenType.ID, TokenType.NEWLINE,
        ]

    def test_token_str(self):
        """Tokens render with their kind and lexeme."""
        assert str(Token(TokenType.ID, "x", 1)) == "ID('x')"
        assert str(Token(TokenType.NEWLINE, "\\n", 1)) == "NEWLINE"


class TestComments:
    """Test comment handling."""

    def test_comment_only(self):
        """A comment-only source produces no tokens."""
        assert tokenize("# nothing here") == []

    def test_comment_at_end_of_line(self):
        """Comments end at the newline."""
        assert types_of("x # comment") == [TokenType.ID, TokenType.NEWLINE]

    def test_comment_does_not_break_line_count(self):
        """Lines after a comment keep their numbers."""
        tokens = tokenize("x = 1 # c\ny = 2")
        y = [t for t in tokens if t.lexeme == "y"][0]
        assert y.line == 2


class TestOperators:
    """Test operator recognition."""

    def test_two_char_operators(self):
        """Every two-character operator lexes as one token."""
        ops = ["==", "!=", "<=", ">=", "+=", "-=", "//", "**"]
        assert lexemes_of(" ".join(ops), TokenType.OP) == ops

    def test_single_char_operators(self):
        """Single-character operators and delimiters."""
        ops = ["+", "-", "*", "/", "%", "<", ">", "=", "(", ")", ":"]
        assert lexemes_of(" ".join(ops), TokenType.OP) == ops

    def test_longest_match_without_spaces(self):
        """Two-character operators win over their first character."""
        assert lexemes_of("a**b//c", TokenType.OP) == ["**", "//"]
        assert lexemes_of("x+=1", TokenType.OP) == ["+="]

    def test_unrelated_pair_splits(self):
        """A pair outside the operator set is two tokens."""
        assert lexemes_of("2**-1", TokenType.OP) == ["**", "-"]
        assert lexemes_of("a=-1", TokenType.OP) == ["=", "-"]


class TestNumericLiterals:
    """Test numeric literals."""

    def test_integer(self):
        """Integer literal."""
        tokens = tokenize("42")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].lexeme == "42"

    def test_float(self):
        """Float literal."""
        assert lexemes_of("3.14", TokenType.NUMBER) == ["3.14"]

    def test_many_dots_left_to_parser(self):
        """A run of digits and dots is one NUMBER token, valid or not."""
        tokens = tokenize("5.0.0")
        assert len(tokens) == 2
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].lexeme == "5.0.0"

    def test_only_ascii_digits(self):
        """Superscripts and other Unicode digits do not start a number."""
        tokens = tokenize("\u00b2 \u2460")
        assert [t.type for t in tokens[:2]] == [TokenType.OP, TokenType.OP]
        assert lexemes_of("2\u00b2", TokenType.NUMBER) == ["2"]


class TestStringLiterals:
    """Test string literals."""

    def test_double_quote_string(self):
        """Double-quoted string holds the unquoted text."""
        tokens = tokenize('"hello"')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].lexeme == "hello"

    def test_single_quote_string(self):
        """Single-quoted string."""
        assert lexemes_of("'hello'", TokenType.STRING) == ["hello"]

    def test_other_quote_inside(self):
        """The other quote character needs no escape."""
        assert lexemes_of("\"it's\"", TokenType.STRING) == ["it's"]

    def test_empty_string_kept(self):
        """An empty string is still a token."""
        tokens = tokenize("''")
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].lexeme == ""

    def test_escape_sequences(self):
        """Escape sequences are decoded."""
        assert lexemes_of(r'"a\nb\tc"', TokenType.STRING) == ["a\nb\tc"]
        assert lexemes_of(r'"say \"hi\""', TokenType.STRING) == ['say "hi"']
        assert lexemes_of(r"'back\\slash'", TokenType.STRING) == ["back\\slash"]

    def test_unknown_escape_kept(self):
        """An unknown escape keeps its backslash."""
        assert lexemes_of(r'"\q"', TokenType.STRING) == ["\\q"]

    def test_string_spanning_lines(self):
        """Newlines inside a string advance the line counter."""
        tokens = tokenize('"a\nb" x')
        assert tokens[0].lexeme == "a\nb"
        assert tokens[1].lexeme == "x"
        assert tokens[1].line == 2

    def test_unterminated_string(self):
        """Unterminated string raises error."""
        with pytest.raises(LexerError) as exc_info:
            tokenize('x = "unterminated')
        assert exc_info.value.code == "E001"
        assert exc_info.value.diagnostic.line == 1
        assert exc_info.value.diagnostic.column == 5
        assert "E001" in str(exc_info.value)


class TestIdentifiersAndKeywords:
    """Test words."""

    def test_keywords(self):
        """Every reserved word is a KEYWORD token."""
        words = ["if", "elif", "else", "while", "break", "continue", "def"]
        tokens = tokenize(" ".join(words))
        assert all(t.type == TokenType.KEYWORD for t in tokens[:-1])
        assert [t.lexeme for t in tokens[:-1]] == words

    def test_booleans(self):
        """True and False are BOOL tokens."""
        assert types_of("True False")[:2] == [TokenType.BOOL, TokenType.BOOL]

    def test_case_sensitive(self):
        """Reserved words and booleans are case-sensitive."""
        assert types_of("true If")[:2] == [TokenType.ID, TokenType.ID]

    def test_keyword_prefix_is_identifier(self):
        """A word starting with a keyword is an identifier."""
        assert types_of("iffy")[0] == TokenType.ID

    def test_identifier_with_digits(self):
        """Identifiers may contain digits and underscores."""
        tokens = tokenize("_tmp x1_y2")
        assert [t.lexeme for t in tokens[:2]] == ["_tmp", "x1_y2"]
        assert all(t.type == TokenType.ID for t in tokens[:2])


class TestIndentation:
    """Test layout tokens."""

    def test_block(self):
        """An indented block is bracketed by INDENT and DEDENT."""
        assert types_of("if x:\n    y = 1\nz = 2\n") == [
            TokenType.KEYWORD, TokenType.ID, TokenType.OP, TokenType.NEWLINE,
            TokenType.INDENT, TokenType.ID, TokenType.OP, TokenType.NUMBER, TokenType.NEWLINE,
            TokenType.DEDENT, TokenType.ID, TokenType.OP, TokenType.NUMBER, TokenType.NEWLINE,
        ]

    def test_open_blocks_closed_at_end(self):
        """End of input closes the last line and every open block."""
        types = types_of("while a:\n    if b:\n        c")
        assert types[-3:] == [TokenType.NEWLINE, TokenType.DEDENT, TokenType.DEDENT]
        assert types.count(TokenType.INDENT) == 2

    def test_blank_lines_ignored(self):
        """Blank lines produce no layout tokens."""
        assert types_of("if x:\n\n    y\n") == [
            TokenType.KEYWORD, TokenType.ID, TokenType.OP, TokenType.NEWLINE,
            TokenType.INDENT, TokenType.ID, TokenType.NEWLINE, TokenType.DEDENT,
        ]

    def test_comment_lines_ignored(self):
        """An unindented comment inside a block does not close it."""
        types = types_of("if x:\n    y\n# note\n    z\n")
        assert types.count(TokenType.DEDENT) == 1
        assert types[-1] == TokenType.DEDENT

    def test_indent_lexeme(self):
        """INDENT carries the indentation text."""
        indent = [t for t in tokenize("if x:\n  y") if t.type == TokenType.INDENT][0]
        assert indent.lexeme == "  "


class TestRestart:
    """Test reuse of one Lexer instance."""

    def test_successive_calls_independent(self):
        """Position state resets between calls."""
        lexer = Lexer()
        first = lexer.tokenize("x = 1\ny = 2")
        second = lexer.tokenize("'s'")
        assert first[-2].line == 2
        assert second[0].type == TokenType.STRING
        assert (second[0].line, second[0].column) == (1, 1)

    def test_indentation_resets(self):
        """Open blocks from an earlier call do not leak."""
        lexer = Lexer()
        lexer.tokenize("if x:\n    y")
        assert [t.type for t in lexer.tokenize("z")] == [TokenType.ID, TokenType.NEWLINE]

    def test_reset_after_error(self):
        """A failed call leaves the lexer usable."""
        lexer = Lexer()
        with pytest.raises(LexerError):
            lexer.tokenize('\n\n"oops')
        tokens = lexer.tokenize("y")
        assert tokens[0].lexeme == "y"
        assert tokens[0].line == 1
