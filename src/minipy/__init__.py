"""
minipy: a tree-walking interpreter for a small Python-like language.

This module provides:
- Lexer: Tokenizes source text, including indentation layout tokens
- Parser: Builds an AST from tokens by precedence climbing
- Interpreter: Evaluates the AST against an Environment
- Session: Runs statements one after another in a shared Environment

Usage:
    from minipy import tokenize, parse, Interpreter, Environment

    env = Environment()
    interp = Interpreter()
    interp.evaluate(parse(tokenize("x = 2 ** 10")), env)
    print(env.get("x"))            # 1024

    # Or let a Session do the plumbing
    session = Session()
    node, value = session.execute("x // 3")
"""

import logging

from .tokens import (
    Token,
    TokenType,
    KEYWORDS,
    is_keyword,
)

from .errors import (
    MinipyError,
    LexerError,
    ParserError,
    EvalError,
    Diagnostic,
    ErrorSeverity,
)

from .lexer import (
    Lexer,
    tokenize,
)

from .ast import (
    AstNode,
    AstVisitor,
    Statement,
    Expression,
    Literal,
    Variable,
    BinaryOp,
    Comparison,
    Assignment,
    ElifBranch,
    IfStatement,
    WhileStatement,
    BreakStatement,
    ContinueStatement,
    Program,
    SourceRenderer,
)

from .parser import (
    Parser,
    parse,
    parse_program,
)

from .runtime import (
    Value,
    ValueKind,
    NO_VALUE,
    Environment,
    Interpreter,
)

from .session import (
    Session,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Tokens
    'Token',
    'TokenType',
    'KEYWORDS',
    'is_keyword',
    # Errors
    'MinipyError',
    'LexerError',
    'ParserError',
    'EvalError',
    'Diagnostic',
    'ErrorSeverity',
    # Lexer
    'Lexer',
    'tokenize',
    # AST
    'AstNode',
    'AstVisitor',
    'Statement',
    'Expression',
    'Literal',
    'Variable',
    'BinaryOp',
    'Comparison',
    'Assignment',
    'ElifBranch',
    'IfStatement',
    'WhileStatement',
    'BreakStatement',
    'ContinueStatement',
    'Program',
    'SourceRenderer',
    # Parser
    'Parser',
    'parse',
    'parse_program',
    # Runtime
    'Value',
    'ValueKind',
    'NO_VALUE',
    'Environment',
    'Interpreter',
    # Session
    'Session',
]
