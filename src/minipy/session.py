"""
Session control for minipy: one environment shared by every statement
entered, plus the lexer and interpreter that feed it.
"""

import logging
from typing import Optional, Tuple

from .ast import Assignment, Program, Statement
from .errors import MinipyError
from .lexer import Lexer
from .parser import Parser
from .runtime import Environment, Interpreter, Value, NO_VALUE

logger = logging.getLogger(__name__)


class Session:
    """Governs a minipy session: statements run one after another against
    the same Environment, so later statements see earlier assignments.

    Errors raised while tokenizing, parsing or evaluating propagate to the
    caller with the offending source line attached; the environment keeps
    whatever assignments completed before the failure.
    """

    def __init__(self, env: Optional[Environment] = None):
        self.lexer = Lexer()
        self.env = env if env is not None else Environment()
        self.interpreter = Interpreter()

    def execute(self, source: str) -> Tuple[Optional[Statement], Value]:
        """Tokenize, parse and evaluate one statement.

        Returns:
            (statement, value); (None, NO_VALUE) when the source is empty
        """
        try:
            tokens = self.lexer.tokenize(source)
            node = Parser(tokens).parse()
            if node is None:
                return None, NO_VALUE
            return node, self.interpreter.evaluate(node, self.env)
        except MinipyError as err:
            err.with_source(source)
            raise

    def run_program(self, source: str) -> Value:
        """Run a whole script. Returns the value of its last statement."""
        try:
            tokens = self.lexer.tokenize(source)
            program = Parser(tokens).parse_program()
            logger.debug("running program of %d statements", len(program.statements))
            return self.interpreter.evaluate(program, self.env)
        except MinipyError as err:
            err.with_source(source)
            raise

    @staticmethod
    def should_echo(node: Optional[Statement], value: Value) -> bool:
        """Whether the prompt prints a statement's value.

        Assignments are silent, as is a statement that produced no value.
        """
        if node is None or isinstance(node, (Assignment, Program)):
            return False
        return not value.is_none
