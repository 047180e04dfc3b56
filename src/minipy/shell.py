"""Interactive prompt for minipy. Uses cmd as backend."""

import cmd
import logging

from termcolor import colored

from .errors import MinipyError
from .lexer import tokenize
from .session import Session
from .tokens import TokenType

logger = logging.getLogger(__name__)

ERROR_COLOR = "red"


def render_error(kind, text, color=True):
    """Prefix an error message with its kind, bold red unless color is off."""
    header = f"{kind}: "
    if color:
        header = colored(header, ERROR_COLOR, attrs=["bold"])
    return header + text


class Shell(cmd.Cmd):
    """minipy interactive shell.

    A line whose last token is ':' opens a block; following lines are
    collected under the secondary prompt until a blank line, then the whole
    block runs as one statement.
    """
    intro = "minipy interactive shell\nType 'exit' or press Ctrl-D to leave."
    prompt = ">>> "
    secondary_prompt = "... "  # used for block continuations
    _tmp_prompt = ">>> "       # restored once a block is complete
    exit_commands = ("exit", "quit", "q", "Q")

    def __init__(self, session=None, color=True, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.session = session if session is not None else Session()
        self.color = color

        self._block = []

    def onecmd(self, line):
        """Route a line: exit command, block continuation, or statement.

        Bypasses cmd's do_* dispatch so that names like `help` or `q` in a
        statement are not taken for commands.
        """
        if line == "EOF":
            return self.do_EOF(line)

        if self._block:
            return self._continue_block(line)

        command = line.strip()
        if not command:
            return self.emptyline()
        if command in self.exit_commands:
            return self.do_exit(command)

        if self._opens_block(command):
            self._block = [line]
            self.prompt = self.secondary_prompt
            return False

        self.default(line)
        return False

    @staticmethod
    def _opens_block(command):
        """True if the line's last token is ':', so trailing comments and
        colons inside strings are judged the way the lexer sees them."""
        try:
            tokens = tokenize(command)
        except MinipyError:
            return False  # left for execution to report
        significant = [t for t in tokens if t.type not in (TokenType.NEWLINE, TokenType.DEDENT)]
        return bool(significant) and significant[-1].is_op(":")

    def _continue_block(self, line):
        if line.strip():
            self._block.append(line)
            return False

        source = "\n".join(self._block) + "\n"
        self._block = []
        self.prompt = self._tmp_prompt
        self.default(source)
        return False

    def default(self, line):
        """Executes a statement and echoes its value."""
        try:
            node, value = self.session.execute(line)
        except MinipyError as err:
            self.report(err)
            return
        except RecursionError:
            self._print_error("Error", "maximum recursion depth exceeded")
            return

        if self.session.should_echo(node, value):
            print(value.to_repr(), file=self.stdout)

    def report(self, err: MinipyError):
        """Print an error; the session carries on."""
        logger.debug("statement failed with %s", err.code)
        self._print_error(err.kind, err.diagnostic.format())

    def _print_error(self, kind, text):
        print(render_error(kind, text, self.color), file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter, running any unfinished block first."""
        if self._block:
            self._continue_block("")
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True

    def run(self):
        """Run the prompt loop until an exit command; Ctrl-C drops the
        current input and returns to the prompt."""
        while True:
            try:
                self.cmdloop()
                return
            except KeyboardInterrupt:
                print("\nKeyboardInterrupt", file=self.stdout)
                self._block = []
                self.prompt = self._tmp_prompt
                self.intro = ""
