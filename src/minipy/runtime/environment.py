"""
Variable environment for the minipy interpreter.

One flat table per session: no nested scopes and no call frames. Every
assignment writes here and every variable reference reads from here.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator

from .values import Value
from ..errors import error_undefined_variable


@dataclass
class Environment:
    """A mapping from variable name to Value."""
    variables: Dict[str, Value] = field(default_factory=dict)

    def get(self, name: str) -> Value:
        """Look up a variable.

        Raises:
            EvalError: If the name was never assigned
        """
        try:
            return self.variables[name]
        except KeyError:
            raise error_undefined_variable(name) from None

    def set(self, name: str, value: Value) -> None:
        """Bind a name, replacing any previous binding."""
        self.variables[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self.variables

    def __iter__(self) -> Iterator[str]:
        return iter(self.variables)

    def __len__(self) -> int:
        return len(self.variables)
