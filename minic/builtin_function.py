from typing import Any, Callable, List, Optional

from minic.errors import BuiltinError
from minic.types import Value, ErrorVal


class BuiltinFunction(Value):
    """A host function exposed to minic programs.

    `fn` takes the evaluated argument list and returns a Value. An arity
    of None means the builtin is variadic. A builtin signals failure by
    returning an ErrorVal or by raising BuiltinError, which `call` turns
    into an ErrorVal. `arity_message` replaces the generic text reported
    when the argument count is wrong.
    """
    def __init__(self, name: str, arity: Optional[int], fn: Callable[[List[Value]], Value],
                 arity_message: Optional[str] = None):
        self.name = name
        self.arity = arity
        self.fn = fn
        self.arity_message = arity_message

    def call(self, args: List[Value]) -> Value:
        if self.arity is not None and len(args) != self.arity:
            if self.arity_message:
                return ErrorVal(self.arity_message)
            plural = '' if self.arity == 1 else 's'
            return ErrorVal(f"{self.name} expected {self.arity} argument{plural}, got {len(args)}")
        try:
            return self.fn(args)
        except BuiltinError as ex:
            return ErrorVal(ex.message)

    def __eq__(self, other: Any) -> bool:
        # builtins have no comparable identity, not even with themselves
        return False

    __hash__ = None

    def __repr__(self) -> str:
        return f"Builtin({self.name})"
