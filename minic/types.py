"""Runtime values of the minic interpreter.

Every expression evaluates to one of the classes below. `ReturnVal` and
`ErrorVal` are control-flow signals: the evaluator checks for them after
each sub-evaluation and returns them unchanged to its caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List

from .ast import Block

if TYPE_CHECKING:
    from .environment import Environment
    from .std.io.basic_io import FileHandle


class Value:
    """Base class for all runtime values."""
    pass


@dataclass(frozen=True)
class IntegerVal(Value):
    value: int

    def __repr__(self) -> str:
        return f"Integer({self.value})"


@dataclass(frozen=True)
class StringVal(Value):
    value: str

    def __repr__(self) -> str:
        return f'String("{self.value}")'


@dataclass(frozen=True)
class BooleanVal(Value):
    value: bool

    def __repr__(self) -> str:
        return f"Boolean({'true' if self.value else 'false'})"


class NullVal(Value):
    """Marker object for the minic `null` value."""
    def __eq__(self, other: Any) -> bool:
        return isinstance(other, NullVal)

    def __hash__(self) -> int:
        return hash(NullVal)

    def __repr__(self) -> str:
        return 'Null'


NULL = NullVal()


class FunctionVal(Value):
    """A user-defined function closed over its defining scope."""
    def __init__(self, params: List[str], body: Block, env: 'Environment', name: str = ''):
        self.params = params
        self.body = body
        self.env = env
        self.name = name

    def __eq__(self, other: Any) -> bool:
        # the captured environment takes no part in equality
        if not isinstance(other, FunctionVal):
            return False
        return self.params == other.params and self.body == other.body

    __hash__ = None

    def __repr__(self) -> str:
        return f"Function({', '.join(self.params)})"


class FileVal(Value):
    """Opaque wrapper around a host file handle owned by the io library."""
    def __init__(self, handle: 'FileHandle'):
        self.handle = handle

    def __eq__(self, other: Any) -> bool:
        return False

    __hash__ = None

    def __repr__(self) -> str:
        return 'File'


@dataclass(frozen=True)
class ReturnVal(Value):
    value: Value

    def __repr__(self) -> str:
        return f"ReturnValue({self.value!r})"


@dataclass(frozen=True)
class ErrorVal(Value):
    """A runtime error. Errors propagate as values, never as exceptions."""
    message: str

    def __repr__(self) -> str:
        return f"Error({self.message!r})"


INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


def wrap_i64(n: int) -> int:
    """Wrap an integer into the signed 64-bit range (two's complement)."""
    n &= 0xFFFFFFFFFFFFFFFF
    if n > INT64_MAX:
        n -= 2 ** 64
    return n


def is_error(value: Value) -> bool:
    return isinstance(value, ErrorVal)


def type_name(value: Value) -> str:
    """Return the upper-case type tag of a value, used in debug traces."""
    from .builtin_function import BuiltinFunction
    names = {
        IntegerVal: 'INTEGER',
        StringVal: 'STRING',
        BooleanVal: 'BOOLEAN',
        NullVal: 'NULL',
        FunctionVal: 'FUNCTION',
        BuiltinFunction: 'BUILTIN',
        FileVal: 'FILE',
        ReturnVal: 'RETURN_VALUE',
        ErrorVal: 'ERROR',
    }
    return names.get(type(value), type(value).__name__)


def inspect(value: Value) -> str:
    """Render a value the way `puts` and the driver print it."""
    from .builtin_function import BuiltinFunction
    if isinstance(value, IntegerVal):
        return str(value.value)
    if isinstance(value, StringVal):
        return value.value
    if isinstance(value, BooleanVal):
        return 'true' if value.value else 'false'
    if isinstance(value, FunctionVal):
        return f"fn({', '.join(value.params)}) {{ ... }}"
    if isinstance(value, BuiltinFunction):
        return 'builtin function'
    if isinstance(value, FileVal):
        return 'file'
    if isinstance(value, NullVal):
        return 'null'
    if isinstance(value, ReturnVal):
        return inspect(value.value)
    if isinstance(value, ErrorVal):
        return f"ERROR: {value.message}"
    return str(value)
