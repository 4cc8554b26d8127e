"""The builtin function library bound into every program's global scope."""

import sys
from typing import List

from minic.builtin_function import BuiltinFunction
from minic.environment import Environment
from minic.errors import BuiltinError
from minic.types import Value, StringVal, NULL, inspect
from .format import format_output
from .io import populate_io_environment


def populate_std_environment(env: Environment) -> Environment:
    """Bind the console and file builtins into `env`."""

    def std_puts(args: List[Value]) -> Value:
        print(inspect(args[0]))
        return NULL

    def std_putchar(args: List[Value]) -> Value:
        text = inspect(args[0])
        if text:
            print(text[0], end='')
        return NULL

    def std_printf(args: List[Value]) -> Value:
        print(format_output(args), end='')
        return NULL

    def std_sprintf(args: List[Value]) -> Value:
        return StringVal(format_output(args))

    def std_getchar(args: List[Value]) -> Value:
        # one raw byte, mapped to a character the way file reads are
        try:
            data = sys.stdin.buffer.read(1)
        except (OSError, ValueError):
            raise BuiltinError('getchar read error')
        return StringVal(chr(data[0])) if data else NULL

    env.set('puts', BuiltinFunction('puts', 1, std_puts))
    env.set('putchar', BuiltinFunction('putchar', 1, std_putchar, 'putchar expected 1 argument'))
    env.set('printf', BuiltinFunction('printf', None, std_printf))
    env.set('sprintf', BuiltinFunction('sprintf', None, std_sprintf))
    env.set('getchar', BuiltinFunction('getchar', 0, std_getchar, 'getchar expected 0 args'))
    populate_io_environment(env)
    return env
