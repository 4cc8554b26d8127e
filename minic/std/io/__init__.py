from typing import List

from minic.builtin_function import BuiltinFunction
from minic.environment import Environment
from minic.errors import BuiltinError
from minic.types import (
    Value, IntegerVal, StringVal, BooleanVal, FileVal, NULL, inspect,
)
from minic.std.format import format_output
from .basic_io import BasicIO, FileHandle


def expect_file(value: Value, message: str) -> FileHandle:
    if not isinstance(value, FileVal):
        raise BuiltinError(message)
    return value.handle


def expect_string(value: Value, message: str) -> str:
    if not isinstance(value, StringVal):
        raise BuiltinError(message)
    return value.value


def expect_integer(value: Value, message: str) -> int:
    if not isinstance(value, IntegerVal):
        raise BuiltinError(message)
    return value.value


def populate_io_environment(env: Environment) -> Environment:
    """Bind the stdio-style file builtins into `env`."""
    basic_io = BasicIO()

    def std_fopen(args: List[Value]) -> Value:
        path = expect_string(args[0], 'fopen first argument must be a string path')
        mode = expect_string(args[1], 'fopen second argument must be a string mode')
        return FileVal(basic_io.open_file(path, mode))

    def std_fclose(args: List[Value]) -> Value:
        # handles are owned by their FileVal; nothing to release here
        return NULL

    def std_fputs(args: List[Value]) -> Value:
        content = expect_string(args[0], 'fputs first arg must be string')
        handle = expect_file(args[1], 'fputs second arg must be file')
        basic_io.write(handle, content, 'fputs')
        return NULL

    def make_fputc(name: str):
        def std_fputc(args: List[Value]) -> Value:
            text = inspect(args[0])
            if not text:
                return NULL
            handle = expect_file(args[1], f'{name} arg must be file')
            basic_io.write(handle, text[0], name)
            return NULL
        return std_fputc

    def std_fprintf(args: List[Value]) -> Value:
        if len(args) < 2:
            raise BuiltinError('fprintf expected at least file and fmt')
        handle = expect_file(args[0], 'fprintf first arg must be file')
        basic_io.write(handle, format_output(args[1:]))
        return NULL

    def std_fgets(args: List[Value]) -> Value:
        handle = expect_file(args[0], 'fgets arg must be file')
        line = basic_io.read_line(handle)
        return NULL if line is None else StringVal(line)

    def make_fgetc(name: str):
        def std_fgetc(args: List[Value]) -> Value:
            handle = expect_file(args[0], f'{name} arg must be file')
            c = basic_io.read_char(handle)
            return NULL if c is None else StringVal(c)
        return std_fgetc

    def std_feof(args: List[Value]) -> Value:
        return BooleanVal(expect_file(args[0], 'feof arg must be file').eof)

    def std_ferror(args: List[Value]) -> Value:
        return BooleanVal(expect_file(args[0], 'ferror arg must be file').error)

    def std_ftell(args: List[Value]) -> Value:
        handle = expect_file(args[0], 'ftell arg must be file')
        return IntegerVal(basic_io.tell(handle))

    def std_fseek(args: List[Value]) -> Value:
        handle = expect_file(args[0], 'fseek arg must be file')
        offset = expect_integer(args[1], 'fseek offset must be int')
        whence = expect_integer(args[2], 'fseek whence must be int')
        return IntegerVal(basic_io.seek(handle, offset, whence))

    def std_rewind(args: List[Value]) -> Value:
        basic_io.rewind(expect_file(args[0], 'rewind arg must be file'))
        return NULL

    def std_remove(args: List[Value]) -> Value:
        basic_io.delete_file(expect_string(args[0], 'remove arg must be string'))
        return NULL

    def std_rename(args: List[Value]) -> Value:
        old_path = expect_string(args[0], 'rename old must be string')
        new_path = expect_string(args[1], 'rename new must be string')
        basic_io.rename_file(old_path, new_path)
        return NULL

    env.set('fopen', BuiltinFunction('fopen', 2, std_fopen))
    env.set('fclose', BuiltinFunction('fclose', None, std_fclose))
    env.set('fputs', BuiltinFunction('fputs', 2, std_fputs, 'fputs expected 2 arguments'))
    env.set('fputc', BuiltinFunction('fputc', 2, make_fputc('fputc'), 'fputc expected 2 arguments'))
    env.set('putc', BuiltinFunction('putc', 2, make_fputc('putc'), 'putc expected 2 arguments'))
    env.set('fprintf', BuiltinFunction('fprintf', None, std_fprintf))
    env.set('fgets', BuiltinFunction('fgets', 1, std_fgets, 'fgets expected 1 argument'))
    env.set('fgetc', BuiltinFunction('fgetc', 1, make_fgetc('fgetc'), 'fgetc expected 1 arg'))
    env.set('getc', BuiltinFunction('getc', 1, make_fgetc('getc'), 'getc expected 1 arg'))
    env.set('feof', BuiltinFunction('feof', 1, std_feof, 'feof expected 1 arg'))
    env.set('ferror', BuiltinFunction('ferror', 1, std_ferror, 'ferror expected 1 arg'))
    env.set('ftell', BuiltinFunction('ftell', 1, std_ftell, 'ftell expected 1 arg'))
    env.set('fseek', BuiltinFunction('fseek', 3, std_fseek, 'fseek expected 3 args'))
    env.set('rewind', BuiltinFunction('rewind', 1, std_rewind, 'rewind expected 1 arg'))
    env.set('remove', BuiltinFunction('remove', 1, std_remove, 'remove expected 1 arg'))
    env.set('rename', BuiltinFunction('rename', 2, std_rename, 'rename expected 2 args'))
    return env
