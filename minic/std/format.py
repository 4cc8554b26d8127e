"""The printf-style format mini-language used by printf, sprintf and fprintf.

`%s` and `%d` both insert the inspected form of the next argument,
`%%` inserts a literal percent sign, and any other `%` is copied through
unchanged. A specifier with no argument left to consume stays in the
output as written.
"""

from typing import List

from lark import Lark

from minic.types import Value, StringVal, inspect


FORMAT_GRAMMAR = r"""
    start: (TEXT | SPEC | ESCAPED | STRAY)*

    SPEC: /%[sd]/
    ESCAPED: /%%/
    STRAY: /%(?![sd%])/
    TEXT: /[^%]+/
"""

FORMAT_PARSER = Lark(FORMAT_GRAMMAR, parser='lalr', lexer='basic')


def expand_format(fmt: str, args: List[Value]) -> str:
    out: List[str] = []
    remaining = iter(args)
    for token in FORMAT_PARSER.parse(fmt).children:
        if token.type == 'SPEC':
            arg = next(remaining, None)
            out.append(str(token) if arg is None else inspect(arg))
        elif token.type == 'ESCAPED':
            out.append('%')
        else:
            out.append(str(token))
    return ''.join(out)


def format_output(args: List[Value]) -> str:
    """Format `args[0]` with the remaining arguments.

    A first argument that is not a string is not a format: every argument
    is inspected and the results are concatenated instead.
    """
    if not args:
        return ''
    fmt = args[0]
    if not isinstance(fmt, StringVal):
        return ''.join(inspect(a) for a in args)
    return expand_format(fmt.value, args[1:])
