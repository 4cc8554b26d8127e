import io

import pytest

from minic.interpreter import Interpreter, bootstrap_environment
from minic.parser import parse_program
from minic.types import StringVal, ErrorVal, NULL


def run(source):
    program, errors = parse_program(source)
    assert errors == []
    return Interpreter().run(program, bootstrap_environment())


@pytest.mark.parametrize('arg, expected', [
    ('42', '42'),
    ('"text"', 'text'),
    ('true', 'true'),
    ('null', 'null'),
    ('puts', 'builtin function'),
    ('-7', '-7'),
])
def test_puts_prints_inspected_value(capsys, arg, expected):
    assert run(f'puts({arg});') == NULL
    assert capsys.readouterr().out == expected + '\n'


def test_puts_prints_function(capsys):
    run('int add(int a, int b) { return a + b; } puts(add);')
    assert capsys.readouterr().out == 'fn(a, b) { ... }\n'


def test_putchar_prints_first_character_only(capsys):
    run('putchar("hey"); putchar(7); putchar("");')
    assert capsys.readouterr().out == 'h7'


def test_printf(capsys):
    assert run(r'printf("%s-%d\n", "x", 5);') == NULL
    assert capsys.readouterr().out == 'x-5\n'


@pytest.mark.parametrize('call, expected', [
    ('sprintf("%d%%", 100)', '100%'),
    ('sprintf("50% off")', '50% off'),
    ('sprintf("100%")', '100%'),
    ('sprintf("%s and %s", "one")', 'one and %s'),
    ('sprintf("%q %s", 1)', '%q 1'),
    ('sprintf("%d", "str")', 'str'),
    ('sprintf(1, 2, "x")', '12x'),
    ('sprintf("")', ''),
    ('sprintf()', ''),
    ('sprintf("no specifiers", 1, 2)', 'no specifiers'),
])
def test_sprintf_formats(call, expected):
    assert run(call) == StringVal(expected)


def test_printf_without_arguments_prints_nothing(capsys):
    assert run('printf();') == NULL
    assert capsys.readouterr().out == ''


def test_fixed_arity_is_checked():
    assert run('puts()') == ErrorVal('puts expected 1 argument, got 0')
    assert run('puts(1, 2)') == ErrorVal('puts expected 1 argument, got 2')
    assert run('getchar(1)') == ErrorVal('getchar expected 0 args')


@pytest.mark.parametrize('call, message', [
    ('putchar()', 'putchar expected 1 argument'),
    ('fopen("a")', 'fopen expected 2 arguments, got 1'),
    ('fputs("a")', 'fputs expected 2 arguments'),
    ('putc("a")', 'putc expected 2 arguments'),
    ('fgets()', 'fgets expected 1 argument'),
    ('fgetc()', 'fgetc expected 1 arg'),
    ('getc(1, 2)', 'getc expected 1 arg'),
    ('ftell()', 'ftell expected 1 arg'),
    ('fseek(1, 2)', 'fseek expected 3 args'),
    ('rename("a")', 'rename expected 2 args'),
])
def test_builtin_arity_messages(call, message):
    assert run(call) == ErrorVal(message)


def test_getchar_reads_stdin(monkeypatch):
    monkeypatch.setattr('sys.stdin', io.TextIOWrapper(io.BytesIO(b'hi')))
    assert run('sprintf("%s%s%s", getchar(), getchar(), getchar())') == StringVal('hinull')


def test_getchar_reads_single_bytes(monkeypatch):
    monkeypatch.setattr('sys.stdin', io.TextIOWrapper(io.BytesIO('é'.encode('utf-8'))))
    assert run('sprintf("%s%s", getchar(), getchar())') == StringVal('\xc3\xa9')


def test_builtin_can_be_rebound():
    assert run('int say = puts; say == puts') == run('false')
    assert run('int puts = 3; puts + 1') == run('4')
