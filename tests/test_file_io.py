import pytest

from minic.interpreter import Interpreter, bootstrap_environment
from minic.parser import parse_program
from minic.types import StringVal, IntegerVal, BooleanVal, ErrorVal, NULL


def run_in(env, source):
    program, errors = parse_program(source)
    assert errors == []
    return Interpreter().run(program, env)


def run(source):
    return run_in(bootstrap_environment(), source)


@pytest.fixture
def target(tmp_path):
    return (tmp_path / 'data.txt').as_posix()


def test_write_then_read_lines(target):
    source = r"""
    int f = fopen("PATH", "w");
    fputs("hello\n", f);
    fputc("w", f);
    fprintf(f, "%d!\n", 42);
    fclose(f);
    int r = fopen("PATH", "r");
    int a = fgets(r);
    int b = fgets(r);
    int c = fgets(r);
    sprintf("%s|%s|%s|%s", a, b, c, feof(r))
    """.replace('PATH', target)
    assert run(source) == StringVal('hello\n|w42!\n|null|true')


def test_last_line_without_newline(tmp_path):
    path = tmp_path / 'tail.txt'
    path.write_bytes(b'one\ntwo')
    source = 'int r = fopen("PATH", "r"); fgets(r); fgets(r)'.replace('PATH', path.as_posix())
    assert run(source) == StringVal('two')


def test_char_reads_and_positioning(tmp_path):
    path = tmp_path / 'abc.txt'
    path.write_bytes(b'abc')
    env = bootstrap_environment()
    run_in(env, 'int r = fopen("PATH", "r");'.replace('PATH', path.as_posix()))
    assert run_in(env, 'fgetc(r)') == StringVal('a')
    assert run_in(env, 'ftell(r)') == IntegerVal(1)
    assert run_in(env, 'getc(r)') == StringVal('b')
    assert run_in(env, 'fseek(r, 0, 2)') == IntegerVal(0)
    assert run_in(env, 'fgetc(r)') == NULL
    assert run_in(env, 'feof(r)') == BooleanVal(True)
    assert run_in(env, 'fseek(r, -1, 1)') == IntegerVal(0)
    assert run_in(env, 'feof(r)') == BooleanVal(False)
    assert run_in(env, 'fgetc(r)') == StringVal('c')
    assert run_in(env, 'fgetc(r); rewind(r); feof(r)') == BooleanVal(False)
    assert run_in(env, 'fgetc(r)') == StringVal('a')


def test_failed_seek_sets_error_flag(tmp_path):
    path = tmp_path / 'abc.txt'
    path.write_bytes(b'abc')
    env = bootstrap_environment()
    run_in(env, 'int r = fopen("PATH", "r");'.replace('PATH', path.as_posix()))
    assert run_in(env, 'fseek(r, -5, 0)') == IntegerVal(-1)
    assert run_in(env, 'ferror(r)') == BooleanVal(True)
    run_in(env, 'rewind(r);')
    assert run_in(env, 'ferror(r)') == BooleanVal(False)


def test_invalid_whence(tmp_path):
    path = tmp_path / 'abc.txt'
    path.write_bytes(b'abc')
    source = 'int r = fopen("PATH", "r"); fseek(r, 0, 7)'.replace('PATH', path.as_posix())
    assert run(source) == ErrorVal('invalid whence')


def test_bytes_read_as_latin1(tmp_path):
    path = tmp_path / 'bin.dat'
    path.write_bytes(b'\xe9x')
    source = 'int r = fopen("PATH", "r"); fgetc(r)'.replace('PATH', path.as_posix())
    assert run(source) == StringVal('\xe9')


def test_fopen_missing_file(tmp_path):
    missing = (tmp_path / 'nope.txt').as_posix()
    result = run('fopen("PATH", "r")'.replace('PATH', missing))
    assert isinstance(result, ErrorVal)
    assert result.message.startswith('fopen failed:')


def test_write_mode_truncates(tmp_path):
    path = tmp_path / 'old.txt'
    path.write_text('previous contents')
    run('int f = fopen("PATH", "w"); fputs("new", f);'.replace('PATH', path.as_posix()))
    assert path.read_text() == 'new'


def test_rename_and_remove(tmp_path):
    old = tmp_path / 'old.txt'
    new = tmp_path / 'new.txt'
    old.write_text('x')
    source = 'rename("OLD", "NEW")'.replace('OLD', old.as_posix()).replace('NEW', new.as_posix())
    assert run(source) == NULL
    assert not old.exists()
    assert new.read_text() == 'x'
    assert run('remove("NEW")'.replace('NEW', new.as_posix())) == NULL
    assert not new.exists()
    result = run('remove("NEW")'.replace('NEW', new.as_posix()))
    assert isinstance(result, ErrorVal)
    assert result.message.startswith('remove failed:')


def test_write_to_read_handle_fails(tmp_path):
    path = tmp_path / 'abc.txt'
    path.write_bytes(b'abc')
    env = bootstrap_environment()
    run_in(env, 'int r = fopen("PATH", "r");'.replace('PATH', path.as_posix()))
    result = run_in(env, 'fputs("x", r)')
    assert isinstance(result, ErrorVal)
    assert result.message.startswith('fputs failed')
    assert run_in(env, 'ferror(r)') == BooleanVal(True)


def test_fprintf_to_read_handle_fails(tmp_path):
    path = tmp_path / 'abc.txt'
    path.write_bytes(b'abc')
    env = bootstrap_environment()
    run_in(env, 'int r = fopen("PATH", "r");'.replace('PATH', path.as_posix()))
    assert run_in(env, 'fprintf(r, "%d", 1)') == ErrorVal('write error')
    assert run_in(env, 'ferror(r)') == BooleanVal(True)


def test_fputc_with_empty_text_writes_nothing():
    assert run('fputc("", 1)') == NULL


def test_read_from_write_handle(target):
    env = bootstrap_environment()
    run_in(env, 'int w = fopen("PATH", "w");'.replace('PATH', target))
    assert run_in(env, 'fgetc(w)') == NULL
    assert run_in(env, 'ferror(w)') == BooleanVal(True)
    result = run_in(env, 'fgets(w)')
    assert isinstance(result, ErrorVal)
    assert result.message.startswith('fgets error')


@pytest.mark.parametrize('call, message', [
    ('fputs(1, 2)', 'fputs first arg must be string'),
    ('fputs("a", 2)', 'fputs second arg must be file'),
    ('feof(1)', 'feof arg must be file'),
    ('fgets("x")', 'fgets arg must be file'),
    ('putc("a", 1)', 'putc arg must be file'),
    ('fopen(1, "r")', 'fopen first argument must be a string path'),
    ('fprintf("fmt")', 'fprintf expected at least file and fmt'),
    ('remove(3)', 'remove arg must be string'),
])
def test_argument_type_errors(call, message):
    assert run(call) == ErrorVal(message)


def test_files_are_never_equal(target):
    assert run('int f = fopen("PATH", "w"); f == f'.replace('PATH', target)) == BooleanVal(False)


def test_fclose_accepts_anything(target):
    assert run('fclose()') == NULL
    assert run('int f = fopen("PATH", "w"); fclose(f)'.replace('PATH', target)) == NULL
