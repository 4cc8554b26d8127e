from pathlib import Path

from minic.interpreter import Interpreter, bootstrap_environment
from minic.parser import parse_program
from minic.types import ErrorVal

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6_error_stops_program(capsys):
    with open(EXAMPLES / 'program_6.mc', 'r', encoding='utf-8') as f:
        source = f.read()
    ast, errors = parse_program(source)
    assert errors == []
    result = Interpreter().run(ast, bootstrap_environment())
    out = capsys.readouterr().out.strip()
    assert out == 'before'
    assert result == ErrorVal('identifier not found: undefined_fn')
