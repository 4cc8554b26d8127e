from pathlib import Path

from minic.interpreter import Interpreter, bootstrap_environment
from minic.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_5_formatting(capsys):
    with open(EXAMPLES / 'program_5.mc', 'r', encoding='utf-8') as f:
        source = f.read()
    ast, errors = parse_program(source)
    assert errors == []
    Interpreter().run(ast, bootstrap_environment())
    out = capsys.readouterr().out.strip().split('\n')
    assert out[0] == 'minic has 100% of %q'
    # the second %s has no argument left and is printed as written
    assert out[1] == 'one and %s'
