# minic language package
# This package provides a tokenizer, parser and tree-walking interpreter
# for the minic language.
from .interpreter import run_program, run_file, bootstrap_environment, Interpreter
from .parser import parse_program
from .errors import MinicError, ParseFailure

__all__ = [
    'run_program',
    'run_file',
    'bootstrap_environment',
    'parse_program',
    'Interpreter',
    'MinicError',
    'ParseFailure',
]
