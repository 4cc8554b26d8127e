import json

import pytest

from minic.ast import Program, Block, FuncDecl, IfStmt
from minic.ast_json import ast_to_obj, ast_from_obj
from minic.interpreter import Interpreter, bootstrap_environment
from minic.parser import parse_program

SOURCE = """
int fib(int n) {
    if (n < 2) { return n; } else { return fib(n - 1) + fib(n - 2); }
}
int i = 0;
int total = 0;
while (i < 10) { total = total + fib(i); i = i + 1; }
sprintf("total=%d", -total)
"""


def test_saved_ast_evaluates_the_same():
    program, errors = parse_program(SOURCE)
    assert errors == []
    restored = ast_from_obj(json.loads(json.dumps(ast_to_obj(program))))
    assert restored == program
    assert Interpreter().run(restored, bootstrap_environment()) == \
        Interpreter().run(program, bootstrap_environment())


def test_bodies_are_blocks():
    program, _ = parse_program(SOURCE)
    restored = ast_from_obj(ast_to_obj(program))
    func = restored.statements[0]
    assert isinstance(restored, Program)
    assert isinstance(func, FuncDecl)
    assert isinstance(func.body, Block)
    assert isinstance(func.body.statements[0], IfStmt)


def test_non_block_body_is_rejected():
    obj = {
        "type": "WhileStmt",
        "condition": {"type": "IntegerLit", "value": 1},
        "body": {"type": "Ident", "name": "x"},
    }
    with pytest.raises(TypeError):
        ast_from_obj(obj)


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({"type": "ForStmt"})


def test_non_dict_is_rejected():
    with pytest.raises(TypeError):
        ast_from_obj([1, 2])
