"""Tree-walking evaluator for the minic language.

The interpreter walks the AST produced by `minic.parser`, always passing
the current Environment explicitly. Control flow that leaves a
statement early is expressed with values rather than exceptions:
`ReturnVal` carries a `return` out of nested blocks and `ErrorVal`
carries a runtime error. Every caller checks sub-results for these
signals and stops evaluating its remaining siblings as soon as one
appears.
"""

from __future__ import annotations

import sys
import threading
from typing import Any, Dict, List, Optional

from .ast import (
    Program, Statement, Expression, Block, LetStmt, ReturnStmt, ExprStmt,
    IfStmt, WhileStmt, FuncDecl, Ident, IntegerLit, StringLit, BooleanLit,
    PrefixOp, InfixOp, Call,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import ParseFailure
from .parser import parse_program
from .std import populate_std_environment
from .types import (
    Value, IntegerVal, StringVal, BooleanVal, NullVal, FunctionVal,
    ReturnVal, ErrorVal, NULL, is_error, inspect, type_name, wrap_i64,
)


# Each minic call costs several Python frames, so evaluation runs on a
# thread with a larger stack and a raised recursion limit.
EVAL_RECURSION_LIMIT = 60000
EVAL_STACK_SIZE = 512 * 1024 * 1024


class Interpreter:
    """Core interpreter that evaluates a minic AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0 and self.debug_fp and not self.debug_fp.closed:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Value:
        if env is None:
            env = bootstrap_environment()
        self.debug(f"run: {len(program.statements)} statement(s)")
        try:
            result = self.eval_with_headroom(program, env)
            self.debug(f"result: {inspect(result)}")
            return result
        finally:
            if self.debug_fp:
                self.debug_fp.close()

    def eval_with_headroom(self, program: Program, env: Environment) -> Value:
        outcome: Dict[str, Any] = {}

        def target():
            try:
                outcome['result'] = self.eval_program(program, env)
            except RecursionError:
                outcome['result'] = ErrorVal('maximum recursion depth exceeded')
            except BaseException as e:
                outcome['exception'] = e

        old_limit = sys.getrecursionlimit()
        old_stack = threading.stack_size()
        threading.stack_size(EVAL_STACK_SIZE)
        sys.setrecursionlimit(max(old_limit, EVAL_RECURSION_LIMIT))
        try:
            worker = threading.Thread(target=target, name='minic-eval')
            worker.start()
            worker.join()
        finally:
            threading.stack_size(old_stack)
            sys.setrecursionlimit(old_limit)
        if 'exception' in outcome:
            raise outcome['exception']
        return outcome['result']

    def eval_program(self, program: Program, env: Environment) -> Value:
        result: Value = NULL
        for stmt in program.statements:
            result = self.execute(stmt, env)
            if isinstance(result, ReturnVal):
                return result.value
            if is_error(result):
                return result
        return result

    def eval_block(self, block: Block, env: Environment) -> Value:
        result: Value = NULL
        for stmt in block.statements:
            result = self.execute(stmt, env)
            # a ReturnVal stays wrapped so enclosing blocks stop too
            if isinstance(result, (ReturnVal, ErrorVal)):
                return result
        return result

    def execute(self, node: Statement, env: Environment) -> Value:
        if isinstance(node, ExprStmt):
            return self.evaluate(node.expr, env)
        if isinstance(node, LetStmt):
            value = self.evaluate(node.value, env)
            if is_error(value):
                return value
            if self.debug_level >= 2:
                self.debug(f"bind {node.name}: {type_name(value)} = {inspect(value)}")
            return env.set(node.name, value)
        if isinstance(node, ReturnStmt):
            value = self.evaluate(node.value, env)
            if is_error(value):
                return value
            return ReturnVal(value)
        if isinstance(node, Block):
            return self.eval_block(node, env)
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition, env)
            if is_error(cond):
                return cond
            truthy = self.is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {inspect(cond)} -> {truthy}")
            if truthy:
                return self.eval_block(node.consequence, env)
            if node.alternative is not None:
                return self.eval_block(node.alternative, env)
            return NULL
        if isinstance(node, WhileStmt):
            # iterations share the enclosing scope
            iteration = 0
            while True:
                cond = self.evaluate(node.condition, env)
                if is_error(cond):
                    return cond
                if not self.is_truthy(cond):
                    break
                iteration += 1
                if self.debug_level >= 3:
                    self.debug(f"while iteration {iteration}")
                res = self.eval_block(node.body, env)
                if isinstance(res, (ReturnVal, ErrorVal)):
                    return res
            return NULL
        if isinstance(node, FuncDecl):
            func = FunctionVal(node.params, node.body, env, node.name)
            if self.debug_level >= 2:
                self.debug(f"define function {node.name}({', '.join(node.params)})")
            return env.set(node.name, func)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expression, env: Environment) -> Value:
        if isinstance(node, IntegerLit):
            return IntegerVal(node.value)
        if isinstance(node, StringLit):
            return StringVal(node.value)
        if isinstance(node, BooleanLit):
            return BooleanVal(node.value)
        if isinstance(node, Ident):
            value = env.get(node.name)
            if value is None:
                return ErrorVal(f"identifier not found: {node.name}")
            return value
        if isinstance(node, PrefixOp):
            right = self.evaluate(node.right, env)
            if is_error(right):
                return right
            return self.apply_prefix_op(node.op, right)
        if isinstance(node, InfixOp):
            left = self.evaluate(node.left, env)
            if is_error(left):
                return left
            right = self.evaluate(node.right, env)
            if is_error(right):
                return right
            return self.apply_infix_op(node.op, left, right)
        if isinstance(node, Call):
            func = self.evaluate(node.func, env)
            if is_error(func):
                return func
            args: List[Value] = []
            for arg_node in node.args:
                arg = self.evaluate(arg_node, env)
                if is_error(arg):
                    return arg
                args.append(arg)
            return self.call_function(func, args)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, func: Value, args: List[Value]) -> Value:
        if isinstance(func, FunctionVal):
            if len(args) != len(func.params):
                return ErrorVal(
                    f"wrong number of arguments: want={len(func.params)}, got={len(args)}"
                )
            if self.debug_level >= 1:
                self.debug(f"call {func.name or '<fn>'}({', '.join(inspect(a) for a in args)})")
            # the call scope hangs off the defining scope, not the caller's
            call_env = Environment(parent=func.env)
            for param, arg in zip(func.params, args):
                call_env.set(param, arg)
            result = self.eval_block(func.body, call_env)
            if isinstance(result, ReturnVal):
                return result.value
            return result
        if isinstance(func, BuiltinFunction):
            if self.debug_level >= 1:
                self.debug(f"call builtin {func.name}")
            return func.call(args)
        return ErrorVal(f"not a function: {func!r}")

    def is_truthy(self, value: Value) -> bool:
        if isinstance(value, NullVal):
            return False
        if isinstance(value, BooleanVal):
            return value.value
        if isinstance(value, IntegerVal):
            return value.value != 0
        return True

    def apply_prefix_op(self, op: str, right: Value) -> Value:
        if op == '-' and isinstance(right, IntegerVal):
            return IntegerVal(wrap_i64(-right.value))
        return ErrorVal(f"unknown operator: {op}{right!r}")

    def apply_infix_op(self, op: str, left: Value, right: Value) -> Value:
        if isinstance(left, IntegerVal) and isinstance(right, IntegerVal):
            return self.apply_integer_op(op, left.value, right.value)
        if isinstance(left, BooleanVal) and isinstance(right, BooleanVal):
            if op == '==':
                return BooleanVal(left.value == right.value)
            if op == '!=':
                return BooleanVal(left.value != right.value)
            return ErrorVal(f"unknown operator: {left!r} {op} {right!r}")
        if op == '==':
            return BooleanVal(left == right)
        if op == '!=':
            return BooleanVal(left != right)
        return ErrorVal(f"type mismatch: {left!r} {op} {right!r}")

    def apply_integer_op(self, op: str, a: int, b: int) -> Value:
        if op == '+':
            return IntegerVal(wrap_i64(a + b))
        if op == '-':
            return IntegerVal(wrap_i64(a - b))
        if op == '*':
            return IntegerVal(wrap_i64(a * b))
        if op == '/':
            if b == 0:
                return ErrorVal('division by zero')
            # integer division truncating toward zero
            quotient = abs(a) // abs(b)
            if (a < 0) != (b < 0):
                quotient = -quotient
            return IntegerVal(wrap_i64(quotient))
        if op == '<':
            return BooleanVal(a < b)
        if op == '>':
            return BooleanVal(a > b)
        if op == '==':
            return BooleanVal(a == b)
        if op == '!=':
            return BooleanVal(a != b)
        return ErrorVal(f"unknown operator: Integer({a}) {op} Integer({b})")


def bootstrap_environment() -> Environment:
    """Build the global scope: every builtin plus null, true and false."""
    env = Environment()
    populate_std_environment(env)
    env.set('null', NULL)
    env.set('true', BooleanVal(True))
    env.set('false', BooleanVal(False))
    return env


def run_program(source: str, debug_level: int = 0) -> Value:
    """Parse and evaluate minic source text against a fresh global scope."""
    program, errors = parse_program(source)
    if errors:
        raise ParseFailure(errors)
    interpreter = Interpreter(debug_level=debug_level)
    return interpreter.run(program, bootstrap_environment())


def run_file(file_path: str, debug_level: int = 0) -> Value:
    """Parse and evaluate a minic source file."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, debug_level=debug_level)
