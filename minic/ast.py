"""Abstract Syntax Tree (AST) definitions for the minic language.

Nodes are created once by the parser and never modified afterwards.
Every body position (`if` branches, `while` bodies and function bodies)
is typed as `Block`, so the parser cannot put any other statement kind
there.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Statement(Node):
    pass


@dataclass(frozen=True)
class Expression(Node):
    pass


@dataclass(frozen=True)
class Program(Node):
    statements: List[Statement]


# Statements

@dataclass(frozen=True)
class Block(Statement):
    statements: List[Statement]


@dataclass(frozen=True)
class LetStmt(Statement):
    name: str
    value: Expression


@dataclass(frozen=True)
class ReturnStmt(Statement):
    value: Expression


@dataclass(frozen=True)
class ExprStmt(Statement):
    expr: Expression


@dataclass(frozen=True)
class IfStmt(Statement):
    condition: Expression
    consequence: Block
    alternative: Optional[Block] = None


@dataclass(frozen=True)
class WhileStmt(Statement):
    condition: Expression
    body: Block


@dataclass(frozen=True)
class FuncDecl(Statement):
    name: str
    params: List[str]
    body: Block


# Expressions

@dataclass(frozen=True)
class Ident(Expression):
    name: str


@dataclass(frozen=True)
class IntegerLit(Expression):
    value: int


@dataclass(frozen=True)
class StringLit(Expression):
    value: str


@dataclass(frozen=True)
class BooleanLit(Expression):
    value: bool


@dataclass(frozen=True)
class PrefixOp(Expression):
    op: str  # '-'
    right: Expression


@dataclass(frozen=True)
class InfixOp(Expression):
    left: Expression
    op: str  # '+', '-', '*', '/', '==', '!=', '<', '>'
    right: Expression


@dataclass(frozen=True)
class Call(Expression):
    func: Expression  # normally an Ident
    args: List[Expression]
