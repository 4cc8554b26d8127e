"""JSON serialization/deserialization for the minic AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding, so a parsed program can be saved
with `--emit-ast` and evaluated later with `--ast`.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    Block,
    LetStmt,
    ReturnStmt,
    ExprStmt,
    IfStmt,
    WhileStmt,
    FuncDecl,
    Ident,
    IntegerLit,
    StringLit,
    BooleanLit,
    PrefixOp,
    InfixOp,
    Call,
)


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        return {"type": "Program", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, LetStmt):
        return {"type": "LetStmt", "name": node.name, "value": ast_to_obj(node.value)}
    if isinstance(node, ReturnStmt):
        return {"type": "ReturnStmt", "value": ast_to_obj(node.value)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "consequence": ast_to_obj(node.consequence),
            "alternative": ast_to_obj(node.alternative),
        }
    if isinstance(node, WhileStmt):
        return {"type": "WhileStmt", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, FuncDecl):
        return {
            "type": "FuncDecl",
            "name": node.name,
            "params": list(node.params),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name}
    if isinstance(node, IntegerLit):
        return {"type": "IntegerLit", "value": node.value}
    if isinstance(node, StringLit):
        return {"type": "StringLit", "value": node.value}
    if isinstance(node, BooleanLit):
        return {"type": "BooleanLit", "value": node.value}
    if isinstance(node, PrefixOp):
        return {"type": "PrefixOp", "op": node.op, "right": ast_to_obj(node.right)}
    if isinstance(node, InfixOp):
        return {"type": "InfixOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, Call):
        return {"type": "Call", "func": ast_to_obj(node.func), "args": [ast_to_obj(a) for a in node.args]}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def block_from_obj(obj: Any) -> Block:
    node = ast_from_obj(obj)
    if not isinstance(node, Block):
        raise TypeError(f"expected Block, got {type(node).__name__}")
    return node


def ast_from_obj(obj: Dict[str, Any]) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "Block":
        return Block(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "LetStmt":
        return LetStmt(name=obj["name"], value=ast_from_obj(obj["value"]))
    if t == "ReturnStmt":
        return ReturnStmt(value=ast_from_obj(obj["value"]))
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "IfStmt":
        alternative = obj.get("alternative")
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            consequence=block_from_obj(obj["consequence"]),
            alternative=block_from_obj(alternative) if alternative is not None else None,
        )
    if t == "WhileStmt":
        return WhileStmt(condition=ast_from_obj(obj["condition"]), body=block_from_obj(obj["body"]))
    if t == "FuncDecl":
        return FuncDecl(name=obj["name"], params=list(obj["params"]), body=block_from_obj(obj["body"]))
    if t == "Ident":
        return Ident(name=obj["name"])
    if t == "IntegerLit":
        return IntegerLit(value=int(obj["value"]))
    if t == "StringLit":
        return StringLit(value=obj["value"])
    if t == "BooleanLit":
        return BooleanLit(value=bool(obj["value"]))
    if t == "PrefixOp":
        return PrefixOp(op=obj["op"], right=ast_from_obj(obj["right"]))
    if t == "InfixOp":
        return InfixOp(left=ast_from_obj(obj["left"]), op=obj["op"], right=ast_from_obj(obj["right"]))
    if t == "Call":
        return Call(func=ast_from_obj(obj["func"]), args=[ast_from_obj(a) for a in obj["args"]])

    raise ValueError(f"Unknown AST node type: {t}")
