"""Parenthesized prefix rendering of syntax trees, for debugging the parser.

    (-123 - 5) * 10   ->   (* (group (- (- 123) 5)) 10)
"""

from __future__ import annotations
from typing import Union

from .ast_nodes import Binary, Expr, ExprStmt, Grouping, Literal, PrintStmt, Stmt, Unary
from .interpreter import stringify


def print_ast(node: Union[Expr, Stmt]) -> str:
    if isinstance(node, Literal):
        return stringify(node.value)
    if isinstance(node, Grouping):
        return _parenthesize("group", node.expression)
    if isinstance(node, Unary):
        return _parenthesize(node.operator.lexeme, node.right)
    if isinstance(node, Binary):
        return _print_binary(node)
    if isinstance(node, PrintStmt):
        return _parenthesize("print", node.expression)
    if isinstance(node, ExprStmt):
        return _parenthesize(";", node.expression)
    raise TypeError(f"unknown syntax tree node {type(node).__name__}")


def _print_binary(node: Binary) -> str:
    spine = []
    while isinstance(node, Binary):
        spine.append(node)
        node = node.left

    text = print_ast(node)
    for b in reversed(spine):
        text = f"({b.operator.lexeme} {text} {print_ast(b.right)})"
    return text


def _parenthesize(name: str, *nodes: Expr) -> str:
    return "(" + " ".join([name] + [print_ast(n) for n in nodes]) + ")"
