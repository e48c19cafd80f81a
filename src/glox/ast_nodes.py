from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from .tokens import Token

# Runtime values: Number, String, Boolean and Nil
Value = Union[float, str, bool, None]


# ---------- Expressions ----------
class Expr: ...

@dataclass(frozen=True)
class Literal(Expr):
    value: Value = None

@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr

@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr

@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


# ---------- Statements ----------
class Stmt: ...

@dataclass(frozen=True)
class ExprStmt(Stmt):
    expression: Expr

@dataclass(frozen=True)
class PrintStmt(Stmt):
    expression: Expr
