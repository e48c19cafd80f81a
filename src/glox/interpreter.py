from __future__ import annotations
import math
import sys
from decimal import Decimal
from typing import List, Optional

from .ast_nodes import Binary, Expr, ExprStmt, Grouping, Literal, PrintStmt, Stmt, Unary, Value
from .errors import LoxError
from .tokens import Token, TokenType


class LoxRuntimeError(LoxError):
    """Precondition violated while evaluating; carries the operator at fault."""

    message = "Invalid operand."

    def __init__(self, operator: Token, message: Optional[str] = None):
        super().__init__(message or type(self).message, operator.line, operator.lexeme)
        self.operator = operator


class OperandMustBeNumberError(LoxRuntimeError):
    message = "Operand must be a number."


class OperandsMustBeNumbersError(LoxRuntimeError):
    message = "Operands must be numbers."


class InvalidAddOperandsError(LoxRuntimeError):
    message = "Operands must be two numbers or two strings."


# ---------- Value helpers ----------
def is_number(v: Value) -> bool:
    # bool is an int subclass, never a float, so True is not a number here
    return isinstance(v, float)


def is_truthy(v: Value) -> bool:
    if v is None:
        return False
    if isinstance(v, bool):
        return v
    return True


def is_equal(a: Value, b: Value) -> bool:
    return type(a) is type(b) and a == b


def stringify(v: Value) -> str:
    if v is None:
        return "nil"
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, float):
        if math.isnan(v):
            return "NaN"
        if math.isinf(v):
            return "Infinity" if v > 0 else "-Infinity"
        # shortest round-trip digits, positional notation, no trailing ".0"
        return format(Decimal(repr(v)).normalize(), "f")
    return v


def divide(left: float, right: float) -> float:
    if right != 0.0:
        return left / right
    if left == 0.0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


class Interpreter:
    def __init__(self, out=None):
        self.out = out

    def interpret(self, statements: List[Stmt]):
        for stmt in statements:
            self.execute(stmt)

    # ---------- Statements ----------
    def execute(self, stmt: Stmt):
        if isinstance(stmt, PrintStmt):
            value = self.evaluate(stmt.expression)
            print(stringify(value), file=self.out if self.out is not None else sys.stdout)
            return
        if isinstance(stmt, ExprStmt):
            self.evaluate(stmt.expression)
            return
        raise TypeError(f"unknown statement node {type(stmt).__name__}")

    # ---------- Expressions ----------
    def evaluate(self, e: Expr) -> Value:
        if isinstance(e, Literal):
            return e.value
        if isinstance(e, Grouping):
            return self.evaluate(e.expression)
        if isinstance(e, Unary):
            return self._eval_unary(e)
        if isinstance(e, Binary):
            return self._eval_binary(e)
        raise TypeError(f"unknown expression node {type(e).__name__}")

    def _eval_unary(self, e: Unary) -> Value:
        right = self.evaluate(e.right)
        op = e.operator.type

        if op is TokenType.MINUS:
            if not is_number(right):
                raise OperandMustBeNumberError(e.operator)
            return -right
        if op is TokenType.BANG:
            return not is_truthy(right)
        raise TypeError(f"unknown unary operator {e.operator.lexeme!r}")

    def _eval_binary(self, e: Binary) -> Value:
        # Walk the left spine of operator chains in a loop, not one call per term
        spine: List[Binary] = []
        node: Expr = e
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left

        left = self.evaluate(node)
        for b in reversed(spine):
            right = self.evaluate(b.right)
            left = self._apply_binary(b.operator, left, right)
        return left

    def _apply_binary(self, operator: Token, left: Value, right: Value) -> Value:
        op = operator.type

        # Equality is defined on every pair of values
        if op is TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if op is TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        if op is TokenType.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise InvalidAddOperandsError(operator)

        # Everything else is numeric only
        if not (is_number(left) and is_number(right)):
            raise OperandsMustBeNumbersError(operator)

        if op is TokenType.MINUS:
            return left - right
        if op is TokenType.STAR:
            return left * right
        if op is TokenType.SLASH:
            return divide(left, right)
        if op is TokenType.GREATER:
            return left > right
        if op is TokenType.GREATER_EQUAL:
            return left >= right
        if op is TokenType.LESS:
            return left < right
        if op is TokenType.LESS_EQUAL:
            return left <= right
        raise TypeError(f"unknown binary operator {operator.lexeme!r}")
