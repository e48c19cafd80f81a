from __future__ import annotations
from typing import List

from .ast_nodes import Binary, Expr, ExprStmt, Grouping, Literal, PrintStmt, Stmt, Unary
from .errors import LoxError
from .tokens import Token, TokenType

# Tokens that begin a new statement; synchronize() stops in front of them
STMT_START = frozenset({
    TokenType.CLASS,
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
})

# Grouping and unary operators recurse; deeper input is rejected as a syntax error
MAX_NESTING = 100


class ParseError(LoxError):
    """A token sequence that matches no grammar rule at the current position."""

    def __init__(self, token: Token, message: str):
        where = "at end" if token.type is TokenType.EOF else token.lexeme
        super().__init__(message, token.line, where)
        self.token = token


class ParseErrors(LoxError):
    """Every ParseError found while parsing a whole program, in source order."""

    def __init__(self, errors: List[ParseError]):
        first = errors[0]
        super().__init__(first.message, first.line, first.where)
        self.errors = errors

    def __str__(self) -> str:
        return "\n\n".join(LoxError.__str__(e) for e in self.errors)


class TokenStream:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.i = 0

    def peek(self) -> Token:
        return self.tokens[self.i]

    def previous(self) -> Token:
        return self.tokens[self.i - 1]

    def at_end(self) -> bool:
        return self.peek().type is TokenType.EOF

    def advance(self) -> Token:
        if not self.at_end():
            self.i += 1
        return self.previous()

    def check(self, ttype: TokenType) -> bool:
        return not self.at_end() and self.peek().type is ttype

    def match(self, *types: TokenType) -> bool:
        for ttype in types:
            if self.check(ttype):
                self.advance()
                return True
        return False

    def expect(self, ttype: TokenType, message: str) -> Token:
        if self.check(ttype):
            return self.advance()
        raise ParseError(self.peek(), message)


class Parser:
    def __init__(self, tokens: List[Token]):
        self.ts = TokenStream(tokens)
        self.errors: List[ParseError] = []
        self.depth = 0

    def parse(self) -> Expr:
        """Parse a single expression spanning the whole token sequence."""
        expr = self.parse_expr()
        if not self.ts.at_end():
            raise ParseError(self.ts.peek(), "Expect end of expression.")
        return expr

    def parse_program(self) -> List[Stmt]:
        """Parse statements up to EOF.

        A syntax error does not stop the parse: it is recorded, the parser
        skips to the next statement boundary and carries on, so one pass
        reports every error. If any were recorded they are raised together
        as ParseErrors once the input is exhausted.
        """
        statements: List[Stmt] = []
        while not self.ts.at_end():
            try:
                statements.append(self.parse_stmt())
            except ParseError as e:
                self.errors.append(e)
                self.synchronize()
        if self.errors:
            raise ParseErrors(self.errors)
        return statements

    def synchronize(self):
        self.ts.advance()
        while not self.ts.at_end():
            if self.ts.previous().type is TokenType.SEMICOLON:
                return
            if self.ts.peek().type in STMT_START:
                return
            self.ts.advance()

    # ---------------- STATEMENTS ----------------
    def parse_stmt(self) -> Stmt:
        if self.ts.match(TokenType.PRINT):
            expr = self.parse_expr()
            self.ts.expect(TokenType.SEMICOLON, "Expect ';' after value.")
            return PrintStmt(expr)

        expr = self.parse_expr()
        self.ts.expect(TokenType.SEMICOLON, "Expect ';' after expression.")
        return ExprStmt(expr)

    # ---------------- EXPRESSIONS (precedence) ----------------
    def parse_expr(self) -> Expr:
        return self.parse_equality()

    def parse_equality(self) -> Expr:
        expr = self.parse_comparison()
        while self.ts.match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
            op_tok = self.ts.previous()
            rhs = self.parse_comparison()
            expr = Binary(expr, op_tok, rhs)
        return expr

    def parse_comparison(self) -> Expr:
        expr = self.parse_term()
        while self.ts.match(TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL):
            op_tok = self.ts.previous()
            rhs = self.parse_term()
            expr = Binary(expr, op_tok, rhs)
        return expr

    def parse_term(self) -> Expr:
        expr = self.parse_factor()
        while self.ts.match(TokenType.MINUS, TokenType.PLUS):
            op_tok = self.ts.previous()
            rhs = self.parse_factor()
            expr = Binary(expr, op_tok, rhs)
        return expr

    def parse_factor(self) -> Expr:
        expr = self.parse_unary()
        while self.ts.match(TokenType.SLASH, TokenType.STAR):
            op_tok = self.ts.previous()
            rhs = self.parse_unary()
            expr = Binary(expr, op_tok, rhs)
        return expr

    def parse_unary(self) -> Expr:
        if self.ts.match(TokenType.BANG, TokenType.MINUS):
            op_tok = self.ts.previous()
            self._nest(op_tok)
            try:
                operand = self.parse_unary()
            finally:
                self.depth -= 1
            return Unary(op_tok, operand)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        if self.ts.match(TokenType.FALSE):
            return Literal(False)
        if self.ts.match(TokenType.TRUE):
            return Literal(True)
        if self.ts.match(TokenType.NIL):
            return Literal(None)

        if self.ts.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.ts.previous().literal)

        if self.ts.match(TokenType.LEFT_PAREN):
            self._nest(self.ts.previous())
            try:
                expr = self.parse_expr()
            finally:
                self.depth -= 1
            self.ts.expect(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise ParseError(self.ts.peek(), "Expect expression.")

    def _nest(self, tok: Token):
        if self.depth >= MAX_NESTING:
            raise ParseError(tok, "Expression nesting too deep.")
        self.depth += 1


def parse(tokens: List[Token]) -> Expr:
    return Parser(tokens).parse()


def parse_program(tokens: List[Token]) -> List[Stmt]:
    return Parser(tokens).parse_program()
