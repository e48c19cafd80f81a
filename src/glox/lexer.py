from __future__ import annotations
import sys
from typing import List

import ply.lex as lex

from .errors import LoxError
from .tokens import KEYWORDS, Token, TokenType


class LexicalError(LoxError):
    pass


class Scanner:

    tokens = tuple(tt.name for tt in TokenType if tt is not TokenType.EOF)

    reserved = KEYWORDS

    # Ignored characters, line feeds are handled by t_newline
    t_ignore = ' \t\r\f'

    # Two-character operators win over their one-character prefixes
    t_BANG_EQUAL = r'!='
    t_EQUAL_EQUAL = r'=='
    t_GREATER_EQUAL = r'>='
    t_LESS_EQUAL = r'<='

    # Single-character operators
    t_BANG = r'!'
    t_EQUAL = r'='
    t_GREATER = r'>'
    t_LESS = r'<'
    t_MINUS = r'-'
    t_PLUS = r'\+'
    t_STAR = r'\*'
    t_SLASH = r'/'

    # Parentheses and braces
    t_LEFT_PAREN = r'\('
    t_RIGHT_PAREN = r'\)'
    t_LEFT_BRACE = r'\{'
    t_RIGHT_BRACE = r'\}'

    # Punctuation
    t_COMMA = r','
    t_DOT = r'\.'
    t_SEMICOLON = r';'

    def __init__(self, source: str):
        self.source = source
        self.lexer = None

    # Line comments, must be tried before t_SLASH
    def t_COMMENT(self, t):
        r'//[^\n]*'
        pass

    # Strings have no escapes and may span lines; the token takes the closing line
    def t_STRING(self, t):
        r'"[^"]*"'
        t.literal = t.value[1:-1]
        t.lexer.lineno += t.value.count('\n')
        t.lineno = t.lexer.lineno
        return t

    # A trailing dot is only part of the number when a digit follows it
    def t_NUMBER(self, t):
        r'[0-9]+(?:\.[0-9]+)?'
        t.literal = float(t.value)
        return t

    def t_IDENTIFIER(self, t):
        r'[A-Za-z_][A-Za-z0-9_]*'
        kw = self.reserved.get(t.value)
        if kw is None:
            t.literal = t.value
        else:
            t.type = kw.name
        return t

    def t_newline(self, t):
        r'\n+'
        t.lexer.lineno += len(t.value)

    def t_error(self, t):
        if t.value[0] == '"':
            line = t.lexer.lineno + t.value.count('\n')
            raise LexicalError("Unterminated string.", line, t.value.rsplit('\n', 1)[-1])
        raise LexicalError(f"Unexpected character '{t.value[0]}'.", t.lexer.lineno, t.value[0])

    def build(self, **kwargs):
        """Build the lexer"""
        self.lexer = lex.lex(module=self, **kwargs)
        return self.lexer

    def scan_tokens(self) -> List[Token]:
        if not self.lexer:
            self.build()

        self.lexer.lineno = 1
        self.lexer.input(self.source)
        tokens: List[Token] = []

        while True:
            tok = self.lexer.token()
            if not tok:
                break
            tokens.append(Token(
                TokenType[tok.type],
                tok.value,
                getattr(tok, 'literal', None),
                tok.lineno,
            ))

        tokens.append(Token(TokenType.EOF, "", None, self.lexer.lineno))
        return tokens


def scan(source: str) -> List[Token]:
    return Scanner(source).scan_tokens()


def print_tokens(tokens: List[Token], file=None):
    out = file if file is not None else sys.stdout

    print(f"{'Line':<6}| {'Token':<15}| {'Lexeme':<20}| Literal", file=out)
    print("-" * 64, file=out)

    for tok in tokens:
        lexeme = tok.lexeme
        # Limit length for display
        if len(lexeme) > 20:
            lexeme = lexeme[:17] + "..."
        # Display escape characters
        lexeme = repr(lexeme)[1:-1] if '\n' in lexeme or '\t' in lexeme else lexeme
        literal = "" if tok.literal is None else tok.literal

        print(f"{tok.line:<6}| {tok.type.name:<15}| {lexeme:<20}| {literal}", file=out)
