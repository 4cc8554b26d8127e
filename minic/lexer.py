"""Tokenizer for the minic language.

The lexer hands out one token per call to `Lexer.next_token`. Whitespace
and `//` line comments are skipped before every token and never surface
in the token stream. Unrecognized input is reported as an `Illegal`
token rather than raised, so the parser can record it and carry on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, List, Optional


class TokenKind(Enum):
    # Keywords
    INT = 'Int'
    RETURN = 'Return'
    IF = 'If'
    ELSE = 'Else'
    WHILE = 'While'

    # Identifiers and literals
    IDENTIFIER = 'Identifier'
    INTEGER = 'Integer'
    STRING = 'String'

    # Operators
    PLUS = 'Plus'
    MINUS = 'Minus'
    ASTERISK = 'Asterisk'
    SLASH = 'Slash'
    ASSIGN = 'Assign'
    EQUAL = 'Equal'
    NOT_EQUAL = 'NotEqual'
    LESS_THAN = 'LessThan'
    GREATER_THAN = 'GreaterThan'

    # Delimiters
    LPAREN = 'LParen'
    RPAREN = 'RParen'
    LBRACE = 'LBrace'
    RBRACE = 'RBrace'
    SEMICOLON = 'Semicolon'
    COMMA = 'Comma'

    EOF = 'EndOfInput'
    ILLEGAL = 'Illegal'

    def __str__(self) -> str:
        return self.value


KEYWORDS = {
    'int': TokenKind.INT,
    'return': TokenKind.RETURN,
    'if': TokenKind.IF,
    'else': TokenKind.ELSE,
    'while': TokenKind.WHILE,
}

SINGLE_CHAR_TOKENS = {
    '+': TokenKind.PLUS,
    '-': TokenKind.MINUS,
    '*': TokenKind.ASTERISK,
    '<': TokenKind.LESS_THAN,
    '>': TokenKind.GREATER_THAN,
    '(': TokenKind.LPAREN,
    ')': TokenKind.RPAREN,
    '{': TokenKind.LBRACE,
    '}': TokenKind.RBRACE,
    ';': TokenKind.SEMICOLON,
    ',': TokenKind.COMMA,
}

ESCAPES = {
    'n': '\n',
    'r': '\r',
    't': '\t',
    '"': '"',
    '\\': '\\',
}

INT64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    literal: Any = None  # identifier name, integer value, string value or illegal text
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __str__(self) -> str:
        if self.literal is None:
            return str(self.kind)
        if isinstance(self.literal, str):
            return f'{self.kind}("{self.literal}")'
        return f'{self.kind}({self.literal})'


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_ident_start(c: str) -> bool:
    return ('a' <= c <= 'z') or ('A' <= c <= 'Z') or c == '_'


def is_ident_char(c: str) -> bool:
    return is_ident_start(c) or is_digit(c)


class Lexer:
    """Produces tokens from source text on demand."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    def peek(self) -> Optional[str]:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return None

    def advance(self) -> str:
        c = self.source[self.pos]
        self.pos += 1
        if c == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return c

    def skip_whitespace_and_comments(self):
        while True:
            c = self.peek()
            if c is not None and c.isspace():
                self.advance()
                continue
            if c == '/' and self.source.startswith('//', self.pos):
                # the newline itself is left for the whitespace skip
                while self.peek() is not None and self.peek() != '\n':
                    self.advance()
                continue
            return

    def next_token(self) -> Token:
        self.skip_whitespace_and_comments()
        line, column = self.line, self.column

        def make(kind: TokenKind, literal: Any = None) -> Token:
            return Token(kind, literal, line, column)

        c = self.peek()
        if c is None:
            return make(TokenKind.EOF)
        self.advance()

        if c == '=':
            if self.peek() == '=':
                self.advance()
                return make(TokenKind.EQUAL)
            return make(TokenKind.ASSIGN)
        if c == '!':
            if self.peek() == '=':
                self.advance()
                return make(TokenKind.NOT_EQUAL)
            return make(TokenKind.ILLEGAL, c)
        if c == '/':
            return make(TokenKind.SLASH)
        if c == '"':
            return self.read_string(make)
        if c in SINGLE_CHAR_TOKENS:
            return make(SINGLE_CHAR_TOKENS[c])
        if is_digit(c):
            digits = [c]
            while self.peek() is not None and is_digit(self.peek()):
                digits.append(self.advance())
            text = ''.join(digits)
            value = int(text)
            if value > INT64_MAX:
                return make(TokenKind.ILLEGAL, f'Integer literal out of range: {text}')
            return make(TokenKind.INTEGER, value)
        if is_ident_start(c):
            chars = [c]
            while self.peek() is not None and is_ident_char(self.peek()):
                chars.append(self.advance())
            word = ''.join(chars)
            if word in KEYWORDS:
                return make(KEYWORDS[word])
            return make(TokenKind.IDENTIFIER, word)
        return make(TokenKind.ILLEGAL, c)

    def read_string(self, make) -> Token:
        chars: List[str] = []
        while self.peek() is not None and self.peek() != '"':
            c = self.advance()
            if c != '\\':
                chars.append(c)
                continue
            nxt = self.peek()
            if nxt is not None and nxt in ESCAPES:
                self.advance()
                chars.append(ESCAPES[nxt])
            else:
                # unknown escape: keep the backslash, the next char is read normally
                chars.append('\\')
        if self.peek() == '"':
            self.advance()
            return make(TokenKind.STRING, ''.join(chars))
        return make(TokenKind.ILLEGAL, 'Unterminated string')

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return


def tokenize(source: str) -> List[Token]:
    """Return every token of `source`, ending with a single EndOfInput."""
    return list(Lexer(source))
