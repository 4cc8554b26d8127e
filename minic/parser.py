"""Parser for the minic language.

Statements are parsed by recursive descent and expressions by precedence
climbing. The parser looks at the current token and one token of
lookahead. It never stops at the first problem: a failed expectation
appends a message to `Parser.errors`, the statement being parsed is
dropped, and parsing resumes with the next token. A single pass can
therefore report several errors.
"""

from __future__ import annotations

from enum import IntEnum
from typing import List, Optional, Tuple

from .ast import (
    Program, Statement, Expression, Block, LetStmt, ReturnStmt, ExprStmt,
    IfStmt, WhileStmt, FuncDecl, Ident, IntegerLit, StringLit, PrefixOp,
    InfixOp, Call,
)
from .lexer import Lexer, Token, TokenKind


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2        # == !=
    LESS_GREATER = 3  # < >
    SUM = 4           # + -
    PRODUCT = 5       # * /
    PREFIX = 6        # -x
    CALL = 7          # f(x)


PRECEDENCES = {
    TokenKind.EQUAL: Precedence.EQUALS,
    TokenKind.NOT_EQUAL: Precedence.EQUALS,
    TokenKind.LESS_THAN: Precedence.LESS_GREATER,
    TokenKind.GREATER_THAN: Precedence.LESS_GREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
}

INFIX_OPERATORS = {
    TokenKind.PLUS: '+',
    TokenKind.MINUS: '-',
    TokenKind.ASTERISK: '*',
    TokenKind.SLASH: '/',
    TokenKind.EQUAL: '==',
    TokenKind.NOT_EQUAL: '!=',
    TokenKind.LESS_THAN: '<',
    TokenKind.GREATER_THAN: '>',
}


def token_precedence(token: Token) -> Precedence:
    return PRECEDENCES.get(token.kind, Precedence.LOWEST)


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: List[str] = []
        self.cur_token = lexer.next_token()
        self.peek_token = lexer.next_token()

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_is(self, kind: TokenKind) -> bool:
        return self.cur_token.kind is kind

    def peek_is(self, kind: TokenKind) -> bool:
        return self.peek_token.kind is kind

    def expect_peek(self, kind: TokenKind) -> bool:
        """Advance if the lookahead is `kind`, otherwise record an error."""
        if self.peek_is(kind):
            self.next_token()
            return True
        self.errors.append(f"Expected {kind}, got {self.peek_token}")
        return False

    def skip_optional_semicolon(self):
        if self.peek_is(TokenKind.SEMICOLON):
            self.next_token()

    def parse_program(self) -> Program:
        statements: List[Statement] = []
        while not self.cur_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()
        return Program(statements)

    # Statements

    def parse_statement(self) -> Optional[Statement]:
        kind = self.cur_token.kind
        if kind is TokenKind.SEMICOLON:
            # empty statement
            return None
        if kind is TokenKind.INT:
            return self.parse_declaration()
        if kind is TokenKind.RETURN:
            return self.parse_return_statement()
        if kind is TokenKind.LBRACE:
            return self.parse_block()
        if kind is TokenKind.IF:
            return self.parse_if_statement()
        if kind is TokenKind.WHILE:
            return self.parse_while_statement()
        if kind is TokenKind.IDENTIFIER and self.peek_is(TokenKind.ASSIGN):
            return self.parse_assignment()
        return self.parse_expression_statement()

    def parse_declaration(self) -> Optional[Statement]:
        # `int name = expr;` or `int name(int a, ...) { ... }`
        if not self.expect_peek(TokenKind.IDENTIFIER):
            return None
        name = self.cur_token.literal
        if self.peek_is(TokenKind.LPAREN):
            return self.parse_function_declaration(name)
        if not self.expect_peek(TokenKind.ASSIGN):
            return None
        return self.parse_let_value(name)

    def parse_assignment(self) -> Optional[LetStmt]:
        # `name = expr;` rebinds name in the current scope, like a declaration
        name = self.cur_token.literal
        self.next_token()
        return self.parse_let_value(name)

    def parse_let_value(self, name: str) -> Optional[LetStmt]:
        # cur is '='
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        self.skip_optional_semicolon()
        return LetStmt(name, value)

    def parse_function_declaration(self, name: str) -> Optional[FuncDecl]:
        self.next_token()  # cur is now '('
        params = self.parse_function_parameters()
        if params is None:
            return None
        if not self.expect_peek(TokenKind.LBRACE):
            return None
        body = self.parse_block()
        return FuncDecl(name, params, body)

    def parse_function_parameters(self) -> Optional[List[str]]:
        params: List[str] = []
        if self.peek_is(TokenKind.RPAREN):
            self.next_token()
            return params
        while True:
            if not self.expect_peek(TokenKind.INT):
                return None
            if not self.expect_peek(TokenKind.IDENTIFIER):
                return None
            params.append(self.cur_token.literal)
            if not self.peek_is(TokenKind.COMMA):
                break
            self.next_token()
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return params

    def parse_return_statement(self) -> Optional[ReturnStmt]:
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        self.skip_optional_semicolon()
        return ReturnStmt(value)

    def parse_block(self) -> Block:
        # cur is '{'; stops on the closing '}' or at end of input
        self.next_token()
        statements: List[Statement] = []
        while not self.cur_is(TokenKind.RBRACE) and not self.cur_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()
        return Block(statements)

    def parse_condition(self) -> Optional[Expression]:
        """Parse `( expr )` followed by the opening brace of a block."""
        if not self.expect_peek(TokenKind.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        if not self.expect_peek(TokenKind.LBRACE):
            return None
        return condition

    def parse_if_statement(self) -> Optional[IfStmt]:
        condition = self.parse_condition()
        if condition is None:
            return None
        consequence = self.parse_block()
        alternative = None
        if self.peek_is(TokenKind.ELSE):
            self.next_token()
            if not self.expect_peek(TokenKind.LBRACE):
                return None
            alternative = self.parse_block()
        return IfStmt(condition, consequence, alternative)

    def parse_while_statement(self) -> Optional[WhileStmt]:
        condition = self.parse_condition()
        if condition is None:
            return None
        return WhileStmt(condition, self.parse_block())

    def parse_expression_statement(self) -> Optional[ExprStmt]:
        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None:
            return None
        self.skip_optional_semicolon()
        return ExprStmt(expr)

    # Expressions (precedence climbing)

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        left = self.parse_prefix()
        if left is None:
            return None
        while (not self.peek_is(TokenKind.SEMICOLON)
               and precedence < token_precedence(self.peek_token)):
            if self.peek_is(TokenKind.LPAREN):
                self.next_token()
                left = self.parse_call_arguments(left)
            else:
                self.next_token()
                op_token = self.cur_token
                self.next_token()
                right = self.parse_expression(token_precedence(op_token))
                if right is None:
                    return None
                left = InfixOp(left, INFIX_OPERATORS[op_token.kind], right)
            if left is None:
                return None
        return left

    def parse_prefix(self) -> Optional[Expression]:
        token = self.cur_token
        if token.kind is TokenKind.IDENTIFIER:
            return Ident(token.literal)
        if token.kind is TokenKind.INTEGER:
            return IntegerLit(token.literal)
        if token.kind is TokenKind.STRING:
            return StringLit(token.literal)
        if token.kind is TokenKind.MINUS:
            self.next_token()
            right = self.parse_expression(Precedence.PREFIX)
            if right is None:
                return None
            return PrefixOp('-', right)
        if token.kind is TokenKind.LPAREN:
            self.next_token()
            expr = self.parse_expression(Precedence.LOWEST)
            if expr is None:
                return None
            if not self.expect_peek(TokenKind.RPAREN):
                return None
            return expr
        self.errors.append(f"No prefix parse function for {token}")
        return None

    def parse_call_arguments(self, func: Expression) -> Optional[Call]:
        # cur is '('
        args: List[Expression] = []
        if self.peek_is(TokenKind.RPAREN):
            self.next_token()
            return Call(func, args)
        self.next_token()
        arg = self.parse_expression(Precedence.LOWEST)
        if arg is None:
            return None
        args.append(arg)
        while self.peek_is(TokenKind.COMMA):
            self.next_token()
            self.next_token()
            arg = self.parse_expression(Precedence.LOWEST)
            if arg is None:
                return None
            args.append(arg)
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return Call(func, args)


def parse_program(source: str) -> Tuple[Program, List[str]]:
    """Parse `source` and return the program together with any parse errors."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors
