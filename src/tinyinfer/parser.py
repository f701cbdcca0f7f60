from __future__ import annotations

import collections
from typing import Iterable, Any

from tinyinfer import ast, lexer
from tinyinfer.lexer import Token, Name, Int, Bool, Keyword


class ParseError(Exception):
    pass


class UnexpectedEnd(ParseError):
    def __init__(self, expected: str):
        super().__init__(expected)
        self.expected = expected

    def __str__(self):
        return f"unexpected end of input, expected {self.expected}"


class UnexpectedToken(ParseError):
    def __init__(self, token: Token, expected: str):
        super().__init__(token, expected)
        self.token = token
        self.expected = expected

    def __str__(self):
        return (
            f"unexpected {describe(self.token)} at column {self.token.pos}, "
            f"expected {self.expected}"
        )


class TokenStream:
    EOF = object()

    def __init__(self, ts: Iterable[Token]):
        self.ts = iter(ts)
        self.buffer = collections.deque(maxlen=1)

    def peek(self) -> Token | Any:
        if not self.buffer:
            try:
                self.buffer.append(next(self.ts))
            except StopIteration:
                return self.EOF
        return self.buffer[0]

    def get_next(self) -> Token | Any:
        try:
            return next(self)
        except StopIteration:
            return self.EOF

    def __iter__(self):
        return self

    def __next__(self):
        if self.buffer:
            return self.buffer.popleft()
        return next(self.ts)


def parse_expr(src: str) -> ast.Expression:
    return parse(lexer.tokenize(src))


def parse(tokens: Iterable[Token]) -> ast.Expression:
    ts = TokenStream(tokens)
    expr = parse_head(ts)
    match ts.peek():
        case ts.EOF:
            return expr
        case token:
            raise UnexpectedToken(token, "end of input")


def parse_head(ts: TokenStream) -> ast.Expression:
    match ts.get_next():
        case ts.EOF:
            raise UnexpectedEnd("an expression")
        case Name(name):
            return ast.Var(name)
        case Int(value):
            return ast.IntLit(value)
        case Bool(value):
            return ast.BoolLit(value)
        case Keyword("("):
            return parse_tail(ts)
        case token:
            raise UnexpectedToken(token, "an expression")


def parse_tail(ts: TokenStream) -> ast.Expression:
    """Parse the remainder of a form whose opening parenthesis was consumed."""
    match ts.get_next():
        case ts.EOF:
            raise UnexpectedEnd("an operator or keyword after '('")
        case Keyword(op) if op in ast.BINARY_OPERATORS:
            lhs = parse_head(ts)
            rhs = parse_head(ts)
            expr = ast.BINARY_OPERATORS[op](lhs, rhs)
        case Keyword("!"):
            expr = ast.Not(parse_head(ts))
        case Keyword("if"):
            cond = parse_head(ts)
            expect_token(ts, "then", "if")
            then = parse_head(ts)
            expect_token(ts, "else", "if")
            else_ = parse_head(ts)
            expr = ast.If(cond, then, else_)
        case Keyword("let"):
            var = parse_variable(ts)
            expect_token(ts, "=", "let")
            bound = parse_head(ts)
            expect_token(ts, "in", "let")
            body = parse_head(ts)
            expr = ast.Let(var, bound, body)
        case token:
            raise UnexpectedToken(token, "an operator or keyword after '('")

    expect_token(ts, ")", describe_form(expr))
    return expr


def expect_token(ts: TokenStream, expect: str, construct: str) -> Token:
    expected = f"'{expect}' in '{construct}' expression"
    match ts.get_next():
        case ts.EOF:
            raise UnexpectedEnd(expected)
        case Keyword(text) as tok if text == expect:
            return tok
        case tok:
            raise UnexpectedToken(tok, expected)


def parse_variable(ts: TokenStream) -> ast.Var:
    match ts.get_next():
        case ts.EOF:
            raise UnexpectedEnd("variable name in 'let' expression")
        case Name(name):
            return ast.Var(name)
        case tok:
            raise UnexpectedToken(tok, "variable name in 'let' expression")


def describe_form(expr: ast.Expression) -> str:
    match expr:
        case ast.BinOp():
            return expr.operator
        case ast.Not():
            return "!"
        case ast.If():
            return "if"
        case ast.Let():
            return "let"


def describe(token: Token) -> str:
    match token:
        case Name(text):
            return f"name '{text}'"
        case Int(value):
            return f"integer {value}"
        case Bool(value):
            return f"boolean {str(value).lower()}"
        case Keyword(text):
            return f"'{text}'"
        case _:
            return repr(token)
