from __future__ import annotations

import abc
import dataclasses
from typing import Iterator, Optional


class Expression(abc.ABC):
    # type variable id, assigned by type_checker.number()
    tvar: Optional[int]

    @abc.abstractmethod
    def children(self) -> Iterator[Expression]:
        pass


def _tvar():
    return dataclasses.field(default=None, compare=False, repr=False, kw_only=True)


@dataclasses.dataclass
class Var(Expression):
    name: str
    tvar: Optional[int] = _tvar()

    def children(self) -> Iterator[Expression]:
        yield from ()


@dataclasses.dataclass
class IntLit(Expression):
    value: int
    tvar: Optional[int] = _tvar()

    def children(self) -> Iterator[Expression]:
        yield from ()


@dataclasses.dataclass
class BoolLit(Expression):
    value: bool
    tvar: Optional[int] = _tvar()

    def children(self) -> Iterator[Expression]:
        yield from ()


@dataclasses.dataclass
class BinOp(Expression):
    lhs: Expression
    rhs: Expression
    tvar: Optional[int] = _tvar()

    operator = "?"

    def children(self) -> Iterator[Expression]:
        yield self.lhs
        yield self.rhs


@dataclasses.dataclass
class Add(BinOp):
    operator = "+"


@dataclasses.dataclass
class Sub(BinOp):
    operator = "-"


@dataclasses.dataclass
class Mul(BinOp):
    operator = "*"


@dataclasses.dataclass
class Div(BinOp):
    operator = "/"


@dataclasses.dataclass
class Lt(BinOp):
    operator = "<"


@dataclasses.dataclass
class And(BinOp):
    operator = "&&"


@dataclasses.dataclass
class Or(BinOp):
    operator = "||"


@dataclasses.dataclass
class Not(Expression):
    operand: Expression
    tvar: Optional[int] = _tvar()

    def children(self) -> Iterator[Expression]:
        yield self.operand


@dataclasses.dataclass
class If(Expression):
    cond: Expression
    then: Expression
    else_: Expression
    tvar: Optional[int] = _tvar()

    def children(self) -> Iterator[Expression]:
        yield self.cond
        yield self.then
        yield self.else_


@dataclasses.dataclass
class Let(Expression):
    var: Var
    bound: Expression
    body: Expression
    tvar: Optional[int] = _tvar()

    def children(self) -> Iterator[Expression]:
        yield self.var
        yield self.bound
        yield self.body


BINARY_OPERATORS: dict[str, type[BinOp]] = {
    cls.operator: cls for cls in (Add, Sub, Mul, Div, Lt, And, Or)
}


def preorder(expr: Expression) -> Iterator[Expression]:
    yield expr
    for child in expr.children():
        yield from preorder(child)


def show(expr: Expression) -> str:
    """Render an expression in the fully parenthesized surface syntax.

    The output parses back into an equal expression.
    """
    match expr:
        case Var(name):
            return name
        case IntLit(value):
            return str(value)
        case BoolLit(value):
            return "true" if value else "false"
        case BinOp(lhs, rhs):
            return f"( {expr.operator} {show(lhs)} {show(rhs)} )"
        case Not(operand):
            return f"( ! {show(operand)} )"
        case If(cond, then, else_):
            return f"( if {show(cond)} then {show(then)} else {show(else_)} )"
        case Let(var, bound, body):
            return f"( let {show(var)} = {show(bound)} in {show(body)} )"
        case _:
            raise NotImplementedError(expr)
