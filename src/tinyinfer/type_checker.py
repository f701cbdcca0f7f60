from __future__ import annotations

import abc
import dataclasses
import logging
from typing import Iterable, Iterator, TypeAlias

from tinyinfer import ast
from tinyinfer.unification.union_find import UnionFind

logger = logging.getLogger(__name__)

Constraint: TypeAlias = tuple[int, int]


class Type(abc.ABC):
    def __str__(self):
        return f"{self.__class__.__name__}"


@dataclasses.dataclass(frozen=True)
class IntType(Type):
    def __str__(self):
        return "INT"


@dataclasses.dataclass(frozen=True)
class BoolType(Type):
    def __str__(self):
        return "BOOL"


@dataclasses.dataclass(frozen=True)
class GenericType(Type):
    id: int

    def __str__(self):
        return f"GENERIC-{self.id}"


class TypeCheckError(Exception):
    def __init__(self, a: Type, b: Type):
        super().__init__(a, b)
        self.a = a
        self.b = b

    def __str__(self):
        return f"cannot unify {self.a} and {self.b}"


def infer(expr: ast.Expression) -> dict[str, Type]:
    """Infer the types of the free variables in expr.

    Raises TypeCheckError if the expression is not well typed.
    """
    k = number(expr)
    uf = solve(constraints(expr, k), k)
    return report(expr, uf, k)


def number(expr: ast.Expression) -> int:
    """Assign a type variable to every node, in pre-order.

    All references to the same name share one type variable, regardless of
    which let binds them. Returns the number of type variables used.
    """
    names: dict[str, int] = {}
    k = 0
    for node in ast.preorder(expr):
        match node:
            case ast.Var(name) if name in names:
                node.tvar = names[name]
                continue
            case ast.Var(name):
                names[name] = k
        node.tvar = k
        k += 1
    logger.debug("numbered %d type variables", k)
    return k


def constraints(expr: ast.Expression, k: int) -> Iterator[Constraint]:
    INT, BOOL = k, k + 1
    for node in ast.preorder(expr):
        match node:
            case ast.Var():
                pass
            case ast.IntLit():
                yield node.tvar, INT
            case ast.BoolLit():
                yield node.tvar, BOOL
            case ast.Lt(lhs, rhs):
                yield node.tvar, BOOL
                yield lhs.tvar, INT
                yield rhs.tvar, INT
            case ast.And(lhs, rhs) | ast.Or(lhs, rhs):
                yield node.tvar, BOOL
                yield lhs.tvar, BOOL
                yield rhs.tvar, BOOL
            case ast.BinOp(lhs, rhs):
                # arithmetic
                yield node.tvar, INT
                yield lhs.tvar, INT
                yield rhs.tvar, INT
            case ast.Not(operand):
                yield node.tvar, BOOL
                yield operand.tvar, BOOL
            case ast.If(cond, then, else_):
                yield node.tvar, then.tvar
                yield cond.tvar, BOOL
                yield then.tvar, else_.tvar
            case ast.Let(var, bound, body):
                yield node.tvar, body.tvar
                yield var.tvar, bound.tvar
            case _:
                raise NotImplementedError(node)


def solve(constraints: Iterable[Constraint], k: int) -> UnionFind:
    """Unify all constraints over k type variables and the two ground types.

    A ground type always ends up as the root of its class.
    """
    uf = UnionFind(k + 2)
    for x, y in constraints:
        rx, ry = uf.find(x), uf.find(y)
        match rx < k, ry < k:
            case True, _:
                uf.join(rx, ry)
            case False, True:
                uf.join(ry, rx)
            case False, False if rx != ry:
                raise TypeCheckError(ground_type(rx, k), ground_type(ry, k))
        logger.debug("unified %d and %d", x, y)
    return uf


def report(expr: ast.Expression, uf: UnionFind, k: int) -> dict[str, Type]:
    types = {}
    for var in free_variables(expr):
        root = uf.find(var.tvar)
        types.setdefault(var.name, ground_type(root, k) if root >= k else GenericType(root))
    return types


def ground_type(id: int, k: int) -> Type:
    match id - k:
        case 0:
            return IntType()
        case 1:
            return BoolType()
        case _:
            raise ValueError(f"{id} is not a ground type")


def free_variables(
    expr: ast.Expression, bound: frozenset[str] = frozenset()
) -> Iterator[ast.Var]:
    """Yield, in pre-order, every variable reference not bound by an enclosing let."""
    match expr:
        case ast.Var(name) if name not in bound:
            yield expr
        case ast.Let(var, bound_expr, body):
            yield from free_variables(bound_expr, bound)
            yield from free_variables(body, bound | {var.name})
        case _:
            for child in expr.children():
                yield from free_variables(child, bound)
