from __future__ import annotations
from typing import Union

from tinyinfer import ast
from tinyinfer.env import Env, empty_env

Value = Union[int, bool]


class EvaluationError(Exception):
    pass


def evaluate(expr: ast.Expression, env: Env[Value] = empty_env()) -> Value:
    """Evaluate a well-typed expression."""
    match expr:
        case ast.IntLit(val) | ast.BoolLit(val):
            return val
        case ast.Var(var):
            try:
                return env.lookup(var)
            except LookupError:
                raise EvaluationError(f"unbound variable '{var}'") from None
        case ast.Add(lhs, rhs):
            return evaluate(lhs, env) + evaluate(rhs, env)
        case ast.Sub(lhs, rhs):
            return evaluate(lhs, env) - evaluate(rhs, env)
        case ast.Mul(lhs, rhs):
            return evaluate(lhs, env) * evaluate(rhs, env)
        case ast.Div(lhs, rhs):
            return divide(evaluate(lhs, env), evaluate(rhs, env))
        case ast.Lt(lhs, rhs):
            return evaluate(lhs, env) < evaluate(rhs, env)
        case ast.And(lhs, rhs):
            return evaluate(lhs, env) and evaluate(rhs, env)
        case ast.Or(lhs, rhs):
            return evaluate(lhs, env) or evaluate(rhs, env)
        case ast.Not(operand):
            return not evaluate(operand, env)
        case ast.If(cond, then, else_):
            if evaluate(cond, env):
                return evaluate(then, env)
            return evaluate(else_, env)
        case ast.Let(ast.Var(var), bound, body):
            local_env = env.extend(var, evaluate(bound, env))
            return evaluate(body, local_env)
        case _:
            raise ValueError(f"invalid expression: {expr}")


def divide(a: int, b: int) -> int:
    # integer division truncates toward zero
    if b == 0:
        raise EvaluationError("division by zero")
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def type_name(val: Value) -> str:
    return "BOOL" if isinstance(val, bool) else "INT"


def show_value(val: Value) -> str:
    match val:
        case bool():
            return "true" if val else "false"
        case _:
            return str(val)
