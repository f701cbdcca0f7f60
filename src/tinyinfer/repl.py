from __future__ import annotations

import dataclasses
import logging
import sys
from typing import Optional, TextIO

from tinyinfer import ast, interpreter, lexer, parser, type_checker

logger = logging.getLogger(__name__)

LanguageError = (
    lexer.LexError,
    parser.ParseError,
    type_checker.TypeCheckError,
    interpreter.EvaluationError,
)


@dataclasses.dataclass(frozen=True)
class ReplConfig:
    prompt: str = "> "
    evaluate: bool = True
    show_ast: bool = False


@dataclasses.dataclass
class LineResult:
    expr: ast.Expression
    types: dict[str, type_checker.Type]
    value: Optional[interpreter.Value] = None

    def lines(self, show_ast: bool = False) -> list[str]:
        out = []
        if show_ast:
            out.append(ast.show(self.expr))
        for name, ty in self.types.items():
            out.append(f"{name} :: {ty}")
        if self.value is not None:
            out.append(
                f"Got {interpreter.type_name(self.value)} value: "
                f"{interpreter.show_value(self.value)}"
            )
        return out


def run_line(src: str, evaluate: bool = True) -> LineResult:
    """Run one line through the whole pipeline.

    Expressions without free variables are evaluated after type checking.
    Errors from any stage propagate to the caller.
    """
    expr = parser.parse(lexer.tokenize(src))
    types = type_checker.infer(expr)
    result = LineResult(expr, types)
    if evaluate and not types:
        result.value = interpreter.evaluate(expr)
    return result


def repl(
    config: Optional[ReplConfig] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
):
    config = config or ReplConfig()
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    interactive = stdin.isatty()
    while True:
        if interactive:
            stdout.write(config.prompt)
            stdout.flush()
        src = stdin.readline()
        if not src:
            break
        src = src.rstrip("\n")
        if not src.strip():
            continue

        try:
            result = run_line(src, evaluate=config.evaluate)
        except LanguageError as e:
            logger.debug("rejected line %r", src, exc_info=True)
            print(f"{type(e).__name__}: {e}", file=stdout)
            continue

        logger.debug("accepted line %r", src)
        for line in result.lines(config.show_ast):
            print(line, file=stdout)
