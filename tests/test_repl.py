import dataclasses
import io

import pytest

from tinyinfer import lexer, parser, type_checker
from tinyinfer.main import main, build_parser
from tinyinfer.repl import ReplConfig, repl, run_line


def session(src, config=None):
    out = io.StringIO()
    repl(config, io.StringIO(src), out)
    return out.getvalue().splitlines()


def test_closed_expression_is_evaluated():
    result = run_line("3")
    assert result.types == {}
    assert result.value == 3
    assert result.lines() == ["Got INT value: 3"]


def test_free_variable_is_reported_and_not_evaluated():
    result = run_line("x")
    assert result.value is None
    assert result.lines() == ["x :: GENERIC-0"]


@pytest.mark.parametrize(
    "src, lines",
    [
        ("3", ["Got INT value: 3"]),
        ("( - x 1 )", ["x :: INT"]),
        ("( < x 1 )", ["x :: INT"]),
        ("( let x = 1 in ( < x 2 ) )", ["Got BOOL value: true"]),
    ],
)
def test_scenarios(src, lines):
    assert run_line(src).lines() == lines


def test_type_error_propagates():
    with pytest.raises(type_checker.TypeCheckError):
        run_line("( if x then 1 else true )")


def test_errors_propagate_from_each_stage():
    with pytest.raises(lexer.LexError):
        run_line("( - x $ )")
    with pytest.raises(parser.ParseError):
        run_line("( - x 1")


def test_no_eval():
    assert run_line("( + 1 2 )", evaluate=False).lines() == []


def test_show_ast():
    assert run_line("(+ 1   2)").lines(show_ast=True) == [
        "( + 1 2 )",
        "Got INT value: 3",
    ]


def test_repl_continues_after_errors():
    lines = session(
        "x\n"
        "( if x then 1 else true )\n"
        "\n"
        "( - 1\n"
        "#\n"
        "( / 1 0 )\n"
        "( - x 1 )\n"
    )
    assert lines == [
        "x :: GENERIC-0",
        "TypeCheckError: cannot unify INT and BOOL",
        "UnexpectedEnd: unexpected end of input, expected an expression",
        "LexError: unexpected character '#' at column 0",
        "EvaluationError: division by zero",
        "x :: INT",
    ]


def test_repl_without_trailing_newline():
    assert session("( ! true )") == ["Got BOOL value: false"]


def test_repl_default_config(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("( + 1 2 )\n"))
    repl()
    assert capsys.readouterr().out.splitlines() == ["Got INT value: 3"]


def test_repl_config_is_frozen():
    config = ReplConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.evaluate = False
    assert session("3", config) == ["Got INT value: 3"]


def test_repl_no_prompt_when_not_interactive():
    assert session("1\n", ReplConfig(prompt="?? ")) == ["Got INT value: 1"]


def test_cli_options():
    args = build_parser().parse_args(["--no-eval", "--show-ast", "--log-level", "DEBUG"])
    assert args.evaluate is False
    assert args.show_ast is True
    assert args.log_level == "DEBUG"


def test_main_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("( * 6 7 )\n( < y 1 )\n"))
    assert main(["--show-ast"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "( * 6 7 )",
        "Got INT value: 42",
        "( < y 1 )",
        "y :: INT",
    ]
