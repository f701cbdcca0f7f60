from __future__ import annotations

import abc
import dataclasses
import logging

import pyparsing as pp

logger = logging.getLogger(__name__)

KEYWORDS = ("if", "then", "else", "let", "in")
PUNCTUATION = ("(", ")", "-", "*", "/", "<", "=", "+", "&&", "||", "!")


class Token(abc.ABC):
    pos: int


@dataclasses.dataclass(frozen=True)
class Name(Token):
    text: str
    pos: int = dataclasses.field(default=0, compare=False, repr=False)


@dataclasses.dataclass(frozen=True)
class Int(Token):
    value: int
    pos: int = dataclasses.field(default=0, compare=False, repr=False)


@dataclasses.dataclass(frozen=True)
class Bool(Token):
    value: bool
    pos: int = dataclasses.field(default=0, compare=False, repr=False)


@dataclasses.dataclass(frozen=True)
class Keyword(Token):
    text: str
    pos: int = dataclasses.field(default=0, compare=False, repr=False)


class LexError(Exception):
    def __init__(self, src: str, pos: int):
        super().__init__(src, pos)
        self.src = src
        self.pos = pos

    @property
    def char(self) -> str:
        return self.src[self.pos]

    def __str__(self):
        return f"unexpected character {self.char!r} at column {self.pos}"


def tokenize(src: str) -> list[Token]:
    try:
        tokens = list(token_grammar.parse_string(src, parse_all=True))
    except pp.ParseBaseException as e:
        pos = e.loc
        while src[pos].isspace():
            pos += 1
        raise LexError(src, pos) from None
    logger.debug("lexed %d tokens from %r", len(tokens), src)
    return tokens


def make_atom(src: str, loc: int, text: str) -> Token:
    """Turn a run of letters, digits and glued signs into a single token.

    A run must be all letters or an optionally signed digit sequence; anything
    else fails at the first character that does not belong.
    """
    numeric = not text[0].isalpha()
    belongs = str.isdigit if numeric else str.isalpha
    start = 1 if text[0] == "-" else 0
    for i in range(start, len(text)):
        if not belongs(text[i]):
            raise pp.ParseFatalException(src, loc + i, "invalid token")

    if numeric:
        return Int(int(text), loc)

    match text:
        case "true":
            return Bool(True, loc)
        case "false":
            return Bool(False, loc)
        case kw if kw in KEYWORDS:
            return Keyword(kw, loc)
        case _:
            return Name(text, loc)


### Token grammar

# a run of letters and digits is one token, "x1" and "2x" are invalid runs
# a sign only belongs to a literal when glued to its digits: "- 1" is a
# subtraction keyword and a literal, "1-2" is an invalid run
atom = pp.Regex(r"(-(?=[0-9]))?[0-9A-Za-z]+(-[0-9][0-9A-Za-z]*)*").set_parse_action(
    lambda s, loc, t: make_atom(s, loc, t[0])
)

punctuation = pp.one_of(PUNCTUATION).set_parse_action(
    lambda s, loc, t: Keyword(t[0], loc)
)

# token positions index into the unexpanded source
token_grammar = (atom | punctuation)[...].parse_with_tabs()
