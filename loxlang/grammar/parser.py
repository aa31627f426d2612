"""Lox grammar front end. Turns source text into a lark parse tree whose nodes are tagged with the rule identifiers of
lox.lark; building the AST from that tree is the job of loxlang.syntax.builder.
"""

from pathlib import Path

from lark import Lark
from lark.exceptions import UnexpectedInput

from loxlang.lang.error import ParseError


GRAMMAR_PATH = Path(__file__).with_name("lox.lark")

_PARSER = Lark(
    GRAMMAR_PATH.read_text(encoding="utf-8"),
    parser="lalr",
    lexer="basic",
    start="program",
    propagate_positions=True,
    maybe_placeholders=False,
)


def parse(source):
    """Parses source into a `program` tree. Raises ParseError pointing at the offending line/column."""
    try:
        return _PARSER.parse(source)
    except UnexpectedInput as error:
        raise _parse_error(source, error) from None


def _parse_error(source, error):
    lines = source.splitlines() or [""]
    line_num = getattr(error, "line", -1)
    column = getattr(error, "column", -1)

    if line_num is None or line_num < 1 or line_num > len(lines):
        # unexpected end of input: point just past the last line
        line_num = len(lines)
        column = len(lines[-1]) + 1

    return ParseError(lines[line_num - 1], line_num, max(column, 1))
