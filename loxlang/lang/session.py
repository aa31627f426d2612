"""Session control for the Lox language: runs source text against a persistent Interpreter, either a whole file or one
command-line unit at a time.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from loxlang.grammar.parser import parse
from loxlang.lang.error import GenericException, ParseError, SourceError
from loxlang.lang.interpreter import Interpreter
from loxlang.lang.output import Returned
from loxlang.syntax.builder import build_program
from loxlang.syntax.printer import Printer


@dataclass
class Config:
    path: Optional[str] = None  # source file, None for command-line mode
    parse_tree: bool = False    # print the lark parse tree of every unit
    emit_ast: bool = False      # print the AST of every unit before running it
    verbose: bool = False       # debug logging


def run(source, interpreter, config=None):
    """Parses, builds and evaluates source against interpreter. Returns the Output of the program, raises the first
    error encountered.
    """
    if config is None:
        config = Config()

    tree = parse(source)
    if config.parse_tree:
        print(tree.pretty())

    program = build_program(tree)
    logging.debug("built program with %d declaration(s)", len(program.decls))
    if config.emit_ast:
        program.accept(Printer())

    return program.accept(interpreter)


def run_file(path, interpreter, config=None):
    """Reads path as UTF-8 and runs it. Failure to read is a SourceError."""
    try:
        with open(path, "r", encoding="utf-8") as file:
            source = file.read()
    except OSError as error:
        raise SourceError(path, error) from error

    logging.debug("running '%s'", path)
    return run(source, interpreter, config)


def _strip_comment(line):
    """Removes a `//` comment from line, ignoring `//` inside string literals."""
    in_string = False
    for i, char in enumerate(line):
        if char == '"':
            in_string = not in_string
        elif not in_string and line.startswith("//", i):
            return line[:i]
    return line


def _unbalanced(source):
    """Whether source has more opening than closing braces/parentheses outside string literals."""
    depth = 0
    in_string = False
    for char in source:
        if char == '"':
            in_string = not in_string
        elif in_string:
            continue
        elif char in "({":
            depth += 1
        elif char in ")}":
            depth -= 1
    return depth > 0


class Session:
    """Governs a Lox session, owning the Interpreter whose global scope persists between runs."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, config=None, cmd_line=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.config = config if config is not None else Config(None if cmd_line else path)
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.interpreter = Interpreter()

        if self.cmd_line:
            self.error_handler.fatal = False
        elif path == Session.SH_FILE:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, prev=""):
        """Preprocesses a command-line line. prev is the unfinished unit built from previous lines. Returns the unit so
        far and whether a line continuation is necessary.
        """
        line = _strip_comment(line).rstrip()
        unit = f"{prev}\n{line}" if prev else line
        return unit, _unbalanced(unit)

    def run(self, source, line_num):
        """Runs one unit of source that starts at line_num. Will raise any errors that are encountered."""
        self.error_handler.register_line(self.path, source, line_num)  # in case error is raised
        logging.debug("%s:%d: running unit", self.path, line_num)

        output = self._check(run(source, self.interpreter, self.config))

        self.error_handler.remove_line(self.path)  # error was not raised
        return output

    def run_file(self):
        """Runs the session file as a single unit."""
        try:
            return self._check(run_file(self.path, self.interpreter, self.config))
        except ParseError as error:
            self.error_handler.register_line(self.path, error.expr, error.line_num)
            raise

    def _check(self, output):
        if isinstance(output, Returned):
            self.error_handler.warn("'{}' outside of a function ends the program", "return", diagnosis=False)
        return output
