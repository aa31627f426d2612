"""AST dump used by `lox --emit-ast`. Each node is written on its own line, indented two spaces per level:

```
[prgm]
  [decl]: stmt
    [stmt]: print
      [bnop] +
        [objt]: 1
        [objt]: 2
```
"""

import sys
from contextlib import contextmanager

from loxlang.syntax.function import UserFn
from loxlang.syntax.nodes import (Access, Assign, BinOp, BlockStmt, Call, ExprStmt, FuncDecl, If, Obj, Print, Return,
                                  UnOp, VarDecl, While)
from loxlang.syntax.visit import Visitor, walk_block, walk_expr, walk_program, walk_stmt


STMT_NAMES = {
    ExprStmt: "expr",
    Print: "print",
    BlockStmt: "block",
    VarDecl: "var",
    If: "if",
    While: "while",
    FuncDecl: "func",
    Return: "return",
}


class Printer(Visitor):
    """Writes an indented dump of the visited tree to stream (stdout if None)."""

    def __init__(self, stream=None):
        self.stream = stream
        self.depth = 0

    def _line(self, text):
        print("  " * self.depth + text, file=self.stream if self.stream is not None else sys.stdout)

    @contextmanager
    def _indented(self):
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def visit_program(self, program):
        self._line("[prgm]")
        with self._indented():
            return walk_program(self, program)

    def visit_decl(self, decl):
        self._line("[decl]: stmt")
        with self._indented():
            return decl.stmt.accept(self)

    def visit_stmt(self, stmt):
        self._line(f"[stmt]: {STMT_NAMES[type(stmt)]}")
        with self._indented():
            return walk_stmt(self, stmt)

    def visit_block(self, block):
        self._line("[blck]")
        with self._indented():
            return walk_block(self, block)

    def visit_var_decl(self, stmt):
        self._line(f"[idnt]: {stmt.name}")
        if stmt.init is not None:
            self.visit_expr(stmt.init)

    def visit_func(self, stmt):
        fn = stmt.fn
        if isinstance(fn, UserFn):
            self._line(f"<fn {fn.name} ({fn.arity})>")
            self.visit_block(fn.body)
        else:
            self._line(f"<fn builtin {fn.name} ({fn.arity})>")

    def visit_expr(self, expr):
        if isinstance(expr, Obj):
            return self.visit_obj(expr.obj)

        if isinstance(expr, BinOp):
            self._line(f"[bnop] {expr.op}")
        elif isinstance(expr, UnOp):
            self._line(f"[unop] {expr.op}")
        elif isinstance(expr, Assign):
            self._line("[asgn]")
        elif isinstance(expr, Access):
            self._line("[accs]")
        elif isinstance(expr, Call):
            self._line(f"[call] {expr.name} ({'' if expr.args else ')'}")

        with self._indented():
            return walk_expr(self, expr)

    def visit_obj(self, obj):
        self._line(f"[objt]: {obj.debug()}")
