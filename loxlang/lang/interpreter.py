"""Evaluating visitor for the Lox AST.

Every visit method returns an Output (loxlang.lang.output): expressions produce Value, a `return` statement produces
Returned, which blocks, loops and branches pass upwards untouched until a function call turns it back into a Value, and
everything else produces NO_VALUE. Errors are raised as GenericException subclasses and abort the current unit; every
scope pushed on the way down is popped on the way out.
"""

import logging
import sys

from loxlang.lang.builtins import builtins
from loxlang.lang.env import Environment
from loxlang.lang.error import ExpectedValue, UnsupportedOperation
from loxlang.lang.output import NO_VALUE, Returned, Value
from loxlang.syntax.function import UserFn
from loxlang.syntax.nodes import (Access, Assign, BinOp, Bool, Call, Func, Ident, Obj, Print, Return, UNIT, UnOp)
from loxlang.syntax.operators import BinaryOperator
from loxlang.syntax.visit import Visitor, walk_stmt


# Python frames available to a program. One level of Lox calls takes about 15 frames, so this allows call depths of
# several hundred; deeper recursion is reported as a RecursionError by ErrorHandler.
RECURSION_LIMIT = 10000


class Interpreter(Visitor):
    """Tree-walking interpreter. The environment persists across programs, so one Interpreter can run a whole REPL
    session. print statements write to stdout (sys.stdout if None).
    """

    def __init__(self, stdout=None):
        self.env = Environment()
        self.stdout = stdout

        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)

        for fn in builtins():
            self.env.define(fn.name, Func(fn))

    def default(self):
        return NO_VALUE

    def evaluate(self, expr):
        """Evaluates expr and returns the resulting Object."""
        output = self.visit_expr(expr)
        if not isinstance(output, Value):
            raise ExpectedValue()
        return output.obj

    def _run(self, decls):
        result = NO_VALUE
        for decl in decls:
            result = decl.accept(self)
            if isinstance(result, Returned):
                break
        return result

    # ==================== DECLARATIONS & STATEMENTS ====================

    def visit_program(self, program):
        """Runs in the current (global) scope. A top-level return ends the program."""
        return self._run(program.decls)

    def visit_stmt(self, stmt):
        if isinstance(stmt, Print):
            print(str(self.evaluate(stmt.expr)), file=self.stdout if self.stdout is not None else sys.stdout)
            return NO_VALUE

        elif isinstance(stmt, Return):
            return Returned(UNIT if stmt.value is None else self.evaluate(stmt.value))

        return walk_stmt(self, stmt)

    def visit_block(self, block):
        self.env.push_scope()
        try:
            return self._run(block.decls)
        finally:
            self.env.pop_scope()

    def visit_var_decl(self, stmt):
        obj = UNIT if stmt.init is None else self.evaluate(stmt.init)
        self.env.define(stmt.name, obj)
        return NO_VALUE

    def visit_if(self, stmt):
        if self.evaluate(stmt.cond).truthy():
            return self.visit_block(stmt.then)
        return self.visit_block(stmt.otherwise)

    def visit_while(self, stmt):
        result = NO_VALUE
        while self.evaluate(stmt.cond).truthy():
            result = self.visit_block(stmt.body)
            if isinstance(result, Returned):
                break
        return result

    def visit_func(self, stmt):
        fn = stmt.fn
        if isinstance(fn, UserFn):
            fn = fn.with_closure(self.env.snapshot())
        self.env.define(stmt.name, Func(fn))
        return NO_VALUE

    def visit_func_call(self, fn, args):
        if logging.getLogger().isEnabledFor(logging.DEBUG):
            logging.debug("call %s(%s)", fn.name, ", ".join(str(arg) for arg in args))

        output = fn.call(self, args)
        if isinstance(output, (Value, Returned)):
            return Value(output.obj)
        return Value(UNIT)

    # ==================== EXPRESSIONS ====================

    def visit_obj(self, obj):
        if isinstance(obj, Ident):
            return Value(self.env.get(obj))
        return Value(obj)

    def visit_expr(self, expr):
        if isinstance(expr, Obj):
            return self.visit_obj(expr.obj)

        elif isinstance(expr, Assign):
            obj = self.evaluate(expr.value)
            if not (isinstance(expr.target, Obj) and isinstance(expr.target.obj, Ident)):
                raise UnsupportedOperation("only variables can be assigned to")
            self.env.set(expr.target.obj, obj)
            return Value(obj)

        elif isinstance(expr, Access):
            raise UnsupportedOperation("member access")

        elif isinstance(expr, Call):
            callee = Func.coerce(self.env.get(expr.name))
            args = [self.evaluate(arg) for arg in expr.args]
            return self.visit_func_call(callee.fn, args)

        elif isinstance(expr, UnOp):
            return Value(self.evaluate(expr.operand).unop(expr.op))

        elif isinstance(expr, BinOp):
            return Value(self._binop(expr))

        raise ExpectedValue()

    def _binop(self, expr):
        lhs = self.evaluate(expr.lhs)

        if expr.op is BinaryOperator.AND:
            if not lhs.truthy():
                return Bool(False)
            return Bool(self.evaluate(expr.rhs).truthy())

        elif expr.op is BinaryOperator.OR:
            if lhs.truthy():
                return Bool(True)
            return Bool(self.evaluate(expr.rhs).truthy())

        return lhs.binop(expr.op, self.evaluate(expr.rhs))
