"""Double-dispatch traversal of the Lox AST.

A Visitor has one visit_* method per node kind. Each default method delegates to the matching walk_* function below,
which recurses into the node's children; a concrete visitor overrides only the node kinds it gives meaning to. Every
visit method returns the visitor's Output (whatever default() returns when there is nothing else to return) or raises.

Children are always visited in source order: left operand before right operand, condition before branches, arguments
left to right. Visitors with side effects (the interpreter, the printer) depend on that order.
"""

from loxlang.syntax.function import UserFn
from loxlang.syntax.nodes import Obj


class Visitor:
    """Base visitor. Subclasses override default() to give their Output a neutral value."""

    def default(self):
        return None

    def visit_program(self, program):
        return walk_program(self, program)

    def visit_decl(self, decl):
        return walk_decl(self, decl)

    def visit_stmt(self, stmt):
        return walk_stmt(self, stmt)

    def visit_block(self, block):
        return walk_block(self, block)

    def visit_var_decl(self, stmt):
        return walk_var_decl(self, stmt)

    def visit_if(self, stmt):
        return walk_if(self, stmt)

    def visit_while(self, stmt):
        return walk_while(self, stmt)

    def visit_func(self, stmt):
        return walk_func(self, stmt)

    def visit_func_call(self, fn, args):
        """Called with a resolved function value and evaluated args. Only evaluating visitors do anything here."""
        return self.default()

    def visit_expr(self, expr):
        return walk_expr(self, expr)

    def visit_obj(self, obj):
        return self.default()


def walk_program(visitor, program):
    """Visits top-level declarations in order and returns the result of the last one."""
    result = visitor.default()
    for decl in program.decls:
        result = decl.accept(visitor)
    return result


def walk_decl(visitor, decl):
    return decl.stmt.accept(visitor)


def walk_stmt(visitor, stmt):
    return stmt.walk(visitor)


def walk_block(visitor, block):
    """Visits declarations in order and returns the result of the last one, or default() for an empty block."""
    result = visitor.default()
    for decl in block.decls:
        result = decl.accept(visitor)
    return result


def walk_var_decl(visitor, stmt):
    if stmt.init is None:
        return visitor.default()
    return visitor.visit_expr(stmt.init)


def walk_if(visitor, stmt):
    visitor.visit_expr(stmt.cond)
    visitor.visit_block(stmt.then)
    return visitor.visit_block(stmt.otherwise)


def walk_while(visitor, stmt):
    visitor.visit_expr(stmt.cond)
    return visitor.visit_block(stmt.body)


def walk_func(visitor, stmt):
    if isinstance(stmt.fn, UserFn):
        return visitor.visit_block(stmt.fn.body)
    return visitor.default()


def walk_expr(visitor, expr):
    if isinstance(expr, Obj):
        return visitor.visit_obj(expr.obj)

    for child in expr.children():
        visitor.visit_expr(child)
    return visitor.default()
