"""Built-in functions bound in the global scope of every Interpreter."""

from loxlang.lang.error import InvalidBinaryOperator, TypeMismatch
from loxlang.syntax.function import BuiltinFn
from loxlang.syntax.nodes import Float, Ident, Int


def _number(obj):
    if not isinstance(obj, (Int, Float)):
        raise TypeMismatch(obj, "Int | Float")
    return obj


def _same_type(name, lhs, rhs):
    lhs, rhs = _number(lhs), _number(rhs)
    if type(lhs) is not type(rhs):
        raise InvalidBinaryOperator(lhs, name, rhs)
    return lhs, rhs


def lox_abs(interpreter, args):
    x = _number(args[0])
    return type(x)(abs(x.value))


def lox_min(interpreter, args):
    lhs, rhs = _same_type("min", *args)
    return lhs if lhs.value <= rhs.value else rhs


def lox_max(interpreter, args):
    lhs, rhs = _same_type("max", *args)
    return lhs if lhs.value >= rhs.value else rhs


def builtins():
    """Fresh function values for a new global scope."""
    return [
        BuiltinFn(Ident("abs"), [Ident("x")], lox_abs),
        BuiltinFn(Ident("min"), [Ident("a"), Ident("b")], lox_min),
        BuiltinFn(Ident("max"), [Ident("a"), Ident("b")], lox_max),
    ]
