"""Function values. A function value is shared: it is bound in the environment under its name, can be passed around
as a Func object, and is invoked while the FuncDecl node that declared it still refers to its template.

User functions are stateful: every call runs against the closure scope itself, with the parameters bound in a
fresh scope on top of it, so assignments to closed-over variables persist from one call to the next, recursive calls
included.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from loxlang.lang.error import ArgumentArity
from loxlang.lang.output import Value
from loxlang.syntax.nodes import Block, Ident, Object


class LoxFn(ABC):
    """Call contract shared by built-in and user-defined functions."""
    name: Ident
    params: List[Ident]

    @property
    def arity(self):
        return len(self.params)

    def check_arity(self, args):
        """Raises ArgumentArity unless exactly self.arity args were given."""
        if len(args) != self.arity:
            raise ArgumentArity(self.arity, len(args))

    @abstractmethod
    def call(self, interpreter, args):
        """Invokes this function with already evaluated args and returns the interpreter Output of the call."""


@dataclass(eq=False)
class BuiltinFn(LoxFn):
    """Function implemented in Python. body receives the interpreter and the argument objects, returns an Object."""
    name: Ident
    params: List[Ident]
    body: Callable

    def call(self, interpreter, args):
        self.check_arity(args)
        return Value(self.body(interpreter, args))


@dataclass
class UserFn(LoxFn):
    """Function declared in Lox source. closure maps Ident to Object."""
    name: Ident
    params: List[Ident]
    body: Block
    closure: Dict[Ident, Object] = field(default_factory=dict, compare=False, repr=False)

    def with_closure(self, scope):
        """Returns a new function value with the same code and a snapshot of scope as its closure."""
        return UserFn(self.name, list(self.params), self.body, dict(scope))

    def call(self, interpreter, args):
        self.check_arity(args)

        env = interpreter.env
        env.push_closure(self.closure)  # shared by every active call of this function
        env.push_scope()                # parameters, private to this call
        try:
            for param, arg in zip(self.params, args):
                env.define(param, arg)
            return interpreter.visit_block(self.body)
        finally:
            env.pop_scope()
            env.pop_scope()
