"""Lexical scopes for the Lox interpreter.

The Environment is a stack of scopes (dicts of Ident: Object). The bottom scope is the global scope and is never popped.
Lookups walk the stack from the innermost scope outwards, so inner bindings shadow outer ones.
"""

from loxlang.lang.error import GenericException, UndefinedVariable


class Environment:
    """Stack of scopes, innermost last."""

    def __init__(self):
        self.scopes = [{}]

    @property
    def depth(self):
        return len(self.scopes)

    def define(self, name, obj):
        """Binds name in the innermost scope, replacing any binding name already has there."""
        self.scopes[-1][name] = obj

    def get(self, name):
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        raise UndefinedVariable(name)

    def set(self, name, obj):
        """Rebinds name in the innermost scope that defines it. Never creates a binding."""
        for scope in reversed(self.scopes):
            if name in scope:
                scope[name] = obj
                return
        raise UndefinedVariable(name)

    def push_scope(self):
        self.scopes.append({})

    def push_closure(self, scope):
        """Pushes an existing scope (a function's closure) as the innermost scope."""
        self.scopes.append(scope)

    def pop_scope(self):
        """Pops and returns the innermost scope."""
        if len(self.scopes) == 1:
            raise GenericException("attempted to pop the global scope", internal=True)
        return self.scopes.pop()

    def snapshot(self):
        """Shallow copy of the innermost scope, used as the closure of a function declared there."""
        return dict(self.scopes[-1])
