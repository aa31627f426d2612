"""Lox abstract syntax tree: the nodes produced by loxlang.syntax.builder and consumed by every Visitor.

The tree has the following levels:

```
Program ::= Decl*
Decl    ::= Stmt                                   ; declarations and statements share one level
Stmt    ::= ExprStmt | Print | BlockStmt | VarDecl | If | While | FuncDecl | Return
Block   ::= Decl*
Expr    ::= Obj | UnOp | BinOp | Access | Assign | Call
Obj     ::= Int | Float | Str | Ident | Bool | Func | Unit
```

Every node owns its children exclusively, with one exception: FuncDecl and Func share function values (see
loxlang.syntax.function). Nodes are built once and then only read.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from loxlang.lang.error import InvalidBinaryOperator, InvalidUnaryOperator, TypeMismatch, UnsupportedTruthiness
from loxlang.syntax import operators


# ==================== OBJECTS ====================

class Object:
    """Superclass of every Lox value. Subclasses that support operators fill in binary_ops/unary_ops (operator:
    function over the wrapped Python values).
    """
    binary_ops = {}
    unary_ops = {}

    def truthy(self):
        """Truthiness of this object, used by conditions and short-circuiting operators."""
        raise UnsupportedTruthiness(str(self))

    def binop(self, op, rhs):
        """Applies op with self as the left operand. rhs must have the same type as self."""
        impl = self.binary_ops.get(op)
        if impl is None or type(rhs) is not type(self):
            raise InvalidBinaryOperator(self, op, rhs)
        return Object.from_native(impl(self.value, rhs.value))

    def unop(self, op):
        impl = self.unary_ops.get(op)
        if impl is None:
            raise InvalidUnaryOperator(op, self)
        return Object.from_native(impl(self.value))

    def debug(self):
        """Rendering used by AST dumps. Same as str() except where that would be ambiguous."""
        return str(self)

    @classmethod
    def coerce(cls, obj):
        """Returns obj if it is a cls, raises TypeMismatch otherwise."""
        if not isinstance(obj, cls):
            raise TypeMismatch(obj, cls.__name__)
        return obj

    @staticmethod
    def from_native(value):
        """Wraps a Python bool/int/float/str in the corresponding Object."""
        if isinstance(value, bool):  # bool first: bool is a subclass of int
            return Bool(value)
        elif isinstance(value, int):
            return Int(value)
        elif isinstance(value, float):
            return Float(value)
        elif isinstance(value, str):
            return Str(value)
        raise TypeMismatch(repr(value), "Object")


@dataclass(frozen=True)
class Int(Object):
    value: int
    binary_ops = operators.INT_BINARY
    unary_ops = operators.INT_UNARY

    def truthy(self):
        return self.value > 0

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Float(Object):
    value: float
    binary_ops = operators.FLOAT_BINARY
    unary_ops = operators.FLOAT_UNARY

    def truthy(self):
        return self.value > 0.0

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Str(Object):
    value: str

    def truthy(self):
        return bool(self.value)

    def debug(self):
        return f'"{self.value}"'

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Bool(Object):
    value: bool
    binary_ops = operators.BOOL_BINARY
    unary_ops = operators.BOOL_UNARY

    def truthy(self):
        return self.value

    def __str__(self):
        return "true" if self.value else "false"


@dataclass(frozen=True, order=True)
class Ident(Object):
    """A name. Used as an identifier in the tree (resolved only when evaluated) and as an Environment key."""
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Func(Object):
    """A function value. fn is shared: the same LoxFn may be bound in several scopes at once."""
    fn: object = field(hash=False)

    def __str__(self):
        return f"<func {self.fn.name}({self.fn.arity})>"


@dataclass(frozen=True)
class Unit(Object):
    """Absence of a value."""

    def truthy(self):
        return False

    def __str__(self):
        return "()"


UNIT = Unit()


# ==================== EXPRESSIONS ====================

class Expr:
    """Superclass of expression nodes."""

    def accept(self, visitor):
        return visitor.visit_expr(self)

    def children(self):
        """Sub-expressions in evaluation order."""
        return []


@dataclass
class Obj(Expr):
    """Literal or identifier reference."""
    obj: Object


@dataclass
class UnOp(Expr):
    op: operators.UnaryOperator
    operand: Expr

    def children(self):
        return [self.operand]


@dataclass
class BinOp(Expr):
    lhs: Expr
    op: operators.BinaryOperator
    rhs: Expr

    def children(self):
        return [self.lhs, self.rhs]


@dataclass
class Access(Expr):
    """Member access `lhs.rhs`. Built, but there is no member model to evaluate it against."""
    lhs: Expr
    rhs: Expr

    def children(self):
        return [self.lhs, self.rhs]


@dataclass
class Assign(Expr):
    target: Expr
    value: Expr

    def children(self):
        return [self.target, self.value]


@dataclass
class Call(Expr):
    name: Ident
    args: List[Expr] = field(default_factory=list)

    def children(self):
        return list(self.args)


# ==================== STATEMENTS ====================

class Stmt:
    """Superclass of statement nodes. accept() is the visitor entry point for any statement; walk() is the default
    traversal of the concrete statement kind (see loxlang.syntax.visit.walk_stmt).
    """

    def accept(self, visitor):
        return visitor.visit_stmt(self)

    def walk(self, visitor):
        raise NotImplementedError


@dataclass
class ExprStmt(Stmt):
    expr: Expr

    def walk(self, visitor):
        return visitor.visit_expr(self.expr)


@dataclass
class Print(Stmt):
    expr: Expr

    def walk(self, visitor):
        return visitor.visit_expr(self.expr)


@dataclass
class BlockStmt(Stmt):
    block: "Block"

    def walk(self, visitor):
        return visitor.visit_block(self.block)


@dataclass
class VarDecl(Stmt):
    name: Ident
    init: Optional[Expr] = None

    def walk(self, visitor):
        return visitor.visit_var_decl(self)


@dataclass
class If(Stmt):
    cond: Expr
    then: "Block"
    otherwise: "Block"

    def walk(self, visitor):
        return visitor.visit_if(self)


@dataclass
class While(Stmt):
    cond: Expr
    body: "Block"

    def walk(self, visitor):
        return visitor.visit_while(self)


@dataclass
class FuncDecl(Stmt):
    name: Ident
    fn: object

    def walk(self, visitor):
        return visitor.visit_func(self)


@dataclass
class Return(Stmt):
    value: Optional[Expr] = None

    def walk(self, visitor):
        if self.value is None:
            return visitor.default()
        return visitor.visit_expr(self.value)


# ==================== BLOCKS & PROGRAMS ====================

@dataclass
class Decl:
    """A declaration. Currently every declaration wraps a statement."""
    stmt: Stmt

    def accept(self, visitor):
        return visitor.visit_decl(self)


@dataclass
class Block:
    decls: List[Decl] = field(default_factory=list)

    def accept(self, visitor):
        return visitor.visit_block(self)


@dataclass
class Program:
    decls: List[Decl] = field(default_factory=list)

    def accept(self, visitor):
        return visitor.visit_program(self)
