"""Operators of the Lox language and their type-specific semantics.

Binary operators are implemented per operand type: nodes.Int, nodes.Float and nodes.Bool look up the Python function
for an operator in the tables below. An operator missing from a type's table is not defined for that type.
"""

import operator
from enum import Enum

from loxlang.lang.error import DivisionByZero, GenericException


class BinaryOperator(Enum):
    """Infix operators. Values are the operator symbols."""
    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    EQ = "=="
    NE = "!="
    AND = "and"
    OR = "or"

    @classmethod
    def from_token(cls, token_type):
        """Maps an operator terminal of lox.lark to its BinaryOperator."""
        try:
            return cls[TOKENS[token_type]]
        except KeyError:
            raise GenericException("'{}' is not a binary operator", token_type, internal=True)

    def __str__(self):
        return self.value


class UnaryOperator(Enum):
    """Prefix operators. '!' and '~' are spellings of the same operator."""
    NOT = "!"
    MINUS = "-"

    @classmethod
    def from_token(cls, token_type):
        try:
            return cls[TOKENS[token_type]]
        except KeyError:
            raise GenericException("'{}' is not a unary operator", token_type, internal=True)

    def __str__(self):
        return self.value


TOKENS = {
    "OP_PLUS": "PLUS",
    "OP_MINUS": "MINUS",
    "OP_TIMES": "TIMES",
    "OP_DIVIDE": "DIVIDE",
    "OP_GREATER": "GT",
    "OP_GREATER_EQUAL": "GE",
    "OP_LOWER": "LT",
    "OP_LOWER_EQUAL": "LE",
    "OP_EQUAL": "EQ",
    "OP_NOT_EQUAL": "NE",
    "OP_AND": "AND",
    "OP_OR": "OR",
    "OP_BANG": "NOT",
    "OP_TILDE": "NOT",
}


def is_binop(token_type):
    """Whether token_type is an operator terminal that builds a BinOp (as opposed to '.' and '=')."""
    return token_type in TOKENS and token_type not in ("OP_BANG", "OP_TILDE")


def int_divide(lhs, rhs):
    """Integer division truncating toward zero."""
    if rhs == 0:
        raise DivisionByZero(lhs)
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient


def float_divide(lhs, rhs):
    if rhs == 0.0:
        raise DivisionByZero(lhs)
    return lhs / rhs


COMPARISONS = {
    BinaryOperator.GT: operator.gt,
    BinaryOperator.GE: operator.ge,
    BinaryOperator.LT: operator.lt,
    BinaryOperator.LE: operator.le,
    BinaryOperator.EQ: operator.eq,
    BinaryOperator.NE: operator.ne,
}

INT_BINARY = {
    BinaryOperator.PLUS: operator.add,
    BinaryOperator.MINUS: operator.sub,
    BinaryOperator.TIMES: operator.mul,
    BinaryOperator.DIVIDE: int_divide,
    **COMPARISONS,
}

FLOAT_BINARY = {
    BinaryOperator.PLUS: operator.add,
    BinaryOperator.MINUS: operator.sub,
    BinaryOperator.TIMES: operator.mul,
    BinaryOperator.DIVIDE: float_divide,
    **COMPARISONS,
}

BOOL_BINARY = dict(COMPARISONS)

INT_UNARY = {
    UnaryOperator.NOT: operator.invert,
    UnaryOperator.MINUS: operator.neg,
}

FLOAT_UNARY = {
    UnaryOperator.MINUS: operator.neg,
}

BOOL_UNARY = {
    UnaryOperator.NOT: operator.not_,
}
