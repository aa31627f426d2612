"""Builds the Lox AST (loxlang.syntax.nodes) from the lark parse tree produced by loxlang.grammar.parser.

Expressions arrive from the grammar as flat `term (operator term)*` sequences and are given their structure by
operator-precedence climbing. Statements map one-to-one onto nodes, except `for`, which is desugared into

```
{ <init>; while (<cond>) { <body>; <step>; } }
```

so that the loop variable is scoped to the loop. Building is a pure function of the parse tree. A tree the builder does
not recognise means the grammar and the builder disagree, which is an internal defect rather than a user error.
"""

from collections import deque
from enum import Enum

from lark import Token, Tree

from loxlang.lang.error import GenericException
from loxlang.syntax.function import UserFn
from loxlang.syntax.nodes import (Access, Assign, BinOp, Block, BlockStmt, Bool, Call, Decl, ExprStmt, Float, FuncDecl,
                                  Ident, If, Int, Obj, Print, Program, Return, Str, UNIT, UnOp, VarDecl, While)
from loxlang.syntax.operators import BinaryOperator, UnaryOperator, is_binop


class Assoc(Enum):
    LEFT = "left"
    RIGHT = "right"


class PrecClimber:
    """Operator-precedence climbing over an alternating sequence of operands and operator tokens."""

    def __init__(self, tiers):
        """tiers lists the operator tiers from lowest to highest precedence. Each tier is a list of
        (terminal name, Assoc) pairs of equal precedence.
        """
        self.operators = {}
        for prec, tier in enumerate(tiers, start=1):
            for terminal, assoc in tier:
                self.operators[terminal] = (prec, assoc)

    def climb(self, pairs, primary, infix):
        """Combines pairs (operand, op, operand, ..., operand) into a single tree. primary builds an operand, infix
        combines two built operands with an operator token.
        """
        pairs = deque(pairs)
        lhs = primary(pairs.popleft())
        return self._climb(lhs, 0, pairs, primary, infix)

    def precedence(self, op):
        try:
            return self.operators[op.type]
        except KeyError:
            raise GenericException("'{}' is not a known infix operator", op.type, internal=True)

    def _climb(self, lhs, min_prec, pairs, primary, infix):
        while pairs:
            prec, __ = self.precedence(pairs[0])
            if prec < min_prec:
                break

            op = pairs.popleft()
            rhs = primary(pairs.popleft())

            while pairs:
                next_prec, next_assoc = self.precedence(pairs[0])
                if next_prec > prec or (next_prec == prec and next_assoc is Assoc.RIGHT):
                    rhs = self._climb(rhs, next_prec, pairs, primary, infix)
                else:
                    break

            lhs = infix(lhs, op, rhs)
        return lhs


CLIMBER = PrecClimber([
    [("OP_ASSIGN", Assoc.LEFT)],
    [("OP_OR", Assoc.LEFT)],
    [("OP_AND", Assoc.LEFT)],
    [("OP_EQUAL", Assoc.LEFT), ("OP_NOT_EQUAL", Assoc.LEFT)],
    [("OP_GREATER", Assoc.LEFT), ("OP_GREATER_EQUAL", Assoc.LEFT),
     ("OP_LOWER", Assoc.LEFT), ("OP_LOWER_EQUAL", Assoc.LEFT)],
    [("OP_PLUS", Assoc.LEFT), ("OP_MINUS", Assoc.LEFT)],
    [("OP_TIMES", Assoc.LEFT), ("OP_DIVIDE", Assoc.LEFT)],
    [("OP_DOT", Assoc.LEFT)],
])


# ==================== HELPERS ====================

def _defect(node):
    """Raises for a parse tree node the builder has no rule for."""
    name = node.data if isinstance(node, Tree) else node.type
    raise GenericException("grammar produced unexpected '{}'", str(name), internal=True)


def _expect(tree, rule):
    if not isinstance(tree, Tree) or tree.data != rule:
        _defect(tree)


def _trees(tree):
    """Sub-trees of tree, skipping tokens."""
    return [child for child in tree.children if isinstance(child, Tree)]


def _tokens(tree, token_type):
    return [child for child in tree.children if isinstance(child, Token) and child.type == token_type]


# ==================== DECLARATIONS & STATEMENTS ====================

def build_program(tree):
    _expect(tree, "program")
    return Program([build_decl(child) for child in _trees(tree)])


def build_decl(tree):
    _expect(tree, "declaration")
    node, = tree.children

    if node.data == "fun_decl":
        return Decl(build_fun_decl(node))
    elif node.data == "statement":
        return Decl(build_stmt(node))
    _defect(node)


def build_fun_decl(tree):
    """Function declarations carry a UserFn with an empty closure; the closure is captured when the declaration runs."""
    name = Ident(str(_tokens(tree, "IDENT")[0]))

    params = []
    for node in _trees(tree):
        if node.data == "parameters":
            params = [Ident(str(token)) for token in _tokens(node, "IDENT")]

    body = build_block(_trees(tree)[-1])
    return FuncDecl(name, UserFn(name, params, body))


def build_block(tree):
    _expect(tree, "block")
    return Block([build_decl(child) for child in _trees(tree)])


def build_stmt(tree):
    _expect(tree, "statement")
    node, = tree.children

    try:
        builder = STATEMENTS[node.data]
    except KeyError:
        _defect(node)
    return builder(node)


def build_var_decl(tree):
    name = Ident(str(_tokens(tree, "IDENT")[0]))
    init = _trees(tree)
    return VarDecl(name, build_expr(init[0]) if init else None)


def build_for(tree):
    init_tree, cond_tree, step_tree, body_tree = _trees(tree)

    decls = []
    for init in _trees(init_tree):
        decls.append(Decl(STATEMENTS[init.data](init)))

    cond = _trees(cond_tree)
    cond = build_expr(cond[0]) if cond else Obj(Bool(True))

    body = build_block(body_tree)
    for step in _trees(step_tree):
        body.decls.append(Decl(ExprStmt(build_expr(step))))

    decls.append(Decl(While(cond, body)))
    return BlockStmt(Block(decls))


def build_if(tree):
    cond, then, *otherwise = _trees(tree)
    otherwise = build_block(otherwise[0]) if otherwise else Block()
    return If(build_expr(cond), build_block(then), otherwise)


def build_while(tree):
    cond, body = _trees(tree)
    return While(build_expr(cond), build_block(body))


def build_return(tree):
    value = _trees(tree)
    return Return(build_expr(value[0]) if value else None)


STATEMENTS = {
    "expr_stmt": lambda tree: ExprStmt(build_expr(_trees(tree)[0])),
    "print_stmt": lambda tree: Print(build_expr(_trees(tree)[0])),
    "var_decl": build_var_decl,
    "for_stmt": build_for,
    "if_stmt": build_if,
    "while_stmt": build_while,
    "return_stmt": build_return,
    "block": lambda tree: BlockStmt(build_block(tree)),
}


# ==================== EXPRESSIONS ====================

def build_expr(tree):
    _expect(tree, "expr")
    return CLIMBER.climb(tree.children, build_term, build_infix)


def build_term(tree):
    """Prefix operators apply right to left: `-!x` is `-(!x)`."""
    _expect(tree, "term")
    *prefixes, operand = tree.children

    if operand.data == "call":
        expr = build_call(operand)
    elif operand.data == "value":
        expr = build_value(operand)
    else:
        _defect(operand)

    for prefix in reversed(prefixes):
        expr = UnOp(UnaryOperator.from_token(prefix.type), expr)
    return expr


def build_call(tree):
    name = Ident(str(_tokens(tree, "IDENT")[0]))
    return Call(name, [build_expr(arg) for arg in _trees(tree)])


def build_value(tree):
    node, = tree.children
    if isinstance(node, Tree):  # parenthesized
        return build_expr(node)
    return Obj(build_object(node))


def build_object(token):
    if token.type == "INT":
        return Int(int(token))
    elif token.type == "FLOAT":
        return Float(float(token))
    elif token.type == "STRING":
        return Str(str(token)[1:-1])
    elif token.type == "TRUE":
        return Bool(True)
    elif token.type == "FALSE":
        return Bool(False)
    elif token.type == "NIL":
        return UNIT
    elif token.type == "IDENT":
        return Ident(str(token))
    _defect(token)


def build_infix(lhs, op, rhs):
    if is_binop(op.type):
        return BinOp(lhs, BinaryOperator.from_token(op.type), rhs)
    elif op.type == "OP_DOT":
        return Access(lhs, rhs)
    elif op.type == "OP_ASSIGN":
        return Assign(lhs, rhs)
    _defect(op)
