import unittest

from loxlang.grammar.parser import parse
from loxlang.syntax.builder import build_program
from loxlang.syntax.nodes import Bool, Ident, Int, Program, Str
from loxlang.syntax.visit import Visitor


class ObjectCollector(Visitor):
    """Records every object in visiting order."""

    def __init__(self):
        self.objs = []

    def visit_obj(self, obj):
        self.objs.append(obj)


def collect(source):
    collector = ObjectCollector()
    build_program(parse(source)).accept(collector)
    return collector.objs


class VisitorTestCase(unittest.TestCase):

    def test_visiting_order(self):
        cases = {
            "1 + 2 * 3;": [Int(1), Int(2), Int(3)],
            "x = y;": [Ident("x"), Ident("y")],
            "var x = -a;": [Ident("a")],
            "var x;": [],
            'print f(1, "two", c);': [Int(1), Str("two"), Ident("c")],
            "if (a) { print 1; } else { print 2; }": [Ident("a"), Int(1), Int(2)],
            "while (a < 3) { a = a + 1; }": [Ident("a"), Int(3), Ident("a"), Ident("a"), Int(1)],
            "for (var i = 0; i < 2; i = i + 1) { print i; }":
                [Int(0), Ident("i"), Int(2), Ident("i"), Ident("i"), Ident("i"), Int(1)],
            "fun f(a) { return a; } return; return true;": [Ident("a"), Bool(True)],
            "{ print a.b; }": [Ident("a"), Ident("b")],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, collect(case), case)

    def test_default(self):
        visitor = Visitor()
        self.assertIsNone(visitor.visit_program(Program()))
        self.assertIsNone(build_program(parse("print 1; { 2; }")).accept(visitor))
        self.assertIsNone(visitor.visit_func_call(None, []))


if __name__ == '__main__':
    unittest.main()
