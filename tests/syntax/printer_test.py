import io
import unittest
from contextlib import redirect_stdout

from loxlang.grammar.parser import parse
from loxlang.syntax.builder import build_program
from loxlang.syntax.printer import Printer


def dump(source):
    stream = io.StringIO()
    build_program(parse(source)).accept(Printer(stream))
    return stream.getvalue()


class PrinterTestCase(unittest.TestCase):

    def test_print(self):
        cases = {
            "print 1 + 2;": (
                "[prgm]\n"
                "  [decl]: stmt\n"
                "    [stmt]: print\n"
                "      [bnop] +\n"
                "        [objt]: 1\n"
                "        [objt]: 2\n"
            ),
            'var s = "hi";': (
                "[prgm]\n"
                "  [decl]: stmt\n"
                "    [stmt]: var\n"
                "      [idnt]: s\n"
                '      [objt]: "hi"\n'
            ),
            "x = -f();": (
                "[prgm]\n"
                "  [decl]: stmt\n"
                "    [stmt]: expr\n"
                "      [asgn]\n"
                "        [objt]: x\n"
                "        [unop] -\n"
                "          [call] f ()\n"
            ),
            "fun f(a) { return a; }": (
                "[prgm]\n"
                "  [decl]: stmt\n"
                "    [stmt]: func\n"
                "      <fn f (1)>\n"
                "      [blck]\n"
                "        [decl]: stmt\n"
                "          [stmt]: return\n"
                "            [objt]: a\n"
            ),
            "if (a) { print nil; }": (
                "[prgm]\n"
                "  [decl]: stmt\n"
                "    [stmt]: if\n"
                "      [objt]: a\n"
                "      [blck]\n"
                "        [decl]: stmt\n"
                "          [stmt]: print\n"
                "            [objt]: ()\n"
                "      [blck]\n"
            ),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, dump(case), case)

    def test_idempotent(self):
        source = "for (var i = 0; i < 3; i = i + 1) { print g(i, 2.5) and !true; }"
        self.assertEqual(dump(source), dump(source))

    def test_default_stream(self):
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            build_program(parse("1;")).accept(Printer())
        self.assertEqual("[prgm]\n  [decl]: stmt\n    [stmt]: expr\n      [objt]: 1\n", stdout.getvalue())


if __name__ == '__main__':
    unittest.main()
