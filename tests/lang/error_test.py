import io
import unittest
from contextlib import redirect_stdout

from loxlang.lang.error import (DivisionByZero, ErrorHandler, GenericException, InvalidBinaryOperator, ParseError,
                                UndefinedVariable)
from loxlang.syntax.nodes import Ident, Int, Str
from loxlang.syntax.operators import BinaryOperator


class GenericExceptionTestCase(unittest.TestCase):

    def test_payload(self):
        error = InvalidBinaryOperator(Int(1), BinaryOperator.PLUS, Str("a"))
        self.assertEqual((Int(1), BinaryOperator.PLUS, Str("a")), (error.lhs, error.op, error.rhs))
        self.assertIn("invalid operator", error.msg)
        self.assertFalse(error.diagnosis)

        error = ParseError("print 1 +;", 3, 10)
        self.assertEqual((3, 10), (error.line_num, error.column))
        self.assertEqual("print 1 +;", error.expr)
        self.assertEqual((9, 10), (error.start, error.end))

        self.assertTrue(GenericException("broken", internal=True).internal)


class ErrorHandlerTestCase(unittest.TestCase):

    def handle(self, error, handler=None):
        """Raises error inside a non-fatal handler and returns what it printed."""
        if handler is None:
            handler = ErrorHandler(fatal=False)

        stdout = io.StringIO()
        with redirect_stdout(stdout):
            with handler:
                raise error
        return stdout.getvalue()

    def test_throw(self):
        cases = {
            UndefinedVariable(Ident("x")): "undefined variable",
            DivisionByZero(Int(1)): "division by zero",
            RecursionError(): "maximum recursion depth exceeded",
            KeyboardInterrupt(): "keyboard interrupt",
        }
        for case, expected in cases.items():
            output = self.handle(case)
            self.assertIn("error: ", output, case)
            self.assertIn(expected, output, case)

    def test_diagnose(self):
        output = self.handle(ParseError("print 1 +;", 1, 10))
        self.assertIn("not valid lox grammar", output)
        self.assertIn("^", output)

    def test_traceback(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("main.lox")
        handler.register_line("main.lox", "print x;", 3)

        output = self.handle(UndefinedVariable(Ident("x")), handler)
        self.assertIn("File 'main.lox', line 3:", output)
        self.assertEqual((None, None), handler.traceback["main.lox"])

    def test_fatal(self):
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as context:
                with ErrorHandler():
                    raise DivisionByZero(Int(1))
        self.assertEqual(1, context.exception.code)

    def test_passthrough(self):
        with self.assertRaises(SystemExit):
            with ErrorHandler(fatal=False):
                raise SystemExit(3)

        stdout = io.StringIO()
        with redirect_stdout(stdout):
            with self.assertRaises(ValueError):
                with ErrorHandler(fatal=False):
                    raise ValueError("boom")
        self.assertIn("[internal] ", stdout.getvalue())
        self.assertIn("unknown error", stdout.getvalue())

    def test_warn(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("main.lox")
        handler.register_line("main.lox", "return 1;", 7)

        stdout = io.StringIO()
        with redirect_stdout(stdout):
            handler.warn("'{}' outside of a function", "return", diagnosis=False)
        self.assertIn("main.lox:7: ", stdout.getvalue())
        self.assertIn("warning: ", stdout.getvalue())


if __name__ == '__main__':
    unittest.main()
