import io
import unittest
from contextlib import redirect_stdout

from loxlang.lang.error import ErrorHandler
from loxlang.lang.session import Session
from loxlang.lang.shell import Shell


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.shell = Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True))

    def feed(self, *lines):
        """Feeds lines to the shell and returns what it printed."""
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            for line in lines:
                self.shell.onecmd(line)
        return stdout.getvalue()

    def test_default(self):
        self.assertEqual("3\n", self.feed("var x = 1;", "print x + 2;"))
        self.assertEqual("true\n", self.feed("print !false;"))
        self.assertEqual("1\n", self.feed("{ print x; }"))

    def test_continuation(self):
        output = self.feed("fun f(n) {")
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        output += self.feed("return n * 2;", "}")
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)

        output += self.feed("print f(4);")
        self.assertEqual("8\n", output)

    def test_error_recovery(self):
        output = self.feed("var x = 1;", "print y;")
        self.assertIn("undefined variable", output)

        output = self.feed("{ var z = 2; print z / 0; }", "print x;")
        self.assertIn("division by zero", output)
        self.assertTrue(output.endswith("1\n"))
        self.assertEqual(1, self.shell.sess.interpreter.env.depth)

        output = self.feed("print 1 +;", "print x;")
        self.assertIn("not valid lox grammar", output)
        self.assertTrue(output.endswith("1\n"))

    def test_commands(self):
        self.assertIn("Welcome to the Lox interpreter", self.feed("help"))
        self.assertEqual("", self.feed(""))
        self.assertTrue(self.shell.onecmd("exit"))

        with redirect_stdout(io.StringIO()):
            self.assertTrue(self.shell.onecmd("EOF"))


if __name__ == '__main__':
    unittest.main()
