"""Handles interactive/command-line mode for the Lox interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Read-eval-print loop over a Session. Lines accumulate until their braces and parentheses balance, then run as
    one unit against the session's global scope.
    """
    intro = "Lox interpreter :: Python backend\nType 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self._start_line = 0
        self.line_num = 0

    def default(self, line):
        """Feeds a line of Lox source to the pending unit, running the unit once it is complete."""
        with self.sess.error_handler:  # a failed unit must not end the loop
            self.line_num += 1
            if not self._tmp_line:
                self._start_line = self.line_num

            unit, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = unit
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                if unit.strip():
                    self.sess.run(unit, self._start_line)

    def do_help(self, arg):
        """Prints a short introduction to Lox instead of the command list."""
        print("Welcome to the Lox interpreter!\n\n"
              "Lox is a small dynamically-typed scripting language with C-like syntax. Every \n"
              "line is run as soon as its braces and parentheses are balanced, and variables \n"
              "and functions stay defined for the rest of the session.\n\n"
              "Try it out by typing 'var x = 2;'. Next, try typing 'print x * 21;'. Functions \n"
              "are declared with 'fun', e.g. 'fun twice(n) { return n * 2; }'. Built-in \n"
              "functions: abs(x), min(a, b), max(a, b).")

    def emptyline(self):
        """A blank line runs nothing, and does not re-run the previous unit."""
        return ""

    def do_EOF(self, arg):
        """Ends the session on end of input."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Ends the session; bindings are discarded."""
        return True
