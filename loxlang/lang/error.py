"""Error handling for the Lox interpreter. Every error a Lox program can cause is a GenericException subclass; if another
type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Errors abort the unit that is being evaluated (a file, or one REPL entry). They are never retried or recovered from
inside the interpreter.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a Lox error/warning. exprs are substituted
    into the "{}" slots of msg and highlighted.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class UndefinedVariable(GenericException):
    """Read of, or assignment to, a name that has no active binding."""

    def __init__(self, name):
        super().__init__("undefined variable '{}'", str(name), diagnosis=False)
        self.name = name


class TypeMismatch(GenericException):
    """A value was used where a value of another type was required."""

    def __init__(self, found, expected):
        super().__init__("type mismatch: attempted to convert '{}' into '{}'", (found, expected), diagnosis=False)
        self.found = found
        self.expected = expected


class InvalidBinaryOperator(GenericException):

    def __init__(self, lhs, op, rhs):
        super().__init__("invalid operator: {} {} {}", (lhs, op, rhs), diagnosis=False)
        self.lhs = lhs
        self.op = op
        self.rhs = rhs


class InvalidUnaryOperator(GenericException):

    def __init__(self, op, operand):
        super().__init__("invalid operator: {}{}", (op, operand), diagnosis=False)
        self.op = op
        self.operand = operand


class UnsupportedOperation(GenericException):
    """Structurally disallowed construct, e.g. assigning to something that is not a variable."""

    def __init__(self, description):
        super().__init__("unsupported operation: {}", description, diagnosis=False)
        self.description = description


class UnsupportedTruthiness(GenericException):

    def __init__(self, description):
        super().__init__("unsupported truthiness: '{}' is neither true nor false", description, diagnosis=False)
        self.description = description


class ArgumentArity(GenericException):

    def __init__(self, expected, actual):
        msg = "invalid number of arguments, expected {} arg(s), got {} arg(s)"
        super().__init__(msg, (expected, actual), diagnosis=False)
        self.expected = expected
        self.actual = actual


class ExpectedValue(GenericException):
    """An expression evaluated to no value at all. Guards the interpreter's own consistency."""

    def __init__(self):
        super().__init__("expected value", diagnosis=False)


class DivisionByZero(GenericException):

    def __init__(self, lhs):
        super().__init__("division by zero: '{}' / 0", str(lhs), diagnosis=False)
        self.lhs = lhs


class ParseError(GenericException):
    """Source text that does not match the Lox grammar. line is the offending source line, column is 1-based."""

    def __init__(self, line, line_num, column):
        start = min(column - 1, len(line))
        super().__init__("'{}' is not valid lox grammar", line, start=start, end=start + 1)
        self.line_num = line_num
        self.column = column


class SourceError(GenericException):
    """I/O failure while reading a source file. Kept apart from evaluation errors."""

    def __init__(self, path, cause):
        super().__init__("'{}' could not be opened", str(path), diagnosis=False)
        self.path = path
        self.cause = cause


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom Lox errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        error_msg = ""
        for file, (__, line_num) in self.traceback.items():
            if line_num is not None:
                error_msg += colored(f"{file}:{line_num}: ", attrs=["bold"])
                break

        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.traceback[path] = (None, None)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is None:
            return True
        elif issubclass(exc_type, KeyboardInterrupt):
            self.throw(GenericException("keyboard interrupt"))
        elif issubclass(exc_type, SystemExit):
            do_exit = True
        elif issubclass(exc_type, RecursionError):
            self.throw(GenericException("maximum recursion depth exceeded", diagnosis=False))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
