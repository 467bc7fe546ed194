"""Error handling for blisp. Only GenericExceptions should be encountered during running: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every GenericException is terminal for the line that raised it, never for the session.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a blisp error/warning. exprs[0] should be the
    printed form of the offending symbol or value.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        super().__init__(msg.format(*exprs))

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal


class ReadError(GenericException):
    """Malformed input seen by the reader."""


class UnterminatedList(ReadError):
    """End of input reached inside an open list."""


class UnterminatedString(ReadError):
    """String token with no closing quote."""


class UnexpectedToken(ReadError):
    """Stray closing delimiter or unsupported syntax marker."""


class InvalidInteger(ReadError):
    """Atom starting with a digit that is not a 64-bit decimal integer."""


class EvalError(GenericException):
    """Raised while evaluating a form."""


class UnboundSymbol(EvalError):
    pass


class ArityError(EvalError):
    pass


class FormTypeError(EvalError):
    """A form of a specific variant was required and something else was given."""


class NotCallable(EvalError):
    pass


class DivisionByZero(EvalError):
    pass


class IntegerOverflow(EvalError):
    pass


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom blisp errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"
    STEP = "cyan"

    def __init__(self, fatal=True, trace=False):
        self.fatal = fatal
        self.trace = trace
        self.errors = 0
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add."""
        self.traceback[path] = (None, None)

    def current_line(self):
        """Returns (file, line, line_num) of the line being run, or Nones if there is none."""
        for file, (line, line_num) in self.traceback.items():
            if line:
                return file, line, line_num
        return None, None, None

    @staticmethod
    def diagnose(error, line=None, warning=False):
        """Returns offending part of line highlighted and bolded. Falls back to error.expr if the offending expr does not
        appear in line.
        """
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        source, offset = error.expr, 0
        if line and error.expr in line:
            source, offset = line, line.index(error.expr)

        start = offset + error.start
        end = offset + max(error.end, 1)

        diagnosis = "  " + source[:start]
        diagnosis += colored(source[start:end], color, attrs=["bold"])
        diagnosis += source[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def register_step(self, label, expr, depth=0):
        """Prints a single evaluation step if tracing is on."""
        if self.trace:
            print("  " * depth + colored(f"{label}: ", ErrorHandler.STEP, attrs=["bold"]) + expr)

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)
        file, line, line_num = self.current_line()

        error_msg = ""
        if line is not None:
            col = max(line.find(error.expr), 0) + error.start
            error_msg += colored(f"{file}:{line_num}:{col}: ", attrs=["bold"])
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, line, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        self.errors += 1
        __, current, __ = self.current_line()

        error_msg = ""
        for file, (line, line_num) in self.traceback.items():
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, current))

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # the failed line is done with

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded (blisp has no tail calls)"))
        elif isinstance(exc_val, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
