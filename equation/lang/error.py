"""Error handling for the equation calculus. Only GenericExceptions should be encountered during running: if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Note that reduction itself never raises: a program that cannot make progress simply halts (see pure/reducer.py). The
exceptions below are all raised before evaluation starts, by the parser or the compiler.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw an equation error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning. exprs fill the {} slots of msg and are bolded when displayed;
        exprs[0] should be the offending expr, and start/end mark the offending span within it.
        """
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        super().__init__(msg.format(*exprs))
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal


class ParseError(GenericException):
    """Raised by the parser. exprs[0] is the offending source line, line_num its 1-based number."""

    def __init__(self, msg, exprs, line_num, start, end=-1, path=None):
        super().__init__(msg, exprs, start=start, end=end if end != -1 else start + 1)
        self.path = path
        self.line_num = line_num


class UnterminatedComment(ParseError):
    """A block comment that runs to the end of the input. The shell reads more lines instead of reporting it."""


class CompileError(GenericException):
    """Superclass for errors found while lowering definitions into procedures. No program is produced."""


class UndefinedVariable(CompileError):

    def __init__(self, name, definition):
        super().__init__("undefined variable '{}' in definition of '{}'", (name, definition), diagnosis=False)
        self.name = name
        self.definition = definition


class DuplicateName(CompileError):

    def __init__(self, name, definition=None):
        if definition is None:
            super().__init__("'{}' is defined more than once", name, diagnosis=False)
        else:
            super().__init__("duplicate parameter '{}' in definition of '{}'", (name, definition), diagnosis=False)
        self.name = name
        self.definition = definition


class MissingEntryPoint(CompileError):

    def __init__(self, name):
        super().__init__("no definition named '{}' to start from", name, diagnosis=False)
        self.name = name


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom equation errors/warnings. Also prints
    reduction traces, so that everything that isn't a result goes through one place.
    """
    ERROR = "red"
    WARNING = "magenta"
    STEP = "cyan"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.path = None

    def register_file(self, path):
        """Registers the file errors will be reported against."""
        self.path = path

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

    def _location(self, error):
        """Returns 'file:line:col: ' prefix for error, or '' if its origin is unknown."""
        path = getattr(error, "path", None) or self.path
        line_num = getattr(error, "line_num", None)

        if path is None:
            return ""
        elif line_num is None:
            return colored(f"{path}: ", attrs=["bold"])
        return colored(f"{path}:{line_num}:{error.start + 1}: ", attrs=["bold"])

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        error_msg = self._location(error)
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def register_step(self, label, expr):
        """Prints one line of a reduction trace."""
        print(colored(f"{label} ", ErrorHandler.STEP, attrs=["bold"]) + expr)

    def throw(self, error):
        """Prints error, a GenericException, and exits if self.fatal."""
        error_msg = self._location(error)

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded, program is too deeply nested"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
