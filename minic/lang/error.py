"""Error handling for the minic validator. Only GenericExceptions should be encountered during a run: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

There is exactly one kind of user-facing error, an unmet grammar expectation. The first one raised ends the run; the
parser never catches its own errors.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Unmet grammar expectation. token is the lookahead Token that did not match (None if the error has no position,
    e.g. an unreadable input file).
    """

    def __init__(self, msg, token=None, internal=False):
        super().__init__(msg)

        self.msg = msg
        self.token = token
        self.internal = internal


class ErrorHandler:
    """Context manager that prints GenericExceptions as 'Syntax error: <msg>' and terminates the run with status 1."""
    ERROR = "red"
    PREFIX = "Syntax error: "
    EXIT_STATUS = 1

    def __init__(self, fatal=True, color=True, diagnosis=False):
        self.fatal = fatal          # whether or not throw exits the process
        self.color = color          # termcolor still disables colors when stdout is not a terminal
        self.diagnosis = diagnosis  # whether or not to print the offending line under the error message

        self.path = None
        self.source = None
        self.errors = 0

    def register_file(self, path, source):
        """Registers the source being validated so that errors can be located in it."""
        self.path = path
        self.source = source

    def _colored(self, text, color=None, attrs=None):
        return colored(text, color, attrs=attrs, no_color=not self.color)

    def diagnose(self, error):
        """Returns the location of error followed by the offending source line, with the token underlined."""
        token = error.token
        line = self.source.split("\n")[token.line - 1].rstrip("\r")
        start = token.column - 1
        end = start + max(len(token.lexeme.split("\n")[0]), 1)

        diagnosis = f"  File '{self.path}', line {token.line}, column {token.column}:\n"
        diagnosis += "    " + line[:start]
        diagnosis += self._colored(line[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "    " + " " * start
        diagnosis += self._colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Prints error, which must be a GenericException. Exits with EXIT_STATUS if self.fatal."""
        self.errors += 1

        error_msg = ""
        if error.internal:
            error_msg += self._colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += self._colored(ErrorHandler.PREFIX, ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if self.diagnosis and not error.internal and error.token is not None and self.source is not None:
            print(self.diagnose(error))

        if self.fatal:
            sys.exit(ErrorHandler.EXIT_STATUS)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("nesting deeper than the interpreter's recursion limit", internal=True))
        elif exc_type is GenericException:
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
