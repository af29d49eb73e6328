"""Validates the syntax of a minic source file (or standard input) and reports the first error. Called from the minic
console script.

Prints 'Parsing completed successfully.' and exits with 0, or prints 'Syntax error: <message>' and exits with 1.
"""

import argparse
import logging
import sys

from minic.lang.error import ErrorHandler
from minic.lang.session import Session


def configure_logging(verbose):
    """Sends DEBUG records to stderr if verbose. Otherwise nothing is logged."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(levelname)s: %(message)s")


def main(argv=None):
    """Runs the validator. Called from the minic console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="minic", description="Syntax validator for a small C-like language.")
        parser.add_argument("file", help="file to validate (if empty or '-', reads standard input)", nargs="?",
                            default=Session.STDIN)
        parser.add_argument("--strict", action="store_true", help="reject input left over after the last function")
        parser.add_argument("--statements", action="store_true",
                            help="validate a bare statement list instead of a program")
        parser.add_argument("--diagnose", action="store_true", help="show the offending line under the error")
        parser.add_argument("--no-color", action="store_true", help="never color error messages")
        parser.add_argument("--verbose", "-v", action="store_true", help="debug logging to stderr")
        args = parser.parse_args(argv)

        configure_logging(args.verbose)
        error_handler.color = not args.no_color
        error_handler.diagnosis = args.diagnose

        Session(error_handler, args.file, strict=args.strict, statements=args.statements).run()


if __name__ == "__main__":
    main()
