"""Session control for the minic validator. Reads one source, file or standard input, and runs it through the lexer and
the parser.
"""

import logging
import sys

from minic.lang.error import GenericException
from minic.lang.grammar import Parser
from minic.lang.lexical import Lexer


logger = logging.getLogger(__name__)


class Session:
    """Governs a single validation run."""
    STDIN = "-"          # path that selects standard input
    STDIN_NAME = "<stdin>"
    SUCCESS = "Parsing completed successfully."

    def __init__(self, error_handler, path=STDIN, strict=False, statements=False):
        self.error_handler = error_handler

        self.path = path              # used for error messages
        self.strict = strict          # whether or not trailing top-level input is an error
        self.statements = statements  # whether or not the source is a bare statement list instead of a program

        self.source = self._read()
        self.error_handler.register_file(self.name, self.source)
        logger.debug("read %d characters from %s", len(self.source), self.name)

    @property
    def name(self):
        return Session.STDIN_NAME if self.path == Session.STDIN else self.path

    def _read(self):
        """Returns the whole source text. Raises GenericException if the file cannot be read."""
        if self.path == Session.STDIN:
            buffer = getattr(sys.stdin, "buffer", None)
            if buffer is None:
                return sys.stdin.read()
            return buffer.read().decode("utf-8", errors="replace")

        try:
            with open(self.path, "r", encoding="utf-8", errors="replace") as file:
                return file.read()
        except OSError:
            raise GenericException(f"'{self.path}' could not be opened")

    def run(self):
        """Validates the source. Prints the success message, or lets the first GenericException propagate to the error
        handler. Returns whether or not the source was accepted.
        """
        lexer = Lexer(self.source)
        parser = Parser(lexer, strict=self.strict)

        if self.statements:
            parser.statements()
        else:
            parser.program()

        if lexer.discarded:
            logger.debug("%d unrecognized characters were discarded", lexer.discarded)

        print(Session.SUCCESS)
        return True
